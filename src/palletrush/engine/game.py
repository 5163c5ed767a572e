from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .actions import Action
from .board import Board
from .errors import GameIsOver, RuleError
from .pallet import Cell
from .players import Player, spawn_players
from .topology import Coordinate, Direction, Row

Event = dict[str, object]


@dataclass(frozen=True)
class Phase:
    """Whose turn it is, plus that player's territory at the start of the turn."""

    player: Player
    territory: Mapping[Coordinate, Cell]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Phase):
            return NotImplemented
        return self.player == other.player and dict(self.territory) == dict(other.territory)

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class StepResult:
    ok: bool
    game: "Game"
    error: RuleError | None = None
    events: list[Event] = field(default_factory=list)


@dataclass(frozen=True)
class Game:
    player_a: Player
    player_b: Player
    board: Board
    phase: Phase
    winner: Player | None = None

    @staticmethod
    def new(player_a: Player | None = None, player_b: Player | None = None) -> Game:
        """Start a match with the initial layout and player A to move."""
        if player_a is None or player_b is None:
            default_a, default_b = spawn_players()
            player_a = player_a or default_a
            player_b = player_b or default_b
        if player_a == player_b:
            raise ValueError("A match needs two distinct players.")
        board = Board.new(player_a, player_b)
        phase = Phase(player=player_a, territory=board.territory(player_a))
        return Game(player_a=player_a, player_b=player_b, board=board, phase=phase)

    def current_player(self) -> Player:
        return self.phase.player

    def is_over(self) -> bool:
        return self.winner is not None

    def opponent(self, player: Player) -> Player:
        return self.player_b if player == self.player_a else self.player_a

    def goal_row(self, player: Player) -> Row:
        """The opponent's home row: Bottom for player A, Top for player B."""
        return Row.BOTTOM if player == self.player_a else Row.TOP

    def territory_of(self, player: Player) -> Mapping[Coordinate, Cell]:
        return self.board.territory(player)

    def legal_directions(self, coordinate: Coordinate) -> list[Direction]:
        return self.board.legal_directions(coordinate)

    def accept(self, action: Action) -> StepResult:
        """Apply one action and return the resulting game.

        Rule violations come back as a failed StepResult carrying this very
        Game; nothing is raised to the caller.
        """
        if self.is_over():
            return StepResult(ok=False, game=self, error=GameIsOver())

        mover = self.current_player()
        try:
            destination, _ = self.board.moving_range_of(action.source).indicate(action.direction)
            board = self.board.migrate(action.source, destination)
        except RuleError as e:
            return StepResult(ok=False, game=self, error=e)

        events: list[Event] = [
            {
                "type": "MARKER_MIGRATED",
                "player": mover.name,
                "from": action.source.label(),
                "to": destination.label(),
                "height": board.cell_at(destination).height(),
            }
        ]

        winner: Player | None = None
        if board.is_reached_edge(mover, self.goal_row(mover)) and board.is_isolated(destination):
            winner = mover
            events.append({"type": "GAME_WON", "player": mover.name, "at": destination.label()})

        next_player = self.opponent(mover)
        events.append({"type": "TURN_PASSED", "player": next_player.name})
        game = Game(
            player_a=self.player_a,
            player_b=self.player_b,
            board=board,
            phase=Phase(player=next_player, territory=board.territory(next_player)),
            winner=winner,
        )
        return StepResult(ok=True, game=game, events=events)


def replay(
    actions: Iterable[Action],
    player_a: Player | None = None,
    player_b: Player | None = None,
) -> Game:
    """Feed `actions` into a fresh game, stopping at the first rejection or the end."""
    game = Game.new(player_a, player_b)
    for a in actions:
        result = game.accept(a)
        if not result.ok:
            break
        game = result.game
        if game.is_over():
            break
    return game
