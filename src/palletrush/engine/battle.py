from __future__ import annotations

from dataclasses import dataclass, field

from .actions import Action
from .game import Event, Game, StepResult
from .players import Player


@dataclass
class Battle:
    """Mutable session around immutable Game values, for host adapters.

    Keeps every prior Game so the host can undo; the Game values themselves
    are never modified.
    """

    game: Game = field(default_factory=Game.new)
    history: list[Game] = field(default_factory=list)
    moves: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @classmethod
    def start(cls, player_a: Player | None = None, player_b: Player | None = None) -> Battle:
        return cls(game=Game.new(player_a, player_b))

    def play(self, action: Action) -> StepResult:
        result = self.game.accept(action)
        if not result.ok:
            return result
        self.history.append(self.game)
        self.moves.append(action)
        self.event_log.extend(result.events)
        self.game = result.game
        return result

    def can_undo(self) -> bool:
        return bool(self.history)

    def undo(self) -> bool:
        if not self.history:
            return False
        self.game = self.history.pop()
        self.moves.pop()
        self.event_log.append({"type": "MOVE_UNDONE", "player": self.game.current_player().name})
        return True

    def reset(self) -> None:
        self.game = Game.new(self.game.player_a, self.game.player_b)
        self.history.clear()
        self.moves.clear()
        self.event_log.clear()
