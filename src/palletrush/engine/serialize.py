from __future__ import annotations

from typing import Mapping

from .actions import Action
from .board import Board
from .game import Game
from .pallet import Cell
from .players import Player
from .topology import ALL_COORDINATES, Coordinate, Direction


def _player_name(p: Player | None) -> str | None:
    if p is None:
        return None
    return p.name


def cell_to_dict(c: Cell) -> dict[str, object]:
    return {
        "owner": _player_name(c.owner()),
        "height": c.height(),
        "markers": [p.name for p in c.markers()],
    }


def board_to_dict(board: Board) -> dict[str, object]:
    return {coord.label(): cell_to_dict(board.grid[coord]) for coord in ALL_COORDINATES}


def action_to_dict(a: Action) -> dict[str, object]:
    return {"from": a.source.label(), "direction": a.direction.value}


def action_from_dict(data: Mapping[str, object]) -> Action:
    source = data.get("from")
    direction = data.get("direction")
    if not isinstance(source, str) or not isinstance(direction, str):
        raise ValueError(f"Malformed action: {dict(data)!r}")
    return Action(source=Coordinate.parse(source), direction=Direction(direction))


def snapshot(game: Game) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game."""
    return {
        "players": [game.player_a.name, game.player_b.name],
        "current_player": game.current_player().name,
        "winner": _player_name(game.winner),
        "board": board_to_dict(game.board),
        "territory": sorted(c.label() for c in game.phase.territory),
    }
