from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .players import Player


class RuleError(RuntimeError):
    """Base class for every rule violation raised inside the engine.

    Errors compare by type and arguments so a failed step can be checked
    with ``==`` in tests and by host adapters.
    """

    code = "rule_error"
    message = "Rule violated."

    def __str__(self) -> str:
        return self.message

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args  # type: ignore[union-attr]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.args))

    def __repr__(self) -> str:
        inner = ", ".join(repr(a) for a in self.args)
        return f"{type(self).__name__}({inner})"


# Topology bounds


class EdgeReached(RuleError):
    code = "edge_reached"
    message = "Cannot move off the grid."


class ReachedTop(EdgeReached):
    code = "reached_top"
    message = "Already on the top row."


class ReachedBottom(EdgeReached):
    code = "reached_bottom"
    message = "Already on the bottom row."


class ReachedLeftEdge(EdgeReached):
    code = "reached_left_edge"
    message = "Already on the left edge."


class ReachedRightEdge(EdgeReached):
    code = "reached_right_edge"
    message = "Already on the right edge."


# Stack capacity / ownership


class PalletError(RuleError):
    code = "pallet_error"
    message = "Pallet rule violated."


class ReachedPalletHeightLimit(PalletError):
    code = "reached_pallet_height_limit"
    message = "Pallet is already three markers high."


class CellIsEmpty(PalletError):
    code = "cell_is_empty"
    message = "Cell has no marker."


class CellIsFullfilled(PalletError):
    code = "cell_is_fullfilled"
    message = "Destination pallet is full."


class AlreadyOccupied(PalletError):
    code = "already_occupied"

    def __init__(self, player: Player) -> None:
        super().__init__(player)
        self.player = player

    def __str__(self) -> str:
        return f"Cell is already topped by player {self.player.name}."


# Move legality


class MoveError(RuleError):
    code = "move_error"
    message = "Illegal move."


class IllegalDestination(MoveError):
    code = "illegal_destination"
    message = "That direction is not a legal destination."


class InvalidPosition(MoveError):
    code = "invalid_position"
    message = "Position is not on the board."


class CellNotFound(MoveError):
    code = "cell_not_found"
    message = "No cell at that position."


class SamePositionCannotBeMigrated(MoveError):
    code = "same_position_cannot_be_migrated"
    message = "Source and destination are the same position."


# Turn / game state


class GameIsOver(RuleError):
    code = "game_is_over"
    message = "Game already ended."
