from __future__ import annotations

from dataclasses import dataclass

from .errors import AlreadyOccupied, CellIsEmpty, ReachedPalletHeightLimit
from .players import Player

PALLET_HEIGHT_LIMIT = 3

Pallet = tuple[Player | None, Player | None, Player | None]


@dataclass(frozen=True)
class Cell:
    """A stack of up to three ownership markers, filled bottom-up.

    The top marker owns the cell. Cells are values: stack/unstack return a
    new Cell and never touch the receiver.
    """

    pallet: Pallet = (None, None, None)

    @staticmethod
    def empty() -> Cell:
        return Cell()

    @staticmethod
    def occupied(player: Player) -> Cell:
        return Cell(pallet=(player, None, None))

    def height(self) -> int:
        return sum(1 for p in self.pallet if p is not None)

    def owner(self) -> Player | None:
        h = self.height()
        if h == 0:
            return None
        return self.pallet[h - 1]

    def top(self) -> Player:
        owner = self.owner()
        if owner is None:
            raise CellIsEmpty()
        return owner

    def is_empty(self) -> bool:
        return self.height() == 0

    def is_fullfilled(self) -> bool:
        return self.height() == PALLET_HEIGHT_LIMIT

    def is_same_owner(self, other: Cell) -> bool:
        mine = self.owner()
        theirs = other.owner()
        if mine is None or theirs is None:
            return False
        return mine == theirs

    def stack(self, player: Player) -> Cell:
        height = self.height()
        if height == PALLET_HEIGHT_LIMIT:
            raise ReachedPalletHeightLimit()
        if self.owner() == player:
            raise AlreadyOccupied(player)
        markers = list(self.pallet)
        markers[height] = player
        return Cell(pallet=(markers[0], markers[1], markers[2]))

    def unstack(self) -> Cell:
        height = self.height()
        if height == 0:
            raise CellIsEmpty()
        markers = list(self.pallet)
        markers[height - 1] = None
        return Cell(pallet=(markers[0], markers[1], markers[2]))

    def markers(self) -> list[Player]:
        """Present markers, bottom first."""
        return [p for p in self.pallet if p is not None]
