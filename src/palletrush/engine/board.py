from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping

from .errors import (
    AlreadyOccupied,
    CellIsEmpty,
    CellIsFullfilled,
    CellNotFound,
    EdgeReached,
    IllegalDestination,
    InvalidPosition,
    SamePositionCannotBeMigrated,
)
from .pallet import Cell
from .players import Player
from .topology import ALL_COORDINATES, COLUMNS, ROWS, Coordinate, Direction, Row


@dataclass(frozen=True)
class Moveable:
    kind: Literal["moveable"]
    coordinate: Coordinate
    cell: Cell


@dataclass(frozen=True)
class Fullfilled:
    kind: Literal["fullfilled"]
    coordinate: Coordinate
    cell: Cell


@dataclass(frozen=True)
class AlreadyOwned:
    kind: Literal["already_owned"]
    coordinate: Coordinate
    cell: Cell


@dataclass(frozen=True)
class OutOfField:
    kind: Literal["out_of_field"]
    reason: EdgeReached


Destination = Moveable | Fullfilled | AlreadyOwned | OutOfField


@dataclass(frozen=True)
class MovingRange:
    """Classified outcome of each of the eight directions around a pivot."""

    pivot: Coordinate
    destinations: dict[Direction, Destination]

    def classify(self, direction: Direction) -> Destination:
        return self.destinations[direction]

    def indicate(self, direction: Direction) -> tuple[Coordinate, Cell]:
        """Return the destination for `direction` if it is a legal target.

        Only Moveable destinations are returned; every other outcome raises
        IllegalDestination.
        """
        dest = self.destinations[direction]
        if isinstance(dest, Moveable):
            return dest.coordinate, dest.cell
        if isinstance(dest, (Fullfilled, AlreadyOwned, OutOfField)):
            raise IllegalDestination()
        raise AssertionError(f"Unhandled destination: {dest!r}")

    def moveable_directions(self) -> list[Direction]:
        return [d for d in Direction if isinstance(self.destinations[d], Moveable)]


def _classify(pivot: Cell, coordinate: Coordinate, cell: Cell) -> Destination:
    # Capacity is checked before ownership: a full opponent pallet is still blocked.
    if cell.is_fullfilled():
        return Fullfilled(kind="fullfilled", coordinate=coordinate, cell=cell)
    if pivot.is_same_owner(cell):
        return AlreadyOwned(kind="already_owned", coordinate=coordinate, cell=cell)
    return Moveable(kind="moveable", coordinate=coordinate, cell=cell)


@dataclass(frozen=True)
class Board:
    """Immutable, total mapping from the 30 grid coordinates to cells.

    `grid` must never be mutated after construction; every transition
    builds a new dict and shares the untouched Cell values.
    """

    grid: dict[Coordinate, Cell]

    @staticmethod
    def new(player_a: Player, player_b: Player) -> Board:
        grid: dict[Coordinate, Cell] = {}
        for coord in ALL_COORDINATES:
            if coord.row == Row.TOP:
                grid[coord] = Cell.occupied(player_a)
            elif coord.row == Row.BOTTOM:
                grid[coord] = Cell.occupied(player_b)
            else:
                grid[coord] = Cell.empty()
        return Board(grid=grid)

    @property
    def cells(self) -> Mapping[Coordinate, Cell]:
        """Read-only view of the coordinate -> cell mapping, for rendering."""
        return MappingProxyType(self.grid)

    def cell_at(self, coordinate: Coordinate) -> Cell:
        cell = self.grid.get(coordinate)
        if cell is None:
            raise CellNotFound()
        return cell

    def owner_at(self, coordinate: Coordinate) -> Player | None:
        return self.cell_at(coordinate).owner()

    # Movement

    def moving_range_of(self, pivot: Coordinate) -> MovingRange:
        pivot_cell = self.cell_at(pivot)
        destinations: dict[Direction, Destination] = {}
        for direction in Direction:
            try:
                coord = direction.step(pivot)
            except EdgeReached as e:
                destinations[direction] = OutOfField(kind="out_of_field", reason=e)
                continue
            destinations[direction] = _classify(pivot_cell, coord, self.cell_at(coord))
        return MovingRange(pivot=pivot, destinations=destinations)

    def legal_directions(self, coordinate: Coordinate) -> list[Direction]:
        """Directions a marker on `coordinate` may migrate to right now."""
        if self.cell_at(coordinate).is_empty():
            return []
        return self.moving_range_of(coordinate).moveable_directions()

    def migrate(self, source: Coordinate, target: Coordinate) -> Board:
        """Move the top marker of `source` onto `target`.

        Validation fully precedes mutation, so a failure leaves nothing
        half-applied.
        """
        if source == target:
            raise SamePositionCannotBeMigrated()
        from_cell = self.grid.get(source)
        to_cell = self.grid.get(target)
        if from_cell is None or to_cell is None:
            raise InvalidPosition()
        if from_cell.is_empty():
            raise CellIsEmpty()
        if to_cell.is_fullfilled():
            raise CellIsFullfilled()
        if from_cell.is_same_owner(to_cell):
            owner = from_cell.owner()
            assert owner is not None
            raise AlreadyOccupied(owner)

        marker = from_cell.top()
        grid = dict(self.grid)
        grid[source] = from_cell.unstack()
        grid[target] = to_cell.stack(marker)
        return Board(grid=grid)

    # Ownership queries

    def territory(self, player: Player) -> Mapping[Coordinate, Cell]:
        owned = {coord: cell for coord, cell in self.grid.items() if cell.owner() == player}
        return MappingProxyType(owned)

    def is_reached_edge(self, player: Player, row: Row) -> bool:
        """True if `player` tops at least one cell on `row`."""
        return any(self.grid[c].owner() == player for c in ALL_COORDINATES if c.row == row)

    def is_isolated(self, coordinate: Coordinate) -> bool:
        """True if the marker on `coordinate` cannot be retaken next move.

        A cell can be retaken when some neighbour is topped by another player
        and the cell still has room on its pallet. Empty cells are isolated.
        """
        cell = self.cell_at(coordinate)
        owner = cell.owner()
        if owner is None or cell.is_fullfilled():
            return True
        for neighbor in coordinate.neighbors():
            attacker = self.grid[neighbor]
            if attacker.is_empty() or attacker.owner() == owner:
                continue
            if isinstance(_classify(attacker, coordinate, cell), Moveable):
                return False
        return True

    def render(self) -> str:
        """Plain-text grid; each cell lists its markers bottom first."""
        lines: list[str] = []
        header = "   " + " ".join(f"{'abcde'[c]:<3}" for c in COLUMNS)
        lines.append(header.rstrip())
        for row in ROWS:
            parts: list[str] = []
            for column in COLUMNS:
                cell = self.grid[Coordinate(column, row)]
                names = "".join(p.name for p in cell.markers())
                parts.append(f"{names or '.':<3}")
            lines.append(f"{row + 1}  " + " ".join(parts).rstrip())
        return "\n".join(lines)
