"""
Grid topology for the 5-column x 6-row field.

Layout (labels are column letter + row number, counted from the top):

  TOP           | a1 b1 c1 d1 e1   <- player A home row
  MIDDLE_FIRST  | a2 b2 c2 d2 e2
  MIDDLE_SECOND | a3 b3 c3 d3 e3
  MIDDLE_THIRD  | a4 b4 c4 d4 e4
  MIDDLE_FOURTH | a5 b5 c5 d5 e5
  BOTTOM        | a6 b6 c6 d6 e6   <- player B home row

Moving off any edge raises an EdgeReached error; nothing wraps or clamps.
Diagonals take the vertical step first, so a corner move fails with the
vertical boundary when both axes are blocked.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable

from .errors import EdgeReached, ReachedBottom, ReachedLeftEdge, ReachedRightEdge, ReachedTop


class Column(IntEnum):
    LEFT_EDGE = 0
    MIDDLE_FIRST = 1
    MIDDLE_SECOND = 2
    MIDDLE_THIRD = 3
    RIGHT_EDGE = 4


class Row(IntEnum):
    TOP = 0
    MIDDLE_FIRST = 1
    MIDDLE_SECOND = 2
    MIDDLE_THIRD = 3
    MIDDLE_FOURTH = 4
    BOTTOM = 5


COLUMNS = tuple(Column)
ROWS = tuple(Row)
NUM_CELLS = len(COLUMNS) * len(ROWS)  # 30

_COLUMN_LETTERS = "abcde"


@dataclass(frozen=True, order=True)
class Coordinate:
    column: Column
    row: Row

    # Axis steps

    def above(self) -> Coordinate:
        if self.row == Row.TOP:
            raise ReachedTop()
        return Coordinate(self.column, Row(self.row - 1))

    def below(self) -> Coordinate:
        if self.row == Row.BOTTOM:
            raise ReachedBottom()
        return Coordinate(self.column, Row(self.row + 1))

    def lefthand(self) -> Coordinate:
        if self.column == Column.LEFT_EDGE:
            raise ReachedLeftEdge()
        return Coordinate(Column(self.column - 1), self.row)

    def righthand(self) -> Coordinate:
        if self.column == Column.RIGHT_EDGE:
            raise ReachedRightEdge()
        return Coordinate(Column(self.column + 1), self.row)

    # Diagonals: vertical first, then horizontal

    def above_righthand(self) -> Coordinate:
        return self.above().righthand()

    def above_lefthand(self) -> Coordinate:
        return self.above().lefthand()

    def below_righthand(self) -> Coordinate:
        return self.below().righthand()

    def below_lefthand(self) -> Coordinate:
        return self.below().lefthand()

    def neighbors(self) -> list[Coordinate]:
        """Coordinates that exist in the eight directions, in Direction order."""
        out: list[Coordinate] = []
        for direction in Direction:
            dest = direction.try_step(self)
            if dest is not None:
                out.append(dest)
        return out

    def is_edge(self) -> bool:
        return self.row in (Row.TOP, Row.BOTTOM) or self.column in (Column.LEFT_EDGE, Column.RIGHT_EDGE)

    def is_corner(self) -> bool:
        return self.row in (Row.TOP, Row.BOTTOM) and self.column in (Column.LEFT_EDGE, Column.RIGHT_EDGE)

    def label(self) -> str:
        return _COLUMN_LETTERS[self.column] + str(self.row + 1)

    @staticmethod
    def parse(label: str) -> Coordinate:
        """Parse a label such as 'a1' (top-left) or 'e6' (bottom-right)."""
        s = label.strip().lower()
        if len(s) != 2 or s[0] not in _COLUMN_LETTERS or not s[1].isdigit():
            raise ValueError(f"Invalid coordinate label: {label!r}")
        row = int(s[1]) - 1
        if not 0 <= row < len(ROWS):
            raise ValueError(f"Invalid coordinate label: {label!r}")
        return Coordinate(Column(_COLUMN_LETTERS.index(s[0])), Row(row))

    def __str__(self) -> str:
        return self.label()


ALL_COORDINATES: tuple[Coordinate, ...] = tuple(Coordinate(c, r) for c in COLUMNS for r in ROWS)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    UP_RIGHT = "up_right"
    UP_LEFT = "up_left"
    DOWN_RIGHT = "down_right"
    DOWN_LEFT = "down_left"

    def step(self, coordinate: Coordinate) -> Coordinate:
        """Move one cell in this direction; raises EdgeReached off the grid."""
        return _STEPS[self](coordinate)

    def try_step(self, coordinate: Coordinate) -> Coordinate | None:
        try:
            return self.step(coordinate)
        except EdgeReached:
            return None

    @property
    def delta(self) -> tuple[int, int]:
        """(column delta, row delta); rows grow downwards."""
        return _DELTAS[self]

    def opposite(self) -> Direction:
        dc, dr = self.delta
        return _BY_DELTA[(-dc, -dr)]

    @staticmethod
    def between(origin: Coordinate, target: Coordinate) -> Direction | None:
        """Direction leading from origin to an adjacent target, if any."""
        return _BY_DELTA.get((target.column - origin.column, target.row - origin.row))


_STEPS: dict[Direction, Callable[[Coordinate], Coordinate]] = {
    Direction.UP: Coordinate.above,
    Direction.DOWN: Coordinate.below,
    Direction.LEFT: Coordinate.lefthand,
    Direction.RIGHT: Coordinate.righthand,
    Direction.UP_RIGHT: Coordinate.above_righthand,
    Direction.UP_LEFT: Coordinate.above_lefthand,
    Direction.DOWN_RIGHT: Coordinate.below_righthand,
    Direction.DOWN_LEFT: Coordinate.below_lefthand,
}

_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP_RIGHT: (1, -1),
    Direction.UP_LEFT: (-1, -1),
    Direction.DOWN_RIGHT: (1, 1),
    Direction.DOWN_LEFT: (-1, 1),
}

_BY_DELTA: dict[tuple[int, int], Direction] = {v: k for k, v in _DELTAS.items()}
