from __future__ import annotations

import pytest

from palletrush.engine.board import AlreadyOwned, Board, Fullfilled, Moveable, OutOfField
from palletrush.engine.errors import (
    AlreadyOccupied,
    CellIsEmpty,
    CellIsFullfilled,
    CellNotFound,
    IllegalDestination,
    InvalidPosition,
    ReachedLeftEdge,
    ReachedTop,
    SamePositionCannotBeMigrated,
)
from palletrush.engine.pallet import Cell
from palletrush.engine.players import spawn_players
from palletrush.engine.topology import ALL_COORDINATES, Coordinate, Direction, Row

A, B = spawn_players()


def _c(label: str) -> Coordinate:
    return Coordinate.parse(label)


def _board(**cells: Cell) -> Board:
    """Empty board with the given label -> cell overrides."""
    grid = {coord: Cell.empty() for coord in ALL_COORDINATES}
    for label, cell in cells.items():
        grid[_c(label)] = cell
    return Board(grid=grid)


def test_initial_board_is_total() -> None:
    board = Board.new(A, B)
    assert set(board.cells) == set(ALL_COORDINATES)
    assert len(board.cells) == 30
    for coord, cell in board.cells.items():
        if coord.row == Row.TOP:
            assert cell == Cell.occupied(A)
        elif coord.row == Row.BOTTOM:
            assert cell == Cell.occupied(B)
        else:
            assert cell.is_empty()


def test_cells_view_is_read_only() -> None:
    board = Board.new(A, B)
    with pytest.raises(TypeError):
        board.cells[_c("a1")] = Cell.empty()  # type: ignore[index]


def test_moving_range_of_top_left_corner() -> None:
    board = Board.new(A, B)
    rng = board.moving_range_of(_c("a1"))

    up = rng.classify(Direction.UP)
    assert isinstance(up, OutOfField)
    assert up.reason == ReachedTop()
    down_left = rng.classify(Direction.DOWN_LEFT)
    assert isinstance(down_left, OutOfField)
    assert down_left.reason == ReachedLeftEdge()

    right = rng.classify(Direction.RIGHT)
    assert isinstance(right, AlreadyOwned)
    assert right.coordinate == _c("b1")

    assert isinstance(rng.classify(Direction.DOWN), Moveable)
    assert isinstance(rng.classify(Direction.DOWN_RIGHT), Moveable)
    assert rng.moveable_directions() == [Direction.DOWN, Direction.DOWN_RIGHT]


def test_full_pallet_is_blocked_even_when_opponent_owned() -> None:
    full_b = Cell.occupied(B).stack(A).stack(B)
    assert full_b.owner() == B
    board = _board(b3=Cell.occupied(A), b4=full_b, c3=Cell.occupied(A), a3=Cell.occupied(B))
    rng = board.moving_range_of(_c("b3"))

    down = rng.classify(Direction.DOWN)
    assert isinstance(down, Fullfilled)
    assert down.kind == "fullfilled"
    assert isinstance(rng.classify(Direction.RIGHT), AlreadyOwned)
    assert isinstance(rng.classify(Direction.LEFT), Moveable)

    for d in (Direction.DOWN, Direction.RIGHT):
        with pytest.raises(IllegalDestination):
            rng.indicate(d)
    coord, cell = rng.indicate(Direction.LEFT)
    assert coord == _c("a3")
    assert cell == Cell.occupied(B)


def test_indicate_off_grid_is_illegal() -> None:
    rng = Board.new(A, B).moving_range_of(_c("a1"))
    with pytest.raises(IllegalDestination):
        rng.indicate(Direction.UP)


def test_migrate_moves_top_marker_and_keeps_the_rest() -> None:
    board = Board.new(A, B)
    moved = board.migrate(_c("a1"), _c("a2"))
    assert moved.cell_at(_c("a1")).is_empty()
    assert moved.cell_at(_c("a2")) == Cell.occupied(A)
    for coord in ALL_COORDINATES:
        if coord not in (_c("a1"), _c("a2")):
            assert moved.cell_at(coord) is board.cell_at(coord)
    # prior board untouched
    assert board.cell_at(_c("a1")) == Cell.occupied(A)
    assert board.cell_at(_c("a2")).is_empty()


def test_migrate_captures_by_stacking() -> None:
    board = _board(c3=Cell.occupied(A), c4=Cell.occupied(B))
    moved = board.migrate(_c("c4"), _c("c3"))
    assert moved.cell_at(_c("c3")).markers() == [A, B]
    assert moved.cell_at(_c("c3")).owner() == B
    assert moved.cell_at(_c("c4")).is_empty()


def test_migrate_failures_leave_board_unchanged() -> None:
    full = Cell.occupied(B).stack(A).stack(B)
    board = _board(a1=Cell.occupied(A), b1=Cell.occupied(A), a2=full, e6=Cell.occupied(B))
    before = dict(board.grid)

    with pytest.raises(SamePositionCannotBeMigrated):
        board.migrate(_c("a1"), _c("a1"))
    with pytest.raises(CellIsEmpty):
        board.migrate(_c("c3"), _c("c4"))
    with pytest.raises(CellIsFullfilled):
        board.migrate(_c("a1"), _c("a2"))
    with pytest.raises(AlreadyOccupied) as exc:
        board.migrate(_c("a1"), _c("b1"))
    assert exc.value.player == A

    assert board.grid == before


def test_migrate_with_missing_position() -> None:
    grid = dict(Board.new(A, B).grid)
    del grid[_c("c3")]
    board = Board(grid=grid)
    with pytest.raises(InvalidPosition):
        board.migrate(_c("c2"), _c("c3"))
    with pytest.raises(CellNotFound):
        board.cell_at(_c("c3"))


def test_round_trip_restores_owner_configuration() -> None:
    board = Board.new(A, B)
    back = board.migrate(_c("b1"), _c("b2")).migrate(_c("b2"), _c("b1"))
    assert back == board

    # with a non-empty middle cell the height differs but owners match
    board = _board(c2=Cell.occupied(A), c3=Cell.occupied(B))
    back = board.migrate(_c("c2"), _c("c3")).migrate(_c("c3"), _c("c2"))
    assert back.owner_at(_c("c2")) == A
    assert back.owner_at(_c("c3")) == B


def _migrate_ok(board: Board, source: Coordinate, target: Coordinate) -> bool:
    try:
        board.migrate(source, target)
    except (CellIsFullfilled, AlreadyOccupied):
        return False
    return True


def test_classification_agrees_with_migrate() -> None:
    full = Cell.occupied(B).stack(A).stack(B)
    boards = [
        Board.new(A, B),
        _board(b2=Cell.occupied(A), b3=full, c3=Cell.occupied(B).stack(A), a1=Cell.occupied(B), c2=Cell.occupied(A)),
    ]
    for board in boards:
        for coord in ALL_COORDINATES:
            if board.cell_at(coord).is_empty():
                continue
            rng = board.moving_range_of(coord)
            for d in Direction:
                dest = rng.classify(d)
                if isinstance(dest, OutOfField):
                    continue
                assert isinstance(dest, Moveable) == _migrate_ok(board, coord, dest.coordinate)


def test_legal_directions() -> None:
    board = Board.new(A, B)
    assert board.legal_directions(_c("c1")) == [Direction.DOWN, Direction.DOWN_RIGHT, Direction.DOWN_LEFT]
    assert board.legal_directions(_c("c3")) == []


def test_territory() -> None:
    board = Board.new(A, B)
    territory = board.territory(A)
    assert sorted(territory) == sorted(c for c in ALL_COORDINATES if c.row == Row.TOP)
    moved = board.migrate(_c("a6"), _c("a5")).migrate(_c("a5"), _c("a4"))
    assert _c("a4") in moved.territory(B)
    assert _c("a6") not in moved.territory(B)
    assert len(moved.territory(B)) == 5


def test_is_reached_edge() -> None:
    board = Board.new(A, B)
    assert board.is_reached_edge(A, Row.TOP)
    assert not board.is_reached_edge(A, Row.BOTTOM)
    assert board.is_reached_edge(B, Row.BOTTOM)
    assert _board(c6=Cell.occupied(B).stack(A)).is_reached_edge(A, Row.BOTTOM)


def test_is_isolated() -> None:
    # lone marker
    assert _board(c3=Cell.occupied(A)).is_isolated(_c("c3"))
    # friendly neighbours do not threaten
    assert _board(c3=Cell.occupied(A), d4=Cell.occupied(A)).is_isolated(_c("c3"))
    # any opponent neighbour, diagonals included, can retake
    assert not _board(c3=Cell.occupied(A), d4=Cell.occupied(B)).is_isolated(_c("c3"))
    # opponent buried under our marker does not count
    assert _board(c3=Cell.occupied(A), d4=Cell.occupied(B).stack(A)).is_isolated(_c("c3"))
    # a full pallet cannot be stacked onto
    full = Cell.occupied(A).stack(B).stack(A)
    assert _board(c3=full, d4=Cell.occupied(B)).is_isolated(_c("c3"))
    # empty cells have nothing to retake
    assert _board(d4=Cell.occupied(B)).is_isolated(_c("c3"))


def test_render_lists_markers() -> None:
    text = Board.new(A, B).migrate(_c("a1"), _c("a2")).render()
    lines = text.splitlines()
    assert len(lines) == 7
    assert lines[1].startswith("1  .")
    assert lines[2].startswith("2  A")
    assert lines[6].startswith("6  B")
