# tests/test_coords.py
import pytest

from sudoku_solver.grid.coords import (
    from_cell,
    in_range,
    peers,
    structure_cells,
    to_box,
    to_box_minor,
    to_cell,
)
from sudoku_solver.types import BoxShape, Structure

SHAPES = [BoxShape(1, 1), BoxShape(1, 2), BoxShape(2, 2), BoxShape(2, 3), BoxShape(3, 2), BoxShape(3, 3)]


def test_row_and_col_addresses():
    shape = BoxShape(3, 3)
    assert to_cell(Structure.ROW, 2, 7, shape) == (2, 7)
    assert to_cell(Structure.COL, 2, 7, shape) == (7, 2)


@pytest.mark.parametrize(
    "shape, major, minor, expected",
    [
        (BoxShape(3, 3), 4, 0, (3, 3)),
        (BoxShape(3, 3), 5, 8, (5, 8)),
        (BoxShape(3, 3), 2, 0, (0, 6)),
        # 2 rows x 3 cols per box: two boxes side by side in each band
        (BoxShape(2, 3), 1, 0, (0, 3)),
        (BoxShape(2, 3), 2, 4, (3, 1)),
        # 3 rows x 2 cols per box: three boxes side by side in each band
        (BoxShape(3, 2), 4, 5, (5, 3)),
    ],
)
def test_box_addresses(shape, major, minor, expected):
    assert to_cell(Structure.BOX, major, minor, shape) == expected


@pytest.mark.parametrize("shape", SHAPES)
def test_from_cell_inverts_to_cell(shape):
    n = shape.numbers
    for struct in Structure:
        for major in range(n):
            for minor in range(n):
                row, col = to_cell(struct, major, minor, shape)
                assert 0 <= row < n and 0 <= col < n
                assert from_cell(struct, row, col, shape) == (major, minor)


@pytest.mark.parametrize("shape", SHAPES)
def test_box_index_is_the_same_from_row_and_col(shape):
    n = shape.numbers
    for row in range(n):
        for col in range(n):
            assert to_box(Structure.COL, col, row, shape) == to_box(Structure.ROW, row, col, shape)
            assert to_box_minor(Structure.COL, col, row, shape) == to_box_minor(
                Structure.ROW, row, col, shape
            )


@pytest.mark.parametrize("shape", SHAPES)
def test_each_structure_covers_the_board_once(shape):
    n = shape.numbers
    all_cells = {(r, c) for r in range(n) for c in range(n)}
    for struct in Structure:
        seen = []
        for major in range(n):
            seen.extend(structure_cells(struct, major, shape))
        assert len(seen) == n * n
        assert set(seen) == all_cells


def test_structure_cells_of_first_box():
    assert structure_cells(Structure.BOX, 0, BoxShape(3, 3)) == [
        (0, 0), (0, 1), (0, 2),
        (1, 0), (1, 1), (1, 2),
        (2, 0), (2, 1), (2, 2),
    ]


def test_peers():
    assert len(peers(4, 4, BoxShape(3, 3))) == 20
    assert (4, 4) not in peers(4, 4, BoxShape(3, 3))
    assert peers(0, 0, BoxShape(1, 2)) == {(0, 1), (1, 0)}


def test_in_range():
    shape = BoxShape(2, 2)
    assert in_range(0, 3, shape)
    assert not in_range(4, 0, shape)
    assert not in_range(0, -1, shape)


def test_box_shape_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        BoxShape(0, 3)
