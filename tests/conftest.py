# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sudoku_solver" and "api_proto" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sudoku_solver.grid.coords import structure_cells  # noqa: E402
from sudoku_solver.types import Structure  # noqa: E402


# Classic 9x9 puzzle with a unique solution
CLASSIC_PUZZLE = """\
3 3
5 3 . . 7 . . . .
6 . . 1 9 5 . . .
. 9 8 . . . . 6 .
8 . . . 6 . . . 3
4 . . 8 . 3 . . 1
7 . . . 2 . . . 6
. 6 . . . . 2 8 .
. . . 4 1 9 . . 5
. . . . 8 . . 7 9
"""

CLASSIC_SOLUTION = """\
5 3 4 6 7 8 9 1 2
6 7 2 1 9 5 3 4 8
1 9 8 3 4 2 5 6 7
8 5 9 7 6 1 4 2 3
4 2 6 8 5 3 7 9 1
7 1 3 9 2 4 8 5 6
9 6 1 5 3 7 2 8 4
2 8 7 4 1 9 6 3 5
3 4 5 2 8 6 1 7 9"""

# 4x4, one blank per row: naked singles alone finish it
EASY_4X4 = """\
2 2
. 2 3 4
3 . 1 2
2 1 . 3
4 3 2 .
"""

EASY_4X4_SOLUTION = """\
1 2 3 4
3 4 1 2
2 1 4 3
4 3 2 1"""

# Exactly two solutions: the 1/2 rectangle in columns 0-1 can be swapped
TWO_SOLUTIONS_4X4 = """\
2 2
. . 3 4
3 4 1 2
. . 4 3
4 3 2 1
"""

# Valid givens, but (0,2) and (0,3) are both forced to 4
CONTRADICTORY_4X4 = """\
2 2
1 2 . .
. . 3 .
. . . .
. . . .
"""

# Valid givens, but (0,0) is the only place for both 1 and 2 in row 0
DOUBLE_HIDDEN_4X4 = """\
2 2
. . . .
. . 1 2
. 1 2 .
. 2 . 1
"""


@pytest.fixture
def classic_puzzle():
    return CLASSIC_PUZZLE


@pytest.fixture
def classic_solution():
    return CLASSIC_SOLUTION


@pytest.fixture
def easy_4x4():
    return EASY_4X4


@pytest.fixture
def easy_4x4_solution():
    return EASY_4X4_SOLUTION


@pytest.fixture
def two_solutions_4x4():
    return TWO_SOLUTIONS_4X4


@pytest.fixture
def contradictory_4x4():
    return CONTRADICTORY_4X4


@pytest.fixture
def double_hidden_4x4():
    return DOUBLE_HIDDEN_4X4


@pytest.fixture
def assert_valid_solution():
    """Checks that every row, column and box holds each digit exactly once."""

    def check(board):
        n = board.numbers
        assert board.is_solution()
        for struct in Structure:
            for major in range(n):
                values = {
                    board.get_cell(Structure.ROW, r, c)
                    for r, c in structure_cells(struct, major, board.shape)
                }
                assert values == set(range(1, n + 1)), (struct, major)

    return check
