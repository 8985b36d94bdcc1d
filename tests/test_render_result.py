# tests/test_render_result.py
import numpy as np

from sudoku_solver.config import UNSET_CELL
from sudoku_solver.csp.board import SudokuBoard
from sudoku_solver.grid.parser import build_board, parse_sudoku_text
from sudoku_solver.postprocess.render_result import (
    board_to_dataframe,
    board_to_grid,
    build_result,
    format_sudoku_text,
    grid_to_text,
)
from sudoku_solver.types import BoxShape, SearchResult, SearchStatus, Structure


def make_board(rows, box_rows, box_cols):
    board = SudokuBoard(box_rows, box_cols)
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            board.set_cell(Structure.ROW, r, c, value)
    return board


def test_board_to_grid_and_dataframe():
    board = SudokuBoard(1, 2)
    board.set_cell(Structure.ROW, 0, 0, 2)

    assert board_to_grid(board).tolist() == [[2, UNSET_CELL], [UNSET_CELL, UNSET_CELL]]
    df = board_to_dataframe(board)
    assert df.shape == (2, 2)
    assert df.iat[0, 0] == 2
    assert df.iat[0, 1] is None


def test_format_text_reads_back(easy_4x4):
    shape, grid = parse_sudoku_text(easy_4x4)
    text = format_sudoku_text(build_board(shape, grid))

    assert text == easy_4x4
    assert parse_sudoku_text(text)[1].tolist() == grid.tolist()


def test_grid_to_text_writes_values_as_they_are():
    grid = np.array([[1, 1], [UNSET_CELL, UNSET_CELL]])
    assert grid_to_text(BoxShape(1, 2), grid) == "1 2\n1 1\n. .\n"


def test_build_result_truncates_boards():
    boards = [
        make_board([[1, 2], [2, 1]], 1, 2),
        make_board([[2, 1], [1, 2]], 1, 2),
    ]
    result = SearchResult(SearchStatus.SOLVED, boards, nodes_visited=7)

    out = build_result(result, BoxShape(1, 2), max_solutions=1)

    assert out["status"] == "solved"
    assert out["count"] == 1
    assert out["nodes_visited"] == 7
    assert out["shape"] == (1, 2)
    assert out["solutions"] == [[[1, 2], [2, 1]]]
    assert out["truncated"] is True


def test_build_result_without_solutions():
    out = build_result(SearchResult(SearchStatus.NO_SOLUTION), BoxShape(2, 2))
    assert out["status"] == "no_solution"
    assert out["count"] == 0
    assert out["solutions"] == []
    assert out["truncated"] is False
