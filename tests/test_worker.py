# tests/test_worker.py
import threading

import pytest

from sudoku_solver.csp.board import SudokuBoard
from sudoku_solver.csp.propagation import Saturator, build_saturators
from sudoku_solver.csp.search import SearchEngine
from sudoku_solver.grid.parser import build_board, parse_sudoku_text
from sudoku_solver.types import SearchStatus
from sudoku_solver.worker import SolveWorker

TIMEOUT = 30


class GateSaturator(Saturator):
    """Blocks the search until the test opens the gate."""

    name = "gate"

    def __init__(self):
        self.entered = threading.Event()
        self.gate = threading.Event()

    def fix_one(self, board):
        self.entered.set()
        self.gate.wait(TIMEOUT)
        return False


def board_from_text(text):
    shape, grid = parse_sudoku_text(text)
    return build_board(shape, grid)


def test_worker_finds_first_solution(classic_puzzle, classic_solution):
    engine = SearchEngine(build_saturators(["naked_single", "hidden_single"]))
    received = []

    with SolveWorker(engine) as worker:
        future = worker.start(board_from_text(classic_puzzle), callback=received.append)
        result = future.result(timeout=TIMEOUT)

    assert result.status is SearchStatus.SOLVED
    assert result.first.pretty_print() == classic_solution
    assert received == [result]


def test_worker_find_all(two_solutions_4x4):
    engine = SearchEngine(build_saturators(["naked_single"]))
    with SolveWorker(engine, find_all=True) as worker:
        worker.start(board_from_text(two_solutions_4x4))
        result = worker.result(timeout=TIMEOUT)

    assert len(result.solutions) == 2


def test_result_before_start():
    with SolveWorker(SearchEngine()) as worker:
        assert worker.result() is None
        assert not worker.running


def test_worker_can_be_cancelled():
    gate = GateSaturator()
    with SolveWorker(SearchEngine([gate]), find_all=True) as worker:
        worker.start(SudokuBoard(3, 3))
        assert gate.entered.wait(TIMEOUT)
        assert worker.running

        worker.cancel()
        gate.gate.set()
        result = worker.result(timeout=TIMEOUT)

    assert result.status is SearchStatus.CANCELLED
    assert not worker.running


def test_only_one_search_at_a_time():
    gate = GateSaturator()
    with SolveWorker(SearchEngine([gate]), find_all=True) as worker:
        worker.start(SudokuBoard(3, 3))
        assert gate.entered.wait(TIMEOUT)

        with pytest.raises(RuntimeError):
            worker.start(SudokuBoard(3, 3))

        worker.cancel()
        gate.gate.set()
        assert worker.result(timeout=TIMEOUT).cancelled


def test_worker_clones_the_board(easy_4x4):
    board = board_from_text(easy_4x4)
    engine = SearchEngine(build_saturators(["naked_single"]))

    with SolveWorker(engine) as worker:
        worker.start(board)
        assert worker.result(timeout=TIMEOUT).found

    assert not board.is_solution()


def test_failing_callback_does_not_lose_the_result(easy_4x4):
    def explode(result):
        raise RuntimeError("boom")

    engine = SearchEngine(build_saturators(["naked_single"]))
    with SolveWorker(engine) as worker:
        worker.start(board_from_text(easy_4x4), callback=explode)
        assert worker.result(timeout=TIMEOUT).found
