# -*- coding: utf-8 -*-
"""
UI から編集される「プレイ中の盤面」を表すモジュールです。

SudokuBoard が候補集合を持つ「賢い」盤面なのに対して、
SudokuGame は各セルの値だけを持つ単純な盤面です。
- 問題として最初から入っている数字（preset）は変更できない
- ユーザーの入力は1手ごとに undo スタックに積まれる
- 「ヒント」と「全部解く」は探索エンジンの結果を盤面に反映する

探索にかかる時間の管理（別スレッドで動かす・キャンセルする）は
worker.SolveWorker の役割で、このクラスは同期的に動きます。
"""

from __future__ import annotations

import threading
from typing import List, Optional

import numpy as np

from .config import DEFAULT_SATURATORS, UNSET_CELL
from .csp.board import SudokuBoard
from .csp.propagation import build_saturators
from .csp.search import SearchEngine
from .errors import ConstraintViolation
from .grid.parser import build_board, parse_sudoku_text, preset_mask
from .logging_utils import get_logger
from .postprocess.render_result import grid_to_text
from .types import BoxShape, Hint, SearchStatus, Structure

logger = get_logger()


def default_engine() -> SearchEngine:
    """config.DEFAULT_SATURATORS の順に saturator を登録したエンジンを作ります。"""
    return SearchEngine(build_saturators(DEFAULT_SATURATORS))


class SudokuGame:
    """
    プレイ中の盤面です。

    Parameters
    ----------
    box_rows : int
        1つのボックスの行数。
    box_cols : int
        1つのボックスの列数。
    """

    def __init__(self, box_rows: int, box_cols: int) -> None:
        self.shape = BoxShape(box_rows, box_cols)
        n = self.shape.numbers
        self._grid = np.full((n, n), UNSET_CELL, dtype=int)
        self._preset = np.zeros((n, n), dtype=bool)
        self._undo_stack: List[np.ndarray] = []

    @classmethod
    def from_text(cls, text: str) -> "SudokuGame":
        """テキスト盤面から作ります。数字の入っているセルは preset になります。"""
        shape, grid = parse_sudoku_text(text)
        return cls.from_grid(shape, grid)

    @classmethod
    def from_grid(cls, shape: BoxShape, grid: np.ndarray) -> "SudokuGame":
        """値の入った2次元配列から作ります。数字の入っているセルは preset になります。"""
        game = cls(shape.box_rows, shape.box_cols)
        if grid.shape != game._grid.shape:
            raise ValueError(f"Grid shape {grid.shape} does not match {game._grid.shape}")
        game._grid = np.array(grid, dtype=int)
        game._preset = preset_mask(grid)
        return game

    @property
    def numbers(self) -> int:
        return self.shape.numbers

    @property
    def grid(self) -> np.ndarray:
        """現在の値のコピーを返します。"""
        return self._grid.copy()

    def get_cell(self, row: int, col: int) -> int:
        return int(self._grid[row, col])

    def is_preset(self, row: int, col: int) -> bool:
        return bool(self._preset[row, col])

    def set_cell(self, row: int, col: int, value: int) -> None:
        """
        ユーザー入力としてセルに値を入れます（UNSET_CELL で消去）。

        preset のセルや範囲外の値は ValueError。
        値が変わらない場合は undo スタックに積みません。
        """
        if self._preset[row, col]:
            raise ValueError(f"Cell ({row}, {col}) is preset and cannot be changed")
        if value != UNSET_CELL and not 1 <= value <= self.numbers:
            raise ValueError(f"Value {value} is outside 1..{self.numbers}")
        if self._grid[row, col] == value:
            return

        self._push_state()
        self._grid[row, col] = value

    def clear_cell(self, row: int, col: int) -> None:
        self.set_cell(row, col, UNSET_CELL)

    def _push_state(self) -> None:
        self._undo_stack.append(self._grid.copy())

    def undo(self) -> bool:
        """1手前の状態に戻します。戻せる状態が無ければ False。"""
        if not self._undo_stack:
            return False
        self._grid = self._undo_stack.pop()
        return True

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    def all_cells_set(self) -> bool:
        return bool((self._grid != UNSET_CELL).all())

    def to_board(self) -> SudokuBoard:
        """
        候補集合つきの SudokuBoard に変換します。

        Raises
        ------
        ConstraintViolation
            盤面が数独のルールに違反している場合。
        """
        return build_board(self.shape, self._grid)

    def is_solved(self) -> bool:
        """すべてのセルが埋まっていて、ルール違反が無ければ True。"""
        if not self.all_cells_set():
            return False
        try:
            return self.to_board().is_solution()
        except ConstraintViolation:
            return False

    def suggest_value(
        self,
        engine: Optional[SearchEngine] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[Hint]:
        """
        1マスだけ答えを入れます。

        最初の解を探索し、その解で最後に確定したセルの値を盤面に反映します。
        盤面が埋まっている・解が無い・キャンセルされた場合は None。

        Raises
        ------
        ConstraintViolation
            入力の盤面そのものが矛盾している場合。
        """
        if self.all_cells_set():
            return None

        result = self._find_first(self.to_board(), engine, cancel_event)
        solution = result.first
        if solution is None or solution.last_cell_set is None:
            return None
        row, col = solution.last_cell_set
        if self._grid[row, col] != UNSET_CELL:
            return None

        hint = Hint(row, col, solution.get_cell(Structure.ROW, row, col))
        self._push_state()
        self._grid[row, col] = hint.value
        logger.info("Hint: (%d, %d) -> %d", hint.row, hint.col, hint.value)
        return hint

    def solve(
        self,
        engine: Optional[SearchEngine] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> SearchStatus:
        """
        最初の解で未入力のセルをすべて埋めます（undo 1回で元に戻せます）。

        入力が矛盾している場合は NO_SOLUTION を返し、盤面は変更しません。
        """
        try:
            board = self.to_board()
        except ConstraintViolation:
            return SearchStatus.NO_SOLUTION

        result = self._find_first(board, engine, cancel_event)
        if result.first is None:
            return result.status

        solution = result.first
        if not self.all_cells_set():
            self._push_state()
        for row, col in np.argwhere(self._grid == UNSET_CELL):
            self._grid[row, col] = solution.get_cell(Structure.ROW, int(row), int(col))
        return result.status

    def _find_first(self, board, engine, cancel_event):
        engine = engine or default_engine()
        return engine.find_first_solution(board, cancel_event=cancel_event)

    def to_text(self) -> str:
        """テキスト盤面フォーマットで書き出します（矛盾した入力もそのまま書き出します）。"""
        return grid_to_text(self.shape, self._grid)
