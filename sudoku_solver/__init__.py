# -*- coding: utf-8 -*-
"""
sudoku_solver パッケージの入口となるモジュールです。

api_proto/local_api.py などから:

    from sudoku_solver import solve

と呼び出されることを想定しています。

ここでは、盤面（pandas.DataFrame またはテキスト）を受け取り、
1. 盤面の正規化
2. 初期盤面（候補集合つき）の構築
3. saturator の組み立て
4. 探索（最初の解 / 全解）
5. 表示用の結果構築
を順番に呼び出します。
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, Optional

import pandas as pd

from .config import API_MAX_SOLUTIONS, DEFAULT_SATURATORS, UNSET_CELL
from .csp.board import Board, SudokuBoard
from .csp.propagation import build_saturators
from .csp.search import SearchEngine
from .errors import ConstraintViolation, GridFormatError, SudokuError, Unsolvable
from .grid.parser import build_board, normalize_grid, parse_shape, parse_sudoku_text
from .logging_utils import get_logger
from .postprocess.render_result import build_result
from .types import BoxShape, Hint, SearchResult, SearchStatus, Structure

logger = get_logger()


def _run_search(
    shape: BoxShape,
    grid,
    find_all: bool,
    saturator_names: Iterable[str],
    cancel_event: Optional[threading.Event],
    max_solutions: int,
) -> Dict[str, Any]:
    board = build_board(shape, grid)
    logger.info(
        "Board: %dx%d boxes, %d preset cells",
        shape.box_rows,
        shape.box_cols,
        int((grid != UNSET_CELL).sum()),
    )

    engine = SearchEngine(build_saturators(saturator_names))
    if find_all:
        # 1件多く探して、上限を超えたかどうか（truncated）を判定する
        result = engine.find_all_solutions(
            board, cancel_event=cancel_event, limit=max_solutions + 1
        )
    else:
        result = engine.find_first_solution(board, cancel_event=cancel_event)

    return build_result(result, shape, max_solutions=max_solutions)


def solve(
    df: pd.DataFrame,
    box_rows: int,
    box_cols: int,
    find_all: bool = False,
    saturator_names: Iterable[str] = DEFAULT_SATURATORS,
    cancel_event: Optional[threading.Event] = None,
    max_solutions: int = API_MAX_SOLUTIONS,
) -> Dict[str, Any]:
    """
    DataFrame の盤面を解くメイン関数。

    Raises
    ------
    GridFormatError
        盤面の形式が正しくない場合。
    ConstraintViolation
        入力の盤面そのものが矛盾している場合。
    """
    logger.info("=== solve() START ===")
    logger.info("Grid shape: %s", df.shape)

    shape = parse_shape(box_rows, box_cols)
    grid = normalize_grid(df, shape)
    out = _run_search(shape, grid, find_all, saturator_names, cancel_event, max_solutions)

    logger.info("=== solve() END === status=%s count=%d", out["status"], out["count"])
    return out


def solve_text(
    text: str,
    find_all: bool = False,
    saturator_names: Iterable[str] = DEFAULT_SATURATORS,
    cancel_event: Optional[threading.Event] = None,
    max_solutions: int = API_MAX_SOLUTIONS,
) -> Dict[str, Any]:
    """テキスト盤面（1行目がボックスの寸法）を解きます。"""
    shape, grid = parse_sudoku_text(text)
    return _run_search(shape, grid, find_all, saturator_names, cancel_event, max_solutions)


__all__ = [
    "Board",
    "BoxShape",
    "ConstraintViolation",
    "GridFormatError",
    "Hint",
    "SearchEngine",
    "SearchResult",
    "SearchStatus",
    "Structure",
    "SudokuBoard",
    "SudokuError",
    "Unsolvable",
    "build_saturators",
    "solve",
    "solve_text",
]
