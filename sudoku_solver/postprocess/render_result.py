# -*- coding: utf-8 -*-
"""
探索結果をもとに表示用の情報を構築するモジュールです。
"""

from __future__ import annotations

from typing import Any, Dict, List

import numpy as np
import pandas as pd

from ..config import API_MAX_SOLUTIONS, UNSET_CELL, UNSET_TOKEN
from ..csp.board import Board
from ..types import BoxShape, SearchResult, Structure


def board_to_grid(board: Board) -> np.ndarray:
    """
    盤面の確定値を 2次元 numpy 配列にします。

    未確定セルは UNSET_CELL のままです。
    """
    n = board.numbers
    grid = np.full((n, n), UNSET_CELL, dtype=int)
    for row in range(n):
        for col in range(n):
            grid[row, col] = board.get_cell(Structure.ROW, row, col)
    return grid


def board_to_dataframe(board: Board) -> pd.DataFrame:
    """
    盤面を表示用の DataFrame にします。

    未確定セルは None になります（JSON にすると null）。
    """
    grid = board_to_grid(board).astype(object)
    grid[grid == UNSET_CELL] = None
    return pd.DataFrame(grid)


def format_sudoku_text(board: Board) -> str:
    """
    盤面をテキスト盤面フォーマットに書き出します。

    grid.parser.parse_sudoku_text() で読み戻せる形式です。
    """
    return grid_to_text(board.shape, board_to_grid(board))


def grid_to_text(shape: BoxShape, grid: np.ndarray) -> str:
    """値の入った2次元配列をテキスト盤面フォーマットにします（矛盾した値もそのまま書き出します）。"""
    lines = [f"{shape.box_rows} {shape.box_cols}"]
    for row in np.asarray(grid).tolist():
        lines.append(" ".join(UNSET_TOKEN if v == UNSET_CELL else str(v) for v in row))
    return "\n".join(lines) + "\n"


def build_result(
    result: SearchResult,
    shape: BoxShape,
    max_solutions: int = API_MAX_SOLUTIONS,
) -> Dict[str, Any]:
    """
    SearchResult を JSON にしやすい dict にまとめます。

    解が max_solutions を超える場合、盤面は先頭から max_solutions 件だけ入れ、
    truncated を True にします。count は返した盤面の数です。
    全解探索は max_solutions + 1 件で打ち切るので、全件数は分からない場合があります。
    """
    solutions: List[List[List[int]]] = [
        board_to_dataframe(b).values.tolist() for b in result.solutions[:max_solutions]
    ]

    return {
        "status": result.status.value,
        "count": len(solutions),
        "nodes_visited": result.nodes_visited,
        "shape": (shape.box_rows, shape.box_cols),
        "solutions": solutions,  # ★ DataFrameを返さない
        "truncated": len(result.solutions) > max_solutions,
    }
