# -*- coding: utf-8 -*-
"""
sudoku_solver.csp パッケージ

制約充足（CSP）としての数独の解法をまとめています。

主に以下の役割を持つモジュールから構成されています。
- board.py       : セルごとの候補集合を持つ盤面
- propagation.py : 制約伝播（naked single / hidden single）
- search.py      : 深さ優先探索による解の探索
"""

from .board import Board, SudokuBoard
from .propagation import (
    HiddenSingleSaturator,
    NakedSingleSaturator,
    Saturator,
    build_saturators,
)
from .search import SearchEngine

__all__ = [
    "Board",
    "SudokuBoard",
    "Saturator",
    "NakedSingleSaturator",
    "HiddenSingleSaturator",
    "build_saturators",
    "SearchEngine",
]
