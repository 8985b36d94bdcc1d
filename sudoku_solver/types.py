# -*- coding: utf-8 -*-
"""
数独 solver で使う主なデータ構造（型）をまとめたモジュールです。

dataclass / Enum を使うことで、
「この構造体はどんなフィールドを持っているのか」を
分かりやすく表現しています。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .csp.board import Board

# グリッド上の座標を表す型 (row, col)
CellCoord = Tuple[int, int]


class Structure(Enum):
    """
    「各数字は1回だけ」の制約がかかるセルの集まり（構造）の種類です。

    どの構造も (major, minor) の2つの番号でセルを指定します。
    - ROW : major = 行番号,   minor = 列番号
    - COL : major = 列番号,   minor = 行番号
    - BOX : major = ボックス番号, minor = ボックス内の通し番号
    """

    ROW = "row"
    COL = "col"
    BOX = "box"


@dataclass(frozen=True)
class BoxShape:
    """
    盤面の寸法を表すクラスです。

    Attributes
    ----------
    box_rows : int
        1つのボックスの行数。
    box_cols : int
        1つのボックスの列数。
    """

    box_rows: int
    box_cols: int

    def __post_init__(self) -> None:
        if self.box_rows < 1 or self.box_cols < 1:
            raise ValueError(
                f"Box dimensions must be positive, got {self.box_rows}x{self.box_cols}"
            )

    @property
    def numbers(self) -> int:
        """盤面の一辺の長さ（= 使える数字の個数）を返します。"""
        return self.box_rows * self.box_cols


class SearchStatus(Enum):
    """探索の結果の種類です。"""

    SOLVED = "solved"
    NO_SOLUTION = "no_solution"
    CANCELLED = "cancelled"


@dataclass
class SearchResult:
    """
    探索エンジンが返す結果です。

    Attributes
    ----------
    status : SearchStatus
        解が見つかったか、解なしか、途中でキャンセルされたか。
    solutions : list of Board
        見つかった解。全解探索の場合は canonical order で並んでいます。
        解なし・キャンセル時は空リスト。
    nodes_visited : int
        スタックから取り出した状態の数。
    """

    status: SearchStatus
    solutions: List["Board"] = field(default_factory=list)
    nodes_visited: int = 0

    @property
    def first(self) -> Optional["Board"]:
        """最初の解を返します。解がなければ None。"""
        return self.solutions[0] if self.solutions else None

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.SOLVED

    @property
    def cancelled(self) -> bool:
        return self.status is SearchStatus.CANCELLED


@dataclass(frozen=True)
class Hint:
    """「1マスだけ教えて」の結果。(row, col) に value を入れればよい、という意味です。"""

    row: int
    col: int
    value: int
