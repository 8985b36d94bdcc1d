# -*- coding: utf-8 -*-
"""
セルごとの候補集合（possibilities）を保持する盤面モジュールです。

- Board       : 探索エンジンや saturator から見た「盤面の能力」を定めた抽象クラス
- SudokuBoard : numpy の bool 配列で候補集合を持つ実装

SudokuBoard の内部表現
----------------------
_candidates[row, col, v - 1] が True なら、(row, col) にはまだ v が入りうる。
_fixed[row, col] が True なら、そのセルは値が確定している
（このとき候補は確定値1つだけが True）。

値を確定させる set_cell() は、同じ行・列・ボックスの他のセルから
その値を候補から外します。このとき「候補がその値1つだけ」のセルがあれば
盤面は矛盾しているので ConstraintViolation を送出します。
つまり矛盾は「どこかのセルの候補が空になった瞬間」ではなく、
その1手前で検出されます。
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..config import UNSET_CELL, UNSET_SORT_OFFSET
from ..errors import ConstraintViolation
from ..grid.coords import from_cell, in_range, structure_cells, to_cell
from ..types import BoxShape, CellCoord, Structure


@functools.total_ordering
class Board(ABC):
    """
    盤面の能力（インターフェース）を定めた抽象クラスです。

    探索エンジンはこのクラスのメソッドだけを使うので、
    内部表現の違う実装に差し替えてもエンジン側は変更不要です。

    比較演算子は canonical order（行優先でセルの値を並べた辞書式順序、
    未確定セルは numbers + UNSET_SORT_OFFSET として扱う）で定義しています。
    """

    @property
    @abstractmethod
    def shape(self) -> BoxShape:
        ...

    @property
    def box_rows(self) -> int:
        return self.shape.box_rows

    @property
    def box_cols(self) -> int:
        return self.shape.box_cols

    @property
    def numbers(self) -> int:
        return self.shape.numbers

    @property
    @abstractmethod
    def last_cell_set(self) -> Optional[CellCoord]:
        """最後に確定させたセルの (row, col)。まだ1つも確定していなければ None。"""

    @abstractmethod
    def set_cell(self, struct: Structure, major: int, minor: int, value: int) -> None:
        ...

    @abstractmethod
    def get_cell(self, struct: Structure, major: int, minor: int) -> int:
        ...

    @abstractmethod
    def get_possibilities(
        self, struct: Structure, major: int, minor: int
    ) -> Optional[List[int]]:
        ...

    @abstractmethod
    def remove_possibility(
        self, struct: Structure, major: int, minor: int, value: int
    ) -> None:
        ...

    @abstractmethod
    def is_solution(self) -> bool:
        ...

    @abstractmethod
    def clone(self) -> "Board":
        ...

    def candidate_count(self, row: int, col: int) -> int:
        """(row, col) の候補数を返します。確定済みセルは 0 扱い。"""
        pos = self.get_possibilities(Structure.ROW, row, col)
        return len(pos) if pos is not None else 0

    # ------------------------------------------------------------------
    # canonical order
    # ------------------------------------------------------------------

    def canonical_key(self) -> Tuple[int, ...]:
        """
        行優先でセルの値を並べたタプルを返します。

        未確定セルは numbers + UNSET_SORT_OFFSET に置き換えるので、
        確定値より必ず後ろに並びます。
        """
        unset_rank = self.numbers + UNSET_SORT_OFFSET
        key: List[int] = []
        for row in range(self.numbers):
            for col in range(self.numbers):
                value = self.get_cell(Structure.ROW, row, col)
                key.append(unset_rank if value == UNSET_CELL else value)
        return tuple(key)

    def compare_to(self, other: "Board") -> int:
        """self < other なら -1、等しければ 0、self > other なら 1 を返します。"""
        if self.shape != other.shape:
            raise ValueError(
                f"Cannot compare boards of different shapes: {self.shape} vs {other.shape}"
            )
        mine, theirs = self.canonical_key(), other.canonical_key()
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return self.compare_to(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.compare_to(other) < 0

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # テキスト表現
    # ------------------------------------------------------------------

    def _row_texts(self) -> List[str]:
        rows: List[str] = []
        for row in range(self.numbers):
            cells = []
            for col in range(self.numbers):
                value = self.get_cell(Structure.ROW, row, col)
                cells.append("." if value == UNSET_CELL else str(value))
            rows.append(" ".join(cells))
        return rows

    def pretty_print(self) -> str:
        """1行に盤面の1行を並べた文字列を返します（デバッグ・テスト用）。"""
        return "\n".join(self._row_texts())

    def __str__(self) -> str:
        return " ".join(self._row_texts())


@functools.lru_cache(maxsize=None)
def _structure_index(shape: BoxShape) -> Dict[Tuple[Structure, int], Tuple[np.ndarray, np.ndarray]]:
    """各構造に含まれるセルの行・列インデックス配列を (struct, major) ごとに返します。"""
    index: Dict[Tuple[Structure, int], Tuple[np.ndarray, np.ndarray]] = {}
    for struct in Structure:
        for major in range(shape.numbers):
            cells = structure_cells(struct, major, shape)
            rows = np.array([r for r, _ in cells], dtype=np.intp)
            cols = np.array([c for _, c in cells], dtype=np.intp)
            index[(struct, major)] = (rows, cols)
    return index


class SudokuBoard(Board):
    """
    box_rows x box_cols のボックスを持つ、一般化された数独盤面です。

    Parameters
    ----------
    box_rows : int
        1つのボックスの行数。
    box_cols : int
        1つのボックスの列数。
    """

    def __init__(self, box_rows: int, box_cols: int) -> None:
        self._shape = BoxShape(box_rows, box_cols)
        n = self._shape.numbers

        # 空の盤面：すべてのセルがすべての数字を候補に持つ
        self._candidates = np.ones((n, n, n), dtype=bool)
        self._fixed = np.zeros((n, n), dtype=bool)
        self._last_cell_set: Optional[CellCoord] = None
        self._index = _structure_index(self._shape)

    @property
    def shape(self) -> BoxShape:
        return self._shape

    @property
    def last_cell_set(self) -> Optional[CellCoord]:
        return self._last_cell_set

    def _check_address(self, major: int, minor: int) -> None:
        if not in_range(major, minor, self._shape):
            raise IndexError(
                f"Address ({major}, {minor}) is outside a board with {self.numbers} numbers"
            )

    def set_cell(self, struct: Structure, major: int, minor: int, value: int) -> None:
        """
        指定したセルを value に確定させます。

        value が UNSET_CELL の場合は何もしません。
        value がそのセルの候補に無い場合、または同じ行・列・ボックスに
        「候補が value だけ」のセルがある場合は ConstraintViolation。
        行・列・ボックスをすべて確認してから書き換えるので、失敗しても盤面は変わりません。
        """
        if value == UNSET_CELL:
            return
        self._check_address(major, minor)

        row, col = to_cell(struct, major, minor, self._shape)
        if not 1 <= value <= self.numbers or not self._candidates[row, col, value - 1]:
            raise ConstraintViolation(
                f"Cannot set {value} at ({row}, {col}): not a remaining candidate"
            )

        peer_addresses = [
            (peer_struct, *from_cell(peer_struct, row, col, self._shape))
            for peer_struct in (Structure.ROW, Structure.COL, Structure.BOX)
        ]
        for peer_struct, peer_major, peer_minor in peer_addresses:
            self._check_removal(peer_struct, peer_major, peer_minor, value)

        self._candidates[row, col, :] = False
        self._candidates[row, col, value - 1] = True
        self._fixed[row, col] = True
        self._last_cell_set = (row, col)

        # 行・列・ボックスの順に、他のセルから value を外す
        for peer_struct, peer_major, peer_minor in peer_addresses:
            self._remove(peer_struct, peer_major, peer_minor, value)

    def get_cell(self, struct: Structure, major: int, minor: int) -> int:
        """確定値を返します。未確定なら UNSET_CELL。"""
        self._check_address(major, minor)
        row, col = to_cell(struct, major, minor, self._shape)
        if not self._fixed[row, col]:
            return UNSET_CELL
        return int(np.flatnonzero(self._candidates[row, col])[0]) + 1

    def get_possibilities(
        self, struct: Structure, major: int, minor: int
    ) -> Optional[List[int]]:
        """
        未確定セルの候補を昇順のリストで返します。

        確定済みセル、または範囲外のアドレスに対しては None を返します。
        """
        if not in_range(major, minor, self._shape):
            return None
        row, col = to_cell(struct, major, minor, self._shape)
        if self._fixed[row, col]:
            return None
        return [int(i) + 1 for i in np.flatnonzero(self._candidates[row, col])]

    def remove_possibility(
        self, struct: Structure, major: int, minor: int, value: int
    ) -> None:
        """
        major 番目の構造のうち、minor 番目以外のすべてのセルから value を外します。

        外すことで候補が空になるセル（= 候補が value だけのセル）があれば
        ConstraintViolation を送出し、盤面は変更しません。
        """
        self._check_address(major, minor)
        if not 1 <= value <= self.numbers:
            raise ValueError(f"Value {value} is outside 1..{self.numbers}")

        self._check_removal(struct, major, minor, value)
        self._remove(struct, major, minor, value)

    def _others(self, struct: Structure, major: int, minor: int) -> Tuple[np.ndarray, np.ndarray]:
        """major 番目の構造のうち、minor 番目以外のセルの行・列インデックスを返します。"""
        rows, cols = self._index[(struct, major)]
        others = np.arange(self.numbers) != minor
        return rows[others], cols[others]

    def _check_removal(self, struct: Structure, major: int, minor: int, value: int) -> None:
        """value を外すと候補が空になるセルがあれば ConstraintViolation（盤面は変更しない）。"""
        rows, cols = self._others(struct, major, minor)
        cand = self._candidates[rows, cols]
        clash = (cand.sum(axis=1) == 1) & cand[:, value - 1]
        if clash.any():
            k = int(np.flatnonzero(clash)[0])
            raise ConstraintViolation(
                f"Cannot remove {value} from ({int(rows[k])}, {int(cols[k])}): "
                "it is the last candidate"
            )

    def _remove(self, struct: Structure, major: int, minor: int, value: int) -> None:
        rows, cols = self._others(struct, major, minor)
        self._candidates[rows, cols, value - 1] = False

    def is_solution(self) -> bool:
        return bool(self._fixed.all())

    def candidate_count(self, row: int, col: int) -> int:
        if self._fixed[row, col]:
            return 0
        return int(self._candidates[row, col].sum())

    def clone(self) -> "SudokuBoard":
        """
        同じ寸法の独立した盤面を作ります。

        確定済みセルだけを set_cell() で再生して候補集合を作り直すので、
        未確定セルの候補はビット単位のコピーではなく再計算されたものになります。
        """
        copy = SudokuBoard(self.box_rows, self.box_cols)
        for row, col in np.argwhere(self._fixed):
            value = int(np.flatnonzero(self._candidates[row, col])[0]) + 1
            copy.set_cell(Structure.ROW, int(row), int(col), value)
        copy._last_cell_set = self._last_cell_set
        return copy

    def __repr__(self) -> str:
        return f"SudokuBoard({self.box_rows}, {self.box_cols}, fixed={int(self._fixed.sum())})"
