# -*- coding: utf-8 -*-
"""
制約伝播（propagation）を行う saturator をまとめたモジュールです。

saturator は「推測をせずに、確実に決まるセルだけを埋める」ルールです。
状態は持たず、渡された盤面をその場で書き換えます。
探索エンジンは必ず使い捨ての clone を渡すので、
ここでは盤面のコピーは行いません。

本モジュールの saturator
------------------------
- NakedSingleSaturator  : 候補が1つしかないセルを確定
- HiddenSingleSaturator : 行・列・ボックスのどこにも他に候補が無い数字を確定

どちらも「1つ確定したら最初から走査し直す」ことを、
何も確定できなくなる（不動点に達する）まで繰り返します。
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Set, Tuple

from ..errors import ConstraintViolation, Unsolvable
from ..grid.coords import peers
from ..types import BoxShape, CellCoord, Structure
from .board import Board


class Saturator(ABC):
    """制約伝播ルールの共通インターフェースです。"""

    name: str = ""

    def saturate(self, board: Board) -> bool:
        """
        不動点に達するまでルールを適用します。

        Returns
        -------
        bool
            1つでもセルを確定させたら True。

        Raises
        ------
        Unsolvable
            伝播だけで「解が存在しない」と分かった場合。
        """
        changed = False
        while self.fix_one(board):
            changed = True
        return changed

    @abstractmethod
    def fix_one(self, board: Board) -> bool:
        """盤面を1回走査し、最初に見つけたセルを1つ確定させたら True を返します。"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _fix(board: Board, row: int, col: int, value: int) -> None:
    # 正しい候補集合なら失敗しないはずだが、失敗したら盤面レベルの矛盾として扱う
    try:
        board.set_cell(Structure.ROW, row, col, value)
    except ConstraintViolation as e:
        raise Unsolvable(f"Cannot fix ({row}, {col}) to {value}: {e}") from e


class NakedSingleSaturator(Saturator):
    """候補が1つしか残っていないセル（naked single）を確定させます。"""

    name = "naked_single"

    def fix_one(self, board: Board) -> bool:
        for row in range(board.numbers):
            for col in range(board.numbers):
                pos = board.get_possibilities(Structure.ROW, row, col)
                if pos is not None and len(pos) == 1:
                    _fix(board, row, col, pos[0])
                    return True
        return False


@functools.lru_cache(maxsize=None)
def _peer_table(shape: BoxShape) -> Dict[CellCoord, Tuple[CellCoord, ...]]:
    n = shape.numbers
    return {
        (row, col): tuple(sorted(peers(row, col, shape)))
        for row in range(n)
        for col in range(n)
    }


class HiddenSingleSaturator(Saturator):
    """
    hidden single を確定させます。

    未確定セルの候補 v が、同じ行・列・ボックスの
    他の未確定セルのどの候補にも現れないとき、
    v は「隠れた」候補で、このセルに入るしかありません。

    - 隠れた候補が 0 個 : このセルでは何もせず次のセルへ
    - 隠れた候補が 1 個 : そのセルを確定して最初から走査し直す
    - 隠れた候補が 2 個以上 : 1つのセルに2つの数字が強制されるので解なし
    """

    name = "hidden_single"

    def fix_one(self, board: Board) -> bool:
        open_cands = _open_candidates(board)
        peer_table = _peer_table(board.shape)

        # dict は挿入順を保つので、走査順は行優先になる
        for (row, col), pos in open_cands.items():
            peer_values: Set[int] = set()
            for p in peer_table[(row, col)]:
                peer_values |= open_cands.get(p, set())

            hidden = [v for v in pos if v not in peer_values]
            if not hidden:
                continue
            if len(hidden) > 1:
                raise Unsolvable(
                    f"Cell ({row}, {col}) is forced to several values: {hidden}"
                )
            _fix(board, row, col, hidden[0])
            return True
        return False


def _open_candidates(board: Board) -> Dict[CellCoord, Set[int]]:
    """未確定セル → 候補集合 を行優先で集計します。"""
    out: Dict[CellCoord, Set[int]] = {}
    for row in range(board.numbers):
        for col in range(board.numbers):
            pos = board.get_possibilities(Structure.ROW, row, col)
            if pos is not None:
                out[(row, col)] = set(pos)
    return out


# 名前 → saturator クラス の対応表（読み取り専用）
SATURATOR_TYPES = {
    NakedSingleSaturator.name: NakedSingleSaturator,
    HiddenSingleSaturator.name: HiddenSingleSaturator,
}


def build_saturators(names: Iterable[str]) -> List[Saturator]:
    """
    名前の並びから saturator のリストを新しく作ります。

    並び順はそのまま探索エンジンでの適用順になります。
    """
    saturators: List[Saturator] = []
    for name in names:
        try:
            saturators.append(SATURATOR_TYPES[name]())
        except KeyError:
            raise KeyError(
                f"Unknown saturator {name!r}; available: {sorted(SATURATOR_TYPES)}"
            ) from None
    return saturators
