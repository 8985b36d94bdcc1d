# -*- coding: utf-8 -*-
"""
saturator と深さ優先のバックトラックを組み合わせて、
数独の解を探索するモジュールです。

ざっくり流れ
------------
1. 入力盤面の clone をスタックに積む
2. スタックの一番上の状態を取り出し、登録された saturator を順に1回ずつ適用する
   （各 saturator は内部で自分の不動点まで繰り返す）
   Unsolvable が出たらその枝は捨てる
3. すべてのセルが確定していれば解として記録する
   （最初の解だけ欲しい場合はここで終了）
4. そうでなければ MRV（候補数が最小のセル）で分岐セルを選ぶ
5. 候補の値ごとに clone を作って値を確定させ、矛盾しなかったものをスタックに積む
   （小さい値から探索されるよう、大きい値から順に積む）
6. スタックが空になるまで繰り返す

再帰ではなく明示的なスタックを使っているので、深い盤面でも
再帰の深さ制限を気にする必要はありません。

キャンセル
----------
find_first_solution / find_all_solutions には threading.Event を渡せます。
状態を1つ取り出すたびにイベントを確認し、セットされていれば
SearchStatus.CANCELLED を返します（途中までの結果は捨てます）。
"""

from __future__ import annotations

import threading
from typing import List, Optional, Sequence, Tuple

from ..config import SEARCH_LOG_INTERVAL
from ..errors import ConstraintViolation, Unsolvable
from ..logging_utils import get_logger
from ..types import CellCoord, SearchResult, SearchStatus, Structure
from .board import Board
from .propagation import Saturator

logger = get_logger()


def choose_branch_cell(board: Board) -> Optional[CellCoord]:
    """
    分岐に使うセルを選びます。

    MRV（Minimum Remaining Values）ヒューリスティック：
    - 未確定セルのうち、候補数が最も少ないもの
    - 同じなら行優先で先に見つかったもの

    未確定セルが無ければ None を返します。
    """
    best: Optional[CellCoord] = None
    best_count = board.numbers + 1
    for row in range(board.numbers):
        for col in range(board.numbers):
            # 確定済みセルは 0 になるので除外される
            count = board.candidate_count(row, col)
            if count and count < best_count:
                best, best_count = (row, col), count
    return best


def expand_branches(board: Board) -> List[Board]:
    """
    分岐セルの候補ごとに子状態を作ります（候補の昇順）。

    値を確定させた時点で矛盾する子状態（ConstraintViolation）は捨てます。
    """
    cell = choose_branch_cell(board)
    if cell is None:
        return []
    row, col = cell

    children: List[Board] = []
    for value in board.get_possibilities(Structure.ROW, row, col) or []:
        child = board.clone()
        try:
            child.set_cell(Structure.ROW, row, col, value)
        except ConstraintViolation:
            continue
        children.append(child)
    return children


class SearchEngine:
    """
    saturator のリストを持つ探索エンジンです。

    Parameters
    ----------
    saturators : sequence of Saturator
        呼び出し側が組み立てた saturator の並び。この順番で適用します。
        エンジンは渡されたリストのコピーを持つので、
        後から元のリストを変更しても影響しません。
    """

    def __init__(self, saturators: Sequence[Saturator] = ()) -> None:
        self._saturators: List[Saturator] = list(saturators)

    @property
    def saturators(self) -> Tuple[Saturator, ...]:
        return tuple(self._saturators)

    def _apply_saturators(self, board: Board) -> bool:
        """各 saturator を1回ずつ順に適用し、どれかが盤面を変えたら True を返します。"""
        changed = False
        for saturator in self._saturators:
            if saturator.saturate(board):
                changed = True
        return changed

    def saturate(self, board: Board) -> Board:
        """
        入力盤面の clone に、変化が無くなるか解になるまで saturator を適用して返します。

        途中で解なしと分かった場合も例外は送出せず、その時点の盤面を返します。
        入力盤面は変更しません。
        """
        work = board.clone()
        while True:
            try:
                changed = self._apply_saturators(work)
            except Unsolvable as e:
                logger.debug("saturate stopped: %s", e)
                break
            if work.is_solution() or not changed:
                break
        return work

    def find_first_solution(
        self, board: Board, cancel_event: Optional[threading.Event] = None
    ) -> SearchResult:
        """
        探索順で最初に見つかった解を返します。

        解が無ければ status=NO_SOLUTION、キャンセルされたら status=CANCELLED。
        """
        return self._search(board.clone(), limit=1, cancel_event=cancel_event)

    def find_all_solutions(
        self,
        board: Board,
        cancel_event: Optional[threading.Event] = None,
        limit: Optional[int] = None,
    ) -> SearchResult:
        """
        すべての解を canonical order に並べて返します。

        limit を渡すと、探索順で limit 個の解が見つかった時点で探索を打ち切ります
        （並べ替えはそれらの解の中だけで行います）。
        解が無ければ status=NO_SOLUTION、キャンセルされたら status=CANCELLED。
        """
        return self._search(board.clone(), limit=limit, cancel_event=cancel_event)

    def _search(
        self,
        board: Board,
        limit: Optional[int],
        cancel_event: Optional[threading.Event],
    ) -> SearchResult:
        solutions: List[Board] = []
        stack: List[Board] = [board]
        nodes_visited = 0

        while stack:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("[search] cancelled after %d nodes", nodes_visited)
                return SearchResult(SearchStatus.CANCELLED, [], nodes_visited)

            state = stack.pop()
            nodes_visited += 1

            if nodes_visited % SEARCH_LOG_INTERVAL == 0:
                logger.debug(
                    "[search] nodes_visited = %d, solutions = %d, stack_size = %d",
                    nodes_visited,
                    len(solutions),
                    len(stack),
                )

            try:
                self._apply_saturators(state)
            except Unsolvable:
                # 行き止まりの枝
                continue

            if state.is_solution():
                solutions.append(state)
                if limit is not None and len(solutions) >= limit:
                    break
                continue

            # 小さい値から取り出されるよう、逆順に積む
            stack.extend(reversed(expand_branches(state)))

        if not solutions:
            logger.info("[search] no solution (nodes = %d)", nodes_visited)
            return SearchResult(SearchStatus.NO_SOLUTION, [], nodes_visited)

        solutions.sort(key=lambda b: b.canonical_key())
        logger.info(
            "[search] found %d solution(s) (nodes = %d)", len(solutions), nodes_visited
        )
        return SearchResult(SearchStatus.SOLVED, solutions, nodes_visited)
