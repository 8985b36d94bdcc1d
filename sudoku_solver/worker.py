# -*- coding: utf-8 -*-
"""
探索をバックグラウンドのスレッドで実行するモジュールです。

難しい盤面では探索に時間がかかるので、UI などの呼び出し側は
SolveWorker に探索を任せて、自分のスレッドは止めずにおけます。

探索の中断はスレッドを強制終了するのではなく、
threading.Event をセットして探索エンジンに止まってもらう方式です。
エンジンはスタックから状態を1つ取り出すたびにイベントを確認し、
SearchStatus.CANCELLED を返して終了します。
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from .csp.board import Board
from .csp.search import SearchEngine
from .logging_utils import get_logger
from .types import SearchResult

logger = get_logger()

ResultCallback = Callable[[SearchResult], None]


class SolveWorker:
    """
    1本のワーカースレッドで探索を実行します。

    同時に実行できる探索は1つだけです。

    Parameters
    ----------
    engine : SearchEngine
        探索に使うエンジン。
    find_all : bool
        True なら全解探索、False なら最初の解だけを探します。
    """

    def __init__(self, engine: SearchEngine, find_all: bool = False) -> None:
        self.engine = engine
        self.find_all = find_all
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sudoku-solve")
        self._cancel_event = threading.Event()
        self._future: Optional[Future] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        with self._lock:
            return self._future is not None and not self._future.done()

    def start(self, board: Board, callback: Optional[ResultCallback] = None) -> Future:
        """
        探索を開始します。

        board は開始時に clone するので、呼び出し側はすぐに元の盤面を変更してかまいません。
        callback を渡すと、探索が終わったときにワーカースレッド上で結果を渡して呼び出します。
        """
        with self._lock:
            if self._future is not None and not self._future.done():
                raise RuntimeError("A search is already running")

            self._cancel_event = threading.Event()
            work = board.clone()
            self._future = self._executor.submit(self._run, work, self._cancel_event, callback)
            return self._future

    def _run(
        self,
        board: Board,
        cancel_event: threading.Event,
        callback: Optional[ResultCallback],
    ) -> SearchResult:
        if self.find_all:
            result = self.engine.find_all_solutions(board, cancel_event=cancel_event)
        else:
            result = self.engine.find_first_solution(board, cancel_event=cancel_event)

        if callback is not None:
            try:
                callback(result)
            except Exception:
                logger.exception("Solve callback failed")
        return result

    def cancel(self) -> None:
        """実行中の探索に中断を依頼します。探索していなければ何もしません。"""
        self._cancel_event.set()

    def result(self, timeout: Optional[float] = None) -> Optional[SearchResult]:
        """最後に開始した探索の結果を待って返します。開始していなければ None。"""
        with self._lock:
            future = self._future
        if future is None:
            return None
        return future.result(timeout=timeout)

    def shutdown(self) -> None:
        """実行中の探索をキャンセルしてワーカースレッドを終了します。"""
        self.cancel()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "SolveWorker":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
