# -*- coding: utf-8 -*-
"""
ログ出力の設定を行うモジュールです。

初学者向けポイント:
- 探索は長時間かかることがあるので、「どこまで進んだか」を
  ログで確認できるようにしておくと便利です。
- ハンドラの設定は最初の1回だけ行い、以降は同じ logger を使い回します。
"""

from __future__ import annotations

import logging

from .config import LOGGER_NAME, LOG_FORMAT, LOG_LEVEL


def get_logger() -> logging.Logger:
    """
    sudoku_solver 全体で共通して使う logger を返します。

    すでに handler（出力先）が設定されていない場合は、
    標準エラー出力に LOG_LEVEL 以上のログを表示するように設定します。
    """
    logger = logging.getLogger(LOGGER_NAME)

    # まだハンドラが設定されていなければ、簡単な設定を行う
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(LOG_LEVEL)

    return logger
