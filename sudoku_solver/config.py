# -*- coding: utf-8 -*-
"""
sudoku_solver 全体で共通して使う設定値をまとめたモジュールです。

実運用時には、ここを編集することで
- 未確定セルを表す番兵値
- 探索に使う saturator（制約伝播ルール）の並び
- 探索ログの出力間隔
- API が返す解の上限数
などを簡単に変更できます。
"""

from __future__ import annotations

from typing import Tuple

# ==== 値の定義域 ===========================================================

# 「まだ値が入っていない」セルを表す番兵値。
# 有効な数字 1..numbers とは絶対に重ならない値にしておきます。
UNSET_CELL: int = -1

# 解の並び替え（canonical order）で、未確定セルを numbers + この値 として扱う。
# UNSET_CELL とは用途が違うので混同しないこと。
UNSET_SORT_OFFSET: int = 1

# ==== テキスト盤面フォーマット =============================================

# テキスト盤面で未確定セルを表すトークン
UNSET_TOKEN: str = "."

# 盤面ファイルとして受け付ける拡張子
SUDOKU_FILE_SUFFIXES: Tuple[str, ...] = (".sud", ".txt")

# ==== 探索関連 =============================================================

# 探索エンジンに登録する saturator の名前と順番。
# 順番は探索の挙動（どの枝をどの順に見るか）に影響します。
DEFAULT_SATURATORS: Tuple[str, ...] = ("naked_single", "hidden_single")

# 探索中、何ノードごとに進捗ログ（DEBUG）を出すか
SEARCH_LOG_INTERVAL: int = 1000

# ==== API 関連 =============================================================

# 全解探索の結果を API で返すときの最大件数。
# これを超えた分は件数だけ返し、盤面は省略します。
API_MAX_SOLUTIONS: int = 1000

# ==== ログ関連 =============================================================

LOGGER_NAME: str = "sudoku_solver"
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
LOG_LEVEL: str = "INFO"
