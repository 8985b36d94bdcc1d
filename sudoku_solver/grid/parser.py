# -*- coding: utf-8 -*-
"""
盤面の入力を内部表現に正規化し、初期盤面を組み立てるモジュールです。

主な役割:
- テキスト盤面（1行目に "box_rows box_cols"、2行目以降に各行のトークン）の読み込み
- pandas.DataFrame の盤面を numpy 配列に変換
- 数字の入ったセルを set_cell() で確定させて SudokuBoard を作る

テキスト盤面の例（4x4、ボックスは 2x2）::

    2 2
    1 2 . .
    . . 1 2
    2 1 . .
    . . 2 1
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config import SUDOKU_FILE_SUFFIXES, UNSET_CELL, UNSET_TOKEN
from ..csp.board import SudokuBoard
from ..errors import ConstraintViolation, GridFormatError
from ..logging_utils import get_logger
from ..types import BoxShape, Structure

logger = get_logger()


def _tokens(line: str) -> list:
    return line.lower().strip().split()


def parse_shape(box_rows: Any, box_cols: Any) -> BoxShape:
    """ボックスの寸法を整数に変換して BoxShape を作ります。"""
    try:
        return BoxShape(int(box_rows), int(box_cols))
    except (TypeError, ValueError) as e:
        raise GridFormatError(f"Invalid box dimensions: {box_rows!r} {box_cols!r}") from e


def parse_token(token: str, shape: BoxShape, row: int = 0, col: int = 0) -> int:
    """
    1つのトークンをセルの値に変換します。

    - "." または空文字 -> UNSET_CELL
    - "1".."numbers"   -> その整数
    """
    if token in ("", UNSET_TOKEN):
        return UNSET_CELL
    try:
        value = int(token)
    except ValueError:
        raise GridFormatError(
            f"Cell ({row}, {col}) has to be an integer or '{UNSET_TOKEN}', got {token!r}"
        ) from None
    if not 1 <= value <= shape.numbers:
        raise GridFormatError(
            f"Cell ({row}, {col}) value {value} is outside 1..{shape.numbers}"
        )
    return value


def rows_to_grid(rows: Sequence[Sequence[str]], shape: BoxShape) -> np.ndarray:
    """
    トークンの2次元リストを、値の入った2次元 numpy 配列に変換します。

    行数・列数が numbers と一致しない場合は GridFormatError。
    """
    n = shape.numbers
    if len(rows) != n:
        raise GridFormatError(f"Expected {n} rows, got {len(rows)}")

    grid = np.full((n, n), UNSET_CELL, dtype=int)
    for i, row in enumerate(rows):
        if len(row) != n:
            raise GridFormatError(f"Row {i} has {len(row)} cells, expected {n}")
        for j, token in enumerate(row):
            grid[i, j] = parse_token(token, shape, i, j)
    return grid


def parse_sudoku_text(text: str) -> Tuple[BoxShape, np.ndarray]:
    """
    テキスト盤面を読み込みます。

    空行は無視します。トークンは大文字小文字を区別しません。

    Returns
    -------
    shape : BoxShape
        1行目から読んだボックスの寸法。
    grid : numpy.ndarray
        shape = (numbers, numbers) の整数配列。未確定セルは UNSET_CELL。
    """
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if not lines:
        raise GridFormatError("Empty sudoku text")

    header = _tokens(lines[0])
    if len(header) != 2:
        raise GridFormatError(f"Header must hold two integers, got {lines[0]!r}")
    shape = parse_shape(header[0], header[1])

    return shape, rows_to_grid([_tokens(ln) for ln in lines[1:]], shape)


def load_sudoku_file(path: str | Path) -> Tuple[BoxShape, np.ndarray]:
    """盤面ファイル（.sud / .txt）を読み込みます。"""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Sudoku file not found: {p}")
    if p.suffix.lower() not in SUDOKU_FILE_SUFFIXES:
        logger.warning("Unexpected sudoku file suffix: %s", p.suffix)

    return parse_sudoku_text(p.read_text(encoding="utf-8"))


def normalize_cell(x: Any) -> str:
    """
    DataFrame の個々のセルの値をトークン文字列に変換します。

    - None / NaN / 空文字 -> "."
    - 3 / 3.0 / "3"      -> "3"
    """
    if x is None:
        return UNSET_TOKEN
    if isinstance(x, float):
        if pd.isna(x):
            return UNSET_TOKEN
        if x.is_integer():
            return str(int(x))

    s = str(x).strip().lower()
    return s or UNSET_TOKEN


def normalize_grid(df: pd.DataFrame, shape: BoxShape) -> np.ndarray:
    """
    DataFrame の盤面を 2次元 numpy 配列に変換します。

    各セルは :func:`normalize_cell` でトークンにしてから
    :func:`parse_token` で値にします。
    """
    rows, cols = df.shape
    tokens = [[normalize_cell(df.iat[i, j]) for j in range(cols)] for i in range(rows)]
    return rows_to_grid(tokens, shape)


def build_board(shape: BoxShape, grid: np.ndarray) -> SudokuBoard:
    """
    値の入ったセルを行優先で set_cell() して初期盤面を作ります。

    Raises
    ------
    ConstraintViolation
        入力の盤面そのものが矛盾している場合。
    """
    board = SudokuBoard(shape.box_rows, shape.box_cols)
    for (row, col), value in np.ndenumerate(grid):
        try:
            board.set_cell(Structure.ROW, row, col, int(value))
        except ConstraintViolation:
            logger.warning("Invalid puzzle: cannot place %d at (%d, %d)", value, row, col)
            raise
    return board


def preset_mask(grid: np.ndarray) -> np.ndarray:
    """あらかじめ数字が入っているセルを True とした bool 配列を返します。"""
    return np.asarray(grid) != UNSET_CELL
