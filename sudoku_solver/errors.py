# -*- coding: utf-8 -*-
"""
solver 内で使う例外クラスをまとめたモジュールです。
"""


class SudokuError(Exception):
    """Base class for all errors raised by sudoku_solver."""

    pass


class ConstraintViolation(SudokuError):
    """Raised when an assignment or candidate removal contradicts the known constraints."""

    pass


class Unsolvable(SudokuError):
    """Raised by a saturator when propagation proves that no legal assignment exists."""

    pass


class GridFormatError(SudokuError):
    """Raised when a text grid or table cannot be turned into a board."""

    pass


# Mapping of custom exceptions to HTTP status codes
HTTP_STATUS_BY_ERROR = {
    ConstraintViolation: 400,
    GridFormatError: 400,
    Unsolvable: 422,
}
