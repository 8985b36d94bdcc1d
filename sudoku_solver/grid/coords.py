# -*- coding: utf-8 -*-
"""
構造アドレス (structure, major, minor) と盤面座標 (row, col) を
相互に変換するモジュールです。

行・列・ボックスの3種類の構造を同じ形のアドレスで扱えるので、
制約伝播の処理を「構造の種類」に依存しない書き方にできます。

ボックス番号の振り方
--------------------
ボックスは左上から行優先で 0,1,2,... と番号を振ります。
1つの「ボックス帯」（横に並んだボックスの列）には
numbers / box_cols = box_rows 個のボックスが並ぶので、

    row = (major // box_rows) * box_rows + minor // box_cols
    col = (major %  box_rows) * box_cols + minor %  box_cols

となります。
"""

from __future__ import annotations

from typing import List, Set, Tuple

from ..types import BoxShape, CellCoord, Structure


def in_range(major: int, minor: int, shape: BoxShape) -> bool:
    """(major, minor) がどちらも 0..numbers-1 に収まっているかを返します。"""
    n = shape.numbers
    return 0 <= major < n and 0 <= minor < n


def to_row(struct: Structure, major: int, minor: int, shape: BoxShape) -> int:
    """構造アドレスから行番号を求めます。"""
    if struct is Structure.ROW:
        return major
    if struct is Structure.COL:
        return minor
    if struct is Structure.BOX:
        return (major // shape.box_rows) * shape.box_rows + minor // shape.box_cols
    raise ValueError(f"Unknown structure: {struct!r}")


def to_col(struct: Structure, major: int, minor: int, shape: BoxShape) -> int:
    """構造アドレスから列番号を求めます。"""
    if struct is Structure.ROW:
        return minor
    if struct is Structure.COL:
        return major
    if struct is Structure.BOX:
        return (major % shape.box_rows) * shape.box_cols + minor % shape.box_cols
    raise ValueError(f"Unknown structure: {struct!r}")


def to_box(struct: Structure, major: int, minor: int, shape: BoxShape) -> int:
    """構造アドレスから、そのセルが属するボックス番号を求めます。"""
    if struct is Structure.ROW:
        return (major // shape.box_rows) * shape.box_rows + minor // shape.box_cols
    if struct is Structure.COL:
        return (minor // shape.box_rows) * shape.box_rows + major // shape.box_cols
    if struct is Structure.BOX:
        return major
    raise ValueError(f"Unknown structure: {struct!r}")


def to_box_minor(struct: Structure, major: int, minor: int, shape: BoxShape) -> int:
    """構造アドレスから、ボックス内での通し番号を求めます。"""
    if struct is Structure.ROW:
        return (major % shape.box_rows) * shape.box_cols + minor % shape.box_cols
    if struct is Structure.COL:
        return (minor % shape.box_rows) * shape.box_cols + major % shape.box_cols
    if struct is Structure.BOX:
        return minor
    raise ValueError(f"Unknown structure: {struct!r}")


def to_cell(struct: Structure, major: int, minor: int, shape: BoxShape) -> CellCoord:
    """構造アドレスを (row, col) に変換します。"""
    return to_row(struct, major, minor, shape), to_col(struct, major, minor, shape)


def from_cell(struct: Structure, row: int, col: int, shape: BoxShape) -> Tuple[int, int]:
    """
    (row, col) を、指定した構造の (major, minor) に変換します。

    :func:`to_cell` の逆変換です。
    """
    if struct is Structure.ROW:
        return row, col
    if struct is Structure.COL:
        return col, row
    if struct is Structure.BOX:
        return (
            to_box(Structure.ROW, row, col, shape),
            to_box_minor(Structure.ROW, row, col, shape),
        )
    raise ValueError(f"Unknown structure: {struct!r}")


def structure_cells(struct: Structure, major: int, shape: BoxShape) -> List[CellCoord]:
    """major 番目の構造に含まれるセルを minor 順に列挙します。"""
    return [to_cell(struct, major, minor, shape) for minor in range(shape.numbers)]


def peers(row: int, col: int, shape: BoxShape) -> Set[CellCoord]:
    """(row, col) と同じ行・列・ボックスに属する、自分以外のセルの集合を返します。"""
    ps: Set[CellCoord] = set()
    for struct in Structure:
        major, _ = from_cell(struct, row, col, shape)
        ps.update(structure_cells(struct, major, shape))
    ps.discard((row, col))
    return ps
