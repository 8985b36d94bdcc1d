# -*- coding: utf-8 -*-
"""
sudoku_solver.grid パッケージ

盤面（グリッド）の座標や入力形式に関する処理をまとめたサブパッケージです。
- coords.py : 構造アドレス (structure, major, minor) と (row, col) の相互変換
- parser.py : テキスト / DataFrame から初期盤面への変換
"""
