from typing import List, Optional, Union

import pandas as pd
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from sudoku_solver import solve
from sudoku_solver.config import API_MAX_SOLUTIONS
from sudoku_solver.errors import HTTP_STATUS_BY_ERROR, SudokuError
from sudoku_solver.game import SudokuGame, default_engine
from sudoku_solver.grid.parser import build_board, normalize_grid, parse_shape
from sudoku_solver.logging_utils import get_logger
from sudoku_solver.postprocess.render_result import board_to_dataframe

logger = get_logger()

app = FastAPI()

Cell = Optional[Union[int, str]]


class BoardRequest(BaseModel):
    board: List[List[Cell]]  # 2D array, "." / "" / null for empty cells
    box_rows: int
    box_cols: int


class SolveRequest(BoardRequest):
    find_all: bool = False
    # 全解探索はこの件数 + 1 で打ち切る
    max_solutions: int = Field(API_MAX_SOLUTIONS, ge=1, le=API_MAX_SOLUTIONS)


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, SudokuError):
        status = HTTP_STATUS_BY_ERROR.get(type(e), 400)
        return HTTPException(status_code=status, detail=str(e))
    logger.exception("Unexpected error")
    return HTTPException(status_code=500, detail=str(e))


def _load_grid(request: BoardRequest):
    shape = parse_shape(request.box_rows, request.box_cols)
    # 2D配列をDataFrameに変換
    grid = normalize_grid(pd.DataFrame(request.board, dtype=object), shape)
    return shape, grid


@app.post("/api/solve")
async def api_solve(request: SolveRequest):
    """
    Solver API endpoint.
    Receives grid data (2D array) and returns the first or all solutions.
    """
    try:
        df = pd.DataFrame(request.board, dtype=object)
        return solve(
            df,
            request.box_rows,
            request.box_cols,
            find_all=request.find_all,
            max_solutions=request.max_solutions,
        )
    except Exception as e:
        raise _to_http_error(e) from e


@app.post("/api/hint")
async def api_hint(request: BoardRequest):
    """
    Hint API endpoint.
    Returns one cell (row, col, value) taken from the first solution.
    """
    try:
        shape, grid = _load_grid(request)
        # 矛盾した入力は ConstraintViolation -> 400
        hint = SudokuGame.from_grid(shape, grid).suggest_value()
    except Exception as e:
        raise _to_http_error(e) from e

    if hint is None:
        raise HTTPException(status_code=422, detail="No hint available: board is full or unsolvable")
    return {"row": hint.row, "col": hint.col, "value": hint.value}


@app.post("/api/saturate")
async def api_saturate(request: BoardRequest):
    """
    Saturate API endpoint.
    Applies the propagation rules only (no guessing) and returns the resulting board.
    """
    try:
        shape, grid = _load_grid(request)
        board = default_engine().saturate(build_board(shape, grid))
    except Exception as e:
        raise _to_http_error(e) from e

    return {
        "board": board_to_dataframe(board).values.tolist(),
        "solved": board.is_solution(),
    }
