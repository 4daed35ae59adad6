"""
Die Agony - FastAPI Backend Server

Provides API endpoints to inspect the board and get the puzzle solution.
"""

import logging
from functools import lru_cache

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from die_agony import Board, Found, Solver
from die_agony.config import END_POSITION, START_POSITION

logger = logging.getLogger(__name__)

app = FastAPI(title="Die Agony")
api_router = APIRouter(prefix="/api")

# Allow all origins, the API is read-only
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


# Response models
class BoardResponse(BaseModel):
    values: list[list[int]]
    start: tuple[int, int]
    end: tuple[int, int]


class SolveResponse(BaseModel):
    success: bool
    sum_unvisited: int | None = None
    path: list[tuple[int, int]] = []  # (row, col) of each visited cell, in order
    explanation: str | None = None
    error: str | None = None


@lru_cache(maxsize=1)
def cached_solution():
    """The board never changes, so the search only ever needs to run once."""
    return Solver().solve()


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@api_router.get("/board", response_model=BoardResponse)
def get_board():
    """The board values, with the start and end positions."""
    board = Board()
    return BoardResponse(
        values=board.values.tolist(),
        start=START_POSITION,
        end=END_POSITION,
    )


@api_router.get("/solve", response_model=SolveResponse)
def solve(explain: bool = False):
    """
    Solve the puzzle.

    Args:
        explain: If True, include the textual trace of every roll.
    """
    try:
        solution = cached_solution()
    except Exception as e:
        logger.exception("Solver failed")
        return SolveResponse(success=False, error=str(e))

    if not isinstance(solution, Found):
        return SolveResponse(success=False, error="No solution found")

    path = [(cell.position.row, cell.position.col) for cell in solution.journey.visited_cells]
    return SolveResponse(
        success=True,
        sum_unvisited=solution.sum_unvisited,
        path=path,
        explanation=solution.explanation if explain else None,
    )


# Register the API router
app.include_router(api_router)

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    print("Starting Die Agony server at http://localhost:8000")
    uvicorn.run(app, host="0.0.0.0", port=8000)
