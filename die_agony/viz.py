"""
Visualization utilities for the Die Agony board.
"""

from .board import Board, Position
from .config import BOARD_WIDTH

CELL_WIDTH = 7


def render_board(board: Board, visited: set[Position] | None = None) -> str:
    """
    Render the board as a text grid.
    Visited cells are shown in [brackets], row 0 is printed first.
    """
    visited = visited or set()
    lines = ["Die Agony Board:", "=" * (CELL_WIDTH * BOARD_WIDTH)]

    for row in range(BOARD_WIDTH):
        row_str = []
        for col in range(BOARD_WIDTH):
            cell = board.cell_at(Position(row, col))
            label = f"[{cell.value}]" if cell.position in visited else f" {cell.value} "
            row_str.append(label.rjust(CELL_WIDTH))
        lines.append("".join(row_str))

    lines.append("=" * (CELL_WIDTH * BOARD_WIDTH))
    return "\n".join(lines)


def display_board(board: Board, visited: set[Position] | None = None) -> None:
    """Print the board, marking visited cells."""
    print(render_board(board, visited))


if __name__ == "__main__":
    display_board(Board())
