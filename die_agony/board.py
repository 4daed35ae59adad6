"""
Die Agony board model.

Coordinate system:
- (row, col), both zero-based
- row 0 is the TOP row of the printed board, row increases DOWNWARD
- col 0 is the LEFT column, col increases to the right

The die starts on the bottom-left cell (5, 0) and must reach the
top-right cell (0, 5).
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .config import BOARD_VALUES, BOARD_WIDTH, END_POSITION, START_POSITION


class Direction(Enum):
    """Orthogonal movements the die can do on the board, as (row, col) deltas."""
    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)

    @property
    def row_delta(self) -> int:
        return self.value[0]

    @property
    def col_delta(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @classmethod
    def between(cls, start: "Position", end: "Position") -> "Direction":
        """Direction of a single orthogonal step from start to end.

        Raises ValueError if the two positions are not orthogonal neighbors.
        """
        delta = (end.row - start.row, end.col - start.col)
        for direction in cls:
            if direction.value == delta:
                return direction
        raise ValueError(
            f"die has to move orthogonally, but got {start} -> {end}"
        )


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Position:
    """A cell position on the board."""
    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_WIDTH and 0 <= self.col < BOARD_WIDTH

    def neighbor(self, direction: Direction) -> "Position":
        """Neighbor position in the given direction (may be off the board)."""
        return Position(self.row + direction.row_delta, self.col + direction.col_delta)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


@dataclass(frozen=True)
class Cell:
    """A board cell: the value printed on it, and where it is."""
    value: int
    position: Position

    def is_start_cell(self) -> bool:
        return self.position == Position(*START_POSITION)

    def is_end_cell(self) -> bool:
        return self.position == Position(*END_POSITION)


class Board:
    """The fixed 6x6 numbered board (read-only)."""

    def __init__(self):
        values = np.array(BOARD_VALUES, dtype=np.int16)
        if values.shape != (BOARD_WIDTH, BOARD_WIDTH):
            raise ValueError(f"Board must be {BOARD_WIDTH}x{BOARD_WIDTH}, got {values.shape}")
        values.setflags(write=False)
        self.values = values

    def cell_at(self, position: Position) -> Cell:
        """Get the cell at a position. Raises ValueError outside the board."""
        if not position.in_bounds():
            raise ValueError(f"No cell at {position}")
        return Cell(int(self.values[position.row, position.col]), position)

    def start_cell(self) -> Cell:
        return self.cell_at(Position(*START_POSITION))

    def end_cell(self) -> Cell:
        return self.cell_at(Position(*END_POSITION))

    def move_in(self, cell: Cell, direction: Direction) -> Cell | None:
        """Neighboring cell in the given direction, or None if it falls off the board."""
        position = cell.position.neighbor(direction)
        if not position.in_bounds():
            return None
        return self.cell_at(position)

    def move_up(self, cell: Cell) -> Cell | None:
        return self.move_in(cell, Direction.UP)

    def move_right(self, cell: Cell) -> Cell | None:
        return self.move_in(cell, Direction.RIGHT)

    def move_down(self, cell: Cell) -> Cell | None:
        return self.move_in(cell, Direction.DOWN)

    def move_left(self, cell: Cell) -> Cell | None:
        return self.move_in(cell, Direction.LEFT)

    def cells(self) -> list[Cell]:
        """All 36 cells, row by row."""
        return [
            self.cell_at(Position(row, col))
            for row in range(BOARD_WIDTH)
            for col in range(BOARD_WIDTH)
        ]

    def total(self) -> int:
        # int16 would overflow on larger boards
        return int(self.values.sum(dtype=np.int64))

    def compute_sum_of_unvisited_cells(self, visited: set[Position]) -> int:
        """Sum of the values of all cells whose position is not in visited."""
        mask = np.ones(self.values.shape, dtype=bool)
        for position in visited:
            if position.in_bounds():
                mask[position.row, position.col] = False
        return int(self.values[mask].sum(dtype=np.int64))
