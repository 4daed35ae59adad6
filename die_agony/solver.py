"""
Die Agony puzzle solver using a breadth-first search.

Each candidate path ("journey") carries its own hypothesis about the die:
faces start unknown, and the first time a face is rolled to the top its
value is inferred from the score rule

    new_score = score + turn * top == value of the entered cell

Journeys that cannot satisfy the rule are dropped on the spot.
"""

import argparse
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from .board import Board, Cell, Direction
from .config import MAX_JOURNEYS, PROGRESS_LOG_INTERVAL
from .dice import Die
from .viz import display_board

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Turn:
    """One roll of a replayed journey."""
    turn: int
    direction: Direction
    top: int
    score_before: int
    score_after: int
    cell_value: int

    def describe(self) -> str:
        return (
            f"Turn {self.turn} we rolled the die {self.direction.name} (top={self.top}). "
            f"Score was {self.score_before}, now is "
            f"`{self.score_before} + ({self.turn} x {self.top}) = {self.score_after}` "
            f"(cell value = {self.cell_value})."
        )


@dataclass(frozen=True)
class Journey:
    """A candidate solution: a path from the start cell and a die hypothesis.

    The journey might not have reached the end cell yet, and the die values
    might only be partially known. visited_cells is never empty, its last
    element is the cell the die currently sits on.
    """
    die: Die
    turn: int
    visited_cells: tuple[Cell, ...]

    def __post_init__(self):
        if not self.visited_cells:
            raise ValueError("A journey must have visited at least one cell")
        if not self.visited_cells[0].is_start_cell():
            raise ValueError(f"A journey must begin on the start cell, not {self.visited_cells[0]}")
        if self.turn != len(self.visited_cells) - 1:
            raise ValueError(
                f"Turn {self.turn} does not match {len(self.visited_cells)} visited cells"
            )

    @property
    def last_cell(self) -> Cell:
        return self.visited_cells[-1]

    def extend(self, die: Die, cell: Cell) -> "Journey":
        """New journey that rolled onto cell, ending with the given die."""
        return Journey(die=die, turn=self.turn + 1, visited_cells=self.visited_cells + (cell,))

    def initial_die(self) -> tuple[Die, list[Direction]]:
        """
        Walk the visited cells backwards to recover the die as it was on the
        start cell, and the directions rolled from start to end.

        Raises RuntimeError if two consecutive cells are not orthogonal
        neighbors, which the search can never produce.
        """
        die = self.die
        movements = []
        later = self.last_cell
        for earlier in reversed(self.visited_cells[:-1]):
            try:
                direction = Direction.between(earlier.position, later.position)
            except ValueError as e:
                raise RuntimeError(f"Corrupted journey: {e}") from e
            # Undo the roll that brought the die from earlier to later
            movements.append(direction)
            die = die.roll_in(direction.opposite)
            later = earlier

        movements.reverse()
        return die, movements

    def replay(self, initial: tuple[Die, list[Direction]] | None = None) -> list[Turn]:
        """Re-apply the rolls forward from the reconstructed initial die.

        Args:
            initial: (die, movements) as returned by initial_die(), computed
                     when not given.
        """
        die, movements = initial if initial is not None else self.initial_die()
        score = self.visited_cells[0].value
        turns = []
        for turn, direction in enumerate(movements, start=1):
            die = die.roll_in(direction)
            top = die.get_top()
            if top is None:
                raise RuntimeError(f"Top face unknown after turn {turn}")
            new_score = score + turn * top
            turns.append(Turn(
                turn=turn,
                direction=direction,
                top=top,
                score_before=score,
                score_after=new_score,
                cell_value=self.visited_cells[turn].value,
            ))
            score = new_score
        return turns

    def explain(self) -> str:
        """Human readable trace: the initial die, then one line per turn."""
        initial = self.initial_die()
        lines = [f"We started with the following die: {initial[0].describe()}"]
        lines.extend(turn.describe() for turn in self.replay(initial))
        return "\n".join(lines)


@dataclass(frozen=True)
class Found:
    sum_unvisited: int
    explanation: str
    journey: Journey | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class NotFound:
    pass


Solution = Found | NotFound


class MovementOutcome(Enum):
    """Possible outcomes when trying to roll the die onto an orthogonal cell."""
    SOLUTION = "solution"  # Valid, and reached the end cell
    VALID = "valid"        # Valid, worth traversing further
    INVALID = "invalid"    # Breaks the score rule


def try_dice_movement(
    die: Die,
    score: int,
    new_turn: int,
    cell: Cell,
    journey: Journey,
) -> tuple[MovementOutcome, Journey | None]:
    """
    Check a single roll against the score rule.

    Two scenarios:
    - The top value of the rolled die is known: the new score must match the
      cell value, otherwise the move is INVALID.
    - The top value is unknown: infer the integral top value giving a score
      equal to the cell value. If no such integer exists the move is INVALID.

    Args:
        die: Die already rolled in the direction of cell
        score: Score before the roll (the value of the current cell)
        new_turn: Turn number of this roll (1-based)
        cell: Cell the die is rolled onto
        journey: Journey the roll extends

    Returns:
        (outcome, new journey or None when INVALID)
    """
    top = die.get_top()
    if top is not None:
        if score + new_turn * top != cell.value:
            return MovementOutcome.INVALID, None
    else:
        score_diff = cell.value - score
        if score_diff % new_turn != 0:
            return MovementOutcome.INVALID, None
        die = die.set_top(score_diff // new_turn)
        logger.debug(
            "Turn %d: inferred top=%d on %s (%d faces known)",
            new_turn, die.get_top(), cell.position, die.known_faces(),
        )

    new_journey = journey.extend(die, cell)
    if cell.is_end_cell():
        return MovementOutcome.SOLUTION, new_journey
    return MovementOutcome.VALID, new_journey


class Solver:
    """Solves the puzzle with a BFS traversal over journeys."""

    def __init__(self, board: Board | None = None, max_journeys: int | None = MAX_JOURNEYS):
        self.board = board if board is not None else Board()
        self.max_journeys = max_journeys
        self.reset()

    def reset(self) -> None:
        """Seed the frontier with an unknown die on the start cell."""
        first_journey = Journey(die=Die(), turn=0, visited_cells=(self.board.start_cell(),))
        # FIFO list of candidate journeys, one of which should be a solution
        self.journeys: deque[Journey] = deque([first_journey])
        self.expanded = 0

    def solve(self) -> Solution:
        """Run the search from a fresh frontier and build the result."""
        self.reset()
        solution_journey = self.find_solution_journey()
        if solution_journey is None:
            return NotFound()

        return Found(
            sum_unvisited=self.compute_sum_of_unvisited_cells(solution_journey),
            explanation=solution_journey.explain(),
            journey=solution_journey,
        )

    def compute_sum_of_unvisited_cells(self, journey: Journey) -> int:
        unique_visited_positions = {cell.position for cell in journey.visited_cells}
        return self.board.compute_sum_of_unvisited_cells(unique_visited_positions)

    def find_solution_journey(self) -> Journey | None:
        """
        Pop journeys in FIFO order and try rolling the die up, right, down and
        left. Valid moves go to the back of the frontier, unless they reach the
        end cell, in which case that journey is returned.
        """
        while self.journeys:
            if self.max_journeys is not None and self.expanded >= self.max_journeys:
                logger.warning(
                    f"Gave up after expanding {self.expanded} journeys "
                    f"({len(self.journeys)} still queued)"
                )
                return None

            journey = self.journeys.popleft()
            self.expanded += 1
            if self.expanded % PROGRESS_LOG_INTERVAL == 0:
                logger.debug(
                    f"Expanded {self.expanded} journeys, turn {journey.turn}, "
                    f"frontier size {len(self.journeys)}"
                )

            last_cell = journey.last_cell
            new_turn = journey.turn + 1

            for direction in Direction:
                cell = self.board.move_in(last_cell, direction)
                if cell is None:
                    continue

                rolled_die = journey.die.roll_in(direction)
                outcome, new_journey = try_dice_movement(
                    rolled_die, last_cell.value, new_turn, cell, journey
                )
                if outcome is MovementOutcome.SOLUTION:
                    logger.info(
                        f"Solution found at turn {new_journey.turn} "
                        f"after expanding {self.expanded} journeys"
                    )
                    return new_journey
                if outcome is MovementOutcome.VALID:
                    self.journeys.append(new_journey)

        return None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Solve the Die Agony puzzle")
    parser.add_argument(
        "-e", "--explain",
        action="store_true",
        help="Print a textual explanation of the solution, if any is found",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    solver = Solver()
    solution = solver.solve()

    if isinstance(solution, NotFound):
        print("Oops, no solution found.")
        return 1

    print(f"The sum of values in the unvisited cells is {solution.sum_unvisited}.")
    if args.explain:
        visited = {cell.position for cell in solution.journey.visited_cells}
        display_board(solver.board, visited)
        print(solution.explanation)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
