import logging

import pytest

from die_agony.board import Board, Cell, Direction, Position
from die_agony.dice import Die
from die_agony.solver import (
    Found,
    Journey,
    MovementOutcome,
    NotFound,
    Solver,
    main,
    try_dice_movement,
)
from die_agony.config import BOARD_WIDTH


START = Cell(0, Position(5, 0))
UP_FROM_START = Cell(5, Position(4, 0))


def start_journey():
    return Journey(die=Die(), turn=0, visited_cells=(START,))


def test_journey_invariants():
    with pytest.raises(ValueError):
        Journey(die=Die(), turn=0, visited_cells=())
    with pytest.raises(ValueError):
        Journey(die=Die(), turn=2, visited_cells=(START,))

    journey = start_journey().extend(Die(top=5), UP_FROM_START)
    assert journey.turn == 1
    assert journey.last_cell == UP_FROM_START
    assert journey.visited_cells == (START, UP_FROM_START)


def test_known_top_matching_score_is_valid():
    outcome, journey = try_dice_movement(Die(top=5), 0, 1, UP_FROM_START, start_journey())
    assert outcome is MovementOutcome.VALID
    assert journey.die == Die(top=5)
    assert journey.last_cell == UP_FROM_START


def test_known_top_wrong_score_is_invalid():
    outcome, journey = try_dice_movement(Die(top=4), 0, 1, UP_FROM_START, start_journey())
    assert outcome is MovementOutcome.INVALID
    assert journey is None


def test_unknown_top_is_inferred():
    outcome, journey = try_dice_movement(Die(), 0, 1, Cell(77, Position(5, 1)), start_journey())
    assert outcome is MovementOutcome.VALID
    assert journey.die.get_top() == 77


def test_unknown_top_inferred_on_later_turn():
    parent = start_journey().extend(Die(top=5), UP_FROM_START)
    # 5 + 2 * 9 == 23
    outcome, journey = try_dice_movement(Die(), 5, 2, Cell(23, Position(4, 1)), parent)
    assert outcome is MovementOutcome.VALID
    assert journey.die.get_top() == 9
    assert journey.turn == 2


def test_unknown_top_negative_inference():
    parent = (
        start_journey()
        .extend(Die(top=5), UP_FROM_START)
        .extend(Die(top=9), Cell(23, Position(4, 1)))
    )
    # 23 + 3 * -9 == -4
    outcome, journey = try_dice_movement(Die(), 23, 3, Cell(-4, Position(4, 2)), parent)
    assert outcome is MovementOutcome.VALID
    assert journey.die.get_top() == -9


def test_unknown_top_not_divisible_is_invalid():
    parent = start_journey().extend(Die(top=5), UP_FROM_START)
    outcome, journey = try_dice_movement(Die(), 5, 2, Cell(24, Position(4, 1)), parent)
    assert outcome is MovementOutcome.INVALID
    assert journey is None


def test_inference_does_not_leak_to_siblings():
    parent = start_journey()
    rolled = parent.die.roll_in(Direction.UP)
    try_dice_movement(rolled, 0, 1, UP_FROM_START, parent)
    assert rolled.get_top() is None
    assert parent.die == Die()


def test_reaching_end_cell_is_a_solution():
    end = Cell(732, Position(0, BOARD_WIDTH - 1))
    outcome, journey = try_dice_movement(Die(), 0, 1, end, start_journey())
    assert outcome is MovementOutcome.SOLUTION
    assert journey.last_cell.is_end_cell()


def test_solver_starts_with_single_journey():
    solver = Solver()
    assert len(solver.journeys) == 1
    journey = solver.journeys[0]
    assert journey.turn == 0
    assert journey.die == Die()
    assert journey.visited_cells == (Board().start_cell(),)


def test_search_bound_gives_not_found():
    assert isinstance(Solver(max_journeys=0).solve(), NotFound)
    assert isinstance(Solver(max_journeys=1).solve(), NotFound)


def test_canonical_board_is_solved(solution):
    assert isinstance(solution, Found)
    assert solution.sum_unvisited == 1935


def test_solution_path_is_orthogonal(solution):
    cells = solution.journey.visited_cells
    assert cells[0] == Board().start_cell()
    assert cells[-1].is_end_cell()
    assert solution.journey.turn == len(cells) - 1
    for earlier, later in zip(cells, cells[1:]):
        Direction.between(earlier.position, later.position)


def test_replay_matches_forward_search(solution):
    journey = solution.journey
    turns = journey.replay()
    assert len(turns) == journey.turn
    for turn, cell in zip(turns, journey.visited_cells[1:]):
        assert turn.score_after == turn.cell_value == cell.value
        assert turn.score_after == turn.score_before + turn.turn * turn.top

    # Rolling the reconstructed die forward ends on the searched die
    die, movements = journey.initial_die()
    for direction in movements:
        die = die.roll_in(direction)
    assert die == journey.die


def test_explanation_has_one_line_per_turn(solution):
    lines = solution.explanation.splitlines()
    assert lines[0].startswith("We started with the following die:")
    assert len(lines) == solution.journey.turn + 1
    assert lines[1].startswith("Turn 1 we rolled the die")


def test_corrupted_journey_is_fatal():
    journey = Journey(die=Die(top=1), turn=1, visited_cells=(START, Cell(452, Position(3, 3))))
    with pytest.raises(RuntimeError):
        journey.explain()


def test_main_prints_sum(monkeypatch, capsys, solution):
    monkeypatch.setattr(Solver, "solve", lambda self: solution)
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.strip() == "The sum of values in the unvisited cells is 1935."


def test_main_explain(monkeypatch, capsys, solution):
    monkeypatch.setattr(Solver, "solve", lambda self: solution)
    assert main(["--explain"]) == 0
    out = capsys.readouterr().out
    assert "Die Agony Board:" in out
    assert solution.explanation in out


def test_main_not_found(monkeypatch, capsys):
    monkeypatch.setattr(Solver, "solve", lambda self: NotFound())
    assert main(["-e"]) == 1
    assert "Oops, no solution found." in capsys.readouterr().out


def test_journey_must_begin_on_start_cell():
    with pytest.raises(ValueError):
        Journey(die=Die(), turn=0, visited_cells=(UP_FROM_START,))


def test_search_bound_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="die_agony.solver"):
        assert isinstance(Solver(max_journeys=1).solve(), NotFound)
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "Gave up after expanding 1 journeys" in warnings[0].getMessage()


def test_inference_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="die_agony.solver"):
        try_dice_movement(Die(), 0, 1, Cell(77, Position(5, 1)), start_journey())
    assert "inferred top=77" in caplog.text


def test_replay_reuses_given_initial_die(solution):
    journey = solution.journey
    assert journey.replay(journey.initial_die()) == journey.replay()
