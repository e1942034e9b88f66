import itertools
import os
import sys

import pytest

# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from kadastr_model import (
    PuzzleBoard, Cell, CELL_OCCUPIED, CELL_BLOCKED, CELL_EMPTY, OUT_OF_BOUNDS,
)
from tests.test_utils import (
    level_one, column_regions_level, expected_footprint, house_state, format_board,
    LEVEL_ONE_SOLUTION,
)


@pytest.mark.parametrize("pos", [(0, 0), (3, 4), (7, 7), (0, 7), (4, 2), (6, 5)])
def test_single_house_blocks_exactly_its_footprint(pos):
    level = level_one()
    board = PuzzleBoard(level)
    r, c = pos

    res = board.place_house(r, c)

    assert res.ok and res.error is None
    expected = expected_footprint(level, r, c) - {(r, c)}
    assert board.blocked == expected, format_board(board)
    assert res.newly_blocked == expected
    assert res.total_placed == 1


def test_footprint_includes_neighbours_row_column_and_region():
    level = level_one()
    board = PuzzleBoard(level)
    fp = board.footprint(3, 5)
    assert {(2, 4), (2, 6), (4, 4), (4, 6)} <= fp
    assert all((3, c) in fp for c in range(8))
    assert all((r, 5) in fp for r in range(8))
    region = level.region_at(3, 5)
    assert all((r, c) in fp for r in range(8) for c in range(8) if level.region_at(r, c) == region)
    assert fp == expected_footprint(level, 3, 5)


def test_corner_footprint_stays_in_bounds():
    board = PuzzleBoard(column_regions_level([0, 2, 4, 6, 1, 3, 5, 7]))
    fp = board.footprint(0, 0)
    assert all(0 <= r < 8 and 0 <= c < 8 for r, c in fp)
    assert (1, 1) in fp
    assert len(fp) == 16  # row 0, column 0 (also its region), plus (1, 1)


def test_place_on_occupied_cell_fails():
    board = PuzzleBoard(level_one())
    board.place_house(0, 0)
    res = board.place_house(0, 0)
    assert not res.ok
    assert res.error == CELL_OCCUPIED
    assert board.placed_count() == 1


def test_place_on_blocked_cell_fails_without_changes():
    board = PuzzleBoard(level_one())
    board.place_house(0, 0)
    blocked_before = set(board.blocked)

    res = board.place_house(0, 5)

    assert not res.ok
    assert res.error == CELL_BLOCKED
    assert board.blocked == blocked_before
    assert not board.has_house(0, 5)


def test_remove_from_empty_cell_fails():
    board = PuzzleBoard(level_one())
    res = board.remove_house(2, 2)
    assert not res.ok
    assert res.error == CELL_EMPTY
    assert res.total_placed == 0


def test_out_of_bounds_is_reported():
    board = PuzzleBoard(level_one())
    assert board.place_house(8, 0).error == OUT_OF_BOUNDS
    assert board.remove_house(-1, 3).error == OUT_OF_BOUNDS
    assert board.can_place(0, 8) is False
    assert board.find_blocking_house(9, 9) is None


def test_can_place_tracks_houses_and_blocks():
    board = PuzzleBoard(level_one())
    assert board.can_place(0, 0)
    board.place_house(0, 0)
    assert not board.can_place(0, 0)
    assert not board.can_place(1, 1)
    assert board.can_place(1, 4)


def test_house_cell_is_never_reported_blocked():
    board = PuzzleBoard(column_regions_level([0, 2, 4, 6, 1, 3, 5, 7]))
    board.place_house(0, 0)
    board.place_house(2, 2)
    assert not board.is_blocked(0, 0)
    assert not board.is_blocked(2, 2)
    assert (0, 0) in board.footprint(0, 0)


def test_placement_only_grows_blocked_set():
    board = PuzzleBoard(level_one())
    before = set()
    for r, c in enumerate(LEVEL_ONE_SOLUTION):
        res = board.place_house(r, c)
        assert res.ok, format_board(board)
        assert before <= board.blocked
        before = set(board.blocked)


@pytest.mark.parametrize("order", [[0, 1, 2, 3, 4, 5, 6, 7], [7, 3, 5, 0, 6, 2, 1, 4]])
def test_removal_only_shrinks_blocked_set(order):
    level = level_one()
    board = PuzzleBoard(level)
    for r, c in enumerate(LEVEL_ONE_SOLUTION):
        board.place_house(r, c)

    for r in order:
        before = set(board.blocked)
        res = board.remove_house(r, LEVEL_ONE_SOLUTION[r])
        assert res.ok
        assert board.blocked <= before
        remaining = [h.cell for h in board.houses()]
        justified = set()
        for h in remaining:
            justified |= expected_footprint(level, h.row, h.col)
        justified -= {h.pos for h in remaining}
        assert board.blocked == justified

    assert board.blocked == set()
    assert board.placed_count() == 0


def test_remove_then_replace_restores_state():
    board = PuzzleBoard(level_one())
    board.place_house(0, 0)
    board.place_house(1, 4, is_hint=True)
    board.place_house(2, 7)
    blocked = set(board.blocked)
    houses = house_state(board)

    board.remove_house(1, 4)
    board.place_house(1, 4, is_hint=True)

    assert board.blocked == blocked
    assert house_state(board) == houses


def test_complete_board_is_a_valid_solution():
    level = level_one()
    board = PuzzleBoard(level)
    for r, c in enumerate(LEVEL_ONE_SOLUTION):
        assert board.place_house(r, c).ok

    assert board.is_complete()
    cells = [h.cell for h in board.houses()]
    assert len(cells) == 8
    for a, b in itertools.combinations(cells, 2):
        assert a.row != b.row
        assert a.col != b.col
        assert a.region != b.region
        assert max(abs(a.row - b.row), abs(a.col - b.col)) > 1
    assert board.blocked == {(r, c) for r in range(8) for c in range(8)} - {h.pos for h in cells}


def test_incomplete_board():
    board = PuzzleBoard(level_one())
    for r, c in enumerate(LEVEL_ONE_SOLUTION[:7]):
        board.place_house(r, c)
    assert board.placed_count() == 7
    assert not board.is_complete()


def test_find_blocking_house_prefers_first_placed():
    board = PuzzleBoard(column_regions_level([0, 2, 4, 6, 1, 3, 5, 7]))
    board.place_house(0, 0)
    board.place_house(2, 2)

    # (0, 2) lies in row 0 of the first house and column 2 of the second
    assert board.find_blocking_house(0, 2) == Cell(0, 0, 0)

    board.remove_house(0, 0)
    board.place_house(0, 0)
    assert board.find_blocking_house(0, 2) == Cell(2, 2, 2)


def test_find_blocking_house_for_free_cell_is_none():
    board = PuzzleBoard(level_one())
    board.place_house(0, 0)
    assert board.find_blocking_house(4, 4) is None
    assert board.find_blocking_house(0, 0) is None


def test_blocked_by_lists_house_marks():
    board = PuzzleBoard(column_regions_level([0, 2, 4, 6, 1, 3, 5, 7]))
    board.place_house(0, 0)
    board.place_house(2, 2)
    marks = board.blocked_by(Cell(0, 0, 0))
    assert marks <= board.blocked
    assert (0, 2) in marks
    assert (1, 1) in marks
    assert (3, 3) not in marks


def test_clear_houses_empties_board():
    board = PuzzleBoard(level_one())
    board.place_house(0, 0)
    board.place_house(1, 4, is_hint=True)
    assert board.clear_houses() == 2
    assert board.placed_count() == 0
    assert board.blocked == set()
    assert board.can_place(0, 1)


def test_hint_flag_is_kept():
    board = PuzzleBoard(level_one())
    board.place_house(0, 0, is_hint=True)
    board.place_house(1, 4)
    assert board.is_hint_house(0, 0)
    assert not board.is_hint_house(1, 4)
    assert not board.is_hint_house(5, 5)


def test_houses_carry_their_plot():
    board = PuzzleBoard(level_one())
    board.place_house(0, 0)
    board.place_house(1, 4)
    assert [h.cell for h in board.houses()] == [Cell(0, 0, 1), Cell(1, 4, 2)]
