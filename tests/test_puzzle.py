import pytest

from einsteinpuzzle.possibilities import PUZZLE_SIZE, Possibilities
from einsteinpuzzle.puzzle import (
    FIELD_OFFSET_X,
    FIELD_OFFSET_Y,
    FIELD_TILE_HEIGHT,
    FIELD_TILE_WIDTH,
    Puzzle,
)

SOLVED = [list(range(1, PUZZLE_SIZE + 1)) for _ in range(PUZZLE_SIZE)]
SLOT = FIELD_TILE_WIDTH // 3


def slot_point(col, row, sub_no):
    """A point inside candidate slot sub_no of a cell (unscaled)."""
    c_row, c_col = divmod(sub_no - 1, 3)
    x = FIELD_OFFSET_X + col * (FIELD_TILE_WIDTH + 4) + c_col * SLOT + 2
    y = FIELD_OFFSET_Y + row * (FIELD_TILE_HEIGHT + 4) + FIELD_TILE_HEIGHT // 6 + c_row * SLOT + 2
    return x, y


@pytest.fixture
def puzzle():
    return Puzzle(SOLVED, Possibilities(), 1.0)


@pytest.mark.parametrize("col,row,sub", [(0, 0, 1), (2, 3, 5), (5, 5, 6), (4, 1, 3)])
def test_get_cell_no_slots(puzzle, col, row, sub):
    result = puzzle.get_cell_no(*slot_point(col, row, sub))
    assert tuple(result) == (True, col, row, sub)


def test_get_cell_no_outside(puzzle):
    assert tuple(puzzle.get_cell_no(0, 0)) == (False, -1, -1, -1)


def test_get_cell_no_top_strip_has_no_slot(puzzle):
    result = puzzle.get_cell_no(FIELD_OFFSET_X + 5, FIELD_OFFSET_Y + 1)
    assert tuple(result) == (True, 0, 0, -1)


def test_scaled_coordinates_match(puzzle):
    scaled = Puzzle(SOLVED, Possibilities(), 2.0)
    x, y = slot_point(3, 2, 4)
    assert scaled.get_cell_no(x * 2, y * 2) == puzzle.get_cell_no(x, y)


def test_left_click_places_element_and_sounds(puzzle):
    sounds, redrawn = [], []
    puzzle.on_sound = sounds.append
    puzzle.on_redraw = lambda c, r: redrawn.append((c, r))
    assert puzzle.on_mouse_button_down(1, *slot_point(1, 0, 2))
    assert puzzle.possibilities.is_defined(1, 0)
    assert puzzle.possibilities.get_defined(1, 0) == 2
    assert sounds == ["laser.wav"]
    assert redrawn == [(c, 0) for c in range(PUZZLE_SIZE)]


def test_right_click_excludes(puzzle):
    sounds = []
    puzzle.on_sound = sounds.append
    assert puzzle.on_mouse_button_down(3, *slot_point(0, 0, 4))
    assert not puzzle.possibilities.is_possible(0, 0, 4)
    assert sounds == ["whizz.wav"]


def test_click_outside_is_ignored(puzzle):
    assert puzzle.on_mouse_button_down(1, 0, 0) is False


def test_click_on_strip_of_open_cell_is_ignored(puzzle):
    assert puzzle.on_mouse_button_down(1, FIELD_OFFSET_X + 5, FIELD_OFFSET_Y + 1) is False


def test_wrong_move_calls_fail(puzzle):
    calls = []
    puzzle.set_commands(lambda: calls.append("win"), lambda: calls.append("fail"))
    puzzle.on_mouse_button_down(1, *slot_point(0, 0, 2))
    assert calls == ["fail"]


def test_solved_grid_calls_victory():
    possib = Possibilities()
    for row in range(PUZZLE_SIZE):
        for col in range(PUZZLE_SIZE):
            possib.set(col, row, SOLVED[row][col])
    puzzle = Puzzle(SOLVED, possib, 1.0)
    calls = []
    puzzle.set_commands(lambda: calls.append("win"), lambda: calls.append("fail"))
    assert puzzle.on_mouse_button_down(1, *slot_point(0, 0, 1))
    assert calls == ["win"]


def test_mouse_move_tracks_highlight(puzzle):
    redrawn = []
    puzzle.on_redraw = lambda c, r: redrawn.append((c, r))
    assert puzzle.on_mouse_move(*slot_point(2, 1, 3)) is False
    assert (puzzle.h_col, puzzle.h_row, puzzle.sub_h_no) == (2, 1, 3)
    assert redrawn == [(2, 1)]
    puzzle.on_mouse_move(*slot_point(4, 4, 1))
    assert redrawn == [(2, 1), (2, 1), (4, 4)]


def test_reset_clears_highlight(puzzle):
    puzzle.on_mouse_move(*slot_point(2, 1, 3))
    puzzle.reset()
    assert (puzzle.h_col, puzzle.h_row, puzzle.sub_h_no) == (-1, -1, -1)
    assert puzzle.valid and not puzzle.win