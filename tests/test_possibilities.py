import io

import pytest

from einsteinpuzzle.possibilities import (
    PUZZLE_SIZE,
    Possibilities,
    read_int,
    read_string,
    write_int,
    write_string,
)

SOLVED = [list(range(1, PUZZLE_SIZE + 1)) for _ in range(PUZZLE_SIZE)]


def test_initial_everything_possible():
    pos = Possibilities()
    for col in range(PUZZLE_SIZE):
        for row in range(PUZZLE_SIZE):
            assert not pos.is_defined(col, row)
            for el in range(1, PUZZLE_SIZE + 1):
                assert pos.is_possible(col, row, el)
    assert not pos.is_solved()


def test_set_defines_cell_and_clears_row():
    pos = Possibilities()
    pos.set(2, 3, 4)
    assert pos.is_defined(2, 3)
    assert pos.get_defined(2, 3) == 4
    for col in range(PUZZLE_SIZE):
        if col != 2:
            assert not pos.is_possible(col, 3, 4)
    # other rows untouched
    assert pos.is_possible(0, 0, 4)


def test_exclude_down_to_single_propagates():
    pos = Possibilities()
    for el in range(1, PUZZLE_SIZE):
        pos.exclude(0, 0, el)
    assert pos.is_defined(0, 0)
    assert pos.get_defined(0, 0) == PUZZLE_SIZE
    for col in range(1, PUZZLE_SIZE):
        assert not pos.is_possible(col, 0, PUZZLE_SIZE)


def test_element_with_single_cell_is_fixed():
    pos = Possibilities()
    for col in range(1, PUZZLE_SIZE):
        pos.exclude(col, 1, 3)
    assert pos.is_defined(0, 1)
    assert pos.get_defined(0, 1) == 3


def test_exclude_twice_is_harmless():
    pos = Possibilities()
    pos.exclude(1, 1, 2)
    pos.exclude(1, 1, 2)
    assert not pos.is_possible(1, 1, 2)
    assert pos.is_possible(1, 1, 3)


def test_is_valid_and_solved():
    pos = Possibilities()
    assert pos.is_valid(SOLVED)
    for row in range(PUZZLE_SIZE):
        for col in range(PUZZLE_SIZE):
            pos.set(col, row, SOLVED[row][col])
    assert pos.is_solved()
    assert pos.is_valid(SOLVED)


def test_wrong_placement_is_invalid():
    pos = Possibilities()
    pos.set(0, 0, 2)
    assert not pos.is_valid(SOLVED)


def test_reset_restores():
    pos = Possibilities()
    pos.set(0, 0, 1)
    pos.reset()
    assert not pos.is_defined(0, 0)
    assert pos.is_possible(1, 0, 1)


def test_save_load_round_trip():
    pos = Possibilities()
    pos.set(1, 2, 5)
    pos.exclude(3, 4, 2)
    buf = io.BytesIO()
    pos.save(buf)
    assert len(buf.getvalue()) == PUZZLE_SIZE**3 * 4
    buf.seek(0)
    loaded = Possibilities.load(buf)
    assert loaded.format() == pos.format()
    assert loaded.get_defined(1, 2) == 5
    assert not loaded.is_possible(3, 4, 2)


def test_format_layout():
    text = Possibilities().format()
    lines = text.splitlines()
    assert len(lines) == PUZZLE_SIZE
    assert lines[0].startswith("A 123456   123456")
    assert lines[-1].startswith("F ")


def test_format_shows_gaps():
    pos = Possibilities()
    pos.exclude(0, 0, 1)
    assert pos.format().startswith("A  23456   ")


def test_int_round_trip_and_short_read():
    buf = io.BytesIO()
    write_int(buf, -7)
    write_int(buf, 123456)
    buf.seek(0)
    assert read_int(buf) == -7
    assert read_int(buf) == 123456
    with pytest.raises(EOFError):
        read_int(buf)


def test_string_round_trip():
    buf = io.BytesIO()
    write_string(buf, "héllo")
    buf.seek(0)
    assert read_string(buf) == "héllo"


def test_truncated_load_raises():
    with pytest.raises(EOFError):
        Possibilities.load(io.BytesIO(b"\x01\x00"))