import io

import pytest

from einsteinpuzzle.mtrandom import Random
from einsteinpuzzle.possibilities import PUZZLE_SIZE, Possibilities, write_int, write_string
from einsteinpuzzle.rules import (
    BetweenRule,
    DirectionRule,
    NearRule,
    OpenRule,
    ShowOptions,
    UnderRule,
    gen_rule,
    load_rules,
    save_rules,
)


def _puzzle(seed):
    rng = Random(seed)
    rows = []
    for _ in range(PUZZLE_SIZE):
        row = list(range(1, PUZZLE_SIZE + 1))
        for _ in range(30):
            a = rng.gen_int(PUZZLE_SIZE)
            b = rng.gen_int(PUZZLE_SIZE)
            row[a], row[b] = row[b], row[a]
        rows.append(row)
    return rows


def _col_of(puzzle, row, thing):
    return puzzle[row].index(thing)


def test_texts():
    assert NearRule(0, 1, 1, 2).as_text() == "A1 is near to B2"
    assert DirectionRule(2, 3, 0, 4).as_text() == "C3 is from the left of A4"
    assert OpenRule(2, 1, 5).as_text() == "B5 is at column 3"
    assert UnderRule(0, 1, 3, 6).as_text() == "A1 is the same column as D6"
    assert BetweenRule(0, 1, 1, 2, 2, 3).as_text() == "C3 is between A1 and B2"


def test_show_options_and_start():
    assert NearRule(0, 1, 1, 2).show_opts() is ShowOptions.HORIZ
    assert UnderRule(0, 1, 1, 2).show_opts() is ShowOptions.VERT
    assert OpenRule(0, 0, 1).show_opts() is ShowOptions.NOTHING
    assert OpenRule(0, 0, 1).apply_on_start() is True
    assert NearRule(0, 1, 1, 2).apply_on_start() is False


def test_open_rule_apply():
    pos = Possibilities()
    rule = OpenRule(3, 2, 4)
    assert rule.apply(pos) is True
    assert pos.is_defined(3, 2)
    assert pos.get_defined(3, 2) == 4
    assert rule.apply(pos) is False


def test_near_rule_forces_neighbour():
    pos = Possibilities()
    pos.set(0, 0, 1)
    assert NearRule(0, 1, 1, 2).apply(pos) is True
    assert pos.is_defined(1, 1)
    assert pos.get_defined(1, 1) == 2


def test_near_rule_no_change_on_fresh_grid():
    assert NearRule(0, 1, 1, 2).apply(Possibilities()) is False


def test_direction_rule_on_fresh_grid():
    pos = Possibilities()
    assert DirectionRule(0, 1, 1, 2).apply(pos) is True
    assert not pos.is_possible(0, 1, 2)
    assert not pos.is_possible(PUZZLE_SIZE - 1, 0, 1)
    assert pos.is_possible(1, 1, 2)


def test_under_rule_propagates_exclusion():
    pos = Possibilities()
    pos.exclude(0, 0, 1)
    assert UnderRule(0, 1, 2, 3).apply(pos) is True
    assert not pos.is_possible(0, 2, 3)
    assert UnderRule(0, 1, 2, 3).apply(pos) is False


def test_between_rule_excludes_edges():
    pos = Possibilities()
    rule = BetweenRule(0, 1, 1, 2, 2, 3)
    assert rule.apply(pos) is True
    assert not pos.is_possible(0, 2, 3)
    assert not pos.is_possible(PUZZLE_SIZE - 1, 2, 3)
    assert pos.is_possible(2, 2, 3)


@pytest.mark.parametrize("cls", [NearRule, DirectionRule, OpenRule, UnderRule, BetweenRule])
@pytest.mark.parametrize("seed", [1, 7, 42, 1234])
def test_generated_rules_keep_solution_valid(cls, seed):
    puzzle = _puzzle(seed)
    rng = Random(seed + 100)
    for _ in range(10):
        rule = cls.generate(puzzle, rng)
        pos = Possibilities()
        rule.apply(pos)
        assert pos.is_valid(puzzle)


@pytest.mark.parametrize("seed", [3, 5, 11])
def test_generated_relations(seed):
    puzzle = _puzzle(seed)
    rng = Random(seed)
    for _ in range(20):
        d = DirectionRule.generate(puzzle, rng)
        assert _col_of(puzzle, d.row1, d.thing1) < _col_of(puzzle, d.row2, d.thing2)
        n = NearRule.generate(puzzle, rng)
        assert abs(_col_of(puzzle, n.row1, n.thing1) - _col_of(puzzle, n.row2, n.thing2)) == 1
        u = UnderRule.generate(puzzle, rng)
        assert u.row1 != u.row2
        assert _col_of(puzzle, u.row1, u.thing1) == _col_of(puzzle, u.row2, u.thing2)


def test_save_load_round_trip():
    puzzle = _puzzle(9)
    rng = Random(9)
    rules = [gen_rule(puzzle, rng) for _ in range(40)]
    stream = io.BytesIO()
    save_rules(rules, stream)
    stream.seek(0)
    assert load_rules(stream) == rules


def test_open_rule_wire_format():
    stream = io.BytesIO()
    OpenRule(1, 2, 3).save(stream)
    expected = (
        (4).to_bytes(4, "little") + b"open"
        + (1).to_bytes(4, "little") + (2).to_bytes(4, "little") + (3).to_bytes(4, "little")
    )
    assert stream.getvalue() == expected


def test_load_invalid_type():
    stream = io.BytesIO()
    write_int(stream, 1)
    write_string(stream, "bogus")
    stream.seek(0)
    with pytest.raises(ValueError, match="invalid rule type bogus"):
        load_rules(stream)


def test_gen_rule_is_deterministic_for_seed():
    puzzle = _puzzle(2)
    first = [gen_rule(puzzle, Random(77)) for _ in range(3)]
    second = [gen_rule(puzzle, Random(77)) for _ in range(3)]
    assert first == second