"""Clues of the logic puzzle: generation, deduction and serialisation."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

from einsteinpuzzle.mtrandom import Random
from einsteinpuzzle.possibilities import (
    PUZZLE_SIZE,
    Possibilities,
    read_int,
    read_string,
    write_int,
    write_string,
)

SolvedPuzzle = Sequence[Sequence[int]]


def _thing_name(row: int, thing: int) -> str:
    return f"{chr(ord('A') + row)}{thing}"


class ShowOptions(enum.Enum):
    """Where a clue is displayed on the board."""

    VERT = "vert"
    HORIZ = "horiz"
    NOTHING = "nothing"


class Rule(ABC):
    """A single clue that narrows down the possibilities."""

    @abstractmethod
    def as_text(self) -> str:
        """Human-readable description of the clue."""

    @abstractmethod
    def apply(self, pos: Possibilities) -> bool:
        """Apply the clue; return True if anything was excluded or set."""

    def apply_on_start(self) -> bool:
        """True for clues that are opened before play starts."""
        return False

    def show_opts(self) -> ShowOptions:
        return ShowOptions.NOTHING

    @abstractmethod
    def save(self, stream: BinaryIO) -> None:
        """Write the clue, prefixed by its type name."""

    def __str__(self) -> str:
        return self.as_text()


@dataclass
class _PairRule(Rule):
    row1: int
    thing1: int
    row2: int
    thing2: int

    rule_type: ClassVar[str] = ""

    @classmethod
    def _read_pair(cls, stream: BinaryIO) -> tuple[int, int, int, int]:
        return (read_int(stream), read_int(stream), read_int(stream), read_int(stream))

    def save(self, stream: BinaryIO) -> None:
        write_string(stream, self.rule_type)
        for value in (self.row1, self.thing1, self.row2, self.thing2):
            write_int(stream, value)


@dataclass
class NearRule(_PairRule):
    """Two things stand in adjacent columns."""

    rule_type: ClassVar[str] = "near"

    @classmethod
    def generate(cls, puzzle: SolvedPuzzle, rng: Random) -> "NearRule":
        col1 = rng.gen_int(PUZZLE_SIZE)
        row1 = rng.gen_int(PUZZLE_SIZE)
        thing1 = puzzle[row1][col1]
        if col1 == 0:
            col2 = 1
        elif col1 == PUZZLE_SIZE - 1:
            col2 = PUZZLE_SIZE - 2
        elif rng.gen_int(2):
            col2 = col1 + 1
        else:
            col2 = col1 - 1
        row2 = rng.gen_int(PUZZLE_SIZE)
        return cls(row1, thing1, row2, puzzle[row2][col2])

    @classmethod
    def load(cls, stream: BinaryIO) -> "NearRule":
        """Read the clue body (after its type name) from a stream."""
        return cls(*cls._read_pair(stream))

    @staticmethod
    def _apply_to_col(
        pos: Possibilities, col: int, near_row: int, near_num: int,
        this_row: int, this_num: int,
    ) -> bool:
        has_left = col > 0 and pos.is_possible(col - 1, near_row, near_num)
        has_right = col < PUZZLE_SIZE - 1 and pos.is_possible(col + 1, near_row, near_num)
        if not has_left and not has_right and pos.is_possible(col, this_row, this_num):
            pos.exclude(col, this_row, this_num)
            return True
        return False

    def _apply_once(self, pos: Possibilities) -> bool:
        changed = False
        for col in range(PUZZLE_SIZE):
            if self._apply_to_col(pos, col, self.row1, self.thing1, self.row2, self.thing2):
                changed = True
            if self._apply_to_col(pos, col, self.row2, self.thing2, self.row1, self.thing1):
                changed = True
        return changed

    def apply(self, pos: Possibilities) -> bool:
        changed = self._apply_once(pos)
        if changed:
            while self._apply_once(pos):
                pass
        return changed

    def as_text(self) -> str:
        return (
            _thing_name(self.row1, self.thing1)
            + " is near to "
            + _thing_name(self.row2, self.thing2)
        )

    def show_opts(self) -> ShowOptions:
        return ShowOptions.HORIZ


@dataclass
class DirectionRule(_PairRule):
    """The first thing stands somewhere to the left of the second."""

    rule_type: ClassVar[str] = "direction"

    @classmethod
    def generate(cls, puzzle: SolvedPuzzle, rng: Random) -> "DirectionRule":
        row1 = rng.gen_int(PUZZLE_SIZE)
        row2 = rng.gen_int(PUZZLE_SIZE)
        col1 = rng.gen_int(PUZZLE_SIZE - 1)
        col2 = rng.gen_int(PUZZLE_SIZE - col1 - 1) + col1 + 1
        return cls(row1, puzzle[row1][col1], row2, puzzle[row2][col2])

    @classmethod
    def load(cls, stream: BinaryIO) -> "DirectionRule":
        """Read the clue body (after its type name) from a stream."""
        return cls(*cls._read_pair(stream))

    def apply(self, pos: Possibilities) -> bool:
        changed = False
        for col in range(PUZZLE_SIZE):
            if pos.is_possible(col, self.row2, self.thing2):
                pos.exclude(col, self.row2, self.thing2)
                changed = True
            if pos.is_possible(col, self.row1, self.thing1):
                break
        for col in reversed(range(PUZZLE_SIZE)):
            if pos.is_possible(col, self.row1, self.thing1):
                pos.exclude(col, self.row1, self.thing1)
                changed = True
            if pos.is_possible(col, self.row2, self.thing2):
                break
        return changed

    def as_text(self) -> str:
        return (
            _thing_name(self.row1, self.thing1)
            + " is from the left of "
            + _thing_name(self.row2, self.thing2)
        )

    def show_opts(self) -> ShowOptions:
        return ShowOptions.HORIZ


@dataclass
class OpenRule(Rule):
    """A thing whose column is revealed at the start."""

    col: int
    row: int
    thing: int

    rule_type: ClassVar[str] = "open"

    @classmethod
    def generate(cls, puzzle: SolvedPuzzle, rng: Random) -> "OpenRule":
        col = rng.gen_int(PUZZLE_SIZE)
        row = rng.gen_int(PUZZLE_SIZE)
        return cls(col, row, puzzle[row][col])

    @classmethod
    def load(cls, stream: BinaryIO) -> "OpenRule":
        return cls(read_int(stream), read_int(stream), read_int(stream))

    def apply(self, pos: Possibilities) -> bool:
        if not pos.is_defined(self.col, self.row):
            pos.set(self.col, self.row, self.thing)
            return True
        return False

    def as_text(self) -> str:
        return f"{_thing_name(self.row, self.thing)} is at column {self.col + 1}"

    def apply_on_start(self) -> bool:
        return True

    def show_opts(self) -> ShowOptions:
        return ShowOptions.NOTHING

    def save(self, stream: BinaryIO) -> None:
        write_string(stream, self.rule_type)
        for value in (self.col, self.row, self.thing):
            write_int(stream, value)


@dataclass
class UnderRule(_PairRule):
    """Two things stand in the same column."""

    rule_type: ClassVar[str] = "under"

    @classmethod
    def generate(cls, puzzle: SolvedPuzzle, rng: Random) -> "UnderRule":
        col = rng.gen_int(PUZZLE_SIZE)
        row1 = rng.gen_int(PUZZLE_SIZE)
        row2 = rng.gen_int(PUZZLE_SIZE)
        while row2 == row1:
            row2 = rng.gen_int(PUZZLE_SIZE)
        return cls(row1, puzzle[row1][col], row2, puzzle[row2][col])

    @classmethod
    def load(cls, stream: BinaryIO) -> "UnderRule":
        """Read the clue body (after its type name) from a stream."""
        return cls(*cls._read_pair(stream))

    def apply(self, pos: Possibilities) -> bool:
        changed = False
        for col in range(PUZZLE_SIZE):
            if not pos.is_possible(col, self.row1, self.thing1) and pos.is_possible(
                col, self.row2, self.thing2
            ):
                pos.exclude(col, self.row2, self.thing2)
                changed = True
            if not pos.is_possible(col, self.row2, self.thing2) and pos.is_possible(
                col, self.row1, self.thing1
            ):
                pos.exclude(col, self.row1, self.thing1)
                changed = True
        return changed

    def as_text(self) -> str:
        return (
            _thing_name(self.row1, self.thing1)
            + " is the same column as "
            + _thing_name(self.row2, self.thing2)
        )

    def show_opts(self) -> ShowOptions:
        return ShowOptions.VERT


@dataclass
class BetweenRule(_PairRule):
    """A centre thing stands between two others, in either order."""

    center_row: int
    center_thing: int

    rule_type: ClassVar[str] = "between"

    @classmethod
    def generate(cls, puzzle: SolvedPuzzle, rng: Random) -> "BetweenRule":
        center_row = rng.gen_int(PUZZLE_SIZE)
        row1 = rng.gen_int(PUZZLE_SIZE)
        row2 = rng.gen_int(PUZZLE_SIZE)
        center_col = rng.gen_int(PUZZLE_SIZE - 2) + 1
        center_thing = puzzle[center_row][center_col]
        if rng.gen_int(2):
            thing1 = puzzle[row1][center_col - 1]
            thing2 = puzzle[row2][center_col + 1]
        else:
            thing1 = puzzle[row1][center_col + 1]
            thing2 = puzzle[row2][center_col - 1]
        return cls(row1, thing1, row2, thing2, center_row, center_thing)

    @classmethod
    def load(cls, stream: BinaryIO) -> "BetweenRule":
        pair = cls._read_pair(stream)
        return cls(*pair, read_int(stream), read_int(stream))

    def save(self, stream: BinaryIO) -> None:
        super().save(stream)
        write_int(stream, self.center_row)
        write_int(stream, self.center_thing)

    def _side_possible(self, pos: Possibilities, col: int, row: int, thing: int) -> bool:
        cr, ct = self.center_row, self.center_thing
        left = col >= 2 and pos.is_possible(col - 1, cr, ct) and pos.is_possible(
            col - 2, row, thing
        )
        right = col < PUZZLE_SIZE - 2 and pos.is_possible(col + 1, cr, ct) and pos.is_possible(
            col + 2, row, thing
        )
        return left or right

    def apply(self, pos: Possibilities) -> bool:
        cr, ct = self.center_row, self.center_thing
        changed = False
        for edge in (0, PUZZLE_SIZE - 1):
            if pos.is_possible(edge, cr, ct):
                changed = True
                pos.exclude(edge, cr, ct)

        while True:
            good_loop = False
            for col in range(1, PUZZLE_SIZE - 1):
                if pos.is_possible(col, cr, ct):
                    fits = (
                        pos.is_possible(col - 1, self.row1, self.thing1)
                        and pos.is_possible(col + 1, self.row2, self.thing2)
                    ) or (
                        pos.is_possible(col - 1, self.row2, self.thing2)
                        and pos.is_possible(col + 1, self.row1, self.thing1)
                    )
                    if not fits:
                        pos.exclude(col, cr, ct)
                        good_loop = True

            for col in range(PUZZLE_SIZE):
                if pos.is_possible(col, self.row2, self.thing2) and not self._side_possible(
                    pos, col, self.row1, self.thing1
                ):
                    pos.exclude(col, self.row2, self.thing2)
                    good_loop = True
                if pos.is_possible(col, self.row1, self.thing1) and not self._side_possible(
                    pos, col, self.row2, self.thing2
                ):
                    pos.exclude(col, self.row1, self.thing1)
                    good_loop = True

            if not good_loop:
                return changed
            changed = True

    def as_text(self) -> str:
        return (
            _thing_name(self.center_row, self.center_thing)
            + " is between "
            + _thing_name(self.row1, self.thing1)
            + " and "
            + _thing_name(self.row2, self.thing2)
        )

    def show_opts(self) -> ShowOptions:
        return ShowOptions.HORIZ


_GENERATORS = (
    (NearRule,) * 4
    + (OpenRule,)
    + (UnderRule,) * 2
    + (DirectionRule,) * 4
    + (BetweenRule,) * 3
)

_RULE_TYPES: dict[str, type] = {
    cls.rule_type: cls
    for cls in (NearRule, OpenRule, UnderRule, DirectionRule, BetweenRule)
}


def gen_rule(puzzle: SolvedPuzzle, rng: Random) -> Rule:
    """Generate a random clue that holds for the solved puzzle."""
    return _GENERATORS[rng.gen_int(len(_GENERATORS))].generate(puzzle, rng)


def save_rules(rules: Sequence[Rule], stream: BinaryIO) -> None:
    """Write a count followed by each clue."""
    write_int(stream, len(rules))
    for rule in rules:
        rule.save(stream)


def load_rules(stream: BinaryIO) -> list[Rule]:
    """Read clues written by :func:`save_rules`."""
    count = read_int(stream)
    rules: list[Rule] = []
    for _ in range(count):
        rule_type = read_string(stream)
        cls = _RULE_TYPES.get(rule_type)
        if cls is None:
            raise ValueError(f"invalid rule type {rule_type}")
        rules.append(cls.load(stream))
    return rules