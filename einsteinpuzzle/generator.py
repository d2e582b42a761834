"""Generation of a solved puzzle together with a minimal set of clues."""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence
from typing import BinaryIO

from einsteinpuzzle.mtrandom import Random
from einsteinpuzzle.possibilities import PUZZLE_SIZE, Possibilities, read_int, write_int
from einsteinpuzzle.rules import Rule, ShowOptions, gen_rule

SolvedPuzzle = list[list[int]]

_SHUFFLE_SWAPS = 30


def _shuffle(row: list[int], rng: Random) -> None:
    for _ in range(_SHUFFLE_SWAPS):
        a = rng.gen_int(PUZZLE_SIZE)
        b = rng.gen_int(PUZZLE_SIZE)
        row[a], row[b] = row[b], row[a]


def can_solve(puzzle: Sequence[Sequence[int]], rules: Iterable[Rule]) -> bool:
    """Return True if the clues alone determine every cell.

    Raises RuntimeError if a clue excludes part of the actual solution.
    """
    rules = list(rules)
    pos = Possibilities()
    changed = True
    while changed:
        changed = False
        for rule in rules:
            if rule.apply(pos):
                changed = True
                if not pos.is_valid(puzzle):
                    raise RuntimeError(
                        "Invalid possibilities after rule " + rule.as_text()
                    )
    return pos.is_solved()


def _gen_rules(puzzle: SolvedPuzzle, rng: Random) -> list[Rule]:
    rules: list[Rule] = []
    texts: set[str] = set()
    done = False
    while not done:
        rule = gen_rule(puzzle, rng)
        text = rule.as_text()
        if text in texts:
            continue
        texts.add(text)
        rules.append(rule)
        done = can_solve(puzzle, rules)
    return rules


def _remove_rules(puzzle: SolvedPuzzle, rules: list[Rule]) -> None:
    possible = True
    while possible:
        possible = False
        for index, rule in enumerate(rules):
            remaining = rules[:index] + rules[index + 1:]
            if can_solve(puzzle, remaining):
                del rules[index]
                possible = True
                break


def gen_puzzle(rng: Random) -> tuple[SolvedPuzzle, list[Rule]]:
    """Create a random solution and a minimal list of clues that solve it."""
    puzzle: SolvedPuzzle = []
    for _ in range(PUZZLE_SIZE):
        row = list(range(1, PUZZLE_SIZE + 1))
        _shuffle(row, rng)
        puzzle.append(row)
    rules = _gen_rules(puzzle, rng)
    _remove_rules(puzzle, rules)
    return puzzle, rules


def open_initial(possib: Possibilities, rules: Iterable[Rule]) -> None:
    """Apply the clues that are revealed before play starts."""
    for rule in rules:
        if rule.apply_on_start():
            rule.apply(possib)


def get_hints_qty(rules: Iterable[Rule]) -> tuple[int, int]:
    """Return the number of vertical and horizontal clues."""
    vert = horiz = 0
    for rule in rules:
        opts = rule.show_opts()
        if opts is ShowOptions.VERT:
            vert += 1
        elif opts is ShowOptions.HORIZ:
            horiz += 1
    return vert, horiz


def save_puzzle(puzzle: Sequence[Sequence[int]], stream: BinaryIO) -> None:
    """Write the solution row by row."""
    for row in puzzle:
        for value in row:
            write_int(stream, value)


def load_puzzle(stream: BinaryIO) -> SolvedPuzzle:
    """Read a solution written by :func:`save_puzzle`."""
    return [[read_int(stream) for _ in range(PUZZLE_SIZE)] for _ in range(PUZZLE_SIZE)]


def get_rule(rules: Sequence[Rule], no: int) -> Rule:
    """Return the clue with the given zero-based number."""
    if 0 <= no < len(rules):
        return rules[no]
    raise IndexError("Rule is not found")


def _format_puzzle(puzzle: Sequence[Sequence[int]]) -> str:
    lines = []
    for index, row in enumerate(puzzle):
        prefix = chr(ord("A") + index)
        lines.append("  ".join(f"{prefix}{value}" for value in row))
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Generate a puzzle and print its solution and clues."""
    parser = argparse.ArgumentParser(description="Generate a logic puzzle.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    rng = Random(args.seed)
    puzzle, rules = gen_puzzle(rng)
    print(_format_puzzle(puzzle))
    for rule in rules:
        print(rule.as_text())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())