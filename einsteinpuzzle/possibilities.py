"""Candidate tracking for a 6x6 logic puzzle grid, plus binary stream helpers."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from typing import BinaryIO

PUZZLE_SIZE = 6

_INT = struct.Struct("<i")


def write_int(stream: BinaryIO, value: int) -> None:
    """Write a 32-bit little-endian signed integer."""
    stream.write(_INT.pack(value))


def read_int(stream: BinaryIO) -> int:
    """Read a 32-bit little-endian signed integer."""
    data = stream.read(_INT.size)
    if len(data) != _INT.size:
        raise EOFError("Unexpected end of stream while reading integer")
    return _INT.unpack(data)[0]


def write_string(stream: BinaryIO, value: str) -> None:
    """Write a length-prefixed UTF-8 string."""
    encoded = value.encode("utf-8")
    write_int(stream, len(encoded))
    stream.write(encoded)


def read_string(stream: BinaryIO) -> str:
    """Read a length-prefixed UTF-8 string."""
    length = read_int(stream)
    if length < 0:
        raise ValueError("Negative string length in stream")
    data = stream.read(length)
    if len(data) != length:
        raise EOFError("Unexpected end of stream while reading string")
    return data.decode("utf-8")


class Possibilities:
    """For every cell, the set of elements that may still be placed there.

    Cells are addressed by column and row; elements are numbered from 1.
    """

    def __init__(self) -> None:
        self._pos: list[list[list[int]]] = []
        self.reset()

    @classmethod
    def load(cls, stream: BinaryIO) -> "Possibilities":
        """Read a grid previously written by :meth:`save`."""
        possib = cls()
        for row in range(PUZZLE_SIZE):
            for column in possib._pos:
                column[row] = [read_int(stream) for _ in range(PUZZLE_SIZE)]
        return possib

    def reset(self) -> None:
        """Make every element possible in every cell."""
        self._pos = [
            [list(range(1, PUZZLE_SIZE + 1)) for _ in range(PUZZLE_SIZE)]
            for _ in range(PUZZLE_SIZE)
        ]

    def check_singles(self, row: int) -> None:
        """Propagate cells with one candidate and elements with one cell."""
        pos = self._pos
        while True:
            cells_cnt = [0] * PUZZLE_SIZE
            els_cnt = [0] * PUZZLE_SIZE
            elements = [0] * PUZZLE_SIZE
            el_cells = [0] * PUZZLE_SIZE

            for col, column in enumerate(pos):
                for i, value in enumerate(column[row]):
                    if value:
                        els_cnt[i] += 1
                        el_cells[i] = col
                        cells_cnt[col] += 1
                        elements[col] = i + 1

            changed = False

            # a cell holding a single element that is still allowed elsewhere
            for col in range(PUZZLE_SIZE):
                if cells_cnt[col] == 1 and els_cnt[elements[col] - 1] != 1:
                    e = elements[col] - 1
                    for other, column in enumerate(pos):
                        if other != col:
                            column[row][e] = 0
                    changed = True

            # an element allowed in a single cell that still has other options
            for el in range(PUZZLE_SIZE):
                if els_cnt[el] == 1 and cells_cnt[el_cells[el]] != 1:
                    cell = pos[el_cells[el]][row]
                    for i in range(PUZZLE_SIZE):
                        if i != el:
                            cell[i] = 0
                    changed = True

            if not changed:
                return

    def exclude(self, col: int, row: int, element: int) -> None:
        """Remove an element from a cell's candidates."""
        cell = self._pos[col][row]
        if not cell[element - 1]:
            return
        cell[element - 1] = 0
        self.check_singles(row)

    def set(self, col: int, row: int, element: int) -> None:
        """Place an element in a cell, removing it from the rest of the row."""
        self._pos[col][row] = [
            element if i == element - 1 else 0 for i in range(PUZZLE_SIZE)
        ]
        for other, column in enumerate(self._pos):
            if other != col:
                column[row][element - 1] = 0
        self.check_singles(row)

    def is_possible(self, col: int, row: int, element: int) -> bool:
        return self._pos[col][row][element - 1] == element

    def is_defined(self, col: int, row: int) -> bool:
        """True when exactly one candidate is left in the cell."""
        return sum(1 for value in self._pos[col][row] if value) == 1

    def get_defined(self, col: int, row: int) -> int:
        """Return the first remaining candidate of a cell, or 0 if none."""
        for i, value in enumerate(self._pos[col][row]):
            if value:
                return i + 1
        return 0

    def is_solved(self) -> bool:
        return all(
            self.is_defined(col, row)
            for col in range(PUZZLE_SIZE)
            for row in range(PUZZLE_SIZE)
        )

    def is_valid(self, puzzle: Sequence[Sequence[int]]) -> bool:
        """True when the solution, indexed ``puzzle[row][col]``, is still possible."""
        return all(
            self.is_possible(col, row, puzzle[row][col])
            for row in range(PUZZLE_SIZE)
            for col in range(PUZZLE_SIZE)
        )

    def format(self) -> str:
        """Render the candidates as text, one line per row."""
        lines = []
        for row in range(PUZZLE_SIZE):
            parts = [chr(ord("A") + row), " "]
            for column in self._pos:
                parts.extend(str(v) if v else " " for v in column[row])
                parts.append("   ")
            lines.append("".join(parts))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.format()

    def save(self, stream: BinaryIO) -> None:
        """Write the grid to a binary stream."""
        for row in range(PUZZLE_SIZE):
            for column in self._pos:
                for value in column[row]:
                    write_int(stream, value)