"""Interactive puzzle field: maps pointer input onto candidate changes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import NamedTuple, Optional

from einsteinpuzzle.possibilities import PUZZLE_SIZE, Possibilities

FIELD_OFFSET_X = 12
FIELD_OFFSET_Y = 68
FIELD_GAP_X = 4
FIELD_GAP_Y = 4
FIELD_TILE_WIDTH = 48
FIELD_TILE_HEIGHT = 48

_STEP_X = FIELD_TILE_WIDTH + FIELD_GAP_X
_STEP_Y = FIELD_TILE_HEIGHT + FIELD_GAP_Y


class CellPosition(NamedTuple):
    """Result of locating a point on the field.

    ``found`` tells whether the point hit a cell; ``col`` and ``row`` may be
    set even when it did not (the point lies in a gap next to that cell).
    ``sub_no`` is the 1-based candidate slot, or -1.
    """

    found: bool
    col: int
    row: int
    sub_no: int


class Puzzle:
    """The 6x6 field of candidate icons that the player edits."""

    def __init__(
        self,
        solved: Sequence[Sequence[int]],
        possibilities: Possibilities,
        scale: float = 1.0,
    ) -> None:
        self.solved = solved
        self.possibilities = possibilities
        self.scale = scale
        self.valid = True
        self.win = False
        self.h_col = -1
        self.h_row = -1
        self.sub_h_no = -1
        self._win_command: Optional[Callable[[], None]] = None
        self._fail_command: Optional[Callable[[], None]] = None
        self.on_redraw: Optional[Callable[[int, int], None]] = None
        self.on_sound: Optional[Callable[[str], None]] = None
        self.reset()

    def reset(self) -> None:
        self.valid = True
        self.win = False
        self.h_col = self.h_row = self.sub_h_no = -1

    def _scale_down(self, value: int) -> int:
        return int(value / self.scale)

    def _redraw_cell(self, col: int, row: int) -> None:
        if self.on_redraw is not None:
            self.on_redraw(col, row)

    def _redraw_row(self, row: int) -> None:
        for col in range(PUZZLE_SIZE):
            self._redraw_cell(col, row)

    def _play(self, name: str) -> None:
        if self.on_sound is not None:
            self.on_sound(name)

    def get_cell_no(self, x: int, y: int) -> CellPosition:
        """Locate the cell and candidate slot under a screen point."""
        sx = self._scale_down(x)
        sy = self._scale_down(y)
        inside = (
            FIELD_OFFSET_X <= sx < FIELD_OFFSET_X + _STEP_X * PUZZLE_SIZE
            and FIELD_OFFSET_Y <= sy < FIELD_OFFSET_Y + _STEP_Y * PUZZLE_SIZE
        )
        if not inside:
            return CellPosition(False, -1, -1, -1)

        x = sx - FIELD_OFFSET_X
        y = sy - FIELD_OFFSET_Y

        col = x // _STEP_X
        if col * _STEP_X + FIELD_TILE_WIDTH < x:
            return CellPosition(False, col, -1, -1)
        row = y // _STEP_Y
        if row * _STEP_Y + FIELD_TILE_HEIGHT < y:
            return CellPosition(False, col, row, -1)

        x -= col * _STEP_X
        y -= row * _STEP_Y + FIELD_TILE_HEIGHT // 6
        if y < 0 or y >= (FIELD_TILE_HEIGHT // 3) * 2:
            return CellPosition(True, col, row, -1)
        c_col = x // (FIELD_TILE_WIDTH // 3)
        if c_col >= 3:
            return CellPosition(False, -1, -1, -1)
        c_row = y // (FIELD_TILE_HEIGHT // 3)
        return CellPosition(True, col, row, c_row * 3 + c_col + 1)

    def on_mouse_button_down(self, button: int, x: int, y: int) -> bool:
        """Button 1 places a candidate, button 3 excludes it."""
        found, col, row, element = self.get_cell_no(x, y)
        if not found:
            return False

        possib = self.possibilities
        if not possib.is_defined(col, row):
            if element == -1:
                return False
            if button == 1:
                if possib.is_possible(col, row, element):
                    possib.set(col, row, element)
                    self._play("laser.wav")
            elif button == 3:
                if possib.is_possible(col, row, element):
                    possib.exclude(col, row, element)
                    self._play("whizz.wav")
            self._redraw_row(row)

        if not possib.is_valid(self.solved):
            self.on_fail()
        elif possib.is_solved():
            self.on_victory()
        return True

    def on_mouse_move(self, x: int, y: int) -> bool:
        """Track the highlighted cell and slot; never consumes the event."""
        old = (self.h_col, self.h_row, self.sub_h_no)
        _, self.h_col, self.h_row, self.sub_h_no = self.get_cell_no(x, y)
        if (self.h_col, self.h_row, self.sub_h_no) != old:
            old_col, old_row, _ = old
            if old_col != -1 and old_row != -1:
                self._redraw_cell(old_col, old_row)
            if self.h_col != -1 and self.h_row != -1:
                self._redraw_cell(self.h_col, self.h_row)
        return False

    def on_fail(self) -> None:
        if self._fail_command is not None:
            self._fail_command()

    def on_victory(self) -> None:
        if self._win_command is not None:
            self._win_command()

    def set_commands(
        self,
        win: Optional[Callable[[], None]],
        fail: Optional[Callable[[], None]],
    ) -> None:
        self._win_command = win
        self._fail_command = fail