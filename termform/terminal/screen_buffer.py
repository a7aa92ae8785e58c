"""In-memory terminal: a grid of painted cells plus a scripted key queue.

Used for headless rendering and as the terminal under test. It honours the
same contract as the curses driver, including clipping at the right edge and
failing reads outside the grid.
"""

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple

from ..exceptions import ScreenIOError
from .colors import DEFAULT_COLOR, CellColor
from .driver import CursorShape, LockStates, TerminalDriver
from .keys import KeyStroke

logger = logging.getLogger(__name__)


class ScreenBuffer(TerminalDriver):
    """A ``cols`` x ``rows`` grid of characters and colors."""

    def __init__(self, rows: int = 24, cols: int = 80, fill: str = " "):
        """
        Initialize the ScreenBuffer.

        Args:
            rows: Number of rows (default 24)
            cols: Number of columns (default 80)
            fill: Character every cell starts with

        Raises:
            ValueError: If either dimension is not a positive integer
        """
        if (
            not isinstance(rows, int)
            or not isinstance(cols, int)
            or rows <= 0
            or cols <= 0
        ):
            raise ValueError("rows and cols must be positive integers")

        self.rows = rows
        self.cols = cols
        self._fill = fill
        self.cells: List[List[str]] = [[fill] * cols for _ in range(rows)]
        self.colors: List[List[CellColor]] = [
            [DEFAULT_COLOR] * cols for _ in range(rows)
        ]
        self.cursor_x = 0
        self.cursor_y = 0
        self.cursor_shape = CursorShape.UNDERLINE
        self.locks = LockStates()
        self.beeps = 0
        self._keys: Deque[KeyStroke] = deque()

    def __repr__(self) -> str:
        return f"ScreenBuffer(rows={self.rows}, cols={self.cols})"

    def size(self) -> Tuple[int, int]:
        return (self.cols, self.rows)

    def resize(self, rows: int, cols: int) -> None:
        """Change the grid size, keeping whatever still fits."""
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive integers")
        cells = [[self._fill] * cols for _ in range(rows)]
        colors = [[DEFAULT_COLOR] * cols for _ in range(rows)]
        for y in range(min(rows, self.rows)):
            for x in range(min(cols, self.cols)):
                cells[y][x] = self.cells[y][x]
                colors[y][x] = self.colors[y][x]
        self.rows, self.cols = rows, cols
        self.cells, self.colors = cells, colors
        self.cursor_x = min(self.cursor_x, cols - 1)
        self.cursor_y = min(self.cursor_y, rows - 1)

    def get_cursor(self) -> Tuple[int, int]:
        return (self.cursor_x, self.cursor_y)

    def set_cursor(self, x: int, y: int) -> None:
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise ScreenIOError(
                "Cursor position out of range",
                context={"x": x, "y": y, "size": f"{self.cols}x{self.rows}"},
            )
        self.cursor_x, self.cursor_y = x, y

    def put_str(self, text: str, color: CellColor) -> int:
        y = self.cursor_y
        x = self.cursor_x
        for ch in text:
            if x >= self.cols:
                break
            self.cells[y][x] = ch
            self.colors[y][x] = color
            x += 1
        self.cursor_x = min(x, self.cols - 1)
        return x

    def read_cell(self, x: int, y: int) -> str:
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise ScreenIOError(
                "Cell is outside the terminal", context={"x": x, "y": y}
            )
        return self.cells[y][x]

    def clear(self, color: CellColor) -> None:
        for y in range(self.rows):
            for x in range(self.cols):
                self.cells[y][x] = " "
                self.colors[y][x] = color
        self.cursor_x = self.cursor_y = 0

    def set_cursor_shape(self, shape: CursorShape) -> None:
        self.cursor_shape = shape

    def feed_keys(self, keys: Iterable[KeyStroke]) -> None:
        """Queue keystrokes for :meth:`read_key`."""
        self._keys.extend(keys)

    def read_key(self) -> KeyStroke:
        if not self._keys:
            raise ScreenIOError("No keystroke available from scripted input")
        return self._keys.popleft()

    def key_available(self) -> bool:
        return bool(self._keys)

    def lock_states(self) -> LockStates:
        return self.locks

    def beep(self) -> None:
        self.beeps += 1

    def row_text(self, y: int, start: int = 0, length: Optional[int] = None) -> str:
        """Characters of row ``y`` from ``start``, ``length`` cells long."""
        end = self.cols if length is None else min(self.cols, start + length)
        return "".join(self.cells[y][start:end])

    def color_at(self, x: int, y: int) -> CellColor:
        return self.colors[y][x]

    def to_text(self) -> str:
        """The whole grid as newline-separated rows with trailing blanks kept."""
        return "\n".join("".join(row) for row in self.cells)
