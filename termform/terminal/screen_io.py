"""Screen buffer I/O: the only layer that talks to the terminal driver.

Every operation runs under one re-entrant lock, so the input loop and the
status thread never interleave a cursor move with another thread's paint.
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from ..exceptions import ScreenIOError, TermFormError
from ..utils.logging_utils import log_screen_error
from .colors import DEFAULT_COLOR, CellColor
from .driver import CursorShape, LockStates, TerminalDriver
from .geometry import FieldBounds, ScreenPoint
from .keys import KeyStroke

logger = logging.getLogger(__name__)

KEY_POLL_INTERVAL = 0.02

RenderFunc = Callable[[str, CellColor], int]
"""Paints text at the cursor in a color and returns the new cursor column."""


class ScreenIO:
    """Cursor, cell reads, rectangle fills and rendered writes on one terminal."""

    def __init__(
        self, driver: TerminalDriver, renderer: Optional[RenderFunc] = None
    ) -> None:
        """
        Args:
            driver: Terminal driver to paint on
            renderer: Markup renderer used by :meth:`write_at`; plain text when None
        """
        self.driver = driver
        self._render: RenderFunc = renderer or self._plain_render
        self._lock = threading.RLock()
        self._cursor_shape = CursorShape.UNDERLINE
        driver.set_cursor_shape(self._cursor_shape)

    @contextmanager
    def exclusive(self) -> Iterator["ScreenIO"]:
        """Hold the screen lock across several operations."""
        with self._lock:
            yield self

    @property
    def width(self) -> int:
        with self._lock:
            return self.driver.size()[0]

    @property
    def height(self) -> int:
        with self._lock:
            return self.driver.size()[1]

    def contains(self, point: ScreenPoint) -> bool:
        width, height = self.driver.size()
        return 0 <= point.x < width and 0 <= point.y < height

    def clamp(self, point: ScreenPoint) -> ScreenPoint:
        """Nearest on-screen cell to ``point``."""
        width, height = self.driver.size()
        return ScreenPoint(
            max(0, min(width - 1, point.x)), max(0, min(height - 1, point.y))
        )

    def get_cursor(self) -> ScreenPoint:
        with self._lock:
            x, y = self.driver.get_cursor()
            return ScreenPoint(x, y)

    def set_cursor(self, point: ScreenPoint) -> ScreenPoint:
        """Move the cursor, clamping to the terminal.

        Returns:
            The position actually used
        """
        with self._lock:
            target = self.clamp(point)
            if target != point:
                logger.debug(f"Clamping cursor from {point} to {target}")
            self._call("set_cursor", self.driver.set_cursor, target.x, target.y)
            return target

    def read_char(self, point: ScreenPoint) -> str:
        """
        Read one character already painted on screen.

        Raises:
            ScreenIOError: If the terminal cannot be queried at ``point``
        """
        with self._lock:
            return self._call("read_char", self.driver.read_cell, point.x, point.y)

    def read_line(self, point: ScreenPoint, length: int) -> str:
        """Read ``length`` painted characters to the right of ``point``.

        The read stops at the right edge of the terminal.
        """
        with self._lock:
            end = min(point.x + max(length, 0), self.width)
            return "".join(
                self._call("read_line", self.driver.read_cell, x, point.y)
                for x in range(point.x, end)
            )

    def read_block(self, bounds: FieldBounds) -> List[str]:
        """Read a rectangle of painted characters, one string per row."""
        with self._lock:
            return [
                self.read_line(ScreenPoint(bounds.x, y), bounds.width)
                for y in range(bounds.y, bounds.y + bounds.height)
            ]

    def fill_rect(
        self,
        bounds: FieldBounds,
        char: str = " ",
        color: CellColor = DEFAULT_COLOR,
        restore_cursor: bool = True,
    ) -> None:
        """
        Paint every cell of ``bounds`` with ``char``.

        Cells beyond the current terminal size are skipped.
        """
        if len(char) != 1:
            raise ValueError(f"Fill character must be a single character: {char!r}")
        with self._lock:
            saved = self.get_cursor()
            width, height = self.driver.size()
            left = max(bounds.x, 0)
            right = min(bounds.x + bounds.width, width)
            if right > left:
                top = max(bounds.y, 0)
                bottom = min(bounds.y + bounds.height, height)
                for y in range(top, bottom):
                    self._call("fill_rect", self.driver.set_cursor, left, y)
                    self._call(
                        "fill_rect", self.driver.put_str, char * (right - left), color
                    )
            if restore_cursor:
                self.set_cursor(saved)

    def write_at(
        self, point: ScreenPoint, text: str, color: CellColor = DEFAULT_COLOR
    ) -> int:
        """Position the cursor and hand ``text`` to the renderer.

        Returns:
            The cursor column after rendering
        """
        with self._lock:
            self.set_cursor(point)
            return self._call("write_at", self._render, text, color)

    def clear(self, color: CellColor = DEFAULT_COLOR) -> None:
        with self._lock:
            self._call("clear", self.driver.clear, color)

    @property
    def cursor_shape(self) -> CursorShape:
        return self._cursor_shape

    @cursor_shape.setter
    def cursor_shape(self, shape: CursorShape) -> None:
        with self._lock:
            self._call("cursor_shape", self.driver.set_cursor_shape, shape)
            self._cursor_shape = shape

    @property
    def insert_mode(self) -> bool:
        """Insert mode is shown with the underline cursor."""
        return self._cursor_shape is not CursorShape.BLOCK

    def toggle_insert_mode(self) -> bool:
        """Swap between insert and overwrite; returns the new insert mode."""
        self.cursor_shape = (
            CursorShape.BLOCK if self.insert_mode else CursorShape.UNDERLINE
        )
        logger.debug(f"Insert mode {'on' if self.insert_mode else 'off'}")
        return self.insert_mode

    def read_key(self) -> KeyStroke:
        """Block for the next keystroke.

        The screen lock is not held while waiting, so the status thread keeps
        painting. Drivers that cannot read while another thread paints are
        polled under the lock instead.
        """
        if self.driver.concurrent_read:
            return self._call("read_key", self.driver.read_key)
        while True:
            with self._lock:
                if self._call("read_key", self.driver.key_available):
                    return self._call("read_key", self.driver.read_key)
            time.sleep(KEY_POLL_INTERVAL)

    def key_available(self) -> bool:
        with self._lock:
            return self._call("key_available", self.driver.key_available)

    def lock_states(self) -> LockStates:
        with self._lock:
            return self._call("lock_states", self.driver.lock_states)

    def beep(self) -> None:
        with self._lock:
            self.driver.beep()

    def refresh(self) -> None:
        with self._lock:
            self._call("refresh", self.driver.refresh)

    def _plain_render(self, text: str, color: CellColor) -> int:
        return self.driver.put_str(text, color)

    def _call(self, operation: str, func: Callable, *args):
        try:
            return func(*args)
        except TermFormError:
            raise
        except Exception as e:
            log_screen_error(logger, operation, e)
            raise ScreenIOError(
                f"Terminal {operation} failed",
                context={"operation": operation, "args": args},
                original_exception=e,
            ) from e
