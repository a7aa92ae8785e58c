"""Common base class for terminal drivers used by the screen I/O layer."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import NamedTuple, Tuple

from .colors import CellColor
from .keys import KeyStroke


class CursorShape(Enum):
    """Visible cursor shapes; the shape doubles as the insert/overwrite indicator."""

    UNDERLINE = "underline"
    """Insert mode."""

    BLOCK = "block"
    """Overwrite mode."""

    HIDDEN = "hidden"


class LockStates(NamedTuple):
    """Keyboard lock indicators."""

    num_lock: bool = False
    caps_lock: bool = False
    scroll_lock: bool = False


class TerminalDriver(ABC):
    """
    Abstract base class for the terminal a form is painted on.

    Coordinates are ``(x, y)`` with the origin in the top-left cell. Drivers
    do not clamp; :class:`~termform.terminal.screen_io.ScreenIO` does.
    """

    concurrent_read = True
    """Whether ``read_key`` may block while another thread paints."""

    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Return ``(width, height)`` of the terminal in cells."""
        raise NotImplementedError("Subclasses must implement size")

    @abstractmethod
    def get_cursor(self) -> Tuple[int, int]:
        """Return the cursor as ``(x, y)``."""
        raise NotImplementedError("Subclasses must implement get_cursor")

    @abstractmethod
    def set_cursor(self, x: int, y: int) -> None:
        """Move the cursor to ``(x, y)``."""
        raise NotImplementedError("Subclasses must implement set_cursor")

    @abstractmethod
    def put_str(self, text: str, color: CellColor) -> int:
        """
        Paint ``text`` at the cursor and advance it.

        Text running past the right edge is clipped.

        Returns:
            The cursor column after painting
        """
        raise NotImplementedError("Subclasses must implement put_str")

    @abstractmethod
    def read_cell(self, x: int, y: int) -> str:
        """Return the character already painted at ``(x, y)``."""
        raise NotImplementedError("Subclasses must implement read_cell")

    @abstractmethod
    def clear(self, color: CellColor) -> None:
        """Blank the whole terminal and home the cursor."""
        raise NotImplementedError("Subclasses must implement clear")

    @abstractmethod
    def set_cursor_shape(self, shape: CursorShape) -> None:
        raise NotImplementedError("Subclasses must implement set_cursor_shape")

    @abstractmethod
    def read_key(self) -> KeyStroke:
        """Block until the next keystroke is available and return it."""
        raise NotImplementedError("Subclasses must implement read_key")

    @abstractmethod
    def key_available(self) -> bool:
        """Non-blocking check for a pending keystroke."""
        raise NotImplementedError("Subclasses must implement key_available")

    def lock_states(self) -> LockStates:
        """Current keyboard lock indicators; all off when unknown."""
        return LockStates()

    def beep(self) -> None:
        """Audible signal for rejected input."""
        return None

    def refresh(self) -> None:
        """Flush painted cells to the physical terminal."""
        return None
