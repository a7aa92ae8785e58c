"""Terminal layer: drivers, geometry, colors, keys and screen buffer I/O.

The curses driver lives in :mod:`termform.terminal.curses_screen` and is not
imported here, so headless use never needs a curses build.
"""

from .colors import CellColor, ConsoleColor
from .driver import CursorShape, LockStates, TerminalDriver
from .geometry import FieldBounds, ScreenPoint
from .keys import FUNCTION_KEYS, Key, KeyStroke, Modifier
from .screen_buffer import ScreenBuffer
from .screen_io import RenderFunc, ScreenIO

__all__ = [
    "CellColor",
    "ConsoleColor",
    "CursorShape",
    "FUNCTION_KEYS",
    "FieldBounds",
    "Key",
    "KeyStroke",
    "LockStates",
    "Modifier",
    "RenderFunc",
    "ScreenBuffer",
    "ScreenIO",
    "ScreenPoint",
    "TerminalDriver",
]
