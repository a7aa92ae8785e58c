"""Terminal driver backed by curses."""

import curses
import glob
import locale
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from ..exceptions import ScreenIOError
from .colors import CellColor, ConsoleColor
from .driver import CursorShape, LockStates, TerminalDriver
from .keys import Key, KeyStroke, Modifier

logger = logging.getLogger(__name__)

LED_ROOT = "/sys/class/leds"

_BASE_COLORS = {
    0: curses.COLOR_BLACK,
    1: curses.COLOR_BLUE,
    2: curses.COLOR_GREEN,
    3: curses.COLOR_CYAN,
    4: curses.COLOR_RED,
    5: curses.COLOR_MAGENTA,
    6: curses.COLOR_YELLOW,
    7: curses.COLOR_WHITE,
}

_CURSES_KEYS = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_IC: Key.INSERT,
    curses.KEY_DC: Key.DELETE,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_ENTER: Key.ENTER,
}

_SHIFTED_KEYS = {
    curses.KEY_BTAB: Key.TAB,
    curses.KEY_SLEFT: Key.LEFT,
    curses.KEY_SRIGHT: Key.RIGHT,
    curses.KEY_SHOME: Key.HOME,
    curses.KEY_SEND: Key.END,
    curses.KEY_SDC: Key.DELETE,
}

# ncurses names xterm modified keys "kLFT5", "kUP3", ...; the digit is the
# xterm modifier code minus one.
_KEYNAME_PREFIXES = {
    "kLFT": Key.LEFT,
    "kRIT": Key.RIGHT,
    "kUP": Key.UP,
    "kDN": Key.DOWN,
    "kHOM": Key.HOME,
    "kEND": Key.END,
    "kDC": Key.DELETE,
    "kIC": Key.INSERT,
    "kNXT": Key.PAGE_DOWN,
    "kPRV": Key.PAGE_UP,
}

_XTERM_MODIFIERS = {
    2: Modifier.SHIFT,
    3: Modifier.ALT,
    4: Modifier.SHIFT | Modifier.ALT,
    5: Modifier.CTRL,
    6: Modifier.CTRL | Modifier.SHIFT,
    7: Modifier.CTRL | Modifier.ALT,
    8: Modifier.CTRL | Modifier.ALT | Modifier.SHIFT,
}

_CONTROL_CHARS = {
    "\t": Key.TAB,
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x08": Key.BACKSPACE,
    "\x7f": Key.BACKSPACE,
    "\x1b": Key.ESCAPE,
}


def translate_key(code, keyname: Optional[str] = None) -> KeyStroke:
    """
    Convert a ``get_wch`` result into a :class:`KeyStroke`.

    Args:
        code: A string for characters or an int for special keys
        keyname: ``curses.keyname`` of an int code, for modified keys

    Returns:
        The keystroke; unrecognised codes map to ``Key.UNKNOWN``
    """
    if isinstance(code, str):
        if code in _CONTROL_CHARS:
            return KeyStroke(_CONTROL_CHARS[code])
        if len(code) == 1 and 1 <= ord(code) <= 26:
            return KeyStroke(Key.CHAR, chr(ord(code) + 64), Modifier.CTRL)
        return KeyStroke.of_char(code)

    if code in _CURSES_KEYS:
        return KeyStroke(_CURSES_KEYS[code])
    if code in _SHIFTED_KEYS:
        return KeyStroke(_SHIFTED_KEYS[code], modifiers=Modifier.SHIFT)
    if curses.KEY_F1 <= code <= curses.KEY_F1 + 11:
        return KeyStroke(Key.function(code - curses.KEY_F1 + 1))
    # ncurses reports Shift+F1..F12 as F13..F24 and Ctrl+F1..F12 as F25..F36
    if curses.KEY_F1 + 12 <= code <= curses.KEY_F1 + 35:
        offset = code - curses.KEY_F1
        modifier = Modifier.SHIFT if offset < 24 else Modifier.CTRL
        return KeyStroke(Key.function(offset % 12 + 1), modifiers=modifier)

    if keyname:
        for prefix, key in _KEYNAME_PREFIXES.items():
            suffix = keyname[len(prefix) :]
            if keyname.startswith(prefix) and suffix.isdigit():
                modifiers = _XTERM_MODIFIERS.get(int(suffix), Modifier.NONE)
                return KeyStroke(key, modifiers=modifiers)

    logger.debug(f"Unrecognised key code {code!r} ({keyname})")
    return KeyStroke(Key.UNKNOWN)


def read_led_state(name: str, root: str = LED_ROOT) -> bool:
    """True when any keyboard LED called ``name`` (e.g. ``capslock``) is lit."""
    for path in glob.glob(f"{root}/*::{name}/brightness"):
        try:
            with open(path, "r", encoding="ascii") as fh:
                if int(fh.read().strip() or "0") > 0:
                    return True
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot read LED state from {path}: {e}")
    return False


class CursesScreen(TerminalDriver):
    """Paint and read a curses window."""

    concurrent_read = False

    def __init__(self, window) -> None:
        self._window = window
        self._pairs: Dict[Tuple[int, int], int] = {}
        self._colors = curses.has_colors()

    def size(self) -> Tuple[int, int]:
        height, width = self._window.getmaxyx()
        return (width, height)

    def get_cursor(self) -> Tuple[int, int]:
        y, x = self._window.getyx()
        return (x, y)

    def set_cursor(self, x: int, y: int) -> None:
        self._window.move(y, x)

    def put_str(self, text: str, color: CellColor) -> int:
        width, height = self.size()
        y, x = self._window.getyx()
        text = text[: max(width - x, 0)]
        if not text:
            return x
        attr = self._attr(color)
        if y == height - 1 and x + len(text) == width:
            # Writing the bottom-right cell scrolls, so the last cell is inserted.
            if len(text) > 1:
                self._window.addstr(y, x, text[:-1], attr)
            self._window.insstr(y, width - 1, text[-1], attr)
            self._window.move(y, width - 1)
            return width
        self._window.addstr(y, x, text, attr)
        return x + len(text)

    def read_cell(self, x: int, y: int) -> str:
        width, height = self.size()
        if not (0 <= x < width and 0 <= y < height):
            raise ScreenIOError(
                "Cell is outside the terminal", context={"x": x, "y": y}
            )
        raw = self._window.instr(y, x, 1)
        encoding = locale.getpreferredencoding(False) or "utf-8"
        return raw.decode(encoding, errors="replace")[:1] or " "

    def clear(self, color: CellColor) -> None:
        self._window.bkgd(" ", self._attr(color))
        self._window.erase()
        self._window.move(0, 0)

    def set_cursor_shape(self, shape: CursorShape) -> None:
        visibility = {
            CursorShape.HIDDEN: 0,
            CursorShape.UNDERLINE: 1,
            CursorShape.BLOCK: 2,
        }[shape]
        try:
            curses.curs_set(visibility)
        except curses.error as e:
            logger.debug(f"Terminal cannot show cursor shape {shape.value}: {e}")

    def read_key(self) -> KeyStroke:
        self._window.refresh()
        code = self._window.get_wch()
        if code == "\x1b" and self.key_available():
            follow = self._window.get_wch()
            stroke = translate_key(follow, self._keyname(follow))
            return KeyStroke(stroke.key, stroke.char, stroke.modifiers | Modifier.ALT)
        if code == curses.KEY_RESIZE:
            curses.update_lines_cols()
        return translate_key(code, self._keyname(code))

    def key_available(self) -> bool:
        self._window.nodelay(True)
        try:
            code = self._window.get_wch()
        except curses.error:
            return False
        finally:
            self._window.nodelay(False)
        if isinstance(code, str):
            curses.unget_wch(code)
        else:
            curses.ungetch(code)
        return True

    def lock_states(self) -> LockStates:
        return LockStates(
            num_lock=read_led_state("numlock"),
            caps_lock=read_led_state("capslock"),
            scroll_lock=read_led_state("scrolllock"),
        )

    def beep(self) -> None:
        curses.beep()

    def refresh(self) -> None:
        self._window.refresh()

    def _keyname(self, code) -> Optional[str]:
        if isinstance(code, int):
            try:
                return curses.keyname(code).decode("ascii", errors="replace")
            except ValueError:
                return None
        return None

    def _attr(self, color: CellColor) -> int:
        if not self._colors:
            return curses.A_REVERSE if color.back.is_bright else curses.A_NORMAL
        fore, bold = self._curses_color(color.fore)
        back, _ = self._curses_color(color.back)
        key = (fore, back)
        if key not in self._pairs:
            number = len(self._pairs) + 1
            if number >= curses.COLOR_PAIRS:
                logger.debug(f"Out of color pairs, painting {color} with pair 0")
                return curses.A_BOLD if bold else curses.A_NORMAL
            curses.init_pair(number, fore, back)
            self._pairs[key] = number
        return curses.color_pair(self._pairs[key]) | (curses.A_BOLD if bold else 0)

    def _curses_color(self, color: ConsoleColor) -> Tuple[int, bool]:
        base = _BASE_COLORS[color.value % 8]
        if not color.is_bright:
            return base, False
        if curses.COLORS >= 16:
            return base + 8, False
        return base, True


@contextmanager
def open_terminal() -> Iterator[CursesScreen]:
    """Set up curses for form input and restore the terminal afterwards."""
    locale.setlocale(locale.LC_ALL, "")
    stdscr = curses.initscr()
    try:
        curses.noecho()
        curses.cbreak()
        stdscr.keypad(True)
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
        curses.set_escdelay(25)
        yield CursesScreen(stdscr)
    finally:
        stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
