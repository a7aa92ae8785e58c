"""Keystrokes read from the terminal, independent of the driver."""

from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Optional


class Key(Enum):
    """Logical keys the forms engine distinguishes."""

    CHAR = "char"
    """A printable character; the character itself is in ``KeyStroke.char``."""

    ENTER = "enter"
    TAB = "tab"
    BACKSPACE = "backspace"
    DELETE = "delete"
    INSERT = "insert"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ESCAPE = "escape"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"
    UNKNOWN = "unknown"

    @property
    def function_number(self) -> Optional[int]:
        """1-12 for function keys, None otherwise."""
        if self.value.startswith("f") and self.value[1:].isdigit():
            return int(self.value[1:])
        return None

    @property
    def is_function_key(self) -> bool:
        return self.function_number is not None

    @staticmethod
    def function(number: int) -> "Key":
        """Look up F1-F12 by number."""
        if not 1 <= number <= 12:
            raise ValueError(f"Function key number out of range: {number}")
        return Key(f"f{number}")


FUNCTION_KEYS = tuple(Key.function(n) for n in range(1, 13))


class Modifier(Flag):
    """Modifier keys held with a keystroke."""

    NONE = 0
    SHIFT = auto()
    CTRL = auto()
    ALT = auto()


@dataclass(frozen=True)
class KeyStroke:
    """One key press with its modifiers."""

    key: Key
    char: str = ""
    modifiers: Modifier = Modifier.NONE

    @classmethod
    def of_char(cls, char: str, modifiers: Modifier = Modifier.NONE) -> "KeyStroke":
        """Keystroke for a printable character."""
        return cls(Key.CHAR, char, modifiers)

    @property
    def shift(self) -> bool:
        return bool(self.modifiers & Modifier.SHIFT)

    @property
    def ctrl(self) -> bool:
        return bool(self.modifiers & Modifier.CTRL)

    @property
    def alt(self) -> bool:
        return bool(self.modifiers & Modifier.ALT)

    @property
    def is_printable(self) -> bool:
        """A character that may be typed into a field."""
        return (
            self.key is Key.CHAR
            and len(self.char) == 1
            and self.char.isprintable()
            and not (self.ctrl or self.alt)
        )

    def is_char(self, chars: str) -> bool:
        """True for a CHAR keystroke whose character is in ``chars``, any case."""
        return (
            self.key is Key.CHAR
            and len(self.char) == 1
            and self.char.upper() in chars.upper()
        )

    def __str__(self) -> str:
        parts = [
            m.name.title()
            for m in (Modifier.CTRL, Modifier.ALT, Modifier.SHIFT)
            if self.modifiers & m
        ]
        parts.append(repr(self.char) if self.key is Key.CHAR else self.key.name)
        return "+".join(parts)
