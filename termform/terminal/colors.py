"""Console color pairs for painting cells."""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

logger = logging.getLogger(__name__)


class ConsoleColor(IntEnum):
    """The sixteen console colors, numbered like the classic console palette."""

    BLACK = 0
    DARK_BLUE = 1
    DARK_GREEN = 2
    DARK_CYAN = 3
    DARK_RED = 4
    DARK_MAGENTA = 5
    DARK_YELLOW = 6
    GRAY = 7
    DARK_GRAY = 8
    BLUE = 9
    GREEN = 10
    CYAN = 11
    RED = 12
    MAGENTA = 13
    YELLOW = 14
    WHITE = 15

    @property
    def is_bright(self) -> bool:
        """Upper half of the palette."""
        return self.value >= 8


@dataclass(frozen=True)
class CellColor:
    """A foreground/background pair applied to painted cells."""

    fore: ConsoleColor = ConsoleColor.GRAY
    back: ConsoleColor = ConsoleColor.BLACK

    @property
    def inverse(self) -> "CellColor":
        """Swap foreground and background."""
        return CellColor(self.back, self.fore)

    def alt(
        self, fore: Optional[ConsoleColor] = None, back: Optional[ConsoleColor] = None
    ) -> "CellColor":
        """Copy of this pair with either side replaced."""
        return CellColor(
            self.fore if fore is None else fore, self.back if back is None else back
        )

    def to_hex(self) -> str:
        """Two hex digits, background first (``"1F"`` is white on dark blue)."""
        return f"{self.back.value:X}{self.fore.value:X}"

    @classmethod
    def from_hex(cls, code: str) -> "CellColor":
        """
        Parse a two-digit hex color code.

        Args:
            code: Background digit followed by foreground digit, e.g. ``"07"``

        Returns:
            The parsed color pair

        Raises:
            ValueError: If the code is not exactly two hex digits
        """
        if len(code) != 2:
            raise ValueError(f"Color code must be two hex digits, got {code!r}")
        try:
            back, fore = int(code[0], 16), int(code[1], 16)
        except ValueError as e:
            raise ValueError(f"Invalid color code {code!r}") from e
        return cls(ConsoleColor(fore), ConsoleColor(back))

    def __str__(self) -> str:
        return f"{self.fore.name}/{self.back.name}"


DEFAULT_COLOR = CellColor()
DATA_COLOR = CellColor(ConsoleColor.WHITE, ConsoleColor.DARK_BLUE)
ACTIVE_COLOR = CellColor(ConsoleColor.YELLOW, ConsoleColor.BLACK)
INVALID_COLOR = CellColor(ConsoleColor.BLACK, ConsoleColor.RED)
DISABLED_COLOR = CellColor(ConsoleColor.DARK_GRAY, ConsoleColor.BLACK)
