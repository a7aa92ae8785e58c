"""The closed set of field kinds and the typed values they produce."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Tuple, Union


class FieldKind(Enum):
    """Every kind of value a form field can hold."""

    STRING = "String"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    UINT8 = "UInt8"
    UINT16 = "UInt16"
    UINT32 = "UInt32"
    UINT64 = "UInt64"
    DECIMAL = "Decimal"
    BOOLEAN = "Boolean"
    DATETIME = "DateTime"

    @property
    def is_signed_integer(self) -> bool:
        return self in _SIGNED_BITS

    @property
    def is_unsigned_integer(self) -> bool:
        return self in _UNSIGNED_BITS

    @property
    def integer_range(self) -> Optional[Tuple[int, int]]:
        """Inclusive ``(min, max)`` for integer kinds, None for the rest."""
        if self in _SIGNED_BITS:
            bits = _SIGNED_BITS[self]
            return (-(2 ** (bits - 1)), 2 ** (bits - 1) - 1)
        if self in _UNSIGNED_BITS:
            return (0, 2 ** _UNSIGNED_BITS[self] - 1)
        return None

    @property
    def python_type(self) -> type:
        if self is FieldKind.STRING:
            return str
        if self is FieldKind.DECIMAL:
            return Decimal
        if self is FieldKind.BOOLEAN:
            return bool
        if self is FieldKind.DATETIME:
            return datetime
        return int


_SIGNED_BITS = {
    FieldKind.INT8: 8,
    FieldKind.INT16: 16,
    FieldKind.INT32: 32,
    FieldKind.INT64: 64,
}

_UNSIGNED_BITS = {
    FieldKind.UINT8: 8,
    FieldKind.UINT16: 16,
    FieldKind.UINT32: 32,
    FieldKind.UINT64: 64,
}

PythonValue = Union[str, int, Decimal, bool, datetime]


@dataclass(frozen=True)
class FieldValue:
    """A value read from a field, tagged with the field's kind."""

    kind: FieldKind
    value: Any

    def __post_init__(self) -> None:
        expected = self.kind.python_type
        # bool is an int subclass; keep the two apart.
        if isinstance(self.value, bool) and expected is not bool:
            raise TypeError(f"{self.kind.value} value cannot be a bool")
        if not isinstance(self.value, expected):
            raise TypeError(
                f"{self.kind.value} value must be {expected.__name__}, "
                f"got {type(self.value).__name__}"
            )

    def __str__(self) -> str:
        return f"{self.kind.value}({self.value!r})"


class BooleanDisplay(Enum):
    """Word pairs a boolean field can show, as ``(true, false)``."""

    YES_NO = ("Yes", "No")
    TRUE_FALSE = ("True", "False")
    ON_OFF = ("On", "Off")
    ONE_ZERO = ("1", "0")
    CHECK_X = ("√", "X")

    @property
    def true_word(self) -> str:
        return self.value[0]

    @property
    def false_word(self) -> str:
        return self.value[1]

    def word(self, state: bool) -> str:
        return self.value[0] if state else self.value[1]
