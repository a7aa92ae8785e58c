"""Form fields: a string manager plus title, geometry, colors and a typed value.

Each concrete class handles the keys its kind accepts. :func:`create_field`
picks the class from a :class:`FieldKind` through a fixed mapping.
"""

import calendar
import logging
import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Pattern, Tuple, Type, Union

from ..exceptions import BoundsError, FieldDefinitionError
from ..terminal.colors import (
    ACTIVE_COLOR,
    DATA_COLOR,
    DEFAULT_COLOR,
    CellColor,
    ConsoleColor,
)
from ..terminal.geometry import FieldBounds, ScreenPoint
from ..terminal.keys import Key, KeyStroke
from ..terminal.screen_io import ScreenIO
from ..utils.logging_utils import log_input_rejected
from .field_kinds import BooleanDisplay, FieldKind, FieldValue
from .string_manager import CRLF, StringManager

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_CHAR = "_"
DATA_NAME_PATTERN = re.compile(r"^[a-z][A-Za-z0-9_]*$")
PatternLike = Union[str, Pattern[str], None]


def derive_data_name(title: str) -> str:
    """camelCase identifier built from the words of a title.

    ``"First name:"`` becomes ``"firstName"``.
    """
    words = re.findall(r"[A-Za-z0-9]+", title)
    if not words:
        return ""
    head, tail = words[0], words[1:]
    return head[:1].lower() + head[1:] + "".join(w[:1].upper() + w[1:] for w in tail)


def _compile(pattern: PatternLike) -> Optional[Pattern[str]]:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


class Field:
    """One on-screen input control bound to a single typed value."""

    kind: FieldKind = FieldKind.STRING
    value_must_fit = True

    def __init__(
        self,
        screen: ScreenIO,
        title: str,
        value: Any,
        title_location: ScreenPoint,
        bounds: FieldBounds,
        data_name: str = "",
        data_color: Optional[CellColor] = None,
        base_color: Optional[CellColor] = None,
        active_color: Optional[CellColor] = None,
        selected_color: Optional[CellColor] = None,
        filter_pattern: PatternLike = None,
        validation_pattern: PatternLike = None,
        read_only: bool = False,
        template_char: Optional[str] = None,
    ) -> None:
        """
        Build a field.

        Args:
            screen: Screen the field paints on
            title: Prompt shown at ``title_location``; a ``:`` is appended if missing
            value: Initial value, restored by :meth:`revert`
            title_location: Absolute cell of the first title character
            bounds: Absolute rectangle of the input area
            data_name: Key of the value in the form result; derived from the
                title when empty
            data_color: Color of the content
            base_color: Color of the title and the unused cells
            active_color: Color of the title while the field has focus
            selected_color: Color of selected text; inverse data color when None
            filter_pattern: Characters matching this pattern are refused
            validation_pattern: Content must match (``re.search``) to be valid
            read_only: Refuse every edit
            template_char: Filler for unused cells; the form setting when None

        Raises:
            BoundsError: If the bounds or title do not fit on the screen
            FieldDefinitionError: If the title, data name or value is unusable
        """
        if not title or not title.strip():
            raise FieldDefinitionError("Field title cannot be blank")
        title = re.sub(r"[\r\n]+", " ", title).rstrip()
        if not title.endswith(":"):
            title += ":"

        self.screen = screen
        self.title = title
        self.title_location = title_location
        self.bounds = self._adjust_bounds(bounds)
        self._check_geometry()

        self.data_name = data_name or derive_data_name(title)
        if not DATA_NAME_PATTERN.match(self.data_name):
            raise FieldDefinitionError(
                "Invalid data name",
                context={"data_name": self.data_name, "title": title},
            )

        self.data_color = data_color or DATA_COLOR
        self.base_color = base_color or DEFAULT_COLOR
        self.active_color = active_color or ACTIVE_COLOR
        self.selected_color = selected_color or self.data_color.inverse
        self.invalid_color = self.data_color.alt(
            fore=ConsoleColor.WHITE, back=ConsoleColor.DARK_RED
        )
        self.filter_pattern = _compile(filter_pattern)
        self.validation_pattern = _compile(validation_pattern)
        self.template_char = template_char
        self._read_only = read_only
        self._placed: Optional[Tuple[ScreenPoint, int]] = None

        self.manager = StringManager(
            width=self.bounds.width, height=self.bounds.height, read_only=read_only
        )
        self._initial_value = self._check_value(value)
        self._load(self._initial_value)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(data_name={self.data_name!r}, "
            f"bounds={tuple(self.bounds)!r}, text={self.text!r})"
        )

    @property
    def text(self) -> str:
        return self.manager.content

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def multi_line(self) -> bool:
        return self.bounds.height > 1

    @property
    def title_bounds(self) -> FieldBounds:
        return FieldBounds(self.title_location, len(self.title), 1)

    @property
    def initial_value(self) -> Any:
        return self._initial_value

    def contains(self, point: ScreenPoint) -> bool:
        """True for cells of the input area and the cell just past its right edge."""
        return self.bounds.contains(point) or self.bounds.contains(point.offset(-1))

    def overlaps(self, other: "Field") -> bool:
        """True when any input area or title of the two fields share a cell."""
        mine = (self.bounds, self.title_bounds)
        theirs = (other.bounds, other.title_bounds)
        return any(a.overlaps(b) for a in mine for b in theirs)

    @property
    def is_focused(self) -> bool:
        return self.contains(self.screen.get_cursor())

    def focus(self) -> None:
        """Put the cursor on the first cell of the field."""
        self.manager.offset = 0
        self.place_cursor()

    def place_cursor(self) -> None:
        point = self.manager.offset_to_point()
        used = self.screen.set_cursor(self.bounds.location.offset(point.x, point.y))
        self._placed = (used, self.manager.offset)

    def write(self) -> None:
        """Paint the title and the content, leaving the cursor where it was."""
        with self.screen.exclusive():
            self.paint_title(self.is_focused)
            self._render(restore_cursor=True)

    def paint_title(self, active: bool = False) -> None:
        color = self.active_color if active else self.base_color
        with self.screen.exclusive():
            saved = self.screen.get_cursor()
            self.screen.write_at(self.title_location, self.title, color)
            self.screen.set_cursor(saved)

    def process_key_stroke(self, key: KeyStroke, insert_mode: bool = True) -> bool:
        """
        Apply one keystroke at the cursor.

        Args:
            key: The keystroke
            insert_mode: Splice typed characters when True, overwrite when False

        Returns:
            True if the key was accepted, False if the field refused it
        """
        with self.screen.exclusive():
            self.sync_offset()
            accepted = self.handle_key(key, insert_mode)
            self._render(restore_cursor=False)
        if not accepted:
            log_input_rejected(logger, self.data_name, key)
        return accepted

    def handle_key(self, key: KeyStroke, insert_mode: bool) -> bool:
        """Editing behaviour shared by every free-text kind."""
        manager = self.manager
        if key.key is Key.BACKSPACE:
            if manager.offset == 0 and not manager.has_selection:
                return manager.delete_right()
            return manager.delete_left()
        if key.key is Key.DELETE:
            return manager.delete_right()
        if key.key is Key.HOME:
            manager.clear_selection()
            target = 0 if key.ctrl else manager.row_start()
            moved = target != manager.offset
            manager.offset = target
            return moved
        if key.key is Key.END:
            manager.clear_selection()
            target = len(manager) if key.ctrl else manager.row_end()
            moved = target != manager.offset
            manager.offset = target
            return moved
        if key.key in (Key.LEFT, Key.RIGHT):
            delta = -1 if key.key is Key.LEFT else 1
            if key.shift:
                return manager.extend_selection(delta)
            manager.clear_selection()
            return manager.step(delta)
        if key.key is Key.ENTER:
            return self.multi_line and manager.insert(CRLF, insert_mode)
        if key.key is Key.ESCAPE and (key.ctrl or key.alt):
            return manager.clear()
        if key.is_printable:
            if self.in_filter(key.char) or not self.accepts_char(key.char):
                return False
            return manager.insert(key.char, insert_mode)
        return False

    def accepts_char(self, char: str) -> bool:
        """Kind-specific check for a typed character at the current offset."""
        return True

    def in_filter(self, char: str) -> bool:
        if self.filter_pattern is None:
            return False
        return bool(self.filter_pattern.search(char))

    def word_left(self) -> bool:
        with self.screen.exclusive():
            self.sync_offset()
            moved = self.manager.word_left()
            self.place_cursor()
        return moved

    def word_right(self) -> bool:
        with self.screen.exclusive():
            self.sync_offset()
            moved = self.manager.word_right()
            self.place_cursor()
        return moved

    def sync_offset(self) -> None:
        """Move the insertion offset to the cell under the cursor.

        The offset is kept while the cursor is still where the field last put
        it; the one-past cell of a field on the last column is clamped on
        screen and would read back one short.
        """
        cursor = self.screen.get_cursor()
        if self._placed == (cursor, self.manager.offset):
            return
        if self.contains(cursor):
            relative = ScreenPoint(
                cursor.x - self.bounds.location.x, cursor.y - self.bounds.location.y
            )
            self.manager.offset = self.manager.point_to_offset(relative)

    def pattern_match(self, text: Optional[str] = None) -> bool:
        if self.validation_pattern is None:
            return True
        return bool(self.validation_pattern.search(self.text if text is None else text))

    def is_valid_data(self) -> bool:
        """True when the content matches the validation pattern and parses."""
        if not self.pattern_match():
            return False
        try:
            self.parse(self.text)
        except (ValueError, ArithmeticError):
            return False
        return True

    def revert(self) -> None:
        """Restore the creation-time value and repaint."""
        self._load(self._initial_value)
        self.write()

    def to_value(self) -> FieldValue:
        """
        Typed value of the current content.

        Raises:
            ValueError: If the content does not parse as this field's kind
        """
        return FieldValue(self.kind, self.parse(self.text))

    def parse(self, text: str) -> Any:
        return text

    def format_value(self, value: Any) -> str:
        return "" if value is None else str(value)

    def coerce_value(self, value: Any) -> Any:
        """Convert an initial value to this kind's Python type."""
        return "" if value is None else str(value)

    def _check_value(self, value: Any) -> Any:
        try:
            value = self.coerce_value(value)
            FieldValue(self.kind, value)
            formatted = self.format_value(value)
        except (TypeError, ValueError, ArithmeticError) as e:
            raise FieldDefinitionError(
                f"Invalid initial value for {self.kind.value} field",
                context={"data_name": self.data_name, "value": value},
                original_exception=e,
            ) from e
        fitted = StringManager(formatted, self.bounds.width, self.bounds.height)
        if fitted.content != fitted._normalize(formatted):
            if self.value_must_fit:
                raise FieldDefinitionError(
                    "Initial value does not fit the field",
                    context={"data_name": self.data_name, "text": formatted},
                )
            logger.debug(f"Initial value of {self.data_name} truncated to fit")
        return value

    def _load(self, value: Any) -> None:
        self.manager.content = self.format_value(value)
        self.manager.offset = 0

    def _adjust_bounds(self, bounds: FieldBounds) -> FieldBounds:
        return bounds

    def _check_geometry(self) -> None:
        width, height = self.screen.width, self.screen.height
        context = {
            "title": self.title,
            "bounds": self.bounds,
            "title_at": self.title_location,
            "screen": f"{width}x{height}",
        }
        if self.bounds.width < 1 or self.bounds.height < 1:
            raise BoundsError("Field dimensions must be positive", context=context)
        if not self.bounds.fits_within(width, height):
            raise BoundsError("Field does not fit on the screen", context=context)
        if not self.title_bounds.fits_within(width, height):
            raise BoundsError("Field title does not fit on the screen", context=context)

    def _render(self, restore_cursor: bool) -> None:
        color = self.data_color if self.is_valid_data() else self.invalid_color
        self.manager.render(
            self.screen,
            self.bounds.location,
            color,
            self.base_color,
            self.selected_color,
            self.template_char or DEFAULT_TEMPLATE_CHAR,
            restore_cursor=restore_cursor,
        )
        if not restore_cursor:
            self._placed = (self.screen.get_cursor(), self.manager.offset)


class StringField(Field):
    """Free text."""

    kind = FieldKind.STRING
    value_must_fit = False


class IntegerField(Field):
    """Signed integer of one of the INT8-INT64 kinds; digits and a leading minus."""

    _NUMBER = re.compile(r"^-?\d+$")

    def __init__(self, *args: Any, kind: FieldKind = FieldKind.INT64, **kwargs: Any):
        if not self._kind_allowed(kind):
            raise FieldDefinitionError(
                f"{type(self).__name__} cannot hold {kind.value}",
                context={"kind": kind},
            )
        self.kind = kind
        super().__init__(*args, **kwargs)

    @staticmethod
    def _kind_allowed(kind: FieldKind) -> bool:
        return kind.is_signed_integer

    def accepts_char(self, char: str) -> bool:
        if char.isdigit() and char.isascii():
            return True
        return char == "-" and self.manager.offset == 0 and "-" not in self.text

    def parse(self, text: str) -> int:
        text = text.strip()
        if not text:
            return 0
        if not self._NUMBER.match(text):
            raise ValueError(f"Not a whole number: {text!r}")
        number = int(text)
        low, high = self.kind.integer_range
        if not low <= number <= high:
            raise ValueError(f"{number} is outside the {self.kind.value} range")
        return number

    def coerce_value(self, value: Any) -> int:
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected an int, got {type(value).__name__}")
        low, high = self.kind.integer_range
        if not low <= value <= high:
            raise ValueError(f"{value} is outside the {self.kind.value} range")
        return value


class UnsignedField(IntegerField):
    """Unsigned integer of one of the UINT8-UINT64 kinds; digits only."""

    _NUMBER = re.compile(r"^\d+$")

    def __init__(self, *args: Any, kind: FieldKind = FieldKind.UINT64, **kwargs: Any):
        super().__init__(*args, kind=kind, **kwargs)

    @staticmethod
    def _kind_allowed(kind: FieldKind) -> bool:
        return kind.is_unsigned_integer

    def accepts_char(self, char: str) -> bool:
        return char.isdigit() and char.isascii()


class DecimalField(Field):
    """Fixed-point number written with ``decimal_places`` digits after the point."""

    kind = FieldKind.DECIMAL
    _NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")

    def __init__(self, *args: Any, decimal_places: int = 2, **kwargs: Any):
        if decimal_places < 0:
            raise FieldDefinitionError(
                "decimal_places cannot be negative",
                context={"decimal_places": decimal_places},
            )
        self.decimal_places = decimal_places
        super().__init__(*args, **kwargs)

    def accepts_char(self, char: str) -> bool:
        offset = self.manager.offset
        if char.isdigit() and char.isascii():
            return True
        if char == "-":
            return offset == 0 and "-" not in self.text
        if char == ".":
            return self.decimal_places > 0 and offset > 0 and "." not in self.text
        return False

    def parse(self, text: str) -> Decimal:
        text = text.strip()
        if not text:
            return Decimal(0)
        if not self._NUMBER.match(text):
            raise ValueError(f"Not a decimal number: {text!r}")
        try:
            return Decimal(text)
        except InvalidOperation as e:
            raise ValueError(f"Not a decimal number: {text!r}") from e

    @property
    def quantum(self) -> Decimal:
        return Decimal(10) ** -self.decimal_places

    def format_value(self, value: Any) -> str:
        return f"{Decimal(value).quantize(self.quantum):f}"

    def coerce_value(self, value: Any) -> Decimal:
        if value is None:
            return Decimal(0)
        if isinstance(value, bool):
            raise TypeError("Expected a number, got bool")
        if isinstance(value, float):
            value = Decimal(str(value))
        elif isinstance(value, (int, Decimal)):
            value = Decimal(value)
        else:
            raise TypeError(f"Expected a number, got {type(value).__name__}")
        if not value.is_finite():
            raise ValueError(f"Not a finite number: {value}")
        # quantize raises InvalidOperation when the result needs more digits
        # than the context precision allows
        if value.quantize(self.quantum) != value:
            raise ValueError(
                f"{value} has more than {self.decimal_places} decimal places"
            )
        return value


class BooleanField(Field):
    """Shows one word of a true/false pair; typed keys set or flip the state."""

    kind = FieldKind.BOOLEAN
    _TRUE = re.compile(r"^(?:[YT√]|yes|true|-?1|on)$", re.IGNORECASE)
    _FALSE = re.compile(r"^(?:[NFX0]|no|false|off)$", re.IGNORECASE)

    def __init__(
        self, *args: Any, display: BooleanDisplay = BooleanDisplay.YES_NO, **kwargs: Any
    ):
        self.display = display
        self._state = False
        super().__init__(*args, **kwargs)
        self.manager.read_only = True

    @property
    def state(self) -> bool:
        return self._state

    def handle_key(self, key: KeyStroke, insert_mode: bool) -> bool:
        manager = self.manager
        if key.key is Key.HOME:
            manager.offset = 0
            return True
        if key.key is Key.END:
            manager.offset = len(manager)
            return True
        if self.read_only or not key.is_printable:
            return False
        if key.is_char("YT1"):
            self._set_state(True)
        elif key.is_char("NF0"):
            self._set_state(False)
        elif key.is_char("O "):
            self._set_state(not self._state)
        else:
            return False
        return True

    def to_value(self) -> FieldValue:
        return FieldValue(self.kind, self._state)

    def is_valid_data(self) -> bool:
        return self.pattern_match()

    def parse(self, text: str) -> bool:
        if text == self.format_value(True):
            return True
        if text == self.format_value(False):
            return False
        if self._TRUE.match(text.strip()):
            return True
        if self._FALSE.match(text.strip()):
            return False
        raise ValueError(f"Not a boolean: {text!r}")

    def format_value(self, value: Any) -> str:
        return self.display.word(bool(value))[: self.bounds.width]

    def coerce_value(self, value: Any) -> bool:
        if value is None:
            return False
        if not isinstance(value, bool):
            raise TypeError(f"Expected a bool, got {type(value).__name__}")
        return value

    def _load(self, value: Any) -> None:
        self._state = bool(value)
        super()._load(value)

    def _set_state(self, state: bool) -> None:
        self._state = state
        offset = self.manager.offset
        self.manager.content = self.format_value(state)
        self.manager.offset = offset


class DateTimeField(Field):
    """
    Date, or date and time, edited digit by digit in a fixed template.

    Columns follow ``yyyy-MM-dd HH:mm:ss``. Separators are skipped while
    typing, and tens digits only accept the digits that can start a valid
    component. PageUp/PageDown step the component under the cursor.
    Ctrl+N fills in the current time.
    """

    kind = FieldKind.DATETIME
    TEMPLATE = "yyyy-MM-dd HH:mm:ss"
    DATE_WIDTH = 10
    SEPARATORS = frozenset({4, 7, 10, 13, 16})
    COLUMN_DIGITS = {5: "01", 8: "0123", 11: "012", 14: "012345", 17: "012345"}

    def __init__(
        self,
        *args: Any,
        date_only: bool = False,
        clock: Callable[[], datetime] = datetime.now,
        **kwargs: Any,
    ):
        self.date_only = date_only
        self._clock = clock
        super().__init__(*args, **kwargs)

    @property
    def template_width(self) -> int:
        return self.DATE_WIDTH if self.date_only else len(self.TEMPLATE)

    def handle_key(self, key: KeyStroke, insert_mode: bool) -> bool:
        manager = self.manager
        width = self.template_width
        offset = manager.offset

        if key.key is Key.CHAR and key.ctrl and key.char.upper() == "N":
            if self.read_only:
                return False
            self._load(self._clock().replace(microsecond=0))
            return True
        if key.key is Key.HOME:
            manager.offset = 0
            return True
        if key.key is Key.END:
            manager.offset = width
            return True
        if key.key in (Key.LEFT, Key.RIGHT) and not key.shift:
            return manager.step(-1 if key.key is Key.LEFT else 1)
        if key.key is Key.BACKSPACE:
            if offset == 0:
                return False
            offset -= 1
            if offset in self.SEPARATORS:
                offset -= 1
            manager.offset = offset
            return True
        if self.read_only:
            return False
        if key.key is Key.PAGE_UP:
            return self.adjust(1)
        if key.key is Key.PAGE_DOWN:
            return self.adjust(-1)
        if key.key is Key.DELETE:
            offset = self._skip_separator(offset)
            if offset >= width:
                return False
            manager.offset = offset
            manager.insert("0", insert_mode=False)
            manager.offset = offset
            return True
        if key.is_char(" ") and not self.date_only and offset < 11:
            manager.offset = 11
            return True
        if key.is_printable and key.char.isdigit() and key.char.isascii():
            offset = self._skip_separator(offset)
            if offset >= width or key.char not in self.COLUMN_DIGITS.get(
                offset, "0123456789"
            ):
                return False
            manager.offset = offset
            manager.insert(key.char, insert_mode=False)
            if manager.offset < width:
                manager.offset = self._skip_separator(manager.offset)
            return True
        return False

    def adjust(self, delta: int) -> bool:
        """Step the component under the cursor by ``delta`` units.

        Returns:
            False when the content is not a valid date or the result is out
            of range
        """
        try:
            current = self.parse(self.text)
        except ValueError:
            return False
        offset = self.manager.offset
        try:
            updated = self._shift(current, offset, delta)
        except (ValueError, OverflowError):
            return False
        self.manager.content = self.format_value(updated)
        self.manager.offset = offset
        return True

    @staticmethod
    def add_months(value: datetime, months: int) -> datetime:
        """Add calendar months, clamping the day to the end of the month."""
        total = value.year * 12 + (value.month - 1) + months
        year, month = divmod(total, 12)
        month += 1
        if not 1 <= year <= 9999:
            raise OverflowError(f"Year {year} is out of range")
        day = min(value.day, calendar.monthrange(year, month)[1])
        return value.replace(year=year, month=month, day=day)

    def _shift(self, value: datetime, offset: int, delta: int) -> datetime:
        if offset <= 4:
            return self.add_months(value, 12 * delta)
        if offset <= 7:
            return self.add_months(value, delta)
        if offset <= 10:
            return value + timedelta(days=delta)
        if offset <= 13:
            return value + timedelta(hours=delta)
        if offset <= 16:
            return value + timedelta(minutes=delta)
        return value + timedelta(seconds=delta)

    def parse(self, text: str) -> datetime:
        fmt = "%Y-%m-%d" if self.date_only else "%Y-%m-%d %H:%M:%S"
        if len(text) != self.template_width:
            raise ValueError(f"Incomplete date: {text!r}")
        return datetime.strptime(text, fmt)

    def format_value(self, value: Any) -> str:
        text = (
            f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
            f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        )
        return text[: self.template_width]

    def coerce_value(self, value: Any) -> datetime:
        if value is None:
            value = self._clock()
        if isinstance(value, datetime):
            pass
        elif isinstance(value, date):
            value = datetime(value.year, value.month, value.day)
        else:
            raise TypeError(f"Expected a datetime, got {type(value).__name__}")
        value = value.replace(microsecond=0)
        if self.date_only:
            value = value.replace(hour=0, minute=0, second=0)
        return value

    def _adjust_bounds(self, bounds: FieldBounds) -> FieldBounds:
        return FieldBounds(bounds.location, self.template_width, 1)

    def _skip_separator(self, offset: int) -> int:
        return offset + 1 if offset in self.SEPARATORS else offset


_FIELD_CLASSES: Dict[FieldKind, Type[Field]] = {
    FieldKind.STRING: StringField,
    FieldKind.INT8: IntegerField,
    FieldKind.INT16: IntegerField,
    FieldKind.INT32: IntegerField,
    FieldKind.INT64: IntegerField,
    FieldKind.UINT8: UnsignedField,
    FieldKind.UINT16: UnsignedField,
    FieldKind.UINT32: UnsignedField,
    FieldKind.UINT64: UnsignedField,
    FieldKind.DECIMAL: DecimalField,
    FieldKind.BOOLEAN: BooleanField,
    FieldKind.DATETIME: DateTimeField,
}


def create_field(
    kind: FieldKind,
    screen: ScreenIO,
    title: str,
    value: Any,
    title_location: ScreenPoint,
    bounds: FieldBounds,
    **kwargs: Any,
) -> Field:
    """
    Build the field class that handles ``kind``.

    Args:
        kind: Kind of value the field holds
        screen: Screen to paint on
        title: Field prompt
        value: Initial value
        title_location: Cell of the prompt
        bounds: Input area
        **kwargs: Remaining :class:`Field` options and kind-specific options
            (``decimal_places``, ``display``, ``date_only``, ``clock``)

    Returns:
        The new field
    """
    cls = _FIELD_CLASSES[kind]
    if kind.is_signed_integer or kind.is_unsigned_integer:
        kwargs["kind"] = kind
    return cls(screen, title, value, title_location, bounds, **kwargs)
