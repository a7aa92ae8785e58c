"""Logical text of one field and its mapping onto the field's screen cells.

Content is laid out in rows: every logical line (split on ``\\r\\n``) takes
``ceil(len / width)`` rows, and at least one. An offset at the end of a line
that exactly fills its last row maps to column ``width``, the cell just past
the right edge, which fields treat as part of themselves.
"""

import logging
import re
from typing import Iterator, List, Optional, Tuple

from ..terminal.colors import CellColor
from ..terminal.geometry import FieldBounds, ScreenPoint
from ..terminal.screen_io import ScreenIO

logger = logging.getLogger(__name__)

CRLF = "\r\n"
TAB_EXPANSION = "    "
_LINE_BREAKS = re.compile(r"\r\n|\r|\n")
_WORD_CHAR = re.compile(r"[A-Za-z0-9_]")


def _is_word(char: str) -> bool:
    return bool(_WORD_CHAR.match(char))


def next_word_start(text: str, offset: int) -> int:
    """Offset of the next word after ``offset``, or the end of ``text``."""
    while offset < len(text) and _is_word(text[offset]):
        offset += 1
    while offset < len(text) and not _is_word(text[offset]):
        offset += 1
    return offset


def prev_word_start(text: str, offset: int) -> int:
    """Offset of the start of the word before ``offset``, or 0."""
    offset = min(offset, len(text))
    if offset <= 0:
        return 0
    offset -= 1
    while offset > 0 and not _is_word(text[offset]):
        offset -= 1
    while offset > 0 and _is_word(text[offset - 1]):
        offset -= 1
    return offset


class StringManager:
    """Edits a field's text at an insertion offset and tracks a selection."""

    def __init__(
        self,
        content: str = "",
        width: int = 1,
        height: int = 1,
        read_only: bool = False,
    ) -> None:
        """
        Args:
            content: Initial text; breaks are normalised and excess truncated
            width: Cells per row
            height: Number of rows; more than one makes the field multi-line
            read_only: Refuse every edit when True

        Raises:
            ValueError: If width or height is less than 1
        """
        if width < 1 or height < 1:
            raise ValueError(f"Field size must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.read_only = read_only
        self.selection_start: Optional[int] = None
        self.selection_length = 0
        self._anchor = 0
        self._offset = 0
        self._content = ""
        self.content = content

    def __repr__(self) -> str:
        return (
            f"StringManager(content={self._content!r}, offset={self._offset}, "
            f"size={self.width}x{self.height})"
        )

    def __len__(self) -> int:
        return len(self._content)

    @property
    def multi_line(self) -> bool:
        return self.height > 1

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, value: str) -> None:
        self._content = self._normalize(value)
        self._fit()
        self._offset = min(self._offset, len(self._content))
        self.clear_selection()

    @property
    def offset(self) -> int:
        """Insertion offset into :attr:`content`."""
        return self._offset

    @offset.setter
    def offset(self, value: int) -> None:
        self._offset = self._normalize_offset(value)

    @property
    def has_selection(self) -> bool:
        return self.selection_start is not None and self.selection_length > 0

    @property
    def selected_text(self) -> str:
        if not self.has_selection:
            return ""
        start = self.selection_start
        return self._content[start : start + self.selection_length]

    def clear(self) -> bool:
        """Empty the content; refused when read-only."""
        if self.read_only:
            return False
        self._content = ""
        self._offset = 0
        self.clear_selection()
        return True

    def insert(self, text: str, insert_mode: bool = True) -> bool:
        """
        Type ``text`` at the insertion offset.

        An active selection is replaced and cleared. Otherwise insert mode
        splices the text in and overwrite mode replaces characters up to the
        next line break, appending whatever is left over.

        Args:
            text: Characters to type
            insert_mode: Splice when True, overwrite when False

        Returns:
            False when nothing changed (read-only, or the field is full)
        """
        if self.read_only:
            return False
        text = self._normalize(text)
        before = (self._content, self._offset)
        content = self._content

        if self.has_selection:
            start = self.selection_start
            end = start + self.selection_length
            content = content[:start] + text + content[end:]
            offset = start + len(text)
            self.clear_selection()
        elif insert_mode:
            offset = self._offset
            content = content[:offset] + text + content[offset:]
            offset += len(text)
        else:
            offset = self._offset
            line_end = content.find(CRLF, offset)
            if line_end < 0:
                line_end = len(content)
            span = min(len(text), line_end - offset)
            content = content[:offset] + text + content[offset + span :]
            offset += len(text)

        self._content = content
        truncated = self._fit()
        self._offset = self._normalize_offset(offset)
        if truncated:
            logger.debug(f"Content truncated to fit {self.width}x{self.height}")
        return (self._content, self._offset) != before

    def delete_left(self) -> bool:
        """Delete the selection, or the character left of the offset (Backspace)."""
        if self.read_only:
            return False
        if self.has_selection:
            return self._delete_selection()
        offset = self._offset
        if offset == 0:
            return False
        size = 2 if self._content[offset - 2 : offset] == CRLF else 1
        self._content = self._content[: offset - size] + self._content[offset:]
        self._offset = offset - size
        return True

    def delete_right(self) -> bool:
        """Delete the selection, or the character right of the offset (Delete)."""
        if self.read_only:
            return False
        if self.has_selection:
            return self._delete_selection()
        offset = self._offset
        if offset >= len(self._content):
            return False
        size = 2 if self._content[offset : offset + 2] == CRLF else 1
        self._content = self._content[:offset] + self._content[offset + size :]
        return True

    def word_right(self) -> bool:
        """Move to the start of the next word, or to the end of the content."""
        if self._offset >= len(self._content):
            return False
        self._offset = next_word_start(self._content, self._offset)
        return True

    def word_left(self) -> bool:
        """Move to the start of the current or previous word."""
        if self._offset <= 0:
            return False
        self._offset = prev_word_start(self._content, self._offset)
        return True

    def step(self, delta: int) -> bool:
        """Move the offset ``delta`` positions, treating ``\\r\\n`` as one."""
        target = self._stepped(self._offset, delta)
        moved = target != self._offset
        self._offset = target
        return moved

    def select(self, start: int, length: int) -> None:
        """Select ``length`` characters from ``start``, clamped to the content."""
        start = max(0, min(start, len(self._content)))
        length = max(0, min(length, len(self._content) - start))
        self.selection_start = start
        self.selection_length = length

    def clear_selection(self) -> None:
        self.selection_start = None
        self.selection_length = 0

    def extend_selection(self, delta: int) -> bool:
        """Grow or shrink the selection by moving the offset ``delta`` positions."""
        if not self.has_selection:
            self._anchor = self._offset
        target = self._stepped(self._offset, delta)
        if target == self._offset:
            return False
        self._offset = target
        low, high = sorted((self._anchor, target))
        self.select(low, high - low)
        return True

    def rows(self) -> List[Tuple[int, int]]:
        """``(start, end)`` offsets of every laid-out row, end exclusive."""
        rows: List[Tuple[int, int]] = []
        position = 0
        for line in self._content.split(CRLF):
            if not line:
                rows.append((position, position))
            for start in range(0, len(line), self.width):
                end = min(start + self.width, len(line))
                rows.append((position + start, position + end))
            position += len(line) + len(CRLF)
        return rows

    def offset_to_point(self, offset: Optional[int] = None) -> ScreenPoint:
        """
        Field-relative cell of an insertion offset.

        Args:
            offset: Offset to translate; the current offset when None

        Returns:
            Column and row inside the field
        """
        offset = self._normalize_offset(self._offset if offset is None else offset)
        if not self.multi_line:
            return ScreenPoint(offset, 0)
        rows = self.rows()
        for index in range(len(rows) - 1, -1, -1):
            start, end = rows[index]
            if start <= offset <= end:
                return ScreenPoint(offset - start, index)
        return ScreenPoint(0, 0)

    def point_to_offset(self, point: ScreenPoint) -> int:
        """Nearest insertion offset to a field-relative cell."""
        x = max(point.x, 0)
        if not self.multi_line:
            return min(x, len(self._content))
        rows = self.rows()
        if point.y >= len(rows):
            return len(self._content)
        start, end = rows[max(point.y, 0)]
        return min(start + x, end)

    def row_start(self, offset: Optional[int] = None) -> int:
        point = self.offset_to_point(offset)
        return self.point_to_offset(ScreenPoint(0, point.y))

    def row_end(self, offset: Optional[int] = None) -> int:
        point = self.offset_to_point(offset)
        return self.point_to_offset(ScreenPoint(self.width, point.y))

    def render(
        self,
        screen: ScreenIO,
        location: ScreenPoint,
        data_color: CellColor,
        base_color: CellColor,
        selected_color: Optional[CellColor] = None,
        template_char: str = "_",
        restore_cursor: bool = False,
    ) -> None:
        """
        Repaint the field's cells.

        Content is painted in ``data_color`` and the selection in
        ``selected_color`` (inverse data color by default). Unused cells get
        ``template_char`` in ``base_color``.

        Args:
            screen: Screen to paint on
            location: Absolute top-left cell of the field
            data_color: Color for content
            base_color: Color for unused cells
            selected_color: Color for the selection
            template_char: Filler for unused cells
            restore_cursor: Put the cursor back where it was instead of at
                the insertion point
        """
        selected_color = selected_color or data_color.inverse
        with screen.exclusive():
            saved = screen.get_cursor()
            rows = self.rows()
            for y in range(self.height):
                row_origin = location.offset(0, y)
                painted = 0
                if y < len(rows):
                    start, end = rows[y]
                    for seg_start, seg_end, selected in self._segments(start, end):
                        screen.write_at(
                            row_origin.offset(seg_start - start),
                            self._content[seg_start:seg_end],
                            selected_color if selected else data_color,
                        )
                    painted = end - start
                if painted < self.width:
                    screen.fill_rect(
                        FieldBounds(
                            row_origin.offset(painted), self.width - painted, 1
                        ),
                        template_char,
                        base_color,
                        restore_cursor=False,
                    )
            if restore_cursor:
                screen.set_cursor(saved)
            else:
                point = self.offset_to_point()
                screen.set_cursor(location.offset(point.x, point.y))

    def _segments(self, start: int, end: int) -> Iterator[Tuple[int, int, bool]]:
        if not self.has_selection:
            if end > start:
                yield (start, end, False)
            return
        sel_start = self.selection_start
        sel_end = sel_start + self.selection_length
        inner_start = max(start, min(sel_start, end))
        inner_end = max(start, min(sel_end, end))
        cuts = sorted({start, end, inner_start, inner_end})
        for low, high in zip(cuts, cuts[1:]):
            if high > low:
                yield (low, high, sel_start <= low and high <= sel_end)

    def _delete_selection(self) -> bool:
        start = self.selection_start
        end = start + self.selection_length
        self._content = self._content[:start] + self._content[end:]
        self._offset = start
        self.clear_selection()
        return True

    def _normalize(self, text: str) -> str:
        text = text.replace("\t", TAB_EXPANSION)
        if self.multi_line:
            return _LINE_BREAKS.sub(CRLF, text)
        return _LINE_BREAKS.sub(" ", text)

    def _normalize_offset(self, offset: int) -> int:
        offset = max(0, min(offset, len(self._content)))
        if (
            0 < offset < len(self._content)
            and self._content[offset - 1] == "\r"
            and self._content[offset] == "\n"
        ):
            offset -= 1
        return offset

    def _stepped(self, offset: int, delta: int) -> int:
        direction = 1 if delta > 0 else -1
        for _ in range(abs(delta)):
            if direction > 0 and self._content[offset : offset + 2] == CRLF:
                offset += 2
            elif direction < 0 and self._content[max(offset - 2, 0) : offset] == CRLF:
                offset -= 2
            else:
                offset += direction
            offset = max(0, min(offset, len(self._content)))
        return offset

    def _fit(self) -> bool:
        rows = self.rows()
        if len(rows) <= self.height:
            return False
        self._content = self._content[: rows[self.height - 1][1]]
        return True
