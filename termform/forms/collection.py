"""Ordered, non-overlapping set of fields keyed by data name."""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..terminal.geometry import FieldBounds, ScreenPoint
from ..utils.logging_utils import log_layout_rejected
from .field_kinds import FieldValue
from .fields import Field

logger = logging.getLogger(__name__)


class FieldCollection:
    """
    The fields of one form in insertion (tab) order.

    No two fields ever share a cell of their input areas or titles. Data
    names are compared case-insensitively.
    """

    def __init__(self, fields: Optional[Iterable[Field]] = None) -> None:
        self._fields: List[Field] = []
        if fields is not None:
            self.add_range(fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(list(self._fields))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Field):
            return item in self._fields
        if isinstance(item, str):
            return self.index_of(item) >= 0
        return False

    def __getitem__(self, key: Union[int, str]) -> Field:
        if isinstance(key, int):
            return self._fields[key]
        index = self.index_of(key)
        if index < 0:
            raise KeyError(key)
        return self._fields[index]

    def __repr__(self) -> str:
        names = ", ".join(f.data_name for f in self._fields)
        return f"FieldCollection([{names}])"

    def index_of(self, data_name: str) -> int:
        """Position of the field called ``data_name``, or -1."""
        wanted = data_name.lower()
        for index, field in enumerate(self._fields):
            if field.data_name.lower() == wanted:
                return index
        return -1

    def add(self, field: Field) -> bool:
        """
        Add a field, or replace the field with the same data name.

        Args:
            field: Field to add

        Returns:
            False if the field would overlap another field and was not added
        """
        index = self.index_of(field.data_name)
        blocker = self._collision(field, skip=index)
        if blocker is not None:
            log_layout_rejected(
                logger,
                f"add {field.data_name}",
                f"overlaps {blocker.data_name} at {blocker.bounds}",
            )
            return False
        if index < 0:
            self._fields.append(field)
            logger.debug(f"Added field {field.data_name} at {field.bounds}")
        else:
            self._fields[index] = field
            logger.debug(f"Replaced field {field.data_name}")
        return True

    def add_range(self, fields: Iterable[Field]) -> int:
        """Add several fields; returns how many were accepted."""
        return sum(1 for field in fields if self.add(field))

    def remove(self, data_name: str) -> Optional[Field]:
        index = self.index_of(data_name)
        if index < 0:
            return None
        return self._fields.pop(index)

    def clear(self) -> None:
        self._fields.clear()

    def field_at(self, point: ScreenPoint) -> Optional[Field]:
        """The field at ``point``, or None.

        Exact cells win over the cell just past a field's right edge.
        """
        index = self.index_at(point)
        return self._fields[index] if index >= 0 else None

    def index_at(self, point: ScreenPoint) -> int:
        for index, field in enumerate(self._fields):
            if field.bounds.contains(point):
                return index
        for index, field in enumerate(self._fields):
            if field.contains(point):
                return index
        return -1

    @property
    def bounding_rect(self) -> Optional[FieldBounds]:
        """Smallest rectangle covering every input area."""
        rect: Optional[FieldBounds] = None
        for field in self._fields:
            rect = field.bounds if rect is None else rect.union(field.bounds)
        return rect

    def next_field(self, point: ScreenPoint) -> Optional[Field]:
        """
        The field after ``point`` in tab order.

        Inside a field this is the next field by insertion order, wrapping
        around. Elsewhere it is the first field met by a row-major scan of
        :attr:`bounding_rect` starting after ``point``.
        """
        return self._neighbour(point, 1)

    def prev_field(self, point: ScreenPoint) -> Optional[Field]:
        """Mirror of :meth:`next_field`."""
        return self._neighbour(point, -1)

    def is_valid(self) -> bool:
        return all(field.is_valid_data() for field in self._fields)

    def values(self) -> Dict[str, FieldValue]:
        """Every field's typed value keyed by data name."""
        return {field.data_name: field.to_value() for field in self._fields}

    def revert_all(self) -> None:
        for field in reversed(self._fields):
            field.revert()

    def _collision(self, field: Field, skip: int = -1) -> Optional[Field]:
        for index, existing in enumerate(self._fields):
            if index != skip and existing.overlaps(field):
                return existing
        return None

    def _neighbour(self, point: ScreenPoint, step: int) -> Optional[Field]:
        if not self._fields:
            return None
        index = self.index_at(point)
        if index >= 0:
            return self._fields[(index + step) % len(self._fields)]

        rect = self.bounding_rect
        area = rect.area
        start = self._scan_start(rect, point, step)
        for i in range(area):
            cell = rect.point_at((start + step * i) % area)
            for field in self._fields:
                if field.bounds.contains(cell):
                    return field
        return None

    @staticmethod
    def _scan_start(rect: FieldBounds, point: ScreenPoint, step: int) -> int:
        """First raster index to inspect when scanning from ``point``."""
        if rect.contains(point):
            return rect.raster_index(point) + step
        if rect.y <= point.y <= rect.bottom:
            row_start = (point.y - rect.y) * rect.width
            if point.x < rect.x:
                return row_start if step > 0 else row_start - 1
            return row_start + rect.width if step > 0 else row_start + rect.width - 1
        if step > 0:
            return 0
        return rect.area - 1
