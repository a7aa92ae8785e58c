"""Screen coordinates and rectangular regions used by fields and the form."""

import logging
from typing import Iterator, NamedTuple, Optional

logger = logging.getLogger(__name__)


class ScreenPoint(NamedTuple):
    """An absolute terminal cell, column first."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def offset(self, dx: int = 0, dy: int = 0) -> "ScreenPoint":
        """Return a point shifted by ``dx`` columns and ``dy`` rows."""
        return ScreenPoint(self.x + dx, self.y + dy)

    def linear(self, width: int) -> int:
        """Row-major position of this point on a screen ``width`` cells wide."""
        return self.y * width + self.x

    @staticmethod
    def from_linear(position: int, width: int) -> "ScreenPoint":
        """Inverse of :meth:`linear`."""
        if width <= 0:
            raise ValueError(f"Screen width must be positive, got {width}")
        return ScreenPoint(position % width, position // width)


class FieldBounds(NamedTuple):
    """A rectangle anchored at ``location`` (top-left cell)."""

    location: ScreenPoint
    width: int
    height: int = 1

    def __str__(self) -> str:
        return f"{self.width}x{self.height} at {self.location}"

    @classmethod
    def at(cls, x: int, y: int, width: int, height: int = 1) -> "FieldBounds":
        return cls(ScreenPoint(x, y), width, height)

    @property
    def x(self) -> int:
        return self.location.x

    @property
    def y(self) -> int:
        return self.location.y

    @property
    def right(self) -> int:
        """Last column inside the rectangle."""
        return self.location.x + self.width - 1

    @property
    def bottom(self) -> int:
        """Last row inside the rectangle."""
        return self.location.y + self.height - 1

    @property
    def area(self) -> int:
        return max(self.width, 0) * max(self.height, 0)

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, point: ScreenPoint) -> bool:
        """Check whether ``point`` lies inside the rectangle."""
        return (
            self.location.x <= point.x <= self.right
            and self.location.y <= point.y <= self.bottom
        )

    def overlaps(self, other: "FieldBounds") -> bool:
        """Check whether the two rectangles share at least one cell."""
        if self.is_empty() or other.is_empty():
            return False
        return not (
            other.location.x > self.right
            or other.right < self.location.x
            or other.location.y > self.bottom
            or other.bottom < self.location.y
        )

    def union(self, other: Optional["FieldBounds"]) -> "FieldBounds":
        """Smallest rectangle covering both rectangles."""
        if other is None or other.is_empty():
            return self
        if self.is_empty():
            return other
        left = min(self.location.x, other.location.x)
        top = min(self.location.y, other.location.y)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return FieldBounds(ScreenPoint(left, top), right - left + 1, bottom - top + 1)

    def points(self) -> Iterator[ScreenPoint]:
        """Iterate the cells of the rectangle in row-major order."""
        for y in range(self.location.y, self.location.y + self.height):
            for x in range(self.location.x, self.location.x + self.width):
                yield ScreenPoint(x, y)

    def raster_index(self, point: ScreenPoint) -> int:
        """Row-major index of ``point`` relative to this rectangle.

        Points outside the rectangle still produce an index; callers use it to
        order the cursor against the rectangle before scanning.
        """
        return (point.y - self.location.y) * self.width + (point.x - self.location.x)

    def point_at(self, index: int) -> ScreenPoint:
        """Cell at row-major ``index`` inside the rectangle."""
        return ScreenPoint(
            self.location.x + index % self.width, self.location.y + index // self.width
        )

    def fits_within(self, width: int, height: int) -> bool:
        """True when the whole rectangle lies on a ``width`` x ``height`` screen."""
        return (
            self.location.x >= 0
            and self.location.y >= 0
            and self.location.x + self.width <= width
            and self.location.y + self.height <= height
        )
