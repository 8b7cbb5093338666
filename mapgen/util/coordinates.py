"""Grid geometry primitives: points and axis-aligned rectangles."""

from __future__ import annotations

import math
from dataclasses import dataclass

from mapgen.types import TileCoord


@dataclass(frozen=True, slots=True)
class Point:
    """A tile coordinate on the map grid."""

    x: TileCoord
    y: TileCoord

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


class Rect:
    """Rectangle/bounding box in tile coordinates.

    Bounds are half-open: tiles with ``x1 <= x < x2`` and ``y1 <= y < y2``
    are inside. Some generators build rectangles whose second corner lies
    before the first; ``width`` and ``height`` report absolute extents so
    those rectangles stay usable.
    """

    __slots__ = ("x1", "x2", "y1", "y2")

    def __init__(self, x: TileCoord, y: TileCoord, w: TileCoord, h: TileCoord) -> None:
        self.x1: TileCoord = x
        self.y1: TileCoord = y
        self.x2: TileCoord = x + w
        self.y2: TileCoord = y + h

    @classmethod
    def from_bounds(
        cls, x1: TileCoord, y1: TileCoord, x2: TileCoord, y2: TileCoord
    ) -> Rect:
        """Create a Rect from corner coordinates (x1, y1, x2, y2)."""
        width = x2 - x1
        height = y2 - y1
        return cls(x1, y1, width, height)

    @property
    def width(self) -> TileCoord:
        return abs(self.x2 - self.x1)

    @property
    def height(self) -> TileCoord:
        return abs(self.y2 - self.y1)

    def center(self) -> Point:
        return Point((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: Rect) -> bool:
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def expanded(self, margin: TileCoord) -> Rect:
        """Return a copy grown by ``margin`` tiles on every side."""
        return Rect.from_bounds(
            self.x1 - margin, self.y1 - margin, self.x2 + margin, self.y2 + margin
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return (self.x1, self.y1, self.x2, self.y2) == (
            other.x1,
            other.y1,
            other.x2,
            other.y2,
        )

    def __hash__(self) -> int:
        return hash((self.x1, self.y1, self.x2, self.y2))

    def __repr__(self) -> str:
        return f"Rect(x1={self.x1}, y1={self.y1}, x2={self.x2}, y2={self.y2})"
