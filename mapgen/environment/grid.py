"""The walkability grid every generator reads and writes.

Cells are stored in numpy arrays of shape ``(width, height)`` indexed
``[x, y]``. The arrays use Fortran order, so the underlying memory is
row-major: flat index ``y * width + x``. ``ravel(order="F")`` gives that flat
view without copying.
"""

from __future__ import annotations

import copy
from enum import Enum, auto
from typing import Self

import numpy as np

from mapgen import config
from mapgen.types import TileCoord, TileExit, TileTypeID
from mapgen.util.coordinates import Point

WALL_CHAR = "#"
FLOOR_CHAR = " "


class Symmetry(Enum):
    """Mirroring applied by :meth:`WalkableGrid.paint`."""

    NONE = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()
    BOTH = auto()


class WalkableGrid:
    """A 2D boolean grid where True means walkable floor.

    Reads outside the grid report a wall and writes outside the grid are
    ignored, so generators never need their own bounds checks.

    Attributes:
        width: Grid width in tiles.
        height: Grid height in tiles.
        walkable: Bool array of shape (width, height).
        tile_types: Int array of shape (width, height) for cosmetic tile
            tagging. Generation logic never reads it.
    """

    def __init__(self, width: TileCoord, height: TileCoord) -> None:
        self.width: TileCoord = width
        self.height: TileCoord = height
        self.walkable = np.full((width, height), False, dtype=bool, order="F")
        self.tile_types = np.zeros((width, height), dtype=np.int32, order="F")

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Create a grid from a multi-line string.

        Each line is stripped and blank lines are dropped. A space marks a
        walkable tile; any other character is a wall. The grid is as wide as
        the longest line; shorter lines leave their tail as walls.
        """
        lines = [line.strip() for line in text.split("\n")]
        lines = [line for line in lines if line]
        cols = max((len(line) for line in lines), default=1)
        grid = cls(cols, len(lines))

        for y, line in enumerate(lines):
            for x, char in enumerate(line):
                if char == FLOOR_CHAR:
                    grid.walkable[x, y] = True
        return grid

    def in_bounds(self, x: TileCoord, y: TileCoord) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, x: TileCoord, y: TileCoord) -> bool:
        if not self.in_bounds(x, y):
            return False
        return bool(self.walkable[x, y])

    def is_blocked(self, x: TileCoord, y: TileCoord) -> bool:
        return not self.is_walkable(x, y)

    def set_walkable(self, x: TileCoord, y: TileCoord, value: bool) -> None:
        if self.in_bounds(x, y):
            self.walkable[x, y] = value

    def tile_type(self, x: TileCoord, y: TileCoord) -> TileTypeID:
        if not self.in_bounds(x, y):
            return 0
        return int(self.tile_types[x, y])

    def set_tile_type(self, x: TileCoord, y: TileCoord, tile_id: TileTypeID) -> None:
        if self.in_bounds(x, y):
            self.tile_types[x, y] = tile_id

    def xy_idx(self, x: TileCoord, y: TileCoord) -> int:
        return y * self.width + x

    def idx_point(self, idx: int) -> Point:
        return Point(idx % self.width, idx // self.width)

    def floor_count(self) -> int:
        return int(np.count_nonzero(self.walkable))

    def get_available_exits(self, x: TileCoord, y: TileCoord) -> list[TileExit]:
        """List the walkable neighbours of a tile with their movement cost.

        Cardinal moves cost ``config.CARDINAL_MOVE_COST`` and diagonal moves
        ``config.DIAGONAL_MOVE_COST``. Order: W, E, N, S, NW, NE, SW, SE.
        Neighbours past the grid edge are never probed.
        """
        exits: list[TileExit] = []
        cardinal = config.CARDINAL_MOVE_COST
        diagonal = config.DIAGONAL_MOVE_COST
        has_w = x > 0
        has_e = x < self.width - 1
        has_n = y > 0
        has_s = y < self.height - 1

        # Cardinal directions
        if has_w and self.walkable[x - 1, y]:
            exits.append((x - 1, y, cardinal))
        if has_e and self.walkable[x + 1, y]:
            exits.append((x + 1, y, cardinal))
        if has_n and self.walkable[x, y - 1]:
            exits.append((x, y - 1, cardinal))
        if has_s and self.walkable[x, y + 1]:
            exits.append((x, y + 1, cardinal))

        # Diagonals
        if has_w and has_n and self.walkable[x - 1, y - 1]:
            exits.append((x - 1, y - 1, diagonal))
        if has_e and has_n and self.walkable[x + 1, y - 1]:
            exits.append((x + 1, y - 1, diagonal))
        if has_w and has_s and self.walkable[x - 1, y + 1]:
            exits.append((x - 1, y + 1, diagonal))
        if has_e and has_s and self.walkable[x + 1, y + 1]:
            exits.append((x + 1, y + 1, diagonal))

        return exits

    # -------------------------------------------------------------------------
    # Painting
    # -------------------------------------------------------------------------

    def paint(
        self, symmetry: Symmetry, brush_size: int, x: TileCoord, y: TileCoord
    ) -> None:
        """Make the tile at (x, y) walkable, mirrored according to ``symmetry``.

        Mirroring reflects across ``width // 2`` (horizontal) and/or
        ``height // 2`` (vertical) by absolute distance to the centre line.
        A tile on the centre line is painted once.

        Args:
            symmetry: Which centre lines to mirror across.
            brush_size: 1 paints a single tile. Larger brushes paint a
                brush_size by brush_size square starting brush_size // 2
                tiles above and left of (x, y), clipped to 1 < x < width - 1
                and 1 < y < height - 1.
            x: Tile X coordinate.
            y: Tile Y coordinate.
        """
        match symmetry:
            case Symmetry.NONE:
                self._apply_paint(brush_size, x, y)
            case Symmetry.HORIZONTAL:
                center_x = self.width // 2
                if x == center_x:
                    self._apply_paint(brush_size, x, y)
                else:
                    dist_x = abs(center_x - x)
                    self._apply_paint(brush_size, center_x + dist_x, y)
                    self._apply_paint(brush_size, center_x - dist_x, y)
            case Symmetry.VERTICAL:
                center_y = self.height // 2
                if y == center_y:
                    self._apply_paint(brush_size, x, y)
                else:
                    dist_y = abs(center_y - y)
                    self._apply_paint(brush_size, x, center_y + dist_y)
                    self._apply_paint(brush_size, x, center_y - dist_y)
            case Symmetry.BOTH:
                center_x = self.width // 2
                center_y = self.height // 2
                if x == center_x and y == center_y:
                    self._apply_paint(brush_size, x, y)
                else:
                    dist_x = abs(center_x - x)
                    self._apply_paint(brush_size, center_x + dist_x, y)
                    self._apply_paint(brush_size, center_x - dist_x, y)
                    dist_y = abs(center_y - y)
                    self._apply_paint(brush_size, x, center_y + dist_y)
                    self._apply_paint(brush_size, x, center_y - dist_y)

    def _apply_paint(self, brush_size: int, x: TileCoord, y: TileCoord) -> None:
        if brush_size == 1:
            self.set_walkable(x, y, True)
            return

        half = brush_size // 2
        x1 = max(x - half, 2)
        x2 = min(x - half + brush_size, self.width - 1)
        y1 = max(y - half, 2)
        y2 = min(y - half + brush_size, self.height - 1)
        if x1 < x2 and y1 < y2:
            self.walkable[x1:x2, y1:y2] = True

    # -------------------------------------------------------------------------
    # Copying, comparison and text form
    # -------------------------------------------------------------------------

    def clone(self) -> Self:
        """Return an independent copy; filters modify clones, never inputs."""
        new = copy.copy(self)
        new.walkable = self.walkable.copy(order="F")
        new.tile_types = self.tile_types.copy(order="F")
        return new

    def to_text(self) -> str:
        rows = []
        for y in range(self.height):
            row = "".join(
                FLOOR_CHAR if self.walkable[x, y] else WALL_CHAR
                for x in range(self.width)
            )
            rows.append(row + "\n")
        return "".join(rows)

    def __str__(self) -> str:
        return self.to_text()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WalkableGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and bool(np.array_equal(self.walkable, other.walkable))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(width={self.width}, height={self.height}, "
            f"floor={self.floor_count()})"
        )
