"""Map values threaded through the generation pipeline.

RoomBasedMap adds rooms and corridors to the walkable grid. GeneratedMap adds
the starting point, the exit and a caller-owned payload.
"""

from __future__ import annotations

import copy
from typing import Any, Self

from mapgen.types import TileCoord
from mapgen.util.coordinates import Point, Rect

from .grid import WalkableGrid


class RoomBasedMap(WalkableGrid):
    """A walkable grid that also remembers the rooms and corridors carved into it.

    Attributes:
        rooms: Room rectangles in creation order. Corridor connectors rely on
            this order.
        corridors: One list of points per carved corridor, holding the tiles
            that were walls before the corridor opened them.
    """

    def __init__(self, width: TileCoord, height: TileCoord) -> None:
        super().__init__(width, height)
        self.rooms: list[Rect] = []
        self.corridors: list[list[Point]] = []

    def add_room(self, rect: Rect) -> None:
        """Carve the room's interior to floor and record it."""
        x1 = max(rect.x1, 0)
        y1 = max(rect.y1, 0)
        if x1 < rect.x2 and y1 < rect.y2:
            self.walkable[x1 : rect.x2, y1 : rect.y2] = True
        self.rooms.append(rect)

    def add_corridor(self, start: Point, end: Point) -> list[Point]:
        """Carve a Manhattan path from start to end, moving along x first.

        Returns:
            The tiles that were walls before this corridor opened them. The
            same list is appended to ``corridors``.
        """
        corridor: list[Point] = []
        x, y = start.x, start.y

        while x != end.x or y != end.y:
            if x < end.x:
                x += 1
            elif x > end.x:
                x -= 1
            elif y < end.y:
                y += 1
            else:
                y -= 1

            if self.is_blocked(x, y):
                corridor.append(Point(x, y))
                self.set_walkable(x, y, True)

        self.corridors.append(corridor)
        return corridor

    def clone(self) -> Self:
        new = super().clone()
        new.rooms = list(self.rooms)
        new.corridors = [list(corridor) for corridor in self.corridors]
        return new


class GeneratedMap(RoomBasedMap):
    """The map value threaded through the generation pipeline.

    Attributes:
        starting_point: Where the player should start. Set by
            AreaStartingPosition, read by CullUnreachable and DistantExit.
        exit_point: The level exit. Set by DistantExit.
        data: Opaque caller-owned payload. Built-in filters never read or
            write it; custom filters may replace it on their clone.
    """

    def __init__(
        self, width: TileCoord, height: TileCoord, data: Any = None
    ) -> None:
        super().__init__(width, height)
        self.starting_point: Point | None = None
        self.exit_point: Point | None = None
        self.data: Any = data

    def clone(self) -> Self:
        new = super().clone()
        new.data = copy.deepcopy(self.data)
        return new
