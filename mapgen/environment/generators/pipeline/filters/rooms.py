"""Room and corridor filters.

These filters build dungeon-style maps out of rectangular rooms:
- SimpleRooms: Scatters random non-overlapping rooms
- BspRooms: Packs rooms into recursively quartered space, keeping walls
  between them
- BspInterior: Bisects the whole interior into adjoining rooms and chains
  them with corridors
- NearestCorridors: Connects every room to its nearest unconnected neighbour

SimpleRooms and BspRooms only place rooms. Follow them with NearestCorridors
to make the map traversable.
"""

from __future__ import annotations

import logging
from random import Random

from mapgen import config
from mapgen.environment.map import GeneratedMap
from mapgen.util import rng as rng_util
from mapgen.util.coordinates import Point, Rect

from ..filter import MapFilter

logger = logging.getLogger(__name__)


class SimpleRooms(MapFilter):
    """Places up to ``max_rooms`` random rooms that do not touch each other.

    Each attempt draws a size and a position once. Attempts that overlap an
    existing room, or whose size leaves no room for the outer wall, are
    dropped, not retried.
    """

    def __init__(
        self,
        max_rooms: int = config.SIMPLE_ROOMS_MAX_ROOMS,
        min_room_size: int = config.SIMPLE_ROOMS_MIN_SIZE,
        max_room_size: int = config.SIMPLE_ROOMS_MAX_SIZE,
    ) -> None:
        self.max_rooms = max_rooms
        self.min_room_size = min_room_size
        self.max_room_size = max_room_size

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        placed = 0

        for _ in range(self.max_rooms):
            w = rng_util.random_range(rng, self.min_room_size, self.max_room_size)
            h = rng_util.random_range(rng, self.min_room_size, self.max_room_size)
            if new_map.width - w <= 1 or new_map.height - h <= 1:
                continue
            x = rng_util.random_range(rng, 1, new_map.width - w)
            y = rng_util.random_range(rng, 1, new_map.height - h)
            room = Rect(x, y, w, h)

            if not any(room.intersects(other) for other in new_map.rooms):
                new_map.add_room(room)
                placed += 1

        logger.debug(f"SimpleRooms placed {placed}/{self.max_rooms} rooms")
        return new_map

    def __repr__(self) -> str:
        return (
            f"SimpleRooms(max_rooms={self.max_rooms}, "
            f"min_room_size={self.min_room_size}, max_room_size={self.max_room_size})"
        )


# =============================================================================
# BINARY SPACE PARTITION
# =============================================================================


class BspRooms(MapFilter):
    """Packs rooms into a shrinking pool of candidate areas.

    The pool starts as the map interior plus its four quadrants. Every
    iteration picks an area at random and tries a small room inside it. A
    room is accepted only when it leaves a two tile margin of wall around
    itself and stays clear of the outer ring. Each accepted room adds the
    quadrants of the area it came from to the pool.
    """

    def __init__(self, max_split: int = config.BSP_ROOMS_MAX_SPLIT) -> None:
        self.max_split = max_split

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        first = Rect(2, 2, new_map.width - 5, new_map.height - 5)
        rects = [first, *self._split_into_subrects(first)]

        for _ in range(self.max_split):
            rect = self._random_rect(rng, rects)
            candidate = self._random_sub_rect(rng, rect)
            if self._is_possible(candidate, new_map):
                new_map.add_room(candidate)
                rects.extend(self._split_into_subrects(rect))

        logger.debug(f"BspRooms placed {len(new_map.rooms)} rooms")
        return new_map

    @staticmethod
    def _split_into_subrects(rect: Rect) -> list[Rect]:
        """Quarter a rect: top-left, bottom-left, top-right, bottom-right."""
        half_w = max(rect.width // 2, 1)
        half_h = max(rect.height // 2, 1)
        return [
            Rect(rect.x1, rect.y1, half_w, half_h),
            Rect(rect.x1, rect.y1 + half_h, half_w, half_h),
            Rect(rect.x1 + half_w, rect.y1, half_w, half_h),
            Rect(rect.x1 + half_w, rect.y1 + half_h, half_w, half_h),
        ]

    @staticmethod
    def _random_rect(rng: Random, rects: list[Rect]) -> Rect:
        if len(rects) == 1:
            return rects[0]
        return rects[rng_util.random_range(rng, 0, len(rects))]

    @staticmethod
    def _random_sub_rect(rng: Random, rect: Rect) -> Rect:
        max_size = config.BSP_ROOMS_MAX_SIZE
        w = max(3, rng_util.random_range(rng, 1, min(rect.width, max_size))) + 1
        h = max(3, rng_util.random_range(rng, 1, min(rect.height, max_size))) + 1
        x1 = rect.x1 + rng_util.random_range(rng, 0, config.BSP_ROOMS_MAX_OFFSET)
        y1 = rect.y1 + rng_util.random_range(rng, 0, config.BSP_ROOMS_MAX_OFFSET)
        return Rect(x1, y1, w, h)

    @staticmethod
    def _is_possible(candidate: Rect, map_data: GeneratedMap) -> bool:
        if any(room.intersects(candidate) for room in map_data.rooms):
            return False

        # The margin is inclusive of x2/y2, so it spans x1-2 ..= x2+2.
        margin = candidate.expanded(2)
        if margin.x1 < 1 or margin.y1 < 1:
            return False
        if margin.x2 > map_data.width - 2 or margin.y2 > map_data.height - 2:
            return False

        area = map_data.walkable[margin.x1 : margin.x2 + 1, margin.y1 : margin.y2 + 1]
        return not area.any()

    def __repr__(self) -> str:
        return f"BspRooms(max_split={self.max_split})"


class BspInterior(MapFilter):
    """Divides the whole interior into rooms by recursive bisection.

    Rooms share walls one tile thick. Each room is joined to the next one in
    creation order by a corridor between random points inside them.
    """

    def __init__(self, min_room_size: int = config.BSP_INTERIOR_MIN_ROOM_SIZE) -> None:
        self.min_room_size = min_room_size

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        root = Rect(1, 1, new_map.width - 2, new_map.height - 2)

        for room in self._split(rng, root):
            new_map.add_room(room)

        for room, next_room in zip(new_map.rooms, new_map.rooms[1:]):
            start = Point(
                rng_util.random_range(rng, room.x1, room.x2),
                rng_util.random_range(rng, room.y1, room.y2),
            )
            end = Point(
                rng_util.random_range(rng, next_room.x1, next_room.x2),
                rng_util.random_range(rng, next_room.y1, next_room.y2),
            )
            new_map.add_corridor(start, end)

        logger.debug(f"BspInterior created {len(new_map.rooms)} rooms")
        return new_map

    def _split(self, rng: Random, rect: Rect) -> list[Rect]:
        """Bisect ``rect`` and return the leaves in depth-first order.

        A coin flip picks the axis. The first half is one tile short so the
        halves keep a wall between them. Both halves are split again while
        half of the split side is larger than ``min_room_size``.
        """
        width = rect.x2 - rect.x1
        height = rect.y2 - rect.y1
        half_w = width // 2
        half_h = height // 2

        if rng_util.roll_dice(rng, 1, 4) <= 2:
            halves = (
                Rect(rect.x1, rect.y1, half_w - 1, height),
                Rect(rect.x1 + half_w, rect.y1, half_w, height),
            )
            recurse = half_w > self.min_room_size
        else:
            halves = (
                Rect(rect.x1, rect.y1, width, half_h - 1),
                Rect(rect.x1, rect.y1 + half_h, width, half_h),
            )
            recurse = half_h > self.min_room_size

        if not recurse:
            return list(halves)

        leaves: list[Rect] = []
        for half in halves:
            leaves.extend(self._split(rng, half))
        return leaves

    def __repr__(self) -> str:
        return f"BspInterior(min_room_size={self.min_room_size})"


# =============================================================================
# CORRIDORS
# =============================================================================


class NearestCorridors(MapFilter):
    """Connects each room to the closest room not yet connected.

    Rooms are visited in creation order. Distance is measured between room
    centres and ties go to the earlier room. Corridors run centre to centre.
    """

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        rooms = map_data.rooms
        connected: set[int] = set()

        for i, room in enumerate(rooms):
            center = room.center()
            candidates = [
                j for j in range(len(rooms)) if j != i and j not in connected
            ]
            if not candidates:
                continue

            # min() keeps the first of equal distances
            nearest = min(candidates, key=lambda j: center.distance_to(rooms[j].center()))
            new_map.add_corridor(center, rooms[nearest].center())
            connected.add(i)

        logger.debug(f"NearestCorridors carved {len(connected)} corridors")
        return new_map
