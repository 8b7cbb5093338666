"""Point-of-interest filters.

These filters run after the terrain is carved:
- AreaStartingPosition: Picks the floor tile nearest to an anchor area
- CullUnreachable: Walls off floor that cannot be reached from the start
- DistantExit: Places the exit on the reachable tile farthest from the start

CullUnreachable and DistantExit need a starting point, so they must come
after AreaStartingPosition in the pipeline.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from random import Random
from typing import TypeVar

import numpy as np

from mapgen.environment.grid import WalkableGrid
from mapgen.environment.map import GeneratedMap
from mapgen.util.coordinates import Point
from mapgen.util.pathfinding import UNREACHABLE, DijkstraMap

from ..filter import MapFilter

logger = logging.getLogger(__name__)

GridT = TypeVar("GridT", bound=WalkableGrid)


class NoValidFloorError(Exception):
    """Raised when a point of interest is requested on a map with no floor."""


class XStart(Enum):
    """Horizontal anchor for the starting position."""

    LEFT = auto()
    CENTER = auto()
    RIGHT = auto()


class YStart(Enum):
    """Vertical anchor for the starting position."""

    TOP = auto()
    CENTER = auto()
    BOTTOM = auto()


class AreaStartingPosition(MapFilter):
    """Sets the starting point to the floor tile nearest an anchor area.

    The anchor sits one tile inside the map edge for LEFT/TOP and
    RIGHT/BOTTOM, or on the centre line for CENTER.
    """

    def __init__(self, x_start: XStart, y_start: YStart) -> None:
        self.x_start = x_start
        self.y_start = y_start

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        new_map.starting_point = self.find(self.x_start, self.y_start, new_map)
        logger.debug(f"Starting point set to {new_map.starting_point}")
        return new_map

    @staticmethod
    def find(x_start: XStart, y_start: YStart, grid: WalkableGrid) -> Point:
        """Return the walkable tile closest to the anchor.

        Ties are broken in favour of the first tile in row-major order.

        Raises:
            NoValidFloorError: If the grid has no walkable tile.
        """
        match x_start:
            case XStart.LEFT:
                seed_x = 1
            case XStart.CENTER:
                seed_x = grid.width // 2
            case XStart.RIGHT:
                seed_x = grid.width - 2

        match y_start:
            case YStart.TOP:
                seed_y = 1
            case YStart.CENTER:
                seed_y = grid.height // 2
            case YStart.BOTTOM:
                seed_y = grid.height - 2

        # Transposed so nonzero() yields tiles in row-major order.
        ys, xs = np.nonzero(grid.walkable.T)
        if xs.size == 0:
            logger.error(
                f"No walkable tile for a starting position on {grid.width}x{grid.height} map"
            )
            raise NoValidFloorError("Map has no walkable tile to start on")

        dist_sq = (xs - seed_x) ** 2 + (ys - seed_y) ** 2
        best = int(np.argmin(dist_sq))
        return Point(int(xs[best]), int(ys[best]))

    def __repr__(self) -> str:
        return f"AreaStartingPosition({self.x_start.name}, {self.y_start.name})"


class DistantExit(MapFilter):
    """Sets the exit point to the reachable tile farthest from the start."""

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        if new_map.starting_point is None:
            logger.warning("DistantExit skipped: map has no starting point")
            return new_map

        new_map.exit_point = self.find(new_map.starting_point, new_map)
        logger.debug(f"Exit point set to {new_map.exit_point}")
        return new_map

    @staticmethod
    def find(start: Point, grid: WalkableGrid) -> Point:
        """Return the reachable tile with the highest walk cost from ``start``.

        Ties go to the first tile in row-major order. When nothing but the
        start itself is reachable, the start is returned.
        """
        costs = DijkstraMap(grid, start).flat()
        reachable = np.where(costs < UNREACHABLE, costs, -1.0)
        best = int(np.argmax(reachable))
        if reachable[best] <= 0.0:
            return start
        return grid.idx_point(best)


class CullUnreachable(MapFilter):
    """Turns every floor tile that cannot be reached from the start into wall."""

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        if map_data.starting_point is None:
            logger.warning("CullUnreachable skipped: map has no starting point")
            return map_data.clone()

        new_map = self.remove_walkable_tiles(map_data.starting_point, map_data)
        logger.debug(
            f"Culled {map_data.floor_count() - new_map.floor_count()} unreachable tiles"
        )
        return new_map

    @staticmethod
    def remove_walkable_tiles(start: Point, grid: GridT) -> GridT:
        """Return a copy of ``grid`` with unreachable floor walled off."""
        new_grid = grid.clone()
        dijkstra = DijkstraMap(grid, start)
        new_grid.walkable[dijkstra.tiles >= UNREACHABLE] = False
        return new_grid
