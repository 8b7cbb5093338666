"""Flood-fill cost maps ("Dijkstra maps").

See http://www.roguebasin.com/index.php?title=The_Incredible_Power_of_Dijkstra_Maps

A DijkstraMap holds, for every tile, the cheapest walk cost from a single
source tile. Tiles with no path from the source hold ``UNREACHABLE``.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from mapgen.environment.grid import WalkableGrid
    from mapgen.util.coordinates import Point

# Cost recorded for tiles that cannot be reached from the source.
UNREACHABLE = float(np.finfo(np.float64).max)


class DijkstraMap:
    """Walk cost from one source tile to every tile of a grid.

    Attributes:
        tiles: Float array of shape (width, height) indexed ``[x, y]``, same
            layout as ``WalkableGrid.walkable``.
        width: Grid width in tiles.
        height: Grid height in tiles.
        max_depth: Costs at or above this are discarded. Equal to the number
            of tiles, which no real path can exceed.
    """

    def __init__(self, grid: WalkableGrid, start: Point) -> None:
        self.width = grid.width
        self.height = grid.height
        self.tiles = np.full(
            (grid.width, grid.height), UNREACHABLE, dtype=np.float64, order="F"
        )
        self.max_depth = float(grid.width * grid.height)
        self._build(grid, start)

    def _build(self, grid: WalkableGrid, start: Point) -> None:
        """Relax costs outward from ``start`` using a FIFO work queue.

        This is label-correcting breadth-first relaxation rather than a
        priority-queue Dijkstra: a tile may be queued several times before
        its cost settles. With only two step costs that converges quickly.
        """
        if not grid.in_bounds(start.x, start.y):
            return

        tiles = self.tiles
        tiles[start.x, start.y] = 0.0
        open_list: deque[tuple[int, int, float]] = deque([(start.x, start.y, 0.0)])

        while open_list:
            x, y, depth = open_list.popleft()
            for nx, ny, step_cost in grid.get_available_exits(x, y):
                new_depth = depth + step_cost
                if new_depth >= tiles[nx, ny]:
                    continue
                if new_depth >= self.max_depth:
                    continue
                tiles[nx, ny] = new_depth
                open_list.append((nx, ny, new_depth))

    def cost_at(self, x: int, y: int) -> float:
        """Walk cost to (x, y), or ``UNREACHABLE``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return UNREACHABLE
        return float(self.tiles[x, y])

    def is_reachable(self, x: int, y: int) -> bool:
        return self.cost_at(x, y) < UNREACHABLE

    def flat(self) -> np.ndarray:
        """Costs as a 1D row-major array (a view, not a copy)."""
        return self.tiles.ravel(order="F")
