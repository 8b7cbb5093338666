"""Maze filter using a recursive backtracker.

The maze lives on a logical grid of cells at half the map resolution. Cell
(col, row) is drawn at map tile ((col + 1) * 2, (row + 1) * 2), and every
removed wall opens the tile between two neighbouring cells.
"""

from __future__ import annotations

import logging
from random import Random

import numpy as np

from mapgen import config
from mapgen.environment.grid import WalkableGrid
from mapgen.environment.map import GeneratedMap
from mapgen.util import rng as rng_util

from ..filter import MapFilter

logger = logging.getLogger(__name__)

# Wall slots, in neighbour probe order
TOP = 0
RIGHT = 1
BOTTOM = 2
LEFT = 3


class _Maze:
    """Logical maze grid carved by a depth-first backtracker.

    Attributes:
        cols: Number of cell columns.
        rows: Number of cell rows.
        walls: Bool array of shape (cols, rows, 4), True where a wall stands.
        visited: Bool array of shape (cols, rows).
    """

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.rows = rows
        self.walls = np.ones((cols, rows, 4), dtype=bool)
        self.visited = np.zeros((cols, rows), dtype=bool)

    def _available_neighbours(self, col: int, row: int) -> list[tuple[int, int]]:
        candidates = (
            (col, row - 1),
            (col + 1, row),
            (col, row + 1),
            (col - 1, row),
        )
        return [
            (c, r)
            for c, r in candidates
            if 0 <= c < self.cols and 0 <= r < self.rows and not self.visited[c, r]
        ]

    def _remove_walls(self, current: tuple[int, int], nxt: tuple[int, int]) -> None:
        (col, row), (next_col, next_row) = current, nxt
        match (next_col - col, next_row - row):
            case (-1, 0):
                self.walls[col, row, LEFT] = False
                self.walls[next_col, next_row, RIGHT] = False
            case (1, 0):
                self.walls[col, row, RIGHT] = False
                self.walls[next_col, next_row, LEFT] = False
            case (0, -1):
                self.walls[col, row, TOP] = False
                self.walls[next_col, next_row, BOTTOM] = False
            case (0, 1):
                self.walls[col, row, BOTTOM] = False
                self.walls[next_col, next_row, TOP] = False

    def generate(self, rng: Random, grid: WalkableGrid) -> None:
        """Carve the maze, copying it into ``grid`` periodically and at the end."""
        current = (0, 0)
        backtrack: list[tuple[int, int]] = []
        step = 0

        while True:
            self.visited[current] = True
            neighbours = self._available_neighbours(*current)

            if neighbours:
                if len(neighbours) == 1:
                    nxt = neighbours[0]
                else:
                    nxt = neighbours[rng_util.roll_dice(rng, 1, len(neighbours)) - 1]
                self.visited[nxt] = True
                backtrack.append(current)
                self._remove_walls(current, nxt)
                current = nxt
            elif backtrack:
                current = backtrack.pop()
            else:
                break

            if step % config.MAZE_SNAPSHOT_INTERVAL == 0:
                self.copy_to(grid)
            step += 1

        self.copy_to(grid)
        logger.debug(f"Maze of {self.cols}x{self.rows} cells done in {step} steps")

    def copy_to(self, grid: WalkableGrid) -> None:
        """Redraw ``grid`` from the visited cells and their open walls."""
        grid.walkable[:, :] = False
        for col, row in zip(*np.nonzero(self.visited)):
            x = (int(col) + 1) * 2
            y = (int(row) + 1) * 2
            walls = self.walls[col, row]
            grid.set_walkable(x, y, True)
            if not walls[TOP]:
                grid.set_walkable(x, y - 1, True)
            if not walls[RIGHT]:
                grid.set_walkable(x + 1, y, True)
            if not walls[BOTTOM]:
                grid.set_walkable(x, y + 1, True)
            if not walls[LEFT]:
                grid.set_walkable(x - 1, y, True)


class MazeBuilder(MapFilter):
    """Replaces the map with a perfect maze.

    Any existing floor is discarded. Maps too small to hold a single maze
    cell (width or height below 6) are returned unchanged.
    """

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        cols = new_map.width // 2 - 2
        rows = new_map.height // 2 - 2
        if cols <= 0 or rows <= 0:
            logger.debug(f"Map {new_map.width}x{new_map.height} too small for a maze")
            return new_map

        _Maze(cols, rows).generate(rng, new_map)
        return new_map
