"""Map quality metrics.

These can be used to score a single map or, averaged over many generated
maps, a generator configuration. Very low values usually mean a degenerate
map that should be regenerated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mapgen.util.pathfinding import DijkstraMap

if TYPE_CHECKING:
    from mapgen.environment.grid import WalkableGrid
    from mapgen.util.coordinates import Point


def density(grid: WalkableGrid) -> float:
    """Fraction of tiles that are walkable, in [0, 1].

    Below roughly 0.1 the map is probably too degenerate to play.
    """
    total = grid.walkable.size
    if total == 0:
        return 0.0
    return grid.floor_count() / total


def path_length(
    grid: WalkableGrid, starting_point: Point | None, exit_point: Point | None
) -> float:
    """Walk cost of the shortest path from the starting point to the exit.

    Returns 0.0 when either point is unset, and the cost map's unreachable
    sentinel when the exit cannot be reached. A very short path usually means
    a degenerate map.
    """
    if starting_point is None or exit_point is None:
        return 0.0
    dijkstra = DijkstraMap(grid, starting_point)
    return dijkstra.cost_at(exit_point.x, exit_point.y)
