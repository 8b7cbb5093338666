from __future__ import annotations

from mapgen.environment.grid import WalkableGrid
from mapgen.environment.map import GeneratedMap


def map_from_text(text: str) -> GeneratedMap:
    """Build a GeneratedMap with the walkable layout of a text grid."""
    grid = WalkableGrid.from_text(text)
    map_data = GeneratedMap(grid.width, grid.height)
    map_data.walkable[:, :] = grid.walkable
    return map_data


def assert_border_blocked(grid: WalkableGrid) -> None:
    """Assert that the outermost ring of tiles is all wall."""
    assert not grid.walkable[0, :].any()
    assert not grid.walkable[-1, :].any()
    assert not grid.walkable[:, 0].any()
    assert not grid.walkable[:, -1].any()
