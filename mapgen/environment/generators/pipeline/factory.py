"""Factory functions for creating pre-configured pipelines.

These functions provide convenient ways to create common builder
configurations without needing to manually assemble filters. Every preset
ends with the same points-of-interest stage: a start near the map centre,
unreachable floor culled, and an exit as far from the start as possible.

Available presets:
- "cellular_automata": Noise smoothed into caverns
- "drunkards_walk": Random-walk open halls
- "maze": Perfect maze
- "voronoi": Voronoi hive
- "bsp_interior": Adjoining rooms filling the whole interior
- "bsp_rooms": Separated rooms packed by space partitioning
- "simple_rooms": Scattered rooms

Smallest map each preset can fill:
- "maze": 6x6. Smaller maps hold no maze cell.
- "simple_rooms": 8x8, the smallest room plus a wall on every side.
- "bsp_rooms": 11x11, the smallest room plus its two tile margin.
- "cellular_automata", "voronoi": no fixed minimum, but on small maps
  (8x8 and below) some seeds leave no floor at all.
- "drunkards_walk", "bsp_interior": any size MapBuilder accepts.

Below these sizes ``build()`` raises NoValidFloorError when the start is
placed.
"""

from __future__ import annotations

from collections.abc import Callable

from mapgen.types import RandomSeed

from .builder import MapBuilder
from .filter import MapFilter
from .filters import (
    AreaStartingPosition,
    BspInterior,
    BspRooms,
    CellularAutomata,
    CullUnreachable,
    DistantExit,
    DrunkardsWalk,
    MazeBuilder,
    NearestCorridors,
    NoiseGenerator,
    SimpleRooms,
    VoronoiHive,
    XStart,
    YStart,
)

_PRESETS: dict[str, Callable[[], list[MapFilter]]] = {
    "cellular_automata": lambda: [NoiseGenerator.uniform(), CellularAutomata()],
    "drunkards_walk": lambda: [DrunkardsWalk.open_halls()],
    "maze": lambda: [MazeBuilder()],
    "voronoi": lambda: [VoronoiHive()],
    "bsp_interior": lambda: [BspInterior()],
    "bsp_rooms": lambda: [BspRooms(), NearestCorridors()],
    "simple_rooms": lambda: [SimpleRooms(), NearestCorridors()],
}

PIPELINE_NAMES: tuple[str, ...] = tuple(_PRESETS)


def create_pipeline(
    name: str,
    width: int,
    height: int,
    seed: RandomSeed = None,
) -> MapBuilder:
    """Create a pre-configured builder by name.

    Args:
        name: One of ``PIPELINE_NAMES``.
        width: Map width in tiles.
        height: Map height in tiles.
        seed: Optional random seed used by ``MapBuilder.build()``.

    Returns:
        A configured MapBuilder ready to build maps.

    Raises:
        ValueError: If the pipeline name is not recognized.
    """
    preset = _PRESETS.get(name)
    if preset is None:
        raise ValueError(f"Unknown pipeline name: {name!r}")

    filters = [
        *preset(),
        AreaStartingPosition(XStart.CENTER, YStart.CENTER),
        CullUnreachable(),
        DistantExit(),
    ]
    return MapBuilder(width, height, filters=filters, seed=seed)
