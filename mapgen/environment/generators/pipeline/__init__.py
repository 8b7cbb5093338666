"""Filter-based map generation.

This package provides a compositional builder for 2D grid maps. Each filter
transforms a GeneratedMap, and the builder threads a blank map through the
filters in order.

Example usage:
    from mapgen.environment.generators.pipeline import create_pipeline

    builder = create_pipeline("bsp_rooms", width=80, height=50, seed=42)
    map_data = builder.build()

The builder can also be assembled manually for custom configurations:
    from mapgen.environment.generators.pipeline import (
        AreaStartingPosition,
        CullUnreachable,
        DistantExit,
        MapBuilder,
        NearestCorridors,
        SimpleRooms,
        XStart,
        YStart,
    )

    map_data = (
        MapBuilder(80, 50)
        .with_filter(SimpleRooms())
        .with_filter(NearestCorridors())
        .with_filter(AreaStartingPosition(XStart.LEFT, YStart.TOP))
        .with_filter(CullUnreachable())
        .with_filter(DistantExit())
        .build_with_rng(907647352)
    )
"""

from .builder import MapBuilder
from .factory import PIPELINE_NAMES, create_pipeline
from .filter import MapFilter
from .filters import (
    AreaStartingPosition,
    BspInterior,
    BspRooms,
    CellularAutomata,
    CullUnreachable,
    DistantExit,
    DrunkardsWalk,
    DrunkSpawnMode,
    MazeBuilder,
    NearestCorridors,
    NoiseGenerator,
    NoValidFloorError,
    SimpleRooms,
    VoronoiHive,
    XStart,
    YStart,
)

__all__ = [
    "PIPELINE_NAMES",
    "AreaStartingPosition",
    "BspInterior",
    "BspRooms",
    "CellularAutomata",
    "CullUnreachable",
    "DistantExit",
    "DrunkSpawnMode",
    "DrunkardsWalk",
    "MapBuilder",
    "MapFilter",
    "MazeBuilder",
    "NearestCorridors",
    "NoValidFloorError",
    "NoiseGenerator",
    "SimpleRooms",
    "VoronoiHive",
    "XStart",
    "YStart",
    "create_pipeline",
]
