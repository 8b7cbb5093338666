"""Map filters for the pipeline builder.

Each filter turns one GeneratedMap into a new one:
- Cave filters: Noise, cellular automata, drunkard's walk, Voronoi hive
- Room filters: Simple rooms, BSP rooms, BSP interior, nearest corridors
- Maze filter: Recursive backtracker maze
- Points of interest: Starting position, exit, unreachable culling
"""

from .cave import (
    CellularAutomata,
    DrunkardsWalk,
    DrunkSpawnMode,
    NoiseGenerator,
    VoronoiHive,
)
from .maze import MazeBuilder
from .poi import (
    AreaStartingPosition,
    CullUnreachable,
    DistantExit,
    NoValidFloorError,
    XStart,
    YStart,
)
from .rooms import BspInterior, BspRooms, NearestCorridors, SimpleRooms

__all__ = [
    "AreaStartingPosition",
    "BspInterior",
    "BspRooms",
    "CellularAutomata",
    "CullUnreachable",
    "DistantExit",
    "DrunkSpawnMode",
    "DrunkardsWalk",
    "MazeBuilder",
    "NearestCorridors",
    "NoValidFloorError",
    "NoiseGenerator",
    "SimpleRooms",
    "VoronoiHive",
    "XStart",
    "YStart",
]
