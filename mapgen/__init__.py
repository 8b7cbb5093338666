"""Procedural 2D grid map generation.

Maps are built by running a sequence of filters over a walkable grid. See
``mapgen.environment.generators.pipeline`` for the builder and filters.
"""

from mapgen.environment.grid import Symmetry, WalkableGrid
from mapgen.environment.map import GeneratedMap, RoomBasedMap
from mapgen.util.coordinates import Point, Rect

__all__ = [
    "GeneratedMap",
    "Point",
    "Rect",
    "RoomBasedMap",
    "Symmetry",
    "WalkableGrid",
]
