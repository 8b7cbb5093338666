"""Map generation algorithms for mapgen.

Generation is filter based: a MapBuilder applies MapFilters to a blank map,
one after another. Cave, room, maze and points-of-interest filters can be
combined freely, and named presets are available through create_pipeline().
"""

from .pipeline import (
    PIPELINE_NAMES,
    MapBuilder,
    MapFilter,
    create_pipeline,
)

__all__ = [
    "PIPELINE_NAMES",
    "MapBuilder",
    "MapFilter",
    "create_pipeline",
]
