"""Abstract base class for map filters.

Each filter in the pipeline implements the MapFilter interface and turns one
GeneratedMap into another: carving floor, placing rooms, choosing points of
interest, and so on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from random import Random
from typing import TYPE_CHECKING

from mapgen.environment.map import GeneratedMap
from mapgen.util import rng as rng_util

if TYPE_CHECKING:
    from mapgen.types import RandomSeed, TileCoord


class MapFilter(ABC):
    """Abstract base class for map generation filters.

    Filters are applied sequentially by the MapBuilder. A filter never
    modifies the map it is given: it clones it, changes the clone and returns
    that. Configuration is fixed at construction, so a filter instance can be
    reused across builds.

    Subclasses must implement the apply() method.
    """

    @abstractmethod
    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        """Return a transformed copy of ``map_data``.

        Args:
            rng: The build's random source. Filters draw from it in a fixed
                order so builds are reproducible.
            map_data: The map produced by the previous filter.

        Returns:
            A new GeneratedMap with the same dimensions.
        """
        raise NotImplementedError

    def generate(
        self,
        width: TileCoord,
        height: TileCoord,
        seed_or_rng: RandomSeed | Random = None,
    ) -> GeneratedMap:
        """Apply this filter alone to a blank map of the given size."""
        return self.apply(rng_util.create(seed_or_rng), GeneratedMap(width, height))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
