"""Map builder that runs filters in sequence.

The MapBuilder starts from a blank, all-wall GeneratedMap and passes it
through each MapFilter in order, feeding every filter's output to the next.
This enables compositional map generation where each filter focuses on one
aspect of the map.
"""

from __future__ import annotations

import logging
from random import Random
from typing import TYPE_CHECKING, Any

from mapgen import config
from mapgen.environment.map import GeneratedMap
from mapgen.util import rng as rng_util

if TYPE_CHECKING:
    from mapgen.types import RandomSeed, TileCoord

    from .filter import MapFilter

logger = logging.getLogger(__name__)


class MapBuilder:
    """Builds a map by applying filters to a blank map in order.

    Example:
        map_data = (
            MapBuilder(80, 50)
            .with_filter(NoiseGenerator.uniform())
            .with_filter(CellularAutomata())
            .with_filter(AreaStartingPosition(XStart.CENTER, YStart.CENTER))
            .with_filter(CullUnreachable())
            .with_filter(DistantExit())
            .build_with_rng(12345)
        )

    The builder does not check filter ordering. Filters that read a
    starting point (CullUnreachable, DistantExit) must come after one that
    sets it.

    Attributes:
        width: Map width in tiles.
        height: Map height in tiles.
        filters: Filters to apply, in order.
        data: Initial value for ``GeneratedMap.data``.
        seed: Seed used by build(), or None.
    """

    def __init__(
        self,
        width: TileCoord,
        height: TileCoord,
        filters: list[MapFilter] | None = None,
        data: Any = None,
        seed: RandomSeed = None,
    ) -> None:
        """Initialize the builder.

        Args:
            width: Width of the map in tiles.
            height: Height of the map in tiles.
            filters: Optional initial list of filters to apply in order.
            data: Optional caller-defined payload carried on the map.
            seed: Seed used by build(). Overrides config.RANDOM_SEED.

        Raises:
            ValueError: If either dimension is below ``config.MIN_MAP_SIZE``.
        """
        if width < config.MIN_MAP_SIZE or height < config.MIN_MAP_SIZE:
            raise ValueError(
                f"Map must be at least {config.MIN_MAP_SIZE}x{config.MIN_MAP_SIZE}, "
                f"got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.filters: list[MapFilter] = list(filters) if filters else []
        self.data = data
        self.seed = seed

    def with_filter(self, map_filter: MapFilter) -> MapBuilder:
        """Append a filter and return the builder for chaining."""
        self.filters.append(map_filter)
        return self

    def build(self) -> GeneratedMap:
        """Build a map with the builder seed or ``config.RANDOM_SEED``.

        Falls back to a clock-derived seed when neither is set.
        """
        seed = self.seed if self.seed is not None else config.RANDOM_SEED
        if seed is None:
            seed = rng_util.time_seed()
        logger.debug(f"Building map with seed {seed!r}")
        return self.build_with_rng(seed)

    def build_with_rng(self, seed_or_rng: RandomSeed | Random) -> GeneratedMap:
        """Build a map deterministically.

        Args:
            seed_or_rng: An int or str seed, or a ``Random`` to draw from.
                The same seed and filter list always give the same map.

        Returns:
            The map produced by the last filter, or a blank map when no
            filters are attached.
        """
        rng = rng_util.create(seed_or_rng)
        map_data = GeneratedMap(self.width, self.height, data=self.data)

        for map_filter in self.filters:
            logger.debug(f"Applying {map_filter!r} to {map_data!r}")
            map_data = map_filter.apply(rng, map_data)

        logger.debug(
            f"Built {map_data!r}: start={map_data.starting_point}, "
            f"exit={map_data.exit_point}"
        )
        return map_data
