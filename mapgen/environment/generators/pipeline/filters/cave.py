"""Cave generation filters.

These filters carve organic, cave-like floor:
- NoiseGenerator: Seeds the interior with random floor
- CellularAutomata: Smooths noise into caverns using neighbour-counting rules
- DrunkardsWalk: Random-walk diggers carve until a floor target is met
- VoronoiHive: Carves cells around random seed points, leaving thin walls
  on region borders

NoiseGenerator followed by CellularAutomata is the classic cave recipe.

Tuning guide for noise + automata:
- probability=0.5, iterations=15 -> balanced caves
- probability=0.4 -> more open areas
- probability=0.55 -> tighter, more enclosed, more disconnected pockets
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from random import Random

import numpy as np

from mapgen import config
from mapgen.environment.grid import Symmetry
from mapgen.environment.map import GeneratedMap
from mapgen.util import rng as rng_util

from ..filter import MapFilter

logger = logging.getLogger(__name__)


# =============================================================================
# NOISE
# =============================================================================


class NoiseGenerator(MapFilter):
    """Randomly sets each interior tile to floor or wall.

    The outermost ring of the map is left untouched.
    """

    def __init__(self, probability: float = config.NOISE_PROBABILITY) -> None:
        """Initialize the noise filter.

        Args:
            probability: Chance in [0, 1] that an interior tile becomes wall.
                Resolution is whole percent.

        Raises:
            ValueError: If probability is outside [0, 1].
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"probability must be in [0, 1], got {probability}")
        self.probability = probability

    @classmethod
    def uniform(cls) -> NoiseGenerator:
        """Noise with an even chance of floor and wall."""
        return cls(0.5)

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        threshold = int(self.probability * 100)
        walkable = new_map.walkable

        for y in range(1, new_map.height - 1):
            for x in range(1, new_map.width - 1):
                roll = rng.randrange(100)
                walkable[x, y] = roll > threshold

        return new_map

    def __repr__(self) -> str:
        return f"NoiseGenerator(probability={self.probability})"


# =============================================================================
# CELLULAR AUTOMATA
# =============================================================================


def apply_iteration(walkable: np.ndarray) -> np.ndarray:
    """Run one cellular automata step over a walkable array.

    Each interior tile counts its blocked 8-neighbours in the input array.
    It becomes wall when that count is above 4 or exactly 0, and floor
    otherwise. Border tiles are copied unchanged.

    Args:
        walkable: Bool array of shape (width, height).

    Returns:
        A new bool array with the same shape and layout.
    """
    result = walkable.copy(order="F")
    width, height = walkable.shape
    if width < 3 or height < 3:
        return result

    blocked = (~walkable).astype(np.int8)
    neighbours = np.zeros((width - 2, height - 2), dtype=np.int8)
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            neighbours += blocked[1 + dx : width - 1 + dx, 1 + dy : height - 1 + dy]

    result[1:-1, 1:-1] = ~((neighbours > 4) | (neighbours == 0))
    return result


class CellularAutomata(MapFilter):
    """Smooths a noisy map into caverns.

    Every iteration reads only the previous iteration's result, so the
    outcome does not depend on scan order. Uses no randomness.
    """

    def __init__(
        self, iterations: int = config.CELLULAR_AUTOMATA_ITERATIONS
    ) -> None:
        self.iterations = iterations

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        for _ in range(self.iterations):
            new_map.walkable = apply_iteration(new_map.walkable)
        return new_map

    def __repr__(self) -> str:
        return f"CellularAutomata(iterations={self.iterations})"


# =============================================================================
# DRUNKARD'S WALK
# =============================================================================


class DrunkSpawnMode(Enum):
    """Where each digger after the first one starts."""

    STARTING_POINT = auto()  # Always the map centre
    RANDOM = auto()  # Anywhere inside the border


class DrunkardsWalk(MapFilter):
    """Carves floor with random-walk diggers until a floor target is reached.

    The first digger always starts at the map centre, which is also painted
    floor before any digging. Each digger paints its tile, then staggers one
    step west, east, north or south, never onto the outermost ring. It does
    this ``lifetime`` times before the next digger spawns.
    """

    def __init__(
        self,
        spawn_mode: DrunkSpawnMode,
        lifetime: int,
        floor_percent: float,
        brush_size: int,
        symmetry: Symmetry,
    ) -> None:
        """Initialize the drunkard's walk.

        Args:
            spawn_mode: Where later diggers spawn.
            lifetime: Steps taken by each digger.
            floor_percent: Target fraction of the whole map that is floor.
            brush_size: Size of the square each step paints.
            symmetry: Mirroring applied to every painted tile.

        Raises:
            ValueError: If floor_percent is outside [0, 1].
        """
        if not 0.0 <= floor_percent <= 1.0:
            raise ValueError(f"floor_percent must be in [0, 1], got {floor_percent}")
        self.spawn_mode = spawn_mode
        self.lifetime = lifetime
        self.floor_percent = floor_percent
        self.brush_size = brush_size
        self.symmetry = symmetry

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    @classmethod
    def open_area(cls) -> DrunkardsWalk:
        return cls(
            DrunkSpawnMode.STARTING_POINT,
            config.DRUNKARD_LIFETIME,
            0.5,
            1,
            Symmetry.NONE,
        )

    @classmethod
    def open_halls(cls) -> DrunkardsWalk:
        return cls(
            DrunkSpawnMode.RANDOM, config.DRUNKARD_LIFETIME, 0.5, 1, Symmetry.NONE
        )

    @classmethod
    def winding_passages(cls) -> DrunkardsWalk:
        return cls(
            DrunkSpawnMode.RANDOM, config.DRUNKARD_LIFETIME, 0.4, 1, Symmetry.NONE
        )

    @classmethod
    def fat_passages(cls) -> DrunkardsWalk:
        return cls(
            DrunkSpawnMode.RANDOM, config.DRUNKARD_LIFETIME, 0.4, 2, Symmetry.NONE
        )

    @classmethod
    def fearful_symmetry(cls) -> DrunkardsWalk:
        return cls(
            DrunkSpawnMode.RANDOM, config.DRUNKARD_LIFETIME, 0.4, 1, Symmetry.BOTH
        )

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        width, height = new_map.width, new_map.height
        start_x, start_y = width // 2, height // 2
        new_map.set_walkable(start_x, start_y, True)

        desired_floor = int(self.floor_percent * width * height)
        digger_count = 0

        while new_map.floor_count() < desired_floor:
            if digger_count >= config.DRUNKARD_MAX_DIGGERS:
                logger.warning(
                    f"DrunkardsWalk stopped after {digger_count} diggers with "
                    f"{new_map.floor_count()}/{desired_floor} floor tiles"
                )
                break

            if digger_count == 0 or self.spawn_mode == DrunkSpawnMode.STARTING_POINT:
                x, y = start_x, start_y
            else:
                x = rng_util.roll_dice(rng, 1, width - 3) + 1
                y = rng_util.roll_dice(rng, 1, height - 3) + 1

            for _ in range(self.lifetime):
                new_map.paint(self.symmetry, self.brush_size, x, y)
                match rng_util.roll_dice(rng, 1, 4):
                    case 1:
                        if x > 1:
                            x -= 1
                    case 2:
                        if x < width - 2:
                            x += 1
                    case 3:
                        if y > 1:
                            y -= 1
                    case _:
                        if y < height - 2:
                            y += 1

            digger_count += 1

        logger.debug(f"DrunkardsWalk used {digger_count} diggers")
        return new_map

    def __repr__(self) -> str:
        return (
            f"DrunkardsWalk({self.spawn_mode.name}, lifetime={self.lifetime}, "
            f"floor_percent={self.floor_percent}, brush_size={self.brush_size}, "
            f"symmetry={self.symmetry.name})"
        )


# =============================================================================
# VORONOI HIVE
# =============================================================================


class VoronoiHive(MapFilter):
    """Carves a honeycomb of cells around random seed points.

    Every tile belongs to its nearest seed. Interior tiles with fewer than
    two orthogonal neighbours in a different region become floor, leaving
    walls along the region borders.
    """

    def __init__(self, n_seeds: int = config.VORONOI_SEED_COUNT) -> None:
        self.n_seeds = n_seeds

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        new_map = map_data.clone()
        width, height = new_map.width, new_map.height

        # Seeds are drawn from [1, w-1] x [1, h-1], so only that many exist.
        n_seeds = min(self.n_seeds, (width - 1) * (height - 1))
        if n_seeds <= 0:
            return new_map

        seeds: list[tuple[int, int]] = []
        seen: set[tuple[int, int]] = set()
        while len(seeds) < n_seeds:
            seed = (
                rng_util.roll_dice(rng, 1, width - 1),
                rng_util.roll_dice(rng, 1, height - 1),
            )
            if seed not in seen:
                seen.add(seed)
                seeds.append(seed)

        membership = self._membership(width, height, np.array(seeds))

        interior = membership[1:-1, 1:-1]
        different = (
            (membership[:-2, 1:-1] != interior).astype(np.int8)
            + (membership[2:, 1:-1] != interior)
            + (membership[1:-1, :-2] != interior)
            + (membership[1:-1, 2:] != interior)
        )
        new_map.walkable[1:-1, 1:-1] |= different < 2

        logger.debug(f"VoronoiHive carved {n_seeds} regions")
        return new_map

    @staticmethod
    def _membership(width: int, height: int, seeds: np.ndarray) -> np.ndarray:
        """Index of the nearest seed for every tile, first seed on ties."""
        xs, ys = np.indices((width, height))
        dx = xs[..., np.newaxis] - seeds[:, 0]
        dy = ys[..., np.newaxis] - seeds[:, 1]
        return np.argmin(dx * dx + dy * dy, axis=2)

    def __repr__(self) -> str:
        return f"VoronoiHive(n_seeds={self.n_seeds})"
