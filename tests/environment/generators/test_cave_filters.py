"""Tests for the cave filters: noise, cellular automata, drunkard's walk, Voronoi."""

from __future__ import annotations

from collections.abc import Callable
from random import Random

import numpy as np
import pytest

from mapgen import config
from mapgen.environment.generators.pipeline import (
    CellularAutomata,
    DrunkardsWalk,
    DrunkSpawnMode,
    MapBuilder,
    NoiseGenerator,
    VoronoiHive,
)
from mapgen.environment.generators.pipeline.filters.cave import apply_iteration
from mapgen.environment.grid import Symmetry
from mapgen.environment.map import GeneratedMap
from tests.helpers import assert_border_blocked

# =============================================================================
# NoiseGenerator
# =============================================================================


class TestNoiseGenerator:
    """Tests for random interior noise."""

    def test_border_untouched(self) -> None:
        """Noise never opens the outer ring."""
        map_data = NoiseGenerator.uniform().generate(80, 50, 1)
        assert_border_blocked(map_data)
        assert map_data.floor_count() > 0

    def test_probability_one_keeps_everything_wall(self) -> None:
        """Every roll falls at or below the threshold."""
        map_data = NoiseGenerator(1.0).generate(20, 20, 1)
        assert map_data.floor_count() == 0

    def test_same_seed_same_noise(self) -> None:
        assert NoiseGenerator(0.45).generate(30, 20, 5) == NoiseGenerator(
            0.45
        ).generate(30, 20, 5)

    def test_invalid_probability(self) -> None:
        """Probabilities outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            NoiseGenerator(1.5)


# =============================================================================
# CellularAutomata
# =============================================================================


class TestCellularAutomata:
    """Tests for the smoothing rule and the filter built on it."""

    def test_iteration_surrounded_by_walls_becomes_wall(self) -> None:
        """A tile with eight wall neighbours stays wall."""
        walkable = np.zeros((3, 3), dtype=bool, order="F")
        assert not apply_iteration(walkable)[1, 1]

    def test_iteration_few_wall_neighbours_becomes_floor(self) -> None:
        """A tile with one to four wall neighbours opens up."""
        walkable = np.zeros((3, 3), dtype=bool, order="F")
        walkable[:, 0:2] = True  # top two rows open
        assert apply_iteration(walkable)[1, 1]

    def test_iteration_no_wall_neighbours_becomes_wall(self) -> None:
        """A tile with no wall neighbours closes."""
        walkable = np.ones((3, 3), dtype=bool, order="F")
        assert not apply_iteration(walkable)[1, 1]

    def test_iteration_reads_previous_generation_only(self) -> None:
        """The result must not depend on cells updated earlier in the same pass."""
        walkable = np.zeros((5, 5), dtype=bool, order="F")
        walkable[1:4, 1:3] = True
        result = apply_iteration(walkable)

        expected = walkable.copy()
        for x in range(1, 4):
            for y in range(1, 4):
                blocked = sum(
                    not walkable[x + dx, y + dy]
                    for dx in (-1, 0, 1)
                    for dy in (-1, 0, 1)
                    if (dx, dy) != (0, 0)
                )
                expected[x, y] = not (blocked > 4 or blocked == 0)
        assert np.array_equal(result, expected)

    def test_caves_keep_closed_border(self) -> None:
        map_data = (
            MapBuilder(80, 50)
            .with_filter(NoiseGenerator.uniform())
            .with_filter(CellularAutomata())
            .build_with_rng(907647352)
        )
        assert_border_blocked(map_data)
        assert map_data.floor_count() > 0

    def test_no_iterations_is_identity(self) -> None:
        """Zero smoothing passes leave the map unchanged."""
        noise = NoiseGenerator.uniform().generate(20, 20, 3)
        assert CellularAutomata(iterations=0).apply(Random(1), noise) == noise


# =============================================================================
# DrunkardsWalk
# =============================================================================


class TestDrunkardsWalk:
    """Tests for random-walk digging and its presets."""

    @pytest.mark.parametrize(
        "preset",
        [
            DrunkardsWalk.open_area,
            DrunkardsWalk.open_halls,
            DrunkardsWalk.winding_passages,
            DrunkardsWalk.fat_passages,
        ],
    )
    def test_presets_reach_floor_target(
        self, preset: Callable[[], DrunkardsWalk]
    ) -> None:
        walk = preset()
        map_data = walk.generate(80, 50, 907647352)
        assert map_data.floor_count() >= int(walk.floor_percent * 80 * 50)
        assert_border_blocked(map_data)

    def test_fearful_symmetry_reaches_target(self) -> None:
        walk = DrunkardsWalk.fearful_symmetry()
        map_data = walk.generate(80, 50, 1)
        assert map_data.floor_count() >= int(0.4 * 80 * 50)

    def test_centre_is_floor(self) -> None:
        """The first digger always starts at the map centre."""
        map_data = DrunkardsWalk.winding_passages().generate(40, 30, 2)
        assert map_data.is_walkable(20, 15)

    def test_preset_configuration(self) -> None:
        walk = DrunkardsWalk.fat_passages()
        assert walk.spawn_mode == DrunkSpawnMode.RANDOM
        assert walk.lifetime == 400
        assert walk.floor_percent == 0.4
        assert walk.brush_size == 2
        assert walk.symmetry == Symmetry.NONE

    def test_unreachable_target_stops_at_digger_cap(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An impossible floor target gives up with a warning."""
        monkeypatch.setattr(config, "DRUNKARD_MAX_DIGGERS", 3)
        walk = DrunkardsWalk(DrunkSpawnMode.RANDOM, 10, 1.0, 1, Symmetry.NONE)
        map_data = walk.generate(10, 10, 1)
        assert map_data.floor_count() < 100

    def test_invalid_floor_percent(self) -> None:
        """Floor targets outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            DrunkardsWalk(DrunkSpawnMode.RANDOM, 10, -0.1, 1, Symmetry.NONE)


# =============================================================================
# VoronoiHive
# =============================================================================


class TestVoronoiHive:
    """Tests for the Voronoi honeycomb filter."""

    def test_hive_keeps_closed_border(self) -> None:
        map_data = VoronoiHive().generate(80, 50, 907647352)
        assert_border_blocked(map_data)
        assert 0 < map_data.floor_count() < 78 * 48

    def test_same_seed_same_hive(self) -> None:
        assert VoronoiHive().generate(40, 30, 9) == VoronoiHive().generate(40, 30, 9)

    def test_seed_count_is_clamped_to_available_positions(self) -> None:
        """Asking for more seeds than tiles still terminates."""
        map_data = VoronoiHive(n_seeds=1000).generate(5, 5, 1)
        assert map_data.walkable.shape == (5, 5)

    def test_single_region_opens_whole_interior(self) -> None:
        """With one seed there are no region borders."""
        map_data = VoronoiHive(n_seeds=1).apply(Random(1), GeneratedMap(10, 8))
        assert map_data.walkable[1:-1, 1:-1].all()
