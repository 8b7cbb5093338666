"""Tests for the map builder, the filter base class and the preset factory."""

from __future__ import annotations

from random import Random
from typing import ClassVar

import pytest

from mapgen import config
from mapgen.environment.generators.pipeline import (
    PIPELINE_NAMES,
    AreaStartingPosition,
    BspInterior,
    BspRooms,
    CellularAutomata,
    CullUnreachable,
    DistantExit,
    DrunkardsWalk,
    MapBuilder,
    MapFilter,
    MazeBuilder,
    NearestCorridors,
    NoiseGenerator,
    NoValidFloorError,
    SimpleRooms,
    VoronoiHive,
    XStart,
    YStart,
    create_pipeline,
)
from mapgen.environment.map import GeneratedMap
from mapgen.util.pathfinding import DijkstraMap
from tests.helpers import assert_border_blocked


class RecordingFilter(MapFilter):
    """Test filter that records its calls and counts them in ``data``."""

    calls: ClassVar[list[str]] = []

    def __init__(self, name: str) -> None:
        self.name = name

    def apply(self, rng: Random, map_data: GeneratedMap) -> GeneratedMap:
        RecordingFilter.calls.append(self.name)
        new_map = map_data.clone()
        if isinstance(new_map.data, dict):
            new_map.data["applied"] = new_map.data.get("applied", 0) + 1
        return new_map


@pytest.fixture(autouse=True)
def reset_recording() -> None:
    RecordingFilter.calls.clear()


# =============================================================================
# MapBuilder
# =============================================================================


class TestMapBuilder:
    """Tests for threading a map through a filter list."""

    def test_no_filters_gives_blank_map(self) -> None:
        """An empty filter list yields an all-wall map."""
        map_data = MapBuilder(20, 10).build_with_rng(1)
        assert (map_data.width, map_data.height) == (20, 10)
        assert map_data.floor_count() == 0
        assert map_data.starting_point is None
        assert map_data.exit_point is None

    def test_filters_run_in_order(self) -> None:
        """Filters run in the order they were added."""
        builder = MapBuilder(10, 10, filters=[RecordingFilter("a")])
        builder.with_filter(RecordingFilter("b")).with_filter(RecordingFilter("c"))
        builder.build_with_rng(1)
        assert RecordingFilter.calls == ["a", "b", "c"]

    def test_with_filter_returns_builder(self) -> None:
        builder = MapBuilder(10, 10)
        assert builder.with_filter(RecordingFilter("a")) is builder

    def test_data_threads_through_filters(self) -> None:
        """Each filter sees the data left by the previous one."""
        data = {"applied": 0}
        map_data = (
            MapBuilder(10, 10, data=data)
            .with_filter(RecordingFilter("a"))
            .with_filter(RecordingFilter("b"))
            .build_with_rng(1)
        )
        assert map_data.data == {"applied": 2}
        # The builder's own copy is never modified
        assert data == {"applied": 0}

    @pytest.mark.parametrize(("width", "height"), [(4, 10), (10, 4), (0, 0)])
    def test_too_small_raises(self, width: int, height: int) -> None:
        """Maps below the minimum size are rejected."""
        with pytest.raises(ValueError):
            MapBuilder(width, height)

    def test_same_seed_same_map(self) -> None:
        """A fixed seed reproduces the layout, rooms and points."""
        def build(seed: int | str) -> GeneratedMap:
            return (
                MapBuilder(80, 50)
                .with_filter(SimpleRooms())
                .with_filter(AreaStartingPosition(XStart.LEFT, YStart.TOP))
                .with_filter(DistantExit())
                .build_with_rng(seed)
            )

        a, b = build(42), build(42)
        assert a == b
        assert a.rooms == b.rooms
        assert a.starting_point == b.starting_point
        assert a.exit_point == b.exit_point
        assert build("burrito1") == build("burrito1")

    def test_accepts_random_instance(self) -> None:
        """A Random instance behaves like its seed."""
        builder = MapBuilder(30, 20).with_filter(NoiseGenerator.uniform())
        assert builder.build_with_rng(Random(5)) == builder.build_with_rng(5)

    def test_build_uses_configured_seed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """build() falls back to the configured seed."""
        monkeypatch.setattr(config, "RANDOM_SEED", 1234)
        builder = MapBuilder(30, 20).with_filter(NoiseGenerator.uniform())
        assert builder.build() == builder.build_with_rng(1234)

    def test_builder_seed_overrides_config(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A seed given to the builder wins over the configured one."""
        monkeypatch.setattr(config, "RANDOM_SEED", 1234)
        builder = MapBuilder(30, 20, seed=99).with_filter(NoiseGenerator.uniform())
        assert builder.build() == builder.build_with_rng(99)

    def test_build_without_seed_still_builds(self) -> None:
        map_data = MapBuilder(30, 20).with_filter(NoiseGenerator.uniform()).build()
        assert_border_blocked(map_data)


class TestMapFilter:
    """Tests for the filter base class."""

    def test_cannot_instantiate_abstract_filter(self) -> None:
        with pytest.raises(TypeError):
            MapFilter()  # type: ignore[abstract]

    def test_generate_applies_to_blank_map(self) -> None:
        map_data = RecordingFilter("solo").generate(12, 8, 1)
        assert RecordingFilter.calls == ["solo"]
        assert (map_data.width, map_data.height) == (12, 8)

    def test_generate_matches_single_filter_build(self) -> None:
        """generate() is a one-filter build."""
        assert SimpleRooms().generate(80, 50, 7) == MapBuilder(
            80, 50, filters=[SimpleRooms()]
        ).build_with_rng(7)


# =============================================================================
# Presets
# =============================================================================


class TestCreatePipeline:
    """Tests for the named preset pipelines."""

    @pytest.mark.parametrize("name", PIPELINE_NAMES)
    def test_preset_produces_playable_map(self, name: str) -> None:
        """Every preset yields a reachable exit and no stranded floor."""
        map_data = create_pipeline(name, 80, 50, seed=907647352).build()

        assert map_data.starting_point is not None
        assert map_data.exit_point is not None
        start, exit_point = map_data.starting_point, map_data.exit_point
        assert map_data.is_walkable(start.x, start.y)
        assert map_data.is_walkable(exit_point.x, exit_point.y)

        dm = DijkstraMap(map_data, start)
        assert dm.is_reachable(exit_point.x, exit_point.y)
        # Unreachable floor has been culled
        assert int((dm.tiles < dm.max_depth).sum()) == map_data.floor_count()

    def test_preset_ends_with_points_of_interest(self) -> None:
        builder = create_pipeline("maze", 40, 30)
        assert [type(f) for f in builder.filters[-3:]] == [
            AreaStartingPosition,
            CullUnreachable,
            DistantExit,
        ]

    def test_preset_seed_is_deterministic(self) -> None:
        a = create_pipeline("simple_rooms", 80, 50, seed=3).build()
        b = create_pipeline("simple_rooms", 80, 50, seed=3).build()
        assert a == b
        assert a.exit_point == b.exit_point

    def test_unknown_name_raises(self) -> None:
        """Unrecognized preset names are rejected."""
        with pytest.raises(ValueError, match="Unknown pipeline"):
            create_pipeline("castle", 80, 50)

    @pytest.mark.parametrize(
        ("name", "width", "height"),
        [("maze", 5, 5), ("simple_rooms", 7, 7), ("bsp_rooms", 10, 10)],
    )
    def test_preset_below_its_minimum_has_no_floor(
        self, name: str, width: int, height: int
    ) -> None:
        """Presets with a fixed minimum size leave nowhere to start below it."""
        with pytest.raises(NoValidFloorError):
            create_pipeline(name, width, height, seed=1).build()

    @pytest.mark.parametrize(
        ("name", "width", "height"),
        [("maze", 6, 6), ("bsp_interior", 5, 5)],
    )
    def test_preset_at_its_minimum_builds(
        self, name: str, width: int, height: int
    ) -> None:
        map_data = create_pipeline(name, width, height, seed=1).build()
        assert map_data.starting_point is not None
        assert map_data.exit_point is not None


# =============================================================================
# Every filter
# =============================================================================


ALL_FILTERS: list[MapFilter] = [
    NoiseGenerator(),
    CellularAutomata(),
    DrunkardsWalk.open_area(),
    DrunkardsWalk.fearful_symmetry(),
    VoronoiHive(),
    SimpleRooms(),
    BspRooms(),
    BspInterior(),
    NearestCorridors(),
    MazeBuilder(),
    AreaStartingPosition(XStart.RIGHT, YStart.BOTTOM),
    DistantExit(),
    CullUnreachable(),
]


class TestEveryFilter:
    """Contract checks that every built-in filter honours."""

    @pytest.fixture
    def seeded_map(self) -> GeneratedMap:
        """A noisy 31x21 map with a starting point already placed."""
        noise = NoiseGenerator.uniform().generate(31, 21, 11)
        return AreaStartingPosition(XStart.CENTER, YStart.CENTER).apply(
            Random(11), noise
        )

    @pytest.mark.parametrize("map_filter", ALL_FILTERS, ids=repr)
    def test_keeps_map_size(
        self, map_filter: MapFilter, seeded_map: GeneratedMap
    ) -> None:
        """Filters never change the map dimensions."""
        result = map_filter.apply(Random(3), seeded_map)
        assert (result.width, result.height) == (31, 21)
        assert result.walkable.shape == (31, 21)

    @pytest.mark.parametrize("map_filter", ALL_FILTERS, ids=repr)
    def test_does_not_modify_input(
        self, map_filter: MapFilter, seeded_map: GeneratedMap
    ) -> None:
        """Filters return a new map and leave their input alone."""
        before = seeded_map.clone()
        map_filter.apply(Random(3), seeded_map)
        assert seeded_map == before
        assert seeded_map.starting_point == before.starting_point
