#!/usr/bin/env python3
"""Benchmark and score every preset map pipeline.

Builds each preset on identical seeds and prints a timing table together with
the average density and start-to-exit path length of the generated maps,
followed by one sample map as text.

Usage:
    uv run python scripts/benchmark_generators.py [preset]
"""

# ruff: noqa: E402  # Allow path setup before importing project modules

from __future__ import annotations

import sys
import timeit
from pathlib import Path

# Add the project root to Python path so running as a script works.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from mapgen import config
from mapgen.environment.generators.pipeline import PIPELINE_NAMES, create_pipeline
from mapgen.environment.map import GeneratedMap
from mapgen.util.metrics import density, path_length

SEEDS = (907647352, 42, 1234, 99, 7)

# ---------------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------------


def _build(name: str, seed: int) -> GeneratedMap:
    return create_pipeline(
        name, config.DEFAULT_MAP_WIDTH, config.DEFAULT_MAP_HEIGHT, seed=seed
    ).build()


def _bench(name: str) -> float:
    """Average ms per build over all seeds."""
    timer = timeit.Timer(lambda: [_build(name, seed) for seed in SEEDS])
    number, total = timer.autorange()
    return (total / number) * 1000 / len(SEEDS)


def _score(name: str) -> tuple[float, float]:
    """Average density and path length over all seeds."""
    maps = [_build(name, seed) for seed in SEEDS]
    avg_density = sum(density(m) for m in maps) / len(maps)
    avg_path = sum(path_length(m, m.starting_point, m.exit_point) for m in maps) / len(
        maps
    )
    return avg_density, avg_path


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> None:
    names = sys.argv[1:] or list(PIPELINE_NAMES)
    unknown = [name for name in names if name not in PIPELINE_NAMES]
    if unknown:
        print(f"Unknown preset(s): {', '.join(unknown)}")
        print(f"Available: {', '.join(PIPELINE_NAMES)}")
        sys.exit(1)

    width, height = config.DEFAULT_MAP_WIDTH, config.DEFAULT_MAP_HEIGHT
    print(f"Map generation benchmark ({width}x{height}, {len(SEEDS)} seeds)")
    print("=" * 66)
    print(f"{'Preset':<20} {'time':>12} {'density':>12} {'path length':>14}")
    print("-" * 66)

    for name in names:
        ms = _bench(name)
        avg_density, avg_path = _score(name)
        print(f"{name:<20} {ms:>10.2f}ms {avg_density:>12.3f} {avg_path:>14.2f}")

    print("-" * 66)
    print("Density below 0.1 or a very short path suggests a degenerate map.")
    print()

    sample = _build(names[0], SEEDS[0])
    print(f"Sample '{names[0]}' map (seed {SEEDS[0]}):")
    print(f"  start={sample.starting_point} exit={sample.exit_point}")
    print(sample)


if __name__ == "__main__":
    main()
