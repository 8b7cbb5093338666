"""Deterministic random number helpers for map generation.

Every build owns exactly one ``random.Random`` instance. It is created from a
seed (or handed in ready-made) by ``MapBuilder.build_with_rng()`` and lent to
each filter in turn, so a fixed seed and a fixed filter list always produce
the same map, in this process or any other.

Usage:
    from mapgen.util import rng

    source = rng.create(12345)
    width = rng.random_range(source, 6, 10)   # 6..9
    roll = rng.roll_dice(source, 1, 4)        # 1..4

String seeds are accepted too ("burrito1"); ``random.Random`` hashes them
with SHA-512, which does not depend on PYTHONHASHSEED.
"""

from __future__ import annotations

import time
from random import Random

from mapgen.types import RandomSeed


def create(seed_or_rng: RandomSeed | Random = None) -> Random:
    """Return a random source for the given seed.

    Args:
        seed_or_rng: An int or str seed, None for system entropy, or an
            existing ``Random`` which is returned as-is so the caller keeps
            control of its state.

    Returns:
        A ``Random`` instance.
    """
    if isinstance(seed_or_rng, Random):
        return seed_or_rng
    return Random(seed_or_rng)


def time_seed() -> int:
    """Derive a seed from the wall clock."""
    return time.time_ns() & 0xFFFF_FFFF_FFFF


def random_range(rng: Random, start: int, end: int) -> int:
    """Return a random integer N such that start <= N < end.

    An empty range (end <= start) yields ``start`` instead of raising, which
    the room generators rely on for rectangles that have collapsed to a
    single tile.
    """
    if end <= start:
        return start
    return rng.randrange(start, end)


def roll_dice(rng: Random, lowest: int, highest: int) -> int:
    """Return a random integer N such that lowest <= N <= highest."""
    return random_range(rng, lowest, highest + 1)
