"""
Configuration constants.

Centralizes all magic numbers and default values used by the map generators.
Organized by functional area for easy maintenance.
"""

from mapgen.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

# Seed used by MapBuilder.build(). None means "derive one from the clock".
RANDOM_SEED: RandomSeed = None
# RANDOM_SEED = "burrito1"

# =============================================================================
# MAP DIMENSIONS
# =============================================================================

# Smallest width/height the generators are defined for. Several algorithms
# inset their work area by two tiles on each side.
MIN_MAP_SIZE = 5

DEFAULT_MAP_WIDTH = 80
DEFAULT_MAP_HEIGHT = 50

# =============================================================================
# MOVEMENT COSTS (cost map)
# =============================================================================

CARDINAL_MOVE_COST = 1.0
DIAGONAL_MOVE_COST = 1.45  # sqrt(2) rounded to two decimals

# =============================================================================
# CAVE GENERATORS
# =============================================================================

# Noise: probability that an interior cell stays a wall
NOISE_PROBABILITY = 0.5

# Cellular automata smoothing passes
CELLULAR_AUTOMATA_ITERATIONS = 15

# Drunkard's walk
DRUNKARD_LIFETIME = 400  # Steps per digger
# Hard stop for floor targets that can never be reached (e.g. floor_percent
# above the interior fraction of the map).
DRUNKARD_MAX_DIGGERS = 10_000

# Voronoi hive
VORONOI_SEED_COUNT = 64

# =============================================================================
# ROOM GENERATORS
# =============================================================================

# BSP interior: stop splitting once half of a side is this small
BSP_INTERIOR_MIN_ROOM_SIZE = 8

# BSP rooms: number of placement attempts
BSP_ROOMS_MAX_SPLIT = 240
BSP_ROOMS_MAX_OFFSET = 6  # Exclusive upper bound of the random corner offset
BSP_ROOMS_MAX_SIZE = 20

# Simple rooms
SIMPLE_ROOMS_MAX_ROOMS = 30
SIMPLE_ROOMS_MIN_SIZE = 6
SIMPLE_ROOMS_MAX_SIZE = 10

# =============================================================================
# MAZE
# =============================================================================

# The maze is copied into the grid every N backtracker steps
MAZE_SNAPSHOT_INTERVAL = 50
