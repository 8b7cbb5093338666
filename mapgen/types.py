from __future__ import annotations

from typing import TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord: TypeAlias = int  # Always integer tile position

# A single movement option out of a tile: destination x, destination y, cost.
TileExit: TypeAlias = tuple[TileCoord, TileCoord, float]

# =============================================================================
# GENERATION TYPES
# =============================================================================

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed: TypeAlias = int | str | None

# Index into the optional tile type layer. Purely cosmetic, never read by
# the generation algorithms.
TileTypeID: TypeAlias = int
