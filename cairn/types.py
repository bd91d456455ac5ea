from __future__ import annotations

from typing import NewType, TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord: TypeAlias = int  # Always integer tile position

# Manhattan distances between tiles and rectangles, and BFS layer indices.
TileDistance: TypeAlias = int

# =============================================================================
# GAME-RELATED TYPES
# =============================================================================

# Unique identifier for a Creature in a Level. Assigned sequentially and never
# reused, so it stays valid as a key even after the creature is removed.
CreatureId = NewType("CreatureId", int)

# Random seed for deterministic generation (map generation, AI tie-breaks).
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed: TypeAlias = int | str | None
