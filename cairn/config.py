"""
Configuration constants.

Centralizes the tunable values of the spatial core. Organized by functional
area for easy maintenance.
"""

from cairn.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED: RandomSeed = "burrito1"

# =============================================================================
# DUNGEON GENERATION
# =============================================================================

# Tile region the dungeon is generated into (border included).
DUNGEON_X = 0
DUNGEON_Y = 0
DUNGEON_WIDTH = 64
DUNGEON_HEIGHT = 36

# Room placement stops once this fraction of the region is floor.
MIN_FLOOR_RATIO = 0.35

# Room side lengths, in tiles (inclusive bounds).
MIN_ROOM_SIZE = 4
MAX_ROOM_SIZE = 10

# Rejected candidate rooms tolerated before placement gives up.
MAX_ROOM_RETRIES = 100

# Connecting stops only after the rooms form one set AND the latest corridor
# spanned more than this many tiles.
CONNECTION_SLACK = 3

# =============================================================================
# VISION
# =============================================================================

# Maximum row distance scanned by Level.update_vision (None = unlimited).
VISION_RADIUS: int | None = None

# Without a radius, a scan that gets deeper than this is taken to mean the
# blocking predicate does not enclose the viewer, and raises.
FOV_MAX_DEPTH = 1024
