"""Map generation algorithms.

- DungeonGenerator: non-overlapping rooms joined into one connected dungeon
  by straight and elbow corridors.
"""

from .base import BaseMapGenerator, GeneratedDungeon
from .dungeon import DungeonGenerator, GenerationConfig, floor_ratio

__all__ = [
    "BaseMapGenerator",
    "DungeonGenerator",
    "GeneratedDungeon",
    "GenerationConfig",
    "floor_ratio",
]
