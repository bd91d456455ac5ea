from .level import (
    Collision,
    CollisionKind,
    Creature,
    Faction,
    Level,
    SpawnBlocked,
)

__all__ = [
    "Collision",
    "CollisionKind",
    "Creature",
    "Faction",
    "Level",
    "SpawnBlocked",
]
