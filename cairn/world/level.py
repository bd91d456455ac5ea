"""The level: terrain, the creatures standing on it, and what the player sees.

The spatial engines never touch creatures. The level turns its state into the
plain predicates they take (``blocks_sight``, "is this tile held by faction
X", ...), so creatures can be stored however suits the game layer. Here they
live in an arena keyed by :data:`~cairn.types.CreatureId`, with a position
index for collision lookups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from cairn import config
from cairn.environment.dijkstra_map import DijkstraMap
from cairn.environment.fov import compute_visible
from cairn.environment.generators import DungeonGenerator, GenerationConfig
from cairn.environment.tiles import Tile, TileMap, Wall
from cairn.types import CreatureId
from cairn.util import rng
from cairn.util.coordinates import Point, Vector

if TYPE_CHECKING:
    from cairn.util.rng import RNG

logger = logging.getLogger(__name__)

_rng = rng.get("world.spawn")


class Faction(Enum):
    PLAYER = auto()
    GOBLIN = auto()


@dataclass
class Creature:
    """Position and allegiance only; stats and combat live elsewhere."""

    id: CreatureId
    faction: Faction
    coords: Point


class CollisionKind(Enum):
    OUT_OF_BOUNDS = auto()
    WALL = auto()
    CREATURE = auto()


@dataclass(frozen=True)
class Collision:
    """Why a tile cannot be entered."""

    kind: CollisionKind
    creature: Creature | None = None


class SpawnBlocked(ValueError):
    """Raised when a creature cannot be placed where it was asked to go."""

    def __init__(self, coords: Point | None, collision: Collision | None) -> None:
        self.coords = coords
        self.collision = collision
        if coords is None:
            super().__init__("No unoccupied floor tile left to spawn on")
        else:
            super().__init__(f"Cannot spawn at {coords}: {collision}")


class Level:
    """Owns the TileMap for the dungeon's lifetime plus per-turn derived state."""

    def __init__(self, tiles: TileMap) -> None:
        self.tiles = tiles
        self.creatures: dict[CreatureId, Creature] = {}
        self._occupants: dict[Point, CreatureId] = {}
        self._next_id = 0
        # Points the player can currently see.
        self.vision: set[Point] = set()
        # Tiles the player remembers seeing.
        self.memory: dict[Point, Tile] = {}
        self.dijkstra_maps: dict[Faction, DijkstraMap] = {}

    @classmethod
    def generate(
        cls, generation_config: GenerationConfig | None = None, rng: RNG | None = None
    ) -> Level:
        """Generate a fresh dungeon and wrap it in an empty level."""
        if generation_config is None:
            generation_config = GenerationConfig.default()
        dungeon = DungeonGenerator(generation_config, rng).generate()
        return cls(dungeon.tiles)

    # ------------------------------------------------------------------
    # Terrain queries
    # ------------------------------------------------------------------
    def blocks_sight(self, point: Point) -> bool:
        """Walls and points outside the map stop vision."""
        return self.tiles.is_blocking(point)

    def collision(self, point: Point) -> Collision | None:
        """What, if anything, stops a creature from entering ``point``."""
        tile = self.tiles.get(point)
        if tile is None:
            return Collision(CollisionKind.OUT_OF_BOUNDS)
        if isinstance(tile, Wall):
            return Collision(CollisionKind.WALL)
        occupant = self._occupants.get(point)
        if occupant is not None:
            return Collision(CollisionKind.CREATURE, self.creatures[occupant])
        return None

    def creature_at(self, point: Point) -> Creature | None:
        occupant = self._occupants.get(point)
        return None if occupant is None else self.creatures[occupant]

    def unoccupied_floor(self) -> list[Point]:
        """Floor tiles no creature stands on, sorted row by row."""
        return [p for p in self.tiles.floor_points() if p not in self._occupants]

    # ------------------------------------------------------------------
    # Creature arena
    # ------------------------------------------------------------------
    def spawn(self, faction: Faction, coords: Point) -> Creature:
        """Place a new creature at ``coords``.

        Raises:
            SpawnBlocked: If the tile is absent, a wall, or occupied.
        """
        collision = self.collision(coords)
        if collision is not None:
            raise SpawnBlocked(coords, collision)
        creature = Creature(CreatureId(self._next_id), faction, coords)
        self._next_id += 1
        self.creatures[creature.id] = creature
        self._occupants[coords] = creature.id
        logger.debug("Spawned %s #%d at %s", faction.name, creature.id, coords)
        return creature

    def spawn_random(self, faction: Faction, rng: RNG | None = None) -> Creature:
        """Place a new creature on a random unoccupied floor tile.

        Raises:
            SpawnBlocked: If every floor tile is taken.
        """
        free = self.unoccupied_floor()
        if not free:
            raise SpawnBlocked(None, None)
        return self.spawn(faction, (rng if rng is not None else _rng).choice(free))

    def remove_creature(self, creature_id: CreatureId) -> Creature:
        """Take a creature out of the level. Raises KeyError if unknown."""
        creature = self.creatures.pop(creature_id)
        del self._occupants[creature.coords]
        logger.debug("Removed %s #%d", creature.faction.name, creature_id)
        return creature

    def move_creature(self, creature_id: CreatureId, to: Point) -> Collision | None:
        """Move a creature to ``to`` if nothing is in the way.

        Returns:
            ``None`` after a successful move, otherwise the collision that
            prevented it (bump handling belongs to the caller).
        """
        creature = self.creatures[creature_id]
        collision = self.collision(to)
        if collision is not None:
            if collision.creature is creature:
                return None
            return collision
        del self._occupants[creature.coords]
        creature.coords = to
        self._occupants[to] = creature_id
        return None

    def translate_creature(
        self, creature_id: CreatureId, offset: Vector
    ) -> Collision | None:
        creature = self.creatures[creature_id]
        return self.move_creature(creature_id, creature.coords + offset)

    def members(self, faction: Faction) -> list[Creature]:
        return [c for c in self.creatures.values() if c.faction is faction]

    # ------------------------------------------------------------------
    # Per-turn derived state
    # ------------------------------------------------------------------
    def update_vision(self, origin: Point, radius: int | None = None) -> set[Point]:
        """Recompute what ``origin`` can see and remember every seen tile.

        ``radius`` defaults to :data:`cairn.config.VISION_RADIUS`.
        """
        if radius is None:
            radius = config.VISION_RADIUS
        self.vision = compute_visible(origin, self.blocks_sight, radius)
        for point in self.vision:
            tile = self.tiles.get(point)
            if tile is not None:
                self.memory[point] = tile
        return self.vision

    def dijkstra_map(self, faction: Faction) -> DijkstraMap:
        """Fresh distance field towards the living members of ``faction``.

        Only terrain blocks the search; creatures are goals, not obstacles.
        """
        goals = {c.coords for c in self.creatures.values() if c.faction is faction}
        return DijkstraMap.build(self.tiles, goals.__contains__, self.tiles.is_blocking)

    def update_dijkstra_maps(self) -> dict[Faction, DijkstraMap]:
        """Rebuild one map per faction that still has creatures in the level."""
        present = {c.faction for c in self.creatures.values()}
        self.dijkstra_maps = {
            faction: self.dijkstra_map(faction)
            for faction in Faction
            if faction in present
        }
        return self.dijkstra_maps
