"""Dungeon-style map generation with rooms and corridors.

Rooms are sampled at random, pushed apart until no two touch, and cropped to
the region inside a one-tile border. Placement stops once enough of the
region is floor (or too many candidates have been rejected). Rooms are then
joined closest-pair-first, with a disjoint-set forest tracking when the whole
dungeon has become one connected structure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cairn import config
from cairn.environment.tiles import CORRIDOR_FLOOR, ROOM_FLOORS, FloorKind, TileMap
from cairn.util import rng
from cairn.util.coordinates import (
    IntersectionKind,
    Point,
    Rect,
    RectIntersection,
    Vector,
    line_between,
    random_neighbor_eight,
)
from cairn.util.disjoint_sets import DisjointSets

from .base import BaseMapGenerator, GeneratedDungeon

if TYPE_CHECKING:
    from cairn.util.rng import RNG

logger = logging.getLogger(__name__)

_rng = rng.get("map.dungeon")


@dataclass(frozen=True)
class GenerationConfig:
    """Parameters for one dungeon.

    Attributes:
        region: Tiles the dungeon occupies, perimeter wall included.
        min_floor_ratio: Room placement stops once floor area / region area
            reaches this fraction.
        min_room_size: Smallest accepted room side, in tiles.
        max_room_size: Largest sampled room side, in tiles.
        max_retries: Rejected candidate rooms tolerated before placement
            stops early with whatever rooms it has.
        connection_slack: Connecting continues past full connectivity until
            a corridor spans more than this many tiles.

    Raises:
        ValueError: On sizes or ratios that cannot describe a dungeon.
    """

    region: Rect
    min_floor_ratio: float
    min_room_size: int
    max_room_size: int
    max_retries: int = config.MAX_ROOM_RETRIES
    connection_slack: int = config.CONNECTION_SLACK

    def __post_init__(self) -> None:
        if self.min_room_size < 1:
            raise ValueError(
                f"min_room_size must be positive, got {self.min_room_size}"
            )
        if self.min_room_size > self.max_room_size:
            raise ValueError(
                f"min_room_size ({self.min_room_size}) exceeds "
                f"max_room_size ({self.max_room_size})"
            )
        if not 0.0 <= self.min_floor_ratio <= 1.0:
            raise ValueError(
                f"min_floor_ratio must be within [0, 1], got {self.min_floor_ratio}"
            )
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.connection_slack < 0:
            raise ValueError(
                f"connection_slack must be >= 0, got {self.connection_slack}"
            )
        interior = self.interior
        if interior.width < self.min_room_size or interior.height < self.min_room_size:
            raise ValueError(
                f"Region {self.region} leaves no room for a "
                f"{self.min_room_size}x{self.min_room_size} room inside its border"
            )

    @classmethod
    def default(cls) -> GenerationConfig:
        """Config built from the constants in :mod:`cairn.config`."""
        return cls(
            region=Rect(
                Point(config.DUNGEON_X, config.DUNGEON_Y),
                Vector(config.DUNGEON_WIDTH, config.DUNGEON_HEIGHT),
            ),
            min_floor_ratio=config.MIN_FLOOR_RATIO,
            min_room_size=config.MIN_ROOM_SIZE,
            max_room_size=config.MAX_ROOM_SIZE,
        )

    @property
    def interior(self) -> Rect:
        """The region minus its one-tile perimeter."""
        return self.region.shrink(1)


def floor_ratio(tiles: TileMap, region: Rect) -> float:
    """Fraction of ``region`` that is floor in ``tiles``.

    Generation only degrades (never fails) when it runs out of retries, so
    callers needing a hard floor-ratio guarantee check it with this.
    """
    if region.area() == 0:
        return 0.0
    floor = sum(1 for p in tiles.floor_points() if region.contains(p))
    return floor / region.area()


class DungeonGenerator(BaseMapGenerator):
    """Generates a connected dungeon of rectangular rooms and corridors."""

    def __init__(self, generation_config: GenerationConfig, rng: RNG | None = None):
        self.config = generation_config
        self.rng: RNG = rng if rng is not None else _rng

    # ------------------------------------------------------------------
    # Room placement
    # ------------------------------------------------------------------
    def _sample_room(self, interior: Rect) -> Rect:
        cfg = self.config
        w = min(self.rng.randint(cfg.min_room_size, cfg.max_room_size), interior.width)
        h = min(self.rng.randint(cfg.min_room_size, cfg.max_room_size), interior.height)
        x = self.rng.randint(interior.x1, interior.x2 - w)
        y = self.rng.randint(interior.y1, interior.y2 - h)
        return Rect(Point(x, y), Vector(w, h))

    def _separate(self, candidate: Rect, rooms: list[Rect]) -> Rect:
        """Slide ``candidate`` in one random direction until it touches nothing.

        Every step re-tests against all placed rooms. Rooms are few, so the
        quadratic check is fine; the slide always ends because the placed
        rooms are finite and the direction is fixed.
        """
        if not any(candidate.touching(room) for room in rooms):
            return candidate
        offset = random_neighbor_eight(self.rng)
        while any(candidate.touching(room) for room in rooms):
            candidate = candidate.translate(offset)
        return candidate

    def place_rooms(self) -> list[Rect]:
        """Sample, separate and crop rooms until the floor target is met.

        The returned rooms never overlap or touch one another (not even at a
        corner) and lie inside the bordered region. At least one room is
        always placed.
        """
        cfg = self.config
        interior = cfg.interior
        target_area = cfg.min_floor_ratio * cfg.region.area()

        rooms: list[Rect] = []
        floor_area = 0
        retries = 0
        while not rooms or floor_area < target_area:
            candidate = self._separate(self._sample_room(interior), rooms)
            candidate = candidate.crop(interior)
            if (
                candidate.width < cfg.min_room_size
                or candidate.height < cfg.min_room_size
            ):
                retries += 1
                if retries >= cfg.max_retries:
                    logger.warning(
                        "Room placement hit the retry ceiling (%d) with %d rooms; "
                        "floor ratio %.2f is below the %.2f target",
                        cfg.max_retries,
                        len(rooms),
                        floor_area / cfg.region.area(),
                        cfg.min_floor_ratio,
                    )
                    break
                continue
            rooms.append(candidate)
            floor_area += candidate.area()

        logger.debug(
            "Placed %d rooms (%d floor tiles, %d rejected candidates)",
            len(rooms),
            floor_area,
            retries,
        )
        return rooms

    # ------------------------------------------------------------------
    # Carving
    # ------------------------------------------------------------------
    def _carve_room(self, tiles: TileMap, room: Rect, kind: FloorKind) -> None:
        for point in room.points():
            tiles.carve_floor(point, kind)

    def _corridor_points(
        self, a: Rect, b: Rect, intersection: RectIntersection
    ) -> list[Point]:
        """Tiles of a corridor from a floor tile of ``a`` to one of ``b``."""
        gap = intersection.rect
        match intersection.kind:
            case IntersectionKind.REAL:
                return []
            case IntersectionKind.HORIZONTAL:
                # Shared columns: one vertical corridor straight across.
                x = self.rng.randrange(gap.x1, gap.x2)
                start = a.nearest_point(Point(x, b.y1))
                end = b.nearest_point(Point(x, a.y1))
                return line_between(start, end)
            case IntersectionKind.VERTICAL:
                # Shared rows: one horizontal corridor straight across.
                y = self.rng.randrange(gap.y1, gap.y2)
                start = a.nearest_point(Point(b.x1, y))
                end = b.nearest_point(Point(a.x1, y))
                return line_between(start, end)
            case _:
                # Diagonal neighbours: an elbow between the facing corners,
                # bending at either of the two remaining corners.
                start = a.nearest_point(b.pos)
                end = b.nearest_point(a.pos)
                elbow = self.rng.choice(
                    [Point(end.x, start.y), Point(start.x, end.y)]
                )
                return line_between(start, elbow) + line_between(elbow, end)[1:]

    def _connect_rooms(self, tiles: TileMap, rooms: list[Rect]) -> int:
        """Carve corridors closest pair first until the rooms form one set.

        Returns:
            The number of corridors carved.
        """
        forest = DisjointSets(len(rooms))
        pairs = [
            (rooms[i].intersection(rooms[j]), i, j)
            for i in range(len(rooms))
            for j in range(i + 1, len(rooms))
        ]
        # Farthest first, so pop() yields the closest remaining pair.
        pairs.sort(key=lambda pair: pair[0].distance, reverse=True)

        corridors = 0
        while pairs:
            intersection, i, j = pairs.pop()
            for point in self._corridor_points(rooms[i], rooms[j], intersection):
                tiles.carve_floor(point, CORRIDOR_FLOOR)
            corridors += 1
            forest.merge(i, j)
            if (
                forest.set_count == 1
                and intersection.distance > self.config.connection_slack
            ):
                break
        return corridors

    def generate(self) -> GeneratedDungeon:
        rooms = self.place_rooms()

        tiles = TileMap()
        for room in rooms:
            self._carve_room(tiles, room, self.rng.choice(ROOM_FLOORS))

        corridors = self._connect_rooms(tiles, rooms)
        logger.debug(
            "Carved %d corridors between %d rooms; %d tiles total",
            corridors,
            len(rooms),
            len(tiles),
        )
        return GeneratedDungeon(tiles=tiles, open_floor=tiles.floor_points())
