"""
Tile values and the sparse tile map.

A tile is either a :class:`Wall` or a :class:`Floor` carrying a cosmetic
:class:`FloorKind`. The :class:`TileMap` only stores tiles that generation
carved; a missing entry means "outside the dungeon" and is treated as
impassable and opaque, never as floor.

The map can be exported as a dense NumPy boolean array for tools that want
array input (benchmarks, tcod cross-checks, debug dumps).
"""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

import numpy as np

from cairn.util.coordinates import Point, Rect


class FloorKind(Enum):
    """Floor material. Purely cosmetic: every kind is walkable and clear."""

    STONE = auto()
    DIRT = auto()
    MOSS = auto()
    COBBLE = auto()
    SAND = auto()


# Corridors are carved with a single material so they read as passages.
CORRIDOR_FLOOR = FloorKind.DIRT
ROOM_FLOORS: tuple[FloorKind, ...] = (
    FloorKind.STONE,
    FloorKind.MOSS,
    FloorKind.COBBLE,
    FloorKind.SAND,
)


@dataclass(frozen=True, slots=True)
class Wall:
    pass


@dataclass(frozen=True, slots=True)
class Floor:
    kind: FloorKind = FloorKind.STONE


Tile: TypeAlias = Wall | Floor

WALL = Wall()


class TileMap:
    """Sparse mapping of Point -> Tile.

    There is no way to delete an entry: once a point has been carved it stays
    part of the map for the dungeon's lifetime.
    """

    def __init__(self) -> None:
        self._tiles: dict[Point, Tile] = {}

    @classmethod
    def from_ascii(cls, text: str, kind: FloorKind = FloorKind.STONE) -> TileMap:
        """Build a map from rows of ``#`` (wall), ``.`` (floor), space (absent).

        The first character of the first line is (0, 0).
        """
        tile_map = cls()
        for y, line in enumerate(text.splitlines()):
            for x, ch in enumerate(line):
                if ch == "#":
                    tile_map[Point(x, y)] = WALL
                elif ch == ".":
                    tile_map[Point(x, y)] = Floor(kind)
                elif ch != " ":
                    raise ValueError(f"Unknown tile character {ch!r} at ({x}, {y})")
        return tile_map

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------
    def __getitem__(self, point: Point) -> Tile:
        return self._tiles[point]

    def get(self, point: Point) -> Tile | None:
        return self._tiles.get(point)

    def __contains__(self, point: object) -> bool:
        return point in self._tiles

    def __iter__(self) -> Iterator[Point]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def items(self) -> Iterator[tuple[Point, Tile]]:
        return iter(self._tiles.items())

    def __setitem__(self, point: Point, tile: Tile) -> None:
        self._tiles[point] = tile

    # ------------------------------------------------------------------
    # Carving
    # ------------------------------------------------------------------
    def carve_floor(self, point: Point, kind: FloorKind) -> None:
        """Make ``point`` floor and wall in any of its 8 neighbours not yet set.

        An existing floor tile keeps its material, so corridors running through
        rooms do not repaint them, and walls never appear inside carved floor.
        """
        if not isinstance(self._tiles.get(point), Floor):
            self._tiles[point] = Floor(kind)
        for neighbor in point.neighbors_eight():
            self._tiles.setdefault(neighbor, WALL)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_floor(self, point: Point) -> bool:
        return isinstance(self._tiles.get(point), Floor)

    def is_blocking(self, point: Point) -> bool:
        """Walls and points outside the map block movement and sight."""
        return not self.is_floor(point)

    def floor_points(self) -> list[Point]:
        """All floor coordinates, sorted row by row."""
        return sorted(
            (p for p, tile in self._tiles.items() if isinstance(tile, Floor)),
            key=lambda p: (p.y, p.x),
        )

    def floor_count(self) -> int:
        return sum(1 for tile in self._tiles.values() if isinstance(tile, Floor))

    def bounds(self) -> Rect:
        """Smallest rectangle containing every stored tile."""
        if not self._tiles:
            return Rect.empty_at(Point(0, 0))
        xs = [p.x for p in self._tiles]
        ys = [p.y for p in self._tiles]
        return Rect.from_bounds(min(xs), min(ys), max(xs) + 1, max(ys) + 1)

    def to_walkable_array(self, bounds: Rect | None = None) -> np.ndarray:
        """Dense boolean array, indexed ``[x, y]`` relative to ``bounds.pos``.

        ``True`` marks floor. Absent points and walls are ``False``.
        ``bounds`` defaults to :meth:`bounds`.
        """
        if bounds is None:
            bounds = self.bounds()
        walkable = np.zeros((bounds.width, bounds.height), dtype=np.bool_, order="F")
        for point, tile in self._tiles.items():
            if isinstance(tile, Floor) and bounds.contains(point):
                walkable[point.x - bounds.x1, point.y - bounds.y1] = True
        return walkable

    def render_ascii(self) -> str:
        """Plain-text dump: ``#`` wall, ``.`` floor, space for absent tiles."""
        bounds = self.bounds()
        rows = []
        for y in range(bounds.y1, bounds.y2):
            row = []
            for x in range(bounds.x1, bounds.x2):
                tile = self._tiles.get(Point(x, y))
                if tile is None:
                    row.append(" ")
                elif isinstance(tile, Floor):
                    row.append(".")
                else:
                    row.append("#")
            rows.append("".join(row).rstrip())
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"TileMap(tiles={len(self._tiles)}, floor={self.floor_count()})"
