"""Integer grid geometry: points, offsets, rectangles and their intersections."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from cairn.types import TileCoord, TileDistance

if TYPE_CHECKING:
    from cairn.util.rng import RNG


@dataclass(frozen=True, slots=True, order=True)
class Vector:
    """Integer offset between two tiles."""

    x: TileCoord
    y: TileCoord

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def __mul__(self, scale: int) -> Vector:
        return Vector(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __floordiv__(self, divisor: int) -> Vector:
        return Vector(self.x // divisor, self.y // divisor)


@dataclass(frozen=True, slots=True, order=True)
class Point:
    """Integer tile coordinate.

    ``Point + Vector`` and ``Point - Vector`` give a Point,
    ``Point - Point`` gives the Vector between them.
    """

    x: TileCoord
    y: TileCoord

    def __add__(self, offset: Vector) -> Point:
        if not isinstance(offset, Vector):
            return NotImplemented
        return Point(self.x + offset.x, self.y + offset.y)

    def __sub__(self, other: Point | Vector) -> Point | Vector:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y)
        return NotImplemented

    def neighbors_four(self) -> list[Point]:
        return [self + offset for offset in NEIGHBOR_OFFSETS_FOUR]

    def neighbors_eight(self) -> list[Point]:
        return [self + offset for offset in NEIGHBOR_OFFSETS_EIGHT]


TILE_UP = Vector(0, -1)
TILE_DOWN = Vector(0, 1)
TILE_LEFT = Vector(-1, 0)
TILE_RIGHT = Vector(1, 0)
TILE_UP_LEFT = Vector(-1, -1)
TILE_UP_RIGHT = Vector(1, -1)
TILE_DOWN_LEFT = Vector(-1, 1)
TILE_DOWN_RIGHT = Vector(1, 1)

NEIGHBOR_OFFSETS_FOUR: tuple[Vector, ...] = (TILE_UP, TILE_DOWN, TILE_LEFT, TILE_RIGHT)
NEIGHBOR_OFFSETS_EIGHT: tuple[Vector, ...] = (
    *NEIGHBOR_OFFSETS_FOUR,
    TILE_UP_LEFT,
    TILE_UP_RIGHT,
    TILE_DOWN_LEFT,
    TILE_DOWN_RIGHT,
)


def random_neighbor_eight(rng: RNG) -> Vector:
    """Offset to a random adjacent tile, including diagonals."""
    return rng.choice(NEIGHBOR_OFFSETS_EIGHT)


class IntersectionKind(Enum):
    REAL = auto()  # The rectangles overlap.
    HORIZONTAL = auto()  # Shared x-range only; the gap is vertical.
    VERTICAL = auto()  # Shared y-range only; the gap is horizontal.
    NONE = auto()  # Nothing shared; the gap is between the nearest corners.


@dataclass(frozen=True, slots=True)
class RectIntersection:
    """How two rectangles relate, plus the rectangle describing it.

    For ``REAL`` the rectangle is the overlap. Otherwise it is the empty space
    between the rectangles: between the horizontally overlapping parts for
    ``HORIZONTAL``, the vertically overlapping parts for ``VERTICAL``, and the
    nearest corners for ``NONE``.
    """

    kind: IntersectionKind
    rect: Rect

    @property
    def distance(self) -> TileDistance:
        """Manhattan gap between the rectangles' nearest edges or corners.

        Overlapping axes contribute nothing, so rectangles that only share an
        edge or a corner are zero apart.
        """
        if self.kind is IntersectionKind.REAL:
            return 0
        if self.kind is IntersectionKind.HORIZONTAL:
            return self.rect.size.y
        if self.kind is IntersectionKind.VERTICAL:
            return self.rect.size.x
        return self.rect.size.x + self.rect.size.y


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle of tiles: ``pos`` is the top-left tile.

    ``x2``/``y2`` are exclusive, so a Rect at (0, 0) with size (3, 2) covers
    x in 0..2 and y in 0..1.
    """

    pos: Point
    size: Vector

    def __post_init__(self) -> None:
        if self.size.x < 0 or self.size.y < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.size}")

    @classmethod
    def from_bounds(
        cls, x1: TileCoord, y1: TileCoord, x2: TileCoord, y2: TileCoord
    ) -> Rect:
        """Create a Rect from corner coordinates (x2/y2 exclusive)."""
        return cls(Point(x1, y1), Vector(x2 - x1, y2 - y1))

    @classmethod
    def empty_at(cls, pos: Point) -> Rect:
        return cls(pos, Vector(0, 0))

    @property
    def x1(self) -> TileCoord:
        return self.pos.x

    @property
    def y1(self) -> TileCoord:
        return self.pos.y

    @property
    def x2(self) -> TileCoord:
        return self.pos.x + self.size.x

    @property
    def y2(self) -> TileCoord:
        return self.pos.y + self.size.y

    @property
    def width(self) -> TileCoord:
        return self.size.x

    @property
    def height(self) -> TileCoord:
        return self.size.y

    def area(self) -> int:
        return self.size.x * self.size.y

    def is_empty(self) -> bool:
        return self.size.x == 0 or self.size.y == 0

    def contains(self, point: Point) -> bool:
        return self.x1 <= point.x < self.x2 and self.y1 <= point.y < self.y2

    def points(self) -> Iterator[Point]:
        """Every tile of the rectangle, row by row."""
        for y in range(self.y1, self.y2):
            for x in range(self.x1, self.x2):
                yield Point(x, y)

    def translate(self, offset: Vector) -> Rect:
        return Rect(self.pos + offset, self.size)

    def shrink(self, margin: int) -> Rect:
        """Inset every edge by ``margin``, clamping the size at zero."""
        return Rect(
            Point(self.x1 + margin, self.y1 + margin),
            Vector(max(0, self.size.x - 2 * margin), max(0, self.size.y - 2 * margin)),
        )

    def nearest_point(self, target: Point) -> Point:
        """The tile of this (non-empty) rectangle closest to ``target``."""
        return Point(
            min(max(target.x, self.x1), self.x2 - 1),
            min(max(target.y, self.y1), self.y2 - 1),
        )

    def intersection(self, other: Rect) -> RectIntersection:
        """Classify how ``self`` and ``other`` overlap."""
        start_x = max(self.x1, other.x1)
        start_y = max(self.y1, other.y1)
        end_x = min(self.x2, other.x2)
        end_y = min(self.y2, other.y2)
        match (start_x < end_x, start_y < end_y):
            case (True, True):
                return RectIntersection(
                    IntersectionKind.REAL,
                    Rect.from_bounds(start_x, start_y, end_x, end_y),
                )
            case (True, False):
                return RectIntersection(
                    IntersectionKind.HORIZONTAL,
                    Rect.from_bounds(start_x, end_y, end_x, start_y),
                )
            case (False, True):
                return RectIntersection(
                    IntersectionKind.VERTICAL,
                    Rect.from_bounds(end_x, start_y, start_x, end_y),
                )
            case _:
                return RectIntersection(
                    IntersectionKind.NONE,
                    Rect.from_bounds(end_x, end_y, start_x, start_y),
                )

    def crop(self, bounds: Rect) -> Rect:
        """The part of ``self`` inside ``bounds``; zero-sized if disjoint."""
        overlap = self.intersection(bounds)
        if overlap.kind is IntersectionKind.REAL:
            return overlap.rect
        return Rect.empty_at(self.pos)

    def touching(self, other: Rect) -> bool:
        """Whether the rectangles overlap or share an edge or corner."""
        return (
            max(self.x1, other.x1) <= min(self.x2, other.x2)
            and max(self.y1, other.y1) <= min(self.y2, other.y2)
        )

    def __repr__(self) -> str:
        return f"Rect(x1={self.x1}, y1={self.y1}, x2={self.x2}, y2={self.y2})"


# =============================================================================
# LINE HELPERS
# =============================================================================


def line_between(start: Point, end: Point) -> list[Point]:
    """Tiles of an axis-aligned segment from ``start`` to ``end`` inclusive.

    Raises:
        ValueError: If the endpoints share neither a row nor a column.
    """
    if start.x != end.x and start.y != end.y:
        raise ValueError(f"{start} and {end} are not axis-aligned")
    step_x = (end.x > start.x) - (end.x < start.x)
    step_y = (end.y > start.y) - (end.y < start.y)
    step = Vector(step_x, step_y)
    points = [start]
    current = start
    while current != end:
        current = current + step
        points.append(current)
    return points
