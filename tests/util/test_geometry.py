from __future__ import annotations

import random

import pytest

from cairn.util.coordinates import (
    NEIGHBOR_OFFSETS_EIGHT,
    IntersectionKind,
    Point,
    Rect,
    Vector,
    line_between,
    random_neighbor_eight,
)


def _rect(x: int, y: int, w: int, h: int) -> Rect:
    return Rect(Point(x, y), Vector(w, h))


class TestPointVectorArithmetic:
    def test_point_plus_vector_is_point(self) -> None:
        assert Point(2, 3) + Vector(1, -1) == Point(3, 2)

    def test_point_minus_point_is_vector(self) -> None:
        assert Point(5, 1) - Point(2, 4) == Vector(3, -3)

    def test_point_minus_vector_is_point(self) -> None:
        assert Point(5, 1) - Vector(2, 4) == Point(3, -3)

    def test_vector_ops(self) -> None:
        assert Vector(1, 2) + Vector(3, 4) == Vector(4, 6)
        assert Vector(1, 2) - Vector(3, 4) == Vector(-2, -2)
        assert Vector(1, -2) * 3 == Vector(3, -6)
        assert 3 * Vector(1, -2) == Vector(3, -6)
        assert Vector(7, -7) // 2 == Vector(3, -4)
        assert -Vector(1, -2) == Vector(-1, 2)

    def test_point_plus_point_is_rejected(self) -> None:
        with pytest.raises(TypeError):
            Point(1, 1) + Point(1, 1)  # type: ignore[operator]

    def test_points_are_hashable_and_ordered(self) -> None:
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2
        assert sorted([Point(2, 0), Point(1, 5)]) == [Point(1, 5), Point(2, 0)]


class TestRectIntersection:
    def test_real_overlap(self) -> None:
        result = _rect(0, 0, 4, 4).intersection(_rect(2, 1, 4, 4))
        assert result.kind is IntersectionKind.REAL
        assert result.rect == _rect(2, 1, 2, 3)
        assert result.distance == 0

    def test_horizontal_returns_vertical_gap(self) -> None:
        # Shared columns 2..3, a ends at y=3, b starts at y=6.
        result = _rect(0, 0, 4, 3).intersection(_rect(2, 6, 4, 2))
        assert result.kind is IntersectionKind.HORIZONTAL
        assert result.rect == Rect.from_bounds(2, 3, 4, 6)
        assert result.distance == 3

    def test_vertical_returns_horizontal_gap(self) -> None:
        result = _rect(0, 0, 2, 5).intersection(_rect(7, 3, 2, 5))
        assert result.kind is IntersectionKind.VERTICAL
        assert result.rect == Rect.from_bounds(2, 3, 7, 5)
        assert result.distance == 5

    def test_none_returns_corner_gap(self) -> None:
        result = _rect(0, 0, 2, 2).intersection(_rect(5, 6, 2, 2))
        assert result.kind is IntersectionKind.NONE
        assert result.rect == Rect.from_bounds(2, 2, 5, 6)
        assert result.distance == 3 + 4

    def test_intersection_is_symmetric(self) -> None:
        a, b = _rect(0, 0, 2, 2), _rect(5, 6, 2, 2)
        assert a.intersection(b) == b.intersection(a)

    def test_edge_adjacent_rects_are_zero_apart(self) -> None:
        result = _rect(0, 0, 3, 3).intersection(_rect(3, 0, 3, 3))
        assert result.kind is IntersectionKind.VERTICAL
        assert result.distance == 0

    def test_corner_adjacent_rects_are_zero_apart(self) -> None:
        result = _rect(0, 0, 3, 3).intersection(_rect(3, 3, 3, 3))
        assert result.kind is IntersectionKind.NONE
        assert result.distance == 0


class TestTouching:
    def test_overlap_touches(self) -> None:
        assert _rect(0, 0, 3, 3).touching(_rect(1, 1, 3, 3))

    def test_shared_edge_touches(self) -> None:
        assert _rect(0, 0, 3, 3).touching(_rect(3, 0, 3, 3))

    def test_shared_corner_touches(self) -> None:
        assert _rect(0, 0, 3, 3).touching(_rect(3, 3, 3, 3))

    def test_one_tile_gap_does_not_touch(self) -> None:
        assert not _rect(0, 0, 3, 3).touching(_rect(4, 0, 3, 3))
        assert not _rect(0, 0, 3, 3).touching(_rect(4, 4, 3, 3))


class TestRectHelpers:
    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            Rect(Point(0, 0), Vector(-1, 2))

    def test_bounds_and_area(self) -> None:
        r = _rect(2, 3, 4, 5)
        assert (r.x1, r.y1, r.x2, r.y2) == (2, 3, 6, 8)
        assert r.area() == 20
        assert not r.is_empty()

    def test_points_cover_every_tile_once(self) -> None:
        points = list(_rect(1, 1, 3, 2).points())
        assert len(points) == 6
        assert set(points) == {Point(x, y) for x in range(1, 4) for y in range(1, 3)}

    def test_contains_is_end_exclusive(self) -> None:
        r = _rect(0, 0, 2, 2)
        assert r.contains(Point(1, 1))
        assert not r.contains(Point(2, 1))

    def test_shrink(self) -> None:
        assert _rect(0, 0, 10, 6).shrink(1) == _rect(1, 1, 8, 4)
        assert _rect(0, 0, 1, 1).shrink(1).is_empty()

    def test_crop(self) -> None:
        bounds = _rect(0, 0, 10, 10)
        assert _rect(8, 8, 5, 5).crop(bounds) == _rect(8, 8, 2, 2)
        assert _rect(20, 20, 3, 3).crop(bounds).is_empty()

    def test_nearest_point(self) -> None:
        r = _rect(2, 2, 3, 3)
        assert r.nearest_point(Point(0, 0)) == Point(2, 2)
        assert r.nearest_point(Point(10, 3)) == Point(4, 3)
        assert r.nearest_point(Point(3, 3)) == Point(3, 3)


class TestLineBetween:
    def test_horizontal_line(self) -> None:
        assert line_between(Point(3, 1), Point(0, 1)) == [
            Point(3, 1),
            Point(2, 1),
            Point(1, 1),
            Point(0, 1),
        ]

    def test_single_point(self) -> None:
        assert line_between(Point(2, 2), Point(2, 2)) == [Point(2, 2)]

    def test_diagonal_rejected(self) -> None:
        with pytest.raises(ValueError):
            line_between(Point(0, 0), Point(1, 1))


def test_random_neighbor_covers_all_eight_offsets() -> None:
    rng = random.Random(3)
    eights = {random_neighbor_eight(rng) for _ in range(400)}
    assert eights == set(NEIGHBOR_OFFSETS_EIGHT)
