from __future__ import annotations

import numpy as np
import pytest

from cairn.environment.tiles import (
    CORRIDOR_FLOOR,
    ROOM_FLOORS,
    WALL,
    Floor,
    FloorKind,
    TileMap,
    Wall,
)
from cairn.util.coordinates import Point, Rect
from tests.helpers import open_room


def test_corridor_material_is_not_a_room_material() -> None:
    assert CORRIDOR_FLOOR not in ROOM_FLOORS


def test_tiles_are_value_objects() -> None:
    assert Wall() == WALL
    assert Floor(FloorKind.MOSS) == Floor(FloorKind.MOSS)
    assert Floor(FloorKind.MOSS) != Floor(FloorKind.SAND)
    assert Floor() == Floor(FloorKind.STONE)


class TestFromAscii:
    def test_parses_walls_floor_and_gaps(self) -> None:
        tiles = TileMap.from_ascii("#.#\n  .", kind=FloorKind.SAND)

        assert tiles[Point(0, 0)] == WALL
        assert tiles[Point(1, 0)] == Floor(FloorKind.SAND)
        assert Point(0, 1) not in tiles
        assert tiles.is_floor(Point(2, 1))
        assert len(tiles) == 4

    def test_rejects_unknown_characters(self) -> None:
        with pytest.raises(ValueError, match="Unknown tile character"):
            TileMap.from_ascii("#x#")

    def test_render_round_trips_the_layout(self) -> None:
        text = "#####\n#...#\n##.##\n #.#\n ###"
        assert TileMap.from_ascii(text).render_ascii() == text


class TestCarveFloor:
    def test_surrounds_new_floor_with_walls(self) -> None:
        tiles = TileMap()
        tiles.carve_floor(Point(5, 5), FloorKind.DIRT)

        assert tiles[Point(5, 5)] == Floor(FloorKind.DIRT)
        assert len(tiles) == 9
        for neighbor in Point(5, 5).neighbors_eight():
            assert tiles[neighbor] == WALL

    def test_adjacent_carves_replace_walls(self) -> None:
        tiles = TileMap()
        tiles.carve_floor(Point(0, 0), FloorKind.STONE)
        tiles.carve_floor(Point(1, 0), FloorKind.STONE)

        assert tiles.is_floor(Point(0, 0))
        assert tiles.is_floor(Point(1, 0))
        assert len(tiles) == 12

    def test_existing_floor_keeps_its_material(self) -> None:
        tiles = TileMap()
        tiles.carve_floor(Point(0, 0), FloorKind.MOSS)
        tiles.carve_floor(Point(0, 0), CORRIDOR_FLOOR)

        assert tiles[Point(0, 0)] == Floor(FloorKind.MOSS)

    def test_never_walls_over_floor(self) -> None:
        tiles = TileMap()
        for x in range(4):
            tiles.carve_floor(Point(x, 0), FloorKind.STONE)
        tiles.carve_floor(Point(1, 1), FloorKind.STONE)

        assert all(tiles.is_floor(Point(x, 0)) for x in range(4))


class TestQueries:
    def test_absent_points_block(self) -> None:
        tiles = open_room(2, 2)

        assert not tiles.is_blocking(Point(1, 1))
        assert tiles.is_blocking(Point(0, 0))
        assert tiles.is_blocking(Point(-10, 40))
        assert tiles.get(Point(-10, 40)) is None

    def test_floor_points_are_row_major(self) -> None:
        tiles = open_room(2, 2)

        assert tiles.floor_points() == [
            Point(1, 1),
            Point(2, 1),
            Point(1, 2),
            Point(2, 2),
        ]
        assert tiles.floor_count() == 4

    def test_bounds(self) -> None:
        assert open_room(3, 2).bounds() == Rect.from_bounds(0, 0, 5, 4)
        assert TileMap().bounds().is_empty()

    def test_items_iterates_stored_tiles(self) -> None:
        tiles = open_room(1, 1)
        floors = [p for p, tile in tiles.items() if isinstance(tile, Floor)]
        assert floors == [Point(1, 1)]


class TestWalkableArray:
    def test_indexed_x_then_y(self) -> None:
        tiles = TileMap.from_ascii("###\n#..\n###")
        walkable = tiles.to_walkable_array()

        assert walkable.shape == (3, 3)
        assert walkable.dtype == np.bool_
        assert walkable[1, 1] and walkable[2, 1]
        assert not walkable[1, 0]
        assert walkable.sum() == 2

    def test_custom_bounds_offset(self) -> None:
        tiles = open_room(2, 2)
        walkable = tiles.to_walkable_array(Rect.from_bounds(1, 1, 3, 3))

        assert walkable.shape == (2, 2)
        assert walkable.all()
