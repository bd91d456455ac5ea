"""Shared helpers for spatial tests."""

from __future__ import annotations

from collections import deque

from cairn.environment.tiles import TileMap
from cairn.util.coordinates import Point


def floor_component(tiles: TileMap, start: Point) -> set[Point]:
    """Floor tiles reachable from ``start`` by 4-directional floor moves."""
    seen = {start}
    queue = deque([start])
    while queue:
        point = queue.popleft()
        for neighbor in point.neighbors_four():
            if neighbor not in seen and tiles.is_floor(neighbor):
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def open_room(width: int, height: int) -> TileMap:
    """A walled rectangle whose interior is ``width`` x ``height`` floor.

    The interior's top-left tile is (1, 1).
    """
    rows = ["#" * (width + 2)]
    rows += ["#" + "." * width + "#" for _ in range(height)]
    rows.append("#" * (width + 2))
    return TileMap.from_ascii("\n".join(rows))
