#!/usr/bin/env python3
"""Benchmark comparing DijkstraMap against tcod's C ``dijkstra2d``.

Runs both implementations on identical walkable maps and goal sets, prints a
timing comparison table, then checks that both produce the same distances.

Usage:
    uv run python scripts/benchmark_dijkstra.py
"""

# ruff: noqa: E402  # Allow path setup before importing project modules

from __future__ import annotations

import sys
import timeit
from collections.abc import Callable
from pathlib import Path

import numpy as np
import tcod.path

# Add the project root to Python path so running as a script works.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cairn.environment.dijkstra_map import DijkstraMap
from cairn.environment.generators import DungeonGenerator, GenerationConfig
from cairn.environment.tiles import WALL, Floor, TileMap
from cairn.util import rng
from cairn.util.coordinates import Point, Rect, Vector

# ---------------------------------------------------------------------------
# Map generators
# ---------------------------------------------------------------------------


def _make_open_field(width: int, height: int) -> TileMap:
    """All-walkable map (worst case - maximum search space)."""
    return _from_walkable(np.ones((width, height), dtype=np.bool_))


def _make_scatter(width: int, height: int, wall_fraction: float, seed: int) -> TileMap:
    """Random walls scattered over an open field."""
    np_rng = np.random.default_rng(seed)
    return _from_walkable(np_rng.random((width, height)) > wall_fraction)


def _make_generated(width: int, height: int) -> TileMap:
    """A real generated dungeon of rooms and corridors."""
    config = GenerationConfig(
        region=Rect(Point(0, 0), Vector(width, height)),
        min_floor_ratio=0.35,
        min_room_size=4,
        max_room_size=10,
    )
    return DungeonGenerator(config).generate().tiles


def _from_walkable(walkable: np.ndarray) -> TileMap:
    tiles = TileMap()
    width, height = walkable.shape
    for x in range(width):
        for y in range(height):
            tiles[Point(x, y)] = Floor() if walkable[x, y] else WALL
    return tiles


# ---------------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------------


def _run_ours(tiles: TileMap, goals: set[Point]) -> DijkstraMap:
    return DijkstraMap.build(tiles, goals.__contains__, tiles.is_blocking)


def _run_tcod(walkable: np.ndarray, goals: set[Point], origin: Point) -> np.ndarray:
    dist = tcod.path.maxarray(walkable.shape, dtype=np.int32, order="F")
    for goal in goals:
        dist[goal.x - origin.x, goal.y - origin.y] = 0
    return tcod.path.dijkstra2d(dist, walkable.astype(np.int32), 1, None, out=dist)


def _bench(fn: Callable[[], object]) -> float:
    """Time *fn* and return average ms per call."""
    # Warm up
    fn()
    number, total = timeit.Timer(fn).autorange()
    return (total / number) * 1000


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> None:
    rng.init("benchmark")
    scenarios: list[tuple[str, TileMap]] = [
        ("Open 80x50", _make_open_field(80, 50)),
        ("Scatter 80x50 (30%)", _make_scatter(80, 50, 0.30, seed=42)),
        ("Generated 64x36", _make_generated(64, 36)),
        ("Generated 120x80", _make_generated(120, 80)),
    ]

    print("Dijkstra map benchmark: ours (pure Python) vs tcod (C)")
    print("=" * 78)
    print(f"{'Scenario':<28} {'tcod (C)':>10} {'ours (py)':>12} {'ours/tcod':>12}")
    print("-" * 78)

    mismatches = 0
    for name, tiles in scenarios:
        floor = tiles.floor_points()
        goals = {floor[0], floor[len(floor) // 2], floor[-1]}
        bounds = tiles.bounds()
        walkable = tiles.to_walkable_array(bounds)

        tcod_ms = _bench(lambda: _run_tcod(walkable, goals, bounds.pos))
        ours_ms = _bench(lambda: _run_ours(tiles, goals))
        ratio = ours_ms / tcod_ms if tcod_ms > 0 else float("inf")
        print(f"{name:<28} {tcod_ms:>9.3f}ms {ours_ms:>11.3f}ms {ratio:>11.2f}x")

        theirs = _run_tcod(walkable, goals, bounds.pos)
        theirs[theirs == np.iinfo(np.int32).max] = -1
        ours = _run_ours(tiles, goals).to_array(bounds)
        mismatches += int(np.sum(ours != theirs))

    print("-" * 78)
    print()
    if mismatches:
        print(f"Correctness check: {mismatches} tiles disagree with tcod.")
    else:
        print("Correctness check: distances match tcod on every scenario.")


if __name__ == "__main__":
    main()
