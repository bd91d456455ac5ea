#!/usr/bin/env python3
"""Benchmark comparing our symmetric shadowcasting FOV against tcod's C implementation.

Runs both implementations on identical inputs and prints a timing comparison
table, followed by an agreement check.

Usage:
    uv run python scripts/benchmark_fov.py
"""

# ruff: noqa: E402  # Allow path setup before importing project modules

from __future__ import annotations

import sys
import timeit
from collections.abc import Callable
from pathlib import Path

import numpy as np
import tcod.constants
import tcod.map

# Add the project root to Python path so running as a script works.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cairn.environment.fov import compute_visible
from cairn.util.coordinates import Point


def _make_open_field(width: int, height: int) -> np.ndarray:
    """All-transparent map (worst case - maximum visible tiles)."""
    return np.ones((width, height), dtype=np.bool_)


def _make_dungeon(
    width: int, height: int, wall_fraction: float, seed: int
) -> np.ndarray:
    """Randomly scatter walls to simulate a dungeon layout."""
    rng = np.random.default_rng(seed)
    return (rng.random((width, height)) > wall_fraction).astype(np.bool_)


def _predicate(transparent: np.ndarray) -> Callable[[Point], bool]:
    """Blocking predicate over ``transparent``; the area outside it blocks."""
    width, height = transparent.shape

    def is_blocking(p: Point) -> bool:
        return not (0 <= p.x < width and 0 <= p.y < height and transparent[p.x, p.y])

    return is_blocking


def _ours_as_array(
    transparent: np.ndarray, origin: tuple[int, int], radius: int
) -> np.ndarray:
    visible = compute_visible(Point(*origin), _predicate(transparent), radius)
    width, height = transparent.shape
    result = np.zeros_like(transparent)
    for p in visible:
        if 0 <= p.x < width and 0 <= p.y < height:
            result[p.x, p.y] = True
    return result


def _tcod_fov(
    transparent: np.ndarray, origin: tuple[int, int], radius: int
) -> np.ndarray:
    return tcod.map.compute_fov(
        transparent,
        origin,
        radius=radius,
        light_walls=True,
        algorithm=tcod.constants.FOV_SYMMETRIC_SHADOWCAST,
    )


def _bench(fn: Callable[[], object]) -> float:
    """Time *fn* and return average ms per call."""
    # Warm up.
    fn()
    number, total = timeit.Timer(fn).autorange()
    return (total / number) * 1000  # ms


def main() -> None:
    scenarios: list[tuple[str, np.ndarray, tuple[int, int], int]] = [
        ("Open field", _make_open_field(120, 80), (60, 40), 50),
        ("Dungeon (~40% walls)", _make_dungeon(120, 80, 0.40, seed=42), (60, 40), 50),
        ("Small radius", _make_open_field(120, 80), (60, 40), 10),
    ]

    print("FOV Benchmark: ours (pure Python) vs tcod (C)")
    print("=" * 62)
    print(f"{'Scenario':<24} {'tcod (C)':>10} {'ours (py)':>14} {'ratio':>8}")
    print("-" * 62)

    for name, transparent, origin, radius in scenarios:
        is_blocking = _predicate(transparent)
        point = Point(*origin)
        tcod_ms = _bench(lambda: _tcod_fov(transparent, origin, radius))
        ours_ms = _bench(lambda: compute_visible(point, is_blocking, radius))
        ratio = ours_ms / tcod_ms if tcod_ms > 0 else float("inf")
        print(f"{name:<24} {tcod_ms:>9.3f}ms {ours_ms:>11.3f}ms {ratio:>7.1f}x")

    print("-" * 62)
    print("Lower ratio = closer to C performance.")
    print()

    # tcod clips its scan to a circle, ours to a square, so compare inside
    # the circle only.
    print("Agreement check...")
    transparent = _make_dungeon(120, 80, 0.40, seed=123)
    origin = (60, 40)
    radius = 30

    ours = _ours_as_array(transparent, origin, radius)
    theirs = _tcod_fov(transparent, origin, radius)

    xs, ys = np.indices(transparent.shape)
    inside = (xs - origin[0]) ** 2 + (ys - origin[1]) ** 2 < (radius - 1) ** 2
    match_count = int(np.sum((ours == theirs) & inside))
    total_tiles = int(np.sum(inside))
    mismatch_count = total_tiles - match_count

    match_pct = match_count / total_tiles * 100
    print(f"  Agreement: {match_pct:.2f}% ({match_count}/{total_tiles} tiles)")
    if mismatch_count > 0:
        print(f"  Mismatches: {mismatch_count} tiles")
        diff_coords = np.argwhere((ours != theirs) & inside)
        for coord in diff_coords[:10]:
            x, y = coord
            print(
                f"    ({x}, {y}): ours={ours[x, y]}, tcod={theirs[x, y]}, "
                f"transparent={transparent[x, y]}"
            )
    else:
        print("  Perfect match!")


if __name__ == "__main__":
    main()
