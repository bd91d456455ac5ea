"""Distance fields ("Dijkstra maps") for gradient-following AI.

Based on `Dijkstra Maps Visualized`_ and `The Incredible Power of Dijkstra
Maps`_. A map records, for every tile reachable from a set of goal tiles, the
number of 4-directional steps to the nearest goal. AI can then walk downhill
to approach the goals or uphill to flee them.

Maps are cheap to rebuild and carry no state between turns: build a new one
whenever the goals or obstacles change (typically once per turn and faction).

.. _Dijkstra Maps Visualized:
   https://www.roguebasin.com/index.php/Dijkstra_Maps_Visualized
.. _The Incredible Power of Dijkstra Maps:
   https://www.roguebasin.com/index.php/The_Incredible_Power_of_Dijkstra_Maps
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeAlias

import numpy as np

from cairn.types import TileDistance
from cairn.util import rng
from cairn.util.coordinates import NEIGHBOR_OFFSETS_FOUR, Point, Rect, Vector

if TYPE_CHECKING:
    from cairn.util.rng import RNG

_rng = rng.get("ai.dijkstra")

PointPredicate: TypeAlias = Callable[[Point], bool]


class DijkstraMap:
    """Immutable distance-to-nearest-goal field over a set of tiles."""

    def __init__(self, distances: dict[Point, TileDistance]) -> None:
        self._distances = distances

    @classmethod
    def build(
        cls,
        tiles: Iterable[Point],
        is_goal: PointPredicate,
        is_blocking: PointPredicate,
    ) -> DijkstraMap:
        """Breadth-first search outward from every goal tile at once.

        Args:
            tiles: The tiles the field may cover. The search never leaves this
                set, which keeps it finite on an unbounded grid.
            is_goal: Marks the tiles at distance 0. Goals are seeded even if
                they are blocking (a goal is usually an occupied tile).
            is_blocking: Tiles the search may not expand into.

        Returns:
            A map where every tile reachable from a goal holds its shortest
            step count and unreachable tiles have no entry.
        """
        domain = set(tiles)
        distances: dict[Point, TileDistance] = {}
        queue: deque[tuple[Point, TileDistance]] = deque()
        for point in domain:
            if is_goal(point):
                distances[point] = 0
                queue.append((point, 0))

        while queue:
            point, distance = queue.popleft()
            for offset in NEIGHBOR_OFFSETS_FOUR:
                neighbor = point + offset
                if (
                    neighbor in distances
                    or neighbor not in domain
                    or is_blocking(neighbor)
                ):
                    continue
                # BFS visits tiles in ascending distance, so the first visit
                # is the shortest.
                distances[neighbor] = distance + 1
                queue.append((neighbor, distance + 1))

        return cls(distances)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def distance(self, point: Point) -> TileDistance | None:
        """Steps from ``point`` to the nearest goal, or ``None`` if unreachable."""
        return self._distances.get(point)

    def __contains__(self, point: object) -> bool:
        return point in self._distances

    def __len__(self) -> int:
        return len(self._distances)

    @property
    def goals(self) -> list[Point]:
        return [p for p, d in self._distances.items() if d == 0]

    def step_towards(self, point: Point, rng: RNG | None = None) -> Vector | None:
        """Offset to a neighbour strictly closer to a goal, if there is one.

        Among several equally close neighbours one is picked uniformly at
        random.
        """
        return self._step(point, rng, away=False)

    def step_away(self, point: Point, rng: RNG | None = None) -> Vector | None:
        """Offset to a neighbour strictly farther from every goal, if any.

        Among several equally far neighbours one is picked uniformly at
        random.
        """
        return self._step(point, rng, away=True)

    def _step(self, point: Point, rng: RNG | None, *, away: bool) -> Vector | None:
        own = self._distances.get(point)
        best_offsets: list[Vector] = []
        best_distance = own
        for offset in NEIGHBOR_OFFSETS_FOUR:
            distance = self._distances.get(point + offset)
            if distance is None:
                continue
            if best_distance is None or (
                distance > best_distance if away else distance < best_distance
            ):
                best_distance = distance
                best_offsets = [offset]
            elif distance == best_distance and best_offsets:
                best_offsets.append(offset)
        if not best_offsets:
            return None
        if len(best_offsets) == 1:
            return best_offsets[0]
        return (rng if rng is not None else _rng).choice(best_offsets)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def to_array(self, bounds: Rect, fill: int = -1) -> np.ndarray:
        """Dense ``[x, y]`` array of distances inside ``bounds``.

        Unreachable tiles hold ``fill``.
        """
        field = np.full((bounds.width, bounds.height), fill, dtype=np.int32, order="F")
        for point, distance in self._distances.items():
            if bounds.contains(point):
                field[point.x - bounds.x1, point.y - bounds.y1] = distance
        return field

    def __repr__(self) -> str:
        return f"DijkstraMap(tiles={len(self._distances)}, goals={len(self.goals)})"
