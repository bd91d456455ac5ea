"""Field-of-view computation using Albert Ford's symmetric shadowcasting.

Implements the algorithm described at https://www.albertford.com/shadowcasting/
over an arbitrary blocking predicate, so it works on the sparse TileMap (or
anything else) without converting to an array first.

Key properties:
- **Symmetry**: for floor tiles, if A can see B then B can see A.
- **Expansive walls**: every blocking tile the scan reaches is revealed, so
  standing in a convex room shows all of its walls.
- **Exactness**: slopes are integer numerator/denominator pairs compared by
  cross-multiplication (denominators are always positive). No floats, so no
  asymmetric results at particular slopes.

The scan covers four 90-degree quadrants. Inside a quadrant a tile is
addressed by ``(depth, col)``: its distance from the origin along the
quadrant's axis and its lateral offset.
"""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable

from cairn import config
from cairn.util.coordinates import Point

# Quadrant transform coefficients: (col_to_x, depth_to_x, col_to_y, depth_to_y).
# For a given quadrant, world coordinates are:
#   wx = ox + col * cx + depth * dx
#   wy = oy + col * cy + depth * dy
_QUADRANT_TRANSFORMS: tuple[tuple[int, int, int, int], ...] = (
    (-1, 0, 0, -1),  # North: col->-x, depth->-y
    (1, 0, 0, 1),  # South: col->+x, depth->+y
    (0, 1, -1, 0),  # East:  depth->+x, col->-y
    (0, -1, 1, 0),  # West:  depth->-x, col->+y
)

BlockingPredicate: TypeAlias = Callable[[Point], bool]


def compute_visible(
    origin: Point,
    is_blocking: BlockingPredicate,
    radius: int | None = None,
) -> set[Point]:
    """Return every point visible from ``origin``.

    Args:
        origin: The viewer's tile. Always part of the result, even if it
            blocks.
        is_blocking: Returns ``True`` for tiles that stop sight.
        radius: Deepest row scanned in each quadrant. ``None`` scans until
            every sector is closed by blocking tiles, which requires the
            predicate to enclose the origin (a TileMap's absent tiles do).

    Returns:
        A new set of visible points, owned by the caller.

    Raises:
        ValueError: If ``radius`` is ``None`` and a sector is still open
            deeper than :data:`cairn.config.FOV_MAX_DEPTH` rows.
    """
    max_depth = config.FOV_MAX_DEPTH
    visible: set[Point] = {origin}
    for cx, dx, cy, dy in _QUADRANT_TRANSFORMS:
        _scan_quadrant(
            cx, dx, cy, dy, origin, is_blocking, radius, max_depth, visible
        )
    return visible


def _scan_quadrant(
    cx: int,
    dx: int,
    cy: int,
    dy: int,
    origin: Point,
    is_blocking: BlockingPredicate,
    radius: int | None,
    max_depth: int,
    visible: set[Point],
) -> None:
    """Scan one quadrant row by row with an explicit stack of row sections."""
    ox, oy = origin.x, origin.y

    # Stack entries: (row_depth, start_num, start_den, end_num, end_den).
    # Initial sector spans the full quadrant: slope -1/1 to 1/1.
    stack: list[tuple[int, int, int, int, int]] = [(1, -1, 1, 1, 1)]

    while stack:
        depth, s_num, s_den, e_num, e_den = stack.pop()

        if radius is not None:
            if depth > radius:
                continue
        elif depth > max_depth:
            raise ValueError(
                f"Field of view from {origin} is still open after {max_depth} "
                "rows; the blocking predicate must enclose the origin or a "
                "radius must be given"
            )

        # min_col = round_ties_up(depth * s_num / s_den)
        #         = floor((2 * depth * s_num + s_den) / (2 * s_den))
        min_col = (2 * depth * s_num + s_den) // (2 * s_den)

        # max_col = round_ties_down(depth * e_num / e_den)
        #         = ceil((2 * depth * e_num - e_den) / (2 * e_den))
        max_col = -(-(2 * depth * e_num - e_den) // (2 * e_den))

        prev_was_wall: bool | None = None

        for col in range(min_col, max_col + 1):
            point = Point(ox + col * cx + depth * dx, oy + col * cy + depth * dy)
            is_wall = is_blocking(point)

            # Walls are always revealed; floor only when its centre is inside
            # the sector: s <= col/depth <= e, cross-multiplied.
            if is_wall or (
                col * s_den >= depth * s_num and col * e_den <= depth * e_num
            ):
                visible.add(point)

            if prev_was_wall is not None:
                if prev_was_wall and not is_wall:
                    # Wall-to-floor: resume this row past the wall's far edge.
                    s_num = 2 * col - 1
                    s_den = 2 * depth
                elif not prev_was_wall and is_wall:
                    # Floor-to-wall: the sector up to the wall's near edge
                    # continues into the next row.
                    stack.append((depth + 1, s_num, s_den, 2 * col - 1, 2 * depth))

            prev_was_wall = is_wall

        if prev_was_wall is False:
            stack.append((depth + 1, s_num, s_den, e_num, e_den))


def is_visible_from(
    origin: Point,
    target: Point,
    is_blocking: BlockingPredicate,
    radius: int | None = None,
) -> bool:
    """Convenience check for a single target tile."""
    return target in compute_visible(origin, is_blocking, radius)
