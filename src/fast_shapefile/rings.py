"""
Ring assembly and shell/hole classification for multi-part records.

Shapefile polygons store every ring of a record in one flat point array.
split_parts() cuts that array at the part offsets, classify_rings() sorts the
rings into shells and holes by winding order, and assign_holes() pairs each
hole with the shell that encloses it.

Winding convention: shapefile shells are clockwise and holes are
counter-clockwise, measured on ordinary x-right/y-up axes. signed_area() is
positive for counter-clockwise rings.
"""

import logging
from collections.abc import Sequence

from shapely.geometry import Polygon as ShapelyPolygon

from .exceptions import MalformedRecordError
from .geometry import Coord, Envelope, Ring

logger = logging.getLogger(__name__)


def split_parts(
    points: Sequence[Coord], offsets: Sequence[int], record_index: int | None = None
) -> list[Ring]:
    """
    Partition a flat point array into parts.

    Part i spans points[offsets[i]:offsets[i + 1]]; the last part runs to the
    end of the array.

    Raises:
        MalformedRecordError: If the offsets decrease or fall outside the
            point array
    """
    num_points = len(points)
    parts: list[Ring] = []
    for i, start in enumerate(offsets):
        stop = offsets[i + 1] if i + 1 < len(offsets) else num_points
        if start < 0 or stop < start or stop > num_points:
            raise MalformedRecordError(
                record_index,
                f"part {i} spans [{start}, {stop}) outside {num_points} points",
            )
        parts.append(list(points[start:stop]))
    return parts


def signed_area(ring: Sequence[Coord]) -> float:
    """
    Signed area of a ring using the shoelace formula.

    Positive for counter-clockwise rings, negative for clockwise rings. The
    ring does not need to repeat its first point at the end.
    """
    n = len(ring)
    if n < 3:
        return 0.0
    area2 = 0.0
    for i in range(n):
        x1, y1 = ring[i]
        x2, y2 = ring[(i + 1) % n]
        area2 += x1 * y2 - x2 * y1
    return area2 / 2.0


def is_clockwise(ring: Sequence[Coord]) -> bool:
    return signed_area(ring) < 0


def classify_rings(rings: Sequence[Ring]) -> tuple[list[Ring], list[Ring]]:
    """
    Split rings into (shells, holes), keeping record order within each list.

    Counter-clockwise rings are holes; everything else, including degenerate
    rings with zero area, is treated as a shell. Parts with no points are
    dropped.
    """
    shells: list[Ring] = []
    holes: list[Ring] = []
    for ring in rings:
        if not ring:
            continue
        if signed_area(ring) > 0:
            holes.append(ring)
        else:
            shells.append(ring)
    return shells, holes


def _ring_within(shell: Ring, hole: Ring) -> bool:
    """Point-in-polygon confirmation that hole lies inside shell"""
    if len(shell) < 3 or len(hole) < 3:
        return False
    return ShapelyPolygon(shell).contains(ShapelyPolygon(hole))


def assign_holes(
    shells: Sequence[Ring], holes: Sequence[Ring], strict: bool = False
) -> list[tuple[Ring, list[Ring]]]:
    """
    Pair holes with the shells that enclose them.

    With a single shell every hole belongs to it. With several shells each
    shell, in order, claims the remaining holes whose envelope fits inside
    its own envelope. The pool is scanned from the end, so a shell lists its
    holes in reverse record order. Envelope containment is necessary but not
    sufficient for true nesting; pass strict=True to also require a
    point-in-polygon containment check before a shell may claim a hole.

    Holes claimed by no shell are reversed and returned as extra hole-less
    polygons after the original shells.

    Returns:
        List of (shell, holes) pairs
    """
    if len(shells) == 1:
        return [(shells[0], list(holes))]

    pool = list(holes)
    pool_envelopes = [Envelope.from_coords(h) for h in pool]
    polygons: list[tuple[Ring, list[Ring]]] = []

    for shell in shells:
        shell_env = Envelope.from_coords(shell)
        claimed: list[Ring] = []
        for i in range(len(pool) - 1, -1, -1):
            if not shell_env.contains(pool_envelopes[i]):
                continue
            if strict and not _ring_within(shell, pool[i]):
                continue
            claimed.append(pool.pop(i))
            pool_envelopes.pop(i)
        polygons.append((shell, claimed))

    if pool:
        logger.debug("Promoting %d unclaimed hole(s) to shells", len(pool))
    for hole in pool:
        polygons.append((list(reversed(hole)), []))

    return polygons
