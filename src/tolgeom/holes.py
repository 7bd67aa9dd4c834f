"""Split a 2D region with a single hole into two simple polygons.

The region is cut along a horizontal line through the vertical middle of
the hole.  Four break points are found on that line:

* ``C1`` and ``C2``, the leftmost and rightmost crossings of the hole;
* ``S1``, the exterior crossing nearest to the left of ``C1``, and ``S2``,
  the exterior crossing nearest to the right of ``C2``.

The segments ``S1 C1`` and ``C2 S2`` lie inside the region, so walking the
exterior from ``S2`` to ``S1`` and the hole from ``C1`` to ``C2`` bounds the
upper half, and the two remaining chains bound the lower half.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .errors import UnsupportedTopologyError
from .geom import winding
from .tolerance import Tolerance, default_tolerance

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


class Crossing(NamedTuple):
    point: Point2D
    edge: int
    u: float


def _crossings(ring: Sequence[Point2D], y: float) -> List[Crossing]:
    """All points where the edges of ``ring`` meet the line at height ``y``.

    Horizontal edges on the line are skipped; their endpoints are reported
    by the neighbouring edges.
    """

    out = []
    n = len(ring)
    for i in range(n):
        (ax, ay), (bx, by) = ring[i], ring[(i + 1) % n]
        if ay == by or y < min(ay, by) or y > max(ay, by):
            continue
        u = (y - ay) / (by - ay)
        out.append(Crossing((ax + (bx - ax) * u, y), i, u))
    return out


def _chain(ring: Sequence[Point2D], start: Crossing, end: Crossing) -> List[Point2D]:
    """Ring vertices met walking in index order from ``start`` to ``end``."""

    n = len(ring)
    if start.edge == end.edge and start.u <= end.u:
        return []
    out = []
    i = (start.edge + 1) % n
    while True:
        out.append(ring[i])
        if i == end.edge:
            break
        i = (i + 1) % n
    return out


def dedupe(ring: Sequence[Point2D], tol: Tolerance) -> List[Point2D]:
    """Drop consecutive points closer than epsilon, wrapping around."""

    out: List[Point2D] = []
    for p in ring:
        if out and tol.close(out[-1][0], p[0]) and tol.close(out[-1][1], p[1]):
            continue
        out.append(p)
    while (len(out) > 1 and tol.close(out[0][0], out[-1][0])
           and tol.close(out[0][1], out[-1][1])):
        out.pop()
    return out


def split_hole(exterior: Sequence[Point2D], hole: Sequence[Point2D],
               tol: Optional[Tolerance] = None) -> Tuple[List[Point2D], List[Point2D]]:
    """Return two hole-free rings covering ``exterior`` minus ``hole``.

    Both rings are counter-clockwise.  Raises
    :class:`~tolgeom.errors.UnsupportedTopologyError` when the hole cannot
    be bridged to the exterior.
    """

    if tol is None:
        tol = default_tolerance()
    eps = tol.epsilon

    ext = list(exterior)
    if winding(ext) == 1:
        ext.reverse()
    hol = list(hole)
    if winding(hol) == -1:
        hol.reverse()

    ys = [p[1] for p in hol]
    y = (min(ys) + max(ys)) / 2.0

    hole_hits = _crossings(hol, y)
    if not hole_hits:
        raise UnsupportedTopologyError("hole has no extent across its bisector",
                                       {"hole": hol})
    c1 = min(hole_hits, key=lambda c: c.point[0])
    c2 = max(hole_hits, key=lambda c: c.point[0])

    ext_hits = _crossings(ext, y)
    left = [c for c in ext_hits if c.point[0] <= c1.point[0] + eps]
    right = [c for c in ext_hits if c.point[0] >= c2.point[0] - eps]
    if not left or not right:
        raise UnsupportedTopologyError("hole is not enclosed by the exterior ring",
                                       {"exterior": ext, "hole": hol})
    s1 = max(left, key=lambda c: c.point[0])
    s2 = min(right, key=lambda c: c.point[0])
    logger.debug("splitting hole at y=%g: S1=%s C1=%s C2=%s S2=%s",
                 y, s1.point, c1.point, c2.point, s2.point)

    # exterior is counter-clockwise, so it climbs from S2 and descends from
    # S1; the clockwise hole runs over its top from C1 and under it from C2
    upper = ([s2.point] + _chain(ext, s2, s1) + [s1.point, c1.point]
             + _chain(hol, c1, c2) + [c2.point])
    lower = ([s1.point] + _chain(ext, s1, s2) + [s2.point, c2.point]
             + _chain(hol, c2, c1) + [c1.point])
    return dedupe(upper, tol), dedupe(lower, tol)


__all__ = ["split_hole", "dedupe"]
