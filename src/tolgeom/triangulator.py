"""Triangulation of simple polygons.

We delegate to ``mapbox-earcut`` (the fast ear clipping implementation
used by Mapbox GL).  The helper here drops repeated points from the 2D
ring, hands it to earcut, and maps the resulting indices back onto the
positions of the input ring so that callers can reuse their 3D vertices.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

try:
    import mapbox_earcut as _earcut
except ImportError as exc:  # pragma: no cover - import guard
    raise ImportError(
        "mapbox-earcut must be installed to tesselate polygons"
    ) from exc

from .tolerance import Tolerance, default_tolerance

Point2D = Tuple[float, float]


def triangulate_ring(points: Sequence[Sequence[float]],
                     tol: Optional[Tolerance] = None) -> List[Tuple[int, int, int]]:
    """Return index triples into ``points`` covering the ring's interior.

    Degenerate rings (fewer than three distinct points) give no triangles.
    """

    if tol is None:
        tol = default_tolerance()

    loop, index = _prepare_loop(points, tol)
    if len(loop) < 3:
        return []

    vertices = np.asarray(loop, dtype=np.float64).reshape(-1, 2)
    ring_array = np.asarray([len(loop)], dtype=np.uint32)
    indices = _earcut.triangulate_float64(vertices, ring_array)
    triangles = []
    for i in range(0, len(indices), 3):
        triangles.append((index[int(indices[i])],
                          index[int(indices[i + 1])],
                          index[int(indices[i + 2])]))
    return triangles


def _prepare_loop(points: Sequence[Sequence[float]], tol: Tolerance):
    loop: List[Point2D] = []
    index: List[int] = []
    for i, pt in enumerate(points):
        x, y = float(pt[0]), float(pt[1])
        if loop and _near(loop[-1], (x, y), tol):
            continue
        loop.append((x, y))
        index.append(i)
    if len(loop) > 1 and _near(loop[0], loop[-1], tol):
        loop.pop()
        index.pop()
    return loop, index


def _near(p1: Point2D, p2: Point2D, tol: Tolerance) -> bool:
    return tol.close(p1[0], p2[0]) and tol.close(p1[1], p2[1])


__all__ = ["triangulate_ring"]
