"""2D polygon clipping backed by shapely.

Coplanar booleans in :mod:`tolgeom.poly` project their operands into a
2D frame and hand them to :func:`clip`.  Each operand is a list of
regions, each region an exterior ring plus optional holes.  Rings are
sequences of ``(x, y)`` pairs without a repeated closing point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

from .errors import ClippingError

Point2D = Tuple[float, float]
Ring = List[Point2D]

MODES = ("intersection", "difference", "union")


@dataclass
class Region2D:
    """A closed 2D region: one exterior ring and zero or more holes."""

    exterior: Ring
    holes: List[Ring] = field(default_factory=list)


def _as_region(obj) -> Region2D:
    if isinstance(obj, Region2D):
        return obj
    return Region2D([(float(x), float(y)) for x, y in obj])


def _to_shapely(regions: Iterable[Region2D]) -> BaseGeometry:
    polys = []
    for region in regions:
        if len(region.exterior) < 3:
            continue
        holes = [hole for hole in region.holes if len(hole) >= 3]
        polys.append(ShapelyPolygon(region.exterior, holes=holes))
    if len(polys) == 1:
        return polys[0]
    return MultiPolygon(polys)


def _ring(coords) -> Ring:
    return [(float(x), float(y)) for x, y in list(coords)[:-1]]


def _polygons(geom: BaseGeometry) -> List[ShapelyPolygon]:
    """Flatten ``geom`` to its area pieces; points and lines are dropped."""

    if geom.is_empty:
        return []
    if geom.geom_type == "Polygon":
        return [geom]
    if hasattr(geom, "geoms"):
        out: List[ShapelyPolygon] = []
        for g in geom.geoms:
            out.extend(_polygons(g))
        return out
    return []


def clip(subject: Sequence, clip_regions: Sequence, mode: str) -> List[Region2D]:
    """Combine two sets of 2D regions.

    ``subject`` and ``clip_regions`` are sequences of :class:`Region2D` or
    bare rings.  ``mode`` is one of ``'intersection'``, ``'difference'``
    (subject minus clip) or ``'union'``.  Results with zero area are
    discarded.
    """

    if mode not in MODES:
        raise ValueError(f"bad clipping mode {mode!r}, expected one of {MODES}")

    a = _to_shapely(_as_region(r) for r in subject)
    b = _to_shapely(_as_region(r) for r in clip_regions)
    try:
        if mode == "intersection":
            result = a.intersection(b)
        elif mode == "difference":
            result = a.difference(b)
        else:
            result = a.union(b)
    except GEOSException as exc:
        raise ClippingError(f"2D {mode} failed: {exc}") from exc

    regions = []
    for g in _polygons(result):
        if g.area <= 0.0:
            continue
        regions.append(Region2D(_ring(g.exterior.coords),
                                [_ring(r.coords) for r in g.interiors]))
    return regions


__all__ = ["Region2D", "MODES", "clip"]
