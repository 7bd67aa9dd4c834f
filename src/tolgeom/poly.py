## vertex loops and coplanar polygon booleans for tolgeom

## Copyright (c) 2024 tolgeom contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Vertex loops and polygons
=========================

A :class:`Loop` is an immutable, implicitly closed sequence of
:class:`~tolgeom.geom.Vector` instances.  It carries the operations shared
by every closed shape: Newell normal, plane, projection to 2D and the
coplanar boolean operations.  :class:`Polygon` is the general variant;
:class:`~tolgeom.triangle.Triangle` is the three-vertex variant.

Boolean operations project both operands onto the two axes orthogonal to
the dominant axis of the normal, combine them with
:func:`tolgeom.clipping.clip`, split any single hole with
:func:`tolgeom.holes.split_hole`, and lift the result back onto the
original plane.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

from . import clipping
from .errors import DegenerateGeometryError, NonCoplanarError, UnsupportedTopologyError
from .geom import BoundingBox, Vector, winding
from .holes import dedupe, split_hole
from .tolerance import Tolerance, default_tolerance

if TYPE_CHECKING:
    from .mesh import Mesh

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]

# the two remaining axes, in cyclic order so that a counter-clockwise 2D
# ring has a normal along the positive dominant axis
_PLANE_AXES = {0: (1, 2), 1: (2, 0), 2: (0, 1)}

_AXIS_NAMES = {"x": (1.0, 0.0, 0.0), "y": (0.0, 1.0, 0.0), "z": (0.0, 0.0, 1.0)}


class CutResult(NamedTuple):
    """The two sides of a plane cut.  Either side may be empty."""

    above: Union["Loop", "Mesh"]
    below: Union["Loop", "Mesh"]


def _triangle_cls():
    from .triangle import Triangle
    return Triangle


def cut_normal(normal: Union[str, Vector, Sequence[float]], tol: Tolerance) -> Vector:
    """Resolve a cut plane normal; ``'x'``, ``'y'`` and ``'z'`` name the axes."""

    if isinstance(normal, str):
        try:
            return Vector.of(_AXIS_NAMES[normal.lower()], tol)
        except KeyError:
            raise ValueError(f"bad axis name {normal!r}") from None
    return Vector.of(normal, tol)


def dominant_axis(n: Vector) -> int:
    """Index of the largest absolute component of ``n``."""

    a = (abs(n.x), abs(n.y), abs(n.z))
    return a.index(max(a))


class Loop:
    """Closed, ordered vertex loop shared by :class:`Polygon` and ``Triangle``."""

    __slots__ = ("_vertices", "tol")

    def __init__(self, vertices: Iterable = (), tol: Optional[Tolerance] = None):
        vertices = list(vertices)
        if tol is None:
            first = vertices[0] if vertices else None
            tol = first.tol if isinstance(first, Vector) else default_tolerance()
        self.tol = tol
        self._vertices: Tuple[Vector, ...] = tuple(Vector.of(v, tol) for v in vertices)

    @property
    def vertices(self) -> Tuple[Vector, ...]:
        return self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vector]:
        return iter(self._vertices)

    def __getitem__(self, i):
        return self._vertices[i]

    def __repr__(self) -> str:
        return "{}([{}])".format(type(self).__name__,
                                 ", ".join(str(v) for v in self._vertices))

    def __eq__(self, other):
        if not isinstance(other, Loop):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def is_empty(self) -> bool:
        return not self._vertices

    def edge_pairs(self) -> List[Tuple[Vector, Vector]]:
        v = self._vertices
        return [(v[i], v[(i + 1) % len(v)]) for i in range(len(v))]

    def equals(self, other: "Loop") -> bool:
        """Same vertex sequence up to a cyclic rotation.

        Against a triangle, whose vertices may be reordered on construction,
        the comparison ignores order.
        """

        triangle = _triangle_cls()
        if isinstance(other, triangle) and not isinstance(self, triangle):
            return other.equals(self)
        if len(self) != len(other):
            return False
        if not self._vertices:
            return True
        n = len(self)
        first = self._vertices[0]
        for start in range(n):
            if not other[start].equals(first):
                continue
            if all(self._vertices[i].equals(other[(start + i) % n]) for i in range(n)):
                return True
        return False

    @property
    def normal(self) -> Optional[Vector]:
        """Newell normal, or None with fewer than three vertices."""

        v = self._vertices
        if len(v) < 3:
            return None
        nx = ny = nz = 0.0
        for i in range(len(v)):
            a, b = v[i], v[(i + 1) % len(v)]
            nx += (a.y - b.y) * (a.z + b.z)
            ny += (a.z - b.z) * (a.x + b.x)
            nz += (a.x - b.x) * (a.y + b.y)
        return Vector(nx, ny, nz, self.tol)

    def plane(self) -> Tuple[Vector, float]:
        """Unit normal ``n`` and offset ``d`` with ``n . X = d`` on the plane."""

        n = self.normal
        if n is None or n.length() == 0.0:
            raise DegenerateGeometryError(f"{type(self).__name__} with {len(self)} "
                                          "vertices has no plane")
        n = n.unit()
        return n, n.dot(self._vertices[0])

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.of(self._vertices)

    def coplanar(self, other: "Loop") -> bool:
        """Normals parallel and a vertex of ``other`` on this plane."""

        n1, d1 = self.plane()
        n2, _ = other.plane()
        if not n1.cross(n2).is_zero():
            return False
        return self.tol.is_zero(n1.dot(other[0]) - d1)

    def project(self, axis: int) -> List[Point2D]:
        i, j = _PLANE_AXES[axis]
        return [(v[i], v[j]) for v in self._vertices]

    def simplified(self) -> "Polygon":
        """Polygon copy without repeated or collinear vertices."""

        v = list(self._vertices)
        changed = True
        while changed and len(v) >= 3:
            changed = False
            for i in range(len(v)):
                a, b, c = v[i - 1], v[i], v[(i + 1) % len(v)]
                if a.equals(b) or b.subtract(a).cross(c.subtract(b)).is_zero():
                    del v[i]
                    changed = True
                    break
        return Polygon(v, self.tol)

    def _boolean(self, other: "Loop", mode: str, check: bool = True) -> List["Polygon"]:
        if len(self) < 3 or len(other) < 3:
            raise DegenerateGeometryError(f"{mode} needs two loops of at least three vertices")
        if check and not self.coplanar(other):
            raise NonCoplanarError(f"cannot compute {mode} of non-coplanar polygons")

        n, d = self.plane()
        axis = dominant_axis(n)
        i, j = _PLANE_AXES[axis]
        want = -1 if n[axis] > 0 else 1

        regions = clipping.clip([self.project(axis)], [other.project(axis)], mode)
        result = []
        for region in regions:
            if len(region.holes) > 1:
                raise UnsupportedTopologyError(
                    f"{mode} result has {len(region.holes)} holes",
                    {"holes": len(region.holes)})
            if region.holes:
                rings = split_hole(region.exterior, region.holes[0], self.tol)
            else:
                rings = [region.exterior]
            for ring in rings:
                ring = dedupe(ring, self.tol)
                if len(ring) < 3:
                    continue
                if winding(ring) == -want:
                    ring.reverse()
                result.append(Polygon(self._lift(ring, n, d, axis, i, j), self.tol))
        logger.debug("%s of %d- and %d-gon: %d polygon(s)",
                     mode, len(self), len(other), len(result))
        return result

    def _lift(self, ring, n, d, axis, i, j) -> List[Vector]:
        out = []
        for a, b in ring:
            c = [0.0, 0.0, 0.0]
            c[i] = a
            c[j] = b
            c[axis] = (d - n[i] * a - n[j] * b) / n[axis]
            out.append(Vector(c[0], c[1], c[2], self.tol))
        return out

    def subtract(self, other: "Loop") -> List["Polygon"]:
        """This loop minus ``other``; both must be coplanar."""

        return self._boolean(other, "difference")

    def add(self, other: "Loop") -> List["Polygon"]:
        """Union with ``other``; both must be coplanar."""

        return self._boolean(other, "union")


class Polygon(Loop):
    """General planar polygon.  An empty polygon is the empty cut result."""

    __slots__ = ()

    @classmethod
    def empty(cls, tol: Optional[Tolerance] = None) -> "Polygon":
        return cls((), tol)

    def is_planar(self) -> bool:
        v = self._vertices
        if len(v) <= 3:
            return True
        n = v[1].subtract(v[0]).cross(v[2].subtract(v[0]))
        if n.is_zero():
            n = self.normal
        n = n.unit()
        return all(self.tol.is_zero(n.dot(p.subtract(v[0]))) for p in v[3:])

    def is_convex(self) -> bool:
        v = self._vertices
        if len(v) <= 3:
            return True
        n = self.normal
        for k, (a, b) in enumerate(self.edge_pairs()):
            side = b.subtract(a).cross(n)
            if side.is_zero():
                continue
            side = side.unit()
            ref = 0
            ends = (k, (k + 1) % len(v))
            for m, p in enumerate(v):
                if m in ends:
                    continue
                s = self.tol.sign(side.dot(p.subtract(a)))
                if s == 0:
                    continue
                if ref == 0:
                    ref = s
                elif s != ref:
                    return False
        return True

    def contains(self, point: Vector) -> bool:
        """Even-odd winding number test in the dominant-axis projection."""

        if len(self) < 3:
            return False
        axis = dominant_axis(self.normal)
        i, j = _PLANE_AXES[axis]
        px, py = point[i], point[j]
        ring = self.project(axis)
        wn = 0
        for k in range(len(ring)):
            (ax, ay), (bx, by) = ring[k], ring[(k + 1) % len(ring)]
            left = (bx - ax) * (py - ay) - (px - ax) * (by - ay)
            if ay <= py:
                if by > py and left > 0:
                    wn += 1
            elif by <= py and left < 0:
                wn -= 1
        return wn % 2 == 1

    def intersect(self, other: Loop) -> List["Polygon"]:
        """Coplanar intersection with ``other``."""

        return self._boolean(other, "intersection")

    def tesselate(self) -> list:
        """Triangles covering this polygon."""

        from .triangulator import triangulate_ring

        triangle = _triangle_cls()
        v = self._vertices
        if len(v) < 3:
            return []
        if len(v) == 3:
            return [triangle(v[0], v[1], v[2])]
        tris = triangulate_ring(self.project(dominant_axis(self.normal)), self.tol)
        return [triangle(v[a], v[b], v[c]) for a, b, c in tris]


__all__ = ["CutResult", "Loop", "Polygon", "cut_normal", "dominant_axis"]
