## triangles: plane cuts, containment and triangle-triangle intersection

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
Triangles
=========

:class:`Triangle` is the three-vertex variant of
:class:`~tolgeom.poly.Loop`.  Its vertices are reordered on construction
so that the determinant of the three position vectors is non-negative.

:meth:`Triangle.intersect` follows Möller, "A Fast Triangle-Triangle
Intersection Test" (1997), but returns the intersection itself: None, a
point, a :class:`~tolgeom.geom.Segment`, or for coplanar triangles the
overlap region as a Triangle or Polygon.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Union

from .errors import MalformedTriangleError
from .geom import Segment, Vector, det3
from .poly import CutResult, Loop, Polygon, cut_normal
from .tolerance import Tolerance

logger = logging.getLogger(__name__)


def _edge_point(a: Vector, b: Vector, da: float, db: float) -> Vector:
    """Where the plane crosses edge ``a b``, given signed distances."""

    return a.add(b.subtract(a).scale(da / (da - db)))


class Triangle(Loop):
    """Triangle with consistently wound vertices."""

    __slots__ = ()

    def __init__(self, a, b, c, tol: Optional[Tolerance] = None):
        super().__init__((a, b, c), tol)
        a, b, c = self._vertices
        if det3(a, b, c) < 0:
            self._vertices = (a, c, b)

    @classmethod
    def from_vertices(cls, vertices: Sequence, tol: Optional[Tolerance] = None) -> "Triangle":
        vertices = list(vertices)
        if len(vertices) != 3:
            raise MalformedTriangleError(
                f"a triangle needs exactly 3 vertices, got {len(vertices)}")
        return cls(vertices[0], vertices[1], vertices[2], tol)

    @property
    def normal(self) -> Vector:
        """Edge cross product; its length is twice the area."""

        a, b, c = self._vertices
        return b.subtract(a).cross(c.subtract(b))

    @property
    def edges(self) -> Tuple[Segment, Segment, Segment]:
        a, b, c = self._vertices
        return Segment(a, b), Segment(b, c), Segment(c, a)

    def area(self) -> float:
        return self.normal.length() / 2.0

    def equals(self, other: Loop) -> bool:
        """Vertex-set equality, ignoring order."""

        if len(other) != 3:
            return False
        return all(any(v.equals(w) for w in other) for v in self._vertices)

    def is_planar(self) -> bool:
        return True

    def is_convex(self) -> bool:
        return True

    def tesselate(self) -> List["Triangle"]:
        return [self]

    def contains(self, point: Vector) -> bool:
        """True if ``point`` lies in the plane and within the triangle."""

        a, b, c = self._vertices
        n = self.normal
        if not self.tol.is_zero(n.unit().dot(point.subtract(a))):
            return False
        parts = 0.0
        for p, q in ((a, b), (b, c), (c, a)):
            parts += p.subtract(point).cross(q.subtract(point)).length() / 2.0
        return self.tol.close(parts, n.length() / 2.0)

    def cut(self, normal: Union[str, Vector, Sequence[float]], offset: float) -> CutResult:
        """Split by the plane ``normal . X = offset``.

        ``normal`` may be an axis name.  Returns ``CutResult(above, below)``;
        a side the triangle does not reach is an empty Polygon, and a
        triangle lying in the plane is returned on both sides.  A triangle
        with an edge in the plane goes to the side of its third vertex.
        """

        n = cut_normal(normal, self.tol)
        eps = self.tol.epsilon
        v = self._vertices
        d = [n.dot(p) - offset for p in v]
        empty = Polygon.empty(self.tol)

        if all(abs(x) < eps for x in d):
            return CutResult(self, self)
        if all(x > -eps for x in d):
            return CutResult(self, empty)
        if all(x < eps for x in d):
            return CutResult(empty, self)

        on = [i for i in range(3) if abs(d[i]) < eps]
        if on:
            i = on[0]
            j, k = (i + 1) % 3, (i + 2) % 3
            p = _edge_point(v[j], v[k], d[j], d[k])
            tj = Triangle(v[i], v[j], p, self.tol)
            tk = Triangle(v[i], p, v[k], self.tol)
            return CutResult(tj, tk) if d[j] > 0 else CutResult(tk, tj)

        positive = [x > 0 for x in d]
        i = next(k for k in range(3) if positive.count(positive[k]) == 1)
        j, k = (i + 1) % 3, (i + 2) % 3
        q1 = _edge_point(v[i], v[j], d[i], d[j])
        q2 = _edge_point(v[k], v[i], d[k], d[i])
        tri = Triangle(v[i], q1, q2, self.tol)
        quad = Polygon((q1, v[j], v[k], q2), self.tol)
        return CutResult(tri, quad) if positive[i] else CutResult(quad, tri)

    def _distances(self, other: "Triangle") -> Tuple[Vector, float, List[float], List[int]]:
        """Signed distances of this triangle's vertices from the plane of ``other``."""

        n = other.normal.unit()
        d = -n.dot(other[0])
        dist = [n.dot(p) + d for p in self._vertices]
        return n, d, dist, [self.tol.sign(x) for x in dist]

    def _interval(self, dist: List[float], signs: List[int],
                  direction: Vector, origin: Vector) -> List[float]:
        """This triangle's extent along the line ``origin + t*direction``."""

        if signs[0] == signs[1]:
            lone, pair = 2, (0, 1)
        elif signs[0] == signs[2]:
            lone, pair = 1, (0, 2)
        elif signs[1] == signs[2]:
            lone, pair = 0, (1, 2)
        elif signs[0] == 0:
            lone, pair = 2, (0, 1)
        else:
            lone, pair = 0, (1, 2)
        proj = [direction.dot(p.subtract(origin)) for p in self._vertices]
        ts = [proj[k] + (proj[lone] - proj[k]) * dist[k] / (dist[k] - dist[lone])
              for k in pair]
        return sorted(ts)

    def _coplanar_intersect(self, other: "Triangle"):
        pieces = self._boolean(other, "intersection", check=False)
        ring = Polygon([p for piece in pieces for p in piece], self.tol).simplified()
        logger.debug("coplanar triangles overlap in %d vertices", len(ring))
        if len(ring) < 3:
            return None
        if len(ring) == 3:
            return Triangle(ring[0], ring[1], ring[2], self.tol)
        return ring

    def intersect(self, other: Loop) -> Union[None, Vector, Segment, "Triangle", Polygon]:
        """Intersection with another triangle.

        Returns None, a point, a Segment, or the coplanar overlap as a
        Triangle or Polygon.
        """

        if not isinstance(other, Loop) or len(other) != 3:
            raise MalformedTriangleError(
                f"can only intersect with a triangle, got {other!r}")
        if not isinstance(other, Triangle):
            other = Triangle.from_vertices(other, self.tol)

        n2, d2, dist1, signs1 = self._distances(other)
        if 0 not in signs1 and len(set(signs1)) == 1:
            return None
        n1, d1, dist2, signs2 = other._distances(self)
        if 0 not in signs2 and len(set(signs2)) == 1:
            return None

        flat1 = all(s == 0 for s in signs1)
        flat2 = all(s == 0 for s in signs2)
        if flat1 and flat2:
            logger.debug("triangles are coplanar")
            return self._coplanar_intersect(other)
        # one triangle lies within epsilon of the other's plane, but its own
        # plane is tilted enough to separate the other's vertices
        if flat1:
            logger.debug("triangle lies in the plane of %r", other)
            return other._coplanar_intersect(self)
        if flat2:
            logger.debug("triangle lies in the plane of %r", self)
            return self._coplanar_intersect(other)

        direction = n1.cross(n2).unit()
        origin = (n2.cross(direction).scale(-d1)
                  .add(direction.cross(n1).scale(-d2))
                  .scale(1.0 / det3(n1, n2, direction)))

        i1 = self._interval(dist1, signs1, direction, origin)
        i2 = other._interval(dist2, signs2, direction, origin)
        lo = max(i1[0], i2[0])
        hi = min(i1[1], i2[1])
        eps = self.tol.epsilon
        if hi - lo > eps:
            return Segment(origin.add(direction.scale(lo)),
                           origin.add(direction.scale(hi)))
        if abs(hi - lo) <= eps:
            return origin.add(direction.scale(lo))
        return None


__all__ = ["Triangle"]
