## foundational vector, matrix and segment types for tolgeom

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
Vectors, 3x3 matrices and line segments
=======================================

Everything in tolgeom is built from :class:`Vector`, an immutable
three-component value.  Vector equality is tolerance based: two vectors
are equal when every coordinate differs by strictly less than the
vector's epsilon.  Since that relation is not transitive, vectors are
deliberately unhashable.

:class:`Segment` carries the line-line intersection machinery, following
Goldman's closest-point-of-approach construction (Graphics Gems I,
"Intersection of two lines in three-space").
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import DegenerateGeometryError
from .tolerance import Tolerance, default_tolerance

Point2D = Tuple[float, float]


@dataclass(frozen=True, eq=False)
class Vector:
    """Immutable 3D vector with tolerance-based equality."""

    x: float
    y: float
    z: float
    tol: Tolerance = field(default_factory=default_tolerance, repr=False)

    @classmethod
    def of(cls, obj, tol: Optional[Tolerance] = None) -> "Vector":
        """Build a vector from a Vector, a 3-sequence or a mapping with x, y, z."""

        if isinstance(obj, Vector):
            if tol is None or tol is obj.tol:
                return obj
            return cls(obj.x, obj.y, obj.z, tol)
        if tol is None:
            tol = default_tolerance()
        if isinstance(obj, dict):
            return cls(float(obj["x"]), float(obj["y"]), float(obj["z"]), tol)
        if len(obj) != 3:
            raise ValueError(f"expected three coordinates, got {obj!r}")
        return cls(float(obj[0]), float(obj[1]), float(obj[2]), tol)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, i: int) -> float:
        return (self.x, self.y, self.z)[i]

    def __len__(self) -> int:
        return 3

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g}, {self.z:g})"

    def equals(self, other: "Vector") -> bool:
        close = self.tol.close
        return (close(self.x, other.x) and close(self.y, other.y)
                and close(self.z, other.z))

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    def add(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z, self.tol)

    def subtract(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z, self.tol)

    def scale(self, s: float) -> "Vector":
        return Vector(self.x * s, self.y * s, self.z * s, self.tol)

    def cross(self, other: "Vector") -> "Vector":
        return Vector(self.y * other.z - self.z * other.y,
                      self.z * other.x - self.x * other.z,
                      self.x * other.y - self.y * other.x,
                      self.tol)

    def dot(self, other: "Vector") -> float:
        # plain sum; large near-orthogonal inputs lose precision
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def unit(self) -> "Vector":
        """Return the unit vector; the zero vector yields nan components."""

        mag = self.length()
        if mag == 0.0:
            return Vector(math.nan, math.nan, math.nan, self.tol)
        return self.scale(1.0 / mag)

    def angle(self, other: "Vector") -> float:
        """Angle between two vectors in radians."""

        c = self.dot(other) / (self.length() * other.length())
        return math.acos(max(-1.0, min(1.0, c)))

    def is_zero(self) -> bool:
        return (self.tol.is_zero(self.x) and self.tol.is_zero(self.y)
                and self.tol.is_zero(self.z))

    __add__ = add
    __sub__ = subtract

    def __mul__(self, s: float) -> "Vector":
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector":
        return self.scale(-1.0)


def vector(x, y=None, z=None, tol: Optional[Tolerance] = None) -> Vector:
    """Convenience constructor: ``vector(1, 2, 3)`` or ``vector((1, 2, 3))``."""

    if y is None and z is None:
        return Vector.of(x, tol)
    return Vector(float(x), float(y), float(z),
                  default_tolerance() if tol is None else tol)


@dataclass(frozen=True)
class Matrix:
    """3x3 real matrix, stored as rows.  Only the determinant is needed."""

    rows: Tuple[Tuple[float, float, float], ...]

    @classmethod
    def from_rows(cls, r0: Sequence[float], r1: Sequence[float],
                  r2: Sequence[float]) -> "Matrix":
        rows = tuple(tuple(float(v) for v in r) for r in (r0, r1, r2))
        if any(len(r) != 3 for r in rows):
            raise ValueError(f"bad rows for 3x3 matrix: {rows!r}")
        return cls(rows)

    @classmethod
    def from_columns(cls, c0: Sequence[float], c1: Sequence[float],
                     c2: Sequence[float]) -> "Matrix":
        return cls.from_rows((c0[0], c1[0], c2[0]),
                             (c0[1], c1[1], c2[1]),
                             (c0[2], c1[2], c2[2]))

    def get(self, i: int, j: int) -> float:
        return self.rows[i][j]

    def determinant(self) -> float:
        (a, b, c), (d, e, f), (g, h, i) = self.rows
        return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


def det3(c0: Vector, c1: Vector, c2: Vector) -> float:
    """Determinant of the matrix with the three vectors as columns."""

    return Matrix.from_columns(c0, c1, c2).determinant()


def winding(points: Sequence[Point2D]) -> int:
    """Orientation of a closed 2D ring.

    Returns 1 for clockwise, -1 for counter-clockwise and 0 when the ring
    encloses no area.
    """

    total = 0.0
    n = len(points)
    for i in range(n):
        x1, y1 = points[i][0], points[i][1]
        x2, y2 = points[(i + 1) % n][0], points[(i + 1) % n][1]
        total += (x2 - x1) * (y2 + y1)
    if total > 0:
        return 1
    if total < 0:
        return -1
    return 0


def _param(a: Vector, d: Vector, p: Vector) -> Optional[float]:
    """Locate ``p`` on the line ``a + t*d``.

    Returns ``t`` when every coordinate of ``p`` agrees with the line
    within epsilon, else None.
    """

    dd = d.dot(d)
    if dd == 0.0:
        return 0.0 if a.equals(p) else None
    t = d.dot(p.subtract(a)) / dd
    if a.add(d.scale(t)).equals(p):
        return t
    return None


def _closest_params(a1: Vector, b1: Vector, a2: Vector, b2: Vector):
    """Goldman's closest approach parameters, or None for parallel lines."""

    d1 = b1.subtract(a1)
    d2 = b2.subtract(a2)
    c = d1.cross(d2)
    cc = c.dot(c)
    if cc < a1.tol.epsilon:
        return None
    w = a2.subtract(a1)
    t1 = det3(w, d2, c) / cc
    t2 = det3(w, d1, c) / cc
    return t1, t2


def line_intersect(a1: Vector, b1: Vector, a2: Vector, b2: Vector
                   ) -> Union[None, Vector, "Segment"]:
    """Intersect the infinite lines through ``a1 b1`` and ``a2 b2``.

    Returns the intersection point, None for skew or parallel lines, or
    ``Segment(a1, b1)`` when the lines coincide.
    """

    params = _closest_params(a1, b1, a2, b2)
    if params is None:
        if _param(a1, b1.subtract(a1), a2) is not None:
            return Segment(a1, b1)
        return None
    t1, t2 = params
    p1 = a1.add(b1.subtract(a1).scale(t1))
    p2 = a2.add(b2.subtract(a2).scale(t2))
    if p1.equals(p2):
        return p1
    return None


@dataclass(frozen=True, eq=False)
class Segment:
    """Line segment between two vectors; equality ignores direction."""

    a: Vector
    b: Vector

    @property
    def tol(self) -> Tolerance:
        return self.a.tol

    @property
    def direction(self) -> Vector:
        return self.b.subtract(self.a)

    def length(self) -> float:
        return self.direction.length()

    def point_at(self, t: float) -> Vector:
        return self.a.add(self.direction.scale(t))

    def __iter__(self) -> Iterator[Vector]:
        yield self.a
        yield self.b

    def __str__(self) -> str:
        return f"[{self.a} -> {self.b}]"

    def equals(self, other: "Segment") -> bool:
        return ((self.a.equals(other.a) and self.b.equals(other.b))
                or (self.a.equals(other.b) and self.b.equals(other.a)))

    def __eq__(self, other):
        if not isinstance(other, Segment):
            return NotImplemented
        return self.equals(other)

    def collinear(self, other: "Segment") -> Optional[Tuple[float, float]]:
        """Parameters of ``other``'s endpoints along this segment, or None
        if the two do not lie on one line."""

        d = self.direction
        t1 = _param(self.a, d, other.a)
        if t1 is None:
            return None
        t2 = _param(self.a, d, other.b)
        if t2 is None:
            return None
        return t1, t2

    def intersect(self, other: "Segment") -> Union[None, Vector, "Segment"]:
        """Intersection of two segments.

        Returns None, the crossing point, or for collinear segments the
        overlapping sub-segment (collapsed to a point when it has no
        length).
        """

        eps = self.tol.epsilon
        params = _closest_params(self.a, self.b, other.a, other.b)
        if params is not None:
            s, t = params
            if not (-eps <= s <= 1 + eps and -eps <= t <= 1 + eps):
                return None
            p1 = self.point_at(s)
            if p1.equals(other.point_at(t)):
                return p1
            return None

        overlap = self.collinear(other)
        if overlap is None:
            return None
        lo = max(0.0, min(overlap))
        hi = min(1.0, max(overlap))
        if hi < lo - eps:
            return None
        start = self.point_at(lo)
        end = self.point_at(max(lo, hi))
        if start.equals(end):
            return start
        return Segment(start, end)


class BoundingBox(NamedTuple):
    """Axis-aligned box given by its minimum and maximum corners."""

    min: Vector
    max: Vector

    @classmethod
    def of(cls, vertices: Iterable[Vector]) -> "BoundingBox":
        vertices = list(vertices)
        if not vertices:
            raise DegenerateGeometryError("bounding box of nothing")
        tol = vertices[0].tol
        coords = np.array([tuple(v) for v in vertices], dtype=float)
        lo = coords.min(axis=0)
        hi = coords.max(axis=0)
        return cls(Vector(float(lo[0]), float(lo[1]), float(lo[2]), tol),
                   Vector(float(hi[0]), float(hi[1]), float(hi[2]), tol))

    def size(self) -> Vector:
        return self.max.subtract(self.min)


__all__ = [
    "Vector",
    "vector",
    "Matrix",
    "det3",
    "winding",
    "line_intersect",
    "Segment",
    "BoundingBox",
]
