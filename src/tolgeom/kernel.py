"""A geometry kernel bound to one tolerance.

Every value built through a :class:`GeometryKernel` carries the kernel's
:class:`~tolgeom.tolerance.Tolerance`, so results derived from them compare
with the same epsilon::

    fine = GeometryKernel(epsilon=1e-12)
    t = fine.triangle((0, 0, 0), (1, 0, 0), (0, 1, 0))
"""

from __future__ import annotations

from typing import Iterable, Optional

from .geom import Segment, Vector
from .mesh import Mesh
from .poly import Polygon
from .tolerance import Tolerance, default_tolerance
from .triangle import Triangle


class GeometryKernel:
    """Factory for tolgeom values sharing a tolerance."""

    def __init__(self, epsilon: Optional[float] = None):
        if epsilon is None:
            self.tol = default_tolerance()
        else:
            self.tol = Tolerance(epsilon)

    @property
    def epsilon(self) -> float:
        return self.tol.epsilon

    def __repr__(self) -> str:
        return f"GeometryKernel(epsilon={self.tol.epsilon!r})"

    def vector(self, x, y=None, z=None) -> Vector:
        if y is None and z is None:
            return Vector.of(x, self.tol)
        return Vector(float(x), float(y), float(z), self.tol)

    def segment(self, a, b) -> Segment:
        return Segment(self.vector(a), self.vector(b))

    def polygon(self, vertices: Iterable = ()) -> Polygon:
        return Polygon(vertices, self.tol)

    def triangle(self, a, b, c) -> Triangle:
        return Triangle(a, b, c, self.tol)

    def mesh(self, faces: Iterable = ()) -> Mesh:
        """Build a mesh; faces may be Triangles or vertex triples."""

        out = []
        for face in faces:
            if isinstance(face, Triangle):
                out.append(face)
            else:
                out.append(Triangle.from_vertices(face, self.tol))
        return Mesh(out, self.tol)


__all__ = ["GeometryKernel"]
