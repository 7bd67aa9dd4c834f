## triangle meshes for tolgeom

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
Triangle meshes
===============

A :class:`Mesh` is an ordered collection of :class:`~tolgeom.triangle.Triangle`
faces.  Vertices are not shared between faces; two faces touch when they
have epsilon-equal vertices.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import MalformedTriangleError
from .geom import BoundingBox, Vector
from .poly import CutResult
from .tolerance import Tolerance, default_tolerance
from .triangle import Triangle

logger = logging.getLogger(__name__)


def _touch(f: Triangle, g: Triangle) -> bool:
    return any(v.equals(w) for v in f for w in g)


class Mesh:
    """Ordered, immutable collection of triangular faces."""

    __slots__ = ("_faces", "tol")

    def __init__(self, faces: Iterable[Triangle] = (), tol: Optional[Tolerance] = None):
        faces = tuple(faces)
        for face in faces:
            if not isinstance(face, Triangle):
                raise MalformedTriangleError(f"mesh faces must be triangles, got {face!r}")
        if tol is None:
            tol = faces[0].tol if faces else default_tolerance()
        self.tol = tol
        self._faces: Tuple[Triangle, ...] = faces

    @property
    def faces(self) -> Tuple[Triangle, ...]:
        return self._faces

    def __len__(self) -> int:
        return len(self._faces)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self._faces)

    def __getitem__(self, i):
        return self._faces[i]

    def __repr__(self) -> str:
        return f"Mesh({len(self._faces)} faces)"

    def is_empty(self) -> bool:
        return not self._faces

    @property
    def vertices(self) -> Tuple[Vector, ...]:
        """Every face's vertices in order; shared vertices repeat."""

        return tuple(v for face in self._faces for v in face)

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.of(self.vertices)

    def cut(self, normal: Union[str, Vector, Sequence[float]], offset: float) -> CutResult:
        """Split every face by the plane ``normal . X = offset``.

        Returns ``CutResult(above, below)`` of two meshes.  Faces lying in
        the plane appear in both.  Non-triangular pieces are tesselated.
        """

        above: List[Triangle] = []
        below: List[Triangle] = []
        for face in self._faces:
            result = face.cut(normal, offset)
            if not result.above.is_empty():
                above.extend(result.above.tesselate())
            if not result.below.is_empty():
                below.extend(result.below.tesselate())
        logger.debug("cut %d faces into %d above, %d below",
                     len(self._faces), len(above), len(below))
        return CutResult(Mesh(above, self.tol), Mesh(below, self.tol))

    def split(self) -> List["Mesh"]:
        """Partition into vertex-connected sub-meshes.

        Each face lands in exactly one sub-mesh, in original order within
        it.
        """

        faces = self._faces
        unassigned = set(range(len(faces)))
        parts = []
        while unassigned:
            seed = min(unassigned)
            unassigned.discard(seed)
            region = [seed]
            frontier = deque([seed])
            while frontier:
                current = faces[frontier.popleft()]
                grown = [i for i in sorted(unassigned) if _touch(current, faces[i])]
                for i in grown:
                    unassigned.discard(i)
                    region.append(i)
                    frontier.append(i)
            parts.append(Mesh([faces[i] for i in sorted(region)], self.tol))
        logger.debug("split %d faces into %d region(s)", len(faces), len(parts))
        return parts

    def is_contiguous(self) -> bool:
        """True when the mesh forms at most one connected region."""

        return len(self.split()) <= 1


__all__ = ["Mesh"]
