# -*- coding: utf-8 -*-
"""tolgeom: tolerance-aware 3D geometry for triangle meshes."""

from importlib.metadata import PackageNotFoundError, version

from .config import Settings, load_settings
from .errors import (
    ClippingError,
    ConfigurationError,
    DegenerateGeometryError,
    GeometryError,
    MalformedTriangleError,
    NonCoplanarError,
    UnsupportedTopologyError,
)
from .geom import BoundingBox, Matrix, Segment, Vector, line_intersect, vector, winding
from .kernel import GeometryKernel
from .mesh import Mesh
from .poly import CutResult, Loop, Polygon
from .tolerance import Tolerance, default_tolerance
from .triangle import Triangle

try:
    __version__ = version("tolgeom")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    "BoundingBox",
    "ClippingError",
    "ConfigurationError",
    "CutResult",
    "DegenerateGeometryError",
    "GeometryError",
    "GeometryKernel",
    "Loop",
    "MalformedTriangleError",
    "Matrix",
    "Mesh",
    "NonCoplanarError",
    "Polygon",
    "Segment",
    "Settings",
    "Tolerance",
    "Triangle",
    "UnsupportedTopologyError",
    "Vector",
    "default_tolerance",
    "line_intersect",
    "load_settings",
    "vector",
    "winding",
]
