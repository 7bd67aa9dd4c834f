"""Exception types raised by tolgeom."""

from __future__ import annotations


class GeometryError(ValueError):
    """Base class for geometric failures."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class NonCoplanarError(GeometryError):
    """Raised when a boolean operation is given operands in different planes."""


class UnsupportedTopologyError(GeometryError):
    """Raised when a boolean result has a topology that cannot be expressed
    as simple polygons, i.e. more than one hole."""


class DegenerateGeometryError(GeometryError):
    """Raised when an operation that needs a plane gets fewer than three vertices."""


class ClippingError(GeometryError):
    """Raised when the 2D clipping backend rejects its input."""


class MalformedTriangleError(GeometryError, TypeError):
    """Raised when something other than exactly three vertices is used as a triangle."""


class ConfigurationError(ValueError):
    """Raised for an invalid tolerance configuration."""


__all__ = [
    "GeometryError",
    "NonCoplanarError",
    "UnsupportedTopologyError",
    "DegenerateGeometryError",
    "ClippingError",
    "MalformedTriangleError",
    "ConfigurationError",
]
