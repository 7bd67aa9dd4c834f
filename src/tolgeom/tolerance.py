"""Floating point tolerance shared by every geometric value."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .config import DEFAULT_EPSILON, load_settings, parse_epsilon


@dataclass(frozen=True)
class Tolerance:
    """Absolute comparison tolerance.

    Two scalars are close when their difference is strictly smaller than
    ``epsilon``.  Every :class:`~tolgeom.geom.Vector` and the shapes built
    from them carry a ``Tolerance``; values derived from a shape inherit it.
    """

    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self) -> None:
        object.__setattr__(self, "epsilon", parse_epsilon(self.epsilon))

    def close(self, a: float, b: float) -> bool:
        return abs(a - b) < self.epsilon

    def is_zero(self, x: float) -> bool:
        return abs(x) < self.epsilon

    def sign(self, x: float) -> int:
        """Return -1, 0 or 1; anything within epsilon of zero counts as zero."""

        if abs(x) < self.epsilon:
            return 0
        return 1 if x > 0 else -1


@lru_cache(maxsize=None)
def default_tolerance() -> Tolerance:
    """Process-wide tolerance, resolved once from :func:`load_settings`."""

    return Tolerance(load_settings().epsilon)


__all__ = ["Tolerance", "default_tolerance"]
