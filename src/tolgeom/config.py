"""Configuration loading for the tolgeom tolerance.

Settings come from three layers, later ones winning:

* built-in defaults,
* a YAML document (``epsilon: 1.0e-6``) named explicitly or through the
  ``TOLGEOM_CONFIG`` environment variable,
* the ``TOLGEOM_EPSILON`` environment variable.

The result is read once by :func:`tolgeom.tolerance.default_tolerance` and
treated as fixed for the life of the process.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1.0e-8
ENV_CONFIG = "TOLGEOM_CONFIG"
ENV_EPSILON = "TOLGEOM_EPSILON"

_KNOWN_KEYS = {"epsilon"}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    epsilon: float = DEFAULT_EPSILON


def parse_epsilon(value: Any, *, source: str = "epsilon") -> float:
    """Convert ``value`` to a positive finite float or raise ``ConfigurationError``."""

    if isinstance(value, bool):
        raise ConfigurationError(f"{source}: expected a number, got {value!r}")
    try:
        eps = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{source}: expected a number, got {value!r}") from exc
    if not math.isfinite(eps) or eps <= 0.0:
        raise ConfigurationError(f"{source}: epsilon must be positive and finite, got {eps!r}")
    return eps


def _read_yaml(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: configuration must be a mapping")
    return data


def load_settings(path: Optional[Union[str, Path]] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Resolve :class:`Settings` from defaults, an optional YAML file and the environment."""

    if environ is None:
        environ = os.environ

    epsilon = DEFAULT_EPSILON

    if path is None and environ.get(ENV_CONFIG):
        path = environ[ENV_CONFIG]
    if path is not None:
        path = Path(path)
        data = _read_yaml(path)
        for key in sorted(set(data) - _KNOWN_KEYS):
            logger.warning("ignoring unknown configuration key %r in %s", key, path)
        if "epsilon" in data:
            epsilon = parse_epsilon(data["epsilon"], source=str(path))
        logger.info("loaded tolgeom configuration from %s", path)

    if environ.get(ENV_EPSILON):
        epsilon = parse_epsilon(environ[ENV_EPSILON], source=ENV_EPSILON)

    return Settings(epsilon=epsilon)


__all__ = [
    "DEFAULT_EPSILON",
    "ENV_CONFIG",
    "ENV_EPSILON",
    "Settings",
    "load_settings",
    "parse_epsilon",
]
