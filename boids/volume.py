"""Cubic aquarium volume that bounds every agent in the flock."""

import math
import numpy as np

from config import aquarium as config
from .errors import InvalidConfiguration


class BoundedVolume:
    """
    Axis-aligned cube centred on the origin with an inward safety margin.

    The usable region is ``[-half_extent, half_extent]`` on every axis, where
    ``half_extent = size / 2 - size * padding``. Instances are immutable.
    """

    __slots__ = ("_size", "_padding", "_half_extent")

    def __init__(self, size: float, padding: float = 0.05):
        size = float(size)
        padding = float(padding)
        if not math.isfinite(size) or size <= 0:
            raise InvalidConfiguration(f"Volume size must be > 0, got {size!r}")
        if not math.isfinite(padding) or not 0.0 <= padding < 0.5:
            raise InvalidConfiguration(f"Volume padding must be in [0, 0.5), got {padding!r}")

        self._size = size
        self._padding = padding
        self._half_extent = size / 2 - size * padding

    @classmethod
    def from_config(cls, cfg: dict = None) -> "BoundedVolume":
        cfg = config.AQUARIUM if cfg is None else cfg
        return cls(cfg["size"], cfg.get("padding", 0.05))

    @property
    def size(self) -> float:
        return self._size

    @property
    def padding(self) -> float:
        return self._padding

    @property
    def half_extent(self) -> float:
        return self._half_extent

    def min_corner(self) -> np.ndarray:
        h = self._half_extent
        return np.array([-h, -h, -h])

    def max_corner(self) -> np.ndarray:
        h = self._half_extent
        return np.array([h, h, h])

    def contains(self, point) -> bool:
        """True if every axis of ``point`` lies in ``[min, max]`` inclusive."""
        p = np.asarray(point, dtype=np.float64)
        h = self._half_extent
        return bool(np.all((p >= -h) & (p <= h)))

    def clamp(self, point) -> np.ndarray:
        """Return a new point clamped per axis into the volume."""
        h = self._half_extent
        return np.clip(np.asarray(point, dtype=np.float64), -h, h)

    def random_point(self, rng: np.random.Generator) -> np.ndarray:
        """Uniform sample inside the volume."""
        return rng.uniform(self.min_corner(), self.max_corner())

    def __repr__(self):
        return f"BoundedVolume(size={self._size}, padding={self._padding})"
