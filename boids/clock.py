"""Simulation clock turning frame deltas into integration step scales."""

import math
import time

from config import aquarium as config
from .errors import InvalidConfiguration


class SimulationClock:
    """
    Converts elapsed wall or frame time into a step scale for the flock.

    One reference tick (``reference_dt`` seconds) has scale 1.0, so speeds and
    forces are expressed per reference tick regardless of the render rate.
    """

    def __init__(self, reference_dt: float = 1.0 / 60.0, max_dt: float = 0.05,
                 time_scale: float = 1.0):
        if not math.isfinite(reference_dt) or reference_dt <= 0:
            raise InvalidConfiguration(f"reference_dt must be > 0, got {reference_dt!r}")
        if not math.isfinite(max_dt) or max_dt <= 0:
            raise InvalidConfiguration(f"max_dt must be > 0, got {max_dt!r}")
        if not math.isfinite(time_scale) or time_scale < 0:
            raise InvalidConfiguration(f"time_scale must be >= 0, got {time_scale!r}")

        self.reference_dt = float(reference_dt)
        self.max_dt = float(max_dt)
        self.time_scale = float(time_scale)
        self.elapsed = 0.0
        self.ticks = 0
        self._last_measure = None

    @classmethod
    def from_config(cls, cfg: dict = None) -> "SimulationClock":
        cfg = config.CLOCK if cfg is None else cfg
        return cls(cfg["reference_dt"], cfg["max_dt"], cfg.get("time_scale", 1.0))

    def advance(self, delta_time: float = None) -> float:
        """
        Record one tick and return its step scale.

        Args:
            delta_time: Seconds since the previous tick, or None for exactly
                one reference tick. Negative or non-finite values count as 0.

        Returns:
            ``dt / reference_dt * time_scale`` with dt capped at ``max_dt``
        """
        if delta_time is None:
            dt = self.reference_dt
        else:
            dt = float(delta_time)
            if not math.isfinite(dt) or dt < 0:
                dt = 0.0
            dt = min(dt, self.max_dt)

        self.elapsed += dt
        self.ticks += 1
        return dt / self.reference_dt * self.time_scale

    def measure(self) -> float:
        """Wall-clock seconds since the previous call; the first call returns reference_dt."""
        now = time.perf_counter()
        last, self._last_measure = self._last_measure, now
        if last is None:
            return self.reference_dt
        return now - last

    def reset(self):
        self.elapsed = 0.0
        self.ticks = 0
        self._last_measure = None
