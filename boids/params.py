"""Validated steering parameters shared by every agent in a flock."""

import math
from dataclasses import dataclass, fields

from config import aquarium as config
from .errors import InvalidConfiguration


@dataclass(frozen=True)
class SteeringParams:
    """
    Per-agent steering limits and the fixed behaviour constants.

    Attributes:
        max_speed: Velocity magnitude cap (units per reference tick)
        max_force: Cap on each individual behaviour force
        perception_radius: Range for alignment and cohesion
        separation_distance: Range for separation
        turn_factor: Velocity nudge applied near a wall, per axis
        wall_margin: Distance from a face at which turning starts
        min_distance: Collision correction threshold; 0 disables it
        clamp_after_collision: Re-clamp into the volume after collision pushes
    """
    max_speed: float = 0.05
    max_force: float = 0.005
    perception_radius: float = 10.0
    separation_distance: float = 8.0
    turn_factor: float = 0.5
    wall_margin: float = 2.0
    min_distance: float = 5.0
    clamp_after_collision: bool = False

    def __post_init__(self):
        for name in ("max_speed", "max_force", "perception_radius", "separation_distance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidConfiguration(f"{name} must be > 0, got {value!r}")
        for name in ("turn_factor", "wall_margin", "min_distance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidConfiguration(f"{name} must be >= 0, got {value!r}")

    @classmethod
    def from_config(cls, cfg: dict = None, **overrides) -> "SteeringParams":
        """Build from ``config.aquarium.BOIDS``, ignoring keys that are not parameters."""
        cfg = dict(config.BOIDS if cfg is None else cfg)
        cfg.update(overrides)
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in cfg.items() if k in names})
