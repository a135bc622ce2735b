"""Accessor for a single agent stored in a flock's arrays."""

from collections import namedtuple

import numpy as np

from . import steering as kernels
from .kinds import AgentKind
from .vector import as_vector


SteeringForces = namedtuple("SteeringForces", ["separation", "alignment", "cohesion"])


class Agent:
    """
    One boid: kinematic state plus its steering computation.

    The state lives in the owning Flock's buffers; an Agent is a lightweight
    handle onto its slot. ``position``/``velocity``/``acceleration`` return
    copies, and the setters write through.
    """

    __slots__ = ("_flock", "handle")

    def __init__(self, flock, handle: int):
        self._flock = flock
        self.handle = handle

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _row(self, name: str) -> np.ndarray:
        return getattr(self._flock, name)[self.handle].copy()

    @property
    def position(self) -> np.ndarray:
        return self._row("positions")

    @position.setter
    def position(self, value):
        self._flock.positions[self.handle] = as_vector(value)

    @property
    def velocity(self) -> np.ndarray:
        return self._row("velocities")

    @velocity.setter
    def velocity(self, value):
        self._flock.velocities[self.handle] = as_vector(value)

    @property
    def acceleration(self) -> np.ndarray:
        return self._row("accelerations")

    @property
    def heading(self) -> np.ndarray:
        """Unit forward vector; unchanged while the agent is stationary."""
        return self._row("headings")

    @property
    def orientation(self) -> np.ndarray:
        """Quaternion (x, y, z, w) rotating +Z onto ``heading``."""
        return self._row("orientations")

    @property
    def kind(self) -> AgentKind:
        return AgentKind(int(self._flock.kinds[self.handle]))

    @property
    def volume(self):
        return self._flock.volume

    @property
    def alive(self) -> bool:
        return bool(self._flock.active[self.handle])

    # Limits shared across the flock
    @property
    def max_speed(self) -> float:
        return self._flock.params.max_speed

    @property
    def max_force(self) -> float:
        return self._flock.params.max_force

    @property
    def perception_radius(self) -> float:
        return self._flock.params.perception_radius

    @property
    def separation_distance(self) -> float:
        return self._flock.params.separation_distance

    # ------------------------------------------------------------------
    # Behaviour
    # ------------------------------------------------------------------

    def apply_force(self, force):
        self._flock.accelerations[self.handle] += as_vector(force)

    def neighbors(self) -> list:
        """Handles of the other active agents of the same kind."""
        flock = self._flock
        n = kernels.gather_neighbors(
            self.handle, flock.kinds, flock.active, flock.count, flock._neighbors
        )
        return flock._neighbors[:n].tolist()

    def steering(self) -> SteeringForces:
        """Separation, alignment and cohesion forces against the current population, without applying them."""
        flock = self._flock
        params = flock.params
        n = kernels.gather_neighbors(
            self.handle, flock.kinds, flock.active, flock.count, flock._neighbors
        )
        out = np.zeros((3, 3), dtype=np.float64)
        kernels.compute_steering(
            self.handle, flock.positions, flock.velocities, flock._neighbors, n,
            float(params.separation_distance), float(params.perception_radius),
            float(params.max_speed), float(params.max_force), out
        )
        return SteeringForces(out[0], out[1], out[2])

    def __eq__(self, other):
        return isinstance(other, Agent) and other._flock is self._flock and other.handle == self.handle

    def __hash__(self):
        return hash((id(self._flock), self.handle))

    def __repr__(self):
        x, y, z = self._flock.positions[self.handle]
        return f"Agent({self.handle}, {self.kind.label}, pos=({x:.2f}, {y:.2f}, {z:.2f}))"
