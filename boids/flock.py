"""Flock management - struct-of-arrays agent storage driven by Numba kernels."""

import numpy as np

from config import aquarium as config
from . import steering as kernels
from .agent import Agent
from .clock import SimulationClock
from .errors import DegenerateVector, FlockBusy, InvalidConfiguration
from .kinds import AgentKind
from .params import SteeringParams
from .vector import as_vector, normalize, quaternion_from_forward, random_direction


class Flock:
    """
    Owns every agent in one aquarium and advances them together.

    Agent state is kept in pre-sized float64 buffers that grow by doubling;
    a handle is the agent's slot index and stays valid for the flock's
    lifetime. Removed agents leave an inactive slot behind.
    """

    def __init__(self, volume, params: SteeringParams = None,
                 clock: SimulationClock = None, seed=None, capacity: int = None):
        if capacity is None:
            capacity = config.BOIDS.get("initial_capacity", 64)
        if capacity < 1:
            raise InvalidConfiguration(f"capacity must be >= 1, got {capacity!r}")
        if seed is None:
            seed = config.BOIDS.get("seed")

        self.volume = volume
        self.params = params if params is not None else SteeringParams.from_config()
        self.clock = clock if clock is not None else SimulationClock.from_config()
        self.rng = np.random.default_rng(seed)

        self.count = 0
        self._ticking = False
        self._allocate(capacity)

        # Scratch buffer for the three behaviour forces of the agent being stepped
        self._forces = np.zeros((3, 3), dtype=np.float64)

        self._warmup_numba()

    def _allocate(self, capacity: int):
        self.capacity = capacity
        self.positions = np.zeros((capacity, 3), dtype=np.float64)
        self.velocities = np.zeros((capacity, 3), dtype=np.float64)
        self.accelerations = np.zeros((capacity, 3), dtype=np.float64)
        self.headings = np.zeros((capacity, 3), dtype=np.float64)
        self.orientations = np.zeros((capacity, 4), dtype=np.float64)
        self.kinds = np.zeros(capacity, dtype=np.int32)
        self.active = np.zeros(capacity, dtype=np.bool_)
        self._neighbors = np.zeros(capacity, dtype=np.int64)

    def _grow(self):
        """Double every buffer, keeping existing slots."""
        old = {
            name: getattr(self, name)
            for name in ("positions", "velocities", "accelerations", "headings",
                         "orientations", "kinds", "active")
        }
        self._allocate(self.capacity * 2)
        for name, data in old.items():
            getattr(self, name)[:self.count] = data[:self.count]

    def _warmup_numba(self):
        """Pre-compile the tick kernel on a two-agent scratch population."""
        n = 2
        pos = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        vel = np.array([[0.0, 0.0, 1.0], [0.0, 1.0, 0.0]])
        acc = np.zeros((n, 3), dtype=np.float64)
        head = np.zeros((n, 3), dtype=np.float64)
        orient = np.zeros((n, 4), dtype=np.float64)
        kinds = np.zeros(n, dtype=np.int32)
        active = np.ones(n, dtype=np.bool_)
        neighbors = np.zeros(n, dtype=np.int64)
        forces = np.zeros((3, 3), dtype=np.float64)

        kernels.step_flock(
            pos, vel, acc, head, orient, kinds, active, n, neighbors, forces,
            10.0, 0.05, 0.005, 10.0, 8.0, 0.5, 2.0, 5.0, False, 1.0
        )

    def _check_idle(self, action: str):
        if self._ticking:
            raise FlockBusy(f"Cannot {action} while a tick is running")

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add(self, kind, position=None, velocity=None) -> int:
        """
        Create an agent and return its handle.

        Args:
            kind: AgentKind member or species name
            position: Start position; uniform random inside the volume if omitted
            velocity: Start velocity; random unit vector if omitted

        Returns:
            Stable integer handle for ``agent()`` / ``remove()``
        """
        self._check_idle("add agents")
        kind = AgentKind.parse(kind)

        if self.count == self.capacity:
            self._grow()

        i = self.count
        self.positions[i] = self.volume.random_point(self.rng) if position is None else as_vector(position)
        self.velocities[i] = random_direction(self.rng) if velocity is None else as_vector(velocity)
        self.accelerations[i] = 0.0
        try:
            self.headings[i] = normalize(self.velocities[i])
            self.orientations[i] = quaternion_from_forward(self.headings[i])
        except DegenerateVector:
            # Stationary fish face the reference axis until they first move
            self.headings[i] = (0.0, 0.0, 1.0)
            self.orientations[i] = (0.0, 0.0, 0.0, 1.0)
        self.kinds[i] = int(kind)
        self.active[i] = True
        self.count += 1
        return i

    def populate(self, schools: dict) -> list:
        """Add ``{kind: count}`` groups; returns the new handles in order."""
        handles = []
        for kind, number in schools.items():
            for _ in range(int(number)):
                handles.append(self.add(kind))
        return handles

    def remove(self, handle: int):
        """Deactivate an agent. Its slot is not reused, so other handles stay valid."""
        self._check_idle("remove agents")
        if not 0 <= handle < self.count or not self.active[handle]:
            raise KeyError(f"No agent with handle {handle}")
        self.active[handle] = False
        self.velocities[handle] = 0.0
        self.accelerations[handle] = 0.0

    def clear(self):
        self._check_idle("clear the flock")
        self.active[:self.count] = False
        self.count = 0

    def agent(self, handle: int) -> Agent:
        if not 0 <= handle < self.count or not self.active[handle]:
            raise KeyError(f"No agent with handle {handle}")
        return Agent(self, handle)

    __getitem__ = agent

    def __len__(self):
        return int(np.count_nonzero(self.active[:self.count]))

    def __iter__(self):
        for i in np.flatnonzero(self.active[:self.count]):
            yield Agent(self, int(i))

    def counts_by_kind(self) -> dict:
        kinds = self.kinds[:self.count][self.active[:self.count]]
        return {kind: int(np.count_nonzero(kinds == kind)) for kind in AgentKind}

    # ------------------------------------------------------------------
    # Renderer views
    # ------------------------------------------------------------------

    def active_positions(self) -> np.ndarray:
        return self.positions[:self.count][self.active[:self.count]]

    def active_headings(self) -> np.ndarray:
        return self.headings[:self.count][self.active[:self.count]]

    def active_kinds(self) -> np.ndarray:
        return self.kinds[:self.count][self.active[:self.count]]

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, delta_time: float = None) -> float:
        """
        Advance every agent by one step.

        Agents are updated in handle order against the live arrays, so an
        agent sees the already-updated state of agents before it.

        Args:
            delta_time: Seconds since the last tick; None for one reference tick

        Returns:
            The step scale used for integration
        """
        self._check_idle("tick")
        scale = self.clock.advance(delta_time)
        if self.count == 0:
            return scale

        p = self.params
        self._ticking = True
        try:
            kernels.step_flock(
                self.positions,
                self.velocities,
                self.accelerations,
                self.headings,
                self.orientations,
                self.kinds,
                self.active,
                self.count,
                self._neighbors,
                self._forces,
                float(self.volume.half_extent),
                float(p.max_speed),
                float(p.max_force),
                float(p.perception_radius),
                float(p.separation_distance),
                float(p.turn_factor),
                float(p.wall_margin),
                float(p.min_distance),
                bool(p.clamp_after_collision),
                float(scale)
            )
        finally:
            self._ticking = False
        return scale
