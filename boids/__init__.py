"""3D aquarium boids: bounded volume, flocking agents and the simulation clock."""

from .errors import BoidsError, InvalidConfiguration, DegenerateVector, FlockBusy
from .kinds import AgentKind
from .volume import BoundedVolume
from .params import SteeringParams
from .clock import SimulationClock
from .agent import Agent, SteeringForces
from .flock import Flock

__all__ = [
    "BoidsError", "InvalidConfiguration", "DegenerateVector", "FlockBusy",
    "AgentKind", "BoundedVolume", "SteeringParams", "SimulationClock",
    "Agent", "SteeringForces", "Flock",
]
