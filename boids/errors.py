"""Exception types raised by the aquarium simulation core."""


class BoidsError(Exception):
    """Base class for all simulation errors."""


class InvalidConfiguration(BoidsError, ValueError):
    """A volume, flock or clock was constructed with unusable parameters."""


class DegenerateVector(BoidsError, ArithmeticError):
    """A zero-length vector was asked for a direction."""


class FlockBusy(BoidsError, RuntimeError):
    """The flock was structurally modified while a tick was running."""
