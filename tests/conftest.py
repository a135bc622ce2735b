import numpy as np
import pytest

from boids import BoundedVolume, Flock, SteeringParams


@pytest.fixture
def volume():
    """The default 80-unit aquarium: half extent 36 with 5% padding."""
    return BoundedVolume(80.0)


@pytest.fixture
def flock(volume):
    return Flock(volume, params=SteeringParams(), seed=1234)


@pytest.fixture
def rotate():
    """Rotate a vector by a unit quaternion (x, y, z, w)."""
    def _rotate(quat, vec):
        q = np.asarray(quat[:3], dtype=np.float64)
        w = float(quat[3])
        v = np.asarray(vec, dtype=np.float64)
        t = 2.0 * np.cross(q, v)
        return v + w * t + np.cross(q, t)
    return _rotate
