"""Python-side vector helpers for code outside the JIT kernels."""

import numpy as np

from .errors import DegenerateVector


def as_vector(value) -> np.ndarray:
    """Copy any 3-sequence into a float64 array."""
    vec = np.array(value, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3D vector, got shape {vec.shape}")
    return vec


def normalize(value) -> np.ndarray:
    """Return the unit vector of ``value``; raises DegenerateVector if it has no length."""
    vec = as_vector(value)
    mag = float(np.linalg.norm(vec))
    if mag == 0.0 or not np.isfinite(mag):
        raise DegenerateVector(f"Cannot normalize vector {vec.tolist()}")
    return vec / mag


def random_direction(rng: np.random.Generator) -> np.ndarray:
    """Uniform cube sample in [-1, 1)^3, normalized to unit length."""
    while True:
        try:
            return normalize(rng.random(3) * 2.0 - 1.0)
        except DegenerateVector:
            continue


def quaternion_from_forward(direction) -> np.ndarray:
    """
    Quaternion (x, y, z, w) rotating the +Z reference axis onto ``direction``.

    Mirrors ``steering.update_orientation`` so callers can seed an agent's
    orientation from an explicit heading.
    """
    fx, fy, fz = normalize(direction)
    r = fz + 1.0
    if r < 1e-6:
        quat = np.array([0.0, -1.0, 0.0, 0.0])
    else:
        quat = np.array([-fy, fx, 0.0, r])
    return quat / np.linalg.norm(quat)
