"""Orbit camera circling the aquarium."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import aquarium as config


class Camera:
    """Orbital camera around the aquarium centre with smooth zoom."""

    def __init__(self):
        self.target = np.array([0.0, 0.0, 0.0])
        self.zoom_smoothing = 8.0
        self.reset()

    def reset(self):
        self.radius = config.CAMERA["initial_radius"]
        self.target_radius = self.radius
        self.theta = config.CAMERA["initial_theta"]
        self.phi = config.CAMERA["initial_phi"]

    def _clamp_radius(self, radius: float) -> float:
        return max(config.CAMERA["min_radius"], min(config.CAMERA["max_radius"], radius))

    def get_direction(self) -> np.ndarray:
        """Unit vector from the target towards the camera."""
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        return np.array([
            math.cos(phi_rad) * math.cos(theta_rad),
            math.sin(phi_rad),
            math.cos(phi_rad) * math.sin(theta_rad),
        ])

    def get_position(self) -> np.ndarray:
        return self.target + self.radius * self.get_direction()

    def rotate(self, d_theta: float, d_phi: float):
        """Rotate the camera by the given angles in degrees."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = max(
            config.CAMERA["min_phi"],
            min(config.CAMERA["max_phi"], self.phi + d_phi)
        )

    def zoom(self, delta: float):
        self.radius = self._clamp_radius(self.radius + delta)
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        self.target_radius = self._clamp_radius(self.target_radius + delta)

    def update(self, dt: float):
        self.radius += (self.target_radius - self.radius) * min(1.0, self.zoom_smoothing * dt)
        self.radius = self._clamp_radius(self.radius)

    def apply(self):
        """Load the look-at transform into the modelview matrix."""
        pos = self.get_position()
        glLoadIdentity()
        gluLookAt(
            pos[0], pos[1], pos[2],
            self.target[0], self.target[1], self.target[2],
            0, 1, 0
        )
