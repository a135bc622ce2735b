"""Aquarium wireframe for spatial reference."""

from OpenGL.GL import *
from config import aquarium as config


def _cube_edges(e: float):
    """The 12 edges of a cube with half-size e, as vertex pairs."""
    edges = []
    for a in (-e, e):
        for b in (-e, e):
            edges.append(((-e, a, b), (e, a, b)))   # X-axis edges
            edges.append(((a, -e, b), (a, e, b)))   # Y-axis edges
            edges.append(((a, b, -e), (a, b, e)))   # Z-axis edges
    return edges


class Grid:
    """Draws the aquarium glass and, inside it, the padded swimming bounds."""

    def __init__(self, volume):
        self.glass_edges = _cube_edges(volume.size / 2)
        self.bounds_edges = _cube_edges(volume.half_extent)
        self.glass_color = config.AQUARIUM["glass_color"]
        self.bounds_color = config.AQUARIUM["bounds_color"]

    def draw(self, camera=None):
        """
        Draw both cubes.

        Args:
            camera: Optional camera reference (unused, kept for a uniform draw API)
        """
        glBegin(GL_LINES)

        glColor3f(*self.glass_color)
        for start, end in self.glass_edges:
            glVertex3f(*start); glVertex3f(*end)

        glColor3f(*self.bounds_color)
        for start, end in self.bounds_edges:
            glVertex3f(*start); glVertex3f(*end)

        glEnd()
