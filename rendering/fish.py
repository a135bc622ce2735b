"""Fish rendering - oriented cones built by Numba and drawn from VBOs."""

import math
import numpy as np
from numba import njit, prange
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import aquarium as config
from boids import AgentKind

VERTS_PER_FISH = 6


@njit(parallel=True, fastmath=True, cache=True)
def build_fish_vertices(
    positions: np.ndarray,
    headings: np.ndarray,
    kinds: np.ndarray,
    palette: np.ndarray,
    vertices: np.ndarray,
    vert_colors: np.ndarray,
    cone_length: float,
    cone_radius: float,
    num_fish: int
):
    """Two crossed triangles per fish, tip along its heading, centred on its position."""
    for idx in prange(num_fish):
        px, py, pz = positions[idx, 0], positions[idx, 1], positions[idx, 2]
        fx, fy, fz = headings[idx, 0], headings[idx, 1], headings[idx, 2]

        # Right = forward x world_up, falling back to world_right when vertical
        rx, ry, rz = -fz, 0.0, fx
        r_len = math.sqrt(rx * rx + rz * rz)
        if r_len < 0.1:
            rx, ry, rz = 0.0, fz, -fy
            r_len = math.sqrt(ry * ry + rz * rz)
        if r_len > 0.0001:
            rx /= r_len
            ry /= r_len
            rz /= r_len

        # Up = right x forward
        ux = ry * fz - rz * fy
        uy = rz * fx - rx * fz
        uz = rx * fy - ry * fx

        half = cone_length * 0.5
        tip_x, tip_y, tip_z = px + fx * half, py + fy * half, pz + fz * half
        bx, by, bz = px - fx * half, py - fy * half, pz - fz * half

        r = cone_radius
        base = idx * VERTS_PER_FISH
        corners = (
            (tip_x, tip_y, tip_z),
            (bx + rx * r, by + ry * r, bz + rz * r),
            (bx - rx * r, by - ry * r, bz - rz * r),
            (tip_x, tip_y, tip_z),
            (bx + ux * r, by + uy * r, bz + uz * r),
            (bx - ux * r, by - uy * r, bz - uz * r),
        )
        kind = kinds[idx]
        for v in range(VERTS_PER_FISH):
            vertices[base + v, 0] = corners[v][0]
            vertices[base + v, 1] = corners[v][1]
            vertices[base + v, 2] = corners[v][2]
            vert_colors[base + v, 0] = palette[kind, 0]
            vert_colors[base + v, 1] = palette[kind, 1]
            vert_colors[base + v, 2] = palette[kind, 2]


def species_palette() -> np.ndarray:
    """Row k holds the display color of AgentKind(k)."""
    palette = np.ones((len(AgentKind), 3), dtype=np.float32)
    for kind in AgentKind:
        palette[int(kind)] = config.SPECIES.get(kind.label, (1.0, 1.0, 1.0))
    return palette


class FishRenderer:
    """Draws every active agent of a flock as a colored cone pointing along its heading."""

    def __init__(self):
        self.cone_length = float(config.BOIDS["size"])
        self.cone_radius = self.cone_length * 0.3
        self.palette = species_palette()

        self._capacity = 0
        self._vertices = None
        self._vert_colors = None

        self._vbo_vertices = None
        self._vbo_colors = None
        self._vbos_initialized = False

    def _ensure_capacity(self, num_fish: int):
        if num_fish <= self._capacity:
            return
        self._capacity = max(num_fish, self._capacity * 2, 16)
        self._vertices = np.zeros((self._capacity * VERTS_PER_FISH, 3), dtype=np.float32)
        self._vert_colors = np.zeros((self._capacity * VERTS_PER_FISH, 3), dtype=np.float32)

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        if self._vbos_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._vert_colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Fish] VBO init failed, using client arrays: {e}")
            self._vbos_initialized = False

    def draw(self, flock):
        positions = flock.active_positions()
        num_fish = len(positions)
        if num_fish == 0:
            return

        self._ensure_capacity(num_fish)
        if not self._vbos_initialized:
            self._init_vbos()

        build_fish_vertices(
            positions,
            flock.active_headings(),
            flock.active_kinds(),
            self.palette,
            self._vertices,
            self._vert_colors,
            self.cone_length,
            self.cone_radius,
            num_fish
        )
        total_verts = num_fish * VERTS_PER_FISH

        glEnableClientState(GL_VERTEX_ARRAY)
        glEnableClientState(GL_COLOR_ARRAY)

        if self._vbos_initialized:
            self._vbo_vertices.set_array(self._vertices[:total_verts])
            self._vbo_colors.set_array(self._vert_colors[:total_verts])

            self._vbo_vertices.bind()
            glVertexPointer(3, GL_FLOAT, 0, None)
            self._vbo_colors.bind()
            glColorPointer(3, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_vertices.unbind()
            self._vbo_colors.unbind()
        else:
            glVertexPointer(3, GL_FLOAT, 0, self._vertices[:total_verts])
            glColorPointer(3, GL_FLOAT, 0, self._vert_colors[:total_verts])
            glDrawArrays(GL_TRIANGLES, 0, total_verts)

        glDisableClientState(GL_VERTEX_ARRAY)
        glDisableClientState(GL_COLOR_ARRAY)
