"""Viewer application: pygame window, OpenGL scene and the aquarium flock."""

from dataclasses import replace

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import aquarium as config
from .camera import Camera
from .input_handler import InputHandler
from rendering import Grid, TextRenderer, FishRenderer
from boids import AgentKind, BoundedVolume, Flock, SimulationClock, SteeringParams

HELP_LINES = [
    "1-4: add fish (shift: x5)   SPACE: pause   R: reset",
    "C: toggle re-clamp after collisions   H: hide help",
    "WASD / drag: rotate   Q/E / wheel: zoom   ESC: quit",
]


class Application:
    """Main application managing the frame loop, simulation ticks and rendering."""

    def __init__(self, schools: dict = None, seed=None):
        pygame.init()
        pygame.display.set_mode(
            (config.WINDOW["width"], config.WINDOW["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(config.WINDOW["title"])

        # Core components
        self.camera = Camera()
        self.input_handler = InputHandler(self.camera, self)

        # Simulation
        self.schools = dict(config.INITIAL_SCHOOLS if schools is None else schools)
        self.seed = seed
        self.volume = BoundedVolume.from_config()
        self.flock = Flock(
            self.volume,
            params=SteeringParams.from_config(),
            clock=SimulationClock.from_config(),
            seed=seed,
        )
        self.flock.populate(self.schools)
        print(f"[App] Aquarium size {self.volume.size:g}, {len(self.flock)} fish")

        # Rendering components
        self.grid = Grid(self.volume)
        self.fish_renderer = FishRenderer()
        self.text_renderer = TextRenderer()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.paused = False
        self.show_help = True
        self.fps = 0

        self._setup_gl()

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)
        glDisable(GL_CULL_FACE)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            config.WINDOW["width"] / config.WINDOW["height"],
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_fish(self, kind: AgentKind, count: int = 1):
        for _ in range(count):
            self.flock.add(kind)
        print(f"[App] Added {count} {kind.label} ({len(self.flock)} fish)")

    def reset(self):
        self.flock.clear()
        self.flock.clock.reset()
        self.flock.populate(self.schools)
        self.camera.reset()
        print(f"[App] Reset with {len(self.flock)} fish")

    def toggle_collision_clamp(self):
        params = self.flock.params
        self.flock.params = replace(params, clamp_after_collision=not params.clamp_after_collision)
        state = "on" if self.flock.params.clamp_after_collision else "off"
        print(f"[App] Re-clamp after collisions: {state}")

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def _handle_events(self):
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        self.input_handler.handle_continuous_input(dt)
        self.camera.update(dt)
        if not self.paused:
            # SimulationClock caps dt, so a stalled frame cannot explode the flock
            self.flock.tick(dt)

    def _hud_lines(self) -> list:
        counts = self.flock.counts_by_kind()
        status = "PAUSED" if self.paused else f"t={self.flock.clock.elapsed:.1f}s"
        lines = [f"Fish: {len(self.flock)}  |  FPS: {self.fps:.0f}  |  {status}"]
        for kind in AgentKind:
            color = tuple(int(c * 255) for c in config.SPECIES[kind.label])
            lines.append((f"  {kind.label}: {counts[kind]}", color))
        if self.show_help:
            lines.extend(HELP_LINES)
        return lines

    def _render(self):
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()

        self.grid.draw(self.camera)
        self.fish_renderer.draw(self.flock)

        screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        self.text_renderer.draw_lines(self._hud_lines(), 10, 10, screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            dt = self.clock.tick(60) / 1000.0
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()
