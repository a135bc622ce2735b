"""Input handling for camera control and aquarium commands."""

import pygame
from pygame.locals import *
from config import aquarium as config

from boids import AgentKind
from .camera import Camera

# Number keys add one fish of the matching species
SPECIES_KEYS = {
    K_1: AgentKind.BLUE_GOLDFISH,
    K_2: AgentKind.PIRANHA,
    K_3: AgentKind.CORAL_GROUPER,
    K_4: AgentKind.SUNFISH,
}


class InputHandler:
    """Handles keyboard and mouse input, forwarding aquarium commands to the application."""

    def __init__(self, camera: Camera, app):
        self.camera = camera
        self.app = app
        self.mouse_dragging = False
        self.last_mouse_pos = (0, 0)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            elif event.key in SPECIES_KEYS:
                count = 5 if event.mod & KMOD_SHIFT else 1
                self.app.add_fish(SPECIES_KEYS[event.key], count)
            elif event.key == K_SPACE:
                self.app.paused = not self.app.paused
            elif event.key == K_r:
                self.app.reset()
            elif event.key == K_c:
                self.app.toggle_collision_clamp()
            elif event.key == K_h:
                self.app.show_help = not self.app.show_help
        elif event.type == MOUSEBUTTONDOWN:
            if event.button == 1:
                self.mouse_dragging = True
                self.last_mouse_pos = pygame.mouse.get_pos()
        elif event.type == MOUSEBUTTONUP:
            if event.button == 1:
                self.mouse_dragging = False
        elif event.type == MOUSEWHEEL:
            self.camera.zoom_smooth(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.25)

        return True

    def handle_continuous_input(self, dt: float):
        """Handle held keys and mouse drag (called each frame)."""
        keys = pygame.key.get_pressed()
        rot_speed = config.CAMERA["keyboard_rotate_speed"] * dt
        zoom_speed = config.CAMERA["keyboard_zoom_speed"] * dt

        if keys[K_a]:
            self.camera.rotate(-rot_speed, 0)
        if keys[K_d]:
            self.camera.rotate(rot_speed, 0)
        if keys[K_w]:
            self.camera.rotate(0, rot_speed)
        if keys[K_s]:
            self.camera.rotate(0, -rot_speed)

        if keys[K_q]:
            self.camera.zoom(-zoom_speed)
        if keys[K_e]:
            self.camera.zoom(zoom_speed)

        if self.mouse_dragging:
            current_pos = pygame.mouse.get_pos()
            dx = current_pos[0] - self.last_mouse_pos[0]
            dy = current_pos[1] - self.last_mouse_pos[1]
            self.camera.rotate(
                dx * config.CAMERA["mouse_sensitivity"],
                -dy * config.CAMERA["mouse_sensitivity"]
            )
            self.last_mouse_pos = current_pos
