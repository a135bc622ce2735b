"""Rendering components for the 3D aquarium viewer."""

from .grid import Grid
from .text import TextRenderer
from .fish import FishRenderer

__all__ = ["Grid", "TextRenderer", "FishRenderer"]
