"""Graphics module for Flappy rendering."""

from flappy.graphics.renderer import Renderer, Palette
from flappy.graphics.primitives import draw_rect, draw_circle, fill

__all__ = [
    "Renderer",
    "Palette",
    "draw_rect",
    "draw_circle",
    "fill",
]
