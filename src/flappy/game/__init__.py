"""Game simulation: entities, difficulty ramp and the game loop engine."""

from .entities import Bird, Pipe, PipeRole, PipeColor
from .engine import GameEngine, FrameSnapshot, PipeView, RenderSink, Sound

__all__ = [
    "Bird",
    "Pipe",
    "PipeRole",
    "PipeColor",
    "GameEngine",
    "FrameSnapshot",
    "PipeView",
    "RenderSink",
    "Sound",
]
