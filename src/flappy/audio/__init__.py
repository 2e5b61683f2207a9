"""
Flappy Audio System - chiptune sound effects.
"""

from .engine import AudioEngine

__all__ = ["AudioEngine"]
