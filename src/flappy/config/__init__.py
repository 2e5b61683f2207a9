"""Configuration for Flappy."""

from .settings import Settings, PhysicsSettings, DisplaySettings, AudioSettings, get_settings

__all__ = ["Settings", "PhysicsSettings", "DisplaySettings", "AudioSettings", "get_settings"]
