"""Flappy - a Flappy Bird clone with a pygame desktop host."""

__version__ = "0.1.0"
