"""
Simulated screen for the desktop window.

Turns the renderer's numpy buffer into a pygame surface.
"""

import pygame
import numpy as np
from numpy.typing import NDArray


class SimulatedScreen:
    """
    Play field display backed by an RGB numpy buffer.

    Renders with an integer scale factor so small fields stay readable.
    """

    def __init__(self, width: int, height: int, scale: int = 1) -> None:
        self._width = width
        self._height = height
        self.scale = scale

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        """Size on screen, in window pixels."""
        return (self._width * self.scale, self._height * self.scale)

    def render(self, buffer: NDArray[np.uint8]) -> pygame.Surface:
        """
        Render buffer to a pygame surface.

        Args:
            buffer: (height, width, 3) RGB buffer

        Returns:
            pygame.Surface with rendered display
        """
        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        if self.scale == 1:
            return surface
        return pygame.transform.scale(surface, self.size)

    def to_field(self, pos: tuple[int, int]) -> tuple[int, int]:
        """Convert a window position to play field coordinates."""
        return (pos[0] // self.scale, pos[1] // self.scale)
