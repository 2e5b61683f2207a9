"""Game entities: the bird and the pipes it flies between."""

from dataclasses import dataclass
from enum import Enum


class PipeRole(Enum):
    """Which half of a pipe pair a pipe is."""

    TOP = "top"
    BOTTOM = "bottom"


class PipeColor(Enum):
    """Pipe color; golden pipes are worth more."""

    NORMAL = "normal"
    GOLDEN = "golden"


@dataclass
class Bird:
    """The player's avatar. x is fixed for the whole game."""

    x: float
    y: float
    width: float
    height: float
    velocity: float = 0.0

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Pipe:
    """One rectangle of a pipe pair."""

    x: float
    y: float
    width: float
    height: float
    role: PipeRole
    color: PipeColor = PipeColor.NORMAL

    @property
    def right(self) -> float:
        """Trailing edge x."""
        return self.x + self.width

    @property
    def is_golden(self) -> bool:
        return self.color == PipeColor.GOLDEN


def rects_overlap(
    ax: float, ay: float, aw: float, ah: float,
    bx: float, by: float, bw: float, bh: float,
) -> bool:
    """Axis-aligned bounding box test; touching edges do not overlap."""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def bird_hits_pipe(bird: Bird, pipe: Pipe) -> bool:
    return rects_overlap(
        bird.x, bird.y, bird.width, bird.height,
        pipe.x, pipe.y, pipe.width, pipe.height,
    )
