"""Frame renderer: draws engine snapshots into an RGB buffer."""

from dataclasses import dataclass
from typing import Optional
import logging

import numpy as np
from numpy.typing import NDArray

from flappy.game.engine import FrameSnapshot, PipeView, RenderSink
from flappy.game.entities import PipeColor, PipeRole
from flappy.graphics.primitives import Color, fill, draw_rect, draw_circle

logger = logging.getLogger(__name__)

CAP_HEIGHT = 12
CAP_OVERHANG = 3


@dataclass
class Palette:
    """Colors used to draw a frame."""

    sky: Color = (112, 197, 206)
    bird: Color = (255, 220, 80)
    bird_eye: Color = (20, 20, 20)
    beak: Color = (250, 120, 40)
    pipe: Color = (80, 200, 120)
    pipe_edge: Color = (30, 110, 60)
    golden_pipe: Color = (240, 200, 40)
    golden_pipe_edge: Color = (170, 120, 10)


class Renderer(RenderSink):
    """Render sink drawing into a (height, width, 3) uint8 buffer.

    The buffer is reused between frames; the window copies it to the screen
    after each frame.
    """

    def __init__(self, width: int, height: int, palette: Optional[Palette] = None):
        self.width = width
        self.height = height
        self.palette = palette or Palette()
        self.buffer: NDArray[np.uint8] = np.zeros((height, width, 3), dtype=np.uint8)
        self._frames = 0
        self._last: Optional[FrameSnapshot] = None

    @property
    def frames_rendered(self) -> int:
        return self._frames

    @property
    def last_snapshot(self) -> Optional[FrameSnapshot]:
        return self._last

    def render(self, snapshot: FrameSnapshot) -> None:
        fill(self.buffer, self.palette.sky)

        for pipe in snapshot.pipes:
            self._draw_pipe(pipe)

        self._draw_bird(snapshot)

        self._last = snapshot
        self._frames += 1

    def _draw_pipe(self, pipe: PipeView) -> None:
        if pipe.color == PipeColor.GOLDEN:
            body, edge = self.palette.golden_pipe, self.palette.golden_pipe_edge
        else:
            body, edge = self.palette.pipe, self.palette.pipe_edge

        x, y = int(pipe.x), int(pipe.y)
        w, h = int(pipe.width), int(pipe.height)
        draw_rect(self.buffer, x, y, w, h, body)
        draw_rect(self.buffer, x, y, w, h, edge, filled=False, thickness=2)

        # Cap on the end facing the gap
        cap_h = min(CAP_HEIGHT, h)
        cap_y = y + h - cap_h if pipe.role == PipeRole.TOP else y
        draw_rect(self.buffer, x - CAP_OVERHANG, cap_y, w + 2 * CAP_OVERHANG, cap_h, body)
        draw_rect(
            self.buffer, x - CAP_OVERHANG, cap_y, w + 2 * CAP_OVERHANG, cap_h, edge,
            filled=False, thickness=2,
        )

    def _draw_bird(self, snapshot: FrameSnapshot) -> None:
        x, y = int(snapshot.bird_x), int(snapshot.bird_y)
        w, h = int(snapshot.bird_width), int(snapshot.bird_height)
        if y + h <= 0:
            return  # Waiting above the field

        draw_rect(self.buffer, x, y, w, h, self.palette.bird)
        draw_rect(self.buffer, x + w - 2, y + h // 2, 5, max(2, h // 5), self.palette.beak)
        draw_circle(self.buffer, x + (3 * w) // 4, y + h // 4, max(1, w // 10), self.palette.bird_eye)
