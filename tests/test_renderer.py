"""Tests for the buffer renderer and drawing primitives."""

import numpy as np

from flappy.core.state import State
from flappy.game.engine import FrameSnapshot, PipeView
from flappy.game.entities import PipeColor, PipeRole
from flappy.graphics.primitives import draw_rect, fill
from flappy.graphics.renderer import Palette, Renderer


def snapshot(bird_y=150.0, pipes=()):
    return FrameSnapshot(
        bird_x=50, bird_y=bird_y, bird_width=20, bird_height=20,
        pipes=tuple(pipes), score=0, state=State.RUNNING,
        field_width=400, field_height=600,
    )


def test_draw_rect_clips_to_buffer():
    buffer = np.zeros((10, 10, 3), dtype=np.uint8)
    draw_rect(buffer, -5, -5, 8, 8, (255, 0, 0))
    assert tuple(buffer[2, 2]) == (255, 0, 0)
    assert tuple(buffer[3, 3]) == (0, 0, 0)

    # Entirely off-buffer is a no-op
    draw_rect(buffer, -20, 0, 5, 5, (0, 255, 0))
    assert not (buffer[:, :, 1] > 0).any()


def test_outline_leaves_inside_untouched():
    buffer = np.zeros((10, 10, 3), dtype=np.uint8)
    fill(buffer, (1, 1, 1))
    draw_rect(buffer, 0, 0, 10, 10, (9, 9, 9), filled=False)
    assert tuple(buffer[0, 5]) == (9, 9, 9)
    assert tuple(buffer[5, 5]) == (1, 1, 1)


def test_renders_bird_and_pipes():
    palette = Palette()
    renderer = Renderer(400, 600, palette)
    pipes = [
        PipeView(200, 0, 50, 100, PipeRole.TOP, PipeColor.GOLDEN),
        PipeView(200, 300, 50, 300, PipeRole.BOTTOM, PipeColor.NORMAL),
    ]

    renderer.render(snapshot(pipes=pipes))

    assert renderer.buffer.shape == (600, 400, 3)
    assert tuple(renderer.buffer[160, 60]) == palette.bird
    assert tuple(renderer.buffer[50, 225]) == palette.golden_pipe
    assert tuple(renderer.buffer[450, 225]) == palette.pipe
    assert tuple(renderer.buffer[200, 225]) == palette.sky
    assert renderer.frames_rendered == 1
    assert renderer.last_snapshot.pipes == tuple(pipes)


def test_bird_above_field_is_not_drawn():
    palette = Palette()
    renderer = Renderer(400, 600, palette)

    renderer.render(snapshot(bird_y=-20))

    assert (renderer.buffer == np.array(palette.sky, dtype=np.uint8)).all()


def test_pipes_leaving_the_field_are_clipped():
    renderer = Renderer(400, 600)
    pipes = [PipeView(-40, 0, 50, 200, PipeRole.TOP, PipeColor.NORMAL)]

    renderer.render(snapshot(pipes=pipes))

    assert tuple(renderer.buffer[100, 5]) == renderer.palette.pipe
