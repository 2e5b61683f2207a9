"""
Game loop engine.

Owns the simulation state (bird, pipes, score, difficulty) and advances it
one frame per tick(). Everything else is a collaborator: the frame
scheduler drives tick(), the render sink draws snapshots, and score, dialog
and sound changes go out as events on the event bus.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple
import logging
import math
import random

from flappy.config.settings import PhysicsSettings
from flappy.core.events import Event, EventBus, EventType, score_event, sound_event
from flappy.core.scheduler import FrameScheduler
from flappy.core.state import State, StateMachine
from flappy.game.difficulty import DifficultyRamp
from flappy.game.entities import Bird, Pipe, PipeColor, PipeRole, bird_hits_pipe

logger = logging.getLogger(__name__)


class Sound(Enum):
    """Sound cues the engine emits."""

    JUMP = "jump"
    PASS_GOLDEN_PIPE = "pass_golden_pipe"
    MILESTONE = "milestone"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PipeView:
    """Read-only copy of one pipe rectangle."""

    x: float
    y: float
    width: float
    height: float
    role: PipeRole
    color: PipeColor


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of one frame, handed to the render sink."""

    bird_x: float
    bird_y: float
    bird_width: float
    bird_height: float
    pipes: Tuple[PipeView, ...]
    score: int
    state: State
    field_width: int
    field_height: int


class RenderSink(ABC):
    """Anything that can draw a frame snapshot."""

    @abstractmethod
    def render(self, snapshot: FrameSnapshot) -> None:
        ...


class GameEngine:
    """Single-game simulation driven one frame at a time.

    Lifecycle:
        1. initialize() - reset to NOT_STARTED and render the idle frame
        2. on_jump_input() - start the game, then flap while RUNNING
        3. tick() - runs once per frame via the scheduler until GAME_OVER
    """

    def __init__(
        self,
        physics: PhysicsSettings,
        scheduler: FrameScheduler,
        event_bus: EventBus,
        renderer: Optional[RenderSink] = None,
        rng: Optional[Callable[[], float]] = None,
        state_machine: Optional[StateMachine] = None,
    ):
        self.physics = physics
        self.scheduler = scheduler
        self.event_bus = event_bus
        self.renderer = renderer
        self.state_machine = state_machine or StateMachine()
        self._rng = rng or random.random

        self.ramp = DifficultyRamp(physics)
        self.bird = self._new_bird()
        self.pipes: List[Pipe] = []
        self.score = 0
        self._frame_pending = False

    @property
    def state(self) -> State:
        return self.state_machine.state

    @property
    def gap(self) -> float:
        return self.ramp.gap

    @property
    def pipe_speed(self) -> float:
        return self.ramp.speed

    # Operations

    def initialize(self) -> None:
        """Reset everything to the idle pre-game state."""
        self.state_machine.reset()
        self.bird = self._new_bird()
        self.pipes = []
        self.score = 0
        self.ramp.reset()

        self._emit(score_event(self.score))
        self._emit(Event(EventType.SHOW_START_PROMPT, source="engine"))
        self._emit(Event(EventType.HIDE_GAME_OVER, source="engine"))

        logger.info("Game initialized")
        self._render()

    def on_jump_input(self) -> None:
        """Handle a jump: start the game, flap, or ignore after game over."""
        state = self.state

        if state == State.NOT_STARTED:
            self.state_machine.transition(State.RUNNING)
            self._emit(Event(EventType.HIDE_START_PROMPT, source="engine"))
            self.bird.y = self.physics.bird_start_y
            logger.info("Game started")
            self._request_frame()

        elif state == State.RUNNING:
            self.bird.velocity = self.physics.lift
            self._play(Sound.JUMP)

    def tick(self) -> None:
        """Advance the simulation by exactly one frame."""
        if not self.state_machine.is_running:
            return

        # Bird physics: explicit Euler, constants are per frame
        self.bird.velocity += self.physics.gravity
        self.bird.y += self.bird.velocity

        for pipe in self.pipes:
            pipe.x -= self.ramp.speed

        self._sweep_pipes()

        if self.ramp.check(self.score):
            self._play(Sound.MILESTONE)

        if not self.pipes or self.pipes[-1].x < self.physics.field_width / 2:
            self._spawn_pair()

        if self._is_colliding():
            self._end_game()

        self._render()

        if self.state_machine.is_running:
            self._request_frame()

    def snapshot(self) -> FrameSnapshot:
        """Immutable copy of what should be drawn this frame."""
        return FrameSnapshot(
            bird_x=self.bird.x,
            bird_y=self.bird.y,
            bird_width=self.bird.width,
            bird_height=self.bird.height,
            pipes=tuple(
                PipeView(p.x, p.y, p.width, p.height, p.role, p.color)
                for p in self.pipes
            ),
            score=self.score,
            state=self.state,
            field_width=self.physics.field_width,
            field_height=self.physics.field_height,
        )

    # Internals

    def _new_bird(self) -> Bird:
        return Bird(
            x=self.physics.bird_x,
            y=self.physics.idle_y,
            width=self.physics.bird_width,
            height=self.physics.bird_height,
        )

    def _sweep_pipes(self) -> None:
        """Drop and credit pipes that left the field; detect the passed pipe."""
        active: List[Pipe] = []
        passed: Optional[Pipe] = None

        for pipe in self.pipes:
            if pipe.right < 0:
                self._credit(pipe)
                continue

            # Only the first pipe behind the bird counts this frame
            if passed is None and pipe.right < self.bird.x:
                passed = pipe
            active.append(pipe)

        self.pipes = active

        if passed is not None and passed.is_golden:
            self._play(Sound.PASS_GOLDEN_PIPE)

    def _credit(self, pipe: Pipe) -> None:
        if pipe.is_golden:
            self.score += self.physics.golden_pipe_score
        else:
            self.score += self.physics.normal_pipe_score

        logger.debug(f"Pipe {pipe.role.value}/{pipe.color.value} cleared, score={self.score}")
        self._emit(score_event(self.score))

    def _spawn_pair(self) -> None:
        p = self.physics
        top_height = math.floor(self._rng() * (p.field_height / 2))
        bottom_height = p.field_height - top_height - self.ramp.gap
        color = PipeColor.GOLDEN if self._rng() < p.golden_probability else PipeColor.NORMAL

        self.pipes.append(Pipe(
            x=p.field_width, y=0, width=p.pipe_width, height=top_height,
            role=PipeRole.TOP, color=color,
        ))
        self.pipes.append(Pipe(
            x=p.field_width, y=p.field_height - bottom_height, width=p.pipe_width,
            height=bottom_height, role=PipeRole.BOTTOM, color=color,
        ))

        logger.debug(f"Spawned {color.value} pipe pair: top={top_height} gap={self.ramp.gap:.0f}")

    def _is_colliding(self) -> bool:
        if any(bird_hits_pipe(self.bird, pipe) for pipe in self.pipes):
            return True
        return self.bird.bottom >= self.physics.field_height or self.bird.y < 0

    def _end_game(self) -> None:
        self.state_machine.transition(State.GAME_OVER)
        self._play(Sound.GAME_OVER)
        self._emit(Event(EventType.SHOW_GAME_OVER, data={"score": self.score}, source="engine"))
        logger.info(f"Game over, final score: {self.score}")

    def _request_frame(self) -> None:
        # One frame chain at a time, even across a reset and restart
        if self._frame_pending:
            return
        self._frame_pending = True
        self.scheduler.schedule(self._on_frame)

    def _on_frame(self) -> None:
        self._frame_pending = False
        self.tick()

    def _render(self) -> None:
        if self.renderer:
            self.renderer.render(self.snapshot())

    def _emit(self, event: Event) -> None:
        self.event_bus.emit(event)

    def _play(self, sound: Sound) -> None:
        self._emit(sound_event(sound.value))
