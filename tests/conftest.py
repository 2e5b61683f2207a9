"""Shared fixtures for Flappy tests."""

from typing import List

import pytest

from flappy.config.settings import PhysicsSettings
from flappy.core.events import Event, EventBus, EventType
from flappy.core.scheduler import FrameScheduler
from flappy.game.engine import FrameSnapshot, GameEngine, RenderSink


class RecordingRenderer(RenderSink):
    """Render sink that keeps every snapshot it is handed."""

    def __init__(self):
        self.snapshots: List[FrameSnapshot] = []

    def render(self, snapshot: FrameSnapshot) -> None:
        self.snapshots.append(snapshot)


class EventRecorder:
    """Collects every event emitted on a bus."""

    def __init__(self, bus: EventBus):
        self.events: List[Event] = []
        bus.subscribe_all(self.events.append)

    def of_type(self, event_type: EventType) -> List[Event]:
        return [e for e in self.events if e.type == event_type]

    def sounds(self) -> List[str]:
        return [e.data["sound"] for e in self.of_type(EventType.SOUND_PLAY)]

    def scores(self) -> List[int]:
        return [e.data["score"] for e in self.of_type(EventType.SCORE_CHANGED)]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def physics() -> PhysicsSettings:
    return PhysicsSettings()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(bus) -> EventRecorder:
    return EventRecorder(bus)


@pytest.fixture
def scheduler() -> FrameScheduler:
    return FrameScheduler()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def engine(physics, scheduler, bus, renderer) -> GameEngine:
    """Initialized engine whose pipes always get a top height of 150 and are never golden."""
    game = GameEngine(
        physics=physics,
        scheduler=scheduler,
        event_bus=bus,
        renderer=renderer,
        rng=lambda: 0.5,
    )
    game.initialize()
    return game


@pytest.fixture
def running(engine, recorder) -> GameEngine:
    """Engine that has received its first jump; events recorded from here on."""
    engine.on_jump_input()
    recorder.clear()
    return engine
