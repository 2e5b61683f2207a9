"""Core framework components for Flappy."""

from .state import State, StateMachine
from .events import EventBus, Event, EventType
from .scheduler import FrameScheduler

__all__ = ["State", "StateMachine", "EventBus", "Event", "EventType", "FrameScheduler"]
