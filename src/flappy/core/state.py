"""
State machine for a single Flappy game.

States:
    NOT_STARTED: Bird idle, start prompt visible, waiting for the first jump
    RUNNING: Simulation advancing once per frame
    GAME_OVER: Terminal until the game is re-initialized
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Game states."""
    NOT_STARTED = auto()
    RUNNING = auto()
    GAME_OVER = auto()


Listener = Callable[[State, State], None]


class StateMachine:
    """
    Tracks the game state and guards its transitions.

    Only forward transitions are allowed; the way out of GAME_OVER
    (or an abandoned RUNNING game) is a full reset().
    """

    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.NOT_STARTED, State.RUNNING),  # First jump
        (State.RUNNING, State.GAME_OVER),    # Collision / out of bounds
    ]

    def __init__(self, initial_state: State = State.NOT_STARTED) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == State.RUNNING

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Reset state machine to NOT_STARTED."""
        old_state = self._state
        self._state = State.NOT_STARTED
        if old_state != State.NOT_STARTED:
            logger.info(f"StateMachine reset: {old_state.name} -> NOT_STARTED")
            self._notify(old_state, State.NOT_STARTED)

    def _notify(self, old_state: State, new_state: State) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
