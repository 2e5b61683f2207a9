"""
Desktop game assembly.

Wires the engine to its collaborators: the window's frame scheduler,
the buffer renderer, the audio engine and the input events.
"""

import logging
import random

from flappy.audio.engine import AudioEngine
from flappy.config.settings import Settings
from flappy.core.events import Event, EventBus, EventType
from flappy.core.scheduler import FrameScheduler
from flappy.core.state import State, StateMachine
from flappy.game.engine import GameEngine
from flappy.graphics.renderer import Renderer
from flappy.simulator.window import GameWindow

logger = logging.getLogger(__name__)


class FlappyApp:
    """Main application integrating all systems."""

    def __init__(self, settings: Settings):
        self.settings = settings
        physics = settings.physics

        # Core systems
        self.state_machine = StateMachine()
        self.event_bus = EventBus()
        self.scheduler = FrameScheduler()
        self.renderer = Renderer(physics.field_width, physics.field_height)

        rng = random.Random(settings.seed)
        self.engine = GameEngine(
            physics=physics,
            scheduler=self.scheduler,
            event_bus=self.event_bus,
            renderer=self.renderer,
            rng=rng.random,
            state_machine=self.state_machine,
        )

        self.audio = AudioEngine(
            volume=settings.audio.volume,
            sounds_path=settings.audio.sounds_path,
        )

        self.window = GameWindow(
            config=settings.display,
            renderer=self.renderer,
            scheduler=self.scheduler,
            event_bus=self.event_bus,
        )

        self._setup_event_handlers()
        logger.info(f"FlappyApp initialized (preset={settings.preset}, seed={settings.seed})")

    def _setup_event_handlers(self) -> None:
        """Route input events to the engine and audio."""
        self.event_bus.subscribe(EventType.JUMP, self._on_jump)
        self.event_bus.subscribe(EventType.RETRY, self._on_retry)
        self.event_bus.subscribe(EventType.TOGGLE_MUTE, self._on_toggle_mute)
        self.state_machine.add_listener(self._on_state_change)

    def _on_jump(self, event: Event) -> None:
        self.engine.on_jump_input()

    def _on_retry(self, event: Event) -> None:
        logger.info("Retry requested")
        self.engine.initialize()

    def _on_toggle_mute(self, event: Event) -> None:
        self.audio.toggle_mute()

    def _on_state_change(self, old_state: State, new_state: State) -> None:
        logger.debug(f"Game state: {old_state.name} -> {new_state.name}")

    async def run(self) -> None:
        """Run the game until the window closes."""
        if self.settings.audio.enabled and self.audio.init():
            self.audio.attach(self.event_bus)

        self.engine.initialize()

        await self.window.run()

        self.audio.cleanup()
