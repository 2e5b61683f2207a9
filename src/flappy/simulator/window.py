"""
Main game window using pygame.

Hosts the play field, turns keyboard and mouse input into bus events,
runs the frame scheduler once per display refresh and draws the score,
start prompt and game-over dialog on top of the rendered field.
"""

import pygame
import asyncio
import logging
from typing import Optional

from ..config.settings import DisplaySettings
from ..core.events import Event, EventBus, EventType
from ..core.scheduler import FrameScheduler
from ..graphics.renderer import Renderer
from .display import SimulatedScreen

logger = logging.getLogger(__name__)


KEY_BINDINGS: dict[int, EventType] = {
    pygame.K_SPACE: EventType.JUMP,
    pygame.K_UP: EventType.JUMP,
    pygame.K_w: EventType.JUMP,
    pygame.K_m: EventType.TOGGLE_MUTE,
    pygame.K_r: EventType.RETRY,
    pygame.K_q: EventType.QUIT,
    pygame.K_ESCAPE: EventType.QUIT,
}

TEXT_COLOR = (255, 255, 255)
SHADOW_COLOR = (30, 30, 30)
DIALOG_COLOR = (40, 40, 50)
BUTTON_COLOR = (100, 150, 255)


def resolve_key(key: int) -> Optional[EventType]:
    """Map a pygame key code to an input event type."""
    return KEY_BINDINGS.get(key)


class GameWindow:
    """
    Desktop window hosting one game.

    Keyboard Mapping:
        SPACE / UP / W: Jump (also left mouse click on the field)
        R: Retry (while the game-over dialog is shown)
        M: Mute / unmute sound
        Q / ESC: Quit
    """

    def __init__(
        self,
        config: DisplaySettings,
        renderer: Renderer,
        scheduler: FrameScheduler,
        event_bus: EventBus,
    ) -> None:
        self.config = config
        self.renderer = renderer
        self.scheduler = scheduler
        self.event_bus = event_bus
        self.screen = SimulatedScreen(renderer.width, renderer.height, config.scale)

        self._surface: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None
        self._running = False

        # UI state, driven by engine events
        self.score = 0
        self.show_start_prompt = False
        self.show_game_over = False
        self._buttons: dict[EventType, pygame.Rect] = {}

        self.event_bus.subscribe(EventType.SCORE_CHANGED, self._on_score)
        self.event_bus.subscribe(EventType.SHOW_START_PROMPT, self._on_ui)
        self.event_bus.subscribe(EventType.HIDE_START_PROMPT, self._on_ui)
        self.event_bus.subscribe(EventType.SHOW_GAME_OVER, self._on_ui)
        self.event_bus.subscribe(EventType.HIDE_GAME_OVER, self._on_ui)
        self.event_bus.subscribe(EventType.QUIT, self._on_quit)

        self._layout_dialog()
        logger.info("GameWindow created")

    @property
    def is_running(self) -> bool:
        return self._running

    # UI sink

    def _on_score(self, event: Event) -> None:
        self.score = event.data.get("score", 0)

    def _on_ui(self, event: Event) -> None:
        if event.type == EventType.SHOW_START_PROMPT:
            self.show_start_prompt = True
        elif event.type == EventType.HIDE_START_PROMPT:
            self.show_start_prompt = False
        elif event.type == EventType.SHOW_GAME_OVER:
            self.show_game_over = True
        elif event.type == EventType.HIDE_GAME_OVER:
            self.show_game_over = False

    def _on_quit(self, event: Event) -> None:
        logger.info("Quit requested")
        self.stop()

    def _layout_dialog(self) -> None:
        """Place the Retry / Quit buttons, in play field coordinates."""
        w, h = self.renderer.width, self.renderer.height
        button_w, button_h = 100, 36
        y = h // 2 + 20
        self._buttons = {
            EventType.RETRY: pygame.Rect(w // 2 - button_w - 10, y, button_w, button_h),
            EventType.QUIT: pygame.Rect(w // 2 + 10, y, button_w, button_h),
        }

    # Input

    def handle_key(self, key: int) -> None:
        event_type = resolve_key(key)
        if event_type is None:
            return
        if event_type == EventType.RETRY and not self.show_game_over:
            return
        self.event_bus.emit(Event(event_type, source="keyboard"))

    def handle_click(self, pos: tuple[int, int]) -> None:
        """Dialog buttons take the click while shown; otherwise it is a jump."""
        field_pos = self.screen.to_field(pos)

        if self.show_game_over:
            for event_type, rect in self._buttons.items():
                if rect.collidepoint(field_pos):
                    self.event_bus.emit(Event(event_type, source="mouse"))
                    return

        self.event_bus.emit(Event(EventType.JUMP, source="mouse"))

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.event_bus.emit(Event(EventType.QUIT, source="window"))
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.handle_click(event.pos)

    # Rendering

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._surface = pygame.display.set_mode(self.screen.size, flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 24 * self.config.scale)
        self._big_font = pygame.font.SysFont(None, 40 * self.config.scale)

        logger.info(f"Pygame initialized: {self.screen.size[0]}x{self.screen.size[1]}")

    def _draw_text(self, text: str, font: pygame.font.Font, center: tuple[int, int]) -> None:
        shadow = font.render(text, True, SHADOW_COLOR)
        label = font.render(text, True, TEXT_COLOR)
        rect = label.get_rect(center=center)
        self._surface.blit(shadow, rect.move(2, 2))
        self._surface.blit(label, rect)

    def _render(self) -> None:
        """Draw the field and overlays."""
        if not self._surface:
            return

        s = self.config.scale
        width, height = self.screen.size
        self._surface.blit(self.screen.render(self.renderer.buffer), (0, 0))

        self._draw_text(f"Score: {self.score}", self._font, (width // 2, 20 * s))

        if self.show_start_prompt:
            self._draw_text("Press SPACE or click to start", self._font, (width // 2, height // 2))

        if self.show_game_over:
            dialog = pygame.Rect(0, 0, 280 * s, 160 * s)
            dialog.center = (width // 2, height // 2 + 10 * s)
            pygame.draw.rect(self._surface, DIALOG_COLOR, dialog, border_radius=8)
            self._draw_text("GAME OVER", self._big_font, (width // 2, height // 2 - 30 * s))

            for event_type, rect in self._buttons.items():
                scaled = pygame.Rect(rect.x * s, rect.y * s, rect.w * s, rect.h * s)
                pygame.draw.rect(self._surface, BUTTON_COLOR, scaled, border_radius=6)
                label = "Retry" if event_type == EventType.RETRY else "Quit"
                self._draw_text(label, self._font, scaled.center)

        pygame.display.flip()

    async def run(self) -> None:
        """Main window loop: input, one scheduler frame, draw, wait."""
        self._init_pygame()
        self._running = True

        logger.info("Window started")

        while self._running:
            self._handle_events()
            self.scheduler.run_frame()
            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
