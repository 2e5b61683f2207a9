"""
Flappy Audio Engine - chiptune sound effects.

Plays the engine's sound cues (jump, golden pipe pass, milestone,
game over). Effects are loaded from a sounds directory when one is
configured and otherwise synthesized from simple waveforms.
"""

import pygame
import array
import math
import random
import logging
from pathlib import Path
from typing import Dict, Optional

from flappy.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# Sound cue -> file stem in the sounds directory
SOUND_FILES = {
    "jump": "jump",
    "pass_golden_pipe": "pass-pipe",
    "milestone": "score100",
    "game_over": "game-over",
}
SOUND_EXTENSIONS = (".ogg", ".wav", ".mp3")


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def triangle(t: float, freq: float) -> float:
    """Triangle wave oscillator."""
    p = (t * freq) % 1
    return 4 * abs(p - 0.5) - 1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def noise() -> float:
    """White noise generator."""
    return random.random() * 2 - 1


class AudioEngine:
    """
    Sound sink for the game engine.

    Every failure is contained here: an engine that failed to initialize,
    is muted, or lacks a sound simply plays nothing.
    """

    def __init__(self, volume: float = 1.0, sounds_path: Optional[Path] = None):
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume = volume
        self._muted = False
        self._sounds_path = sounds_path
        self._unsubscribe = None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Initialize the mixer and prepare all sounds."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(8)
            self._initialized = True
            logger.info("Audio engine initialized")
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

        for name in SOUND_FILES:
            sound = self._load_file(name)
            if sound is None:
                sound = self._generate(name)
            self._sounds[name] = sound

        logger.info(f"Prepared {len(self._sounds)} sounds")
        return True

    def attach(self, event_bus: EventBus) -> None:
        """Play SOUND_PLAY events from the bus."""
        self._unsubscribe = event_bus.subscribe(EventType.SOUND_PLAY, self._on_sound)

    def detach(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_sound(self, event: Event) -> None:
        self.play(event.data.get("sound", ""))

    # ===== LOADING =====

    def _load_file(self, name: str) -> Optional[pygame.mixer.Sound]:
        if not self._sounds_path:
            return None

        stem = SOUND_FILES[name]
        for ext in SOUND_EXTENSIONS:
            path = Path(self._sounds_path) / f"{stem}{ext}"
            if not path.exists():
                continue
            try:
                sound = pygame.mixer.Sound(str(path))
                logger.debug(f"Loaded sound {name} from {path}")
                return sound
            except Exception as e:
                logger.warning(f"Could not load {path}: {e}")
        return None

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate(self, name: str) -> pygame.mixer.Sound:
        generators = {
            "jump": self._gen_jump,
            "pass_golden_pipe": self._gen_pass,
            "milestone": self._gen_milestone,
            "game_over": self._gen_game_over,
        }
        return self._create_sound(generators[name]())

    # ===== SYNTHESIZED EFFECTS =====

    def _gen_jump(self) -> array.array:
        """Short rising flap."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.08)):
            t = i / SAMPLE_RATE
            freq = 500 + t * 5000
            env = max(0, 1 - t * 12)
            val = square(t, freq) * 0.2
            samples.append(int(val * env * 32767))
        return samples

    def _gen_pass(self) -> array.array:
        """Coin chime for golden pipes."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.25)):
            t = i / SAMPLE_RATE
            freq = 988 if t < 0.06 else 1319
            env = max(0, 1 - t * 4)
            val = square(t, freq) * 0.2 + sine(t, freq * 2) * 0.05
            samples.append(int(val * env * 32767))
        return samples

    def _gen_milestone(self) -> array.array:
        """Triumphant arpeggio."""
        samples = array.array('h')
        notes = [523, 659, 784, 1047]
        for i in range(int(SAMPLE_RATE * 0.5)):
            t = i / SAMPLE_RATE
            note_idx = min(int(t * 10), 3)
            env = max(0, 1 - (t - note_idx * 0.1) * 5)
            val = square(t, notes[note_idx]) * 0.25
            samples.append(int(val * env * 32767))
        return samples

    def _gen_game_over(self) -> array.array:
        """Sad descending tone with a thud."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.6)):
            t = i / SAMPLE_RATE
            freq = 400 - t * 300
            env = max(0, 1 - t * 1.7)
            val = triangle(t, freq) * 0.3
            if t < 0.05:
                val += noise() * 0.3 * (1 - t * 20)
            samples.append(int(val * env * 32767))
        return samples

    # ===== PLAYBACK API =====

    def play(self, sound_name: str) -> Optional[pygame.mixer.Channel]:
        """Play a sound effect, fire-and-forget."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        try:
            sound.set_volume(self._volume)
            return sound.play()
        except Exception as e:
            logger.error(f"Failed to play {sound_name}: {e}")
            return None

    def is_muted(self) -> bool:
        """Check if audio is muted."""
        return self._muted

    def toggle_mute(self) -> bool:
        """Toggle mute state."""
        self._muted = not self._muted
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        self.detach()
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")
