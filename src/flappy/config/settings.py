"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested sections use a double underscore, e.g. FLAPPY_PHYSICS__GRAVITY=0.4.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsSettings(BaseModel):
    """Simulation constants, expressed per frame rather than per second."""

    # Play field
    field_width: int = Field(default=400, gt=0)
    field_height: int = Field(default=600, gt=0)

    # Pipes
    pipe_width: int = Field(default=50, gt=0)
    initial_gap: float = Field(default=200, gt=0)
    min_gap: float = Field(default=100, gt=0)
    gap_decrease: float = Field(default=10, ge=0)
    golden_probability: float = Field(default=0.05, ge=0.0, le=1.0)

    # Scroll speed (pixels per frame)
    initial_pipe_speed: float = Field(default=4, gt=0)
    max_pipe_speed: float = Field(default=6, gt=0)
    pipe_speed_increase: float = Field(default=0.3, ge=0)  # per milestone

    # Bird
    gravity: float = 0.3
    lift: float = -7
    bird_x: float = 50
    bird_start_y: float = 150
    bird_idle_y: Optional[float] = None  # None = just above the field
    bird_width: float = Field(default=20, gt=0)
    bird_height: float = Field(default=20, gt=0)

    # Scoring
    normal_pipe_score: int = 5
    golden_pipe_score: int = 10
    milestone_step: int = Field(default=100, gt=0)
    difficulty_ramp: bool = True

    @model_validator(mode="after")
    def _check_ranges(self) -> "PhysicsSettings":
        if self.min_gap > self.initial_gap:
            raise ValueError("min_gap must not exceed initial_gap")
        if self.max_pipe_speed < self.initial_pipe_speed:
            raise ValueError("max_pipe_speed must not be below initial_pipe_speed")
        if self.initial_gap > self.field_height / 2:
            # Top pipes reach half way down; the bottom pipe needs height >= 0
            raise ValueError("initial_gap must not exceed half of field_height")
        return self

    @property
    def idle_y(self) -> float:
        """Bird y before the first jump."""
        if self.bird_idle_y is None:
            return -self.bird_height
        return self.bird_idle_y


# Overrides applied on top of PhysicsSettings defaults for each preset.
# "classic" is the simpler variant: fixed scroll speed, no ramp,
# bird waiting in-frame.
PHYSICS_PRESETS: dict[str, dict[str, Any]] = {
    "ramped": {},
    "classic": {
        "gravity": 0.5,
        "lift": -8,
        "initial_pipe_speed": 3,
        "max_pipe_speed": 3,
        "bird_start_y": 290,
        "bird_idle_y": 290,
        "difficulty_ramp": False,
    },
}


class DisplaySettings(BaseModel):
    """Window and rendering settings."""

    fps: int = Field(default=60, gt=0)
    scale: int = Field(default=1, ge=1)
    title: str = "Flappy"
    fullscreen: bool = False


class AudioSettings(BaseModel):
    """Sound effect settings."""

    enabled: bool = True
    volume: float = Field(default=1.0, ge=0.0, le=1.0)
    # Optional directory with jump/pass-pipe/score100/game-over files;
    # missing files fall back to synthesized effects.
    sounds_path: Optional[Path] = None


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAPPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    preset: Literal["ramped", "classic"] = "ramped"
    seed: Optional[int] = None  # Fixed seed for reproducible pipe layouts

    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)

    @model_validator(mode="before")
    @classmethod
    def _apply_preset(cls, data: Any) -> Any:
        """Merge the preset's physics values under any explicit overrides."""
        if not isinstance(data, dict):
            return data

        preset = data.get("preset", "ramped")
        overrides = data.get("physics") or {}
        if isinstance(overrides, PhysicsSettings):
            overrides = overrides.model_dump(exclude_unset=True)

        data["physics"] = {**PHYSICS_PRESETS.get(preset, {}), **overrides}
        return data


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
