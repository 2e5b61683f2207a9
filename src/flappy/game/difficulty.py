"""Difficulty ramp: gap shrinks and pipes speed up every score milestone."""

from dataclasses import dataclass
import logging

from flappy.config.settings import PhysicsSettings

logger = logging.getLogger(__name__)


@dataclass
class DifficultyRamp:
    """Current gap, scroll speed and last milestone reached.

    Gap only ever shrinks (down to min_gap) and speed only ever grows
    (up to max_pipe_speed), one step per milestone.
    """

    physics: PhysicsSettings
    gap: float = 0.0
    speed: float = 0.0
    last_milestone: int = 0

    def __post_init__(self):
        self.reset()

    def reset(self) -> None:
        self.gap = self.physics.initial_gap
        self.speed = self.physics.initial_pipe_speed
        self.last_milestone = 0

    def check(self, score: int) -> bool:
        """Step difficulty if score reached the next milestone.

        Returns:
            True if a milestone was crossed
        """
        if not self.physics.difficulty_ramp:
            return False

        step = self.physics.milestone_step
        if score < self.last_milestone + step:
            return False

        self.last_milestone = (score // step) * step
        self.gap = max(self.gap - self.physics.gap_decrease, self.physics.min_gap)
        self.speed = min(
            self.speed + self.physics.pipe_speed_increase,
            self.physics.max_pipe_speed,
        )

        logger.info(
            f"Milestone {self.last_milestone}: gap={self.gap:.0f} speed={self.speed:.1f}"
        )
        return True
