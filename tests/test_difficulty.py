"""Tests for the difficulty ramp."""

import pytest

from flappy.config.settings import PhysicsSettings
from flappy.game.difficulty import DifficultyRamp


def test_starts_at_initial_values(physics):
    ramp = DifficultyRamp(physics)
    assert ramp.gap == physics.initial_gap
    assert ramp.speed == physics.initial_pipe_speed
    assert ramp.last_milestone == 0


def test_below_threshold_does_nothing(physics):
    ramp = DifficultyRamp(physics)
    assert not ramp.check(95)
    assert ramp.gap == physics.initial_gap


def test_each_threshold_fires_once(physics):
    ramp = DifficultyRamp(physics)
    fired = [score for score in range(0, 2000, 5) if ramp.check(score)]
    assert fired == list(range(100, 2000, 100))


def test_monotonic_and_bounded(physics):
    ramp = DifficultyRamp(physics)
    gaps, speeds = [], []
    for score in range(0, 3000, 5):
        ramp.check(score)
        gaps.append(ramp.gap)
        speeds.append(ramp.speed)

    assert all(b <= a for a, b in zip(gaps, gaps[1:]))
    assert all(b >= a for a, b in zip(speeds, speeds[1:]))
    assert min(gaps) == physics.min_gap
    assert max(speeds) == physics.max_pipe_speed


def test_gap_steps_by_decrement(physics):
    ramp = DifficultyRamp(physics)
    ramp.check(100)
    ramp.check(200)
    assert ramp.gap == physics.initial_gap - 2 * physics.gap_decrease
    assert ramp.speed == pytest.approx(physics.initial_pipe_speed + 2 * physics.pipe_speed_increase)


def test_skipped_score_lands_on_multiple(physics):
    ramp = DifficultyRamp(physics)
    assert ramp.check(110)
    assert ramp.last_milestone == 100
    assert not ramp.check(195)
    assert ramp.check(200)


def test_disabled_ramp_never_fires():
    ramp = DifficultyRamp(PhysicsSettings(difficulty_ramp=False))
    assert not any(ramp.check(score) for score in range(0, 1000, 5))
    assert ramp.gap == 200
    assert ramp.speed == 4


def test_reset(physics):
    ramp = DifficultyRamp(physics)
    ramp.check(300)
    ramp.reset()
    assert ramp.gap == physics.initial_gap
    assert ramp.speed == physics.initial_pipe_speed
    assert ramp.last_milestone == 0
