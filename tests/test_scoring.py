"""
Tests for scoring and the frame scheduler.
"""

import pytest

from rocketman.dodge_core.config_loader import load_config
from rocketman.dodge_core.scheduler import FrameScheduler, ManualFrameScheduler
from rocketman.dodge_core.scoring import ScoreTracker


@pytest.fixture
def config():
    return load_config()


class TestScoreTracker:
    """Elapsed playing time plus bonuses."""

    def test_counts_elapsed_ms(self, config):
        scorer = ScoreTracker(config)
        scorer.resume(1000)
        assert scorer.update(2500) == 1500
        assert scorer.score == 1500

    def test_pause_excluded(self, config):
        scorer = ScoreTracker(config)
        scorer.resume(0)
        scorer.update(1000)
        scorer.pause(1500)
        assert scorer.update(9000) == 1500
        scorer.resume(9000)
        assert scorer.update(9500) == 2000

    def test_powerup_bonus(self, config):
        scorer = ScoreTracker(config)
        scorer.resume(0)
        scorer.update(100)
        event = scorer.apply_powerup(entity_uid=7)
        assert event.points == 50
        assert scorer.score == 150
        assert scorer.powerups == 1

    def test_bonus_survives_updates(self, config):
        scorer = ScoreTracker(config)
        scorer.resume(0)
        scorer.apply_powerup(1)
        scorer.apply_powerup(2)
        scorer.update(1000)
        assert scorer.score == 1100

    def test_non_decreasing(self, config):
        scorer = ScoreTracker(config)
        scorer.resume(1000)
        scorer.update(3000)
        scorer.update(2000)
        assert scorer.score == 2000

    def test_reset(self, config):
        scorer = ScoreTracker(config)
        scorer.resume(0)
        scorer.apply_powerup(1)
        scorer.update(400)
        scorer.reset()
        assert scorer.score == 0
        assert not scorer.running


class TestFrameScheduler:
    """Handles and frame boundaries."""

    def test_request_and_run(self):
        scheduler = FrameScheduler()
        calls = []
        scheduler.request(lambda: calls.append(1))
        assert scheduler.run_frame() == 1
        assert calls == [1]
        assert scheduler.frame == 1

    def test_cancel(self):
        scheduler = FrameScheduler()
        calls = []
        handle = scheduler.request(lambda: calls.append(1))
        assert scheduler.cancel(handle)
        assert not scheduler.cancel(handle)
        scheduler.run_frame()
        assert calls == []

    def test_nested_request_waits_a_frame(self):
        scheduler = ManualFrameScheduler()
        calls = []

        def loop():
            calls.append(scheduler.frame)
            scheduler.request(loop)

        scheduler.request(loop)
        scheduler.run_frame()
        assert calls == [1]
        scheduler.run_frame()
        assert calls == [1, 2]

    def test_run_frames_stops_when_idle(self):
        scheduler = ManualFrameScheduler()
        scheduler.request(lambda: None)
        assert scheduler.run_frames(10) == 1
        assert scheduler.pending_count == 0
