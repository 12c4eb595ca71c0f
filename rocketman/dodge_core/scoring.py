"""
Scoring System
==============

Score is elapsed playing time in milliseconds plus powerup bonuses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rocketman.dodge_core.config_loader import GameConfig, get_config


@dataclass
class ScoreEvent:
    """Record of a bonus award."""
    points: int
    entity_uid: int

    def __repr__(self) -> str:
        return f"ScoreEvent(powerup={self.points}, uid={self.entity_uid})"


class ScoreTracker:
    """
    Tracks playing time and bonuses for one session.

    Time only accrues between resume() and pause(): pausing folds the running
    stretch into the banked total and resuming starts a fresh baseline.
    Bonuses are kept apart from time so that recomputing elapsed time each
    frame never erases them.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._bonus_per_powerup = config.scoring.powerup_bonus
        self._banked_ms: float = 0.0
        self._baseline_ms: Optional[float] = None
        self._elapsed_ms: int = 0
        self._bonus: int = 0
        self._powerups: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._elapsed_ms + self._bonus

    @property
    def elapsed_ms(self) -> int:
        """Playing time as of the last update, in whole milliseconds."""
        return self._elapsed_ms

    @property
    def bonus(self) -> int:
        return self._bonus

    @property
    def powerups(self) -> int:
        """Number of powerups collected."""
        return self._powerups

    @property
    def running(self) -> bool:
        return self._baseline_ms is not None

    def reset(self) -> None:
        """Reset score to zero and stop the clock."""
        self._banked_ms = 0.0
        self._baseline_ms = None
        self._elapsed_ms = 0
        self._bonus = 0
        self._powerups = 0

    def resume(self, now_ms: float) -> None:
        """Start (or restart) accruing time from now_ms."""
        self._baseline_ms = now_ms

    def pause(self, now_ms: float) -> None:
        """Stop accruing time, banking the stretch since the last resume."""
        if self._baseline_ms is None:
            return
        self.update(now_ms)
        self._banked_ms += max(0.0, now_ms - self._baseline_ms)
        self._baseline_ms = None

    def update(self, now_ms: float) -> int:
        """
        Recompute elapsed time.

        Args:
            now_ms: Current wall-clock time in milliseconds.

        Returns:
            Elapsed playing time in whole milliseconds.
        """
        running = 0.0
        if self._baseline_ms is not None:
            running = max(0.0, now_ms - self._baseline_ms)
        # Never step backwards if the clock does.
        self._elapsed_ms = max(self._elapsed_ms, int(self._banked_ms + running))
        return self._elapsed_ms

    def apply_powerup(self, entity_uid: int) -> ScoreEvent:
        """
        Award the powerup bonus.

        Returns:
            ScoreEvent describing the points awarded.
        """
        self._bonus += self._bonus_per_powerup
        self._powerups += 1
        return ScoreEvent(points=self._bonus_per_powerup, entity_uid=entity_uid)
