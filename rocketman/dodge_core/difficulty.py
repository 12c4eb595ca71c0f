"""
Difficulty Controller
=====================

Raises the level, obstacle speed and spawn rate at fixed wall-clock intervals.
"""

from __future__ import annotations

from typing import Optional

from rocketman.dodge_core.config_loader import GameConfig, get_config


class DifficultyController:
    """
    Tracks the difficulty tier of a session.

    Every interval boundary (5 s by default) raises the level by one and
    compounds the speed and spawn-rate multipliers. Growth is unbounded.

    Each boundary is applied exactly once: a frame that jumps across several
    boundaries applies all of them, and frames inside the same window apply
    nothing.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize difficulty controller.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._interval = config.difficulty.interval_seconds
        self._speed_mult = config.difficulty.speed_multiplier
        self._spawn_mult = config.difficulty.spawn_multiplier

        self._level: int = 1
        self._obstacle_speed: float = config.obstacles.base_speed
        self._spawn_rate: float = config.spawn.base_rate
        self._last_boundary: int = 0

    @property
    def level(self) -> int:
        return self._level

    @property
    def obstacle_speed(self) -> float:
        """Current per-frame fall speed."""
        return self._obstacle_speed

    @property
    def spawn_rate(self) -> float:
        """Current per-frame spawn probability (may exceed 1.0)."""
        return self._spawn_rate

    @property
    def last_boundary(self) -> int:
        """Seconds value of the last boundary applied (0 if none)."""
        return self._last_boundary

    def reset(self) -> None:
        """Return to level 1 and the base speed/rate."""
        self._level = 1
        self._obstacle_speed = self._config.obstacles.base_speed
        self._spawn_rate = self._config.spawn.base_rate
        self._last_boundary = 0

    def update(self, elapsed_ms: float) -> int:
        """
        Apply every boundary crossed since the last update.

        Args:
            elapsed_ms: Elapsed playing time in milliseconds.

        Returns:
            Number of level-ups applied by this call.
        """
        seconds = int(elapsed_ms // 1000)
        boundary = (seconds // self._interval) * self._interval

        applied = 0
        while self._last_boundary < boundary:
            self._last_boundary += self._interval
            self._level_up()
            applied += 1
        return applied

    def _level_up(self) -> None:
        self._level += 1
        self._obstacle_speed *= self._speed_mult
        self._spawn_rate *= self._spawn_mult
