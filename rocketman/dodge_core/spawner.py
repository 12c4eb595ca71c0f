"""
Spawner
=======

Probabilistically creates falling entities, at most one per frame, choosing
a kind by weighted random selection.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from rocketman.dodge_core.config_loader import GameConfig, get_config
from rocketman.dodge_core.entity_catalog import EntityCatalog, EntityKind, get_catalog
from rocketman.dodge_core.entities import Entity, EntityStore


class Spawner:
    """
    Per-frame entity spawner.

    One uniform draw decides whether anything spawns this frame. A spawn rate
    above 1.0 still yields a single entity per frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        debug: bool = False
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
            debug: If True, prints warnings for skipped spawns.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = get_catalog(config)
        self._rng = random.Random(seed)
        self._debug = debug

        self._padding = config.spawn.padding
        self._powerup_chance = config.spawn.powerup_chance
        self._min_width = config.play_area.min_usable_width
        self._width = config.obstacles.width
        self._height = config.obstacles.height
        self._spawn_y = config.obstacles.spawn_y

    @property
    def catalog(self) -> EntityCatalog:
        return self._catalog

    @property
    def spawn_y(self) -> float:
        """Y coordinate new entities appear at (just above the play area)."""
        return self._spawn_y

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the random stream.

        Args:
            seed: New random seed. Keeps current stream if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)

    def get_spawn_x_range(self, play_width: float) -> Tuple[float, float]:
        """
        Get the valid spawn X range for the given play area width.

        Returns:
            (min_x, max_x) tuple.
        """
        min_x = self._padding
        max_x = play_width - self._width - self._padding
        return (min_x, max_x)

    def choose_kind(self) -> EntityKind:
        """Pick the powerup with fixed probability, else a weighted obstacle."""
        if self._rng.random() < self._powerup_chance:
            return self._catalog.powerup
        return self._weighted_choice()

    def _weighted_choice(self) -> EntityKind:
        """Choose an obstacle kind weighted by config weights."""
        weights = self._catalog.obstacle_weights
        total = sum(weights)
        r = self._rng.random() * total
        cumulative = 0
        for kind, weight in zip(self._catalog.obstacles, weights):
            cumulative += weight
            if r < cumulative:
                return kind
        return self._catalog.obstacles[-1]

    def maybe_spawn(
        self,
        store: EntityStore,
        play_width: float,
        spawn_rate: float
    ) -> Optional[Entity]:
        """
        Run one frame of spawning.

        Args:
            store: Entity store to add to.
            play_width: Current play area width.
            spawn_rate: Current per-frame spawn probability.

        Returns:
            The spawned entity, or None if nothing spawned this frame.
        """
        if self._rng.random() >= spawn_rate:
            return None

        if play_width < self._min_width:
            if self._debug:
                print(f"[WARN] Play area too small to spawn: width={play_width}")
            return None

        kind = self.choose_kind()
        min_x, max_x = self.get_spawn_x_range(play_width)
        x = min_x + self._rng.random() * (max_x - min_x)

        return store.spawn(
            kind,
            x=x,
            y=self._spawn_y,
            width=self._width,
            height=self._height
        )
