"""
Entity Catalog
==============

Provides convenient access to the falling entity kinds loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Optional

from rocketman.dodge_core.config_loader import (
    GameConfig,
    KindConfig,
    get_config
)


@dataclass(frozen=True)
class EntityKind:
    """
    Runtime representation of an entity kind.

    Wraps KindConfig with the numeric ID used in observations.
    """
    id: int
    config: KindConfig

    @property
    def key(self) -> str:
        return self.config.key

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def weight(self) -> int:
        return self.config.weight

    @property
    def color(self) -> Tuple[int, int, int]:
        return self.config.color

    @property
    def is_powerup(self) -> bool:
        return self.config.is_powerup

    def __repr__(self) -> str:
        return f"EntityKind({self.id}: {self.key})"


class EntityCatalog:
    """
    All entity kinds: the obstacle catalog followed by the single powerup.

    Obstacles get IDs 0..N-1 in config order, the powerup gets ID N.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._obstacles: Tuple[EntityKind, ...] = tuple(
            EntityKind(i, kind_config) for i, kind_config in enumerate(config.kinds)
        )
        self._powerup = EntityKind(len(self._obstacles), config.powerup)
        self._all = self._obstacles + (self._powerup,)

    def __len__(self) -> int:
        """Total number of kinds, powerup included."""
        return len(self._all)

    def __getitem__(self, kind_id: int) -> EntityKind:
        """Get entity kind by ID."""
        if 0 <= kind_id < len(self._all):
            return self._all[kind_id]
        raise IndexError(f"Kind ID {kind_id} out of range [0, {len(self._all)})")

    def __iter__(self):
        return iter(self._all)

    @property
    def obstacles(self) -> Tuple[EntityKind, ...]:
        """Obstacle kinds in config order."""
        return self._obstacles

    @property
    def powerup(self) -> EntityKind:
        """The powerup kind."""
        return self._powerup

    @property
    def obstacle_weights(self) -> Tuple[int, ...]:
        return tuple(k.weight for k in self._obstacles)

    def get_by_key(self, key: str) -> Optional[EntityKind]:
        """Get entity kind by its key (case-insensitive)."""
        key_lower = key.lower()
        for kind in self._all:
            if kind.key.lower() == key_lower:
                return kind
        return None


# Module-level singleton
_cached_catalog: Optional[EntityCatalog] = None


def get_catalog(config: Optional[GameConfig] = None) -> EntityCatalog:
    """
    Get the entity catalog singleton.

    Args:
        config: Optional config to use. If None, uses cached or default config.

    Returns:
        EntityCatalog instance.
    """
    global _cached_catalog
    if _cached_catalog is None or config is not None:
        _cached_catalog = EntityCatalog(config)
    return _cached_catalog
