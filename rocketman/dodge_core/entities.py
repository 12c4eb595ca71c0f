"""
Entities
========

Player, falling entities and the store that owns them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from rocketman.dodge_core.config_loader import GameConfig, PlayerConfig
from rocketman.dodge_core.entity_catalog import EntityKind


@dataclass
class PlayArea:
    """Current size of the play area. The frontend may resize it at any time."""
    width: float
    height: float

    @classmethod
    def from_config(cls, config: GameConfig) -> "PlayArea":
        return cls(float(config.play_area.width), float(config.play_area.height))


@dataclass
class Player:
    """
    The player's sprite.

    min_y/max_y confine vertical movement to the bottom band of the play
    area. They are fixed when the player is created and do not follow later
    resizes.
    """
    x: float
    y: float
    width: float
    height: float
    speed: float
    vertical_speed: float
    min_y: float
    max_y: float

    @classmethod
    def create(cls, config: PlayerConfig, play_area: PlayArea) -> "Player":
        """
        Create a player centred horizontally near the bottom of the play area.

        Args:
            config: Player configuration.
            play_area: Current play area size.

        Returns:
            New Player instance.
        """
        max_y = play_area.height - config.height - config.bottom_margin
        min_y = play_area.height * config.band_top_fraction - config.height
        return cls(
            x=play_area.width / 2 - config.width / 2,
            y=max_y - config.start_offset,
            width=config.width,
            height=config.height,
            speed=config.speed,
            vertical_speed=config.vertical_speed,
            min_y=min_y,
            max_y=max_y
        )

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass
class Entity:
    """A falling obstacle or powerup."""
    uid: int
    kind: EntityKind
    x: float
    y: float
    width: float
    height: float

    @property
    def is_powerup(self) -> bool:
        return self.kind.is_powerup

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


class EntityStore:
    """
    Ordered collection of active entities, oldest first.

    Removal never mutates the list being iterated: filtering builds a new
    list and single removals go through uid lookup.
    """

    def __init__(self):
        self._entities: List[Entity] = []
        self._next_uid: int = 0

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    @property
    def entities(self) -> Tuple[Entity, ...]:
        """Snapshot of the active entities, oldest first."""
        return tuple(self._entities)

    def newest_first(self) -> List[Entity]:
        """Copy of the active entities, newest first."""
        return list(reversed(self._entities))

    def spawn(
        self,
        kind: EntityKind,
        x: float,
        y: float,
        width: float,
        height: float
    ) -> Entity:
        """Create and register a new entity."""
        entity = Entity(
            uid=self._next_uid,
            kind=kind,
            x=x,
            y=y,
            width=width,
            height=height
        )
        self._next_uid += 1
        self._entities.append(entity)
        return entity

    def remove(self, uid: int) -> Optional[Entity]:
        """Remove an entity by uid. Returns it, or None if absent."""
        for i, entity in enumerate(self._entities):
            if entity.uid == uid:
                return self._entities.pop(i)
        return None

    def retain(self, keep: Callable[[Entity], bool]) -> List[Entity]:
        """
        Keep only entities for which keep() is true.

        Returns:
            The removed entities.
        """
        kept: List[Entity] = []
        removed: List[Entity] = []
        for entity in self._entities:
            (kept if keep(entity) else removed).append(entity)
        self._entities = kept
        return removed

    def clear(self) -> None:
        """Remove all entities. UIDs keep increasing across clears."""
        self._entities = []
