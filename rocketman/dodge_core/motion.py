"""
Motion & Collision Engine
=========================

Moves the player and the falling entities, culls entities that leave the
play area, and resolves player/entity overlaps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from rocketman.dodge_core.entities import Entity, EntityStore, Player, PlayArea
from rocketman.dodge_core.input_sampler import MovementIntent


@dataclass
class CollisionResult:
    """Outcome of one collision pass."""
    terminal: bool = False
    hit: Optional[Entity] = None
    collected: List[Entity] = field(default_factory=list)

    @property
    def powerups_collected(self) -> int:
        return len(self.collected)


def rects_overlap(a: Player | Entity, b: Player | Entity) -> bool:
    """Strict axis-aligned overlap. Touching edges do not count."""
    return (
        a.x < b.x + b.width and
        a.x + a.width > b.x and
        a.y < b.y + b.height and
        a.y + a.height > b.y
    )


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class MotionEngine:
    """Stateless per-frame movement and collision rules."""

    def update_player(
        self,
        player: Player,
        intent: MovementIntent,
        play_area: PlayArea
    ) -> None:
        """
        Apply a movement intent and clamp the player to its allowed region.

        Horizontal bounds follow the current play area width. Vertical bounds
        are the band fixed at player creation.
        """
        x, y = intent.apply(player.x, player.y)

        if play_area.width > 0:
            x = clamp(x, 0.0, play_area.width - player.width)
        if play_area.height > 0:
            y = clamp(y, player.min_y, player.max_y)

        player.x = x
        player.y = y

    def advance(
        self,
        store: EntityStore,
        speed: float,
        play_height: float
    ) -> List[Entity]:
        """
        Move every entity down by speed and drop those below the play area.

        Returns:
            The entities removed this frame.
        """
        for entity in store:
            entity.y += speed
        return store.retain(lambda e: e.y <= play_height)

    def check_collisions(self, player: Player, store: EntityStore) -> CollisionResult:
        """
        Resolve overlaps between the player and every entity, newest first.

        Powerups are collected and removed as they are found. The pass stops
        at the first obstacle overlap and reports it as terminal; powerups
        collected before it in the same pass stay collected.
        """
        result = CollisionResult()
        for entity in store.newest_first():
            if not rects_overlap(player, entity):
                continue
            if entity.is_powerup:
                store.remove(entity.uid)
                result.collected.append(entity)
            else:
                result.terminal = True
                result.hit = entity
                break
        return result
