"""
State Snapshot
==============

Packs session state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
import numpy as np

from rocketman.dodge_core.config_loader import GameConfig, get_config
from rocketman.dodge_core.entities import EntityStore, Player, PlayArea


@dataclass
class SessionSnapshot:
    """
    Session state at the end of a tick.

    Entity arrays are fixed-size with masking for variable entity counts.
    Newest entities come first; anything beyond max_entities is dropped.
    """
    # Core state
    state_id: int
    score: int
    level: int
    obstacle_speed: float
    spawn_rate: float
    entity_count: int

    # Play area
    play_width: float
    play_height: float

    # Player (zeros and has_player=False before the player exists)
    has_player: bool
    player_x: float
    player_y: float
    player_min_y: float
    player_max_y: float

    # Entity arrays (fixed size, padded)
    ent_kind_id: np.ndarray           # (MAX_ENT,) int16, -1 for padding
    ent_x: np.ndarray                 # (MAX_ENT,) float32
    ent_y: np.ndarray                 # (MAX_ENT,) float32
    ent_is_powerup: np.ndarray        # (MAX_ENT,) bool
    ent_mask: np.ndarray              # (MAX_ENT,) bool

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "state_id": np.array(self.state_id, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "level": np.array(self.level, dtype=np.int32),
            "obstacle_speed": np.array(self.obstacle_speed, dtype=np.float32),
            "spawn_rate": np.array(self.spawn_rate, dtype=np.float32),
            "entity_count": np.array(self.entity_count, dtype=np.int32),

            "play_width": np.array(self.play_width, dtype=np.float32),
            "play_height": np.array(self.play_height, dtype=np.float32),

            "has_player": np.array(self.has_player, dtype=np.int8),
            "player_x": np.array(self.player_x, dtype=np.float32),
            "player_y": np.array(self.player_y, dtype=np.float32),
            "player_min_y": np.array(self.player_min_y, dtype=np.float32),
            "player_max_y": np.array(self.player_max_y, dtype=np.float32),

            "ent_kind_id": self.ent_kind_id,
            "ent_x": self.ent_x,
            "ent_y": self.ent_y,
            "ent_is_powerup": self.ent_is_powerup.astype(np.int8),
            "ent_mask": self.ent_mask.astype(np.int8),
        }


class SnapshotBuilder:
    """Builds session snapshots."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_ent = config.observation.max_entities

    def build(
        self,
        state_id: int,
        score: int,
        level: int,
        obstacle_speed: float,
        spawn_rate: float,
        play_area: PlayArea,
        player: Optional[Player],
        store: EntityStore
    ) -> SessionSnapshot:
        """Build a snapshot from live session objects."""
        max_ent = self._max_ent
        kind_ids = np.full(max_ent, -1, dtype=np.int16)
        xs = np.zeros(max_ent, dtype=np.float32)
        ys = np.zeros(max_ent, dtype=np.float32)
        powerups = np.zeros(max_ent, dtype=bool)
        mask = np.zeros(max_ent, dtype=bool)

        for i, entity in enumerate(store.newest_first()[:max_ent]):
            kind_ids[i] = entity.kind.id
            xs[i] = entity.x
            ys[i] = entity.y
            powerups[i] = entity.is_powerup
            mask[i] = True

        return SessionSnapshot(
            state_id=state_id,
            score=score,
            level=level,
            obstacle_speed=obstacle_speed,
            spawn_rate=spawn_rate,
            entity_count=len(store),
            play_width=play_area.width,
            play_height=play_area.height,
            has_player=player is not None,
            player_x=player.x if player else 0.0,
            player_y=player.y if player else 0.0,
            player_min_y=player.min_y if player else 0.0,
            player_max_y=player.max_y if player else 0.0,
            ent_kind_id=kind_ids,
            ent_x=xs,
            ent_y=ys,
            ent_is_powerup=powerups,
            ent_mask=mask
        )
