"""
Dodge Core - The heart of the game.

This module provides the session simulation, the Gymnasium environment
wrapper, and all supporting systems (input, difficulty, spawning, motion,
scoring, leaderboard).

Main exports:
- Session: Frame-paced game session and state machine
- GameState: Session states
- DodgeEnv: Gymnasium environment for agents
- LeaderboardStore: Persisted top-10 scores
- GameConfig: Configuration loaded from game_config.yaml
"""

from rocketman.dodge_core.config_loader import GameConfig, load_config
from rocketman.dodge_core.entity_catalog import EntityKind, EntityCatalog
from rocketman.dodge_core.scheduler import FrameScheduler, ManualFrameScheduler
from rocketman.dodge_core.leaderboard import (
    LeaderboardEntry,
    LeaderboardStore,
    MemoryStorage,
    JsonFileStorage,
)
from rocketman.dodge_core.session import GameState, Session, SessionEvent
from rocketman.dodge_core.env_gym import DodgeEnv

__all__ = [
    "GameConfig",
    "load_config",
    "EntityKind",
    "EntityCatalog",
    "FrameScheduler",
    "ManualFrameScheduler",
    "LeaderboardEntry",
    "LeaderboardStore",
    "MemoryStorage",
    "JsonFileStorage",
    "GameState",
    "Session",
    "SessionEvent",
    "DodgeEnv",
]
