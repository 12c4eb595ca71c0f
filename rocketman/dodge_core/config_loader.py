"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


@dataclass(frozen=True)
class PlayAreaConfig:
    """Play area geometry and sizing guards."""
    width: int
    height: int
    min_usable_width: int        # Spawning is skipped below this width
    min_usable_height: int       # Player creation waits below this size
    retry_delay_ms: float        # Delay between player creation attempts


@dataclass(frozen=True)
class PlayerConfig:
    """Player sprite size, speed and vertical band."""
    width: float
    height: float
    speed: float                 # Horizontal pixels per frame
    vertical_speed: float        # Vertical pixels per frame
    band_top_fraction: float     # Top of the movement band as a fraction of height
    bottom_margin: float         # Gap kept below the player
    start_offset: float          # Start this far above max_y
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class ObstacleConfig:
    """Falling entity geometry and base speed."""
    width: float
    height: float
    spawn_y: float
    base_speed: float


@dataclass(frozen=True)
class SpawnConfig:
    """Spawner probabilities."""
    base_rate: float             # Per-frame spawn probability at level 1
    powerup_chance: float        # Probability a spawn is a powerup
    padding: float               # Horizontal gap kept from the walls


@dataclass(frozen=True)
class DifficultyConfig:
    """Level-up cadence and multipliers."""
    interval_seconds: int
    speed_multiplier: float
    spawn_multiplier: float


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    powerup_bonus: int


@dataclass(frozen=True)
class KindConfig:
    """Configuration for a single entity kind."""
    key: str
    name: str
    weight: int
    color: Tuple[int, int, int]
    is_powerup: bool = False


@dataclass(frozen=True)
class LeaderboardConfig:
    """Leaderboard persistence settings."""
    storage_key: str
    max_entries: int
    default_name: str
    seed_name: str
    seed_score: int


@dataclass(frozen=True)
class PresentationConfig:
    """Durations of transient highlight pulses."""
    score_highlight_ms: int
    level_highlight_ms: int


@dataclass(frozen=True)
class AudioConfig:
    """Background music settings."""
    music_path: str
    volume: float
    loop: bool


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters for the Gymnasium wrapper."""
    max_entities: int
    render_fps: int
    max_episode_frames: int
    image_width: int
    image_height: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    Use dataclasses.replace() to derive variants (e.g. in tests).
    """
    play_area: PlayAreaConfig
    player: PlayerConfig
    obstacles: ObstacleConfig
    spawn: SpawnConfig
    difficulty: DifficultyConfig
    scoring: ScoringConfig
    kinds: Tuple[KindConfig, ...]
    powerup: KindConfig
    leaderboard: LeaderboardConfig
    presentation: PresentationConfig
    audio: AudioConfig
    observation: ObservationConfig

    @property
    def num_kinds(self) -> int:
        """Total number of entity kinds (obstacles plus the powerup)."""
        return len(self.kinds) + 1


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_kind(kind_data: dict, is_powerup: bool = False) -> KindConfig:
    """Parse a single entity kind from YAML."""
    return KindConfig(
        key=str(kind_data["key"]),
        name=str(kind_data.get("name", kind_data["key"])),
        weight=int(kind_data.get("weight", 1)),
        color=_parse_color(kind_data["color"]),
        is_powerup=is_powerup
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if not config.kinds:
        raise ValueError("At least one obstacle kind is required")

    for kind in config.kinds:
        if kind.weight <= 0:
            raise ValueError(f"Kind '{kind.key}' must have a positive weight, got {kind.weight}")

    keys = [k.key for k in config.kinds] + [config.powerup.key]
    if len(set(keys)) != len(keys):
        raise ValueError(f"Entity kind keys must be unique, got {keys}")

    for name, value in (
        ("player.width", config.player.width),
        ("player.height", config.player.height),
        ("obstacles.width", config.obstacles.width),
        ("obstacles.height", config.obstacles.height),
    ):
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")

    for name, value in (
        ("spawn.base_rate", config.spawn.base_rate),
        ("spawn.powerup_chance", config.spawn.powerup_chance),
        ("player.band_top_fraction", config.player.band_top_fraction),
    ):
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"{name} must be in [0, 1], got {value}")

    if config.difficulty.interval_seconds <= 0:
        raise ValueError(
            f"difficulty.interval_seconds must be positive, got {config.difficulty.interval_seconds}"
        )

    if config.difficulty.speed_multiplier < 1.0 or config.difficulty.spawn_multiplier < 1.0:
        raise ValueError("Difficulty multipliers must be >= 1.0 (difficulty never decreases)")

    if config.leaderboard.max_entries <= 0:
        raise ValueError(
            f"leaderboard.max_entries must be positive, got {config.leaderboard.max_entries}"
        )

    if config.observation.max_entities <= 0:
        raise ValueError(
            f"observation.max_entities must be positive, got {config.observation.max_entities}"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    area_data = raw["play_area"]
    play_area = PlayAreaConfig(
        width=int(area_data["width"]),
        height=int(area_data["height"]),
        min_usable_width=int(area_data.get("min_usable_width", 100)),
        min_usable_height=int(area_data.get("min_usable_height", 100)),
        retry_delay_ms=float(area_data.get("retry_delay_ms", 100))
    )

    player_data = raw["player"]
    player = PlayerConfig(
        width=float(player_data["width"]),
        height=float(player_data["height"]),
        speed=float(player_data["speed"]),
        vertical_speed=float(player_data["vertical_speed"]),
        band_top_fraction=float(player_data.get("band_top_fraction", 0.75)),
        bottom_margin=float(player_data.get("bottom_margin", 10)),
        start_offset=float(player_data.get("start_offset", 40)),
        color=_parse_color(player_data.get("color", [255, 255, 255]))
    )

    obstacle_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        width=float(obstacle_data["width"]),
        height=float(obstacle_data["height"]),
        spawn_y=float(obstacle_data.get("spawn_y", -float(obstacle_data["height"]))),
        base_speed=float(obstacle_data["base_speed"])
    )

    spawn_data = raw["spawn"]
    spawn = SpawnConfig(
        base_rate=float(spawn_data["base_rate"]),
        powerup_chance=float(spawn_data["powerup_chance"]),
        padding=float(spawn_data.get("padding", 20))
    )

    difficulty_data = raw["difficulty"]
    difficulty = DifficultyConfig(
        interval_seconds=int(difficulty_data["interval_seconds"]),
        speed_multiplier=float(difficulty_data["speed_multiplier"]),
        spawn_multiplier=float(difficulty_data["spawn_multiplier"])
    )

    scoring = ScoringConfig(
        powerup_bonus=int(raw["scoring"]["powerup_bonus"])
    )

    kinds = tuple(_parse_kind(k) for k in raw["kinds"])
    powerup = _parse_kind(raw["powerup"], is_powerup=True)

    lb_data = raw["leaderboard"]
    leaderboard = LeaderboardConfig(
        storage_key=str(lb_data["storage_key"]),
        max_entries=int(lb_data.get("max_entries", 10)),
        default_name=str(lb_data.get("default_name", "PLAYER")),
        seed_name=str(lb_data["seed_name"]),
        seed_score=int(lb_data["seed_score"])
    )

    pres_data = raw.get("presentation", {})
    presentation = PresentationConfig(
        score_highlight_ms=int(pres_data.get("score_highlight_ms", 200)),
        level_highlight_ms=int(pres_data.get("level_highlight_ms", 500))
    )

    audio_data = raw.get("audio", {})
    audio = AudioConfig(
        music_path=str(audio_data.get("music_path", "")),
        volume=float(audio_data.get("volume", 0.5)),
        loop=bool(audio_data.get("loop", True))
    )

    obs_data = raw["observation"]
    observation = ObservationConfig(
        max_entities=int(obs_data["max_entities"]),
        render_fps=int(obs_data.get("render_fps", 60)),
        max_episode_frames=int(obs_data.get("max_episode_frames", 36000)),
        image_width=int(obs_data.get("image_width", 240)),
        image_height=int(obs_data.get("image_height", 360))
    )

    config = GameConfig(
        play_area=play_area,
        player=player,
        obstacles=obstacles,
        spawn=spawn,
        difficulty=difficulty,
        scoring=scoring,
        kinds=kinds,
        powerup=powerup,
        leaderboard=leaderboard,
        presentation=presentation,
        audio=audio,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
