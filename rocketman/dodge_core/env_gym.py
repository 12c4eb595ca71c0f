"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the dodging game.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from rocketman.dodge_core.config_loader import GameConfig, load_config
from rocketman.dodge_core.scheduler import ManualFrameScheduler
from rocketman.dodge_core.session import GameState, Session, STATE_IDS
from rocketman.dodge_core.state_snapshot import SessionSnapshot


# Discrete action -> movement key held for that frame
ACTION_KEYS = (None, "ArrowLeft", "ArrowRight", "ArrowUp", "ArrowDown")


class DodgeEnv(gym.Env):
    """
    The dodging game as a Gymnasium environment.

    Action Space:
        Discrete(5): 0 = no input, 1 = left, 2 = right, 3 = up, 4 = down.

    Observation Space:
        Dict of scalar session state plus padded entity arrays.

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Each step runs exactly one tick on a simulated clock advancing
    1000 / render_fps milliseconds.
    """

    metadata = {
        "render_modes": ["rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize dodging environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "rgb_array" for numpy frames, None for headless.
            image_width: Override render image width.
            image_height: Override render image height.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug

        self._img_width = image_width or self._config.observation.image_width
        self._img_height = image_height or self._config.observation.image_height

        self._frame_ms = 1000.0 / self._config.observation.render_fps
        self._max_frames = self._config.observation.max_episode_frames
        self._clock_ms = 0.0
        self._held_key: Optional[str] = None

        self._session = self._make_session(seed=None)
        self._renderer = None

        self.action_space = spaces.Discrete(len(ACTION_KEYS))
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] DodgeEnv initialized")
            print(f"[DEBUG]   Play area: {self._config.play_area.width}x{self._config.play_area.height}")
            print(f"[DEBUG]   Max entities: {self._config.observation.max_entities}")

    def _make_session(self, seed: Optional[int]) -> Session:
        self._scheduler = ManualFrameScheduler()
        return Session(
            config=self._config,
            seed=seed,
            clock=lambda: self._clock_ms,
            scheduler=self._scheduler,
            debug=self._debug
        )

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_ent = self._config.observation.max_entities
        area = self._config.play_area
        big = np.float32(1e9)

        return spaces.Dict({
            "state_id": spaces.Discrete(len(STATE_IDS)),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "obstacle_speed": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "spawn_rate": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "entity_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),

            "play_width": spaces.Box(low=0, high=big, shape=(), dtype=np.float32),
            "play_height": spaces.Box(low=0, high=big, shape=(), dtype=np.float32),

            "has_player": spaces.Discrete(2),
            "player_x": spaces.Box(low=-big, high=big, shape=(), dtype=np.float32),
            "player_y": spaces.Box(low=-big, high=big, shape=(), dtype=np.float32),
            "player_min_y": spaces.Box(low=-big, high=big, shape=(), dtype=np.float32),
            "player_max_y": spaces.Box(low=-big, high=big, shape=(), dtype=np.float32),

            "ent_kind_id": spaces.Box(low=-1, high=self._config.num_kinds, shape=(max_ent,), dtype=np.int16),
            "ent_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_ent,), dtype=np.float32),
            "ent_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_ent,), dtype=np.float32),
            "ent_is_powerup": spaces.MultiBinary(max_ent),
            "ent_mask": spaces.MultiBinary(max_ent),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment and start a new game.

        Args:
            seed: Random seed for the spawner.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._clock_ms = 0.0
        self._held_key = None
        self._session = self._make_session(seed=seed)
        self._session.start()

        obs = self._snapshot_to_obs(self._session.snapshot())
        info = self._session.get_info()
        info["delta_score"] = 0
        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one tick.

        Args:
            action: Index into ACTION_KEYS.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item() if action.ndim == 0 else action[0])
        action = int(action)
        if not 0 <= action < len(ACTION_KEYS):
            raise ValueError(f"Invalid action {action}, expected 0..{len(ACTION_KEYS) - 1}")

        self._hold(ACTION_KEYS[action])

        score_before = self._session.score
        self._clock_ms += self._frame_ms
        self._scheduler.run_frame()

        obs = self._snapshot_to_obs(self._session.snapshot())
        terminated = self._session.state == GameState.GAME_OVER
        truncated = not terminated and self._session.ticks >= self._max_frames

        info = self._session.get_info()
        info["delta_score"] = self._session.score - score_before

        if self._debug and terminated:
            print(f"[DEBUG] TERMINATED: score={info['score']}, level={info['level']}")

        return obs, 0.0, terminated, truncated, info

    def _hold(self, key: Optional[str]) -> None:
        """Release the previously held key and press the new one."""
        if self._held_key is not None and self._held_key != key:
            self._session.key_up(self._held_key)
        if key is not None and key != self._held_key:
            self._session.key_down(key)
        self._held_key = key

    def _snapshot_to_obs(self, snapshot: SessionSnapshot) -> Dict[str, np.ndarray]:
        return snapshot.to_obs_dict()

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode != "rgb_array":
            return None

        if self._renderer is None:
            from rocketman.dodge_core.render_solid import SolidRenderer
            self._renderer = SolidRenderer(self._config)

        return self._renderer.render(
            self._session.get_render_data(),
            self._img_width,
            self._img_height
        )

    def close(self) -> None:
        """Clean up resources."""
        self._renderer = None

    @property
    def session(self) -> Session:
        """Access to underlying session (for debugging/tools)."""
        return self._session

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
