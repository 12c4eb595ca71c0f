"""
Session
=======

Main game orchestrator: state machine, frame loop, scoring and difficulty.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from rocketman.dodge_core.config_loader import GameConfig, get_config
from rocketman.dodge_core.entity_catalog import EntityCatalog, get_catalog
from rocketman.dodge_core.entities import Entity, EntityStore, Player, PlayArea
from rocketman.dodge_core.input_sampler import InputSampler
from rocketman.dodge_core.difficulty import DifficultyController
from rocketman.dodge_core.spawner import Spawner
from rocketman.dodge_core.motion import MotionEngine, CollisionResult
from rocketman.dodge_core.scoring import ScoreTracker
from rocketman.dodge_core.scheduler import FrameScheduler, ManualFrameScheduler
from rocketman.dodge_core.leaderboard import LeaderboardStore, LeaderboardEntry
from rocketman.dodge_core.state_snapshot import SnapshotBuilder, SessionSnapshot


class GameState(str, Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


STATE_IDS = {
    GameState.START: 0,
    GameState.PLAYING: 1,
    GameState.PAUSED: 2,
    GameState.GAME_OVER: 3,
}

START_KEYS = frozenset({" ", "Space"})
PAUSE_KEYS = frozenset({"p", "P", "KeyP"})


@dataclass
class SessionEvent:
    """Presentation signal emitted by the session."""
    kind: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    score: int
    delta_score: int
    level_ups: int
    spawned: Optional[Entity]
    culled: int
    collision: CollisionResult
    terminated: bool


def _wall_clock_ms() -> float:
    return time.time() * 1000.0


class Session:
    """
    One player's game, from start screen to game over and back.

    Orchestrates:
    - Input sampling
    - Difficulty progression
    - Spawning
    - Motion, culling and collisions
    - Scoring
    - Leaderboard submission

    Owns the single pending tick handle. Pausing and game over cancel it, and
    a tick that runs while not PLAYING does nothing, so two loops can never
    run at once.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None,
        scheduler: Optional[FrameScheduler] = None,
        leaderboard: Optional[LeaderboardStore] = None,
        audio: Optional[Any] = None,
        listener: Optional[Callable[[SessionEvent], None]] = None,
        play_area: Optional[PlayArea] = None,
        debug: bool = False
    ):
        """
        Initialize session.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for the spawner.
            clock: Callable returning the current time in milliseconds.
            scheduler: Frame scheduler. A ManualFrameScheduler if None.
            leaderboard: Leaderboard store. In-memory if None.
            audio: Object with play()/pause()/toggle_mute(), or None for silence.
            listener: Callback receiving SessionEvents.
            play_area: Initial play area. Config size if None.
            debug: If True, prints lifecycle and warning messages.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._clock = clock or _wall_clock_ms
        self._scheduler = scheduler if scheduler is not None else ManualFrameScheduler()
        self._leaderboard = leaderboard if leaderboard is not None else LeaderboardStore(config=config)
        self._audio = audio
        self._listener = listener
        self._play_area = play_area or PlayArea.from_config(config)
        self._debug = debug

        # Initialize subsystems
        self._catalog = get_catalog(config)
        self._input = InputSampler()
        self._store = EntityStore()
        self._difficulty = DifficultyController(config)
        self._spawner = Spawner(config, seed, debug=debug)
        self._motion = MotionEngine()
        self._scorer = ScoreTracker(config)
        self._snapshot_builder = SnapshotBuilder(config)

        # Session state
        self._state: GameState = GameState.START
        self._player: Optional[Player] = None
        self._player_retry_at: Optional[float] = None
        self._tick_handle: Optional[int] = None
        self._final_score: int = 0
        self._submitted: bool = False
        self._muted: bool = False
        self._ticks: int = 0

        self._leaderboard.ensure_seed()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def catalog(self) -> EntityCatalog:
        return self._catalog

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score(self) -> int:
        """Current score (frozen at the final score after game over)."""
        if self._state == GameState.GAME_OVER:
            return self._final_score
        return self._scorer.score

    @property
    def final_score(self) -> int:
        return self._final_score

    @property
    def level(self) -> int:
        return self._difficulty.level

    @property
    def obstacle_speed(self) -> float:
        return self._difficulty.obstacle_speed

    @property
    def spawn_rate(self) -> float:
        return self._difficulty.spawn_rate

    @property
    def player(self) -> Optional[Player]:
        return self._player

    @property
    def entities(self) -> EntityStore:
        return self._store

    @property
    def input(self) -> InputSampler:
        return self._input

    @property
    def play_area(self) -> PlayArea:
        return self._play_area

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def leaderboard(self) -> LeaderboardStore:
        return self._leaderboard

    @property
    def tick_pending(self) -> bool:
        """True if a tick is scheduled for the next frame."""
        return self._tick_handle is not None and self._scheduler.is_pending(self._tick_handle)

    @property
    def ticks(self) -> int:
        """Ticks run in the current game."""
        return self._ticks

    @property
    def submitted(self) -> bool:
        return self._submitted

    @property
    def muted(self) -> bool:
        return self._muted

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _emit(self, kind: str, **payload: Any) -> None:
        if self._listener is not None:
            self._listener(SessionEvent(kind, payload))

    def _set_state(self, state: GameState) -> None:
        previous = self._state
        self._state = state
        if self._debug:
            print(f"[DEBUG] State: {previous.value} -> {state.value}")
        self._emit("state_changed", previous=previous, state=state)

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._tick_handle = self._scheduler.request(self.tick)

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._scheduler.cancel(self._tick_handle)
            self._tick_handle = None

    def _play_area_usable(self) -> bool:
        area = self._config.play_area
        return (
            self._play_area.width >= area.min_usable_width and
            self._play_area.height >= area.min_usable_height
        )

    def _try_create_player(self, now: float) -> bool:
        """Create the player, or arrange a retry if the play area is too small."""
        if not self._play_area_usable():
            self._player = None
            self._player_retry_at = now + self._config.play_area.retry_delay_ms
            if self._debug:
                print(f"[WARN] Play area too small ({self._play_area.width}x"
                      f"{self._play_area.height}), retrying player creation")
            return False

        self._player = Player.create(self._config.player, self._play_area)
        self._player_retry_at = None
        if self._debug:
            print(f"[DEBUG] Player created at ({self._player.x:.1f}, {self._player.y:.1f}), "
                  f"Y range {self._player.min_y:.1f}-{self._player.max_y:.1f}")
        self._emit("player_created", player=self._player)
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """
        Start a new game from the start screen.

        Returns:
            True if a game was started.
        """
        if self._state != GameState.START:
            return False

        now = self._clock()
        self._cancel_tick()
        self._store.clear()
        self._difficulty.reset()
        self._scorer.reset()
        self._scorer.resume(now)
        self._final_score = 0
        self._submitted = False
        self._ticks = 0

        self._set_state(GameState.PLAYING)
        if self._audio is not None:
            self._audio.play()

        self._try_create_player(now)
        self._schedule_tick()
        return True

    def toggle_pause(self) -> GameState:
        """
        Pause while playing, resume while paused. No-op otherwise.

        Returns:
            The state after the toggle.
        """
        now = self._clock()
        if self._state == GameState.PLAYING:
            self._cancel_tick()
            self._scorer.pause(now)
            self._set_state(GameState.PAUSED)
            if self._audio is not None:
                self._audio.pause()
        elif self._state == GameState.PAUSED:
            self._scorer.resume(now)
            self._set_state(GameState.PLAYING)
            if self._audio is not None:
                self._audio.play()
            self._schedule_tick()
        return self._state

    def restart(self) -> bool:
        """
        Return from game over to the start screen.

        Returns:
            True if the session moved to START.
        """
        if self._state != GameState.GAME_OVER:
            return False
        self._submitted = False
        self._set_state(GameState.START)
        return True

    def _game_over(self) -> None:
        self._cancel_tick()
        self._final_score = self._scorer.score
        self._store.clear()
        self._player = None
        self._player_retry_at = None
        self._set_state(GameState.GAME_OVER)
        if self._debug:
            print(f"[DEBUG] GAME OVER - Score: {self._final_score}, Level: {self.level}")
        self._emit("game_over", score=self._final_score, leaderboard=self._leaderboard.entries())

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def tick(self) -> Optional[TickResult]:
        """
        Run one simulation step.

        Phases run in a fixed order: score and difficulty, player, spawn,
        advance and cull, collisions. The next tick is scheduled only if the
        game is still running.

        Returns:
            TickResult, or None if the session is not PLAYING.
        """
        self._cancel_tick()
        if self._state != GameState.PLAYING:
            return None

        now = self._clock()
        self._ticks += 1
        score_before = self._scorer.score

        # Score and difficulty
        elapsed = self._scorer.update(now)
        level_ups = self._difficulty.update(elapsed)
        if level_ups:
            if self._debug:
                print(f"[DEBUG] Level {self.level}: speed={self.obstacle_speed:.2f}, "
                      f"spawn_rate={self.spawn_rate:.4f}")
            self._emit(
                "level_highlight",
                level=self.level,
                duration_ms=self._config.presentation.level_highlight_ms
            )

        # Player
        if self._player is None and self._player_retry_at is not None and now >= self._player_retry_at:
            self._try_create_player(now)
        if self._player is not None:
            intent = self._input.sample(self._player)
            self._motion.update_player(self._player, intent, self._play_area)

        # Spawn
        spawned = self._spawner.maybe_spawn(
            self._store, self._play_area.width, self._difficulty.spawn_rate
        )

        # Advance and cull
        culled = self._motion.advance(
            self._store, self._difficulty.obstacle_speed, self._play_area.height
        )

        # Collisions
        if self._player is not None:
            collision = self._motion.check_collisions(self._player, self._store)
        else:
            collision = CollisionResult()

        for entity in collision.collected:
            self._scorer.apply_powerup(entity.uid)
            self._emit(
                "score_highlight",
                score=self._scorer.score,
                duration_ms=self._config.presentation.score_highlight_ms
            )

        score_after = self._scorer.score
        if collision.terminal:
            self._game_over()
        else:
            self._schedule_tick()

        return TickResult(
            score=score_after,
            delta_score=score_after - score_before,
            level_ups=level_ups,
            spawned=spawned,
            culled=len(culled),
            collision=collision,
            terminated=collision.terminal
        )

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def key_down(self, key: str, code: Optional[str] = None) -> None:
        """Handle a key press (key name plus optional physical code)."""
        self._input.key_down(key)

        if self._state == GameState.START and (key in START_KEYS or code in START_KEYS):
            self.start()
        elif self._state in (GameState.PLAYING, GameState.PAUSED) and (
            key in PAUSE_KEYS or code in PAUSE_KEYS
        ):
            self.toggle_pause()

    def key_up(self, key: str) -> None:
        self._input.key_up(key)

    def pointer_move(self, x: float, y: float) -> None:
        """Mouse movement over the play area steers only while playing."""
        if self._state == GameState.PLAYING:
            self._input.set_pointer(x, y)

    def pointer_leave(self) -> None:
        self._input.clear_pointer()

    def touch_start(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        """A touch starts the game from the start screen and steers otherwise."""
        if self._state == GameState.START:
            self.start()
        if x is not None and y is not None:
            self._input.set_pointer(x, y)

    def touch_move(self, x: float, y: float) -> None:
        self._input.set_pointer(x, y)

    def touch_end(self, remaining_touches: int = 0) -> None:
        if remaining_touches == 0:
            self._input.clear_pointer()

    def toggle_mute(self) -> bool:
        """
        Flip the mute state.

        Returns:
            The new muted state.
        """
        if self._audio is not None:
            self._muted = self._audio.toggle_mute()
        else:
            self._muted = not self._muted
        return self._muted

    def resize(self, width: float, height: float) -> None:
        """Update the play area size (player band stays as created)."""
        self._play_area.width = float(width)
        self._play_area.height = float(height)

    # ------------------------------------------------------------------
    # Leaderboard
    # ------------------------------------------------------------------

    def submit_score(self, name: Optional[str]) -> Optional[List[LeaderboardEntry]]:
        """
        Submit the final score once per game over.

        Returns:
            The updated leaderboard, or None if submission is not allowed.
        """
        if self._state != GameState.GAME_OVER or self._submitted:
            return None

        entries = self._leaderboard.submit(name, self._final_score)
        self._submitted = True
        self._emit(
            "leaderboard_updated",
            entries=entries,
            highlight=self._leaderboard.rank_of(self._final_score)
        )
        return entries

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        """Build the current state snapshot."""
        return self._snapshot_builder.build(
            state_id=STATE_IDS[self._state],
            score=self.score,
            level=self.level,
            obstacle_speed=self.obstacle_speed,
            spawn_rate=self.spawn_rate,
            play_area=self._play_area,
            player=self._player,
            store=self._store
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "state": self._state.value,
            "score": self.score,
            "level": self.level,
            "ticks": self._ticks,
            "entity_count": len(self._store),
            "obstacle_speed": self.obstacle_speed,
            "spawn_rate": self.spawn_rate,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with play area, player, entities and HUD values.
        """
        player = None
        if self._player is not None:
            player = {
                "x": self._player.x,
                "y": self._player.y,
                "width": self._player.width,
                "height": self._player.height,
                "color": self._config.player.color,
            }

        entities = [
            {
                "uid": e.uid,
                "kind": e.kind.key,
                "kind_id": e.kind.id,
                "x": e.x,
                "y": e.y,
                "width": e.width,
                "height": e.height,
                "color": e.kind.color,
                "is_powerup": e.is_powerup,
            }
            for e in self._store.entities
        ]

        return {
            "play_width": self._play_area.width,
            "play_height": self._play_area.height,
            "state": self._state.value,
            "player": player,
            "entities": entities,
            "score": self.score,
            "level": self.level,
            "final_score": self._final_score,
            "muted": self._muted,
        }
