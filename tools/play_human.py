"""
Human Play Mode
================

Play Rocketman Dodge interactively in a pygame window.

Controls:
    - Arrow keys: Move the rocket
    - Mouse / touch: Rocket follows the pointer
    - Space / click: Start
    - P: Pause / resume
    - M: Mute music
    - Game over: type a name, Enter to submit, Enter again (or F5) to restart
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--scores PATH] [--music PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from rocketman.dodge_core.config_loader import load_config, GameConfig
from rocketman.dodge_core.audio import AudioController
from rocketman.dodge_core.leaderboard import JsonFileStorage, LeaderboardEntry, LeaderboardStore
from rocketman.dodge_core.scheduler import FrameScheduler
from rocketman.dodge_core.session import GameState, Session, SessionEvent


# pygame key -> key name understood by the session
KEY_NAMES = {}
if PYGAME_AVAILABLE:
    KEY_NAMES = {
        pygame.K_LEFT: "ArrowLeft",
        pygame.K_RIGHT: "ArrowRight",
        pygame.K_UP: "ArrowUp",
        pygame.K_DOWN: "ArrowDown",
        pygame.K_SPACE: " ",
        pygame.K_p: "p",
    }


class DodgeRenderer:
    """
    Retro arcade renderer: starfield background, rocket, falling snacks,
    HUD with highlight pulses, and the start / pause / game over screens.
    """

    def __init__(self, config: GameConfig, window_width: int, window_height: int):
        self._config = config
        self._window_width = window_width
        self._window_height = window_height

        # Colors - neon arcade palette
        self._bg = (10, 10, 30)
        self._band = (20, 20, 50)
        self._hud_normal = (0, 255, 0)
        self._hud_highlight = (255, 255, 0)
        self._accent = (0, 255, 255)
        self._text = (230, 230, 240)
        self._flame = (255, 120, 0)

        pygame.font.init()
        self._font_huge = pygame.font.Font(None, 56)
        self._font_large = pygame.font.Font(None, 36)
        self._font_medium = pygame.font.Font(None, 26)
        self._font_small = pygame.font.Font(None, 20)

    def resize(self, window_width: int, window_height: int) -> None:
        self._window_width = window_width
        self._window_height = window_height

    def render(
        self,
        screen: pygame.Surface,
        render_data: dict,
        now_ms: int,
        score_highlight_until: int = 0,
        level_highlight_until: int = 0,
        name_text: str = "",
        leaderboard: Optional[List[LeaderboardEntry]] = None,
        highlight_rank: Optional[int] = None,
        submitted: bool = False
    ) -> None:
        """Render the complete scene for the current state."""
        screen.fill(self._bg)
        state = render_data["state"]

        if state == GameState.START.value:
            self._draw_start(screen)
            return

        self._draw_play_area(screen, render_data)
        self._draw_hud(
            screen,
            render_data,
            score_hot=now_ms < score_highlight_until,
            level_hot=now_ms < level_highlight_until
        )

        if state == GameState.PAUSED.value:
            self._draw_overlay(screen, "PAUSED", "Press P to resume")
        elif state == GameState.GAME_OVER.value:
            self._draw_game_over(
                screen,
                render_data["final_score"],
                name_text,
                leaderboard or [],
                highlight_rank,
                submitted
            )

    def _center_text(self, screen, font, text, color, y) -> None:
        surf = font.render(text, True, color)
        screen.blit(surf, ((self._window_width - surf.get_width()) // 2, y))

    def _draw_start(self, screen: pygame.Surface) -> None:
        h = self._window_height
        self._center_text(screen, self._font_huge, "ROCKETMAN", self._accent, h // 3)
        self._center_text(screen, self._font_medium, "Dodge the snacks. Grab Lou's.", self._text, h // 3 + 60)
        self._center_text(screen, self._font_medium, "SPACE or click to start", self._hud_normal, h // 2 + 40)
        self._center_text(screen, self._font_small, "Arrows / mouse to move   P pause   M mute",
                          self._text, h // 2 + 80)

    def _draw_play_area(self, screen: pygame.Surface, render_data: dict) -> None:
        band_top = int(render_data["play_height"] * self._config.player.band_top_fraction)
        pygame.draw.rect(screen, self._band, (0, band_top, self._window_width, self._window_height - band_top))

        for entity in render_data["entities"]:
            rect = pygame.Rect(int(entity["x"]), int(entity["y"]), int(entity["width"]), int(entity["height"]))
            if entity["is_powerup"]:
                pygame.draw.ellipse(screen, entity["color"], rect)
            else:
                pygame.draw.rect(screen, entity["color"], rect, border_radius=6)

        player = render_data.get("player")
        if player is not None:
            self._draw_rocket(screen, player)

    def _draw_rocket(self, screen: pygame.Surface, player: dict) -> None:
        x, y = int(player["x"]), int(player["y"])
        w, h = int(player["width"]), int(player["height"])
        nose = h // 4
        body = pygame.Rect(x + w // 4, y + nose, w // 2, h - nose - h // 6)
        pygame.draw.rect(screen, player["color"], body)
        pygame.draw.polygon(screen, player["color"],
                            [(x + w // 2, y), (body.left, body.top), (body.right, body.top)])
        # Fins
        pygame.draw.polygon(screen, (200, 40, 40),
                            [(body.left, body.bottom - h // 5), (x, body.bottom), (body.left, body.bottom)])
        pygame.draw.polygon(screen, (200, 40, 40),
                            [(body.right, body.bottom - h // 5), (x + w, body.bottom), (body.right, body.bottom)])
        # Window
        pygame.draw.circle(screen, self._accent, (x + w // 2, body.top + body.height // 3), max(2, w // 8))
        # Flame
        pygame.draw.polygon(screen, self._flame,
                            [(body.left + 2, body.bottom), (body.right - 2, body.bottom), (x + w // 2, y + h)])

    def _draw_hud(self, screen: pygame.Surface, render_data: dict, score_hot: bool, level_hot: bool) -> None:
        score_color = self._hud_highlight if score_hot else self._hud_normal
        level_color = self._hud_highlight if level_hot else self._hud_normal

        score = self._font_medium.render(f"SCORE {render_data['score']}", True, score_color)
        screen.blit(score, (12, 10))
        level = self._font_medium.render(f"LEVEL {render_data['level']}", True, level_color)
        screen.blit(level, (self._window_width - level.get_width() - 12, 10))

        if render_data.get("muted"):
            muted = self._font_small.render("MUTED", True, self._text)
            screen.blit(muted, ((self._window_width - muted.get_width()) // 2, 14))

    def _draw_overlay(self, screen: pygame.Surface, title: str, hint: str) -> None:
        overlay = pygame.Surface((self._window_width, self._window_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        screen.blit(overlay, (0, 0))
        h = self._window_height
        self._center_text(screen, self._font_huge, title, self._accent, h // 2 - 40)
        self._center_text(screen, self._font_medium, hint, self._text, h // 2 + 20)

    def _draw_game_over(
        self,
        screen: pygame.Surface,
        final_score: int,
        name_text: str,
        leaderboard: List[LeaderboardEntry],
        highlight_rank: Optional[int],
        submitted: bool
    ) -> None:
        overlay = pygame.Surface((self._window_width, self._window_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 200))
        screen.blit(overlay, (0, 0))

        y = 40
        self._center_text(screen, self._font_huge, "GAME OVER", (255, 60, 60), y)
        y += 60
        self._center_text(screen, self._font_large, f"SCORE {final_score}", self._hud_normal, y)
        y += 50

        if submitted:
            self._center_text(screen, self._font_small, "SUBMITTED - Enter to play again", self._text, y)
        else:
            box = pygame.Rect(self._window_width // 2 - 120, y, 240, 32)
            pygame.draw.rect(screen, self._accent, box, 2)
            label = name_text or "ENTER NAME"
            color = self._text if name_text else (120, 120, 140)
            surf = self._font_medium.render(label, True, color)
            screen.blit(surf, (box.x + 8, box.y + 7))
            y += 36
            self._center_text(screen, self._font_small, "Enter to submit   F5 to restart", self._text, y)
        y += 40

        self._center_text(screen, self._font_medium, "HIGH SCORES", self._accent, y)
        y += 30
        if not leaderboard:
            self._center_text(screen, self._font_small, "NO SCORES YET", self._accent, y)
            return

        for i, entry in enumerate(leaderboard):
            color = self._hud_highlight if i == highlight_rank else self._text
            row = f"#{i + 1:<3} {entry.name[:14]:<14} {entry.score}"
            surf = self._font_small.render(row, True, color)
            screen.blit(surf, (self._window_width // 2 - 150, y))
            y += 22


class HumanPlayer:
    """
    Human-playable session. The session's frame scheduler is driven once per
    display refresh, and pygame's millisecond ticks are the session clock.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        scores_path: str = "leaderboard.json",
        music_path: Optional[str] = None,
        target_fps: int = 60,
        debug: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps
        self._window_width = config.play_area.width
        self._window_height = config.play_area.height

        # Initialize pygame
        pygame.init()
        self._screen = pygame.display.set_mode(
            (self._window_width, self._window_height), pygame.RESIZABLE
        )
        pygame.display.set_caption("Rocketman Dodge")
        self._clock = pygame.time.Clock()
        pygame.key.start_text_input()

        self._renderer = DodgeRenderer(config, self._window_width, self._window_height)

        # Presentation state fed by session events
        self._score_highlight_until = 0
        self._level_highlight_until = 0
        self._leaderboard: List[LeaderboardEntry] = []
        self._highlight_rank: Optional[int] = None
        self._name_text = ""

        self._scheduler = FrameScheduler()
        self._session = Session(
            config=config,
            seed=seed,
            clock=pygame.time.get_ticks,
            scheduler=self._scheduler,
            leaderboard=LeaderboardStore(JsonFileStorage(scores_path), config=config),
            audio=AudioController(config, music_path=music_path, debug=debug),
            listener=self._on_event,
            debug=debug
        )

        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns the last final score."""
        print("=== Rocketman Dodge ===")
        print("Space or click to start, arrows or mouse to move, P to pause")
        print("ESC to quit")
        print()

        while self._running:
            self._handle_events()
            self._scheduler.run_frame()
            self._render()
            self._clock.tick(self._target_fps)

        pygame.quit()
        return self._session.final_score

    def _on_event(self, event: SessionEvent) -> None:
        now = pygame.time.get_ticks()
        if event.kind == "score_highlight":
            self._score_highlight_until = now + event.payload["duration_ms"]
        elif event.kind == "level_highlight":
            self._level_highlight_until = now + event.payload["duration_ms"]
        elif event.kind == "game_over":
            self._leaderboard = event.payload["leaderboard"]
            self._highlight_rank = None
            self._name_text = ""
            print(f"\nGAME OVER - Score: {event.payload['score']}")
        elif event.kind == "leaderboard_updated":
            self._leaderboard = event.payload["entries"]
            self._highlight_rank = event.payload["highlight"]

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._on_key_down(event)

            elif event.type == pygame.KEYUP:
                name = KEY_NAMES.get(event.key)
                if name is not None:
                    self._session.key_up(name)

            elif event.type == pygame.TEXTINPUT:
                if self._session.state == GameState.GAME_OVER and not self._session.submitted:
                    if len(self._name_text) < 16:
                        self._name_text += event.text

            elif event.type == pygame.MOUSEMOTION:
                self._session.pointer_move(*event.pos)

            elif event.type == pygame.WINDOWLEAVE:
                self._session.pointer_leave()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self._session.state == GameState.START:
                    self._session.start()

            elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
                x = event.x * self._window_width
                y = event.y * self._window_height
                if event.type == pygame.FINGERDOWN:
                    self._session.touch_start(x, y)
                else:
                    self._session.touch_move(x, y)

            elif event.type == pygame.FINGERUP:
                self._session.touch_end(remaining_touches=0)

            elif event.type == pygame.VIDEORESIZE:
                self._window_width, self._window_height = event.w, event.h
                self._renderer.resize(event.w, event.h)
                self._session.resize(event.w, event.h)

    def _on_key_down(self, event) -> None:
        if event.key == pygame.K_ESCAPE:
            self._running = False
            return

        if self._session.state == GameState.GAME_OVER:
            self._on_game_over_key(event)
            return

        if event.key == pygame.K_m:
            self._session.toggle_mute()
            return

        name = KEY_NAMES.get(event.key)
        if name is not None:
            code = "Space" if event.key == pygame.K_SPACE else None
            self._session.key_down(name, code)

    def _on_game_over_key(self, event) -> None:
        if event.key == pygame.K_F5:
            self._session.restart()
        elif event.key == pygame.K_BACKSPACE:
            self._name_text = self._name_text[:-1]
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if self._session.submitted:
                self._session.restart()
            else:
                self._session.submit_score(self._name_text)

    def _render(self) -> None:
        self._renderer.render(
            self._screen,
            self._session.get_render_data(),
            now_ms=pygame.time.get_ticks(),
            score_highlight_until=self._score_highlight_until,
            level_highlight_until=self._level_highlight_until,
            name_text=self._name_text,
            leaderboard=self._leaderboard,
            highlight_rank=self._highlight_rank,
            submitted=self._session.submitted
        )
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Rocketman Dodge interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--scores", type=str, default="leaderboard.json",
                        help="Leaderboard file (default: leaderboard.json)")
    parser.add_argument("--music", type=str, default=None, help="Background music file")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--debug", action="store_true", help="Print debug output")

    args = parser.parse_args()

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            scores_path=args.scores,
            music_path=args.music,
            target_fps=args.fps,
            debug=args.debug
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
