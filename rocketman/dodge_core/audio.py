"""
Audio
=====

Looping background music through pygame.mixer.music. Any failure to load or
start playback leaves the game silent instead of stopping it.
"""

from __future__ import annotations

import os
from typing import Optional

import pygame

from rocketman.dodge_core.config_loader import GameConfig, get_config


class AudioController:
    """Background music with play/pause/mute."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        music_path: Optional[str] = None,
        debug: bool = False
    ):
        """
        Initialize audio controller. Nothing is loaded until play().

        Args:
            config: Game configuration. Uses default if None.
            music_path: Override for the configured music file.
            debug: If True, prints audio failures.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._music_path = music_path if music_path is not None else config.audio.music_path
        self._volume = config.audio.volume
        self._loop = config.audio.loop
        self._debug = debug

        self._loaded = False
        self._available = True
        self._playing = False
        self._paused = False
        self._muted = False

    @property
    def muted(self) -> bool:
        return self._muted

    @property
    def playing(self) -> bool:
        return self._playing and not self._paused

    @property
    def available(self) -> bool:
        """False once loading or playback has failed."""
        return self._available

    def _warn(self, message: str) -> None:
        if self._debug:
            print(f"[WARN] {message}")

    def _ensure_loaded(self) -> bool:
        if self._loaded:
            return True
        if not self._available:
            return False
        if not self._music_path or not os.path.exists(self._music_path):
            self._warn(f"Music file not found: {self._music_path!r}")
            self._available = False
            return False
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.music.load(self._music_path)
            pygame.mixer.music.set_volume(0.0 if self._muted else self._volume)
        except pygame.error as e:
            self._warn(f"Music unavailable: {e}")
            self._available = False
            return False
        self._loaded = True
        return True

    def play(self) -> bool:
        """
        Start or resume the music.

        Returns:
            True if music is now playing.
        """
        if not self._ensure_loaded():
            return False
        try:
            if self._paused:
                pygame.mixer.music.unpause()
            else:
                pygame.mixer.music.play(-1 if self._loop else 0)
        except pygame.error as e:
            self._warn(f"Music playback prevented: {e}")
            return False
        self._playing = True
        self._paused = False
        return True

    def pause(self) -> None:
        if self._loaded and self._playing and not self._paused:
            pygame.mixer.music.pause()
            self._paused = True

    def stop(self) -> None:
        if self._loaded and self._playing:
            pygame.mixer.music.stop()
        self._playing = False
        self._paused = False

    def toggle_mute(self) -> bool:
        """
        Flip the mute state.

        Returns:
            The new muted state.
        """
        self._muted = not self._muted
        if self._loaded:
            pygame.mixer.music.set_volume(0.0 if self._muted else self._volume)
        return self._muted
