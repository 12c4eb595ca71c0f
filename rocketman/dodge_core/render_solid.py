"""
Solid Renderer
==============

Fast numpy-based renderer that draws the player and entities as solid-color
rectangles.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
import numpy as np

from rocketman.dodge_core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders the play area as solid-color rectangles.

    Uses numpy for fast CPU-based rendering without pygame.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

        # Background color (night sky)
        self._bg_color = np.array([10, 10, 30], dtype=np.uint8)

        # Player band guide
        self._band_color = np.array([30, 30, 60], dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the session state to an RGB array.

        Args:
            render_data: Data from Session.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        play_width = render_data["play_width"]
        play_height = render_data["play_height"]
        if play_width <= 0 or play_height <= 0:
            return img

        scale = min(width / play_width, height / play_height)
        offset_x = (width - play_width * scale) / 2
        offset_y = (height - play_height * scale) / 2
        transform = (scale, offset_x, offset_y)

        band_top = play_height * self._config.player.band_top_fraction
        self._fill_rect(img, 0, band_top, play_width, play_height - band_top,
                        self._band_color, transform)

        for entity in render_data["entities"]:
            self._fill_rect(
                img,
                entity["x"], entity["y"], entity["width"], entity["height"],
                np.array(entity["color"], dtype=np.uint8),
                transform
            )

        player = render_data.get("player")
        if player is not None:
            self._fill_rect(
                img,
                player["x"], player["y"], player["width"], player["height"],
                np.array(player["color"], dtype=np.uint8),
                transform
            )

        return img

    @staticmethod
    def _fill_rect(
        img: np.ndarray,
        x: float,
        y: float,
        w: float,
        h: float,
        color: np.ndarray,
        transform: Tuple[float, float, float]
    ) -> None:
        """Fill a world-space rectangle, clipped to the image."""
        scale, offset_x, offset_y = transform
        img_h, img_w = img.shape[:2]

        x0 = int(round(offset_x + x * scale))
        y0 = int(round(offset_y + y * scale))
        x1 = int(round(offset_x + (x + w) * scale))
        y1 = int(round(offset_y + (y + h) * scale))

        x0, x1 = max(0, x0), min(img_w, x1)
        y0, y1 = max(0, y0), min(img_h, y1)
        if x0 >= x1 or y0 >= y1:
            return
        img[y0:y1, x0:x1] = color
