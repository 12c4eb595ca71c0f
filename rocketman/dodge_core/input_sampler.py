"""
Input Sampler
=============

Tracks held movement keys and the latest pointer/touch coordinate, and
resolves them into a single movement intent once per frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Set, Tuple

from rocketman.dodge_core.entities import Player


# Both the modern and the legacy key names are accepted.
LEFT_KEYS = frozenset({"ArrowLeft", "Left"})
RIGHT_KEYS = frozenset({"ArrowRight", "Right"})
UP_KEYS = frozenset({"ArrowUp", "Up"})
DOWN_KEYS = frozenset({"ArrowDown", "Down"})
MOVEMENT_KEYS = LEFT_KEYS | RIGHT_KEYS | UP_KEYS | DOWN_KEYS


@dataclass(frozen=True)
class MovementIntent:
    """
    Where the player wants to go this frame.

    Either an absolute target (pointer control) or per-axis deltas
    (keyboard control). Never both.
    """
    target: Optional[Tuple[float, float]] = None
    dx: float = 0.0
    dy: float = 0.0

    @property
    def is_absolute(self) -> bool:
        return self.target is not None

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        """Return the unclamped position after applying this intent."""
        if self.target is not None:
            return self.target
        return x + self.dx, y + self.dy


class InputSampler:
    """
    Holds raw input state between frames.

    Keyboard wins over the pointer: holding any movement key discards the
    stored pointer coordinate, so the pointer only takes over again after it
    moves.
    """

    def __init__(self):
        self._held: Dict[str, bool] = {}
        self._pointer: Optional[Tuple[float, float]] = None

    @property
    def pointer(self) -> Optional[Tuple[float, float]]:
        return self._pointer

    @property
    def held_keys(self) -> Set[str]:
        return {key for key, down in self._held.items() if down}

    def key_down(self, key: str) -> None:
        self._held[key] = True

    def key_up(self, key: str) -> None:
        self._held[key] = False

    def set_pointer(self, x: float, y: float) -> None:
        self._pointer = (float(x), float(y))

    def clear_pointer(self) -> None:
        self._pointer = None

    def reset(self) -> None:
        """Forget all held keys and the pointer."""
        self._held.clear()
        self._pointer = None

    def _any_held(self, keys: frozenset) -> bool:
        return any(self._held.get(key, False) for key in keys)

    def using_keyboard(self) -> bool:
        """True if any movement key is currently held."""
        return self._any_held(MOVEMENT_KEYS)

    def sample(self, player: Player) -> MovementIntent:
        """
        Resolve the current input into a movement intent for one frame.

        Args:
            player: The player (for size and speeds).

        Returns:
            MovementIntent for this frame.
        """
        if self.using_keyboard():
            self._pointer = None

        if self._pointer is not None:
            px, py = self._pointer
            return MovementIntent(
                target=(px - player.width / 2, py - player.height / 2)
            )

        dx = 0.0
        dy = 0.0
        if self._any_held(LEFT_KEYS):
            dx -= player.speed
        if self._any_held(RIGHT_KEYS):
            dx += player.speed
        if self._any_held(UP_KEYS):
            dy -= player.vertical_speed
        if self._any_held(DOWN_KEYS):
            dy += player.vertical_speed
        return MovementIntent(dx=dx, dy=dy)
