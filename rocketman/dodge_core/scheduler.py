"""
Frame Scheduler
===============

Explicit handles for frame callbacks, in the style of requestAnimationFrame /
cancelAnimationFrame.
"""

from __future__ import annotations

from typing import Callable, Dict


FrameCallback = Callable[[], None]


class FrameScheduler:
    """
    Base scheduler: callbacks requested now run on the next frame.

    Subclasses decide when a frame happens. run_frame() only runs callbacks
    that were pending when it was called; anything requested from inside a
    callback waits for the following frame.
    """

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle: int = 1
        self._frame: int = 0

    @property
    def frame(self) -> int:
        """Number of frames run so far."""
        return self._frame

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request(self, callback: FrameCallback) -> int:
        """
        Schedule callback for the next frame.

        Returns:
            Handle usable with cancel().
        """
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> bool:
        """
        Cancel a pending callback.

        Returns:
            True if it was still pending.
        """
        return self._pending.pop(handle, None) is not None

    def is_pending(self, handle: int) -> bool:
        return handle in self._pending

    def run_frame(self) -> int:
        """
        Run every callback pending at the start of this frame.

        Returns:
            Number of callbacks run.
        """
        due = list(self._pending.items())
        self._pending.clear()
        self._frame += 1
        for _, callback in due:
            callback()
        return len(due)


class ManualFrameScheduler(FrameScheduler):
    """Scheduler driven explicitly by the caller (tests, headless envs)."""

    def run_frames(self, count: int) -> int:
        """
        Run up to count frames, stopping early once nothing is pending.

        Returns:
            Number of frames actually run.
        """
        ran = 0
        for _ in range(count):
            if not self._pending:
                break
            self.run_frame()
            ran += 1
        return ran
