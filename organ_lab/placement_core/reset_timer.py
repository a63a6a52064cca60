"""
Reset Timer
===========

Cancellable one-shot timer advanced by the host's frame loop.
"""

from __future__ import annotations

from typing import Callable, Optional

_EPSILON = 1e-9


class ResetTimer:
    """
    One-shot countdown driven by ``tick(dt)``.

    Fires its callback exactly once when the remaining time reaches zero,
    unless cancelled first. A cancelled or fired timer stays inert.
    """

    def __init__(self, delay: float, callback: Callable[[], None]):
        self._remaining = max(0.0, float(delay))
        self._callback: Optional[Callable[[], None]] = callback
        self._cancelled = False
        self._fired = False

    @property
    def remaining(self) -> float:
        """Seconds left before firing."""
        return self._remaining

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    def cancel(self) -> None:
        if self.pending:
            self._cancelled = True
            self._callback = None

    def tick(self, dt: float) -> bool:
        """
        Advance by dt seconds.

        Returns:
            True if the timer fired during this call.
        """
        if not self.pending:
            return False
        self._remaining = max(0.0, self._remaining - max(0.0, dt))
        # Tolerate float drift from many small frame deltas
        if self._remaining > _EPSILON:
            return False
        self._remaining = 0.0
        self._fired = True
        callback, self._callback = self._callback, None
        callback()
        return True
