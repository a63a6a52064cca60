"""
Signals
=======

Observer-style notifications from the round core to UI collaborators.
"""

from __future__ import annotations

from typing import Callable, List


class Signal:
    """
    A named list of callbacks.

    Callbacks run synchronously in connection order. Exceptions raised by
    a callback propagate to whoever triggered the emit.
    """

    def __init__(self, name: str):
        self.name = name
        self._callbacks: List[Callable] = []

    def connect(self, callback: Callable) -> Callable:
        """Register a callback. Returns it so this can be used as a decorator."""
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        return callback

    def disconnect(self, callback: Callable) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def disconnect_all(self) -> None:
        self._callbacks.clear()

    def emit(self, *args) -> None:
        # Copy so callbacks may disconnect themselves
        for callback in list(self._callbacks):
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __repr__(self) -> str:
        return f"Signal({self.name}, {len(self._callbacks)} listeners)"


class RoundSignals:
    """
    All outbound notifications of a round.

    Per-cavity signals carry ``(cavity_id, value)``; round-level signals
    carry no arguments.
    """

    def __init__(self):
        self.visual_state_changed = Signal("visual_state_changed")
        self.selection_changed = Signal("selection_changed")
        self.held_item_changed = Signal("held_item_changed")
        self.committed = Signal("committed")
        self.succeeded = Signal("succeeded")
        self.failed = Signal("failed")
        self.cleared = Signal("cleared")

    @property
    def all(self) -> List[Signal]:
        return [
            self.visual_state_changed,
            self.selection_changed,
            self.held_item_changed,
            self.committed,
            self.succeeded,
            self.failed,
            self.cleared,
        ]

    def disconnect_all(self) -> None:
        for signal in self.all:
            signal.disconnect_all()
