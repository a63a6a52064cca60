"""
State Snapshot
==============

Packs round state into fixed-size numpy arrays for UI adapters and
scripted players.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, TYPE_CHECKING
import numpy as np

from organ_lab.placement_core.config_loader import GameConfig, get_config
from organ_lab.placement_core.evaluator import VisualState

if TYPE_CHECKING:
    from organ_lab.placement_core.cavity import Cavity
    from organ_lab.placement_core.round_controller import RoundPhase

# Integer codes for visual states, stable across runs
STATE_CODES: Dict[VisualState, int] = {
    VisualState.NEUTRAL: 0,
    VisualState.CORRECT: 1,
    VisualState.WRONG_CATEGORY: 2,
    VisualState.WRONG_VARIANT: 3,
    VisualState.EMPTY: 4,
}

# Held item id used for an empty cavity
EMPTY_ITEM_ID = 0


@dataclass
class RoundSnapshot:
    """
    Round state at one instant.

    Arrays are indexed by cavity in configuration order.
    """
    phase: int
    reset_remaining: float
    last_succeeded: int          # 1 succeeded, 0 failed, -1 not committed yet

    cavity_state: np.ndarray     # (N,) int8, see STATE_CODES
    cavity_held: np.ndarray      # (N,) int16, 0 when empty
    cavity_correct: np.ndarray   # (N,) int16
    cavity_selected: np.ndarray  # (N,) bool
    cavity_locked: np.ndarray    # (N,) bool

    @property
    def num_cavities(self) -> int:
        return int(self.cavity_state.shape[0])

    @property
    def all_correct(self) -> bool:
        return bool(np.all(self.cavity_state == STATE_CODES[VisualState.CORRECT]))

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to a flat observation dictionary."""
        return {
            "phase": np.array(self.phase, dtype=np.int32),
            "reset_remaining": np.array(self.reset_remaining, dtype=np.float32),
            "last_succeeded": np.array(self.last_succeeded, dtype=np.int32),
            "cavity_state": self.cavity_state,
            "cavity_held": self.cavity_held,
            "cavity_correct": self.cavity_correct,
            "cavity_selected": self.cavity_selected,
            "cavity_locked": self.cavity_locked,
        }


class SnapshotBuilder:
    """Builds round snapshots with arrays sized from the config."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._num_cavities = len(config.cavities)

    def build(
        self,
        cavities: Sequence["Cavity"],
        phase: "RoundPhase",
        reset_remaining: float = 0.0,
        last_succeeded: Optional[bool] = None
    ) -> RoundSnapshot:
        """
        Build a snapshot.

        Args:
            cavities: Cavities in configuration order.
            phase: Current round phase.
            reset_remaining: Seconds until a pending reset fires, 0 if none.
            last_succeeded: Outcome of the most recent commit, None if none.
        """
        n = self._num_cavities
        if len(cavities) != n:
            raise ValueError(f"Expected {n} cavities, got {len(cavities)}")

        state = np.zeros(n, dtype=np.int8)
        held = np.zeros(n, dtype=np.int16)
        correct = np.zeros(n, dtype=np.int16)
        selected = np.zeros(n, dtype=bool)
        locked = np.zeros(n, dtype=bool)

        for i, cavity in enumerate(cavities):
            state[i] = STATE_CODES[cavity.visual_state]
            held[i] = EMPTY_ITEM_ID if cavity.held_item is None else cavity.held_item.id
            correct[i] = cavity.correct_item.id
            selected[i] = cavity.selected
            locked[i] = cavity.locked

        if last_succeeded is None:
            last = -1
        else:
            last = 1 if last_succeeded else 0

        return RoundSnapshot(
            phase=phase.code,
            reset_remaining=float(reset_remaining),
            last_succeeded=last,
            cavity_state=state,
            cavity_held=held,
            cavity_correct=correct,
            cavity_selected=selected,
            cavity_locked=locked
        )
