"""
Round Controller
================

Main round orchestrator: routes placements, evaluates on commit, decides
success or failure and runs the reset-after-delay lifecycle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from organ_lab.placement_core.cavity import Cavity
from organ_lab.placement_core.config_loader import GameConfig, get_config
from organ_lab.placement_core.evaluator import CavityOutcome, VisualState
from organ_lab.placement_core.item_catalog import Category, Item, ItemCatalog, get_catalog
from organ_lab.placement_core.reset_timer import ResetTimer
from organ_lab.placement_core.selection import SelectionCursor
from organ_lab.placement_core.signals import RoundSignals
from organ_lab.placement_core.state_snapshot import RoundSnapshot, SnapshotBuilder

logger = logging.getLogger(__name__)


class RoundPhase(Enum):
    """Round lifecycle. Placements are accepted only in ACCEPTING."""
    ACCEPTING = "accepting"
    EVALUATED = "evaluated"
    RESETTING_AFTER_DELAY = "resetting_after_delay"

    @property
    def code(self) -> int:
        return _PHASE_CODES[self]


_PHASE_CODES = {
    RoundPhase.ACCEPTING: 0,
    RoundPhase.EVALUATED: 1,
    RoundPhase.RESETTING_AFTER_DELAY: 2,
}


@dataclass(frozen=True)
class CommitResult:
    """Result of a commit: the aggregate verdict and every cavity's outcome."""
    succeeded: bool
    outcomes: Tuple[CavityOutcome, ...]

    @property
    def failed_cavities(self) -> Tuple[str, ...]:
        return tuple(o.cavity_id for o in self.outcomes if not o.satisfied)

    def outcome_for(self, cavity_id: str) -> CavityOutcome:
        for outcome in self.outcomes:
            if outcome.cavity_id == cavity_id:
                return outcome
        raise KeyError(cavity_id)


class RoundController:
    """
    Owns every cavity, the selection cursor, the round phase and the
    pending reset timer. Single writer; all calls run synchronously.

    Mistimed calls (wrong phase, unknown cavity, nothing selected) are
    ignored rather than raised, so stray player input never corrupts a
    round. Only catalog lookups of bad item ids raise (InvalidItemId).

    The only delayed action is the reset after a commit. It is driven by
    tick(dt) from the host loop and cancelled by reset() or close().
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Optional[ItemCatalog] = None,
        signals: Optional[RoundSignals] = None
    ):
        """
        Initialize round.

        Args:
            config: Game configuration. Uses default if None.
            catalog: Item catalog. Built from config if None.
            signals: Notification hub. A fresh one is created if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = catalog if catalog is not None else get_catalog(config)
        self._signals = signals if signals is not None else RoundSignals()
        self._snapshot_builder = SnapshotBuilder(config)

        # Cavities in configuration order
        self._cavities: Dict[str, Cavity] = {}
        self._by_category: Dict[Category, Cavity] = {}
        for cavity_config in config.cavities:
            cavity = Cavity(
                cavity_id=cavity_config.id,
                correct_item=self._catalog[cavity_config.correct_item],
                name=cavity_config.name,
                signals=self._signals
            )
            self._cavities[cavity.id] = cavity
            self._by_category[cavity.correct_item.category] = cavity

        self._manual = config.round.manual_placement
        self._cursor = SelectionCursor(
            self._cavities,
            default_id=config.round.default_cavity if self._manual else None
        )
        self._cursor.restore_default()

        self._phase = RoundPhase.ACCEPTING
        self._timer: Optional[ResetTimer] = None
        self._last_result: Optional[CommitResult] = None
        self._closed = False
        # Set while a commit evaluates, so listeners cannot re-enter it
        self._committing = False

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def catalog(self) -> ItemCatalog:
        return self._catalog

    @property
    def signals(self) -> RoundSignals:
        return self._signals

    @property
    def phase(self) -> RoundPhase:
        return self._phase

    @property
    def cavities(self) -> Tuple[Cavity, ...]:
        """All cavities in configuration order."""
        return tuple(self._cavities.values())

    def cavity(self, cavity_id: str) -> Cavity:
        return self._cavities[cavity_id]

    @property
    def manual_placement(self) -> bool:
        return self._manual

    @property
    def selected_cavity(self) -> Optional[Cavity]:
        return self._cursor.current

    @property
    def is_accepting(self) -> bool:
        return self._phase is RoundPhase.ACCEPTING and not self._committing

    @property
    def reset_pending(self) -> bool:
        return self._timer is not None and self._timer.pending

    @property
    def reset_remaining(self) -> float:
        """Seconds until the pending reset fires, 0 if none."""
        return self._timer.remaining if self.reset_pending else 0.0

    @property
    def last_result(self) -> Optional[CommitResult]:
        """Result of the most recent commit since the last reset."""
        return self._last_result

    @property
    def is_closed(self) -> bool:
        return self._closed

    def cavity_for_category(self, category: Category) -> Optional[Cavity]:
        return self._by_category.get(category)

    def select_cavity(self, cavity_id: str) -> bool:
        """
        Move the selection cursor (manual mode only).

        Does not depend on the round phase.

        Returns:
            True if the cursor now points at the cavity.
        """
        if self._closed or not self._manual:
            return False
        if not self._cursor.select(cavity_id):
            logger.debug("Ignoring selection of unknown cavity %r", cavity_id)
            return False
        logger.debug("Selected cavity: %s", cavity_id.upper())
        return True

    def place_item(self, item: Union[Item, int]) -> Optional[Cavity]:
        """
        Place an item into the selected cavity (manual) or into the cavity
        of the item's category (auto).

        Args:
            item: An Item or a raw item id.

        Returns:
            The cavity that received the item, or None if ignored.

        Raises:
            InvalidItemId: If a raw id is outside the catalog.
        """
        item = self._catalog.resolve(item)

        if self._closed or not self.is_accepting:
            logger.debug("Ignoring placement of %s during %s", item, self._phase.value)
            return None

        if self._manual:
            target = self._cursor.current
            if target is None:
                logger.debug("Ignoring placement of %s: no cavity selected", item)
                return None
        else:
            target = self.cavity_for_category(item.category)
            if target is None:
                logger.debug("Ignoring placement of %s: no cavity for %s",
                             item, item.category.label)
                return None

        if not target.place(item):
            logger.debug("Cavity %s is locked, keeping %s", target.id, target.held_item)
            return None

        if self._manual:
            logger.debug("Placed %s (%s) in %s cavity.", item, item.category.label, target.id)
        else:
            logger.debug("Auto-placed %s in %s cavity.", item, target.id)
        return target

    def clear_cavity(self, cavity_id: str) -> bool:
        """Take the item back out of a cavity while accepting placements."""
        if self._closed or not self.is_accepting:
            return False
        cavity = self._cavities.get(cavity_id)
        if cavity is None:
            return False
        return cavity.clear()

    def commit(self) -> Optional[CommitResult]:
        """
        Evaluate every cavity and end the accepting phase.

        Emits ``committed`` then exactly one of ``succeeded``/``failed``,
        then applies the configured reset policy. Placement, clearing,
        commit and reset requests made by listeners before evaluation
        finishes are ignored.

        Returns:
            CommitResult, or None if the round was not accepting.
        """
        if self._closed or not self.is_accepting:
            logger.debug("Ignoring commit during %s", self._phase.value)
            return None

        self._committing = True
        try:
            self._signals.committed.emit()
            if self._closed:
                logger.debug("Round closed by a commit listener")
                return None
            logger.debug("=== Commit ===")

            outcomes: List[CavityOutcome] = []
            for cavity in self._cavities.values():
                cavity.evaluate()
                outcome = CavityOutcome(
                    cavity_id=cavity.id,
                    held_item=cavity.held_item,
                    correct_item=cavity.correct_item,
                    state=cavity.visual_state
                )
                outcomes.append(outcome)
                logger.debug(outcome.describe())

            succeeded = all(o.satisfied for o in outcomes)
            result = CommitResult(succeeded=succeeded, outcomes=tuple(outcomes))

            if self._config.round.lock_correct:
                for cavity in self._cavities.values():
                    if cavity.visual_state is VisualState.CORRECT:
                        cavity.lock()

            self._phase = RoundPhase.EVALUATED
            self._last_result = result
        finally:
            self._committing = False

        if succeeded:
            logger.debug("All organs correct -> round succeeded")
            self._signals.succeeded.emit()
            reset_wanted = self._config.round.reset_on_success
        else:
            logger.debug("Some organs incorrect -> round failed")
            self._signals.failed.emit()
            reset_wanted = self._config.round.reset_on_failure

        # A listener may have reset or closed the round already
        if reset_wanted and self._phase is RoundPhase.EVALUATED:
            self.schedule_reset(self._config.round.reaction_duration)

        return result

    def schedule_reset(self, delay_seconds: float) -> bool:
        """
        Return to ACCEPTING after a delay.

        Only valid in EVALUATED, so at most one reset is ever pending.

        Args:
            delay_seconds: Seconds to wait. Zero or less resets immediately.

        Returns:
            True if a reset was performed or armed.
        """
        if self._closed or self._phase is not RoundPhase.EVALUATED:
            logger.debug("Ignoring reset request during %s", self._phase.value)
            return False

        if delay_seconds <= 0:
            self._finish_reset()
            return True

        self._phase = RoundPhase.RESETTING_AFTER_DELAY
        self._timer = ResetTimer(delay_seconds, self._finish_reset)
        logger.debug("Round reset in %.2fs", delay_seconds)
        return True

    def tick(self, dt: float) -> bool:
        """
        Advance the pending reset timer (call once per frame).

        Returns:
            True if a reset fired during this tick.
        """
        if self._closed or self._timer is None:
            return False
        return self._timer.tick(dt)

    def reset(self) -> None:
        """
        Start a fresh round from any phase.

        Cancels a pending reset, unlocks and empties every cavity.
        """
        if self._closed or self._committing:
            logger.debug("Ignoring reset while closed or committing")
            return
        self._cancel_timer()
        for cavity in self._cavities.values():
            cavity.unlock()
        self._clear_cavities()
        self._enter_accepting()

    def close(self) -> None:
        """Tear down: cancel any pending reset and drop all listeners."""
        if self._closed:
            return
        self._cancel_timer()
        self._closed = True
        self._signals.disconnect_all()

    def _finish_reset(self) -> None:
        self._timer = None
        # Locked cavities survive a failed round only
        if self._last_result is not None and self._last_result.succeeded:
            for cavity in self._cavities.values():
                cavity.unlock()
        self._clear_cavities()
        self._enter_accepting()

    def _clear_cavities(self) -> None:
        for cavity in self._cavities.values():
            if cavity.locked:
                cavity.revert_to_neutral()
            else:
                cavity.clear()

    def _enter_accepting(self) -> None:
        self._cursor.restore_default()
        self._phase = RoundPhase.ACCEPTING
        self._last_result = None
        logger.debug("=== Round reset ===")
        self._signals.cleared.emit()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def snapshot(self) -> RoundSnapshot:
        """Current round state as numpy arrays."""
        last = None if self._last_result is None else self._last_result.succeeded
        return self._snapshot_builder.build(
            cavities=self.cavities,
            phase=self._phase,
            reset_remaining=self.reset_remaining,
            last_succeeded=last
        )

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with per-cavity state and round info.
        """
        cavities_data = []
        for cavity_config in self._config.cavities:
            cavity = self._cavities[cavity_config.id]
            held = cavity.held_item
            cavities_data.append({
                "id": cavity.id,
                "name": cavity.name,
                "select_key": cavity_config.select_key,
                "correct_item_id": cavity.correct_item.id,
                "held_item_id": None if held is None else held.id,
                "held_item_name": None if held is None else self._catalog.name_of(held.id),
                "held_item_color": None if held is None else self._catalog.color_of(held.id),
                "state": cavity.visual_state.value,
                "selected": cavity.selected,
                "locked": cavity.locked,
            })

        if self._last_result is None:
            result = None
        else:
            result = "succeeded" if self._last_result.succeeded else "failed"

        return {
            "phase": self._phase.value,
            "manual_placement": self._manual,
            "reset_remaining": self.reset_remaining,
            "result": result,
            "cavities": cavities_data,
        }
