"""
Cavity
======

A single placement target. Owns its correct item, the item currently held,
and the derived visual state. Changes are reported through RoundSignals.
"""

from __future__ import annotations

from typing import Optional

from organ_lab.placement_core.evaluator import VisualState, evaluate_placement
from organ_lab.placement_core.item_catalog import Item
from organ_lab.placement_core.signals import RoundSignals


class Cavity:
    """
    Placement slot with a fixed correct item.

    A cavity can be locked once it has been confirmed correct. A locked
    cavity ignores place() and clear() until unlock().
    """

    def __init__(
        self,
        cavity_id: str,
        correct_item: Item,
        name: Optional[str] = None,
        signals: Optional[RoundSignals] = None
    ):
        self._id = cavity_id
        self._name = name or cavity_id
        self._correct_item = correct_item
        self._signals = signals

        self._held_item: Optional[Item] = None
        self._visual_state = VisualState.NEUTRAL
        self._selected = False
        self._locked = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def correct_item(self) -> Item:
        return self._correct_item

    @property
    def held_item(self) -> Optional[Item]:
        return self._held_item

    @property
    def visual_state(self) -> VisualState:
        return self._visual_state

    @property
    def selected(self) -> bool:
        return self._selected

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def is_empty(self) -> bool:
        return self._held_item is None

    def place(self, item: Item) -> bool:
        """
        Put an item in the cavity and return to NEUTRAL.

        Any catalog item is accepted; a mismatch is reported at evaluation.

        Returns:
            False if the cavity is locked and nothing changed.
        """
        if self._locked:
            return False
        self._set_held(item)
        self._set_state(VisualState.NEUTRAL)
        return True

    def clear(self) -> bool:
        """Empty the cavity. Returns False if locked."""
        if self._locked:
            return False
        self._set_held(None)
        self._set_state(VisualState.NEUTRAL)
        return True

    def evaluate(self) -> bool:
        """Classify the held item, update the visual state, return satisfied."""
        state = evaluate_placement(self._held_item, self._correct_item)
        self._set_state(state)
        return state.is_satisfied

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    def revert_to_neutral(self) -> None:
        """Drop evaluation feedback while keeping the held item."""
        self._set_state(VisualState.NEUTRAL)

    def set_selected(self, selected: bool) -> None:
        """UI hint only; never touches held item or visual state."""
        selected = bool(selected)
        if selected == self._selected:
            return
        self._selected = selected
        if self._signals is not None:
            self._signals.selection_changed.emit(self._id, selected)

    def _set_held(self, item: Optional[Item]) -> None:
        if item == self._held_item:
            return
        self._held_item = item
        if self._signals is not None:
            self._signals.held_item_changed.emit(self._id, item)

    def _set_state(self, state: VisualState) -> None:
        # Reassigning the same state is silent, which keeps evaluate() idempotent
        if state is self._visual_state:
            return
        self._visual_state = state
        if self._signals is not None:
            self._signals.visual_state_changed.emit(self._id, state)

    def __repr__(self) -> str:
        return (f"Cavity({self._id}: held={self._held_item}, "
                f"correct={self._correct_item}, state={self._visual_state.value})")
