"""
Placement Evaluator
===================

Classifies a cavity's held item against its correct item.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from organ_lab.placement_core.item_catalog import Item


class VisualState(Enum):
    """Per-cavity feedback state. NEUTRAL means not evaluated since last change."""
    NEUTRAL = "neutral"
    CORRECT = "correct"
    WRONG_CATEGORY = "wrong_category"
    WRONG_VARIANT = "wrong_variant"
    EMPTY = "empty"

    @property
    def is_satisfied(self) -> bool:
        return self is VisualState.CORRECT


def evaluate_placement(held: Optional[Item], correct: Item) -> VisualState:
    """
    Classify a placement. First match wins:

    1. nothing held -> EMPTY
    2. different category -> WRONG_CATEGORY (item belongs in another cavity)
    3. same id -> CORRECT
    4. same category, other variant -> WRONG_VARIANT

    Never returns NEUTRAL.
    """
    if held is None:
        return VisualState.EMPTY
    if held.category != correct.category:
        return VisualState.WRONG_CATEGORY
    if held.id == correct.id:
        return VisualState.CORRECT
    return VisualState.WRONG_VARIANT


@dataclass(frozen=True)
class CavityOutcome:
    """Evaluation record for one cavity at commit time."""
    cavity_id: str
    held_item: Optional[Item]
    correct_item: Item
    state: VisualState

    @property
    def satisfied(self) -> bool:
        return self.state.is_satisfied

    def describe(self) -> str:
        """Human-readable line for debug output."""
        if self.state is VisualState.EMPTY:
            return f"{self.cavity_id} cavity empty -> WRONG"
        if self.state is VisualState.WRONG_CATEGORY:
            return (f"{self.cavity_id} cavity has {self.held_item} -> "
                    f"belongs in another cavity")
        if self.state is VisualState.CORRECT:
            return f"{self.cavity_id} cavity has correct organ {self.held_item} -> GOOD"
        return f"{self.cavity_id} cavity has wrong variant {self.held_item} -> WRONG"
