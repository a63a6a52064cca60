"""
Placement Core - the rules of the organ placement puzzle.

This module provides the item catalog, the placement evaluator, cavities
and the round controller that ties them together.

Main exports:
- RoundController: Routes placements, evaluates on commit, runs resets
- Cavity: One placement target with a fixed correct item
- ItemCatalog / Item / Category: The nine organ items
- evaluate_placement / VisualState: Placement classification
- GameConfig: Configuration loaded from game_config.yaml
"""

from organ_lab.placement_core.config_loader import GameConfig, load_config
from organ_lab.placement_core.item_catalog import (
    Category,
    InvalidItemId,
    Item,
    ItemCatalog,
    category_of,
    variant_of,
)
from organ_lab.placement_core.evaluator import CavityOutcome, VisualState, evaluate_placement
from organ_lab.placement_core.cavity import Cavity
from organ_lab.placement_core.selection import SelectionCursor
from organ_lab.placement_core.signals import RoundSignals, Signal
from organ_lab.placement_core.reset_timer import ResetTimer
from organ_lab.placement_core.round_controller import CommitResult, RoundController, RoundPhase
from organ_lab.placement_core.state_snapshot import RoundSnapshot

__all__ = [
    "GameConfig",
    "load_config",
    "Category",
    "InvalidItemId",
    "Item",
    "ItemCatalog",
    "category_of",
    "variant_of",
    "CavityOutcome",
    "VisualState",
    "evaluate_placement",
    "Cavity",
    "SelectionCursor",
    "RoundSignals",
    "Signal",
    "ResetTimer",
    "CommitResult",
    "RoundController",
    "RoundPhase",
    "RoundSnapshot",
]
