"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml

# Fixed item id range: 3 categories x 3 variants
VARIANTS_PER_CATEGORY = 3
NUM_CATEGORIES = 3
NUM_ITEMS = VARIANTS_PER_CATEGORY * NUM_CATEGORIES

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class ItemConfig:
    """Display settings for a single organ item."""
    id: int
    name: str
    color: Color


@dataclass(frozen=True)
class CavityConfig:
    """A placement slot and the item it expects."""
    id: str
    name: str
    correct_item: int
    select_key: str      # Keyboard key that selects this cavity in manual mode


@dataclass(frozen=True)
class RoundConfig:
    """Round flow parameters."""
    manual_placement: bool
    default_cavity: str
    reaction_duration: float  # Seconds between commit and automatic reset
    reset_on_failure: bool
    reset_on_success: bool
    lock_correct: bool


@dataclass(frozen=True)
class DisplayConfig:
    """Frame colors used by renderers for each visual state."""
    neutral_color: Color
    correct_color: Color
    wrong_category_color: Color
    wrong_variant_color: Color
    empty_color: Color
    show_selection: bool
    selected_tint: Color
    selected_tint_strength: float


@dataclass(frozen=True)
class DebugConfig:
    """Diagnostics."""
    print_debug: bool


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    items: Tuple[ItemConfig, ...]
    cavities: Tuple[CavityConfig, ...]
    round: RoundConfig
    display: DisplayConfig
    debug: DebugConfig

    @property
    def num_items(self) -> int:
        """Total number of items in the catalog."""
        return len(self.items)

    @property
    def cavity_ids(self) -> Tuple[str, ...]:
        """Configured cavity ids in declaration order."""
        return tuple(c.id for c in self.cavities)

    def get_item(self, item_id: int) -> ItemConfig:
        """Get item config by ID."""
        if 1 <= item_id <= len(self.items):
            return self.items[item_id - 1]
        raise ValueError(f"Invalid item ID: {item_id}")

    def get_cavity(self, cavity_id: str) -> CavityConfig:
        """Get cavity config by ID."""
        for cavity in self.cavities:
            if cavity.id == cavity_id:
                return cavity
        raise ValueError(f"Unknown cavity: {cavity_id!r}")


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    color = (int(color_data[0]), int(color_data[1]), int(color_data[2]))
    if any(c < 0 or c > 255 for c in color):
        raise ValueError(f"Color components must be in [0, 255], got {color_data}")
    return color


def _parse_item(item_data: dict) -> ItemConfig:
    """Parse a single item entry from YAML."""
    return ItemConfig(
        id=int(item_data["id"]),
        name=str(item_data["name"]),
        color=_parse_color(item_data.get("color", [200, 200, 200]))
    )


def _parse_cavity(cavity_data: dict) -> CavityConfig:
    """Parse a single cavity entry from YAML."""
    cavity_id = str(cavity_data["id"])
    return CavityConfig(
        id=cavity_id,
        name=str(cavity_data.get("name", cavity_id)),
        correct_item=int(cavity_data["correct_item"]),
        select_key=str(cavity_data.get("select_key", "")).lower()
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    # Item ids are the fixed range 1..NUM_ITEMS, in order
    if len(config.items) != NUM_ITEMS:
        raise ValueError(f"Expected {NUM_ITEMS} items, got {len(config.items)}")
    for i, item in enumerate(config.items, start=1):
        if item.id != i:
            raise ValueError(f"Item ID mismatch: expected {i}, got {item.id}")

    if not config.cavities:
        raise ValueError("At least one cavity must be configured")

    ids = [c.id for c in config.cavities]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate cavity ids: {ids}")

    # Each category maps to at most one cavity so auto placement is unambiguous
    seen_categories = {}
    for cavity in config.cavities:
        if not 1 <= cavity.correct_item <= NUM_ITEMS:
            raise ValueError(
                f"Cavity {cavity.id!r} has correct_item {cavity.correct_item} "
                f"outside [1, {NUM_ITEMS}]"
            )
        category_index = (cavity.correct_item - 1) // VARIANTS_PER_CATEGORY
        if category_index in seen_categories:
            raise ValueError(
                f"Cavities {seen_categories[category_index]!r} and {cavity.id!r} "
                f"expect items of the same category"
            )
        seen_categories[category_index] = cavity.id

    keys = [c.select_key for c in config.cavities if c.select_key]
    if len(set(keys)) != len(keys):
        raise ValueError(f"Duplicate cavity select keys: {keys}")

    if config.round.default_cavity not in ids:
        raise ValueError(
            f"default_cavity {config.round.default_cavity!r} is not a configured cavity"
        )

    if config.round.reaction_duration < 0:
        raise ValueError(
            f"reaction_duration must be non-negative, got {config.round.reaction_duration}"
        )

    strength = config.display.selected_tint_strength
    if not 0.0 <= strength <= 1.0:
        raise ValueError(f"selected_tint_strength must be in [0, 1], got {strength}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    items = tuple(_parse_item(i) for i in raw["items"])
    cavities = tuple(_parse_cavity(c) for c in raw["cavities"])

    round_data = raw.get("round", {})
    round_config = RoundConfig(
        manual_placement=bool(round_data.get("manual_placement", True)),
        default_cavity=str(round_data.get("default_cavity", cavities[0].id if cavities else "")),
        reaction_duration=float(round_data.get("reaction_duration", 1.5)),
        reset_on_failure=bool(round_data.get("reset_on_failure", True)),
        reset_on_success=bool(round_data.get("reset_on_success", False)),
        lock_correct=bool(round_data.get("lock_correct", False))
    )

    display_data = raw.get("display", {})
    display = DisplayConfig(
        neutral_color=_parse_color(display_data.get("neutral_color", [255, 255, 255])),
        correct_color=_parse_color(display_data.get("correct_color", [128, 255, 128])),
        wrong_category_color=_parse_color(display_data.get("wrong_category_color", [255, 179, 77])),
        wrong_variant_color=_parse_color(display_data.get("wrong_variant_color", [255, 128, 128])),
        empty_color=_parse_color(display_data.get("empty_color", [255, 128, 128])),
        show_selection=bool(display_data.get("show_selection", True)),
        selected_tint=_parse_color(display_data.get("selected_tint", [255, 242, 153])),
        selected_tint_strength=float(display_data.get("selected_tint_strength", 0.3))
    )

    debug_data = raw.get("debug", {})
    debug = DebugConfig(
        print_debug=bool(debug_data.get("print_debug", False))
    )

    config = GameConfig(
        items=items,
        cavities=cavities,
        round=round_config,
        display=display,
        debug=debug
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
