"""
Item Catalog
============

Fixed enumeration of organ items. Each item id encodes its category and
variant: ``id = category_index * 3 + variant`` (variant is 1-based).
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from organ_lab.placement_core.config_loader import (
    GameConfig,
    NUM_ITEMS,
    VARIANTS_PER_CATEGORY,
    get_config
)


class InvalidItemId(ValueError):
    """Raised for an item id outside the catalog range."""

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Item ID {item_id!r} out of range [1, {NUM_ITEMS}]")


class Category(Enum):
    """Organ family an item belongs to."""
    HEART = 0
    LUNGS = 1
    BRAIN = 2

    @property
    def label(self) -> str:
        return self.name.lower()


def _check_id(item_id) -> int:
    """Normalise any integer-like id (including numpy ints) to int."""
    # bool is an int subclass but never a valid id
    if isinstance(item_id, bool):
        raise InvalidItemId(item_id)
    try:
        value = operator.index(item_id)
    except TypeError:
        raise InvalidItemId(item_id) from None
    if not 1 <= value <= NUM_ITEMS:
        raise InvalidItemId(item_id)
    return value


def category_of(item_id: int) -> Category:
    """Category for an item id."""
    return Category((_check_id(item_id) - 1) // VARIANTS_PER_CATEGORY)


def variant_of(item_id: int) -> int:
    """Variant rank (1..3) for an item id."""
    return (_check_id(item_id) - 1) % VARIANTS_PER_CATEGORY + 1


def item_id_for(category: Category, variant: int) -> int:
    """Inverse of category_of/variant_of."""
    if not 1 <= variant <= VARIANTS_PER_CATEGORY:
        raise ValueError(f"Variant must be in [1, {VARIANTS_PER_CATEGORY}], got {variant}")
    return category.value * VARIANTS_PER_CATEGORY + variant


@dataclass(frozen=True)
class Item:
    """
    Immutable organ item.

    Category and variant are derived from the id and cannot be set
    independently.
    """
    id: int

    def __post_init__(self):
        object.__setattr__(self, "id", _check_id(self.id))

    @property
    def category(self) -> Category:
        return category_of(self.id)

    @property
    def variant(self) -> int:
        return variant_of(self.id)

    def __repr__(self) -> str:
        return f"Item({self.id}: {self.category.label}{self.variant})"


class ItemCatalog:
    """
    Collection of all organ items.

    Provides indexed access by id (1-based) plus display names and colors
    from the game config.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._items: Tuple[Item, ...] = tuple(Item(i) for i in range(1, NUM_ITEMS + 1))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, item_id: int) -> Item:
        """Get item by ID."""
        return self._items[_check_id(item_id) - 1]

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __contains__(self, item_id) -> bool:
        try:
            _check_id(item_id)
        except InvalidItemId:
            return False
        return True

    def category_of(self, item_id: int) -> Category:
        return category_of(item_id)

    def variant_of(self, item_id: int) -> int:
        return variant_of(item_id)

    def items_in(self, category: Category) -> Tuple[Item, ...]:
        """The variants of one category, in rank order."""
        start = category.value * VARIANTS_PER_CATEGORY
        return self._items[start:start + VARIANTS_PER_CATEGORY]

    def name_of(self, item_id: int) -> str:
        """Display name from config."""
        return self._config.get_item(_check_id(item_id)).name

    def color_of(self, item_id: int) -> Tuple[int, int, int]:
        """Solid display color from config."""
        return self._config.get_item(_check_id(item_id)).color

    def get_by_name(self, name: str) -> Optional[Item]:
        """Get item by display name (case-insensitive)."""
        name_lower = name.lower()
        for item_config in self._config.items:
            if item_config.name.lower() == name_lower:
                return self._items[item_config.id - 1]
        return None

    def resolve(self, item) -> Item:
        """Accept an Item or a raw id and return the catalog Item."""
        if isinstance(item, Item):
            return item
        return self[item]


# Module-level singleton
_cached_catalog: Optional[ItemCatalog] = None


def get_catalog(config: Optional[GameConfig] = None) -> ItemCatalog:
    """
    Get the item catalog singleton.

    Args:
        config: Optional config to use. If None, uses cached or default config.

    Returns:
        ItemCatalog instance.
    """
    global _cached_catalog
    if _cached_catalog is None or config is not None:
        _cached_catalog = ItemCatalog(config)
    return _cached_catalog
