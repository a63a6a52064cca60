"""
Selection Cursor
================

Tracks which cavity receives placements in manual mode.
"""

from __future__ import annotations

from typing import Dict, Optional

from organ_lab.placement_core.cavity import Cavity


class SelectionCursor:
    """
    Optional reference to one of a fixed set of cavities.

    Keeps the cavities' ``selected`` flags in sync with the cursor. The
    cursor does not own the cavities.
    """

    def __init__(self, cavities: Dict[str, Cavity], default_id: Optional[str] = None):
        self._cavities = cavities
        self._default_id = default_id
        self._current: Optional[Cavity] = None

    @property
    def current(self) -> Optional[Cavity]:
        return self._current

    @property
    def default_id(self) -> Optional[str]:
        return self._default_id

    def select(self, cavity_id: str) -> bool:
        """
        Move the cursor.

        Returns:
            False if the id is not among the configured cavities.
        """
        cavity = self._cavities.get(cavity_id)
        if cavity is None:
            return False
        if cavity is self._current:
            return True
        if self._current is not None:
            self._current.set_selected(False)
        self._current = cavity
        cavity.set_selected(True)
        return True

    def deselect(self) -> None:
        if self._current is not None:
            self._current.set_selected(False)
            self._current = None

    def restore_default(self) -> None:
        if self._default_id is None:
            self.deselect()
        else:
            self.select(self._default_id)
