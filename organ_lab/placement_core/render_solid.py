"""
Solid Renderer
==============

Fast numpy-based renderer that draws cavities as colored frames with the
held organ as a solid block inside. No pygame required.
"""

from __future__ import annotations

from typing import Dict, Any, Optional, Tuple
import numpy as np

from organ_lab.placement_core.config_loader import GameConfig, get_config
from organ_lab.placement_core.palette import frame_color


class SolidRenderer:
    """
    Renders the round as a row of cavity frames.

    Each cavity is a frame tinted by its visual state (and selection), with
    the held item's color filling the interior. A status bar at the bottom
    shows the round result.
    """

    def __init__(self, config: Optional[GameConfig] = None, show_status: bool = True):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
            show_status: Whether to draw the result bar.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._show_status = show_status

        self._bg_color = np.array([30, 30, 40], dtype=np.uint8)
        self._slot_color = np.array([55, 55, 65], dtype=np.uint8)
        self._success_color = np.array([60, 170, 90], dtype=np.uint8)
        self._failure_color = np.array([190, 60, 60], dtype=np.uint8)
        self._idle_color = np.array([70, 70, 85], dtype=np.uint8)

    def cavity_rects(self, num_cavities: int, width: int, height: int) -> Tuple[Tuple[int, int, int, int], ...]:
        """
        Layout of cavity frames as (x, y, w, h) in pixels.

        Cavities are laid out left to right with equal margins.
        """
        status_height = self._status_height(height)
        area_height = height - status_height
        margin = max(2, width // (num_cavities * 10))
        slot_w = (width - margin * (num_cavities + 1)) // num_cavities
        slot_h = max(1, area_height - 2 * margin)
        rects = []
        for i in range(num_cavities):
            x = margin + i * (slot_w + margin)
            rects.append((x, margin, slot_w, slot_h))
        return tuple(rects)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the round state to an RGB array.

        Args:
            render_data: Data from RoundController.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        cavities = render_data["cavities"]
        if cavities:
            rects = self.cavity_rects(len(cavities), width, height)
            for cavity, rect in zip(cavities, rects):
                self._draw_cavity(img, cavity, rect)

        if self._show_status:
            self._draw_status(img, render_data.get("result"), width, height)

        return img

    def _draw_cavity(
        self,
        img: np.ndarray,
        cavity: Dict[str, Any],
        rect: Tuple[int, int, int, int]
    ) -> None:
        """Draw one frame plus its held item."""
        x, y, w, h = rect
        border = max(1, min(w, h) // 10)
        color = frame_color(cavity["state"], cavity["selected"], self._config.display)

        img[y:y + h, x:x + w] = np.array(color, dtype=np.uint8)
        img[y + border:y + h - border, x + border:x + w - border] = self._slot_color

        held_color = cavity.get("held_item_color")
        if held_color is not None:
            inset = border * 2
            img[y + inset:y + h - inset, x + inset:x + w - inset] = np.array(held_color, dtype=np.uint8)

    def _draw_status(self, img: np.ndarray, result: Optional[str], width: int, height: int) -> None:
        status_height = self._status_height(height)
        if status_height == 0:
            return
        if result == "succeeded":
            color = self._success_color
        elif result == "failed":
            color = self._failure_color
        else:
            color = self._idle_color
        img[height - status_height:height, :] = color

    def _status_height(self, height: int) -> int:
        return max(1, height // 10) if self._show_status else 0

    def close(self) -> None:
        """Nothing to release."""
        pass
