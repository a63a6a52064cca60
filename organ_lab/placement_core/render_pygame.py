"""
Pygame Renderer
===============

Window renderer for human play. Draws cavity frames, held organs, the
item legend and the round status line.
"""

from __future__ import annotations

from typing import Dict, Any, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from organ_lab.placement_core.config_loader import GameConfig, get_config
from organ_lab.placement_core.palette import frame_color


class PygameRenderer:
    """
    Renderer using pygame.

    Supports:
    - Cavity frames tinted by visual state and selection
    - Held organ shown as a labeled tile
    - Legend of key bindings for all nine items
    - RGB array output for headless capture
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        if not pygame.get_init():
            pygame.init()

        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        pygame.font.init()
        self._font = pygame.font.Font(None, 28)
        self._font_large = pygame.font.Font(None, 44)
        self._font_small = pygame.font.Font(None, 20)

        self._bg_color = (245, 238, 228)
        self._slot_color = (252, 248, 242)
        self._text_color = (70, 55, 45)
        self._muted_text = (140, 120, 105)
        self._success_color = (60, 160, 90)
        self._failure_color = (200, 70, 70)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render to RGB array.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self._render_to_surface(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        render_data: Dict[str, Any],
        window_width: int = 720,
        window_height: int = 480
    ) -> None:
        """Render to the pygame window, creating it on first use."""
        if self._screen is None or self._screen_size != (window_width, window_height):
            self._screen = pygame.display.set_mode((window_width, window_height))
            self._screen_size = (window_width, window_height)
            pygame.display.set_caption("Organ Lab")

        self._render_to_surface(self._screen, render_data)

    def _render_to_surface(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any]
    ) -> None:
        width, height = surface.get_size()
        surface.fill(self._bg_color)

        legend_height = 70
        status_height = 50
        area_top = status_height
        area_height = height - legend_height - status_height

        cavities = render_data["cavities"]
        count = max(1, len(cavities))
        margin = 20
        slot_w = (width - margin * (count + 1)) // count
        slot_h = area_height - 2 * margin

        for i, cavity in enumerate(cavities):
            rect = pygame.Rect(margin + i * (slot_w + margin), area_top + margin, slot_w, slot_h)
            self._draw_cavity(surface, cavity, rect, render_data["manual_placement"])

        self._draw_status(surface, render_data, width)
        self._draw_legend(surface, width, height - legend_height)

    def _draw_cavity(
        self,
        surface: pygame.Surface,
        cavity: Dict[str, Any],
        rect: pygame.Rect,
        manual: bool
    ) -> None:
        color = frame_color(cavity["state"], cavity["selected"], self._config.display)
        pygame.draw.rect(surface, color, rect, border_radius=12)
        inner = rect.inflate(-16, -16)
        pygame.draw.rect(surface, self._slot_color, inner, border_radius=8)

        title = cavity["name"]
        if manual and cavity["select_key"]:
            title = f"[{cavity['select_key'].upper()}] {title}"
        label = self._font.render(title, True, self._text_color)
        surface.blit(label, (inner.x + (inner.w - label.get_width()) // 2, inner.y + 8))

        if cavity["held_item_id"] is not None:
            tile = pygame.Rect(0, 0, int(inner.w * 0.6), int(inner.h * 0.45))
            tile.center = inner.center
            pygame.draw.rect(surface, cavity["held_item_color"], tile, border_radius=10)
            name = self._font.render(cavity["held_item_name"], True, self._text_color)
            surface.blit(name, (tile.centerx - name.get_width() // 2, tile.centery - name.get_height() // 2))
        else:
            empty = self._font_small.render("empty", True, self._muted_text)
            surface.blit(empty, (inner.centerx - empty.get_width() // 2, inner.centery))

        if cavity["locked"]:
            lock = self._font_small.render("locked", True, self._muted_text)
            surface.blit(lock, (inner.centerx - lock.get_width() // 2, inner.bottom - 24))

    def _draw_status(self, surface: pygame.Surface, render_data: Dict[str, Any], width: int) -> None:
        result = render_data.get("result")
        if result == "succeeded":
            text, color = "All organs correct - the animal lives!", self._success_color
        elif result == "failed":
            text, color = "Some organs incorrect - the animal dies.", self._failure_color
        else:
            text, color = "Place the organs, then press SPACE", self._text_color

        remaining = render_data.get("reset_remaining", 0.0)
        if remaining > 0:
            text = f"{text}  (reset in {remaining:.1f}s)"

        status = self._font.render(text, True, color)
        surface.blit(status, ((width - status.get_width()) // 2, 15))

    def _draw_legend(self, surface: pygame.Surface, width: int, top: int) -> None:
        cell_w = width // len(self._config.items)
        for i, item in enumerate(self._config.items):
            x = i * cell_w
            swatch = pygame.Rect(x + 6, top + 8, cell_w - 12, 24)
            pygame.draw.rect(surface, item.color, swatch, border_radius=4)
            key = self._font_small.render(str(item.id), True, self._text_color)
            surface.blit(key, (swatch.centerx - key.get_width() // 2, swatch.y + 5))
            name = self._font_small.render(item.name, True, self._muted_text)
            surface.blit(name, (swatch.centerx - name.get_width() // 2, swatch.bottom + 6))

    def close(self) -> None:
        """Clean up pygame resources."""
        if self._screen is not None:
            self._screen = None
