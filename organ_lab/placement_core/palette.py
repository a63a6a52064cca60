"""
Palette
=======

Maps cavity visual states to frame colors for renderers.
"""

from __future__ import annotations

from typing import Tuple, Union

from organ_lab.placement_core.config_loader import DisplayConfig
from organ_lab.placement_core.evaluator import VisualState

Color = Tuple[int, int, int]


def lerp_color(a: Color, b: Color, t: float) -> Color:
    """Linear blend from a to b, t clamped to [0, 1]."""
    t = max(0.0, min(1.0, t))
    return tuple(int(round(a[i] + (b[i] - a[i]) * t)) for i in range(3))


def state_color(state: VisualState, display: DisplayConfig) -> Color:
    """Base frame color for a visual state."""
    if state is VisualState.CORRECT:
        return display.correct_color
    if state is VisualState.WRONG_CATEGORY:
        return display.wrong_category_color
    if state is VisualState.WRONG_VARIANT:
        return display.wrong_variant_color
    if state is VisualState.EMPTY:
        return display.empty_color
    return display.neutral_color


def frame_color(
    state: Union[VisualState, str],
    selected: bool,
    display: DisplayConfig
) -> Color:
    """
    Frame color for a cavity, tinted toward the selection color when
    selected and selection display is enabled.

    Args:
        state: VisualState or its string value (as in render data).
        selected: Whether the cavity is under the selection cursor.
        display: Display settings.
    """
    if isinstance(state, str):
        state = VisualState(state)
    color = state_color(state, display)
    if display.show_selection and selected:
        color = lerp_color(color, display.selected_tint, display.selected_tint_strength)
    return color
