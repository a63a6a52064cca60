"""
Tests for snapshots, palette and the headless renderer.
"""

import dataclasses

import pytest
import numpy as np

from organ_lab.placement_core.config_loader import load_config
from organ_lab.placement_core.evaluator import VisualState
from organ_lab.placement_core.palette import frame_color, lerp_color, state_color
from organ_lab.placement_core.render_solid import SolidRenderer
from organ_lab.placement_core.round_controller import RoundController
from organ_lab.placement_core.state_snapshot import STATE_CODES


@pytest.fixture
def config():
    config = load_config()
    return dataclasses.replace(
        config,
        round=dataclasses.replace(config.round, reset_on_failure=False)
    )


@pytest.fixture
def game(config):
    controller = RoundController(config=config)
    yield controller
    controller.close()


@pytest.fixture
def renderer(config):
    return SolidRenderer(config)


class TestSnapshot:
    """Test numpy snapshots of the round."""

    def test_shapes_and_dtypes(self, game):
        snap = game.snapshot()
        obs = snap.to_obs_dict()
        n = len(game.cavities)

        assert snap.num_cavities == n
        assert obs["cavity_state"].shape == (n,)
        assert obs["cavity_state"].dtype == np.int8
        assert obs["cavity_held"].dtype == np.int16
        assert obs["cavity_selected"].dtype == bool
        assert obs["phase"].dtype == np.int32

    def test_initial_values(self, game):
        snap = game.snapshot()
        assert np.all(snap.cavity_state == STATE_CODES[VisualState.NEUTRAL])
        assert np.all(snap.cavity_held == 0)
        assert list(snap.cavity_correct) == [1, 4, 7]
        assert list(snap.cavity_selected) == [True, False, False]
        assert snap.last_succeeded == -1
        assert snap.phase == 0

    def test_after_successful_commit(self, game):
        for cavity_id, item_id in (("heart", 1), ("lungs", 4), ("brain", 7)):
            game.select_cavity(cavity_id)
            game.place_item(item_id)
        game.commit()

        snap = game.snapshot()
        assert snap.all_correct
        assert snap.last_succeeded == 1
        assert snap.phase == 1
        assert list(snap.cavity_held) == [1, 4, 7]

    def test_failed_commit_codes(self, game):
        game.place_item(7)
        game.commit()
        snap = game.snapshot()
        assert snap.cavity_state[0] == STATE_CODES[VisualState.WRONG_CATEGORY]
        assert snap.cavity_state[1] == STATE_CODES[VisualState.EMPTY]
        assert snap.last_succeeded == 0
        assert not snap.all_correct


class TestPalette:
    """Test frame color selection."""

    def test_state_colors(self, config):
        display = config.display
        assert state_color(VisualState.CORRECT, display) == display.correct_color
        assert state_color(VisualState.WRONG_CATEGORY, display) == display.wrong_category_color
        assert state_color(VisualState.WRONG_VARIANT, display) == display.wrong_variant_color
        assert state_color(VisualState.EMPTY, display) == display.empty_color
        assert state_color(VisualState.NEUTRAL, display) == display.neutral_color

    def test_lerp(self):
        assert lerp_color((0, 0, 0), (100, 200, 50), 0.5) == (50, 100, 25)
        assert lerp_color((0, 0, 0), (100, 200, 50), 2.0) == (100, 200, 50)

    def test_selection_tint(self, config):
        display = config.display
        plain = frame_color(VisualState.NEUTRAL, False, display)
        tinted = frame_color("neutral", True, display)
        expected = lerp_color(display.neutral_color, display.selected_tint, display.selected_tint_strength)
        assert plain == display.neutral_color
        assert tinted == expected

    def test_selection_hidden_when_disabled(self, config):
        display = dataclasses.replace(config.display, show_selection=False)
        assert frame_color(VisualState.CORRECT, True, display) == display.correct_color


class TestSolidRenderer:
    """Test headless rendering."""

    def test_output_shape(self, game, renderer):
        img = renderer.render(game.get_render_data(), 300, 120)
        assert img.shape == (120, 300, 3)
        assert img.dtype == np.uint8

    def test_frame_uses_state_color(self, game, renderer, config):
        game.select_cavity("lungs")
        game.place_item(4)
        game.commit()

        data = game.get_render_data()
        img = renderer.render(data, 300, 120)
        rects = renderer.cavity_rects(len(data["cavities"]), 300, 120)

        # Top-left pixel of each frame is border color
        heart_x, heart_y, _, _ = rects[0]
        lungs_x, lungs_y, _, _ = rects[1]
        assert tuple(img[heart_y, heart_x]) == config.display.empty_color
        expected_lungs = frame_color("correct", True, config.display)
        assert tuple(img[lungs_y, lungs_x]) == expected_lungs

    def test_held_item_color_drawn(self, game, renderer, config):
        game.place_item(2)
        data = game.get_render_data()
        img = renderer.render(data, 300, 120)
        x, y, w, h = renderer.cavity_rects(3, 300, 120)[0]
        assert tuple(img[y + h // 2, x + w // 2]) == config.get_item(2).color

    def test_status_bar_reflects_result(self, game, renderer):
        before = renderer.render(game.get_render_data(), 200, 100)[-1, 0].copy()
        game.commit()
        after = renderer.render(game.get_render_data(), 200, 100)[-1, 0]
        assert not np.array_equal(before, after)
