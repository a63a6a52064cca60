"""
Tests for the reset timer, signals and selection cursor.
"""

import pytest

from organ_lab.placement_core.cavity import Cavity
from organ_lab.placement_core.item_catalog import Item
from organ_lab.placement_core.reset_timer import ResetTimer
from organ_lab.placement_core.selection import SelectionCursor
from organ_lab.placement_core.signals import Signal


class TestResetTimer:
    """Test the tick-driven one-shot timer."""

    def test_fires_once_after_delay(self):
        fired = []
        timer = ResetTimer(1.0, lambda: fired.append(True))

        assert not timer.tick(0.5)
        assert timer.remaining == pytest.approx(0.5)
        assert timer.tick(0.5)
        assert fired == [True]
        assert timer.fired and not timer.pending

        assert not timer.tick(1.0)
        assert fired == [True]

    def test_many_small_ticks(self):
        fired = []
        timer = ResetTimer(1.5, lambda: fired.append(True))
        for _ in range(90):
            timer.tick(1 / 60)
        assert fired == [True]

    def test_cancel_prevents_firing(self):
        fired = []
        timer = ResetTimer(1.0, lambda: fired.append(True))
        timer.cancel()
        assert timer.cancelled
        assert not timer.tick(2.0)
        assert fired == []

    def test_negative_dt_ignored(self):
        timer = ResetTimer(1.0, lambda: None)
        timer.tick(-5.0)
        assert timer.remaining == pytest.approx(1.0)

    def test_zero_delay_fires_on_first_tick(self):
        fired = []
        timer = ResetTimer(0.0, lambda: fired.append(True))
        assert timer.tick(0.0)
        assert fired == [True]


class TestSignal:
    """Test observer registration."""

    def test_emit_in_connection_order(self):
        calls = []
        signal = Signal("changed")
        signal.connect(lambda x: calls.append(("a", x)))
        signal.connect(lambda x: calls.append(("b", x)))
        signal.emit(1)
        assert calls == [("a", 1), ("b", 1)]

    def test_connect_is_deduplicated(self):
        calls = []
        callback = calls.append
        signal = Signal("changed")
        signal.connect(callback)
        signal.connect(callback)
        signal.emit("x")
        assert calls == ["x"]
        assert len(signal) == 1

    def test_disconnect(self):
        calls = []
        signal = Signal("changed")
        callback = signal.connect(calls.append)
        signal.disconnect(callback)
        signal.emit("x")
        assert calls == []

    def test_callback_errors_propagate(self):
        signal = Signal("changed")

        def boom():
            raise RuntimeError("listener failed")

        signal.connect(boom)
        with pytest.raises(RuntimeError):
            signal.emit()


class TestSelectionCursor:
    """Test the manual-mode cursor."""

    @pytest.fixture
    def cavities(self):
        return {
            "heart": Cavity("heart", Item(1)),
            "lungs": Cavity("lungs", Item(4)),
        }

    def test_select_and_move(self, cavities):
        cursor = SelectionCursor(cavities, default_id="heart")
        cursor.restore_default()
        assert cursor.current is cavities["heart"]
        assert cursor.select("lungs")
        assert cavities["lungs"].selected
        assert not cavities["heart"].selected

    def test_unknown_id_is_ignored(self, cavities):
        cursor = SelectionCursor(cavities, default_id="heart")
        cursor.restore_default()
        assert not cursor.select("brain")
        assert cursor.current is cavities["heart"]

    def test_no_default_means_absent(self, cavities):
        cursor = SelectionCursor(cavities)
        cursor.restore_default()
        assert cursor.current is None
        assert not any(c.selected for c in cavities.values())
