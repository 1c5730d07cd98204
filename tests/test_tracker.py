"""
Tests for the single-axis tick loop.
"""

import logging
import math

import pytest
from converge_mobility.tracker import AxisTracker, TickRecord


class TestAxisTrackerSetup:
    """Test construction and max_accel validation."""

    def test_defaults_hold_position(self):
        """Without a target the tracker holds its starting position."""
        tracker = AxisTracker(max_accel=0.1, position=3.0)
        assert tracker.target == 3.0
        assert tracker.speed == 0.0
        assert tracker.has_converged()

    @pytest.mark.parametrize("max_accel", [0.0, -0.1, math.inf, math.nan])
    def test_invalid_max_accel_rejected(self, max_accel):
        with pytest.raises(ValueError):
            AxisTracker(max_accel=max_accel)

    def test_invalid_max_accel_rejected_on_update(self):
        tracker = AxisTracker(max_accel=0.1)
        with pytest.raises(ValueError):
            tracker.max_accel = 0.0
        assert tracker.max_accel == 0.1

    def test_negative_max_ticks_rejected(self):
        with pytest.raises(ValueError):
            AxisTracker(max_accel=0.1, target=1.0).run(max_ticks=-1)


class TestAxisTrackerMotion:
    """Test ticking toward a target."""

    def test_tick_applies_acceleration(self):
        """One tick from rest accelerates at the cap and moves by it."""
        tracker = AxisTracker(max_accel=0.1, position=0.0, target=1.0)
        accel = tracker.tick()

        assert accel == pytest.approx(0.1)
        assert tracker.speed == pytest.approx(0.1)
        assert tracker.position == pytest.approx(0.1)
        assert tracker.ticks == 1

    def test_run_converges(self):
        """run() ticks until at rest on the target and records each tick."""
        tracker = AxisTracker(max_accel=0.001, position=0.0, target=50.0)
        records = tracker.run()

        assert tracker.has_converged()
        assert records
        assert all(isinstance(r, TickRecord) for r in records)
        assert [r.tick for r in records] == list(range(1, len(records) + 1))
        assert records[-1].position == pytest.approx(50.0, abs=1e-9)
        assert all(abs(r.accel) <= 0.001 * (1 + 1e-12) for r in records)

    def test_run_when_already_converged(self):
        tracker = AxisTracker(max_accel=0.1, position=2.0, target=2.0)
        assert tracker.run() == []

    def test_run_stops_at_max_ticks(self, caplog):
        """A tick budget too small to arrive leaves the tracker in flight."""
        tracker = AxisTracker(max_accel=0.001, position=0.0, target=50.0)
        with caplog.at_level(logging.WARNING, logger="converge_mobility.tracker"):
            records = tracker.run(max_ticks=10)

        assert len(records) == 10
        assert not tracker.has_converged()
        assert "did not converge" in caplog.text

    def test_target_change_mid_flight(self):
        """Retargeting continues from the current state and still converges."""
        tracker = AxisTracker(max_accel=0.05, position=0.0, target=20.0)
        tracker.run(max_ticks=15)
        assert tracker.speed > 0.0

        tracker.target = -5.0
        tracker.run()

        assert tracker.has_converged()
        assert tracker.position == pytest.approx(-5.0, abs=1e-9)

    def test_max_accel_change_mid_flight(self):
        """Lowering the limit mid-flight still converges."""
        tracker = AxisTracker(max_accel=0.1, position=0.0, target=30.0)
        tracker.run(max_ticks=10)

        tracker.max_accel = 0.01
        records = tracker.run()

        assert tracker.has_converged()
        assert all(abs(r.accel) <= 0.01 * (1 + 1e-12) for r in records)

    def test_independent_instances(self):
        """Trackers share no state."""
        a = AxisTracker(max_accel=0.1, position=0.0, target=1.0)
        b = AxisTracker(max_accel=0.1, position=0.0, target=-1.0)
        a.tick()
        b.tick()

        assert a.position == pytest.approx(0.1)
        assert b.position == pytest.approx(-0.1)

    def test_tick_logs_state(self, caplog):
        tracker = AxisTracker(max_accel=0.5, position=0.0, target=10.0)
        with caplog.at_level(logging.DEBUG, logger="converge_mobility.tracker"):
            tracker.tick()

        assert "position=0.5, speed=0.5" in caplog.text
