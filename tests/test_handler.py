"""
Tests for the converging mobility handler and its configuration.

The simulator's event loop and nodes are replaced by small in-memory fakes,
so the handler is exercised without building a simulation.
"""

import pytest
from converge_mobility import (
    ConvergingMobilityConfiguration,
    ConvergingMobilityHandler,
)


class FakeLoop:
    """Minimal event loop: runs scheduled events in time order."""

    def __init__(self):
        self.current_time = 0.0
        self.events = []

    def schedule_event(self, timestamp, callback, context=""):
        self.events.append((timestamp, callback))

    def run(self, max_events):
        for _ in range(max_events):
            if not self.events:
                return
            self.events.sort(key=lambda e: e[0])
            timestamp, callback = self.events.pop(0)
            self.current_time = timestamp
            callback()


class FakeEncapsulator:
    def __init__(self):
        self.telemetry = []

    def handle_telemetry(self, telemetry):
        self.telemetry.append(telemetry)


class FakeNode:
    def __init__(self, node_id, position):
        self.id = node_id
        self.position = position
        self.protocol_encapsulator = FakeEncapsulator()


def build(config, *nodes):
    handler = ConvergingMobilityHandler(config)
    loop = FakeLoop()
    handler.inject(loop)
    for node in nodes:
        handler.register_node(node)
    return handler, loop


class TestConfiguration:
    """Test configuration validation."""

    def test_valid(self):
        config = ConvergingMobilityConfiguration(
            update_rate=0.02, max_accel_xy=0.001, max_accel_z=0.0005
        )
        assert config.send_telemetry is True
        assert config.telemetry_decimation == 1

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"update_rate": 0.0},
            {"max_accel_xy": 0.0},
            {"max_accel_z": -1.0},
            {"max_accel_xy": float("nan")},
            {"telemetry_decimation": 0},
        ],
    )
    def test_invalid(self, kwargs):
        params = {"update_rate": 0.02, "max_accel_xy": 0.01, "max_accel_z": 0.01}
        params.update(kwargs)
        with pytest.raises(ValueError):
            ConvergingMobilityConfiguration(**params)


class TestConvergingMobilityHandler:
    """Test per-axis convergence inside the simulator handler."""

    def test_label(self):
        config = ConvergingMobilityConfiguration(0.1, 0.1, 0.1)
        assert ConvergingMobilityHandler(config).get_label() == "ConvergingMobilityHandler"

    def test_holds_position_without_target(self):
        config = ConvergingMobilityConfiguration(0.1, 0.1, 0.1, send_telemetry=False)
        node = FakeNode(0, (1.0, 2.0, 3.0))
        handler, loop = build(config, node)

        handler.initialize()
        loop.run(10)

        assert node.position == pytest.approx((1.0, 2.0, 3.0))
        assert handler.get_node_target(0) == pytest.approx((1.0, 2.0, 3.0))
        assert handler.has_converged(0)

    def test_converges_on_target(self):
        """Each axis converges independently onto its coordinate."""
        config = ConvergingMobilityConfiguration(0.01, 0.05, 0.02, send_telemetry=False)
        node = FakeNode(7, (0.0, 0.0, 0.0))
        handler, loop = build(config, node)

        handler.set_target(7, (10.0, -4.0, 2.5))
        handler.initialize()
        loop.run(5000)

        assert handler.has_converged(7)
        assert node.position == pytest.approx((10.0, -4.0, 2.5), abs=1e-9)
        assert handler.get_node_position(7) == node.position
        assert handler.get_node_velocity(7) == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)

    def test_axis_limits_apply_separately(self):
        """The first update accelerates x/y by max_accel_xy and z by max_accel_z."""
        config = ConvergingMobilityConfiguration(0.01, 0.5, 0.25, send_telemetry=False)
        node = FakeNode(1, (0.0, 0.0, 0.0))
        handler, loop = build(config, node)

        handler.set_target(1, (100.0, -100.0, 100.0))
        handler.initialize()
        loop.run(1)

        assert handler.get_node_velocity(1) == pytest.approx((0.5, -0.5, 0.25))
        assert node.position == pytest.approx((0.5, -0.5, 0.25))

    def test_target_set_before_registration(self):
        config = ConvergingMobilityConfiguration(0.01, 0.1, 0.1, send_telemetry=False)
        handler = ConvergingMobilityHandler(config)
        loop = FakeLoop()
        handler.inject(loop)

        handler.set_target(3, (1.0, 1.0, 1.0))
        assert handler.get_node_target(3) == (1.0, 1.0, 1.0)
        assert handler.get_node_velocity(3) is None
        assert handler.get_node_position(3) is None
        assert not handler.has_converged(3)

        node = FakeNode(3, (0.0, 0.0, 0.0))
        handler.register_node(node)
        handler.initialize()
        loop.run(500)

        assert node.position == pytest.approx((1.0, 1.0, 1.0), abs=1e-9)

    def test_retarget_mid_flight(self):
        config = ConvergingMobilityConfiguration(0.01, 0.02, 0.02, send_telemetry=False)
        node = FakeNode(2, (0.0, 0.0, 0.0))
        handler, loop = build(config, node)

        handler.set_target(2, (20.0, 0.0, 0.0))
        handler.initialize()
        loop.run(20)
        assert node.position[0] > 0.0

        handler.set_target(2, (-5.0, 3.0, 0.0))
        loop.run(5000)

        assert node.position == pytest.approx((-5.0, 3.0, 0.0), abs=1e-9)

    def test_external_position_change_is_honoured(self):
        """A position written by someone else is picked up on the next tick."""
        config = ConvergingMobilityConfiguration(0.01, 0.1, 0.1, send_telemetry=False)
        node = FakeNode(4, (0.0, 0.0, 0.0))
        handler, loop = build(config, node)

        handler.initialize()
        node.position = (0.05, 0.0, 0.0)
        loop.run(1)

        # Within one tick's reach: lands back on the held position.
        assert node.position == pytest.approx((0.0, 0.0, 0.0))

    def test_update_reschedules(self):
        config = ConvergingMobilityConfiguration(0.25, 0.1, 0.1, send_telemetry=False)
        handler, loop = build(config, FakeNode(0, (0.0, 0.0, 0.0)))

        handler.initialize()
        loop.run(4)

        assert loop.current_time == pytest.approx(1.0)
        assert len(loop.events) == 1

    def test_no_nodes_schedules_nothing(self):
        config = ConvergingMobilityConfiguration(0.25, 0.1, 0.1)
        handler, loop = build(config)

        handler.initialize()
        assert loop.events == []

    def test_telemetry_decimation(self):
        """Telemetry is delivered every telemetry_decimation updates."""
        config = ConvergingMobilityConfiguration(
            0.1, 0.1, 0.1, send_telemetry=True, telemetry_decimation=3
        )
        node = FakeNode(0, (0.0, 0.0, 0.0))
        handler, loop = build(config, node)

        handler.set_target(0, (50.0, 0.0, 0.0))
        handler.initialize()
        # 9 mobility updates plus the 3 telemetry deliveries they schedule.
        loop.run(12)

        received = node.protocol_encapsulator.telemetry
        assert len(received) == 3
        assert received[-1].current_position == pytest.approx(node.position)

    def test_telemetry_disabled(self):
        config = ConvergingMobilityConfiguration(0.1, 0.1, 0.1, send_telemetry=False)
        node = FakeNode(0, (0.0, 0.0, 0.0))
        handler, loop = build(config, node)

        handler.set_target(0, (50.0, 0.0, 0.0))
        handler.initialize()
        loop.run(10)

        assert node.protocol_encapsulator.telemetry == []
