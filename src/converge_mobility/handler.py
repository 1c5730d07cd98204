"""Target-converging mobility handler for GrADyS-SIM NG.

This handler moves nodes toward commanded target positions in minimum time
under per-axis acceleration limits. Each axis is driven independently by the
single-axis convergence law.

Author: Laércio Lucchesi
Date: December 27, 2025
"""

import logging
from typing import Dict, Tuple

from gradysim.simulator.event import EventLoop
from gradysim.simulator.node import Node
from gradysim.simulator.handler.interface import INodeHandler
from gradysim.protocol.messages.telemetry import Telemetry

from .config import ConvergingMobilityConfiguration
from .tracker import AxisTracker

logger = logging.getLogger(__name__)


class ConvergingMobilityHandler(INodeHandler):
    """Target-converging mobility handler for GrADyS-SIM NG."""

    def __init__(self, config: ConvergingMobilityConfiguration):
        self._config = config
        self._loop: EventLoop = None
        self._nodes: Dict[int, Node] = {}

        self._trackers: Dict[int, Tuple[AxisTracker, AxisTracker, AxisTracker]] = {}
        self._pending_targets: Dict[int, Tuple[float, float, float]] = {}

        self._update_counter: Dict[int, int] = {}

    def get_label(self) -> str:
        return "ConvergingMobilityHandler"

    def register_node(self, node: Node):
        node_id = node.id
        self._nodes[node_id] = node

        x, y, z = node.position
        target = self._pending_targets.pop(node_id, (x, y, z))
        self._trackers[node_id] = (
            AxisTracker(self._config.max_accel_xy, position=x, target=target[0]),
            AxisTracker(self._config.max_accel_xy, position=y, target=target[1]),
            AxisTracker(self._config.max_accel_z, position=z, target=target[2]),
        )
        self._update_counter[node_id] = 0
        logger.debug("Registered node %d at %s with target %s", node_id, node.position, target)

    def inject(self, event_loop: EventLoop):
        self._loop = event_loop

    def initialize(self):
        if self._nodes:
            self._loop.schedule_event(
                self._loop.current_time + self._config.update_rate,
                self._mobility_update,
            )

    def handle_timer(self, timer: str):
        pass

    def handle_packet(self, message: str):
        pass

    def finish(self):
        pass

    def finalize(self):
        pass

    def after_simulation_step(self, iteration: int, time: float):
        pass

    def set_target(self, node_id: int, target: Tuple[float, float, float]) -> None:
        x, y, z = target
        trackers = self._trackers.get(node_id)
        if trackers is None:
            self._pending_targets[node_id] = (x, y, z)
        else:
            for tracker, value in zip(trackers, (x, y, z)):
                tracker.target = float(value)
        logger.debug("Node %d target set to (%s, %s, %s)", node_id, x, y, z)

    def get_node_target(self, node_id: int) -> Tuple[float, float, float] | None:
        trackers = self._trackers.get(node_id)
        if trackers is None:
            return self._pending_targets.get(node_id)
        return tuple(t.target for t in trackers)

    def get_node_velocity(self, node_id: int) -> Tuple[float, float, float] | None:
        """Current velocity in meters per tick."""
        trackers = self._trackers.get(node_id)
        if trackers is None:
            return None
        return tuple(t.speed for t in trackers)

    def get_node_position(self, node_id: int) -> Tuple[float, float, float] | None:
        node = self._nodes.get(node_id)
        return node.position if node is not None else None

    def has_converged(self, node_id: int, tolerance: float = 1e-9) -> bool:
        trackers = self._trackers.get(node_id)
        if trackers is None:
            return False
        return all(t.has_converged(tolerance) for t in trackers)

    def _mobility_update(self):
        for node_id, node in self._nodes.items():
            trackers = self._trackers[node_id]

            # Honour position changes made outside this handler.
            for tracker, value in zip(trackers, node.position):
                tracker.position = value

            for tracker in trackers:
                tracker.tick()

            node.position = tuple(t.position for t in trackers)

            self._update_counter[node_id] += 1
            if self._should_emit_telemetry(node_id):
                self._emit_telemetry(node)

        self._loop.schedule_event(
            self._loop.current_time + self._config.update_rate,
            self._mobility_update,
        )

    def _should_emit_telemetry(self, node_id: int) -> bool:
        if not self._config.send_telemetry:
            return False

        count = self._update_counter[node_id]
        return (count % self._config.telemetry_decimation) == 0

    def _emit_telemetry(self, node: Node):
        telemetry = Telemetry(current_position=node.position)

        def send_telemetry():
            node.protocol_encapsulator.handle_telemetry(telemetry)

        self._loop.schedule_event(
            self._loop.current_time,
            send_telemetry,
            f"Node {node.id} handle_telemetry",
        )
