"""
Protocol demonstrating target convergence using ConvergingMobilityHandler.

Uses direct method calls instead of standard GrADyS mobility commands.
"""

import math

from gradysim.protocol.interface import IProtocol
from gradysim.protocol.messages.telemetry import Telemetry

import pandas as pd

from config_param import (
    CONTROL_PERIOD,
    TARGET_CHANGE_PERIOD,
    TARGET_CHANGE_TIMER_STR,
    TARGET_SETPOINTS,
    TRAJECTORY_CSV,
)


class ConvergingProtocol(IProtocol):
    """Protocol that commands target positions through ConvergingMobilityHandler."""

    def __init__(self):
        super().__init__()
        self.node_id = None
        self.initial_position = None
        self.target = None
        self.df = None
        self.mobility_handler = None

        self._target_setpoints = list(TARGET_SETPOINTS)
        self._target_index = 0

    def initialize(self):
        """Initialize and command the first target."""
        self.node_id = self.provider.get_id()
        self._target_index = 0
        self.target = self._target_setpoints[self._target_index]

        handlers = getattr(self.provider, "handlers", {}) or {}
        self.mobility_handler = handlers.get("ConvergingMobilityHandler")

        if self.mobility_handler:
            self.mobility_handler.set_target(self.node_id, self.target)

            print(f"Node {self.node_id} initialized")
            print(f"Target commanded: ({self.target[0]:.1f}, {self.target[1]:.1f}, {self.target[2]:.1f})")

            self.initial_position = self.mobility_handler.get_node_position(self.node_id)

            self.df = pd.DataFrame(columns=[
                "t",
                "x", "y", "z",
                "vx", "vy", "vz",
                "tx", "ty", "tz",
            ])
            self._record(self.provider.current_time())

            self.schedule_target_change_timer(TARGET_CHANGE_PERIOD)

    def schedule_target_change_timer(self, timeout: float):
        self.provider.schedule_timer(TARGET_CHANGE_TIMER_STR, self.provider.current_time() + timeout)

    def handle_timer(self, timer: str):
        """Advance to the next target; once at the last one, stay there."""
        if timer == TARGET_CHANGE_TIMER_STR:
            if self.mobility_handler:
                self._target_index = min(self._target_index + 1, len(self._target_setpoints) - 1)
                self.target = self._target_setpoints[self._target_index]
                self.mobility_handler.set_target(self.node_id, self.target)
            self.schedule_target_change_timer(TARGET_CHANGE_PERIOD)

    def handle_packet(self, message: str):
        """Handle incoming packets."""
        pass

    def handle_telemetry(self, telemetry: Telemetry) -> None:
        """Collect time, position, velocity and target on telemetry."""
        if not self.mobility_handler or self.df is None:
            return
        self._record(self.provider.current_time())

    def _record(self, t: float) -> None:
        pos = self.mobility_handler.get_node_position(self.node_id)
        vel = self.mobility_handler.get_node_velocity(self.node_id)
        if pos is None or vel is None:
            return

        # Handler velocities are per tick; log them per second.
        vx, vy, vz = (v / CONTROL_PERIOD for v in vel)
        tx, ty, tz = self.target
        self.df.loc[len(self.df)] = [t, pos[0], pos[1], pos[2], vx, vy, vz, tx, ty, tz]

    def finish(self):
        """Called when simulation ends."""
        if not (self.initial_position and self.mobility_handler):
            return

        final_position = self.mobility_handler.get_node_position(self.node_id)
        if final_position is None:
            return

        miss = math.dist(final_position, self.target)
        converged = self.mobility_handler.has_converged(self.node_id, tolerance=1e-6)

        print()
        print("=" * 60)
        print("SIMULATION RESULTS")
        print("=" * 60)
        print(f"Node {self.node_id}")
        print(f"  Initial position: ({self.initial_position[0]:.2f}, {self.initial_position[1]:.2f}, {self.initial_position[2]:.2f})")
        print(f"  Final position:   ({final_position[0]:.2f}, {final_position[1]:.2f}, {final_position[2]:.2f})")
        print(f"  Final target:     ({self.target[0]:.2f}, {self.target[1]:.2f}, {self.target[2]:.2f})")
        print(f"  Distance to target: {miss:.6f} m ({'converged' if converged else 'in flight'})")
        print("=" * 60)

        if self.df is not None and len(self.df) > 1:
            self.df.to_csv(TRAJECTORY_CSV, index=False)
            print(f"Trajectory written to {TRAJECTORY_CSV} ({len(self.df)} rows)")
