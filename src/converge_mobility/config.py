"""
Configuration dataclass for the converging mobility handler.

Author: Laércio Lucchesi
Date: December 27, 2025
"""

import math
from dataclasses import dataclass


@dataclass
class ConvergingMobilityConfiguration:
    """
    Configuration parameters for the ConvergingMobilityHandler.

    Every update is one tick of the convergence law, so accelerations are
    expressed per tick², not per second². To convert from a physical limit
    a_max (m/s²): max_accel = a_max * update_rate**2.

    Attributes:
        update_rate: Time interval (in seconds) between mobility updates (ticks).
            Typical: 0.01–0.05 s.
        max_accel_xy: Maximum acceleration (m/tick²) applied independently to
            the x and y axes.
        max_accel_z: Maximum acceleration (m/tick²) applied to the z axis.
        send_telemetry: If True, emit Telemetry messages after position updates.
        telemetry_decimation: Emit telemetry every N mobility updates (default: 1).
    """
    update_rate: float
    max_accel_xy: float
    max_accel_z: float
    send_telemetry: bool = True
    telemetry_decimation: int = 1

    def __post_init__(self):
        if not self.update_rate > 0:
            raise ValueError("update_rate must be > 0")
        for name in ("max_accel_xy", "max_accel_z"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be finite and > 0")
        if self.telemetry_decimation < 1:
            raise ValueError("telemetry_decimation must be >= 1")
