"""Target-converging mobility building blocks.

This package contains the pure single-axis convergence law, a per-axis tick
loop around it, and a GrADyS-SIM NG handler that drives nodes toward target
positions. It is intended to be imported by a larger project.

Author: Laércio Lucchesi
"""

from .config import ConvergingMobilityConfiguration
from .handler import ConvergingMobilityHandler
from .tracker import AxisTracker, TickRecord
from .core import (
    TRICKLE_FACTOR,
    acceleration_for,
    integrate_tick,
    rest_position,
)

__version__ = "0.1.0"

__all__ = [
    "ConvergingMobilityConfiguration",
    "ConvergingMobilityHandler",
    "AxisTracker",
    "TickRecord",
    "TRICKLE_FACTOR",
    "acceleration_for",
    "integrate_tick",
    "rest_position",
]
