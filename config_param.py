"""Centralized parameter/config constants for the demo scripts.

This module is intended to be the single source of truth for parameters
shared by main.py, protocol.py, the plotting scripts and the examples.
"""

# --------------------------------------------------------------------------------------
# 1) Simulation framework (timing)
# --------------------------------------------------------------------------------------

# Mobility tick period (seconds). One convergence tick per update.
CONTROL_PERIOD: float = 0.02

# Simulation defaults (used by main simulation entrypoints)
SIM_DURATION: float = 60            # Simulation duration (seconds)
SIM_REAL_TIME: bool = False         # Run in real time
SIM_DEBUG: bool = False             # Enable simulator debug mode

# --------------------------------------------------------------------------------------
# 2) Mobility model (ConvergingMobility)
# --------------------------------------------------------------------------------------

# Physical acceleration limits (m/s²); converted to per-tick² by CONTROL_PERIOD**2.
CM_MAX_ACC_XY: float = 4.0
CM_MAX_ACC_Z: float = 2.0
CM_MAX_ACCEL_XY: float = CM_MAX_ACC_XY * CONTROL_PERIOD ** 2
CM_MAX_ACCEL_Z: float = CM_MAX_ACC_Z * CONTROL_PERIOD ** 2
CM_SEND_TELEMETRY: bool = True      # Enable telemetry
CM_TELEMETRY_DECIMATION: int = 5    # Send telemetry every 5 updates

# --------------------------------------------------------------------------------------
# 3) Target setpoints (protocol)
# --------------------------------------------------------------------------------------

# Initial node position (meters)
START_POSITION: tuple[float, float, float] = (-25.0, -25.0, 0.0)

# The protocol steps through these targets, one every TARGET_CHANGE_PERIOD seconds.
TARGET_CHANGE_TIMER_STR: str = "target_change_timer"
TARGET_CHANGE_PERIOD: float = 12.0
TARGET_SETPOINTS: list[tuple[float, float, float]] = [
    (25.0, -25.0, 10.0),
    (25.0, 25.0, 20.0),
    (-25.0, 25.0, 5.0),
    (0.0, 0.0, 0.0),
]

# Trajectory log written by the protocol at the end of the run
TRAJECTORY_CSV: str = "trajectory.csv"

# --------------------------------------------------------------------------------------
# 4) Single-axis demos (examples/ex_single_axis.py, plot_convergence.py)
# --------------------------------------------------------------------------------------

AXIS_START_POSITION: float = 0.0
AXIS_TARGET_POSITION: float = 50.0
AXIS_MOVED_TARGET_POSITION: float = 20.0   # target after AXIS_TARGET_MOVE_TICK
AXIS_TARGET_MOVE_TICK: int = 300
AXIS_MAX_ACCEL: float = 0.001
AXIS_MAX_TICKS: int = 5000
PLOT_MAX_ACCELS: tuple[float, ...] = (0.0005, 0.001, 0.005, 0.02)
