"""Target-converging mobility example (headless).

This script builds a GrADyS-SIM simulation with a single node moved by
ConvergingMobilityHandler. The node's target position is commanded by
ConvergingProtocol in initialize(), and then changed periodically via a timer.
At the end of the run the trajectory is written to trajectory.csv; plot it
with plot_trajectory.py.

Initial node position is set in builder.add_node().
"""

import logging

from gradysim.simulator.handler.timer import TimerHandler
from gradysim.simulator.simulation import SimulationBuilder, SimulationConfiguration
from converge_mobility import ConvergingMobilityHandler, ConvergingMobilityConfiguration
from protocol import ConvergingProtocol

from config_param import (
    CONTROL_PERIOD,
    CM_MAX_ACCEL_XY,
    CM_MAX_ACCEL_Z,
    CM_SEND_TELEMETRY,
    CM_TELEMETRY_DECIMATION,
    SIM_DEBUG,
    SIM_DURATION,
    SIM_REAL_TIME,
    START_POSITION,
)


def main():
    """Execute the converging mobility simulation."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    builder = SimulationBuilder(
        SimulationConfiguration(
            duration=SIM_DURATION,
            debug=SIM_DEBUG,
            real_time=SIM_REAL_TIME,
        )
    )

    builder.add_handler(TimerHandler())

    # Accelerations are per tick²; config_param derives them from m/s² limits.
    mobility_config = ConvergingMobilityConfiguration(
        update_rate=CONTROL_PERIOD,
        max_accel_xy=CM_MAX_ACCEL_XY,
        max_accel_z=CM_MAX_ACCEL_Z,
        send_telemetry=CM_SEND_TELEMETRY,
        telemetry_decimation=CM_TELEMETRY_DECIMATION,
    )
    print(
        "Mobility: "
        f"update_rate={mobility_config.update_rate}, "
        f"max_accel_xy={mobility_config.max_accel_xy}, max_accel_z={mobility_config.max_accel_z} (per tick²)"
    )
    builder.add_handler(ConvergingMobilityHandler(mobility_config))

    builder.add_node(ConvergingProtocol, START_POSITION)

    simulation = builder.build()
    print("=" * 60)
    print("Starting converging mobility simulation")
    print("Node target is commanded by ConvergingProtocol (and changes periodically)")
    print(f"Starting position: {START_POSITION}")
    print("=" * 60)
    try:
        simulation.start_simulation()
    finally:
        print("=" * 60)
        print("Simulation completed!")
        print("=" * 60)


if __name__ == "__main__":
    main()
