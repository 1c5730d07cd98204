"""Core-only example (no GrADyS-SIM runtime required).

This script demonstrates the single-axis convergence law exposed by
`converge_mobility`: an AxisTracker accelerates toward a target, the target
is moved while the object is in flight, and the object still comes to rest
exactly on the new target without oscillating.

It intentionally does NOT build a GrADyS-SIM NG simulation. For the full
integration example (handler + protocol), use `main.py` and `protocol.py` at
the repository root.

Usage:
    python ./examples/ex_single_axis.py
"""

import logging

from converge_mobility import AxisTracker

# Same defaults as the single-axis section of config_param.py
AXIS_START_POSITION = 0.0
AXIS_TARGET_POSITION = 50.0
AXIS_MOVED_TARGET_POSITION = 20.0
AXIS_TARGET_MOVE_TICK = 300
AXIS_MAX_ACCEL = 0.001
AXIS_MAX_TICKS = 5000


def simulate_moving_target():
    """
    Drive one axis toward a target that moves mid-flight.
    """
    print("Core-only demo: time-optimal convergence on a moving target")

    tracker = AxisTracker(
        max_accel=AXIS_MAX_ACCEL,
        position=AXIS_START_POSITION,
        target=AXIS_TARGET_POSITION,
    )

    print(f"max_accel: {tracker.max_accel} per tick²")
    print(f"Target: {tracker.target} (moves to {AXIS_MOVED_TARGET_POSITION} at tick {AXIS_TARGET_MOVE_TICK})")
    print("-" * 52)
    print(f"{'tick':>6} | {'target':>8} | {'position':>10} | {'speed':>8} | {'accel':>8}")
    print("-" * 52)

    # Before the move: a fixed number of ticks; after it: until at rest.
    before = tracker.run(max_ticks=AXIS_TARGET_MOVE_TICK)
    tracker.target = AXIS_MOVED_TARGET_POSITION
    after = tracker.run(max_ticks=AXIS_MAX_TICKS)

    records = before + after
    for record in records:
        if record.tick % 50 == 0 or record is records[-1]:
            print(
                f"{record.tick:>6} | {record.target:>8.2f} | {record.position:>10.4f} | "
                f"{record.speed:>8.4f} | {record.accel:>+8.4f}"
            )

    print("-" * 52)
    state = "converged" if tracker.has_converged() else "still moving"
    print(f"Final position: {tracker.position:.6f} after {tracker.ticks} ticks ({state})")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    simulate_moving_target()
