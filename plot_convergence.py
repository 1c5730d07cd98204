"""Plot single-axis convergence for several acceleration limits.

For each max_accel in PLOT_MAX_ACCELS, an AxisTracker is driven from
AXIS_START_POSITION toward AXIS_TARGET_POSITION, and the target is moved to
AXIS_MOVED_TARGET_POSITION at tick AXIS_TARGET_MOVE_TICK. Position, speed and
applied acceleration (normalized by max_accel, so always in [-1, 1]) are
plotted against ticks.
"""

from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt

from converge_mobility import AxisTracker
from config_param import (
    AXIS_MAX_TICKS,
    AXIS_MOVED_TARGET_POSITION,
    AXIS_START_POSITION,
    AXIS_TARGET_MOVE_TICK,
    AXIS_TARGET_POSITION,
    PLOT_MAX_ACCELS,
)


def trajectory(max_accel: float, n_ticks: int) -> np.ndarray:
    """Rows of (position, speed, accel / max_accel), one per tick."""
    tracker = AxisTracker(max_accel, position=AXIS_START_POSITION, target=AXIS_TARGET_POSITION)
    out = np.empty((n_ticks, 3))
    for i in range(n_ticks):
        if i == AXIS_TARGET_MOVE_TICK:
            tracker.target = AXIS_MOVED_TARGET_POSITION
        accel = tracker.tick()
        out[i] = (tracker.position, tracker.speed, accel / max_accel)
    return out


def main() -> None:
    ticks = np.arange(1, AXIS_MAX_TICKS + 1)

    fig, (ax_pos, ax_speed, ax_acc) = plt.subplots(3, 1, sharex=True, figsize=(9, 8))

    target = np.where(ticks <= AXIS_TARGET_MOVE_TICK, AXIS_TARGET_POSITION, AXIS_MOVED_TARGET_POSITION)
    ax_pos.plot(ticks, target, color="0.35", linestyle="--", drawstyle="steps-post", linewidth=2, label="target")

    for max_accel in PLOT_MAX_ACCELS:
        data = trajectory(max_accel, AXIS_MAX_TICKS)
        label = f"max_accel={max_accel}"
        ax_pos.plot(ticks, data[:, 0], linewidth=1.5, label=label)
        ax_speed.plot(ticks, data[:, 1], linewidth=1.2, label=label)
        ax_acc.plot(ticks, data[:, 2], linewidth=0.8, drawstyle="steps-post", label=label)

    ax_pos.set_title("Time-optimal convergence on a moving target")
    ax_pos.set_ylabel("position")
    ax_speed.set_ylabel("speed (per tick)")
    ax_acc.set_ylabel("accel / max_accel")
    ax_acc.set_xlabel("tick")
    for ax in (ax_pos, ax_speed, ax_acc):
        ax.axhline(0.0, color="0.85", linewidth=1)
        ax.grid(True, alpha=0.25)
    ax_pos.legend(loc="best")
    plt.tight_layout()

    out = "convergence.png"
    plt.savefig(out, dpi=160)
    print(f"Saved: {out}")


if __name__ == "__main__":
    main()
