"""Plot the node trajectory from trajectory.csv.

Creates one figure with:
- x/y/z position vs t, with the commanded target as dashed steps
- vx/vy/vz vs t

Run:
    python plot_trajectory.py

By default, reads ./trajectory.csv (same directory as this script), written by
main.py at the end of a simulation.
"""

from __future__ import annotations

import os

import pandas as pd
import matplotlib.pyplot as plt

from config_param import TRAJECTORY_CSV


def main() -> int:
    script_dir = os.path.dirname(os.path.abspath(__file__))
    csv_path = os.path.join(script_dir, TRAJECTORY_CSV)

    if not os.path.exists(csv_path):
        print(f"CSV not found: {csv_path}")
        return 1

    df = pd.read_csv(csv_path)

    required_cols = {"t", "x", "y", "z", "vx", "vy", "vz", "tx", "ty", "tz"}
    missing = required_cols - set(df.columns)
    if missing:
        print(f"Missing columns in CSV: {sorted(missing)}")
        return 1

    if df.empty:
        print("CSV is empty.")
        return 0

    df = df.apply(pd.to_numeric, errors="coerce").dropna().sort_values("t")

    fig, (ax_pos, ax_vel) = plt.subplots(2, 1, sharex=True, figsize=(10, 7))
    fig.suptitle("Target convergence: position and velocity vs time")

    for axis in ("x", "y", "z"):
        line = ax_pos.plot(df["t"], df[axis], linewidth=1.2, label=axis)[0]
        ax_pos.plot(
            df["t"],
            df[f"t{axis}"],
            linestyle="--",
            drawstyle="steps-post",
            linewidth=1.0,
            color=line.get_color(),
            label=f"{axis} target",
        )
        ax_vel.plot(df["t"], df[f"v{axis}"], linewidth=1.0, color=line.get_color(), label=f"v{axis}")

    ax_pos.set_ylabel("position (m)")
    ax_pos.grid(True, alpha=0.3)
    ax_pos.legend(loc="best")

    ax_vel.set_ylabel("velocity (m/s)")
    ax_vel.set_xlabel("time (s)")
    ax_vel.axhline(0.0, color="k", linewidth=0.8, alpha=0.4)
    ax_vel.grid(True, alpha=0.3)
    ax_vel.legend(loc="best")

    fig.tight_layout()
    plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
