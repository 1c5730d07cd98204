"""Single-axis tick loop around the convergence law.

AxisTracker owns the position/speed pair of one axis between ticks, which
acceleration_for itself never retains.

Author: Laércio Lucchesi
Date: December 27, 2025
"""

import logging
import math
from dataclasses import dataclass
from typing import List

from .core import acceleration_for, integrate_tick

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickRecord:
    """State after one tick."""
    tick: int
    position: float
    speed: float
    accel: float
    target: float


class AxisTracker:
    """Drives one axis toward a target, one call to tick() per step.

    The target and max_accel may be changed between ticks; the motion
    continues from the current position and speed.
    """

    def __init__(
        self,
        max_accel: float,
        position: float = 0.0,
        speed: float = 0.0,
        target: float | None = None,
    ):
        self.max_accel = max_accel
        self.position = float(position)
        self.speed = float(speed)
        self.target = self.position if target is None else float(target)
        self.ticks = 0

    @property
    def max_accel(self) -> float:
        return self._max_accel

    @max_accel.setter
    def max_accel(self, value: float) -> None:
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"max_accel must be finite and > 0, got {value!r}")
        self._max_accel = float(value)

    def tick(self) -> float:
        """Apply one tick of acceleration and return the acceleration used."""
        accel = acceleration_for(self.position, self.target, self.speed, self._max_accel)
        self.position, self.speed = integrate_tick(self.position, self.speed, accel)
        self.ticks += 1
        logger.debug("position=%s, speed=%s", self.position, self.speed)
        return accel

    def has_converged(self, tolerance: float = 1e-9) -> bool:
        """True when at rest on the target (within tolerance)."""
        return (
            abs(self.target - self.position) <= tolerance
            and abs(self.speed) <= tolerance
        )

    def run(self, max_ticks: int = 100_000, tolerance: float = 1e-9) -> List[TickRecord]:
        """Tick until converged or max_ticks is reached.

        Returns:
            One TickRecord per tick performed (empty if already converged).
        """
        if max_ticks < 0:
            raise ValueError("max_ticks must be >= 0")

        records: List[TickRecord] = []
        while len(records) < max_ticks and not self.has_converged(tolerance):
            accel = self.tick()
            records.append(
                TickRecord(
                    tick=self.ticks,
                    position=self.position,
                    speed=self.speed,
                    accel=accel,
                    target=self.target,
                )
            )

        if not self.has_converged(tolerance):
            logger.warning(
                "Axis did not converge within %d ticks (position=%s, target=%s, speed=%s)",
                max_ticks, self.position, self.target, self.speed,
            )
        return records
