"""Pure mathematical functions for tick-based target convergence.

This module contains stateless mathematical operations for:
- Time-optimal (bang-bang) acceleration toward a possibly moving target
- Rest position prediction under maximum braking
- Explicit Euler integration of one tick

The model is discretized in ticks: speed is expressed in distance per tick
and max_accel in distance per tick². All functions operate on plain floats
and handle a single axis; multi-axis callers apply them per axis.

Precondition for every function taking max_accel: max_accel > 0. It is NOT
validated here; AxisTracker and ConvergingMobilityConfiguration validate it.
Non-finite inputs propagate through the arithmetic.

Author: Laércio Lucchesi
Date: December 27, 2025
"""

from typing import Tuple

# Fraction of max_accel below which a slow object gets nudged instead of
# coasting, and the size of that nudge.
TRICKLE_FACTOR: float = 0.1


def acceleration_for(
    initial_pos: float,
    final_pos: float,
    initial_speed: float,
    max_accel: float,
) -> float:
    """Acceleration to apply this tick to converge on final_pos.

    Converges in the fastest possible time, never overshoots unless that is
    physically unavoidable, and never settles into an oscillation around the
    target. final_pos may change between calls.

    Args:
        initial_pos: Current position.
        final_pos: Target position.
        initial_speed: Current signed speed (distance per tick).
        max_accel: Maximum acceleration magnitude (distance per tick²), > 0.

    Returns:
        Acceleration to add to the speed this tick. Its magnitude never
        exceeds max_accel.

    Example:
        >>> a = acceleration_for(0.0, 0.05, 0.02, 0.1)
        >>> # Reachable in one tick: a = 0.03, landing exactly on 0.05
        >>> a = acceleration_for(10.0, 0.0, 1.0, 0.1)
        >>> # Moving away from the target: a = -0.1 (about turn)
    """
    # Can we get there in one tick?
    if abs(initial_speed) <= max_accel:
        required_speed = final_pos - initial_pos
        if abs(required_speed) <= max_accel:
            required_accel = required_speed - initial_speed
            if abs(required_accel) <= max_accel:
                return required_accel

    # Reflect so that the target always lies ahead (increasing position).
    flipped = initial_pos > final_pos
    if flipped:
        initial_pos = -initial_pos
        final_pos = -final_pos
        initial_speed = -initial_speed

    result = _accel_toward_increasing(initial_pos, final_pos, initial_speed, max_accel)

    return -result if flipped else result


def _accel_toward_increasing(
    initial_pos: float,
    final_pos: float,
    initial_speed: float,
    max_accel: float,
) -> float:
    """Control law for the normalized case initial_pos <= final_pos."""
    # Moving the wrong way: about turn at full acceleration.
    if initial_speed < 0.0:
        return max_accel

    # Braking now stops past (or within one unit of) the target: brake.
    rest_pos_now = rest_position(initial_pos, initial_speed, max_accel)
    shortfall_now = final_pos - rest_pos_now
    if shortfall_now < max_accel:
        return -max_accel

    # Accelerating now and braking from next tick would overshoot.
    rest_pos_next = rest_position(
        initial_pos + initial_speed + max_accel,
        initial_speed + max_accel + max_accel,
        max_accel,
    )
    if final_pos < rest_pos_next:
        if initial_speed <= shortfall_now:
            trickle = max_accel * TRICKLE_FACTOR
            # Stalled (or nearly): creep forward rather than wait forever.
            if initial_speed < trickle:
                return trickle
            return 0.0
        return -max_accel

    return max_accel


def rest_position(pos: float, speed: float, max_accel: float) -> float:
    """Position at which the object stops if it brakes at max_accel from now.

    Sums the discrete braking series one whole tick at a time. When the
    stopping time is fractional, it is rounded up and the unused part of the
    final braking tick is added back, so the result is continuous and
    monotonic in speed. For 0 < speed <= max_accel the object stops within
    this tick and the result is pos.

    Args:
        pos: Current position.
        speed: Current signed speed (distance per tick).
        max_accel: Braking magnitude (distance per tick²), > 0.

    Returns:
        Predicted rest position.
    """
    if speed == 0.0:
        return pos
    if speed < 0.0:
        return -rest_position(-pos, -speed, max_accel)

    time_to_stop = speed / max_accel

    # Whole ticks only.
    fraction = time_to_stop - int(time_to_stop)
    correction = 0.0
    if fraction > 0.0:
        correction = 1.0 - fraction
        time_to_stop += correction

    # Triangular number of braking units over time_to_stop ticks.
    num_accel_units = int(time_to_stop * (time_to_stop * 0.5 + 0.5))
    braking_distance = time_to_stop * speed - num_accel_units * max_accel
    rest_pos = pos + braking_distance

    # Stopped before using all of the final braking tick.
    if correction != 0.0:
        rest_pos += correction * max_accel

    return rest_pos


def integrate_tick(position: float, speed: float, accel: float) -> Tuple[float, float]:
    """Advance one tick with explicit Euler: speed first, then position."""
    speed = speed + accel
    return (position + speed, speed)
