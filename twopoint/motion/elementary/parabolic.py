# PARABOLIC SEGMENT - CONSTANT ACCELERATION

import numpy as np


def velocity(
    dt: float | np.ndarray,
    v0: float = 0.0,
    a0: float = 0.0
) -> float | np.ndarray:
    """
    Velocity after a time interval `dt` of constant acceleration.

    Parameters
    ----------
    dt:
        Time elapsed since the start of the segment, or an array of elapsed
        times.
    v0:
        Velocity at the start of the segment.
    a0:
        Constant acceleration held during the segment.
    """
    return v0 + a0 * dt


def position(
    dt: float | np.ndarray,
    s0: float = 0.0,
    v0: float = 0.0,
    a0: float = 0.0
) -> float | np.ndarray:
    """
    Position after a time interval `dt` of constant acceleration.

    Parameters
    ----------
    dt:
        Time elapsed since the start of the segment, or an array of elapsed
        times.
    s0:
        Position at the start of the segment.
    v0:
        Velocity at the start of the segment.
    a0:
        Constant acceleration held during the segment.
    """
    return s0 + v0 * dt + 0.5 * a0 * dt * dt


def acceleration(dt: float | np.ndarray, a0: float = 0.0) -> float | np.ndarray:
    """
    Acceleration during the segment: either the scalar `a0`, or an array
    filled with `a0` with the same shape as the time array `dt`.
    """
    if isinstance(dt, np.ndarray):
        return np.full_like(dt, a0, dtype=float)
    return a0


def braking_distance(v0: float, v1: float, a: float) -> float:
    """
    Distance covered while the velocity changes from `v0` to `v1` under a
    constant acceleration of magnitude `a`.
    """
    return (v0 * v0 - v1 * v1) / (2 * abs(a))
