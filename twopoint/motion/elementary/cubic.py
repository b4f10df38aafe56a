# CUBIC SEGMENT - CONSTANT JERK

import numpy as np


def acceleration(
    dt: float | np.ndarray,
    a0: float = 0.0,
    j0: float = 0.0
) -> float | np.ndarray:
    """
    Acceleration after a time interval `dt` of constant jerk `j0`, starting
    from acceleration `a0`.
    """
    return a0 + j0 * dt


def velocity(
    dt: float | np.ndarray,
    v0: float = 0.0,
    a0: float = 0.0,
    j0: float = 0.0
) -> float | np.ndarray:
    """
    Velocity after a time interval `dt` of constant jerk.

    Parameters
    ----------
    dt:
        Time elapsed since the start of the segment, or an array of elapsed
        times.
    v0:
        Velocity at the start of the segment.
    a0:
        Acceleration at the start of the segment.
    j0:
        Constant jerk held during the segment.
    """
    return v0 + a0 * dt + 0.5 * j0 * dt * dt


def position(
    dt: float | np.ndarray,
    s0: float = 0.0,
    v0: float = 0.0,
    a0: float = 0.0,
    j0: float = 0.0
) -> float | np.ndarray:
    """
    Position after a time interval `dt` of constant jerk.

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
        Acceleration at the start of the segment.
    j0:
        Constant jerk held during the segment.
    """
    return s0 + v0 * dt + a0 * dt * dt / 2 + j0 * dt * dt * dt / 6


def jerk(dt: float | np.ndarray, j0: float = 0.0) -> float | np.ndarray:
    """
    Jerk during the segment: either the scalar `j0`, or an array filled with
    `j0` with the same shape as the time array `dt`.
    """
    if isinstance(dt, np.ndarray):
        return np.full_like(dt, j0, dtype=float)
    return j0
