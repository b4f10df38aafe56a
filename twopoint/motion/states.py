"""
Boundary states, kinematic limits, and sampled states of a point-to-point
motion.

Units of measurement are free, but must be consistent. For example, if time
is in seconds and position in mm, then velocity is in mm/s, acceleration in
mm/s² and jerk in mm/s³.
"""
from typing import NamedTuple
from dataclasses import dataclass


@dataclass(frozen=True)
class InitialState:
    """
    State of the axis at the start of the motion.

    Attributes
    ----------
    t0:
        Reference start time of the motion.
    p0:
        Start position.
    v0:
        Start velocity.
    """
    t0: float = 0.0
    p0: float = 0.0
    v0: float = 0.0


@dataclass(frozen=True)
class TargetState:
    """
    State of the axis at the end of the motion.

    Attributes
    ----------
    pe:
        End position.
    ve:
        End velocity.
    """
    pe: float
    ve: float = 0.0


@dataclass(frozen=True)
class AccLimits:
    """
    Kinematic limits of a constant-acceleration motion.

    Attributes
    ----------
    a_max:
        Maximum acceleration magnitude.
    v_max:
        Maximum velocity magnitude.
    d_max: optional
        Maximum deceleration magnitude. If None, the deceleration limit is
        taken equal to `a_max`.
    """
    a_max: float
    v_max: float
    d_max: float | None = None


@dataclass(frozen=True)
class JerkLimits:
    a_max: float
    v_max: float
    j_max: float


class KinematicState(NamedTuple):
    p: float
    v: float
    a: float


class JerkState(NamedTuple):
    p: float
    v: float
    a: float
    j: float
