"""
Time-optimal point-to-point trajectories of a single axis under kinematic
limits.

Three solvers are available:
- `AccSolver` plans a trapezoidal (or triangular) velocity profile with
  piecewise-constant acceleration and separate acceleration and deceleration
  limits.
- `JerkSolver` plans a rest-to-rest S-curve with piecewise-constant jerk.
- `AngleSolver` plans the motion of a rotary axis along the shortest arc.
"""

from .motion import (
    InitialState,
    TargetState,
    AccLimits,
    JerkLimits,
    KinematicState,
    JerkState,
    AccSolver,
    AccCase,
    JerkSolver,
    JerkCase,
    AngleSolver
)
from .core.exceptions import (
    TrajectoryError,
    InvalidConstraintError,
    InvalidGeometryError,
    NotConfiguredError,
    PlanningError,
    GoalTooCloseError,
    InsufficientBrakingDistanceError,
    InfeasibleConstraintsError,
    NumericInvariantViolationError
)

__version__ = "0.1.0"

__all__ = [
    "InitialState",
    "TargetState",
    "AccLimits",
    "JerkLimits",
    "KinematicState",
    "JerkState",
    "AccSolver",
    "AccCase",
    "JerkSolver",
    "JerkCase",
    "AngleSolver",
    "TrajectoryError",
    "InvalidConstraintError",
    "InvalidGeometryError",
    "NotConfiguredError",
    "PlanningError",
    "GoalTooCloseError",
    "InsufficientBrakingDistanceError",
    "InfeasibleConstraintsError",
    "NumericInvariantViolationError"
]
