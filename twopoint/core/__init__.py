"""
Core components shared by the trajectory solvers: the error taxonomy raised
while configuring, planning, and sampling a trajectory.
"""

from .exceptions import (
    TrajectoryError,
    InvalidConstraintError,
    InvalidGeometryError,
    NotConfiguredError,
    PlanningError,
    GoalTooCloseError,
    InsufficientBrakingDistanceError,
    InfeasibleConstraintsError,
    NumericInvariantViolationError,
    ConfigurationError
)


__all__ = [
    "TrajectoryError",
    "InvalidConstraintError",
    "InvalidGeometryError",
    "NotConfiguredError",
    "PlanningError",
    "GoalTooCloseError",
    "InsufficientBrakingDistanceError",
    "InfeasibleConstraintsError",
    "NumericInvariantViolationError",
    "ConfigurationError"
]
