class TrajectoryError(Exception):
    pass


class InvalidConstraintError(TrajectoryError, ValueError):
    """A kinematic limit is zero or negative."""
    pass


class InvalidGeometryError(TrajectoryError, ValueError):
    """The requested boundary states cannot be joined by any motion."""
    pass


class NotConfiguredError(TrajectoryError):
    pass


class PlanningError(TrajectoryError):
    """
    Base class of the errors raised when a trajectory cannot be planned.

    The numeric inputs that led to the failure are kept in attribute
    `context`, so that callers can inspect them without parsing the message.
    """
    def __init__(self, message: str, **context: float):
        super().__init__(message)
        self.context = context


class GoalTooCloseError(PlanningError):
    pass


class InsufficientBrakingDistanceError(PlanningError):
    pass


class InfeasibleConstraintsError(PlanningError):
    pass


class NumericInvariantViolationError(PlanningError):
    pass


class ConfigurationError(Exception):
    pass
