"""
Point-to-point motion of a rotary axis of which the position wraps around
the circle.
"""
import logging

from twopoint.utils.math_utils import normalize_angle

from .constant_acc import AccSolver, AccCase, Phase, DECEL_DISTANCE_TOLERANCE
from .states import InitialState, TargetState, AccLimits, KinematicState


class AngleSolver:
    """
    Plans the motion between two angles (in radians) along the shortest arc.

    Start and end angle are first mapped onto [-pi, pi). The axis then moves
    from the normalized start angle over the shortest signed arc toward the
    end angle; the motion itself is planned by an `AccSolver`.
    """
    def __init__(
        self,
        initial: InitialState | None = None,
        target: TargetState | None = None,
        limits: AccLimits | None = None,
        goal_tolerance: float = DECEL_DISTANCE_TOLERANCE,
        logger: logging.Logger | None = None
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._solver = AccSolver(goal_tolerance=goal_tolerance, logger=self.logger)
        self._arc: float = 0.0
        self._raw_initial: InitialState | None = None
        self._raw_target: TargetState | None = None
        self.configure(initial, target, limits)

    @classmethod
    def create(
        cls,
        p0: float,
        pe: float,
        a_max: float,
        v_max: float,
        t0: float = 0.0,
        v0: float = 0.0,
        ve: float = 0.0,
        d_max: float | None = None,
        **kwargs
    ) -> 'AngleSolver':
        solver = cls(
            InitialState(t0=t0, p0=p0, v0=v0),
            TargetState(pe=pe, ve=ve),
            AccLimits(a_max=a_max, v_max=v_max, d_max=d_max),
            **kwargs
        )
        solver.plan()
        return solver

    def configure(
        self,
        initial: InitialState | None = None,
        target: TargetState | None = None,
        limits: AccLimits | None = None
    ) -> None:
        """
        Sets the boundary states and/or the limits. The angles of the
        boundary states are normalized before they are passed on to the
        underlying `AccSolver`.
        """
        if initial is not None:
            self._raw_initial = initial
        if target is not None:
            self._raw_target = target
        if limits is not None:
            self._solver.configure(limits=limits)

        if self._raw_initial is None or self._raw_target is None:
            self._solver.configure()
            return
        p0 = normalize_angle(self._raw_initial.p0)
        pe = normalize_angle(self._raw_target.pe)
        self._arc = normalize_angle(pe - p0)
        self._solver.configure(
            initial=InitialState(
                t0=self._raw_initial.t0,
                p0=p0,
                v0=self._raw_initial.v0
            ),
            target=TargetState(pe=p0 + self._arc, ve=self._raw_target.ve)
        )
        self.logger.debug(
            "Angle motion %.6f -> %.6f rad: shortest arc %.6f rad",
            self._raw_initial.p0, self._raw_target.pe, self._arc
        )

    @property
    def solver(self) -> AccSolver:
        """Underlying solver planning the unwrapped motion."""
        return self._solver

    @property
    def arc(self) -> float:
        """Signed shortest arc from start to end angle."""
        return self._arc

    @property
    def configured(self) -> bool:
        return self._solver.configured

    @property
    def planned(self) -> bool:
        return self._solver.planned

    @property
    def t0(self) -> float:
        return self._solver.t0

    @property
    def p0(self) -> float:
        """Normalized start angle."""
        return self._solver.p0

    @property
    def pe(self) -> float:
        """Unwrapped end angle, i.e. the normalized start angle plus the arc."""
        return self._solver.pe

    @property
    def v0(self) -> float:
        return self._solver.v0

    @property
    def ve(self) -> float:
        return self._solver.ve

    @property
    def v_max(self) -> float:
        return self._solver.v_max

    @property
    def case(self) -> AccCase:
        return self._solver.case

    @property
    def phases(self) -> tuple[Phase, ...]:
        return self._solver.phases

    @property
    def total_time(self) -> float:
        return self._solver.total_time

    def plan(self) -> float:
        return self._solver.plan()

    def sample(self, t: float, normalize: bool = True) -> KinematicState:
        """
        Returns angle, angular velocity, and angular acceleration at time
        moment `t`. If `normalize` is True, the angle is mapped onto
        [-pi, pi); otherwise the unwrapped angle is returned.
        """
        state = self._solver.sample(t)
        if normalize:
            return state._replace(p=normalize_angle(state.p))
        return state
