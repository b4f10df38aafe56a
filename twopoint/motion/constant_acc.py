"""
Point-to-point motion with piecewise-constant acceleration.

Class `AccSolver` plans the minimum-time motion of a single axis between a
start state (position, velocity) and an end state, under a maximum
acceleration, a maximum deceleration (which may differ from the maximum
acceleration), and a maximum velocity. The resulting velocity profile is
either triangular (the velocity limit is not reached) or trapezoidal (the
axis cruises at the velocity limit).

Once planned, the motion is sampled in constant time with `sample()`.
"""
import bisect
import logging
from enum import IntEnum
from dataclasses import dataclass
from itertools import accumulate

from twopoint.core.exceptions import (
    InvalidConstraintError,
    InvalidGeometryError,
    NotConfiguredError,
    GoalTooCloseError,
    InsufficientBrakingDistanceError,
    InfeasibleConstraintsError,
    NumericInvariantViolationError
)
from twopoint.utils.math_utils import sign, solve_quadratic

from .elementary import parabolic as ca
from .states import InitialState, TargetState, AccLimits, KinematicState


# Relative tolerance within which the braking distance is considered equal to
# the remaining distance (see `GoalTooCloseError`).
DECEL_DISTANCE_TOLERANCE = 0.02


class AccCase(IntEnum):
    NO_MOTION = -1
    TRIANGULAR = 0
    TRAPEZOIDAL = 1


@dataclass(frozen=True)
class Phase:
    """
    Time interval of the motion during which the acceleration is constant.

    Attributes
    ----------
    dt:
        Duration of the phase.
    a:
        Acceleration held throughout the phase.
    v:
        Velocity at the start of the phase.
    p:
        Position at the start of the phase.
    """
    dt: float
    a: float
    v: float
    p: float

    def state_at(self, tau: float) -> KinematicState:
        """Returns the kinematic state at time `tau` after the phase start."""
        return KinematicState(
            p=ca.position(tau, s0=self.p, v0=self.v, a0=self.a),
            v=ca.velocity(tau, v0=self.v, a0=self.a),
            a=self.a
        )

    @property
    def exit_state(self) -> KinematicState:
        return self.state_at(self.dt)


class AccSolver:
    """
    Plans and samples a trapezoidal (or triangular) velocity profile.

    A solver goes through three stages: it is configured with the boundary
    states and the kinematic limits, the motion is planned, and then it can
    be sampled any number of times. Configuring the solver again discards
    the planned motion.

    Example
    -------
    >>> solver = AccSolver(
    ...     InitialState(t0=0.0, p0=0.0, v0=0.0),
    ...     TargetState(pe=10.0, ve=0.0),
    ...     AccLimits(a_max=2.0, v_max=5.0)
    ... )
    >>> total_time = solver.plan()
    >>> p, v, a = solver.sample(1.0)

    Or in one step with `AccSolver.create(p0=0.0, pe=10.0, a_max=2.0,
    v_max=5.0)`.
    """
    def __init__(
        self,
        initial: InitialState | None = None,
        target: TargetState | None = None,
        limits: AccLimits | None = None,
        goal_tolerance: float = DECEL_DISTANCE_TOLERANCE,
        logger: logging.Logger | None = None
    ) -> None:
        """
        Creates an `AccSolver` object.

        Parameters
        ----------
        initial: optional
            Start time, position, and velocity of the motion.
        target: optional
            End position and velocity of the motion.
        limits: optional
            Maximum acceleration, velocity, and (optionally) deceleration.
        goal_tolerance:
            Relative tolerance within which the distance needed to brake is
            considered to fill the remaining distance to the target, which
            is reported as a `GoalTooCloseError`. Default is 2 %.
        logger: optional
            Logger to which the planned motion is reported at DEBUG level.

        If `initial`, `target`, or `limits` is omitted here, it must be set
        with `configure()` before the motion can be planned.
        """
        if goal_tolerance < 0.0:
            raise ValueError("`goal_tolerance` cannot be negative.")
        self.goal_tolerance = goal_tolerance
        self.logger = logger or logging.getLogger(__name__)

        self._initial: InitialState | None = None
        self._target: TargetState | None = None
        self._limits: AccLimits | None = None
        self._d_max: float = 0.0
        self._reset_plan()
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
    ) -> 'AccSolver':
        """
        Returns a configured solver of which the motion has been planned.
        Any error raised while configuring or planning propagates to the
        caller. Extra keyword arguments are passed to the constructor.
        """
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
        Sets the boundary states and/or the kinematic limits of the motion.
        Arguments left to None keep their current setting. Any previously
        planned motion is discarded.

        Raises
        ------
        InvalidConstraintError:
            If a limit is zero or negative.
        """
        if limits is not None:
            d_max = limits.a_max if limits.d_max is None else limits.d_max
            for name, value in (
                ("a_max", limits.a_max),
                ("v_max", limits.v_max),
                ("d_max", d_max)
            ):
                if not value > 0.0:
                    raise InvalidConstraintError(
                        f"`{name}` must be positive (got {value})."
                    )
            self._limits = limits
            self._d_max = d_max
        if initial is not None:
            self._initial = initial
        if target is not None:
            self._target = target
        self._reset_plan()

    @property
    def configured(self) -> bool:
        return None not in (self._initial, self._target, self._limits)

    @property
    def planned(self) -> bool:
        return self._case is not None

    @property
    def initial(self) -> InitialState | None:
        return self._initial

    @property
    def target(self) -> TargetState | None:
        return self._target

    @property
    def limits(self) -> AccLimits | None:
        return self._limits

    @property
    def a_max(self) -> float:
        return self._limits.a_max

    @property
    def d_max(self) -> float:
        """Deceleration limit in effect (equal to `a_max` if not specified)."""
        return self._d_max

    @property
    def v_max(self) -> float:
        return self._limits.v_max

    @property
    def t0(self) -> float:
        return self._initial.t0

    @property
    def p0(self) -> float:
        return self._initial.p0

    @property
    def v0(self) -> float:
        return self._initial.v0

    @property
    def pe(self) -> float:
        return self._target.pe

    @property
    def ve(self) -> float:
        return self._target.ve

    @property
    def case(self) -> AccCase:
        self._check_planned()
        return self._case

    @property
    def phases(self) -> tuple[Phase, ...]:
        """Planned phases in chronological order (empty without motion)."""
        self._check_planned()
        return self._phases

    @property
    def total_time(self) -> float:
        self._check_planned()
        return self._total_time

    def plan(self) -> float:
        """
        Plans the motion and returns its total duration.

        Raises
        ------
        NotConfiguredError:
            If the boundary states or the limits have not been set.
        InvalidGeometryError:
            If start and end position coincide, but start and end velocity
            differ.
        GoalTooCloseError:
            If braking from the start velocity to the end velocity takes up
            (almost) exactly the distance to the end position.
        InsufficientBrakingDistanceError:
            If the distance to the end position is too short to brake.
        InfeasibleConstraintsError:
            If the start or end velocity exceeds the velocity limit, or no
            motion satisfies the constraints for another reason.
        NumericInvariantViolationError:
            If the constant-velocity phase turns out to have a negative
            duration.
        """
        self._check_configured()
        self._reset_plan()
        p0, v0, pe, ve = self.p0, self.v0, self.pe, self.ve

        dp = pe - p0
        if dp == 0.0:
            if ve == v0:
                self._set_no_motion()
                return 0.0
            raise InvalidGeometryError(
                "Cannot change velocity without displacement "
                f"(p0 = pe = {p0}, but v0 = {v0} and ve = {ve})."
            )
        for name, value in (("v0", v0), ("ve", ve)):
            if abs(value) > self.v_max:
                raise InfeasibleConstraintsError(
                    f"Boundary velocity {name} = {value} exceeds the velocity "
                    f"limit {self.v_max}.",
                    **self._context()
                )

        s = sign(dp)
        acc = s * self.a_max
        dec = s * self.d_max

        # Accelerate during dt1, then immediately decelerate to `ve`: the
        # duration of the deceleration and the distance it covers follow from
        # the velocity reached after dt1, so that requiring the total
        # displacement to be `dp` leaves a quadratic equation in dt1.
        ratio = acc / dec
        roots = solve_quadratic(
            0.5 * acc * (1 + ratio),
            v0 * (1 + ratio),
            -dp + (v0 * v0 - ve * ve) / (2 * dec)
        )
        if not roots:
            raise self._deceleration_error(dp, s, no_root=True)
        dt1_candidates = [r for r in roots if r > 0.0]
        if not dt1_candidates:
            raise self._deceleration_error(dp, s, no_root=False)
        # A root after which the axis would have to speed up again to reach
        # `ve` is only used when no other root is left.
        valid = [
            r for r in dt1_candidates
            if self._reaches_end_velocity(ca.velocity(r, v0=v0, a0=acc), dec)
        ]
        dt1 = min(valid or dt1_candidates)

        v1 = ca.velocity(dt1, v0=v0, a0=acc)
        if abs(v1) < self.v_max:
            case = AccCase.TRIANGULAR
            phases = self._triangular_phases(dt1, v1, acc, dec)
        else:
            case = AccCase.TRAPEZOIDAL
            phases = self._trapezoidal_phases(s, acc, dec)

        self._set_phases(case, phases)
        return self._total_time

    def sample(self, t: float) -> KinematicState:
        """
        Returns position, velocity, and acceleration at time moment `t`.

        Before the start time `t0` the start state is returned, after the
        end of the motion the end state (both with zero acceleration).
        """
        self._check_planned()
        if self._case is AccCase.NO_MOTION:
            return KinematicState(self.p0, self.v0, 0.0)
        tau = t - self.t0
        if tau <= 0.0:
            return KinematicState(self.p0, self.v0, 0.0)
        if tau >= self._total_time:
            return KinematicState(self.pe, self.ve, 0.0)
        i = bisect.bisect_left(self._ends, tau)
        phase = self._phases[i]
        return phase.state_at(tau - (self._ends[i] - phase.dt))

    def _triangular_phases(
        self,
        dt1: float,
        v1: float,
        acc: float,
        dec: float
    ) -> tuple[Phase, ...]:
        if not self._reaches_end_velocity(v1, dec):
            raise InfeasibleConstraintsError(
                f"End velocity {self.ve} cannot be reached within distance "
                f"{abs(self.pe - self.p0)} (peak velocity {v1}, "
                f"acc_max: {self.a_max}, dec_max: {self.d_max}).",
                **self._context(v1=v1)
            )
        p1 = ca.position(dt1, s0=self.p0, v0=self.v0, a0=acc)
        dt2 = abs((v1 - self.ve) / dec)
        return (
            Phase(dt1, acc, self.v0, self.p0),
            Phase(dt2, -dec, v1, p1)
        )

    def _trapezoidal_phases(
        self,
        s: float,
        acc: float,
        dec: float
    ) -> tuple[Phase, ...]:
        # acceleration phase: v0 -> v_max
        v1 = s * self.v_max
        dt1 = (v1 - self.v0) / acc
        p1 = ca.position(dt1, s0=self.p0, v0=self.v0, a0=acc)

        # deceleration phase: v_max -> ve
        dt3 = abs((v1 - self.ve) / dec)
        ds3 = ca.position(dt3, s0=0.0, v0=v1, a0=-dec)

        # constant-velocity phase
        dt2 = (self.pe - p1 - ds3) / v1
        if dt2 < 0.0:
            # Limiting the peak velocity of a valid triangular profile to
            # v_max can only lengthen the cruise, so this signals a loss of
            # floating-point precision.
            raise NumericInvariantViolationError(
                "Invalid trajectory: negative constant-velocity duration "
                f"({dt2}) for distance {abs(self.pe - self.p0)} and "
                f"vmax {self.v_max}.",
                **self._context(dt_cruise=dt2)
            )
        p2 = self.pe - ds3
        return (
            Phase(dt1, acc, self.v0, self.p0),
            Phase(dt2, 0.0, v1, p1),
            Phase(dt3, -dec, v1, p2)
        )

    def _reaches_end_velocity(self, v1: float, dec: float) -> bool:
        return (v1 - self.ve) * sign(dec) >= -1.e-9 * max(1.0, abs(self.ve))

    def _deceleration_error(
        self,
        dp: float,
        s: float,
        no_root: bool
    ) -> Exception:
        """
        Returns the error explaining why no acceleration time solves the
        planning equation.
        """
        v0, ve = self.v0, self.ve
        distance = abs(dp)
        d_brake = ca.braking_distance(v0, ve, self.d_max)
        context = self._context(d_brake=d_brake)

        if s * v0 > 0.0 and abs(d_brake - distance) < distance * self.goal_tolerance:
            return GoalTooCloseError(
                f"Current velocity {abs(v0)} requires approximately "
                f"{d_brake} distance to reach target velocity {abs(ve)}, "
                f"nearly equal to the available distance {distance}. This "
                "leaves no room for trajectory planning and typically occurs "
                "when the same goal is resent during motion.",
                **context
            )
        if s * v0 > 0.0 and d_brake > distance:
            shortage = d_brake - distance
            return InsufficientBrakingDistanceError(
                f"Insufficient distance to decelerate: current velocity "
                f"{abs(v0)} requires {d_brake} distance to reach target "
                f"velocity {abs(ve)}, but only {distance} is available. "
                f"Shortage: {shortage} ({shortage / distance * 100:.2f} %).",
                shortage=shortage,
                **context
            )
        reason = (
            "discriminant <= 0" if no_root
            else "no positive acceleration time"
        )
        return InfeasibleConstraintsError(
            f"No valid trajectory found ({reason}). Distance: {distance}, "
            f"v0: {abs(v0)}, ve: {abs(ve)}, acc_max: {self.a_max}, "
            f"dec_max: {self.d_max}, vmax: {self.v_max}.",
            **context
        )

    def _context(self, **extra: float) -> dict[str, float]:
        context = {
            "p0": self.p0,
            "pe": self.pe,
            "v0": self.v0,
            "ve": self.ve,
            "a_max": self.a_max,
            "d_max": self.d_max,
            "v_max": self.v_max
        }
        context.update(extra)
        return context

    def _set_no_motion(self) -> None:
        self._case = AccCase.NO_MOTION
        self._phases = ()
        self._ends = ()
        self._total_time = 0.0
        self.logger.debug(
            "No motion needed: p0 = pe = %s, v0 = ve = %s", self.p0, self.v0
        )

    def _set_phases(self, case: AccCase, phases: tuple[Phase, ...]) -> None:
        self._case = case
        self._phases = phases
        self._ends = tuple(accumulate(phase.dt for phase in phases))
        self._total_time = self._ends[-1]
        self.logger.debug(
            "Planned %s profile (case %d), total time %.6f s",
            case.name.lower(), case.value, self._total_time
        )
        for i, phase in enumerate(phases):
            self.logger.debug(
                "  phase %d: dt=%.6f a=%.6f v=%.6f p=%.6f",
                i, phase.dt, phase.a, phase.v, phase.p
            )

    def _reset_plan(self) -> None:
        self._case: AccCase | None = None
        self._phases: tuple[Phase, ...] = ()
        self._ends: tuple[float, ...] = ()
        self._total_time = 0.0

    def _check_configured(self) -> None:
        missing = [
            name for name, value in (
                ("initial state", self._initial),
                ("target state", self._target),
                ("limits", self._limits)
            ) if value is None
        ]
        if missing:
            raise NotConfiguredError(
                f"Cannot plan the motion: {', '.join(missing)} not set. "
                "Call `configure()` first."
            )

    def _check_planned(self) -> None:
        if self._case is None:
            raise NotConfiguredError(
                "Motion has not been planned. Call `plan()` first."
            )
