"""
Rest-to-rest point-to-point motion with piecewise-constant jerk (S-curve).

Class `JerkSolver` plans the motion of a single axis that starts and ends at
rest, under a maximum jerk, a maximum acceleration, and a maximum velocity.
Depending on which limits are reached, the profile falls into one of four
cases:

    case 0: neither the acceleration nor the velocity limit is reached
    case 1: the velocity limit is reached, the acceleration limit is not
    case 2: the acceleration limit is reached, the velocity limit is not
    case 3: both limits are reached

Jerk profile of the most general case (3)::

    phase:   1     2     3     4     5     6     7
    jerk:   +j     0    -j     0    -j     0    +j
    time:   t1    t2    t1    t3    t1    t2    t1

Every other case is obtained by dropping the constant-acceleration plateaus
`t2` and/or the constant-velocity phase `t3`.
"""
import bisect
import logging
import math
from enum import IntEnum
from dataclasses import dataclass
from itertools import accumulate

import numpy as np

from twopoint.core.exceptions import (
    InvalidConstraintError,
    InvalidGeometryError,
    NotConfiguredError,
    NumericInvariantViolationError
)
from twopoint.utils.math_utils import sign

from .elementary import cubic as cj
from .states import InitialState, TargetState, JerkLimits, JerkState


class JerkCase(IntEnum):
    NO_MOTION = -1
    UNLIMITED = 0
    VELOCITY_LIMITED = 1
    ACCELERATION_LIMITED = 2
    FULLY_LIMITED = 3


@dataclass(frozen=True)
class JerkPhase:
    """
    Time interval of the motion during which the jerk is constant.

    Attributes
    ----------
    dt:
        Duration of the phase.
    j:
        Jerk held throughout the phase.
    a, v, p:
        Acceleration, velocity, and position at the start of the phase.
    """
    dt: float
    j: float
    a: float
    v: float
    p: float

    def state_at(self, tau: float) -> JerkState:
        return JerkState(
            p=cj.position(tau, s0=self.p, v0=self.v, a0=self.a, j0=self.j),
            v=cj.velocity(tau, v0=self.v, a0=self.a, j0=self.j),
            a=cj.acceleration(tau, a0=self.a, j0=self.j),
            j=self.j
        )


class JerkSolver:
    """
    Plans and samples a rest-to-rest S-curve motion profile.

    Like `AccSolver`, the solver is configured, planned, and then sampled.
    Start and end velocity must both be zero.
    """
    def __init__(
        self,
        initial: InitialState | None = None,
        target: TargetState | None = None,
        limits: JerkLimits | None = None,
        logger: logging.Logger | None = None
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._initial: InitialState | None = None
        self._target: TargetState | None = None
        self._limits: JerkLimits | None = None
        self._reset_plan()
        self.configure(initial, target, limits)

    @classmethod
    def create(
        cls,
        p0: float,
        pe: float,
        a_max: float,
        v_max: float,
        j_max: float,
        t0: float = 0.0,
        **kwargs
    ) -> 'JerkSolver':
        """Returns a configured solver of which the motion has been planned."""
        solver = cls(
            InitialState(t0=t0, p0=p0),
            TargetState(pe=pe),
            JerkLimits(a_max=a_max, v_max=v_max, j_max=j_max),
            **kwargs
        )
        solver.plan()
        return solver

    def configure(
        self,
        initial: InitialState | None = None,
        target: TargetState | None = None,
        limits: JerkLimits | None = None
    ) -> None:
        """
        Sets the boundary states and/or the kinematic limits of the motion.
        Arguments left to None keep their current setting. Any previously
        planned motion is discarded.

        Raises
        ------
        InvalidConstraintError:
            If a limit is zero or negative.
        InvalidGeometryError:
            If the start or end velocity is not zero.
        """
        if limits is not None:
            for name in ("a_max", "v_max", "j_max"):
                value = getattr(limits, name)
                if not value > 0.0:
                    raise InvalidConstraintError(
                        f"`{name}` must be positive (got {value})."
                    )
            self._limits = limits
        if initial is not None:
            if initial.v0 != 0.0:
                raise InvalidGeometryError(
                    "Jerk-limited motion must start at rest "
                    f"(got v0 = {initial.v0})."
                )
            self._initial = initial
        if target is not None:
            if target.ve != 0.0:
                raise InvalidGeometryError(
                    "Jerk-limited motion must end at rest "
                    f"(got ve = {target.ve})."
                )
            self._target = target
        self._reset_plan()

    @property
    def configured(self) -> bool:
        return None not in (self._initial, self._target, self._limits)

    @property
    def planned(self) -> bool:
        return self._case is not None

    @property
    def limits(self) -> JerkLimits | None:
        return self._limits

    @property
    def a_max(self) -> float:
        return self._limits.a_max

    @property
    def v_max(self) -> float:
        return self._limits.v_max

    @property
    def j_max(self) -> float:
        return self._limits.j_max

    @property
    def t0(self) -> float:
        return self._initial.t0

    @property
    def p0(self) -> float:
        return self._initial.p0

    @property
    def pe(self) -> float:
        return self._target.pe

    @property
    def v0(self) -> float:
        return 0.0

    @property
    def ve(self) -> float:
        return 0.0

    @property
    def case(self) -> JerkCase:
        self._check_planned()
        return self._case

    @property
    def durations(self) -> tuple[float, float, float]:
        """
        Phase durations `(t1, t2, t3)` of the planned case: `t1` is the
        duration of each jerk phase; in case 1 `t2` is the constant-velocity
        duration; in cases 2 and 3 `t2` is the duration of each
        constant-acceleration plateau and in case 3 `t3` the constant-velocity
        duration. Unused durations are zero.
        """
        self._check_planned()
        return self._durations

    @property
    def phases(self) -> tuple[JerkPhase, ...]:
        self._check_planned()
        return self._phases

    @property
    def total_time(self) -> float:
        self._check_planned()
        return self._total_time

    def plan(self) -> float:
        """
        Selects the profile case, calculates the phase durations, and returns
        the total duration of the motion.

        Raises
        ------
        NotConfiguredError:
            If the boundary states or the limits have not been set.
        """
        self._check_configured()
        self._reset_plan()

        dp = self.pe - self.p0
        if dp == 0.0:
            self._case = JerkCase.NO_MOTION
            self.logger.debug("No motion needed: p0 = pe = %s", self.p0)
            return 0.0

        distance = abs(dp)
        j_max, a_max, v_max = self.j_max, self.a_max, self.v_max

        # Candidate without acceleration plateau nor constant-velocity phase:
        # the displacement of four equal jerk phases is 2 * j_max * t1**3.
        t1 = float(np.cbrt(distance / (2 * j_max)))
        a_peak = j_max * t1
        v_peak = a_peak * t1
        t2 = t3 = 0.0

        if a_peak < a_max:
            if v_peak < v_max:
                case = JerkCase.UNLIMITED
            else:
                case = JerkCase.VELOCITY_LIMITED
                t1, t2 = self._velocity_limited(distance)
        else:
            # Half the motion accelerates during t1 + t2 + t1 up to the peak
            # velocity a_max * (t1 + t2); the average velocity over the whole
            # motion is half the peak velocity, which gives
            # a_max * (t1 + t2) * (2 * t1 + t2) = distance.
            t1 = a_max / j_max
            t2 = -1.5 * t1 + 0.5 * math.sqrt(4 * distance / a_max + t1 * t1)
            if (t1 + t2) * a_max < v_max:
                case = JerkCase.ACCELERATION_LIMITED
            elif j_max * t1 * t1 <= v_max:
                case = JerkCase.FULLY_LIMITED
                t2 = v_max / a_max - t1
                t3 = self._non_negative(
                    distance / v_max - 2 * t1 - t2, "constant-velocity"
                )
            else:
                # The velocity limit is reached before the acceleration
                # limit could be.
                case = JerkCase.VELOCITY_LIMITED
                t1, t2 = self._velocity_limited(distance)

        if case is JerkCase.VELOCITY_LIMITED:
            phases = self._build_phases(sign(dp), t1, 0.0, t2)
        else:
            phases = self._build_phases(sign(dp), t1, t2, t3)
        self._case = case
        self._durations = (t1, t2, t3)
        self._phases = phases
        self._ends = tuple(accumulate(phase.dt for phase in phases))
        self._total_time = self._ends[-1]
        self.logger.debug(
            "Planned jerk profile case %d (%s): t1=%.6f t2=%.6f t3=%.6f, "
            "total time %.6f s",
            case.value, case.name.lower(), t1, t2, t3, self._total_time
        )
        return self._total_time

    def sample(self, t: float) -> JerkState:
        """
        Returns position, velocity, acceleration, and jerk at time moment `t`.

        Before the start time `t0` and after the end of the motion, the axis
        is at rest in the start, respectively the end position.
        """
        self._check_planned()
        if self._case is JerkCase.NO_MOTION:
            return JerkState(self.p0, 0.0, 0.0, 0.0)
        tau = t - self.t0
        if tau <= 0.0:
            return JerkState(self.p0, 0.0, 0.0, 0.0)
        if tau >= self._total_time:
            return JerkState(self.pe, 0.0, 0.0, 0.0)
        i = bisect.bisect_left(self._ends, tau)
        phase = self._phases[i]
        return phase.state_at(tau - (self._ends[i] - phase.dt))

    def _velocity_limited(self, distance: float) -> tuple[float, float]:
        t1 = math.sqrt(self.v_max / self.j_max)
        t2 = self._non_negative(
            distance / self.v_max - 2 * t1, "constant-velocity"
        )
        return t1, t2

    @staticmethod
    def _non_negative(dt: float, name: str) -> float:
        if dt < -1.e-9:
            raise NumericInvariantViolationError(
                f"Invalid trajectory: negative {name} duration ({dt}).",
                dt=dt
            )
        return max(dt, 0.0)

    def _build_phases(
        self,
        s: float,
        dt_jerk: float,
        dt_plateau: float,
        dt_cruise: float
    ) -> tuple[JerkPhase, ...]:
        """
        Integrates the jerk profile from rest at the start position and
        returns the non-empty phases with their entry states.
        """
        j = s * self.j_max
        segments = [
            (dt_jerk, j),
            (dt_plateau, 0.0),
            (dt_jerk, -j),
            (dt_cruise, 0.0),
            (dt_jerk, -j),
            (dt_plateau, 0.0),
            (dt_jerk, j)
        ]
        phases = []
        p, v, a = self.p0, 0.0, 0.0
        for dt, jj in segments:
            if dt <= 0.0:
                continue
            phase = JerkPhase(dt, jj, a, v, p)
            phases.append(phase)
            p, v, a, _ = phase.state_at(dt)
        return tuple(phases)

    def _reset_plan(self) -> None:
        self._case: JerkCase | None = None
        self._durations: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self._phases: tuple[JerkPhase, ...] = ()
        self._ends: tuple[float, ...] = ()
        self._total_time = 0.0

    def _check_configured(self) -> None:
        if not self.configured:
            raise NotConfiguredError(
                "Cannot plan the motion: boundary states or limits not set. "
                "Call `configure()` first."
            )

    def _check_planned(self) -> None:
        if self._case is None:
            raise NotConfiguredError(
                "Motion has not been planned. Call `plan()` first."
            )
