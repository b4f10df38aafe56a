"""Tests of ``twopoint.motion.constant_jerk``: rest-to-rest S-curves."""

import logging
import math

import numpy as np
import pytest

from twopoint.core.exceptions import (
    InvalidConstraintError,
    InvalidGeometryError,
    NotConfiguredError
)
from twopoint.motion import (
    JerkSolver,
    JerkCase,
    InitialState,
    TargetState,
    JerkLimits
)


EPS = 1.e-6

# p0, pe, a_max, v_max, j_max, expected case
CASES = [
    pytest.param(0.0, 1.0, 10.0, 10.0, 1.0, JerkCase.UNLIMITED, id="unlimited"),
    pytest.param(0.0, -1.0, 10.0, 10.0, 1.0, JerkCase.UNLIMITED, id="unlimited-backward"),
    pytest.param(0.0, 100.0, 10.0, 2.0, 1.0, JerkCase.VELOCITY_LIMITED, id="velocity-limited"),
    pytest.param(0.0, 10.0, 1.0, 100.0, 10.0, JerkCase.ACCELERATION_LIMITED, id="acceleration-limited"),
    pytest.param(10.0, 0.0, 1.0, 100.0, 10.0, JerkCase.ACCELERATION_LIMITED, id="acceleration-limited-backward"),
    pytest.param(0.0, 100.0, 2.0, 5.0, 0.98, JerkCase.FULLY_LIMITED, id="fully-limited"),
    pytest.param(5.5, 100.0, 1.0, 5.0, 0.98, JerkCase.FULLY_LIMITED, id="fully-limited-offset"),
    pytest.param(100.0, -20.0, 2.0, 5.0, 0.98, JerkCase.FULLY_LIMITED, id="fully-limited-backward"),
    pytest.param(0.0, 100.0, 2.0, 1.0, 1.0, JerkCase.VELOCITY_LIMITED, id="velocity-before-acceleration"),
]


@pytest.mark.parametrize("p0, pe, a_max, v_max, j_max, case", CASES)
def test_profile_cases(p0, pe, a_max, v_max, j_max, case):
    solver = JerkSolver.create(p0=p0, pe=pe, a_max=a_max, v_max=v_max, j_max=j_max)
    assert solver.case is case
    total = solver.total_time

    # endpoints
    assert solver.sample(0.0) == (p0, 0.0, 0.0, 0.0)
    assert solver.sample(total) == (pe, 0.0, 0.0, 0.0)
    p, v, a, _ = solver.sample(total - EPS)
    assert p == pytest.approx(pe, abs=1.e-6)
    assert v == pytest.approx(0.0, abs=1.e-6)
    assert a == pytest.approx(0.0, abs=1.1 * EPS * j_max)

    # The profile is symmetric about half-time.
    assert solver.sample(total / 2).p == pytest.approx((p0 + pe) / 2)

    # phase table
    assert sum(phase.dt for phase in solver.phases) == pytest.approx(total)
    for phase in solver.phases:
        assert phase.dt > 0.0
        assert abs(phase.j) in (0.0, j_max)

    # continuity at the phase boundaries
    t_b = 0.0
    for phase in solver.phases[:-1]:
        t_b += phase.dt
        before, at, after = (solver.sample(t) for t in (t_b - EPS, t_b, t_b + EPS))
        for s1, s2 in ((before, at), (at, after)):
            assert abs(s1.p - s2.p) <= 1.1 * EPS * v_max
            assert abs(s1.v - s2.v) <= 1.1 * EPS * a_max
            assert abs(s1.a - s2.a) <= 1.1 * EPS * j_max

    # limits
    for t in np.linspace(0.0, total, 1001):
        _, v, a, j = solver.sample(float(t))
        assert abs(v) <= v_max + 1.e-9
        assert abs(a) <= a_max + 1.e-9
        assert abs(j) <= j_max

    assert total >= abs(pe - p0) / v_max - 1.e-6


def test_unlimited_durations():
    solver = JerkSolver.create(p0=0.0, pe=1.0, a_max=10.0, v_max=10.0, j_max=1.0)
    t1 = (0.5) ** (1 / 3)
    assert solver.durations == pytest.approx((t1, 0.0, 0.0))
    assert solver.total_time == pytest.approx(4 * t1)
    assert len(solver.phases) == 4

    # first phase from rest: a = j*t, v = j*t**2/2, p = j*t**3/6
    t = 0.5
    assert solver.sample(t) == pytest.approx((t ** 3 / 6, t ** 2 / 2, t, 1.0))
    # peak velocity at half-time
    assert solver.sample(2 * t1).v == pytest.approx(t1 ** 2)


def test_velocity_limited_durations():
    solver = JerkSolver.create(p0=0.0, pe=100.0, a_max=10.0, v_max=2.0, j_max=1.0)
    t1, t2, t3 = solver.durations
    assert t1 == pytest.approx(math.sqrt(2.0))
    assert t2 == pytest.approx(50.0 - 2 * math.sqrt(2.0))
    assert t3 == 0.0
    assert len(solver.phases) == 5
    assert solver.sample(25.0).v == pytest.approx(2.0)


def test_acceleration_limited_durations():
    solver = JerkSolver.create(p0=0.0, pe=10.0, a_max=1.0, v_max=100.0, j_max=10.0)
    t1, t2, t3 = solver.durations
    assert t1 == pytest.approx(0.1)
    assert t2 == pytest.approx(-0.15 + 0.5 * math.sqrt(40.01))
    assert t3 == 0.0
    # a_max * (t1 + t2) * (2*t1 + t2) covers the distance
    assert (t1 + t2) * (2 * t1 + t2) == pytest.approx(10.0)
    assert solver.total_time == pytest.approx(4 * t1 + 2 * t2)
    assert len(solver.phases) == 6
    assert solver.sample(t1 + t2 / 2).a == pytest.approx(1.0)


def test_fully_limited_durations():
    solver = JerkSolver.create(p0=0.0, pe=100.0, a_max=2.0, v_max=5.0, j_max=0.98)
    t1, t2, t3 = solver.durations
    assert t1 == pytest.approx(2.0 / 0.98)
    assert t2 == pytest.approx(2.5 - 2.0 / 0.98)
    assert t3 == pytest.approx(20.0 - 2 * t1 - t2)
    assert len(solver.phases) == 7
    assert solver.total_time == pytest.approx(4 * t1 + 2 * t2 + t3)

    p, v, a, j = solver.sample(solver.total_time / 2)
    assert p == pytest.approx(50.0)
    assert v == pytest.approx(5.0)
    assert a == pytest.approx(0.0, abs=1.e-12)
    assert j == 0.0


def test_start_time():
    solver = JerkSolver.create(
        p0=5.5, pe=100.0, a_max=1.0, v_max=5.0, j_max=0.98, t0=0.5
    )
    assert solver.t0 == 0.5
    assert solver.sample(0.0) == (5.5, 0.0, 0.0, 0.0)
    assert solver.sample(0.5 + solver.total_time + 1.0) == (100.0, 0.0, 0.0, 0.0)
    assert solver.sample(0.5 + solver.total_time / 2).p == pytest.approx(52.75)


def test_no_motion():
    solver = JerkSolver.create(p0=3.0, pe=3.0, a_max=1.0, v_max=1.0, j_max=1.0)
    assert solver.case is JerkCase.NO_MOTION
    assert solver.total_time == 0.0
    assert solver.phases == ()
    assert solver.sample(1.0) == (3.0, 0.0, 0.0, 0.0)


def test_moving_boundary_states_are_rejected():
    limits = JerkLimits(a_max=1.0, v_max=1.0, j_max=1.0)
    with pytest.raises(InvalidGeometryError):
        JerkSolver(InitialState(v0=1.0), TargetState(pe=5.0), limits)
    with pytest.raises(InvalidGeometryError):
        JerkSolver(InitialState(), TargetState(pe=5.0, ve=-0.5), limits)


@pytest.mark.parametrize(
    "limits",
    [
        JerkLimits(a_max=0.0, v_max=1.0, j_max=1.0),
        JerkLimits(a_max=1.0, v_max=-1.0, j_max=1.0),
        JerkLimits(a_max=1.0, v_max=1.0, j_max=-2.0),
    ],
)
def test_invalid_limits(limits):
    with pytest.raises(InvalidConstraintError):
        JerkSolver(limits=limits)


def test_plan_before_configure():
    solver = JerkSolver(InitialState(), TargetState(pe=5.0))
    with pytest.raises(NotConfiguredError):
        solver.plan()
    with pytest.raises(NotConfiguredError):
        solver.sample(0.0)


def test_reconfigure_discards_plan():
    solver = JerkSolver(
        InitialState(), TargetState(pe=1.0), JerkLimits(10.0, 10.0, 1.0)
    )
    solver.plan()
    assert solver.case is JerkCase.UNLIMITED
    solver.configure(limits=JerkLimits(10.0, 0.1, 1.0))
    assert not solver.planned
    solver.plan()
    assert solver.case is JerkCase.VELOCITY_LIMITED


def test_planned_motion_is_logged(caplog):
    logger = logging.getLogger("test.constant_jerk")
    with caplog.at_level(logging.DEBUG, logger="test.constant_jerk"):
        JerkSolver.create(
            p0=0.0, pe=100.0, a_max=2.0, v_max=5.0, j_max=0.98, logger=logger
        )
    assert "case 3 (fully_limited)" in caplog.text
