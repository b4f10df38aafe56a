"""Tests of the sampling, output, and inverse-lookup helpers in
``twopoint.motion.utils``."""

import math

import numpy as np
import pytest
import plotly.graph_objects as go

from twopoint.motion import AccSolver, JerkSolver, AngleSolver
from twopoint.motion.utils import (
    sample_profile,
    write_profile_data,
    plot_profiles,
    save_plot,
    time_at_position,
    step_delays
)


@pytest.fixture
def acc_solver():
    # triangular, 2 * sqrt(5) s long
    return AccSolver.create(p0=0.0, pe=10.0, a_max=2.0, v_max=5.0)


@pytest.fixture
def jerk_solver():
    return JerkSolver.create(p0=0.0, pe=1.0, a_max=10.0, v_max=10.0, j_max=1.0)


def test_sample_profile(acc_solver):
    profile = sample_profile(acc_solver, 0.1)
    assert set(profile) == {"time", "position", "velocity", "acceleration"}

    t = profile["time"]
    assert len(t) == 46
    assert t[0] == 0.0
    assert t[-1] == pytest.approx(2 * math.sqrt(5.0))
    assert np.all(np.diff(t) > 0.0)
    assert profile["position"][0] == 0.0
    assert profile["position"][-1] == 10.0
    assert profile["velocity"][-1] == 0.0
    assert profile["acceleration"][1] == pytest.approx(2.0)


def test_sample_profile_beyond_end(acc_solver):
    profile = sample_profile(acc_solver, 0.5, t_end=10.0)
    assert profile["time"][-1] == pytest.approx(10.0)
    assert np.all(profile["position"][profile["time"] > 5.0] == 10.0)


def test_sample_profile_with_jerk(jerk_solver):
    profile = sample_profile(jerk_solver, 0.01)
    assert "jerk" in profile
    assert set(np.unique(profile["jerk"])) <= {-1.0, 0.0, 1.0}
    assert profile["position"][-1] == 1.0


def test_sample_profile_requires_positive_interval(acc_solver):
    with pytest.raises(ValueError):
        sample_profile(acc_solver, 0.0)


def test_write_profile_data(acc_solver, tmp_path):
    profile = sample_profile(acc_solver, 0.1)
    path = write_profile_data(profile, tmp_path / "data.txt")
    data = np.loadtxt(path)
    assert data.shape == (46, 4)
    # time, acceleration, velocity, position
    assert data[-1] == pytest.approx([2 * math.sqrt(5.0), 0.0, 0.0, 10.0], abs=1.e-6)
    assert data[1] == pytest.approx([0.1, 2.0, 0.2, 0.01], abs=1.e-6)


def test_write_profile_data_with_jerk(jerk_solver, tmp_path):
    profile = sample_profile(jerk_solver, 0.05)
    data = np.loadtxt(write_profile_data(profile, tmp_path / "data_jerk.txt"))
    assert data.shape[1] == 5
    # time, jerk, acceleration, velocity, position
    assert data[1, 1] == pytest.approx(1.0)
    assert data[-1, 4] == pytest.approx(1.0)


def test_plot_profiles(acc_solver, jerk_solver, tmp_path):
    fig = plot_profiles(sample_profile(acc_solver, 0.1), title="acc")
    assert isinstance(fig, go.Figure)
    assert [trace.name for trace in fig.data] == ["acceleration", "velocity", "position"]

    fig = plot_profiles(sample_profile(jerk_solver, 0.1))
    assert len(fig.data) == 4
    path = save_plot(fig, tmp_path / "graph_jerk.html")
    assert path.exists()
    assert "<html>" in path.read_text(encoding="utf-8")


def test_time_at_position(acc_solver):
    # p = t**2 while accelerating
    assert time_at_position(acc_solver, 2.5) == pytest.approx(math.sqrt(2.5))
    assert time_at_position(acc_solver, 5.0) == pytest.approx(math.sqrt(5.0))
    assert time_at_position(acc_solver, 0.0) == 0.0
    assert time_at_position(acc_solver, 10.0) == pytest.approx(acc_solver.total_time)
    with pytest.raises(ValueError):
        time_at_position(acc_solver, 11.0)


def test_time_at_position_backward():
    solver = AccSolver.create(p0=4.0, pe=-4.0, a_max=1.0, v_max=2.0, t0=1.0)
    t = time_at_position(solver, 0.0)
    assert t == pytest.approx(solver.t0 + solver.total_time / 2)
    assert solver.sample(t).p == pytest.approx(0.0, abs=1.e-9)


def test_step_delays(acc_solver):
    delays = step_delays(acc_solver, 1.0)
    assert len(delays) == 10
    assert np.all(delays > 0.0)
    assert delays.sum() == pytest.approx(acc_solver.total_time)
    assert delays[0] == pytest.approx(1.0)
    # the axis speeds up, then slows down again
    assert delays[0] > delays[4]
    assert delays[-1] > delays[5]
    with pytest.raises(ValueError):
        step_delays(acc_solver, -0.1)


def test_step_delays_of_rotary_axis():
    solver = AngleSolver.create(p0=3.0, pe=-3.0, a_max=1.0, v_max=0.5)
    delays = step_delays(solver, 0.05)
    assert len(delays) == 5
    assert np.all(delays > 0.0)
