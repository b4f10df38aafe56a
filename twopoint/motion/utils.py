import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import root_scalar
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from .constant_acc import AccSolver
from .constant_jerk import JerkSolver
from .angle import AngleSolver


logger = logging.getLogger(__name__)

TSolver = AccSolver | JerkSolver | AngleSolver
TProfileDict = dict[str, NDArray[np.float64]]

_FONT = dict(family="Helvetica, Arial, sans-serif", size=13)

_LABELS = {
    "jerk": "jerk",
    "acceleration": "acceleration",
    "velocity": "velocity",
    "position": "position",
}


def _position(solver: TSolver, t: float) -> float:
    # Root finding needs a continuous position: angles are not wrapped.
    if isinstance(solver, AngleSolver):
        return solver.sample(t, normalize=False).p
    return solver.sample(t).p


def sample_profile(
    solver: TSolver,
    dt: float,
    t_end: float | None = None
) -> TProfileDict:
    """
    Samples a planned motion at a fixed time interval.

    Parameters
    ----------
    solver:
        Solver of which the motion has been planned.
    dt:
        Sampling interval (> 0).
    t_end: optional
        Time moment of the last sample. Default is the end of the motion,
        `t0 + total_time`.

    Returns
    -------
    Dictionary with Numpy arrays under keys "time", "position", "velocity",
    "acceleration", and (for a `JerkSolver`) "jerk".
    """
    if dt <= 0.0:
        raise ValueError("Sampling interval `dt` must be positive.")
    t_start = solver.t0
    if t_end is None:
        t_end = t_start + solver.total_time
    n = int(np.floor((t_end - t_start) / dt + 1.e-9)) + 1
    t_arr = t_start + dt * np.arange(max(n, 1))
    if t_arr[-1] < t_end - 1.e-12:
        t_arr = np.append(t_arr, t_end)

    states = np.array([solver.sample(float(t)) for t in t_arr])
    profile = {
        "time": t_arr,
        "position": states[:, 0],
        "velocity": states[:, 1],
        "acceleration": states[:, 2],
    }
    if isinstance(solver, JerkSolver):
        profile["jerk"] = states[:, 3]
    logger.debug("Sampled %d points between %.6f and %.6f s", len(t_arr), t_start, t_end)
    return profile


def write_profile_data(profile: TProfileDict, path: str | Path) -> Path:
    """
    Writes a sampled profile to a text file, one sample per line. The columns
    are time, acceleration, velocity, and position, with the jerk inserted
    after the time when the profile contains it.
    """
    keys = ["time", "acceleration", "velocity", "position"]
    if "jerk" in profile:
        keys.insert(1, "jerk")
    path = Path(path)
    np.savetxt(path, np.column_stack([profile[k] for k in keys]), fmt="%.6f")
    return path


def plot_profiles(profile: TProfileDict, title: str | None = None) -> go.Figure:
    """
    Returns a plotly `Figure` with the jerk (if present), acceleration,
    velocity, and position profiles stacked on a shared time axis.
    """
    keys = [k for k in ("jerk", "acceleration", "velocity", "position") if k in profile]
    fig = make_subplots(
        rows=len(keys), cols=1,
        shared_xaxes=True,
        subplot_titles=[_LABELS[k] for k in keys]
    )
    for row, key in enumerate(keys, start=1):
        fig.add_trace(
            go.Scatter(
                x=profile["time"],
                y=profile[key],
                mode="lines",
                name=_LABELS[key]
            ),
            row=row, col=1
        )
    fig.update_xaxes(title=dict(text="time, s", font=_FONT), row=len(keys), col=1)
    fig.update_layout(
        title=title,
        showlegend=False,
        font=_FONT,
        height=250 * len(keys),
        margin=dict(l=40, r=40, t=60, b=40)
    )
    return fig


def save_plot(fig: go.Figure, path: str | Path) -> Path:
    """Saves the figure as a standalone HTML file."""
    path = Path(path)
    fig.write_html(path)
    return path


def time_at_position(
    solver: TSolver,
    s: float,
    t_min: float | None = None
) -> float:
    """
    Returns the time moment at which the axis reaches position `s`.

    Parameters
    ----------
    solver:
        Solver of which the motion has been planned. For an `AngleSolver`,
        `s` is an unwrapped angle between `solver.p0` and `solver.pe`.
    s:
        Position to look up.
    t_min: optional
        Time moment from which to search. Default is the start time `t0`.
        If the axis passes `s` more than once, the first passage after
        `t_min` is only guaranteed when `t_min` brackets it.

    Raises
    ------
    ValueError:
        If the position is not reached between `t_min` and the end of the
        motion.
    """
    t_lo = solver.t0 if t_min is None else t_min
    t_hi = solver.t0 + solver.total_time
    f_lo = _position(solver, t_lo) - s
    if f_lo == 0.0:
        return t_lo
    f_hi = _position(solver, t_hi) - s
    if f_hi == 0.0:
        return t_hi
    if np.sign(f_lo) == np.sign(f_hi):
        raise ValueError(
            f"Position {s} is not reached between t = {t_lo} and t = {t_hi}."
        )
    sol = root_scalar(
        lambda t: _position(solver, t) - s,
        bracket=(t_lo, t_hi),
        method="brentq",
        xtol=1.e-12
    )
    return sol.root


def step_delays(solver: TSolver, step: float) -> NDArray[np.float64]:
    """
    Returns the time delays between successive step pulses of an axis that
    moves from `solver.p0` toward `solver.pe` in increments of `step` (e.g.
    the step angle of a stepper motor). The first delay is counted from the
    start time `t0`.

    The motion is assumed not to reverse direction.
    """
    if step <= 0.0:
        raise ValueError("Step size must be positive.")
    dp = solver.pe - solver.p0
    n_steps = int(np.floor(abs(dp) / step + 1.e-9))
    direction = 1.0 if dp >= 0.0 else -1.0
    times = [solver.t0]
    for k in range(1, n_steps + 1):
        s = solver.p0 + direction * k * step
        if direction * (s - solver.pe) > 0.0:
            s = solver.pe
        times.append(time_at_position(solver, s, t_min=times[-1]))
    return np.diff(np.array(times))
