"""
Loading of the settings document of the command-line tool.

The settings are kept in a TOML file, e.g.::

    solver = "acc"
    p0 = 0.0
    pe = 10.0
    v0 = 0.0
    ve = 0.0
    amax = 2.0
    vmax = 5.0
    t0 = 0.0
    dt = 0.01
    verbose = false

The jerk solver also needs `jmax`; `dmax` and `goal_tolerance` are optional.
`solver` defaults to "acc" and `verbose` to false when left out.
The start position may be given as `ps` instead of `p0`.
"""
import logging
import tomllib
from enum import StrEnum
from pathlib import Path
from typing import Any
from dataclasses import dataclass

from twopoint.core.exceptions import ConfigurationError
from twopoint.motion import (
    AccSolver,
    JerkSolver,
    AngleSolver,
    InitialState,
    TargetState,
    AccLimits,
    JerkLimits
)
from twopoint.motion.constant_acc import DECEL_DISTANCE_TOLERANCE


class SolverType(StrEnum):
    ACC = "acc"
    JERK = "jerk"
    ANGLE = "angle"

    @classmethod
    def get_types(cls) -> list[str]:
        return [cls.ACC, cls.JERK, cls.ANGLE]


def load_config_toml(file_path: str | Path) -> dict[str, Any]:
    """
    Reads the TOML settings file and returns its content as a dictionary.

    Raises
    ------
    ConfigurationError:
        If the file cannot be opened or is not valid TOML.
    """
    try:
        with Path(file_path).open("rb") as f:
            return tomllib.load(f)
    except OSError as err:
        raise ConfigurationError(f"Cannot open settings file '{file_path}': {err}") from err
    except tomllib.TOMLDecodeError as err:
        raise ConfigurationError(f"Invalid settings file '{file_path}': {err}") from err


def _get_float(settings: dict[str, Any], key: str, default: float | None = None) -> float:
    if key not in settings:
        if default is not None:
            return default
        raise ConfigurationError(f"Missing setting `{key}`.")
    value = settings[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"Setting `{key}` must be a number (got {value!r}).")
    return float(value)


def _get_optional_float(settings: dict[str, Any], key: str) -> float | None:
    if key not in settings:
        return None
    return _get_float(settings, key)


@dataclass(frozen=True)
class PlanConfig:
    """
    Settings of a single planning run of the command-line tool.

    Attributes
    ----------
    solver:
        Which solver plans the motion.
    p0, pe:
        Start and end position.
    v0, ve:
        Start and end velocity (both zero for the jerk solver).
    a_max, v_max:
        Acceleration and velocity limit.
    d_max:
        Deceleration limit (constant-acceleration solvers only). If None,
        equal to `a_max`.
    j_max:
        Jerk limit (jerk solver only).
    t0:
        Reference start time.
    dt:
        Sampling interval of the output data.
    verbose:
        Log diagnostic output at DEBUG level.
    goal_tolerance:
        Relative tolerance of the braking-distance diagnostic.
    """
    solver: SolverType
    p0: float
    pe: float
    v0: float
    ve: float
    a_max: float
    v_max: float
    t0: float
    dt: float
    verbose: bool = False
    d_max: float | None = None
    j_max: float | None = None
    goal_tolerance: float = DECEL_DISTANCE_TOLERANCE

    @classmethod
    def from_dict(cls, settings: dict[str, Any]) -> 'PlanConfig':
        """
        Creates a `PlanConfig` from the settings dictionary returned by
        `load_config_toml()`.

        Raises
        ------
        ConfigurationError:
            If a required setting is missing or has the wrong type.
        """
        try:
            solver = SolverType(settings.get("solver", SolverType.ACC))
        except ValueError as err:
            raise ConfigurationError(
                f"Unknown solver {settings['solver']!r}; "
                f"choose from {SolverType.get_types()}."
            ) from err

        if "ps" in settings:
            p0 = _get_float(settings, "ps")
        else:
            p0 = _get_float(settings, "p0")

        if solver is SolverType.JERK:
            v0 = _get_float(settings, "v0", default=0.0)
            ve = _get_float(settings, "ve", default=0.0)
            j_max = _get_float(settings, "jmax")
        else:
            v0 = _get_float(settings, "v0")
            ve = _get_float(settings, "ve")
            j_max = _get_optional_float(settings, "jmax")

        dt = _get_float(settings, "dt")
        if dt <= 0.0:
            raise ConfigurationError(f"Setting `dt` must be positive (got {dt}).")

        verbose = settings.get("verbose", False)
        if not isinstance(verbose, bool):
            raise ConfigurationError(f"Setting `verbose` must be a boolean (got {verbose!r}).")

        return cls(
            solver=solver,
            p0=p0,
            pe=_get_float(settings, "pe"),
            v0=v0,
            ve=ve,
            a_max=_get_float(settings, "amax"),
            v_max=_get_float(settings, "vmax"),
            t0=_get_float(settings, "t0"),
            dt=dt,
            verbose=verbose,
            d_max=_get_optional_float(settings, "dmax"),
            j_max=j_max,
            goal_tolerance=_get_float(
                settings, "goal_tolerance", default=DECEL_DISTANCE_TOLERANCE
            )
        )

    def build_solver(
        self,
        logger: logging.Logger | None = None
    ) -> AccSolver | JerkSolver | AngleSolver:
        """
        Returns the configured (not yet planned) solver.

        Raises
        ------
        InvalidConstraintError:
            If a limit is zero or negative.
        InvalidGeometryError:
            If the jerk solver is given a non-zero boundary velocity.
        """
        initial = InitialState(t0=self.t0, p0=self.p0, v0=self.v0)
        target = TargetState(pe=self.pe, ve=self.ve)
        if self.solver is SolverType.JERK:
            limits = JerkLimits(a_max=self.a_max, v_max=self.v_max, j_max=self.j_max)
            return JerkSolver(initial, target, limits, logger=logger)
        limits = AccLimits(a_max=self.a_max, v_max=self.v_max, d_max=self.d_max)
        if self.solver is SolverType.ANGLE:
            return AngleSolver(
                initial, target, limits,
                goal_tolerance=self.goal_tolerance,
                logger=logger
            )
        return AccSolver(
            initial, target, limits,
            goal_tolerance=self.goal_tolerance,
            logger=logger
        )
