"""
Command-line tool that plans a point-to-point motion from a TOML settings
file, samples it, and saves the sampled profiles together with a plot.

Usage::

    twopoint settings.toml [--solver {acc,jerk,angle}] [--output DIR]
             [--no-plot] [--log-file FILE]

Exit codes: 0 on success, 1 if the settings are invalid, 2 if no trajectory
can be planned, 3 if the results cannot be saved.
"""
import argparse
import logging
import sys
from pathlib import Path

from twopoint.core.exceptions import ConfigurationError, TrajectoryError
from twopoint.motion import AccSolver, JerkSolver, AngleSolver
from twopoint.motion.utils import (
    sample_profile,
    write_profile_data,
    plot_profiles,
    save_plot
)
from twopoint.utils.log_utils import init_logger

from .config_loader import load_config_toml, PlanConfig, SolverType


EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_PLANNING_ERROR = 2
EXIT_OUTPUT_ERROR = 3

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twopoint",
        description="Plan a point-to-point motion under kinematic limits."
    )
    parser.add_argument("config", type=Path, help="TOML settings file")
    parser.add_argument(
        "--solver",
        choices=SolverType.get_types(),
        default=None,
        help="overrides the `solver` setting of the settings file"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("."),
        help="directory in which the data file and the plot are saved"
    )
    parser.add_argument(
        "--no-plot",
        action="store_true",
        help="do not save a plot of the profiles"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="also write log records to this file"
    )
    return parser


def run(
    config: PlanConfig,
    solver: AccSolver | JerkSolver | AngleSolver,
    output_dir: Path,
    plot: bool = True
) -> dict[str, Path]:
    """
    Plans the motion of the configured `solver`, samples it at the interval
    set in `config`, and saves the results in `output_dir`. Returns the
    paths of the saved files.

    Raises
    ------
    TrajectoryError:
        If the motion cannot be planned.
    OSError:
        If the output directory or a file cannot be written.
    """
    total_time = solver.plan()
    logger.info(
        "Planned %s motion %s -> %s: total time %.6f s",
        config.solver, config.p0, config.pe, total_time
    )

    profile = sample_profile(solver, config.dt)
    suffix = "_jerk" if config.solver is SolverType.JERK else ""
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = {"data": write_profile_data(profile, output_dir / f"data{suffix}.txt")}
    if plot:
        fig = plot_profiles(profile, title=f"{config.solver} solver, total time {total_time:.3f} s")
        paths["plot"] = save_plot(fig, output_dir / f"graph{suffix}.html")
    for name, path in paths.items():
        logger.info("Saved %s to %s", name, path)
    return paths


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    init_logger(log_file=args.log_file, level=logging.INFO)

    try:
        settings = load_config_toml(args.config)
        if args.solver is not None:
            settings["solver"] = args.solver
        config = PlanConfig.from_dict(settings)
    except ConfigurationError as err:
        logger.error("Configuration failed: %s", err)
        return EXIT_CONFIG_ERROR

    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        solver = config.build_solver()
    except (TrajectoryError, ValueError) as err:
        logger.error("Configuration failed: %s", err)
        return EXIT_CONFIG_ERROR

    try:
        paths = run(config, solver, args.output, plot=not args.no_plot)
    except TrajectoryError as err:
        logger.error("Planning failed: %s", err)
        return EXIT_PLANNING_ERROR
    except OSError as err:
        logger.error("Saving results failed: %s", err)
        return EXIT_OUTPUT_ERROR

    print(f"Saved {', '.join(str(p) for p in paths.values())}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
