"""Command-line interface (headless landscape sweep)."""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

import numpy as np

from fitlandscape.config import DEFAULT_N_POINTS, DEFAULT_NOISE_SCALE, GRID_START, GRID_STOP, GRID_STEP
from fitlandscape.controller.session import SessionController
from fitlandscape.logging_config import setup_logging
from fitlandscape.model.coefficients import CoefficientPair, GROUND_TRUTH
from fitlandscape.model.errors import FitLandscapeError
from fitlandscape.model.state import SessionState
from fitlandscape.model.surface import beta_range

logger = logging.getLogger("fitlandscape.cli")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="python -m fitlandscape",
        description="Generate a noisy dataset and sweep the RMSE over a (beta1, beta2) grid.",
    )
    ap.add_argument("--n", type=int, default=DEFAULT_N_POINTS, help="number of points")
    ap.add_argument("--noise", type=float, default=DEFAULT_NOISE_SCALE, help="full width of the noise interval")
    ap.add_argument("--seed", type=int, default=None, help="seed for a reproducible dataset")
    # Any finite value is evaluated as given; only the GUI sliders clamp to [-10, 10]
    ap.add_argument("--beta1", type=float, default=GROUND_TRUTH.beta1, help="selected beta1, used as given (not clamped)")
    ap.add_argument("--beta2", type=float, default=GROUND_TRUTH.beta2, help="selected beta2, used as given (not clamped)")
    ap.add_argument("--step", type=float, default=GRID_STEP, help="grid step over [-10, 10]")
    ap.add_argument("--plot", action="store_true", help="show the surface with matplotlib")
    ap.add_argument("--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS)
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        grid = beta_range(GRID_START, GRID_STOP, args.step)
        state = SessionState(n_points=args.n, noise_scale=args.noise, beta=CoefficientPair(args.beta1, args.beta2))
        controller = SessionController(
            state, rng=np.random.default_rng(args.seed), beta1_range=grid, beta2_range=grid
        )
        controller.regenerate_dataset()
    except FitLandscapeError as e:
        logger.error(str(e))
        return 2

    surface = state.surface
    best, best_error = surface.grid_minimum()
    logger.info(f"RMSE at {state.beta}: {state.point_error:.4f}")
    logger.info(f"Lowest grid cell {best}: {best_error:.4f}")

    if args.plot:
        surface.plot(selected=state.beta, point_error=state.point_error)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
