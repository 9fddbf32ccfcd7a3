"""
Synthetic Dataset
=================
Holds the two predictors and the noisy response, and generates them from the
known ground-truth relationship y = 3*x1 + 2*x2 + noise.

Why is this file needed?
------------------------
1. Contract: every other component relies on x1, x2 and y having the same
   length. The Dataset enforces that once, at construction.
2. Immutability: the arrays are frozen so a dataset can be shared by the
   metric, the surface sweep and the projector without defensive copies.
   Regeneration replaces the whole object.
3. Reproducibility: the random source is injected, so tests can pass a
   seeded `numpy.random.Generator`.

Classes:
    Dataset: Immutable container of x1, x2, y.

Functions:
    generate_dataset: Draw a fresh noisy dataset.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from fitlandscape.config import DEFAULT_N_POINTS, DEFAULT_NOISE_SCALE, PREDICTOR_LOW, PREDICTOR_HIGH
from fitlandscape.model.coefficients import GROUND_TRUTH
from fitlandscape.model.errors import InvalidParameterError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _as_frozen_column(values: Sequence[float] | npt.NDArray[np.float64], name: str) -> npt.NDArray[np.float64]:
    """Copy `values` into a contiguous, read-only float64 vector."""
    try:
        arr = np.array(values, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"'{name}' must be a sequence of real numbers.") from e
    if arr.ndim != 1:
        raise InvalidParameterError(f"'{name}' must be one-dimensional, got shape {arr.shape}.")
    if not np.isfinite(arr).all():
        raise InvalidParameterError(f"'{name}' must contain only finite values.")
    arr = np.ascontiguousarray(arr)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Two predictors and one response of identical length N.

    Equality is identity: two independently generated datasets are never
    "the same dataset", even if their values happen to match.
    """
    x1: npt.NDArray[np.float64]
    x2: npt.NDArray[np.float64]
    y: npt.NDArray[np.float64]

    def __post_init__(self) -> None:
        x1 = _as_frozen_column(self.x1, "x1")
        x2 = _as_frozen_column(self.x2, "x2")
        y = _as_frozen_column(self.y, "y")
        if not (x1.shape[0] == x2.shape[0] == y.shape[0]):
            raise InvalidParameterError(
                f"x1, x2 and y must have equal length, got {x1.shape[0]}, {x2.shape[0]}, {y.shape[0]}."
            )
        object.__setattr__(self, "x1", x1)
        object.__setattr__(self, "x2", x2)
        object.__setattr__(self, "y", y)

    @classmethod
    def from_sequences(cls, x1: Sequence[float], x2: Sequence[float], y: Sequence[float]) -> Dataset:
        return cls(x1=x1, x2=x2, y=y)

    @property
    def n_points(self) -> int:
        return int(self.x1.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.n_points == 0

    def __len__(self) -> int:
        return self.n_points

    def __repr__(self) -> str:
        return f"Dataset(n_points={self.n_points})"


def generate_dataset(
    n: int = DEFAULT_N_POINTS,
    noise_scale: float = DEFAULT_NOISE_SCALE,
    rng: Optional[np.random.Generator] = None,
) -> Dataset:
    """
    Draw a new synthetic dataset from the ground-truth model.

    x1 and x2 are drawn independently from U[-10, 10]. The response is
    y = 3*x1 + 2*x2 + noise with noise ~ U[-noise_scale/2, noise_scale/2],
    i.e. `noise_scale` is the full width of the noise interval (the default
    of 10 gives a ±5 spread).

    Args:
        n: Number of samples, must be a positive integer.
        noise_scale: Full width of the noise interval, must be >= 0.
        rng: Random source. A fresh `np.random.default_rng()` when omitted.

    Returns:
        A new, immutable Dataset. No state is touched.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
        raise InvalidParameterError(f"Number of points must be a positive integer, got {n!r}.")
    try:
        noise_scale = float(noise_scale)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"Noise scale must be a real number, got {noise_scale!r}.") from e
    if not math.isfinite(noise_scale) or noise_scale < 0.0:
        raise InvalidParameterError(f"Noise scale must be finite and >= 0, got {noise_scale}.")

    if rng is None:
        rng = np.random.default_rng()

    n = int(n)
    x1 = rng.uniform(PREDICTOR_LOW, PREDICTOR_HIGH, size=n)
    x2 = rng.uniform(PREDICTOR_LOW, PREDICTOR_HIGH, size=n)
    half_width = 0.5 * noise_scale
    noise = rng.uniform(-half_width, half_width, size=n) if half_width > 0.0 else np.zeros(n)
    y = GROUND_TRUTH.beta1 * x1 + GROUND_TRUTH.beta2 * x2 + noise

    logger.info(f"Generated dataset with {n} points (noise width {noise_scale:g}).")
    return Dataset(x1=x1, x2=x2, y=y)
