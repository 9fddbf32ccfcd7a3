"""
Error Surface Evaluation
========================
Brute-force sweep of the RMSE over an evenly spaced 2-D grid of coefficient
pairs.

Why is this file needed?
------------------------
1. Landscape: the whole grid is evaluated on purpose (no solver, no gradient
   steps) because the goal is to SEE the loss landscape, not to converge to
   its minimum.
2. Consistency: every cell and the selected-pair marker go through the same
   `rmse_kernel`, so the marker sits exactly on the surface whenever the
   selected pair is a grid point.
3. Cost: O(len(beta1) * len(beta2) * N), i.e. ~168k residual evaluations for
   the default 41 x 41 grid and 100 points. The controller therefore only
   re-sweeps when the dataset changes.

Note: This module should be pure Python/NumPy/Numba and should NOT import PySide6.
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

import numba as nb
import numpy as np

from fitlandscape.config import GRID_START, GRID_STOP, GRID_STEP
from fitlandscape.model.coefficients import CoefficientPair
from fitlandscape.model.errors import InvalidRangeError, EmptyDatasetError, NonFiniteResultError
from fitlandscape.model.metric import rmse, rmse_kernel

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.figure import Figure

    from fitlandscape.model.dataset import Dataset

logger = logging.getLogger(__name__)


# ==========================================
# GRID CONSTRUCTION
# ==========================================

def beta_range(
    start: float = GRID_START,
    stop: float = GRID_STOP,
    step: float = GRID_STEP,
) -> npt.NDArray[np.float64]:
    """
    Evenly spaced samples from `start` to `stop` (both inclusive when `step`
    divides the span).

    The defaults give 41 samples -10.0, -9.5, ..., 10.0.
    """
    if not all(math.isfinite(v) for v in (start, stop, step)):
        raise InvalidRangeError(f"Grid bounds must be finite, got start={start}, stop={stop}, step={step}.")
    if step <= 0.0:
        raise InvalidRangeError(f"Grid step must be positive, got {step}.")
    if stop < start:
        raise InvalidRangeError(f"Grid stop ({stop}) is below grid start ({start}).")

    # The small epsilon keeps `stop` when float division lands just below an integer
    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    samples = start + step * np.arange(count, dtype=np.float64)
    return np.round(samples, 12)


def _validate_samples(samples: Sequence[float] | npt.NDArray[np.float64], name: str) -> npt.NDArray[np.float64]:
    try:
        arr = np.array(samples, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise InvalidRangeError(f"'{name}' must be a sequence of real numbers.") from e

    if arr.ndim != 1:
        raise InvalidRangeError(f"'{name}' must be one-dimensional, got shape {arr.shape}.")
    if arr.size == 0:
        raise InvalidRangeError(f"'{name}' is empty.")
    if not np.all(np.isfinite(arr)):
        raise InvalidRangeError(f"'{name}' contains non-finite values.")
    if np.any(np.diff(arr) < 0.0):
        raise InvalidRangeError(f"'{name}' must be ordered (non-decreasing).")

    arr = np.ascontiguousarray(arr)
    arr.flags.writeable = False
    return arr


# ==========================================
# SWEEP
# ==========================================

@nb.njit(cache=True)
def surface_kernel(
    x1: npt.NDArray[np.float64],
    x2: npt.NDArray[np.float64],
    y: npt.NDArray[np.float64],
    beta1_samples: npt.NDArray[np.float64],
    beta2_samples: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """values[i, j] = RMSE at (beta1_samples[i], beta2_samples[j])."""
    n1 = beta1_samples.shape[0]
    n2 = beta2_samples.shape[0]
    values = np.empty((n1, n2), dtype=np.float64)
    for i in range(n1):
        for j in range(n2):
            values[i, j] = rmse_kernel(x1, x2, y, beta1_samples[i], beta2_samples[j])
    return values


@dataclass(frozen=True, eq=False)
class ErrorSurface:
    """
    RMSE matrix over a grid of coefficient pairs.

    Attributes:
        beta1_samples: (A,) ordered beta1 samples (rows).
        beta2_samples: (B,) ordered beta2 samples (columns).
        values: (A, B) RMSE values, read-only.
        dataset: The dataset the surface was computed from.
    """
    beta1_samples: npt.NDArray[np.float64]
    beta2_samples: npt.NDArray[np.float64]
    values: npt.NDArray[np.float64]
    dataset: Dataset

    @property
    def shape(self) -> tuple[int, int]:
        return int(self.values.shape[0]), int(self.values.shape[1])

    def is_current_for(self, dataset: Optional[Dataset]) -> bool:
        """True if this surface was computed from exactly `dataset`."""
        return dataset is not None and self.dataset is dataset

    def value_at(self, beta: CoefficientPair, atol: float = 1e-9) -> Optional[float]:
        """
        Surface value at `beta` if it coincides with a grid sample, else None.
        """
        rows = np.flatnonzero(np.isclose(self.beta1_samples, beta.beta1, rtol=0.0, atol=atol))
        cols = np.flatnonzero(np.isclose(self.beta2_samples, beta.beta2, rtol=0.0, atol=atol))
        if rows.size == 0 or cols.size == 0:
            return None
        return float(self.values[rows[0], cols[0]])

    def grid_minimum(self) -> tuple[CoefficientPair, float]:
        """Lowest cell of the surface and its RMSE (first one on ties)."""
        i, j = np.unravel_index(int(np.argmin(self.values)), self.values.shape)
        best = CoefficientPair(float(self.beta1_samples[i]), float(self.beta2_samples[j]))
        return best, float(self.values[i, j])

    def plot(
        self,
        selected: Optional[CoefficientPair] = None,
        point_error: Optional[float] = None,
        show: bool = True,
    ) -> Figure:
        """
        Quick-look matplotlib rendering of the surface (headless CLI / notebooks).
        """
        import matplotlib.pyplot as plt

        b1, b2 = np.meshgrid(self.beta1_samples, self.beta2_samples, indexing="ij")

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 5))
        ax = fig.add_subplot(projection="3d")

        ax.plot_surface(b1, b2, self.values, cmap="RdBu", alpha=0.5, linewidth=0)
        if selected is not None and point_error is not None:
            ax.scatter([selected.beta1], [selected.beta2], [point_error], color="red", s=40)

        ax.set_title("RMSE Surface")
        ax.set_xlabel("Beta1")
        ax.set_ylabel("Beta2")
        ax.set_zlabel("RMSE")

        if show:
            plt.show()
        return fig


def evaluate_surface(
    dataset: Dataset,
    beta1_range: Sequence[float] | npt.NDArray[np.float64],
    beta2_range: Sequence[float] | npt.NDArray[np.float64],
    selected: CoefficientPair,
) -> tuple[ErrorSurface, float]:
    """
    Sweep the full grid and compute the error at the selected pair.

    Args:
        dataset: Dataset with at least one point.
        beta1_range: Ordered, non-empty beta1 samples (A values).
        beta2_range: Ordered, non-empty beta2 samples (B values).
        selected: Current coefficient pair (marker position).

    Returns:
        (surface, point_error) where surface.values has shape (A, B).

    Raises:
        InvalidRangeError: if either range is empty, unordered or non-finite.
        EmptyDatasetError: if the dataset has zero points.
        InvalidParameterError: if `selected` holds a NaN or infinite coefficient.
        NonFiniteResultError: if any grid cell or the point error overflows.
    """
    beta1_samples = _validate_samples(beta1_range, "beta1_range")
    beta2_samples = _validate_samples(beta2_range, "beta2_range")
    if dataset.is_empty:
        raise EmptyDatasetError("Dataset has no points; the error surface is undefined.")

    t0 = time.perf_counter()
    values = surface_kernel(dataset.x1, dataset.x2, dataset.y, beta1_samples, beta2_samples)
    values.flags.writeable = False
    elapsed = time.perf_counter() - t0
    if not np.isfinite(values).all():
        raise NonFiniteResultError("Error surface overflowed; reduce the coefficient ranges.")

    surface = ErrorSurface(
        beta1_samples=beta1_samples,
        beta2_samples=beta2_samples,
        values=values,
        dataset=dataset,
    )
    point_error = rmse(dataset, selected)

    logger.info(
        f"Evaluated {surface.shape[0]}x{surface.shape[1]} error surface "
        f"over {dataset.n_points} points in {elapsed * 1000:.1f} ms."
    )
    return surface, point_error
