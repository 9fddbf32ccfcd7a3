"""
Residual Error Metric
=====================
Root-mean-squared error between the observed response and the prediction
implied by a coefficient pair.

Summation order
---------------
The squared residuals are accumulated in plain sequential index order
(i = 0 .. N-1) inside a Numba kernel compiled WITHOUT fastmath. Identical
inputs therefore give bit-identical results, and the surface sweep in
`surface.py` calls the very same kernel, so a grid cell and the point error
for the same pair agree exactly.

Note: This module should be pure Python/NumPy/Numba and should NOT import PySide6.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numba as nb
import numpy as np

from fitlandscape.model.errors import EmptyDatasetError, InvalidParameterError, NonFiniteResultError

if TYPE_CHECKING:
    import numpy.typing as npt

    from fitlandscape.model.coefficients import CoefficientPair
    from fitlandscape.model.dataset import Dataset


@nb.njit(cache=True)
def rmse_kernel(
    x1: npt.NDArray[np.float64],
    x2: npt.NDArray[np.float64],
    y: npt.NDArray[np.float64],
    beta1: float,
    beta2: float,
) -> float:
    """
    RMSE of y against beta1*x1 + beta2*x2.

    Caller guarantees len(x1) == len(x2) == len(y) > 0.
    """
    n = x1.shape[0]
    sum_sq = 0.0
    for i in range(n):
        residual = y[i] - (beta1 * x1[i] + beta2 * x2[i])
        sum_sq += residual * residual
    return math.sqrt(sum_sq / n)


def _require_points(dataset: Dataset) -> None:
    if dataset.is_empty:
        raise EmptyDatasetError("Dataset has no points; RMSE is undefined.")


def _require_finite_beta(beta: CoefficientPair) -> tuple[float, float]:
    try:
        beta1, beta2 = float(beta.beta1), float(beta.beta2)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"Coefficients must be real numbers, got {beta!r}.") from e
    if not (math.isfinite(beta1) and math.isfinite(beta2)):
        raise InvalidParameterError(f"Coefficients must be finite, got {beta}.")
    return beta1, beta2


def predict(dataset: Dataset, beta: CoefficientPair) -> npt.NDArray[np.float64]:
    """Predicted response beta1*x1 + beta2*x2 for every sample."""
    _require_points(dataset)
    beta1, beta2 = _require_finite_beta(beta)
    with np.errstate(over="ignore", invalid="ignore"):
        predicted = beta1 * dataset.x1 + beta2 * dataset.x2
    if not np.isfinite(predicted).all():
        raise NonFiniteResultError(f"Prediction overflowed for {beta}.")
    return predicted


def rmse(dataset: Dataset, beta: CoefficientPair) -> float:
    """
    Root-mean-squared error of the dataset's response under `beta`.

    Args:
        dataset: Dataset with at least one point.
        beta: Any real coefficient pair (not clamped).

    Returns:
        sqrt(mean((y - (beta1*x1 + beta2*x2))**2)), always >= 0.

    Raises:
        EmptyDatasetError: if the dataset has zero points.
        InvalidParameterError: if either coefficient is NaN or infinite.
        NonFiniteResultError: if the residuals overflow float64.
    """
    _require_points(dataset)
    beta1, beta2 = _require_finite_beta(beta)
    value = float(rmse_kernel(dataset.x1, dataset.x2, dataset.y, beta1, beta2))
    if not math.isfinite(value):
        raise NonFiniteResultError(f"RMSE overflowed for {beta}.")
    return value
