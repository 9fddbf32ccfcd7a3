"""Predicted-vs-actual projection for the 2-D fit scatter plot."""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from fitlandscape.config import IDENTITY_LINE
from fitlandscape.model.metric import predict

if TYPE_CHECKING:
    import numpy.typing as npt

    from fitlandscape.model.coefficients import CoefficientPair
    from fitlandscape.model.dataset import Dataset

__all__ = ["IDENTITY_LINE", "project_fit"]


def project_fit(dataset: Dataset, beta: CoefficientPair) -> npt.NDArray[np.float64]:
    """
    Pair each sample's prediction with its observed response.

    Args:
        dataset: Dataset with at least one point.
        beta: Coefficient pair used for the prediction.

    Returns:
        (N, 2) array, column 0 = predicted (beta1*x1 + beta2*x2),
        column 1 = actual y, rows in dataset order.

    Raises:
        EmptyDatasetError: if the dataset has zero points.
    """
    predicted = predict(dataset, beta)
    return np.column_stack((predicted, dataset.y))
