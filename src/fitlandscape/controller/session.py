"""
Session Controller
==================
The single entry point the UI (or the CLI) uses to drive the numeric core.

Why is this file needed?
------------------------
1. Recompute policy: the full error surface is expensive (A x B x N), the
   point error and the fit projection are cheap (N). The controller sweeps
   the grid only when the dataset changes (or when forced) and refreshes the
   cheap parts on every coefficient change, which keeps slider drags
   responsive and the surface visually stable.
2. Atomic publishing: a regenerated dataset is published together with the
   surface computed from it. Views never see a new dataset with an old grid.
3. Ordering: coefficient updates that arrive while a regeneration is in
   flight (e.g. through a nested Qt event loop) are dropped, never applied
   against a half-replaced dataset.

Note: This module should be pure Python/NumPy and should NOT import PySide6.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from fitlandscape.model.coefficients import CoefficientPair
from fitlandscape.model.dataset import Dataset, generate_dataset
from fitlandscape.model.errors import EmptyDatasetError
from fitlandscape.model.metric import rmse
from fitlandscape.model.projection import project_fit
from fitlandscape.model.state import SessionState, CameraOrientation
from fitlandscape.model.surface import ErrorSurface, beta_range, evaluate_surface

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


# ==========================================
# STATELESS CONTRACT
# ==========================================

def regenerate_dataset(
    n: int,
    noise_scale: float,
    rng: Optional[np.random.Generator] = None,
) -> Dataset:
    """Draw a new dataset (startup / explicit regenerate action)."""
    return generate_dataset(n=n, noise_scale=noise_scale, rng=rng)


def recompute_surface(
    dataset: Dataset,
    beta1_range: Sequence[float] | npt.NDArray[np.float64],
    beta2_range: Sequence[float] | npt.NDArray[np.float64],
    selected: CoefficientPair,
) -> tuple[ErrorSurface, float]:
    """Full grid sweep plus the selected-pair error (on dataset change)."""
    return evaluate_surface(dataset, beta1_range, beta2_range, selected)


def recompute_point_error(dataset: Dataset, selected: CoefficientPair) -> float:
    """Error at the selected pair only (on every coefficient change)."""
    return rmse(dataset, selected)


def project_fit_pairs(dataset: Dataset, selected: CoefficientPair) -> list[tuple[float, float]]:
    """(predicted, actual) pairs in dataset order."""
    return [(float(p), float(a)) for p, a in project_fit(dataset, selected)]


# ==========================================
# STATEFUL CONTROLLER
# ==========================================

class SessionController:
    """
    Drives a SessionState through the core operations.

    Args:
        state: Session state owned by the caller.
        rng: Random source for dataset generation (seeded in tests).
        beta1_range: beta1 grid samples, defaults to 41 samples over [-10, 10].
        beta2_range: beta2 grid samples, defaults to 41 samples over [-10, 10].
    """

    def __init__(
        self,
        state: SessionState,
        rng: Optional[np.random.Generator] = None,
        beta1_range: Optional[Sequence[float]] = None,
        beta2_range: Optional[Sequence[float]] = None,
    ) -> None:
        self.state = state
        self.rng = rng if rng is not None else np.random.default_rng()
        self.beta1_range = np.asarray(beta1_range if beta1_range is not None else beta_range(), dtype=np.float64)
        self.beta2_range = np.asarray(beta2_range if beta2_range is not None else beta_range(), dtype=np.float64)
        self._regenerating: bool = False

    @property
    def is_regenerating(self) -> bool:
        return self._regenerating

    def _require_dataset(self) -> Dataset:
        if self.state.dataset is None:
            raise EmptyDatasetError("No dataset has been generated yet.")
        return self.state.dataset

    # --- Dataset ---

    def regenerate_dataset(self, n: Optional[int] = None, noise_scale: Optional[float] = None) -> Dataset:
        """
        Replace the session dataset and publish the matching surface.

        The previous dataset, surface and point error stay in place if
        generation or the sweep fails.
        """
        n = self.state.n_points if n is None else n
        noise_scale = self.state.noise_scale if noise_scale is None else noise_scale

        self._regenerating = True
        try:
            dataset = regenerate_dataset(n, noise_scale, rng=self.rng)
            surface, point_error = recompute_surface(
                dataset, self.beta1_range, self.beta2_range, self.state.beta
            )
        finally:
            self._regenerating = False

        # Publish everything derived from the new dataset together
        self.state.n_points = int(n)
        self.state.noise_scale = float(noise_scale)
        self.state.dataset = dataset
        self.state.surface = surface
        self.state.point_error = point_error
        logger.info(f"Dataset regenerated: {dataset.n_points} points, error at {self.state.beta} = {point_error:.4f}")
        return dataset

    def new_session(self) -> Dataset:
        """Back to the default size, noise and coefficients with a fresh dataset. The camera is kept."""
        self.state.reset()
        return self.regenerate_dataset()

    # --- Recomputation ---

    def recompute_surface(self, force: bool = False) -> tuple[ErrorSurface, float]:
        """
        Surface for the held dataset. Re-sweeps only when the cached surface
        belongs to another dataset, or when `force` is set.
        """
        dataset = self._require_dataset()
        surface = self.state.surface
        if force or surface is None or not surface.is_current_for(dataset):
            surface, point_error = recompute_surface(
                dataset, self.beta1_range, self.beta2_range, self.state.beta
            )
            self.state.surface = surface
        else:
            point_error = recompute_point_error(dataset, self.state.beta)
        self.state.point_error = point_error
        return surface, point_error

    def recompute_point_error(self) -> float:
        dataset = self._require_dataset()
        point_error = recompute_point_error(dataset, self.state.beta)
        self.state.point_error = point_error
        return point_error

    def project_fit(self) -> npt.NDArray[np.float64]:
        """(N, 2) predicted/actual array for the current coefficients."""
        return project_fit(self._require_dataset(), self.state.beta)

    # --- User input ---

    def set_beta(self, beta1: float, beta2: float) -> CoefficientPair:
        """
        Apply a slider update: clamp/snap, store and refresh the point error.

        Returns:
            The coefficient pair now held by the session.
        """
        if self._regenerating:
            logger.debug(f"Dropping coefficient update ({beta1}, {beta2}) during regeneration.")
            return self.state.beta

        beta = CoefficientPair.from_slider(beta1, beta2)
        self.state.beta = beta
        if self.state.dataset is not None and not self.state.dataset.is_empty:
            point_error = self.recompute_point_error()
            logger.debug(f"Coefficients set to {beta}, RMSE = {point_error:.4f}")
        return beta

    def set_camera(self, camera: CameraOrientation) -> None:
        """Store the rendering layer's camera verbatim."""
        self.state.camera = camera
