import numpy as np
import pytest

import fitlandscape.controller.session as session_module
from fitlandscape.controller.session import (
    SessionController, project_fit_pairs, recompute_point_error, recompute_surface, regenerate_dataset
)
from fitlandscape.config import DEFAULT_N_POINTS, DEFAULT_NOISE_SCALE
from fitlandscape.model.coefficients import CoefficientPair, GROUND_TRUTH
from fitlandscape.model.errors import EmptyDatasetError, InvalidParameterError
from fitlandscape.model.metric import rmse
from fitlandscape.model.state import CameraOrientation, SessionState
from fitlandscape.model.surface import beta_range


@pytest.fixture
def controller(rng) -> SessionController:
    return SessionController(SessionState(n_points=40), rng=rng)


@pytest.fixture
def ready(controller) -> SessionController:
    controller.regenerate_dataset()
    return controller


# --- Stateless contract ---

def test_stateless_operations_on_the_scenario_dataset(two_point_dataset, origin):
    surface, point_error = recompute_surface(two_point_dataset, [-1, 0, 1], [-1, 0, 1], origin)

    assert surface.values[1, 1] == pytest.approx(point_error, abs=1e-9)
    assert recompute_point_error(two_point_dataset, GROUND_TRUTH) == 0.0
    assert project_fit_pairs(two_point_dataset, GROUND_TRUTH) == [(3.0, 3.0), (2.0, 2.0)]


def test_stateless_regeneration_respects_length(rng):
    ds = regenerate_dataset(12, 1.0, rng=rng)

    assert len(ds.x1) == len(ds.x2) == len(ds.y) == 12


# --- Regeneration ---

def test_regeneration_publishes_dataset_and_matching_surface(ready):
    state = ready.state

    assert state.dataset.n_points == 40
    assert state.surface.is_current_for(state.dataset)
    assert state.surface.shape == (41, 41)
    assert state.point_error == rmse(state.dataset, state.beta)


def test_no_stale_surface_survives_regeneration(ready):
    old_dataset, old_surface = ready.state.dataset, ready.state.surface

    new_dataset = ready.regenerate_dataset(n=25, noise_scale=2.0)

    assert new_dataset is not old_dataset
    assert ready.state.surface is not old_surface
    assert ready.state.surface.is_current_for(new_dataset)
    assert not ready.state.surface.is_current_for(old_dataset)
    assert ready.state.n_points == 25
    assert ready.state.noise_scale == 2.0


def test_failed_regeneration_keeps_previous_state(ready):
    old_dataset, old_surface = ready.state.dataset, ready.state.surface

    with pytest.raises(InvalidParameterError):
        ready.regenerate_dataset(n=0)

    assert ready.state.dataset is old_dataset
    assert ready.state.surface is old_surface
    assert not ready.is_regenerating


def test_coefficient_updates_during_regeneration_are_dropped(controller):
    class MeddlingGenerator:
        """Random source that fires a slider update mid-generation."""
        def __init__(self, inner):
            self.inner = inner

        def uniform(self, *args, **kwargs):
            controller.set_beta(-7.0, -7.0)
            return self.inner.uniform(*args, **kwargs)

    controller.rng = MeddlingGenerator(np.random.default_rng(0))
    controller.regenerate_dataset()

    assert controller.state.beta == GROUND_TRUTH
    assert controller.state.point_error == rmse(controller.state.dataset, GROUND_TRUTH)


# --- Cheap path ---

def test_slider_update_refreshes_point_error_without_sweeping(ready, monkeypatch):
    surface_before = ready.state.surface

    def no_sweep(*args, **kwargs):
        raise AssertionError("grid must not be recomputed on a coefficient change")

    monkeypatch.setattr(session_module, "recompute_surface", no_sweep)
    beta = ready.set_beta(1.5, -2.5)

    assert beta == CoefficientPair(1.5, -2.5)
    assert ready.state.surface is surface_before
    assert ready.state.point_error == rmse(ready.state.dataset, beta)


def test_point_error_at_grid_point_matches_surface(ready):
    beta = ready.set_beta(-4.5, 6.0)

    assert ready.state.surface.value_at(beta) == pytest.approx(ready.state.point_error, abs=1e-9)


def test_slider_update_is_clamped_and_snapped(ready):
    beta = ready.set_beta(12.0, -3.14)

    assert beta == CoefficientPair(10.0, -3.1)
    assert ready.state.beta == beta


def test_set_beta_before_any_dataset_only_stores_the_pair(controller):
    controller.set_beta(1.0, 1.0)

    assert controller.state.beta == CoefficientPair(1.0, 1.0)
    assert controller.state.point_error is None


def test_recompute_surface_reuses_current_grid(ready):
    cached = ready.state.surface

    surface, point_error = ready.recompute_surface()

    assert surface is cached
    assert point_error == rmse(ready.state.dataset, ready.state.beta)


def test_forced_recompute_builds_an_equal_new_grid(ready):
    cached = ready.state.surface

    surface, _ = ready.recompute_surface(force=True)

    assert surface is not cached
    np.testing.assert_array_equal(surface.values, cached.values)


def test_projection_follows_the_held_coefficients(ready):
    ready.set_beta(0.0, 0.0)
    pairs = ready.project_fit()

    np.testing.assert_array_equal(pairs[:, 0], np.zeros(ready.state.dataset.n_points))
    np.testing.assert_array_equal(pairs[:, 1], ready.state.dataset.y)


def test_operations_without_dataset_fail(controller):
    with pytest.raises(EmptyDatasetError):
        controller.recompute_point_error()
    with pytest.raises(EmptyDatasetError):
        controller.recompute_surface()
    with pytest.raises(EmptyDatasetError):
        controller.project_fit()


def test_custom_grid_is_used(rng):
    controller = SessionController(
        SessionState(n_points=10), rng=rng, beta1_range=[-1, 0, 1], beta2_range=beta_range(0, 2, 1)
    )
    controller.regenerate_dataset()

    assert controller.state.surface.shape == (3, 3)


# --- Camera ---

def test_camera_survives_recomputation(ready):
    camera = CameraOrientation(eye=(2.0, -1.0, 0.5), up=(0.0, 1.0, 0.0), center=(0.1, 0.2, 0.3))
    ready.set_camera(camera)

    ready.set_beta(0.0, 1.0)
    ready.regenerate_dataset()
    ready.recompute_surface(force=True)

    assert ready.state.camera is camera


def test_camera_from_dict_rejects_wrong_arity():
    with pytest.raises(ValueError):
        CameraOrientation.from_dict({"eye": [1, 2], "up": [0, 0, 1], "center": [0, 0, 0]})


def test_camera_dict_restores_orientation():
    data = {"eye": [1, 2, 3], "up": [0, 0, 1], "center": [0.5, 0, 0]}

    assert CameraOrientation.from_dict(data) == CameraOrientation((1.0, 2.0, 3.0), (0.0, 0.0, 1.0), (0.5, 0.0, 0.0))


def test_state_reset_keeps_camera(ready):
    camera = CameraOrientation(eye=(3.0, 3.0, 3.0))
    ready.set_camera(camera)

    ready.state.reset()

    assert ready.state.dataset is None
    assert ready.state.surface is None
    assert ready.state.beta == GROUND_TRUTH
    assert ready.state.camera is camera


def test_new_session_restores_defaults_with_fresh_data(ready):
    camera = CameraOrientation(eye=(3.0, 3.0, 3.0))
    ready.set_camera(camera)
    ready.set_beta(-4.0, 7.5)
    ready.regenerate_dataset(n=15, noise_scale=0.0)
    old_dataset = ready.state.dataset

    dataset = ready.new_session()

    assert dataset is ready.state.dataset
    assert dataset is not old_dataset
    assert ready.state.n_points == DEFAULT_N_POINTS == dataset.n_points
    assert ready.state.noise_scale == DEFAULT_NOISE_SCALE
    assert ready.state.beta == GROUND_TRUTH
    assert ready.state.surface.is_current_for(dataset)
    assert ready.state.point_error == rmse(dataset, GROUND_TRUTH)
    assert ready.state.camera is camera
