import math

import numpy as np
import pytest

from fitlandscape.model.coefficients import CoefficientPair, GROUND_TRUTH
from fitlandscape.model.dataset import generate_dataset
from fitlandscape.model.errors import EmptyDatasetError, InvalidParameterError, InvalidRangeError, NonFiniteResultError
from fitlandscape.model.metric import rmse
from fitlandscape.model.surface import beta_range, evaluate_surface


# --- beta_range ---

def test_default_grid_has_41_samples_at_half_step():
    samples = beta_range()

    assert samples.shape == (41,)
    assert samples[0] == -10.0
    assert samples[-1] == 10.0
    assert samples[20] == 0.0
    np.testing.assert_allclose(np.diff(samples), 0.5)


def test_grid_stops_before_stop_when_step_does_not_divide_span():
    np.testing.assert_allclose(beta_range(0.0, 1.0, 0.3), [0.0, 0.3, 0.6, 0.9])


def test_single_sample_grid():
    np.testing.assert_array_equal(beta_range(2.0, 2.0, 0.5), [2.0])


@pytest.mark.parametrize(
    "start, stop, step",
    [(0.0, 1.0, 0.0), (0.0, 1.0, -0.5), (1.0, 0.0, 0.5), (0.0, float("inf"), 0.5), (float("nan"), 1.0, 0.5)],
)
def test_malformed_grid_bounds_are_rejected(start, stop, step):
    with pytest.raises(InvalidRangeError):
        beta_range(start, stop, step)


# --- evaluate_surface ---

def test_three_by_three_scenario(two_point_dataset, origin):
    surface, point_error = evaluate_surface(two_point_dataset, [-1, 0, 1], [-1, 0, 1], origin)

    assert surface.shape == (3, 3)
    assert surface.values[1, 1] == pytest.approx(rmse(two_point_dataset, origin), abs=1e-9)
    assert point_error == pytest.approx(math.sqrt(6.5), abs=1e-9)


def test_shape_follows_range_lengths(noisy_dataset, origin):
    surface, _ = evaluate_surface(noisy_dataset, beta_range(-1, 1, 1), beta_range(-2, 2, 1), origin)

    assert surface.values.shape == (3, 5)
    assert surface.beta1_samples.shape == (3,)
    assert surface.beta2_samples.shape == (5,)


def test_every_cell_matches_the_point_metric(noisy_dataset, origin):
    b1 = [-2.0, 0.5, 3.0]
    b2 = [-1.0, 2.0]
    surface, _ = evaluate_surface(noisy_dataset, b1, b2, origin)

    for i, beta1 in enumerate(b1):
        for j, beta2 in enumerate(b2):
            expected = rmse(noisy_dataset, CoefficientPair(beta1, beta2))
            assert surface.values[i, j] == pytest.approx(expected, abs=1e-9)


def test_marker_sits_on_the_surface_at_grid_points(noisy_dataset):
    selected = CoefficientPair(2.5, -1.0)
    surface, point_error = evaluate_surface(noisy_dataset, beta_range(), beta_range(), selected)

    assert surface.value_at(selected) == pytest.approx(point_error, abs=1e-9)


def test_value_at_off_grid_pair_is_none(noisy_dataset, origin):
    surface, _ = evaluate_surface(noisy_dataset, beta_range(), beta_range(), origin)

    assert surface.value_at(CoefficientPair(0.1, 0.1)) is None


def test_point_error_off_grid_still_uses_the_metric(noisy_dataset):
    selected = CoefficientPair(0.1, -0.3)
    _, point_error = evaluate_surface(noisy_dataset, beta_range(), beta_range(), selected)

    assert point_error == rmse(noisy_dataset, selected)


def test_grid_minimum_of_noise_free_data_is_ground_truth(rng, origin):
    ds = generate_dataset(n=50, noise_scale=0.0, rng=rng)
    surface, _ = evaluate_surface(ds, beta_range(), beta_range(), origin)

    best, best_error = surface.grid_minimum()
    assert best == GROUND_TRUTH
    assert best_error <= 1e-9


def test_surface_records_its_dataset(noisy_dataset, two_point_dataset, origin):
    surface, _ = evaluate_surface(noisy_dataset, [0.0], [0.0], origin)

    assert surface.is_current_for(noisy_dataset)
    assert not surface.is_current_for(two_point_dataset)
    assert not surface.is_current_for(None)


def test_surface_values_are_read_only(two_point_dataset, origin):
    surface, _ = evaluate_surface(two_point_dataset, [0.0, 1.0], [0.0], origin)

    with pytest.raises(ValueError):
        surface.values[0, 0] = 1.0


@pytest.mark.parametrize(
    "beta1_range, beta2_range",
    [([], [0.0]), ([0.0], []), ([1.0, 0.0], [0.0]), ([0.0], [float("nan")]), ([[0.0, 1.0]], [0.0]), (["a"], [0.0])],
)
def test_malformed_ranges_are_rejected(two_point_dataset, origin, beta1_range, beta2_range):
    with pytest.raises(InvalidRangeError):
        evaluate_surface(two_point_dataset, beta1_range, beta2_range, origin)


def test_empty_dataset_propagates(empty_dataset, origin):
    with pytest.raises(EmptyDatasetError):
        evaluate_surface(empty_dataset, [0.0], [0.0], origin)


def test_non_finite_selected_pair_is_rejected(two_point_dataset):
    with pytest.raises(InvalidParameterError):
        evaluate_surface(two_point_dataset, [0.0], [0.0], CoefficientPair(float("nan"), 0.0))


def test_overflowing_grid_raises(two_point_dataset, origin):
    with pytest.raises(NonFiniteResultError):
        evaluate_surface(two_point_dataset, [0.0, 1e200], [0.0], origin)
