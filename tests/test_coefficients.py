import pytest

from fitlandscape.model.coefficients import CoefficientPair, snap_to_step
from fitlandscape.model.errors import InvalidParameterError


@pytest.mark.parametrize(
    "raw, expected",
    [(3.14, 3.1), (2.96, 3.0), (-12.0, -10.0), (10.04, 10.0), (0.0, 0.0), (-0.26, -0.3)],
)
def test_slider_values_are_clamped_and_snapped(raw, expected):
    assert snap_to_step(raw, -10.0, 10.0, 0.1) == pytest.approx(expected, abs=1e-12)


def test_from_slider_builds_a_bounded_pair():
    beta = CoefficientPair.from_slider(12.0, -3.14)

    assert beta == CoefficientPair(10.0, -3.1)


def test_non_finite_slider_value_is_rejected():
    with pytest.raises(InvalidParameterError):
        CoefficientPair.from_slider(float("nan"), 0.0)


def test_pair_is_immutable():
    beta = CoefficientPair(1.0, 2.0)
    with pytest.raises(AttributeError):
        beta.beta1 = 3.0
