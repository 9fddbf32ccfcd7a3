import numpy as np
import pytest

from fitlandscape.model.coefficients import CoefficientPair
from fitlandscape.model.dataset import Dataset, generate_dataset


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def two_point_dataset() -> Dataset:
    """x1=[1, 0], x2=[0, 1], y=[3, 2]: fitted exactly by (3, 2)."""
    return Dataset.from_sequences([1.0, 0.0], [0.0, 1.0], [3.0, 2.0])


@pytest.fixture
def empty_dataset() -> Dataset:
    return Dataset.from_sequences([], [], [])


@pytest.fixture
def noisy_dataset(rng) -> Dataset:
    return generate_dataset(n=100, noise_scale=10.0, rng=rng)


@pytest.fixture
def origin() -> CoefficientPair:
    return CoefficientPair(0.0, 0.0)
