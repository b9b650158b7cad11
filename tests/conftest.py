
import pytest
import numpy as np
from onlinemix import BoundedEstimator, MvNormal

@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def unit_bounds():
    # (-1, 1) on both axes
    return (np.array([-1.0, -1.0]), np.array([1.0, 1.0]))

@pytest.fixture
def estimator(unit_bounds):
    return BoundedEstimator(unit_bounds)

@pytest.fixture
def narrow_normal(rng):
    return MvNormal(mean=np.zeros(2), cov=0.01 * np.eye(2), rng=rng)

@pytest.fixture
def components(rng):
    means = [[0.0, 0.0], [0.5, -0.25], [-0.3, 0.6], [0.9, 0.9]]
    variances = [[0.01, 0.01], [0.05, 0.02], [0.1, 0.001], [0.03, 0.07]]
    return [MvNormal.diagonal(m, v, rng=rng) for m, v in zip(means, variances)]
