"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def general_matrix():
    """Non-singular 3x3 matrix with determinant -1."""
    return [[1.0, 2.0, 3.0], [2.0, 5.0, 3.0], [1.0, 0.0, 8.0]]


@pytest.fixture
def singular_matrix():
    """2x2 matrix with identical rows."""
    return [[2.0, 3.0], [2.0, 3.0]]


@pytest.fixture
def spd_matrix():
    """5x5 symmetric positive definite matrix with an integer Cholesky factor."""
    return [
        [1.0, 2.0, 4.0, 7.0, 11.0],
        [2.0, 13.0, 23.0, 38.0, 58.0],
        [4.0, 23.0, 77.0, 122.0, 182.0],
        [7.0, 38.0, 122.0, 294.0, 430.0],
        [11.0, 58.0, 182.0, 430.0, 855.0],
    ]


@pytest.fixture
def random_spd(rng):
    """Well conditioned random 6x6 symmetric positive definite matrix."""
    n = 6
    A = rng.standard_normal((n, n))
    return A @ A.T + n * np.eye(n)


class ThirdPartyVector:
    """Minimal vector implementing only the VectorLike read contract."""

    def __init__(self, values):
        self._values = [float(v) for v in values]

    def get_dimension(self):
        return len(self._values)

    def get_entry(self, index):
        return self._values[index]


@pytest.fixture
def third_party_vector():
    """Factory building VectorLike objects that are not RealVector subclasses."""
    return ThirdPartyVector
