"""
Tests for HessenbergTransformer.

Validates:
    - P is orthogonal
    - H is upper Hessenberg (exact zeros below the first sub-diagonal)
    - P H P^T reconstructs A
    - Eigenvalues are preserved
"""

import numpy as np
import pytest

from pylinear.core.exceptions import NonSquareMatrixError
from pylinear.core.tolerances import select_tolerance
from pylinear.decomposition.hessenberg import HessenbergTransformer
from pylinear.matrix.dense import RealMatrix

TEST_SQUARE = [
    [5.0, 4.0, 3.0, 2.0],
    [4.0, 4.0, 3.0, 2.0],
    [3.0, 3.0, 3.0, 2.0],
    [2.0, 2.0, 2.0, 1.0],
]

TEST_NON_SYMMETRIC = [
    [5.0, 4.0, 3.0, 2.0, 1.0],
    [1.0, 4.0, 0.0, 3.0, 3.0],
    [2.0, 0.0, 3.0, 0.0, 0.0],
    [3.0, 2.0, 1.0, 2.0, 5.0],
    [4.0, 2.0, 1.0, 4.0, 1.0],
]


def _matrices(rng):
    return [
        np.array(TEST_SQUARE),
        np.array(TEST_NON_SYMMETRIC),
        rng.standard_normal((7, 7)),
    ]


class TestStructure:
    """Orthogonality and the Hessenberg zero pattern."""

    def test_p_orthogonal(self, rng):
        tol = select_tolerance('orthogonality')
        for a in _matrices(rng):
            t = HessenbergTransformer(a)
            P, PT = t.get_p().get_data(), t.get_pt().get_data()
            n = a.shape[0]
            np.testing.assert_allclose(PT @ P, np.eye(n), atol=tol.atol)
            np.testing.assert_allclose(P @ PT, np.eye(n), atol=tol.atol)

    def test_h_zero_pattern(self, rng):
        tol = select_tolerance('hessenberg_zero')
        for a in _matrices(rng):
            H = HessenbergTransformer(a).get_h().get_data()
            below = np.tril(H, -2)
            assert np.all(np.abs(below) <= tol.atol)
            np.testing.assert_array_equal(below, np.zeros_like(below))

    def test_pt_is_transpose(self):
        t = HessenbergTransformer(TEST_NON_SYMMETRIC)
        assert t.get_pt() == t.get_p().transpose()

    def test_cached(self):
        t = HessenbergTransformer(TEST_SQUARE)
        assert t.get_p() is t.get_p()
        assert t.get_pt() is t.get_pt()
        assert t.get_h() is t.get_h()


class TestReconstruction:
    """A = P H P^T."""

    def test_reconstruction(self, rng):
        tol = select_tolerance('hessenberg_reconstruction')
        for a in _matrices(rng):
            t = HessenbergTransformer(RealMatrix(a))
            result = t.get_p().multiply(t.get_h()).multiply(t.get_pt())
            np.testing.assert_allclose(result.get_data(), a, atol=tol.atol)

    def test_zeros_preserved(self):
        """Entries of an already Hessenberg matrix stay zero after reconstruction."""
        a = np.triu(np.arange(1.0, 26.0).reshape(5, 5), -1)
        tol = select_tolerance('hessenberg_preservation')
        t = HessenbergTransformer(a)
        result = t.get_p().multiply(t.get_h()).multiply(t.get_pt()).get_data()
        assert np.all(np.abs(np.tril(result, -2)) <= tol.atol)

    @pytest.mark.parametrize("n", [3, 5, 8, 11])
    def test_lower_part_preserved(self, rng, n):
        """Below the first sub-diagonal, P H P^T matches a general A."""
        a = rng.standard_normal((n, n))
        tol = select_tolerance('hessenberg_preservation')
        t = HessenbergTransformer(a)
        result = t.get_p().multiply(t.get_h()).multiply(t.get_pt()).get_data()
        assert np.all(np.abs(np.tril(result - a, -2)) <= tol.atol)

    def test_characteristic_polynomial_preserved(self):
        a = np.array(TEST_NON_SYMMETRIC)
        H = HessenbergTransformer(a).get_h().get_data()
        np.testing.assert_allclose(np.poly(H), np.poly(a), rtol=1e-9, atol=1e-9)


class TestSmall:
    """Matrices too small to need a reflection."""

    @pytest.mark.parametrize("a", [[[3.0]], [[1.0, 2.0], [3.0, 4.0]]])
    def test_identity_transform(self, a):
        t = HessenbergTransformer(a)
        n = len(a)
        np.testing.assert_array_equal(t.get_p().get_data(), np.eye(n))
        np.testing.assert_array_equal(t.get_h().get_data(), np.array(a))

    def test_non_square(self):
        with pytest.raises(NonSquareMatrixError):
            HessenbergTransformer([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
