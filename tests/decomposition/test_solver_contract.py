"""
Tests for the DecompositionSolver contract shared by every decomposition.

Validates:
    - Return type follows the right-hand side form
    - Matrix column, RealVector, third-party VectorLike and 1-D ndarray
      right-hand sides give bit-for-bit identical solutions
    - Null, wrong-size and wrong-rank right-hand sides fail uniformly
    - Decompositions are interchangeable behind the solver interface
"""

import numpy as np
import pytest

from pylinear.core.exceptions import DimensionMismatchError, NullArgumentError
from pylinear.core.tolerances import select_tolerance
from pylinear.decomposition.base import DecompositionSolver
from pylinear.decomposition.cholesky import CholeskyDecomposition
from pylinear.decomposition.lu import LUDecomposition
from pylinear.decomposition.ud import UDDecomposition
from pylinear.matrix.dense import RealMatrix
from pylinear.matrix.unmodifiable import unmodifiable_real_vector
from pylinear.matrix.vector import ArrayRealVector

DECOMPOSITIONS = [LUDecomposition, CholeskyDecomposition, UDDecomposition]


@pytest.fixture(params=DECOMPOSITIONS, ids=lambda d: d.__name__)
def solver(request, random_spd):
    return request.param(RealMatrix(random_spd)).get_solver()


@pytest.fixture
def b(rng):
    return rng.standard_normal(6)


# ═══════════════════════════════════════════════════════════════════════
# Result forms
# ═══════════════════════════════════════════════════════════════════════


class TestResultForms:
    """solve returns the least-copy form matching its input."""

    def test_is_solver(self, solver):
        assert isinstance(solver, DecompositionSolver)
        assert solver.get_dimension() == 6

    def test_matrix_in_matrix_out(self, solver, b):
        assert isinstance(solver.solve(RealMatrix(b[:, np.newaxis])), RealMatrix)

    def test_vector_in_vector_out(self, solver, b):
        assert isinstance(solver.solve(ArrayRealVector(b)), ArrayRealVector)

    def test_vector_like_in_vector_out(self, solver, b, third_party_vector):
        assert isinstance(solver.solve(third_party_vector(b)), ArrayRealVector)

    def test_sequence_in_vector_out(self, solver, b):
        assert isinstance(solver.solve(list(b)), ArrayRealVector)

    def test_ndarray_rank_preserved(self, solver, b):
        x1 = solver.solve(b)
        x2 = solver.solve(np.column_stack([b, b]))
        assert isinstance(x1, np.ndarray) and x1.shape == (6,)
        assert isinstance(x2, np.ndarray) and x2.shape == (6, 2)

    def test_rhs_not_modified(self, solver, b):
        before = b.copy()
        solver.solve(b)
        np.testing.assert_array_equal(b, before)


class TestBitIdentical:
    """Every vector form goes through the same kernel."""

    def test_all_forms_identical(self, solver, b, third_party_vector):
        from_matrix = solver.solve(RealMatrix(b[:, np.newaxis])).get_column(0)
        from_vector = solver.solve(ArrayRealVector(b)).to_array()
        from_foreign = solver.solve(third_party_vector(b)).to_array()
        from_read_only = solver.solve(unmodifiable_real_vector(ArrayRealVector(b))).to_array()
        from_ndarray = solver.solve(b)

        np.testing.assert_array_equal(from_vector, from_matrix)
        np.testing.assert_array_equal(from_foreign, from_matrix)
        np.testing.assert_array_equal(from_read_only, from_matrix)
        np.testing.assert_array_equal(from_ndarray, from_matrix)

    def test_inverse_equals_solve_identity(self, solver):
        inverse = solver.get_inverse()
        identity = solver.solve(RealMatrix(np.eye(6)))
        np.testing.assert_array_equal(inverse.get_data(), identity.get_data())


class TestErrors:
    """Uniform failures."""

    def test_null(self, solver):
        with pytest.raises(NullArgumentError):
            solver.solve(None)

    def test_wrong_length_vector(self, solver):
        with pytest.raises(DimensionMismatchError):
            solver.solve(ArrayRealVector([1.0, 2.0]))

    def test_wrong_row_count_matrix(self, solver):
        with pytest.raises(DimensionMismatchError):
            solver.solve(RealMatrix(np.ones((5, 2))))

    def test_wrong_rank_ndarray(self, solver):
        with pytest.raises(DimensionMismatchError):
            solver.solve(np.ones((6, 1, 1)))


class TestInterchangeable:
    """Callers depend on the solver only."""

    @staticmethod
    def solve_with(decomposition, a, rhs):
        return decomposition(a).get_solver().solve(rhs)

    def test_same_solution(self, random_spd, b):
        tol = select_tolerance('solve_residual')
        solutions = [self.solve_with(d, random_spd, b) for d in DECOMPOSITIONS]
        for x in solutions:
            residual = np.linalg.norm(random_spd @ x - b) / np.linalg.norm(b)
            assert residual < tol.rtol
        np.testing.assert_allclose(solutions[1], solutions[0], rtol=1e-10)
        np.testing.assert_allclose(solutions[2], solutions[0], rtol=1e-10)
