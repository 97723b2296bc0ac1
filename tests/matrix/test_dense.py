"""
Tests for RealMatrix.

Validates:
    - Construction: copy vs wrap, shape validation
    - Entry, row and column access with index checks
    - Sub-matrix extraction (range and index-set forms) and insertion
    - Algebra against NumPy
    - Norms, predicates and inverse
"""

import warnings

import numpy as np
import pytest

from pylinear.core.exceptions import (
    DimensionMismatchError,
    NoDataError,
    NonSquareMatrixError,
    NotPositiveError,
    NotStrictlyPositiveError,
    NullArgumentError,
    NumberIsTooSmallError,
    OutOfRangeError,
    SingularMatrixError,
)
from pylinear.decomposition.cholesky import CholeskyDecomposition
from pylinear.matrix.dense import RealMatrix
from pylinear.matrix.vector import ArrayRealVector


@pytest.fixture
def m():
    return RealMatrix([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:
    """Copy or wrap, and the shape invariants."""

    def test_from_nested_lists(self, m):
        assert m.shape == (2, 3)
        assert m.get_row_dimension() == 2
        assert m.get_column_dimension() == 3
        assert m.get_entry(1, 2) == 6.0

    def test_copy_is_independent(self):
        data = np.array([[1.0, 2.0], [3.0, 4.0]])
        m = RealMatrix(data)
        data[0, 0] = 99.0
        assert m.get_entry(0, 0) == 1.0

    def test_wrap_shares_storage(self):
        data = np.array([[1.0, 2.0], [3.0, 4.0]])
        m = RealMatrix(data, copy=False)
        assert m.get_data_ref() is data
        m.set_entry(0, 0, 7.0)
        assert data[0, 0] == 7.0

    def test_wrap_not_possible_warns(self):
        with pytest.warns(UserWarning, match="copy=False"):
            m = RealMatrix([[1, 2], [3, 4]], copy=False)
        assert m.get_entry(1, 1) == 4.0

    def test_plain_copy_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            RealMatrix([[1, 2], [3, 4]])

    def test_int_data_promoted(self):
        m = RealMatrix(np.array([[1, 2], [3, 4]]))
        assert m.get_data_ref().dtype == np.float64

    def test_null(self):
        with pytest.raises(NullArgumentError):
            RealMatrix(None)

    def test_empty(self):
        with pytest.raises(NoDataError):
            RealMatrix([])
        with pytest.raises(NoDataError):
            RealMatrix([[]])

    def test_ragged(self):
        with pytest.raises(DimensionMismatchError):
            RealMatrix([[1.0, 2.0], [3.0]])

    @pytest.mark.parametrize("data", [[1.0, 2.0], [[1, 2], 3]])
    def test_non_sequence_rows(self, data):
        with pytest.raises(DimensionMismatchError):
            RealMatrix(data)

    def test_non_sequence_rows_reach_decompositions(self):
        with pytest.raises(DimensionMismatchError):
            CholeskyDecomposition([[1, 2], 3])

    def test_fortran_input_stored_row_major(self):
        m = RealMatrix(np.asfortranarray(np.arange(6.0).reshape(2, 3)))
        assert m.get_data_ref().flags.c_contiguous
        np.testing.assert_array_equal(m.get_data(), [[0, 1, 2], [3, 4, 5]])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            wrapped = RealMatrix(m.get_data_ref(), copy=False)
        assert wrapped.get_data_ref() is m.get_data_ref()

    def test_zeros(self):
        z = RealMatrix.zeros(2, 3)
        assert z.shape == (2, 3)
        assert z.get_max() == 0.0

    @pytest.mark.parametrize("rows, columns", [(0, 3), (3, 0), (-1, 1)])
    def test_zeros_bad_shape(self, rows, columns):
        with pytest.raises(NotStrictlyPositiveError):
            RealMatrix.zeros(rows, columns)

    def test_from_real_matrix(self, m):
        other = RealMatrix(m)
        assert other == m
        other.set_entry(0, 0, -1.0)
        assert m.get_entry(0, 0) == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Access
# ═══════════════════════════════════════════════════════════════════════


class TestAccess:
    """Entries, rows, columns and their index checks."""

    def test_get_entry_out_of_range(self, m):
        with pytest.raises(OutOfRangeError):
            m.get_entry(2, 0)
        with pytest.raises(OutOfRangeError):
            m.get_entry(0, -1)

    def test_entry_mutators(self, m):
        m.set_entry(0, 0, 10.0)
        m.add_to_entry(0, 0, 1.0)
        m.multiply_entry(0, 0, 2.0)
        assert m.get_entry(0, 0) == 22.0

    def test_get_data_is_copy(self, m):
        data = m.get_data()
        data[0, 0] = 100.0
        assert m.get_entry(0, 0) == 1.0

    def test_rows_and_columns(self, m):
        np.testing.assert_array_equal(m.get_row(1), [4.0, 5.0, 6.0])
        np.testing.assert_array_equal(m.get_column(2), [3.0, 6.0])
        assert m.get_row_vector(0) == ArrayRealVector([1.0, 2.0, 3.0])
        assert m.get_column_vector(1) == ArrayRealVector([2.0, 5.0])
        assert m.get_row_matrix(0).shape == (1, 3)
        assert m.get_column_matrix(0).shape == (2, 1)

    def test_set_row_and_column(self, m):
        m.set_row(0, [7.0, 8.0, 9.0])
        m.set_column(0, ArrayRealVector([0.0, 0.0]))
        np.testing.assert_array_equal(m.get_data(), [[0, 8, 9], [0, 5, 6]])

    def test_set_row_wrong_length(self, m):
        with pytest.raises(DimensionMismatchError):
            m.set_row(0, [1.0, 2.0])

    def test_set_column_bad_index(self, m):
        with pytest.raises(OutOfRangeError):
            m.set_column(3, [1.0, 2.0])


class TestSubMatrix:
    """Range and index-set extraction, block insertion."""

    def test_range(self, m):
        sub = m.get_sub_matrix(0, 1, 1, 2)
        np.testing.assert_array_equal(sub.get_data(), [[2, 3], [5, 6]])

    def test_range_is_copy(self, m):
        sub = m.get_sub_matrix(0, 0, 0, 0)
        sub.set_entry(0, 0, -5.0)
        assert m.get_entry(0, 0) == 1.0

    def test_range_reversed(self, m):
        with pytest.raises(NumberIsTooSmallError):
            m.get_sub_matrix(1, 0, 0, 1)

    def test_range_out_of_bounds(self, m):
        with pytest.raises(OutOfRangeError):
            m.get_sub_matrix(0, 2, 0, 1)

    def test_index_sets_keep_order(self, m):
        sub = m.get_sub_matrix([1, 0], [2, 0])
        np.testing.assert_array_equal(sub.get_data(), [[6, 4], [3, 1]])

    def test_index_sets_empty(self, m):
        with pytest.raises(NoDataError):
            m.get_sub_matrix([], [0])

    def test_index_sets_null(self, m):
        with pytest.raises(NullArgumentError):
            m.get_sub_matrix([0], None)

    def test_wrong_arity(self, m):
        with pytest.raises(TypeError):
            m.get_sub_matrix(0, 1, 2)

    def test_set_sub_matrix(self, m):
        m.set_sub_matrix([[-1.0, -2.0]], 1, 1)
        np.testing.assert_array_equal(m.get_data(), [[1, 2, 3], [4, -1, -2]])

    def test_set_sub_matrix_does_not_fit(self, m):
        with pytest.raises(OutOfRangeError):
            m.set_sub_matrix([[1.0, 2.0]], 1, 2)

    def test_set_sub_matrix_ragged(self, m):
        with pytest.raises(DimensionMismatchError):
            m.set_sub_matrix([[1.0, 2.0], [3.0]], 0, 0)


# ═══════════════════════════════════════════════════════════════════════
# Algebra
# ═══════════════════════════════════════════════════════════════════════


class TestAlgebra:
    """Arithmetic agrees with NumPy."""

    def test_add_subtract(self, m):
        np.testing.assert_array_equal(m.add(m).get_data(), 2 * m.get_data())
        np.testing.assert_array_equal(m.subtract(m).get_data(), np.zeros((2, 3)))

    def test_add_incompatible(self, m):
        with pytest.raises(DimensionMismatchError):
            m.add(m.transpose())

    def test_scalar_ops(self, m):
        np.testing.assert_array_equal(m.scalar_add(1.0).get_data(), m.get_data() + 1)
        np.testing.assert_array_equal(
            m.scalar_multiply(-2.0).get_data(), m.get_data() * -2
        )

    def test_multiply(self, m, rng):
        other = RealMatrix(rng.standard_normal((3, 4)))
        np.testing.assert_allclose(
            m.multiply(other).get_data(), m.get_data() @ other.get_data()
        )
        np.testing.assert_allclose(
            other.transpose().multiply(m.transpose()).get_data(),
            m.transpose().pre_multiply(other.transpose()).get_data(),
        )

    def test_multiply_incompatible(self, m):
        with pytest.raises(DimensionMismatchError):
            m.multiply(m)

    def test_operate_forms(self, m):
        x = [1.0, 0.0, -1.0]
        result = m.operate(x)
        assert isinstance(result, ArrayRealVector)
        np.testing.assert_array_equal(result.to_array(), [-2.0, -2.0])
        as_array = m.operate(np.array(x))
        assert isinstance(as_array, np.ndarray)
        np.testing.assert_array_equal(as_array, [-2.0, -2.0])

    def test_operate_wrong_dimension(self, m):
        with pytest.raises(DimensionMismatchError):
            m.operate([1.0, 2.0])

    def test_pre_multiply_vector(self, m):
        result = m.pre_multiply_vector([1.0, 1.0])
        np.testing.assert_array_equal(result.to_array(), [5.0, 7.0, 9.0])

    def test_transpose(self, m):
        assert m.transpose().shape == (3, 2)
        assert m.transpose().transpose() == m

    def test_power(self):
        a = RealMatrix([[1.0, 1.0], [0.0, 1.0]])
        np.testing.assert_array_equal(a.power(0).get_data(), np.eye(2))
        np.testing.assert_array_equal(a.power(5).get_data(), [[1, 5], [0, 1]])

    def test_power_errors(self, m):
        with pytest.raises(NonSquareMatrixError):
            m.power(2)
        with pytest.raises(NotPositiveError):
            RealMatrix([[1.0]]).power(-1)

    def test_map(self, m):
        np.testing.assert_array_equal(
            m.map(lambda x: x * x).get_data(), m.get_data() ** 2
        )

    def test_concatenate(self, m):
        assert m.concatenate_horizontally(m).shape == (2, 6)
        assert m.concatenate_vertically(m).shape == (4, 3)
        with pytest.raises(DimensionMismatchError):
            m.concatenate_horizontally(m.transpose())


class TestScalarsAndPredicates:
    """Norms, trace and structural predicates."""

    def test_norms(self, m):
        assert m.get_norm() == 9.0
        assert m.get_frobenius_norm() == pytest.approx(np.sqrt(91.0))
        assert m.get_max() == 6.0
        assert m.get_min() == 1.0

    def test_trace(self):
        assert RealMatrix([[1.0, 2.0], [3.0, 4.0]]).get_trace() == 5.0

    def test_trace_non_square(self, m):
        with pytest.raises(NonSquareMatrixError):
            m.get_trace()

    def test_is_symmetric(self, m):
        assert RealMatrix([[1.0, 2.0], [2.0, 1.0]]).is_symmetric()
        assert not RealMatrix([[1.0, 2.0], [2.1, 1.0]]).is_symmetric()
        assert not m.is_symmetric()

    def test_is_symmetric_tolerances(self):
        near = RealMatrix([[1.0, 1e6], [1e6 + 1e-9, 1.0]])
        assert near.is_symmetric()
        assert not near.is_symmetric(relative_tolerance=0.0, absolute_tolerance=1e-12)
        assert RealMatrix([[0.0, 1e-15], [0.0, 0.0]]).is_symmetric()
        assert not RealMatrix([[np.nan, 0.0], [0.0, 1.0]]).is_symmetric()
        assert not RealMatrix([[1.0, 2.0, 3.0]]).is_symmetric()

    def test_is_diagonal(self):
        assert RealMatrix([[1.0, 0.0], [0.0, 2.0]]).is_diagonal()
        assert not RealMatrix([[1.0, 1e-3], [0.0, 2.0]]).is_diagonal()

    def test_equality(self, m):
        assert m == m.copy()
        assert m != m.scalar_add(1.0)
        assert m != m.transpose()


class TestInverse:
    """get_inverse through a chosen decomposition."""

    def test_default_lu(self, general_matrix):
        a = RealMatrix(general_matrix)
        np.testing.assert_allclose(
            a.get_inverse().multiply(a).get_data(), np.eye(3), atol=1e-12
        )

    def test_with_cholesky(self, random_spd):
        a = RealMatrix(random_spd)
        np.testing.assert_allclose(
            a.get_inverse(CholeskyDecomposition).get_data(),
            np.linalg.inv(random_spd),
            rtol=1e-10, atol=1e-12,
        )

    def test_singular(self, singular_matrix):
        with pytest.raises(SingularMatrixError):
            RealMatrix(singular_matrix).get_inverse()
