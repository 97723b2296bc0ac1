"""
Matrix and vector construction helpers and small matrix algorithms.

The create_* functions are thin, validated entry points over the
constructors of RealMatrix, ArrayRealVector and FieldMatrix. The
triangular solvers and block_inverse work on existing matrices.
"""

from __future__ import annotations

from typing import Any, TypeVar

import numpy as np

from pylinear.core.exceptions import (
    MathArithmeticError,
    NoDataError,
    SingularMatrixError,
)
from pylinear.core.precision import SAFE_MIN
from pylinear.core.protocols import Field
from pylinear.core.validation import (
    check_dimension,
    check_index,
    check_not_null,
    check_square,
)
from pylinear.field.matrix import FieldMatrix
from pylinear.matrix.dense import RealMatrix, as_matrix
from pylinear.matrix.vector import ArrayRealVector, RealVector, vector_to_array

T = TypeVar('T')


# =====================================================================
# Real matrices and vectors
# =====================================================================

def create_real_matrix(rows: int, columns: int) -> RealMatrix:
    """
    Zero matrix of the given shape.

    Raises:
        NotStrictlyPositiveError: If rows or columns is < 1
    """
    return RealMatrix.zeros(rows, columns)


def create_real_matrix_from(data: Any, copy: bool = True) -> RealMatrix:
    """Matrix holding data; see RealMatrix for the copy semantics."""
    return RealMatrix(data, copy=copy)


def create_real_identity_matrix(n: int) -> RealMatrix:
    """
    Identity matrix of order n.

    Raises:
        NotStrictlyPositiveError: If n is < 1
    """
    m = RealMatrix.zeros(n, n)
    np.fill_diagonal(m.get_data_ref(), 1.0)
    return m


def create_real_diagonal_matrix(diagonal: Any) -> RealMatrix:
    """
    Square matrix with the given diagonal and zeros elsewhere.

    Raises:
        NullArgumentError: If diagonal is None
        NoDataError: If diagonal is empty
    """
    values = vector_to_array(diagonal, "diagonal")
    if values.size == 0:
        raise NoDataError("diagonal: at least one entry is required")
    m = RealMatrix.zeros(values.size, values.size)
    np.fill_diagonal(m.get_data_ref(), values)
    return m


def create_real_vector(data: Any) -> ArrayRealVector:
    """Vector holding a copy of data (sequence, ndarray or any vector)."""
    return ArrayRealVector(vector_to_array(data, "data"), copy=False)


def create_row_real_matrix(row: Any) -> RealMatrix:
    """
    1 x n matrix holding row.

    Raises:
        NullArgumentError: If row is None
        NoDataError: If row is empty
    """
    values = vector_to_array(row, "row")
    return RealMatrix(values[np.newaxis, :], copy=False)


def create_column_real_matrix(column: Any) -> RealMatrix:
    """
    n x 1 matrix holding column.

    Raises:
        NullArgumentError: If column is None
        NoDataError: If column is empty
    """
    values = vector_to_array(column, "column")
    return RealMatrix(np.ascontiguousarray(values[:, np.newaxis]), copy=False)


# =====================================================================
# Field matrices
# =====================================================================

def create_field_matrix(field: Field[T], data: Any) -> FieldMatrix[T]:
    """Field matrix holding a converted copy of data."""
    return FieldMatrix(field, data)


def create_field_identity_matrix(field: Field[T], n: int) -> FieldMatrix[T]:
    """
    Identity matrix of order n over field.

    Raises:
        NotStrictlyPositiveError: If n is < 1
    """
    return FieldMatrix.identity(field, n)


# =====================================================================
# Triangular systems
# =====================================================================

def _triangular_system(m: Any, b: Any) -> np.ndarray:
    """Validate a triangular system and return the matrix entries."""
    check_not_null(m, "m")
    check_not_null(b, "b")
    m = as_matrix(m)
    if not isinstance(b, RealVector):
        raise TypeError(
            f"b must be a RealVector solved in place, got {type(b).__name__}"
        )
    check_dimension(m.get_row_dimension(), b.get_dimension(), "b dimension")
    check_square(m)
    return m.get_data_ref()


def solve_lower_triangular_system(m: RealMatrix, b: RealVector) -> None:
    """
    Solve m x = b in place for a lower triangular m.

    Only the lower triangle of m is read. On return b holds x.

    Raises:
        DimensionMismatchError: If b's dimension differs from m's rows
        NonSquareMatrixError: If m is not square
        MathArithmeticError: If a diagonal entry of m is below SAFE_MIN
            in absolute value
    """
    a = _triangular_system(m, b)
    x = b.to_array()
    n = x.size
    for i in range(n):
        if abs(a[i, i]) < SAFE_MIN:
            raise MathArithmeticError(f"zero denominator at diagonal entry {i}")
        x[i] /= a[i, i]
        x[i + 1:] -= x[i] * a[i + 1:, i]
    b.set_sub_vector(0, x)


def solve_upper_triangular_system(m: RealMatrix, b: RealVector) -> None:
    """
    Solve m x = b in place for an upper triangular m.

    Only the upper triangle of m is read. On return b holds x.

    Raises:
        DimensionMismatchError: If b's dimension differs from m's rows
        NonSquareMatrixError: If m is not square
        MathArithmeticError: If a diagonal entry of m is below SAFE_MIN
            in absolute value
    """
    a = _triangular_system(m, b)
    x = b.to_array()
    n = x.size
    for i in range(n - 1, -1, -1):
        if abs(a[i, i]) < SAFE_MIN:
            raise MathArithmeticError(f"zero denominator at diagonal entry {i}")
        x[i] /= a[i, i]
        x[:i] -= x[i] * a[:i, i]
    b.set_sub_vector(0, x)


# =====================================================================
# Block inversion
# =====================================================================

def block_inverse(m: Any, split_index: int) -> RealMatrix:
    """
    Inverse of a square matrix from its 2 x 2 block partition.

    With m = [[A, B], [C, D]] where A is m[0..split_index, 0..split_index],
    the inverse is assembled from the inverses of the Schur complements
    A - B D^-1 C and D - C A^-1 B. Every inverse goes through
    LUDecomposition.

    Args:
        m: Square matrix of order n >= 2
        split_index: Last row (and column) of the upper left block,
            in [0, n - 2]

    Raises:
        NonSquareMatrixError: If m is not square
        OutOfRangeError: If split_index is outside [0, n - 2]
        SingularMatrixError: If A, D or one of the Schur complements is
            singular
    """
    from pylinear.decomposition.lu import LUDecomposition

    m = as_matrix(m)
    check_square(m)
    n = m.get_row_dimension()
    check_index(split_index, n - 1, "split index")

    data = m.get_data_ref()
    s = split_index + 1
    a, b = data[:s, :s], data[:s, s:]
    c, d = data[s:, :s], data[s:, s:]

    def inverse(block: np.ndarray, name: str) -> np.ndarray:
        solver = LUDecomposition(RealMatrix(block)).get_solver()
        if not solver.is_non_singular():
            raise SingularMatrixError(f"{name} is singular", matrix_name=name)
        return solver.get_inverse().get_data_ref()

    a_inv = inverse(a, "upper left block")
    d_inv = inverse(d, "lower right block")

    result00 = inverse(a - b @ d_inv @ c, "upper left Schur complement")
    result11 = inverse(d - c @ a_inv @ b, "lower right Schur complement")
    result01 = -(a_inv @ b @ result11)
    result10 = -(d_inv @ c @ result00)

    return RealMatrix._wrap(np.block([[result00, result01], [result10, result11]]))
