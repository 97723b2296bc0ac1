"""
Dense real matrix.

RealMatrix stores its entries in a row-major (C-ordered) 2-D float64
NumPy array. Shape and index validation goes through
pylinear.core.validation so that every matrix type fails the same way.

Copy or wrap is an explicit constructor choice:
    RealMatrix(data)               # copies the caller's data
    RealMatrix(array, copy=False)  # wraps a float64 C-ordered ndarray
"""

from __future__ import annotations

import warnings
from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinear.core.exceptions import NotPositiveError, ValidationError
from pylinear.core.precision import DOUBLE_COMPARISON_EPSILON, equals_with_tolerances
from pylinear.core.validation import (
    check_addition_compatible,
    check_column_dimension,
    check_column_index,
    check_dimension,
    check_matrix_array,
    check_matrix_index,
    check_multiplication_compatible,
    check_row_dimension,
    check_row_index,
    check_square,
    check_sub_matrix_index,
    check_sub_matrix_indices,
)
from pylinear.matrix.vector import ArrayRealVector, vector_to_array


def _to_float_array(data: Any, name: str) -> NDArray[np.float64]:
    try:
        return np.array(data, dtype=np.float64, order='C')
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to a numeric matrix: {e}") from e


class RealMatrix:
    """
    Rectangular matrix of float64 entries.

    Invariants:
        row_dimension >= 1, column_dimension >= 1, every row has
        column_dimension entries.

    Entries are addressed by zero-based (row, column). Read operations
    never modify the matrix; the mutating operations are set_entry,
    add_to_entry, multiply_entry, set_row, set_column and set_sub_matrix.
    """

    def __init__(self, data: Any, copy: bool = True):
        """
        Build a matrix from a 2-D array or a sequence of rows.

        Args:
            data: 2-D ndarray or sequence of equally long row sequences
            copy: If False and data is a writeable float64 C-ordered ndarray, the
                array is wrapped without copy and the caller must not
                mutate it afterwards. Other inputs are always converted;
                a UserWarning is emitted when copy=False cannot be honoured.

        Raises:
            NullArgumentError: If data (or one of its rows) is None
            NoDataError: If data has no row or no column
            DimensionMismatchError: If rows have different lengths
        """
        if isinstance(data, RealMatrix):
            data = data.get_data_ref()
        check_matrix_array(data)

        wrappable = (
            isinstance(data, np.ndarray)
            and data.dtype == np.float64
            and data.flags.c_contiguous
            and data.flags.writeable
        )
        if not copy and wrappable:
            self._data = data
            return

        if not copy:
            warnings.warn(
                "RealMatrix(copy=False) requires a C-ordered float64 ndarray; "
                "the data was copied instead of wrapped",
                UserWarning,
                stacklevel=2,
            )
        self._data = _to_float_array(data, "data")

    @classmethod
    def zeros(cls, rows: int, columns: int) -> RealMatrix:
        """
        Zero matrix of the given shape.

        Raises:
            NotStrictlyPositiveError: If rows or columns is < 1
        """
        check_row_dimension(rows)
        check_column_dimension(columns)
        return cls._wrap(np.zeros((rows, columns), dtype=np.float64))

    @classmethod
    def _wrap(cls, array: NDArray[np.float64]) -> RealMatrix:
        """Wrap an already validated array (internal, no checks)."""
        matrix = RealMatrix.__new__(RealMatrix)
        matrix._data = np.ascontiguousarray(array, dtype=np.float64)
        return matrix

    # === Shape ===

    def get_row_dimension(self) -> int:
        return int(self._data.shape[0])

    def get_column_dimension(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, columns)."""
        return self.get_row_dimension(), self.get_column_dimension()

    def is_square(self) -> bool:
        return self.get_row_dimension() == self.get_column_dimension()

    # === Entry access ===

    def get_entry(self, row: int, column: int) -> float:
        """
        Entry at (row, column).

        Raises:
            OutOfRangeError: If the indices are not valid
        """
        check_matrix_index(self, row, column)
        return float(self._data[row, column])

    def set_entry(self, row: int, column: int, value: float) -> None:
        check_matrix_index(self, row, column)
        self._data[row, column] = value

    def add_to_entry(self, row: int, column: int, increment: float) -> None:
        check_matrix_index(self, row, column)
        self._data[row, column] += increment

    def multiply_entry(self, row: int, column: int, factor: float) -> None:
        check_matrix_index(self, row, column)
        self._data[row, column] *= factor

    def get_data(self) -> NDArray[np.float64]:
        """Deep copy of the entries."""
        return self._data.copy()

    def get_data_ref(self) -> NDArray[np.float64]:
        """Backing array (no copy); writes to it modify the matrix."""
        return self._data

    def to_numpy(self) -> NDArray[np.float64]:
        """Entries as a new ndarray."""
        return self._data.copy()

    def copy(self) -> RealMatrix:
        return RealMatrix._wrap(self._data.copy())

    # === Rows and columns ===

    def get_row(self, row: int) -> NDArray[np.float64]:
        check_row_index(self, row)
        return self._data[row, :].copy()

    def get_column(self, column: int) -> NDArray[np.float64]:
        check_column_index(self, column)
        return self._data[:, column].copy()

    def set_row(self, row: int, values: Any) -> None:
        check_row_index(self, row)
        array = vector_to_array(values, "row")
        check_dimension(self.get_column_dimension(), array.size, "row length")
        self._data[row, :] = array

    def set_column(self, column: int, values: Any) -> None:
        check_column_index(self, column)
        array = vector_to_array(values, "column")
        check_dimension(self.get_row_dimension(), array.size, "column length")
        self._data[:, column] = array

    def get_row_vector(self, row: int) -> ArrayRealVector:
        return ArrayRealVector(self.get_row(row), copy=False)

    def get_column_vector(self, column: int) -> ArrayRealVector:
        return ArrayRealVector(self.get_column(column), copy=False)

    def get_row_matrix(self, row: int) -> RealMatrix:
        return RealMatrix._wrap(self.get_row(row)[np.newaxis, :])

    def get_column_matrix(self, column: int) -> RealMatrix:
        return RealMatrix._wrap(self.get_column(column)[:, np.newaxis])

    # === Sub-matrices ===

    def get_sub_matrix(self, *args: Any) -> RealMatrix:
        """
        Extract a sub-matrix.

        Two forms:
            get_sub_matrix(start_row, end_row, start_column, end_column)
                inclusive index range
            get_sub_matrix(selected_rows, selected_columns)
                explicit index sets, in the given order

        Raises:
            OutOfRangeError: If an index is not valid
            NumberIsTooSmallError: If a range end precedes its start
            NullArgumentError: If an index set is None
            NoDataError: If an index set is empty
        """
        if len(args) == 4:
            start_row, end_row, start_column, end_column = args
            check_sub_matrix_index(self, start_row, end_row, start_column, end_column)
            block = self._data[start_row:end_row + 1, start_column:end_column + 1]
            return RealMatrix._wrap(block.copy())
        if len(args) == 2:
            selected_rows, selected_columns = args
            check_sub_matrix_indices(self, selected_rows, selected_columns)
            return RealMatrix._wrap(
                self._data[np.ix_(list(selected_rows), list(selected_columns))]
            )
        raise TypeError(
            f"get_sub_matrix expects 2 or 4 arguments, got {len(args)}"
        )

    def set_sub_matrix(self, sub_matrix: Any, row: int, column: int) -> None:
        """
        Overwrite the block starting at (row, column).

        Raises:
            NullArgumentError: If sub_matrix is None
            NoDataError: If sub_matrix is empty
            DimensionMismatchError: If sub_matrix rows are ragged
            OutOfRangeError: If the block does not fit in the matrix
        """
        if isinstance(sub_matrix, RealMatrix):
            sub_matrix = sub_matrix.get_data_ref()
        n_rows, n_cols = check_matrix_array(sub_matrix, "sub_matrix")
        check_row_index(self, row)
        check_column_index(self, column)
        check_row_index(self, row + n_rows - 1)
        check_column_index(self, column + n_cols - 1)
        self._data[row:row + n_rows, column:column + n_cols] = _to_float_array(
            sub_matrix, "sub_matrix"
        )

    # === Algebra ===

    def add(self, m: RealMatrix) -> RealMatrix:
        check_addition_compatible(self, m)
        return RealMatrix._wrap(self._data + m.get_data_ref())

    def subtract(self, m: RealMatrix) -> RealMatrix:
        check_addition_compatible(self, m)
        return RealMatrix._wrap(self._data - m.get_data_ref())

    def scalar_add(self, d: float) -> RealMatrix:
        return RealMatrix._wrap(self._data + d)

    def scalar_multiply(self, d: float) -> RealMatrix:
        return RealMatrix._wrap(self._data * d)

    def multiply(self, m: RealMatrix) -> RealMatrix:
        """
        Matrix product self * m.

        Raises:
            DimensionMismatchError: If self.columns != m.rows
        """
        check_multiplication_compatible(self, m)
        return RealMatrix._wrap(self._data @ m.get_data_ref())

    def pre_multiply(self, m: RealMatrix) -> RealMatrix:
        """Matrix product m * self."""
        check_multiplication_compatible(m, self)
        return RealMatrix._wrap(m.get_data_ref() @ self._data)

    def operate(self, v: Any) -> Any:
        """
        Matrix-vector product self * v.

        ndarray input gives an ndarray, any other vector gives an
        ArrayRealVector.

        Raises:
            DimensionMismatchError: If len(v) != self.columns
        """
        array = vector_to_array(v)
        check_dimension(self.get_column_dimension(), array.size, "vector dimension")
        result = self._data @ array
        if isinstance(v, np.ndarray):
            return result
        return ArrayRealVector(result, copy=False)

    def pre_multiply_vector(self, v: Any) -> Any:
        """Row-vector product v^T * self."""
        array = vector_to_array(v)
        check_dimension(self.get_row_dimension(), array.size, "vector dimension")
        result = array @ self._data
        if isinstance(v, np.ndarray):
            return result
        return ArrayRealVector(result, copy=False)

    def transpose(self) -> RealMatrix:
        return RealMatrix._wrap(self._data.T.copy())

    def power(self, p: int) -> RealMatrix:
        """
        self raised to a non-negative integer power.

        Raises:
            NonSquareMatrixError: If the matrix is not square
            NotPositiveError: If p < 0
        """
        check_square(self)
        if p < 0:
            raise NotPositiveError(p, f"power must be non-negative, got {p}")
        return RealMatrix._wrap(np.linalg.matrix_power(self._data, p))

    def map(self, function: Callable[[float], float]) -> RealMatrix:
        """New matrix with function applied to every entry."""
        return RealMatrix._wrap(np.vectorize(function, otypes=[np.float64])(self._data))

    def concatenate_horizontally(self, m: RealMatrix) -> RealMatrix:
        """[self | m]."""
        check_dimension(self.get_row_dimension(), m.get_row_dimension(), "row dimension")
        return RealMatrix._wrap(np.hstack([self._data, m.get_data_ref()]))

    def concatenate_vertically(self, m: RealMatrix) -> RealMatrix:
        """[self ; m]."""
        check_dimension(
            self.get_column_dimension(), m.get_column_dimension(), "column dimension"
        )
        return RealMatrix._wrap(np.vstack([self._data, m.get_data_ref()]))

    # === Scalars ===

    def get_trace(self) -> float:
        check_square(self)
        return float(np.trace(self._data))

    def get_norm(self) -> float:
        """Maximum absolute column sum (operator 1-norm)."""
        return float(np.max(np.sum(np.abs(self._data), axis=0)))

    def get_frobenius_norm(self) -> float:
        return float(np.linalg.norm(self._data, 'fro'))

    def get_max(self) -> float:
        return float(np.max(self._data))

    def get_min(self) -> float:
        return float(np.min(self._data))

    # === Predicates ===

    def is_symmetric(
        self,
        relative_tolerance: float = DOUBLE_COMPARISON_EPSILON,
        absolute_tolerance: float = DOUBLE_COMPARISON_EPSILON,
    ) -> bool:
        """
        True if a_ij equals a_ji within an absolute OR a relative tolerance.

        Non-square matrices are never symmetric.
        """
        if not self.is_square():
            return False
        a = self._data
        n = a.shape[0]
        for i in range(n):
            for j in range(i, n):
                if not equals_with_tolerances(
                    float(a[i, j]), float(a[j, i]),
                    relative_tolerance, absolute_tolerance,
                ):
                    return False
        return True

    def is_diagonal(self, absolute_tolerance: float = DOUBLE_COMPARISON_EPSILON) -> bool:
        """True if every off-diagonal entry is within absolute_tolerance of 0."""
        if not self.is_square():
            return False
        off_diagonal = self._data - np.diag(np.diag(self._data))
        return bool(np.all(np.abs(off_diagonal) <= absolute_tolerance))

    # === Inverse ===

    def get_inverse(self, decomposition: Callable[[RealMatrix], Any] | None = None) -> RealMatrix:
        """
        Inverse computed through a decomposition.

        Args:
            decomposition: Callable building a decomposition from a matrix
                (LUDecomposition, CholeskyDecomposition, UDDecomposition, or
                a partial with custom thresholds). Defaults to LU.

        Raises:
            NonSquareMatrixError: If the matrix is not square
            SingularMatrixError: If the matrix is singular
        """
        if decomposition is None:
            from pylinear.decomposition.lu import LUDecomposition
            decomposition = LUDecomposition
        return decomposition(self).get_solver().get_inverse()

    # === Python protocol ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RealMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._data, other.get_data_ref())
        )

    __hash__ = None  # mutable

    def __array__(self, dtype=None, copy=None) -> NDArray:
        return np.array(self._data, dtype=dtype)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data.tolist()!r})"


def as_matrix(m: Any) -> RealMatrix:
    """Accept a RealMatrix as is, build one (copy) from anything else."""
    if isinstance(m, RealMatrix):
        return m
    return RealMatrix(m)
