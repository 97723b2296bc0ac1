"""
Input validation utilities for PyLinear.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - Every precondition is checked before any work is done
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Checks are shared by the real matrix, the field matrix and the
      decompositions so that all of them fail the same way
"""

from collections.abc import Sequence
from typing import Any

import numpy as np

from pylinear.core.exceptions import (
    DimensionMismatchError,
    NoDataError,
    NonSquareMatrixError,
    NonSymmetricMatrixError,
    NotStrictlyPositiveError,
    NullArgumentError,
    NumberIsTooSmallError,
    OutOfRangeError,
)
from pylinear.core.protocols import AnyMatrix


def _is_row(row: Any) -> bool:
    return isinstance(row, (Sequence, np.ndarray)) and not isinstance(row, str)


def check_not_null(value: Any, name: str) -> None:
    """
    Verify a required argument is present.

    Args:
        value: Argument to check
        name: Parameter name for error messages

    Raises:
        NullArgumentError: If value is None
    """
    if value is None:
        raise NullArgumentError(f"{name}: null is not allowed")


def check_matrix_array(data: Any, name: str = "data") -> tuple[int, int]:
    """
    Check the validity of a matrix data array.

    Accepts a 2-D ndarray or a sequence of row sequences. The array must
    not be None or empty, its first row must not be None or empty, and
    all rows must have the same length.

    Args:
        data: Matrix data to check
        name: Parameter name for error messages

    Returns:
        (rows, columns) of the data

    Raises:
        NullArgumentError: If data or one of its rows is None
        NoDataError: If data has no row or no column
        DimensionMismatchError: If rows have different lengths, a row is
            not a sequence, or an ndarray is not 2-D
    """
    check_not_null(data, name)

    if isinstance(data, np.ndarray):
        if data.ndim != 2:
            raise DimensionMismatchError(
                data.ndim, 2,
                f"{name}: expected 2D array, got {data.ndim}D with shape {data.shape}",
            )
        n_rows, n_cols = data.shape
        if n_rows == 0:
            raise NoDataError(f"{name}: matrix must have at least one row")
        if n_cols == 0:
            raise NoDataError(f"{name}: matrix must have at least one column")
        return n_rows, n_cols

    if not _is_row(data):
        raise DimensionMismatchError(
            0, 2, f"{name}: expected 2D data, got {type(data).__name__}"
        )
    n_rows = len(data)
    if n_rows == 0:
        raise NoDataError(f"{name}: matrix must have at least one row")

    first = data[0]
    check_not_null(first, f"{name}[0]")
    if not _is_row(first):
        raise DimensionMismatchError(
            1, 2, f"{name}: expected a sequence of rows, row 0 is {type(first).__name__}"
        )
    n_cols = len(first)
    if n_cols == 0:
        raise NoDataError(f"{name}: matrix must have at least one column")

    for i in range(1, n_rows):
        row = data[i]
        check_not_null(row, f"{name}[{i}]")
        if not _is_row(row):
            raise DimensionMismatchError(
                0, n_cols,
                f"{name}: row {i} is {type(row).__name__}, expected {n_cols} entries",
            )
        if len(row) != n_cols:
            raise DimensionMismatchError(
                len(row), n_cols,
                f"{name}: row {i} has {len(row)} entries, expected {n_cols}",
            )

    return n_rows, n_cols


def check_row_dimension(rows: int) -> None:
    """
    Verify a row dimension is strictly positive.

    Raises:
        NotStrictlyPositiveError: If rows < 1
    """
    if rows < 1:
        raise NotStrictlyPositiveError(
            rows, f"invalid row dimension: {rows} (must be positive)"
        )


def check_column_dimension(columns: int) -> None:
    """
    Verify a column dimension is strictly positive.

    Raises:
        NotStrictlyPositiveError: If columns < 1
    """
    if columns < 1:
        raise NotStrictlyPositiveError(
            columns, f"invalid column dimension: {columns} (must be positive)"
        )


def check_index(index: int, dimension: int, name: str = "index") -> None:
    """
    Verify an index lies in [0, dimension - 1].

    Raises:
        OutOfRangeError: If the index is outside the valid range
    """
    if index < 0 or index >= dimension:
        raise OutOfRangeError(
            index, 0, dimension - 1,
            f"{name} {index} out of allowed range [0, {dimension - 1}]",
        )


def check_row_index(m: AnyMatrix, row: int) -> None:
    """Verify row is a valid row index of m."""
    check_index(row, m.get_row_dimension(), "row index")


def check_column_index(m: AnyMatrix, column: int) -> None:
    """Verify column is a valid column index of m."""
    check_index(column, m.get_column_dimension(), "column index")


def check_matrix_index(m: AnyMatrix, row: int, column: int) -> None:
    """Verify (row, column) addresses an entry of m."""
    check_row_index(m, row)
    check_column_index(m, column)


def check_row_indices(m: AnyMatrix, indices: Sequence[int] | None) -> None:
    """
    Verify a set of row indices.

    Raises:
        NullArgumentError: If indices is None
        NoDataError: If indices is empty
        OutOfRangeError: If one index is not a valid row index
    """
    check_not_null(indices, "selected rows")
    if len(indices) == 0:
        raise NoDataError("empty selected row index array")
    for index in indices:
        check_row_index(m, index)


def check_column_indices(m: AnyMatrix, indices: Sequence[int] | None) -> None:
    """
    Verify a set of column indices.

    Raises:
        NullArgumentError: If indices is None
        NoDataError: If indices is empty
        OutOfRangeError: If one index is not a valid column index
    """
    check_not_null(indices, "selected columns")
    if len(indices) == 0:
        raise NoDataError("empty selected column index array")
    for index in indices:
        check_column_index(m, index)


def check_sub_matrix_index(
    m: AnyMatrix,
    start_row: int,
    end_row: int,
    start_column: int,
    end_column: int,
) -> None:
    """
    Verify an inclusive sub-matrix range.

    Raises:
        OutOfRangeError: If one of the indices is not valid
        NumberIsTooSmallError: If end_row < start_row or
            end_column < start_column
    """
    check_row_index(m, start_row)
    check_row_index(m, end_row)
    check_column_index(m, start_column)
    check_column_index(m, end_column)

    if end_row < start_row:
        raise NumberIsTooSmallError(
            end_row, start_row,
            f"initial row {start_row} after final row {end_row}",
        )
    if end_column < start_column:
        raise NumberIsTooSmallError(
            end_column, start_column,
            f"initial column {start_column} after final column {end_column}",
        )


def check_sub_matrix_indices(
    m: AnyMatrix,
    selected_rows: Sequence[int] | None,
    selected_columns: Sequence[int] | None,
) -> None:
    """Verify explicit row and column index sets (see check_row_indices)."""
    check_row_indices(m, selected_rows)
    check_column_indices(m, selected_columns)


def check_dimension(expected: int, actual: int, name: str = "dimension") -> None:
    """
    Verify two dimensions agree.

    Raises:
        DimensionMismatchError: If actual != expected
    """
    if actual != expected:
        raise DimensionMismatchError(
            actual, expected, f"{name}: got {actual}, expected {expected}"
        )


def check_addition_compatible(left: AnyMatrix, right: AnyMatrix) -> None:
    """
    Verify two matrices have the same shape.

    Raises:
        DimensionMismatchError: If the shapes differ
    """
    left_shape = (left.get_row_dimension(), left.get_column_dimension())
    right_shape = (right.get_row_dimension(), right.get_column_dimension())
    if left_shape != right_shape:
        raise DimensionMismatchError(
            right_shape[0] * right_shape[1], left_shape[0] * left_shape[1],
            f"{right_shape[0]}x{right_shape[1]} operand is not compatible "
            f"with {left_shape[0]}x{left_shape[1]} matrix",
        )


def check_multiplication_compatible(left: AnyMatrix, right: AnyMatrix) -> None:
    """
    Verify left.columns == right.rows.

    Raises:
        DimensionMismatchError: If the inner dimensions differ
    """
    if left.get_column_dimension() != right.get_row_dimension():
        raise DimensionMismatchError(
            right.get_row_dimension(), left.get_column_dimension(),
            f"{left.get_row_dimension()}x{left.get_column_dimension()} and "
            f"{right.get_row_dimension()}x{right.get_column_dimension()} "
            f"matrices cannot be multiplied",
        )


def check_square(m: AnyMatrix) -> None:
    """
    Verify a matrix is square.

    Raises:
        NonSquareMatrixError: If rows != columns
    """
    rows = m.get_row_dimension()
    columns = m.get_column_dimension()
    if rows != columns:
        raise NonSquareMatrixError(rows, columns)


def check_symmetric(data: np.ndarray, relative_threshold: float) -> None:
    """
    Verify a square array is symmetric within a relative threshold.

    Entries a_ij and a_ji are considered equal when
    |a_ij - a_ji| <= relative_threshold * max(|a_ij|, |a_ji|).

    Args:
        data: Square 2-D array
        relative_threshold: Maximum relative deviation

    Raises:
        NonSymmetricMatrixError: On the first pair violating the threshold
    """
    upper = np.triu(data, 1)
    lower = np.triu(data.T, 1)
    scale = np.maximum(np.abs(upper), np.abs(lower))
    violations = np.abs(upper - lower) > relative_threshold * scale
    if np.any(violations):
        i, j = (int(k) for k in np.argwhere(violations)[0])
        raise NonSymmetricMatrixError(i, j, relative_threshold)
