"""
Matrix over an arbitrary field.

FieldMatrix[T] stores its entries as a list of row lists and carries the
Field[T] object that defines their arithmetic. Every operation goes
through that field, so the same code computes exactly on fractions and
approximately on floats.

FieldMatrix shares no implementation with RealMatrix. Only the validation
rules (pylinear.core.validation) are common, so both containers reject
bad shapes and indices identically.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from pylinear.core.exceptions import NotPositiveError
from pylinear.core.protocols import Field
from pylinear.core.validation import (
    check_addition_compatible,
    check_column_dimension,
    check_column_index,
    check_dimension,
    check_matrix_array,
    check_matrix_index,
    check_multiplication_compatible,
    check_not_null,
    check_row_dimension,
    check_row_index,
    check_square,
    check_sub_matrix_index,
    check_sub_matrix_indices,
)

T = TypeVar('T')


class FieldMatrix(Generic[T]):
    """
    Rectangular matrix whose entries belong to a Field.

    Example:
        >>> from pylinear.field.elements import FractionField
        >>> m = FieldMatrix(FractionField(), [[1, 2], [3, 4]])
        >>> m.get_entry(1, 0)
        Fraction(3, 1)
    """

    def __init__(self, field: Field[T], data: Any, copy: bool = True):
        """
        Args:
            field: Arithmetic of the entries
            data: Sequence of equally long row sequences (or a 2-D ndarray)
            copy: If False and data is a list of lists, the lists are
                wrapped without copy and without converting entries; the
                caller guarantees the entries already belong to the field.

        Raises:
            NullArgumentError: If field, data or one of its rows is None
            NoDataError: If data has no row or no column
            DimensionMismatchError: If rows have different lengths
        """
        check_not_null(field, "field")
        if isinstance(data, FieldMatrix):
            data = data.get_data_ref()
        check_matrix_array(data)
        self._field = field

        wrappable = isinstance(data, list) and all(isinstance(row, list) for row in data)
        if not copy and wrappable:
            self._data: list[list[T]] = data
            return

        if not copy:
            warnings.warn(
                "FieldMatrix(copy=False) requires a list of row lists; "
                "the data was copied instead of wrapped",
                UserWarning,
                stacklevel=2,
            )
        self._data = [[field.convert(x) for x in row] for row in data]

    @classmethod
    def zeros(cls, field: Field[T], rows: int, columns: int) -> FieldMatrix[T]:
        """
        Matrix of the given shape filled with field.zero.

        Raises:
            NotStrictlyPositiveError: If rows or columns is < 1
        """
        check_row_dimension(rows)
        check_column_dimension(columns)
        return cls._wrap(field, [[field.zero] * columns for _ in range(rows)])

    @classmethod
    def identity(cls, field: Field[T], n: int) -> FieldMatrix[T]:
        """
        Square identity matrix of order n.

        Raises:
            NotStrictlyPositiveError: If n is < 1
        """
        matrix = cls.zeros(field, n, n)
        for i in range(n):
            matrix._data[i][i] = field.one
        return matrix

    @classmethod
    def _wrap(cls, field: Field[T], rows: list[list[T]]) -> FieldMatrix[T]:
        """Wrap already validated row lists (internal, no checks)."""
        matrix = FieldMatrix.__new__(FieldMatrix)
        matrix._field = field
        matrix._data = rows
        return matrix

    def _derived(self, rows: list[list[T]]) -> FieldMatrix[T]:
        return FieldMatrix._wrap(self._field, rows)

    # === Shape ===

    def get_field(self) -> Field[T]:
        return self._field

    def get_row_dimension(self) -> int:
        return len(self._data)

    def get_column_dimension(self) -> int:
        return len(self._data[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.get_row_dimension(), self.get_column_dimension()

    def is_square(self) -> bool:
        return self.get_row_dimension() == self.get_column_dimension()

    # === Entries ===

    def get_entry(self, row: int, column: int) -> T:
        check_matrix_index(self, row, column)
        return self._data[row][column]

    def set_entry(self, row: int, column: int, value: Any) -> None:
        check_matrix_index(self, row, column)
        self._data[row][column] = self._field.convert(value)

    def add_to_entry(self, row: int, column: int, increment: Any) -> None:
        check_matrix_index(self, row, column)
        F = self._field
        self._data[row][column] = F.add(self._data[row][column], F.convert(increment))

    def multiply_entry(self, row: int, column: int, factor: Any) -> None:
        check_matrix_index(self, row, column)
        F = self._field
        self._data[row][column] = F.multiply(self._data[row][column], F.convert(factor))

    def get_data(self) -> list[list[T]]:
        """Copy of the entries as row lists."""
        return [list(row) for row in self._data]

    def get_data_ref(self) -> list[list[T]]:
        """The internal row lists (no copy)."""
        return self._data

    def copy(self) -> FieldMatrix[T]:
        return self._derived(self.get_data())

    # === Rows and columns ===

    def get_row(self, row: int) -> list[T]:
        check_row_index(self, row)
        return list(self._data[row])

    def get_column(self, column: int) -> list[T]:
        check_column_index(self, column)
        return [r[column] for r in self._data]

    def set_row(self, row: int, values: Sequence[Any]) -> None:
        check_row_index(self, row)
        check_not_null(values, "values")
        check_dimension(self.get_column_dimension(), len(values), "row length")
        self._data[row] = [self._field.convert(v) for v in values]

    def set_column(self, column: int, values: Sequence[Any]) -> None:
        check_column_index(self, column)
        check_not_null(values, "values")
        check_dimension(self.get_row_dimension(), len(values), "column length")
        for r, v in zip(self._data, values):
            r[column] = self._field.convert(v)

    def get_row_matrix(self, row: int) -> FieldMatrix[T]:
        return self._derived([self.get_row(row)])

    def get_column_matrix(self, column: int) -> FieldMatrix[T]:
        return self._derived([[x] for x in self.get_column(column)])

    # === Sub-matrices ===

    def get_sub_matrix(self, *args: Any) -> FieldMatrix[T]:
        """
        Extract a sub-matrix.

        Two call forms, as RealMatrix.get_sub_matrix:
            get_sub_matrix(start_row, end_row, start_column, end_column)
            get_sub_matrix(selected_rows, selected_columns)
        """
        if len(args) == 4:
            start_row, end_row, start_column, end_column = args
            check_sub_matrix_index(self, start_row, end_row, start_column, end_column)
            return self._derived([
                list(r[start_column:end_column + 1])
                for r in self._data[start_row:end_row + 1]
            ])
        if len(args) == 2:
            selected_rows, selected_columns = args
            check_sub_matrix_indices(self, selected_rows, selected_columns)
            return self._derived([
                [self._data[i][j] for j in selected_columns] for i in selected_rows
            ])
        raise TypeError(
            f"get_sub_matrix() takes 2 or 4 positional arguments, got {len(args)}"
        )

    def set_sub_matrix(self, sub_matrix: Any, row: int, column: int) -> None:
        """
        Copy sub_matrix into this matrix with its upper left corner at (row, column).

        Raises:
            NullArgumentError, NoDataError, DimensionMismatchError: If
                sub_matrix is not a valid rectangular array
            OutOfRangeError: If it does not fit
        """
        if isinstance(sub_matrix, FieldMatrix):
            sub_matrix = sub_matrix.get_data_ref()
        rows, columns = check_matrix_array(sub_matrix, "sub_matrix")
        check_sub_matrix_index(self, row, row + rows - 1, column, column + columns - 1)
        for i, values in enumerate(sub_matrix):
            target = self._data[row + i]
            for j, v in enumerate(values):
                target[column + j] = self._field.convert(v)

    # === Algebra ===

    def add(self, m: FieldMatrix[T]) -> FieldMatrix[T]:
        check_addition_compatible(self, m)
        F = self._field
        return self._derived([
            [F.add(a, b) for a, b in zip(ra, rb)]
            for ra, rb in zip(self._data, m.get_data_ref())
        ])

    def subtract(self, m: FieldMatrix[T]) -> FieldMatrix[T]:
        check_addition_compatible(self, m)
        F = self._field
        return self._derived([
            [F.subtract(a, b) for a, b in zip(ra, rb)]
            for ra, rb in zip(self._data, m.get_data_ref())
        ])

    def scalar_add(self, d: Any) -> FieldMatrix[T]:
        F = self._field
        d = F.convert(d)
        return self._derived([[F.add(a, d) for a in r] for r in self._data])

    def scalar_multiply(self, d: Any) -> FieldMatrix[T]:
        F = self._field
        d = F.convert(d)
        return self._derived([[F.multiply(a, d) for a in r] for r in self._data])

    def multiply(self, m: FieldMatrix[T]) -> FieldMatrix[T]:
        """self * m."""
        check_multiplication_compatible(self, m)
        columns = list(zip(*m.get_data_ref()))
        return self._derived([
            [self._dot(r, c) for c in columns] for r in self._data
        ])

    def pre_multiply(self, m: FieldMatrix[T]) -> FieldMatrix[T]:
        """m * self."""
        return m.multiply(self)

    def operate(self, v: Sequence[Any]) -> list[T]:
        """self * v for a vector given as a sequence of entries."""
        check_not_null(v, "v")
        check_dimension(self.get_column_dimension(), len(v), "vector dimension")
        vc = [self._field.convert(x) for x in v]
        return [self._dot(r, vc) for r in self._data]

    def pre_multiply_vector(self, v: Sequence[Any]) -> list[T]:
        """v^T * self."""
        check_not_null(v, "v")
        check_dimension(self.get_row_dimension(), len(v), "vector dimension")
        vc = [self._field.convert(x) for x in v]
        return [self._dot(vc, c) for c in zip(*self._data)]

    def transpose(self) -> FieldMatrix[T]:
        return self._derived([list(c) for c in zip(*self._data)])

    def power(self, p: int) -> FieldMatrix[T]:
        """
        self ** p by repeated squaring.

        Raises:
            NonSquareMatrixError: If the matrix is not square
            NotPositiveError: If p < 0
        """
        check_square(self)
        if p < 0:
            raise NotPositiveError(p, f"power {p} must not be negative")
        result = FieldMatrix.identity(self._field, self.get_row_dimension())
        base = self
        while p > 0:
            if p & 1:
                result = result.multiply(base)
            p >>= 1
            if p:
                base = base.multiply(base)
        return result

    def map(self, function: Callable[[T], T]) -> FieldMatrix[T]:
        return self._derived([[function(a) for a in r] for r in self._data])

    def get_trace(self) -> T:
        """
        Raises:
            NonSquareMatrixError: If the matrix is not square
        """
        check_square(self)
        total = self._field.zero
        for i, r in enumerate(self._data):
            total = self._field.add(total, r[i])
        return total

    def get_inverse(self) -> FieldMatrix[T]:
        """
        Inverse through FieldLUDecomposition.

        Raises:
            NonSquareMatrixError: If the matrix is not square
            SingularMatrixError: If the matrix is singular
        """
        from pylinear.field.lu import FieldLUDecomposition
        return FieldLUDecomposition(self).get_solver().get_inverse()

    def _dot(self, a: Sequence[T], b: Sequence[T]) -> T:
        F = self._field
        total = F.zero
        for x, y in zip(a, b):
            total = F.add(total, F.multiply(x, y))
        return total

    # === Python protocol ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldMatrix):
            return NotImplemented
        return self._field == other._field and self._data == other._data

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"FieldMatrix({self._field!r}, {self._data!r})"

