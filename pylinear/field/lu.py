"""
LU decomposition over a field.

Same elimination as pylinear.decomposition.lu, but entries are field
elements and the pivot of each column is its first non-zero entry
rather than the largest one. Over an exact field (FractionField) there
is no rounding, so "non-zero" is exact and no threshold is involved.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pylinear.core.exceptions import SingularMatrixError
from pylinear.core.protocols import Field
from pylinear.core.validation import check_dimension, check_not_null, check_square
from pylinear.field.matrix import FieldMatrix

T = TypeVar('T')


class FieldLUDecomposition(Generic[T]):
    """
    P A = L U over the field of a FieldMatrix.

    get_l, get_u and get_p return the same matrix on every call, or None
    when the matrix is singular.

    Example:
        >>> from pylinear.field.elements import FractionField
        >>> A = FieldMatrix(FractionField(), [[2, 1], [1, 3]])
        >>> FieldLUDecomposition(A).get_determinant()
        Fraction(5, 1)
    """

    def __init__(self, matrix: FieldMatrix[T]):
        """
        Raises:
            NullArgumentError: If matrix is None
            NonSquareMatrixError: If the matrix is not square
        """
        check_not_null(matrix, "matrix")
        check_square(matrix)

        field = matrix.get_field()
        lu = matrix.get_data()
        n = len(lu)
        pivot, even, singular = _factor(field, lu)

        self._field = field
        self._lu = lu
        self._pivot = tuple(pivot)
        self._singular = singular
        self._solver = FieldDecompositionSolver(field, lu, self._pivot, singular)

        if singular:
            self._l = None
            self._u = None
            self._p = None
            self._determinant = field.zero
            return

        zero, one = field.zero, field.one
        self._l = FieldMatrix._wrap(field, [
            [lu[i][j] if j < i else (one if j == i else zero) for j in range(n)]
            for i in range(n)
        ])
        self._u = FieldMatrix._wrap(field, [
            [lu[i][j] if j >= i else zero for j in range(n)]
            for i in range(n)
        ])
        self._p = FieldMatrix._wrap(field, [
            [one if j == pivot[i] else zero for j in range(n)]
            for i in range(n)
        ])

        determinant = one if even else field.negate(one)
        for i in range(n):
            determinant = field.multiply(determinant, lu[i][i])
        self._determinant = determinant

    def get_l(self) -> FieldMatrix[T] | None:
        """Unit lower triangular factor (None if singular)."""
        return self._l

    def get_u(self) -> FieldMatrix[T] | None:
        """Upper triangular factor (None if singular)."""
        return self._u

    def get_p(self) -> FieldMatrix[T] | None:
        """Permutation matrix with P A = L U (None if singular)."""
        return self._p

    def get_pivot(self) -> tuple[int, ...]:
        return self._pivot

    def get_determinant(self) -> T:
        """Signed product of the pivots; field.zero if singular."""
        return self._determinant

    def get_solver(self) -> FieldDecompositionSolver[T]:
        return self._solver


class FieldDecompositionSolver(Generic[T]):
    """Forward then back substitution over the field."""

    def __init__(
        self,
        field: Field[T],
        lu: list[list[T]],
        pivot: tuple[int, ...],
        singular: bool,
    ):
        self._field = field
        self._lu = lu
        self._pivot = pivot
        self._singular = singular

    def is_non_singular(self) -> bool:
        return not self._singular

    def get_dimension(self) -> int:
        return len(self._lu)

    def solve(self, b: Any) -> Any:
        """
        Solve A x = b.

        Args:
            b: FieldMatrix -> FieldMatrix, sequence of entries -> list

        Raises:
            NullArgumentError: If b is None
            DimensionMismatchError: If b's row count differs from the
                order of the decomposed matrix
            SingularMatrixError: If the decomposed matrix is singular
        """
        check_not_null(b, "b")
        F = self._field

        if isinstance(b, FieldMatrix):
            self._check_solvable(b.get_row_dimension())
            columns = [list(c) for c in zip(*b.get_data_ref())]
            solved = [self._solve_column(c) for c in columns]
            return FieldMatrix._wrap(F, [list(r) for r in zip(*solved)])

        self._check_solvable(len(b))
        return self._solve_column([F.convert(x) for x in b])

    def get_inverse(self) -> FieldMatrix[T]:
        """
        Raises:
            SingularMatrixError: If the decomposed matrix is singular
        """
        return self.solve(FieldMatrix.identity(self._field, self.get_dimension()))

    def _check_solvable(self, rows: int) -> None:
        check_dimension(self.get_dimension(), rows, "right-hand side rows")
        if self._singular:
            raise SingularMatrixError()

    def _solve_column(self, b: Sequence[T]) -> list[T]:
        F = self._field
        lu = self._lu
        n = len(lu)
        x = [b[p] for p in self._pivot]

        # L y = P b
        for col in range(n):
            for i in range(col + 1, n):
                x[i] = F.subtract(x[i], F.multiply(x[col], lu[i][col]))

        # U x = y
        for col in range(n - 1, -1, -1):
            x[col] = F.multiply(x[col], F.reciprocal(lu[col][col]))
            for i in range(col):
                x[i] = F.subtract(x[i], F.multiply(x[col], lu[i][col]))

        return x


def _factor(field: Field[T], lu: list[list[T]]) -> tuple[list[int], bool, bool]:
    """
    In-place elimination, column by column.

    Returns:
        (pivot, even, singular). Elimination stops at the first column
        with no non-zero candidate pivot.
    """
    F = field
    n = len(lu)
    zero = F.zero
    pivot = list(range(n))
    even = True

    for col in range(n):
        for row in range(col):
            total = lu[row][col]
            for i in range(row):
                total = F.subtract(total, F.multiply(lu[row][i], lu[i][col]))
            lu[row][col] = total

        non_zero = None
        for row in range(col, n):
            total = lu[row][col]
            for i in range(col):
                total = F.subtract(total, F.multiply(lu[row][i], lu[i][col]))
            lu[row][col] = total
            if non_zero is None and total != zero:
                non_zero = row

        if non_zero is None:
            return pivot, even, True

        if non_zero != col:
            lu[non_zero], lu[col] = lu[col], lu[non_zero]
            pivot[non_zero], pivot[col] = pivot[col], pivot[non_zero]
            even = not even

        inverse = F.reciprocal(lu[col][col])
        for row in range(col + 1, n):
            lu[row][col] = F.multiply(lu[row][col], inverse)

    return pivot, even, False
