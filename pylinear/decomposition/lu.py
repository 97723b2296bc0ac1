"""
LU decomposition with partial pivoting.

Computes P A = L U for a square matrix A, where L is unit lower
triangular, U is upper triangular and P is a row permutation, by
Gaussian elimination choosing the largest remaining entry of each column
as pivot.

The factorization itself never fails for a square matrix: a pivot below
the singularity threshold only marks the matrix singular, and the
failure is reported when a solve or an inverse is requested.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pylinear.core.tolerances import DEFAULT_SINGULARITY_THRESHOLD
from pylinear.core.validation import check_square
from pylinear.decomposition.base import Decomposition, DecompositionSolver
from pylinear.matrix.dense import RealMatrix, as_matrix
from pylinear.matrix.unmodifiable import UnmodifiableRealMatrix


class LUDecomposition(Decomposition):
    """
    LU decomposition of a square real matrix.

    Attributes are computed once in the constructor. get_l, get_u and
    get_p return the same read-only matrix on every call, or None when
    the matrix is singular.

    Example:
        >>> lu = LUDecomposition([[1, 2, 3], [2, 5, 3], [1, 0, 8]])
        >>> lu.get_determinant()   # -1.0 up to rounding
        >>> x = lu.get_solver().solve([1.0, 2.0, 3.0])
    """

    def __init__(
        self,
        matrix: Any,
        singularity_threshold: float = DEFAULT_SINGULARITY_THRESHOLD,
    ):
        """
        Args:
            matrix: Square RealMatrix (or data accepted by RealMatrix)
            singularity_threshold: Pivots whose absolute value is below
                this threshold make the matrix singular

        Raises:
            NonSquareMatrixError: If the matrix is not square
        """
        matrix = as_matrix(matrix)
        check_square(matrix)

        lu, pivot, even, singular = _factor(matrix.get_data(), singularity_threshold)
        n = lu.shape[0]

        self._lu = lu
        self._pivot = tuple(int(p) for p in pivot)
        self._even = even
        self._singular = singular
        self._threshold = singularity_threshold

        if singular:
            self._l = None
            self._u = None
            self._p = None
            self._determinant = 0.0
        else:
            self._l = UnmodifiableRealMatrix(
                RealMatrix._wrap(np.tril(lu, -1) + np.eye(n))
            )
            self._u = UnmodifiableRealMatrix(RealMatrix._wrap(np.triu(lu)))
            self._p = UnmodifiableRealMatrix(RealMatrix._wrap(np.eye(n)[pivot]))
            sign = 1.0 if even else -1.0
            self._determinant = sign * float(np.prod(np.diag(lu)))

        self._solver = _LUSolver(lu, pivot, singular)

    def get_l(self) -> RealMatrix | None:
        """Unit lower triangular factor (None if singular)."""
        return self._l

    def get_u(self) -> RealMatrix | None:
        """Upper triangular factor (None if singular)."""
        return self._u

    def get_p(self) -> RealMatrix | None:
        """Permutation matrix with P A = L U (None if singular)."""
        return self._p

    def get_pivot(self) -> tuple[int, ...]:
        """Row i of P A is row pivot[i] of A."""
        return self._pivot

    def get_determinant(self) -> float:
        """Product of the pivots with the sign of the permutation; 0.0 if singular."""
        return self._determinant

    @property
    def singularity_threshold(self) -> float:
        return self._threshold

    def get_solver(self) -> DecompositionSolver:
        return self._solver


class _LUSolver(DecompositionSolver):
    """Forward then back substitution on the compact LU storage."""

    def __init__(self, lu: NDArray[np.float64], pivot: NDArray[np.intp], singular: bool):
        self._lu = lu
        self._pivot = pivot
        self._singular = singular

    def is_non_singular(self) -> bool:
        return not self._singular

    def get_dimension(self) -> int:
        return self._lu.shape[0]

    def _solve_array(self, b: NDArray[np.float64]) -> NDArray[np.float64]:
        # solve_triangular only reads the requested triangle of lu
        bp = b[self._pivot, :]
        y = solve_triangular(self._lu, bp, lower=True, unit_diagonal=True)
        return solve_triangular(self._lu, y, lower=False)


def _factor(
    a: NDArray[np.float64],
    threshold: float,
) -> tuple[NDArray[np.float64], NDArray[np.intp], bool, bool]:
    """
    Column-by-column elimination with partial pivoting (in place on a).

    Returns:
        (lu, pivot, even, singular) where lu holds L below the diagonal
        (unit diagonal implied) and U on and above it, pivot is the row
        permutation, even is the parity of the permutation. Elimination
        stops at the first pivot below threshold.
    """
    n = a.shape[0]
    pivot = np.arange(n)
    even = True

    for col in range(n):
        # a[i, col] is final once the terms of rows above i are removed,
        # so one pass updates the upper part and the candidate pivots
        for i in range(col):
            a[i + 1:, col] -= a[i + 1:, i] * a[i, col]

        best = col + int(np.argmax(np.abs(a[col:, col])))
        if abs(a[best, col]) < threshold:
            return a, pivot, even, True

        if best != col:
            a[[best, col], :] = a[[col, best], :]
            pivot[[best, col]] = pivot[[col, best]]
            even = not even

        a[col + 1:, col] /= a[col, col]

    return a, pivot, even, False
