"""
Cholesky decomposition.

Computes the lower triangular L with A = L L^T for a symmetric positive
definite matrix A. Symmetry is checked with a relative threshold before
any work is done; positive definiteness is checked on each running
diagonal term during the factorization.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pylinear.core.exceptions import NonPositiveDefiniteMatrixError
from pylinear.core.tolerances import (
    DEFAULT_ABSOLUTE_POSITIVITY_THRESHOLD,
    DEFAULT_RELATIVE_SYMMETRY_THRESHOLD,
)
from pylinear.core.validation import check_square, check_symmetric
from pylinear.decomposition.base import Decomposition, DecompositionSolver
from pylinear.matrix.dense import RealMatrix, as_matrix
from pylinear.matrix.unmodifiable import UnmodifiableRealMatrix


class CholeskyDecomposition(Decomposition):
    """
    Cholesky decomposition A = L L^T of a symmetric positive definite matrix.

    get_l() and get_lt() return the same read-only matrices on every call.
    """

    def __init__(
        self,
        matrix: Any,
        relative_symmetry_threshold: float = DEFAULT_RELATIVE_SYMMETRY_THRESHOLD,
        absolute_positivity_threshold: float = DEFAULT_ABSOLUTE_POSITIVITY_THRESHOLD,
    ):
        """
        Args:
            matrix: Square RealMatrix (or data accepted by RealMatrix)
            relative_symmetry_threshold: Maximum allowed relative deviation
                between a_ij and a_ji
            absolute_positivity_threshold: Running diagonal terms at or
                below this value make the matrix non positive definite

        Raises:
            NonSquareMatrixError: If the matrix is not square
            NonSymmetricMatrixError: If the symmetry check fails
            NonPositiveDefiniteMatrixError: If a diagonal term falls at or
                below absolute_positivity_threshold
        """
        matrix = as_matrix(matrix)
        check_square(matrix)
        data = matrix.get_data()
        check_symmetric(data, relative_symmetry_threshold)

        lt = _factor(data, absolute_positivity_threshold)

        self._lt = UnmodifiableRealMatrix(RealMatrix._wrap(lt))
        self._l = UnmodifiableRealMatrix(RealMatrix._wrap(lt.T))
        self._determinant = float(np.prod(np.diag(lt) ** 2))
        self._solver = _CholeskySolver(lt)

    def get_l(self) -> RealMatrix:
        """Lower triangular factor."""
        return self._l

    def get_lt(self) -> RealMatrix:
        """Transpose of the lower triangular factor."""
        return self._lt

    def get_determinant(self) -> float:
        """Product of the squared diagonal of L."""
        return self._determinant

    def get_solver(self) -> DecompositionSolver:
        return self._solver


class _CholeskySolver(DecompositionSolver):
    """Two triangular solves: L y = b, then L^T x = y."""

    def __init__(self, lt: NDArray[np.float64]):
        self._lt = lt

    def is_non_singular(self) -> bool:
        # construction succeeded, so every diagonal term is positive
        return True

    def get_dimension(self) -> int:
        return self._lt.shape[0]

    def _solve_array(self, b: NDArray[np.float64]) -> NDArray[np.float64]:
        y = solve_triangular(self._lt, b, trans='T', lower=False)
        return solve_triangular(self._lt, y, lower=False)


def _factor(a: NDArray[np.float64], threshold: float) -> NDArray[np.float64]:
    """
    Right-looking factorization, returns L^T (upper triangular).

    Works on the upper triangle of a, row by row: row i is scaled by its
    square-rooted diagonal, then its outer product is removed from the
    trailing block.
    """
    n = a.shape[0]
    for i in range(n):
        if a[i, i] <= threshold:
            raise NonPositiveDefiniteMatrixError(float(a[i, i]), i, threshold)
        a[i, i] = math.sqrt(a[i, i])
        a[i, i + 1:] /= a[i, i]
        row = a[i, i + 1:]
        a[i + 1:, i + 1:] -= np.outer(row, row)
    return np.triu(a)
