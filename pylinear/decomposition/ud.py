"""
UD decomposition.

Factors a symmetric positive (semi-)definite matrix as A = U D U^T with
U unit upper triangular and D diagonal. Unlike Cholesky no square root
is taken, which keeps the factorization usable on semi-definite
covariance matrices: a diagonal term within the positivity threshold of
zero marks the matrix singular instead of failing the construction.

The solver contract is the same as LU: DimensionMismatchError for a
right-hand side with the wrong row count, SingularMatrixError at solve
time for a singular matrix.
"""

from __future__ import annotations

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


class UDDecomposition(Decomposition):
    """
    A = U D U^T decomposition of a symmetric positive semi-definite matrix.

    get_u, get_ut and get_d return the same read-only matrices on every call.
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
            absolute_positivity_threshold: Diagonal terms below its
                negative make the matrix non positive definite; terms with
                absolute value up to it make the matrix singular

        Raises:
            NonSquareMatrixError: If the matrix is not square
            NonSymmetricMatrixError: If the symmetry check fails
            NonPositiveDefiniteMatrixError: If a diagonal term is below
                -absolute_positivity_threshold
        """
        matrix = as_matrix(matrix)
        check_square(matrix)
        data = matrix.get_data()
        check_symmetric(data, relative_symmetry_threshold)

        u, d, singular = _factor(data, absolute_positivity_threshold)

        self._u = UnmodifiableRealMatrix(RealMatrix._wrap(u))
        self._ut = UnmodifiableRealMatrix(RealMatrix._wrap(u.T))
        self._d = UnmodifiableRealMatrix(RealMatrix._wrap(np.diag(d)))
        self._singular = singular
        self._determinant = 0.0 if singular else float(np.prod(d))
        self._solver = _UDSolver(u, d, singular)

    def get_u(self) -> RealMatrix:
        """Unit upper triangular factor."""
        return self._u

    def get_ut(self) -> RealMatrix:
        """Transpose of U."""
        return self._ut

    def get_d(self) -> RealMatrix:
        """Diagonal factor."""
        return self._d

    def get_determinant(self) -> float:
        """Product of the diagonal of D; 0.0 if singular."""
        return self._determinant

    def get_solver(self) -> DecompositionSolver:
        return self._solver


class _UDSolver(DecompositionSolver):
    """U y = b, z = y / d, U^T x = z."""

    def __init__(self, u: NDArray[np.float64], d: NDArray[np.float64], singular: bool):
        self._u = u
        self._d = d
        self._singular = singular

    def is_non_singular(self) -> bool:
        return not self._singular

    def get_dimension(self) -> int:
        return self._u.shape[0]

    def _solve_array(self, b: NDArray[np.float64]) -> NDArray[np.float64]:
        y = solve_triangular(self._u, b, lower=False, unit_diagonal=True)
        z = y / self._d[:, np.newaxis]
        return solve_triangular(self._u, z, trans='T', lower=False, unit_diagonal=True)


def _factor(
    a: NDArray[np.float64],
    threshold: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64], bool]:
    """
    Column-by-column factorization from the last column backwards.

    d_j  = a_jj - sum_{k>j} d_k u_jk^2
    u_ij = (a_ij - sum_{k>j} u_ik d_k u_jk) / d_j    for i < j

    Returns:
        (u, d, singular). Columns whose d_j vanishes within threshold are
        left as unit vectors of U and flag the matrix singular.
    """
    n = a.shape[0]
    u = np.eye(n)
    d = np.zeros(n)
    singular = False

    for j in range(n - 1, -1, -1):
        weighted = d[j + 1:] * u[j, j + 1:]
        d[j] = a[j, j] - u[j, j + 1:] @ weighted
        if d[j] < -threshold:
            raise NonPositiveDefiniteMatrixError(float(d[j]), j, threshold)
        if abs(d[j]) <= threshold:
            singular = True
            continue
        u[:j, j] = (a[:j, j] - u[:j, j + 1:] @ weighted) / d[j]

    return u, d, singular
