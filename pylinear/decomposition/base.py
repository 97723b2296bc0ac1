"""
Decomposition and solver contracts.

Every decomposition computes its factors eagerly in its constructor and
hands out a DecompositionSolver through get_solver(). Callers depend on
the solver interface only, so the decomposition can be chosen at runtime
(LU for general square matrices, Cholesky or UD for symmetric positive
definite ones).

Right-hand sides of every supported form are funnelled into one 2-D
kernel, _solve_array, so a RealMatrix column, a RealVector, a third-party
VectorLike and a 1-D ndarray holding the same numbers give bit-for-bit
identical solutions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinear.core.exceptions import DimensionMismatchError, SingularMatrixError
from pylinear.core.validation import check_dimension, check_not_null
from pylinear.matrix.dense import RealMatrix
from pylinear.matrix.vector import ArrayRealVector, vector_to_array


class DecompositionSolver(ABC):
    """
    Solve A X = B through a precomputed decomposition of A.

    Solvers are bound to exactly one decomposition and own no mutable
    state; they can be called repeatedly.
    """

    @abstractmethod
    def is_non_singular(self) -> bool:
        """True if the decomposed matrix is invertible within threshold."""

    @abstractmethod
    def get_dimension(self) -> int:
        """Order of the decomposed matrix."""

    @abstractmethod
    def _solve_array(self, b: NDArray[np.float64]) -> NDArray[np.float64]:
        """
        Kernel: solve for a 2-D right-hand side.

        Called only after the row count and non-singularity checks. b is a
        fresh (n, k) array the kernel may overwrite.
        """

    def _check_solvable(self, rows: int) -> None:
        check_dimension(self.get_dimension(), rows, "right-hand side rows")
        if not self.is_non_singular():
            raise SingularMatrixError()

    def solve(self, b: Any) -> Any:
        """
        Solve A x = b in the least-copy form matching the input.

        Args:
            b: RealMatrix -> RealMatrix
               RealVector or any VectorLike or sequence -> ArrayRealVector
               1-D or 2-D ndarray -> ndarray of the same rank

        Raises:
            NullArgumentError: If b is None
            DimensionMismatchError: If b's row count differs from the
                order of the decomposed matrix
            SingularMatrixError: If the decomposed matrix is singular
        """
        check_not_null(b, "b")

        if isinstance(b, RealMatrix):
            rhs = b.get_data()
            self._check_solvable(rhs.shape[0])
            return RealMatrix._wrap(self._solve_array(rhs))

        if isinstance(b, np.ndarray) and b.ndim == 2:
            rhs = np.array(b, dtype=np.float64)
            self._check_solvable(rhs.shape[0])
            return self._solve_array(rhs)

        if isinstance(b, np.ndarray) and b.ndim != 1:
            raise DimensionMismatchError(
                b.ndim, 1, f"b: expected 1D or 2D array, got {b.ndim}D"
            )

        rhs = vector_to_array(b, "b")[:, np.newaxis]
        self._check_solvable(rhs.shape[0])
        x = np.ascontiguousarray(self._solve_array(rhs)[:, 0])
        if isinstance(b, np.ndarray):
            return x
        return ArrayRealVector(x, copy=False)

    def get_inverse(self) -> RealMatrix:
        """
        Inverse of the decomposed matrix, obtained by solving A X = I.

        Raises:
            SingularMatrixError: If the decomposed matrix is singular
        """
        n = self.get_dimension()
        self._check_solvable(n)
        return RealMatrix._wrap(self._solve_array(np.eye(n)))


class Decomposition(ABC):
    """A factorization of a matrix that can produce a solver."""

    @abstractmethod
    def get_solver(self) -> DecompositionSolver:
        """Solver bound to this decomposition."""
