"""
Hessenberg reduction by Householder reflections.

Transforms a square matrix A into upper Hessenberg form H with an
orthogonal P such that A = P H P^T. H is zero below its first
sub-diagonal. This is the usual first step of eigenvalue algorithms.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinear.core.validation import check_square
from pylinear.matrix.dense import RealMatrix, as_matrix
from pylinear.matrix.unmodifiable import UnmodifiableRealMatrix


class HessenbergTransformer:
    """
    Orthogonal similarity transform A = P H P^T.

    P, P^T and H are computed in the constructor; get_p, get_pt and get_h
    return the same read-only matrices on every call.
    """

    def __init__(self, matrix: Any):
        """
        Raises:
            NonSquareMatrixError: If the matrix is not square
        """
        matrix = as_matrix(matrix)
        check_square(matrix)

        householder, ort = _reduce(matrix.get_data())
        p = _accumulate(householder, ort)

        self._p = UnmodifiableRealMatrix(RealMatrix._wrap(p))
        self._pt = UnmodifiableRealMatrix(RealMatrix._wrap(p.T))
        self._h = UnmodifiableRealMatrix(RealMatrix._wrap(np.triu(householder, -1)))

    def get_p(self) -> RealMatrix:
        """Orthogonal transform P."""
        return self._p

    def get_pt(self) -> RealMatrix:
        """Transpose of P."""
        return self._pt

    def get_h(self) -> RealMatrix:
        """Upper Hessenberg matrix H."""
        return self._h


def _reduce(a: NDArray[np.float64]) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Apply the Householder reflections in place.

    For each column m - 1, the reflection annihilating rows m + 1 .. n - 1
    is applied on both sides. On return the Hessenberg part of a is H;
    below the sub-diagonal, a keeps the tail of each Householder vector,
    whose leading component is stored in ort[m].
    """
    n = a.shape[0]
    high = n - 1
    ort = np.zeros(n)

    for m in range(1, high):
        column = a[m:, m - 1]
        scale = float(np.sum(np.abs(column)))
        if scale == 0.0:
            continue

        ort[m:] = column / scale
        h = float(ort[m:] @ ort[m:])
        g = -math.sqrt(h) if ort[m] > 0 else math.sqrt(h)
        h -= ort[m] * g
        ort[m] -= g
        u = ort[m:]

        # H * A
        f = (u @ a[m:, m:]) / h
        a[m:, m:] -= np.outer(u, f)

        # (H * A) * H
        f = (a[:, m:] @ u) / h
        a[:, m:] -= np.outer(f, u)

        ort[m] *= scale
        a[m, m - 1] = scale * g

    return a, ort


def _accumulate(
    householder: NDArray[np.float64],
    ort: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Build P by applying the stored reflections to the identity, last first."""
    n = householder.shape[0]
    high = n - 1
    p = np.eye(n)
    ort = ort.copy()

    for m in range(high - 1, 0, -1):
        if householder[m, m - 1] == 0.0:
            continue
        ort[m + 1:] = householder[m + 1:, m - 1]
        u = ort[m:]
        g = (u @ p[m:, m:]) / ort[m] / householder[m, m - 1]
        p[m:, m:] += np.outer(u, g)

    return p
