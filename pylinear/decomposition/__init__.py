"""
Matrix decompositions and their solvers.

Every decomposition computes its factors in the constructor and returns
a DecompositionSolver from get_solver(). Code that only needs to solve
systems should depend on DecompositionSolver and take the decomposition
class as a parameter:

    >>> from pylinear.decomposition import CholeskyDecomposition, LUDecomposition
    >>> def solve_with(decomposition, A, b):
    ...     return decomposition(A).get_solver().solve(b)
    >>> solve_with(LUDecomposition, A, b)
    >>> solve_with(CholeskyDecomposition, A, b)
"""

from pylinear.decomposition.base import Decomposition, DecompositionSolver
from pylinear.decomposition.lu import LUDecomposition
from pylinear.decomposition.cholesky import CholeskyDecomposition
from pylinear.decomposition.hessenberg import HessenbergTransformer
from pylinear.decomposition.ud import UDDecomposition

__all__ = [
    "Decomposition",
    "DecompositionSolver",
    "LUDecomposition",
    "CholeskyDecomposition",
    "HessenbergTransformer",
    "UDDecomposition",
]
