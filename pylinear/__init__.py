"""
PyLinear: dense linear algebra on NumPy and SciPy.

Real matrices and vectors with read-only views, matrices over an
arbitrary field, and decompositions sharing one solver contract.

Submodules:
    core: Protocols, exceptions, validation, tolerances
    matrix: RealMatrix, RealVector and construction helpers
    field: FieldMatrix and exact LU over a field
    decomposition: LU, Cholesky, UD and Hessenberg
"""

__version__ = "0.1.0"

from pylinear import core
from pylinear import matrix
from pylinear import field
from pylinear import decomposition

__all__ = [
    "__version__",
    "core",
    "matrix",
    "field",
    "decomposition",
]
