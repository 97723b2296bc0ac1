"""
Dense real matrices and vectors.

Public API:
    RealMatrix: row-major float64 matrix
    RealVector, ArrayRealVector: vector contract and array-backed vector
    unmodifiable_real_matrix, unmodifiable_real_vector: read-only views
    factory: create_* helpers, triangular solves, block_inverse
"""

from pylinear.matrix.vector import ArrayRealVector, RealVector, VectorEntry
from pylinear.matrix.dense import RealMatrix
from pylinear.matrix.unmodifiable import (
    UnmodifiableRealMatrix,
    UnmodifiableRealVector,
    unmodifiable_real_matrix,
    unmodifiable_real_vector,
)
from pylinear.matrix.factory import (
    block_inverse,
    create_column_real_matrix,
    create_field_identity_matrix,
    create_field_matrix,
    create_real_diagonal_matrix,
    create_real_identity_matrix,
    create_real_matrix,
    create_real_matrix_from,
    create_real_vector,
    create_row_real_matrix,
    solve_lower_triangular_system,
    solve_upper_triangular_system,
)

__all__ = [
    "RealMatrix",
    "RealVector",
    "ArrayRealVector",
    "VectorEntry",
    "UnmodifiableRealMatrix",
    "UnmodifiableRealVector",
    "unmodifiable_real_matrix",
    "unmodifiable_real_vector",
    "create_real_matrix",
    "create_real_matrix_from",
    "create_real_identity_matrix",
    "create_real_diagonal_matrix",
    "create_real_vector",
    "create_row_real_matrix",
    "create_column_real_matrix",
    "create_field_matrix",
    "create_field_identity_matrix",
    "solve_lower_triangular_system",
    "solve_upper_triangular_system",
    "block_inverse",
]
