"""
Core infrastructure for PyLinear.

This module provides shared abstractions and utilities used by the matrix,
field and decomposition subpackages.

Key components:
    protocols: AnyMatrix, VectorLike, Field protocols
    exceptions: Exception hierarchy
    validation: Input validators
    precision: Floating-point constants and tolerant comparisons
    tolerances: Default thresholds and verification tiers
"""

from pylinear.core.protocols import AnyMatrix, VectorLike, Field
from pylinear.core.exceptions import (
    PyLinearError,
    ValidationError,
    NullArgumentError,
    NoDataError,
    DimensionMismatchError,
    NotStrictlyPositiveError,
    NotPositiveError,
    NumberIsTooSmallError,
    OutOfRangeError,
    NonSquareMatrixError,
    NumericalError,
    NonSymmetricMatrixError,
    NonPositiveDefiniteMatrixError,
    SingularMatrixError,
    MathArithmeticError,
    UnsupportedOperationError,
)

__all__ = [
    # Protocols
    "AnyMatrix",
    "VectorLike",
    "Field",
    # Exceptions
    "PyLinearError",
    "ValidationError",
    "NullArgumentError",
    "NoDataError",
    "DimensionMismatchError",
    "NotStrictlyPositiveError",
    "NotPositiveError",
    "NumberIsTooSmallError",
    "OutOfRangeError",
    "NonSquareMatrixError",
    "NumericalError",
    "NonSymmetricMatrixError",
    "NonPositiveDefiniteMatrixError",
    "SingularMatrixError",
    "MathArithmeticError",
    "UnsupportedOperationError",
]
