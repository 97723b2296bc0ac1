"""
Matrices over an arbitrary field.

A Field object (see pylinear.core.protocols.Field) carries the
arithmetic; FieldMatrix and FieldLUDecomposition only call its
operations, so exact rational algebra and floating point share one
implementation.

Example:
    >>> from pylinear.field import FractionField, FieldMatrix, FieldLUDecomposition
    >>> A = FieldMatrix(FractionField(), [[1, 2], [3, 4]])
    >>> FieldLUDecomposition(A).get_solver().get_inverse()
"""

from pylinear.field.elements import FractionField, RealField
from pylinear.field.matrix import FieldMatrix
from pylinear.field.lu import FieldLUDecomposition, FieldDecompositionSolver

__all__ = [
    "FractionField",
    "RealField",
    "FieldMatrix",
    "FieldLUDecomposition",
    "FieldDecompositionSolver",
]
