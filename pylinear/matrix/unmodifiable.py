"""
Read-only views of matrices and vectors.

A view holds a reference to the object it decorates and forwards every
read; every mutating call raises UnsupportedOperationError and leaves
the decorated object untouched. Changes made to the decorated object
through other references remain visible through the view.

Decompositions hand out their factor matrices through these views.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinear.core.exceptions import UnsupportedOperationError
from pylinear.core.validation import check_not_null
from pylinear.matrix.dense import RealMatrix
from pylinear.matrix.vector import RealVector, VectorEntry


def _read_only(operation: str) -> UnsupportedOperationError:
    return UnsupportedOperationError(f"{operation} is not supported on a read-only view")


class UnmodifiableRealMatrix(RealMatrix):
    """
    Read-only view of a RealMatrix.

    Shares the storage of the decorated matrix; get_data_ref returns a
    non-writeable array. Every derived result (copy, add, transpose, ...)
    is a new, mutable RealMatrix.
    """

    def __init__(self, matrix: RealMatrix):
        check_not_null(matrix, "matrix")
        self._matrix = matrix
        self._data = matrix.get_data_ref()

    def get_data_ref(self) -> NDArray[np.float64]:
        view = self._data.view()
        view.flags.writeable = False
        return view

    def set_entry(self, row: int, column: int, value: float) -> None:
        raise _read_only("set_entry")

    def add_to_entry(self, row: int, column: int, increment: float) -> None:
        raise _read_only("add_to_entry")

    def multiply_entry(self, row: int, column: int, factor: float) -> None:
        raise _read_only("multiply_entry")

    def set_row(self, row: int, values: Any) -> None:
        raise _read_only("set_row")

    def set_column(self, column: int, values: Any) -> None:
        raise _read_only("set_column")

    def set_sub_matrix(self, sub_matrix: Any, row: int, column: int) -> None:
        raise _read_only("set_sub_matrix")


class _UnmodifiableEntry(VectorEntry):
    """Entry yielded by a read-only vector view."""

    __slots__ = ()

    def set_value(self, value: float) -> None:
        raise _read_only("set_value")


class UnmodifiableRealVector(RealVector):
    """Read-only view of any RealVector."""

    def __init__(self, vector: RealVector):
        check_not_null(vector, "vector")
        self._vector = vector

    # === Forwarded reads ===

    def get_dimension(self) -> int:
        return self._vector.get_dimension()

    def get_entry(self, index: int) -> float:
        return self._vector.get_entry(index)

    def get_sub_vector(self, index: int, n: int) -> RealVector:
        return self._vector.get_sub_vector(index, n)

    def copy(self) -> RealVector:
        return self._vector.copy()

    def to_array(self) -> NDArray[np.float64]:
        return self._vector.to_array()

    def __iter__(self) -> Iterator[VectorEntry]:
        for i in range(self.get_dimension()):
            yield _UnmodifiableEntry(self._vector, i)

    # === Rejected writes ===

    def set_entry(self, index: int, value: float) -> None:
        raise _read_only("set_entry")

    def add_to_entry(self, index: int, increment: float) -> None:
        raise _read_only("add_to_entry")

    def set_sub_vector(self, index: int, v: Any) -> None:
        raise _read_only("set_sub_vector")

    def set(self, value: float) -> None:
        raise _read_only("set")

    def map_to_self(self, function: Callable[[float], float]) -> RealVector:
        raise _read_only("map_to_self")

    def map_add_to_self(self, d: float) -> RealVector:
        raise _read_only("map_add_to_self")

    def map_subtract_to_self(self, d: float) -> RealVector:
        raise _read_only("map_subtract_to_self")

    def map_multiply_to_self(self, d: float) -> RealVector:
        raise _read_only("map_multiply_to_self")

    def map_divide_to_self(self, d: float) -> RealVector:
        raise _read_only("map_divide_to_self")

    def combine_to_self(self, a: float, b: float, y: Any) -> RealVector:
        raise _read_only("combine_to_self")

    def unitize(self) -> None:
        raise _read_only("unitize")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RealVector):
            return NotImplemented
        return other.get_dimension() == self.get_dimension() and bool(
            np.array_equal(self.to_array(), other.to_array())
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"UnmodifiableRealVector({self._vector!r})"


def unmodifiable_real_vector(v: RealVector) -> UnmodifiableRealVector:
    """Read-only view of v."""
    return UnmodifiableRealVector(v)


def unmodifiable_real_matrix(m: RealMatrix) -> UnmodifiableRealMatrix:
    """Read-only view of m."""
    return UnmodifiableRealMatrix(m)
