"""
Core protocols for PyLinear.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that third-party vectors and fields can take part without inheriting from
library classes.

Design Principles:
    - Minimal contracts: prescribe only what the algorithms read
    - Type-safe: use generics to preserve the element type of a field
"""

from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar('T')  # Field element type


@runtime_checkable
class AnyMatrix(Protocol):
    """Anything with a row and a column dimension."""

    def get_row_dimension(self) -> int:
        """Number of rows."""
        ...

    def get_column_dimension(self) -> int:
        """Number of columns."""
        ...


@runtime_checkable
class VectorLike(Protocol):
    """
    Read contract of a vector.

    Solvers and matrix-vector products only need these two methods, so
    any vector implementation (not only RealVector subclasses) can be
    passed as a right-hand side.
    """

    def get_dimension(self) -> int:
        """Number of entries."""
        ...

    def get_entry(self, index: int) -> float:
        """Entry at a zero-based index."""
        ...


@runtime_checkable
class Field(Protocol[T]):
    """
    Arithmetic capability set of an algebraic field.

    FieldMatrix and FieldLUDecomposition perform every computation through
    these operations, so exact arithmetic (fractions) and floating point
    share the same algorithms.
    """

    @property
    def zero(self) -> T:
        """Additive identity."""
        ...

    @property
    def one(self) -> T:
        """Multiplicative identity."""
        ...

    def add(self, a: T, b: T) -> T:
        """a + b."""
        ...

    def subtract(self, a: T, b: T) -> T:
        """a - b."""
        ...

    def multiply(self, a: T, b: T) -> T:
        """a * b."""
        ...

    def negate(self, a: T) -> T:
        """Additive inverse of a."""
        ...

    def reciprocal(self, a: T) -> T:
        """Multiplicative inverse of a."""
        ...

    def convert(self, value: object) -> T:
        """Bring an arbitrary value into the field."""
        ...
