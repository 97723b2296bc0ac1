"""
Field capability objects.

A field object carries the arithmetic of its element type; containers
such as FieldMatrix hold plain elements and delegate every operation to
the field they were built with. Both implementations satisfy the Field
protocol from pylinear.core.protocols.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Any

from pylinear.core.exceptions import MathArithmeticError, ValidationError


class FractionField:
    """
    Exact rational arithmetic on fractions.Fraction.

    Every operation is exact, so LU over this field yields exact
    determinants and inverses.

    Example:
        >>> F = FractionField()
        >>> F.multiply(Fraction(1, 3), F.convert(6))
        Fraction(2, 1)
    """

    @property
    def zero(self) -> Fraction:
        return Fraction(0)

    @property
    def one(self) -> Fraction:
        return Fraction(1)

    def add(self, a: Fraction, b: Fraction) -> Fraction:
        return a + b

    def subtract(self, a: Fraction, b: Fraction) -> Fraction:
        return a - b

    def multiply(self, a: Fraction, b: Fraction) -> Fraction:
        return a * b

    def negate(self, a: Fraction) -> Fraction:
        return -a

    def reciprocal(self, a: Fraction) -> Fraction:
        """
        Raises:
            MathArithmeticError: If a is zero
        """
        if a == 0:
            raise MathArithmeticError("reciprocal of zero")
        return 1 / a

    def convert(self, value: Any) -> Fraction:
        """
        Convert ints, strings ("3/4") and Fractions exactly.

        Floats are converted to their exact binary value.

        Raises:
            ValidationError: If value is not a rational number
        """
        if isinstance(value, Fraction):
            return value
        try:
            return Fraction(value)
        except (ValueError, TypeError, ZeroDivisionError) as e:
            raise ValidationError(f"cannot convert {value!r} to a fraction: {e}") from e

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FractionField)

    def __hash__(self) -> int:
        return hash(FractionField)

    def __repr__(self) -> str:
        return "FractionField()"


class RealField:
    """Floating-point arithmetic on Python floats."""

    @property
    def zero(self) -> float:
        return 0.0

    @property
    def one(self) -> float:
        return 1.0

    def add(self, a: float, b: float) -> float:
        return a + b

    def subtract(self, a: float, b: float) -> float:
        return a - b

    def multiply(self, a: float, b: float) -> float:
        return a * b

    def negate(self, a: float) -> float:
        return -a

    def reciprocal(self, a: float) -> float:
        if a == 0.0:
            raise MathArithmeticError("reciprocal of zero")
        return 1.0 / a

    def convert(self, value: Any) -> float:
        try:
            return float(value)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"cannot convert {value!r} to a float: {e}") from e

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RealField)

    def __hash__(self) -> int:
        return hash(RealField)

    def __repr__(self) -> str:
        return "RealField()"
