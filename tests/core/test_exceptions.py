"""
Tests for the PyLinear exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyLinearError)
    - ValidationError / NumericalError split
    - Diagnostic attributes and default messages
"""

import pytest

from pylinear.core.exceptions import (
    DimensionMismatchError,
    MathArithmeticError,
    NoDataError,
    NonPositiveDefiniteMatrixError,
    NonSquareMatrixError,
    NonSymmetricMatrixError,
    NotPositiveError,
    NotStrictlyPositiveError,
    NullArgumentError,
    NumberIsTooSmallError,
    NumericalError,
    OutOfRangeError,
    PyLinearError,
    SingularMatrixError,
    UnsupportedOperationError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyLinearError."""

    @pytest.mark.parametrize("exc", [
        NullArgumentError(),
        NoDataError(),
        DimensionMismatchError(2, 3),
        NotStrictlyPositiveError(0),
        NotPositiveError(-1),
        NumberIsTooSmallError(1, 2),
        OutOfRangeError(5, 0, 3),
        NonSquareMatrixError(2, 3),
    ])
    def test_argument_errors_are_validation_errors(self, exc):
        assert isinstance(exc, ValidationError)
        assert isinstance(exc, PyLinearError)

    @pytest.mark.parametrize("exc", [
        NonSymmetricMatrixError(0, 1, 1e-15),
        NonPositiveDefiniteMatrixError(-1.0, 2, 1e-10),
        SingularMatrixError(),
        MathArithmeticError("zero norm"),
    ])
    def test_numerical_failures_are_numerical_errors(self, exc):
        assert isinstance(exc, NumericalError)
        assert isinstance(exc, PyLinearError)

    def test_non_square_is_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            raise NonSquareMatrixError(2, 3)

    def test_unsupported_operation_is_neither_branch(self):
        err = UnsupportedOperationError()
        assert isinstance(err, PyLinearError)
        assert not isinstance(err, ValidationError)
        assert not isinstance(err, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:
    """Errors carry the values needed to diagnose them."""

    def test_dimension_mismatch(self):
        err = DimensionMismatchError(2, 3)
        assert err.actual == 2
        assert err.expected == 3
        assert "got 2" in str(err)
        assert "expected 3" in str(err)

    def test_dimension_mismatch_custom_message(self):
        err = DimensionMismatchError(2, 3, "b: wrong length")
        assert str(err) == "b: wrong length"
        assert err.actual == 2

    def test_non_square(self):
        err = NonSquareMatrixError(2, 3)
        assert err.rows == 2
        assert err.columns == 3
        assert err.actual == 3
        assert err.expected == 2
        assert "2x3" in str(err)

    def test_out_of_range(self):
        err = OutOfRangeError(5, 0, 3)
        assert (err.value, err.lower, err.upper) == (5, 0, 3)
        assert "[0, 3]" in str(err)

    def test_number_is_too_small(self):
        err = NumberIsTooSmallError(1, 2)
        assert err.value == 1
        assert err.bound == 2

    def test_not_strictly_positive(self):
        assert NotStrictlyPositiveError(0).value == 0

    def test_not_positive(self):
        assert NotPositiveError(-4).value == -4

    def test_non_symmetric(self):
        err = NonSymmetricMatrixError(0, 2, 1e-15)
        assert (err.row, err.column, err.threshold) == (0, 2, 1e-15)
        assert "(0, 2)" in str(err)

    def test_non_positive_definite(self):
        err = NonPositiveDefiniteMatrixError(-0.5, 1, 1e-10)
        assert err.value == -0.5
        assert err.index == 1
        assert err.threshold == 1e-10

    def test_singular_defaults(self):
        err = SingularMatrixError()
        assert str(err) == "matrix is singular"
        assert err.matrix_name is None

    def test_singular_with_name(self):
        err = SingularMatrixError("A is singular", matrix_name="A")
        assert err.matrix_name == "A"

    def test_default_messages(self):
        assert str(NullArgumentError()) == "null is not allowed"
        assert str(NoDataError()) == "no data"
        assert str(UnsupportedOperationError()) == "unsupported operation"
