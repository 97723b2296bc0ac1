"""
Exception hierarchy for PyLinear.

All exceptions inherit from PyLinearError to allow catching any
library-specific error. Argument problems derive from ValidationError,
numerical failures from NumericalError.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinearError(Exception):
    """Base exception for all PyLinear errors."""
    pass


class ValidationError(PyLinearError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class NullArgumentError(ValidationError):
    """A required array or collection argument is None."""

    def __init__(self, message: str = "null is not allowed"):
        super().__init__(message)


class NoDataError(ValidationError):
    """
    Zero rows, zero columns, or an empty selection.

    Raised where at least one row, column or index is required.
    """

    def __init__(self, message: str = "no data"):
        super().__init__(message)


class DimensionMismatchError(ValidationError):
    """
    Dimensions of two operands disagree.

    Raised for ragged rows, for incompatible operand shapes and for
    right-hand sides whose row count does not match the decomposed matrix.

    Attributes:
        actual: The dimension that was received
        expected: The dimension that was required
    """

    def __init__(
        self,
        actual: int,
        expected: int,
        message: str | None = None
    ):
        if message is None:
            message = f"dimension mismatch: got {actual}, expected {expected}"
        super().__init__(message)
        self.actual = actual
        self.expected = expected


class NotStrictlyPositiveError(ValidationError):
    """
    A size or dimension parameter is <= 0.

    Attributes:
        value: The offending value
    """

    def __init__(self, value: int | float, message: str | None = None):
        if message is None:
            message = f"{value} is smaller than, or equal to, the minimum (0)"
        super().__init__(message)
        self.value = value


class NotPositiveError(ValidationError):
    """
    A count parameter is < 0.

    Attributes:
        value: The offending value
    """

    def __init__(self, value: int | float, message: str | None = None):
        if message is None:
            message = f"{value} is smaller than the minimum (0)"
        super().__init__(message)
        self.value = value


class NumberIsTooSmallError(ValidationError):
    """
    A bound is below the value it must not precede.

    Typically raised when a final row or column index precedes the
    initial one.

    Attributes:
        value: The offending value
        bound: The minimum admissible value
    """

    def __init__(
        self,
        value: int | float,
        bound: int | float,
        message: str | None = None
    ):
        if message is None:
            message = f"{value} is smaller than the minimum ({bound})"
        super().__init__(message)
        self.value = value
        self.bound = bound


class OutOfRangeError(ValidationError):
    """
    An index lies outside its valid interval.

    Attributes:
        value: The offending index
        lower: Smallest valid index
        upper: Largest valid index
    """

    def __init__(
        self,
        value: int,
        lower: int,
        upper: int,
        message: str | None = None
    ):
        if message is None:
            message = f"index {value} out of [{lower}, {upper}] range"
        super().__init__(message)
        self.value = value
        self.lower = lower
        self.upper = upper


class NonSquareMatrixError(DimensionMismatchError):
    """
    A square matrix was required.

    Attributes:
        rows: Row dimension of the matrix
        columns: Column dimension of the matrix
    """

    def __init__(self, rows: int, columns: int):
        super().__init__(
            columns,
            rows,
            f"a {rows}x{columns} matrix was provided instead of a square matrix",
        )
        self.rows = rows
        self.columns = columns


class NumericalError(PyLinearError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class NonSymmetricMatrixError(NumericalError):
    """
    Matrix violates the symmetry tolerance.

    Attributes:
        row: Row index of the first offending entry
        column: Column index of the first offending entry
        threshold: Relative symmetry threshold that was exceeded
    """

    def __init__(self, row: int, column: int, threshold: float):
        super().__init__(
            f"not symmetric matrix: entries ({row}, {column}) and "
            f"({column}, {row}) differ by more than relative threshold {threshold}"
        )
        self.row = row
        self.column = column
        self.threshold = threshold


class NonPositiveDefiniteMatrixError(NumericalError):
    """
    Matrix is not positive definite.

    Raised during Cholesky or UD factorization when a running diagonal
    term falls below the positivity threshold.

    Attributes:
        value: The offending diagonal term
        index: Position of the term on the diagonal
        threshold: Absolute positivity threshold
    """

    def __init__(self, value: float, index: int, threshold: float):
        super().__init__(
            f"not positive definite matrix: diagonal element at ({index}, {index}) "
            f"is {value}, threshold is {threshold}"
        )
        self.value = value
        self.index = index
        self.threshold = threshold


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a solve or an inverse is requested from a decomposition
    whose non-singularity check fails.

    Attributes:
        matrix_name: Name/description of the problematic matrix
    """

    def __init__(
        self,
        message: str = "matrix is singular",
        matrix_name: str | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name


class MathArithmeticError(NumericalError):
    """Arithmetic failure such as division by a zero norm or zero pivot."""
    pass


class UnsupportedOperationError(PyLinearError):
    """A mutating call was made on a read-only view."""

    def __init__(self, message: str = "unsupported operation"):
        super().__init__(message)
