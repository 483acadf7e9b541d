"""
Exception hierarchy for PyNumerics.

All exceptions inherit from PyNumericsError to allow catching any
library-specific error. Storage- and factorization-specific exceptions
inherit from the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyNumericsError(Exception):
    """Base exception for all PyNumerics errors."""
    pass


class ValidationError(PyNumericsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionMismatch(ValidationError):
    """
    Operand dimensions are incompatible.

    Raised when two operands cannot be combined (multiply, solve, add)
    or when a pre-allocated result buffer has the wrong shape.

    Attributes:
        expected: Required shape or length, if known
        actual: Shape or length that was supplied, if known
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | int | None = None,
        actual: tuple[int, ...] | int | None = None
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class InvalidShapeError(DimensionMismatch):
    """
    Matrix shape is unsupported by the requested factorization.

    Raised when a QR factorization is requested on a wide matrix
    (fewer rows than columns).

    Attributes:
        rows: Row count of the offending matrix
        columns: Column count of the offending matrix
    """

    def __init__(self, message: str, rows: int | None = None, columns: int | None = None):
        super().__init__(message, actual=(rows, columns) if rows is not None else None)
        self.rows = rows
        self.columns = columns


class NotSquareError(DimensionMismatch):
    """
    A square-only operation was requested on a non-square matrix.

    Attributes:
        rows: Row count of the offending matrix
        columns: Column count of the offending matrix
    """

    def __init__(self, message: str, rows: int | None = None, columns: int | None = None):
        super().__init__(message, actual=(rows, columns) if rows is not None else None)
        self.rows = rows
        self.columns = columns


class MatrixIndexError(PyNumericsError, IndexError):
    """
    Element access outside the bounds of a matrix or vector.

    Also an IndexError, so plain ``except IndexError`` keeps working.

    Attributes:
        index: The offending index (int or (row, column) tuple)
        shape: Shape of the container that was accessed
    """

    def __init__(
        self,
        message: str,
        index: int | tuple[int, int] | None = None,
        shape: tuple[int, ...] | None = None
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape


class InvalidOperationError(PyNumericsError):
    """
    Structural mutation would violate a storage invariant.

    Raised when, e.g., a diagonal matrix is asked to permute its rows or
    to store a non-zero value off its diagonal.
    """
    pass


class NumericalError(PyNumericsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when an operation requires invertibility (e.g. back
    substitution against R) but the matrix is numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically the column count)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
