"""
Core infrastructure for PyNumerics.

This module provides shared abstractions and utilities used by the
storage layer (linalg) and the factorization engines.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision constants, tolerance tiers
"""

from pynumerics.core.protocols import Backend
from pynumerics.core.result import Result
from pynumerics.core.exceptions import (
    PyNumericsError,
    ValidationError,
    DimensionMismatch,
    InvalidShapeError,
    NotSquareError,
    MatrixIndexError,
    InvalidOperationError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyNumericsError",
    "ValidationError",
    "DimensionMismatch",
    "InvalidShapeError",
    "NotSquareError",
    "MatrixIndexError",
    "InvalidOperationError",
    "NumericalError",
    "SingularMatrixError",
]
