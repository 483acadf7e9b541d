"""
Input validation utilities for PyNumerics.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pynumerics.core.exceptions import (
    ValidationError,
    DimensionMismatch,
    InvalidShapeError,
    NotSquareError,
    MatrixIndexError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.inexact[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data)
    and booleans.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with a floating or complex dtype. Arrays that already
        have such a dtype are returned as-is (no copy).

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    # Integers are promoted; floats and complex keep their precision
    if not np.issubdtype(result.dtype, np.inexact):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.inexact[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionMismatch: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionMismatch(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            expected=ndim,
            actual=array.ndim,
        )


def check_1d(array: NDArray[np.inexact[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.inexact[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_positive(value: int, name: str) -> None:
    """
    Verify a dimension (row count, column count, order, length) is >= 1.

    Args:
        value: Dimension to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name}: expected an integer, got {type(value).__name__}")
    if value < 1:
        raise ValidationError(f"{name}: must be at least 1, got {value}")


def check_index(index: int, bound: int, name: str, shape: tuple[int, ...]) -> None:
    """
    Verify 0 <= index < bound.

    Args:
        index: Index to check
        bound: Exclusive upper bound
        name: Axis name for error messages ('row', 'column', 'index')
        shape: Shape of the accessed container, carried on the exception

    Raises:
        MatrixIndexError: If index is out of range
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise MatrixIndexError(
            f"{name} index must be an integer, got {type(index).__name__}",
            index=index, shape=shape,
        )
    if not 0 <= index < bound:
        raise MatrixIndexError(
            f"{name} index {index} out of range for shape {shape}",
            index=int(index), shape=shape,
        )


def check_length(actual: int, expected: int, name: str) -> None:
    """
    Verify a vector operand has the required length.

    Raises:
        DimensionMismatch: If lengths differ
    """
    if actual != expected:
        raise DimensionMismatch(
            f"{name}: expected length {expected}, got {actual}",
            expected=expected,
            actual=actual,
        )


def check_shape(
    actual: tuple[int, int],
    expected: tuple[int, int],
    name: str,
) -> None:
    """
    Verify a matrix operand (or result buffer) has the required shape.

    Raises:
        DimensionMismatch: If shapes differ
    """
    if tuple(actual) != tuple(expected):
        raise DimensionMismatch(
            f"{name}: expected shape {tuple(expected)}, got {tuple(actual)}",
            expected=tuple(expected),
            actual=tuple(actual),
        )


def check_square(rows: int, columns: int, name: str) -> None:
    """
    Verify a matrix is square.

    Raises:
        NotSquareError: If rows != columns
    """
    if rows != columns:
        raise NotSquareError(
            f"{name}: requires a square matrix, got {rows}x{columns}",
            rows=rows, columns=columns,
        )


def check_tall(rows: int, columns: int, name: str) -> None:
    """
    Verify a matrix has at least as many rows as columns.

    QR via Gram-Schmidt needs m >= n: a wide matrix has more columns
    than can be orthonormal in R^m.

    Raises:
        InvalidShapeError: If rows < columns
    """
    if rows < columns:
        raise InvalidShapeError(
            f"{name}: matrix must have rows >= columns for QR factorization, "
            f"got {rows}x{columns}",
            rows=rows, columns=columns,
        )
