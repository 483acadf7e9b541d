"""
Numerical precision constants and utilities.

Provides machine epsilon, closeness checks and the rank tolerance used
when reading the numerical rank off a triangular factor.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = float(np.finfo(np.float32).eps)  # ~1.19e-7

# Default tolerance for numerical comparisons (relative)
DEFAULT_RTOL: float = 1e-12

# Default tolerance for considering values as zero (absolute)
DEFAULT_ATOL: float = 1e-14


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Complex dtypes report the epsilon of their real component.
    """
    return float(np.finfo(dtype).eps)


def is_close(
    a: complex | NDArray[np.inexact[Any]],
    b: complex | NDArray[np.inexact[Any]],
    rtol: float = DEFAULT_RTOL,
    atol: float = DEFAULT_ATOL
) -> bool | NDArray[np.bool_]:
    """
    Check if values are numerically close.

    Uses the formula: |a - b| <= atol + rtol * |b|
    """
    return np.abs(a - b) <= atol + rtol * np.abs(b)


def rank_tolerance(
    shape: tuple[int, int],
    dtype: np.dtype | type,
    diagonal: NDArray[np.inexact[Any]],
) -> float:
    """
    Threshold below which a diagonal entry of R counts as zero.

    max(m, n) * eps * max|R_jj|, the LAPACK-style cutoff. Gram-Schmidt also
    calls it with the column norms of A to decide when a residual column
    has vanished. Scaling by the largest entry (rather than the first)
    keeps a leading zero column from zeroing the tolerance.
    """
    if diagonal.size == 0:
        return 0.0
    scale = float(np.max(np.abs(diagonal)))
    return max(shape) * machine_epsilon(dtype) * scale


def numerical_rank(
    shape: tuple[int, int],
    dtype: np.dtype | type,
    diagonal: NDArray[np.inexact[Any]],
) -> int:
    """Count diagonal entries of R above the rank tolerance."""
    magnitudes = np.abs(diagonal)
    if magnitudes.size == 0 or magnitudes.max() == 0:
        return 0
    tol = rank_tolerance(shape, dtype, diagonal)
    return int(np.sum(magnitudes > tol))
