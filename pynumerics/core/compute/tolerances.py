"""
Tolerance tiers for numerical validation.

Defines precision expectations for the different scalar fields:
- single precision (float32 / complex64): relaxed
- double precision (float64 / complex128): near machine precision

Used by the test suite and by almost_equal() defaults.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Q·R reconstruction in float32 / complex64
SINGLE_PRECISION = ToleranceTier(
    rtol=1e-4,
    atol=1e-4,
    name='single',
    description='Single precision factorization reconstruction',
)

# Q·R reconstruction in float64 / complex128
DOUBLE_PRECISION = ToleranceTier(
    rtol=1e-10,
    atol=1e-10,
    name='double',
    description='Double precision factorization reconstruction',
)

# A·x against b after a solve, any field
SOLVE_RESIDUAL = ToleranceTier(
    rtol=0.0,
    atol=1e-3,
    name='solve_residual',
    description='Elementwise residual of a solved system',
)

# Norms and determinants of a storage fast path against the dense reference
NORM_RELATIVE = ToleranceTier(
    rtol=1e-14,
    atol=0.0,
    name='norm_relative',
    description='Relative agreement of a fast path with the dense reference',
)


def select_tolerance(dtype: np.dtype | type) -> ToleranceTier:
    """Select the reconstruction tolerance tier for a dtype."""
    if np.finfo(dtype).bits <= 32:
        return SINGLE_PRECISION
    return DOUBLE_PRECISION
