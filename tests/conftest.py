"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def square_data(rng):
    """Well-conditioned 6x6 matrix: random plus a dominant diagonal."""
    return rng.standard_normal((6, 6)) + 6.0 * np.eye(6)


@pytest.fixture
def tall_data(rng):
    """Random 10x6 matrix (full column rank with probability one)."""
    return rng.standard_normal((10, 6))


@pytest.fixture
def collinear_data(rng):
    """8x3 matrix whose third column is the sum of the first two."""
    x1 = rng.standard_normal(8)
    x2 = rng.standard_normal(8)
    return np.column_stack([x1, x2, x1 + x2])
