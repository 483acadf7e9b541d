"""
Solver dispatch for QR factorization.

This module provides the gram_schmidt() function (public API) and
backend selection.
"""

import warnings
from typing import Literal

from numpy.typing import ArrayLike

from pynumerics.factorization.design import FactorizationDesign
from pynumerics.factorization.solution import GramSchmidt
from pynumerics.factorization.backends.cpu import CPUGramSchmidtBackend
from pynumerics.linalg.matrix import Matrix


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_mgs']


def gram_schmidt(
    matrix: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> GramSchmidt:
    """
    Factor a matrix as A = QR by modified Gram-Schmidt.

    Q (m x n) has orthonormal columns and R (n x n) is upper triangular
    with a non-negative diagonal. The input is snapshotted, so later
    changes to it do not affect the factorization.

    Linearly dependent columns do not raise: the matching columns of Q
    are zero, a RuntimeWarning is emitted and the condition is recorded
    in GramSchmidt.warnings. Solving with such a factorization raises.

    Args:
        matrix: Matrix (m x n, m >= n) of any storage kind, or a 2-D array-like
        backend: Computational backend to use:
            - 'auto': Select best available (currently the CPU backend)
            - 'cpu': Use the CPU backend
            - 'cpu_mgs': Explicitly use CPU modified Gram-Schmidt

    Returns:
        GramSchmidt with factors, determinant, solve and summary methods

    Raises:
        InvalidShapeError: If the matrix has fewer rows than columns
        ValidationError: If the matrix is invalid (non-numeric, NaN, Inf)
        ValueError: If backend is unknown

    Example:
        >>> from pynumerics.linalg import DenseMatrix, DenseVector
        >>> from pynumerics.factorization import gram_schmidt
        >>>
        >>> A = DenseMatrix.of_array([[2.0, 1.0], [1.0, 3.0]])
        >>> qr = gram_schmidt(A)
        >>> x = qr.solve(DenseVector.of_array([3.0, 5.0]))
        >>> print(qr.summary())
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = FactorizationDesign.from_matrix(matrix)

    # === Select Backend ===
    backend_impl = _get_backend(backend)

    # === Solve ===
    result = backend_impl.solve(design)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    # === Wrap and Return ===
    return GramSchmidt(_result=result, _design=design)


def _get_backend(choice: BackendChoice):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_mgs'):
        return CPUGramSchmidtBackend()

    raise ValueError(f"Unknown backend: {choice!r}")
