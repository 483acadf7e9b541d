"""
QR factorization by modified Gram-Schmidt.

Public API:
    gram_schmidt(matrix, ...) -> GramSchmidt

The gram_schmidt() function is the only entry point. It handles:
    - Input validation and snapshotting
    - Backend selection
    - Result wrapping

Example:
    >>> from pynumerics.factorization import gram_schmidt
    >>> qr = gram_schmidt(A)
    >>> x = qr.solve(b)
    >>> print(qr.summary())
"""

from pynumerics.factorization.design import FactorizationDesign
from pynumerics.factorization.solution import GramSchmidt, QRParams
from pynumerics.factorization.solvers import gram_schmidt

__all__ = [
    "gram_schmidt",
    "FactorizationDesign",
    "GramSchmidt",
    "QRParams",
]
