"""
PyNumerics: matrix storage and Gram-Schmidt QR for Python.

Dense, diagonal and user-defined matrices share one contract, so every
operation (including factorization and solving) works across storage
kinds and scalar fields.

Submodules:
    linalg: Matrix and vector storage, scalar fields, permutations
    factorization: Modified Gram-Schmidt QR and least-squares solve
"""

__version__ = "0.1.0"

from pynumerics import linalg
from pynumerics import factorization
from pynumerics.factorization import gram_schmidt

__all__ = [
    "__version__",
    "linalg",
    "factorization",
    "gram_schmidt",
]
