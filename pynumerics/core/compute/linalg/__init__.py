"""
Linear algebra kernels for PyNumerics.

Plain numpy/scipy functions on ndarrays, used by the factorization
backends. Each operation returns a structured result dataclass and
raises immediately with a clear message on failure.

Submodules:
    qr: Modified Gram-Schmidt QR, QR solve and determinant
"""

from pynumerics.core.compute.linalg.qr import (
    QRResult,
    mgs_qr,
    qr_solve,
    qr_determinant,
)

__all__ = [
    "QRResult",
    "mgs_qr",
    "qr_solve",
    "qr_determinant",
]
