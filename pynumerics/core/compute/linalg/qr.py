"""
QR decomposition kernels.

Modified Gram-Schmidt QR, the triangular solve that consumes it, and the
signed determinant of a square factorization. These work on plain numpy
arrays; the factorization backends wrap them with validation, timing
and storage conversion.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from pynumerics.core.exceptions import SingularMatrixError
from pynumerics.core.compute.precision import numerical_rank, rank_tolerance


@dataclass(frozen=True)
class QRResult:
    """
    Result of a QR decomposition.

    Attributes:
        Q: Matrix with orthonormal (or zero) columns, m x n
        R: Upper triangular matrix, n x n
        rank: Numerical rank determined from the R diagonal
        zero_columns: Columns j whose R[j, j] is exactly zero; Q[:, j] is zero there
    """
    Q: NDArray[np.inexact[Any]]
    R: NDArray[np.inexact[Any]]
    rank: int
    zero_columns: tuple[int, ...]


def mgs_qr(A: NDArray[np.inexact[Any]]) -> QRResult:
    """
    Reduced QR decomposition by modified Gram-Schmidt.

    For j = 0..n-1:
        R[j, j] = ||v_j||
        Q[:, j] = v_j / R[j, j]             (left zero when ||v_j|| <= cutoff)
        for k > j:
            R[j, k] = Q[:, j]ᴴ v_k
            v_k    -= R[j, k] Q[:, j]       (immediately, not after all projections)

    Each projection is removed from the working columns as soon as it is
    known, so later projections are taken against already-orthogonalised
    vectors. A column whose residual norm falls to the cutoff
    max(m, n) * eps * max_k ||a_k|| is linearly dependent on the ones before
    it: it does not abort, its Q column stays zero, R[j, j] is recorded as
    exactly zero and the loop continues. Since R[j, j] <= ||a_j||, every
    kept diagonal entry clears the rank tolerance, so
    rank == n - len(zero_columns).

    Computation stays in A's dtype, so float32 input yields float32 factors.
    The identity matrix reproduces Q = R = I exactly since every
    intermediate is 0 or 1.

    Args:
        A: Matrix to decompose (m x n), m >= n

    Returns:
        QRResult with Q (m x n), R (n x n), numerical rank and zero columns
    """
    m, n = A.shape
    dtype = A.dtype
    V = np.array(A, dtype=dtype, copy=True, order='F')  # working columns
    Q = np.zeros((m, n), dtype=dtype, order='F')
    R = np.zeros((n, n), dtype=dtype)
    zero_columns = []
    cutoff = rank_tolerance((m, n), dtype, np.linalg.norm(A, axis=0))

    for j in range(n):
        norm = np.linalg.norm(V[:, j])
        if norm <= cutoff:
            zero_columns.append(j)
            continue
        R[j, j] = norm
        Q[:, j] = V[:, j] / norm
        if j + 1 < n:
            q = Q[:, j]
            # one row of R at once: R[j, k] = qᴴ v_k for every remaining k
            projections = np.conj(q) @ V[:, j + 1:]
            R[j, j + 1:] = projections
            V[:, j + 1:] -= np.outer(q, projections)

    rank = numerical_rank((m, n), dtype, np.diagonal(R))
    return QRResult(
        Q=np.ascontiguousarray(Q),
        R=R,
        rank=rank,
        zero_columns=tuple(zero_columns),
    )


def qr_solve(
    qr: QRResult,
    B: NDArray[np.inexact[Any]],
) -> NDArray[np.inexact[Any]]:
    """
    Solve A X = B (least squares when m > n) from a QR factorization.

    The solution is computed as:
        Y = Qᴴ B
        X = R⁻¹ Y     (back substitution, last row first)

    Args:
        qr: Factorization of A (m x n)
        B: Right-hand side, (m,) or (m, k). Not modified.

    Returns:
        X with shape (n,) or (n, k)

    Raises:
        SingularMatrixError: If R is numerically rank-deficient
    """
    n = qr.R.shape[0]
    if qr.rank < n:
        raise SingularMatrixError(
            f"Cannot back-substitute: R is rank-deficient (rank={qr.rank}, expected={n}).",
            matrix_name='R',
            rank=qr.rank,
            expected_rank=n,
        )

    Y = qr.Q.conj().T @ B
    return scipy.linalg.solve_triangular(qr.R, Y, lower=False, check_finite=False)


def qr_determinant(qr: QRResult) -> Any:
    """
    Signed determinant of a square matrix from its QR factorization.

    det(A) = det(Q) · ∏ R[j, j]. Every R[j, j] is a non-negative norm, so
    the sign (a phase, for complex input) comes from det(Q) alone and is
    read off an LU factorization of Q. If any R[j, j] is zero, A is
    singular and the determinant is exactly zero.
    """
    dtype = qr.R.dtype
    diagonal = np.diagonal(qr.R)
    if np.any(diagonal == 0):
        return dtype.type(0)
    magnitude = np.prod(diagonal)
    sign, _ = np.linalg.slogdet(qr.Q)
    return dtype.type(sign * magnitude)
