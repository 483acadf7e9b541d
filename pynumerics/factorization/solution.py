"""
Factorization solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pynumerics.core.result import Result
from pynumerics.core.validation import check_length, check_shape, check_square
from pynumerics.core.compute.linalg.qr import QRResult, qr_solve
from pynumerics.linalg.matrix import Matrix
from pynumerics.linalg.vector import Vector

if TYPE_CHECKING:
    from pynumerics.factorization.design import FactorizationDesign


@dataclass(frozen=True)
class QRParams:
    """
    Parameter payload for a QR factorization.

    This is the immutable data computed by backends. Q and R are
    read-only arrays; determinant is None for non-square inputs.
    """
    Q: NDArray[np.inexact[Any]]
    R: NDArray[np.inexact[Any]]
    rank: int
    determinant: Any
    zero_columns: tuple[int, ...]


@dataclass
class GramSchmidt:
    """
    User-facing QR factorization A = QR.

    Wraps the backend Result. Factors are handed out as fresh matrices
    of the input's storage kind, so nothing a caller does to them can
    reach the factorization.
    """
    _result: Result[QRParams]
    _design: 'FactorizationDesign'

    # === Factors ===

    @property
    def q(self) -> Matrix:
        """Q (m x n) with orthonormal columns, zero where A was degenerate."""
        return self._design.create_factor(self._result.params.Q)

    @property
    def r(self) -> Matrix:
        """Upper triangular R (n x n) with a non-negative diagonal."""
        return self._design.create_factor(self._result.params.R)

    @property
    def determinant(self) -> Any:
        """
        Signed determinant of the factored matrix.

        Raises:
            NotSquareError: If the factored matrix is not square
        """
        check_square(self._design.m, self._design.n, 'determinant')
        return self._result.params.determinant

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def is_full_rank(self) -> bool:
        return self._result.params.rank == self._design.n

    @property
    def zero_columns(self) -> tuple[int, ...]:
        return self._result.params.zero_columns

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # === Solving ===

    def solve(
        self,
        b: Vector | Matrix,
        result: Vector | Matrix | None = None,
    ) -> Vector | Matrix | None:
        """
        Solve A x = b, in the least-squares sense when A is tall.

        b may be a Vector (length m) or a Matrix (m rows, one right-hand
        side per column). The solution has b's storage kind and n entries
        (or n rows). With a pre-allocated `result` the solution is written
        into it and None is returned. Neither A nor b is modified.

        Raises:
            DimensionMismatch: If b or result has the wrong size
            SingularMatrixError: If the factorization is rank-deficient
        """
        m, n = self._design.m, self._design.n

        if isinstance(b, Vector):
            check_length(b.count, m, 'b')
            if result is not None:
                if not isinstance(result, Vector):
                    raise TypeError(
                        f"result must be a Vector for a vector right-hand side, "
                        f"got {type(result).__name__}"
                    )
                check_length(result.count, n, 'result')
        elif isinstance(b, Matrix):
            check_length(b.row_count, m, 'b')
            if result is not None:
                if not isinstance(result, Matrix):
                    raise TypeError(
                        f"result must be a Matrix for a matrix right-hand side, "
                        f"got {type(result).__name__}"
                    )
                check_shape(result.shape, (n, b.column_count), 'result')
        else:
            raise TypeError(f"cannot solve for right-hand side of type {type(b).__name__}")

        x = qr_solve(self._qr(), b._values())

        if result is None:
            return b._from_values(x)
        result._fill(x)
        return None

    def _qr(self) -> QRResult:
        params = self._result.params
        return QRResult(
            Q=params.Q,
            R=params.R,
            rank=params.rank,
            zero_columns=params.zero_columns,
        )

    # === Display ===

    def summary(self) -> str:
        """Generate a text summary of the factorization."""
        lines = [
            "Gram-Schmidt QR Factorization",
            "=" * 60,
            f"Rows: {self._design.m}",
            f"Columns: {self._design.n}",
            f"Field: {self._design.field.name}",
            f"Rank: {self.rank}",
        ]
        if self._design.is_square:
            lines.append(f"Determinant: {self._result.params.determinant}")
        if self.zero_columns:
            lines.append(f"Zero columns in Q: {list(self.zero_columns)}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"GramSchmidt(m={self._design.m}, n={self._design.n}, "
            f"rank={self.rank}, field={self._design.field.name})"
        )
