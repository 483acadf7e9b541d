"""
CPU reference backend for QR factorization.

Runs modified Gram-Schmidt on the design's value snapshot with numpy,
in the input field's precision.
"""

from typing import Any

from pynumerics.core.result import Result
from pynumerics.core.compute.timing import Timer
from pynumerics.core.compute.linalg.qr import mgs_qr, qr_determinant
from pynumerics.factorization.design import FactorizationDesign
from pynumerics.factorization.solution import QRParams


class CPUGramSchmidtBackend:
    """
    CPU backend using modified Gram-Schmidt.

    Implements the Backend protocol for FactorizationDesign -> QRParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_mgs'

    def solve(self, design: FactorizationDesign) -> Result[QRParams]:
        """
        Factor A = QR.

        Algorithm:
            1. Orthogonalize the columns of A (modified Gram-Schmidt)
            2. Determine the numerical rank from the diagonal of R
            3. For square A, det(A) = sign(det Q) * prod(diag R)

        A rank-deficient A is not an error here: the degenerate columns
        of Q are zero and the condition is reported in Result.warnings.

        Args:
            design: Validated factorization design

        Returns:
            Result containing QRParams
        """
        timer = Timer()
        timer.start()

        with timer.section('orthogonalize'):
            qr = mgs_qr(design.A)

        determinant = None
        if design.is_square:
            with timer.section('determinant'):
                determinant = qr_determinant(qr)

        timer.stop()

        qr.Q.flags.writeable = False
        qr.R.flags.writeable = False

        params = QRParams(
            Q=qr.Q,
            R=qr.R,
            rank=qr.rank,
            determinant=determinant,
            zero_columns=qr.zero_columns,
        )

        info: dict[str, Any] = {
            'method': 'modified_gram_schmidt',
            'rank': qr.rank,
            'shape': (design.m, design.n),
            'field': design.field.name,
        }

        warnings: tuple[str, ...] = ()
        if qr.rank < design.n:
            warnings = (
                f"Matrix is rank-deficient (rank={qr.rank}, columns={design.n}); "
                f"zero columns in Q: {list(qr.zero_columns)}",
            )

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings,
        )
