"""
Factorization Design.

A FactorizationDesign is a frozen snapshot of the values of the matrix
being factored. Backends only ever see the snapshot, so mutating the
caller's matrix (or the buffer a view matrix aliases) after the call
cannot reach into a finished factorization.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.validation import check_finite, check_tall
from pynumerics.linalg.dense import as_matrix
from pynumerics.linalg.field import ScalarField
from pynumerics.linalg.matrix import Matrix


@dataclass(frozen=True)
class FactorizationDesign:
    """
    Immutable input to a QR backend.

    Construction:
        FactorizationDesign.from_matrix(matrix)    # any Matrix or 2-D array-like
    """
    _A: NDArray[Any]
    _field: ScalarField
    _m: int
    _n: int
    _template: Matrix

    @classmethod
    def from_matrix(cls, matrix: Matrix | ArrayLike) -> FactorizationDesign:
        """
        Snapshot a matrix for factorization.

        Raises:
            InvalidShapeError: If the matrix has fewer rows than columns
            ValidationError: If the matrix holds NaN or Inf
        """
        matrix = as_matrix(matrix)
        m, n = matrix.shape
        check_tall(m, n, 'matrix')

        snapshot = matrix.to_array()
        check_finite(snapshot, 'matrix')
        snapshot.flags.writeable = False

        return cls(_A=snapshot, _field=matrix.field, _m=m, _n=n,
                   _template=matrix.create_like(1, 1))

    # === Properties ===

    @property
    def A(self) -> NDArray[Any]:
        """Read-only copy of the input values (m x n)."""
        return self._A

    @property
    def field(self) -> ScalarField:
        return self._field

    @property
    def m(self) -> int:
        """Number of rows."""
        return self._m

    @property
    def n(self) -> int:
        """Number of columns."""
        return self._n

    @property
    def is_square(self) -> bool:
        return self._m == self._n

    def create_factor(self, values: NDArray[Any]) -> Matrix:
        """
        Matrix holding values, of the input's storage kind where possible.

        Storage kinds that cannot hold arbitrary values (DiagonalMatrix)
        hand out their create_like() kind instead.
        """
        factor = self._template.create_like(values.shape[0], values.shape[1], self._field)
        factor._fill(values)
        return factor
