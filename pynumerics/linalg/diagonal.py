"""
Diagonal matrix storage.

Only the min(rows, columns) diagonal entries are stored, in a 1-D numpy
array. Off-diagonal reads return the field zero.

Storage invariant (enforced, raises InvalidOperationError):
    - writing a non-zero value off the diagonal is rejected; writing zero
      off the diagonal is accepted and has no effect
    - permuting rows or columns by anything but the identity is rejected

Fast paths replace the dense algorithms wherever the structure allows:
products scale rows or columns instead of running the triple loop, and
norms/determinant read the diagonal directly. For a non-square diagonal
operand a product is truncated or zero padded exactly as the dense
product would be.

One fast path departs from the dense result: pointwise_divide divides
only the diagonal, so off-diagonal entries come back as zero where the
dense algorithm would produce NaN from 0/0.

Construction modes:
    DiagonalMatrix(rows, cols)                   zeros, owned
    DiagonalMatrix(rows, cols, scalar)           uniform diagonal, owned
    DiagonalMatrix(rows, cols, ndarray)          live view over a 1-D ndarray
    DiagonalMatrix(rows, cols, sequence)         copy of a non-ndarray sequence
    DiagonalMatrix.of_array(data2d)              copy of the diagonal of a 2-D array
    DiagonalMatrix.identity(order)
    DiagonalMatrix.diagonal_identity(rows, cols)
"""

from __future__ import annotations

from numbers import Number
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import InvalidOperationError, ValidationError
from pynumerics.core.validation import (
    check_array,
    check_1d,
    check_2d,
    check_length,
    check_positive,
    check_square,
)
from pynumerics.linalg.dense import DenseMatrix
from pynumerics.linalg.field import ScalarField, DOUBLE, field_for
from pynumerics.linalg.matrix import Matrix
from pynumerics.linalg.permutation import Permutation
from pynumerics.linalg.vector import DenseVector


class DiagonalMatrix(Matrix):
    """Matrix that stores only its diagonal."""

    def __init__(
        self,
        rows: int,
        columns: int,
        diagonal: ArrayLike | complex | None = None,
        field: ScalarField | None = None,
    ):
        check_positive(rows, 'rows')
        check_positive(columns, 'columns')
        k = min(rows, columns)

        if diagonal is None:
            storage = np.zeros(k, dtype=(field or DOUBLE).dtype)
        elif isinstance(diagonal, np.ndarray):
            field_for(diagonal.dtype)
            check_1d(diagonal, 'diagonal')
            check_length(diagonal.shape[0], k, 'diagonal')
            if field is not None and field.dtype != diagonal.dtype:
                raise ValidationError(
                    f"diagonal: dtype {diagonal.dtype} does not match field {field.name}"
                )
            storage = diagonal
        elif isinstance(diagonal, (Number, np.number)):
            if field is None:
                field = field_for(check_array(diagonal, 'diagonal').dtype)
            storage = np.full(k, field.cast(diagonal), dtype=field.dtype)
        else:
            arr = check_array(diagonal, 'diagonal')
            check_1d(arr, 'diagonal')
            check_length(arr.shape[0], k, 'diagonal')
            storage = np.array(arr, dtype=field.dtype if field else arr.dtype, copy=True)

        self._rows = rows
        self._columns = columns
        self._diagonal = storage
        self._field = field_for(storage.dtype)

    # === Factories ===

    @classmethod
    def of_array(cls, data: ArrayLike, field: ScalarField | None = None) -> DiagonalMatrix:
        """
        Copy the diagonal of a 2-D array.

        Raises:
            InvalidOperationError: If data has a non-zero off-diagonal entry
        """
        arr = check_array(data, 'data')
        check_2d(arr, 'data')
        check_positive(arr.shape[0], 'rows')
        check_positive(arr.shape[1], 'columns')
        _check_off_diagonal_zero(arr)
        diag = np.diagonal(arr).astype(field.dtype if field else arr.dtype)
        return cls(arr.shape[0], arr.shape[1], diag)

    @classmethod
    def identity(cls, order: int, field: ScalarField = DOUBLE) -> DiagonalMatrix:
        check_positive(order, 'order')
        return cls(order, order, np.ones(order, dtype=field.dtype))

    @classmethod
    def diagonal_identity(
        cls, rows: int, columns: int | None = None, field: ScalarField = DOUBLE
    ) -> DiagonalMatrix:
        """Ones on the diagonal of a (possibly non-square) matrix."""
        if columns is None:
            columns = rows
        check_positive(rows, 'rows')
        check_positive(columns, 'columns')
        return cls(rows, columns, np.ones(min(rows, columns), dtype=field.dtype))

    # === Storage primitives ===

    @property
    def row_count(self) -> int:
        return self._rows

    @property
    def column_count(self) -> int:
        return self._columns

    @property
    def field(self) -> ScalarField:
        return self._field

    def _at(self, row: int, column: int) -> Any:
        if row == column:
            return self._diagonal[row]
        return self._field.zero

    def _set(self, row: int, column: int, value: Any) -> None:
        if row == column:
            self._diagonal[row] = value
        elif value != 0:
            raise InvalidOperationError(
                f"cannot store non-zero value {value!r} at off-diagonal ({row}, {column}) "
                f"of a diagonal matrix"
            )

    def _values(self) -> NDArray[Any]:
        out = np.zeros(self.shape, dtype=self._field.dtype)
        np.fill_diagonal(out, self._diagonal)
        return out

    def to_array(self) -> NDArray[Any]:
        return self._values()

    def _store(self, values: NDArray[Any]) -> None:
        _check_off_diagonal_zero(values)
        self._diagonal[...] = np.diagonal(values)

    def create_like(
        self, rows: int, columns: int, field: ScalarField | None = None
    ) -> Matrix:
        # results of general operations need not be diagonal
        return DenseMatrix(rows, columns, field or self._field)

    def _like(self, rows: int, columns: int, diagonal: NDArray[Any]) -> DiagonalMatrix:
        return DiagonalMatrix(rows, columns, np.ascontiguousarray(diagonal))

    # === Structure ===

    def clone(self) -> DiagonalMatrix:
        return self._like(self._rows, self._columns, self._diagonal.copy())

    def diagonal(self) -> DenseVector:
        return DenseVector._from_storage(self._diagonal.copy())

    def transpose(self) -> DiagonalMatrix:
        return self._like(self._columns, self._rows, self._diagonal.copy())

    def conjugate_transpose(self) -> DiagonalMatrix:
        return self._like(self._columns, self._rows, np.conj(self._diagonal))

    def permute_rows(self, permutation: Permutation) -> None:
        check_length(permutation.dimension, self._rows, 'permutation')
        if not permutation.is_identity:
            raise InvalidOperationError("cannot permute the rows of a diagonal matrix")

    def permute_columns(self, permutation: Permutation) -> None:
        check_length(permutation.dimension, self._columns, 'permutation')
        if not permutation.is_identity:
            raise InvalidOperationError("cannot permute the columns of a diagonal matrix")

    # === Multiplication fast paths ===

    def _product(self, other: Matrix) -> Matrix:
        # D (r x c) times other (c x q): row i of the result is d_i * other[i, :]
        k = self._diagonal.shape[0]
        if isinstance(other, DiagonalMatrix):
            # result is r x q and diagonal; entries exist where both factors have them
            n = min(self._rows, other._columns)
            m = min(k, other._diagonal.shape[0], n)
            diag = np.zeros(n, dtype=np.result_type(self._diagonal, other._diagonal))
            diag[:m] = self._diagonal[:m] * other._diagonal[:m]
            return self._like(self._rows, other._columns, diag)
        values = other._values()
        out = np.zeros(
            (self._rows, other.column_count),
            dtype=np.result_type(self._diagonal, values),
        )
        out[:k, :] = self._diagonal[:, np.newaxis] * values[:k, :]
        return other._from_values(out)

    def _rmatmul_values(self, left: NDArray[Any]) -> NDArray[Any]:
        # left (p x r) times D (r x c): column j of the result is left[:, j] * d_j
        k = self._diagonal.shape[0]
        out = np.zeros(
            (left.shape[0], self._columns),
            dtype=np.result_type(left, self._diagonal),
        )
        out[:, :k] = left[:, :k] * self._diagonal
        return out

    def _matvec(self, x: NDArray[Any]) -> NDArray[Any]:
        k = self._diagonal.shape[0]
        out = np.zeros(self._rows, dtype=np.result_type(x, self._diagonal))
        out[:k] = self._diagonal * x[:k]
        return out

    def _scale(self, scalar: Any) -> DiagonalMatrix:
        return self._like(self._rows, self._columns, self._diagonal * scalar)

    # === Elementwise fast paths ===

    def add(self, other: Matrix) -> Matrix:
        if isinstance(other, DiagonalMatrix):
            self._check_same_shape(other, 'add')
            return self._like(self._rows, self._columns, self._diagonal + other._diagonal)
        return super().add(other)

    def subtract(self, other: Matrix) -> Matrix:
        if isinstance(other, DiagonalMatrix):
            self._check_same_shape(other, 'subtract')
            return self._like(self._rows, self._columns, self._diagonal - other._diagonal)
        return super().subtract(other)

    def pointwise_multiply(self, other: Matrix) -> DiagonalMatrix:
        self._check_same_shape(other, 'pointwise_multiply')
        return self._like(
            self._rows, self._columns, self._diagonal * np.diagonal(other._values())
        )

    def pointwise_divide(self, other: Matrix) -> DiagonalMatrix:
        """
        Divide the diagonal by the other matrix's diagonal.

        Off-diagonal entries stay zero rather than becoming 0/0.
        """
        self._check_same_shape(other, 'pointwise_divide')
        return self._like(
            self._rows, self._columns, self._diagonal / np.diagonal(other._values())
        )

    # === Norms and scalar properties ===

    def frobenius_norm(self) -> float:
        return float(np.linalg.norm(self._diagonal))

    def l1_norm(self) -> float:
        return float(np.max(np.abs(self._diagonal)))

    def infinity_norm(self) -> float:
        return float(np.max(np.abs(self._diagonal)))

    def l2_norm(self) -> float:
        return float(np.max(np.abs(self._diagonal)))

    def determinant(self) -> Any:
        check_square(self._rows, self._columns, 'determinant')
        return self._field.dtype.type(np.prod(self._diagonal))

    def is_symmetric(self, tol: float = 0.0) -> bool:
        return self.is_square


def _check_off_diagonal_zero(values: NDArray[Any]) -> None:
    off = values.copy()
    np.fill_diagonal(off, 0)
    if np.any(off != 0):
        i, j = (int(x) for x in np.argwhere(off != 0)[0])
        raise InvalidOperationError(
            f"diagonal storage cannot hold non-zero off-diagonal entry at ({i}, {j})"
        )
