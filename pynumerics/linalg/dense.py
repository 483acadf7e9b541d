"""
Dense matrix storage.

DenseMatrix keeps every element in a 2-D numpy array. It is the
reference storage kind: the base-class defaults already compute on
numpy arrays, so DenseMatrix only needs to expose its buffer.

Construction modes (copy vs. live view is fixed at construction):
    DenseMatrix(rows, cols)                       zero-filled, owned
    DenseMatrix.create(rows, cols, value)         uniform, owned
    DenseMatrix.of_array(data)                    copy of a 2-D array-like
    DenseMatrix.identity(order)                   owned
    DenseMatrix.of_diagonal(rows, cols, diag)     owned
    DenseMatrix.view(array)                       live view over a 2-D ndarray
    DenseMatrix.from_column_major(rows, cols, a)  live view over a flat ndarray

clone() always returns an owned copy, whatever the original's mode.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import ValidationError
from pynumerics.core.validation import (
    check_array,
    check_1d,
    check_2d,
    check_length,
    check_positive,
)
from pynumerics.linalg.field import ScalarField, DOUBLE, field_for
from pynumerics.linalg.matrix import Matrix


class DenseMatrix(Matrix):
    """Matrix backed by a 2-D numpy array."""

    def __init__(self, rows: int, columns: int, field: ScalarField = DOUBLE):
        check_positive(rows, 'rows')
        check_positive(columns, 'columns')
        self._data = np.zeros((rows, columns), dtype=field.dtype)
        self._field = field

    @classmethod
    def _from_storage(cls, storage: NDArray[Any]) -> DenseMatrix:
        matrix = cls.__new__(cls)
        matrix._field = field_for(storage.dtype)
        matrix._data = storage
        return matrix

    # === Factories ===

    @classmethod
    def create(
        cls, rows: int, columns: int, value: Any, field: ScalarField | None = None
    ) -> DenseMatrix:
        """Matrix with every element equal to value."""
        check_positive(rows, 'rows')
        check_positive(columns, 'columns')
        if field is None:
            field = field_for(check_array(value, 'value').dtype)
        return cls._from_storage(np.full((rows, columns), field.cast(value), dtype=field.dtype))

    @classmethod
    def of_array(cls, data: ArrayLike, field: ScalarField | None = None) -> DenseMatrix:
        """Matrix holding a copy of a 2-D array-like."""
        arr = check_array(data, 'data')
        check_2d(arr, 'data')
        check_positive(arr.shape[0], 'rows')
        check_positive(arr.shape[1], 'columns')
        dtype = field.dtype if field is not None else arr.dtype
        return cls._from_storage(np.array(arr, dtype=dtype, copy=True))

    @classmethod
    def identity(cls, order: int, field: ScalarField = DOUBLE) -> DenseMatrix:
        check_positive(order, 'order')
        return cls._from_storage(np.eye(order, dtype=field.dtype))

    @classmethod
    def of_diagonal(
        cls, rows: int, columns: int, diagonal: ArrayLike, field: ScalarField | None = None
    ) -> DenseMatrix:
        """Dense matrix with the given diagonal and zeros elsewhere."""
        check_positive(rows, 'rows')
        check_positive(columns, 'columns')
        diag = check_array(diagonal, 'diagonal')
        check_1d(diag, 'diagonal')
        check_length(diag.shape[0], min(rows, columns), 'diagonal')
        dtype = field.dtype if field is not None else diag.dtype
        storage = np.zeros((rows, columns), dtype=dtype)
        np.fill_diagonal(storage, diag)
        return cls._from_storage(storage)

    @classmethod
    def view(cls, array: NDArray[Any]) -> DenseMatrix:
        """
        Matrix over a caller-owned 2-D ndarray.

        No copy is made: writes through the matrix are visible in `array`
        and vice versa.
        """
        if not isinstance(array, np.ndarray):
            raise ValidationError(
                f"view() requires a numpy ndarray, got {type(array).__name__}"
            )
        field_for(array.dtype)
        check_2d(array, 'array')
        check_positive(array.shape[0], 'rows')
        check_positive(array.shape[1], 'columns')
        return cls._from_storage(array)

    @classmethod
    def from_column_major(cls, rows: int, columns: int, data: NDArray[Any]) -> DenseMatrix:
        """
        Matrix over a caller-owned flat ndarray in column-major order.

        Element (i, j) lives at data[j * rows + i]. No copy is made.
        """
        if not isinstance(data, np.ndarray):
            raise ValidationError(
                f"from_column_major() requires a numpy ndarray, got {type(data).__name__}"
            )
        field_for(data.dtype)
        check_positive(rows, 'rows')
        check_positive(columns, 'columns')
        check_1d(data, 'data')
        check_length(data.shape[0], rows * columns, 'data')
        # (columns, rows) row-major is column-major once transposed; both steps are views
        return cls._from_storage(data.reshape((columns, rows)).T)

    # === Storage primitives ===

    @property
    def row_count(self) -> int:
        return self._data.shape[0]

    @property
    def column_count(self) -> int:
        return self._data.shape[1]

    @property
    def field(self) -> ScalarField:
        return self._field

    def _at(self, row: int, column: int) -> Any:
        return self._data[row, column]

    def _set(self, row: int, column: int, value: Any) -> None:
        self._data[row, column] = value

    def _values(self) -> NDArray[Any]:
        return self._data

    def _store(self, values: NDArray[Any]) -> None:
        self._data[...] = values

    def to_array(self) -> NDArray[Any]:
        return self._data.copy()

    def create_like(
        self, rows: int, columns: int, field: ScalarField | None = None
    ) -> DenseMatrix:
        return DenseMatrix(rows, columns, field or self._field)


def as_matrix(data: Matrix | ArrayLike, name: str = 'matrix') -> Matrix:
    """Pass a Matrix through unchanged; copy anything else into a DenseMatrix."""
    if isinstance(data, Matrix):
        return data
    arr = check_array(data, name)
    check_2d(arr, name)
    return DenseMatrix.of_array(arr)
