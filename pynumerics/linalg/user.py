"""
User-defined storage.

UserDefinedMatrix and UserDefinedVector keep their elements in plain
Python lists and implement nothing but the storage primitives. Every
operation therefore runs through the default algorithms of Matrix and
Vector, which is exactly what a third-party storage kind gets: they are
the template for plugging a custom backing into the library.

Both constructors always copy their input.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pynumerics.core.validation import check_array, check_1d, check_2d, check_positive
from pynumerics.linalg.field import ScalarField, DOUBLE, field_for
from pynumerics.linalg.matrix import Matrix
from pynumerics.linalg.vector import Vector


class UserDefinedMatrix(Matrix):
    """
    List-of-rows matrix.

    UserDefinedMatrix(rows, columns)    zero-filled
    UserDefinedMatrix(data)             copy of a 2-D array-like
    """

    def __init__(
        self,
        rows: int | ArrayLike,
        columns: int | None = None,
        field: ScalarField | None = None,
    ):
        if columns is None:
            arr = check_array(rows, 'data')
            check_2d(arr, 'data')
            check_positive(arr.shape[0], 'rows')
            check_positive(arr.shape[1], 'columns')
            self._field = field or field_for(arr.dtype)
            arr = arr.astype(self._field.dtype)
            self._data = [[arr[i, j] for j in range(arr.shape[1])] for i in range(arr.shape[0])]
            self._columns = arr.shape[1]
        else:
            check_positive(rows, 'rows')
            check_positive(columns, 'columns')
            self._field = field or DOUBLE
            zero = self._field.zero
            self._data = [[zero] * columns for _ in range(rows)]
            self._columns = columns

    @classmethod
    def identity(cls, order: int, field: ScalarField = DOUBLE) -> UserDefinedMatrix:
        check_positive(order, 'order')
        matrix = cls(order, order, field)
        for i in range(order):
            matrix._data[i][i] = field.one
        return matrix

    @property
    def row_count(self) -> int:
        return len(self._data)

    @property
    def column_count(self) -> int:
        return self._columns

    @property
    def field(self) -> ScalarField:
        return self._field

    def _at(self, row: int, column: int) -> Any:
        return self._data[row][column]

    def _set(self, row: int, column: int, value: Any) -> None:
        self._data[row][column] = value

    def create_like(
        self, rows: int, columns: int, field: ScalarField | None = None
    ) -> UserDefinedMatrix:
        return UserDefinedMatrix(rows, columns, field or self._field)


class UserDefinedVector(Vector):
    """
    List-backed vector.

    UserDefinedVector(count)    zero-filled
    UserDefinedVector(data)     copy of a 1-D array-like
    """

    def __init__(self, data: int | ArrayLike, field: ScalarField | None = None):
        if isinstance(data, (int, np.integer)) and not isinstance(data, bool):
            check_positive(data, 'count')
            self._field = field or DOUBLE
            self._data = [self._field.zero] * int(data)
        else:
            arr = check_array(data, 'data')
            check_1d(arr, 'data')
            check_positive(arr.shape[0], 'count')
            self._field = field or field_for(arr.dtype)
            self._data = list(arr.astype(self._field.dtype))

    @property
    def count(self) -> int:
        return len(self._data)

    @property
    def field(self) -> ScalarField:
        return self._field

    def _at(self, index: int) -> Any:
        return self._data[index]

    def _set(self, index: int, value: Any) -> None:
        self._data[index] = value

    def create_like(self, count: int, field: ScalarField | None = None) -> UserDefinedVector:
        return UserDefinedVector(count, field or self._field)
