"""
Vector abstraction.

Vector is the storage-independent contract: a fixed-length sequence of
scalars with bounds-checked indexed access. Storage classes implement a
handful of primitives (count, field, _at, _set, create_like); every other
operation has a default here written against those primitives and can
be overridden where a storage kind knows a faster way.

DenseVector is the reference storage, backed by a 1-D numpy array.

Construction modes:
    DenseVector(n)                  zero-filled, owns its storage
    DenseVector(array)              live view, same as DenseVector.view(array)
    DenseVector.create(n, value)    uniform, owns its storage
    DenseVector.of_array(data)      copies data
    DenseVector.view(array)         live view: writes are visible in `array`
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Number
from typing import Any, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import ValidationError
from pynumerics.core.compute.precision import is_close
from pynumerics.core.compute.tolerances import select_tolerance
from pynumerics.core.validation import (
    check_array,
    check_1d,
    check_index,
    check_length,
    check_positive,
)
from pynumerics.linalg.field import ScalarField, DOUBLE, field_for


class Vector(ABC):
    """
    Storage-independent vector contract.

    Subclasses must implement count, field, _at, _set and create_like.
    _values/_store may be overridden to expose the backing buffer directly.
    """

    # === Storage primitives ===

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of elements."""

    @property
    @abstractmethod
    def field(self) -> ScalarField:
        """Element type."""

    @abstractmethod
    def _at(self, index: int) -> Any:
        """Unchecked read."""

    @abstractmethod
    def _set(self, index: int, value: Any) -> None:
        """Unchecked write of an already-cast scalar."""

    @abstractmethod
    def create_like(self, count: int, field: ScalarField | None = None) -> Vector:
        """Zero vector of the same storage kind."""

    # === Bulk access (defaults go through the primitives) ===

    def _values(self) -> NDArray[Any]:
        """
        Element values as an ndarray, for reading only.

        May return the backing buffer itself; callers must not write to it.
        """
        return self.to_array()

    def _store(self, values: NDArray[Any]) -> None:
        """Overwrite every element from a validated, cast array."""
        for i in range(self.count):
            self._set(i, values[i])

    def to_array(self) -> NDArray[Any]:
        """Independent ndarray copy of the elements."""
        return np.array([self._at(i) for i in range(self.count)], dtype=self.field.dtype)

    def _fill(self, values: ArrayLike) -> None:
        """Validate values against this vector's length and field, then store them."""
        values = np.asarray(values)
        check_1d(values, 'values')
        check_length(values.shape[0], self.count, 'values')
        if np.iscomplexobj(values) and not self.field.is_complex:
            raise ValidationError(
                f"cannot store complex values in a {self.field.name} vector"
            )
        self._store(values.astype(self.field.dtype, copy=False))

    def _from_values(self, values: NDArray[Any]) -> Vector:
        """New vector of this storage kind holding values."""
        result = self.create_like(values.shape[0], field_for(values.dtype))
        result._fill(values)
        return result

    # === Indexed access ===

    def at(self, index: int) -> Any:
        check_index(index, self.count, 'index', (self.count,))
        return self._at(int(index))

    def set(self, index: int, value: Any) -> None:
        check_index(index, self.count, 'index', (self.count,))
        self._set(int(index), self.field.cast(value))

    def __getitem__(self, index: int) -> Any:
        return self.at(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Any]:
        for i in range(self.count):
            yield self._at(i)

    # === Copies ===

    def clone(self) -> Vector:
        """Deep copy of the same storage kind; never aliases the original."""
        return self._from_values(self.to_array())

    # === Arithmetic ===

    def dot(self, other: Vector) -> Any:
        """Bilinear dot product sum(a_i * b_i) (no conjugation)."""
        check_length(other.count, self.count, 'other')
        return np.dot(self._values(), other._values())

    def conjugate_dot(self, other: Vector) -> Any:
        """Sesquilinear dot product sum(conj(a_i) * b_i)."""
        check_length(other.count, self.count, 'other')
        return np.vdot(self._values(), other._values())

    def norm(self, p: float = 2) -> float:
        """p-norm; p=np.inf gives the largest magnitude."""
        return float(np.linalg.norm(self._values(), ord=p))

    def scale(self, scalar: Any) -> Vector:
        return self._from_values(self._values() * scalar)

    def add(self, other: Vector) -> Vector:
        check_length(other.count, self.count, 'other')
        return self._from_values(self._values() + other._values())

    def subtract(self, other: Vector) -> Vector:
        check_length(other.count, self.count, 'other')
        return self._from_values(self._values() - other._values())

    def conjugate(self) -> Vector:
        return self._from_values(np.conj(self._values()))

    def __mul__(self, scalar: Any) -> Vector:
        if isinstance(scalar, (Number, np.number)):
            return self.scale(scalar)
        return NotImplemented

    __rmul__ = __mul__

    def __matmul__(self, other: Vector) -> Any:
        if isinstance(other, Vector):
            return self.dot(other)
        return NotImplemented

    def __add__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return self.subtract(other)
        return NotImplemented

    def __neg__(self) -> Vector:
        return self.scale(-1)

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.count == other.count and bool(
            np.array_equal(self._values(), other._values())
        )

    __hash__ = None  # mutable

    def almost_equal(self, other: Vector, tol: float | None = None) -> bool:
        """Elementwise |a_i - b_i| <= tol (default: the field's tolerance tier)."""
        if self.count != other.count:
            return False
        if tol is None:
            tol = select_tolerance(self.field.dtype).atol
        return bool(np.all(is_close(self._values(), other._values(), rtol=0.0, atol=tol)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self.count}, field={self.field.name})"

    def __str__(self) -> str:
        return f"{type(self).__name__} {self.count} {self.field.name}\n{self._values()}"


class DenseVector(Vector):
    """Vector backed by a contiguous 1-D numpy array."""

    def __init__(self, count: int | NDArray[Any], field: ScalarField = DOUBLE):
        if isinstance(count, np.ndarray):
            # live view over a caller buffer
            _check_view(count)
            self._data = count
            self._field = field_for(count.dtype)
            return
        check_positive(count, 'count')
        self._data = np.zeros(count, dtype=field.dtype)
        self._field = field

    @classmethod
    def _from_storage(cls, storage: NDArray[Any]) -> DenseVector:
        vector = cls.__new__(cls)
        vector._field = field_for(storage.dtype)
        vector._data = storage
        return vector

    @classmethod
    def create(cls, count: int, value: Any, field: ScalarField | None = None) -> DenseVector:
        """Vector with every element equal to value."""
        check_positive(count, 'count')
        if field is None:
            field = field_for(check_array(value, 'value').dtype)
        return cls._from_storage(np.full(count, field.cast(value), dtype=field.dtype))

    @classmethod
    def of_array(cls, data: ArrayLike, field: ScalarField | None = None) -> DenseVector:
        """Vector holding a copy of data."""
        arr = check_array(data, 'data')
        check_1d(arr, 'data')
        check_positive(arr.shape[0], 'len(data)')
        dtype = field.dtype if field is not None else arr.dtype
        return cls._from_storage(np.array(arr, dtype=dtype, copy=True))

    @classmethod
    def view(cls, array: NDArray[Any]) -> DenseVector:
        """
        Vector over a caller-owned 1-D ndarray.

        No copy is made: writes through the vector are visible in `array`
        and vice versa.
        """
        _check_view(array)
        return cls._from_storage(array)

    @property
    def count(self) -> int:
        return self._data.shape[0]

    @property
    def field(self) -> ScalarField:
        return self._field

    def _at(self, index: int) -> Any:
        return self._data[index]

    def _set(self, index: int, value: Any) -> None:
        self._data[index] = value

    def _values(self) -> NDArray[Any]:
        return self._data

    def _store(self, values: NDArray[Any]) -> None:
        self._data[...] = values

    def to_array(self) -> NDArray[Any]:
        return self._data.copy()

    def create_like(self, count: int, field: ScalarField | None = None) -> DenseVector:
        return DenseVector(count, field or self._field)


def _check_view(array: Any) -> None:
    if not isinstance(array, np.ndarray):
        raise ValidationError(
            f"view() requires a numpy ndarray, got {type(array).__name__}"
        )
    field_for(array.dtype)
    check_1d(array, 'array')
    check_positive(array.shape[0], 'len(array)')
