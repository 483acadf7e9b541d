"""
Matrix abstraction.

Matrix is the storage-independent contract every storage kind honours:
dense, diagonal and user-defined matrices must be indistinguishable
through this interface apart from speed.

Storage classes implement five primitives:
    row_count, column_count, field    shape and element type
    _at(i, j), _set(i, j, value)      unchecked element access
    create_like(rows, columns)        zero matrix able to hold any values

Everything else has a default here. Defaults read values through
_values() (which itself defaults to element-wise _at) and compute with
numpy, so they double as the dense reference every fast path is tested
against. Storage kinds override _values/_store to expose their buffer,
and override individual operations where structure permits a cheaper
algorithm (see DiagonalMatrix).

Multiplication goes through two hooks so that either operand may supply
a fast path:
    left._product(right)             -> Matrix (left operand decides)
    right._rmatmul_values(left_vals) -> ndarray (right operand decides)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Number
from typing import Any, TYPE_CHECKING

import numpy as np
import scipy.linalg
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import ValidationError, DimensionMismatch
from pynumerics.core.compute.precision import is_close
from pynumerics.core.compute.tolerances import select_tolerance
from pynumerics.core.validation import (
    check_2d,
    check_index,
    check_length,
    check_positive,
    check_shape,
    check_square,
)
from pynumerics.linalg.field import ScalarField, field_for
from pynumerics.linalg.permutation import Permutation
from pynumerics.linalg.vector import Vector, DenseVector

if TYPE_CHECKING:
    from pynumerics.factorization.solution import GramSchmidt


class Matrix(ABC):
    """
    Storage-independent matrix contract.

    Indexing uses m[i, j]; both indices are bounds-checked and an
    out-of-range access raises MatrixIndexError (an IndexError).
    """

    # === Storage primitives ===

    @property
    @abstractmethod
    def row_count(self) -> int:
        """Number of rows."""

    @property
    @abstractmethod
    def column_count(self) -> int:
        """Number of columns."""

    @property
    @abstractmethod
    def field(self) -> ScalarField:
        """Element type."""

    @abstractmethod
    def _at(self, row: int, column: int) -> Any:
        """Unchecked read."""

    @abstractmethod
    def _set(self, row: int, column: int, value: Any) -> None:
        """Unchecked write of an already-cast scalar."""

    @abstractmethod
    def create_like(
        self, rows: int, columns: int, field: ScalarField | None = None
    ) -> Matrix:
        """Zero matrix that can hold arbitrary values, for results."""

    # === Bulk access ===

    def _values(self) -> NDArray[Any]:
        """
        Element values as a 2-D ndarray, for reading only.

        May return the backing buffer itself; callers must not write to it.
        """
        return self.to_array()

    def _store(self, values: NDArray[Any]) -> None:
        """Overwrite every element from a validated, cast array."""
        for i in range(self.row_count):
            for j in range(self.column_count):
                self._set(i, j, values[i, j])

    def to_array(self) -> NDArray[Any]:
        """Independent 2-D ndarray copy of the elements."""
        out = np.empty(self.shape, dtype=self.field.dtype)
        for i in range(self.row_count):
            for j in range(self.column_count):
                out[i, j] = self._at(i, j)
        return out

    def _fill(self, values: ArrayLike) -> None:
        """Validate values against this matrix's shape and field, then store them."""
        values = np.asarray(values)
        check_2d(values, 'values')
        check_shape(values.shape, self.shape, 'values')
        if np.iscomplexobj(values) and not self.field.is_complex:
            raise ValidationError(
                f"cannot store complex values in a {self.field.name} matrix"
            )
        self._store(values.astype(self.field.dtype, copy=False))

    def _from_values(self, values: NDArray[Any]) -> Matrix:
        """New matrix (via create_like) holding values."""
        result = self.create_like(values.shape[0], values.shape[1], field_for(values.dtype))
        result._fill(values)
        return result

    # === Shape ===

    @property
    def shape(self) -> tuple[int, int]:
        return (self.row_count, self.column_count)

    @property
    def is_square(self) -> bool:
        return self.row_count == self.column_count

    # === Indexed access ===

    def _check_indices(self, row: int, column: int) -> None:
        check_index(row, self.row_count, 'row', self.shape)
        check_index(column, self.column_count, 'column', self.shape)

    def at(self, row: int, column: int) -> Any:
        self._check_indices(row, column)
        return self._at(int(row), int(column))

    def set(self, row: int, column: int, value: Any) -> None:
        self._check_indices(row, column)
        self._set(int(row), int(column), self.field.cast(value))

    def __getitem__(self, key: tuple[int, int]) -> Any:
        row, column = _unpack_key(key)
        return self.at(row, column)

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        row, column = _unpack_key(key)
        self.set(row, column, value)

    def row(self, index: int) -> DenseVector:
        check_index(index, self.row_count, 'row', self.shape)
        return DenseVector._from_storage(np.array(self._values()[index, :]))

    def column(self, index: int) -> DenseVector:
        check_index(index, self.column_count, 'column', self.shape)
        return DenseVector._from_storage(np.array(self._values()[:, index]))

    def diagonal(self) -> DenseVector:
        return DenseVector._from_storage(np.diagonal(self._values()).copy())

    # === Copies and structure ===

    def clone(self) -> Matrix:
        """Deep copy of the same storage kind; never aliases the original."""
        return self._from_values(self.to_array())

    def transpose(self) -> Matrix:
        return self._from_values(self._values().T.copy())

    def conjugate_transpose(self) -> Matrix:
        return self._from_values(np.conj(self._values()).T.copy())

    def sub_matrix(self, row: int, row_count: int, column: int, column_count: int) -> Matrix:
        """Copy of the window starting at (row, column) of the given size."""
        check_positive(row_count, 'row_count')
        check_positive(column_count, 'column_count')
        check_index(row, self.row_count, 'row', self.shape)
        check_index(column, self.column_count, 'column', self.shape)
        check_index(row + row_count - 1, self.row_count, 'row', self.shape)
        check_index(column + column_count - 1, self.column_count, 'column', self.shape)
        window = self._values()[row:row + row_count, column:column + column_count]
        return self._from_values(window.copy())

    def append(self, other: Matrix) -> Matrix:
        """Horizontal concatenation [self, other]."""
        if other.row_count != self.row_count:
            raise DimensionMismatch(
                f"append: row counts differ ({self.row_count} vs {other.row_count})",
                expected=self.row_count, actual=other.row_count,
            )
        return self._from_values(np.hstack([self._values(), other._values()]))

    def stack(self, other: Matrix) -> Matrix:
        """Vertical concatenation [self; other]."""
        if other.column_count != self.column_count:
            raise DimensionMismatch(
                f"stack: column counts differ ({self.column_count} vs {other.column_count})",
                expected=self.column_count, actual=other.column_count,
            )
        return self._from_values(np.vstack([self._values(), other._values()]))

    def permute_rows(self, permutation: Permutation) -> None:
        """In place: row i moves to row permutation[i]."""
        check_length(permutation.dimension, self.row_count, 'permutation')
        self._store(permutation.apply(self._values(), axis=0))

    def permute_columns(self, permutation: Permutation) -> None:
        """In place: column j moves to column permutation[j]."""
        check_length(permutation.dimension, self.column_count, 'permutation')
        self._store(permutation.apply(self._values(), axis=1))

    # === Multiplication ===

    def multiply(
        self,
        other: Matrix | Vector | complex,
        result: Matrix | Vector | None = None,
    ) -> Matrix | Vector | None:
        """
        Product with a scalar, a vector or a matrix.

        With a pre-allocated `result` of the right shape the product is
        written into it and None is returned.

        Raises:
            DimensionMismatch: If the operands or `result` have incompatible shapes
        """
        if isinstance(other, Matrix):
            return self._multiply_matrix(other, result)
        if isinstance(other, Vector):
            return self._multiply_vector(other, result)
        if isinstance(other, (Number, np.number)):
            product = self._scale(other)
            return _deliver(product, result)
        raise TypeError(f"cannot multiply Matrix by {type(other).__name__}")

    def _multiply_matrix(self, other: Matrix, result: Matrix | None) -> Matrix | None:
        if self.column_count != other.row_count:
            raise DimensionMismatch(
                f"multiply: {self.row_count}x{self.column_count} matrix cannot multiply "
                f"{other.row_count}x{other.column_count} matrix",
                expected=self.column_count, actual=other.row_count,
            )
        return _deliver(self._product(other), result)

    def _multiply_vector(self, vector: Vector, result: Vector | None) -> Vector | None:
        check_length(vector.count, self.column_count, 'vector')
        values = self._matvec(vector._values())
        if result is None:
            return vector._from_values(values)
        check_length(result.count, self.row_count, 'result')
        result._fill(values)
        return None

    def _product(self, other: Matrix) -> Matrix:
        """self · other for conforming shapes; storage kinds may override."""
        return self._from_values(other._rmatmul_values(self._values()))

    def _rmatmul_values(self, left: NDArray[Any]) -> NDArray[Any]:
        """left · self as an ndarray, left already conforming."""
        return left @ self._values()

    def _matvec(self, x: NDArray[Any]) -> NDArray[Any]:
        return self._values() @ x

    def _scale(self, scalar: Any) -> Matrix:
        return self._from_values(self._values() * scalar)

    def transpose_and_multiply(self, other: Matrix) -> Matrix:
        """self · otherᵀ"""
        if self.column_count != other.column_count:
            raise DimensionMismatch(
                f"transpose_and_multiply: column counts differ "
                f"({self.column_count} vs {other.column_count})",
                expected=self.column_count, actual=other.column_count,
            )
        return self._product(other.transpose())

    def transpose_this_and_multiply(self, other: Matrix) -> Matrix:
        """selfᵀ · other"""
        if self.row_count != other.row_count:
            raise DimensionMismatch(
                f"transpose_this_and_multiply: row counts differ "
                f"({self.row_count} vs {other.row_count})",
                expected=self.row_count, actual=other.row_count,
            )
        return self.transpose()._product(other)

    def __mul__(self, other: Any) -> Matrix | Vector:
        if isinstance(other, (Number, np.number, Matrix, Vector)):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        if isinstance(other, (Number, np.number)):
            return self._scale(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Matrix | Vector:
        if isinstance(other, (Matrix, Vector)):
            return self.multiply(other)
        return NotImplemented

    # === Elementwise ===

    def _check_same_shape(self, other: Matrix, operation: str) -> None:
        check_shape(other.shape, self.shape, operation)

    def add(self, other: Matrix) -> Matrix:
        self._check_same_shape(other, 'add')
        return self._from_values(self._values() + other._values())

    def subtract(self, other: Matrix) -> Matrix:
        self._check_same_shape(other, 'subtract')
        return self._from_values(self._values() - other._values())

    def pointwise_multiply(self, other: Matrix) -> Matrix:
        self._check_same_shape(other, 'pointwise_multiply')
        return self._from_values(self._values() * other._values())

    def pointwise_divide(self, other: Matrix) -> Matrix:
        self._check_same_shape(other, 'pointwise_divide')
        return self._from_values(self._values() / other._values())

    def __add__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.subtract(other)
        return NotImplemented

    def __neg__(self) -> Matrix:
        return self._scale(-1)

    # === Norms and scalar properties ===

    def frobenius_norm(self) -> float:
        """sqrt(sum |a_ij|^2)"""
        return float(np.linalg.norm(self._values(), 'fro'))

    def l1_norm(self) -> float:
        """Maximum absolute column sum."""
        return float(np.linalg.norm(self._values(), 1))

    def infinity_norm(self) -> float:
        """Maximum absolute row sum."""
        return float(np.linalg.norm(self._values(), np.inf))

    def l2_norm(self) -> float:
        """Largest singular value."""
        return float(np.linalg.norm(self._values(), 2))

    def determinant(self) -> Any:
        """
        Determinant via LU factorization.

        Raises:
            NotSquareError: If the matrix is not square
        """
        check_square(self.row_count, self.column_count, 'determinant')
        return self.field.dtype.type(scipy.linalg.det(self._values()))

    def is_symmetric(self, tol: float = 0.0) -> bool:
        """True iff square and |a_ij - a_ji| <= tol for all i, j."""
        if not self.is_square:
            return False
        values = self._values()
        return bool(np.all(np.abs(values - values.T) <= tol))

    # === Factorizations ===

    def gram_schmidt(self, *, backend: str = 'auto') -> GramSchmidt:
        """QR factorization of this matrix by modified Gram-Schmidt."""
        from pynumerics.factorization.solvers import gram_schmidt
        return gram_schmidt(self, backend=backend)

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._values(), other._values())
        )

    __hash__ = None  # mutable

    def almost_equal(self, other: Matrix, tol: float | None = None) -> bool:
        """Elementwise |a_ij - b_ij| <= tol (default: the field's tolerance tier)."""
        if self.shape != other.shape:
            return False
        if tol is None:
            tol = select_tolerance(self.field.dtype).atol
        return bool(np.all(is_close(self._values(), other._values(), rtol=0.0, atol=tol)))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.row_count}x{self.column_count}, "
            f"field={self.field.name})"
        )

    def __str__(self) -> str:
        return (
            f"{type(self).__name__} {self.row_count}x{self.column_count} "
            f"{self.field.name}\n{self._values()}"
        )


def _unpack_key(key: Any) -> tuple[int, int]:
    if not isinstance(key, tuple) or len(key) != 2:
        raise TypeError(f"matrix indices must be a (row, column) pair, got {key!r}")
    return key


def _deliver(product: Matrix, result: Matrix | None) -> Matrix | None:
    """Return product, or copy it into a caller-supplied result and return None."""
    if result is None:
        return product
    if not isinstance(result, Matrix):
        raise TypeError(f"result must be a Matrix, got {type(result).__name__}")
    check_shape(result.shape, product.shape, 'result')
    result._fill(product._values())
    return None
