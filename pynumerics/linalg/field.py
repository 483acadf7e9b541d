"""
Scalar fields.

A ScalarField names the element type of a matrix or vector and supplies
the few scalar operations the storage classes need beyond numpy's
arithmetic: zero/one, conjugation, magnitude and casting.

Four fields are supported, matching the numpy inexact dtypes:
    SINGLE     float32
    DOUBLE     float64
    COMPLEX32  complex64
    COMPLEX    complex128
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from pynumerics.core.exceptions import ValidationError
from pynumerics.core.compute.precision import machine_epsilon


@dataclass(frozen=True)
class ScalarField:
    """
    Element type of a matrix or vector.

    Attributes:
        name: Short identifier ('single', 'double', 'complex32', 'complex')
        dtype: numpy dtype used for storage and arithmetic
    """
    name: str
    dtype: np.dtype

    @property
    def is_complex(self) -> bool:
        return np.issubdtype(self.dtype, np.complexfloating)

    @property
    def zero(self) -> Any:
        return self.dtype.type(0)

    @property
    def one(self) -> Any:
        return self.dtype.type(1)

    @property
    def epsilon(self) -> float:
        """Machine epsilon of the real component."""
        return machine_epsilon(self.dtype)

    def cast(self, value: Any) -> Any:
        """Convert a Python or numpy scalar to this field's scalar type."""
        if not self.is_complex and np.iscomplexobj(value):
            if np.imag(value) != 0:
                raise ValidationError(
                    f"cannot store complex value {value!r} in {self.name} field"
                )
            value = np.real(value)
        return self.dtype.type(value)

    def conjugate(self, value: Any) -> Any:
        if self.is_complex:
            return np.conj(value)
        return value

    def absolute(self, value: Any) -> float:
        """Magnitude |value| as a real number."""
        return float(np.abs(value))

    def __str__(self) -> str:
        return self.name


SINGLE = ScalarField('single', np.dtype(np.float32))
DOUBLE = ScalarField('double', np.dtype(np.float64))
COMPLEX32 = ScalarField('complex32', np.dtype(np.complex64))
COMPLEX = ScalarField('complex', np.dtype(np.complex128))

_FIELDS_BY_DTYPE: dict[np.dtype, ScalarField] = {
    f.dtype: f for f in (SINGLE, DOUBLE, COMPLEX32, COMPLEX)
}


def field_for(dtype: np.dtype | type | str) -> ScalarField:
    """
    Look up the field for a numpy dtype.

    Raises:
        ValidationError: If the dtype is not float32/float64/complex64/complex128
    """
    try:
        key = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"unknown dtype {dtype!r}: {e}") from e
    try:
        return _FIELDS_BY_DTYPE[key]
    except KeyError:
        supported = ", ".join(str(d) for d in _FIELDS_BY_DTYPE)
        raise ValidationError(
            f"unsupported element dtype {key}; expected one of {supported}"
        ) from None


def common_field(a: ScalarField, b: ScalarField) -> ScalarField:
    """Field of the result when combining elements of fields a and b."""
    return field_for(np.result_type(a.dtype, b.dtype))
