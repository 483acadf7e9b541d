"""
Row/column permutations.

A Permutation of dimension n maps position i to position indices[i]:
permuting rows moves row i of the matrix to row indices[i].
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from pynumerics.core.exceptions import ValidationError


class Permutation:
    """Immutable permutation of 0..n-1."""

    def __init__(self, indices: Sequence[int]):
        arr = np.asarray(indices)
        if arr.ndim != 1 or arr.size == 0:
            raise ValidationError(
                f"indices: expected a non-empty 1D sequence, got shape {arr.shape}"
            )
        if not np.issubdtype(arr.dtype, np.integer):
            raise ValidationError(f"indices: expected integers, got dtype {arr.dtype}")
        n = arr.shape[0]
        if not np.array_equal(np.sort(arr), np.arange(n)):
            raise ValidationError(
                f"indices: {arr.tolist()} is not a permutation of 0..{n - 1}"
            )
        self._indices = arr.astype(np.intp)
        self._indices.flags.writeable = False

    @property
    def dimension(self) -> int:
        return self._indices.shape[0]

    @property
    def is_identity(self) -> bool:
        return bool(np.array_equal(self._indices, np.arange(self.dimension)))

    @property
    def indices(self) -> NDArray[np.intp]:
        return self._indices

    def __getitem__(self, i: int) -> int:
        return int(self._indices[i])

    def __len__(self) -> int:
        return self.dimension

    def inverse(self) -> Permutation:
        inv = np.empty_like(self._indices)
        inv[self._indices] = np.arange(self.dimension)
        return Permutation(inv)

    def apply(self, array: NDArray[Any], axis: int = 0) -> NDArray[Any]:
        """
        Return a permuted copy of array along axis.

        Entry i along the axis lands at position indices[i].
        """
        result = np.empty_like(array)
        if axis == 0:
            result[self._indices] = array
        else:
            result[:, self._indices] = array
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return bool(np.array_equal(self._indices, other._indices))

    def __hash__(self) -> int:
        return hash(self._indices.tobytes())

    def __repr__(self) -> str:
        return f"Permutation({self._indices.tolist()})"
