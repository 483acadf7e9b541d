"""
Matrix and vector storage.

One contract (Matrix, Vector), several storage kinds:
    DenseMatrix / DenseVector          numpy-backed reference storage
    DiagonalMatrix                     stores only the diagonal, fast paths
    UserDefinedMatrix / Vector         list-backed, primitives only

Element types are ScalarFields: SINGLE, DOUBLE, COMPLEX32, COMPLEX.

Example:
    >>> from pynumerics.linalg import DenseMatrix, DiagonalMatrix
    >>> A = DenseMatrix.of_array([[1.0, 2.0], [3.0, 4.0]])
    >>> D = DiagonalMatrix(2, 2, 2.0)
    >>> (A @ D).to_array()
    array([[2., 4.],
           [6., 8.]])
"""

from pynumerics.linalg.field import (
    ScalarField,
    SINGLE,
    DOUBLE,
    COMPLEX32,
    COMPLEX,
    field_for,
    common_field,
)
from pynumerics.linalg.vector import Vector, DenseVector
from pynumerics.linalg.matrix import Matrix
from pynumerics.linalg.dense import DenseMatrix, as_matrix
from pynumerics.linalg.diagonal import DiagonalMatrix
from pynumerics.linalg.user import UserDefinedMatrix, UserDefinedVector
from pynumerics.linalg.permutation import Permutation

__all__ = [
    # Fields
    "ScalarField",
    "SINGLE",
    "DOUBLE",
    "COMPLEX32",
    "COMPLEX",
    "field_for",
    "common_field",
    # Vectors
    "Vector",
    "DenseVector",
    "UserDefinedVector",
    # Matrices
    "Matrix",
    "DenseMatrix",
    "DiagonalMatrix",
    "UserDefinedMatrix",
    "as_matrix",
    # Permutations
    "Permutation",
]
