"""
Tests for DiagonalMatrix.

Validates:
    - Construction modes (owned, scalar, ndarray view, sequence copy)
    - Storage invariant: off-diagonal writes, permutations
    - Every fast path agrees with the dense reference for square, tall
      and wide operands (zero padding and truncation included)
    - Products keep the storage kind of the operand that decides them
"""

import numpy as np
import pytest

from pynumerics.core.compute.tolerances import NORM_RELATIVE
from pynumerics.core.exceptions import (
    DimensionMismatch,
    InvalidOperationError,
    NotSquareError,
    ValidationError,
)
from pynumerics.linalg.dense import DenseMatrix
from pynumerics.linalg.diagonal import DiagonalMatrix
from pynumerics.linalg.field import COMPLEX, DOUBLE, SINGLE
from pynumerics.linalg.permutation import Permutation
from pynumerics.linalg.user import UserDefinedMatrix
from pynumerics.linalg.vector import DenseVector

SHAPES = [(4, 4), (6, 3), (3, 6)]


def _diagonal(rng, rows, columns):
    return DiagonalMatrix(rows, columns, rng.standard_normal(min(rows, columns)))


def _dense(matrix):
    return DenseMatrix.of_array(matrix.to_array())


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_zeros(self):
        D = DiagonalMatrix(3, 2)
        assert D.shape == (3, 2)
        assert D.field is DOUBLE
        np.testing.assert_array_equal(D.to_array(), np.zeros((3, 2)))

    def test_scalar(self):
        D = DiagonalMatrix(2, 3, 4.0)
        np.testing.assert_array_equal(D.to_array(), [[4.0, 0.0, 0.0], [0.0, 4.0, 0.0]])

    def test_scalar_with_field(self):
        assert DiagonalMatrix(2, 2, 3.0, SINGLE).field is SINGLE

    def test_complex_scalar(self):
        assert DiagonalMatrix(2, 2, 1 + 1j).field is COMPLEX

    def test_ndarray_is_a_live_view(self):
        diagonal = np.array([1.0, 2.0, 3.0])
        D = DiagonalMatrix(3, 3, diagonal)
        diagonal[0] = 9.0
        assert D[0, 0] == 9.0
        D[1, 1] = 7.0
        assert diagonal[1] == 7.0

    def test_sequence_is_copied(self):
        values = [1.0, 2.0]
        D = DiagonalMatrix(2, 2, values)
        values[0] = 5.0
        assert D[0, 0] == 1.0

    def test_wrong_diagonal_length(self):
        with pytest.raises(DimensionMismatch):
            DiagonalMatrix(3, 2, np.ones(3))
        with pytest.raises(DimensionMismatch):
            DiagonalMatrix(3, 2, [1.0])

    def test_ndarray_field_mismatch(self):
        with pytest.raises(ValidationError, match="does not match field"):
            DiagonalMatrix(2, 2, np.ones(2), field=SINGLE)

    def test_non_positive_dimensions(self):
        with pytest.raises(ValidationError):
            DiagonalMatrix(0, 2)

    def test_of_array(self):
        D = DiagonalMatrix.of_array([[1.0, 0.0], [0.0, 2.0], [0.0, 0.0]])
        assert D.shape == (3, 2)
        np.testing.assert_array_equal(D.diagonal().to_array(), [1.0, 2.0])

    def test_of_array_off_diagonal_rejected(self):
        with pytest.raises(InvalidOperationError, match=r"\(0, 1\)"):
            DiagonalMatrix.of_array([[1.0, 3.0], [0.0, 2.0]])

    def test_identity(self):
        np.testing.assert_array_equal(DiagonalMatrix.identity(3).to_array(), np.eye(3))
        with pytest.raises(ValidationError):
            DiagonalMatrix.identity(0)

    def test_diagonal_identity(self):
        np.testing.assert_array_equal(
            DiagonalMatrix.diagonal_identity(3, 2).to_array(), np.eye(3, 2)
        )
        np.testing.assert_array_equal(
            DiagonalMatrix.diagonal_identity(2).to_array(), np.eye(2)
        )


# ═══════════════════════════════════════════════════════════════════════
# Storage invariant
# ═══════════════════════════════════════════════════════════════════════


class TestStorageInvariant:

    def test_off_diagonal_read_is_zero(self):
        assert DiagonalMatrix(2, 2, 5.0)[0, 1] == 0.0

    def test_off_diagonal_zero_write_is_noop(self):
        D = DiagonalMatrix(2, 2, 5.0)
        D[0, 1] = 0.0
        np.testing.assert_array_equal(D.to_array(), 5.0 * np.eye(2))

    def test_off_diagonal_nonzero_write_rejected(self):
        D = DiagonalMatrix(2, 2, 5.0)
        with pytest.raises(InvalidOperationError, match="off-diagonal"):
            D[1, 0] = 1.0
        np.testing.assert_array_equal(D.to_array(), 5.0 * np.eye(2))

    def test_identity_permutation_allowed(self):
        D = DiagonalMatrix(3, 3, [1.0, 2.0, 3.0])
        D.permute_rows(Permutation([0, 1, 2]))
        D.permute_columns(Permutation([0, 1, 2]))
        np.testing.assert_array_equal(D.diagonal().to_array(), [1.0, 2.0, 3.0])

    def test_permutation_rejected(self):
        D = DiagonalMatrix(3, 3, [1.0, 2.0, 3.0])
        with pytest.raises(InvalidOperationError):
            D.permute_rows(Permutation([1, 0, 2]))
        with pytest.raises(InvalidOperationError):
            D.permute_columns(Permutation([1, 0, 2]))

    def test_permutation_wrong_dimension(self):
        with pytest.raises(DimensionMismatch):
            DiagonalMatrix(3, 2).permute_columns(Permutation([0, 1, 2]))

    def test_non_diagonal_product_into_diagonal_result_rejected(self, rng):
        D = DiagonalMatrix(2, 2, 1.0)
        A = DenseMatrix.of_array(rng.standard_normal((2, 2)))
        with pytest.raises(InvalidOperationError):
            D.multiply(A, result=DiagonalMatrix(2, 2))

    def test_diagonal_product_into_diagonal_result(self):
        out = DiagonalMatrix(2, 2)
        assert DiagonalMatrix(2, 2, 2.0).multiply(3.0, result=out) is None
        np.testing.assert_array_equal(out.diagonal().to_array(), [6.0, 6.0])


# ═══════════════════════════════════════════════════════════════════════
# Fast paths against the dense reference
# ═══════════════════════════════════════════════════════════════════════


class TestMultiplyFastPaths:

    @pytest.mark.parametrize("rows,columns", SHAPES)
    def test_diagonal_times_dense(self, rng, rows, columns):
        D = _diagonal(rng, rows, columns)
        A = DenseMatrix.of_array(rng.standard_normal((columns, 5)))
        C = D @ A
        assert isinstance(C, DenseMatrix)
        np.testing.assert_allclose(C.to_array(), (_dense(D) @ A).to_array(), rtol=1e-14)

    @pytest.mark.parametrize("rows,columns", SHAPES)
    def test_dense_times_diagonal(self, rng, rows, columns):
        D = _diagonal(rng, rows, columns)
        A = DenseMatrix.of_array(rng.standard_normal((5, rows)))
        C = A @ D
        assert isinstance(C, DenseMatrix)
        np.testing.assert_allclose(C.to_array(), (A @ _dense(D)).to_array(), rtol=1e-14)

    @pytest.mark.parametrize("rows,columns", SHAPES)
    @pytest.mark.parametrize("q", [2, 4, 7])
    def test_diagonal_times_diagonal(self, rng, rows, columns, q):
        D1 = _diagonal(rng, rows, columns)
        D2 = _diagonal(rng, columns, q)
        C = D1 @ D2
        assert isinstance(C, DiagonalMatrix)
        assert C.shape == (rows, q)
        np.testing.assert_allclose(
            C.to_array(), (_dense(D1) @ _dense(D2)).to_array(), rtol=1e-14
        )

    @pytest.mark.parametrize("rows,columns", SHAPES)
    def test_diagonal_times_vector(self, rng, rows, columns):
        D = _diagonal(rng, rows, columns)
        x = DenseVector.of_array(rng.standard_normal(columns))
        y = D @ x
        assert y.count == rows
        np.testing.assert_allclose(y.to_array(), (_dense(D) @ x).to_array(), rtol=1e-14)

    @pytest.mark.parametrize("rows,columns", SHAPES)
    def test_transpose_and_multiply(self, rng, rows, columns):
        D = _diagonal(rng, rows, columns)
        A = DenseMatrix.of_array(rng.standard_normal((5, columns)))
        np.testing.assert_allclose(
            D.transpose_and_multiply(A).to_array(),
            _dense(D).transpose_and_multiply(A).to_array(),
            rtol=1e-14,
        )
        B = DenseMatrix.of_array(rng.standard_normal((5, columns)))
        np.testing.assert_allclose(
            B.transpose_and_multiply(D).to_array(),
            B.transpose_and_multiply(_dense(D)).to_array(),
            rtol=1e-14,
        )

    @pytest.mark.parametrize("rows,columns", SHAPES)
    def test_transpose_this_and_multiply(self, rng, rows, columns):
        D = _diagonal(rng, rows, columns)
        A = DenseMatrix.of_array(rng.standard_normal((rows, 5)))
        np.testing.assert_allclose(
            D.transpose_this_and_multiply(A).to_array(),
            _dense(D).transpose_this_and_multiply(A).to_array(),
            rtol=1e-14,
        )
        B = DenseMatrix.of_array(rng.standard_normal((columns, 5)))
        np.testing.assert_allclose(
            B.transpose_this_and_multiply(D.transpose()).to_array(),
            B.transpose_this_and_multiply(_dense(D).transpose()).to_array(),
            rtol=1e-14,
        )

    def test_product_keeps_user_storage(self, rng):
        D = DiagonalMatrix(3, 3, [1.0, 2.0, 3.0])
        U = UserDefinedMatrix(rng.standard_normal((3, 2)))
        C = D @ U
        assert isinstance(C, UserDefinedMatrix)
        np.testing.assert_allclose(C.to_array(), np.diag([1.0, 2.0, 3.0]) @ U.to_array())

    def test_scalar_keeps_diagonal(self):
        D = DiagonalMatrix(2, 3, [1.0, -2.0])
        for scaled in (2.0 * D, D * 2.0, -D):
            assert isinstance(scaled, DiagonalMatrix)
        np.testing.assert_array_equal((2.0 * D).diagonal().to_array(), [2.0, -4.0])

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            DiagonalMatrix(3, 2) @ DenseMatrix(3, 3)


class TestElementwiseFastPaths:

    def test_add_diagonal_stays_diagonal(self):
        D = DiagonalMatrix(3, 2, [1.0, 2.0])
        E = DiagonalMatrix(3, 2, [3.0, 4.0])
        S = D + E
        assert isinstance(S, DiagonalMatrix)
        np.testing.assert_array_equal(S.diagonal().to_array(), [4.0, 6.0])
        np.testing.assert_array_equal((E - D).diagonal().to_array(), [2.0, 2.0])

    def test_add_dense_becomes_dense(self, rng):
        D = DiagonalMatrix(2, 2, [1.0, 2.0])
        A = DenseMatrix.of_array(rng.standard_normal((2, 2)))
        S = D + A
        assert isinstance(S, DenseMatrix)
        np.testing.assert_allclose(S.to_array(), D.to_array() + A.to_array())
        np.testing.assert_allclose((D - A).to_array(), D.to_array() - A.to_array())

    def test_add_shape_mismatch(self):
        with pytest.raises(DimensionMismatch):
            DiagonalMatrix(2, 2) + DiagonalMatrix(2, 3)

    def test_pointwise_multiply(self, rng):
        D = DiagonalMatrix(3, 2, [1.0, 2.0])
        A = DenseMatrix.of_array(rng.standard_normal((3, 2)))
        P = D.pointwise_multiply(A)
        assert isinstance(P, DiagonalMatrix)
        np.testing.assert_allclose(P.to_array(), D.to_array() * A.to_array())

    def test_pointwise_divide_keeps_zeros(self):
        D = DiagonalMatrix(2, 2, [2.0, 6.0])
        A = DenseMatrix.of_array([[2.0, 0.0], [0.0, 3.0]])
        np.testing.assert_array_equal(D.pointwise_divide(A).to_array(), [[1.0, 0.0], [0.0, 2.0]])
        with np.errstate(invalid="ignore"):
            dense = _dense(D).pointwise_divide(A).to_array()
        assert np.isnan(dense[0, 1]) and np.isnan(dense[1, 0])


class TestStructureAndScalars:

    def test_clone_is_independent(self):
        D = DiagonalMatrix(2, 2, [1.0, 2.0])
        clone = D.clone()
        assert isinstance(clone, DiagonalMatrix)
        clone[0, 0] = 10.0
        assert D[0, 0] == 1.0

    def test_clone_of_view_is_owned(self):
        diagonal = np.array([1.0, 2.0])
        clone = DiagonalMatrix(2, 2, diagonal).clone()
        diagonal[0] = 8.0
        assert clone[0, 0] == 1.0

    def test_transpose(self):
        D = DiagonalMatrix(3, 2, [1 + 1j, 2.0])
        T = D.transpose()
        H = D.conjugate_transpose()
        assert isinstance(T, DiagonalMatrix)
        assert T.shape == (2, 3)
        np.testing.assert_array_equal(H.to_array(), np.conj(D.to_array()).T)

    @pytest.mark.parametrize("rows,columns", SHAPES)
    def test_norms_match_dense(self, rng, rows, columns):
        D = _diagonal(rng, rows, columns)
        A = _dense(D)
        assert D.frobenius_norm() == pytest.approx(A.frobenius_norm(), rel=NORM_RELATIVE.rtol)
        assert D.l1_norm() == pytest.approx(A.l1_norm(), rel=NORM_RELATIVE.rtol)
        assert D.infinity_norm() == pytest.approx(A.infinity_norm(), rel=NORM_RELATIVE.rtol)
        assert D.l2_norm() == pytest.approx(A.l2_norm(), rel=NORM_RELATIVE.rtol)

    def test_determinant(self):
        D = DiagonalMatrix(3, 3, [2.0, -3.0, 0.5])
        assert D.determinant() == -3.0
        assert D.determinant() == pytest.approx(_dense(D).determinant(), rel=NORM_RELATIVE.rtol)

    def test_determinant_not_square(self):
        with pytest.raises(NotSquareError):
            DiagonalMatrix(3, 2).determinant()

    def test_is_symmetric(self):
        assert DiagonalMatrix(2, 2, [1.0, 2.0]).is_symmetric()
        assert not DiagonalMatrix(2, 3).is_symmetric()

    def test_equality_with_dense(self):
        D = DiagonalMatrix(2, 2, [1.0, 2.0])
        assert D == DenseMatrix.of_array([[1.0, 0.0], [0.0, 2.0]])
