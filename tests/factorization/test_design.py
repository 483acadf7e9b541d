"""
Tests for FactorizationDesign.

The design is a read-only value snapshot: changes to the source matrix
after construction must not reach it.
"""

import numpy as np
import pytest

from pynumerics.core.exceptions import DimensionMismatch, InvalidShapeError, ValidationError
from pynumerics.factorization.design import FactorizationDesign
from pynumerics.linalg import DenseMatrix, DiagonalMatrix, SINGLE, UserDefinedMatrix


class TestFromMatrix:

    def test_basic(self, tall_data):
        design = FactorizationDesign.from_matrix(DenseMatrix.of_array(tall_data))
        assert (design.m, design.n) == (10, 6)
        assert not design.is_square
        np.testing.assert_array_equal(design.A, tall_data)

    def test_array_like_input(self):
        design = FactorizationDesign.from_matrix([[1.0, 0.0], [0.0, 1.0]])
        assert design.is_square

    def test_field_preserved(self):
        design = FactorizationDesign.from_matrix(DenseMatrix.identity(2, SINGLE))
        assert design.field is SINGLE
        assert design.A.dtype == np.float32

    def test_wide_rejected(self):
        with pytest.raises(InvalidShapeError) as exc_info:
            FactorizationDesign.from_matrix(DenseMatrix(2, 3))
        assert (exc_info.value.rows, exc_info.value.columns) == (2, 3)
        assert isinstance(exc_info.value, DimensionMismatch)

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError, match="non-finite"):
            FactorizationDesign.from_matrix(DenseMatrix.of_array([[np.nan, 0.0], [0.0, 1.0]]))

    def test_not_2d_rejected(self):
        with pytest.raises(DimensionMismatch):
            FactorizationDesign.from_matrix([1.0, 2.0])


class TestSnapshot:

    def test_read_only(self, tall_data):
        design = FactorizationDesign.from_matrix(DenseMatrix.of_array(tall_data))
        with pytest.raises(ValueError):
            design.A[0, 0] = 1.0

    def test_source_mutation_not_visible(self):
        source = np.eye(3)
        design = FactorizationDesign.from_matrix(DenseMatrix.view(source))
        source[0, 0] = 42.0
        assert design.A[0, 0] == 1.0


class TestCreateFactor:

    def test_dense_input_gives_dense(self):
        design = FactorizationDesign.from_matrix(DenseMatrix.identity(2))
        assert isinstance(design.create_factor(np.eye(2)), DenseMatrix)

    def test_user_input_gives_user(self):
        design = FactorizationDesign.from_matrix(UserDefinedMatrix.identity(2))
        factor = design.create_factor(np.array([[1.0, 2.0], [0.0, 3.0]]))
        assert isinstance(factor, UserDefinedMatrix)
        assert factor[0, 1] == 2.0

    def test_diagonal_input_gives_dense(self):
        design = FactorizationDesign.from_matrix(DiagonalMatrix.identity(2))
        factor = design.create_factor(np.array([[1.0, 2.0], [0.0, 3.0]]))
        assert isinstance(factor, DenseMatrix)
