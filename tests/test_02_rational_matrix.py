"""Tests of RationalMatrix construction, access, row operations and matrix arithmetic."""
from fractions import Fraction

import numpy as np
import pytest
from scipy import sparse
from exactlin import RationalMatrix, RationalNumber, IndexOutOfRange, InvalidOperation, ShapeMismatch


def test_construction_from_values():
    matrix = RationalMatrix([[1, Fraction(1, 2)], [RationalNumber(-3, 4), 0.25]])
    assert matrix.shape == (2, 2)
    assert matrix.rows == 2 and matrix.columns == 2
    assert matrix.get(0, 1) == RationalNumber(1, 2)
    assert matrix.get(1, 0) == RationalNumber(-3, 4)
    assert matrix.get(1, 1) == RationalNumber(1, 4)


def test_ragged_and_empty_grids_are_rejected():
    with pytest.raises(ShapeMismatch):
        RationalMatrix([[1, 2], [3]])
    with pytest.raises(ShapeMismatch):
        RationalMatrix([])
    with pytest.raises(ValueError):
        RationalMatrix([[]])


def test_from_floats():
    matrix = RationalMatrix.from_floats([[0.5, 2.0], [-1.25, 0.0]])
    assert matrix == RationalMatrix([[RationalNumber(1, 2), 2], [RationalNumber(-5, 4), 0]])


def test_from_numpy():
    assert RationalMatrix.from_numpy(np.array([[1, 2], [3, 4]])) == RationalMatrix([[1, 2], [3, 4]])
    assert RationalMatrix.from_numpy(np.array([[0.5, 1.5]])) == RationalMatrix([[RationalNumber(1, 2), RationalNumber(3, 2)]])
    with pytest.raises(ShapeMismatch):
        RationalMatrix.from_numpy(np.array([1, 2, 3]))


def test_from_sparse():
    matrix = RationalMatrix.from_sparse(sparse.csr_matrix(np.array([[1, 0], [0, 3]])))
    assert matrix == RationalMatrix([[1, 0], [0, 3]])
    with pytest.raises(TypeError):
        RationalMatrix.from_sparse(np.eye(2))


def test_zeros_filled_identity():
    assert RationalMatrix.zeros(2, 3) == RationalMatrix([[0, 0, 0], [0, 0, 0]])
    assert RationalMatrix.filled(2, 1, RationalNumber(1, 3)) == RationalMatrix([[RationalNumber(1, 3)],
                                                                                [RationalNumber(1, 3)]])
    assert RationalMatrix.identity(3) == RationalMatrix([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
    with pytest.raises(ShapeMismatch):
        RationalMatrix.zeros(0, 2)


def test_get_reduces_but_storage_does_not():
    matrix = RationalMatrix([[RationalNumber(2, 4)]])
    value = matrix.get(0, 0)
    assert (value.numerator, value.denominator) == (1, 2)
    assert str(matrix) == "[2/4]\n"
    matrix.simplify()
    assert str(matrix) == "[1/2]\n"


def test_set_and_copy_are_independent():
    matrix = RationalMatrix([[1, 2], [3, 4]])
    duplicate = matrix.copy()
    duplicate.set(0, 0, RationalNumber(9, 2))
    assert matrix.get(0, 0) == 1
    assert duplicate.get(0, 0) == RationalNumber(9, 2)
    assert duplicate.get_row(0) == [RationalNumber(9, 2), 2]
    assert duplicate.get_column(1) == [2, 4]


def test_swap_rows():
    matrix = RationalMatrix([[1, 2], [3, 4], [5, 6]])
    matrix.swap_rows(0, 2)
    assert matrix == RationalMatrix([[5, 6], [3, 4], [1, 2]])


def test_multiply_row():
    matrix = RationalMatrix([[1, 2], [3, 4]])
    matrix.multiply_row(1, RationalNumber(1, 2))
    assert matrix == RationalMatrix([[1, 2], [RationalNumber(3, 2), 2]])
    with pytest.raises(InvalidOperation):
        matrix.multiply_row(0, RationalNumber(0, 5))
    with pytest.raises(InvalidOperation):
        matrix.multiply_row(0, 0)


def test_add_rows():
    matrix = RationalMatrix([[1, 2], [3, 4]])
    matrix.add_rows(1, 0, -3)
    assert matrix == RationalMatrix([[1, 2], [0, -2]])
    matrix.add_rows(0, 1, 0)
    assert matrix == RationalMatrix([[1, 2], [0, -2]])


def test_scale_add_subtract():
    a = RationalMatrix([[1, 2], [3, 4]])
    b = RationalMatrix([[RationalNumber(1, 2), 0], [-1, 1]])
    assert a.scale(RationalNumber(1, 2)) == RationalMatrix([[RationalNumber(1, 2), 1], [RationalNumber(3, 2), 2]])
    assert a.add(b) == RationalMatrix([[RationalNumber(3, 2), 2], [2, 5]])
    assert a - b == RationalMatrix([[RationalNumber(1, 2), 2], [4, 3]])
    assert a + b == a.add(b)


def test_shape_mismatch_on_elementwise_operations():
    a = RationalMatrix([[1, 2], [3, 4]])
    b = RationalMatrix([[1, 2, 3]])
    with pytest.raises(ShapeMismatch):
        a.add(b)
    with pytest.raises(ShapeMismatch):
        a.subtract(b)


def test_multiply():
    a = RationalMatrix([[1, 2], [3, 4]])
    b = RationalMatrix([[RationalNumber(1, 2)], [1]])
    assert a.multiply(b) == RationalMatrix([[RationalNumber(5, 2)], [RationalNumber(11, 2)]])
    with pytest.raises(ShapeMismatch):
        b.multiply(b)


def test_multiply_by_identity(size):
    a = RationalMatrix([[RationalNumber(i - j, i + j + 1) for j in range(size + 1)] for i in range(size)])
    assert a @ RationalMatrix.identity(size + 1) == a
    assert RationalMatrix.identity(size) @ a == a


def test_transpose():
    matrix = RationalMatrix([[1, 2, 3], [4, 5, 6]])
    assert matrix.transpose() == RationalMatrix([[1, 4], [2, 5], [3, 6]])
    assert matrix.transpose().transpose() == matrix


def test_remove_row_and_column():
    matrix = RationalMatrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    assert matrix.remove_row(1) == RationalMatrix([[1, 2, 3], [7, 8, 9]])
    assert matrix.remove_column(0) == RationalMatrix([[2, 3], [5, 6], [8, 9]])
    assert matrix.remove_row(0).remove_column(2) == RationalMatrix([[4, 5], [7, 8]])
    assert matrix.shape == (3, 3)
    with pytest.raises(IndexOutOfRange):
        matrix.remove_row(3)
    with pytest.raises(IndexError):
        matrix.remove_column(-1)


def test_exchange_column():
    matrix = RationalMatrix([[1, 2], [3, 4]])
    vector = RationalMatrix([[7], [8]])
    assert matrix.exchange_column(1, vector) == RationalMatrix([[1, 7], [3, 8]])
    assert matrix == RationalMatrix([[1, 2], [3, 4]])
    with pytest.raises(IndexOutOfRange):
        matrix.exchange_column(2, vector)
    with pytest.raises(ShapeMismatch):
        matrix.exchange_column(0, RationalMatrix([[7, 8]]))
    with pytest.raises(ShapeMismatch):
        matrix.exchange_column(0, RationalMatrix([[7], [8], [9]]))


def test_symmetry_checks():
    assert RationalMatrix([[1, 2], [2, 3]]).is_symmetric()
    assert not RationalMatrix([[1, 2], [3, 1]]).is_symmetric()
    assert RationalMatrix([[0, 2], [-2, 0]]).is_skew_symmetric()
    assert not RationalMatrix([[1, 2, 3]]).is_square()
    assert not RationalMatrix([[1, 2, 3]]).is_symmetric()


def test_text_rendering():
    matrix = RationalMatrix([[1, -10], [RationalNumber(1, 2), 3]])
    assert str(matrix) == "[  1, -10]\n[1/2,   3]\n"


def test_to_numpy():
    matrix = RationalMatrix([[1, RationalNumber(2, 4)], [RationalNumber(1, 0), 3]])
    floats = matrix.to_numpy(as_float=True)
    assert floats[0, 1] == 0.5
    assert np.isnan(floats[1, 0])
    values = matrix.to_numpy()
    assert values.dtype == object
    assert (values[0, 1].numerator, values[0, 1].denominator) == (1, 2)


def test_equality():
    assert RationalMatrix([[RationalNumber(2, 4)]]) == RationalMatrix([[RationalNumber(1, 2)]])
    assert RationalMatrix([[1, 2]]) != RationalMatrix([[1], [2]])
    assert RationalMatrix([[1]]) != 1
