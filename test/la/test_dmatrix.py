################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the dense matrix class."""

from __future__ import annotations

import os

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_linalg.la.check import DMatrixArgumentError
from oasis_linalg.la.check import DMatrixStateError
from oasis_linalg.la.dmatrix import DMatrix


def _sample() -> DMatrix:
    """Return a 3x4 matrix with distinct elements."""
    return DMatrix.from_array(np.arange(12, dtype=np.float64).reshape((3, 4)))


def test_construct_filled() -> None:
    """Construction fills every element with the given value."""
    a: DMatrix = DMatrix(2, 3, 1.5)
    assert a.shape == (2, 3)
    assert a.row_count == 2
    assert a.column_count == 3
    assert np.all(a.array == 1.5)
    assert np.all(DMatrix(2, 2).array == 0.0)


def test_from_array_references_float_array() -> None:
    """A float64 array is referenced, not copied."""
    values: NDArray[np.float64] = np.ones((2, 2), dtype=np.float64)
    a: DMatrix = DMatrix.from_array(values)
    values[0, 0] = 7.0
    assert a.get_element(0, 0) == 7.0
    assert a.array is values


def test_from_array_converts_lists() -> None:
    """Nested lists are converted to a float64 array."""
    a: DMatrix = DMatrix.from_array([[1, 2], [3, 4]])
    assert a.array.dtype == np.float64
    assert a.get_element(1, 0) == 3.0


def test_from_array_rejects_irregular() -> None:
    """Rows of different lengths are an argument error."""
    with pytest.raises(DMatrixArgumentError, match="required condition"):
        DMatrix.from_array([[1.0, 2.0], [3.0]])
    with pytest.raises(ValueError):
        DMatrix.from_array([])


def test_copy_is_deep() -> None:
    """Copies do not share elements."""
    a: DMatrix = _sample()
    b: DMatrix = a.copy()
    b.set_element(0, 0, -1.0)
    assert a.get_element(0, 0) == 0.0
    assert DMatrix.copy_of(a) == a


def test_identity_random_diagonal() -> None:
    """Factory methods produce the expected elements."""
    assert np.array_equal(DMatrix.identity(2, 3).array, np.eye(2, 3))
    assert np.array_equal(DMatrix.diagonal([1.0, 2.0]).array, np.diag([1.0, 2.0]))

    r1: DMatrix = DMatrix.random(3, 2, seed=4)
    r2: DMatrix = DMatrix.random(3, 2, seed=4)
    assert r1 == r2
    assert r1.shape == (3, 2)
    assert np.all((r1.array >= 0.0) & (r1.array < 1.0))
    assert DMatrix.random(3).shape == (3, 3)


def test_is_symmetric() -> None:
    """Symmetry requires a square matrix with exactly equal transposed pairs."""
    assert DMatrix.from_array([[1.0, 2.0], [2.0, 1.0]]).is_symmetric()
    assert not DMatrix.from_array([[1.0, 2.0], [2.000001, 1.0]]).is_symmetric()
    assert not _sample().is_symmetric()


def test_get_range_inclusive() -> None:
    """Ranges include both end indices."""
    a: DMatrix = _sample()
    sub: DMatrix = a.get_range(1, 2, 1, 3)
    assert np.array_equal(sub.array, a.array[1:3, 1:4])

    sub.set_element(0, 0, 100.0)
    assert a.get_element(1, 1) == 5.0


def test_get_range_checks_bounds() -> None:
    """Out of bounds or reversed ranges are argument errors."""
    a: DMatrix = _sample()
    with pytest.raises(DMatrixArgumentError):
        a.get_range(0, 3, 0, 0)
    with pytest.raises(DMatrixArgumentError):
        a.get_range(2, 1, 0, 0)
    with pytest.raises(DMatrixArgumentError):
        a.get_range(0, 0, -1, 0)


def test_get_rows_and_columns() -> None:
    """Index sequences select arbitrary rows and columns."""
    a: DMatrix = _sample()
    sub: DMatrix = a.get_rows_columns([2, 0], [3, 1])
    assert np.array_equal(sub.array, [[11.0, 9.0], [3.0, 1.0]])
    assert a.get_rows_columns(None, [0]).shape == (3, 1)
    assert np.array_equal(a.get_row(1, None).array, [[4.0, 5.0, 6.0, 7.0]])
    assert np.array_equal(a.get_column([0, 2], 3).array, [[3.0], [11.0]])
    assert np.array_equal(a.get_rows(0, 1, [1]).array, [[1.0], [5.0]])
    assert np.array_equal(a.get_columns([1], 2, 3).array, [[6.0, 7.0]])

    with pytest.raises(DMatrixArgumentError):
        a.get_rows_columns([3], None)


def test_setters() -> None:
    """Setters copy elements and check sizes."""
    a: DMatrix = DMatrix(3, 3)
    a.set_range(0, 1, 1, 2, DMatrix(2, 2, 1.0))
    assert np.array_equal(a.array[0:2, 1:3], np.ones((2, 2)))
    assert a.get_element(2, 2) == 0.0

    a.set_rows_columns([2], [0, 2], DMatrix.from_array([[5.0, 6.0]]))
    assert a.get_element(2, 0) == 5.0
    assert a.get_element(2, 2) == 6.0

    a.set_row(0, None, DMatrix.from_array([[7.0, 8.0, 9.0]]))
    assert np.array_equal(a.array[0], [7.0, 8.0, 9.0])

    a.set_column(None, 0, DMatrix.from_array([[1.0], [2.0], [3.0]]))
    assert np.array_equal(a.array[:, 0], [1.0, 2.0, 3.0])

    a.set_all(np.eye(3))
    assert a == DMatrix.identity(3)

    with pytest.raises(DMatrixArgumentError):
        a.set_range(0, 1, 0, 1, DMatrix(3, 3))
    with pytest.raises(DMatrixArgumentError):
        a.set_rows(0, 0, [0, 1], DMatrix(1, 3))
    with pytest.raises(DMatrixArgumentError):
        a.set_all(np.zeros((2, 3)))


def test_packed_columns_and_rows() -> None:
    """Packed arrays are column-major or row-major."""
    a: DMatrix = DMatrix.from_array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
    assert np.array_equal(a.get_packed_columns(), [1.0, 3.0, 5.0, 2.0, 4.0, 6.0])
    assert np.array_equal(a.get_packed_rows(), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

    b: DMatrix = DMatrix(3, 2)
    b.set_packed_columns(a.get_packed_columns())
    assert b == a
    b.set_packed_rows(np.zeros(6))
    assert np.all(b.array == 0.0)

    with pytest.raises(DMatrixArgumentError):
        b.set_packed_rows(np.zeros(5))


def test_arithmetic() -> None:
    """Element-wise and matrix arithmetic match numpy."""
    a: DMatrix = DMatrix.from_array([[1.0, 2.0], [3.0, 4.0]])
    b: DMatrix = DMatrix.from_array([[2.0, 4.0], [8.0, 16.0]])

    assert np.array_equal(a.plus(b).array, a.array + b.array)
    assert np.array_equal(a.minus(b).array, a.array - b.array)
    assert np.array_equal(a.array_times(b).array, a.array * b.array)
    assert np.array_equal(a.array_right_divide(b).array, a.array / b.array)
    assert np.array_equal(a.array_left_divide(b).array, b.array / a.array)
    assert np.array_equal(a.times(b).array, a.array @ b.array)
    assert np.array_equal(a.times(2.0).array, a.array * 2.0)
    assert np.array_equal(a.times_transpose(b).array, a.array @ b.array.T)
    assert np.array_equal(a.transpose_times(b).array, a.array.T @ b.array)
    assert np.array_equal(a.transpose().array, a.array.T)
    assert np.array_equal(a.negate().array, -a.array)


def test_in_place_arithmetic_returns_self() -> None:
    """In-place variants modify and return this matrix."""
    a: DMatrix = DMatrix.from_array([[1.0, 2.0], [3.0, 4.0]])
    b: DMatrix = DMatrix(2, 2, 2.0)
    assert a.plus_equals(b) is a
    assert np.array_equal(a.array, [[3.0, 4.0], [5.0, 6.0]])
    assert a.minus_equals(b) is a
    assert a.array_times_equals(b) is a
    assert np.array_equal(a.array, [[2.0, 4.0], [6.0, 8.0]])
    assert a.array_right_divide_equals(b) is a
    assert np.array_equal(a.array, [[1.0, 2.0], [3.0, 4.0]])
    assert a.array_left_divide_equals(b) is a
    assert np.array_equal(a.array, [[2.0, 1.0], [2.0 / 3.0, 0.5]])
    assert a.times_equals(3.0) is a
    assert np.allclose(a.array, [[6.0, 3.0], [2.0, 1.5]])


def test_arithmetic_shape_mismatch() -> None:
    """Mismatched shapes are argument errors."""
    a: DMatrix = DMatrix(2, 3)
    with pytest.raises(DMatrixArgumentError):
        a.plus(DMatrix(3, 2))
    with pytest.raises(DMatrixArgumentError):
        a.times(DMatrix(2, 3))
    with pytest.raises(DMatrixArgumentError):
        a.times_transpose(DMatrix(2, 2))
    with pytest.raises(DMatrixArgumentError):
        a.transpose_times(DMatrix(3, 3))


def test_operators() -> None:
    """Python operators delegate to the named methods."""
    a: DMatrix = DMatrix.from_array([[1.0, 2.0], [3.0, 4.0]])
    b: DMatrix = DMatrix.identity(2)
    assert a + b == a.plus(b)
    assert a - b == a.minus(b)
    assert -a == a.negate()
    assert a * 2 == a.times(2.0)
    assert 2.0 * a == a.times(2.0)
    assert a @ b == a
    with pytest.raises(TypeError):
        _ = a * b  # type: ignore[operator]
    with pytest.raises(TypeError):
        _ = a * True


def test_norms_and_trace() -> None:
    """Norms agree with numpy."""
    a: DMatrix = DMatrix.from_array([[1.0, -2.0, 3.0], [-4.0, 5.0, -6.0]])
    assert a.norm1() == pytest.approx(np.linalg.norm(a.array, 1))
    assert a.norm_i() == pytest.approx(np.linalg.norm(a.array, np.inf))
    assert a.norm_f() == pytest.approx(np.linalg.norm(a.array, "fro"))
    assert a.norm2() == pytest.approx(np.linalg.norm(a.array, 2))
    assert a.trace() == pytest.approx(6.0)
    assert a.rank() == 2
    assert a.cond() == pytest.approx(np.linalg.cond(a.array))


def test_norm_f_avoids_overflow() -> None:
    """The Frobenius norm of huge elements is finite."""
    a: DMatrix = DMatrix(2, 2, 1e300)
    assert a.norm_f() == pytest.approx(2e300)


def test_det_and_inverse() -> None:
    """Determinant and inverse of a square matrix."""
    a: DMatrix = DMatrix.from_array([[4.0, 7.0], [2.0, 6.0]])
    assert a.det() == pytest.approx(10.0)
    inv: DMatrix = a.inverse()
    assert (a @ inv).almost_equals(DMatrix.identity(2))


def test_solve_square_and_least_squares() -> None:
    """Square systems use LU and tall systems use least squares."""
    a: DMatrix = DMatrix.from_array([[3.0, 1.0], [1.0, 2.0]])
    b: DMatrix = DMatrix.from_array([[9.0], [8.0]])
    x: DMatrix = a.solve(b)
    assert np.allclose(x.array, [[2.0], [3.0]])

    tall: DMatrix = DMatrix.from_array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    rhs: DMatrix = DMatrix.from_array([[1.0], [2.0], [4.0]])
    expected: NDArray[np.float64] = np.linalg.lstsq(
        tall.array, rhs.array, rcond=None
    )[0]
    assert np.allclose(tall.solve(rhs).array, expected)


def test_solve_wide_is_state_error() -> None:
    """Fewer rows than columns cannot be solved."""
    with pytest.raises(DMatrixStateError):
        DMatrix(2, 3, 1.0).solve(DMatrix(2, 1))


def test_equality_and_hash() -> None:
    """Equal matrices compare and hash equally."""
    a: DMatrix = DMatrix.from_array([[0.0, 1.0]])
    b: DMatrix = DMatrix.from_array([[-0.0, 1.0]])
    assert a == b
    assert hash(a) == hash(b)
    assert a != DMatrix.from_array([[0.0], [1.0]])
    assert a != "not a matrix"
    assert len({a, b}) == 1


def test_almost_equals() -> None:
    """Fuzzy comparison scales the tolerance by the larger norm."""
    a: DMatrix = DMatrix.from_array([[1000.0, 0.0], [0.0, 1000.0]])
    b: DMatrix = a.plus(DMatrix(2, 2, 1e-4))
    assert a.almost_equals(b)
    assert not a.almost_equals(b, tolerance=1e-9)
    assert not a.almost_equals(DMatrix(2, 3))


def test_str_layout() -> None:
    """Text layout brackets rows and aligns columns."""
    ls: str = os.linesep
    a: DMatrix = DMatrix.from_array([[1.0, -2.5], [0.0, 3.0]])
    assert str(a) == f"[[ 1.0, -2.5],{ls} [ 0.0,  3.0]]{ls}"
    assert repr(a) == "DMatrix(m=2, n=2)"


@pytest.mark.parametrize("i, j", [(-1, 0), (3, 0), (0, -1), (0, 4)])
def test_element_access_checks_bounds(i: int, j: int) -> None:
    """Single-element access outside the matrix is an argument error."""
    a: DMatrix = _sample()
    with pytest.raises(DMatrixArgumentError):
        a.get_element(i, j)
    with pytest.raises(DMatrixArgumentError):
        a.set_element(i, j, 1.0)
    assert a == _sample()


def test_negative_dimensions_rejected() -> None:
    with pytest.raises(DMatrixArgumentError):
        DMatrix.random(-1)
    with pytest.raises(DMatrixArgumentError):
        DMatrix.random(2, -3, seed=1)
    with pytest.raises(DMatrixArgumentError):
        DMatrix.identity(-1)


def test_vector_arguments_must_be_1d() -> None:
    """Vector inputs of the wrong rank or type are argument errors."""
    with pytest.raises(DMatrixArgumentError):
        DMatrix.diagonal([[1.0]])
    with pytest.raises(DMatrixArgumentError):
        DMatrix.diagonal(["a", "b"])
    a: DMatrix = _sample()
    with pytest.raises(DMatrixArgumentError):
        a.set_packed_columns([[float(x) for x in range(12)]])
    with pytest.raises(DMatrixArgumentError):
        a.set_packed_rows(np.zeros((3, 4)))
