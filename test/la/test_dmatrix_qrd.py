################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the native Householder QR decomposition."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_linalg.la.check import DMatrixArgumentError
from oasis_linalg.la.check import DMatrixStateError
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.la.dmatrix_qrd import DMatrixQrd


def test_factors_reconstruct() -> None:
    """Q has orthonormal columns, R is upper triangular and Q*R = A."""
    a: DMatrix = DMatrix.random(6, 4, seed=1)
    qrd: DMatrixQrd = DMatrixQrd(a)
    q: DMatrix = qrd.get_q()
    r: DMatrix = qrd.get_r()

    assert qrd.is_full_rank()
    assert q.shape == (6, 4)
    assert r.shape == (4, 4)
    assert np.allclose(q.transpose_times(q).array, np.eye(4))
    assert np.allclose(np.tril(r.array, -1), 0.0)
    assert (q @ r).almost_equals(a)


def test_square_solve() -> None:
    """A square full-rank system is solved exactly."""
    a: DMatrix = DMatrix.from_array(
        [[2.0, -1.0, 0.0], [-1.0, 2.0, -1.0], [0.0, -1.0, 2.0]]
    )
    b: DMatrix = DMatrix.from_array([[1.0], [0.0], [1.0]])
    x: DMatrix = DMatrixQrd(a).solve(b)
    assert np.allclose(x.array, [[1.0], [1.0], [1.0]])


def test_least_squares_solve() -> None:
    """An overdetermined system gets the least-squares solution."""
    rng: np.random.Generator = np.random.default_rng(2)
    a: DMatrix = DMatrix.from_array(rng.normal(size=(8, 3)))
    b: DMatrix = DMatrix.from_array(rng.normal(size=(8, 2)))
    x: DMatrix = DMatrixQrd(a).solve(b)
    expected: NDArray[np.float64] = np.linalg.lstsq(a.array, b.array, rcond=None)[0]
    assert x.shape == (3, 2)
    assert np.allclose(x.array, expected)


def test_rank_deficient() -> None:
    """A zero column makes the decomposition rank deficient."""
    a: DMatrix = DMatrix.from_array([[1.0, 0.0], [2.0, 0.0], [3.0, 0.0]])
    qrd: DMatrixQrd = DMatrixQrd(a)
    assert not qrd.is_full_rank()
    assert (qrd.get_q() @ qrd.get_r()).almost_equals(a)
    with pytest.raises(DMatrixStateError, match="full rank"):
        qrd.solve(DMatrix(3, 1, 1.0))


def test_requires_tall_matrix() -> None:
    """Fewer rows than columns is an argument error."""
    with pytest.raises(DMatrixArgumentError, match="m >= n"):
        DMatrixQrd(DMatrix(2, 3, 1.0))


def test_solve_row_mismatch() -> None:
    """The right-hand side must have as many rows as A."""
    qrd: DMatrixQrd = DMatrixQrd(DMatrix.random(4, 2, seed=0))
    with pytest.raises(DMatrixArgumentError):
        qrd.solve(DMatrix(3, 1))


def test_one_by_one() -> None:
    """A 1x1 matrix has Q = +-1 and R = +-a."""
    qrd: DMatrixQrd = DMatrixQrd(DMatrix.from_array([[-3.0]]))
    q: float = qrd.get_q().get_element(0, 0)
    r: float = qrd.get_r().get_element(0, 0)
    assert abs(q) == pytest.approx(1.0)
    assert q * r == pytest.approx(-3.0)
