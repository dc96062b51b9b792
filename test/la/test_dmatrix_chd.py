################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the native Cholesky decomposition."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_linalg.la.check import DMatrixArgumentError
from oasis_linalg.la.check import DMatrixStateError
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.la.dmatrix_chd import DMatrixChd


def _spd(n: int, seed: int) -> DMatrix:
    """Return a well-conditioned symmetric positive-definite matrix."""
    rng: np.random.Generator = np.random.default_rng(seed)
    m: NDArray[np.float64] = rng.normal(size=(n, n))
    a: NDArray[np.float64] = m @ m.T + n * np.eye(n)
    return DMatrix.from_array(0.5 * (a + a.T))


def test_factor_reconstructs() -> None:
    """L is lower triangular with a positive diagonal and L*L' = A."""
    a: DMatrix = _spd(5, 0)
    chd: DMatrixChd = DMatrixChd(a)
    lower: DMatrix = chd.get_l()

    assert chd.is_positive_definite()
    assert np.allclose(np.triu(lower.array, 1), 0.0)
    assert np.all(np.diag(lower.array) > 0.0)
    assert lower.times_transpose(lower).almost_equals(a)
    assert np.allclose(lower.array, np.linalg.cholesky(a.array))


def test_solve_and_det() -> None:
    """Solutions and determinant match numpy."""
    a: DMatrix = _spd(4, 1)
    b: DMatrix = DMatrix.random(4, 2, seed=9)
    chd: DMatrixChd = DMatrixChd(a)
    assert np.allclose(chd.solve(b).array, np.linalg.solve(a.array, b.array))
    assert chd.det() == pytest.approx(float(np.linalg.det(a.array)))


def test_indefinite_matrix() -> None:
    """A symmetric indefinite matrix is not positive definite."""
    chd: DMatrixChd = DMatrixChd(DMatrix.from_array([[1.0, 2.0], [2.0, 1.0]]))
    assert not chd.is_positive_definite()
    with pytest.raises(DMatrixStateError, match="positive definite"):
        chd.solve(DMatrix(2, 1, 1.0))
    with pytest.raises(DMatrixStateError):
        chd.det()


def test_nonsymmetric_matrix() -> None:
    """A nonsymmetric matrix is not positive definite."""
    chd: DMatrixChd = DMatrixChd(DMatrix.from_array([[2.0, 1.0], [0.0, 2.0]]))
    assert not chd.is_positive_definite()


def test_requires_square() -> None:
    """A non-square matrix is an argument error."""
    with pytest.raises(DMatrixArgumentError):
        DMatrixChd(DMatrix(3, 2))


def test_solve_row_mismatch() -> None:
    """The right-hand side must have as many rows as A."""
    chd: DMatrixChd = DMatrixChd(DMatrix.identity(3))
    with pytest.raises(DMatrixArgumentError):
        chd.solve(DMatrix(2, 1))
