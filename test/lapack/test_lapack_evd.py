################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the LAPACK eigenvalue decomposition."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.la.dmatrix_evd import DMatrixEvd
from oasis_linalg.lapack.lapack_evd import LapackEvd


def test_symmetric_agrees_with_native() -> None:
    """Eigenvalues are ascending and A*V = V*D with orthogonal V."""
    r: DMatrix = DMatrix.random(5, seed=71)
    a: DMatrix = r + r.transpose()
    evd: LapackEvd = LapackEvd(a)
    v: DMatrix = evd.get_v()
    d: DMatrix = evd.get_d()
    values: NDArray[np.float64] = evd.get_real_eigenvalues()

    assert evd.is_symmetric()
    assert np.all(np.diff(values) >= 0.0)
    assert np.allclose(values, DMatrixEvd(a).get_real_eigenvalues())
    assert np.all(evd.get_imag_eigenvalues() == 0.0)
    assert np.allclose(v.transpose_times(v).array, np.eye(5))
    assert (a @ v).almost_equals(v @ d)


def test_complex_pair_block() -> None:
    """A complex pair gives a 2x2 block in D and A*V = V*D still holds."""
    a: DMatrix = DMatrix.from_array(
        [[1.0, 2.0, 0.0], [-2.0, 1.0, 0.0], [0.0, 0.0, 3.0]]
    )
    evd: LapackEvd = LapackEvd(a)
    v: DMatrix = evd.get_v()
    d: DMatrix = evd.get_d()

    assert not evd.is_symmetric()
    assert (a @ v).almost_equals(v @ d)

    values: NDArray[np.complex128] = np.sort_complex(
        evd.get_real_eigenvalues() + 1j * evd.get_imag_eigenvalues()
    )
    native: DMatrixEvd = DMatrixEvd(a)
    expected: NDArray[np.complex128] = np.sort_complex(
        native.get_real_eigenvalues() + 1j * native.get_imag_eigenvalues()
    )
    assert np.allclose(values, expected)
    assert np.allclose(values, [1.0 - 2.0j, 1.0 + 2.0j, 3.0])


def test_random_nonsymmetric() -> None:
    a: DMatrix = DMatrix.random(6, seed=72)
    evd: LapackEvd = LapackEvd(a)
    assert (a @ evd.get_v()).almost_equals(evd.get_v() @ evd.get_d())


def test_empty() -> None:
    evd: LapackEvd = LapackEvd(DMatrix(0, 0))
    assert evd.get_v().shape == (0, 0)
    assert evd.get_real_eigenvalues().shape == (0,)
