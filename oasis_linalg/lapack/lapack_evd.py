################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Eigenvalue decomposition computed by LAPACK dsyevr or dgeev."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import lapack

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.lapack.lapack_info import LapackInfo


LOGGER: logging.Logger = logging.getLogger(__name__)


class LapackEvd:
    """Eigenvalue and eigenvector decomposition of a square matrix A.

    Same interface and block-diagonal conventions as the native DMatrixEvd.
    A symmetric matrix is decomposed by dsyevr (relatively robust
    representations), with eigenvalues in ascending order. Otherwise dgeev
    computes the right eigenvectors; a complex conjugate pair occupies two
    consecutive columns of V holding the real and imaginary parts of the
    eigenvector for the eigenvalue with positive imaginary part.
    """

    def __init__(self, a: DMatrix) -> None:
        check.argument(a.is_square(), "A is square")
        n: int = a.n
        self._n: int = n
        self._symmetric: bool = a.is_symmetric()
        self._v: NDArray[np.float64] = np.zeros((n, n), dtype=np.float64)
        self._d: NDArray[np.float64] = np.zeros(n, dtype=np.float64)
        self._e: NDArray[np.float64] = np.zeros(n, dtype=np.float64)

        if n == 0:
            return

        if self._symmetric:
            w: NDArray[np.float64]
            z: NDArray[np.float64]
            w, z, found, _, info = lapack.dsyevr(a.array, compute_v=1, lower=1)
            LapackInfo.check("dsyevr", info).require_ok("internal error")
            self._d = np.asarray(w[:found], dtype=np.float64)
            self._v = np.asarray(z[:, :found], dtype=np.float64)
        else:
            wr: NDArray[np.float64]
            wi: NDArray[np.float64]
            vr: NDArray[np.float64]
            wr, wi, _, vr, info = lapack.dgeev(a.array, compute_vl=0, compute_vr=1)
            LapackInfo.check("dgeev", info).require_ok(
                "QR algorithm failed to compute all eigenvalues"
            )
            self._d = np.asarray(wr, dtype=np.float64)
            self._e = np.asarray(wi, dtype=np.float64)
            self._v = np.asarray(vr, dtype=np.float64)
            LOGGER.debug(
                "dgeev: %d complex eigenvalues of %dx%d matrix",
                int(np.count_nonzero(self._e)),
                n,
                n,
            )

    def is_symmetric(self) -> bool:
        """Return True if the decomposed matrix was symmetric."""
        return self._symmetric

    def get_v(self) -> DMatrix:
        """Return the matrix of eigenvectors V."""
        return DMatrix.from_array(self._v.copy())

    def get_d(self) -> DMatrix:
        """Return the block diagonal matrix of eigenvalues D."""
        d: NDArray[np.float64] = np.diag(self._d)
        for i in range(self._n):
            if self._e[i] > 0.0:
                d[i, i + 1] = self._e[i]
            elif self._e[i] < 0.0:
                d[i, i - 1] = self._e[i]
        return DMatrix.from_array(d)

    def get_real_eigenvalues(self) -> NDArray[np.float64]:
        return self._d.copy()

    def get_imag_eigenvalues(self) -> NDArray[np.float64]:
        return self._e.copy()
