################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""QR decomposition computed by LAPACK dgeqrf."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import lapack

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.lapack.lapack_info import LapackInfo
from oasis_linalg.lapack.lapack_info import query_lwork


class LapackQrd:
    """QR decomposition of an m-by-n matrix A with m >= n.

    Same interface as the native DMatrixQrd. The Householder reflectors
    are kept in compact form; Q is formed by dorgqr only when requested,
    and least-squares solutions apply Q' with dormqr.
    """

    def __init__(self, a: DMatrix) -> None:
        check.argument(a.m >= a.n, "m >= n")
        qr: NDArray[np.float64]
        tau: NDArray[np.float64]
        if a.n == 0:
            qr = np.zeros((a.m, 0), dtype=np.float64)
            tau = np.zeros(0, dtype=np.float64)
        else:
            lwork: int = query_lwork(lapack.dgeqrf, "dgeqrf", a.array)
            qr, tau, _, info = lapack.dgeqrf(a.array, lwork=lwork)
            LapackInfo.check("dgeqrf", info)

        self._m: int = a.m
        self._n: int = a.n
        self._qr: NDArray[np.float64] = qr
        self._tau: NDArray[np.float64] = tau

    def is_full_rank(self) -> bool:
        """Return True if no diagonal element of R is zero."""
        return bool(np.all(np.diag(self._qr)[: self._n] != 0.0))

    def get_q(self) -> DMatrix:
        """Return the m-by-n factor Q with orthonormal columns."""
        if self._n == 0:
            return DMatrix(self._m, 0)
        a: NDArray[np.float64] = self._qr[:, : self._n]
        lwork: int = query_lwork(lapack.dorgqr, "dorgqr", a, self._tau)
        q: NDArray[np.float64]
        q, _, info = lapack.dorgqr(a, self._tau, lwork=lwork)
        LapackInfo.check("dorgqr", info)
        return DMatrix.from_array(np.asarray(q, dtype=np.float64))

    def get_r(self) -> DMatrix:
        """Return the n-by-n upper triangular factor R."""
        return DMatrix.from_array(np.triu(self._qr[: self._n, :]))

    def solve(self, b: DMatrix) -> DMatrix:
        """Return the n-by-nrhs matrix X that minimizes the two-norm of A*X-B."""
        check.argument(b.m == self._m, "A and B have the same number of rows")
        check.state(self.is_full_rank(), "A is of full rank")
        if self._n == 0:
            return DMatrix(0, b.n)

        # Compute Y = Q' * B
        lwork: int = query_lwork(
            lapack.dormqr, "dormqr", "L", "T", self._qr, self._tau, b.array
        )
        y: NDArray[np.float64]
        y, _, info = lapack.dormqr(
            "L", "T", self._qr, self._tau, b.array, lwork=lwork
        )
        LapackInfo.check("dormqr", info)

        # Solve R * X = Y
        x: NDArray[np.float64]
        x, info = lapack.dtrtrs(self._qr[: self._n, :], y[: self._n, :], lower=0)
        LapackInfo.check("dtrtrs", info)
        return DMatrix.from_array(np.asarray(x, dtype=np.float64))
