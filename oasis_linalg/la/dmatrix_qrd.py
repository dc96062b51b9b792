################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""QR decomposition by Householder reflections."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix


LOGGER: logging.Logger = logging.getLogger(__name__)


class DMatrixQrd:
    """QR decomposition of an m-by-n matrix A with m >= n.

    A = Q * R, where Q is m-by-n with orthonormal columns and R is n-by-n
    upper triangular.

    The decomposition is constructed even if A is rank deficient. Its primary
    use is least-squares solution of overdetermined systems, which requires
    A to be of full rank.

    Adapted from the public-domain Jama package.
    """

    def __init__(self, a: DMatrix) -> None:
        check.argument(a.m >= a.n, "m >= n")
        m: int = a.m
        n: int = a.n
        qr: NDArray[np.float64] = a.get()
        rdiag: NDArray[np.float64] = np.zeros(n, dtype=np.float64)

        for k in range(n):
            # 2-norm of the k'th column without under/overflow
            nrm: float = 0.0
            for i in range(k, m):
                nrm = math.hypot(nrm, qr[i, k])

            if nrm != 0.0:
                # Form the k'th Householder vector
                if qr[k, k] < 0.0:
                    nrm = -nrm
                qr[k:, k] /= nrm
                qr[k, k] += 1.0

                # Apply the transformation to the remaining columns
                if k + 1 < n:
                    s: NDArray[np.float64] = qr[k:, k] @ qr[k:, k + 1 :]
                    s = -s / qr[k, k]
                    qr[k:, k + 1 :] += np.outer(qr[k:, k], s)

            rdiag[k] = -nrm

        self._m: int = m
        self._n: int = n
        self._qr: NDArray[np.float64] = qr
        self._rdiag: NDArray[np.float64] = rdiag

        if not self.is_full_rank():
            LOGGER.debug("QR decomposition of %dx%d matrix is rank deficient", m, n)

    def is_full_rank(self) -> bool:
        """Return True if no Householder diagonal element is zero."""
        return bool(np.all(self._rdiag != 0.0))

    def get_q(self) -> DMatrix:
        """Return the m-by-n factor Q with orthonormal columns."""
        m: int = self._m
        n: int = self._n
        qr: NDArray[np.float64] = self._qr
        q: NDArray[np.float64] = np.zeros((m, n), dtype=np.float64)
        for k in range(n - 1, -1, -1):
            q[k, k] = 1.0
            if qr[k, k] != 0.0:
                s: NDArray[np.float64] = qr[k:, k] @ q[k:, k:]
                s = -s / qr[k, k]
                q[k:, k:] += np.outer(qr[k:, k], s)
        return DMatrix.from_array(q)

    def get_r(self) -> DMatrix:
        """Return the n-by-n upper triangular factor R."""
        r: NDArray[np.float64] = np.triu(self._qr[: self._n, :], 1)
        r[np.arange(self._n), np.arange(self._n)] = self._rdiag
        return DMatrix.from_array(r)

    def solve(self, b: DMatrix) -> DMatrix:
        """Return the n-by-nrhs matrix X that minimizes the two-norm of A*X-B.

        B must have the same number of rows as A. A must be of full rank.
        """
        check.argument(b.m == self._m, "A and B have the same number of rows")
        check.state(self.is_full_rank(), "A is of full rank")

        n: int = self._n
        qr: NDArray[np.float64] = self._qr
        x: NDArray[np.float64] = b.get()

        # Compute Y = Q' * B
        for k in range(n):
            s: NDArray[np.float64] = qr[k:, k] @ x[k:, :]
            s = -s / qr[k, k]
            x[k:, :] += np.outer(qr[k:, k], s)

        # Solve R * X = Y
        for k in range(n - 1, -1, -1):
            x[k, :] /= self._rdiag[k]
            x[:k, :] -= np.outer(qr[:k, k], x[k, :])

        return DMatrix.from_array(x[:n, :].copy())
