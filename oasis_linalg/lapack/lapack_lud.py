################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""LU decomposition computed by LAPACK dgetrf."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import lapack

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.lapack.lapack_info import LapackInfo


LOGGER: logging.Logger = logging.getLogger(__name__)


class LapackLud:
    """LU decomposition (with partial pivoting) of an m-by-n matrix A.

    Same interface as the native DMatrixLud: A(piv, :) = L * U, with L unit
    lower trapezoidal and U upper trapezoidal. LAPACK returns the pivots as
    a sequence of row interchanges; they are converted to a permutation
    vector on construction.
    """

    def __init__(self, a: DMatrix) -> None:
        m: int = a.m
        n: int = a.n
        lu: NDArray[np.float64]
        ipiv: NDArray[np.int32]
        if a.array.size == 0:
            lu = np.zeros((m, n), dtype=np.float64)
            ipiv = np.zeros(0, dtype=np.int32)
            info = 0
        else:
            lu, ipiv, info = lapack.dgetrf(a.array)
        status: LapackInfo = LapackInfo.check("dgetrf", info)

        # Row i was interchanged with row ipiv[i], in order
        piv: NDArray[np.int_] = np.arange(m)
        pivsign: float = 1.0
        for i, p in enumerate(ipiv):
            if int(p) != i:
                piv[[i, int(p)]] = piv[[int(p), i]]
                pivsign = -pivsign

        self._m: int = m
        self._n: int = n
        self._lu: NDArray[np.float64] = lu
        self._ipiv: NDArray[np.int32] = ipiv
        self._piv: NDArray[np.int_] = piv
        self._pivsign: float = pivsign
        self._nonsingular: bool = status.ok

        if not status.ok:
            LOGGER.debug("dgetrf: U(%d,%d) is exactly zero", status.info, status.info)

    def is_nonsingular(self) -> bool:
        """Return True if no diagonal element of U is zero."""
        return self._nonsingular

    def is_singular(self) -> bool:
        return not self._nonsingular

    def get_l(self) -> DMatrix:
        """Return the m-by-min(m,n) unit lower triangular factor L."""
        k: int = min(self._m, self._n)
        lower: NDArray[np.float64] = np.tril(self._lu[:, :k], -1)
        lower[np.arange(k), np.arange(k)] = 1.0
        return DMatrix.from_array(lower)

    def get_u(self) -> DMatrix:
        """Return the min(m,n)-by-n upper triangular factor U."""
        k: int = min(self._m, self._n)
        return DMatrix.from_array(np.triu(self._lu[:k, :]))

    def get_p(self) -> DMatrix:
        """Return the m-by-m row permutation matrix P, with A = P * L * U."""
        p: NDArray[np.float64] = np.zeros((self._m, self._m), dtype=np.float64)
        p[self._piv, np.arange(self._m)] = 1.0
        return DMatrix.from_array(p)

    def get_pivot(self) -> NDArray[np.int_]:
        """Return a copy of the zero-based pivot indices."""
        return self._piv.copy()

    def det(self) -> float:
        """Return the determinant of the square matrix A."""
        check.state(self._m == self._n, "A is square")
        return self._pivsign * float(np.prod(np.diag(self._lu)))

    def solve(self, b: DMatrix) -> DMatrix:
        """Return the solution X of A * X = B using dgetrs."""
        check.argument(self._m == self._n, "A is square")
        check.argument(b.m == self._m, "A and B have the same number of rows")
        check.state(self._nonsingular, "A is non-singular")

        x: NDArray[np.float64]
        x, info = lapack.dgetrs(self._lu, self._ipiv, b.array)
        LapackInfo.check("dgetrs", info)
        return DMatrix.from_array(np.asarray(x, dtype=np.float64))
