################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Singular value decomposition computed by LAPACK dgesdd."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import lapack

from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.lapack.lapack_info import LapackInfo
from oasis_linalg.math_utils.validation import DBL_EPSILON


class LapackSvd:
    """Singular value decomposition A = U * S * V' of an m-by-n matrix A.

    Same interface as the native DMatrixSvd, computed with the
    divide-and-conquer driver dgesdd in its economy-size form.
    """

    def __init__(self, a: DMatrix) -> None:
        m: int = a.m
        n: int = a.n
        k: int = min(m, n)
        self._m: int = m
        self._n: int = n
        self._u: NDArray[np.float64] = np.zeros((m, k), dtype=np.float64)
        self._s: NDArray[np.float64] = np.zeros(k, dtype=np.float64)
        self._vt: NDArray[np.float64] = np.zeros((k, n), dtype=np.float64)

        if k == 0:
            return

        u: NDArray[np.float64]
        s: NDArray[np.float64]
        vt: NDArray[np.float64]
        u, s, vt, info = lapack.dgesdd(a.array, compute_uv=1, full_matrices=0)
        LapackInfo.check("dgesdd", info).require_ok(
            "bidiagonal SVD did not converge"
        )
        self._u = np.asarray(u, dtype=np.float64)
        self._s = np.asarray(s, dtype=np.float64)
        self._vt = np.asarray(vt, dtype=np.float64)

    def get_u(self) -> DMatrix:
        """Return the m-by-k matrix of left singular vectors U."""
        return DMatrix.from_array(self._u.copy())

    def get_s(self) -> DMatrix:
        """Return the k-by-k diagonal matrix of singular values S."""
        return DMatrix.from_array(np.diag(self._s))

    def get_v(self) -> DMatrix:
        """Return the n-by-k matrix of right singular vectors V."""
        return DMatrix.from_array(self._vt.T.copy())

    def get_vt(self) -> DMatrix:
        """Return the k-by-n transpose V'."""
        return DMatrix.from_array(self._vt.copy())

    def get_singular_values(self) -> NDArray[np.float64]:
        """Return the singular values in descending order."""
        return self._s.copy()

    def norm2(self) -> float:
        if self._s.size == 0:
            return 0.0
        return float(self._s[0])

    def cond(self) -> float:
        if self._s.size == 0:
            return 0.0
        if self._s[-1] == 0.0:
            return math.inf
        return float(self._s[0] / self._s[-1])

    def rank(self) -> int:
        """Return the effective numerical rank."""
        if self._s.size == 0:
            return 0
        tol: float = max(self._m, self._n) * float(self._s[0]) * DBL_EPSILON
        return int(np.count_nonzero(self._s > tol))
