################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Singular value decomposition by Golub-Kahan bidiagonalization."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.math_utils.validation import DBL_EPSILON
from oasis_linalg.math_utils.validation import DBL_TINY


LOGGER: logging.Logger = logging.getLogger(__name__)

# QR sweeps allowed for one singular value before giving up
MAX_ITERATIONS: int = 75


class DMatrixSvd:
    """Singular value decomposition of an m-by-n matrix A.

    A = U * S * V', where with k = min(m, n) U is m-by-k with orthonormal
    columns, S is k-by-k diagonal with singular values in descending order,
    and V is n-by-k with orthonormal columns.

    The decomposition exists for every finite matrix. If m < n, the decomposition of A' is
    computed and the factors U and V are exchanged.

    Adapted from the public-domain Jama package.
    """

    def __init__(self, a: DMatrix) -> None:
        check.argument(bool(np.all(np.isfinite(a.array))), "A is finite")
        self._m: int = a.m
        self._n: int = a.n
        transposed: bool = a.m < a.n
        aa: NDArray[np.float64] = a.array.T.copy() if transposed else a.get()

        u: NDArray[np.float64]
        s: NDArray[np.float64]
        v: NDArray[np.float64]
        if aa.size == 0:
            k: int = min(aa.shape)
            u = np.zeros((aa.shape[0], k), dtype=np.float64)
            s = np.zeros(k, dtype=np.float64)
            v = np.zeros((aa.shape[1], k), dtype=np.float64)
        else:
            u, s, v = _golub_kahan(aa)

        if transposed:
            u, v = v, u

        self._u: NDArray[np.float64] = u
        self._s: NDArray[np.float64] = s
        self._v: NDArray[np.float64] = v

    def get_u(self) -> DMatrix:
        """Return the m-by-k matrix of left singular vectors U."""
        return DMatrix.from_array(self._u.copy())

    def get_s(self) -> DMatrix:
        """Return the k-by-k diagonal matrix of singular values S."""
        return DMatrix.from_array(np.diag(self._s))

    def get_v(self) -> DMatrix:
        """Return the n-by-k matrix of right singular vectors V."""
        return DMatrix.from_array(self._v.copy())

    def get_vt(self) -> DMatrix:
        """Return the k-by-n transpose V'."""
        return DMatrix.from_array(self._v.T.copy())

    def get_singular_values(self) -> NDArray[np.float64]:
        """Return the singular values in descending order."""
        return self._s.copy()

    def norm2(self) -> float:
        """Return the two-norm, the largest singular value."""
        if self._s.size == 0:
            return 0.0
        return float(self._s[0])

    def cond(self) -> float:
        """Return the two-norm condition number, max(s) / min(s).

        The condition number of a rank-deficient matrix is infinite.
        """
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


def _rotate(x: NDArray[np.float64], j: int, k: int, cs: float, sn: float) -> None:
    """Apply a Givens rotation to columns j and k of x in place."""
    t: NDArray[np.float64] = cs * x[:, j] + sn * x[:, k]
    x[:, k] = -sn * x[:, j] + cs * x[:, k]
    x[:, j] = t


def _golub_kahan(
    a: NDArray[np.float64],
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Compute (U, s, V) of an m-by-n array with m >= n, modifying a."""
    m: int
    n: int
    m, n = a.shape
    nu: int = min(m, n)
    s: NDArray[np.float64] = np.zeros(min(m + 1, n), dtype=np.float64)
    U: NDArray[np.float64] = np.zeros((m, nu), dtype=np.float64)
    V: NDArray[np.float64] = np.zeros((n, n), dtype=np.float64)
    e: NDArray[np.float64] = np.zeros(n, dtype=np.float64)
    work: NDArray[np.float64] = np.zeros(m, dtype=np.float64)

    # Reduce A to bidiagonal form, storing the diagonal elements in s and
    # the super-diagonal elements in e
    nct: int = min(m - 1, n)
    nrt: int = max(0, min(n - 2, m))
    for k in range(max(nct, nrt)):
        if k < nct:
            # Compute the transformation for the k-th column
            s[k] = 0.0
            for i in range(k, m):
                s[k] = math.hypot(s[k], a[i, k])
            if s[k] != 0.0:
                if a[k, k] < 0.0:
                    s[k] = -s[k]
                a[k:, k] /= s[k]
                a[k, k] += 1.0
            s[k] = -s[k]

        for j in range(k + 1, n):
            if k < nct and s[k] != 0.0:
                # Apply the transformation
                t: float = float(np.dot(a[k:, k], a[k:, j]))
                t = -t / a[k, k]
                a[k:, j] += t * a[k:, k]

            # Row k of A for the subsequent row transformation
            e[j] = a[k, j]

        if k < nct:
            U[k:, k] = a[k:, k]

        if k < nrt:
            # Compute the transformation for the k-th row
            e[k] = 0.0
            for i in range(k + 1, n):
                e[k] = math.hypot(e[k], e[i])
            if e[k] != 0.0:
                if e[k + 1] < 0.0:
                    e[k] = -e[k]
                e[k + 1 :] /= e[k]
                e[k + 1] += 1.0
            e[k] = -e[k]
            if k + 1 < m and e[k] != 0.0:
                # Apply the transformation
                work[k + 1 :] = a[k + 1 :, k + 1 :] @ e[k + 1 :]
                a[k + 1 :, k + 1 :] += np.outer(work[k + 1 :], -e[k + 1 :] / e[k + 1])

            V[k + 1 :, k] = e[k + 1 :]

    # Set up the final bidiagonal matrix of order p
    p: int = min(n, m + 1)
    if nct < n:
        s[nct] = a[nct, nct]
    if m < p:
        s[p - 1] = 0.0
    if nrt + 1 < p:
        e[nrt] = a[nrt, p - 1]
    e[p - 1] = 0.0

    # Generate U
    for j in range(nct, nu):
        U[:, j] = 0.0
        U[j, j] = 1.0
    for k in range(nct - 1, -1, -1):
        if s[k] != 0.0:
            for j in range(k + 1, nu):
                t = float(np.dot(U[k:, k], U[k:, j]))
                t = -t / U[k, k]
                U[k:, j] += t * U[k:, k]
            U[k:, k] = -U[k:, k]
            U[k, k] = 1.0 + U[k, k]
            U[:k, k] = 0.0
        else:
            U[:, k] = 0.0
            U[k, k] = 1.0

    # Generate V
    for k in range(n - 1, -1, -1):
        if k < nrt and e[k] != 0.0:
            for j in range(k + 1, nu):
                t = float(np.dot(V[k + 1 :, k], V[k + 1 :, j]))
                t = -t / V[k + 1, k]
                V[k + 1 :, j] += t * V[k + 1 :, k]
        V[:, k] = 0.0
        V[k, k] = 1.0

    # Main iteration loop for the singular values
    pp: int = p - 1
    eps: float = DBL_EPSILON
    tiny: float = DBL_TINY
    iterations: int = 0
    while p > 0:
        # Inspect for negligible elements in the s and e arrays. On
        # completion kase and k are set as follows:
        #
        #   kase = 1  if s[p-1] and e[k-1] are negligible and k < p
        #   kase = 2  if s[k] is negligible and k < p
        #   kase = 3  if e[k-1] is negligible, k < p, and s[k], ..., s[p-1]
        #             are not negligible (QR step)
        #   kase = 4  if e[p-2] is negligible (convergence)
        k = p - 2
        while k >= 0:
            if abs(e[k]) <= tiny + eps * (abs(s[k]) + abs(s[k + 1])):
                e[k] = 0.0
                break
            k -= 1

        kase: int
        if k == p - 2:
            kase = 4
        else:
            ks: int = p - 1
            while ks > k:
                t = (abs(e[ks]) if ks != p else 0.0) + (
                    abs(e[ks - 1]) if ks != k + 1 else 0.0
                )
                if abs(s[ks]) <= tiny + eps * t:
                    s[ks] = 0.0
                    break
                ks -= 1
            if ks == k:
                kase = 3
            elif ks == p - 1:
                kase = 1
            else:
                kase = 2
                k = ks
        k += 1

        cs: float
        sn: float
        f: float
        g: float
        if kase == 1:
            # Deflate negligible s[p-1]
            f = e[p - 2]
            e[p - 2] = 0.0
            for j in range(p - 2, k - 1, -1):
                t = math.hypot(s[j], f)
                cs = s[j] / t
                sn = f / t
                s[j] = t
                if j != k:
                    f = -sn * e[j - 1]
                    e[j - 1] = cs * e[j - 1]
                _rotate(V, j, p - 1, cs, sn)

        elif kase == 2:
            # Split at negligible s[k]
            f = e[k - 1]
            e[k - 1] = 0.0
            for j in range(k, p):
                t = math.hypot(s[j], f)
                cs = s[j] / t
                sn = f / t
                s[j] = t
                f = -sn * e[j]
                e[j] = cs * e[j]
                _rotate(U, j, k - 1, cs, sn)

        elif kase == 3:
            iterations += 1
            check.state(iterations <= MAX_ITERATIONS, "SVD iteration converges")

            # Calculate the shift
            scale: float = max(
                abs(s[p - 1]), abs(s[p - 2]), abs(e[p - 2]), abs(s[k]), abs(e[k])
            )
            sp: float = s[p - 1] / scale
            spm1: float = s[p - 2] / scale
            epm1: float = e[p - 2] / scale
            sk: float = s[k] / scale
            ek: float = e[k] / scale
            b: float = ((spm1 + sp) * (spm1 - sp) + epm1 * epm1) / 2.0
            c: float = (sp * epm1) * (sp * epm1)
            shift: float = 0.0
            if b != 0.0 or c != 0.0:
                shift = math.sqrt(b * b + c)
                if b < 0.0:
                    shift = -shift
                shift = c / (b + shift)
            f = (sk + sp) * (sk - sp) + shift
            g = sk * ek

            # Chase zeros
            for j in range(k, p - 1):
                t = math.hypot(f, g)
                cs = f / t
                sn = g / t
                if j != k:
                    e[j - 1] = t
                f = cs * s[j] + sn * e[j]
                e[j] = cs * e[j] - sn * s[j]
                g = sn * s[j + 1]
                s[j + 1] = cs * s[j + 1]
                _rotate(V, j, j + 1, cs, sn)

                t = math.hypot(f, g)
                cs = f / t
                sn = g / t
                s[j] = t
                f = cs * e[j] + sn * s[j + 1]
                s[j + 1] = -sn * e[j] + cs * s[j + 1]
                g = sn * e[j + 1]
                e[j + 1] = cs * e[j + 1]
                if j < m - 1:
                    _rotate(U, j, j + 1, cs, sn)
            e[p - 2] = f

        else:
            # Make the singular values positive
            if s[k] <= 0.0:
                s[k] = -s[k] if s[k] < 0.0 else 0.0
                V[: pp + 1, k] = -V[: pp + 1, k]

            # Order the singular values
            while k < pp:
                if s[k] >= s[k + 1]:
                    break
                s[k], s[k + 1] = s[k + 1], s[k]
                if k < n - 1:
                    V[:, [k, k + 1]] = V[:, [k + 1, k]]
                if k < m - 1:
                    U[:, [k, k + 1]] = U[:, [k + 1, k]]
                k += 1
            p -= 1
            iterations = 0

    LOGGER.debug("SVD of %dx%d array converged", m, n)

    return U, s[:nu].copy(), V[:, :nu].copy()
