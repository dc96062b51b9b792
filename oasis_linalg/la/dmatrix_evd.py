################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Eigenvalue and eigenvector decomposition of a square matrix."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.math_utils.validation import DBL_EPSILON


LOGGER: logging.Logger = logging.getLogger(__name__)

# Iterations allowed for one eigenvalue (or pair) before giving up
MAX_ITERATIONS: int = 300


class DMatrixEvd:
    """Eigenvalue and eigenvector decomposition of a square matrix A.

    If A is symmetric, then A = V * D * V' where the matrix of eigenvalues D
    is diagonal and the matrix of eigenvectors V is orthogonal. Eigenvalues
    are sorted in ascending order.

    If A is not symmetric, then D is block diagonal with real eigenvalues in
    1-by-1 blocks and complex eigenvalues lambda + i*mu in 2-by-2 blocks
    [lambda, mu; -mu, lambda]. The columns of V represent the eigenvectors
    in the sense that A * V = V * D. V may be badly conditioned or even
    singular, so A = V * D * inverse(V) holds only as well as V is
    conditioned.

    The symmetric path is Householder tridiagonalization (tred2) followed by
    the implicit QL algorithm (tql2). The nonsymmetric path is orthogonal
    reduction to Hessenberg form (orthes) followed by shifted QR iteration
    to real Schur form (hqr2). All four derive from the Algol procedures of
    the Handbook for Automatic Computation, Vol. II, by way of EISPACK and
    the public-domain Jama package.
    """

    def __init__(self, a: DMatrix) -> None:
        check.argument(a.is_square(), "A is square")
        check.argument(bool(np.all(np.isfinite(a.array))), "A is finite")
        n: int = a.n
        self._n: int = n
        self._v: NDArray[np.float64] = np.zeros((n, n), dtype=np.float64)
        self._d: NDArray[np.float64] = np.zeros(n, dtype=np.float64)
        self._e: NDArray[np.float64] = np.zeros(n, dtype=np.float64)
        self._h: NDArray[np.float64] = np.zeros((0, 0), dtype=np.float64)
        self._symmetric: bool = a.is_symmetric()

        if n == 0:
            return

        if self._symmetric:
            self._v[:, :] = a.array
            self._tred2()
            self._tql2()
        else:
            self._h = a.get()
            self._orthes()
            self._hqr2()
            LOGGER.debug(
                "Nonsymmetric eigen-decomposition of %dx%d matrix: "
                "%d complex eigenvalues",
                n,
                n,
                int(np.count_nonzero(self._e)),
            )

    def is_symmetric(self) -> bool:
        """Return True if the decomposed matrix was symmetric."""
        return self._symmetric

    def get_v(self) -> DMatrix:
        """Return the matrix of eigenvectors V."""
        return DMatrix.from_array(self._v.copy())

    def get_d(self) -> DMatrix:
        """Return the block diagonal matrix of eigenvalues D."""
        n: int = self._n
        d: NDArray[np.float64] = np.diag(self._d)
        for i in range(n):
            if self._e[i] > 0.0:
                d[i, i + 1] = self._e[i]
            elif self._e[i] < 0.0:
                d[i, i - 1] = self._e[i]
        return DMatrix.from_array(d)

    def get_real_eigenvalues(self) -> NDArray[np.float64]:
        """Return the real parts of the eigenvalues, real(diag(D))."""
        return self._d.copy()

    def get_imag_eigenvalues(self) -> NDArray[np.float64]:
        """Return the imaginary parts of the eigenvalues, imag(diag(D))."""
        return self._e.copy()

    ############################################################################
    # Symmetric
    ############################################################################

    def _tred2(self) -> None:
        """Symmetric Householder reduction to tridiagonal form."""
        n: int = self._n
        v: NDArray[np.float64] = self._v
        d: NDArray[np.float64] = self._d
        e: NDArray[np.float64] = self._e

        d[:] = v[n - 1, :]

        # Householder reduction to tridiagonal form
        for i in range(n - 1, 0, -1):
            # Scale to avoid under/overflow
            scale: float = float(np.sum(np.abs(d[:i])))
            h: float = 0.0
            if scale == 0.0:
                e[i] = d[i - 1]
                for j in range(i):
                    d[j] = v[i - 1, j]
                    v[i, j] = 0.0
                    v[j, i] = 0.0
            else:
                # Generate Householder vector
                d[:i] /= scale
                h = float(np.dot(d[:i], d[:i]))
                f: float = d[i - 1]
                g: float = math.sqrt(h)
                if f > 0.0:
                    g = -g
                e[i] = scale * g
                h -= f * g
                d[i - 1] = f - g
                e[:i] = 0.0

                # Apply similarity transformation to remaining columns
                for j in range(i):
                    f = d[j]
                    v[j, i] = f
                    g = e[j] + v[j, j] * f
                    for k in range(j + 1, i):
                        g += v[k, j] * d[k]
                        e[k] += v[k, j] * f
                    e[j] = g
                e[:i] /= h
                f = float(np.dot(e[:i], d[:i]))
                hh: float = f / (h + h)
                e[:i] -= hh * d[:i]
                for j in range(i):
                    f = d[j]
                    g = e[j]
                    v[j:i, j] -= f * e[j:i] + g * d[j:i]
                    d[j] = v[i - 1, j]
                    v[i, j] = 0.0
            d[i] = h

        # Accumulate transformations
        for i in range(n - 1):
            v[n - 1, i] = v[i, i]
            v[i, i] = 1.0
            h = d[i + 1]
            if h != 0.0:
                d[: i + 1] = v[: i + 1, i + 1] / h
                for j in range(i + 1):
                    g = float(np.dot(v[: i + 1, i + 1], v[: i + 1, j]))
                    v[: i + 1, j] -= g * d[: i + 1]
            v[: i + 1, i + 1] = 0.0
        d[:] = v[n - 1, :]
        v[n - 1, :] = 0.0
        v[n - 1, n - 1] = 1.0
        e[0] = 0.0

    def _tql2(self) -> None:
        """Symmetric tridiagonal QL algorithm."""
        n: int = self._n
        v: NDArray[np.float64] = self._v
        d: NDArray[np.float64] = self._d
        e: NDArray[np.float64] = self._e

        e[: n - 1] = e[1:].copy()
        e[n - 1] = 0.0

        f: float = 0.0
        tst1: float = 0.0
        eps: float = DBL_EPSILON
        for l in range(n):  # noqa: E741
            # Find small subdiagonal element
            tst1 = max(tst1, abs(d[l]) + abs(e[l]))
            m: int = l
            while m < n:
                if abs(e[m]) <= eps * tst1:
                    break
                m += 1

            # If m == l, d[l] is an eigenvalue; otherwise, iterate
            if m > l:
                iterations: int = 0
                while True:
                    iterations += 1
                    check.state(
                        iterations <= MAX_ITERATIONS, "QL iteration converges"
                    )
                    # Compute implicit shift
                    g: float = d[l]
                    p: float = (d[l + 1] - g) / (2.0 * e[l])
                    r: float = math.hypot(p, 1.0)
                    if p < 0:
                        r = -r
                    d[l] = e[l] / (p + r)
                    d[l + 1] = e[l] * (p + r)
                    dl1: float = d[l + 1]
                    h: float = g - d[l]
                    d[l + 2 :] -= h
                    f += h

                    # Implicit QL transformation
                    p = d[m]
                    c: float = 1.0
                    c2: float = c
                    c3: float = c
                    el1: float = e[l + 1]
                    s: float = 0.0
                    s2: float = 0.0
                    for i in range(m - 1, l - 1, -1):
                        c3 = c2
                        c2 = c
                        s2 = s
                        g = c * e[i]
                        h = c * p
                        r = math.hypot(p, e[i])
                        e[i + 1] = s * r
                        s = e[i] / r
                        c = p / r
                        p = c * d[i] - s * g
                        d[i + 1] = h + s * (c * g + s * d[i])

                        # Accumulate transformation
                        vi1: NDArray[np.float64] = v[:, i + 1].copy()
                        v[:, i + 1] = s * v[:, i] + c * vi1
                        v[:, i] = c * v[:, i] - s * vi1

                    p = -s * s2 * c3 * el1 * e[l] / dl1
                    e[l] = s * p
                    d[l] = c * p

                    # Check for convergence
                    if abs(e[l]) <= eps * tst1:
                        break
            d[l] += f
            e[l] = 0.0

        # Sort eigenvalues and corresponding vectors
        for i in range(n - 1):
            k: int = i + int(np.argmin(d[i:]))
            if k != i:
                d[[i, k]] = d[[k, i]]
                v[:, [i, k]] = v[:, [k, i]]

    ############################################################################
    # Nonsymmetric
    ############################################################################

    def _orthes(self) -> None:
        """Nonsymmetric reduction to Hessenberg form."""
        n: int = self._n
        h: NDArray[np.float64] = self._h
        v: NDArray[np.float64] = self._v
        low: int = 0
        high: int = n - 1
        ort: NDArray[np.float64] = np.zeros(n, dtype=np.float64)

        for m in range(low + 1, high):
            # Scale column
            scale: float = float(np.sum(np.abs(h[m : high + 1, m - 1])))
            if scale != 0.0:
                # Compute Householder transformation
                ort[m : high + 1] = h[m : high + 1, m - 1] / scale
                hh: float = float(np.dot(ort[m : high + 1], ort[m : high + 1]))
                g: float = math.sqrt(hh)
                if ort[m] > 0.0:
                    g = -g
                hh -= ort[m] * g
                ort[m] -= g

                # Householder similarity transformation
                # H = (I - u*u'/h) * H * (I - u*u'/h)
                u: NDArray[np.float64] = ort[m : high + 1]
                fr: NDArray[np.float64] = (u @ h[m : high + 1, m:]) / hh
                h[m : high + 1, m:] -= np.outer(u, fr)
                fc: NDArray[np.float64] = (h[: high + 1, m : high + 1] @ u) / hh
                h[: high + 1, m : high + 1] -= np.outer(fc, u)

                ort[m] = scale * ort[m]
                h[m, m - 1] = scale * g

        # Accumulate transformations (Algol's ortran)
        v[:, :] = np.eye(n, dtype=np.float64)
        for m in range(high - 1, low, -1):
            if h[m, m - 1] != 0.0:
                ort[m + 1 : high + 1] = h[m + 1 : high + 1, m - 1]
                for j in range(m, high + 1):
                    g = float(np.dot(ort[m : high + 1], v[m : high + 1, j]))
                    # Double division avoids possible underflow
                    g = (g / ort[m]) / h[m, m - 1]
                    v[m : high + 1, j] += g * ort[m : high + 1]

    @staticmethod
    def _cdiv(xr: float, xi: float, yr: float, yi: float) -> tuple[float, float]:
        """Complex scalar division (xr + i*xi) / (yr + i*yi)."""
        r: float
        d: float
        if abs(yr) > abs(yi):
            r = yi / yr
            d = yr + r * yi
            return ((xr + r * xi) / d, (xi - r * xr) / d)
        r = yr / yi
        d = yi + r * yr
        return ((r * xr + xi) / d, (r * xi - xr) / d)

    def _hqr2(self) -> None:
        """Nonsymmetric reduction from Hessenberg to real Schur form."""
        nn: int = self._n
        n: int = nn - 1
        low: int = 0
        high: int = nn - 1
        eps: float = DBL_EPSILON
        exshift: float = 0.0
        p: float = 0.0
        q: float = 0.0
        r: float = 0.0
        s: float = 0.0
        z: float = 0.0
        t: float
        w: float
        x: float = 0.0
        y: float

        H: NDArray[np.float64] = self._h
        V: NDArray[np.float64] = self._v
        d: NDArray[np.float64] = self._d
        e: NDArray[np.float64] = self._e

        # Store roots isolated by balance and compute matrix norm
        norm: float = 0.0
        for i in range(nn):
            if i < low or i > high:
                d[i] = H[i, i]
                e[i] = 0.0
            norm += float(np.sum(np.abs(H[i, max(i - 1, 0) :])))

        # Outer loop over eigenvalue index
        it: int = 0
        while n >= low:
            # Look for single small sub-diagonal element
            l: int = n  # noqa: E741
            while l > low:
                s = abs(H[l - 1, l - 1]) + abs(H[l, l])
                if s == 0.0:
                    s = norm
                if abs(H[l, l - 1]) < eps * s:
                    break
                l -= 1  # noqa: E741

            # Check for convergence
            if l == n:
                # One root found
                H[n, n] = H[n, n] + exshift
                d[n] = H[n, n]
                e[n] = 0.0
                n -= 1
                it = 0

            elif l == n - 1:
                # Two roots found
                w = H[n, n - 1] * H[n - 1, n]
                p = (H[n - 1, n - 1] - H[n, n]) / 2.0
                q = p * p + w
                z = math.sqrt(abs(q))
                H[n, n] = H[n, n] + exshift
                H[n - 1, n - 1] = H[n - 1, n - 1] + exshift
                x = H[n, n]

                if q >= 0:
                    # Real pair
                    z = p + z if p >= 0 else p - z
                    d[n - 1] = x + z
                    d[n] = d[n - 1]
                    if z != 0.0:
                        d[n] = x - w / z
                    e[n - 1] = 0.0
                    e[n] = 0.0
                    x = H[n, n - 1]
                    s = abs(x) + abs(z)
                    p = x / s
                    q = z / s
                    r = math.sqrt(p * p + q * q)
                    p /= r
                    q /= r

                    # Row modification
                    row1: NDArray[np.float64] = H[n - 1, n - 1 :].copy()
                    H[n - 1, n - 1 :] = q * row1 + p * H[n, n - 1 :]
                    H[n, n - 1 :] = q * H[n, n - 1 :] - p * row1

                    # Column modification
                    col1: NDArray[np.float64] = H[: n + 1, n - 1].copy()
                    H[: n + 1, n - 1] = q * col1 + p * H[: n + 1, n]
                    H[: n + 1, n] = q * H[: n + 1, n] - p * col1

                    # Accumulate transformations
                    vcol: NDArray[np.float64] = V[low : high + 1, n - 1].copy()
                    V[low : high + 1, n - 1] = q * vcol + p * V[low : high + 1, n]
                    V[low : high + 1, n] = q * V[low : high + 1, n] - p * vcol
                else:
                    # Complex pair
                    d[n - 1] = x + p
                    d[n] = x + p
                    e[n - 1] = z
                    e[n] = -z
                n -= 2
                it = 0

            else:
                # No convergence yet; form shift
                x = H[n, n]
                y = 0.0
                w = 0.0
                if l < n:
                    y = H[n - 1, n - 1]
                    w = H[n, n - 1] * H[n - 1, n]

                # Wilkinson's original ad hoc shift
                if it == 10:
                    exshift += x
                    for i in range(low, n + 1):
                        H[i, i] -= x
                    s = abs(H[n, n - 1]) + abs(H[n - 1, n - 2])
                    x = y = 0.75 * s
                    w = -0.4375 * s * s

                # MATLAB's new ad hoc shift
                if it == 30:
                    s = (y - x) / 2.0
                    s = s * s + w
                    if s > 0.0:
                        s = math.sqrt(s)
                        if y < x:
                            s = -s
                        s = x - w / ((y - x) / 2.0 + s)
                        for i in range(low, n + 1):
                            H[i, i] -= s
                        exshift += s
                        x = y = w = 0.964

                it += 1
                check.state(it <= MAX_ITERATIONS, "QR iteration converges")

                # Look for two consecutive small sub-diagonal elements
                m: int = n - 2
                while m >= l:
                    z = H[m, m]
                    r = x - z
                    s = y - z
                    p = (r * s - w) / H[m + 1, m] + H[m, m + 1]
                    q = H[m + 1, m + 1] - z - r - s
                    r = H[m + 2, m + 1]
                    s = abs(p) + abs(q) + abs(r)
                    p /= s
                    q /= s
                    r /= s
                    if m == l:
                        break
                    if abs(H[m, m - 1]) * (abs(q) + abs(r)) < eps * (
                        abs(p) * (abs(H[m - 1, m - 1]) + abs(z) + abs(H[m + 1, m + 1]))
                    ):
                        break
                    m -= 1

                for i in range(m + 2, n + 1):
                    H[i, i - 2] = 0.0
                    if i > m + 2:
                        H[i, i - 3] = 0.0

                # Double QR step involving rows l:n and columns m:n
                for k in range(m, n):
                    notlast: bool = k != n - 1
                    if k != m:
                        p = H[k, k - 1]
                        q = H[k + 1, k - 1]
                        r = H[k + 2, k - 1] if notlast else 0.0
                        x = abs(p) + abs(q) + abs(r)
                        if x != 0.0:
                            p /= x
                            q /= x
                            r /= x
                    if x == 0.0:
                        break
                    s = math.sqrt(p * p + q * q + r * r)
                    if p < 0.0:
                        s = -s
                    if s != 0.0:
                        if k != m:
                            H[k, k - 1] = -s * x
                        elif l != m:
                            H[k, k - 1] = -H[k, k - 1]
                        p = p + s
                        x = p / s
                        y = q / s
                        z = r / s
                        q = q / p
                        r = r / p

                        # Row modification
                        for j in range(k, nn):
                            p = H[k, j] + q * H[k + 1, j]
                            if notlast:
                                p = p + r * H[k + 2, j]
                                H[k + 2, j] = H[k + 2, j] - p * z
                            H[k, j] = H[k, j] - p * x
                            H[k + 1, j] = H[k + 1, j] - p * y

                        # Column modification
                        for i in range(min(n, k + 3) + 1):
                            p = x * H[i, k] + y * H[i, k + 1]
                            if notlast:
                                p = p + z * H[i, k + 2]
                                H[i, k + 2] = H[i, k + 2] - p * r
                            H[i, k] = H[i, k] - p
                            H[i, k + 1] = H[i, k + 1] - p * q

                        # Accumulate transformations
                        for i in range(low, high + 1):
                            p = x * V[i, k] + y * V[i, k + 1]
                            if notlast:
                                p = p + z * V[i, k + 2]
                                V[i, k + 2] = V[i, k + 2] - p * r
                            V[i, k] = V[i, k] - p
                            V[i, k + 1] = V[i, k + 1] - p * q

        # Backsubstitute to find vectors of upper triangular form
        if norm == 0.0:
            return

        for n in range(nn - 1, -1, -1):
            p = d[n]
            q = e[n]

            if q == 0.0:
                # Real vector
                l = n  # noqa: E741
                H[n, n] = 1.0
                for i in range(n - 1, -1, -1):
                    w = H[i, i] - p
                    r = float(np.dot(H[i, l : n + 1], H[l : n + 1, n]))
                    if e[i] < 0.0:
                        z = w
                        s = r
                    else:
                        l = i  # noqa: E741
                        if e[i] == 0.0:
                            if w != 0.0:
                                H[i, n] = -r / w
                            else:
                                H[i, n] = -r / (eps * norm)
                        else:
                            # Solve real equations
                            x = H[i, i + 1]
                            y = H[i + 1, i]
                            q = (d[i] - p) * (d[i] - p) + e[i] * e[i]
                            t = (x * s - z * r) / q
                            H[i, n] = t
                            if abs(x) > abs(z):
                                H[i + 1, n] = (-r - w * t) / x
                            else:
                                H[i + 1, n] = (-s - y * t) / z

                        # Overflow control
                        t = abs(H[i, n])
                        if (eps * t) * t > 1.0:
                            H[i : n + 1, n] /= t

            elif q < 0.0:
                # Complex vector
                l = n - 1  # noqa: E741

                # Last vector component imaginary so matrix is triangular
                if abs(H[n, n - 1]) > abs(H[n - 1, n]):
                    H[n - 1, n - 1] = q / H[n, n - 1]
                    H[n - 1, n] = -(H[n, n] - p) / H[n, n - 1]
                else:
                    H[n - 1, n - 1], H[n - 1, n] = self._cdiv(
                        0.0, -H[n - 1, n], H[n - 1, n - 1] - p, q
                    )
                H[n, n - 1] = 0.0
                H[n, n] = 1.0
                for i in range(n - 2, -1, -1):
                    ra: float = float(np.dot(H[i, l : n + 1], H[l : n + 1, n - 1]))
                    sa: float = float(np.dot(H[i, l : n + 1], H[l : n + 1, n]))
                    w = H[i, i] - p
                    if e[i] < 0.0:
                        z = w
                        r = ra
                        s = sa
                    else:
                        l = i  # noqa: E741
                        if e[i] == 0.0:
                            H[i, n - 1], H[i, n] = self._cdiv(-ra, -sa, w, q)
                        else:
                            # Solve complex equations
                            x = H[i, i + 1]
                            y = H[i + 1, i]
                            vr: float = (d[i] - p) * (d[i] - p) + e[i] * e[i] - q * q
                            vi: float = (d[i] - p) * 2.0 * q
                            if vr == 0.0 and vi == 0.0:
                                vr = (
                                    eps
                                    * norm
                                    * (abs(w) + abs(q) + abs(x) + abs(y) + abs(z))
                                )
                            H[i, n - 1], H[i, n] = self._cdiv(
                                x * r - z * ra + q * sa,
                                x * s - z * sa - q * ra,
                                vr,
                                vi,
                            )
                            if abs(x) > (abs(z) + abs(q)):
                                H[i + 1, n - 1] = (
                                    -ra - w * H[i, n - 1] + q * H[i, n]
                                ) / x
                                H[i + 1, n] = (-sa - w * H[i, n] - q * H[i, n - 1]) / x
                            else:
                                H[i + 1, n - 1], H[i + 1, n] = self._cdiv(
                                    -r - y * H[i, n - 1], -s - y * H[i, n], z, q
                                )

                        # Overflow control
                        t = max(abs(H[i, n - 1]), abs(H[i, n]))
                        if (eps * t) * t > 1.0:
                            H[i : n + 1, n - 1] /= t
                            H[i : n + 1, n] /= t

        # Vectors of isolated roots
        for i in range(nn):
            if i < low or i > high:
                V[i, i:] = H[i, i:]

        # Back transformation to get eigenvectors of original matrix
        for j in range(nn - 1, low - 1, -1):
            kmax: int = min(j, high)
            V[low : high + 1, j] = V[low : high + 1, low : kmax + 1] @ H[
                low : kmax + 1, j
            ]
