################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tridiagonal matrix with a direct solver."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from oasis_linalg.la import check


class TridiagonalMatrix:
    """An n-by-n tridiagonal matrix.

    The matrix is specified by three arrays of length n. Row i has the
    elements a[i], b[i] and c[i] in columns i-1, i and i+1. The first
    element a[0] of the sub-diagonal and the last element c[n-1] of the
    super-diagonal are ignored.

    Arrays given as float64 numpy arrays are referenced, not copied, so
    changes to them change the matrix.
    """

    def __init__(
        self,
        n: int,
        a: Sequence[float] | NDArray[np.float64] | None = None,
        b: Sequence[float] | NDArray[np.float64] | None = None,
        c: Sequence[float] | NDArray[np.float64] | None = None,
    ) -> None:
        check.argument(n >= 0, "n is non-negative")
        self._n: int = n
        self._a: NDArray[np.float64] = self._diagonal(n, a, "a")
        self._b: NDArray[np.float64] = self._diagonal(n, b, "b")
        self._c: NDArray[np.float64] = self._diagonal(n, c, "c")
        self._w: NDArray[np.float64] = np.zeros(n, dtype=np.float64)

    @property
    def n(self) -> int:
        return self._n

    @property
    def a(self) -> NDArray[np.float64]:
        """Sub-diagonal, by reference."""
        return self._a

    @property
    def b(self) -> NDArray[np.float64]:
        """Diagonal, by reference."""
        return self._b

    @property
    def c(self) -> NDArray[np.float64]:
        """Super-diagonal, by reference."""
        return self._c

    def solve(
        self, r: Sequence[float] | NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Return the solution u of A * u = r.

        Gaussian elimination without pivoting; the matrix is assumed to be
        non-singular and the elimination to be stable, as it is for
        diagonally dominant matrices.
        """
        rr: NDArray[np.float64] = check.vector(r, "r")
        check.argument(rr.shape[0] == self._n, "r has length n")

        n: int = self._n
        u: NDArray[np.float64] = np.zeros(n, dtype=np.float64)
        if n == 0:
            return u

        a: NDArray[np.float64] = self._a
        b: NDArray[np.float64] = self._b
        c: NDArray[np.float64] = self._c
        w: NDArray[np.float64] = self._w

        t: float = 1.0 / b[0]
        u[0] = rr[0] * t
        for j in range(1, n):
            w[j] = c[j - 1] * t
            t = 1.0 / (b[j] - a[j] * w[j])
            u[j] = (rr[j] - a[j] * u[j - 1]) * t
        for j in range(n - 1, 0, -1):
            u[j - 1] -= w[j] * u[j]

        return u

    def times(self, x: Sequence[float] | NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the product y = A * x."""
        xx: NDArray[np.float64] = check.vector(x, "x")
        check.argument(xx.shape[0] == self._n, "x has length n")

        n: int = self._n
        if n == 0:
            return np.zeros(0, dtype=np.float64)

        y: NDArray[np.float64] = self._b * xx
        y[1:] += self._a[1:] * xx[:-1]
        y[:-1] += self._c[:-1] * xx[1:]
        return y

    def to_dense(self) -> NDArray[np.float64]:
        """Return the full n-by-n array."""
        n: int = self._n
        dense: NDArray[np.float64] = np.diag(self._b)
        if n > 1:
            dense[np.arange(1, n), np.arange(n - 1)] = self._a[1:]
            dense[np.arange(n - 1), np.arange(1, n)] = self._c[:-1]
        return dense

    @staticmethod
    def _diagonal(
        n: int, values: Sequence[float] | NDArray[np.float64] | None, name: str
    ) -> NDArray[np.float64]:
        if values is None:
            return np.zeros(n, dtype=np.float64)
        array: NDArray[np.float64] = check.vector(values, name)
        check.argument(array.shape[0] == n, f"{name} has length n")
        return array
