################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""LU decomposition with partial pivoting."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix


LOGGER: logging.Logger = logging.getLogger(__name__)


class DMatrixLud:
    """LU decomposition (with pivoting) of an m-by-n matrix A.

    Responsibility:
        Factor A(piv, :) = L * U with a left-looking, dot-product
        Crout/Doolittle algorithm and solve square systems with the factors.

    Inputs/outputs:
        - L is m-by-min(m, n), unit lower triangular or trapezoidal.
        - U is min(m, n)-by-n, upper triangular or trapezoidal.
        - piv holds zero-based row indices, so row i of L * U is row piv[i]
          of A.

    Determinism and edge cases:
        - The decomposition always exists, even for singular A.
        - Solving fails with a state error when A is singular.
        - The determinant requires a square matrix.

    Adapted from the public-domain Jama package.
    """

    def __init__(self, a: DMatrix) -> None:
        m: int = a.m
        n: int = a.n
        lu: NDArray[np.float64] = a.get()
        piv: NDArray[np.int_] = np.arange(m)
        pivsign: float = 1.0

        for j in range(n):
            # Copy the j'th column to reduce cost in the inner dot product
            lucolj: NDArray[np.float64] = lu[:, j].copy()

            # Apply previous transformations
            for i in range(m):
                kmax: int = min(i, j)
                s: float = float(np.dot(lu[i, :kmax], lucolj[:kmax]))
                lucolj[i] -= s
                lu[i, j] = lucolj[i]

            # Find pivot and exchange if necessary
            p: int = j
            for i in range(j + 1, m):
                if abs(lucolj[i]) > abs(lucolj[p]):
                    p = i
            if p != j:
                lu[[p, j], :] = lu[[j, p], :]
                piv[[p, j]] = piv[[j, p]]
                pivsign = -pivsign

            # Compute multipliers
            if j < m and lu[j, j] != 0.0:
                lu[j + 1 :, j] /= lu[j, j]

        self._m: int = m
        self._n: int = n
        self._lu: NDArray[np.float64] = lu
        self._piv: NDArray[np.int_] = piv
        self._pivsign: float = pivsign

        if self.is_singular():
            LOGGER.debug("LU decomposition of %dx%d matrix is singular", m, n)

    def is_nonsingular(self) -> bool:
        """Return True if no diagonal element of U is zero."""
        k: int = min(self._m, self._n)
        return bool(np.all(np.diag(self._lu)[:k] != 0.0))

    def is_singular(self) -> bool:
        return not self.is_nonsingular()

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
        """Return the solution X of A * X = B.

        B must have the same number of rows as A and may have any number of
        columns. A must be square and non-singular.
        """
        check.argument(self._m == self._n, "A is square")
        check.argument(b.m == self._m, "A and B have the same number of rows")
        check.state(self.is_nonsingular(), "A is non-singular")

        n: int = self._n
        lu: NDArray[np.float64] = self._lu

        # Copy of right-hand side with pivoting
        x: NDArray[np.float64] = b.array[self._piv, :].copy()

        # Solve L * Y = B(piv, :)
        for k in range(n):
            x[k + 1 : n, :] -= np.outer(lu[k + 1 : n, k], x[k, :])

        # Solve U * X = Y
        for k in range(n - 1, -1, -1):
            x[k, :] /= lu[k, k]
            x[:k, :] -= np.outer(lu[:k, k], x[k, :])

        return DMatrix.from_array(x)
