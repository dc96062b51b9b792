################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Cholesky decomposition of a symmetric positive-definite matrix."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix


LOGGER: logging.Logger = logging.getLogger(__name__)


class DMatrixChd:
    """Cholesky decomposition A = L * L' of a square matrix A.

    Responsibility:
        Factor symmetric positive-definite (SPD) matrices and solve systems
        with the factor by forward and backward substitution.

    Determinism and edge cases:
        - Construction never fails for a square matrix. If A is not
          symmetric, or a pivot is not positive, factoring stops and
          is_positive_definite() reports False.
        - Solving and the determinant require an SPD matrix.

    Equations:
        L[j, j] = sqrt(A[j, j] - sum_k L[j, k]^2)
        L[i, j] = (A[i, j] - sum_k L[i, k] L[j, k]) / L[j, j],  i > j
    """

    def __init__(self, a: DMatrix) -> None:
        check.argument(a.is_square(), "A is square")
        n: int = a.n
        aa: NDArray[np.float64] = a.array
        lower: NDArray[np.float64] = np.zeros((n, n), dtype=np.float64)
        spd: bool = a.is_symmetric()

        for j in range(n):
            if not spd:
                break
            for k in range(j):
                acc: float = aa[j, k] - float(np.dot(lower[j, :k], lower[k, :k]))
                lower[j, k] = acc / lower[k, k]
            d: float = aa[j, j] - float(np.dot(lower[j, :j], lower[j, :j]))
            if d <= 0.0 or math.isnan(d):
                spd = False
                break
            lower[j, j] = math.sqrt(d)

        self._n: int = n
        self._l: NDArray[np.float64] = lower
        self._spd: bool = spd

        if not spd:
            LOGGER.debug("Cholesky decomposition: %dx%d matrix is not SPD", n, n)

    def is_positive_definite(self) -> bool:
        """Return True if A is symmetric and positive definite."""
        return self._spd

    def get_l(self) -> DMatrix:
        """Return the lower triangular factor L."""
        return DMatrix.from_array(self._l.copy())

    def det(self) -> float:
        """Return the determinant of A."""
        check.state(self._spd, "A is positive definite")
        d: float = float(np.prod(np.diag(self._l)))
        return d * d

    def solve(self, b: DMatrix) -> DMatrix:
        """Return the solution X of A * X = B for an SPD matrix A."""
        check.argument(b.m == self._n, "A and B have the same number of rows")
        check.state(self._spd, "A is positive definite")

        n: int = self._n
        lower: NDArray[np.float64] = self._l
        x: NDArray[np.float64] = b.get()

        # Solve L * Y = B
        for k in range(n):
            x[k, :] -= lower[k, :k] @ x[:k, :]
            x[k, :] /= lower[k, k]

        # Solve L' * X = Y
        for k in range(n - 1, -1, -1):
            x[k, :] -= lower[k + 1 :, k] @ x[k + 1 :, :]
            x[k, :] /= lower[k, k]

        return DMatrix.from_array(x)
