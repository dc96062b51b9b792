################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Cholesky decomposition computed by LAPACK dpotrf."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import lapack

from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.lapack.lapack_info import LapackInfo


LOGGER: logging.Logger = logging.getLogger(__name__)


class LapackChd:
    """Cholesky decomposition A = L * L' of a square matrix A.

    Same interface as the native DMatrixChd. dpotrf reads only the lower
    triangle, so exact symmetry is checked separately.
    """

    def __init__(self, a: DMatrix) -> None:
        check.argument(a.is_square(), "A is square")
        n: int = a.n
        spd: bool = a.is_symmetric()
        lower: NDArray[np.float64] = np.zeros((n, n), dtype=np.float64)
        if spd and n > 0:
            c: NDArray[np.float64]
            c, info = lapack.dpotrf(a.array, lower=1, clean=1)
            status: LapackInfo = LapackInfo.check("dpotrf", info)
            if status.ok:
                lower = np.asarray(c, dtype=np.float64)
            else:
                LOGGER.debug(
                    "dpotrf: leading minor of order %d is not positive definite",
                    status.info,
                )
                spd = False

        self._n: int = n
        self._l: NDArray[np.float64] = lower
        self._spd: bool = spd

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
        """Return the solution X of A * X = B using dpotrs."""
        check.argument(b.m == self._n, "A and B have the same number of rows")
        check.state(self._spd, "A is positive definite")

        x: NDArray[np.float64]
        x, info = lapack.dpotrs(self._l, b.array, lower=1)
        LapackInfo.check("dpotrs", info)
        return DMatrix.from_array(np.asarray(x, dtype=np.float64))
