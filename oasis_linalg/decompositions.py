################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Selection between native and LAPACK decompositions."""

from __future__ import annotations

import logging
from typing import Any

from oasis_linalg.config.linalg_config import BACKENDS
from oasis_linalg.config.linalg_config import LinalgConfig
from oasis_linalg.config.linalg_config import LinalgConfigError
from oasis_linalg.la import check
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.la.dmatrix_chd import DMatrixChd
from oasis_linalg.la.dmatrix_evd import DMatrixEvd
from oasis_linalg.la.dmatrix_lud import DMatrixLud
from oasis_linalg.la.dmatrix_qrd import DMatrixQrd
from oasis_linalg.la.dmatrix_svd import DMatrixSvd
from oasis_linalg.lapack.lapack_chd import LapackChd
from oasis_linalg.lapack.lapack_evd import LapackEvd
from oasis_linalg.lapack.lapack_lud import LapackLud
from oasis_linalg.lapack.lapack_qrd import LapackQrd
from oasis_linalg.lapack.lapack_svd import LapackSvd


LOGGER: logging.Logger = logging.getLogger(__name__)


_NATIVE: dict[str, type[Any]] = {
    "lud": DMatrixLud,
    "qrd": DMatrixQrd,
    "chd": DMatrixChd,
    "evd": DMatrixEvd,
    "svd": DMatrixSvd,
}

_LAPACK: dict[str, type[Any]] = {
    "lud": LapackLud,
    "qrd": LapackQrd,
    "chd": LapackChd,
    "evd": LapackEvd,
    "svd": LapackSvd,
}


class DecompositionFactory:
    """Construct decompositions with one backend.

    Both backends expose the same methods, so callers can switch between
    the numpy implementations and LAPACK without other changes.
    """

    def __init__(self, backend: str = "native") -> None:
        if backend not in BACKENDS:
            raise LinalgConfigError(
                f"Unknown backend '{backend}', expected one of "
                f"{', '.join(sorted(BACKENDS))}"
            )
        self._backend: str = backend
        self._classes: dict[str, type[Any]] = (
            _NATIVE if backend == "native" else _LAPACK
        )
        LOGGER.debug("Decomposition backend: %s", backend)

    @classmethod
    def from_config(cls, config: LinalgConfig) -> DecompositionFactory:
        return cls(config.backend())

    @property
    def backend(self) -> str:
        return self._backend

    def lud(self, a: DMatrix) -> DMatrixLud | LapackLud:
        """Return the LU decomposition of A."""
        return self._classes["lud"](a)

    def qrd(self, a: DMatrix) -> DMatrixQrd | LapackQrd:
        """Return the QR decomposition of A."""
        return self._classes["qrd"](a)

    def chd(self, a: DMatrix) -> DMatrixChd | LapackChd:
        """Return the Cholesky decomposition of A."""
        return self._classes["chd"](a)

    def evd(self, a: DMatrix) -> DMatrixEvd | LapackEvd:
        """Return the eigenvalue decomposition of A."""
        return self._classes["evd"](a)

    def svd(self, a: DMatrix) -> DMatrixSvd | LapackSvd:
        """Return the singular value decomposition of A."""
        return self._classes["svd"](a)

    def solve(self, a: DMatrix, b: DMatrix) -> DMatrix:
        """Solve A*X = B by LU if A is square, or least squares by QR.

        Requires m >= n for the m-by-n matrix A.
        """
        check.state(a.m >= a.n, "number of rows is not less than columns")
        if a.m == a.n:
            return self.lud(a).solve(b)
        return self.qrd(a).solve(b)

    def inverse(self, a: DMatrix) -> DMatrix:
        """Return the inverse of A, or the pseudo-inverse when m > n."""
        return self.solve(a, DMatrix.identity(a.m, a.m))

    def det(self, a: DMatrix) -> float:
        """Return the determinant of the square matrix A."""
        return self.lud(a).det()
