################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Pure numpy dense matrices and their decompositions."""

from __future__ import annotations

from oasis_linalg.la.check import DMatrixArgumentError
from oasis_linalg.la.check import DMatrixError
from oasis_linalg.la.check import DMatrixStateError
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.la.dmatrix_chd import DMatrixChd
from oasis_linalg.la.dmatrix_evd import DMatrixEvd
from oasis_linalg.la.dmatrix_lud import DMatrixLud
from oasis_linalg.la.dmatrix_qrd import DMatrixQrd
from oasis_linalg.la.dmatrix_svd import DMatrixSvd
from oasis_linalg.la.tridiagonal_matrix import TridiagonalMatrix


__all__ = [
    "DMatrix",
    "DMatrixArgumentError",
    "DMatrixChd",
    "DMatrixError",
    "DMatrixEvd",
    "DMatrixLud",
    "DMatrixQrd",
    "DMatrixStateError",
    "DMatrixSvd",
    "TridiagonalMatrix",
]
