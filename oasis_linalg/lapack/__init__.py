################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Matrix decompositions delegated to LAPACK through scipy."""

from __future__ import annotations

from oasis_linalg.lapack.lapack_chd import LapackChd
from oasis_linalg.lapack.lapack_evd import LapackEvd
from oasis_linalg.lapack.lapack_info import LapackError
from oasis_linalg.lapack.lapack_info import LapackInfo
from oasis_linalg.lapack.lapack_lud import LapackLud
from oasis_linalg.lapack.lapack_qrd import LapackQrd
from oasis_linalg.lapack.lapack_svd import LapackSvd


__all__ = [
    "LapackChd",
    "LapackError",
    "LapackEvd",
    "LapackInfo",
    "LapackLud",
    "LapackQrd",
    "LapackSvd",
]
