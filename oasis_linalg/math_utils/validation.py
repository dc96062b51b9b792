################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Validation helpers for dense matrix inputs."""

from __future__ import annotations

from typing import Any
from typing import Sequence

import numpy as np


# Machine epsilon for IEEE double precision
DBL_EPSILON: float = 2.0**-52

# Smallest magnitude treated as non-zero by the SVD deflation tests
DBL_TINY: float = 2.0**-966


def is_regular(values: Any) -> bool:
    """Return True when every row of a 2D array-like has the same length.

    A 2D numpy array is always regular, even with zero rows or columns.
    Nested sequences must have at least one element.
    """
    if isinstance(values, np.ndarray):
        return values.ndim == 2
    if not isinstance(values, Sequence) or len(values) == 0:
        return False
    first: Any = values[0]
    if not isinstance(first, Sequence) or len(first) == 0:
        return False
    cols: int = len(first)
    for row in values:
        if not isinstance(row, Sequence) or len(row) != cols:
            return False
    return True

