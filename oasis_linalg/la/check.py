################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Precondition and state checks for dense matrix operations."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray


class DMatrixError(Exception):
    """Base class for dense matrix errors."""


class DMatrixArgumentError(DMatrixError, ValueError):
    """Raised when an argument violates a required condition."""


class DMatrixStateError(DMatrixError, RuntimeError):
    """Raised when an operation is undefined for the current state."""


def argument(condition: bool, message: str) -> None:
    """Raise DMatrixArgumentError unless the condition holds."""
    if not condition:
        raise DMatrixArgumentError(f"required condition: {message}")


def state(condition: bool, message: str) -> None:
    """Raise DMatrixStateError unless the condition holds."""
    if not condition:
        raise DMatrixStateError(f"required condition: {message}")


def vector(values: Any, name: str) -> NDArray[np.float64]:
    """Return values as a float64 1D array, raising DMatrixArgumentError."""
    try:
        array: NDArray[np.float64] = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise DMatrixArgumentError(
            f"required condition: {name} is a 1D numeric array"
        ) from exc
    argument(array.ndim == 1, f"{name} is a 1D array")
    return array
