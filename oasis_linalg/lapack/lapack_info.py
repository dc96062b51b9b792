################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Status codes returned by LAPACK routines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from typing import Callable

from oasis_linalg.la.check import DMatrixArgumentError
from oasis_linalg.la.check import DMatrixError


LOGGER: logging.Logger = logging.getLogger(__name__)


class LapackError(DMatrixError):
    """Raised when a LAPACK routine reports a failure it cannot recover from."""


@dataclass(frozen=True)
class LapackInfo:
    """The INFO result of one LAPACK call.

    Attributes:
        routine: LAPACK routine name, such as "dgetrf"
        info: Zero on success, -k if argument k had an illegal value, and a
            routine-specific positive code otherwise
    """

    routine: str
    info: int

    @classmethod
    def check(cls, routine: str, info: Any) -> LapackInfo:
        """Return the status of a call, raising on an illegal argument.

        Positive codes are returned to the caller, which decides whether
        they are an error (no convergence) or a property of the input
        (a singular factor, a matrix that is not positive definite).
        """
        code: int = int(info)
        if code < 0:
            raise DMatrixArgumentError(
                f"{routine}: illegal value for argument number {-code}"
            )
        return cls(routine=routine, info=code)

    @property
    def ok(self) -> bool:
        """True if the routine completed without a positive code."""
        return self.info == 0

    def require_ok(self, message: str) -> None:
        """Raise LapackError with the message unless the code is zero."""
        if self.info != 0:
            raise LapackError(f"{self.routine}: {message} (info={self.info})")


def query_lwork(routine: Callable[..., Any], name: str, *args: Any) -> int:
    """Return the optimal workspace size of a LAPACK routine.

    The routine is called with lwork=-1, in which case LAPACK performs no
    computation and returns the optimal size in work[0]. The work array is
    the second-to-last element of the result tuple.
    """
    result: tuple[Any, ...] = routine(*args, lwork=-1)
    LapackInfo.check(f"{name} workspace query", result[-1])
    lwork: int = max(1, int(result[-2][0].real))
    LOGGER.debug("%s: optimal workspace size %d", name, lwork)
    return lwork
