################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for matrix input validation helpers."""

from __future__ import annotations

import numpy as np

from oasis_linalg.math_utils.validation import DBL_EPSILON
from oasis_linalg.math_utils.validation import is_regular


def test_epsilon() -> None:
    assert DBL_EPSILON == np.finfo(np.float64).eps


def test_is_regular() -> None:
    assert is_regular([[1.0, 2.0], [3.0, 4.0]])
    assert is_regular(np.zeros((0, 3)))
    assert not is_regular([[1.0, 2.0], [3.0]])
    assert not is_regular([])
    assert not is_regular([[]])
    assert not is_regular([1.0, 2.0])
    assert not is_regular(np.zeros(3))
