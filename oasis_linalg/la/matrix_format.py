################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Text layout of dense matrices.

Elements are first printed with a fixed number of significant digits and
trimmed of trailing zeros. The widest trimmed element then determines a
single fixed or exponential format shared by every element, so columns line
up. Rows longer than the line width wrap onto continuation lines, and the
number of elements per line is rounded down to a multiple of the column
group size when possible.

Example for a 2x2 matrix:

    [[ 1.0, -2.5],
     [ 0.0,  3.0]]
"""

from __future__ import annotations

import os

import numpy as np
from numpy.typing import NDArray


# Significant digits used for the first formatting pass
SIGNIFICANT_DIGITS: int = 6
# Maximum characters per printed line
LINE_WIDTH: int = 77
# Elements per line are rounded to a multiple of this group size
COLUMN_GROUP: int = 5


def format_matrix(
    a: NDArray[np.float64],
    *,
    significant_digits: int = SIGNIFICANT_DIGITS,
    line_width: int = LINE_WIDTH,
    column_group: int = COLUMN_GROUP,
) -> str:
    """Return the bracketed text layout of a 2D array."""
    ls: str = os.linesep
    m: int = a.shape[0]
    n: int = a.shape[1]
    s: list[list[str]] = format_elements(a, significant_digits)
    width: int = max(len(x) for row in s for x in row)
    ncol: int = max(1, line_width // (width + 2))
    if ncol >= column_group:
        ncol = (ncol // column_group) * column_group

    parts: list[str] = ["[["]
    nrow: int = 1 + (n - 1) // ncol
    for i in range(m):
        if i > 0:
            parts.append(" [")
        j: int = 0
        for _ in range(nrow):
            icol: int = 0
            while icol < ncol and j < n:
                parts.append(s[i][j].rjust(width))
                if j < n - 1:
                    parts.append(", ")
                icol += 1
                j += 1
            if j < n:
                parts.append(ls)
                parts.append("  ")
            elif i < m - 1:
                parts.append("],")
                parts.append(ls)
            else:
                parts.append("]]")
                parts.append(ls)
    return "".join(parts)


def format_elements(
    a: NDArray[np.float64],
    significant_digits: int = SIGNIFICANT_DIGITS,
) -> list[list[str]]:
    """Format every element with one shared fixed or exponential format."""
    pg: int = significant_digits
    pemax: int = -1
    pfmax: int = -1
    for value in a.flat:
        s: str = _clean(f"{float(value): .{pg}g}")
        ls: int = len(s)
        if "e" in s:
            pe: int = ls - 7 if ls > 7 else 0
            pemax = max(pemax, pe)
        else:
            ip: int = s.find(".")
            pf: int = ls - 1 - ip if ip >= 0 else 0
            pfmax = max(pfmax, pf)

    fmt: str
    if pemax >= 0:
        pfmax = min(pfmax, pg - 1)
        fmt = f" .{max(pemax, pfmax)}e"
    else:
        fmt = f" .{pfmax}f"
    return [[format(float(value), fmt) for value in row] for row in a]


def _clean(s: str) -> str:
    """Strip trailing zeros (and a bare decimal point) from the mantissa."""
    iend: int = s.find("e")
    if iend < 0:
        iend = s.find("E")
    if iend < 0:
        iend = len(s)
    ibeg: int = iend
    if s.find(".") > 0:
        while ibeg > 0 and s[ibeg - 1] == "0":
            ibeg -= 1
        if ibeg > 0 and s[ibeg - 1] == ".":
            ibeg -= 1
    if ibeg < iend:
        s = s[:ibeg] + s[iend:]
    return s
