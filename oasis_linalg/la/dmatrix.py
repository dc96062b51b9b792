################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Double-precision dense matrix."""

from __future__ import annotations

import numbers
from typing import TYPE_CHECKING
from typing import Any
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from oasis_linalg.la import check
from oasis_linalg.la.matrix_format import COLUMN_GROUP
from oasis_linalg.la.matrix_format import LINE_WIDTH
from oasis_linalg.la.matrix_format import SIGNIFICANT_DIGITS
from oasis_linalg.la.matrix_format import format_matrix
from oasis_linalg.math_utils.validation import is_regular


if TYPE_CHECKING:
    from oasis_linalg.la.dmatrix_chd import DMatrixChd
    from oasis_linalg.la.dmatrix_evd import DMatrixEvd
    from oasis_linalg.la.dmatrix_lud import DMatrixLud
    from oasis_linalg.la.dmatrix_qrd import DMatrixQrd
    from oasis_linalg.la.dmatrix_svd import DMatrixSvd


# Relative tolerance for fuzzy comparisons, scaled by the larger Frobenius norm
FUZZY_TOLERANCE: float = 1e-6

Indices = Sequence[int] | NDArray[np.int_] | None


class DMatrix:
    """A double-precision matrix.

    Elements are stored in a 2D float64 array a of shape (m, n), such that
    a[i, j] is the element in the i'th row and j'th column. The array is held
    by reference: from_array() and the array property do not copy.

    Ranges passed to the get and set methods are inclusive, so
    get_range(i0, i1, j0, j1) returns rows i0..i1 and columns j0..j1. Index
    sequences select arbitrary rows or columns; None selects all of them.

    Adapted from the public-domain Jama package developed by The MathWorks
    and the National Institute of Standards and Technology.
    """

    def __init__(self, m: int, n: int, v: float = 0.0) -> None:
        """Construct an m-by-n matrix filled with the value v."""
        check.argument(m >= 0 and n >= 0, "m >= 0 and n >= 0")
        self._a: NDArray[np.float64] = np.full((m, n), float(v), dtype=np.float64)

    ############################################################################
    # Construction
    ############################################################################

    @classmethod
    def from_array(cls, a: Any) -> DMatrix:
        """Construct a matrix that references the specified regular array.

        A float64 numpy array is referenced, not copied. Other array-like
        input is converted to a new float64 array.
        """
        check.argument(is_regular(a), "array a is regular")
        if isinstance(a, np.ndarray) and a.dtype == np.float64:
            return cls._wrap(a)
        return cls._wrap(np.asarray(a, dtype=np.float64))

    @classmethod
    def copy_of(cls, a: DMatrix) -> DMatrix:
        """Construct a deep copy of the specified matrix."""
        return cls._wrap(a._a.copy())

    @classmethod
    def _wrap(cls, a: NDArray[np.float64]) -> DMatrix:
        """Construct a matrix around an array without checking arguments."""
        x: DMatrix = cls.__new__(cls)
        x._a = a
        return x

    @staticmethod
    def random(m: int, n: int | None = None, seed: int | None = None) -> DMatrix:
        """Return a matrix with elements uniformly distributed in [0, 1)."""
        cols: int = m if n is None else n
        check.argument(m >= 0 and cols >= 0, "m >= 0 and n >= 0")
        rng: np.random.Generator = np.random.default_rng(seed)
        return DMatrix._wrap(rng.random((m, cols)))

    @staticmethod
    def identity(m: int, n: int | None = None) -> DMatrix:
        """Return a matrix with ones on the diagonal and zeros elsewhere."""
        cols: int = m if n is None else n
        check.argument(m >= 0 and cols >= 0, "m >= 0 and n >= 0")
        return DMatrix._wrap(np.eye(m, cols, dtype=np.float64))

    @staticmethod
    def diagonal(d: Sequence[float] | NDArray[np.float64]) -> DMatrix:
        """Return a square matrix with the specified diagonal elements."""
        values: NDArray[np.float64] = check.vector(d, "d")
        return DMatrix._wrap(np.diag(values))

    def copy(self) -> DMatrix:
        """Return a deep copy of this matrix."""
        return DMatrix.copy_of(self)

    ############################################################################
    # Shape
    ############################################################################

    @property
    def m(self) -> int:
        """Number of rows."""
        return int(self._a.shape[0])

    @property
    def n(self) -> int:
        """Number of columns."""
        return int(self._a.shape[1])

    @property
    def row_count(self) -> int:
        return self.m

    @property
    def column_count(self) -> int:
        return self.n

    @property
    def shape(self) -> tuple[int, int]:
        return (self.m, self.n)

    @property
    def array(self) -> NDArray[np.float64]:
        """The array in which elements are stored; by reference, not by copy."""
        return self._a

    def is_square(self) -> bool:
        return self.m == self.n

    def is_symmetric(self) -> bool:
        """Return True if this matrix is square and exactly symmetric."""
        if not self.is_square():
            return False
        return bool(np.array_equal(self._a, self._a.T))

    ############################################################################
    # Get
    ############################################################################

    def get(self) -> NDArray[np.float64]:
        """Return a copy of all elements."""
        return self._a.copy()

    def get_element(self, i: int, j: int) -> float:
        self._check_row(i)
        self._check_column(j)
        return float(self._a[i, j])

    def get_range(self, i0: int, i1: int, j0: int, j1: int) -> DMatrix:
        """Return the submatrix of rows i0..i1 and columns j0..j1."""
        self._check_rows(i0, i1)
        self._check_columns(j0, j1)
        return DMatrix._wrap(self._a[i0 : i1 + 1, j0 : j1 + 1].copy())

    def get_rows_columns(self, r: Indices, c: Indices) -> DMatrix:
        """Return the matrix of the specified rows and columns."""
        rows: NDArray[np.int_] = self._row_indices(r)
        cols: NDArray[np.int_] = self._column_indices(c)
        return DMatrix._wrap(self._a[np.ix_(rows, cols)])

    def get_row(self, i: int, c: Indices) -> DMatrix:
        """Return the one-row matrix of row i and the specified columns."""
        return self.get_rows(i, i, c)

    def get_column(self, r: Indices, j: int) -> DMatrix:
        """Return the one-column matrix of the specified rows and column j."""
        return self.get_columns(r, j, j)

    def get_rows(self, i0: int, i1: int, c: Indices) -> DMatrix:
        """Return rows i0..i1 restricted to the specified columns."""
        self._check_rows(i0, i1)
        if c is None:
            return self.get_range(i0, i1, 0, self.n - 1)
        cols: NDArray[np.int_] = self._column_indices(c)
        return DMatrix._wrap(self._a[i0 : i1 + 1][:, cols])

    def get_columns(self, r: Indices, j0: int, j1: int) -> DMatrix:
        """Return columns j0..j1 restricted to the specified rows."""
        self._check_columns(j0, j1)
        if r is None:
            return self.get_range(0, self.m - 1, j0, j1)
        rows: NDArray[np.int_] = self._row_indices(r)
        return DMatrix._wrap(self._a[rows][:, j0 : j1 + 1])

    def get_packed_columns(self) -> NDArray[np.float64]:
        """Return the elements packed by columns (column-major order)."""
        return self._a.flatten(order="F")

    def get_packed_rows(self) -> NDArray[np.float64]:
        """Return the elements packed by rows (row-major order)."""
        return self._a.flatten(order="C")

    ############################################################################
    # Set
    ############################################################################

    def set_all(self, a: Any) -> None:
        """Copy all elements from the specified array into this matrix."""
        values: NDArray[np.float64] = np.asarray(a, dtype=np.float64)
        check.argument(values.shape == self.shape, f"array has shape {self.shape}")
        self._a[:, :] = values

    def set_element(self, i: int, j: int, v: float) -> None:
        self._check_row(i)
        self._check_column(j)
        self._a[i, j] = v

    def set_range(self, i0: int, i1: int, j0: int, j1: int, x: DMatrix) -> None:
        """Set rows i0..i1 and columns j0..j1 from the matrix x."""
        self._check_rows(i0, i1)
        self._check_columns(j0, j1)
        check.argument(i1 - i0 + 1 == x.m, "i1-i0+1 equals number of rows in x")
        check.argument(j1 - j0 + 1 == x.n, "j1-j0+1 equals number of columns in x")
        self._a[i0 : i1 + 1, j0 : j1 + 1] = x._a

    def set_rows_columns(self, r: Indices, c: Indices, x: DMatrix) -> None:
        """Set the specified rows and columns from the matrix x."""
        rows: NDArray[np.int_] = self._row_indices(r)
        cols: NDArray[np.int_] = self._column_indices(c)
        if r is None:
            check.argument(self.m == x.m, "number of rows equal in this and x")
        else:
            check.argument(len(rows) == x.m, "len(r) equals number of rows in x")
        if c is None:
            check.argument(self.n == x.n, "number of columns equal in this and x")
        else:
            check.argument(len(cols) == x.n, "len(c) equals number of columns in x")
        self._a[np.ix_(rows, cols)] = x._a

    def set_row(self, i: int, c: Indices, x: DMatrix) -> None:
        """Set row i restricted to the specified columns."""
        self.set_rows(i, i, c, x)

    def set_column(self, r: Indices, j: int, x: DMatrix) -> None:
        """Set column j restricted to the specified rows."""
        self.set_columns(r, j, j, x)

    def set_rows(self, i0: int, i1: int, c: Indices, x: DMatrix) -> None:
        """Set rows i0..i1 restricted to the specified columns."""
        self._check_rows(i0, i1)
        check.argument(i1 - i0 + 1 == x.m, "i1-i0+1 equals number of rows in x")
        if c is None:
            self.set_range(i0, i1, 0, self.n - 1, x)
            return
        cols: NDArray[np.int_] = self._column_indices(c)
        check.argument(len(cols) == x.n, "len(c) equals number of columns in x")
        self._a[np.ix_(np.arange(i0, i1 + 1), cols)] = x._a

    def set_columns(self, r: Indices, j0: int, j1: int, x: DMatrix) -> None:
        """Set columns j0..j1 restricted to the specified rows."""
        self._check_columns(j0, j1)
        check.argument(j1 - j0 + 1 == x.n, "j1-j0+1 equals number of columns in x")
        if r is None:
            self.set_range(0, self.m - 1, j0, j1, x)
            return
        rows: NDArray[np.int_] = self._row_indices(r)
        check.argument(len(rows) == x.m, "len(r) equals number of rows in x")
        self._a[np.ix_(rows, np.arange(j0, j1 + 1))] = x._a

    def set_packed_columns(self, c: Sequence[float] | NDArray[np.float64]) -> None:
        """Set the elements from an array packed by columns."""
        values: NDArray[np.float64] = check.vector(c, "c")
        check.argument(values.size >= self.m * self.n, "len(c) >= m*n")
        self._a[:, :] = values[: self.m * self.n].reshape((self.n, self.m)).T

    def set_packed_rows(self, r: Sequence[float] | NDArray[np.float64]) -> None:
        """Set the elements from an array packed by rows."""
        values: NDArray[np.float64] = check.vector(r, "r")
        check.argument(values.size >= self.m * self.n, "len(r) >= m*n")
        self._a[:, :] = values[: self.m * self.n].reshape((self.m, self.n))

    ############################################################################
    # Norms and scalar properties
    ############################################################################

    def norm1(self) -> float:
        """Return the one-norm (maximum column sum)."""
        if self._a.size == 0:
            return 0.0
        return float(np.max(np.sum(np.abs(self._a), axis=0)))

    def norm2(self) -> float:
        """Return the two-norm (maximum singular value)."""
        return self.svd().norm2()

    def norm_i(self) -> float:
        """Return the infinity-norm (maximum row sum)."""
        if self._a.size == 0:
            return 0.0
        return float(np.max(np.sum(np.abs(self._a), axis=1)))

    def norm_f(self) -> float:
        """Return the Frobenius norm, computed without under/overflow."""
        if self._a.size == 0:
            return 0.0
        scale: float = float(np.max(np.abs(self._a)))
        if scale == 0.0 or not np.isfinite(scale):
            return scale
        scaled: NDArray[np.float64] = self._a / scale
        return scale * float(np.sqrt(np.sum(scaled * scaled)))

    def trace(self) -> float:
        """Return the sum of the diagonal elements."""
        return float(np.trace(self._a))

    def det(self) -> float:
        return self.lud().det()

    def cond(self) -> float:
        """Return the two-norm condition number."""
        return self.svd().cond()

    def rank(self) -> int:
        """Return the effective numerical rank."""
        return self.svd().rank()

    ############################################################################
    # Decompositions
    ############################################################################

    def lud(self) -> DMatrixLud:
        from oasis_linalg.la.dmatrix_lud import DMatrixLud

        return DMatrixLud(self)

    def qrd(self) -> DMatrixQrd:
        from oasis_linalg.la.dmatrix_qrd import DMatrixQrd

        return DMatrixQrd(self)

    def chd(self) -> DMatrixChd:
        from oasis_linalg.la.dmatrix_chd import DMatrixChd

        return DMatrixChd(self)

    def evd(self) -> DMatrixEvd:
        from oasis_linalg.la.dmatrix_evd import DMatrixEvd

        return DMatrixEvd(self)

    def svd(self) -> DMatrixSvd:
        from oasis_linalg.la.dmatrix_svd import DMatrixSvd

        return DMatrixSvd(self)

    def solve(self, b: DMatrix) -> DMatrix:
        """Solve A*X = B.

        Requires m >= n for this m-by-n matrix A. A square system is solved
        with the LU decomposition; an overdetermined system gets the
        least-squares solution from the QR decomposition.
        """
        check.state(self.m >= self.n, "number of rows is not less than columns")
        if self.m == self.n:
            return self.lud().solve(b)
        return self.qrd().solve(b)

    def inverse(self) -> DMatrix:
        """Return the inverse, or the pseudo-inverse when m > n."""
        return self.solve(DMatrix.identity(self.m, self.m))

    ############################################################################
    # Arithmetic
    ############################################################################

    def transpose(self) -> DMatrix:
        return DMatrix._wrap(self._a.T.copy())

    def negate(self) -> DMatrix:
        """Return C = -A."""
        return DMatrix._wrap(-self._a)

    def plus(self, b: DMatrix) -> DMatrix:
        """Return C = A + B."""
        self._check_same_shape(b)
        return DMatrix._wrap(self._a + b._a)

    def plus_equals(self, b: DMatrix) -> DMatrix:
        """Return A = A + B."""
        self._check_same_shape(b)
        self._a += b._a
        return self

    def minus(self, b: DMatrix) -> DMatrix:
        """Return C = A - B."""
        self._check_same_shape(b)
        return DMatrix._wrap(self._a - b._a)

    def minus_equals(self, b: DMatrix) -> DMatrix:
        """Return A = A - B."""
        self._check_same_shape(b)
        self._a -= b._a
        return self

    def array_times(self, b: DMatrix) -> DMatrix:
        """Return C = A .* B (element-by-element product)."""
        self._check_same_shape(b)
        return DMatrix._wrap(self._a * b._a)

    def array_times_equals(self, b: DMatrix) -> DMatrix:
        """Return A = A .* B."""
        self._check_same_shape(b)
        self._a *= b._a
        return self

    def array_right_divide(self, b: DMatrix) -> DMatrix:
        """Return C = A ./ B (element-by-element right division)."""
        self._check_same_shape(b)
        return DMatrix._wrap(self._a / b._a)

    def array_right_divide_equals(self, b: DMatrix) -> DMatrix:
        """Return A = A ./ B."""
        self._check_same_shape(b)
        self._a /= b._a
        return self

    def array_left_divide(self, b: DMatrix) -> DMatrix:
        """Return C = A .\\ B (element-by-element left division)."""
        self._check_same_shape(b)
        return DMatrix._wrap(b._a / self._a)

    def array_left_divide_equals(self, b: DMatrix) -> DMatrix:
        """Return A = A .\\ B."""
        self._check_same_shape(b)
        np.divide(b._a, self._a, out=self._a)
        return self

    def times(self, b: DMatrix | float) -> DMatrix:
        """Return C = A * s for a scalar s, or C = A * B for a matrix B."""
        if isinstance(b, DMatrix):
            check.argument(
                self.n == b.m, "number of columns in A equals number of rows in B"
            )
            return DMatrix._wrap(self._a @ b._a)
        return DMatrix._wrap(self._a * float(b))

    def times_equals(self, s: float) -> DMatrix:
        """Return A = A * s."""
        self._a *= float(s)
        return self

    def times_transpose(self, b: DMatrix) -> DMatrix:
        """Return C = A * B'."""
        check.argument(
            self.n == b.n, "number of columns in A equals number of columns in B"
        )
        return DMatrix._wrap(self._a @ b._a.T)

    def transpose_times(self, b: DMatrix) -> DMatrix:
        """Return C = A' * B."""
        check.argument(self.m == b.m, "number of rows in A equals number of rows in B")
        return DMatrix._wrap(self._a.T @ b._a)

    def __add__(self, other: object) -> DMatrix:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: object) -> DMatrix:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self.minus(other)

    def __neg__(self) -> DMatrix:
        return self.negate()

    def __mul__(self, other: object) -> DMatrix:
        if isinstance(other, bool) or not isinstance(other, numbers.Real):
            return NotImplemented
        return self.times(float(other))

    def __rmul__(self, other: object) -> DMatrix:
        return self.__mul__(other)

    def __matmul__(self, other: object) -> DMatrix:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self.times(other)

    ############################################################################
    # Comparison and text
    ############################################################################

    def almost_equals(
        self,
        other: DMatrix,
        tolerance: float = FUZZY_TOLERANCE,
    ) -> bool:
        """Return True if shapes match and elements agree within tolerance.

        The absolute tolerance is the relative tolerance times the larger of
        the two Frobenius norms.
        """
        if self.shape != other.shape:
            return False
        eps: float = tolerance * max(self.norm_f(), other.norm_f())
        return bool(np.all(np.abs(self._a - other._a) <= eps))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._a, other._a))

    def __hash__(self) -> int:
        # Adding 0.0 maps -0.0 to 0.0 so equal matrices hash equally
        return hash((self.m, self.n, (self._a + 0.0).tobytes()))

    def to_string(
        self,
        *,
        significant_digits: int = SIGNIFICANT_DIGITS,
        line_width: int = LINE_WIDTH,
        column_group: int = COLUMN_GROUP,
    ) -> str:
        """Return the bracketed text layout of this matrix."""
        if self._a.size == 0:
            return "[]"
        return format_matrix(
            self._a,
            significant_digits=significant_digits,
            line_width=line_width,
            column_group=column_group,
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"DMatrix(m={self.m}, n={self.n})"

    ############################################################################
    # Index checks
    ############################################################################

    def _check_same_shape(self, b: DMatrix) -> None:
        check.argument(self.shape == b.shape, "A and B have the same dimensions")

    def _check_row(self, i: int) -> None:
        check.argument(0 <= i < self.m, f"row index i={i} is in bounds")

    def _check_column(self, j: int) -> None:
        check.argument(0 <= j < self.n, f"column index j={j} is in bounds")

    def _check_rows(self, i0: int, i1: int) -> None:
        self._check_row(i0)
        self._check_row(i1)
        check.argument(i0 <= i1, "i0<=i1")

    def _check_columns(self, j0: int, j1: int) -> None:
        self._check_column(j0)
        self._check_column(j1)
        check.argument(j0 <= j1, "j0<=j1")

    def _row_indices(self, r: Indices) -> NDArray[np.int_]:
        if r is None:
            return np.arange(self.m)
        rows: NDArray[np.int_] = np.asarray(r, dtype=np.int_).reshape(-1)
        for i in rows:
            self._check_row(int(i))
        return rows

    def _column_indices(self, c: Indices) -> NDArray[np.int_]:
        if c is None:
            return np.arange(self.n)
        cols: NDArray[np.int_] = np.asarray(c, dtype=np.int_).reshape(-1)
        for j in cols:
            self._check_column(int(j))
        return cols
