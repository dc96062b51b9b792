################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for backend selection."""

from __future__ import annotations

import pytest

from oasis_linalg.config.linalg_config import LinalgConfig
from oasis_linalg.config.linalg_config import LinalgConfigError
from oasis_linalg.config.linalg_params import LinalgParams
from oasis_linalg.decompositions import DecompositionFactory
from oasis_linalg.la.check import DMatrixStateError
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.la.dmatrix_lud import DMatrixLud
from oasis_linalg.lapack.lapack_lud import LapackLud
from oasis_linalg.lapack.lapack_svd import LapackSvd


def test_default_backend_is_native() -> None:
    factory: DecompositionFactory = DecompositionFactory()
    assert factory.backend == "native"
    assert isinstance(factory.lud(DMatrix.identity(2)), DMatrixLud)


def test_lapack_backend() -> None:
    factory: DecompositionFactory = DecompositionFactory("lapack")
    assert isinstance(factory.lud(DMatrix.identity(2)), LapackLud)
    assert isinstance(factory.svd(DMatrix.identity(2)), LapackSvd)


def test_unknown_backend() -> None:
    with pytest.raises(LinalgConfigError, match="Unknown backend 'blas'"):
        DecompositionFactory("blas")


def test_from_config() -> None:
    config: LinalgConfig = LinalgConfig(
        LinalgParams.from_dict({"backend": {"backend": "lapack"}})
    )
    assert DecompositionFactory.from_config(config).backend == "lapack"


@pytest.mark.parametrize("backend", ["native", "lapack"])
def test_solve_square_and_least_squares(backend: str) -> None:
    """Square systems use LU and tall systems use QR."""
    factory: DecompositionFactory = DecompositionFactory(backend)
    a: DMatrix = DMatrix.random(4, seed=91) + DMatrix.identity(4)
    b: DMatrix = DMatrix.random(4, 1, seed=92)
    assert (a @ factory.solve(a, b)).almost_equals(b)

    tall: DMatrix = DMatrix.random(6, 2, seed=93)
    x: DMatrix = factory.solve(tall, DMatrix.random(6, 1, seed=94))
    assert x.shape == (2, 1)


@pytest.mark.parametrize("backend", ["native", "lapack"])
def test_inverse_and_det(backend: str) -> None:
    factory: DecompositionFactory = DecompositionFactory(backend)
    a: DMatrix = DMatrix.from_array([[4.0, 7.0], [2.0, 6.0]])
    assert (a @ factory.inverse(a)).almost_equals(DMatrix.identity(2))
    assert factory.det(a) == pytest.approx(10.0)


def test_backends_agree() -> None:
    a: DMatrix = DMatrix.random(5, seed=95) + DMatrix.identity(5)
    b: DMatrix = DMatrix.random(5, 2, seed=96)
    native: DMatrix = DecompositionFactory("native").solve(a, b)
    lapack: DMatrix = DecompositionFactory("lapack").solve(a, b)
    assert native.almost_equals(lapack, 1e-10)


def test_wide_system_rejected() -> None:
    with pytest.raises(DMatrixStateError):
        DecompositionFactory().solve(DMatrix(2, 3), DMatrix(2, 1))
