################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for matrix and parameter persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from oasis_linalg.config.linalg_params import LinalgParams
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.storage.persistence import MatrixPersistenceError
from oasis_linalg.storage.persistence import is_json_path
from oasis_linalg.storage.persistence import is_yaml_path
from oasis_linalg.storage.persistence import load_matrix
from oasis_linalg.storage.persistence import load_params
from oasis_linalg.storage.persistence import save_matrix


def test_path_suffixes() -> None:
    assert is_yaml_path("a.yaml")
    assert is_yaml_path(Path("a.YML"))
    assert not is_yaml_path("a.json")
    assert is_json_path("dir/a.JSON")
    assert not is_json_path("a.txt")


@pytest.mark.parametrize("name", ["m.yaml", "m.yml", "m.json"])
def test_save_and_load(tmp_path: Path, name: str) -> None:
    """Saved matrices load back unchanged and no temporary file remains."""
    matrix: DMatrix = DMatrix.random(3, 2, seed=111)
    path: Path = tmp_path / "out" / name
    save_matrix(path, matrix)

    assert path.exists()
    assert sorted(p.name for p in path.parent.iterdir()) == [name]
    assert load_matrix(path) == matrix


def test_non_atomic_write(tmp_path: Path) -> None:
    path: Path = tmp_path / "m.yaml"
    save_matrix(path, DMatrix.identity(2), atomic_write=False)
    assert load_matrix(str(path)) == DMatrix.identity(2)


def test_overwrite(tmp_path: Path) -> None:
    path: Path = tmp_path / "m.json"
    save_matrix(path, DMatrix(1, 1, 1.0))
    save_matrix(path, DMatrix(1, 1, 2.0))
    assert load_matrix(path).get_element(0, 0) == 2.0


def test_bad_extension(tmp_path: Path) -> None:
    with pytest.raises(MatrixPersistenceError):
        save_matrix(tmp_path / "m.txt", DMatrix.identity(1))
    with pytest.raises(MatrixPersistenceError):
        load_matrix(tmp_path / "m.txt")


def test_load_errors(tmp_path: Path) -> None:
    """Missing files and invalid documents raise MatrixPersistenceError."""
    with pytest.raises(MatrixPersistenceError):
        load_matrix(tmp_path / "missing.yaml")

    path: Path = tmp_path / "bad.yaml"
    path.write_text("rows: 1\ncolumns: 1\n", encoding="utf-8")
    with pytest.raises(MatrixPersistenceError) as excinfo:
        load_matrix(path)
    assert "Missing keys" in str(excinfo.value.__cause__)


def test_load_params(tmp_path: Path) -> None:
    path: Path = tmp_path / "linalg.yaml"
    path.write_text(
        "backend:\n  backend: lapack\nsave:\n  format: json\n", encoding="utf-8"
    )
    params: LinalgParams = load_params(path)
    assert params.backend.backend == "lapack"
    assert params.save.format == "json"
    assert params.format == LinalgParams.defaults().format


def test_load_params_empty_file(tmp_path: Path) -> None:
    path: Path = tmp_path / "linalg.yaml"
    path.write_text("", encoding="utf-8")
    assert load_params(path) == LinalgParams.defaults()


@pytest.mark.parametrize(
    "text",
    [
        "- backend\n",
        "backend: {backend: [\n",
        "plot: {}\n",
        "format: {digits: 3}\n",
    ],
)
def test_load_params_errors(tmp_path: Path, text: str) -> None:
    path: Path = tmp_path / "linalg.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(MatrixPersistenceError):
        load_params(path)


def test_load_params_requires_yaml(tmp_path: Path) -> None:
    with pytest.raises(MatrixPersistenceError):
        load_params(tmp_path / "linalg.json")
