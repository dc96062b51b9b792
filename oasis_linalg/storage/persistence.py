################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Persistence helpers for matrix snapshots and configuration files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from oasis_linalg.config.linalg_params import LinalgParams
from oasis_linalg.config.linalg_params import LinalgParamsError
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.storage.matrix_yaml import MatrixYaml
from oasis_linalg.storage.matrix_yaml import MatrixYamlError
from oasis_linalg.storage.matrix_yaml import dumps_json
from oasis_linalg.storage.matrix_yaml import dumps_yaml
from oasis_linalg.storage.matrix_yaml import loads_json
from oasis_linalg.storage.matrix_yaml import loads_yaml


LOGGER: logging.Logger = logging.getLogger(__name__)


class MatrixPersistenceError(Exception):
    """Raised when loading or saving matrix or configuration files fails."""


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a YAML extension."""
    suffix: str = Path(os.fspath(path)).suffix.lower()
    return suffix in {".yaml", ".yml"}


def is_json_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a JSON extension."""
    return Path(os.fspath(path)).suffix.lower() == ".json"


def save_matrix(
    path: str | os.PathLike[str],
    matrix: DMatrix,
    *,
    atomic_write: bool = True,
) -> None:
    """Save a matrix to disk as YAML or JSON, chosen by extension."""
    path_obj: Path = Path(os.fspath(path))
    snapshot: MatrixYaml = MatrixYaml.from_matrix(matrix)
    text: str
    if is_yaml_path(path_obj):
        text = dumps_yaml(snapshot)
    elif is_json_path(path_obj):
        text = dumps_json(snapshot)
    else:
        raise MatrixPersistenceError("Path must end with .yaml, .yml or .json")

    try:
        _write_text(path_obj, text, atomic_write=atomic_write)
    except OSError as exc:
        raise MatrixPersistenceError(f"Failed to save matrix to {path_obj}") from exc

    LOGGER.debug("Saved %dx%d matrix to %s", matrix.m, matrix.n, path_obj)


def load_matrix(path: str | os.PathLike[str]) -> DMatrix:
    """Load a matrix from a YAML or JSON file, chosen by extension."""
    path_obj: Path = Path(os.fspath(path))
    if not is_yaml_path(path_obj) and not is_json_path(path_obj):
        raise MatrixPersistenceError("Path must end with .yaml, .yml or .json")

    try:
        text: str = path_obj.read_text(encoding="utf-8")
        snapshot: MatrixYaml = (
            loads_yaml(text) if is_yaml_path(path_obj) else loads_json(text)
        )
    except (OSError, MatrixYamlError) as exc:
        raise MatrixPersistenceError(
            f"Failed to load matrix from {path_obj}"
        ) from exc

    return snapshot.to_matrix()


def load_params(path: str | os.PathLike[str]) -> LinalgParams:
    """Load parameter overrides from a YAML file onto the defaults."""
    path_obj: Path = Path(os.fspath(path))
    if not is_yaml_path(path_obj):
        raise MatrixPersistenceError("Path must end with .yaml or .yml")

    try:
        text: str = path_obj.read_text(encoding="utf-8")
        loaded: Any = yaml.safe_load(text)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise LinalgParamsError("YAML root must be a mapping")
        return LinalgParams.from_dict(loaded)
    except (OSError, yaml.YAMLError, LinalgParamsError, TypeError) as exc:
        raise MatrixPersistenceError(
            f"Failed to load parameters from {path_obj}"
        ) from exc


def _write_text(path: Path, text: str, *, atomic_write: bool) -> None:
    """Write text, through a temporary file and rename when atomic."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not atomic_write:
        path.write_text(text, encoding="utf-8")
        return

    tmp_name: str = f".{path.name}.tmp.{os.getpid()}"
    tmp_path: Path = path.with_name(tmp_name)
    with tmp_path.open("w", encoding="utf-8") as handle:
        handle.write(text)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_path, path)
