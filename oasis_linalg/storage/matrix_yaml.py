################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML and JSON schema utilities for matrix snapshots.

A snapshot document is a mapping with exactly three keys:

    rows: 2
    columns: 3
    values:
    - [1.0, 2.0, 3.0]
    - [4.0, 5.0, 6.0]
"""

from __future__ import annotations

import json
import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np
import yaml
from numpy.typing import NDArray

from oasis_linalg.la.dmatrix import DMatrix


# Keys of a snapshot document, in output order
SNAPSHOT_KEYS: tuple[str, ...] = ("rows", "columns", "values")


class MatrixYamlError(Exception):
    """Raised when a matrix snapshot document is invalid."""


@dataclass(frozen=True)
class MatrixYaml:
    """A matrix snapshot.

    Attributes:
        rows: Number of rows m
        columns: Number of columns n
        values: m-by-n float64 array of elements
    """

    rows: int
    columns: int
    values: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Coerce the element array and validate its shape."""
        rows: int = _require_non_negative_int(self.rows, "rows")
        columns: int = _require_non_negative_int(self.columns, "columns")
        values: NDArray[np.float64] = _coerce_array(
            self.values, "values", (rows, columns)
        )
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "values", values)

    @classmethod
    def from_matrix(cls, matrix: DMatrix) -> MatrixYaml:
        """Return a snapshot holding a copy of the matrix elements."""
        return cls(rows=matrix.m, columns=matrix.n, values=matrix.get())

    def to_matrix(self) -> DMatrix:
        """Return a new matrix with a copy of the snapshot elements."""
        return DMatrix.from_array(self.values.copy())


def snapshot_to_dict(snapshot: MatrixYaml) -> dict[str, object]:
    """Convert a snapshot to plain Python values."""
    return {
        "rows": snapshot.rows,
        "columns": snapshot.columns,
        "values": [[float(x) for x in row] for row in snapshot.values],
    }


def snapshot_from_dict(data: dict[str, object]) -> MatrixYaml:
    """Parse a snapshot from a dictionary."""
    _require_keys("snapshot", data, set(SNAPSHOT_KEYS))
    rows: int = _require_non_negative_int(data["rows"], "rows")
    columns: int = _require_non_negative_int(data["columns"], "columns")
    values: object = data["values"]
    if not isinstance(values, list):
        raise MatrixYamlError("values must be a list of rows")
    if len(values) != rows:
        raise MatrixYamlError(f"values must have {rows} rows")
    for i, row in enumerate(values):
        if not isinstance(row, list) or len(row) != columns:
            raise MatrixYamlError(f"values[{i}] must be a list of {columns} numbers")
        for j, x in enumerate(row):
            _require_float(x, f"values[{i}][{j}]")
    return MatrixYaml(
        rows=rows,
        columns=columns,
        values=np.asarray(values, dtype=np.float64).reshape((rows, columns)),
    )


def dumps_yaml(snapshot: MatrixYaml) -> str:
    """Serialize a snapshot to deterministic YAML."""
    data: dict[str, object] = snapshot_to_dict(snapshot)
    return yaml.safe_dump(
        data,
        sort_keys=False,
        indent=2,
        default_flow_style=None,
    )


def loads_yaml(text: str) -> MatrixYaml:
    """Parse a snapshot from YAML text."""
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MatrixYamlError("Invalid YAML document") from exc
    if not isinstance(loaded, dict):
        raise MatrixYamlError("YAML root must be a mapping")
    return snapshot_from_dict(loaded)


def dumps_json(snapshot: MatrixYaml) -> str:
    """Serialize a snapshot to deterministic JSON."""
    data: dict[str, object] = snapshot_to_dict(snapshot)
    return json.dumps(data, indent=2) + "\n"


def loads_json(text: str) -> MatrixYaml:
    """Parse a snapshot from JSON text."""
    try:
        loaded: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MatrixYamlError("Invalid JSON document") from exc
    if not isinstance(loaded, dict):
        raise MatrixYamlError("JSON root must be an object")
    return snapshot_from_dict(loaded)


def _require_keys(scope: str, data: dict[str, object], required: set[str]) -> None:
    """Ensure a mapping has exactly the required keys."""
    unknown: set[str] = {key for key in data.keys() if key not in required}
    if unknown:
        raise MatrixYamlError(
            f"Unexpected keys in {scope}: {', '.join(sorted(unknown))}"
        )
    missing: set[str] = {key for key in required if key not in data}
    if missing:
        raise MatrixYamlError(f"Missing keys in {scope}: {', '.join(sorted(missing))}")


def _require_non_negative_int(value: object, name: str) -> int:
    """Ensure the value is a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise MatrixYamlError(f"{name} must be an integer")
    if value < 0:
        raise MatrixYamlError(f"{name} must be non-negative")
    return int(value)


def _require_float(value: object, name: str) -> float:
    """Ensure the value is a float."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MatrixYamlError(f"{name} must be a float")
    return float(value)


def _coerce_array(
    value: object, name: str, shape: tuple[int, ...]
) -> NDArray[np.float64]:
    """Convert an input to a numpy array with the required shape."""
    try:
        array: NDArray[np.float64] = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise MatrixYamlError(f"{name} must be numeric") from exc
    if array.shape != shape:
        raise MatrixYamlError(f"{name} must have shape {shape}")
    return array
