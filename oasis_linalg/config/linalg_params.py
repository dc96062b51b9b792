################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for dense matrix computations."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any

from oasis_linalg.la.dmatrix import FUZZY_TOLERANCE
from oasis_linalg.la.matrix_format import COLUMN_GROUP
from oasis_linalg.la.matrix_format import LINE_WIDTH
from oasis_linalg.la.matrix_format import SIGNIFICANT_DIGITS


# Decomposition backend identifier
BACKEND: str = "native"

# Relative tolerance for fuzzy matrix comparisons
COMPARE_FUZZY_TOLERANCE: float = FUZZY_TOLERANCE

# Significant digits when printing matrices
FORMAT_SIGNIFICANT_DIGITS: int = SIGNIFICANT_DIGITS
# Maximum characters per printed line
FORMAT_LINE_WIDTH: int = LINE_WIDTH
# Elements per printed line are rounded to a multiple of this
FORMAT_COLUMN_GROUP: int = COLUMN_GROUP

# Seed for random matrices (None draws fresh entropy)
RANDOM_SEED: int | None = None

# Output format for saved matrices
SAVE_FORMAT: str = "yaml"
# Use atomic write for persistence
SAVE_ATOMIC_WRITE: bool = True


class LinalgParamsError(Exception):
    """Raised when linear algebra parameter validation fails."""


def _require_positive(value: float, name: str) -> None:
    """Require a positive value."""
    if value <= 0.0:
        raise LinalgParamsError(f"{name} must be positive")


def _require_positive_int(value: int, name: str) -> None:
    """Require a positive integer value."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise LinalgParamsError(f"{name} must be an int")
    if value <= 0:
        raise LinalgParamsError(f"{name} must be positive")


def _validate_optional_non_negative_int(value: int | None, name: str) -> None:
    """Validate an optional non-negative integer value."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise LinalgParamsError(f"{name} must be an int")
    if value < 0:
        raise LinalgParamsError(f"{name} must be non-negative")


@dataclass(frozen=True)
class BackendParams:
    """Decomposition backend selection."""

    # Backend identifier, "native" or "lapack"
    backend: str = BACKEND


@dataclass(frozen=True)
class CompareParams:
    """Matrix comparison parameters."""

    # Relative tolerance, scaled by the larger Frobenius norm
    fuzzy_tolerance: float = COMPARE_FUZZY_TOLERANCE


@dataclass(frozen=True)
class FormatParams:
    """Text layout parameters."""

    # Significant digits of the first formatting pass
    significant_digits: int = FORMAT_SIGNIFICANT_DIGITS
    # Maximum characters per line
    line_width: int = FORMAT_LINE_WIDTH
    # Column group size for wrapped rows
    column_group: int = FORMAT_COLUMN_GROUP


@dataclass(frozen=True)
class RandomParams:
    """Random matrix generation parameters."""

    # Generator seed
    seed: int | None = RANDOM_SEED


@dataclass(frozen=True)
class SaveParams:
    """Persistence and output file parameters."""

    # Output format name
    format: str = SAVE_FORMAT
    # Use atomic write for persistence
    atomic_write: bool = SAVE_ATOMIC_WRITE


@dataclass(frozen=True)
class LinalgParams:
    """Complete configuration tree for dense matrix computations."""

    backend: BackendParams
    compare: CompareParams
    format: FormatParams
    random: RandomParams
    save: SaveParams

    @classmethod
    def defaults(cls) -> LinalgParams:
        """Return the default parameter tree."""
        return cls(
            backend=BackendParams(),
            compare=CompareParams(),
            format=FormatParams(),
            random=RandomParams(),
            save=SaveParams(),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LinalgParams:
        """Return the defaults overridden by a nested mapping.

        Namespaces and keys absent from the mapping keep their defaults.
        Unknown namespaces or keys raise LinalgParamsError.
        """
        params: LinalgParams = cls.defaults()
        namespaces: dict[str, Any] = {f.name: f for f in fields(cls)}
        overrides: dict[str, Any] = {}
        for name, values in data.items():
            if name not in namespaces:
                raise LinalgParamsError(f"Unknown namespace: {name}")
            if values is None:
                continue
            if not isinstance(values, dict):
                raise LinalgParamsError(f"{name} must be a mapping")
            current: Any = getattr(params, name)
            known: set[str] = {f.name for f in fields(current)}
            unknown: set[str] = set(values) - known
            if unknown:
                raise LinalgParamsError(
                    f"Unexpected keys in {name}: {', '.join(sorted(unknown))}"
                )
            overrides[name] = replace(current, **values)
        return params.replace(**overrides)

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        if not self.backend.backend:
            raise LinalgParamsError("backend.backend must be set")

        tolerance: Any = self.compare.fuzzy_tolerance
        if isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Real):
            raise LinalgParamsError("compare.fuzzy_tolerance must be a float")
        _require_positive(tolerance, "compare.fuzzy_tolerance")

        _require_positive_int(
            self.format.significant_digits, "format.significant_digits"
        )
        _require_positive_int(self.format.line_width, "format.line_width")
        _require_positive_int(self.format.column_group, "format.column_group")

        _validate_optional_non_negative_int(self.random.seed, "random.seed")

        if not self.save.format:
            raise LinalgParamsError("save.format must be set")
        if not isinstance(self.save.atomic_write, bool):
            raise LinalgParamsError("save.atomic_write must be a bool")

    def replace(self, **namespace_overrides: Any) -> LinalgParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for serialization."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value
