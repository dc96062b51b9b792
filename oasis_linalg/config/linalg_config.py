################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper for dense matrix computations."""

from __future__ import annotations

from dataclasses import dataclass

from .linalg_params import LinalgParams
from .linalg_params import LinalgParamsError


# Decomposition backends
BACKENDS: frozenset[str] = frozenset({"native", "lapack"})
# Matrix file formats
SAVE_FORMATS: frozenset[str] = frozenset({"yaml", "json"})


class LinalgConfigError(Exception):
    """Raised when linear algebra configuration validation fails."""


@dataclass(frozen=True)
class LinalgConfig:
    """Convenience wrapper around linear algebra parameters."""

    params: LinalgParams

    def __init__(self, params: LinalgParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    @classmethod
    def defaults(cls) -> LinalgConfig:
        """Return a configuration of the default parameters."""
        return cls(LinalgParams.defaults())

    def validate(self) -> None:
        """Validate parameter invariants and enumerations."""
        try:
            self.params.validate()
        except LinalgParamsError as exc:
            raise LinalgConfigError(str(exc)) from exc

        if self.params.backend.backend not in BACKENDS:
            raise LinalgConfigError("backend.backend must be 'native' or 'lapack'")

        if self.params.save.format not in SAVE_FORMATS:
            raise LinalgConfigError("save.format must be 'yaml' or 'json'")

    def backend(self) -> str:
        """Return the configured decomposition backend."""
        return self.params.backend.backend

    def fuzzy_tolerance(self) -> float:
        """Return the relative tolerance for fuzzy comparisons."""
        return float(self.params.compare.fuzzy_tolerance)

    def format_options(self) -> dict[str, int]:
        """Return keyword arguments for DMatrix.to_string()."""
        return {
            "significant_digits": self.params.format.significant_digits,
            "line_width": self.params.format.line_width,
            "column_group": self.params.format.column_group,
        }

    def random_seed(self) -> int | None:
        """Return the configured random seed."""
        return self.params.random.seed

    def save_suffix(self) -> str:
        """Return the file extension for saved matrices."""
        return ".yaml" if self.params.save.format == "yaml" else ".json"
