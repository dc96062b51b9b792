################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Matrix snapshot files and configuration loading."""

from __future__ import annotations

from oasis_linalg.storage.matrix_yaml import MatrixYaml
from oasis_linalg.storage.matrix_yaml import MatrixYamlError
from oasis_linalg.storage.persistence import MatrixPersistenceError
from oasis_linalg.storage.persistence import load_matrix
from oasis_linalg.storage.persistence import load_params
from oasis_linalg.storage.persistence import save_matrix


__all__ = [
    "MatrixPersistenceError",
    "MatrixYaml",
    "MatrixYamlError",
    "load_matrix",
    "load_params",
    "save_matrix",
]
