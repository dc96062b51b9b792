################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Command line entry point for matrix decompositions
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

from oasis_linalg.config.linalg_config import LinalgConfig
from oasis_linalg.config.linalg_config import LinalgConfigError
from oasis_linalg.config.linalg_params import BackendParams
from oasis_linalg.config.linalg_params import LinalgParams
from oasis_linalg.decompositions import DecompositionFactory
from oasis_linalg.la import check
from oasis_linalg.la.check import DMatrixArgumentError
from oasis_linalg.la.check import DMatrixError
from oasis_linalg.la.dmatrix import DMatrix
from oasis_linalg.storage.persistence import MatrixPersistenceError
from oasis_linalg.storage.persistence import load_matrix
from oasis_linalg.storage.persistence import load_params
from oasis_linalg.storage.persistence import save_matrix


LOGGER: logging.Logger = logging.getLogger(__name__)


# Operations selectable on the command line
KINDS: tuple[str, ...] = (
    "lud",
    "qrd",
    "chd",
    "evd",
    "svd",
    "solve",
    "inverse",
    "det",
)


################################################################################
# Operations
################################################################################


def _run(
    kind: str,
    factory: DecompositionFactory,
    a: DMatrix,
    b: Optional[DMatrix],
    tolerance: float,
) -> dict[str, DMatrix]:
    """Compute the requested factors, logging how well they reproduce A."""
    factors: dict[str, DMatrix]

    if kind == "lud":
        lud = factory.lud(a)
        factors = {"L": lud.get_l(), "U": lud.get_u(), "P": lud.get_p()}
        _verify("P*L*U", factors["P"] @ factors["L"] @ factors["U"], a, tolerance)
    elif kind == "qrd":
        qrd = factory.qrd(a)
        factors = {"Q": qrd.get_q(), "R": qrd.get_r()}
        _verify("Q*R", factors["Q"] @ factors["R"], a, tolerance)
    elif kind == "chd":
        chd = factory.chd(a)
        check.state(chd.is_positive_definite(), "A is positive definite")
        factors = {"L": chd.get_l()}
        _verify("L*L'", factors["L"].times_transpose(factors["L"]), a, tolerance)
    elif kind == "evd":
        evd = factory.evd(a)
        factors = {"V": evd.get_v(), "D": evd.get_d()}
        _verify("V*D", factors["V"] @ factors["D"], a @ factors["V"], tolerance)
    elif kind == "svd":
        svd = factory.svd(a)
        factors = {"U": svd.get_u(), "S": svd.get_s(), "V": svd.get_v()}
        _verify(
            "U*S*V'",
            (factors["U"] @ factors["S"]).times_transpose(factors["V"]),
            a,
            tolerance,
        )
        LOGGER.info("rank %d, condition number %g", svd.rank(), svd.cond())
    elif kind == "solve":
        if b is None:
            raise DMatrixArgumentError(
                "required condition: right-hand side B is given"
            )
        factors = {"X": factory.solve(a, b)}
    elif kind == "inverse":
        factors = {"X": factory.inverse(a)}
    else:
        factors = {"det": DMatrix(1, 1, factory.det(a))}

    return factors


def _verify(name: str, actual: DMatrix, expected: DMatrix, tolerance: float) -> None:
    if actual.almost_equals(expected, tolerance):
        LOGGER.info("%s reproduces the input within tolerance %g", name, tolerance)
    else:
        LOGGER.warning("%s differs from the input beyond tolerance %g", name, tolerance)


################################################################################
# Command line entry point
################################################################################


def _parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="oasis_linalg",
        description="Decompose a dense matrix or solve a linear system",
    )
    parser.add_argument("kind", choices=KINDS, help="Operation to perform")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "matrix",
        nargs="?",
        default=None,
        help="Matrix file (.yaml, .yml or .json)",
    )
    source.add_argument(
        "--random",
        nargs=2,
        type=int,
        metavar=("ROWS", "COLUMNS"),
        help="Use a random matrix of the given shape instead of a file",
    )
    parser.add_argument(
        "--backend",
        choices=("native", "lapack"),
        default=None,
        help="Decomposition backend, overriding the configuration",
    )
    parser.add_argument("--rhs", default=None, help="Right-hand side file for solve")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument(
        "--output", default=None, help="Directory in which to save the results"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser.parse_args(args=args)


def main(args: Optional[list[str]] = None) -> int:
    options = _parse_args(args=args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.INFO,
        format="[%(levelname)s] [%(name)s]: %(message)s",
    )

    try:
        params: LinalgParams = (
            load_params(options.config)
            if options.config
            else LinalgParams.defaults()
        )
        if options.backend is not None:
            params = params.replace(backend=BackendParams(backend=options.backend))
        config: LinalgConfig = LinalgConfig(params)
        factory: DecompositionFactory = DecompositionFactory.from_config(config)

        a: DMatrix
        if options.matrix is not None:
            a = load_matrix(options.matrix)
        else:
            rows, columns = options.random
            check.argument(rows > 0 and columns > 0, "random shape is positive")
            a = DMatrix.random(rows, columns, seed=config.random_seed())
        b: Optional[DMatrix] = (
            load_matrix(options.rhs) if options.rhs is not None else None
        )

        LOGGER.info(
            "%s of %dx%d matrix with %s backend",
            options.kind,
            a.m,
            a.n,
            factory.backend,
        )
        factors: dict[str, DMatrix] = _run(
            options.kind, factory, a, b, config.fuzzy_tolerance()
        )

        for name, factor in factors.items():
            print(f"{name} =")
            print(factor.to_string(**config.format_options()).rstrip())

        if options.output is not None:
            directory: Path = Path(options.output)
            for name, factor in factors.items():
                path: Path = directory / f"{options.kind}_{name}{config.save_suffix()}"
                save_matrix(
                    path, factor, atomic_write=config.params.save.atomic_write
                )
                LOGGER.info("Saved %s to %s", name, path)
    except (DMatrixError, LinalgConfigError, MatrixPersistenceError) as exc:
        LOGGER.error("%s", exc)
        return 1

    return 0
