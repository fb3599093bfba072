"""Generalized Chinese Remainder Theorem Utilities in an Academic Sense.

Reconstructs an integer from its residues modulo a set of moduli that need not be pairwise coprime. Provides the
Extended Euclidean Algorithm, immutable congruence values with their combinators, and DER/PEM persistence of
congruences and observations.

Typical usage example:

    u, v, c = bezout(828342, 423512344114231524)
    cong = reconstruct(19122025, [32, 12, 28, 77, 93, 121, 17, 711])
    cong.verify(19122025)
    combine([(1, 4), (3, 6)], check=True)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from crtutils.euclid import bezout
from crtutils.euclid import describe_bezout
from crtutils.congruence import combine
from crtutils.congruence import Congruence
from crtutils.congruence import IncompatibleModuliError
from crtutils.congruence import InconsistentEvidenceError
from crtutils.congruence import reconstruct
from crtutils.congruence import trace_reconstruct
from crtutils.encoding import export_congruence
from crtutils.encoding import export_observations
from crtutils.encoding import import_congruence
from crtutils.encoding import import_observations

__version__ = "0.0.1"
__all__ = [
    "Congruence",
    "IncompatibleModuliError",
    "InconsistentEvidenceError",
    "bezout",
    "describe_bezout",
    "combine",
    "reconstruct",
    "trace_reconstruct",
    "export_congruence",
    "import_congruence",
    "export_observations",
    "import_observations",
]
