# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
vrfduel.commit_reveal
=====================

Commit–reveal subpackage for the duel.

Typical flow (per round):
    1) Each party draws a 4-byte value and publishes `commit(value)`.
    2) Once both commitments are recorded, each party reveals its value and
       the opponent checks it with `verify_reveal(...)`.
    3) The two verified reveals are combined into the shared seed with
       `combine(...)`.

Submodules:
    - commit.py  : commitment construction.
    - verify.py  : reveal verification.
    - combine.py : shared-seed derivation.
"""

from __future__ import annotations

from vrfduel.commit_reveal.combine import combine, combine_reveals, seed_to_int
from vrfduel.commit_reveal.commit import commit, commit_hex
from vrfduel.commit_reveal.verify import (normalize_commitment, verify,
                                          verify_reveal)

__all__ = [
    "commit",
    "commit_hex",
    "verify",
    "verify_reveal",
    "normalize_commitment",
    "combine",
    "combine_reveals",
    "seed_to_int",
]
