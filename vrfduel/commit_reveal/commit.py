# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
Commitment construction for the duel's commit–reveal.

Definition
----------
C = H( value )

- H is BLAKE2b with a 32-byte digest.
- `value` is the party's 4-byte private contribution for the round.

The commitment is published before either party reveals. Because both
commitments are recorded before any reveal is accepted, neither party can pick
its value after seeing the opponent's.

This module provides a single entrypoint, `commit(...)`, and a hex-friendly
helper `commit_hex(...)`.
"""

from __future__ import annotations

from vrfduel.constants import REVEAL_LEN
from vrfduel.utils.bytes import BytesLike, ensure_len
from vrfduel.utils.hash import blake2_256


def commit(value: BytesLike) -> bytes:
    """
    Compute the commitment C = BLAKE2b-256(value).

    Parameters
    ----------
    value : bytes-like
        The party's private contribution. Must be exactly 4 bytes.

    Returns
    -------
    bytes
        32-byte digest.

    Raises
    ------
    MalformedInput
        If `value` is not bytes-like or has the wrong width.
    """
    v = ensure_len(value, REVEAL_LEN, name="value")
    return blake2_256(v)


def commit_hex(value: BytesLike) -> str:
    """Hex-encoded convenience wrapper for `commit`."""
    return commit(value).hex()


__all__ = [
    "commit",
    "commit_hex",
]
