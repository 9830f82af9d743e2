# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
Verify that a revealed value matches a prior commitment.

Definition
----------
Given a prior commitment C and a revealed value v, we recompute:

    C' = H(v)

and check C' == C using a constant-time comparison.

This module exposes:
- `verify(...)`             : plain boolean check.
- `verify_reveal(...)`      : raises CommitmentMismatch on mismatch (or returns
                              False with raise_on_fail=False).
- `normalize_commitment(...)`: helper to turn hex/bytes into 32 bytes.
"""

from __future__ import annotations

from typing import Union

from vrfduel.commit_reveal.commit import commit
from vrfduel.constants import HASH_LEN
from vrfduel.errors import CommitmentMismatch
from vrfduel.utils.bytes import BytesLike, consteq, ensure_len, from_hex


def normalize_commitment(commitment: Union[BytesLike, str]) -> bytes:
    """
    Normalize a commitment into 32 raw bytes.

    Accepts:
      - bytes/bytearray/memoryview (must be 32 bytes)
      - hex string with/without 0x prefix (must decode to 32 bytes)
    """
    if isinstance(commitment, str):
        c = from_hex(commitment, name="commitment")
    else:
        c = commitment
    return ensure_len(c, HASH_LEN, name="commitment")


def verify(value: BytesLike, commitment: Union[BytesLike, str]) -> bool:
    """True iff `commit(value) == commitment`."""
    return consteq(commit(value), normalize_commitment(commitment))


def verify_reveal(
    commitment: Union[BytesLike, str],
    value: BytesLike,
    *,
    party: str,
    raise_on_fail: bool = True,
) -> bool:
    """
    Verify a party's reveal against its prior commitment.

    Parameters
    ----------
    commitment : bytes | hex str
        Commitment announced in the commit stage (32 bytes).
    value : bytes-like
        The 4-byte value disclosed in the reveal stage.
    party : str
        Party label, carried in the error for cheating reports.
    raise_on_fail : bool
        If True, raise CommitmentMismatch on mismatch; otherwise return False.

    Raises
    ------
    CommitmentMismatch
        If the recomputed commitment differs (and raise_on_fail=True).
    MalformedInput
        If either input has the wrong type or width.
    """
    c_given = normalize_commitment(commitment)
    c_expected = commit(value)

    if consteq(c_expected, c_given):
        return True

    if raise_on_fail:
        raise CommitmentMismatch(
            party=party,
            expected_commitment_hex=c_given.hex(),
            got_commitment_hex=c_expected.hex(),
        )
    return False


__all__ = [
    "normalize_commitment",
    "verify",
    "verify_reveal",
]
