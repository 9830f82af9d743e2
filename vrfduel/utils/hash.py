# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
vrfduel.utils.hash
==================

Thin BLAKE2b helpers used by commitments and VRF output derivation. This
module sticks to Python's stdlib `hashlib`.

Key pieces
----------
- :func:`blake2_256`: one-shot 32-byte BLAKE2b digest, the hash behind
  commitments (``C = blake2_256(reveal)``) and VRF outputs
  (``raw = blake2_256(proof)[0]``).
- :func:`blake2_256_hex`: hex convenience wrapper.

Commitments in this protocol are plain digests of the revealed value with no
domain tag, so they stay compatible with transcripts recorded by other
implementations of the same game.
"""

from __future__ import annotations

from hashlib import blake2b as _blake2b

from vrfduel.constants import HASH_LEN
from vrfduel.errors import MalformedInput

__all__ = [
    "blake2_256",
    "blake2_256_hex",
]


def blake2_256(data: bytes) -> bytes:
    """Return BLAKE2b(data) truncated by parameter to 32 bytes."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise MalformedInput("data", "blake2_256 expects a bytes-like object")
    return _blake2b(bytes(data), digest_size=HASH_LEN).digest()


def blake2_256_hex(data: bytes) -> str:
    return blake2_256(data).hex()
