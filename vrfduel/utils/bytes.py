# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
vrfduel.utils.bytes
===================

Small utilities for working with hex/bytes plus strict **width guards** for
the fixed-size values exchanged in a round.

Highlights
----------
- :func:`to_hex` / :func:`from_hex` with strict validation.
- :func:`as_bytes` to normalize bytes-like values.
- :func:`ensure_len` width guard raising :class:`~vrfduel.errors.MalformedInput`.
- :func:`u32_le` / :func:`u64_le` fixed-width little-endian codecs.
- :func:`consteq` timing-safe equality (hmac.compare_digest).

Every guard raises before any protocol state is touched, so a malformed
value never reaches a commitment, seed or ledger.
"""

from __future__ import annotations

import hmac
import re
from typing import Union

from vrfduel.errors import MalformedInput

BytesLike = Union[bytes, bytearray, memoryview]

__all__ = [
    "BytesLike",
    "to_hex",
    "from_hex",
    "is_hex",
    "as_bytes",
    "ensure_len",
    "u32_le",
    "u64_le",
    "from_le",
    "consteq",
]

# -----------------
# Hex <-> Bytes I/O
# -----------------

_HEX_RE = re.compile(r"^(?:0x)?[0-9a-fA-F]*$")


def is_hex(s: str) -> bool:
    """
    Return True if *s* is a valid hex string with an optional ``0x`` prefix
    and an even number of nibbles.
    """
    if not isinstance(s, str):
        return False
    if not _HEX_RE.match(s):
        return False
    body = s[2:] if s.startswith(("0x", "0X")) else s
    return len(body) % 2 == 0


def from_hex(s: str, *, name: str = "value") -> bytes:
    """Convert a hex string (with optional ``0x``) to bytes."""
    if not isinstance(s, str):
        raise MalformedInput(name, "expected a hex str")
    if not is_hex(s):
        raise MalformedInput(name, "invalid hex string")
    body = s[2:] if s.startswith(("0x", "0X")) else s
    return bytes.fromhex(body)


def to_hex(b: BytesLike, *, prefix: str = "0x") -> str:
    """Encode bytes as lowercase hex. By default returns with ``0x`` prefix."""
    return (prefix or "") + as_bytes(b).hex()


# --------------
# Bytes utilities
# --------------


def as_bytes(x: BytesLike, *, name: str = "value") -> bytes:
    """Normalize bytes-like to immutable :class:`bytes`."""
    if isinstance(x, bytes):
        return x
    if isinstance(x, (bytearray, memoryview)):
        return bytes(x)
    raise MalformedInput(name, f"expected bytes-like, got {type(x).__name__}")


def ensure_len(b: BytesLike, expected: int, *, name: str = "value") -> bytes:
    """Ensure ``len(b) == expected``. Returns bytes on success."""
    bb = as_bytes(b, name=name)
    if len(bb) != expected:
        raise MalformedInput(name, f"must be {expected} bytes, got {len(bb)}")
    return bb


# -----------------------
# Little-endian integers
# -----------------------


def u32_le(n: int) -> bytes:
    """Encode a non-negative int as a 4-byte little-endian value."""
    return n.to_bytes(4, "little", signed=False)


def u64_le(n: int) -> bytes:
    """Encode a non-negative int as an 8-byte little-endian value."""
    return n.to_bytes(8, "little", signed=False)


def from_le(b: BytesLike) -> int:
    """Decode an unsigned little-endian integer of any width."""
    return int.from_bytes(as_bytes(b), "little", signed=False)


# ---------------
# Constant-time eq
# ---------------


def consteq(a: BytesLike, b: BytesLike) -> bool:
    """Timing-safe equality for two bytes-like values."""
    return hmac.compare_digest(as_bytes(a), as_bytes(b))
