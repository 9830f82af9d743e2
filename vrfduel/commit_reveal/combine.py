# Copyright (c) Animica.
# SPDX-License-Identifier: MIT
"""
Combiner for the two revealed values of a round.

After both reveals are validated against their commitments, the reveal
materials are combined into the round's *shared seed*:

    seed = u64_le( u32_le⁻¹(a) + u32_le⁻¹(b) )

The sum is taken on Python ints and re-encoded in 8 bytes, which holds the
largest possible sum ``2 * (2**32 - 1)`` without truncation.

Properties
----------
- Commutative: ``combine(a, b) == combine(b, a)``.
- Deterministic: both parties derive the same seed from the same reveals.
- Neither party can bias the seed unilaterally as long as it committed before
  seeing the other reveal (enforced by the round state machine).

APIs
----
- combine(a, b) -> bytes
- combine_reveals(reveal_a, reveal_b) -> bytes
- seed_to_int(seed) -> int
"""

from __future__ import annotations

from vrfduel.constants import REVEAL_LEN, SEED_LEN
from vrfduel.types.core import RevealRecord
from vrfduel.utils.bytes import BytesLike, ensure_len, from_le, u64_le


def combine(a: BytesLike, b: BytesLike) -> bytes:
    """
    Derive the shared seed from two 4-byte revealed values.

    Raises
    ------
    MalformedInput if either value is not exactly 4 bytes.
    """
    va = from_le(ensure_len(a, REVEAL_LEN, name="revealed_a"))
    vb = from_le(ensure_len(b, REVEAL_LEN, name="revealed_b"))
    return u64_le(va + vb)


def combine_reveals(reveal_a: RevealRecord, reveal_b: RevealRecord) -> bytes:
    """Record-typed wrapper around `combine`."""
    return combine(reveal_a.value, reveal_b.value)


def seed_to_int(seed: BytesLike) -> int:
    """Decode a shared seed back to the integer sum it encodes."""
    return from_le(ensure_len(seed, SEED_LEN, name="seed"))


__all__ = [
    "combine",
    "combine_reveals",
    "seed_to_int",
]
