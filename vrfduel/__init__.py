"""
vrfduel: a two-party card duel settled by commit-reveal and an Ed25519 VRF.

Each round both parties commit to a 4-byte value, reveal it, combine the two
reveals into a shared seed, sign the seed and map the signature's hash to a
card. The higher card wins the agreed stake. Neither party can steer the seed
alone, and the opponent can check every card against the signer's public key.

Only light, stable exports are surfaced here to avoid import cycles.
"""

from __future__ import annotations

from .version import __version__

__all__ = ["__version__"]
