"""
Duel protocol constants.

This module centralizes:
- Byte widths of the values exchanged in a round (reveal, seed, commitment, proof)
- The card domain and the double-modulo mapping constants
- Default game parameters (kept in sync with config defaults)

Changing any width or modulus makes rounds incompatible with previously
recorded transcripts. Game defaults can be overridden per game through
`vrfduel.config.DuelConfig`.
"""

from __future__ import annotations

from hashlib import blake2b

# -----------------------------
# Wire widths (bytes)
# -----------------------------
# Each party's private contribution is a little-endian u32.
REVEAL_LEN: int = 4
# Sum of two u32 values, re-encoded as a little-endian u64.
SEED_LEN: int = 8
# BLAKE2b-256 digests (commitments, VRF output hashing).
HASH_LEN: int = 32
# Ed25519 signature (VRF proof) and raw public key sizes.
PROOF_LEN: int = 64
PUBKEY_LEN: int = 32
# Ed25519 private seed size used to build identities.
IDENTITY_SEED_LEN: int = 32

# Hash function identifier (documentation aid)
HASH_FN: str = "blake2b-256"

# -----------------------------
# Card domain
# -----------------------------
DECK_SIZE: int = 52
RANKS: int = 13
# Highest card value; bets scale linearly from card 0 (bet 1) to this card (full balance).
MAX_CARD: int = RANKS - 1

# -----------------------------
# Game defaults (mirror config)
# -----------------------------
DEFAULT_STARTING_BALANCE: int = 100
# Randomness-source seeds for the two parties.
DEFAULT_SEED_A: int = 0
DEFAULT_SEED_B: int = 1
# Fixed Ed25519 identity seeds, so the default game is fully reproducible.
DEFAULT_IDENTITY_SEED_A: str = blake2b(b"vrfduel/a", digest_size=IDENTITY_SEED_LEN).hexdigest()
DEFAULT_IDENTITY_SEED_B: str = blake2b(b"vrfduel/b", digest_size=IDENTITY_SEED_LEN).hexdigest()

# Party labels
PARTY_A: str = "a"
PARTY_B: str = "b"
PARTIES: tuple = (PARTY_A, PARTY_B)

__all__ = [
    "REVEAL_LEN",
    "SEED_LEN",
    "HASH_LEN",
    "PROOF_LEN",
    "PUBKEY_LEN",
    "IDENTITY_SEED_LEN",
    "HASH_FN",
    "DECK_SIZE",
    "RANKS",
    "MAX_CARD",
    "DEFAULT_STARTING_BALANCE",
    "DEFAULT_SEED_A",
    "DEFAULT_SEED_B",
    "DEFAULT_IDENTITY_SEED_A",
    "DEFAULT_IDENTITY_SEED_B",
    "PARTY_A",
    "PARTY_B",
    "PARTIES",
]
