from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NewType, Optional, Tuple

from vrfduel.constants import (HASH_LEN, MAX_CARD, PARTIES, PROOF_LEN,
                               REVEAL_LEN)
from vrfduel.errors import MalformedInput

"""
Core typed primitives for the duel protocol.

These are intentionally minimal and free of heavy dependencies so they can be
shared across submodules (commit/reveal, VRF evaluation, betting, the round
state machine, events and tests).

Types provided:
  • RoundNo       : integer-typed round counter (1-based within a game)
  • Balances      : (balance_a, balance_b) snapshot
  • TiePolicy     : settlement rule for equal cards
  • CommitRecord  : a party's commitment for the current round
  • RevealRecord  : a party's disclosed 4-byte value
  • VRFOutput     : proof over the shared seed and its raw output byte
  • RoundOutcome  : everything decided by a settled round
"""

# ---- Simple newtypes ---------------------------------------------------------

RoundNo = NewType("RoundNo", int)

Balances = Tuple[int, int]


class TiePolicy(str, Enum):
    """How a round with equal cards is settled."""

    PUSH = "push"  # no transfer, nobody wins the round
    SECOND_PARTY = "second_party"  # party B takes the stake


def _require_len(name: str, b: bytes, n: int) -> None:
    if len(b) != n:
        raise MalformedInput(name, f"must be exactly {n} bytes (got {len(b)})")


def _require_party(party: str) -> None:
    if party not in PARTIES:
        raise MalformedInput("party", f"unknown party {party!r}")


def _require_bytes(name: str, v: Any) -> None:
    if not isinstance(v, (bytes, bytearray)):
        raise MalformedInput(name, "must be bytes")


# ---- Records -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """
    A party's commitment for the current round.

    Fields:
      party      : "a" or "b"
      commitment : BLAKE2b-256 digest of the value to be revealed (32 bytes)
    """

    party: str
    commitment: bytes

    def __post_init__(self) -> None:  # type: ignore[override]
        _require_party(self.party)
        _require_bytes("commitment", self.commitment)
        _require_len("commitment", self.commitment, HASH_LEN)


@dataclass(frozen=True, slots=True)
class RevealRecord:
    """
    A party's disclosed contribution for the current round.

    Fields:
      party : "a" or "b"
      value : the 4-byte preimage that should match the commitment
    """

    party: str
    value: bytes

    def __post_init__(self) -> None:  # type: ignore[override]
        _require_party(self.party)
        _require_bytes("value", self.value)
        _require_len("value", self.value, REVEAL_LEN)

    @property
    def as_int(self) -> int:
        return int.from_bytes(self.value, "little")


# ---- VRF ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class VRFOutput:
    """
    Result of evaluating a party's VRF over the shared seed.

    Fields:
      proof : Ed25519 signature over the seed (64 bytes)
      raw   : first byte of BLAKE2b-256(proof), in [0, 256)
    """

    proof: bytes
    raw: int

    def __post_init__(self) -> None:  # type: ignore[override]
        _require_bytes("proof", self.proof)
        _require_len("proof", self.proof, PROOF_LEN)
        if not isinstance(self.raw, int) or not (0 <= self.raw < 256):
            raise MalformedInput("raw", f"must be a byte value in [0, 256) (got {self.raw!r})")


# ---- Outcomes ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RoundOutcome:
    """
    Everything a settled round decided.

    Fields:
      round_no         : 1-based round counter within the game
      cards            : (card_a, card_b), each in [0, 13)
      bets             : (bet_a, bet_b), each in [1, own balance]
      stake            : agreed stake, min(bets)
      winner           : "a", "b", or None for a pushed tie
      balances_before  : ledger snapshot before the transfer
      balances_after   : ledger snapshot after the transfer
    """

    round_no: int
    cards: Tuple[int, int]
    bets: Tuple[int, int]
    stake: int
    winner: Optional[str]
    balances_before: Balances
    balances_after: Balances

    def __post_init__(self) -> None:  # type: ignore[override]
        for c in self.cards:
            if not (0 <= c <= MAX_CARD):
                raise MalformedInput("cards", f"card out of range: {c}")
        if self.winner is not None:
            _require_party(self.winner)
        if sum(self.balances_before) != sum(self.balances_after):
            raise MalformedInput("balances_after", "settlement must be zero-sum")

    @property
    def is_push(self) -> bool:
        return self.winner is None

    @property
    def delta(self) -> int:
        """Amount moved from loser to winner (0 for a push)."""
        return abs(self.balances_after[0] - self.balances_before[0])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round_no,
            "cards": list(self.cards),
            "bets": list(self.bets),
            "stake": self.stake,
            "winner": self.winner,
            "balances_before": list(self.balances_before),
            "balances_after": list(self.balances_after),
        }


__all__ = [
    "RoundNo",
    "Balances",
    "TiePolicy",
    "CommitRecord",
    "RevealRecord",
    "VRFOutput",
    "RoundOutcome",
]
