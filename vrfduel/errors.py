"""
Duel protocol errors.

This module defines a small, typed hierarchy of exceptions raised by the round
pipeline (commit → reveal → seed → VRF → settle). Callers can catch the base
`DuelError` to handle every protocol error, catch `ProtocolViolation` to handle
detected cheating only, or catch the concrete subclasses for more granular
control.

`ProtocolViolation` subclasses abort the current round and are surfaced to the
caller as an aborted round result. `InsufficientBalance` is an internal
invariant violation and is never converted into a round result.

The errors here are intentionally lightweight and serialization-friendly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class DuelError(Exception):
    """Base class for all duel protocol errors."""
    pass


class ProtocolViolation(DuelError):
    """Base class for errors that prove a party cheated in the current round."""

    #: Short, stable reason label used by events and metrics.
    reason_code = "violation"


@dataclass(frozen=True)
class CommitmentMismatch(ProtocolViolation):
    """
    Raised when a revealed value does not hash to the commitment announced earlier.

    Attributes:
        party: The party whose reveal failed ("a" or "b").
        expected_commitment_hex: Hex of the commitment announced in the commit stage.
        got_commitment_hex: Hex of the commitment recomputed from the reveal.
    """
    party: str
    expected_commitment_hex: str
    got_commitment_hex: str

    reason_code = "commitment_mismatch"

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return (
            f"CommitmentMismatch: party={self.party} "
            f"expected={self.expected_commitment_hex} got={self.got_commitment_hex}"
        )


@dataclass(frozen=True)
class InvalidProof(ProtocolViolation):
    """
    Raised when a VRF proof fails verification against the shared seed and public key.

    Attributes:
        party: The party whose proof failed ("a" or "b").
        reason: Optional explanation (e.g., 'bad-signature', 'output-mismatch').
    """
    party: str
    reason: Optional[str] = None

    reason_code = "invalid_proof"

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return (
            f"InvalidProof: party={self.party}"
            + (f" reason={self.reason}" if self.reason else "")
        )


@dataclass(frozen=True)
class InsufficientBalance(DuelError):
    """
    Raised when a transfer would drive a balance negative.

    Bets are capped by each party's balance before the stake is agreed, so this
    can only happen through a bug in the caller.

    Attributes:
        party: The party that would be overdrawn.
        balance: Its balance at the time of the transfer.
        amount: The requested transfer amount.
    """
    party: str
    balance: int
    amount: int

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return (
            f"InsufficientBalance: party={self.party} balance={self.balance} "
            f"amount={self.amount}"
        )


@dataclass(frozen=True)
class MalformedInput(DuelError, ValueError):
    """
    Raised when a value of the wrong type, width or range reaches a protocol step.

    Attributes:
        field: Name of the offending input.
        reason: Human-readable explanation.
    """
    field: str
    reason: str

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return f"MalformedInput: {self.field}: {self.reason}"


@dataclass(frozen=True)
class ProtocolOrderError(DuelError):
    """
    Raised when a round stage is entered before its predecessor completed.

    Attributes:
        expected: The state the round must be in for the requested step.
        actual: The state the round is actually in.
    """
    expected: str
    actual: str

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return f"ProtocolOrderError: expected state {self.expected}, round is {self.actual}"


class ConfigError(DuelError, ValueError):
    """Raised for invalid configuration values."""
    pass


__all__ = [
    "DuelError",
    "ProtocolViolation",
    "CommitmentMismatch",
    "InvalidProof",
    "InsufficientBalance",
    "MalformedInput",
    "ProtocolOrderError",
    "ConfigError",
]
