from __future__ import annotations

"""
Points ledger for the two parties
---------------------------------

This module holds the only persistent state of a duel: each party's point
balance. Amounts are integer points (no floats). Every mutation goes through
`transfer`, which checks:
  • the amount is a non-negative int
  • winner and loser are the two distinct parties
  • the loser can cover the amount (never clamped, never negative)

A failed check raises `InsufficientBalance` and leaves the balances untouched.
Since bets are capped by each party's balance before the stake is agreed, such
a failure means the caller computed a stake it should not have; it is a bug,
not a recoverable game event.

`transfer` preserves `total` exactly (zero-sum). Each applied transfer is
appended to a small journal so a game history can be audited after the fact.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from vrfduel.constants import DEFAULT_STARTING_BALANCE, PARTIES, PARTY_A, PARTY_B
from vrfduel.errors import InsufficientBalance, MalformedInput


@dataclass(frozen=True)
class JournalEntry:
    seq: int
    winner: str
    loser: str
    amount: int
    balances_after: Tuple[int, int]


def _ensure_party(party: str) -> None:
    if party not in PARTIES:
        raise MalformedInput("party", f"unknown party {party!r}")


class PointsLedger:
    """Balances of parties "a" and "b"."""

    __slots__ = ("_balances", "_journal")

    def __init__(
        self,
        balance_a: int = DEFAULT_STARTING_BALANCE,
        balance_b: int = DEFAULT_STARTING_BALANCE,
    ) -> None:
        for name, v in (("balance_a", balance_a), ("balance_b", balance_b)):
            if isinstance(v, bool) or not isinstance(v, int):
                raise MalformedInput(name, "must be an int")
            if v < 0:
                raise MalformedInput(name, f"must be non-negative (got {v})")
        self._balances: Dict[str, int] = {PARTY_A: balance_a, PARTY_B: balance_b}
        self._journal: List[JournalEntry] = []

    # ---- reads ----

    def balance(self, party: str) -> int:
        _ensure_party(party)
        return self._balances[party]

    @property
    def balances(self) -> Tuple[int, int]:
        return self._balances[PARTY_A], self._balances[PARTY_B]

    def snapshot(self) -> Tuple[int, int]:
        return self.balances

    @property
    def total(self) -> int:
        return self._balances[PARTY_A] + self._balances[PARTY_B]

    @property
    def journal(self) -> Tuple[JournalEntry, ...]:
        return tuple(self._journal)

    # ---- lifecycle ----

    def is_terminal(self) -> bool:
        """True iff either balance is exactly zero."""
        return self._balances[PARTY_A] == 0 or self._balances[PARTY_B] == 0

    def survivor(self) -> Optional[str]:
        """The party left with a nonzero balance once the game is over, else None."""
        if not self.is_terminal():
            return None
        if self._balances[PARTY_A] > 0:
            return PARTY_A
        if self._balances[PARTY_B] > 0:
            return PARTY_B
        return None

    def leader(self) -> Optional[str]:
        """The party with the larger balance, None when level."""
        a, b = self.balances
        if a == b:
            return None
        return PARTY_A if a > b else PARTY_B

    # ---- mutation ----

    def transfer(self, winner: str, loser: str, amount: int) -> Tuple[int, int]:
        """
        Move `amount` points from `loser` to `winner`; returns the new balances.

        Raises
        ------
        InsufficientBalance
            If the amount is negative, the parties are not distinct, or the
            loser's balance is below `amount`. Balances are left untouched.
        """
        _ensure_party(winner)
        _ensure_party(loser)
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise MalformedInput("amount", "must be an int")
        have = self._balances[loser]
        if amount < 0 or winner == loser or have < amount:
            raise InsufficientBalance(party=loser, balance=have, amount=amount)

        self._balances[loser] = have - amount
        self._balances[winner] += amount
        self._journal.append(
            JournalEntry(
                seq=len(self._journal) + 1,
                winner=winner,
                loser=loser,
                amount=amount,
                balances_after=self.balances,
            )
        )
        return self.balances

    def __repr__(self) -> str:  # pragma: no cover - trivial
        a, b = self.balances
        return f"PointsLedger(a={a}, b={b})"


__all__ = ["PointsLedger", "JournalEntry"]
