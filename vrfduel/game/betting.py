"""
Bet sizing.

A party's bet scales linearly with its card, from 1 point for the lowest card
up to its whole balance for the highest:

    bet = clamp( floor(card * balance / 12), 1, balance )

The floor is taken in exact integer arithmetic so that boundary products
(e.g. card 4 on a balance of 300) never land one below due to float rounding.

The stake both parties play for is the smaller bet: neither can be made to
risk more than the more conservative party offers. Since each bet is capped
by its own balance first, the stake never exceeds either balance.
"""

from __future__ import annotations

from typing import Tuple

from vrfduel.constants import MAX_CARD, RANKS
from vrfduel.errors import MalformedInput


def _require_int(name: str, v: object) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise MalformedInput(name, f"must be an int (got {type(v).__name__})")
    return v


def compute_bet(card: int, balance: int) -> int:
    """
    Bet for a party holding `card` with `balance` points.

    Raises
    ------
    MalformedInput if card is outside [0, 13) or balance < 1.
    """
    card = _require_int("card", card)
    balance = _require_int("balance", balance)
    if not (0 <= card < RANKS):
        raise MalformedInput("card", f"must be in [0, {RANKS}) (got {card})")
    if balance < 1:
        raise MalformedInput("balance", f"must be >= 1 to place a bet (got {balance})")
    bet = card * balance // MAX_CARD
    return min(max(bet, 1), balance)


def agree(bet_a: int, bet_b: int) -> int:
    """Agreed stake: the lesser of the two proposed bets."""
    bet_a = _require_int("bet_a", bet_a)
    bet_b = _require_int("bet_b", bet_b)
    if bet_a < 1 or bet_b < 1:
        raise MalformedInput("bet", f"bets must be >= 1 (got {bet_a}, {bet_b})")
    return min(bet_a, bet_b)


def bets_for(cards: Tuple[int, int], balances: Tuple[int, int]) -> Tuple[int, int, int]:
    """Convenience: (bet_a, bet_b, stake) for a pair of cards and balances."""
    bet_a = compute_bet(cards[0], balances[0])
    bet_b = compute_bet(cards[1], balances[1])
    return bet_a, bet_b, agree(bet_a, bet_b)


__all__ = ["compute_bet", "agree", "bets_for"]
