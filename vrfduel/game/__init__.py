"""
vrfduel.game
------------

Card mapping, bet sizing, the points ledger, the per-round state machine and
the game loop.
"""

from __future__ import annotations

from .betting import agree, bets_for, compute_bet
from .cards import card_distribution, card_of, to_card
from .ledger import JournalEntry, PointsLedger
from .round import (AbortedRound, Player, Round, RoundResult, RoundState,
                    SettledRound, decide_winner, settle_cards)
from .session import Duel, GameResult

__all__ = [
    "to_card",
    "card_of",
    "card_distribution",
    "compute_bet",
    "agree",
    "bets_for",
    "PointsLedger",
    "JournalEntry",
    "RoundState",
    "Player",
    "Round",
    "RoundResult",
    "SettledRound",
    "AbortedRound",
    "decide_winner",
    "settle_cards",
    "Duel",
    "GameResult",
]
