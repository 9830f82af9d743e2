"""
Card mapping: raw VRF byte → card in [0, 13).

    card = raw % 52 % 13

The first reduction picks a position in a 52-card deck, the second its rank.
256 is not a multiple of 52, so deck positions 0..47 have five byte preimages
and 48..51 only four; after the rank reduction, cards 0..8 get 20 preimages
and cards 9..12 get 19. The slight tilt toward low cards is part of the game's
wire compatibility and is kept as is.
"""

from __future__ import annotations

from typing import Dict

from vrfduel.constants import DECK_SIZE, RANKS
from vrfduel.errors import MalformedInput
from vrfduel.types.core import VRFOutput


def to_card(raw: int) -> int:
    """Map a raw VRF byte to a card. Total over [0, 256)."""
    if isinstance(raw, bool) or not isinstance(raw, int) or not (0 <= raw < 256):
        raise MalformedInput("raw", f"must be a byte value in [0, 256) (got {raw!r})")
    return raw % DECK_SIZE % RANKS


def card_of(output: VRFOutput) -> int:
    return to_card(output.raw)


def card_distribution() -> Dict[int, int]:
    """Number of byte values that map to each card."""
    counts = {c: 0 for c in range(RANKS)}
    for raw in range(256):
        counts[to_card(raw)] += 1
    return counts


__all__ = ["to_card", "card_of", "card_distribution"]
