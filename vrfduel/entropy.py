"""
vrfduel.entropy
===============

Pluggable randomness sources for each party's per-round contribution.

The round protocol only needs two independent-looking 4-byte values per round;
it does not judge entropy quality. Sources implement the tiny
`EntropySource` protocol:

    def random_bytes(self, n: int) -> bytes

Sources included
----------------
- SystemRandomSource : OS CSPRNG via `secrets`. Use for real play.
- SeededRandomSource : `random.Random(seed)`; reproducible sequences for
                       simulations and tests (the default config seeds the
                       two parties with 0 and 1).
- FixedRandomSource  : replays a scripted list of byte strings, so tests can
                       pin exact reveals without relying on any generator's
                       internal algorithm.
"""

from __future__ import annotations

import random
import secrets
from typing import Iterable, List, Protocol

from vrfduel.errors import MalformedInput


class EntropySource(Protocol):
    """Minimal randomness source protocol."""

    def random_bytes(self, n: int) -> bytes:  # pragma: no cover - protocol
        """Return exactly n bytes, or raise on failure."""
        ...


class SourceExhausted(RuntimeError):
    """Raised when a scripted source has no values left."""


def _check_n(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise MalformedInput("n", "must be a non-negative int")


class SystemRandomSource:
    """Bytes from the operating system CSPRNG."""

    def random_bytes(self, n: int) -> bytes:
        _check_n(n)
        return secrets.token_bytes(n)


class SeededRandomSource:
    """
    Deterministic bytes from a seeded `random.Random`.

    Not suitable for real stakes: anyone who knows the seed can predict every
    value. Two sources built from the same seed yield the same sequence.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def random_bytes(self, n: int) -> bytes:
        _check_n(n)
        return self._rng.getrandbits(8 * n).to_bytes(n, "little") if n else b""


class FixedRandomSource:
    """
    Replays scripted values in order.

    Each call must request exactly the width of the next scripted value.
    """

    def __init__(self, values: Iterable[bytes]) -> None:
        self._values: List[bytes] = [bytes(v) for v in values]
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._pos

    def random_bytes(self, n: int) -> bytes:
        _check_n(n)
        if self._pos >= len(self._values):
            raise SourceExhausted(f"scripted source exhausted after {self._pos} values")
        v = self._values[self._pos]
        if len(v) != n:
            raise MalformedInput("value", f"scripted value is {len(v)} bytes, {n} requested")
        self._pos += 1
        return v


__all__ = [
    "EntropySource",
    "SourceExhausted",
    "SystemRandomSource",
    "SeededRandomSource",
    "FixedRandomSource",
]
