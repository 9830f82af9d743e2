"""
Structured round events.

Round results are reported outward as plain frozen dataclasses. A sink is
anything with an ``emit(event)`` method:

    class EventSink(Protocol):
        def emit(self, event: Event) -> None: ...

Events
------
- RoundSettled : a round completed; carries the full `RoundOutcome`.
- RoundAborted : a round was aborted on detected cheating; no balance changed.
- GameFinished : the game stopped; `ending` is 'eliminated' (a party reached
                 zero), 'round_cap' or 'aborted'.

Sinks included
--------------
- LoggingSink : writes each event through stdlib `logging`.
- MemorySink  : keeps events in a list (tests, replays).
- FanoutSink  : forwards to several sinks in order.

`vrfduel.metrics.MetricsSink` feeds the same events into Prometheus.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple, Union

from vrfduel.types.core import RoundOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundSettled:
    outcome: RoundOutcome

    kind = "round_settled"

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.kind, **self.outcome.to_dict()}


@dataclass(frozen=True)
class RoundAborted:
    """
    A round aborted on a protocol violation.

    Fields:
      round_no  : the aborted round
      party     : the party caught cheating
      reason    : stable reason code ('commitment_mismatch' / 'invalid_proof')
      detail    : human-readable error string
      balances  : ledger snapshot, unchanged by the aborted round
    """

    round_no: int
    party: str
    reason: str
    detail: str
    balances: Tuple[int, int]

    kind = "round_aborted"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.kind,
            "round": self.round_no,
            "party": self.party,
            "reason": self.reason,
            "detail": self.detail,
            "balances": list(self.balances),
        }


@dataclass(frozen=True)
class GameFinished:
    winner: Optional[str]
    rounds: int
    balances: Tuple[int, int]
    ending: str

    kind = "game_finished"

    @property
    def completed(self) -> bool:
        """True when a party was eliminated, i.e. the game ran to its end."""
        return self.ending == "eliminated"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.kind,
            "winner": self.winner,
            "rounds": self.rounds,
            "balances": list(self.balances),
            "ending": self.ending,
        }


Event = Union[RoundSettled, RoundAborted, GameFinished]


class EventSink(Protocol):
    def emit(self, event: Event) -> None:  # pragma: no cover - protocol
        ...


class LoggingSink:
    """Report events through a stdlib logger (INFO; aborts at WARNING)."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def emit(self, event: Event) -> None:
        if isinstance(event, RoundSettled):
            o = event.outcome
            self.log.info(
                "round %d settled: cards=%s bets=%s stake=%d winner=%s points %s -> %s",
                o.round_no,
                o.cards,
                o.bets,
                o.stake,
                o.winner or "push",
                o.balances_before,
                o.balances_after,
            )
        elif isinstance(event, RoundAborted):
            self.log.warning(
                "round %d aborted: party %s %s (%s); points stay %s",
                event.round_no,
                event.party,
                event.reason,
                event.detail,
                event.balances,
            )
        elif isinstance(event, GameFinished):
            self.log.info(
                "game finished after %d rounds: winner=%s points=%s ending=%s",
                event.rounds,
                event.winner,
                event.balances,
                event.ending,
            )


class MemorySink:
    """Collects events in emission order."""

    def __init__(self) -> None:
        self.events: List[Event] = []

    def emit(self, event: Event) -> None:
        self.events.append(event)

    def of_kind(self, kind: str) -> List[Event]:
        return [e for e in self.events if e.kind == kind]


class FanoutSink:
    def __init__(self, sinks: Iterable[EventSink]) -> None:
        self.sinks = list(sinks)

    def emit(self, event: Event) -> None:
        for s in self.sinks:
            s.emit(event)


__all__ = [
    "RoundSettled",
    "RoundAborted",
    "GameFinished",
    "Event",
    "EventSink",
    "LoggingSink",
    "MemorySink",
    "FanoutSink",
]
