"""
Prometheus metrics for the duel.

This module defines counters and histograms for the round pipeline:
  • rounds_total    : rounds processed, labeled by outcome
  • aborts_total    : aborted rounds, labeled by violation reason
  • stake_points    : distribution of agreed stakes
  • games_total     : finished games, labeled by how they ended

Label cardinality is intentionally low: only small, finite vocabularies.

Usage
-----
    from vrfduel.metrics import METRICS

    METRICS.record_round("settled")
    METRICS.record_abort("invalid_proof")
    METRICS.observe_stake(30)

Most callers plug `MetricsSink(METRICS)` into a duel's event sinks instead of
calling these helpers directly. If you need a custom Prometheus registry or a
different namespace/subsystem (tests do), construct your own `Metrics`.
"""

from __future__ import annotations

from typing import Iterable

from prometheus_client import REGISTRY, Counter, Histogram

from vrfduel.events import Event, GameFinished, RoundAborted, RoundSettled

# --------- Vocabularies (kept small for bounded cardinality) ---------

_ROUND_OUTCOMES = (
    "settled",      # a party won the stake
    "push",         # tied cards, no transfer
    "aborted",      # cheating detected, no transfer
)

_ABORT_REASONS = (
    "commitment_mismatch",
    "invalid_proof",
    "other",
)

_GAME_ENDINGS = (
    "eliminated",   # a party reached zero
    "round_cap",    # max_rounds reached first
    "aborted",      # stopped on an aborted round
)

# Stake buckets (points); starting balances default to 100 per party.
_STAKE_BUCKETS = (1.0, 2.0, 5.0, 10.0, 20.0, 50.0, 100.0, 200.0, 500.0, 1000.0)


class Metrics:
    """
    Container for all duel Prometheus instruments.

    Args:
        namespace: Prometheus metric namespace (prefix).
        subsystem: Prometheus metric subsystem.
        registry:  Prometheus registry to register the metrics with.
    """

    def __init__(
        self,
        *,
        namespace: str = "vrfduel",
        subsystem: str = "game",
        registry=REGISTRY,
        stake_buckets: Iterable[float] = _STAKE_BUCKETS,
    ) -> None:
        self.rounds_total = Counter(
            "rounds_total",
            "Number of rounds processed, labeled by outcome.",
            labelnames=("outcome",),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.aborts_total = Counter(
            "aborts_total",
            "Number of rounds aborted on a protocol violation, labeled by reason.",
            labelnames=("reason",),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.games_total = Counter(
            "games_total",
            "Number of finished games, labeled by ending.",
            labelnames=("ending",),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.stake_points = Histogram(
            "stake_points",
            "Agreed stake per settled round (points).",
            buckets=tuple(stake_buckets),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )

    # ----- Recording helpers -------------------------------------------------

    def record_round(self, outcome: str) -> None:
        if outcome not in _ROUND_OUTCOMES:
            raise ValueError(f"unknown round outcome {outcome!r}")
        self.rounds_total.labels(outcome=outcome).inc()

    def record_abort(self, reason: str) -> None:
        if reason not in _ABORT_REASONS:
            reason = "other"
        self.aborts_total.labels(reason=reason).inc()

    def record_game(self, ending: str) -> None:
        if ending not in _GAME_ENDINGS:
            raise ValueError(f"unknown game ending {ending!r}")
        self.games_total.labels(ending=ending).inc()

    def observe_stake(self, points: int) -> None:
        self.stake_points.observe(float(points))


class MetricsSink:
    """Event sink that feeds a `Metrics` instance."""

    def __init__(self, metrics: "Metrics") -> None:
        self.metrics = metrics

    def emit(self, event: Event) -> None:
        if isinstance(event, RoundSettled):
            o = event.outcome
            self.metrics.record_round("push" if o.is_push else "settled")
            if not o.is_push:
                self.metrics.observe_stake(o.stake)
        elif isinstance(event, RoundAborted):
            self.metrics.record_round("aborted")
            self.metrics.record_abort(event.reason)
        elif isinstance(event, GameFinished):
            self.metrics.record_game(event.ending)


# Singleton used by most components
METRICS = Metrics()

__all__ = [
    "Metrics",
    "MetricsSink",
    "METRICS",
    "_ROUND_OUTCOMES",
    "_ABORT_REASONS",
    "_GAME_ENDINGS",
]
