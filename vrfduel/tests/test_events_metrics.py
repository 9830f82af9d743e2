import logging

import pytest

from vrfduel.events import (FanoutSink, GameFinished, LoggingSink, MemorySink,
                            RoundAborted, RoundSettled)
from vrfduel.game.ledger import PointsLedger
from vrfduel.game.round import settle_cards
from vrfduel.game.session import Duel
from vrfduel.metrics import Metrics, MetricsSink
from vrfduel.types.core import RoundOutcome, TiePolicy


def _outcome(cards=(5, 3), policy=TiePolicy.PUSH) -> RoundOutcome:
    return settle_cards(PointsLedger(100, 100), cards, round_no=1, tie_policy=policy)


def _aborted() -> RoundAborted:
    return RoundAborted(
        round_no=2,
        party="b",
        reason="invalid_proof",
        detail="InvalidProof: party=b reason=bad-signature",
        balances=(100, 100),
    )


def _value(registry, name, labels=None):
    return registry.get_sample_value(f"vrfduel_game_{name}", labels or {}) or 0.0


def test_event_dicts():
    d = RoundSettled(_outcome()).to_dict()
    assert d["event"] == "round_settled"
    assert d["cards"] == [5, 3]
    assert d["stake"] == 25
    assert d["balances_after"] == [125, 75]

    a = _aborted().to_dict()
    assert a["event"] == "round_aborted"
    assert a["reason"] == "invalid_proof"

    g = GameFinished(winner="a", rounds=9, balances=(20, 0), ending="eliminated")
    assert g.completed
    assert g.to_dict()["ending"] == "eliminated"
    assert not GameFinished(None, 3, (5, 15), "round_cap").completed


def test_memory_and_fanout_sinks():
    m1, m2 = MemorySink(), MemorySink()
    fan = FanoutSink([m1, m2])
    fan.emit(RoundSettled(_outcome()))
    fan.emit(_aborted())
    assert [e.kind for e in m1.events] == ["round_settled", "round_aborted"]
    assert m1.events == m2.events
    assert len(m1.of_kind("round_aborted")) == 1


def test_logging_sink_levels(caplog):
    caplog.set_level(logging.INFO, logger="vrfduel.events")
    sink = LoggingSink()
    sink.emit(RoundSettled(_outcome()))
    sink.emit(_aborted())
    sink.emit(GameFinished(winner="a", rounds=1, balances=(200, 0), ending="eliminated"))

    levels = [r.levelno for r in caplog.records]
    assert levels == [logging.INFO, logging.WARNING, logging.INFO]
    assert "aborted" in caplog.records[1].getMessage()


def test_metrics_sink_counts(registry):
    metrics = Metrics(registry=registry)
    sink = MetricsSink(metrics)
    sink.emit(RoundSettled(_outcome()))
    sink.emit(RoundSettled(_outcome(cards=(4, 4))))
    sink.emit(_aborted())
    sink.emit(GameFinished(winner=None, rounds=3, balances=(125, 75), ending="aborted"))

    assert _value(registry, "rounds_total", {"outcome": "settled"}) == 1
    assert _value(registry, "rounds_total", {"outcome": "push"}) == 1
    assert _value(registry, "rounds_total", {"outcome": "aborted"}) == 1
    assert _value(registry, "aborts_total", {"reason": "invalid_proof"}) == 1
    assert _value(registry, "games_total", {"ending": "aborted"}) == 1
    assert _value(registry, "stake_points_count") == 1
    assert _value(registry, "stake_points_sum") == 25


def test_metrics_vocabularies(registry):
    metrics = Metrics(registry=registry)
    with pytest.raises(ValueError):
        metrics.record_round("won")
    with pytest.raises(ValueError):
        metrics.record_game("forfeit")
    metrics.record_abort("timeout")
    assert _value(registry, "aborts_total", {"reason": "other"}) == 1


def test_duel_feeds_metrics(seeded_players, registry):
    metrics = Metrics(registry=registry)
    duel = Duel(*seeded_players, ledger=PointsLedger(10_000, 10_000), sinks=[MetricsSink(metrics)])
    result = duel.play(max_rounds=4)

    settled = _value(registry, "rounds_total", {"outcome": "settled"})
    pushed = _value(registry, "rounds_total", {"outcome": "push"})
    assert settled + pushed == result.rounds == 4
    assert _value(registry, "games_total", {"ending": "round_cap"}) == 1
