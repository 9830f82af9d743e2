import pytest

from vrfduel.errors import InsufficientBalance, MalformedInput
from vrfduel.game.ledger import PointsLedger


def test_transfer_moves_stake(ledger):
    assert ledger.transfer("a", "b", 30) == (130, 70)
    assert ledger.balances == (130, 70)
    assert ledger.total == 200


def test_transfer_journal(ledger):
    ledger.transfer("a", "b", 30)
    ledger.transfer("b", "a", 5)
    j = ledger.journal
    assert [e.seq for e in j] == [1, 2]
    assert j[1].winner == "b" and j[1].amount == 5
    assert j[1].balances_after == (125, 75)


def test_zero_transfer_is_allowed(ledger):
    assert ledger.transfer("a", "b", 0) == (100, 100)


@pytest.mark.parametrize(
    "winner,loser,amount",
    [("a", "b", 101), ("a", "b", -1), ("a", "a", 5), ("b", "b", 0)],
)
def test_rejected_transfer_leaves_balances(ledger, winner, loser, amount):
    with pytest.raises(InsufficientBalance):
        ledger.transfer(winner, loser, amount)
    assert ledger.balances == (100, 100)
    assert ledger.journal == ()


def test_unknown_party_is_malformed(ledger):
    with pytest.raises(MalformedInput):
        ledger.transfer("a", "c", 1)
    with pytest.raises(MalformedInput):
        ledger.balance("z")


def test_terminal_and_survivor():
    led = PointsLedger(5, 5)
    assert not led.is_terminal() and led.survivor() is None
    assert led.leader() is None
    led.transfer("b", "a", 5)
    assert led.is_terminal()
    assert led.survivor() == "b"
    assert led.leader() == "b"


@pytest.mark.parametrize("a,b", [(-1, 10), (10, -1), (1.5, 10), (True, 10)])
def test_constructor_rejects_bad_balances(a, b):
    with pytest.raises(MalformedInput):
        PointsLedger(a, b)
