import pytest
from hypothesis import given
from hypothesis import strategies as st

from vrfduel.errors import MalformedInput
from vrfduel.game.betting import agree, bets_for, compute_bet
from vrfduel.game.cards import card_distribution, card_of, to_card
from vrfduel.types.core import VRFOutput

cards = st.integers(min_value=0, max_value=12)
balances = st.integers(min_value=1, max_value=10**9)


@given(st.integers(min_value=0, max_value=255))
def test_card_range(raw):
    assert 0 <= to_card(raw) <= 12


def test_card_distribution_is_twenty_or_nineteen():
    dist = card_distribution()
    assert sum(dist.values()) == 256
    assert [dist[c] for c in range(9)] == [20] * 9
    assert [dist[c] for c in range(9, 13)] == [19] * 4


@pytest.mark.parametrize(
    "raw,card",
    [(0, 0), (12, 12), (13, 0), (51, 12), (52, 0), (255, 255 % 52 % 13)],
)
def test_card_mapping_examples(raw, card):
    assert to_card(raw) == card


def test_card_of_reads_raw():
    assert card_of(VRFOutput(proof=bytes(64), raw=25)) == 12


@pytest.mark.parametrize("bad", [-1, 256, True, 1.0, "7"])
def test_to_card_rejects_non_byte(bad):
    with pytest.raises(MalformedInput):
        to_card(bad)


def test_bet_known_values():
    assert compute_bet(0, 100) == 1
    assert compute_bet(12, 100) == 100
    assert compute_bet(6, 100) == 50
    assert compute_bet(5, 100) == 41


def test_bet_floor_uses_exact_arithmetic():
    # 4 * 300 / 12 is exactly 100
    assert compute_bet(4, 300) == 100
    assert compute_bet(7, 12) == 7


def test_bet_on_single_point_is_one():
    for c in range(13):
        assert compute_bet(c, 1) == 1


@given(cards, balances)
def test_bet_bounds(card, balance):
    bet = compute_bet(card, balance)
    assert 1 <= bet <= balance


@given(balances)
def test_bet_is_monotone_in_card(balance):
    bets = [compute_bet(c, balance) for c in range(13)]
    assert bets == sorted(bets)


@pytest.mark.parametrize("card,balance", [(13, 10), (-1, 10), (5, 0), (5, -3)])
def test_bet_rejects_out_of_range(card, balance):
    with pytest.raises(MalformedInput):
        compute_bet(card, balance)


@given(st.integers(min_value=1, max_value=10**6), st.integers(min_value=1, max_value=10**6))
def test_stake_is_min_bet(a, b):
    assert agree(a, b) == min(a, b)


def test_agree_rejects_zero_bet():
    with pytest.raises(MalformedInput):
        agree(0, 5)


@given(cards, cards, balances, balances)
def test_stake_never_exceeds_either_balance(ca, cb, ba, bb):
    bet_a, bet_b, stake = bets_for((ca, cb), (ba, bb))
    assert stake == min(bet_a, bet_b)
    assert stake <= ba and stake <= bb
