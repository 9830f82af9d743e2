import pytest
from prometheus_client import CollectorRegistry

from vrfduel.entropy import FixedRandomSource, SeededRandomSource
from vrfduel.game.ledger import PointsLedger
from vrfduel.game.round import Player
from vrfduel.vrf.identity import PlayerIdentity

SEED_A_HEX = "01" * 32
SEED_B_HEX = "02" * 32


@pytest.fixture
def identity_a() -> PlayerIdentity:
    return PlayerIdentity.from_seed(bytes.fromhex(SEED_A_HEX))


@pytest.fixture
def identity_b() -> PlayerIdentity:
    return PlayerIdentity.from_seed(bytes.fromhex(SEED_B_HEX))


@pytest.fixture
def scripted_players(identity_a, identity_b):
    """Players whose first reveals are 1 and 2 (little-endian u32)."""
    a = Player("a", identity_a, FixedRandomSource([b"\x01\x00\x00\x00"]))
    b = Player("b", identity_b, FixedRandomSource([b"\x02\x00\x00\x00"]))
    return a, b


@pytest.fixture
def seeded_players(identity_a, identity_b):
    a = Player("a", identity_a, SeededRandomSource(0))
    b = Player("b", identity_b, SeededRandomSource(1))
    return a, b


@pytest.fixture
def ledger() -> PointsLedger:
    return PointsLedger(100, 100)


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()
