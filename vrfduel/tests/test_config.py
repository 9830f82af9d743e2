import json

import pytest

from vrfduel.config import DuelConfig
from vrfduel.errors import ConfigError
from vrfduel.types.core import TiePolicy


def test_defaults_validate():
    cfg = DuelConfig()
    cfg.validate()
    assert cfg.starting_balance == 100
    assert cfg.tie is TiePolicy.PUSH
    assert (cfg.seed_a, cfg.seed_b) == (0, 1)
    assert json.loads(cfg.to_json())["tie_policy"] == "push"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"starting_balance": 0},
        {"max_rounds": 0},
        {"tie_policy": "coin_flip"},
        {"seed_a": "zero"},
        {"identity_seed_a": "0x1234"},
        {"identity_seed_a": "11" * 32, "identity_seed_b": "11" * 32},
    ],
)
def test_validate_rejects(kwargs):
    with pytest.raises(ConfigError):
        DuelConfig(**kwargs).validate()


def test_from_env(monkeypatch):
    monkeypatch.setenv("VRFDUEL_STARTING_BALANCE", "250")
    monkeypatch.setenv("VRFDUEL_MAX_ROUNDS", "40")
    monkeypatch.setenv("VRFDUEL_TIE_POLICY", "second_party")
    monkeypatch.setenv("VRFDUEL_SEED_B", "none")
    cfg = DuelConfig.from_env()
    assert cfg.starting_balance == 250
    assert cfg.max_rounds == 40
    assert cfg.tie is TiePolicy.SECOND_PARTY
    assert cfg.seed_a == 0
    assert cfg.seed_b is None


def test_from_env_bad_int(monkeypatch):
    monkeypatch.setenv("VRFDUEL_STARTING_BALANCE", "lots")
    with pytest.raises(ConfigError):
        DuelConfig.from_env()


def test_from_env_custom_prefix(monkeypatch):
    monkeypatch.setenv("DUEL_STARTING_BALANCE", "7")
    assert DuelConfig.from_env(prefix="DUEL_").starting_balance == 7


def test_from_yaml_file(tmp_path):
    p = tmp_path / "duel.yaml"
    p.write_text("starting_balance: 30\nmax_rounds: 12\ntie_policy: push\nseed_a: 5\n")
    cfg = DuelConfig.from_file(str(p))
    assert (cfg.starting_balance, cfg.max_rounds, cfg.seed_a, cfg.seed_b) == (30, 12, 5, 1)


def test_from_json_file(tmp_path):
    p = tmp_path / "duel.json"
    p.write_text(json.dumps({"starting_balance": 60, "seed_b": None}))
    cfg = DuelConfig.from_file(str(p))
    assert cfg.starting_balance == 60
    assert cfg.seed_b is None


def test_from_file_rejects_unknown_keys(tmp_path):
    p = tmp_path / "duel.yaml"
    p.write_text("starting_balance: 30\nstake_multiplier: 2\n")
    with pytest.raises(ConfigError):
        DuelConfig.from_file(str(p))


def test_from_file_rejects_non_mapping(tmp_path):
    p = tmp_path / "duel.yaml"
    p.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigError):
        DuelConfig.from_file(str(p))


def test_default_identity_seeds_are_fixed():
    from vrfduel.constants import DEFAULT_IDENTITY_SEED_A, DEFAULT_IDENTITY_SEED_B

    cfg = DuelConfig()
    assert cfg.identity_seed_a == DEFAULT_IDENTITY_SEED_A
    assert cfg.identity_seed_b == DEFAULT_IDENTITY_SEED_B
    assert len(bytes.fromhex(DEFAULT_IDENTITY_SEED_A)) == 32
    assert DEFAULT_IDENTITY_SEED_A != DEFAULT_IDENTITY_SEED_B


def test_from_env_none_identity_seed(monkeypatch):
    monkeypatch.setenv("VRFDUEL_IDENTITY_SEED_A", "none")
    cfg = DuelConfig.from_env()
    assert cfg.identity_seed_a is None
    assert cfg.identity_seed_b is not None
