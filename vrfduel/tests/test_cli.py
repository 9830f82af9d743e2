import json

from prometheus_client import REGISTRY
from typer.testing import CliRunner

from vrfduel.cli import app
from vrfduel.commit_reveal import commit

runner = CliRunner()


def test_play_json():
    res = runner.invoke(
        app, ["play", "--balance", "10", "--max-rounds", "5", "--seed-a", "0", "--seed-b", "1", "--json"]
    )
    assert res.exit_code == 0, res.output
    data = json.loads(res.stdout)
    assert data["ending"] in ("eliminated", "round_cap")
    assert 1 <= data["rounds"] <= 5
    assert sum(data["balances"]) == 20
    assert len(data["history"]) == data["rounds"]


def test_play_text_summary():
    res = runner.invoke(app, ["play", "--balance", "10000", "--max-rounds", "2"])
    assert res.exit_code == 0, res.output
    lines = res.stdout.strip().splitlines()
    assert lines[0].startswith("round    1:")
    assert lines[-1].startswith("round_cap after 2 rounds")


def test_play_rejects_bad_tie_policy():
    res = runner.invoke(app, ["play", "--tie-policy", "coin_flip"])
    assert res.exit_code != 0


def test_params_from_yaml(tmp_path):
    p = tmp_path / "duel.yaml"
    p.write_text("starting_balance: 42\ntie_policy: second_party\n")
    res = runner.invoke(app, ["params", "--config", str(p), "--max-rounds", "9"])
    assert res.exit_code == 0, res.output
    data = json.loads(res.stdout)
    assert data["starting_balance"] == 42
    assert data["tie_policy"] == "second_party"
    assert data["max_rounds"] == 9


def test_commit_command():
    res = runner.invoke(app, ["commit", "0x01000000"])
    assert res.exit_code == 0, res.output
    assert res.stdout.strip() == commit(b"\x01\x00\x00\x00").hex()


def test_commit_command_rejects_wrong_width():
    res = runner.invoke(app, ["commit", "0x0100"])
    assert res.exit_code != 0


def test_play_records_metrics():
    def games(ending):
        return REGISTRY.get_sample_value("vrfduel_game_games_total", {"ending": ending}) or 0.0

    def rounds():
        return sum(
            REGISTRY.get_sample_value("vrfduel_game_rounds_total", {"outcome": o}) or 0.0
            for o in ("settled", "push", "aborted")
        )

    games_before, rounds_before = games("round_cap"), rounds()
    res = runner.invoke(app, ["play", "--balance", "10000", "--max-rounds", "3"])
    assert res.exit_code == 0, res.output
    assert games("round_cap") == games_before + 1
    assert rounds() == rounds_before + 3


def test_play_is_reproducible_by_default():
    args = ["play", "--balance", "50", "--max-rounds", "20", "--json"]
    first = runner.invoke(app, args)
    second = runner.invoke(app, args)
    assert first.exit_code == 0, first.output
    assert json.loads(first.stdout) == json.loads(second.stdout)
