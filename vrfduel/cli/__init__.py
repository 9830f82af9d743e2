"""
vrfduel.cli
-----------

Small demo harness for running duels locally.

Commands:
  - play   : Play a full game (or up to --max-rounds) and print each round.
  - params : Show the effective configuration (file/env plus overrides).
  - commit : Print the commitment for a 4-byte 0x-hex value.

Environment:
  VRFDUEL_* variables (see `DuelConfig.from_env`) provide defaults; a
  --config JSON/YAML file replaces them, and flags override both.

Example:
  python -m vrfduel.cli play --seed-a 0 --seed-b 1
  python -m vrfduel.cli play --balance 20 --max-rounds 50 --json
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any, Dict, Optional

import typer

from vrfduel.commit_reveal.commit import commit_hex
from vrfduel.config import DuelConfig
from vrfduel.errors import DuelError
from vrfduel.events import LoggingSink
from vrfduel.game.session import Duel
from vrfduel.metrics import METRICS, MetricsSink
from vrfduel.utils.bytes import from_hex

__all__ = ["app", "main"]

app = typer.Typer(
    name="vrfduel",
    help="Two-party card duel settled by commit-reveal and an Ed25519 VRF.",
    no_args_is_help=True,
    add_completion=False,
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(path: Optional[str], overrides: Dict[str, Any]) -> DuelConfig:
    try:
        cfg = DuelConfig.from_file(path) if path else DuelConfig.from_env()
        cfg = dataclasses.replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
        cfg.validate()
    except (DuelError, OSError) as e:
        raise typer.BadParameter(str(e))
    return cfg


_CONFIG_OPT = typer.Option(None, "--config", "-c", help="JSON or YAML config file.")
_BALANCE_OPT = typer.Option(None, "--balance", "-b", help="Starting balance for each party.")
_ROUNDS_OPT = typer.Option(None, "--max-rounds", "-n", help="Stop after this many rounds.")
_TIE_OPT = typer.Option(None, "--tie-policy", help="'push' or 'second_party'.")
_SEED_A_OPT = typer.Option(None, "--seed-a", help="Randomness seed for party a.")
_SEED_B_OPT = typer.Option(None, "--seed-b", help="Randomness seed for party b.")


@app.command("play")
def cmd_play(
    config: Optional[str] = _CONFIG_OPT,
    balance: Optional[int] = _BALANCE_OPT,
    max_rounds: Optional[int] = _ROUNDS_OPT,
    tie_policy: Optional[str] = _TIE_OPT,
    seed_a: Optional[int] = _SEED_A_OPT,
    seed_b: Optional[int] = _SEED_B_OPT,
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON."),
    log_level: str = typer.Option("warning", "--log-level", help="Logging level."),
) -> None:
    """
    Play rounds until a party is eliminated, the round cap is reached or a
    round aborts on cheating.
    """
    _configure_logging(log_level)
    cfg = _load_config(
        config,
        {
            "starting_balance": balance,
            "max_rounds": max_rounds,
            "tie_policy": tie_policy,
            "seed_a": seed_a,
            "seed_b": seed_b,
        },
    )
    duel = Duel.from_config(cfg, sinks=[LoggingSink(), MetricsSink(METRICS)])
    result = duel.play()

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return
    for o in result.history:
        typer.echo(
            f"round {o.round_no:>4}: cards {o.cards[0]:>2} vs {o.cards[1]:>2}  "
            f"stake {o.stake:>4}  winner {o.winner or '-'}  "
            f"points {o.balances_after[0]}/{o.balances_after[1]}"
        )
    if result.aborted is not None:
        typer.echo(
            f"round {result.aborted.round_no} aborted: party {result.aborted.party} "
            f"{result.aborted.reason}"
        )
    typer.echo(
        f"{result.ending} after {result.rounds} rounds; winner: {result.winner or 'none'}; "
        f"points {result.balances[0]}/{result.balances[1]}"
    )


@app.command("params")
def cmd_params(
    config: Optional[str] = _CONFIG_OPT,
    balance: Optional[int] = _BALANCE_OPT,
    max_rounds: Optional[int] = _ROUNDS_OPT,
    tie_policy: Optional[str] = _TIE_OPT,
) -> None:
    """Show the effective configuration as JSON."""
    cfg = _load_config(
        config,
        {"starting_balance": balance, "max_rounds": max_rounds, "tie_policy": tie_policy},
    )
    typer.echo(cfg.to_json())


@app.command("commit")
def cmd_commit(
    value: str = typer.Argument(..., help="4-byte value as 0x-hex, e.g. 0x01000000."),
) -> None:
    """Print the BLAKE2b-256 commitment to VALUE."""
    try:
        typer.echo(commit_hex(from_hex(value, name="value")))
    except DuelError as e:
        raise typer.BadParameter(str(e))


def main() -> None:  # pragma: no cover
    app(prog_name="vrfduel")
