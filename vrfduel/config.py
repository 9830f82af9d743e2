"""
Duel configuration.

This file defines the typed configuration for a game:
- Starting balances and an optional round cap
- The tie policy for rounds with equal cards
- Per-party randomness seeds (reproducible simulations) and optional
  identity seeds (fixed signing keys)

It provides:
- A dataclass-based config with validation
- Loading from environment variables (prefix configurable)
- Loading from a JSON or YAML file (YAML via PyYAML)
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import yaml

from vrfduel.constants import (DEFAULT_IDENTITY_SEED_A, DEFAULT_IDENTITY_SEED_B,
                               DEFAULT_SEED_A, DEFAULT_SEED_B,
                               DEFAULT_STARTING_BALANCE, IDENTITY_SEED_LEN)
from vrfduel.errors import ConfigError
from vrfduel.types.core import TiePolicy
from vrfduel.utils.bytes import is_hex


@dataclass
class DuelConfig:
    """
    Game parameters:
      - starting_balance: points each party starts with
      - max_rounds: stop after this many rounds per `play()` call (None = play to
        elimination)
      - tie_policy: "push" (no transfer) or "second_party" (B takes the stake)

    Reproducibility:
      - seed_a / seed_b: seeds for each party's randomness source; None selects
        the OS CSPRNG
      - identity_seed_a / identity_seed_b: 0x-hex 32-byte Ed25519 private seeds.
        The defaults are fixed, so the default game replays identically; None
        (or "none" in the environment) generates fresh identities
    """

    starting_balance: int = DEFAULT_STARTING_BALANCE
    max_rounds: Optional[int] = None
    tie_policy: str = TiePolicy.PUSH.value

    seed_a: Optional[int] = DEFAULT_SEED_A
    seed_b: Optional[int] = DEFAULT_SEED_B
    identity_seed_a: Optional[str] = DEFAULT_IDENTITY_SEED_A
    identity_seed_b: Optional[str] = DEFAULT_IDENTITY_SEED_B

    @property
    def tie(self) -> TiePolicy:
        return TiePolicy(self.tie_policy)

    def validate(self) -> None:
        if not isinstance(self.starting_balance, int) or self.starting_balance < 1:
            raise ConfigError("starting_balance must be an int >= 1")
        if self.max_rounds is not None and (
            not isinstance(self.max_rounds, int) or self.max_rounds < 1
        ):
            raise ConfigError("max_rounds must be None or an int >= 1")
        try:
            TiePolicy(self.tie_policy)
        except ValueError as e:
            raise ConfigError(
                f"tie_policy must be one of {[p.value for p in TiePolicy]}, "
                f"got {self.tie_policy!r}"
            ) from e
        for name in ("seed_a", "seed_b"):
            v = getattr(self, name)
            if v is not None and not isinstance(v, int):
                raise ConfigError(f"{name} must be None or an int")
        for name in ("identity_seed_a", "identity_seed_b"):
            v = getattr(self, name)
            if v is None:
                continue
            body = v[2:] if isinstance(v, str) and v.startswith(("0x", "0X")) else v
            if not is_hex(v) or len(body) != 2 * IDENTITY_SEED_LEN:
                raise ConfigError(f"{name} must be {IDENTITY_SEED_LEN} bytes of hex")
        if (
            self.identity_seed_a is not None
            and self.identity_seed_a == self.identity_seed_b
        ):
            raise ConfigError("identity_seed_a and identity_seed_b must differ")

    # -------------------------
    # Serialization helpers
    # -------------------------

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    # -------------------------
    # Loaders
    # -------------------------

    @staticmethod
    def from_env(prefix: str = "VRFDUEL_") -> "DuelConfig":
        """
        Load configuration from environment variables. All variables are optional.

        Supported keys (examples):
          - VRFDUEL_STARTING_BALANCE=100
          - VRFDUEL_MAX_ROUNDS=500
          - VRFDUEL_TIE_POLICY=push
          - VRFDUEL_SEED_A=0
          - VRFDUEL_SEED_B=1          (set to "none" for the OS CSPRNG)
          - VRFDUEL_IDENTITY_SEED_A=0x…64 hex…
          - VRFDUEL_IDENTITY_SEED_B=0x…64 hex…  (set to "none" for a fresh key)
        """

        def _get(name: str, cast: Any, default: Any) -> Any:
            key = prefix + name
            raw = os.getenv(key)
            if raw is None:
                return default
            if raw.strip().lower() in {"", "none", "null"}:
                return None
            try:
                return cast(raw)
            except Exception as e:
                raise ConfigError(f"Invalid value for {key}: {raw!r}") from e

        cfg = DuelConfig(
            starting_balance=_get("STARTING_BALANCE", int, DEFAULT_STARTING_BALANCE),
            max_rounds=_get("MAX_ROUNDS", int, None),
            tie_policy=_get("TIE_POLICY", str, TiePolicy.PUSH.value),
            seed_a=_get("SEED_A", int, DEFAULT_SEED_A),
            seed_b=_get("SEED_B", int, DEFAULT_SEED_B),
            identity_seed_a=_get("IDENTITY_SEED_A", str, DEFAULT_IDENTITY_SEED_A),
            identity_seed_b=_get("IDENTITY_SEED_B", str, DEFAULT_IDENTITY_SEED_B),
        )
        cfg.validate()
        return cfg

    @staticmethod
    def from_file(path: str) -> "DuelConfig":
        """
        Load configuration from a JSON or YAML file. Keys mirror the dataclass
        fields. Example (YAML):

            starting_balance: 100
            max_rounds: 1000
            tie_policy: push
            seed_a: 0
            seed_b: 1
        """
        data = _parse_json_or_yaml(_read_text(path), path)
        if not isinstance(data, dict):
            raise ConfigError(f"{path!r} must contain a mapping at the top level")

        unknown = set(data) - set(DuelConfig.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"unknown config keys in {path!r}: {sorted(unknown)}")

        cfg = DuelConfig(**data)
        cfg.validate()
        return cfg


# -------------------------
# Utilities
# -------------------------


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _parse_json_or_yaml(text: str, path_hint: str) -> Dict[str, Any]:
    # First try JSON
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse {path_hint!r} as JSON or YAML: {e}"
        ) from e


# A handy default instance for quick use in REPL/tests.
DEFAULT: DuelConfig = DuelConfig()


__all__ = [
    "DuelConfig",
    "DEFAULT",
]
