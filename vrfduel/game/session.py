"""
Game loop: repeated rounds until a party is eliminated.

A `Duel` owns the two players and the points ledger, numbers rounds from 1
and reports every round result to its event sinks. The loop stops when

  • a balance reaches zero       (ending "eliminated"),
  • the round cap is hit         (ending "round_cap"), or
  • a round aborts on cheating   (ending "aborted"; no retry, no forfeit).

After an abort the caller decides: `resume()` continues the same game with
the next round number, or the `Duel` is simply dropped.

Usage
-----
    from vrfduel.config import DuelConfig
    from vrfduel.game.session import Duel

    duel = Duel.from_config(DuelConfig(seed_a=0, seed_b=1))
    result = duel.play()
    print(result.winner, result.balances, len(result.history))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from vrfduel.config import DuelConfig
from vrfduel.constants import DEFAULT_STARTING_BALANCE, PARTY_A, PARTY_B
from vrfduel.entropy import EntropySource, SeededRandomSource, SystemRandomSource
from vrfduel.errors import ProtocolOrderError
from vrfduel.events import (EventSink, FanoutSink, GameFinished, RoundAborted,
                            RoundSettled)
from vrfduel.game.ledger import PointsLedger
from vrfduel.game.round import AbortedRound, Player, Round, RoundResult
from vrfduel.types.core import RoundOutcome, TiePolicy
from vrfduel.utils.bytes import from_hex
from vrfduel.vrf.identity import PlayerIdentity

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    winner: Optional[str]
    rounds: int
    balances: Tuple[int, int]
    ending: str
    history: List[RoundOutcome] = field(default_factory=list)
    aborted: Optional[AbortedRound] = None

    @property
    def completed(self) -> bool:
        return self.ending == "eliminated"

    def to_dict(self) -> dict:
        out = {
            "winner": self.winner,
            "rounds": self.rounds,
            "balances": list(self.balances),
            "ending": self.ending,
            "history": [o.to_dict() for o in self.history],
        }
        if self.aborted is not None:
            out["aborted"] = {
                "round": self.aborted.round_no,
                "party": self.aborted.party,
                "reason": self.aborted.reason,
            }
        return out


def _source(seed: Optional[int]) -> EntropySource:
    return SystemRandomSource() if seed is None else SeededRandomSource(seed)


def _identity(seed_hex: Optional[str]) -> PlayerIdentity:
    if seed_hex is None:
        logger.info("no identity seed configured; generating a fresh key")
        return PlayerIdentity.generate()
    return PlayerIdentity.from_seed(from_hex(seed_hex, name="identity_seed"))


class Duel:
    """Two players, one ledger, any number of rounds."""

    def __init__(
        self,
        player_a: Player,
        player_b: Player,
        *,
        ledger: Optional[PointsLedger] = None,
        tie_policy: TiePolicy = TiePolicy.PUSH,
        sinks: Iterable[EventSink] = (),
        max_rounds: Optional[int] = None,
    ) -> None:
        if player_a.party != PARTY_A or player_b.party != PARTY_B:
            raise ValueError("Duel expects players for parties 'a' and 'b' in that order")
        self.player_a = player_a
        self.player_b = player_b
        self.ledger = ledger if ledger is not None else PointsLedger(
            DEFAULT_STARTING_BALANCE, DEFAULT_STARTING_BALANCE
        )
        self.tie_policy = TiePolicy(tie_policy)
        self.sink = FanoutSink(sinks)
        self.round_no = 0
        self.history: List[RoundOutcome] = []
        self.last_abort: Optional[AbortedRound] = None
        self.max_rounds = max_rounds

    @classmethod
    def from_config(
        cls, cfg: DuelConfig, *, sinks: Iterable[EventSink] = ()
    ) -> "Duel":
        cfg.validate()
        a = Player(PARTY_A, _identity(cfg.identity_seed_a), _source(cfg.seed_a))
        b = Player(PARTY_B, _identity(cfg.identity_seed_b), _source(cfg.seed_b))
        return cls(
            a,
            b,
            ledger=PointsLedger(cfg.starting_balance, cfg.starting_balance),
            tie_policy=cfg.tie,
            sinks=sinks,
            max_rounds=cfg.max_rounds,
        )

    @property
    def finished(self) -> bool:
        return self.ledger.is_terminal() or self.last_abort is not None

    def resume(self) -> None:
        """Clear a recorded abort so play can continue with the next round."""
        if self.last_abort is not None:
            logger.info("resuming after aborted round %d", self.last_abort.round_no)
        self.last_abort = None

    def play_round(self) -> RoundResult:
        """Run the next round against the ledger and report it."""
        if self.finished:
            raise ProtocolOrderError(expected="game in progress", actual="game finished")
        self.round_no += 1
        rnd = Round(self.round_no, self.player_a, self.player_b, tie_policy=self.tie_policy)
        result = rnd.run(self.ledger)

        if isinstance(result, AbortedRound):
            self.last_abort = result
            self.sink.emit(
                RoundAborted(
                    round_no=result.round_no,
                    party=result.party,
                    reason=result.reason,
                    detail=str(result.error),
                    balances=self.ledger.snapshot(),
                )
            )
        else:
            self.history.append(result.outcome)
            self.sink.emit(RoundSettled(result.outcome))
        return result

    def play(self, max_rounds: Optional[int] = None) -> GameResult:
        """
        Play rounds until the game ends or `max_rounds` rounds have been
        played by this call. `max_rounds` defaults to the cap the duel was
        built with. Emits one `GameFinished` event.
        """
        if max_rounds is None:
            max_rounds = self.max_rounds
        if max_rounds is not None and max_rounds < 1:
            raise ValueError("max_rounds must be None or >= 1")
        played = 0
        while not self.finished:
            if max_rounds is not None and played >= max_rounds:
                break
            self.play_round()
            played += 1

        if self.last_abort is not None:
            ending = "aborted"
        elif self.ledger.is_terminal():
            ending = "eliminated"
        else:
            ending = "round_cap"
        winner = self.ledger.survivor() if ending == "eliminated" else None

        logger.debug("duel over after %d rounds (%s)", self.round_no, ending)
        self.sink.emit(
            GameFinished(
                winner=winner,
                rounds=self.round_no,
                balances=self.ledger.snapshot(),
                ending=ending,
            )
        )
        return GameResult(
            winner=winner,
            rounds=self.round_no,
            balances=self.ledger.snapshot(),
            ending=ending,
            history=list(self.history),
            aborted=self.last_abort,
        )


__all__ = ["Duel", "GameResult"]
