"""
Round orchestrator for the duel.

One `Round` drives a single commit → reveal → seed → VRF → settle exchange
between parties "a" and "b" and enforces its ordering:

    IDLE ─commit()→ COMMITTED ─reveal()→ REVEALED ─derive_seed()→ SEED_DERIVED
         ─produce_proofs()→ PROOFS_PRODUCED ─verify_proofs()→ PROOFS_VERIFIED
         ─settle(ledger)→ SETTLED

    REVEALED        ⇢ ABORTED  (a reveal does not match its commitment)
    PROOFS_PRODUCED ⇢ ABORTED  (a VRF proof does not verify)

A round only reaches PROOFS_VERIFIED once both proofs have passed, so an
invalid proof aborts from PROOFS_PRODUCED. `AbortedRound.state` records the
stage the round was in when the violation was detected.

Each stage method checks the current state and raises `ProtocolOrderError`
when called out of order, so no reveal is ever accepted before both
commitments are recorded. A stage that detects cheating moves the round to
ABORTED and raises the `ProtocolViolation`; `Round.run` converts that into an
`AbortedRound` result. Only `settle` touches the ledger, exactly once.

Parties are modeled by `Player`. Its hook methods (`draw`, `make_commitment`,
`disclose`, `prove`) are what an honest party does; an adversarial party is a
subclass that overrides one of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from vrfduel.commit_reveal.combine import combine_reveals
from vrfduel.commit_reveal.commit import commit
from vrfduel.commit_reveal.verify import verify_reveal
from vrfduel.constants import PARTY_A, PARTY_B, REVEAL_LEN
from vrfduel.entropy import EntropySource
from vrfduel.errors import (MalformedInput, ProtocolOrderError,
                            ProtocolViolation)
from vrfduel.game.betting import bets_for
from vrfduel.game.cards import card_of
from vrfduel.game.ledger import PointsLedger
from vrfduel.types.core import (CommitRecord, RevealRecord, RoundOutcome,
                                TiePolicy, VRFOutput)
from vrfduel.vrf.evaluator import evaluate, verify_output
from vrfduel.vrf.identity import PlayerIdentity

logger = logging.getLogger(__name__)


class RoundState(str, Enum):
    """Lifecycle states of a round."""

    IDLE = "idle"
    COMMITTED = "committed"
    REVEALED = "revealed"
    SEED_DERIVED = "seed_derived"
    PROOFS_PRODUCED = "proofs_produced"
    PROOFS_VERIFIED = "proofs_verified"
    SETTLED = "settled"
    ABORTED = "aborted"


# ---- Parties -----------------------------------------------------------------


class Player:
    """
    One party: its label, signing identity and randomness source.

    The hook methods below describe honest behaviour.
    """

    def __init__(self, party: str, identity: PlayerIdentity, source: EntropySource) -> None:
        if party not in (PARTY_A, PARTY_B):
            raise MalformedInput("party", f"unknown party {party!r}")
        self.party = party
        self.identity = identity
        self.source = source

    @property
    def public_key(self) -> bytes:
        return self.identity.public_key

    def draw(self) -> bytes:
        """This round's private contribution."""
        return self.source.random_bytes(REVEAL_LEN)

    def make_commitment(self, value: bytes) -> bytes:
        return commit(value)

    def disclose(self, value: bytes) -> bytes:
        """The value announced in the reveal stage."""
        return value

    def prove(self, seed: bytes) -> VRFOutput:
        """The VRF output announced for the shared seed."""
        return evaluate(self.identity, seed)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{type(self).__name__}(party={self.party!r}, pubkey={self.public_key.hex()[:16]}…)"


# ---- Results -----------------------------------------------------------------


@dataclass(frozen=True)
class SettledRound:
    outcome: RoundOutcome

    aborted = False

    @property
    def round_no(self) -> int:
        return self.outcome.round_no


@dataclass(frozen=True)
class AbortedRound:
    """
    A round stopped on detected cheating; the ledger was not touched.

    `state` is the stage the round was in when the violation was detected.
    """

    round_no: int
    error: ProtocolViolation
    state: RoundState

    aborted = True

    @property
    def reason(self) -> str:
        return self.error.reason_code

    @property
    def party(self) -> str:
        return getattr(self.error, "party", "?")


RoundResult = Union[SettledRound, AbortedRound]


# ---- Settlement ----------------------------------------------------------------


def decide_winner(cards: Tuple[int, int], tie_policy: TiePolicy) -> Optional[str]:
    """Strictly higher card wins; equal cards follow `tie_policy`."""
    card_a, card_b = cards
    if card_a > card_b:
        return PARTY_A
    if card_b > card_a:
        return PARTY_B
    if TiePolicy(tie_policy) is TiePolicy.SECOND_PARTY:
        return PARTY_B
    return None


def settle_cards(
    ledger: PointsLedger,
    cards: Tuple[int, int],
    *,
    round_no: int,
    tie_policy: TiePolicy = TiePolicy.PUSH,
) -> RoundOutcome:
    """
    Size both bets from the cards and current balances, agree the stake and
    move it from loser to winner. Returns the round's outcome.
    """
    before = ledger.snapshot()
    bet_a, bet_b, stake = bets_for(cards, before)
    winner = decide_winner(cards, tie_policy)
    if winner is not None:
        loser = PARTY_B if winner == PARTY_A else PARTY_A
        ledger.transfer(winner, loser, stake)
    return RoundOutcome(
        round_no=round_no,
        cards=cards,
        bets=(bet_a, bet_b),
        stake=stake,
        winner=winner,
        balances_before=before,
        balances_after=ledger.snapshot(),
    )


# ---- Orchestrator ----------------------------------------------------------------


class Round:
    """A single round between `player_a` and `player_b`."""

    def __init__(
        self,
        round_no: int,
        player_a: Player,
        player_b: Player,
        *,
        tie_policy: TiePolicy = TiePolicy.PUSH,
    ) -> None:
        if player_a.party != PARTY_A or player_b.party != PARTY_B:
            raise MalformedInput("players", "expected parties 'a' and 'b' in that order")
        self.round_no = round_no
        self.players: Dict[str, Player] = {PARTY_A: player_a, PARTY_B: player_b}
        self.tie_policy = TiePolicy(tie_policy)

        self._state = RoundState.IDLE
        self._secrets: Dict[str, bytes] = {}
        self.commitments: Dict[str, CommitRecord] = {}
        self.reveals: Dict[str, RevealRecord] = {}
        self.seed: Optional[bytes] = None
        self.outputs: Dict[str, VRFOutput] = {}
        self.outcome: Optional[RoundOutcome] = None
        self.error: Optional[ProtocolViolation] = None
        self.aborted_at: Optional[RoundState] = None

    @property
    def state(self) -> RoundState:
        return self._state

    def _expect(self, state: RoundState) -> None:
        if self._state is not state:
            raise ProtocolOrderError(expected=state.value, actual=self._state.value)

    def _advance(self, state: RoundState) -> None:
        logger.debug("round %d: %s -> %s", self.round_no, self._state.value, state.value)
        self._state = state

    def _abort(self, err: ProtocolViolation) -> None:
        logger.debug("round %d: %s -> aborted (%s)", self.round_no, self._state.value, err.reason_code)
        self.aborted_at = self._state
        self.error = err
        self._state = RoundState.ABORTED

    # ---- stages ----

    def commit(self) -> Tuple[CommitRecord, CommitRecord]:
        """IDLE → COMMITTED: both parties draw a value and publish its commitment."""
        self._expect(RoundState.IDLE)
        secrets: Dict[str, bytes] = {}
        commitments: Dict[str, CommitRecord] = {}
        for party, player in self.players.items():
            value = player.draw()
            secrets[party] = value
            commitments[party] = CommitRecord(party, player.make_commitment(value))
        self._secrets = secrets
        self.commitments = commitments
        self._advance(RoundState.COMMITTED)
        return commitments[PARTY_A], commitments[PARTY_B]

    def reveal(self) -> Tuple[RevealRecord, RevealRecord]:
        """
        COMMITTED → REVEALED: both parties disclose; each disclosure is checked
        against its commitment.

        Raises
        ------
        CommitmentMismatch (round moves to ABORTED).
        MalformedInput if a disclosure has the wrong width (state unchanged).
        """
        self._expect(RoundState.COMMITTED)
        reveals = {
            party: RevealRecord(party, player.disclose(self._secrets[party]))
            for party, player in self.players.items()
        }
        self.reveals = reveals
        self._advance(RoundState.REVEALED)
        for party, rec in reveals.items():
            try:
                verify_reveal(self.commitments[party].commitment, rec.value, party=party)
            except ProtocolViolation as e:
                self._abort(e)
                raise
        return reveals[PARTY_A], reveals[PARTY_B]

    def derive_seed(self) -> bytes:
        """REVEALED → SEED_DERIVED: combine both reveals into the shared seed."""
        self._expect(RoundState.REVEALED)
        self.seed = combine_reveals(self.reveals[PARTY_A], self.reveals[PARTY_B])
        self._advance(RoundState.SEED_DERIVED)
        return self.seed

    def produce_proofs(self) -> Tuple[VRFOutput, VRFOutput]:
        """SEED_DERIVED → PROOFS_PRODUCED: each party evaluates its VRF on the seed."""
        self._expect(RoundState.SEED_DERIVED)
        self.outputs = {party: player.prove(self.seed) for party, player in self.players.items()}
        self._advance(RoundState.PROOFS_PRODUCED)
        return self.outputs[PARTY_A], self.outputs[PARTY_B]

    def verify_proofs(self) -> None:
        """
        PROOFS_PRODUCED → PROOFS_VERIFIED: check each output against its
        party's public key and the exact shared seed.

        Raises
        ------
        InvalidProof (round moves to ABORTED).
        """
        self._expect(RoundState.PROOFS_PRODUCED)
        for party, player in self.players.items():
            try:
                verify_output(self.outputs[party], self.seed, player.public_key, party=party)
            except ProtocolViolation as e:
                self._abort(e)
                raise
        self._advance(RoundState.PROOFS_VERIFIED)

    def settle(self, ledger: PointsLedger) -> RoundOutcome:
        """PROOFS_VERIFIED → SETTLED: map cards, size bets and apply the stake."""
        self._expect(RoundState.PROOFS_VERIFIED)
        cards = (card_of(self.outputs[PARTY_A]), card_of(self.outputs[PARTY_B]))
        self.outcome = settle_cards(
            ledger, cards, round_no=self.round_no, tie_policy=self.tie_policy
        )
        self._advance(RoundState.SETTLED)
        return self.outcome

    # ---- driver ----

    def run(self, ledger: PointsLedger) -> RoundResult:
        """
        Drive every stage in order.

        Detected cheating yields an `AbortedRound` and leaves the ledger
        untouched. `MalformedInput` and `InsufficientBalance` propagate: they
        are caller bugs, not game events.
        """
        try:
            self.commit()
            self.reveal()
            self.derive_seed()
            self.produce_proofs()
            self.verify_proofs()
        except ProtocolViolation as e:
            return AbortedRound(round_no=self.round_no, error=e, state=self.aborted_at)
        return SettledRound(self.settle(ledger))


__all__ = [
    "RoundState",
    "Player",
    "SettledRound",
    "AbortedRound",
    "RoundResult",
    "decide_winner",
    "settle_cards",
    "Round",
]
