"""
Signature-based VRF over the round's shared seed.

Each party evaluates

    proof = Sign_sk(seed)                  (Ed25519, 64 bytes)
    raw   = BLAKE2b-256(proof)[0]          (one byte, [0, 256))

and later discloses (proof, raw). The opponent checks that `proof` is a valid
signature by the announced public key over *exactly* the shared seed, and that
`raw` is the value derived from that proof. Since Ed25519 is deterministic the
party has exactly one valid proof per (key, seed), so it cannot choose among
several candidate cards.

Verification failure is a protocol violation: `verify_output` raises
`InvalidProof`, and the round aborts as fraud detected.
"""

from __future__ import annotations

import logging

from vrfduel.constants import SEED_LEN
from vrfduel.errors import InvalidProof
from vrfduel.types.core import VRFOutput
from vrfduel.utils.bytes import BytesLike, as_bytes, ensure_len
from vrfduel.utils.hash import blake2_256
from vrfduel.vrf.identity import PlayerIdentity, verify_signature

logger = logging.getLogger(__name__)


def output_from_proof(proof: BytesLike) -> int:
    """Raw VRF value: the first byte of BLAKE2b-256(proof)."""
    return blake2_256(as_bytes(proof, name="proof"))[0]


def evaluate(identity: PlayerIdentity, seed: BytesLike) -> VRFOutput:
    """
    Evaluate `identity`'s VRF on the shared seed.

    Raises
    ------
    MalformedInput if `seed` is not exactly 8 bytes.
    """
    s = ensure_len(seed, SEED_LEN, name="seed")
    proof = identity.sign(s)
    return VRFOutput(proof=proof, raw=output_from_proof(proof))


def verify(proof: BytesLike, seed: BytesLike, public_key: BytesLike) -> bool:
    """True iff `proof` is a valid signature by `public_key` over exactly `seed`."""
    s = ensure_len(seed, SEED_LEN, name="seed")
    return verify_signature(public_key, s, proof)


def verify_output(
    output: VRFOutput,
    seed: BytesLike,
    public_key: BytesLike,
    *,
    party: str,
) -> VRFOutput:
    """
    Verify a disclosed VRF output and return it unchanged on success.

    Checks, in order:
      1. the proof is a valid signature over the seed (reason 'bad-signature');
      2. the announced raw value is the one derived from the proof
         (reason 'output-mismatch').

    Raises
    ------
    InvalidProof on either failure.
    """
    if not verify(output.proof, seed, public_key):
        logger.debug("proof from party %s fails signature check", party)
        raise InvalidProof(party=party, reason="bad-signature")
    if output_from_proof(output.proof) != output.raw:
        logger.debug("proof from party %s announces a raw value it does not derive", party)
        raise InvalidProof(party=party, reason="output-mismatch")
    return output


__all__ = [
    "output_from_proof",
    "evaluate",
    "verify",
    "verify_output",
]
