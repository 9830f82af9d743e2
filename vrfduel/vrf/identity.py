from __future__ import annotations

"""
Player identity keys (Ed25519) for the duel VRF
================================================

Provides a small facade to build and use a party's static signing identity.
The identity is the only key material the round protocol touches: it signs
the shared seed to produce a VRF proof, and its raw public key lets the
opponent verify that proof.

Ed25519 (RFC 8032) signatures are deterministic: the same key signing the same
message always yields the same 64 bytes. The VRF layer relies on this so that
a party cannot grind several proofs for one seed and choose the best card.

How an identity is obtained (recovery phrase, keystore, HSM) is outside the
protocol; callers hand in a 32-byte private seed or let us generate one.
"""

from dataclasses import dataclass, field

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from vrfduel.constants import IDENTITY_SEED_LEN, PROOF_LEN, PUBKEY_LEN
from vrfduel.utils.bytes import BytesLike, as_bytes, ensure_len


def _raw_public(key: ed25519.Ed25519PrivateKey) -> bytes:
    return key.public_key().public_bytes(
        serialization.Encoding.Raw, serialization.PublicFormat.Raw
    )


def load_public_key(public_key: BytesLike) -> ed25519.Ed25519PublicKey:
    """Parse a raw 32-byte Ed25519 public key."""
    pk = ensure_len(public_key, PUBKEY_LEN, name="public_key")
    return ed25519.Ed25519PublicKey.from_public_bytes(pk)


def verify_signature(public_key: BytesLike, msg: BytesLike, sig: BytesLike) -> bool:
    """
    Check an Ed25519 signature over `msg` by `public_key`.

    Returns False for any signature that does not verify, including one of the
    wrong length. A malformed public key raises MalformedInput since it is a
    caller error, not a forged proof.
    """
    pub = load_public_key(public_key)
    s = as_bytes(sig, name="signature")
    if len(s) != PROOF_LEN:
        return False
    try:
        pub.verify(s, as_bytes(msg, name="message"))
    except InvalidSignature:
        return False
    return True


# --- Identity object ---------------------------------------------------------


@dataclass(frozen=True)
class PlayerIdentity:
    """
    A party's signing capability plus its public verification key.

    Immutable for the lifetime of a game. The private key is never exposed
    through `public_info()` or `repr()`.
    """

    _key: ed25519.Ed25519PrivateKey = field(repr=False)
    public_key: bytes = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "public_key", _raw_public(self._key))

    @classmethod
    def from_seed(cls, seed: BytesLike) -> "PlayerIdentity":
        """Build an identity from a 32-byte Ed25519 private seed."""
        sk = ensure_len(seed, IDENTITY_SEED_LEN, name="identity_seed")
        return cls(ed25519.Ed25519PrivateKey.from_private_bytes(sk))

    @classmethod
    def generate(cls) -> "PlayerIdentity":
        """Fresh identity from the OS CSPRNG."""
        return cls(ed25519.Ed25519PrivateKey.generate())

    def sign(self, msg: BytesLike) -> bytes:
        """Deterministic 64-byte Ed25519 signature over `msg`."""
        return self._key.sign(as_bytes(msg, name="message"))

    def verify(self, msg: BytesLike, sig: BytesLike) -> bool:
        """Verify a signature against our own public key."""
        return verify_signature(self.public_key, msg, sig)

    def public_info(self) -> dict:
        """Export the public description suitable for announcing to the opponent."""
        return {
            "alg": "ed25519",
            "pubkey": self.public_key.hex(),
        }


__all__ = [
    "PlayerIdentity",
    "load_public_key",
    "verify_signature",
]
