"""
vrfduel.vrf
-----------

Identity-bound VRF: `PlayerIdentity` signs the shared seed, `evaluate` turns
the signature into a bounded raw value, `verify`/`verify_output` check a
disclosed output against the announced public key.
"""

from __future__ import annotations

from .evaluator import evaluate, output_from_proof, verify, verify_output
from .identity import PlayerIdentity, load_public_key, verify_signature

__all__ = [
    "PlayerIdentity",
    "load_public_key",
    "verify_signature",
    "evaluate",
    "output_from_proof",
    "verify",
    "verify_output",
]
