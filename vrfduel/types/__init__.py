"""
Duel protocol types package

This subpackage collects typed primitives and dataclasses used across the
round pipeline. We re-export commonly used symbols from here for convenience:

    from vrfduel.types import CommitRecord, VRFOutput, RoundOutcome
"""

from __future__ import annotations

from .core import (Balances, CommitRecord, RevealRecord, RoundNo,
                   RoundOutcome, TiePolicy, VRFOutput)

__all__ = [
    "RoundNo",
    "Balances",
    "TiePolicy",
    "CommitRecord",
    "RevealRecord",
    "VRFOutput",
    "RoundOutcome",
]
