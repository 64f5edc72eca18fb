"""Intrigue state machine components."""

from .engine import ResolutionEngine
from .ledger import CommitmentLedger
from .session import GameSessionManager
from .verification import PlaceholderProofVerifier, ProofVerifier, VerificationGate

__all__ = [
    "ResolutionEngine",
    "CommitmentLedger",
    "GameSessionManager",
    "PlaceholderProofVerifier",
    "ProofVerifier",
    "VerificationGate",
]
