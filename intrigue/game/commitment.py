"""Plot commitments.

A player picks an action, draws a random 32-byte secret and a 32-byte target,
and publishes

    commitment = sha256(target || secret || action_byte)

The proof sent along with the reveal is ``secret || action_u32_be``.
"""

import hashlib
import secrets
from dataclasses import dataclass
from typing import Optional

from ..models.game import PlotAction

HASH_SIZE = 32


def fingerprint(data: bytes) -> bytes:
    """One-way hash used for commitments and proof bytes."""
    return hashlib.sha256(data).digest()


def compute_commitment(target: bytes, secret: bytes, action: PlotAction) -> bytes:
    return fingerprint(target + secret + bytes([action.value]))


@dataclass
class PlotCommitment:
    """Everything a player keeps between commit and reveal."""

    action: PlotAction
    secret: bytes
    target: bytes
    commitment: bytes
    proof: bytes

    @property
    def commitment_hex(self) -> str:
        return self.commitment.hex()


def generate_plot_commitment(
    action: PlotAction, target_identity: Optional[str] = None
) -> PlotCommitment:
    """Build a fresh commitment for ``action``.

    The target is the hash of ``target_identity`` when given, random otherwise.
    """
    secret = secrets.token_bytes(HASH_SIZE)
    if target_identity:
        target = fingerprint(target_identity.encode())
    else:
        target = secrets.token_bytes(HASH_SIZE)

    return PlotCommitment(
        action=action,
        secret=secret,
        target=target,
        commitment=compute_commitment(target, secret, action),
        proof=secret + action.value.to_bytes(4, "big"),
    )
