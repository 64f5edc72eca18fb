"""Plot reveal and proof verification."""

import hmac
import logging
from typing import Optional, Protocol

from ..errors import InvalidProof, PlotNotCommitted
from ..models.game import GameState, PlotAction
from .commitment import fingerprint

logger = logging.getLogger(__name__)


class ProofVerifier(Protocol):
    """Confirms that a reveal honours an earlier commitment."""

    def verify(
        self,
        stored_hash: bytes,
        action: PlotAction,
        proof: bytes,
        commitment: bytes,
    ) -> bool: ...


class PlaceholderProofVerifier:
    """Accepts iff the presented commitment equals the stored hash.

    The proof bytes are fingerprinted but the fingerprint takes no part in the
    decision, and nothing binds the revealed action to the commitment. A real
    verifier can replace this one without touching the state machine.
    """

    def verify(
        self,
        stored_hash: bytes,
        action: PlotAction,
        proof: bytes,
        commitment: bytes,
    ) -> bool:
        fingerprint(proof)
        return hmac.compare_digest(stored_hash, commitment)


class VerificationGate:
    """Reveals a player's action once their proof is accepted."""

    def __init__(self, verifier: Optional[ProofVerifier] = None):
        self.verifier = verifier or PlaceholderProofVerifier()

    def reveal(
        self,
        state: GameState,
        player: str,
        action: int,
        proof: bytes,
        commitment: bytes,
    ) -> PlotAction:
        """Record ``action`` for ``player`` if the proof checks out.

        Raises NotPlayer, InvalidAction, PlotNotCommitted or InvalidProof, in
        that order.
        """
        slot = state.slot_for(player)
        plot = PlotAction.from_raw(action)

        if slot.plot_hash is None:
            raise PlotNotCommitted(f"{player} has no commitment in round {state.round}")

        if not self.verifier.verify(slot.plot_hash, plot, bytes(proof), bytes(commitment)):
            raise InvalidProof(f"proof from {player} does not match the commitment")

        slot.verified = True
        slot.action = plot
        logger.debug(
            "Session %s round %s: %s verified", state.session_id, state.round, player
        )
        return plot
