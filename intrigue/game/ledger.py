"""Per-round commitment intake."""

import logging

from ..errors import AlreadyCommitted
from ..models.game import GameState
from .commitment import HASH_SIZE

logger = logging.getLogger(__name__)


class CommitmentLedger:
    """Accepts exactly one commitment hash per player per round."""

    def commit(self, state: GameState, player: str, plot_hash: bytes) -> None:
        """Store ``plot_hash`` in the player's slot.

        Raises NotPlayer for outsiders and AlreadyCommitted when the slot is
        already filled; the stored hash is never replaced.
        """
        if len(plot_hash) != HASH_SIZE:
            raise ValueError(f"plot hash must be {HASH_SIZE} bytes, got {len(plot_hash)}")

        slot = state.slot_for(player)
        if slot.plot_hash is not None:
            raise AlreadyCommitted(f"{player} already committed in round {state.round}")

        slot.plot_hash = bytes(plot_hash)
        logger.debug(
            "Session %s round %s: %s committed %s...",
            state.session_id,
            state.round,
            player,
            plot_hash.hex()[:8],
        )
