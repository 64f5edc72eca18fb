"""Round resolution: matchups, prestige economy and termination."""

import logging

from ..errors import PlayersNotReady
from ..models.game import GameConfig, GameState, PlotAction, RoundRecord

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """Resolves a round once both plots are revealed.

    Assassination beats Bribery, Bribery beats Rebellion, Rebellion beats
    Assassination. The round winner gains a bonus keyed by their own action;
    the loser pays a fixed penalty. A draw gives both a small bonus.
    """

    def __init__(self, config: GameConfig):
        self.config = config

    def matchup(self, action_a: PlotAction, action_b: PlotAction) -> tuple[int, int]:
        """Prestige deltas ``(delta_a, delta_b)`` for an action pair."""
        if action_a == action_b:
            return self.config.draw_bonus, self.config.draw_bonus
        if action_a.beats(action_b):
            return self.config.bonus_for(action_a), -self.config.failed_plot_penalty
        return -self.config.failed_plot_penalty, self.config.bonus_for(action_b)

    def is_terminal(self, state: GameState) -> bool:
        return (
            state.round >= self.config.max_rounds
            or state.player_a.prestige == 0
            or state.player_b.prestige == 0
        )

    def resolve(self, state: GameState) -> RoundRecord:
        """Apply the current round to ``state`` in place.

        On the terminal round ``state.ended`` and ``state.winner`` are set
        (ties go to player_a); otherwise the round counter advances.
        """
        a, b = state.player_a, state.player_b
        if not (a.verified and b.verified):
            raise PlayersNotReady(f"session {state.session_id} round {state.round}")

        action_a, action_b = a.action, b.action
        delta_a, delta_b = self.matchup(action_a, action_b)

        a.prestige = max(0, a.prestige + delta_a)
        b.prestige = max(0, b.prestige + delta_b)

        if action_a == action_b:
            outcome = "draw"
        elif action_a.beats(action_b):
            outcome = "player_a"
        else:
            outcome = "player_b"

        record = RoundRecord(
            round=state.round,
            action_a=action_a,
            action_b=action_b,
            delta_a=delta_a,
            delta_b=delta_b,
            outcome=outcome,
        )
        state.history.append(record)

        a.clear_round()
        b.clear_round()

        if self.is_terminal(state):
            state.ended = True
            state.winner = a.identity if a.prestige >= b.prestige else b.identity
        else:
            state.round += 1

        logger.info(
            "Session %s round %s: %s vs %s -> %s (%s/%s)",
            state.session_id,
            record.round,
            action_a,
            action_b,
            outcome,
            a.prestige,
            b.prestige,
        )
        return record
