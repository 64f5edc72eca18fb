"""Tests for Pydantic models."""

# Add project root to path for imports BEFORE other imports
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from pydantic import ValidationError

from intrigue.errors import InvalidAction, NotPlayer
from intrigue.models import (
    CommitPlotRequest,
    EndGameNotification,
    GameConfig,
    GameState,
    PlayerSlot,
    PlotAction,
    StartSessionRequest,
    VerifyPlotRequest,
)

from conftest import HASH_A, PLAYER_A, PLAYER_B


# =============================================================================
# PlotAction Tests
# =============================================================================


class TestPlotAction:
    """Tests for PlotAction."""

    @pytest.mark.parametrize("raw,expected", [(0, "ASSASSINATION"), (1, "BRIBERY"), (2, "REBELLION")])
    def test_from_raw(self, raw, expected):
        assert PlotAction.from_raw(raw) is PlotAction[expected]

    @pytest.mark.parametrize("raw", [-1, 3, 255, "1", 1.0, None, False])
    def test_from_raw_rejects(self, raw):
        with pytest.raises(InvalidAction):
            PlotAction.from_raw(raw)

    def test_beats_cycle(self):
        A, B, R = PlotAction.ASSASSINATION, PlotAction.BRIBERY, PlotAction.REBELLION
        assert A.beats(B) and B.beats(R) and R.beats(A)
        assert not B.beats(A)
        assert not A.beats(A)

    def test_str(self):
        assert str(PlotAction.BRIBERY) == "Bribery"


# =============================================================================
# Game State Tests
# =============================================================================


class TestPlayerSlot:
    """Tests for PlayerSlot."""

    def test_defaults(self):
        slot = PlayerSlot(identity=PLAYER_A, points=100)
        assert slot.prestige == 50
        assert slot.plot_hash is None
        assert slot.verified is False
        assert slot.action is None

    def test_plot_hash_serialized_as_hex(self):
        slot = PlayerSlot(identity=PLAYER_A, points=100, plot_hash=HASH_A)
        data = slot.model_dump(mode="json")
        assert data["plot_hash"] == HASH_A.hex()

    def test_plot_hash_parsed_from_hex(self):
        slot = PlayerSlot(identity=PLAYER_A, points=100, plot_hash=HASH_A.hex())
        assert slot.plot_hash == HASH_A

    def test_clear_round(self):
        slot = PlayerSlot(
            identity=PLAYER_A,
            points=100,
            prestige=70,
            plot_hash=HASH_A,
            verified=True,
            action=PlotAction.REBELLION,
        )

        slot.clear_round()

        assert slot.plot_hash is None
        assert slot.verified is False
        assert slot.action is None
        assert slot.prestige == 70


class TestGameState:
    """Tests for GameState."""

    def test_slot_for(self, state_factory):
        state = state_factory()
        assert state.slot_for(PLAYER_A) is state.player_a
        assert state.slot_for(PLAYER_B) is state.player_b

    def test_slot_for_outsider(self, state_factory):
        with pytest.raises(NotPlayer):
            state_factory().slot_for("GSTRANGER")

    def test_both_verified(self, state_factory):
        assert state_factory().both_verified is False
        assert state_factory(action_a=PlotAction.BRIBERY).both_verified is False
        assert state_factory(PlotAction.BRIBERY, PlotAction.REBELLION).both_verified is True

    def test_json_round_trip(self, state_factory):
        state = state_factory(PlotAction.BRIBERY, PlotAction.REBELLION)
        restored = GameState.model_validate_json(state.model_dump_json())
        assert restored == state


class TestGameConfig:
    """Tests for GameConfig."""

    def test_defaults(self):
        config = GameConfig()
        assert config.starting_prestige == 50
        assert config.max_rounds == 3
        assert config.session_ttl_seconds == 2_592_000

    def test_bonus_for(self):
        config = GameConfig()
        assert config.bonus_for(PlotAction.ASSASSINATION) == 30
        assert config.bonus_for(PlotAction.BRIBERY) == 15
        assert config.bonus_for(PlotAction.REBELLION) == 20


# =============================================================================
# API Model Tests
# =============================================================================


class TestRequestModels:
    """Tests for request validation."""

    def test_commit_accepts_prefixed_hex(self):
        request = CommitPlotRequest(player=PLAYER_A, plot_hash="0x" + HASH_A.hex().upper())
        assert request.plot_hash == HASH_A.hex()

    @pytest.mark.parametrize("plot_hash", ["zz" * 32, "ab" * 31, "ab" * 33, ""])
    def test_commit_rejects_bad_hash(self, plot_hash):
        with pytest.raises(ValidationError):
            CommitPlotRequest(player=PLAYER_A, plot_hash=plot_hash)

    def test_verify_proof_optional(self):
        request = VerifyPlotRequest(player=PLAYER_A, action=1, commitment=HASH_A.hex())
        assert request.proof == ""
        assert request.signature is None

    def test_verify_rejects_bad_proof(self):
        with pytest.raises(ValidationError):
            VerifyPlotRequest(player=PLAYER_A, action=1, proof="xyz", commitment=HASH_A.hex())

    def test_verify_keeps_out_of_range_action(self):
        """Range checks belong to the state machine, not the schema."""
        request = VerifyPlotRequest(player=PLAYER_A, action=9, commitment=HASH_A.hex())
        assert request.action == 9

    @pytest.mark.parametrize("session_id", [-1, 2**32])
    def test_start_rejects_session_id(self, session_id):
        with pytest.raises(ValidationError):
            StartSessionRequest(
                session_id=session_id,
                player_a=PLAYER_A,
                player_b=PLAYER_B,
                stake_a=1,
                stake_b=1,
            )

    def test_start_accepts_bounds(self):
        for session_id in (0, 2**32 - 1):
            request = StartSessionRequest(
                session_id=session_id,
                player_a=PLAYER_A,
                player_b=PLAYER_B,
                stake_a=1,
                stake_b=1,
            )
            assert request.signatures == {}


class TestNotifications:
    """Tests for Hub notification payloads."""

    def test_end_game_defaults(self):
        notification = EndGameNotification(session_id=3, player1_won=False)
        assert notification.type == "end_game"
        assert notification.timestamp > 0
