"""Root conftest for path setup and shared fixtures.

This file is loaded first by pytest and ensures the project root
is on sys.path before any test modules are imported.
"""

import sys
from pathlib import Path

# Add project root to path IMMEDIATELY
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from typing import Optional

import pytest

from intrigue.auth import AllowAllAuthGate
from intrigue.game import GameSessionManager
from intrigue.hub import LoggingNotificationHub
from intrigue.models.game import (
    ContractConfig,
    GameConfig,
    GameState,
    PlayerSlot,
    PlotAction,
)
from intrigue.storage import InMemoryExpiringStore


PLAYER_A = "GDUKE"
PLAYER_B = "GBARON"
HUB_ADDRESS = "http://hub.test"
HASH_A = bytes([1] * 32)
HASH_B = bytes([2] * 32)
PROOF_A = bytes([10] * 64)
PROOF_B = bytes([20] * 64)


# =============================================================================
# Clock and Storage Fixtures
# =============================================================================


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """A clock that only moves when told to."""
    return FakeClock()


@pytest.fixture
def store(clock) -> InMemoryExpiringStore:
    """In-memory store driven by the fake clock."""
    return InMemoryExpiringStore(default_lifetime=60.0, clock=clock)


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def hub() -> LoggingNotificationHub:
    """Hub that records notifications."""
    return LoggingNotificationHub()


@pytest.fixture
def auth_gate() -> AllowAllAuthGate:
    """Gate that approves everything and records what was bound."""
    return AllowAllAuthGate()


@pytest.fixture
def game_config() -> GameConfig:
    """Default rules."""
    return GameConfig()


@pytest.fixture
def manager(store, hub, auth_gate, game_config) -> GameSessionManager:
    """Session manager wired to in-memory collaborators."""
    return GameSessionManager(
        store=store,
        hub=hub,
        auth_gate=auth_gate,
        config=game_config,
        contract=ContractConfig(admin="GADMIN", hub_address=HUB_ADDRESS),
        service_id="stellar-dynasties",
    )


# =============================================================================
# Game Flow Helpers
# =============================================================================


@pytest.fixture
def play_round():
    """Commit, verify and resolve one round with the given actions."""

    async def _play(
        manager: GameSessionManager,
        session_id: int,
        action_a: PlotAction,
        action_b: PlotAction,
    ) -> GameState:
        await manager.commit_plot(session_id, PLAYER_A, HASH_A)
        await manager.commit_plot(session_id, PLAYER_B, HASH_B)
        await manager.verify_plot(session_id, PLAYER_A, action_a.value, PROOF_A, HASH_A)
        await manager.verify_plot(session_id, PLAYER_B, action_b.value, PROOF_B, HASH_B)
        return await manager.resolve_round(session_id)

    return _play


def make_state(
    action_a: Optional[PlotAction] = None,
    action_b: Optional[PlotAction] = None,
    prestige_a: int = 50,
    prestige_b: int = 50,
    round: int = 1,
) -> GameState:
    """Build a session, with both plots revealed when actions are given."""
    state = GameState(
        session_id=1,
        player_a=PlayerSlot(identity=PLAYER_A, points=1000, prestige=prestige_a),
        player_b=PlayerSlot(identity=PLAYER_B, points=1000, prestige=prestige_b),
        round=round,
    )
    for slot, action, plot_hash in (
        (state.player_a, action_a, HASH_A),
        (state.player_b, action_b, HASH_B),
    ):
        if action is not None:
            slot.plot_hash = plot_hash
            slot.verified = True
            slot.action = action
    return state


@pytest.fixture
def state_factory():
    """Factory for sessions in arbitrary positions."""
    return make_state
