"""Pydantic models for game state, API and Hub notifications."""

from .game import (
    PlotAction,
    PlayerSlot,
    RoundRecord,
    GameState,
    GameConfig,
    ContractConfig,
)
from .events import (
    StartGameNotification,
    EndGameNotification,
)
from .api import (
    StartSessionRequest,
    CommitPlotRequest,
    VerifyPlotRequest,
    VerifyPlotResponse,
    AdminUpdateRequest,
    ContractInfoResponse,
    SessionResponse,
    HealthResponse,
)

__all__ = [
    # Game models
    "PlotAction",
    "PlayerSlot",
    "RoundRecord",
    "GameState",
    "GameConfig",
    "ContractConfig",
    # Hub notifications
    "StartGameNotification",
    "EndGameNotification",
    # API
    "StartSessionRequest",
    "CommitPlotRequest",
    "VerifyPlotRequest",
    "VerifyPlotResponse",
    "AdminUpdateRequest",
    "ContractInfoResponse",
    "SessionResponse",
    "HealthResponse",
]
