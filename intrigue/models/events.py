"""Game Hub notification payloads."""

import time
from typing import Literal

from pydantic import BaseModel, Field


class StartGameNotification(BaseModel):
    """Sent once, before a new session is first persisted."""

    type: Literal["start_game"] = "start_game"
    game_id: str  # identity of the requesting service
    session_id: int
    player1: str
    player2: str
    player1_points: int
    player2_points: int
    timestamp: float = Field(default_factory=time.time)


class EndGameNotification(BaseModel):
    """Sent once, when a session transitions into the ended state."""

    type: Literal["end_game"] = "end_game"
    session_id: int
    player1_won: bool
    timestamp: float = Field(default_factory=time.time)
