"""API request/response models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .game import GameState

SESSION_ID_MAX = 2**32 - 1


def _hex_bytes(value: str, length: Optional[int] = None) -> str:
    value = value.strip().lower()
    if value.startswith("0x"):
        value = value[2:]
    try:
        raw = bytes.fromhex(value)
    except ValueError:
        raise ValueError("must be a hex string")
    if length is not None and len(raw) != length:
        raise ValueError(f"must encode exactly {length} bytes")
    return value


class StartSessionRequest(BaseModel):
    """Request to start a new intrigue session."""

    session_id: int = Field(ge=0, le=SESSION_ID_MAX)
    player_a: str = Field(min_length=1)
    player_b: str = Field(min_length=1)
    stake_a: int
    stake_b: int
    # identity -> hex HMAC over (session_id, own stake)
    signatures: dict[str, str] = Field(default_factory=dict)


class CommitPlotRequest(BaseModel):
    """Commit a secret plot hash for the current round."""

    player: str
    plot_hash: str  # 32 bytes, hex
    signature: Optional[str] = None

    @field_validator("plot_hash")
    @classmethod
    def _check_plot_hash(cls, value: str) -> str:
        return _hex_bytes(value, 32)


class VerifyPlotRequest(BaseModel):
    """Reveal a plot and prove it matches the earlier commitment."""

    player: str
    action: int  # range-checked by the state machine
    proof: str = ""  # hex
    commitment: str  # 32 bytes, hex
    signature: Optional[str] = None

    @field_validator("proof")
    @classmethod
    def _check_proof(cls, value: str) -> str:
        return _hex_bytes(value)

    @field_validator("commitment")
    @classmethod
    def _check_commitment(cls, value: str) -> str:
        return _hex_bytes(value, 32)


class VerifyPlotResponse(BaseModel):
    verified: bool


class AdminUpdateRequest(BaseModel):
    """Rotate the admin identity or the Hub address."""

    value: str = Field(min_length=1)
    signature: Optional[str] = None


class ContractInfoResponse(BaseModel):
    """Current contract configuration."""

    admin: str
    hub_address: str
    session_counter: int


class SessionResponse(BaseModel):
    """Full session state returned by every session endpoint."""

    session: GameState


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    hub_mode: str  # "http", "logging" or "none" before startup
    active_sessions: int
