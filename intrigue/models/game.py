"""Game state models."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from ..errors import InvalidAction, NotPlayer


class PlotAction(int, Enum):
    """Intrigue plot types. Each one beats the next, cyclically."""

    ASSASSINATION = 0
    BRIBERY = 1
    REBELLION = 2

    @classmethod
    def from_raw(cls, value: int) -> "PlotAction":
        """Convert a raw wire integer, rejecting anything outside {0, 1, 2}."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidAction(f"action must be an integer, got {value!r}")
        if value < 0 or value > 2:
            raise InvalidAction(f"action {value} is outside 0..2")
        return cls(value)

    def beats(self, other: "PlotAction") -> bool:
        """Assassination > Bribery > Rebellion > Assassination."""
        return (self.value + 1) % 3 == other.value

    def __str__(self) -> str:
        return self.name.capitalize()


class PlayerSlot(BaseModel):
    """One side of a session."""

    identity: str
    points: int  # stake, immutable after creation
    prestige: int = 50
    plot_hash: Optional[bytes] = None  # present between commit and resolve
    verified: bool = False
    action: Optional[PlotAction] = None  # present only after verification

    @field_serializer("plot_hash")
    def _serialize_plot_hash(self, value: Optional[bytes]) -> Optional[str]:
        return value.hex() if value is not None else None

    @field_validator("plot_hash", mode="before")
    @classmethod
    def _parse_plot_hash(cls, value):
        if isinstance(value, str):
            return bytes.fromhex(value)
        return value

    def clear_round(self) -> None:
        """Drop the per-round commitment and reveal."""
        self.plot_hash = None
        self.verified = False
        self.action = None


class RoundRecord(BaseModel):
    """Public record of a resolved round."""

    round: int
    action_a: PlotAction
    action_b: PlotAction
    delta_a: int
    delta_b: int
    outcome: Literal["player_a", "player_b", "draw"]


class GameState(BaseModel):
    """Complete state of one intrigue session."""

    session_id: int
    player_a: PlayerSlot
    player_b: PlayerSlot
    round: int = 1
    ended: bool = False
    winner: Optional[str] = None
    history: list[RoundRecord] = Field(default_factory=list)

    def slot_for(self, identity: str) -> PlayerSlot:
        """Return the slot bound to ``identity`` or raise NotPlayer."""
        if identity == self.player_a.identity:
            return self.player_a
        if identity == self.player_b.identity:
            return self.player_b
        raise NotPlayer(f"{identity} is not part of session {self.session_id}")

    @property
    def both_verified(self) -> bool:
        return self.player_a.verified and self.player_b.verified


class GameConfig(BaseModel):
    """Rules of the prestige economy."""

    starting_prestige: int = 50
    max_rounds: int = 3
    draw_bonus: int = 5
    assassination_prestige: int = 30
    bribery_prestige: int = 15
    rebellion_prestige: int = 20
    failed_plot_penalty: int = 10
    session_ttl_seconds: int = 30 * 24 * 60 * 60

    def bonus_for(self, action: PlotAction) -> int:
        """Prestige gained by winning a round with ``action``."""
        return {
            PlotAction.ASSASSINATION: self.assassination_prestige,
            PlotAction.BRIBERY: self.bribery_prestige,
            PlotAction.REBELLION: self.rebellion_prestige,
        }[action]


class ContractConfig(BaseModel):
    """Mutable instance configuration, changed only through admin-gated setters."""

    admin: str
    hub_address: str
    session_counter: int = 0
