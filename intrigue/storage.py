"""Expiring session storage."""

import time
from typing import Callable, Optional, Protocol

from .models.game import GameState


class ExpiringStore(Protocol):
    """Keyed persistence whose records lapse unless their lifetime is extended."""

    def get(self, session_id: int) -> Optional[GameState]: ...

    def set(self, session_id: int, state: GameState) -> None: ...

    def extend_lifetime(self, session_id: int, seconds: float) -> None: ...

    def purge_expired(self) -> int: ...

    @property
    def active_count(self) -> int: ...


class InMemoryExpiringStore:
    """In-process ExpiringStore.

    ``get`` hands out deep copies, so callers can mutate freely and nothing is
    visible to other readers until ``set`` is called. A new key lives for
    ``default_lifetime`` seconds until extended; extension never shortens a
    lifetime.
    """

    def __init__(
        self,
        default_lifetime: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_lifetime = default_lifetime
        self._clock = clock
        self._records: dict[int, GameState] = {}
        self._expires_at: dict[int, float] = {}

    def _is_live(self, session_id: int) -> bool:
        expires_at = self._expires_at.get(session_id)
        if expires_at is None:
            return False
        if self._clock() >= expires_at:
            self._records.pop(session_id, None)
            self._expires_at.pop(session_id, None)
            return False
        return True

    def get(self, session_id: int) -> Optional[GameState]:
        if not self._is_live(session_id):
            return None
        return self._records[session_id].model_copy(deep=True)

    def set(self, session_id: int, state: GameState) -> None:
        if not self._is_live(session_id):
            self._expires_at[session_id] = self._clock() + self.default_lifetime
        self._records[session_id] = state.model_copy(deep=True)

    def extend_lifetime(self, session_id: int, seconds: float) -> None:
        if not self._is_live(session_id):
            return
        self._expires_at[session_id] = max(
            self._expires_at[session_id], self._clock() + seconds
        )

    def purge_expired(self) -> int:
        """Drop every lapsed record. Returns how many were removed."""
        expired = [sid for sid in list(self._expires_at) if not self._is_live(sid)]
        return len(expired)

    @property
    def active_count(self) -> int:
        """Number of live sessions."""
        self.purge_expired()
        return len(self._records)
