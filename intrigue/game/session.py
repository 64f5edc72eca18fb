"""Game session management."""

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from typing import Any, Mapping, Optional, Sequence

from ..auth import AuthGate
from ..config import settings
from ..errors import (
    IntrigueError,
    SamePlayer,
    SessionAlreadyStarted,
    SessionEnded,
    SessionNotFound,
    Unauthorized,
)
from ..hub import NotificationHub
from ..models.events import EndGameNotification, StartGameNotification
from ..models.game import ContractConfig, GameConfig, GameState, PlayerSlot
from ..storage import ExpiringStore
from .engine import ResolutionEngine
from .ledger import CommitmentLedger
from .verification import ProofVerifier, VerificationGate

logger = logging.getLogger(__name__)


class GameSessionManager:
    """Owns the lifecycle of every intrigue session.

    Each public operation runs as one transaction under its session's lock:
    load a private copy from the store, validate and mutate it, notify the
    Hub, then write it back and extend its lifetime. Anything that raises
    before the write leaves the store untouched. Distinct sessions never wait
    on each other; admin setters share a separate lock for the contract
    record.
    """

    def __init__(
        self,
        store: ExpiringStore,
        hub: NotificationHub,
        auth_gate: AuthGate,
        config: Optional[GameConfig] = None,
        contract: Optional[ContractConfig] = None,
        verifier: Optional[ProofVerifier] = None,
        service_id: str = settings.service_id,
    ):
        self.store = store
        self.hub = hub
        self.auth_gate = auth_gate
        self.config = config or GameConfig()
        self.contract = contract or ContractConfig(
            admin=settings.admin_identity,
            hub_address=settings.hub_endpoint,
        )
        self.service_id = service_id

        self.ledger = CommitmentLedger()
        self.gate = VerificationGate(verifier)
        self.engine = ResolutionEngine(self.config)

        self._session_locks: weakref.WeakValueDictionary[int, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._contract_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Transaction helpers
    # ------------------------------------------------------------------

    def _session_lock(self, session_id: int) -> asyncio.Lock:
        lock = self._session_locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._session_locks[session_id] = lock
        return lock

    @asynccontextmanager
    async def _transaction(
        self, operation: str, session_id: Any, lock: Optional[asyncio.Lock] = None
    ):
        if lock is None:
            lock = self._session_lock(session_id)
        async with lock:
            try:
                yield
            except IntrigueError as e:
                logger.warning("%s on session %s rejected: %s", operation, session_id, e.code)
                raise

    def _load(self, session_id: int) -> GameState:
        state = self.store.get(session_id)
        if state is None:
            raise SessionNotFound(f"session {session_id}")
        return state

    def _load_active(self, session_id: int) -> GameState:
        state = self._load(session_id)
        if state.ended:
            raise SessionEnded(f"session {session_id}")
        return state

    def _authorize(
        self, identity: str, bound_args: Sequence[Any], signature: Optional[str]
    ) -> None:
        if not self.auth_gate.require(identity, bound_args, signature):
            raise Unauthorized(f"{identity} did not authorize this call")

    def _persist(self, state: GameState) -> None:
        self.store.set(state.session_id, state)
        self.store.extend_lifetime(state.session_id, self.config.session_ttl_seconds)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def start_session(
        self,
        session_id: int,
        player_a: str,
        player_b: str,
        stake_a: int,
        stake_b: int,
        signatures: Optional[Mapping[str, str]] = None,
    ) -> GameState:
        """Start a new session between two distinct players.

        Both players must authorize the exact session id and their own stake.
        The Hub hears about the session before it is stored.
        """
        signatures = signatures or {}
        async with self._transaction("start_session", session_id):
            if player_a == player_b:
                raise SamePlayer(f"{player_a} cannot play against themselves")

            self._authorize(player_a, (session_id, stake_a), signatures.get(player_a))
            self._authorize(player_b, (session_id, stake_b), signatures.get(player_b))

            if self.store.get(session_id) is not None:
                raise SessionAlreadyStarted(f"session {session_id}")

            await self.hub.start_game(
                self.contract.hub_address,
                StartGameNotification(
                    game_id=self.service_id,
                    session_id=session_id,
                    player1=player_a,
                    player2=player_b,
                    player1_points=stake_a,
                    player2_points=stake_b,
                ),
            )

            prestige = self.config.starting_prestige
            state = GameState(
                session_id=session_id,
                player_a=PlayerSlot(identity=player_a, points=stake_a, prestige=prestige),
                player_b=PlayerSlot(identity=player_b, points=stake_b, prestige=prestige),
            )
            self._persist(state)
            self.contract.session_counter += 1

        logger.info("Session %s started: %s vs %s", session_id, player_a, player_b)
        return state

    async def commit_plot(
        self,
        session_id: int,
        player: str,
        plot_hash: bytes,
        signature: Optional[str] = None,
    ) -> GameState:
        """Commit the player's secret plot hash for the current round."""
        async with self._transaction("commit_plot", session_id):
            state = self._load_active(session_id)
            self._authorize(player, (), signature)
            self.ledger.commit(state, player, plot_hash)
            self._persist(state)
        return state

    async def verify_plot(
        self,
        session_id: int,
        player: str,
        action: int,
        proof: bytes,
        commitment: bytes,
        signature: Optional[str] = None,
    ) -> bool:
        """Reveal the player's action and prove it against their commitment."""
        async with self._transaction("verify_plot", session_id):
            state = self._load_active(session_id)
            self._authorize(player, (), signature)
            self.gate.reveal(state, player, action, proof, commitment)
            self._persist(state)
        return True

    async def resolve_round(self, session_id: int) -> GameState:
        """Resolve the current round and return the updated session.

        On the terminal round the Hub is told who won, exactly once.
        """
        async with self._transaction("resolve_round", session_id):
            state = self._load_active(session_id)
            self.engine.resolve(state)

            if state.ended:
                player_a_won = state.winner == state.player_a.identity
                await self.hub.end_game(
                    self.contract.hub_address,
                    EndGameNotification(session_id=session_id, player1_won=player_a_won),
                )
                logger.info(
                    "Session %s ended after round %s, winner %s (%s/%s)",
                    session_id,
                    state.round,
                    state.winner,
                    state.player_a.prestige,
                    state.player_b.prestige,
                )

            self._persist(state)
        return state

    def get_game(self, session_id: int) -> GameState:
        """Current stored state. Pure read."""
        return self._load(session_id)

    # ------------------------------------------------------------------
    # Contract administration
    # ------------------------------------------------------------------

    def get_admin(self) -> str:
        return self.contract.admin

    def get_hub(self) -> str:
        return self.contract.hub_address

    def contract_info(self) -> ContractConfig:
        return self.contract.model_copy()

    async def set_admin(self, new_admin: str, signature: Optional[str] = None) -> None:
        """Hand admin rights to ``new_admin``. The current admin must sign."""
        async with self._transaction("set_admin", "-", self._contract_lock):
            self._authorize(self.contract.admin, (new_admin,), signature)
            logger.info("Admin rotated from %s to %s", self.contract.admin, new_admin)
            self.contract.admin = new_admin

    async def set_hub(self, new_hub: str, signature: Optional[str] = None) -> None:
        """Point Hub notifications at ``new_hub``. The current admin must sign."""
        async with self._transaction("set_hub", "-", self._contract_lock):
            self._authorize(self.contract.admin, (new_hub,), signature)
            logger.info("Hub address changed to %s", new_hub)
            self.contract.hub_address = new_hub

    @property
    def active_session_count(self) -> int:
        """Number of live sessions in the store."""
        return self.store.active_count
