"""REST API routes."""

from fastapi import APIRouter, HTTPException

from ..errors import IntrigueError
from ..game import GameSessionManager
from ..hub import HttpNotificationHub
from ..models.api import (
    AdminUpdateRequest,
    CommitPlotRequest,
    ContractInfoResponse,
    HealthResponse,
    SessionResponse,
    StartSessionRequest,
    VerifyPlotRequest,
    VerifyPlotResponse,
)

router = APIRouter()

# Global session manager (will be initialized in main.py)
session_manager: GameSessionManager = None


def init_dependencies(sm: GameSessionManager):
    """Initialize route dependencies."""
    global session_manager
    session_manager = sm


def _manager() -> GameSessionManager:
    if session_manager is None:
        raise HTTPException(status_code=500, detail="Server not initialized")
    return session_manager


def _http_error(error: IntrigueError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.code)


@router.post("/sessions", response_model=SessionResponse)
async def start_session(request: StartSessionRequest):
    """Start a new intrigue session."""
    manager = _manager()
    try:
        state = await manager.start_session(
            request.session_id,
            request.player_a,
            request.player_b,
            request.stake_a,
            request.stake_b,
            signatures=request.signatures,
        )
    except IntrigueError as e:
        raise _http_error(e)
    return SessionResponse(session=state)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: int):
    """Get current session state."""
    manager = _manager()
    try:
        state = manager.get_game(session_id)
    except IntrigueError as e:
        raise _http_error(e)
    return SessionResponse(session=state)


@router.post("/sessions/{session_id}/commit", response_model=SessionResponse)
async def commit_plot(session_id: int, request: CommitPlotRequest):
    """Commit a plot hash for the current round."""
    manager = _manager()
    try:
        state = await manager.commit_plot(
            session_id,
            request.player,
            bytes.fromhex(request.plot_hash),
            signature=request.signature,
        )
    except IntrigueError as e:
        raise _http_error(e)
    return SessionResponse(session=state)


@router.post("/sessions/{session_id}/verify", response_model=VerifyPlotResponse)
async def verify_plot(session_id: int, request: VerifyPlotRequest):
    """Reveal and prove a committed plot."""
    manager = _manager()
    try:
        verified = await manager.verify_plot(
            session_id,
            request.player,
            request.action,
            bytes.fromhex(request.proof),
            bytes.fromhex(request.commitment),
            signature=request.signature,
        )
    except IntrigueError as e:
        raise _http_error(e)
    return VerifyPlotResponse(verified=verified)


@router.post("/sessions/{session_id}/resolve", response_model=SessionResponse)
async def resolve_round(session_id: int):
    """Resolve the current round once both plots are verified."""
    manager = _manager()
    try:
        state = await manager.resolve_round(session_id)
    except IntrigueError as e:
        raise _http_error(e)
    return SessionResponse(session=state)


@router.get("/admin", response_model=ContractInfoResponse)
async def contract_info():
    """Current admin, Hub address and session counter."""
    info = _manager().contract_info()
    return ContractInfoResponse(**info.model_dump())


@router.put("/admin/admin", response_model=ContractInfoResponse)
async def set_admin(request: AdminUpdateRequest):
    """Rotate the admin identity."""
    manager = _manager()
    try:
        await manager.set_admin(request.value, signature=request.signature)
    except IntrigueError as e:
        raise _http_error(e)
    return ContractInfoResponse(**manager.contract_info().model_dump())


@router.put("/admin/hub", response_model=ContractInfoResponse)
async def set_hub(request: AdminUpdateRequest):
    """Point Hub notifications at a new address."""
    manager = _manager()
    try:
        await manager.set_hub(request.value, signature=request.signature)
    except IntrigueError as e:
        raise _http_error(e)
    return ContractInfoResponse(**manager.contract_info().model_dump())


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    if session_manager is None:
        return HealthResponse(status="healthy", hub_mode="none", active_sessions=0)

    sends_http = isinstance(session_manager.hub, HttpNotificationHub)
    hub_mode = "http" if sends_http and session_manager.get_hub() else "logging"
    return HealthResponse(
        status="healthy",
        hub_mode=hub_mode,
        active_sessions=session_manager.active_session_count,
    )
