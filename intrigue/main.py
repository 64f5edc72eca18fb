"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import router as api_router, init_dependencies
from .auth import build_auth_gate
from .config import settings
from .game import GameSessionManager
from .hub import HttpNotificationHub
from .models.game import ContractConfig, GameConfig
from .storage import InMemoryExpiringStore

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_session_manager() -> GameSessionManager:
    """Wire a session manager from settings."""
    return GameSessionManager(
        store=InMemoryExpiringStore(),
        hub=HttpNotificationHub(timeout=settings.hub_timeout),
        auth_gate=build_auth_gate(settings.auth_secret, settings.debug),
        config=GameConfig(
            max_rounds=settings.max_rounds,
            starting_prestige=settings.starting_prestige,
            session_ttl_seconds=settings.session_ttl_seconds,
        ),
        contract=ContractConfig(
            admin=settings.admin_identity,
            hub_address=settings.hub_endpoint,
        ),
        service_id=settings.service_id,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    session_manager = build_session_manager()
    init_dependencies(session_manager)

    if settings.hub_endpoint:
        if await session_manager.hub.check_connection(settings.hub_endpoint):
            logger.info("Connected to Game Hub at %s", settings.hub_endpoint)
        else:
            logger.warning("Cannot reach Game Hub at %s", settings.hub_endpoint)
    else:
        logger.info("No Game Hub configured, notifications are logged until one is set")

    yield

    init_dependencies(None)


app = FastAPI(
    title="Stellar Dynasties API",
    description="Two-player commit/reveal intrigue sessions",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


def main():
    """Run the server."""
    import uvicorn

    uvicorn.run(
        "intrigue.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
