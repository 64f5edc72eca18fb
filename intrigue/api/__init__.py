"""API routes."""

from .routes import router, init_dependencies

__all__ = ["router", "init_dependencies"]
