"""API route modules."""

from .sync import router as sync_router
from .projects import router as projects_router

__all__ = ["sync_router", "projects_router"]
