"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import sync_router, projects_router
from ..config.logging import configure_logging
from ..container import setup_container


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    container = setup_container()
    configure_logging(
        container.settings.debug or container.dragonherd_settings.is_debug_mode()
    )
    triggers = container.trigger_scheduler
    sync_scheduler = container.sync_scheduler

    # Startup
    sync_scheduler.init(triggers.hooks)
    if container.settings.scheduler.enabled:
        triggers.start()
        sync_scheduler.setup_schedules()
    yield
    # Shutdown
    triggers.stop()


def create_app(
    title: str = "DragonHerd API",
    version: str = "1.0.0",
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        title: API title
        version: API version
        cors_origins: Allowed CORS origins

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title=title,
        version=version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Include routers
    app.include_router(sync_router)
    app.include_router(projects_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "version": version}

    return app


# Create default app instance
app = create_app()
