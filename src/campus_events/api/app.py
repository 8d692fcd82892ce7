"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from campus_events import __version__
from campus_events.api.routes import health_router, router
from campus_events.cache import EventCache
from campus_events.config import Settings
from campus_events.refresh import RefreshService

logger = structlog.get_logger()


def create_app(
    settings: Settings | None = None,
    *,
    cache: EventCache | None = None,
    refresh_service: RefreshService | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Args:
        settings: Application settings. If None, uses default settings.
        cache: Event cache shared with the refresh service. If None, an empty one.
        refresh_service: Service behind POST /api/refresh. If None, built from settings.

    Returns:
        Configured FastAPI app. The static directory is mounted at `/` last so
        it never shadows the API routes.
    """
    from campus_events.config import get_settings

    settings = settings or get_settings()
    cache = cache if cache is not None else EventCache()
    refresh_service = refresh_service or RefreshService(cache, settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.refresh_service.close()

    app = FastAPI(title="Campus Events", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.cache = cache
    app.state.refresh_service = refresh_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.include_router(health_router)

    static_dir = settings.static_dir
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
        logger.info("static_files_mounted", directory=str(static_dir))
    else:
        logger.warning("static_dir_missing", directory=str(static_dir))

    return app
