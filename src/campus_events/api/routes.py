"""Events API.

Two endpoints matter: `POST /api/refresh` rebuilds the cache from the sheet,
`GET /api/events` returns whatever the cache currently holds.
"""

from __future__ import annotations

import secrets

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from campus_events.api.models import ErrorResponse, EventsResponse, HealthResponse, RefreshResponse
from campus_events.cache import EventCache
from campus_events.config import Settings
from campus_events.refresh import RefreshService

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["events"])
health_router = APIRouter(tags=["health"])


def _cache(request: Request) -> EventCache:
    return request.app.state.cache


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def _token_matches(expected: str, provided: str | None) -> bool:
    if provided is None:
        return False
    return secrets.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def refresh_events(request: Request, token: str | None = None):
    settings = _settings(request)
    if settings.refresh_token and not _token_matches(settings.refresh_token, token):
        logger.warning("refresh_unauthorized", client=request.client.host if request.client else None)
        return JSONResponse(
            status_code=401,
            content=ErrorResponse(error="unauthorized").model_dump(),
        )

    service: RefreshService = request.app.state.refresh_service
    try:
        results = await service.refresh()
    except Exception as exc:  # noqa: BLE001
        # The previous batch stays cached; only this refresh cycle fails.
        logger.exception("refresh_failed", error=str(exc), error_type=type(exc).__name__)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(exc) or "unknown_error").model_dump(),
        )

    return RefreshResponse(count=len(results))


@router.get("/events", response_model=EventsResponse)
def list_events(request: Request) -> EventsResponse:
    return EventsResponse(events=list(_cache(request).snapshot()))


@health_router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    cache = _cache(request)
    return HealthResponse(cached_events=len(cache), last_refresh=cache.updated_at)
