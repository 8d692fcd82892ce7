"""API models for the Campus Events service."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from campus_events.models import ClassifiedEvent


class EventsResponse(BaseModel):
    events: list[ClassifiedEvent]


class RefreshResponse(BaseModel):
    ok: bool = True
    count: int


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    cached_events: int
    last_refresh: datetime | None = None
