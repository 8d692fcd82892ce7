"""Data models for Campus Events.

This module contains Pydantic models for data validation and serialization.
"""

from campus_events.models.classification import (
    FALLBACK_CONFIDENCE,
    MAX_AUDIENCE,
    MAX_TAGS,
    Audience,
    Classification,
    EventCategory,
    LocationType,
)
from campus_events.models.event import ClassifiedEvent, RawEvent

__all__ = [
    "FALLBACK_CONFIDENCE",
    "MAX_AUDIENCE",
    "MAX_TAGS",
    "Audience",
    "Classification",
    "ClassifiedEvent",
    "EventCategory",
    "LocationType",
    "RawEvent",
]
