"""Event models.

A `RawEvent` is one spreadsheet row, before enrichment. A `ClassifiedEvent`
is the same row with its classification attached; on the wire the raw fields
stay at the top level and the enrichment sits under `classification`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from campus_events.models.classification import Classification


class RawEvent(BaseModel):
    """One ingested event row. Every field tolerates being empty."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Event title")
    date: str = Field(default="", description="Free-text date, e.g. 'sept 26 6:00pm'")
    time: str = Field(default="", description="Separate time column (usually empty)")
    location: str = Field(default="", description="Venue")
    org: str = Field(default="", description="Hosting organization")
    description: str = Field(default="", description="Free-text description")
    url: str = Field(default="", description="Link to the event page")


class ClassifiedEvent(RawEvent):
    """A raw event together with its classification."""

    classification: Classification

    @classmethod
    def from_raw(cls, event: RawEvent, classification: Classification) -> "ClassifiedEvent":
        return cls(**event.model_dump(), classification=classification)
