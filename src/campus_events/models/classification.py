"""Classification result model.

Remote and fallback classifications share this model. Anything the remote
service returns is re-validated here before it is trusted.
"""

from __future__ import annotations

from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

MAX_TAGS = 8
MAX_AUDIENCE = 3
FALLBACK_CONFIDENCE = 0.25


class EventCategory(str, Enum):
    """Closed set of event categories."""

    ACADEMIC = "Academic"
    CAREER = "Career"
    SOCIAL = "Social"
    CULTURAL = "Cultural"
    SPORTS = "Sports"
    WORKSHOP = "Workshop"
    VOLUNTEER = "Volunteer"
    CLUB_ORG = "Club/Org"
    ADMIN_ADVISING = "Admin/Advising"
    OTHER = "Other"


class Audience(str, Enum):
    """Who an event is aimed at."""

    UNDERGRAD = "Undergrad"
    GRAD = "Grad"
    ALUMNI = "Alumni"
    STAFF = "Staff"
    PUBLIC = "Public"


class LocationType(str, Enum):
    """Where an event takes place."""

    ON_CAMPUS = "On-campus"
    OFF_CAMPUS = "Off-campus"
    VIRTUAL = "Virtual"
    HYBRID = "Hybrid"


class Classification(BaseModel):
    """Structured enrichment attached to a raw event."""

    model_config = ConfigDict(extra="forbid")

    category: EventCategory = Field(description="Single event category")
    tags: list[str] = Field(
        max_length=MAX_TAGS,
        description="Short lowercase tags, de-duplicated",
    )
    audience: list[Audience] = Field(
        min_length=1,
        max_length=MAX_AUDIENCE,
        description="Intended audience",
    )
    normalized_date: AwareDatetime = Field(description="Event start as an ISO 8601 timestamp with offset")
    location_type: LocationType = Field(description="Venue kind")
    confidence: float = Field(ge=0.0, le=1.0, description="Self-reported confidence")
    rationale: str = Field(description="Short explanation for the classification")

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, v: list[str]) -> list[str]:
        seen: dict[str, None] = {}
        for tag in v:
            cleaned = tag.strip().lower()
            if cleaned:
                seen.setdefault(cleaned, None)
        return list(seen)

    @field_validator("audience")
    @classmethod
    def _dedupe_audience(cls, v: list[Audience]) -> list[Audience]:
        # Order-preserving; min_length has already guaranteed a non-empty list.
        return list(dict.fromkeys(v))
