"""Keyword heuristics used when the remote classifier is unavailable.

The rules are crude and fully deterministic. Results are marked
with a low fixed confidence so consumers can tell they are degraded, but they
satisfy exactly the same schema as remote classifications.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo

import structlog

from campus_events.dates import normalize_campus_date
from campus_events.models import (
    FALLBACK_CONFIDENCE,
    MAX_AUDIENCE,
    MAX_TAGS,
    Audience,
    Classification,
    EventCategory,
    LocationType,
    RawEvent,
)

logger = structlog.get_logger()

FALLBACK_RATIONALE = "Fallback classification used due to API quota or transient errors."

_WORD_RE = re.compile(r"[a-z0-9]+")

# First match wins: an event that is both a "workshop" and a "career" event is a Workshop.
CATEGORY_RULES: tuple[tuple[frozenset[str], EventCategory], ...] = (
    (frozenset({"workshop", "tutorial", "bootcamp"}), EventCategory.WORKSHOP),
    (frozenset({"career", "recruit", "internship"}), EventCategory.CAREER),
    (frozenset({"game", "party", "mixer", "social"}), EventCategory.SOCIAL),
    (frozenset({"club", "org", "meeting"}), EventCategory.CLUB_ORG),
    (frozenset({"volunteer", "service"}), EventCategory.VOLUNTEER),
    (frozenset({"lecture", "seminar", "talk", "colloquium"}), EventCategory.ACADEMIC),
    (frozenset({"basketball", "soccer", "run", "tournament"}), EventCategory.SPORTS),
    (frozenset({"heritage", "cultural", "festival", "film"}), EventCategory.CULTURAL),
)

AUDIENCE_RULES: tuple[tuple[frozenset[str], Audience], ...] = (
    (frozenset({"graduate", "phd", "ms"}), Audience.GRAD),
    (frozenset({"alumni"}), Audience.ALUMNI),
    (frozenset({"staff"}), Audience.STAFF),
    (frozenset({"public", "community"}), Audience.PUBLIC),
)

LOCATION_RULES: tuple[tuple[frozenset[str], LocationType], ...] = (
    (frozenset({"zoom", "virtual", "online"}), LocationType.VIRTUAL),
    (frozenset({"hybrid"}), LocationType.HYBRID),
    (frozenset({"campus", "hall", "center", "theater", "lab"}), LocationType.ON_CAMPUS),
)

TAG_RULES: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({"free"}), "free"),
    (frozenset({"food", "pizza"}), "food"),
    (frozenset({"resume"}), "resume"),
    (frozenset({"tech", "cs", "gds"}), "tech"),
)


def tokenize(event: RawEvent) -> frozenset[str]:
    """Lowercase alphanumeric words from title, description and location."""
    text = f"{event.title} {event.description} {event.location}".lower()
    return frozenset(_WORD_RE.findall(text))


def categorize(tokens: frozenset[str]) -> EventCategory:
    for keywords, category in CATEGORY_RULES:
        if tokens & keywords:
            return category
    return EventCategory.OTHER


def infer_audience(tokens: frozenset[str]) -> list[Audience]:
    audience = [Audience.UNDERGRAD]
    for keywords, label in AUDIENCE_RULES:
        if tokens & keywords:
            audience.append(label)
    return audience[:MAX_AUDIENCE]


def infer_location_type(tokens: frozenset[str]) -> LocationType:
    for keywords, location_type in LOCATION_RULES:
        if tokens & keywords:
            return location_type
    return LocationType.OFF_CAMPUS


def infer_tags(tokens: frozenset[str], category: EventCategory) -> list[str]:
    tags: list[str] = []
    if category is not EventCategory.OTHER:
        tags.append(category.value.lower())
    for keywords, tag in TAG_RULES:
        if tokens & keywords:
            tags.append(tag)
    return list(dict.fromkeys(tags))[:MAX_TAGS]


class HeuristicClassifier:
    """Offline, keyword-driven classifier. Never raises.

    Args:
        tz: Timezone used to interpret the event's date string.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self.tz = tz

    def classify(self, event: RawEvent, *, now: datetime | None = None) -> Classification:
        tokens = tokenize(event)
        category = categorize(tokens)

        classification = Classification(
            category=category,
            tags=infer_tags(tokens, category),
            audience=infer_audience(tokens),
            normalized_date=normalize_campus_date(event.date, now=now, tz=self.tz),
            location_type=infer_location_type(tokens),
            confidence=FALLBACK_CONFIDENCE,
            rationale=FALLBACK_RATIONALE,
        )
        logger.debug(
            "heuristic_classification",
            title=event.title[:80],
            category=classification.category.value,
            location_type=classification.location_type.value,
        )
        return classification
