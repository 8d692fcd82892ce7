"""Structured-output schema for event classifications.

The same schema is sent to the generation service (strict mode) and enforced
again locally by `parse_classification`, so a response that is valid JSON but
breaks the contract is rejected before it reaches the cache.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from campus_events.exceptions import MalformedOutputError
from campus_events.models import (
    MAX_AUDIENCE,
    MAX_TAGS,
    Audience,
    Classification,
    EventCategory,
    LocationType,
)

CLASSIFICATION_SCHEMA_NAME = "EventClassification"

CLASSIFICATION_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "category": {
            "type": "string",
            "enum": [c.value for c in EventCategory],
        },
        "tags": {
            "type": "array",
            "items": {"type": "string"},
            "maxItems": MAX_TAGS,
        },
        "audience": {
            "type": "array",
            "items": {"type": "string", "enum": [a.value for a in Audience]},
            "minItems": 1,
            "maxItems": MAX_AUDIENCE,
        },
        "normalized_date": {"type": "string", "format": "date-time"},
        "location_type": {
            "type": "string",
            "enum": [t.value for t in LocationType],
        },
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
        "rationale": {"type": "string"},
    },
    "required": [
        "category",
        "tags",
        "audience",
        "normalized_date",
        "location_type",
        "confidence",
        "rationale",
    ],
}


def parse_classification(raw: str | None) -> Classification:
    """Parse and validate a raw model response.

    Raises:
        MalformedOutputError: If the text is not a JSON object or does not
            satisfy the classification schema.
    """

    text = (raw or "").strip()
    if not text:
        raise MalformedOutputError("empty model response")

    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedOutputError(f"model response is not valid JSON: {exc}") from exc

    if not isinstance(obj, dict):
        raise MalformedOutputError(f"expected a JSON object, got {type(obj).__name__}")

    try:
        return Classification.model_validate(obj)
    except ValidationError as exc:
        raise MalformedOutputError(
            f"model response failed schema validation ({exc.error_count()} errors)"
        ) from exc
