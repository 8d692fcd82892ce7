"""Prompt contract for classifying campus events."""

from __future__ import annotations

from campus_events.models import RawEvent

PROMPT_VERSION = "event-classify-v1"

# Descriptions are free text pasted by organizers; keep the prompt bounded.
MAX_DESCRIPTION_CHARS = 4_000


def build_classification_prompt(event: RawEvent, *, timezone: str = "America/Los_Angeles") -> str:
    """Build a prompt requesting a classification that matches the output schema.

    The schema itself is sent separately as a strict structured-output format;
    the prompt only explains how to fill it in.

    Args:
        event: The raw event row.
        timezone: IANA timezone the event's date/time should be normalized in.

    Returns:
        Prompt string.
    """

    description = event.description.strip()
    if len(description) > MAX_DESCRIPTION_CHARS:
        description = description[:MAX_DESCRIPTION_CHARS]

    when = f"{event.date} {event.time}".strip()

    return (
        "You are classifying UCSC campus events for a student website.\n"
        "Return ONLY valid JSON that matches the provided JSON schema.\n"
        f"- Normalize date/time to ISO 8601 in {timezone}.\n"
        "- If only a date exists, default time to 09:00:00.\n"
        '- Detect location_type from "Zoom/virtual/online/hybrid/campus" hints.\n'
        "- Tags should be concise (<=8), useful, and lowercase.\n"
        "\n"
        "Event:\n"
        f"Title: {event.title}\n"
        f"Description: {description}\n"
        f"When: {when}\n"
        f"Where: {event.location}\n"
        f"Org: {event.org}\n"
        f"URL: {event.url}\n"
    )
