"""Parsing of loosely formatted campus date strings.

Sheet rows carry dates the way people type them: "sept 26 6:00pm",
"Oct 3", "nov 12 7pm". There is never a year. We turn those into an
absolute, timezone-aware timestamp and fall back to "now" rather than fail.

Known limitation: the year is always the current one, so a January event
refreshed in December lands eleven months in the past.

Impossible dates such as "feb 31" also return now. They are not rolled over
into the following month (which would give mar 3).
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = ZoneInfo("America/Los_Angeles")
DEFAULT_HOUR = 9
DEFAULT_MINUTE = 0

MONTHS: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_TIME_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$")
_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


def _parse_day(token: str | None) -> int:
    """Leading integer of the day token; 1 when absent, unparseable or zero."""
    if not token:
        return 1
    m = _LEADING_INT_RE.match(token)
    if not m:
        return 1
    return int(m.group(0)) or 1


def _parse_clock(raw: str) -> tuple[int, int]:
    """Parse `H[:MM][am|pm]` into 24h (hour, minute); 09:00 when it doesn't match."""
    m = _TIME_RE.match(raw)
    if not m:
        return DEFAULT_HOUR, DEFAULT_MINUTE

    hour = int(m.group(1))
    minute = int(m.group(2)) if m.group(2) else 0
    meridiem = m.group(3)
    if meridiem == "pm" and hour < 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0
    return hour, minute


def normalize_campus_date(
    value: str | None,
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> datetime:
    """Turn a free-text campus date into an absolute timestamp.

    Args:
        value: Text such as "sept 26 6:00pm". Case and extra whitespace are ignored.
        now: Current instant; injected by tests. Defaults to the wall clock in `tz`.
        tz: Timezone the date is interpreted in. Defaults to America/Los_Angeles.

    Returns:
        A timezone-aware datetime. When the month is unknown or the resulting
        date/time is impossible (e.g. "feb 31"), the current instant.
    """

    zone = tz or DEFAULT_TIMEZONE
    current = now or datetime.now(zone)

    text = " ".join((value or "").lower().split())
    if not text:
        return current

    parts = text.split(" ")
    month = MONTHS.get(parts[0])
    if month is None:
        return current

    day = _parse_day(parts[1] if len(parts) > 1 else None)
    hour, minute = _parse_clock(" ".join(parts[2:]))

    year = current.astimezone(zone).year if current.tzinfo else current.year
    try:
        return datetime(year, month, day, hour, minute, tzinfo=zone)
    except ValueError:
        return current
