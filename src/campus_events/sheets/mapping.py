"""Mapping spreadsheet rows into `RawEvent`."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from campus_events.models import RawEvent

# Column order of the events sheet. There is no separate time column.
COLUMNS: tuple[str, ...] = ("title", "date", "location", "org", "description", "url")


def _cell_text(value: Any) -> str:
    # UNFORMATTED_VALUE hands back numbers and booleans as JSON scalars.
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def row_to_raw_event(row: Sequence[Any] | None) -> RawEvent:
    """Map one sheet row into `RawEvent`.

    Missing trailing cells become empty strings; cells past the known columns
    are ignored.
    """

    cells = list(row or [])
    values = {name: _cell_text(cells[i]) if i < len(cells) else "" for i, name in enumerate(COLUMNS)}
    return RawEvent(time="", **values)


def rows_to_raw_events(rows: Iterable[Sequence[Any]]) -> list[RawEvent]:
    return [row_to_raw_event(row) for row in rows]
