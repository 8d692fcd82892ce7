"""Google Sheets access for the event source."""

from campus_events.sheets.client import SheetsClient
from campus_events.sheets.mapping import row_to_raw_event, rows_to_raw_events

__all__ = ["SheetsClient", "row_to_raw_event", "rows_to_raw_events"]
