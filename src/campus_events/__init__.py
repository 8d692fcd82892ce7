"""Campus Events - classify spreadsheet-sourced campus events with an LLM.

This package reads event rows from a Google Sheet, enriches each row with a
structured classification from OpenAI (falling back to local keyword
heuristics when the remote service misbehaves) and serves the results over a
small HTTP API.
"""

__version__ = "0.1.0"

from campus_events.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
