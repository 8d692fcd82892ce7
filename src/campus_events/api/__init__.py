"""HTTP surface: refresh trigger, event query, health and static assets."""

from campus_events.api.app import create_app

__all__ = ["create_app"]
