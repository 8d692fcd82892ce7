"""In-memory holder of the latest classified batch.

There is no persistence: the cache starts empty, each successful
refresh replaces it wholesale, and a restart empties it again.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from datetime import datetime, timezone

import structlog

from campus_events.models import ClassifiedEvent

logger = structlog.get_logger()


class EventCache:
    """Single-writer, many-reader cell holding one complete batch.

    Readers get an immutable snapshot, so they always observe either the
    previous batch or the new one, never a mix.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: tuple[ClassifiedEvent, ...] = ()
        self._updated_at: datetime | None = None

    def replace(self, events: Iterable[ClassifiedEvent]) -> None:
        """Swap in a new batch, discarding the old one entirely."""
        batch = tuple(events)
        with self._lock:
            self._events = batch
            self._updated_at = datetime.now(timezone.utc)
        logger.info("event_cache_replaced", count=len(batch))

    def snapshot(self) -> tuple[ClassifiedEvent, ...]:
        with self._lock:
            return self._events

    @property
    def updated_at(self) -> datetime | None:
        """When the cache was last replaced, or None before the first refresh."""
        with self._lock:
            return self._updated_at

    def __len__(self) -> int:
        return len(self.snapshot())
