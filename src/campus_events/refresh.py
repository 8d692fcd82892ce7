"""Refresh service.

This module wires the sheet reader, the classifier and the cache together
into the single operation behind `POST /api/refresh`.
"""

from __future__ import annotations

import asyncio
import time

import structlog

from campus_events.cache import EventCache
from campus_events.classifier.heuristic import HeuristicClassifier
from campus_events.classifier.orchestrator import ResilientClassifier
from campus_events.config import Settings
from campus_events.llm.client import OpenAIClassifierClient
from campus_events.models import ClassifiedEvent
from campus_events.pipeline import BatchPipeline
from campus_events.sheets.client import SheetsClient
from campus_events.sheets.mapping import rows_to_raw_events

logger = structlog.get_logger()


def build_classifier(settings: Settings, *, offline: bool = False) -> ResilientClassifier:
    """Build the resilient classifier configured by `settings`.

    Args:
        settings: Application settings.
        offline: Skip the remote classifier entirely and use heuristics only.
    """
    remote = None if offline else OpenAIClassifierClient(settings)
    return ResilientClassifier(
        remote,
        HeuristicClassifier(tz=settings.tzinfo),
        max_retries=settings.classifier_max_retries,
        initial_delay=settings.classifier_initial_delay,
        backoff=settings.classifier_backoff,
    )


class RefreshService:
    """Reads the sheet, classifies every row and publishes the batch.

    Only one refresh runs at a time; a second request waits for the first.
    A failure while reading the sheet propagates and leaves the cache as it was.
    """

    def __init__(
        self,
        cache: EventCache,
        sheets_client: SheetsClient | None = None,
        classifier: ResilientClassifier | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the refresh service.

        Args:
            cache: Cache replaced by each successful refresh.
            sheets_client: Sheet reader. If None, creates a new one.
            classifier: Resilient classifier. If None, builds one from settings.
            settings: Application settings. If None, uses default settings.
        """
        from campus_events.config import get_settings

        self.settings = settings or get_settings()
        self.cache = cache
        self.sheets_client = sheets_client or SheetsClient(self.settings)
        self.classifier = classifier or build_classifier(self.settings)
        self.pipeline = BatchPipeline(self.classifier, cache)
        self._lock = asyncio.Lock()
        logger.info("refresh_service_initialized")

    async def close(self) -> None:
        """Close the classifier's remote client."""
        await self.classifier.close()
        logger.info("refresh_service_closed")

    async def refresh(self) -> list[ClassifiedEvent]:
        """Run one full refresh cycle.

        Returns:
            The newly cached batch.

        Raises:
            ConfigurationError: If the sheet cannot be addressed.
            SheetsAPIError: If reading the sheet fails.
        """
        async with self._lock:
            started = time.monotonic()
            logger.info("refresh_started", range=self.settings.sheet_range)

            rows = await self.sheets_client.get_rows(self.settings.sheet_range)
            raw_events = rows_to_raw_events(rows)
            logger.info("refresh_rows_fetched", row_count=len(raw_events))

            results = await self.pipeline.run(raw_events, max_events=self.settings.max_events)

            logger.info(
                "refresh_completed",
                count=len(results),
                duration_seconds=round(time.monotonic() - started, 2),
            )
            return results
