"""Batch classification pipeline.

Rows are classified one after another, never concurrently, so the remote
service sees at most one in-flight request from us. The cache is only touched
once the whole batch has been classified.
"""

from __future__ import annotations

import time
from collections.abc import Sequence

import structlog

from campus_events.cache import EventCache
from campus_events.classifier.orchestrator import ClassificationSource, ResilientClassifier
from campus_events.models import ClassifiedEvent, RawEvent

logger = structlog.get_logger()


class BatchPipeline:
    """Drive the resilient classifier over a batch and publish the result.

    Args:
        classifier: Never-failing classifier used for every row.
        cache: Cache replaced with the finished batch.
    """

    def __init__(self, classifier: ResilientClassifier, cache: EventCache) -> None:
        self.classifier = classifier
        self.cache = cache

    async def run(
        self,
        raw_events: Sequence[RawEvent],
        *,
        max_events: int | None = None,
    ) -> list[ClassifiedEvent]:
        """Classify up to `max_events` rows in order and replace the cache.

        Args:
            raw_events: Rows in source order.
            max_events: Cap on rows processed this run; None means all.

        Returns:
            The classified batch, in input order.
        """
        if max_events is not None and max_events < 0:
            raise ValueError(f"max_events must be >= 0, got {max_events}")

        batch = list(raw_events) if max_events is None else list(raw_events[:max_events])
        started = time.monotonic()
        logger.info(
            "batch_started",
            input_count=len(raw_events),
            batch_count=len(batch),
            max_events=max_events,
        )

        results: list[ClassifiedEvent] = []
        fallback_count = 0
        for event in batch:
            classification, source = await self.classifier.classify_with_source(event)
            if source is ClassificationSource.FALLBACK:
                fallback_count += 1
            results.append(ClassifiedEvent.from_raw(event, classification))

        self.cache.replace(results)

        logger.info(
            "batch_completed",
            count=len(results),
            remote=len(results) - fallback_count,
            fallback=fallback_count,
            duration_seconds=round(time.monotonic() - started, 2),
        )
        return results
