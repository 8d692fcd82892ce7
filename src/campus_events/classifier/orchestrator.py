"""Retry, backoff and fallback around the remote classifier.

`ResilientClassifier.classify` is the one entry point callers use. It either
returns the remote classification or, once the remote side has failed in a
way that retrying won't fix (or retries ran out), the heuristic one. It never
raises.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum

import structlog

from campus_events.classifier.base import RemoteClassifier
from campus_events.classifier.heuristic import HeuristicClassifier
from campus_events.exceptions import ClassifierError, ClassifierTransportError, MalformedOutputError
from campus_events.models import Classification, RawEvent
from campus_events.utils import backoff_delays

logger = structlog.get_logger()

Sleep = Callable[[float], Awaitable[None]]

DEFAULT_MAX_RETRIES = 2
DEFAULT_INITIAL_DELAY = 1.5
DEFAULT_BACKOFF = 2.0


class ClassificationSource(str, Enum):
    REMOTE = "remote"
    FALLBACK = "fallback"


def is_retryable(exc: BaseException) -> bool:
    """Rate limits, 5xx responses and malformed output are worth another attempt."""
    if isinstance(exc, MalformedOutputError):
        return True
    if isinstance(exc, ClassifierTransportError):
        return exc.is_rate_limited or exc.is_server_error
    return False


class ResilientClassifier:
    """Classify events remotely when possible, heuristically otherwise.

    Args:
        remote: Remote classifier. If None, every event is classified offline.
        fallback: Heuristic classifier used on permanent failure or exhausted retries.
        max_retries: Retries after the first attempt (default 2, i.e. 3 attempts).
        initial_delay: Sleep before the first retry in seconds.
        backoff: Multiplier applied to the sleep after each retry.
        sleep: Awaitable sleep function; injected by tests.
    """

    def __init__(
        self,
        remote: RemoteClassifier | None,
        fallback: HeuristicClassifier | None = None,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        backoff: float = DEFAULT_BACKOFF,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self.remote = remote
        self.fallback = fallback or HeuristicClassifier()
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.backoff = backoff
        self._sleep = sleep

    async def classify(self, event: RawEvent) -> Classification:
        classification, _source = await self.classify_with_source(event)
        return classification

    async def classify_with_source(self, event: RawEvent) -> tuple[Classification, ClassificationSource]:
        """Classify `event` and report whether the remote result was used."""
        if self.remote is None:
            return self._fallback(event, reason="offline"), ClassificationSource.FALLBACK

        delays = backoff_delays(self.initial_delay, self.backoff, self.max_retries)
        attempt = 1
        while True:
            try:
                result = await self.remote.classify(event)
            except ClassifierError as exc:
                delay = next(delays, None) if is_retryable(exc) else None
                if delay is None:
                    reason = "retries_exhausted" if is_retryable(exc) else "permanent_failure"
                    logger.warning(
                        "classifier_remote_failed",
                        title=event.title[:80],
                        attempt=attempt,
                        error=str(exc),
                        error_type=type(exc).__name__,
                    )
                    return self._fallback(event, reason=reason), ClassificationSource.FALLBACK

                logger.info(
                    "classifier_retry_scheduled",
                    title=event.title[:80],
                    attempt=attempt,
                    delay=delay,
                    error=str(exc),
                )
                await self._sleep(delay)
                attempt += 1
                continue
            except Exception as exc:  # noqa: BLE001
                logger.exception("classifier_unexpected_error", title=event.title[:80], error=str(exc))
                return self._fallback(event, reason="unexpected_error"), ClassificationSource.FALLBACK

            if attempt > 1:
                logger.info("classifier_recovered", title=event.title[:80], attempts=attempt)
            return result, ClassificationSource.REMOTE

    async def close(self) -> None:
        if self.remote is not None:
            await self.remote.close()

    def _fallback(self, event: RawEvent, *, reason: str) -> Classification:
        logger.info("classifier_fallback_used", title=event.title[:80], reason=reason)
        return self.fallback.classify(event)
