"""Utility functions for Campus Events."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import structlog


def backoff_delays(initial: float = 1.5, backoff: float = 2.0, retries: int = 2) -> Iterator[float]:
    """Yield the sleep before each retry of an exponential backoff schedule.

    Args:
        initial: Delay before the first retry in seconds.
        backoff: Multiplier applied to the delay after each retry.
        retries: Number of retries (the schedule has exactly this many entries).

    Example:
        >>> list(backoff_delays(1.5, 2.0, 2))
        [1.5, 3.0]
    """
    delay = initial
    for _ in range(retries):
        yield delay
        delay *= backoff


def _stderr_logger_factory(*_args: object) -> structlog.PrintLogger:
    # Resolved per logger so a swapped sys.stderr (e.g. under test capture) is honored.
    return structlog.PrintLogger(sys.stderr)


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog to filter below `log_level`.

    Log lines go to stderr so commands that print JSON keep stdout clean.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
    )
