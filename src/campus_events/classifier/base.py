from __future__ import annotations

from abc import ABC, abstractmethod

from campus_events.models import Classification, RawEvent


class RemoteClassifier(ABC):
    """A classifier backed by an external service.

    Implementations must signal failures with `ClassifierError` subclasses so
    the orchestrator can decide whether a retry is worthwhile.
    """

    @abstractmethod
    async def classify(self, event: RawEvent) -> Classification:
        raise NotImplementedError

    async def close(self) -> None:
        """Release any connection held by the client."""
        return None
