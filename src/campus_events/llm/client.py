"""OpenAI classifier client.

This module sends one structured-output request per event and converts every
failure into the `ClassifierError` family at this single boundary.
"""

from __future__ import annotations

from typing import Any

import openai
import structlog

from campus_events.classifier.base import RemoteClassifier
from campus_events.classifier.prompt import PROMPT_VERSION, build_classification_prompt
from campus_events.classifier.schema import (
    CLASSIFICATION_JSON_SCHEMA,
    CLASSIFICATION_SCHEMA_NAME,
    parse_classification,
)
from campus_events.config import Settings
from campus_events.exceptions import ClassifierError, ClassifierTransportError
from campus_events.models import Classification, RawEvent

logger = structlog.get_logger()


class OpenAIClassifierClient(RemoteClassifier):
    """Classify events with the OpenAI Responses API.

    The SDK's built-in retries are disabled; `ResilientClassifier` owns the
    retry policy.
    """

    def __init__(self, settings: Settings | None = None, client: Any | None = None) -> None:
        """Initialize the classifier client.

        Args:
            settings: Application settings. If None, uses default settings.
            client: Pre-built `openai.AsyncOpenAI`-compatible client. If None,
                one is created lazily on first use.
        """
        from campus_events.config import get_settings

        self.settings = settings or get_settings()
        self._client = client
        logger.info(
            "openai_classifier_initialized",
            model=self.settings.openai_model,
            prompt_version=PROMPT_VERSION,
        )

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.settings.openai_api_key:
                raise ClassifierError("OPENAI_API_KEY is not configured")
            self._client = openai.AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.openai_timeout,
                max_retries=0,
            )
        return self._client

    async def classify(self, event: RawEvent) -> Classification:
        """Classify a single event.

        Raises:
            ClassifierTransportError: The request failed (status carried when known).
            MalformedOutputError: The response was not a valid classification.
            ClassifierError: Any other failure, including missing credentials.
        """
        client = self._get_client()
        prompt = build_classification_prompt(event, timezone=self.settings.timezone)

        try:
            response = await client.responses.create(
                model=self.settings.openai_model,
                input=prompt,
                text={
                    "format": {
                        "type": "json_schema",
                        "name": CLASSIFICATION_SCHEMA_NAME,
                        "schema": CLASSIFICATION_JSON_SCHEMA,
                        "strict": True,
                    }
                },
            )
        except openai.APIStatusError as exc:
            raise ClassifierTransportError(
                f"OpenAI returned HTTP {exc.status_code}", status=exc.status_code
            ) from exc
        except openai.APIConnectionError as exc:
            raise ClassifierTransportError(f"OpenAI request failed: {exc}") from exc
        except openai.OpenAIError as exc:
            raise ClassifierError(f"OpenAI error: {exc}") from exc

        classification = parse_classification(getattr(response, "output_text", None))
        logger.debug(
            "openai_classification",
            title=event.title[:80],
            category=classification.category.value,
            confidence=classification.confidence,
        )
        return classification

    async def close(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self._client is not None and hasattr(self._client, "close"):
            await self._client.close()
            logger.debug("openai_client_closed")
