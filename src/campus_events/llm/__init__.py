"""Remote (LLM-backed) event classification."""

from campus_events.llm.client import OpenAIClassifierClient

__all__ = ["OpenAIClassifierClient"]
