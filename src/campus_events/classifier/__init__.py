"""Event classification: remote, heuristic, and the resilient wrapper around both."""

from campus_events.classifier.base import RemoteClassifier
from campus_events.classifier.heuristic import HeuristicClassifier
from campus_events.classifier.orchestrator import (
    ClassificationSource,
    ResilientClassifier,
    is_retryable,
)
from campus_events.classifier.schema import CLASSIFICATION_JSON_SCHEMA, parse_classification

__all__ = [
    "CLASSIFICATION_JSON_SCHEMA",
    "ClassificationSource",
    "HeuristicClassifier",
    "RemoteClassifier",
    "ResilientClassifier",
    "is_retryable",
    "parse_classification",
]
