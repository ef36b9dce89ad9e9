"""Pydantic data models for Slack messages and retrieval."""

from .message import SlackMessage, MessageThread
from .retrieval import (
    EmbeddingRecord,
    QueryMatch,
    UpsertResult,
    IngestedMessage,
    IngestionResult,
    Source,
    AnswerResult,
)

__all__ = [
    "SlackMessage",
    "MessageThread",
    "EmbeddingRecord",
    "QueryMatch",
    "UpsertResult",
    "IngestedMessage",
    "IngestionResult",
    "Source",
    "AnswerResult",
]
