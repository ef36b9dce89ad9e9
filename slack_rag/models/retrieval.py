"""Pydantic models for embeddings, vector matches, ingestion and answers."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class EmbeddingRecord(BaseModel):
    """A vector stored in the index, keyed by message id within a channel namespace."""

    id: str = Field(..., description="Message identifier")
    namespace: str = Field(..., description="Channel identifier")
    vector: List[float]
    metadata: Dict[str, Any] = Field(default_factory=dict)


class QueryMatch(BaseModel):
    """One ranked result from a vector query."""

    id: str
    score: float = Field(..., description="Cosine similarity")
    metadata: Optional[Dict[str, Any]] = None

    @property
    def content(self) -> str:
        if not self.metadata:
            return ""
        return self.metadata.get("content") or ""


class UpsertResult(BaseModel):
    """Confirmation returned by the vector store after an upsert."""

    ids: List[str]
    status: str
    operation_id: Optional[int] = None


class IngestedMessage(BaseModel):
    """Per-message ingestion outcome."""

    id: str
    content: str
    vectors: UpsertResult


class IngestionResult(BaseModel):
    """
    Result of ingesting one page of channel history.

    ``messages`` is positionally aligned with the fetched page; skipped or failed
    entries are ``None``. ``processed`` counts attempted entries, not successes.
    """

    processed: int
    succeeded: int = 0
    failed: int = 0
    next_cursor: Optional[str] = None
    messages: List[Optional[IngestedMessage]] = Field(default_factory=list)


class Source(BaseModel):
    """A context snippet cited in an answer."""

    score: float
    content: str


class AnswerResult(BaseModel):
    """Answer returned by the RAG flow."""

    answer: str
    sources: List[Source] = Field(default_factory=list)
