"""
RAG (Retrieval Augmented Generation) System

This module provides semantic search over ingested Slack messages.

Components:
- embedding_service: Generates vector embeddings through LiteLLM
- vector_store: Manages the Qdrant collection
- retriever: Threshold filtering and context assembly
"""

from .embedding_service import EmbeddingService, get_embedding_service
from .vector_store import VectorStore, get_vector_store
from .retriever import filter_matches, build_context

__all__ = [
    "EmbeddingService",
    "get_embedding_service",
    "VectorStore",
    "get_vector_store",
    "filter_matches",
    "build_context",
]
