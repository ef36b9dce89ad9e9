"""
Agent module for the Slack RAG service.

Provides the LLM client and the retrieval-augmented question answering flow.
"""

from .llm_config import LLMClient, get_llm_client
from .orchestrator import RAGAgent, validate_query
from .prompts import NO_CONTEXT_ANSWER, get_rag_prompt

__all__ = [
    "LLMClient",
    "get_llm_client",
    "RAGAgent",
    "validate_query",
    "NO_CONTEXT_ANSWER",
    "get_rag_prompt",
]
