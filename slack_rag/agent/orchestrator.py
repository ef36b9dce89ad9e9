"""
RAG Agent for the Slack RAG service.

Answers natural language questions from ingested Slack messages.

Flow:
1. Validate the question
2. Embed it
3. Retrieve the top-k most similar messages from Qdrant
4. Drop matches at or below the score threshold
5. Ask the LLM to answer from the surviving messages only
"""

import logging
from typing import Any, Optional

from .llm_config import LLMClient
from .prompts import NO_CONTEXT_ANSWER, get_rag_prompt
from ..config import Settings, get_settings
from ..errors import InvalidQueryError
from ..models import AnswerResult, Source
from ..rag import EmbeddingService, VectorStore, build_context, filter_matches

logger = logging.getLogger(__name__)


def validate_query(query: Any) -> str:
    """Return the query if it is a non-empty string, else raise InvalidQueryError."""
    if not query or not isinstance(query, str):
        raise InvalidQueryError()
    return query


class RAGAgent:
    """Retrieval-augmented question answering over one Qdrant collection."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        llm_client: LLMClient,
        settings: Optional[Settings] = None
    ):
        self.embedding_service = embedding_service
        self.vector_store = vector_store
        self.llm_client = llm_client
        self.settings = settings or get_settings()

    async def ask(self, query: Any, namespace: Optional[str] = None) -> AnswerResult:
        """
        Answer a question from stored messages.

        Args:
            query: The question; anything other than a non-empty string is rejected
            namespace: Optional channel id to restrict retrieval to

        Returns:
            AnswerResult with the answer and the matches used as sources

        Raises:
            InvalidQueryError: Before any downstream call, if the query is invalid
        """
        query = validate_query(query)
        threshold = self.settings.score_threshold

        query_embedding = await self.embedding_service.get_query_embedding(query)

        matches = await self.vector_store.query(
            query_embedding,
            top_k=self.settings.top_k,
            return_metadata=True,
            namespace=namespace
        )
        matches = filter_matches(matches, threshold)

        if not matches:
            logger.info("No matches above threshold, skipping completion")
            return AnswerResult(answer=NO_CONTEXT_ANSWER)

        logger.info(f"Answering from {len(matches)} matches: {[m.score for m in matches]}")

        prompt = get_rag_prompt(build_context(matches), query)
        answer = await self.llm_client.complete_text(
            prompt,
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.llm_max_tokens
        )

        return AnswerResult(
            answer=answer,
            sources=[
                Source(score=match.score, content=match.content)
                for match in filter_matches(matches, threshold)
            ]
        )
