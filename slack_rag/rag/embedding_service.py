"""
Embedding Service

Generates vector embeddings for message text through LiteLLM.

Model: text-embedding-3-small
- Hosted (no local model weights)
- 1536-dimensional embeddings by default, reducible via ``dimensions``
- Any LiteLLM-supported embedding provider can be swapped in via EMBEDDING_MODEL
"""

import logging
from typing import List, Optional

from litellm import aembedding

from ..config import Settings, get_settings
from ..errors import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Service for generating text embeddings."""

    def __init__(self, settings: Settings):
        """
        Initialize embedding service.

        Args:
            settings: Service configuration
        """
        self.settings = settings
        self.model_name = settings.embedding_model
        self.dimension = settings.embedding_dimension
        self.api_key = settings.openai_api_key

        logger.info(f"Embedding model: {self.model_name} ({self.dimension} dims)")

    async def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """
        Generate embeddings for multiple texts in one provider call.

        Args:
            texts: List of texts to embed

        Returns:
            List of embedding vectors, same order as ``texts``

        Raises:
            EmbeddingError: If the provider returns the wrong count or dimension
        """
        if not texts:
            return []

        response = await aembedding(
            model=self.model_name,
            input=texts,
            dimensions=self.dimension,
            api_key=self.api_key
        )

        embeddings = [item["embedding"] for item in response.data]

        if len(embeddings) != len(texts):
            raise EmbeddingError(
                f"Expected {len(texts)} embeddings, provider returned {len(embeddings)}"
            )
        for embedding in embeddings:
            if len(embedding) != self.dimension:
                raise EmbeddingError(
                    f"Embedding dimension {len(embedding)} does not match configured {self.dimension}"
                )

        return [list(embedding) for embedding in embeddings]

    async def embed_text(self, text: str) -> List[float]:
        """
        Generate embedding for a single text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector as list of floats
        """
        embeddings = await self.embed_batch([text])
        return embeddings[0]

    async def get_query_embedding(self, query: str) -> List[float]:
        """Queries and stored messages are embedded the same way."""
        return await self.embed_text(query)


def get_embedding_service(settings: Optional[Settings] = None) -> EmbeddingService:
    """
    Get embedding service instance.

    Args:
        settings: Configuration (optional, will load from env if not provided)
    """
    return EmbeddingService(settings or get_settings())
