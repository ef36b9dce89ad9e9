"""
Vector Store Interface for Qdrant

Manages storage and retrieval of message embeddings in Qdrant.

Features:
- Collection management (create, delete, count)
- Idempotent upsert keyed by (channel namespace, message id)
- Similarity search, optionally restricted to one channel namespace
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    MatchValue,
    PayloadSchemaType,
    PointStruct,
    VectorParams,
)

from ..config import Settings, get_settings
from ..models import EmbeddingRecord, QueryMatch, UpsertResult

logger = logging.getLogger(__name__)


def point_id(message_id: str, namespace: str) -> str:
    """Deterministic Qdrant point id, so re-ingesting a message overwrites it."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{namespace}:{message_id}"))


def to_point(record: EmbeddingRecord) -> PointStruct:
    """Convert a record to a Qdrant point; id and namespace are copied into the payload."""
    payload = {**record.metadata, "message_id": record.id, "namespace": record.namespace}
    return PointStruct(
        id=point_id(record.id, record.namespace),
        vector=record.vector,
        payload=payload
    )


class VectorStore:
    """Interface to Qdrant vector database."""

    def __init__(self, settings: Settings, client: Optional[AsyncQdrantClient] = None):
        """
        Initialize vector store.

        Args:
            settings: Service configuration
            client: Pre-built Qdrant client (tests pass an in-memory one)
        """
        self.settings = settings
        self.collection_name = settings.qdrant_collection_name
        self.dimension = settings.embedding_dimension

        if client is not None:
            self.client = client
        elif settings.qdrant_url == ":memory:":
            logger.info("Using in-memory Qdrant")
            self.client = AsyncQdrantClient(location=":memory:")
        else:
            logger.info(f"Connecting to Qdrant at {settings.qdrant_url}")
            logger.info(f"Qdrant API key configured: {bool(settings.qdrant_api_key)}")
            self.client = AsyncQdrantClient(
                url=settings.qdrant_url,
                api_key=settings.qdrant_api_key
            )

        logger.info(f"Using collection: {self.collection_name}")

    async def create_collection(self, recreate: bool = False) -> bool:
        """
        Create the collection for message embeddings.

        Args:
            recreate: If True, delete existing collection and recreate

        Returns:
            True if collection was created, False if already existed
        """
        if await self.client.collection_exists(self.collection_name):
            if recreate:
                logger.warning(f"Deleting existing collection: {self.collection_name}")
                await self.client.delete_collection(self.collection_name)
            else:
                logger.info(f"Collection already exists: {self.collection_name}")
                return False

        logger.info(f"Creating collection: {self.collection_name}")
        await self.client.create_collection(
            collection_name=self.collection_name,
            vectors_config=VectorParams(
                size=self.dimension,
                distance=Distance.COSINE
            )
        )

        # Namespace (channel id) is the only filtered field
        await self.client.create_payload_index(
            collection_name=self.collection_name,
            field_name="namespace",
            field_schema=PayloadSchemaType.KEYWORD
        )

        logger.info("Collection created successfully")
        return True

    async def delete_collection(self) -> bool:
        """
        Delete the collection.

        Returns:
            True if deleted, False if it didn't exist
        """
        if not await self.client.collection_exists(self.collection_name):
            return False
        await self.client.delete_collection(self.collection_name)
        logger.info(f"Deleted collection: {self.collection_name}")
        return True

    async def upsert(
        self,
        id: str,
        namespace: str,
        vector: List[float],
        metadata: Dict[str, Any]
    ) -> UpsertResult:
        """
        Insert or replace the record for ``id`` within ``namespace``.

        Args:
            id: Message identifier
            namespace: Channel identifier
            vector: Embedding, must have the configured dimension
            metadata: Stored alongside the vector (expects "content")

        Returns:
            Store confirmation
        """
        if len(vector) != self.dimension:
            raise ValueError(
                f"Vector dimension {len(vector)} does not match collection dimension {self.dimension}"
            )

        record = EmbeddingRecord(id=id, namespace=namespace, vector=vector, metadata=metadata)
        point = to_point(record)

        result = await self.client.upsert(
            collection_name=self.collection_name,
            points=[point]
        )

        return UpsertResult(
            ids=[str(point.id)],
            status=str(getattr(result.status, "value", result.status)),
            operation_id=result.operation_id
        )

    async def query(
        self,
        vector: List[float],
        top_k: int = 3,
        return_metadata: bool = True,
        namespace: Optional[str] = None
    ) -> List[QueryMatch]:
        """
        Search for the most similar messages.

        Args:
            vector: Query embedding
            top_k: Number of results to return
            return_metadata: Include stored payload in each match
            namespace: Restrict to one channel

        Returns:
            Matches sorted by descending score, at most ``top_k``
        """
        query_filter = None
        if namespace:
            query_filter = Filter(
                must=[FieldCondition(key="namespace", match=MatchValue(value=namespace))]
            )

        # The message id lives in the payload, so it is always fetched
        results = (await self.client.query_points(
            collection_name=self.collection_name,
            query=vector,
            limit=top_k,
            query_filter=query_filter,
            with_payload=True
        )).points

        matches = []
        for result in results:
            payload = result.payload or {}
            matches.append(QueryMatch(
                id=payload.get("message_id", str(result.id)),
                score=result.score,
                metadata=payload if return_metadata else None
            ))

        return sorted(matches, key=lambda m: m.score, reverse=True)

    async def count_points(self) -> int:
        """
        Count total points in collection.

        Returns:
            Number of points
        """
        if not await self.client.collection_exists(self.collection_name):
            return 0
        result = await self.client.count(self.collection_name, exact=True)
        return result.count


def get_vector_store(settings: Optional[Settings] = None) -> VectorStore:
    """Get vector store instance."""
    return VectorStore(settings or get_settings())
