"""Channel ingestion: Slack history → embeddings → Qdrant (+ relational audit copy)."""

import asyncio
import logging
from typing import Optional

from .slack_client import SlackClient
from ..db.loader import MessageLoader
from ..models import IngestedMessage, IngestionResult, MessageThread
from ..rag import EmbeddingService, VectorStore

logger = logging.getLogger(__name__)


class ChannelIngestor:
    """
    Ingests one page of a channel's history into the vector index.

    Each message is embedded together with its replies and upserted under the
    channel id as namespace. Messages are processed concurrently, bounded by
    ``max_concurrency``; a failing message is logged and left as None in the
    result without failing the batch.
    """

    def __init__(
        self,
        slack_client: SlackClient,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        loader: Optional[MessageLoader] = None,
        max_concurrency: int = 8
    ):
        """
        Initialize ingestor.

        Args:
            slack_client: Source of channel history
            embedding_service: Embeds message content
            vector_store: Destination index
            loader: Optional relational store for raw messages
            max_concurrency: Max messages embedded/upserted at once
        """
        self.slack_client = slack_client
        self.embedding_service = embedding_service
        self.vector_store = vector_store
        self.loader = loader
        self.max_concurrency = max_concurrency

    async def _process(
        self,
        thread: Optional[MessageThread],
        channel_id: str,
        semaphore: asyncio.Semaphore
    ) -> Optional[IngestedMessage]:
        if thread is None or not thread.message_id:
            return None

        message_id = thread.message_id
        content = thread.build_content()

        async with semaphore:
            try:
                if self.loader:
                    self.loader.save_thread(thread)

                embedding = await self.embedding_service.embed_text(content)
                vectors = await self.vector_store.upsert(
                    id=message_id,
                    namespace=channel_id,
                    vector=embedding,
                    metadata={"content": content}
                )

                if self.loader:
                    self.loader.record_embedding(
                        message_id,
                        channel_id,
                        vectors.ids[0],
                        len(embedding)
                    )
            except Exception as e:
                logger.error(f"Error processing message {message_id}: {e}", exc_info=True)
                return None

        return IngestedMessage(id=message_id, content=content, vectors=vectors)

    async def ingest_channel(
        self,
        channel_id: str,
        limit: int = 10,
        cursor: Optional[str] = None
    ) -> IngestionResult:
        """
        Ingest one page of channel history.

        Args:
            channel_id: Slack channel id, also used as the vector namespace
            limit: Page size for history and replies
            cursor: Pagination cursor from a previous page

        Returns:
            IngestionResult aligned with the fetched page
        """
        logger.info(f"Ingesting channel {channel_id} (limit={limit}, cursor={cursor})")

        threads, next_cursor = await self.slack_client.fetch_thread_page(
            channel_id, limit=limit, cursor=cursor
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)
        results = await asyncio.gather(
            *(self._process(thread, channel_id, semaphore) for thread in threads)
        )

        succeeded = sum(1 for r in results if r is not None)
        logger.info(f"Ingested {succeeded}/{len(results)} messages from {channel_id}")

        return IngestionResult(
            processed=len(results),
            succeeded=succeeded,
            failed=len(results) - succeeded,
            next_cursor=next_cursor,
            messages=list(results)
        )
