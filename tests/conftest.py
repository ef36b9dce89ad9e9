"""Pytest configuration and shared fixtures."""

from typing import Dict, List, Optional

import pytest

from slack_rag.config import Settings
from slack_rag.db import Base, MessageLoader, create_db_engine, create_session_factory
from slack_rag.models import MessageThread, SlackMessage
from slack_rag.rag import VectorStore

DIMENSION = 4


class FakeEmbeddingService:
    """Returns a fixed vector per text (or a default), recording every call."""

    def __init__(self, vectors: Optional[Dict[str, List[float]]] = None, fail_on: tuple = ()):
        self.vectors = vectors or {}
        self.fail_on = fail_on
        self.calls: List[str] = []

    async def embed_text(self, text: str) -> List[float]:
        self.calls.append(text)
        for marker in self.fail_on:
            if marker in text:
                raise RuntimeError(f"provider rejected: {marker}")
        return self.vectors.get(text, [1.0, 0.0, 0.0, 0.0])

    async def get_query_embedding(self, query: str) -> List[float]:
        return await self.embed_text(query)


@pytest.fixture
def settings():
    """Settings wired for local, in-process collaborators."""
    return Settings(
        slack_bot_token="xoxb-test",
        openai_api_key="sk-test",
        embedding_dimension=DIMENSION,
        qdrant_url=":memory:",
        qdrant_collection_name="test_messages",
        database_url="sqlite://",
        top_k=3,
        score_threshold=0.5,
        llm_temperature=0.3,
        llm_max_tokens=500,
    )


@pytest.fixture
def loader(settings):
    """MessageLoader over a fresh in-memory SQLite database."""
    engine = create_db_engine(settings.database_url)
    Base.metadata.create_all(engine)
    return MessageLoader(create_session_factory(engine))


async def make_vector_store(settings: Settings) -> VectorStore:
    store = VectorStore(settings)
    await store.create_collection()
    return store


def make_thread(
    channel_id: str,
    text: str,
    msg_id: Optional[str],
    ts: str = "1712345678.000100",
    replies: Optional[List[str]] = None
) -> MessageThread:
    """Build a thread; replies are preceded by the parent echo Slack always returns."""
    parent = SlackMessage(ts=ts, client_msg_id=msg_id, text=text, user="U1", thread_ts=ts)
    reply_messages = [parent] + [
        SlackMessage(ts=f"{ts[:-3]}{i + 200}", text=reply, user="U2", thread_ts=ts)
        for i, reply in enumerate(replies or [])
    ]
    return MessageThread(channel_id=channel_id, message=parent, replies=reply_messages)


@pytest.fixture
def thread_factory():
    return make_thread


@pytest.fixture
def vector_store_factory():
    return make_vector_store


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddingService()


@pytest.fixture
def embedding_factory():
    return FakeEmbeddingService
