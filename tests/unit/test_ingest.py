"""Unit tests for channel ingestion."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from slack_rag.ingestion import ChannelIngestor
from slack_rag.models import MessageThread, SlackMessage


def _slack(threads, next_cursor=None):
    client = MagicMock()
    client.fetch_thread_page = AsyncMock(return_value=(threads, next_cursor))
    return client


@pytest.fixture
def build_ingestor(settings, vector_store_factory, loader):
    async def _build(threads, embeddings, next_cursor=None):
        store = await vector_store_factory(settings)
        ingestor = ChannelIngestor(
            _slack(threads, next_cursor),
            embeddings,
            store,
            loader=loader,
            max_concurrency=2,
        )
        return ingestor, store
    return _build


class TestIngestChannel:
    """Tests for ChannelIngestor.ingest_channel."""

    @pytest.mark.asyncio
    async def test_empty_channel(self, build_ingestor, fake_embeddings):
        """Test that a channel with no messages processes nothing."""
        ingestor, store = await build_ingestor([], fake_embeddings)

        result = await ingestor.ingest_channel("C1")

        assert result.processed == 0
        assert result.messages == []
        assert fake_embeddings.calls == []

    @pytest.mark.asyncio
    async def test_message_with_two_replies(self, build_ingestor, fake_embeddings, thread_factory, loader):
        """Test that one message with two replies produces one upsert with joined content."""
        thread = thread_factory("C1", "How do I deploy?", "m1", replies=["make deploy", "needs VPN"])
        ingestor, store = await build_ingestor([thread], fake_embeddings)

        result = await ingestor.ingest_channel("C1", limit=10)

        assert result.processed == 1
        assert result.succeeded == 1
        entry = result.messages[0]
        assert entry.id == "m1"
        assert entry.content == "How do I deploy?\nmake deploy\nneeds VPN"
        assert fake_embeddings.calls == ["How do I deploy?\nmake deploy\nneeds VPN"]
        assert await store.count_points() == 1

        matches = await store.query([1.0, 0.0, 0.0, 0.0], top_k=3)
        assert matches[0].id == "m1"
        assert matches[0].metadata["namespace"] == "C1"
        assert matches[0].content == "How do I deploy?\nmake deploy\nneeds VPN"
        assert loader.count_messages("C1") == 1

    @pytest.mark.asyncio
    async def test_message_without_id_skipped(self, build_ingestor, fake_embeddings, thread_factory):
        """Test that messages lacking client_msg_id are skipped, not errors."""
        threads = [
            thread_factory("C1", "bot message", None, ts="1.000100"),
            None,
            thread_factory("C1", "real question", "m3", ts="3.000100"),
        ]
        ingestor, store = await build_ingestor(threads, fake_embeddings)

        result = await ingestor.ingest_channel("C1")

        assert result.processed == 3
        assert result.messages[0] is None
        assert result.messages[1] is None
        assert result.messages[2].id == "m3"
        assert fake_embeddings.calls == ["real question"]
        assert await store.count_points() == 1

    @pytest.mark.asyncio
    async def test_failed_message_does_not_fail_batch(
        self, build_ingestor, embedding_factory, thread_factory
    ):
        """Test that a per-message error becomes a None entry at its position."""
        embeddings = embedding_factory(fail_on=("poison",))
        threads = [
            thread_factory("C1", "first", "m1", ts="1.000100"),
            thread_factory("C1", "poison pill", "m2", ts="2.000100"),
            thread_factory("C1", "third", "m3", ts="3.000100"),
        ]
        ingestor, store = await build_ingestor(threads, embeddings)

        result = await ingestor.ingest_channel("C1")

        assert result.processed == 3
        assert result.succeeded == 2
        assert result.failed == 1
        assert [m.id if m else None for m in result.messages] == ["m1", None, "m3"]

    @pytest.mark.asyncio
    async def test_reingest_overwrites(self, build_ingestor, fake_embeddings, thread_factory, loader):
        """Test that ingesting the same message twice keeps one record."""
        thread = thread_factory("C1", "question", "m1", replies=["answer"])
        ingestor, store = await build_ingestor([thread], fake_embeddings)

        first = await ingestor.ingest_channel("C1")
        second = await ingestor.ingest_channel("C1")

        assert first.messages[0].vectors.ids == second.messages[0].vectors.ids
        assert await store.count_points() == 1
        assert loader.count_messages() == 1

    @pytest.mark.asyncio
    async def test_cursor_passed_through(self, build_ingestor, fake_embeddings):
        ingestor, _ = await build_ingestor([], fake_embeddings, next_cursor="next")

        result = await ingestor.ingest_channel("C1", limit=5, cursor="abc")

        ingestor.slack_client.fetch_thread_page.assert_awaited_once_with("C1", limit=5, cursor="abc")
        assert result.next_cursor == "next"

    @pytest.mark.asyncio
    async def test_without_loader(self, settings, vector_store_factory, fake_embeddings):
        """Test that the relational store is optional."""
        store = await vector_store_factory(settings)
        thread = MessageThread(
            channel_id="C1",
            message=SlackMessage(ts="1.0", client_msg_id="m1", text="hi"),
        )
        ingestor = ChannelIngestor(_slack([thread]), fake_embeddings, store)

        result = await ingestor.ingest_channel("C1")

        assert result.succeeded == 1
