"""Unit tests for the Qdrant vector store (in-memory Qdrant)."""

import pytest

from slack_rag.models import EmbeddingRecord
from slack_rag.rag.vector_store import point_id, to_point


class TestToPoint:
    """Tests for converting embedding records to Qdrant points."""

    def test_payload_carries_id_and_namespace(self):
        record = EmbeddingRecord(
            id="m1",
            namespace="C1",
            vector=[1.0, 0.0, 0.0, 0.0],
            metadata={"content": "make deploy"}
        )

        point = to_point(record)

        assert point.id == point_id("m1", "C1")
        assert point.vector == [1.0, 0.0, 0.0, 0.0]
        assert point.payload == {"content": "make deploy", "message_id": "m1", "namespace": "C1"}


class TestUpsert:
    """Tests for VectorStore.upsert."""

    @pytest.mark.asyncio
    async def test_upsert_is_idempotent_by_id(self, settings, vector_store_factory):
        """Test that upserting the same message twice leaves one record."""
        store = await vector_store_factory(settings)

        first = await store.upsert("m1", "C1", [1.0, 0.0, 0.0, 0.0], {"content": "v1"})
        second = await store.upsert("m1", "C1", [0.0, 1.0, 0.0, 0.0], {"content": "v2"})

        assert first.ids == second.ids == [point_id("m1", "C1")]
        assert await store.count_points() == 1

        matches = await store.query([0.0, 1.0, 0.0, 0.0], top_k=3)
        assert [m.content for m in matches] == ["v2"]

    @pytest.mark.asyncio
    async def test_same_id_in_two_namespaces(self, settings, vector_store_factory):
        """Test that ids are unique per namespace, not globally."""
        store = await vector_store_factory(settings)

        await store.upsert("m1", "C1", [1.0, 0.0, 0.0, 0.0], {"content": "a"})
        await store.upsert("m1", "C2", [1.0, 0.0, 0.0, 0.0], {"content": "b"})

        assert await store.count_points() == 2

    @pytest.mark.asyncio
    async def test_wrong_dimension_rejected(self, settings, vector_store_factory):
        store = await vector_store_factory(settings)

        with pytest.raises(ValueError):
            await store.upsert("m1", "C1", [1.0, 0.0], {"content": "a"})


class TestQuery:
    """Tests for VectorStore.query."""

    @pytest.mark.asyncio
    async def test_ranked_by_descending_score(self, settings, vector_store_factory):
        store = await vector_store_factory(settings)
        await store.upsert("far", "C1", [0.0, 0.0, 1.0, 0.0], {"content": "far"})
        await store.upsert("near", "C1", [1.0, 0.0, 0.0, 0.0], {"content": "near"})
        await store.upsert("mid", "C1", [1.0, 1.0, 0.0, 0.0], {"content": "mid"})

        matches = await store.query([1.0, 0.0, 0.0, 0.0], top_k=2)

        assert [m.id for m in matches] == ["near", "mid"]
        assert matches[0].score > matches[1].score
        assert matches[0].metadata["namespace"] == "C1"

    @pytest.mark.asyncio
    async def test_namespace_filter(self, settings, vector_store_factory):
        store = await vector_store_factory(settings)
        await store.upsert("m1", "C1", [1.0, 0.0, 0.0, 0.0], {"content": "one"})
        await store.upsert("m2", "C2", [1.0, 0.0, 0.0, 0.0], {"content": "two"})

        matches = await store.query([1.0, 0.0, 0.0, 0.0], top_k=3, namespace="C2")

        assert [m.id for m in matches] == ["m2"]

    @pytest.mark.asyncio
    async def test_metadata_omitted_on_request(self, settings, vector_store_factory):
        store = await vector_store_factory(settings)
        await store.upsert("m1", "C1", [1.0, 0.0, 0.0, 0.0], {"content": "one"})

        matches = await store.query([1.0, 0.0, 0.0, 0.0], top_k=1, return_metadata=False)

        assert matches[0].id == "m1"
        assert matches[0].metadata is None


class TestCollection:
    """Tests for collection management."""

    @pytest.mark.asyncio
    async def test_create_twice_returns_false(self, settings, vector_store_factory):
        store = await vector_store_factory(settings)
        assert await store.create_collection() is False

    @pytest.mark.asyncio
    async def test_delete_collection(self, settings, vector_store_factory):
        store = await vector_store_factory(settings)
        assert await store.delete_collection() is True
        assert await store.count_points() == 0
