"""Unit tests for relational message persistence."""

import pytest
from sqlalchemy import select

from slack_rag.db import Message, MessageEmbedding, ThreadReply
from slack_rag.models import MessageThread, SlackMessage


class TestMessageLoader:
    """Tests for MessageLoader."""

    def test_save_thread_stores_message_and_replies(self, loader, thread_factory):
        thread = thread_factory("C1", "question", "m1", replies=["a1", "a2"])

        loader.save_thread(thread)

        with loader.session_factory() as session:
            message = session.get(Message, "m1")
            assert message.channel_id == "C1"
            assert message.text == "question"
            assert [r.text for r in message.replies] == ["a1", "a2"]
            assert [r.position for r in message.replies] == [0, 1]

    def test_resave_replaces_replies(self, loader, thread_factory):
        """Test that re-ingesting supersedes instead of duplicating."""
        loader.save_thread(thread_factory("C1", "question", "m1", replies=["a1", "a2"]))
        loader.save_thread(thread_factory("C1", "question (edited)", "m1", replies=["a1", "a2", "a3"]))

        with loader.session_factory() as session:
            assert session.get(Message, "m1").text == "question (edited)"
            replies = session.execute(select(ThreadReply)).scalars().all()
            assert [r.text for r in replies] == ["a1", "a2", "a3"]
        assert loader.count_messages() == 1

    def test_record_embedding_upserts(self, loader, thread_factory):
        loader.save_thread(thread_factory("C1", "question", "m1"))
        loader.record_embedding("m1", "C1", "vec-1", 4)
        loader.record_embedding("m1", "C1", "vec-2", 4)

        with loader.session_factory() as session:
            rows = session.execute(select(MessageEmbedding)).scalars().all()
            assert [(r.message_id, r.vector_id) for r in rows] == [("m1", "vec-2")]

    def test_message_without_id_rejected(self, loader):
        thread = MessageThread(channel_id="C1", message=SlackMessage(ts="1.0", text="bot"))

        with pytest.raises(ValueError):
            loader.save_thread(thread)

    def test_count_by_channel(self, loader, thread_factory):
        loader.save_thread(thread_factory("C1", "one", "m1"))
        loader.save_thread(thread_factory("C2", "two", "m2"))

        assert loader.count_messages() == 2
        assert loader.count_messages("C2") == 1
