"""Persists ingested Slack messages into the relational store."""

import logging
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from ..models import MessageThread
from .models import Message, ThreadReply, MessageEmbedding

logger = logging.getLogger(__name__)


class MessageLoader:
    """
    Writes messages, thread replies and embedding mappings.

    Each call runs in its own session and transaction, so concurrent ingestion
    branches never share a session. Re-saving a message replaces its replies
    and mapping instead of duplicating them.
    """

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize loader.

        Args:
            session_factory: Factory producing SQLAlchemy sessions
        """
        self.session_factory = session_factory

    def save_thread(self, thread: MessageThread) -> None:
        """
        Upsert the parent message and replace its reply rows.

        Args:
            thread: Fetched message with replies; must carry a message id
        """
        message = thread.message
        message_id = thread.message_id
        if not message_id:
            raise ValueError("Cannot persist a message without client_msg_id")

        with self.session_factory() as session, session.begin():
            session.merge(Message(
                id=message_id,
                channel_id=thread.channel_id,
                ts=message.ts,
                user=message.user,
                text=message.text,
                thread_ts=message.thread_ts,
            ))
            session.execute(delete(ThreadReply).where(ThreadReply.message_id == message_id))
            for position, reply in enumerate(r for r in thread.replies if r.ts != message.ts):
                session.add(ThreadReply(
                    message_id=message_id,
                    channel_id=thread.channel_id,
                    ts=reply.ts or "",
                    user=reply.user,
                    text=reply.text,
                    position=position,
                ))

    def record_embedding(
        self,
        message_id: str,
        namespace: str,
        vector_id: str,
        dimension: int
    ) -> None:
        """Upsert the message → vector-store point mapping."""
        with self.session_factory() as session, session.begin():
            session.merge(MessageEmbedding(
                message_id=message_id,
                namespace=namespace,
                vector_id=vector_id,
                dimension=dimension,
            ))

    def count_messages(self, channel_id: str | None = None) -> int:
        """Count stored messages, optionally for one channel."""
        with self.session_factory() as session:
            return _count(session, Message, channel_id)


def _count(session: Session, model, channel_id: str | None) -> int:
    stmt = select(func.count()).select_from(model)
    if channel_id:
        stmt = stmt.where(model.channel_id == channel_id)
    return session.execute(stmt).scalar_one()
