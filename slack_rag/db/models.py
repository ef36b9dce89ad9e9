"""SQLAlchemy database models for ingested Slack messages."""

from datetime import datetime, timezone
from sqlalchemy import (
    String,
    Integer,
    Text,
    DateTime,
    Index,
    ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(Base):
    """
    Raw channel message.

    Kept for audit alongside the vector index; never searched directly.
    """
    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    channel_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    ts: Mapped[str] = mapped_column(String(32), nullable=False)
    user: Mapped[str | None] = mapped_column(String(32), nullable=True)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    thread_ts: Mapped[str | None] = mapped_column(String(32), nullable=True)
    ingested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    # Relationships
    replies: Mapped[List["ThreadReply"]] = relationship(
        "ThreadReply",
        back_populates="message",
        cascade="all, delete-orphan",
        order_by="ThreadReply.position",
    )
    embedding: Mapped["MessageEmbedding | None"] = relationship(
        "MessageEmbedding",
        back_populates="message",
        cascade="all, delete-orphan",
        uselist=False,
    )

    __table_args__ = (
        Index("ix_messages_channel_ts", "channel_id", "ts"),
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, channel={self.channel_id}, ts={self.ts})>"


class ThreadReply(Base):
    """A reply in a message's thread."""
    __tablename__ = "threads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    channel_id: Mapped[str] = mapped_column(String(32), nullable=False)
    ts: Mapped[str] = mapped_column(String(32), nullable=False)
    user: Mapped[str | None] = mapped_column(String(32), nullable=True)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    message: Mapped["Message"] = relationship("Message", back_populates="replies")

    def __repr__(self) -> str:
        return f"<ThreadReply(message_id={self.message_id}, position={self.position})>"


class MessageEmbedding(Base):
    """Maps a message to its point in the vector store."""
    __tablename__ = "message_embeddings"

    message_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("messages.id", ondelete="CASCADE"),
        primary_key=True,
    )
    namespace: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    vector_id: Mapped[str] = mapped_column(String(36), nullable=False)
    dimension: Mapped[int] = mapped_column(Integer, nullable=False)
    embedded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    message: Mapped["Message"] = relationship("Message", back_populates="embedding")

    def __repr__(self) -> str:
        return f"<MessageEmbedding(message_id={self.message_id}, vector_id={self.vector_id})>"
