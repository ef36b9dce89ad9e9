"""Database module for the Slack RAG service."""

from .base import Base
from .session import create_db_engine, create_session_factory
from .models import Message, ThreadReply, MessageEmbedding
from .loader import MessageLoader

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "Message",
    "ThreadReply",
    "MessageEmbedding",
    "MessageLoader",
]
