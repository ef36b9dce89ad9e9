"""Pydantic models for Slack messages and threads."""

from typing import List, Optional
from pydantic import BaseModel, Field


class SlackMessage(BaseModel):
    """
    A single message as returned by conversations.history / conversations.replies.

    Only the fields the service reads are declared; anything else Slack sends is ignored.
    """

    ts: Optional[str] = Field(None, description="Slack timestamp, unique within a channel")
    client_msg_id: Optional[str] = Field(None, description="Message identifier used as the vector id")
    text: str = Field(default="", description="Raw message text")
    user: Optional[str] = Field(None, description="Author user id")
    thread_ts: Optional[str] = Field(None, description="Parent thread timestamp, if threaded")

    class Config:
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "ts": "1712345678.000100",
                "client_msg_id": "5f1c2a4e-8d3b-4c1a-9f0e-2b7d6c5a4e3f",
                "text": "How do I rotate the staging database credentials?",
                "user": "U012AB3CD",
                "thread_ts": "1712345678.000100"
            }
        }


class MessageThread(BaseModel):
    """A channel message together with its ordered replies."""

    channel_id: str
    message: SlackMessage
    replies: List[SlackMessage] = Field(default_factory=list)

    @property
    def message_id(self) -> Optional[str]:
        return self.message.client_msg_id

    def reply_texts(self) -> List[str]:
        """
        Texts of the replies, oldest first.

        conversations.replies returns the parent as its first element; that echo is dropped
        so the parent text only appears once.
        """
        return [
            reply.text
            for reply in self.replies
            if reply.ts != self.message.ts
        ]

    def build_content(self) -> str:
        """Message text followed by every reply text, newline-joined."""
        return "\n".join([self.message.text, *self.reply_texts()])
