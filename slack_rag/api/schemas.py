"""
API Request/Response Models (Pydantic Schemas)

Ingestion and answer payloads reuse the domain models in ``slack_rag.models``.
"""

from typing import Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response"""

    ok: bool = Field(True, examples=[True])


class ErrorResponse(BaseModel):
    """Standard error response"""

    error: str = Field(..., description="Error message")


class ChannelResponse(BaseModel):
    """A Slack channel visible to the bot"""

    id: Optional[str] = Field(None, description="Channel id", examples=["C0123456789"])
    name: Optional[str] = Field(None, description="Channel name", examples=["eng-help"])

