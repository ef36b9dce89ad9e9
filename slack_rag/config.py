"""
Service Configuration

Centralized settings for every external collaborator:
- Slack Web API (bot token, base URL)
- Embedding and completion provider (model names, API key)
- Qdrant vector index
- Relational store used for raw message persistence
- Retrieval parameters (top-k, similarity threshold)
"""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Configuration for the Slack RAG service."""

    # Slack
    slack_bot_token: Optional[str] = Field(
        default=None,
        description="Slack bot token (xoxb-...) used for conversations.* calls"
    )
    slack_api_base_url: str = Field(
        default="https://slack.com/api",
        description="Slack Web API base URL"
    )
    slack_timeout: float = Field(default=30.0, description="Slack request timeout in seconds")
    default_channel_id: Optional[str] = Field(
        default=None,
        description="Channel ingested by scripts when none is given"
    )

    # Embedding / completion provider
    openai_api_key: Optional[str] = Field(default=None, description="Provider API key")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model routed through LiteLLM"
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Dimension of embedding vectors, must match the Qdrant collection"
    )
    llm_model: str = Field(default="gpt-4o-mini", description="Completion model")
    llm_temperature: float = Field(default=0.3, description="Temperature for answers")
    llm_max_tokens: int = Field(default=500, description="Max tokens for answers")
    llm_timeout: int = Field(default=60, description="Request timeout in seconds")

    # Qdrant
    qdrant_url: str = Field(
        default="http://localhost:6333",
        description="Qdrant server URL, or ':memory:' for a local in-process index"
    )
    qdrant_api_key: Optional[str] = Field(
        default=None,
        description="Qdrant API key (for cloud deployments)"
    )
    qdrant_collection_name: str = Field(
        default="slack_messages",
        description="Name of the Qdrant collection"
    )

    # Retrieval
    top_k: int = Field(default=3, description="Number of similar messages to retrieve")
    score_threshold: float = Field(
        default=0.5,
        description="Matches must score strictly above this to be used"
    )

    # Ingestion
    ingest_limit: int = Field(default=10, description="Default page size for channel history (HTTP and CLI)")
    max_concurrency: int = Field(
        default=8,
        ge=1,
        description="Upper bound on concurrent Slack/embedding calls per ingestion"
    )

    # Relational store
    database_url: str = Field(
        default="sqlite:///./slack_rag.db",
        description="SQLAlchemy URL for raw message persistence"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def validate_required(self) -> None:
        """Raise if a setting needed to serve requests is missing."""
        missing = []
        if not self.slack_bot_token:
            missing.append("SLACK_BOT_TOKEN")
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")


@lru_cache
def get_settings() -> Settings:
    """Get settings from environment."""
    return Settings()
