"""Exceptions raised by the Slack RAG service."""

from typing import Optional


class InvalidQueryError(ValueError):
    """Raised when /ask receives a missing or non-string query."""

    def __init__(self, message: str = "Query is required and must be a string"):
        super().__init__(message)


class SlackAPIError(Exception):
    """Slack answered with ``ok: false``."""

    def __init__(self, method: str, error: str):
        self.method = method
        self.error = error
        super().__init__(f"Slack {method} failed: {error}")


class SlackRateLimitedError(SlackAPIError):
    """Slack answered HTTP 429."""

    def __init__(self, method: str, retry_after: Optional[float] = None):
        self.retry_after = retry_after
        super().__init__(method, "ratelimited")


class EmbeddingError(Exception):
    """The embedding provider returned an unusable response."""
