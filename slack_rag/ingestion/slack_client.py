"""Slack Web API client for reading channel history and thread replies."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..errors import SlackAPIError, SlackRateLimitedError
from ..models import MessageThread, SlackMessage

logger = logging.getLogger(__name__)


class SlackClient:
    """
    Thin async client over the Slack Web API conversations.* methods.

    Slack Requirements:
    - Bot token sent as a Bearer Authorization header
    - Tier 3 methods (history, replies) are rate limited; 429 carries Retry-After
    """

    BASE_URL = "https://slack.com/api"

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_concurrency: int = 8,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Slack client.

        Args:
            token: Bot token (xoxb-...)
            base_url: Override for the Web API base URL
            timeout: Request timeout in seconds
            max_concurrency: Max reply fetches in flight at once
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.session = httpx.AsyncClient(
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport
        )
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def aclose(self):
        await self.session.aclose()

    @retry(
        retry=retry_if_exception_type((SlackRateLimitedError, httpx.TransportError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True
    )
    async def _call(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Call a Web API method with retry on rate limits and transport failures.

        Args:
            method: Web API method name, e.g. "conversations.history"
            params: Query parameters; None values are dropped

        Returns:
            Decoded JSON payload

        Raises:
            SlackRateLimitedError: On HTTP 429 after retries are exhausted
            SlackAPIError: When Slack answers ok=false
            httpx.HTTPStatusError: On other HTTP errors
        """
        query = {k: v for k, v in params.items() if v is not None}
        response = await self.session.get(f"{self.base_url}/{method}", params=query)

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(f"Slack rate limited {method} (Retry-After={retry_after})")
            raise SlackRateLimitedError(method, float(retry_after) if retry_after else None)

        response.raise_for_status()
        payload = response.json()

        if not payload.get("ok"):
            raise SlackAPIError(method, payload.get("error", "unknown_error"))

        return payload

    async def list_channels(self, limit: int = 1000) -> List[Dict[str, Optional[str]]]:
        """
        List channels visible to the bot.

        Returns:
            List of {"id", "name"} dicts
        """
        payload = await self._call("conversations.list", {"limit": limit})
        return [
            {"id": channel.get("id"), "name": channel.get("name")}
            for channel in payload.get("channels", [])
        ]

    async def fetch_history(
        self,
        channel_id: str,
        limit: int = 10,
        cursor: Optional[str] = None
    ) -> Tuple[List[SlackMessage], Optional[str]]:
        """
        Fetch one page of channel history.

        Returns:
            (messages, next_cursor); next_cursor is None on the last page
        """
        payload = await self._call(
            "conversations.history",
            {"channel": channel_id, "limit": limit, "cursor": cursor}
        )
        messages = [SlackMessage.model_validate(m) for m in payload.get("messages", [])]
        next_cursor = (payload.get("response_metadata") or {}).get("next_cursor") or None
        logger.info(f"Fetched {len(messages)} messages from {channel_id}")
        return messages, next_cursor

    async def fetch_replies(
        self,
        channel_id: str,
        ts: str,
        limit: int = 10
    ) -> List[SlackMessage]:
        """Fetch the replies of the thread rooted at ``ts``."""
        async with self._semaphore:
            payload = await self._call(
                "conversations.replies",
                {"channel": channel_id, "ts": ts, "limit": limit}
            )
        return [SlackMessage.model_validate(m) for m in payload.get("messages", [])]

    async def _with_replies(
        self,
        channel_id: str,
        message: SlackMessage,
        limit: int
    ) -> Optional[MessageThread]:
        if not message.ts:
            return None

        try:
            replies = await self.fetch_replies(channel_id, message.ts, limit=limit)
        except Exception as e:
            logger.error(f"Failed to fetch replies for {channel_id}/{message.ts}: {e}")
            replies = []

        return MessageThread(channel_id=channel_id, message=message, replies=replies)

    async def fetch_thread_page(
        self,
        channel_id: str,
        limit: int = 10,
        cursor: Optional[str] = None
    ) -> Tuple[List[Optional[MessageThread]], Optional[str]]:
        """
        Fetch a page of history and the replies of every message in it.

        Reply fetches run concurrently. A message without ``ts`` yields None in its slot;
        a failed reply fetch yields the message with no replies.

        Returns:
            (threads aligned with the history page, next_cursor)
        """
        messages, next_cursor = await self.fetch_history(channel_id, limit=limit, cursor=cursor)
        threads = await asyncio.gather(
            *(self._with_replies(channel_id, message, limit) for message in messages)
        )
        return list(threads), next_cursor

    async def fetch_messages_with_replies(
        self,
        channel_id: str,
        limit: int = 10,
        cursor: Optional[str] = None
    ) -> List[Optional[MessageThread]]:
        """Same as fetch_thread_page, without the pagination cursor."""
        threads, _ = await self.fetch_thread_page(channel_id, limit=limit, cursor=cursor)
        return threads
