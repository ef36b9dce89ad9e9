"""
Ingest Router

Pulls a page of channel history into the vector index.
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from ..dependencies import get_app_settings, get_ingestor
from ...config import Settings
from ...ingestion import ChannelIngestor
from ...models import IngestionResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ingest/{channel_id}", response_model=IngestionResult)
async def ingest_channel(
    channel_id: str,
    limit: Optional[int] = Query(None, ge=1, le=1000, description="History page size (defaults to INGEST_LIMIT)"),
    cursor: Optional[str] = Query(None, description="Cursor from a previous page's next_cursor"),
    ingestor: ChannelIngestor = Depends(get_ingestor),
    settings: Settings = Depends(get_app_settings)
):
    """
    Ingest one page of a channel's history.

    Each message is embedded together with its thread replies and upserted into
    the channel's namespace. Messages that fail are logged and returned as `null`
    entries; they never fail the request.

    **Returns:**
    - `processed`: number of messages attempted
    - `succeeded` / `failed`: outcome counts
    - `next_cursor`: pass back as `cursor` to ingest the next page
    - `messages`: `{id, content, vectors}` or `null`, in history order
    """
    if limit is None:
        limit = settings.ingest_limit
    return await ingestor.ingest_channel(channel_id, limit=limit, cursor=cursor)
