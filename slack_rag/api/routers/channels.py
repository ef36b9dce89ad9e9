"""
Channels Router

Lists Slack channels visible to the bot.
"""

from fastapi import APIRouter, Depends
from typing import List
import logging

from ..dependencies import get_slack_client
from ..schemas import ChannelResponse
from ...ingestion import SlackClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/channels", response_model=List[ChannelResponse])
async def list_channels(slack_client: SlackClient = Depends(get_slack_client)):
    """
    List channels visible to the bot.

    **Returns:**
    - Array of `{id, name}`
    """
    channels = await slack_client.list_channels(limit=1000)
    logger.info(f"Listed {len(channels)} channels")
    return channels
