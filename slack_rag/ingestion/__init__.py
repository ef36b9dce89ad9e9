"""Slack channel ingestion."""

from .slack_client import SlackClient
from .ingest import ChannelIngestor

__all__ = ["SlackClient", "ChannelIngestor"]
