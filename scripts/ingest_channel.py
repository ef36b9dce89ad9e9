"""
Ingest Slack channel history from the command line.

Usage:
    python scripts/ingest_channel.py                      # DEFAULT_CHANNEL_ID, one page
    python scripts/ingest_channel.py --channel C0123 --pages 5 --limit 50
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from slack_rag.api.dependencies import build_services
from slack_rag.config import get_settings


async def ingest(channel_id: str, pages: int, limit: int) -> int:
    settings = get_settings()
    settings.validate_required()
    services = build_services(settings)

    total = 0
    cursor = None
    try:
        await services.vector_store.create_collection()
        for page in range(1, pages + 1):
            result = await services.ingestor.ingest_channel(channel_id, limit=limit, cursor=cursor)
            total += result.succeeded
            print(
                f"Page {page}: processed={result.processed} "
                f"succeeded={result.succeeded} failed={result.failed}"
            )
            cursor = result.next_cursor
            if not cursor:
                break
    finally:
        await services.aclose()

    return total


def main():
    """Main entry point for ingestion CLI."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Ingest Slack channel history into Qdrant")
    parser.add_argument(
        "--channel",
        default=settings.default_channel_id,
        help="Channel id (defaults to DEFAULT_CHANNEL_ID)",
    )
    parser.add_argument("--pages", type=int, default=1, help="Number of history pages to ingest")
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.ingest_limit,
        help="Messages per page",
    )
    args = parser.parse_args()

    if not args.channel:
        print("Error: no --channel given and DEFAULT_CHANNEL_ID is not set", file=sys.stderr)
        sys.exit(1)

    try:
        total = asyncio.run(ingest(args.channel, args.pages, args.limit))
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\n✅ Ingested {total} messages from {args.channel}")


if __name__ == "__main__":
    main()
