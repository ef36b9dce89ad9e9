"""
Set up storage for the Slack RAG service.

Creates the relational tables (messages, threads, message_embeddings) and the
Qdrant collection.

Usage:
    python scripts/setup_database.py
    python scripts/setup_database.py --recreate-collection
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import inspect

from slack_rag.config import get_settings
from slack_rag.db import Base, create_db_engine
from slack_rag.rag import VectorStore


async def setup_collection(recreate: bool) -> bool:
    store = VectorStore(get_settings())
    try:
        return await store.create_collection(recreate=recreate)
    finally:
        await store.client.close()


def main():
    """Set up relational tables and the vector collection"""
    parser = argparse.ArgumentParser(description="Create tables and the Qdrant collection")
    parser.add_argument(
        "--recreate-collection",
        action="store_true",
        help="Delete and recreate the Qdrant collection (drops all vectors)",
    )
    args = parser.parse_args()

    settings = get_settings()

    print("=" * 60)
    print("Slack RAG Storage Setup")
    print("=" * 60)

    try:
        print("\n📦 Creating relational tables...")
        engine = create_db_engine(settings.database_url)
        Base.metadata.create_all(engine)
        tables = inspect(engine).get_table_names()
        print(f"✅ Tables: {', '.join(sorted(tables))}")

        print(f"\n🔨 Preparing Qdrant collection '{settings.qdrant_collection_name}'...")
        created = asyncio.run(setup_collection(args.recreate_collection))
        print("✅ Collection created" if created else "✅ Collection already exists")

        print("\n" + "=" * 60)
        print("✅ Setup complete!")
        print("=" * 60)
        print("\nNext steps:")
        print("  1. Ingest a channel: python scripts/ingest_channel.py --channel C0123456789")
        print("  2. Start the API: python scripts/start_api.py")
        return 0

    except Exception as e:
        print(f"\n❌ ERROR: {e}")
        print("\nTroubleshooting:")
        print("  1. Check DATABASE_URL in .env is correct")
        print("  2. Check QDRANT_URL points at a running Qdrant")
        return 1


if __name__ == "__main__":
    sys.exit(main())
