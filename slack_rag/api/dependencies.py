"""
FastAPI Dependencies

Builds the service's clients once at startup and hands them to routes.

Usage:
    @router.post("/ask")
    async def ask(agent: RAGAgent = Depends(get_agent)):
        ...

Tests replace any provider through ``app.dependency_overrides``.
"""

from dataclasses import dataclass
from fastapi import Request

from ..agent import RAGAgent, get_llm_client
from ..config import Settings
from ..db import Base, MessageLoader, create_db_engine, create_session_factory
from ..ingestion import ChannelIngestor, SlackClient
from ..rag import VectorStore, get_embedding_service, get_vector_store


@dataclass
class Services:
    """Explicitly constructed collaborators shared across requests."""

    settings: Settings
    slack_client: SlackClient
    vector_store: VectorStore
    ingestor: ChannelIngestor
    agent: RAGAgent

    async def aclose(self):
        await self.slack_client.aclose()
        await self.vector_store.client.close()


def build_services(settings: Settings) -> Services:
    """
    Construct every client from settings.

    Creates the relational tables if they do not exist yet.
    """
    slack_client = SlackClient(
        settings.slack_bot_token,
        base_url=settings.slack_api_base_url,
        timeout=settings.slack_timeout,
        max_concurrency=settings.max_concurrency
    )
    embedding_service = get_embedding_service(settings)
    vector_store = get_vector_store(settings)
    llm_client = get_llm_client(settings)

    engine = create_db_engine(settings.database_url)
    Base.metadata.create_all(engine)
    loader = MessageLoader(create_session_factory(engine))

    return Services(
        settings=settings,
        slack_client=slack_client,
        vector_store=vector_store,
        ingestor=ChannelIngestor(
            slack_client,
            embedding_service,
            vector_store,
            loader=loader,
            max_concurrency=settings.max_concurrency
        ),
        agent=RAGAgent(embedding_service, vector_store, llm_client, settings)
    )


def _services(request: Request) -> Services:
    return request.app.state.services


def get_app_settings(request: Request) -> Settings:
    return _services(request).settings


def get_slack_client(request: Request) -> SlackClient:
    return _services(request).slack_client


def get_ingestor(request: Request) -> ChannelIngestor:
    return _services(request).ingestor


def get_agent(request: Request) -> RAGAgent:
    return _services(request).agent
