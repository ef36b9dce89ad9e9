"""
FastAPI Application - Slack RAG Service

Main entry point for the REST API.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
import time
import logging
from typing import AsyncGenerator

from .dependencies import build_services
from .schemas import ErrorResponse, HealthResponse
from .routers import ask, channels, ingest
from ..config import get_settings
from ..errors import InvalidQueryError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Version
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan events.

    Validates configuration and builds every client on startup; closes them on shutdown.
    """
    logger.info("=" * 60)
    logger.info(f"Slack RAG API v{VERSION}")
    logger.info("=" * 60)

    settings = get_settings()
    settings.validate_required()

    if not settings.openai_api_key:
        logger.warning("⚠️  Provider API key not configured")

    services = build_services(settings)
    await services.vector_store.create_collection()
    app.state.services = services

    logger.info(f"✅ LLM configured: {settings.llm_model}")
    logger.info(f"✅ Embeddings: {settings.embedding_model} ({settings.embedding_dimension} dims)")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down API...")
    await services.aclose()


app = FastAPI(
    title="Slack RAG API",
    description="""
    Ask questions about Slack channel history.

    ## Features
    - Ingest channel messages and their thread replies into a vector index
    - Answer questions grounded only in the most relevant messages
    """,
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests"""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = (time.time() - start_time) * 1000
    logger.info(f"← {response.status_code} ({duration:.0f}ms)")

    return response


# Exception handlers
@app.exception_handler(InvalidQueryError)
async def invalid_query_handler(request: Request, exc: InvalidQueryError):
    """Handle missing/invalid questions"""
    logger.warning(f"Invalid query: {exc}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=str(exc)).model_dump()
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    errors = exc.errors()
    logger.warning(f"Validation error: {errors}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=f"Validation error: {errors[0]['msg']}").model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=str(exc) or "Internal server error").model_dump()
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Never contacts an external service.
    """
    return HealthResponse(ok=True)


app.include_router(channels.router, tags=["Channels"])
app.include_router(ingest.router, tags=["Ingestion"])
app.include_router(ask.router, tags=["Ask"])


if __name__ == "__main__":
    import uvicorn
    import os

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(
        "slack_rag.api.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        log_level="info"
    )
