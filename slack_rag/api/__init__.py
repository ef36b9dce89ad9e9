"""
FastAPI Application Module

Provides the REST API for the Slack RAG service.
"""

from .main import app

__all__ = ["app"]
