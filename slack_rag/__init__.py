"""Slack RAG: question answering over Slack channel history."""

__version__ = "0.1.0"
