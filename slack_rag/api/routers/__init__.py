"""HTTP routers for the Slack RAG service."""
