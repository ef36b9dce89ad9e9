"""
Ask Router

Natural language questions answered from ingested Slack messages.
"""

from fastapi import APIRouter, Depends, Request
import logging

from ..dependencies import get_agent
from ...agent import RAGAgent
from ...errors import InvalidQueryError
from ...models import AnswerResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ask", response_model=AnswerResult)
async def ask(request: Request, agent: RAGAgent = Depends(get_agent)):
    """
    Ask a question about ingested Slack history.

    **Body:** `{"query": "..."}`

    **Returns:**
    - `answer`: generated from the most relevant messages only
    - `sources`: `{score, content}` for each message used

    A missing, empty or non-string `query` returns 400.
    """
    try:
        body = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError
        raise InvalidQueryError()

    query = body.get("query") if isinstance(body, dict) else None
    logger.info(f"Question received: {str(query)[:100]}")

    return await agent.ask(query)
