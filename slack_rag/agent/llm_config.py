"""
LiteLLM Configuration Module

Unified interface to the completion provider using LiteLLM. LiteLLM supports 100+
providers behind an OpenAI-compatible API, so LLM_MODEL can name any of them.

Environment variables:
- LLM_MODEL: Model identifier (e.g., "gpt-4o-mini", "anthropic/claude-3-5-haiku-20241022")
- OPENAI_API_KEY: API key for the provider
- LLM_MAX_TOKENS: (Optional) Max tokens for answers (default: 500)
- LLM_TEMPERATURE: (Optional) Temperature for answers (default: 0.3)
"""

from typing import Any, Dict, List, Optional

import litellm
from litellm import acompletion

from ..config import Settings, get_settings


class LLMClient:
    """Unified LLM client using LiteLLM."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize LLM client.

        Args:
            settings: Service settings (defaults to loading from environment)
        """
        self.settings = settings or get_settings()

        # Drop params a provider does not support instead of failing
        litellm.drop_params = True

        self.model = self.settings.llm_model

    async def acomplete(self, messages: List[Dict[str, str]], **kwargs) -> Any:
        """
        Generate a chat completion.

        Args:
            messages: List of message dicts with 'role' and 'content'
            **kwargs: Additional parameters passed to litellm.acompletion()

        Returns:
            LiteLLM completion response
        """
        params = {
            "model": self.model,
            "messages": messages,
            "max_tokens": kwargs.pop("max_tokens", self.settings.llm_max_tokens),
            "temperature": kwargs.pop("temperature", self.settings.llm_temperature),
            "timeout": kwargs.pop("timeout", self.settings.llm_timeout),
        }

        if self.settings.openai_api_key:
            params["api_key"] = self.settings.openai_api_key

        params.update(kwargs)

        return await acompletion(**params)

    async def complete_text(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Complete a single user prompt and return the generated text.

        Example:
            >>> client = LLMClient()
            >>> await client.complete_text("What is the capital of France?")
        """
        response = await self.acomplete(
            messages=[{"role": "user", "content": prompt}],
            temperature=self.settings.llm_temperature if temperature is None else temperature,
            max_tokens=max_tokens or self.settings.llm_max_tokens
        )
        return response.choices[0].message.content or ""


def get_llm_client(settings: Optional[Settings] = None) -> LLMClient:
    """Create an LLM client."""
    return LLMClient(settings)
