"""
Base Provider Implementation

Common functionality shared across all provider adapters.
"""

from dataclasses import dataclass
from typing import Any

import structlog
from openai import AsyncOpenAI

from app.core.config import Settings
from app.services.ai.interface import AIProviderInterface

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProviderConfig:
    """Connection settings for one provider."""

    model: str
    api_url: str | None = None
    api_key: str | None = None


class BaseProvider(AIProviderInterface):
    """Base class for OpenAI-compatible providers.

    Groq and most self-hosted servers speak the OpenAI chat completions
    format, so this base class provides the common implementation.
    """

    # Hard cap on output tokens (prevents runaway generation)
    MAX_OUTPUT_TOKENS = 4096

    def __init__(self, config: ProviderConfig):
        self.config = config
        self._client: AsyncOpenAI | None = None

    @property
    def provider_name(self) -> str:
        return "base"

    @property
    def model_name(self) -> str:
        return self.config.model

    # -------------------------------------------------------------------------
    # Class Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_settings(cls, settings: Settings) -> "BaseProvider | None":
        """Build the provider from settings, or None if not configured."""
        raise NotImplementedError

    @classmethod
    def get_provider_info(cls) -> dict[str, Any]:
        """Return display info and default priority."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Instance Methods
    # -------------------------------------------------------------------------

    def _get_api_key(self) -> str:
        # Some endpoints (like local Ollama) don't need an API key
        return self.config.api_key or "not-required"

    def _get_client(self) -> AsyncOpenAI:
        """Get or create OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                base_url=self.config.api_url,
                api_key=self._get_api_key(),
            )
        return self._client

    def _build_request(
        self,
        prompt: str,
        temperature: float,
        max_tokens: int,
        json_mode: bool,
    ) -> dict[str, Any]:
        request_kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": min(max_tokens, self.MAX_OUTPUT_TOKENS),
        }
        if json_mode:
            request_kwargs["response_format"] = {"type": "json_object"}
        return request_kwargs

    async def complete(
        self,
        prompt: str,
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        logger.debug(
            "ai_complete_start",
            provider=self.provider_name,
            model=self.model_name,
            prompt_len=len(prompt),
            json_mode=json_mode,
        )

        client = self._get_client()
        response = await client.chat.completions.create(
            **self._build_request(prompt, temperature, max_tokens, json_mode)
        )

        content = response.choices[0].message.content or ""

        usage = None
        if response.usage:
            usage = response.usage.total_tokens

        logger.debug(
            "ai_complete_success",
            provider=self.provider_name,
            model=self.model_name,
            response_len=len(content),
            total_tokens=usage,
        )
        return content
