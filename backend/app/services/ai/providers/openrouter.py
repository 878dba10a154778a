"""
OpenRouter Provider

Secondary provider using the native OpenRouter SDK. The SDK client is
opened per request as an async context manager for proper cleanup.
"""

from typing import Any

import structlog
from openrouter import OpenRouter

from app.core.config import Settings
from app.services.ai.providers.base import BaseProvider, ProviderConfig

logger = structlog.get_logger()


class OpenRouterProvider(BaseProvider):
    """OpenRouter provider using the native SDK."""

    DEFAULT_MODEL = "meta-llama/llama-3.3-70b-instruct"
    API_URL = "https://openrouter.ai/api/v1"

    @property
    def provider_name(self) -> str:
        return "openrouter"

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenRouterProvider | None":
        if not settings.openrouter_api_key:
            return None
        return cls(
            ProviderConfig(
                model=settings.openrouter_model or cls.DEFAULT_MODEL,
                api_url=cls.API_URL,
                api_key=settings.openrouter_api_key,
            )
        )

    @classmethod
    def get_provider_info(cls) -> dict[str, Any]:
        return {
            "name": "OpenRouter",
            "description": "Access many models through one API",
            "priority": 2,
        }

    async def complete(
        self,
        prompt: str,
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        request_kwargs = self._build_request(prompt, temperature, max_tokens, json_mode)

        async with OpenRouter(api_key=self._get_api_key()) as client:
            response = await client.chat.send_async(**request_kwargs)

        content = response.choices[0].message.content or ""

        logger.debug(
            "openrouter_complete_success",
            model=self.model_name,
            response_len=len(content),
        )
        return content
