"""
Custom Provider

Generic OpenAI-compatible endpoint provider.
Supports any API that implements the OpenAI chat completions format.

Use cases:
- Local Ollama instances
- Self-hosted vLLM servers
- Any OpenAI-compatible API
"""

from typing import Any

from app.core.config import Settings
from app.services.ai.providers.base import BaseProvider, ProviderConfig


class CustomProvider(BaseProvider):
    """Generic OpenAI-compatible endpoint provider.

    Enabled when CUSTOM_AI_API_URL is set; the API key is optional.
    """

    @property
    def provider_name(self) -> str:
        return "custom"

    @classmethod
    def from_settings(cls, settings: Settings) -> "CustomProvider | None":
        if not settings.custom_ai_api_url:
            return None
        return cls(
            ProviderConfig(
                model=settings.custom_ai_model,
                api_url=settings.custom_ai_api_url,
                api_key=settings.custom_ai_api_key,
            )
        )

    @classmethod
    def get_provider_info(cls) -> dict[str, Any]:
        return {
            "name": "Custom API",
            "description": "Any OpenAI-compatible endpoint (Ollama, vLLM, etc.)",
            "priority": 3,
        }
