"""
Groq Provider

Primary provider: Llama models served through Groq's OpenAI-compatible API.
"""

from typing import Any

from app.core.config import Settings
from app.services.ai.providers.base import BaseProvider, ProviderConfig


class GroqProvider(BaseProvider):
    """Groq provider adapter.

    Default URL: https://api.groq.com/openai/v1
    """

    DEFAULT_MODEL = "llama-3.3-70b-versatile"
    API_URL = "https://api.groq.com/openai/v1"

    @property
    def provider_name(self) -> str:
        return "groq"

    @classmethod
    def from_settings(cls, settings: Settings) -> "GroqProvider | None":
        if not settings.groq_api_key:
            return None
        return cls(
            ProviderConfig(
                model=settings.groq_model or cls.DEFAULT_MODEL,
                api_url=settings.groq_api_url or cls.API_URL,
                api_key=settings.groq_api_key,
            )
        )

    @classmethod
    def get_provider_info(cls) -> dict[str, Any]:
        return {
            "name": "Groq (Llama)",
            "description": "Llama models on Groq LPU inference",
            "priority": 1,
        }
