"""
Provider Adapters Package

Contains implementations for each supported AI provider.
To add a new provider:
1. Create a new file (e.g., myprovider.py) implementing BaseProvider
2. Import it here and add to PROVIDER_REGISTRY

The registry is the single source of truth for which providers exist;
their default priority comes from get_provider_info().
"""

from app.services.ai.providers.base import BaseProvider, ProviderConfig
from app.services.ai.providers.custom import CustomProvider
from app.services.ai.providers.groq import GroqProvider
from app.services.ai.providers.openrouter import OpenRouterProvider

# Registry mapping provider key -> provider class
PROVIDER_REGISTRY: dict[str, type[BaseProvider]] = {
    "groq": GroqProvider,
    "openrouter": OpenRouterProvider,
    "custom": CustomProvider,
}


def get_all_providers() -> dict[str, dict]:
    """Return info for all registered providers."""
    result = {}
    for provider_type, provider_cls in PROVIDER_REGISTRY.items():
        result[provider_type] = provider_cls.get_provider_info()
    return result


__all__ = [
    "PROVIDER_REGISTRY",
    "BaseProvider",
    "CustomProvider",
    "GroqProvider",
    "OpenRouterProvider",
    "ProviderConfig",
    "get_all_providers",
]
