"""
AI Service Package

Provides a multi-provider AI generation gateway with:
- Provider abstraction layer (Groq, OpenRouter, custom OpenAI-compatible)
- Priority-ordered failover with quota-aware cooldowns
- JSON extraction/repair for structured legal summaries
"""

from app.services.ai.errors import (
    AIRequestTimeoutError,
    AIServiceError,
    AllProvidersExhaustedError,
    NoProvidersAvailableError,
    NoProvidersConfiguredError,
)
from app.services.ai.gateway import AIGateway, create_ai_gateway
from app.services.ai.interface import AIProviderInterface
from app.services.ai.registry import ProviderEntry, ProviderRegistry, build_registry
from app.services.ai.schemas import AnalysisResult, ProviderStatus

__all__ = [
    "AIGateway",
    "AIProviderInterface",
    "AIRequestTimeoutError",
    "AIServiceError",
    "AllProvidersExhaustedError",
    "AnalysisResult",
    "NoProvidersAvailableError",
    "NoProvidersConfiguredError",
    "ProviderEntry",
    "ProviderRegistry",
    "ProviderStatus",
    "build_registry",
    "create_ai_gateway",
]
