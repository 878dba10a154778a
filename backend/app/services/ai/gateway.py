"""
AI Gateway

Main entry point for AI generation with:
- Multi-provider support (Groq, OpenRouter, Custom)
- Priority-ordered failover
- Cooldowns sized by failure kind (quota vs transient)
- JSON extraction/repair for structured legal summaries
"""

import time
from typing import Any

import structlog

from app.core.config import Settings, get_settings
from app.services.ai.classify import FailureKind, classify_failure
from app.services.ai.errors import (
    AllProvidersExhaustedError,
    NoProvidersAvailableError,
    NoProvidersConfiguredError,
    ProviderCallFailedError,
)
from app.services.ai.parsing import extract_json, to_analysis_result
from app.services.ai.prompts import (
    bound_text,
    build_analysis_prompt,
    build_reply_prompt,
    build_summary_prompt,
)
from app.services.ai.registry import Clock, ProviderRegistry, build_registry
from app.services.ai.schemas import (
    ANALYSIS_PARAMS,
    REPLY_PARAMS,
    SUMMARY_PARAMS,
    AnalysisResult,
    GenerationMode,
    GenerationParams,
    ProviderStatus,
)

logger = structlog.get_logger()

# Localized fallbacks for the conversational entry point
NO_PROVIDER_MESSAGE = "Pasensya na, walang available na AI service. Please check your API keys."
ALL_PROVIDERS_FAILED_MESSAGE = "Pasensya na, lahat ng AI providers ay hindi available sa ngayon."


class AIGateway:
    """Main AI generation gateway.

    Tries providers strictly in priority order, one at a time. A failing
    provider is recorded in ``last_errors`` and put into cooldown before
    the next one is tried.
    """

    def __init__(self, registry: ProviderRegistry, settings: Settings | None = None):
        """Initialize gateway.

        Args:
            registry: Provider registry owned by this gateway
            settings: Application settings (cooldowns, prompt bounds)
        """
        self.registry = registry
        self.settings = settings or get_settings()
        self._last_errors: dict[str, str] = {}

    @property
    def last_errors(self) -> dict[str, str]:
        """Most recent failure message per provider (never cleared)."""
        return dict(self._last_errors)

    def _cooldown_for(self, kind: FailureKind) -> float:
        if kind is FailureKind.QUOTA:
            return self.settings.ai_quota_cooldown_seconds
        return self.settings.ai_transient_cooldown_seconds

    def _record_failure(self, key: str, error: Exception) -> None:
        message = str(error) or type(error).__name__
        self._last_errors[key] = message

        kind = classify_failure(error)
        logger.warning(
            "ai_provider_failed",
            provider=key,
            error=message,
            error_type=type(error).__name__,
            failure_kind=kind.value,
        )
        self.registry.mark_unavailable(key, self._cooldown_for(kind))

    def _selection(self) -> list[str]:
        keys = self.registry.list_available()
        if keys:
            return keys

        if not self.registry.list_enabled():
            logger.error("ai_no_providers_configured")
            raise NoProvidersConfiguredError(
                "No AI providers configured. Set GROQ_API_KEY, OPENROUTER_API_KEY or CUSTOM_AI_API_URL."
            )

        logger.error("ai_no_providers_available")
        raise NoProvidersAvailableError("No AI providers available (all in cooldown)")

    async def generate(self, prompt: str, params: GenerationParams) -> str | dict[str, Any]:
        """Run the failover loop for one request.

        Args:
            prompt: Complete, already bounded prompt
            params: Output mode and model parameters

        Returns:
            Stripped reply text (text mode) or extracted JSON object (json mode)

        Raises:
            NoProvidersAvailableError: If nothing can be tried
            AllProvidersExhaustedError: If every provider failed
        """
        keys = self._selection()
        json_mode = params.mode is GenerationMode.JSON

        for key in keys:
            entry = self.registry.get(key)
            if entry is None or entry.client is None:
                # Removed or reconfigured while this request was running
                continue

            log = logger.bind(provider=key, model=entry.client.model_name, mode=params.mode.value)
            log.info("ai_provider_attempt", name=entry.display_name, prompt_len=len(prompt))

            start = time.perf_counter()
            try:
                text = await entry.client.complete(
                    prompt,
                    temperature=params.temperature,
                    max_tokens=params.max_tokens,
                    json_mode=json_mode,
                )
                if not isinstance(text, str):
                    text = ""
                # Empty JSON output degrades to the fallback summary instead
                if not json_mode and not text.strip():
                    raise ProviderCallFailedError(key, f"Invalid response from {key}")
            except Exception as e:
                self._record_failure(key, e)
                continue

            log.info(
                "ai_provider_success",
                duration_ms=int((time.perf_counter() - start) * 1000),
                response_len=len(text),
            )

            if json_mode:
                return extract_json(text)
            return text.strip()

        logger.error("ai_all_providers_exhausted", errors=self._last_errors)
        raise AllProvidersExhaustedError(self._last_errors)

    async def generate_text(self, prompt: str, params: GenerationParams = REPLY_PARAMS) -> str:
        result = await self.generate(prompt, params)
        return str(result)

    async def generate_json(self, prompt: str, params: GenerationParams = SUMMARY_PARAMS) -> dict[str, Any]:
        result = await self.generate(prompt, params)
        if not isinstance(result, dict):
            raise TypeError(f"Expected JSON generation params, got mode {params.mode.value}")
        return result

    async def generate_structured_summary(self, full_text: str, category: str) -> AnalysisResult:
        """Comprehensive end-of-session consultation summary.

        Raises on total failure so the HTTP boundary can answer with an error.
        """
        transcript = bound_text(full_text, self.settings.ai_max_prompt_chars)
        logger.info(
            "ai_summary_requested",
            transcript_len=len(full_text or ""),
            category=category,
        )
        data = await self.generate_json(build_summary_prompt(transcript, category), SUMMARY_PARAMS)
        return to_analysis_result(data)

    async def analyze_situation(self, transcript: str, category: str) -> AnalysisResult:
        """Shorter in-call analysis of the situation so far."""
        bounded = bound_text(transcript, self.settings.ai_max_prompt_chars)
        data = await self.generate_json(build_analysis_prompt(bounded, category), ANALYSIS_PARAMS)
        return to_analysis_result(data)

    async def generate_reply(self, message: str, context: str) -> str:
        """Conversational reply for a live call.

        Provider exhaustion is answered with a localized apology instead of
        an exception.
        """
        bounded = bound_text(context, self.settings.ai_max_prompt_chars)
        try:
            return await self.generate_text(build_reply_prompt(message, bounded), REPLY_PARAMS)
        except NoProvidersConfiguredError:
            return NO_PROVIDER_MESSAGE
        except (NoProvidersAvailableError, AllProvidersExhaustedError):
            return ALL_PROVIDERS_FAILED_MESSAGE

    def get_provider_status(self) -> list[ProviderStatus]:
        """Diagnostic snapshot of every registered provider."""
        statuses = []
        for entry in self.registry.entries():
            statuses.append(
                ProviderStatus(
                    key=entry.key,
                    display_name=entry.display_name,
                    enabled=entry.enabled,
                    available=self.registry.is_available(entry.key),
                    priority=entry.priority,
                    model=entry.client.model_name if entry.client else None,
                    last_error=self._last_errors.get(entry.key),
                    cooldown_remaining_seconds=round(self.registry.cooldown_remaining(entry.key), 1),
                )
            )
        return statuses


def create_ai_gateway(settings: Settings | None = None, clock: Clock = time.monotonic) -> AIGateway:
    """Build a gateway with its own registry from settings.

    Call once per process and pass the instance to whoever needs it.
    """
    settings = settings or get_settings()
    return AIGateway(build_registry(settings, clock=clock), settings)
