"""
Unit tests for the AI gateway failover loop.
"""

import json
import time

import pytest

from app.services.ai.errors import (
    AllProvidersExhaustedError,
    NoProvidersAvailableError,
    NoProvidersConfiguredError,
)
from app.services.ai.gateway import (
    ALL_PROVIDERS_FAILED_MESSAGE,
    NO_PROVIDER_MESSAGE,
    AIGateway,
    create_ai_gateway,
)
from app.services.ai.registry import ProviderRegistry
from app.services.ai.schemas import ANALYSIS_PARAMS, REPLY_PARAMS, SUMMARY_PARAMS, AnalysisResult

SUMMARY_JSON = json.dumps(
    {
        "situation": "Landlord is withholding the deposit",
        "relevantLaws": ["Civil Code Art. 1654"],
        "recommendedSteps": ["Send a demand letter", "File at the barangay"],
        "watchOutFor": ["Keep receipts"],
        "contacts": {"pao": "(02) 8426-2075"},
        "nextAction": {"step": "Send a demand letter", "timeline": "this week"},
    }
)


@pytest.mark.asyncio
class TestFailoverLoop:
    async def test_no_providers_configured(self, gateway):
        with pytest.raises(NoProvidersConfiguredError):
            await gateway.generate_structured_summary("transcript", "GENERAL")

    async def test_all_in_cooldown_is_not_reported_as_unconfigured(self, gateway, registry, add_provider):
        add_provider("groq")
        registry.mark_unavailable("groq", 60)

        with pytest.raises(NoProvidersAvailableError) as exc_info:
            await gateway.analyze_situation("transcript", "GENERAL")

        assert not isinstance(exc_info.value, NoProvidersConfiguredError)

    async def test_first_provider_success(self, gateway, registry, add_provider):
        groq = add_provider("groq", [SUMMARY_JSON], priority=1)
        backup = add_provider("openrouter", priority=2)

        result = await gateway.generate_structured_summary("full transcript", "PROPERTY")

        assert isinstance(result, AnalysisResult)
        assert result.situation == "Landlord is withholding the deposit"
        assert result.next_action == "Send a demand letter (Timeline: this week)"
        assert len(groq.calls) == 1
        assert backup.calls == []
        assert registry.list_available() == ["groq", "openrouter"]
        assert gateway.last_errors == {}

    async def test_tries_providers_in_priority_order(self, gateway, add_provider, api_error):
        second = add_provider("second", ["fallback reply"], priority=2)
        first = add_provider("first", [api_error("server error", status_code=500)], priority=1)

        reply = await gateway.generate_reply("Hello po", "")

        assert len(first.calls) == 1
        assert len(second.calls) == 1
        assert reply == "fallback reply"

    async def test_quota_failure_applies_long_cooldown(self, gateway, registry, add_provider, api_error, clock):
        add_provider("groq", [api_error("Error code: 429", status_code=429, code="insufficient_quota")])
        add_provider("openrouter", ["ok"], priority=2)

        await gateway.generate_text("prompt")

        assert registry.cooldown_remaining("groq") == pytest.approx(3600)
        clock.advance(3599)
        assert registry.list_available() == ["openrouter"]
        clock.advance(1)
        assert registry.list_available() == ["groq", "openrouter"]

    async def test_transient_failure_applies_short_cooldown(self, gateway, registry, add_provider, clock):
        add_provider("groq", [ConnectionError("connection reset")])
        add_provider("openrouter", ["ok"], priority=2)

        await gateway.generate_text("prompt")

        assert registry.cooldown_remaining("groq") == pytest.approx(60)
        clock.advance(60)
        assert "groq" in registry.list_available()

    async def test_single_provider_429_scenario(self, gateway, registry, add_provider, api_error):
        provider = add_provider("groq", [api_error("Rate limited", status_code=429)])

        with pytest.raises(AllProvidersExhaustedError) as exc_info:
            await gateway.generate_structured_summary("transcript", "LABOR")

        assert exc_info.value.errors == {"groq": "Rate limited"}
        assert registry.list_available() == []
        assert gateway.last_errors["groq"] == "Rate limited"

        # Same cooldown window: nothing left to try
        with pytest.raises(NoProvidersAvailableError):
            await gateway.generate_structured_summary("transcript", "LABOR")
        assert len(provider.calls) == 1

    async def test_exhausted_error_carries_all_provider_errors(self, gateway, add_provider, api_error):
        add_provider("groq", [api_error("quota exceeded", status_code=429)], priority=1)
        add_provider("custom", [RuntimeError("connection refused")], priority=2)

        with pytest.raises(AllProvidersExhaustedError) as exc_info:
            await gateway.analyze_situation("transcript", "GENERAL")

        assert exc_info.value.errors == {
            "groq": "quota exceeded",
            "custom": "connection refused",
        }

    async def test_last_error_kept_after_success(self, gateway, add_provider, clock):
        add_provider("groq", [RuntimeError("timeout"), "recovered"])

        assert await gateway.generate_reply("hi", "") == ALL_PROVIDERS_FAILED_MESSAGE
        clock.advance(60)
        assert await gateway.generate_reply("hi", "") == "recovered"

        assert gateway.last_errors == {"groq": "timeout"}

    async def test_empty_text_counts_as_failure(self, gateway, registry, add_provider):
        add_provider("groq", ["   "], priority=1)
        add_provider("custom", ["Ano po ang nangyari?"], priority=2)

        reply = await gateway.generate_reply("May problema ako", "")

        assert reply == "Ano po ang nangyari?"
        assert gateway.last_errors["groq"] == "Invalid response from groq"
        assert registry.list_available() == ["custom"]

    async def test_empty_json_reply_degrades_to_fallback(self, gateway, registry, add_provider):
        groq = add_provider("groq", [""], priority=1)
        backup = add_provider("custom", [SUMMARY_JSON], priority=2)

        result = await gateway.analyze_situation("transcript", "GENERAL")

        assert result.situation == "Unable to analyze situation automatically"
        assert "pao" in result.contacts
        assert len(groq.calls) == 1
        assert backup.calls == []
        assert registry.list_available() == ["groq", "custom"]
        assert gateway.last_errors == {}

    async def test_empty_json_reply_single_provider(self, gateway, registry, add_provider):
        add_provider("groq", ["   "])

        result = await gateway.generate_structured_summary("transcript", "LABOR")

        assert result.situation == "Unable to analyze situation automatically"
        assert registry.list_available() == ["groq"]

    async def test_unparseable_json_degrades_without_failover(self, gateway, registry, add_provider):
        groq = add_provider("groq", ["I am not JSON"], priority=1)
        backup = add_provider("custom", [SUMMARY_JSON], priority=2)

        result = await gateway.analyze_situation("transcript", "GENERAL")

        assert result.situation == "Unable to analyze situation automatically"
        assert "pao" in result.contacts
        assert len(groq.calls) == 1
        assert backup.calls == []
        assert registry.list_available() == ["groq", "custom"]

    async def test_provider_removed_mid_selection_is_skipped(self, gateway, registry, add_provider):
        add_provider("groq", ["ok"])
        registry.get("groq").client = None

        with pytest.raises(AllProvidersExhaustedError):
            await gateway.generate_text("prompt")


@pytest.mark.asyncio
class TestEntryPoints:
    """Prompt construction and model parameters per request kind."""

    async def test_summary_parameters(self, gateway, add_provider):
        provider = add_provider("groq", [SUMMARY_JSON])

        await gateway.generate_structured_summary("User: my landlord kept my deposit", "PROPERTY")

        call = provider.calls[0]
        assert call["json_mode"] is True
        assert call["temperature"] == SUMMARY_PARAMS.temperature
        assert call["max_tokens"] == 3000
        assert "my landlord kept my deposit" in call["prompt"]
        assert "LEGAL CATEGORY: PROPERTY" in call["prompt"]

    async def test_analysis_parameters(self, gateway, add_provider):
        provider = add_provider("groq", [SUMMARY_JSON])

        await gateway.analyze_situation("transcript", "FAMILY")

        call = provider.calls[0]
        assert call["json_mode"] is True
        assert call["max_tokens"] == ANALYSIS_PARAMS.max_tokens == 2000
        assert "Analyze this FAMILY legal situation" in call["prompt"]

    async def test_reply_parameters(self, gateway, add_provider):
        provider = add_provider("groq", ["  Ano po ang nangyari?  "])

        reply = await gateway.generate_reply("Tinanggal ako sa trabaho", "labor case")

        call = provider.calls[0]
        assert reply == "Ano po ang nangyari?"
        assert call["json_mode"] is False
        assert call["max_tokens"] == REPLY_PARAMS.max_tokens == 300
        assert "User: Tinanggal ako sa trabaho" in call["prompt"]
        assert "Context: labor case" in call["prompt"]

    async def test_long_transcript_is_bounded(self, gateway, add_provider, settings):
        provider = add_provider("groq", [SUMMARY_JSON])
        transcript = "old " * 1000 + "latest statement"

        await gateway.generate_structured_summary(transcript, "GENERAL")

        prompt = provider.calls[0]["prompt"]
        assert "latest statement" in prompt
        assert transcript not in prompt

    async def test_reply_without_providers(self, gateway):
        assert await gateway.generate_reply("hello", "") == NO_PROVIDER_MESSAGE

    async def test_reply_when_all_cooling_down(self, gateway, registry, add_provider):
        add_provider("groq")
        registry.mark_unavailable("groq", 60)

        assert await gateway.generate_reply("hello", "") == ALL_PROVIDERS_FAILED_MESSAGE

    async def test_generate_json_rejects_text_params(self, gateway, add_provider):
        add_provider("groq", ["plain"])

        with pytest.raises(TypeError):
            await gateway.generate_json("prompt", REPLY_PARAMS)


class TestProviderStatus:
    def test_status_snapshot(self, gateway, registry, add_provider, clock):
        add_provider("groq", priority=1)
        add_provider("custom", priority=3, enabled=False)
        registry.mark_unavailable("groq", 60)
        clock.advance(15)

        statuses = gateway.get_provider_status()

        assert [s.key for s in statuses] == ["groq", "custom"]
        groq = statuses[0]
        assert groq.display_name == "Groq"
        assert groq.enabled is True
        assert groq.available is False
        assert groq.priority == 1
        assert groq.model == "fake-model"
        assert groq.cooldown_remaining_seconds == pytest.approx(45)
        assert groq.last_error is None
        assert statuses[1].enabled is False
        assert statuses[1].model is None


class TestCreateGateway:
    def test_builds_registry_from_settings(self, settings):
        settings.groq_api_key = "gsk_test"

        gateway = create_ai_gateway(settings, clock=time.monotonic)

        assert isinstance(gateway, AIGateway)
        assert isinstance(gateway.registry, ProviderRegistry)
        assert gateway.registry.list_available() == ["groq"]
        assert gateway.settings is settings
