"""
Pytest configuration and fixtures for AI Legal Buddy tests.
"""

from collections.abc import Callable

import pytest

from app.core.config import Settings
from app.services.ai.gateway import AIGateway
from app.services.ai.interface import AIProviderInterface
from app.services.ai.registry import ProviderEntry, ProviderRegistry


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAPIError(Exception):
    """Mimics SDK errors that carry an HTTP status and an error code."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class FakeProvider(AIProviderInterface):
    """Scripted provider: each call pops the next reply, raising it if it is an exception."""

    def __init__(self, name: str, replies: list | None = None, model: str = "fake-model"):
        self._name = name
        self._model = model
        self.replies = list(replies or [])
        self.calls: list[dict] = []

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def model_name(self) -> str:
        return self._model

    async def complete(self, prompt, *, temperature, max_tokens, json_mode=False):
        self.calls.append(
            {
                "prompt": prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "json_mode": json_mode,
            }
        )
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        groq_api_key=None,
        openrouter_api_key=None,
        custom_ai_api_url=None,
        ai_max_prompt_chars=500,
    )


@pytest.fixture
def registry(clock: FakeClock) -> ProviderRegistry:
    return ProviderRegistry(clock=clock)


@pytest.fixture
def add_provider(registry: ProviderRegistry) -> Callable[..., FakeProvider]:
    """Register a scripted provider and return it."""

    def _add(key: str, replies: list | None = None, priority: int = 1, enabled: bool = True) -> FakeProvider:
        provider = FakeProvider(key, replies)
        registry.register(
            ProviderEntry(
                key=key,
                display_name=key.title(),
                client=provider if enabled else None,
                enabled=enabled,
                priority=priority,
            )
        )
        return provider

    return _add


@pytest.fixture
def gateway(registry: ProviderRegistry, settings: Settings) -> AIGateway:
    return AIGateway(registry, settings)


@pytest.fixture
def api_error() -> type[FakeAPIError]:
    return FakeAPIError


@pytest.fixture
def make_provider() -> type[FakeProvider]:
    return FakeProvider
