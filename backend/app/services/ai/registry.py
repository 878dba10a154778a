"""
AI Provider Registry

Holds the prioritized set of text-generation providers and their cooldown
state. One registry is built per process and handed to the gateway.

Availability is computed lazily from ``cooldown_until`` at selection time,
so no timers need to be scheduled or cleaned up.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from app.core.config import Settings
from app.services.ai.interface import AIProviderInterface

logger = structlog.get_logger()

DEFAULT_COOLDOWN_SECONDS = 300.0

Clock = Callable[[], float]


@dataclass
class ProviderEntry:
    """A registered provider and its dynamic availability state."""

    key: str
    display_name: str
    client: AIProviderInterface | None = None
    enabled: bool = False
    priority: int = 0
    cooldown_until: float | None = None
    # Registration order, used to break priority ties
    order: int = field(default=0, compare=False)


def is_available(entry: ProviderEntry, now: float) -> bool:
    """An entry is available unless it is inside an active cooldown window."""
    return entry.cooldown_until is None or now >= entry.cooldown_until


class ProviderRegistry:
    """Prioritized provider registry with cooldown tracking."""

    def __init__(self, clock: Clock = time.monotonic, default_cooldown: float = DEFAULT_COOLDOWN_SECONDS):
        self._clock = clock
        self.default_cooldown = default_cooldown
        self._entries: dict[str, ProviderEntry] = {}
        self._counter = 0

    def now(self) -> float:
        return self._clock()

    def register(self, entry: ProviderEntry) -> ProviderEntry:
        """Add (or replace) a provider entry."""
        if entry.key not in self._entries:
            entry.order = self._counter
            self._counter += 1
        else:
            entry.order = self._entries[entry.key].order
        self._entries[entry.key] = entry
        return entry

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)

    def get(self, key: str) -> ProviderEntry | None:
        return self._entries.get(key)

    def entries(self) -> list[ProviderEntry]:
        """All entries, in selection order."""
        return sorted(self._entries.values(), key=lambda e: (e.priority, e.order))

    def list_enabled(self) -> list[str]:
        return [e.key for e in self.entries() if e.enabled]

    def list_available(self) -> list[str]:
        """Keys of enabled providers not in cooldown, lowest priority first."""
        now = self.now()
        return [e.key for e in self.entries() if e.enabled and is_available(e, now)]

    def is_available(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and is_available(entry, self.now())

    def cooldown_remaining(self, key: str) -> float:
        entry = self._entries.get(key)
        if entry is None or entry.cooldown_until is None:
            return 0.0
        return max(0.0, entry.cooldown_until - self.now())

    def mark_unavailable(self, key: str, duration: float | None = None) -> None:
        """Put a provider into cooldown for ``duration`` seconds.

        A repeated call replaces the current window (last write wins).
        """
        entry = self._entries.get(key)
        if entry is None:
            return

        if duration is None:
            duration = self.default_cooldown
        entry.cooldown_until = self.now() + duration
        logger.warning(
            "ai_provider_cooldown",
            provider=key,
            name=entry.display_name,
            duration_s=duration,
        )


def build_registry(settings: Settings, clock: Clock = time.monotonic) -> ProviderRegistry:
    """Build the process registry from configured credentials.

    Every known provider is registered; only those with credentials are
    enabled and get a client.
    """
    from app.services.ai.providers import PROVIDER_REGISTRY

    registry = ProviderRegistry(clock=clock, default_cooldown=settings.ai_default_cooldown_seconds)

    for key, provider_cls in PROVIDER_REGISTRY.items():
        info = provider_cls.get_provider_info()
        client = provider_cls.from_settings(settings)
        registry.register(
            ProviderEntry(
                key=key,
                display_name=info["name"],
                client=client,
                enabled=client is not None,
                priority=info["priority"],
            )
        )

    logger.info(
        "ai_registry_built",
        enabled=registry.list_enabled(),
        registered=[e.key for e in registry.entries()],
    )
    return registry
