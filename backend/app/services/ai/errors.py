"""
AI Service Errors

Provider failures are recovered inside the gateway's failover loop; only
total exhaustion (or having no provider to try) reaches the caller.
"""


class AIServiceError(Exception):
    """Base class for AI service errors."""
    pass


class NoProvidersAvailableError(AIServiceError):
    """Raised when no enabled provider is currently out of cooldown."""
    pass


class NoProvidersConfiguredError(NoProvidersAvailableError):
    """Raised when no provider has credentials configured at all."""
    pass


class ProviderCallFailedError(AIServiceError):
    """A provider call returned no usable text.

    SDK exceptions are classified as raised; this one covers empty replies
    in text mode. Always caught by the gateway, never raised to callers.
    """

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class OutputParseError(AIServiceError):
    """Model output could not be turned into a JSON object."""
    pass


class AllProvidersExhaustedError(AIServiceError):
    """Every available provider failed for this request."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"All AI providers failed. Last errors: {self.errors}")


class AIRequestTimeoutError(AIServiceError):
    """The caller's overall time budget for an AI request ran out."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"AI request timeout after {timeout_seconds:g}s")
