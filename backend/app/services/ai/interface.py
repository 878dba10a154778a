"""
AI Provider Interface

Abstract base class defining the contract that all AI providers must implement.
"""

from abc import ABC, abstractmethod


class AIProviderInterface(ABC):
    """Abstract interface for AI providers.

    All provider adapters (Groq, OpenRouter, custom endpoints) must
    implement this interface.
    """

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        """Run a single-turn chat completion.

        Args:
            prompt: Full user prompt
            temperature: Sampling temperature
            max_tokens: Maximum output tokens
            json_mode: Ask the provider for a JSON object response

        Returns:
            The message text returned by the model

        Raises:
            Any SDK/network exception; the gateway classifies it.
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name for logging."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name being used."""
        pass
