"""Abstract base class for LLM providers."""

from abc import ABC, abstractmethod
from typing import List, Optional


class BaseLLMClient(ABC):
    """Abstract base class for LLM providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name (e.g., 'gemini', 'openai')."""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Return current model name."""
        pass

    @abstractmethod
    async def generate_completion(
        self,
        messages: List[dict[str, str]],
        temperature: float = 0.8,
        max_tokens: int = 700,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Run one completion call against the provider.

        Args:
            messages: Chat messages (role/content dicts)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            timeout: Optional timeout in seconds (uses client default if None)

        Returns:
            Raw completion text (may be empty)

        Raises:
            RateLimitExceededError: Provider signalled a rate limit
            UpstreamCallError: Transport failure, timeout or non-success status
            ConfigurationError: Client is missing its credentials
        """
        pass

    @property
    def is_configured(self) -> bool:
        """Whether the client has the credentials it needs."""
        return True
