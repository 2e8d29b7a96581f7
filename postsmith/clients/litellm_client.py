"""LiteLLM-based completion client.

Routes to any LiteLLM-supported provider via model prefix (the default is
``gemini/gemini-2.5-flash``). One call, one attempt: retries belong to
``UpstreamClient``.
"""

import asyncio
from contextlib import asynccontextmanager

import litellm

from postsmith.clients.base_llm_client import BaseLLMClient
from postsmith.exceptions import (
    ConfigurationError,
    LLMTimeoutError,
    RateLimitExceededError,
    UpstreamCallError,
)
from postsmith.utils.logger import get_logger, truncate

log = get_logger(__name__)


def _provider_from_model(model: str) -> str:
    """Extract provider prefix from a LiteLLM model string."""
    return model.split("/", 1)[0] if "/" in model else "openai"


def _is_rate_limit(exc: Exception) -> bool:
    return isinstance(exc, litellm.RateLimitError) or getattr(exc, "status_code", None) == 429


class LiteLLMClient(BaseLLMClient):
    """Unified LLM client backed by LiteLLM."""

    def __init__(
        self,
        model: str = "gemini/gemini-2.5-flash",
        api_key: str = "",
        timeout: float = 30.0,
    ):
        self._model = model
        self._api_key = api_key
        self.default_timeout = timeout

    @property
    def provider_name(self) -> str:
        return _provider_from_model(self._model)

    @property
    def model(self) -> str:
        return self._model

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @asynccontextmanager
    async def _timeout(self, seconds: float):
        try:
            async with asyncio.timeout(seconds):
                yield
        except asyncio.TimeoutError:
            raise LLMTimeoutError(provider=self.provider_name, timeout_seconds=seconds)

    async def generate_completion(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.8,
        max_tokens: int = 700,
        timeout: float | None = None,
    ) -> str:
        if not self._api_key:
            raise ConfigurationError(f"Missing API key for provider '{self.provider_name}'.")

        effective_timeout = timeout if timeout is not None else self.default_timeout

        log.debug(
            "litellm request",
            model=self._model,
            messages=len(messages),
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=effective_timeout,
        )

        try:
            async with self._timeout(effective_timeout):
                response = await litellm.acompletion(
                    model=self._model,
                    messages=messages,
                    temperature=temperature,
                    max_tokens=max_tokens,
                    api_key=self._api_key,
                )
        except UpstreamCallError:
            raise
        except Exception as e:
            if _is_rate_limit(e):
                log.warning("upstream rate limited", model=self._model, error=str(e))
                raise RateLimitExceededError() from e
            log.warning(
                "litellm call failed",
                model=self._model,
                error_type=type(e).__name__,
                error=truncate(str(e), 300),
            )
            raise UpstreamCallError(str(e) or type(e).__name__) from e

        content = response.choices[0].message.content or ""  # type: ignore[union-attr]
        usage = getattr(response, "usage", None)

        log.debug(
            "litellm response",
            model=self._model,
            content=truncate(content, 2000),
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )

        return content
