"""Factory functions for external API clients."""

from postsmith.clients.base_llm_client import BaseLLMClient
from postsmith.clients.litellm_client import LiteLLMClient
from postsmith.clients.upstream_client import UpstreamClient
from postsmith.config import Settings
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


def get_llm_client(settings: Settings) -> BaseLLMClient:
    """
    Create the LLM client for the configured LiteLLM model.

    A missing API key is not fatal at startup: the first generation fails
    with ``ConfigurationError`` instead, and /health reports the provider
    as unhealthy.
    """
    if not settings.gemini_api_key:
        log.warning("llm api key not configured", model=settings.llm_model)

    return LiteLLMClient(
        model=settings.llm_model,
        api_key=settings.gemini_api_key,
        timeout=float(settings.llm_call_timeout_seconds),
    )


def get_upstream_client(settings: Settings, llm: BaseLLMClient) -> UpstreamClient:
    return UpstreamClient(
        llm,
        max_attempts=settings.upstream_max_attempts,
        retry_wait_seconds=settings.upstream_retry_wait_seconds,
        temperature=settings.llm_temperature,
        max_output_tokens=settings.llm_max_output_tokens,
    )
