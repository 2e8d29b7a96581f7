"""External API clients."""

from postsmith.clients.base_llm_client import BaseLLMClient
from postsmith.clients.litellm_client import LiteLLMClient
from postsmith.clients.upstream_client import UpstreamClient

__all__ = [
    "BaseLLMClient",
    "LiteLLMClient",
    "UpstreamClient",
]
