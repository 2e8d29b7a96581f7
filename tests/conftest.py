"""Shared pytest fixtures."""

import os

# The memory backend keeps the app and its lifespan off PostgreSQL
os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

# Clear settings cache before any imports to prevent stale values with coverage
from postsmith.config import get_settings

get_settings.cache_clear()

import pytest
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from postsmith.clients.base_llm_client import BaseLLMClient
from postsmith.clients.upstream_client import UpstreamClient
from postsmith.policy import UsagePolicy
from postsmith.repositories import InMemoryAccountStore, InMemoryHistoryStore

QUALITY_JSON = (
    '{"hookScore": 9, "clarityScore": 8, "engagementLevel": "High", '
    '"suggestions": ["Name the audience.", "Shorten line two."]}'
)


class FakeClock:
    """Settable UTC clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class ScriptedLLM(BaseLLMClient):
    """LLM double that answers generation and analysis prompts separately.

    ``post`` and ``analysis`` may be a string, an exception instance, or a
    list of either consumed one per call.
    """

    def __init__(self, post="Big news today!\nSubscribe now. #AI #News #Launch", analysis=QUALITY_JSON):
        self.post = post
        self.analysis = analysis
        self.prompts: List[str] = []

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return "gemini/gemini-test"

    @staticmethod
    def _next(script):
        value = script.pop(0) if isinstance(script, list) else script
        if isinstance(value, Exception):
            raise value
        return value

    async def generate_completion(
        self,
        messages: List[dict[str, str]],
        temperature: float = 0.8,
        max_tokens: int = 700,
        timeout: Optional[float] = None,
    ) -> str:
        prompt = messages[-1]["content"]
        self.prompts.append(prompt)
        if prompt.startswith("Analyze this"):
            return self._next(self.analysis)
        return self._next(self.post)

    @property
    def generation_prompts(self) -> List[str]:
        return [p for p in self.prompts if not p.startswith("Analyze this")]

    @property
    def analysis_prompts(self) -> List[str]:
        return [p for p in self.prompts if p.startswith("Analyze this")]


@pytest.fixture
def clock():
    """A clock fixed at 2026-03-02 09:00 UTC until advanced."""
    return FakeClock(datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def scripted_llm():
    return ScriptedLLM()


@pytest.fixture
def upstream(scripted_llm):
    """UpstreamClient over the scripted LLM with no retry wait."""
    return UpstreamClient(scripted_llm, max_attempts=3, retry_wait_seconds=0)


@pytest.fixture
def policy():
    return UsagePolicy()


@pytest.fixture
def account_store():
    return InMemoryAccountStore()


@pytest.fixture
def history_store():
    return InMemoryHistoryStore()
