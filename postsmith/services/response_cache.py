"""Content-addressed response cache.

Maps (caller identity, exact prompt) to a previously generated text for a
short TTL, so duplicate rapid-fire requests do not reach the upstream twice.
Process-local: with several instances, hits only happen per instance.
"""

import asyncio
import hashlib
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict

from postsmith.clients.upstream_client import UpstreamClient
from postsmith.utils.clock import Clock, utc_now
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    text: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class CachedGeneration:
    text: str
    cached: bool
    estimated_tokens: int


def fingerprint(caller_identity: str, prompt: str) -> str:
    """SHA-256 of ``identity:prompt``."""
    return hashlib.sha256(f"{caller_identity}:{prompt}".encode("utf-8")).hexdigest()


def estimate_tokens(*texts: str) -> int:
    """Rough token estimate: four characters per token."""
    return math.ceil(sum(len(t) for t in texts) / 4)


class ResponseCache:
    """TTL cache in front of ``UpstreamClient.generate``."""

    def __init__(self, upstream: UpstreamClient, ttl_seconds: int = 300, clock: Clock = utc_now):
        self._upstream = upstream
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def _is_live(self, entry: CacheEntry, now: datetime) -> bool:
        return now - entry.created_at < self._ttl

    async def get_or_generate(self, caller_identity: str, prompt: str) -> CachedGeneration:
        """Return a live cached text, or generate, store and return a fresh one."""
        key = fingerprint(caller_identity, prompt)

        async with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_live(entry, self._clock()):
                log.debug("cache hit", key=key[:12])
                # Hits are estimated from the prompt alone
                return CachedGeneration(
                    text=entry.text, cached=True, estimated_tokens=estimate_tokens(prompt)
                )

        # Lock is not held across the upstream call
        text = await self._upstream.generate(prompt)

        async with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[key] = CacheEntry(text=text, created_at=now)
        log.debug("cache stored", key=key[:12], entries=len(self._entries))

        return CachedGeneration(
            text=text, cached=False, estimated_tokens=estimate_tokens(prompt, text)
        )

    def _purge_expired(self, now: datetime) -> None:
        """Remove expired entries. Must be called with lock held."""
        expired = [k for k, v in self._entries.items() if not self._is_live(v, now)]
        for k in expired:
            del self._entries[k]
        if expired:
            log.debug("cache entries expired", count=len(expired))
