"""
Read-through TTL cache for provider lookups.

Each client owns its own TTLCache instance. Entries expire lazily: a stale
entry stays in memory until the next access for its key (or until the entry
cap forces it out).
"""

import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from repoclaim.logging import get_logger

T = TypeVar("T")

logger = get_logger("cache")


@dataclass(frozen=True)
class CacheTTL:
    """Freshness windows in seconds for each cached lookup."""

    repo: float = 5 * 60
    contributors: float = 60 * 60
    issues: float = 10 * 60
    pulls: float = 10 * 60
    user: float = 30 * 60


def create_cache_key(namespace: str, kind: str, identifier: str) -> str:
    """Serialize a (namespace, entity-kind, identifier) tuple into one key."""
    return f"{namespace}:{kind}:{identifier}"


@dataclass
class _Entry:
    value: Any
    stored_at: float
    ttl: float


class TTLCache:
    """
    In-memory key/value store with per-entry time-to-live.

    Concurrent misses on the same key are not deduplicated; each caller runs
    the producer and the last one to finish wins.
    """

    def __init__(
        self,
        default_ttl: float = 300.0,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            default_ttl: TTL in seconds used when a call passes no ttl
            max_entries: Optional cap on stored entries; oldest entries are evicted first
            clock: Monotonic time source (injectable for tests)
        """
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self._fresh_entry(key) is not None

    async def get_or_compute(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl: float | None = None,
    ) -> T:
        """
        Return the cached value for key, or compute and store it.

        Args:
            key: Cache key (see create_cache_key)
            producer: Zero-argument coroutine function computing the value
            ttl: Freshness window in seconds (default: default_ttl)

        Returns:
            The cached or freshly computed value

        Raises:
            Whatever producer raises; nothing is stored in that case.
        """
        entry = self._fresh_entry(key)
        if entry is not None:
            logger.debug("Cache hit for %s", key)
            return entry.value

        logger.debug("Cache miss for %s", key)
        value = await producer()
        self.set(key, value, ttl)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a fresh cached value, or default when absent or expired."""
        entry = self._fresh_entry(key)
        return default if entry is None else entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value under key with a fresh timestamp."""
        effective_ttl = self.default_ttl if ttl is None else ttl
        if effective_ttl <= 0:
            raise ValueError("ttl must be positive")

        self._entries.pop(key, None)
        if self.max_entries is not None and len(self._entries) >= self.max_entries:
            self._evict()
        self._entries[key] = _Entry(value=value, stored_at=self._clock(), ttl=effective_ttl)

    def invalidate(self, key: str) -> bool:
        """Drop a single key. Returns True if it was present."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def _fresh_entry(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= entry.ttl:
            return None
        return entry

    def _evict(self) -> None:
        now = self._clock()
        expired = [k for k, e in self._entries.items() if now - e.stored_at >= e.ttl]
        for key in expired:
            del self._entries[key]

        # insertion order: first item is the oldest
        while self.max_entries is not None and len(self._entries) >= self.max_entries:
            self._entries.popitem(last=False)
