"""In-process response cache for the query endpoint.

Stores serialized /movies responses for a fixed time-to-live.
Entries are keyed by the normalized filter, or share a single
key when CACHE_SHARED_KEY is enabled.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

from movie_catalog.api.schemas import MovieFilter
from movie_catalog.settings import settings

SHARED_KEY = "movies"

# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class CacheEntry:
    """Cached value with its expiry time.

    Attributes:
        value: Cached payload.
        expires_at: Monotonic timestamp after which the entry is stale.
    """

    value: Any
    expires_at: float


# =============================================================================
# RESPONSE CACHE
# =============================================================================


class ResponseCache:
    """Thread-safe TTL cache.

    Attributes:
        _ttl: Entry lifetime in seconds (0 disables caching).
        _shared_key: Use one key for every filter.
        _entries: Key to entry mapping.
        _lock: Thread synchronization lock.
    """

    def __init__(
        self,
        ttl_seconds: float,
        shared_key: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            ttl_seconds: Entry lifetime in seconds.
            shared_key: Cache every filter under one key.
            clock: Callable returning the current time in seconds.
        """
        self._ttl = ttl_seconds
        self._shared_key = shared_key
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()

    @property
    def enabled(self) -> bool:
        """True when entries are kept at all."""
        return self._ttl > 0

    def key_for(self, movie_filter: MovieFilter) -> str:
        """Cache key for a filter.

        Args:
            movie_filter: Validated filter.

        Returns:
            Cache key string.
        """
        if self._shared_key:
            return SHARED_KEY
        return f"{SHARED_KEY}:{movie_filter.cache_key()}"

    def get(self, key: str) -> Any | None:
        """Get a live entry.

        Args:
            key: Cache key.

        Returns:
            Cached value, or None if missing or expired.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store a value for the configured TTL.

        Args:
            key: Cache key.
            value: Value to cache.
        """
        if not self.enabled:
            return
        with self._lock:
            now = self._clock()
            self._cleanup_expired(now)
            self._entries[key] = CacheEntry(value=value, expires_at=now + self._ttl)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._cleanup_expired(self._clock())
            return len(self._entries)

    def _cleanup_expired(self, now: float) -> None:
        """Remove entries whose TTL has elapsed.

        Must be called with lock held.

        Args:
            now: Current clock reading.
        """
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]


# =============================================================================
# SINGLETON / DEPENDENCY
# =============================================================================

_response_cache = ResponseCache(
    ttl_seconds=settings.cache.ttl_seconds,
    shared_key=settings.cache.shared_key,
)


def get_response_cache() -> ResponseCache:
    """FastAPI dependency returning the process-wide cache.

    Returns:
        Shared ResponseCache instance.
    """
    return _response_cache
