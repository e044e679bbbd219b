"""
Process-local TTL cache for deserialized pool lists.
"""

import sys
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from cachetools import TTLCache

POOL_CACHE_TTL_SECONDS = 240


class LocalPoolCache:
    """In-memory pool cache with a fixed TTL per entry.

    Values are stored and returned by reference. Callers must not mutate the
    lists they get back.
    """

    def __init__(
        self,
        ttl: float = POOL_CACHE_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        # Entry count is bounded by the number of chains served
        self._cache: TTLCache = TTLCache(maxsize=sys.maxsize, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[List[Any]]:
        """Return the live entry for key, or None on a miss or expiry."""
        with self._lock:
            return self._cache.get(key)

    def set(self, key: str, value: List[Any]) -> None:
        """Store value under key, replacing any entry and restarting its TTL."""
        with self._lock:
            self._cache[key] = value

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    def stats(self) -> Dict[str, Any]:
        """Entry count and TTL."""
        with self._lock:
            self._cache.expire()
            return {
                "entries": len(self._cache),
                "keys": sorted(self._cache.keys()),
                "ttl_seconds": self.ttl,
            }
