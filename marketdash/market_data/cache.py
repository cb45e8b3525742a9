# marketdash/market_data/cache.py
"""
In-memory TTL cache for provider responses.
- LRU eviction with a configurable size limit
- TTL-based expiration (hit iff now - stored_at < ttl)
"""
from typing import Optional, Dict, Any, Callable, List
from threading import Lock
import time


class TTLCache:
    """
    Thread-safe TTL cache owned by a provider adapter instance.

    Entries older than the TTL are dropped on read. Writes overwrite.
    When full, the least recently used entry is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._lock = Lock()
        self._ttl = ttl_seconds
        self._max_size = max(1, max_size)
        self._clock = clock
        self._access_order: List[str] = []  # For LRU eviction

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def max_size(self) -> int:
        return self._max_size

    @staticmethod
    def make_key(operation: str, symbol: str = "", param: Optional[str] = None) -> str:
        """Generate cache key as operation:symbol[:param]."""
        key_parts = [operation, symbol]
        if param:
            key_parts.append(param)
        return ":".join(key_parts)

    def get(self, key: str) -> Optional[Any]:
        """
        Get cached value if it exists and hasn't expired.

        Returns:
            Cached value or None if not found/expired
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if self._clock() - entry["stored_at"] < self._ttl:
                self._touch(key)
                return entry["value"]

            # Expired
            del self._cache[key]
            if key in self._access_order:
                self._access_order.remove(key)
            return None

    def set(self, key: str, value: Any) -> None:
        """Store value, evicting the least recently used entry if the cache is full."""
        with self._lock:
            if len(self._cache) >= self._max_size and key not in self._cache:
                if self._access_order:
                    lru_key = self._access_order.pop(0)
                    self._cache.pop(lru_key, None)

            self._cache[key] = {
                "value": value,
                "stored_at": self._clock(),
            }
            self._touch(key)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._access_order.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._cache

    def _touch(self, key: str) -> None:
        if key in self._access_order:
            self._access_order.remove(key)
        self._access_order.append(key)
