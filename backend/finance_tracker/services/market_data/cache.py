# backend/finance_tracker/services/market_data/cache.py
"""
In-memory TTL cache for quotes and exchange rates.

Owned by the caller (one per process, per request, or per test) and passed
to MarketDataService.fetch_snapshot(); there is no module-level cache.
Entries are keyed by price key ("usa:AAPL") or FX_CACHE_KEY.
"""

import threading
import time
from typing import Any, Callable


class RatesCache:
    """
    Thread-safe key/value cache whose entries expire after ttl_seconds.

    Example:
        cache = RatesCache(ttl_seconds=300)
        cache.set("cripto:BTC", quote)
        cache.get("cripto:BTC")   # quote, until 5 minutes have passed
    """

    def __init__(
            self,
            ttl_seconds: float,
            clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds cannot be negative")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at >= self._ttl:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(
                1 for stored_at, _ in self._entries.values()
                if now - stored_at < self._ttl
            )
