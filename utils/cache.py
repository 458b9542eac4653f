"""Lightweight in-memory TTL cache.

Used for the filter-options lists on the server (invalidated by a reseed)
and for the client's stale-time cache of the same lists.
"""

import threading
import time
from collections.abc import Callable
from typing import Any


class TTLCache:
    """Thread-safe in-memory cache whose entries expire after ``ttl_seconds``.

    At most ``maxsize`` entries are kept; inserting into a full cache evicts
    the entry closest to expiry.

    Usage::

        cache = TTLCache(maxsize=8, ttl_seconds=300)
        options = cache.get_or_load("options", lambda: load_options(conn))
    """

    def __init__(self, maxsize: int = 128, ttl_seconds: float = 300.0) -> None:
        self._maxsize = maxsize
        self._ttl = ttl_seconds
        # key -> (value, expires_at)
        self._store: dict[Any, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: Any) -> Any | None:
        """Return the cached value for *key*, or ``None`` if absent or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if time.monotonic() > expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: Any, value: Any) -> None:
        """Store *value* under *key* with the configured TTL."""
        expires_at = time.monotonic() + self._ttl
        with self._lock:
            if key not in self._store and len(self._store) >= self._maxsize:
                soonest = min(self._store, key=lambda k: self._store[k][1])
                del self._store[soonest]
            self._store[key] = (value, expires_at)

    def get_or_load(self, key: Any, loader: Callable[[], Any]) -> Any:
        """Return the cached value, calling *loader* and caching on a miss.

        Exceptions from *loader* propagate and nothing is cached.
        """
        value = self.get(key)
        if value is None:
            value = loader()
            self.set(key, value)
        return value

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._store.clear()

