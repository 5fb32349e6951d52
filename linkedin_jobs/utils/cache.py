"""
In-memory response cache with per-entry expiry.
"""

import copy
import threading
import time
from typing import Any, Dict, Optional, Tuple


class TTLCache:
    """
    Thread-safe key -> value store where every entry expires after `ttl`
    seconds. Values are deep-copied on the way in and out so callers can
    annotate what they get back without touching the cached copy.
    """

    def __init__(self, ttl: int = 1800):
        self.ttl = ttl
        self._store: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self.misses += 1
                return None
            expires_at, value = entry
            if time.monotonic() >= expires_at:
                del self._store[key]
                self.misses += 1
                return None
            self.hits += 1
            return copy.deepcopy(value)

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        expires_at = time.monotonic() + (self.ttl if ttl is None else ttl)
        with self._lock:
            self._store[key] = (expires_at, copy.deepcopy(value))

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def _purge_expired(self) -> None:
        now = time.monotonic()
        for key in [k for k, (exp, _) in self._store.items() if now >= exp]:
            del self._store[key]

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._store)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._store.get(key)
            return entry is not None and time.monotonic() < entry[0]

    def stats(self) -> Dict[str, Any]:
        """Hit/miss counters and live key count, for the health endpoint."""
        with self._lock:
            self._purge_expired()
            return {
                "hits": self.hits,
                "misses": self.misses,
                "keys": len(self._store),
                "ttl": self.ttl,
            }
