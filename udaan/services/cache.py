"""
In-process TTL cache for computed suggestions.

All operations are failure safe: a serialization problem never becomes an
HTTP error. Returns None on miss, expiry or error. Entries are evicted lazily
on lookup; there is no size bound.

Accessed only from the event loop thread, so no locking.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

_log = logging.getLogger("udaan.cache")


def stable_key(value: Any) -> str:
    """
    Canonical string for a request signature.

    Object keys are sorted recursively so {"a": 1, "b": 2} and {"b": 2, "a": 1}
    give the same key; list order is kept.
    """
    if value is None:
        return ""
    if not isinstance(value, (dict, list, tuple)):
        return str(value)
    return json.dumps(value, sort_keys=True, ensure_ascii=False, separators=(",", ":"), default=str)


def _copy(value: Any) -> Any:
    return json.loads(json.dumps(value))


@dataclass
class CacheEntry:
    key: str
    result: Any
    expires_at: float


class TTLCache:
    """Key/value store whose entries expire ttl_seconds after being set."""

    def __init__(self, ttl_seconds: int = 3600, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return a copy of the cached value, or None on miss/expiry."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._entries[key]
            _log.debug(f"[cache] expired {key[:80]}")
            return None
        return _copy(entry.result)

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        """Store a deep copy of value. Returns success."""
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        try:
            snapshot = _copy(value)
        except (TypeError, ValueError) as exc:
            _log.debug(f"[cache] SET {key[:80]} failed: {exc}")
            return False
        self._entries[key] = CacheEntry(key=key, result=snapshot, expires_at=self._clock() + ttl)
        return True

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
