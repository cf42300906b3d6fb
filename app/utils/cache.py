import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Optional, Tuple


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    cached_at: datetime


class WeatherCache:
    """
    In-memory LRU cache with lazy TTL expiry.

    Keys are kept in a single OrderedDict which serves both as the index and
    as the recency sequence: the last item is the most recently used one,
    the first item is the eviction candidate.

    Expired entries are only removed when a lookup touches them; until then
    they occupy capacity slots and can be evicted like any other entry.
    """

    def __init__(self, max_size: int = 100, ttl: timedelta = timedelta(minutes=30),
                 clock: Callable[[], datetime] = utcnow):
        if max_size < 0:
            raise ValueError("max_size must be >= 0")
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")

        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        # lookup mutates recency order, so it takes the same lock as insert
        self._lock = threading.Lock()

    def lookup(self, key: str) -> Tuple[Optional[Any], bool]:
        """
        Return (value, True) for a fresh entry, (None, False) otherwise.

        The key is promoted before the expiry check; an expired entry is
        then dropped.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None, False

            self._entries.move_to_end(key)
            if self._clock() - entry.cached_at < self.ttl:
                return entry.value, True

            del self._entries[key]
            return None, False

    def insert(self, key: str, value: Any) -> None:
        """Store value under key as the most recently used entry."""
        entry = CacheEntry(key=key, value=value, cached_at=self._clock())

        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = entry
            if len(self._entries) > self.max_size:
                self._evict_oldest()

    def _evict_oldest(self) -> None:
        # caller holds the lock
        if self._entries:
            self._entries.popitem(last=False)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def keys(self) -> List[str]:
        """Keys ordered from most to least recently used."""
        with self._lock:
            return list(reversed(self._entries))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
