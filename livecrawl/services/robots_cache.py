import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional
from urllib.robotparser import RobotFileParser


@dataclass(frozen=True)
class _RobotsCacheEntry:
    parser: Optional[RobotFileParser]
    stored_at: float


MISSING = object()


class RobotsCache:
    """
    Cache for RobotFileParser instances keyed by scheme and host.

    Shared by every crawl worker, so all access goes through one lock.
    A cached None means robots.txt was unavailable for that host.
    """

    def __init__(self, *, max_size: int = 2048, ttl_seconds: int = 3600):
        """Create a robots.txt cache.

        - `max_size` bounds the number of hosts cached (LRU eviction).
        - `ttl_seconds` bounds staleness; entries older than TTL are treated as missing.
        """
        self._max_size = int(max_size) if max_size is not None else 2048
        if self._max_size <= 0:
            self._max_size = 1

        self._ttl_seconds = int(ttl_seconds) if ttl_seconds is not None else 3600
        if self._ttl_seconds <= 0:
            # Non-positive TTL disables caching.
            self._ttl_seconds = 0

        self._lock = threading.Lock()
        self._cache: "OrderedDict[str, _RobotsCacheEntry]" = OrderedDict()

    def _is_expired(self, entry: _RobotsCacheEntry) -> bool:
        if self._ttl_seconds == 0:
            return True
        return (time.time() - entry.stored_at) > self._ttl_seconds

    def _evict_if_needed(self) -> None:
        while len(self._cache) > self._max_size:
            self._cache.popitem(last=False)

    def lookup(self, base_url: str):
        """Return the cached parser (possibly None), or `MISSING` when there is no live entry."""
        with self._lock:
            entry = self._cache.get(base_url)
            if entry is None:
                return MISSING
            if self._is_expired(entry):
                del self._cache[base_url]
                return MISSING
            self._cache.move_to_end(base_url)
            return entry.parser

    def get(self, base_url: str) -> Optional[RobotFileParser]:
        """Get cached parser for a host, or None if not cached."""
        parser = self.lookup(base_url)
        return None if parser is MISSING else parser

    def set(self, base_url: str, parser: Optional[RobotFileParser]) -> None:
        """Cache a parser for a host. None indicates fetch failed."""
        with self._lock:
            self._cache[base_url] = _RobotsCacheEntry(parser=parser, stored_at=time.time())
            self._cache.move_to_end(base_url)
            self._evict_if_needed()

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
