"""
Cache of server-rendered listing responses.

Entries are keyed by page path and the *canonical* query (the re-encoded
FilterState), so equivalent URLs such as ``?c=b,a`` and ``?c=a,b`` share an
entry. The catalog is immutable for the life of the process; entries expire
by TTL or an explicit ``clear``. Once ``max_entries`` is reached, expired
entries are swept and then the oldest are evicted.
"""
from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass, field
from typing import Callable

from .config import DEFAULT_LISTING_CONFIG
from .models import ListingResponse


def _make_key(path: str, canonical_query: str) -> str:
    return hashlib.sha256(f"{path}?{canonical_query}".encode()).hexdigest()[:16]


@dataclass
class _Entry:
    value: ListingResponse
    created_at: float


@dataclass
class ListingCache:
    ttl: float = DEFAULT_LISTING_CONFIG.cache_ttl_seconds
    max_entries: int = DEFAULT_LISTING_CONFIG.cache_max_entries
    clock: Callable[[], float] = time.monotonic
    hits: int = 0
    misses: int = 0
    _entries: dict[str, _Entry] = field(default_factory=dict)

    def get(self, path: str, canonical_query: str) -> ListingResponse | None:
        key = _make_key(path, canonical_query)
        entry = self._entries.get(key)
        if entry and self.clock() - entry.created_at < self.ttl:
            self.hits += 1
            return entry.value
        if entry:
            del self._entries[key]
        self.misses += 1
        return None

    def set(self, path: str, canonical_query: str, value: ListingResponse) -> None:
        key = _make_key(path, canonical_query)
        now = self.clock()
        self._entries.pop(key, None)
        if len(self._entries) >= self.max_entries:
            self._evict(now)
        self._entries[key] = _Entry(value, now)

    def _evict(self, now: float) -> None:
        """Drop expired entries, then the oldest ones until there is room."""
        expired = [k for k, e in self._entries.items() if now - e.created_at >= self.ttl]
        for key in expired:
            del self._entries[key]
        while self._entries and len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]

    def stats(self) -> dict:
        total = self.hits + self.misses
        return {
            "size": len(self._entries),
            "ttl_seconds": self.ttl,
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / total * 100, 1) if total > 0 else 0.0,
        }

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0


_default_cache = ListingCache()


def get_listing_cache() -> ListingCache:
    return _default_cache
