from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .query_keys import QueryKey, matches_prefix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    stored_at: float


class QueryCache:
    """In-memory query results keyed by tuple; entries are replaced, never mutated."""

    def __init__(self, stale_seconds: float = 300.0, now: Callable[[], float] | None = None) -> None:
        if stale_seconds < 0:
            raise ValueError("stale_seconds must be >= 0")
        self.stale_seconds = stale_seconds
        self._now = now or time.monotonic
        self._entries: dict[QueryKey, CacheEntry] = {}

    def __contains__(self, key: QueryKey) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[QueryKey]:
        return list(self._entries)

    def get(self, key: QueryKey) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._now() - entry.stored_at > self.stale_seconds:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=self._now())

    def fetch(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, prefix: QueryKey) -> int:
        stale_keys = [key for key in self._entries if matches_prefix(key, prefix)]
        for key in stale_keys:
            self._entries.pop(key, None)
        if stale_keys:
            logger.debug("query_cache_invalidated", extra={"prefix": repr(prefix), "removed": len(stale_keys)})
        return len(stale_keys)

    def clear(self) -> None:
        self._entries.clear()
