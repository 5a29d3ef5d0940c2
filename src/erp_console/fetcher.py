from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from erp_client_sdk.exceptions import ApiError
from erp_client_sdk.models import ListEnvelope, PaginationMeta

from .logger import log_action
from .query_cache import QueryCache
from .query_keys import QueryKey

logger = logging.getLogger(__name__)

KeyFactory = Callable[[Mapping[str, Any]], QueryKey]
ListFetch = Callable[[dict[str, Any]], ListEnvelope]


class CollectionFetcher:
    """Loads one paginated collection through the shared query cache.

    A request goes out only when the cache has no fresh entry for the key built
    from the params. Failures are kept on ``error`` and never retried; a reload
    is always an explicit call. Superseded requests are not cancelled: with
    concurrent callers the last response to arrive wins.
    """

    def __init__(
        self,
        *,
        key_factory: KeyFactory,
        fetch: ListFetch,
        cache: QueryCache,
        module: str = "unknown",
    ) -> None:
        self.key_factory = key_factory
        self.fetch = fetch
        self.cache = cache
        self.module = module
        self.params: dict[str, Any] | None = None
        self.envelope: ListEnvelope | None = None
        self.error: Exception | None = None
        self.is_loading = False
        self.fetch_count = 0
        self.duration_ms: int | None = None

    @property
    def data(self) -> list[Any]:
        if self.envelope is None:
            return []
        return list(self.envelope.data)

    @property
    def meta(self) -> PaginationMeta | None:
        return self.envelope.meta if self.envelope is not None else None

    @property
    def error_message(self) -> str | None:
        if self.error is None:
            return None
        if isinstance(self.error, ApiError):
            return self.error.message
        return str(self.error)

    @property
    def trace_id(self) -> str | None:
        return getattr(self.error, "trace_id", None)

    def load(self, params: Mapping[str, Any] | None = None) -> bool:
        self.params = dict(params or {})
        key = self.key_factory(self.params)
        cached = self.cache.get(key)
        if cached is not None:
            self.envelope = cached
            self.error = None
            return True
        return self._fetch(key)

    def reload(self) -> bool:
        params = dict(self.params or {})
        self.params = params
        return self._fetch(self.key_factory(params))

    def _fetch(self, key: QueryKey) -> bool:
        self.is_loading = True
        self.error = None
        self.fetch_count += 1
        started = time.monotonic()
        try:
            envelope = self.fetch(dict(self.params or {}))
        except ApiError as exc:
            self.envelope = None
            self.error = exc
            log_action(logger, self.module, "fetch", "error", exc.trace_id, code=exc.code, status=exc.status_code)
            return False
        finally:
            self.is_loading = False
            self.duration_ms = int((time.monotonic() - started) * 1000)
        self.cache.set(key, envelope)
        self.envelope = envelope
        log_action(logger, self.module, "fetch", "success", None, rows=len(envelope.data))
        return True
