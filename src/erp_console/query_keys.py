from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Tuple

QueryKey = Tuple[Any, ...]


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return freeze_params(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(_freeze(item) for item in value)
    return value


def freeze_params(params: Mapping[str, Any] | None) -> tuple[tuple[str, Any], ...]:
    """Hashable, order-independent form of query params; empty values are dropped."""
    if not params:
        return ()
    return tuple(
        sorted((str(key), _freeze(value)) for key, value in params.items() if value not in (None, ""))
    )


def matches_prefix(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == tuple(prefix)


@dataclass(frozen=True)
class QueryKeys:
    """Hierarchical cache keys for one resource: ``(resource, scope, ...)``."""

    resource: str

    def all(self) -> QueryKey:
        return (self.resource,)

    def lists(self) -> QueryKey:
        return (self.resource, "list")

    def list(self, params: Mapping[str, Any] | None = None) -> QueryKey:
        return (*self.lists(), freeze_params(params))

    def details(self) -> QueryKey:
        return (self.resource, "detail")

    def detail(self, record_id: Any) -> QueryKey:
        return (*self.details(), record_id)

    def statistics(self, params: Mapping[str, Any] | None = None) -> QueryKey:
        return (self.resource, "statistics", freeze_params(params))

    def scoped(self, *parts: Any) -> QueryKey:
        return (self.resource, *parts)
