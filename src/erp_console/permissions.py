from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from pydantic import BaseModel


class PermissionEntry(BaseModel):
    key: str
    allowed: bool = True


@dataclass(frozen=True)
class Capabilities:
    """Explicit permission set handed to each page; nothing is looked up ambiently.

    Keys follow the API's ``{verb}_{module}`` naming, e.g. ``approve_promotions``.
    """

    permissions: frozenset[str] = frozenset()

    @classmethod
    def of(cls, *keys: str) -> Capabilities:
        return cls(frozenset(key.strip() for key in keys))

    @classmethod
    def from_entries(cls, entries: Iterable[PermissionEntry | Mapping[str, object]]) -> Capabilities:
        return PermissionGate(list(entries)).capabilities()

    def __contains__(self, key: object) -> bool:
        return key in self.permissions

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.permissions))

    def __len__(self) -> int:
        return len(self.permissions)

    def allows(self, key: str) -> bool:
        return key in self.permissions

    def allows_any(self, *keys: str) -> bool:
        return any(self.allows(key) for key in keys)

    def can(self, verb: str, module: str) -> bool:
        return self.allows(f"{verb}_{module}")


class PermissionGate:
    """Default deny permission gate with deny-overrides-allow semantics."""

    def __init__(self, entries: list[PermissionEntry | Mapping[str, object]]) -> None:
        self._decisions = self._normalize(entries)

    @staticmethod
    def _normalize(entries: list[PermissionEntry | Mapping[str, object]]) -> dict[str, bool]:
        decisions: dict[str, bool] = {}
        for raw_entry in entries:
            entry = PermissionEntry.model_validate(raw_entry)
            key = entry.key.strip()
            if decisions.get(key) is False:
                continue
            decisions[key] = entry.allowed
        return decisions

    def is_allowed(self, permission_key: str) -> bool:
        return self._decisions.get(permission_key, False)

    def allows_any(self, *permission_keys: str) -> bool:
        return any(self.is_allowed(key) for key in permission_keys)

    def capabilities(self) -> Capabilities:
        return Capabilities(frozenset(key for key, allowed in self._decisions.items() if allowed))
