from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Mapping

TRACE_HEADER = "X-Trace-ID"
# The API gateway echoes either header; the first one present wins.
_RESPONSE_TRACE_HEADERS = (TRACE_HEADER, "X-Request-ID")
_PAYLOAD_TRACE_KEYS = ("traceId", "trace_id", "requestId")


def _lookup(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered and candidate:
            return candidate
    return None


def trace_from_payload(payload: Mapping[str, Any]) -> str | None:
    """Trace id carried in a JSON body, at the top level or inside ``error``."""
    scopes: list[Mapping[str, Any]] = [payload]
    nested = payload.get("error")
    if isinstance(nested, Mapping):
        scopes.append(nested)
    for scope in scopes:
        for key in _PAYLOAD_TRACE_KEYS:
            value = scope.get(key)
            if isinstance(value, str) and value:
                return value
    return None


@dataclass
class TraceContext:
    """Correlation id shared by every request of one API session."""

    trace_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = uuid.uuid4().hex
        return self.trace_id

    def stamp(self, headers: dict[str, str]) -> dict[str, str]:
        headers[TRACE_HEADER] = self.ensure()
        return headers

    def absorb(self, headers: Mapping[str, str] | None = None, payload: Any = None) -> str | None:
        for name in _RESPONSE_TRACE_HEADERS:
            found = _lookup(headers or {}, name)
            if found:
                self.trace_id = found
                break
        if isinstance(payload, Mapping):
            found = trace_from_payload(payload)
            if found:
                self.trace_id = found
        return self.trace_id
