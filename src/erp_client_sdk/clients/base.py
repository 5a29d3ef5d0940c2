from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    def _request(self, method: str, path: str, *, headers: dict[str, str] | None = None, **kwargs: Any) -> Any:
        merged = dict(headers or {})
        if self.access_token:
            merged.setdefault("Authorization", f"Bearer {self.access_token}")
        return self.http.request(method, path, headers=merged, **kwargs)
