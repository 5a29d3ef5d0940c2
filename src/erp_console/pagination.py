from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from erp_client_sdk.models import PaginationMeta


@dataclass(frozen=True)
class PaginationWindow:
    page: int = 1
    limit: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit <= 0:
            raise ValueError(f"limit must be > 0, got {self.limit}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageSlice:
    rows: tuple[Any, ...]
    meta: PaginationMeta

    @property
    def has_next(self) -> bool:
        return self.meta.page < self.meta.total_pages

    @property
    def has_prev(self) -> bool:
        return self.meta.page > 1


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


def paginate(rows: Sequence[Any], window: PaginationWindow) -> PageSlice:
    total = len(rows)
    chunk = tuple(rows[window.offset : window.offset + window.limit])
    meta = PaginationMeta(page=window.page, limit=window.limit, total=total, total_pages=total_pages(total, window.limit))
    return PageSlice(rows=chunk, meta=meta)


def next_page(window: PaginationWindow, meta: PaginationMeta | None = None) -> PaginationWindow:
    if meta is not None and window.page >= meta.total_pages:
        return window
    return replace(window, page=window.page + 1)


def prev_page(window: PaginationWindow) -> PaginationWindow:
    return replace(window, page=max(1, window.page - 1))


def goto_page(window: PaginationWindow, page: int, meta: PaginationMeta | None = None) -> PaginationWindow:
    target = max(1, page)
    if meta is not None and meta.total_pages:
        target = min(target, meta.total_pages)
    return replace(window, page=target)
