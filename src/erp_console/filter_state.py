from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .debounce import Debouncer

SEARCH_KEY = "search"
NON_FILTER_KEYS = frozenset({"page", "limit", "sortBy", "sortOrder"})


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


class FilterState:
    """Filter criteria for one list page, keyed by wire parameter name.

    Dropdown and date filters commit immediately. Free-text search is typed into
    ``raw_search`` and only reaches the effective criteria when :meth:`tick` runs
    after the debounce window. Every committed filter change sends ``page`` back
    to 1; ``version`` moves whenever the effective criteria change.
    """

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        *,
        debounce_ms: int = 400,
        default_limit: int = 20,
        now: Callable[[], float] | None = None,
    ) -> None:
        self.defaults: dict[str, Any] = {"page": 1, "limit": default_limit, **dict(defaults or {})}
        self._validate_window(self.defaults["page"], self.defaults["limit"])
        self._values = dict(self.defaults)
        self._search = Debouncer(debounce_ms, initial=self._values.get(SEARCH_KEY) or "", now=now)
        self._values[SEARCH_KEY] = self._search.committed
        self.version = 0

    @staticmethod
    def _validate_window(page: Any, limit: Any) -> None:
        if not isinstance(page, int) or page < 1:
            raise ValueError(f"page must be an integer >= 1, got {page!r}")
        if not isinstance(limit, int) or limit <= 0:
            raise ValueError(f"limit must be an integer > 0, got {limit!r}")

    @property
    def raw_search(self) -> str:
        return self._search.raw or ""

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    @property
    def page(self) -> int:
        return self._values["page"]

    @property
    def limit(self) -> int:
        return self._values["limit"]

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def _apply(self, updates: Mapping[str, Any], *, reset_page: bool) -> bool:
        before = dict(self._values)
        self._values.update(updates)
        if reset_page:
            self._values["page"] = 1
        if self._values != before:
            self.version += 1
            return True
        return False

    def set_filter(self, key: str, value: Any) -> bool:
        if key == SEARCH_KEY:
            self.set_search(value or "")
            return False
        if key == "page":
            return self.set_page(value)
        if key == "limit":
            return self.set_limit(value)
        return self._apply({key: value}, reset_page=True)

    def set_filters(self, values: Mapping[str, Any]) -> bool:
        updates = dict(values)
        if SEARCH_KEY in updates:
            self.set_search(updates.pop(SEARCH_KEY) or "")
        if "limit" in updates:
            self._validate_window(1, updates["limit"])
        updates.pop("page", None)
        return self._apply(updates, reset_page=True)

    def set_search(self, text: str) -> None:
        self._search.push(text)

    def clear_search(self) -> None:
        # Restart the window with "" so an older keystroke can never commit.
        self._search.push("")
        self._apply({}, reset_page=True)

    def tick(self) -> bool:
        """Advance the search debounce; True when the effective criteria changed."""
        if not self._search.poll():
            return False
        return self._apply({SEARCH_KEY: self._search.committed}, reset_page=True)

    def flush_search(self) -> bool:
        if not self._search.flush():
            return False
        return self._apply({SEARCH_KEY: self._search.committed}, reset_page=True)

    def set_page(self, page: int) -> bool:
        self._validate_window(page, self.limit)
        return self._apply({"page": page}, reset_page=False)

    def set_limit(self, limit: int) -> bool:
        self._validate_window(1, limit)
        return self._apply({"limit": limit}, reset_page=True)

    def set_sort(self, sort_by: str, sort_order: str = "asc") -> bool:
        if sort_order not in {"asc", "desc"}:
            raise ValueError(f"sort_order must be 'asc' or 'desc', got {sort_order!r}")
        return self._apply({"sortBy": sort_by, "sortOrder": sort_order}, reset_page=False)

    def toggle_sort(self, sort_by: str) -> bool:
        same_column = self._values.get("sortBy") == sort_by
        order = "desc" if same_column and self._values.get("sortOrder") == "asc" else "asc"
        return self.set_sort(sort_by, order)

    def reset(self) -> bool:
        self._search.reset(self.defaults.get(SEARCH_KEY) or "")
        before = dict(self._values)
        self._values = dict(self.defaults)
        self._values[SEARCH_KEY] = self._search.committed
        if self._values != before:
            self.version += 1
            return True
        return False

    def effective(self) -> dict[str, Any]:
        return dict(self._values)

    def to_params(self) -> dict[str, Any]:
        return {key: value for key, value in self._values.items() if _is_set(value)}

    def _filter_values(self) -> dict[str, Any]:
        values = {key: value for key, value in self._values.items() if key not in NON_FILTER_KEYS}
        values[SEARCH_KEY] = self.raw_search
        return values

    @property
    def has_active_filters(self) -> bool:
        return self.active_filters_count > 0

    @property
    def active_filters_count(self) -> int:
        return sum(1 for value in self._filter_values().values() if _is_set(value) and value is not False)
