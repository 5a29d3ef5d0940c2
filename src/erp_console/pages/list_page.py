from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from erp_client_sdk.exceptions import ApiError
from erp_client_sdk.record_status import action_availability, normalize_status

from ..config import ConsoleConfig
from ..derived_view import DerivedView, DerivedViewComputer, jsonable
from ..fetcher import CollectionFetcher, KeyFactory, ListFetch
from ..filter_state import NON_FILTER_KEYS, FilterState
from ..logger import log_action
from ..mutations import ConfirmGate, InvalidateSpec, MutationDispatcher, MutationOutcome
from ..notifications import NotificationCenter
from ..pagination import PaginationWindow
from ..permissions import Capabilities
from ..query_cache import QueryCache
from ..query_keys import QueryKeys
from ..table import ColumnDef, PresentationTable
from ..telemetry.events import build_event
from ..telemetry.logger import TelemetryLogger
from ..view_state import resolve_state

logger = logging.getLogger(__name__)

StatisticsFetch = Callable[[dict[str, Any]], Any]

# Actions that open another screen instead of calling the API.
NAVIGATION_ACTIONS = frozenset({"view", "edit"})


def page_options(
    config: ConsoleConfig | None = None,
    *,
    cache: QueryCache | None = None,
    telemetry: TelemetryLogger | None = None,
    filter_defaults: Mapping[str, Any] | None = None,
    now: Callable[[], float] | None = None,
) -> dict[str, Any]:
    """Shared constructor kwargs so every page honours the same console config."""
    config = config or ConsoleConfig()
    return {
        "cache": cache if cache is not None else QueryCache(stale_seconds=config.query_stale_seconds),
        "telemetry": telemetry or TelemetryLogger.from_config(config),
        "filters": FilterState(
            filter_defaults,
            debounce_ms=config.search_debounce_ms,
            default_limit=config.default_page_size,
            now=now,
        ),
    }


@dataclass
class ListPage:
    """One list screen: filters, fetcher, optional local derivation, table and mutations.

    Server-side pages send the effective filter criteria as query params.
    Client-side pages (``derived`` set) fetch the whole collection once with
    ``base_params`` and filter, aggregate and paginate it locally.
    """

    module: str
    fetch: ListFetch
    capabilities: Capabilities
    columns: Sequence[ColumnDef]
    keys: QueryKeys | None = None
    key_factory: KeyFactory | None = None
    cache: QueryCache = field(default_factory=QueryCache)
    filters: FilterState = field(default_factory=FilterState)
    derived: DerivedViewComputer | None = None
    base_params: dict[str, Any] = field(default_factory=dict)
    statistics_fetch: StatisticsFetch | None = None
    status_resource: str | None = None
    selectable: bool = False
    confirm: ConfirmGate | None = None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    telemetry: TelemetryLogger = field(default_factory=lambda: TelemetryLogger(app_name="erp_console", enabled=False))
    mutations: dict[str, MutationDispatcher] = field(default_factory=dict)
    last_intent: dict[str, Any] | None = None
    statistics_error: str | None = None

    def __post_init__(self) -> None:
        self.keys = self.keys or QueryKeys(self.module)
        self.fetcher = CollectionFetcher(
            key_factory=self.key_factory or self.keys.list,
            fetch=self.fetch,
            cache=self.cache,
            module=self.module,
        )
        self.table = PresentationTable(
            columns=self.columns,
            row_actions=self.row_actions,
            on_action=self.handle_action,
            selectable=self.selectable,
        )
        self._loaded_version: int | None = None
        self._server_statistics: dict[str, Any] = {}

    def can_view(self) -> bool:
        return self.capabilities.can("view", self.module)

    def can_create(self) -> bool:
        return self.capabilities.can("create", self.module)

    @property
    def is_client_side(self) -> bool:
        return self.derived is not None

    def fetch_params(self) -> dict[str, Any]:
        if self.is_client_side:
            return dict(self.base_params)
        return {**self.base_params, **self.filters.to_params()}

    def load(self) -> bool:
        if not self.can_view():
            self._emit("permission_denied", "permission_denied", success=False, error_code="view_denied")
            return False
        ok = self.fetcher.load(self.fetch_params())
        self._loaded_version = self.filters.version
        if ok and self.statistics_fetch is not None:
            self._load_statistics()
        self.table.selection.retain(self.visible_ids())
        if ok:
            self._emit("navigation", "screen_view", success=True)
        else:
            self._emit("api_call_result", "api_call_result", success=False, error_code="read_failed")
        return ok

    def tick(self) -> bool:
        """Advance the search debounce and reload when the server-side criteria moved."""
        self.filters.tick()
        if self.is_client_side or self.filters.version == self._loaded_version:
            return False
        return self.load()

    def reload(self) -> bool:
        return self.fetcher.reload()

    def _statistics_params(self) -> dict[str, Any]:
        return {key: value for key, value in self.fetch_params().items() if key not in NON_FILTER_KEYS}

    def _load_statistics(self) -> None:
        params = self._statistics_params()
        key = self.keys.statistics(params)
        self.statistics_error = None
        try:
            value = self.cache.fetch(key, lambda: self.statistics_fetch(params))
        except ApiError as exc:
            self.statistics_error = exc.message
            self._server_statistics = {}
            log_action(logger, self.module, "statistics", "error", exc.trace_id, code=exc.code)
            return
        self._server_statistics = value.model_dump() if isinstance(value, BaseModel) else dict(value)

    def current_view(self) -> DerivedView | None:
        if self.derived is None:
            return None
        window = PaginationWindow(page=self.filters.page, limit=self.filters.limit)
        return self.derived.compute(self.fetcher.data, self.filters.effective(), window)

    def rows(self) -> list[Any]:
        view = self.current_view()
        if view is not None:
            return list(view.page.rows)
        return self.fetcher.data

    def meta(self) -> dict[str, Any] | None:
        view = self.current_view()
        if view is not None:
            return view.page.meta.model_dump(by_alias=True)
        meta = self.fetcher.meta
        return meta.model_dump(by_alias=True) if meta is not None else None

    def statistics(self) -> dict[str, Any]:
        view = self.current_view()
        if view is not None:
            return view.statistics
        return dict(self._server_statistics)

    def visible_ids(self) -> list[Any]:
        return [self.table.row_id(row) for row in self.rows()]

    def supported_actions(self) -> frozenset[str]:
        """Actions this page can carry out: navigation plus its registered mutations."""
        return NAVIGATION_ACTIONS | frozenset(self.mutations)

    def row_actions(self, row: Any) -> frozenset[str]:
        return self._granted_actions(row) & self.supported_actions()

    def _granted_actions(self, row: Any) -> frozenset[str]:
        if self.status_resource is None:
            granted = {"view": "view", "update": "edit", "delete": "delete"}
            return frozenset(action for verb, action in granted.items() if self.capabilities.can(verb, self.module))
        try:
            status = normalize_status(self.status_resource, row)
        except ValueError:
            logger.warning("unknown_record_status", extra={"resource": self.status_resource})
            return frozenset({"view"}) if self.can_view() else frozenset()
        availability = action_availability(status, module=self.module, permissions=self.capabilities)
        return frozenset(action.value for action in availability.actions)

    def add_mutation(
        self,
        name: str,
        call: Callable[..., Any],
        *,
        invalidate: InvalidateSpec | None = None,
        needs_confirm: bool = False,
        confirm_message: str | None = None,
        success_message: str | None = None,
    ) -> MutationDispatcher:
        dispatcher = MutationDispatcher(
            module=self.module,
            operation=name,
            call=call,
            invalidate=invalidate if invalidate is not None else self._default_invalidation,
            confirm=self.confirm if needs_confirm else None,
            confirm_message=confirm_message,
            success_message=success_message,
            notifications=self.notifications,
            telemetry=self.telemetry,
        )
        self.mutations[name] = dispatcher
        return dispatcher

    def _default_invalidation(self, *args: Any, **_kwargs: Any) -> tuple[tuple[Any, ...], ...]:
        targets = [self.keys.lists(), self.keys.scoped("statistics")]
        if args:
            targets.append(self.keys.detail(args[0]))
        return tuple(targets)

    def run_mutation(self, name: str, *args: Any, confirm_message: str | None = None, **kwargs: Any) -> MutationOutcome:
        """Dispatch, then invalidate and reload explicitly when the write succeeded."""
        if name not in self.mutations:
            raise KeyError(f"No mutation named {name!r} on {self.module}")
        outcome = self.mutations[name].dispatch(*args, confirm_message=confirm_message, **kwargs)
        if outcome.succeeded:
            for prefix in outcome.invalidate:
                self.cache.invalidate(prefix)
            self.load()
        return outcome

    def handle_action(self, action: str, row: Any) -> Any:
        row_id = self.table.row_id(row)
        if action in self.mutations and action not in NAVIGATION_ACTIONS:
            return self.run_mutation(action, row_id)
        self.last_intent = {"action": action, "id": row_id, "module": self.module}
        return self.last_intent

    def _emit(self, category: str, name: str, *, success: bool, error_code: str | None = None) -> None:
        self.telemetry.emit(
            build_event(
                category=category,
                name=name,
                module=self.module,
                action=f"{self.module}.load",
                trace_id=self.fetcher.trace_id,
                duration_ms=self.fetcher.duration_ms,
                success=success,
                error_code=error_code,
            )
        )

    def render(self) -> dict[str, Any]:
        can_view = self.can_view()
        error = self.fetcher.error_message or self.statistics_error
        rows = self.rows() if can_view else []
        state = resolve_state(
            can_view=can_view,
            is_loading=self.fetcher.is_loading,
            error=error,
            has_data=bool(self.fetcher.data),
            trace_id=self.fetcher.trace_id,
        )
        return {
            "module": self.module,
            "can_view": can_view,
            "actions": {"create": self.can_create()},
            "view_state": state.render(),
            "filters": {
                "effective": self.filters.effective(),
                "raw_search": self.filters.raw_search,
                "search_pending": self.filters.search_pending,
                "active_count": self.filters.active_filters_count,
            },
            "meta": self.meta() if can_view else None,
            "statistics": jsonable(self.statistics()) if can_view else {},
            "table": self.table.render(rows),
            "pending": {name: dispatcher.is_pending for name, dispatcher in self.mutations.items()},
            "notifications": self.notifications.render(),
        }
