from .config import ConsoleConfig, ConsoleConfigError, load_console_config
from .debounce import Debouncer, TimerDebouncer
from .derived_view import DerivedView, DerivedViewComputer, Predicate, to_decimal
from .error_presenter import ErrorPresenter, PresentedError
from .fetcher import CollectionFetcher
from .filter_state import FilterState
from .mutations import MutationDispatcher, MutationOutcome, MutationStatus
from .notifications import NotificationCenter
from .pagination import PageSlice, PaginationWindow, paginate
from .permissions import Capabilities, PermissionGate
from .query_cache import QueryCache
from .query_keys import QueryKeys
from .table import ColumnDef, PresentationTable, SelectionState, SortState
from .view_state import ViewState, ViewStateStatus, resolve_state

__all__ = [
    "Capabilities",
    "CollectionFetcher",
    "ColumnDef",
    "ConsoleConfig",
    "ConsoleConfigError",
    "Debouncer",
    "DerivedView",
    "DerivedViewComputer",
    "ErrorPresenter",
    "FilterState",
    "MutationDispatcher",
    "MutationOutcome",
    "MutationStatus",
    "NotificationCenter",
    "PageSlice",
    "PaginationWindow",
    "PermissionGate",
    "Predicate",
    "PresentationTable",
    "PresentedError",
    "QueryCache",
    "QueryKeys",
    "SelectionState",
    "SortState",
    "TimerDebouncer",
    "ViewState",
    "ViewStateStatus",
    "load_console_config",
    "paginate",
    "resolve_state",
    "to_decimal",
]
