from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"
    NO_PERMISSION = "no_permission"


_BANNER_STATES = frozenset({ViewStateStatus.PARTIAL_ERROR, ViewStateStatus.FATAL_ERROR})

NO_PERMISSION_MESSAGE = "You do not have permission to view this page"
LOADING_MESSAGE = "Loading data..."
EMPTY_MESSAGE = "No records found"


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    trace_id: str | None = None
    data_available: bool = False

    @property
    def shows_banner(self) -> bool:
        return self.status in _BANNER_STATES

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "trace_id": self.trace_id,
            "data_available": self.data_available,
            # Static: fetch failures offer no retry control.
            "banner": self.message if self.shows_banner else None,
        }


def resolve_state(
    *,
    can_view: bool,
    is_loading: bool,
    error: str | None,
    has_data: bool,
    trace_id: str | None = None,
) -> ViewState:
    """Pick the single state a list screen shows; permission beats loading beats errors."""
    if not can_view:
        status, message = ViewStateStatus.NO_PERMISSION, NO_PERMISSION_MESSAGE
    elif is_loading:
        status, message = ViewStateStatus.LOADING, LOADING_MESSAGE
    elif error:
        status = ViewStateStatus.PARTIAL_ERROR if has_data else ViewStateStatus.FATAL_ERROR
        message = error
    elif has_data:
        status, message = ViewStateStatus.SUCCESS, None
    else:
        status, message = ViewStateStatus.EMPTY, EMPTY_MESSAGE
    return ViewState(status, message, trace_id=trace_id, data_available=can_view and has_data)
