from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from erp_client_sdk.exceptions import ApiError

from .error_presenter import ErrorPresenter, PresentedError
from .logger import log_action
from .notifications import NotificationCenter
from .query_keys import QueryKey
from .telemetry.events import build_event
from .telemetry.logger import TelemetryLogger

logger = logging.getLogger(__name__)

ConfirmGate = Callable[[str], bool]
InvalidateSpec = Sequence[QueryKey] | Callable[..., Sequence[QueryKey]]


class MutationStatus(str, Enum):
    DECLINED = "declined"
    BUSY = "busy"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class MutationOutcome:
    status: MutationStatus
    result: Any = None
    error: PresentedError | None = None
    invalidate: tuple[QueryKey, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status is MutationStatus.SUCCEEDED

    @property
    def field_errors(self) -> dict[str, list[str]]:
        return self.error.field_errors if self.error else {}


@dataclass
class MutationDispatcher:
    """Wraps one remote write with a confirm gate, a pending flag and notifications.

    On success the outcome names the cache prefixes the caller should
    invalidate; the dispatcher itself never touches the cache.
    """

    module: str
    operation: str
    call: Callable[..., Any]
    invalidate: InvalidateSpec = ()
    confirm: ConfirmGate | None = None
    confirm_message: str | None = None
    success_message: str | None = None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    telemetry: TelemetryLogger = field(default_factory=lambda: TelemetryLogger(app_name="erp_console", enabled=False))
    presenter: ErrorPresenter = field(default_factory=ErrorPresenter)
    last_outcome: MutationOutcome | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def is_pending(self) -> bool:
        return self._lock.locked()

    def _targets(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[QueryKey, ...]:
        spec = self.invalidate
        if callable(spec):
            return tuple(spec(*args, **kwargs))
        return tuple(spec)

    def dispatch(self, *args: Any, confirm_message: str | None = None, **kwargs: Any) -> MutationOutcome:
        if self.is_pending:
            log_action(logger, self.module, self.operation, "busy")
            return MutationOutcome(MutationStatus.BUSY)
        if self.confirm is not None:
            prompt = confirm_message or self.confirm_message or f"Confirm {self.operation}?"
            if not self.confirm(prompt):
                log_action(logger, self.module, self.operation, "declined")
                return self._finish(MutationOutcome(MutationStatus.DECLINED))

        if not self._lock.acquire(blocking=False):
            log_action(logger, self.module, self.operation, "busy")
            return MutationOutcome(MutationStatus.BUSY)

        started = time.monotonic()
        try:
            result = self.call(*args, **kwargs)
        except (ApiError, PydanticValidationError) as exc:
            presented = self.presenter.present_exception(exc, action=f"{self.module}.{self.operation}")
            trace_id = getattr(exc, "trace_id", None)
            log_action(logger, self.module, self.operation, "error", trace_id, code=presented.code)
            self.notifications.error(f"{self.operation} failed", presented.banner, trace_id=trace_id)
            self._emit(success=False, started=started, trace_id=trace_id, error_code=presented.code)
            return self._finish(MutationOutcome(MutationStatus.FAILED, error=presented))
        finally:
            self._lock.release()

        targets = self._targets(args, kwargs)
        log_action(logger, self.module, self.operation, "success")
        self.notifications.success(self.operation, self.success_message or f"{self.operation} completed")
        self._emit(success=True, started=started, trace_id=None, error_code=None)
        return self._finish(MutationOutcome(MutationStatus.SUCCEEDED, result=result, invalidate=targets))

    def _finish(self, outcome: MutationOutcome) -> MutationOutcome:
        self.last_outcome = outcome
        return outcome

    def _emit(self, *, success: bool, started: float, trace_id: str | None, error_code: str | None) -> None:
        self.telemetry.emit(
            build_event(
                category="mutation",
                name="mutation_result",
                module=self.module,
                action=self.operation,
                trace_id=trace_id,
                duration_ms=int((time.monotonic() - started) * 1000),
                success=success,
                error_code=error_code,
            )
        )
