from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from erp_client_sdk.exceptions import (
    ApiError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ResponseFormatError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from erp_client_sdk.ui_errors import field_errors_from_validation


@dataclass(frozen=True)
class PresentedError:
    category: str
    user_message: str
    message: str
    safe_to_retry: bool
    code: str
    details: dict[str, Any]
    field_errors: dict[str, list[str]]

    @property
    def banner(self) -> str:
        """Text for the static error banner: the server's own message when it sent one."""
        return self.message or self.user_message


_CATEGORY_BY_ERROR: tuple[tuple[type[ApiError], str], ...] = (
    (ValidationError, "validation"),
    (UnauthorizedError, "permission_denied"),
    (ForbiddenError, "permission_denied"),
    (ConflictError, "conflict"),
    (NotFoundError, "not_found"),
    (TransportError, "transport"),
    (ServerError, "server"),
    (ResponseFormatError, "server"),
)


class ErrorPresenter:
    """Maps API and form failures to consistent payloads for banners and toasts."""

    _CATEGORY_MESSAGES = {
        "validation": "Please review the highlighted fields and try again.",
        "permission_denied": "You do not have permission to perform this action.",
        "conflict": "This action cannot be completed in the current state.",
        "not_found": "The requested record was not found.",
        "transport": "Temporary connectivity issue. Please retry.",
        "server": "Service error. Try again shortly or contact support.",
        "unknown": "Unexpected error. Please try again.",
    }

    def present_exception(self, exc: Exception, *, action: str) -> PresentedError:
        if isinstance(exc, PydanticValidationError):
            return self._build(
                category="validation",
                message="",
                code="CLIENT_VALIDATION",
                trace_id=None,
                action=action,
                raw_details=None,
                field_errors=field_errors_from_validation(exc),
            )
        if isinstance(exc, ApiError):
            category = next((name for kind, name in _CATEGORY_BY_ERROR if isinstance(exc, kind)), None)
            if category is None:
                category = self._categorize(message=exc.message, details=exc.details, code=exc.code)
            return self._build(
                category=category,
                message=exc.message,
                code=exc.code,
                trace_id=exc.trace_id,
                action=action,
                raw_details=exc.details,
                field_errors=exc.field_errors(),
            )
        return self.present(message=str(exc), action=action)

    def present(
        self,
        *,
        message: str,
        details: Any = None,
        trace_id: str | None = None,
        action: str,
        code: str | None = None,
    ) -> PresentedError:
        normalized_code = (code or self._extract_code(details) or "UNKNOWN").upper()
        category = self._categorize(message=message, details=details, code=normalized_code)
        return self._build(
            category=category,
            message=message,
            code=normalized_code,
            trace_id=trace_id,
            action=action,
            raw_details=details,
            field_errors={},
        )

    def _build(
        self,
        *,
        category: str,
        message: str,
        code: str,
        trace_id: str | None,
        action: str,
        raw_details: Any,
        field_errors: dict[str, list[str]],
    ) -> PresentedError:
        technical = {
            "code": code,
            "trace_id": trace_id,
            "action": action,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "raw_details": raw_details,
        }
        return PresentedError(
            category=category,
            user_message=self._CATEGORY_MESSAGES[category],
            message=message.strip(),
            # Advisory only: nothing is retried automatically.
            safe_to_retry=category in {"transport", "server"},
            code=code,
            details=technical,
            field_errors=field_errors,
        )

    def _categorize(self, *, message: str, details: Any, code: str) -> str:
        haystack = f"{message} {details} {code}".lower()
        if any(token in haystack for token in {"validation", "invalid", "required", "format"}):
            return "validation"
        if any(token in haystack for token in {"permission", "forbidden", "denied", "403"}):
            return "permission_denied"
        if any(token in haystack for token in {"conflict", "already", "409"}):
            return "conflict"
        if any(token in haystack for token in {"not found", "404"}):
            return "not_found"
        if any(token in haystack for token in {"timeout", "network", "connection", "transport"}):
            return "transport"
        if any(token in haystack for token in {"500", "503", "server", "internal error", "unavailable"}):
            return "server"
        return "unknown"

    @staticmethod
    def _extract_code(details: Any) -> str | None:
        if isinstance(details, dict):
            raw = details.get("code")
            return str(raw) if raw else None
        return None
