from __future__ import annotations

from typing import Any, Mapping

from .exceptions import (
    ApiError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from .tracing import trace_from_payload

_ERRORS_BY_STATUS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def error_class_for(status_code: int) -> type[ApiError]:
    if status_code >= 500:
        return ServerError
    return _ERRORS_BY_STATUS.get(status_code, ApiError)


def _error_body(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    # {"success": false, "error": {"code", "message", "details"}} or a flat body.
    nested = payload.get("error")
    if isinstance(nested, Mapping):
        return nested
    return payload


def map_error(status_code: int, payload: Mapping[str, Any] | None, trace_id: str | None) -> ApiError:
    payload = dict(payload or {})
    body = _error_body(payload)
    message = body.get("message") or payload.get("message")
    if isinstance(payload.get("error"), str) and not message:
        message = payload["error"]
    return error_class_for(status_code)(
        code=str(body.get("code") or f"HTTP_{status_code}"),
        message=str(message or "Request failed"),
        details=body.get("details"),
        trace_id=trace_from_payload(payload) or trace_id,
        status_code=status_code,
        raw_payload=payload,
    )
