from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"

    def field_errors(self) -> dict[str, list[str]]:
        """Per-field messages carried in ``details`` as ``[{field, message}]``."""
        errors: dict[str, list[str]] = {}
        if not isinstance(self.details, list):
            return errors
        for item in self.details:
            if not isinstance(item, dict):
                continue
            field = str(item.get("field") or "__all__")
            message = str(item.get("message") or "Invalid value")
            errors.setdefault(field, []).append(message)
        return errors


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors (e.g. approving an already approved record)."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class ResponseFormatError(ApiError):
    """2xx response whose body is not JSON or not the expected envelope."""
