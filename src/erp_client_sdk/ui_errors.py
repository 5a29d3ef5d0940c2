from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ApiError

_PYDANTIC_PREFIXES = ("Value error, ", "Assertion failed, ")


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def to_user_facing_error(exc: ApiError) -> UserFacingError:
    primary = exc.message.strip() or "Request failed"
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(
        message=primary,
        details=details,
        trace_id=exc.trace_id,
        field_errors=exc.field_errors(),
    )


def field_errors_from_validation(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic error into ``{field: [messages]}`` for inline form display."""
    errors: dict[str, list[str]] = {}
    for item in exc.errors():
        loc = [str(part) for part in item.get("loc", ()) if not isinstance(part, int)]
        key = ".".join(loc) or "__all__"
        message = str(item.get("msg", "Invalid value"))
        for prefix in _PYDANTIC_PREFIXES:
            if message.startswith(prefix):
                message = message[len(prefix):]
        errors.setdefault(key, []).append(message)
    return errors
