from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class TelemetryCategory(str, Enum):
    NAVIGATION = "navigation"
    API_CALL_RESULT = "api_call_result"
    ERROR = "error"
    PERMISSION_DENIED = "permission_denied"
    MUTATION = "mutation"


TELEMETRY_CATEGORIES = frozenset(category.value for category in TelemetryCategory)


def _canonical(key: str) -> str:
    # customerName, customer_name and CUSTOMER-NAME all compare equal.
    return "".join(ch for ch in key.lower() if ch.isalnum())


_PII_KEYS = frozenset(
    _canonical(key)
    for key in (
        "email",
        "password",
        "phone",
        "full_name",
        "customer_name",
        "supplier_name",
        "address",
        "token",
        "authorization",
        "bank_name",
        "bank_account",
        "transaction_reference",
        "tax_code",
    )
)


def _pii_paths(context: Mapping[str, Any], prefix: str = "") -> list[str]:
    found: list[str] = []
    for key, value in context.items():
        path = f"{prefix}{key}"
        if _canonical(str(key)) in _PII_KEYS:
            found.append(path)
        elif isinstance(value, Mapping):
            found.extend(_pii_paths(value, prefix=f"{path}."))
    return found


@dataclass(frozen=True)
class TelemetryEvent:
    category: str
    name: str
    module: str
    action: str
    timestamp_utc: str
    trace_id: str | None = None
    duration_ms: int | None = None
    success: bool | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def build_event(
    *,
    category: str,
    name: str,
    module: str,
    action: str,
    trace_id: str | None = None,
    duration_ms: int | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    context: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    """Validated event; raises ``ValueError`` for an unknown category or PII in ``context``."""
    try:
        category = TelemetryCategory(category).value
    except ValueError:
        raise ValueError(f"Unsupported telemetry category: {category}") from None
    leaked = sorted(_pii_paths(context or {}))
    if leaked:
        raise ValueError(f"PII-like keys are forbidden in telemetry context: {leaked}")
    return TelemetryEvent(
        category=category,
        name=name,
        module=module,
        action=action,
        timestamp_utc=(now or datetime.now(timezone.utc)).isoformat(),
        trace_id=trace_id,
        duration_ms=duration_ms,
        success=success,
        error_code=error_code,
        context=dict(context) if context else None,
    )
