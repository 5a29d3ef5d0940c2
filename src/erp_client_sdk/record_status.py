from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel


class RecordStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RecordAction(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    APPROVE = "approve"
    CANCEL = "cancel"
    DELETE = "delete"


_ACTIONS_BY_STATUS: dict[RecordStatus, frozenset[RecordAction]] = {
    RecordStatus.DRAFT: frozenset({RecordAction.VIEW, RecordAction.EDIT, RecordAction.APPROVE, RecordAction.CANCEL}),
    RecordStatus.PENDING: frozenset(
        {RecordAction.VIEW, RecordAction.EDIT, RecordAction.APPROVE, RecordAction.CANCEL, RecordAction.DELETE}
    ),
    RecordStatus.APPROVED: frozenset({RecordAction.VIEW}),
    RecordStatus.COMPLETED: frozenset({RecordAction.VIEW}),
    RecordStatus.CANCELLED: frozenset({RecordAction.VIEW}),
}

_unmapped = set(RecordStatus) - set(_ACTIONS_BY_STATUS)
if _unmapped:
    raise RuntimeError(f"Record statuses without an action set: {sorted(s.value for s in _unmapped)}")

# Permission verb required for each action, checked as f"{verb}_{module}".
PERMISSION_VERBS: dict[RecordAction, str] = {
    RecordAction.VIEW: "view",
    RecordAction.EDIT: "update",
    RecordAction.APPROVE: "approve",
    RecordAction.CANCEL: "approve",
    RecordAction.DELETE: "delete",
}

# Resource vocabularies that differ from RecordStatus.
_STATUS_ALIASES: dict[str, dict[str, RecordStatus]] = {
    "promotions": {
        "pending": RecordStatus.PENDING,
        "active": RecordStatus.APPROVED,
        "expired": RecordStatus.COMPLETED,
        "cancelled": RecordStatus.CANCELLED,
    },
}

# Resources whose rows carry no status field; approval is read from approved_at.
_APPROVAL_STAMPED = {"payment_receipts", "payment_vouchers"}


def _field(record: Mapping[str, Any] | BaseModel, *names: str) -> Any:
    for name in names:
        if isinstance(record, BaseModel):
            value = getattr(record, name, None)
        else:
            value = record.get(name)
        if value not in (None, ""):
            return value
    return None


def normalize_status(resource: str, record: Mapping[str, Any] | BaseModel) -> RecordStatus:
    if resource in _APPROVAL_STAMPED:
        approved = _field(record, "approved_at", "approvedAt")
        return RecordStatus.APPROVED if approved else RecordStatus.PENDING

    raw = _field(record, "status")
    value = str(raw or "").strip().lower()
    aliases = _STATUS_ALIASES.get(resource, {})
    if value in aliases:
        return aliases[value]
    try:
        return RecordStatus(value)
    except ValueError as exc:
        raise ValueError(f"Unknown status {raw!r} for resource {resource}") from exc


def allowed_actions(status: RecordStatus) -> frozenset[RecordAction]:
    return _ACTIONS_BY_STATUS[status]


@dataclass(frozen=True)
class ActionAvailability:
    can_view: bool
    can_edit: bool
    can_approve: bool
    can_cancel: bool
    can_delete: bool

    @property
    def actions(self) -> frozenset[RecordAction]:
        flags = {
            RecordAction.VIEW: self.can_view,
            RecordAction.EDIT: self.can_edit,
            RecordAction.APPROVE: self.can_approve,
            RecordAction.CANCEL: self.can_cancel,
            RecordAction.DELETE: self.can_delete,
        }
        return frozenset(action for action, enabled in flags.items() if enabled)


def action_availability(
    status: RecordStatus,
    *,
    module: str,
    permissions: Collection[str],
) -> ActionAvailability:
    """Actions the state machine allows for ``status`` that the capability set also grants."""
    by_state = allowed_actions(status)

    def _granted(action: RecordAction) -> bool:
        return action in by_state and f"{PERMISSION_VERBS[action]}_{module}" in permissions

    return ActionAvailability(
        can_view=_granted(RecordAction.VIEW),
        can_edit=_granted(RecordAction.EDIT),
        can_approve=_granted(RecordAction.APPROVE),
        can_cancel=_granted(RecordAction.CANCEL),
        can_delete=_granted(RecordAction.DELETE),
    )
