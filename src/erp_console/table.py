from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from .derived_view import jsonable, resolve


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class HeaderCheckState(str, Enum):
    CHECKED = "checked"
    INDETERMINATE = "indeterminate"
    UNCHECKED = "unchecked"


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    sortable: bool = True


@dataclass
class SortState:
    """Per-table sort: a column cycles none -> asc -> desc -> none."""

    column: str | None = None
    direction: SortDirection | None = None

    def toggle(self, column: str) -> None:
        if column != self.column or self.direction is None:
            self.column = column
            self.direction = SortDirection.ASC
        elif self.direction is SortDirection.ASC:
            self.direction = SortDirection.DESC
        else:
            self.column = None
            self.direction = None

    def clear(self) -> None:
        self.column = None
        self.direction = None

    def apply(self, rows: Sequence[Any]) -> list[Any]:
        if self.column is None or self.direction is None:
            return list(rows)
        present = [row for row in rows if not _is_empty(resolve(row, self.column))]
        empty = [row for row in rows if _is_empty(resolve(row, self.column))]
        present.sort(key=lambda row: _sort_key(resolve(row, self.column)), reverse=self.direction is SortDirection.DESC)
        return present + empty


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float, Decimal)):
        return (0, Decimal(str(value)))
    if isinstance(value, (datetime, date)):
        return (1, value.isoformat())
    return (1, str(value).lower())


@dataclass
class SelectionState:
    selected: set[Any] = field(default_factory=set)

    def is_selected(self, row_id: Any) -> bool:
        return row_id in self.selected

    def toggle(self, row_id: Any) -> None:
        if row_id in self.selected:
            self.selected.discard(row_id)
        else:
            self.selected.add(row_id)

    def toggle_all(self, visible_ids: Iterable[Any]) -> None:
        ids = set(visible_ids)
        if ids and ids <= self.selected:
            self.selected -= ids
        else:
            self.selected |= ids

    def header_state(self, visible_ids: Iterable[Any]) -> HeaderCheckState:
        ids = set(visible_ids)
        count = len(ids & self.selected)
        if ids and count == len(ids):
            return HeaderCheckState.CHECKED
        if count > 0:
            return HeaderCheckState.INDETERMINATE
        return HeaderCheckState.UNCHECKED

    def retain(self, visible_ids: Iterable[Any]) -> None:
        self.selected &= set(visible_ids)

    def clear(self) -> None:
        self.selected.clear()


RowActions = Callable[[Any], Collection[str]]
ActionHandler = Callable[[str, Any], Any]


@dataclass
class PresentationTable:
    """Sortable, selectable table over one page of rows.

    The table only reports intents: :meth:`trigger` hands the action to
    ``on_action`` and never talks to the API itself.
    """

    columns: Sequence[ColumnDef]
    row_actions: RowActions | None = None
    on_action: ActionHandler | None = None
    selectable: bool = False
    id_key: str = "id"
    sort: SortState = field(default_factory=SortState)
    selection: SelectionState = field(default_factory=SelectionState)

    def toggle_sort(self, column: str) -> None:
        if not any(col.key == column and col.sortable for col in self.columns):
            raise ValueError(f"Column {column!r} is not sortable")
        self.sort.toggle(column)

    def row_id(self, row: Any) -> Any:
        return resolve(row, self.id_key)

    def allowed_actions(self, row: Any) -> list[str]:
        if self.row_actions is None:
            return []
        return sorted(str(getattr(action, "value", action)) for action in self.row_actions(row))

    def trigger(self, action: str, row: Any) -> Any:
        if action not in self.allowed_actions(row):
            raise PermissionError(f"Action {action!r} is not available for row {self.row_id(row)!r}")
        if self.on_action is None:
            return None
        return self.on_action(action, row)

    def render(self, rows: Sequence[Any]) -> dict[str, Any]:
        ordered = self.sort.apply(rows)
        visible_ids = [self.row_id(row) for row in ordered]
        rendered_rows = []
        for row in ordered:
            row_id = self.row_id(row)
            rendered_rows.append(
                {
                    "id": jsonable(row_id),
                    "values": {col.key: _display(resolve(row, col.key)) for col in self.columns},
                    "actions": self.allowed_actions(row),
                    "selected": self.selection.is_selected(row_id),
                }
            )
        payload: dict[str, Any] = {
            "columns": [
                {
                    "key": col.key,
                    "label": col.label,
                    "sortable": col.sortable,
                    "sort": self.sort.direction.value if col.key == self.sort.column and self.sort.direction else None,
                }
                for col in self.columns
            ],
            "rows": rendered_rows,
            "count": len(rendered_rows),
        }
        if self.selectable:
            payload["selection"] = {
                "header": self.selection.header_state(visible_ids).value,
                "selected_count": len(self.selection.selected & set(visible_ids)),
            }
        return payload


def _display(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return jsonable(value)
