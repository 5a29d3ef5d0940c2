from __future__ import annotations

import pytest

from erp_console.table import ColumnDef, HeaderCheckState, PresentationTable, SortDirection, SortState

COLUMNS = [ColumnDef("code", "Code"), ColumnDef("amount", "Amount"), ColumnDef("notes", "Notes", sortable=False)]
ROWS = [
    {"id": 1, "code": "B", "amount": "20"},
    {"id": 2, "code": "a", "amount": None},
    {"id": 3, "code": "C", "amount": 5},
]


def test_sort_cycles_none_asc_desc_none() -> None:
    sort = SortState()
    sort.toggle("code")
    assert sort.direction is SortDirection.ASC
    sort.toggle("code")
    assert sort.direction is SortDirection.DESC
    sort.toggle("code")
    assert (sort.column, sort.direction) == (None, None)
    sort.toggle("code")
    sort.toggle("amount")
    assert (sort.column, sort.direction) == ("amount", SortDirection.ASC)


def test_sort_is_case_insensitive_and_numeric() -> None:
    table = PresentationTable(columns=COLUMNS)
    table.toggle_sort("code")
    assert [row["id"] for row in table.render(ROWS)["rows"]] == [2, 1, 3]
    table.toggle_sort("amount")
    table.toggle_sort("amount")
    # Empty values stay last in both directions.
    assert [row["id"] for row in table.render(ROWS)["rows"]] == [1, 3, 2]


def test_unsortable_column_rejected() -> None:
    table = PresentationTable(columns=COLUMNS)
    with pytest.raises(ValueError, match="not sortable"):
        table.toggle_sort("notes")


def test_header_checkbox_states() -> None:
    table = PresentationTable(columns=COLUMNS, selectable=True)
    ids = [1, 2, 3]
    assert table.selection.header_state(ids) is HeaderCheckState.UNCHECKED
    table.selection.toggle(2)
    assert table.render(ROWS)["selection"] == {"header": "indeterminate", "selected_count": 1}
    table.selection.toggle_all(ids)
    assert table.selection.header_state(ids) is HeaderCheckState.CHECKED
    table.selection.toggle_all(ids)
    assert table.selection.selected == set()


def test_retain_drops_rows_no_longer_visible() -> None:
    table = PresentationTable(columns=COLUMNS, selectable=True)
    table.selection.toggle_all([1, 2, 3])
    table.selection.retain([2, 3, 4])
    assert table.selection.selected == {2, 3}


def test_trigger_reports_intent_only_for_allowed_actions() -> None:
    seen = []
    table = PresentationTable(
        columns=COLUMNS,
        row_actions=lambda row: {"view", "delete"} if row["id"] == 1 else {"view"},
        on_action=lambda action, row: seen.append((action, row["id"])),
    )
    table.trigger("delete", ROWS[0])
    with pytest.raises(PermissionError):
        table.trigger("delete", ROWS[1])
    assert seen == [("delete", 1)]
    rendered = table.render(ROWS[:1])
    assert rendered["rows"][0]["actions"] == ["delete", "view"]
    assert rendered["rows"][0]["values"] == {"code": "B", "amount": "20", "notes": None}
    assert "selection" not in rendered
