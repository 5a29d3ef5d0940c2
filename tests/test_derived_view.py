from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from erp_client_sdk.models_inventory import InventoryItem
from erp_console.derived_view import (
    DerivedViewComputer,
    date_range,
    equals,
    flag,
    is_low_stock,
    jsonable,
    resolve,
    status_statistics,
    sum_field,
    text_search,
    to_decimal,
    warehouse_inventory_statistics,
)
from erp_console.pagination import PaginationWindow


def _rows() -> list[dict]:
    rows = [{"id": i, "status": "active", "name": f"Item {i}", "createdAt": f"2024-05-{i:02d}"} for i in range(1, 11)]
    rows += [{"id": i, "status": "inactive", "name": f"Old {i}", "createdAt": "2023-12-31"} for i in range(11, 16)]
    return rows


def test_statistics_cover_whole_collection() -> None:
    computer = DerivedViewComputer(predicates=[equals("status")], statistics=status_statistics)
    view = computer.compute(_rows(), {"status": "active"}, PaginationWindow(page=1, limit=20))
    assert len(view.filtered) == 10
    assert view.statistics["total"] == 15
    assert view.statistics["by_status"] == {"active": 10, "inactive": 5}
    assert view.page.meta.total == 10


def test_compute_is_idempotent() -> None:
    computer = DerivedViewComputer(predicates=[text_search("name"), equals("status")])
    criteria = {"search": "item", "status": "active"}
    first = computer.compute(_rows(), criteria, PaginationWindow(limit=5))
    second = computer.compute(_rows(), criteria, PaginationWindow(limit=5))
    assert first == second


def test_inactive_predicates_are_ignored() -> None:
    computer = DerivedViewComputer(predicates=[text_search("name"), equals("status"), flag("onlyOld", lambda r: r["id"] > 10)])
    assert len(computer.filter(_rows(), {"search": "", "status": None, "onlyOld": False})) == 15
    assert [row["id"] for row in computer.filter(_rows(), {"onlyOld": True, "search": "old 1"})] == [11, 12, 13, 14, 15]


def test_equals_compares_as_strings() -> None:
    rows = [{"warehouseId": 2}, {"warehouseId": 3}]
    assert DerivedViewComputer(predicates=[equals("warehouseId")]).filter(rows, {"warehouseId": "3"}) == ({"warehouseId": 3},)


def test_date_range_is_inclusive() -> None:
    computer = DerivedViewComputer(predicates=[date_range("createdAt")])
    picked = computer.filter(_rows(), {"fromDate": "2024-05-03", "toDate": "2024-05-05"})
    assert [row["id"] for row in picked] == [3, 4, 5]


def test_resolve_dotted_paths() -> None:
    assert resolve({"product": {"name": "Tea"}}, "product.name") == "Tea"
    assert resolve({"product": None}, "product.name") is None


def test_to_decimal(caplog: pytest.LogCaptureFixture) -> None:
    assert to_decimal("12.50") == Decimal("12.50")
    assert to_decimal(None) == 0
    assert to_decimal(7) == Decimal(7)
    with caplog.at_level(logging.WARNING, logger="erp_console.derived_view"):
        assert to_decimal("n/a") == 0
        assert to_decimal("NaN") == 0
    assert [record.getMessage() for record in caplog.records] == ["non_numeric_value_coerced"] * 2


def test_sum_field_and_jsonable() -> None:
    rows = [{"amount": "1.5"}, {"amount": 2}, {"amount": None}]
    assert sum_field(rows, "amount") == Decimal("3.5")
    assert jsonable({"a": Decimal("3"), "b": [Decimal("0.25")]}) == {"a": 3, "b": [0.25]}


def _item(item_id: int, quantity: str, reserved: str, min_level: str, price: str = "10") -> InventoryItem:
    return InventoryItem.model_validate(
        {
            "id": item_id,
            "warehouse_id": 1,
            "product_id": item_id,
            "quantity": quantity,
            "reserved_quantity": reserved,
            "product": {"product_name": f"P{item_id}", "unit_price": price, "min_stock_level": min_level},
        }
    )


def test_inventory_statistics() -> None:
    items = [
        _item(1, "100", "10", "50"),
        _item(2, "30", "0", "50"),
        _item(3, "0", "0", "5", price="99"),
    ]
    stats = warehouse_inventory_statistics(items)
    assert stats == {
        "total_items": 3,
        "total_quantity": Decimal("130"),
        "total_reserved": Decimal("10"),
        "total_available": Decimal("120"),
        "total_value": Decimal("1300"),
        "low_stock_items": 2,
        "out_of_stock_items": 1,
    }


def test_low_stock_uses_available_quantity() -> None:
    assert is_low_stock(_item(1, "60", "20", "50"))
    assert not is_low_stock(_item(2, "60", "10", "50"))
