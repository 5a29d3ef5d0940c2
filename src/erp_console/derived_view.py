from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel

from .pagination import PageSlice, PaginationWindow, paginate

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def resolve(row: Any, path: str) -> Any:
    """Read a dotted path from a dict or model row; missing segments give None."""
    value = row
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def to_decimal(value: Any) -> Decimal:
    """Numeric coercion for transport values that may arrive as strings."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        return Decimal(value)
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            logger.warning("non_numeric_value_coerced", extra={"raw_value": repr(value)})
            return ZERO
    if not result.is_finite():
        logger.warning("non_numeric_value_coerced", extra={"raw_value": repr(value)})
        return ZERO
    return result


def _is_set(value: Any) -> bool:
    return value is not None and value != "" and value is not False


@dataclass(frozen=True)
class Predicate:
    """A row test bound to criteria keys; inactive while none of its keys is set."""

    name: str
    keys: tuple[str, ...]
    test: Callable[[Any, Mapping[str, Any]], bool]

    def is_active(self, criteria: Mapping[str, Any]) -> bool:
        return any(_is_set(criteria.get(key)) for key in self.keys)

    def __call__(self, row: Any, criteria: Mapping[str, Any]) -> bool:
        return self.test(row, criteria)


def text_search(*paths: str, key: str = "search") -> Predicate:
    def _test(row: Any, criteria: Mapping[str, Any]) -> bool:
        needle = str(criteria[key]).strip().lower()
        return any(needle in str(resolve(row, path) or "").lower() for path in paths)

    return Predicate(name=f"search:{','.join(paths)}", keys=(key,), test=_test)


def equals(key: str, path: str | None = None) -> Predicate:
    def _test(row: Any, criteria: Mapping[str, Any]) -> bool:
        # UI selections arrive as strings; ids on rows are ints.
        return str(resolve(row, path or key)) == str(criteria[key])

    return Predicate(name=f"equals:{key}", keys=(key,), test=_test)


def date_range(path: str, from_key: str = "fromDate", to_key: str = "toDate") -> Predicate:
    def _day(value: Any) -> str:
        if hasattr(value, "isoformat"):
            value = value.isoformat()
        return str(value or "")[:10]

    def _test(row: Any, criteria: Mapping[str, Any]) -> bool:
        day = _day(resolve(row, path))
        if not day:
            return False
        start = criteria.get(from_key)
        end = criteria.get(to_key)
        if _is_set(start) and day < _day(start):
            return False
        if _is_set(end) and day > _day(end):
            return False
        return True

    return Predicate(name=f"date_range:{path}", keys=(from_key, to_key), test=_test)


def flag(key: str, test: Callable[[Any], bool]) -> Predicate:
    """Checkbox-style filter: applies ``test`` only while ``criteria[key]`` is truthy."""
    return Predicate(name=f"flag:{key}", keys=(key,), test=lambda row, _criteria: test(row))


@dataclass(frozen=True)
class DerivedView:
    filtered: tuple[Any, ...]
    statistics: dict[str, Any]
    page: PageSlice


@dataclass
class DerivedViewComputer:
    predicates: Sequence[Predicate] = ()
    statistics: Callable[[Sequence[Any]], dict[str, Any]] | None = None

    def filter(self, collection: Sequence[Any], criteria: Mapping[str, Any]) -> tuple[Any, ...]:
        active = [predicate for predicate in self.predicates if predicate.is_active(criteria)]
        return tuple(row for row in collection if all(predicate(row, criteria) for predicate in active))

    def compute(
        self,
        collection: Sequence[Any],
        criteria: Mapping[str, Any],
        window: PaginationWindow,
    ) -> DerivedView:
        filtered = self.filter(collection, criteria)
        # Summary cards describe the whole collection, not the current filter.
        stats = self.statistics(collection) if self.statistics is not None else {}
        return DerivedView(filtered=filtered, statistics=stats, page=paginate(filtered, window))


def available_quantity(row: Any) -> Decimal:
    return to_decimal(resolve(row, "quantity")) - to_decimal(resolve(row, "reserved_quantity"))


def is_low_stock(row: Any) -> bool:
    return available_quantity(row) < to_decimal(resolve(row, "product.min_stock_level"))


def is_out_of_stock(row: Any) -> bool:
    return to_decimal(resolve(row, "quantity")) == ZERO


def warehouse_inventory_statistics(rows: Sequence[Any]) -> dict[str, Any]:
    stats: dict[str, Any] = {
        "total_items": len(rows),
        "total_quantity": ZERO,
        "total_reserved": ZERO,
        "total_available": ZERO,
        "total_value": ZERO,
        "low_stock_items": 0,
        "out_of_stock_items": 0,
    }
    for row in rows:
        quantity = to_decimal(resolve(row, "quantity"))
        stats["total_quantity"] += quantity
        stats["total_reserved"] += to_decimal(resolve(row, "reserved_quantity"))
        stats["total_available"] += available_quantity(row)
        stats["total_value"] += quantity * to_decimal(resolve(row, "product.unit_price"))
        stats["low_stock_items"] += int(is_low_stock(row))
        stats["out_of_stock_items"] += int(is_out_of_stock(row))
    return stats


def status_statistics(rows: Sequence[Any], path: str = "status") -> dict[str, Any]:
    counts = Counter(str(resolve(row, path) or "unknown") for row in rows)
    return {"total": len(rows), "by_status": dict(sorted(counts.items()))}


def sum_field(rows: Sequence[Any], path: str) -> Decimal:
    return sum((to_decimal(resolve(row, path)) for row in rows), ZERO)


def jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return {key: jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(item) for item in value]
    return value
