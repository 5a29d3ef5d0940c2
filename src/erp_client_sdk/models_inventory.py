from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Literal

from pydantic import Field, field_validator

from .models import BaseRecord, CamelModel, ListQuery, SnakeModel, WireDecimal

WarehouseType = Literal["raw_material", "packaging", "finished_product", "goods"]
TransactionType = Literal["import", "export", "transfer", "disposal", "stocktake"]
TransactionStatus = Literal["draft", "pending", "approved", "completed", "cancelled"]


class Warehouse(BaseRecord):
    warehouse_code: str
    warehouse_name: str
    warehouse_type: WarehouseType | None = None
    address: str | None = None
    city: str | None = None
    region: str | None = None
    description: str | None = None
    manager_id: int | None = None
    capacity: Decimal | None = None
    status: str = "active"


class WarehouseQuery(ListQuery):
    warehouse_type: WarehouseType | None = None
    status: str | None = None


class WarehouseCreate(CamelModel):
    warehouse_code: str = Field(min_length=1, max_length=50)
    warehouse_name: str = Field(min_length=1, max_length=200)
    warehouse_type: WarehouseType
    address: str | None = None
    city: str | None = None
    capacity: WireDecimal | None = Field(default=None, ge=0)
    status: str = "active"


class Product(BaseRecord):
    sku: str
    product_name: str
    product_type: str | None = None
    category_id: int | None = None
    unit: str | None = None
    barcode: str | None = None
    purchase_price: Decimal | None = None
    selling_price_retail: Decimal | None = None
    min_stock_level: Decimal | None = None
    status: str = "active"


class ProductQuery(ListQuery):
    category_id: int | None = None
    product_type: str | None = None
    status: str | None = None


class ProductCreate(CamelModel):
    sku: str | None = Field(default=None, max_length=100)
    product_name: str = Field(min_length=1, max_length=200)
    product_type: str
    unit: str = Field(min_length=1)
    category_id: int | None = Field(default=None, gt=0)
    purchase_price: WireDecimal | None = Field(default=None, ge=0)
    selling_price_retail: WireDecimal | None = Field(default=None, ge=0)
    min_stock_level: WireDecimal | None = Field(default=None, ge=0)


class InventoryProduct(SnakeModel):
    id: int | None = None
    product_name: str | None = None
    product_code: str | None = None
    unit: str | None = None
    unit_price: Decimal | None = None
    min_stock_level: Decimal | None = None


class InventoryItem(SnakeModel):
    id: int
    warehouse_id: int
    product_id: int
    product: InventoryProduct | None = None
    quantity: Decimal = Decimal("0")
    reserved_quantity: Decimal = Decimal("0")
    available_quantity: Decimal | None = None
    last_updated: datetime | None = None


class InventoryQuery(ListQuery):
    warehouse_id: int | None = None
    category_id: int | None = None
    low_stock: bool | None = None


class StockTransactionDetail(BaseRecord):
    transaction_id: int | None = None
    product_id: int
    batch_number: str | None = None
    quantity: Decimal
    unit_price: Decimal | None = None
    total_price: Decimal | None = None
    expiry_date: str | None = None
    notes: str | None = None


class StockTransaction(BaseRecord):
    transaction_code: str
    transaction_type: TransactionType
    warehouse_id: int | None = None
    source_warehouse_id: int | None = None
    destination_warehouse_id: int | None = None
    reference_type: str | None = None
    reference_id: int | None = None
    total_value: Decimal | None = None
    reason: str | None = None
    notes: str | None = None
    status: TransactionStatus
    approved_by: int | None = None
    approved_at: datetime | None = None
    cancelled_by: int | None = None
    cancelled_at: datetime | None = None
    details: List[StockTransactionDetail] | None = None


class StockTransactionQuery(ListQuery):
    transaction_type: TransactionType | None = None
    warehouse_id: int | None = None
    status: TransactionStatus | None = None
    from_date: str | None = None
    to_date: str | None = None


class StockTransactionLine(CamelModel):
    product_id: int = Field(gt=0)
    quantity: WireDecimal = Field(gt=0)
    unit_price: WireDecimal | None = Field(default=None, ge=0)
    batch_number: str | None = None
    expiry_date: str | None = None
    notes: str | None = None


class StockTransactionCreate(CamelModel):
    warehouse_id: int = Field(gt=0)
    reference_type: str | None = None
    reference_id: int | None = None
    reason: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=500)
    details: List[StockTransactionLine]

    @field_validator("details")
    @classmethod
    def _require_lines(cls, value: list[StockTransactionLine]) -> list[StockTransactionLine]:
        if not value:
            raise ValueError("At least one product line is required")
        return value
