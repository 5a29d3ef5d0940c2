from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field, model_validator

from .models import BaseRecord, CamelModel, ListQuery, WireDecimal

PromotionStatus = Literal["pending", "active", "expired", "cancelled"]
PromotionType = Literal["percent_discount", "fixed_discount", "buy_x_get_y", "gift"]
ApplicableTo = Literal["all", "category", "product_group", "specific_product", "customer_group"]


class Promotion(BaseRecord):
    promotion_code: str
    promotion_name: str
    promotion_type: PromotionType
    discount_value: Decimal = Decimal("0")
    max_discount_value: Decimal | None = None
    start_date: str
    end_date: str
    is_recurring: bool = False
    applicable_to: ApplicableTo = "all"
    min_order_value: Decimal = Decimal("0")
    quantity_limit: int | None = None
    usage_count: int = 0
    status: PromotionStatus
    approved_by: int | None = None
    approved_at: datetime | None = None
    cancelled_by: int | None = None
    cancelled_at: datetime | None = None


class PromotionQuery(ListQuery):
    promotion_type: PromotionType | None = None
    status: PromotionStatus | None = None
    from_date: str | None = None
    to_date: str | None = None


class PromotionCreate(CamelModel):
    promotion_code: str = Field(min_length=1, max_length=50)
    promotion_name: str = Field(min_length=1, max_length=200)
    promotion_type: PromotionType
    discount_value: WireDecimal = Field(ge=0)
    max_discount_value: WireDecimal | None = Field(default=None, ge=0)
    start_date: str = Field(min_length=1)
    end_date: str = Field(min_length=1)
    is_recurring: bool = False
    applicable_to: ApplicableTo = "all"
    min_order_value: WireDecimal = Field(default=Decimal("0"), ge=0)
    quantity_limit: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_window(self) -> "PromotionCreate":
        # ISO dates compare correctly as strings.
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        if self.promotion_type == "percent_discount" and self.discount_value > 100:
            raise ValueError("discountValue must be at most 100 for percent discounts")
        return self
