from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field

from .models import BaseRecord, CamelModel, ListQuery, WireDecimal

ReceiptType = Literal["sales", "debt_collection", "refund", "other"]
ReceiptPaymentMethod = Literal["cash", "transfer", "card"]
VoucherType = Literal["salary", "operating_cost", "supplier_payment", "refund", "other"]
VoucherPaymentMethod = Literal["cash", "transfer"]


class PaymentReceipt(BaseRecord):
    receipt_code: str
    receipt_type: ReceiptType
    customer_id: int | None = None
    order_id: int | None = None
    amount: Decimal
    payment_method: ReceiptPaymentMethod
    bank_name: str | None = None
    transaction_reference: str | None = None
    receipt_date: str
    approved_by: int | None = None
    approved_at: datetime | None = None
    is_posted: bool = False
    notes: str | None = None
    created_by: int | None = None


class PaymentReceiptQuery(ListQuery):
    receipt_type: ReceiptType | None = None
    customer_id: int | None = None
    payment_method: ReceiptPaymentMethod | None = None
    is_posted: bool | None = None
    from_date: str | None = None
    to_date: str | None = None


class PaymentReceiptCreate(CamelModel):
    receipt_type: ReceiptType
    customer_id: int = Field(gt=0)
    order_id: int | None = Field(default=None, gt=0)
    amount: WireDecimal = Field(gt=0)
    payment_method: ReceiptPaymentMethod
    bank_name: str | None = None
    transaction_reference: str | None = None
    receipt_date: str = Field(min_length=1)
    notes: str | None = Field(default=None, max_length=500)


class PaymentReceiptStatistics(CamelModel):
    total_receipts: int = 0
    total_amount: Decimal = Decimal("0")
    cash_amount: Decimal = Decimal("0")
    transfer_amount: Decimal = Decimal("0")
    card_amount: Decimal = Decimal("0")
    approved_receipts: int = 0
    pending_receipts: int = 0


class PaymentVoucher(BaseRecord):
    voucher_code: str
    voucher_type: VoucherType
    supplier_id: int | None = None
    expense_account: str | None = None
    amount: Decimal
    payment_method: VoucherPaymentMethod
    bank_name: str | None = None
    payment_date: str
    approved_by: int | None = None
    approved_at: datetime | None = None
    is_posted: bool = False
    notes: str | None = None
    created_by: int | None = None


class PaymentVoucherQuery(ListQuery):
    voucher_type: VoucherType | None = None
    supplier_id: int | None = None
    payment_method: VoucherPaymentMethod | None = None
    is_posted: bool | None = None
    from_date: str | None = None
    to_date: str | None = None


class PaymentVoucherCreate(CamelModel):
    voucher_type: VoucherType
    supplier_id: int | None = Field(default=None, gt=0)
    expense_account: str | None = None
    amount: WireDecimal = Field(gt=0)
    payment_method: VoucherPaymentMethod
    bank_name: str | None = None
    payment_date: str = Field(min_length=1)
    notes: str | None = Field(default=None, max_length=500)


class PaymentVoucherStatistics(CamelModel):
    total_vouchers: int = 0
    total_amount: Decimal = Decimal("0")
    cash_amount: Decimal = Decimal("0")
    transfer_amount: Decimal = Decimal("0")
    approved_vouchers: int = 0
    pending_vouchers: int = 0
