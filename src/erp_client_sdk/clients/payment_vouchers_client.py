from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import DetailEnvelope, ListQuery
from ..models_finance import PaymentVoucher, PaymentVoucherCreate, PaymentVoucherStatistics
from .resource import ResourceClient


@dataclass
class PaymentVouchersClient(ResourceClient):
    path = "/payment-vouchers"
    module = "payment_vouchers"
    record_model = PaymentVoucher
    create_model = PaymentVoucherCreate

    def statistics(self, query: ListQuery | Mapping[str, Any] | None = None) -> PaymentVoucherStatistics:
        params = query.to_params() if isinstance(query, ListQuery) else dict(query or {})
        payload = self._request(
            "GET", f"{self.path}/statistics", params=params, module=self.module, operation="statistics"
        )
        return self._parse(DetailEnvelope[PaymentVoucherStatistics], payload, "statistics").data

    def approve(self, voucher_id: int, notes: str | None = None) -> PaymentVoucher:
        return self.action(voucher_id, "approve", {"notes": notes})
