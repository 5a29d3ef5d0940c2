from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import DetailEnvelope, ListQuery
from ..models_finance import PaymentReceipt, PaymentReceiptCreate, PaymentReceiptStatistics
from .resource import ResourceClient


@dataclass
class PaymentReceiptsClient(ResourceClient):
    path = "/payment-receipts"
    module = "payment_receipts"
    record_model = PaymentReceipt
    create_model = PaymentReceiptCreate

    def statistics(self, query: ListQuery | Mapping[str, Any] | None = None) -> PaymentReceiptStatistics:
        params = query.to_params() if isinstance(query, ListQuery) else dict(query or {})
        payload = self._request(
            "GET", f"{self.path}/statistics", params=params, module=self.module, operation="statistics"
        )
        return self._parse(DetailEnvelope[PaymentReceiptStatistics], payload, "statistics").data

    def approve(self, receipt_id: int, notes: str | None = None) -> PaymentReceipt:
        return self.action(receipt_id, "approve", {"notes": notes})
