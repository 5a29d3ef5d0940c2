from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from ..models_inventory import StockTransaction, StockTransactionCreate
from .resource import ResourceClient, dump_body

TransactionKind = Literal["import", "export", "transfer", "disposal", "stocktake"]


@dataclass
class StockTransactionsClient(ResourceClient):
    path = "/stock-transactions"
    module = "stock_transactions"
    record_model = StockTransaction
    create_model = StockTransactionCreate

    def create_kind(
        self, kind: TransactionKind, payload: StockTransactionCreate | Mapping[str, Any]
    ) -> StockTransaction:
        body = dump_body(self._validate_body(payload))
        data = self._request(
            "POST", f"{self.path}/{kind}", json_body=body, module=self.module, operation=f"create_{kind}"
        )
        return self._detail(data, f"create_{kind}")

    def create_import(self, payload: StockTransactionCreate | Mapping[str, Any]) -> StockTransaction:
        return self.create_kind("import", payload)

    def create_export(self, payload: StockTransactionCreate | Mapping[str, Any]) -> StockTransaction:
        return self.create_kind("export", payload)

    def approve(self, transaction_id: int, notes: str | None = None) -> StockTransaction:
        return self.action(transaction_id, "approve", {"notes": notes})

    def cancel(self, transaction_id: int, reason: str | None = None) -> StockTransaction:
        return self.action(transaction_id, "cancel", {"reason": reason})
