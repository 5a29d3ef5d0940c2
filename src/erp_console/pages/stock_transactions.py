from __future__ import annotations

from typing import Any

from erp_client_sdk.clients.stock_transactions_client import StockTransactionsClient

from ..config import ConsoleConfig
from ..mutations import ConfirmGate
from ..permissions import Capabilities
from ..query_cache import QueryCache
from ..query_keys import QueryKeys
from ..table import ColumnDef
from ..telemetry.logger import TelemetryLogger
from .list_page import ListPage, page_options

STOCK_TRANSACTION_COLUMNS = (
    ColumnDef("transaction_code", "Code"),
    ColumnDef("transaction_type", "Type"),
    ColumnDef("warehouse_id", "Warehouse"),
    ColumnDef("total_value", "Total value"),
    ColumnDef("status", "Status"),
    ColumnDef("created_at", "Created at"),
    ColumnDef("reason", "Reason", sortable=False),
)

INVENTORY_KEYS = QueryKeys("inventory")


class StockTransactionsPage(ListPage):
    """Server-side list of import/export/transfer/disposal/stocktake slips."""

    @classmethod
    def for_client(
        cls,
        client: StockTransactionsClient,
        capabilities: Capabilities,
        *,
        config: ConsoleConfig | None = None,
        cache: QueryCache | None = None,
        telemetry: TelemetryLogger | None = None,
        confirm: ConfirmGate | None = None,
    ) -> StockTransactionsPage:
        page = cls(
            module="stock_transactions",
            fetch=client.list,
            capabilities=capabilities,
            columns=STOCK_TRANSACTION_COLUMNS,
            status_resource="stock_transactions",
            confirm=confirm,
            **page_options(config, cache=cache, telemetry=telemetry),
        )

        def _touching_stock(record_id: Any, *_args: Any, **_kwargs: Any) -> tuple[tuple[Any, ...], ...]:
            # Approving moves stock, so warehouse inventory views go stale too.
            return (page.keys.lists(), page.keys.detail(record_id), INVENTORY_KEYS.all())

        page.add_mutation(
            "approve",
            client.approve,
            invalidate=_touching_stock,
            needs_confirm=True,
            confirm_message="Approve this stock transaction?",
            success_message="Stock transaction approved",
        )
        page.add_mutation(
            "cancel",
            client.cancel,
            needs_confirm=True,
            confirm_message="Cancel this stock transaction?",
            success_message="Stock transaction cancelled",
        )
        page.add_mutation(
            "delete",
            client.delete,
            needs_confirm=True,
            confirm_message="Delete this stock transaction?",
            success_message="Stock transaction deleted",
        )
        return page

    def filter_by_type(self, transaction_type: str | None) -> bool:
        return self.filters.set_filter("transactionType", transaction_type)

    def filter_by_status(self, status: str | None) -> bool:
        return self.filters.set_filter("status", status)

    def filter_by_warehouse(self, warehouse_id: int | None) -> bool:
        return self.filters.set_filter("warehouseId", warehouse_id)

    def filter_by_dates(self, from_date: str | None, to_date: str | None) -> bool:
        return self.filters.set_filters({"fromDate": from_date, "toDate": to_date})
