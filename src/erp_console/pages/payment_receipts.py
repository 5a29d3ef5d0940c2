from __future__ import annotations

from erp_client_sdk.clients.payment_receipts_client import PaymentReceiptsClient

from ..config import ConsoleConfig
from ..mutations import ConfirmGate, MutationOutcome
from ..permissions import Capabilities
from ..query_cache import QueryCache
from ..table import ColumnDef
from ..telemetry.logger import TelemetryLogger
from .list_page import ListPage, page_options

PAYMENT_RECEIPT_COLUMNS = (
    ColumnDef("receipt_code", "Code"),
    ColumnDef("receipt_type", "Type"),
    ColumnDef("customer_id", "Customer"),
    ColumnDef("amount", "Amount"),
    ColumnDef("payment_method", "Method"),
    ColumnDef("receipt_date", "Date"),
    ColumnDef("approved_at", "Approved at"),
)


class PaymentReceiptsPage(ListPage):
    """Server-side receipts list with the statistics summary cards.

    The statistics query shares the list's filters minus paging and sorting and
    is cached under its own key.
    """

    @classmethod
    def for_client(
        cls,
        client: PaymentReceiptsClient,
        capabilities: Capabilities,
        *,
        config: ConsoleConfig | None = None,
        cache: QueryCache | None = None,
        telemetry: TelemetryLogger | None = None,
        confirm: ConfirmGate | None = None,
    ) -> PaymentReceiptsPage:
        page = cls(
            module="payment_receipts",
            fetch=client.list,
            capabilities=capabilities,
            columns=PAYMENT_RECEIPT_COLUMNS,
            statistics_fetch=client.statistics,
            status_resource="payment_receipts",
            selectable=True,
            confirm=confirm,
            **page_options(config, cache=cache, telemetry=telemetry),
        )
        page.add_mutation(
            "approve",
            client.approve,
            needs_confirm=True,
            confirm_message="Approve this receipt?",
            success_message="Receipt approved",
        )
        page.add_mutation(
            "delete",
            client.delete,
            needs_confirm=True,
            confirm_message="Delete this receipt?",
            success_message="Receipt deleted",
        )
        return page

    def delete_selected(self) -> list[MutationOutcome]:
        """Delete every selected receipt, one confirmed request each."""
        outcomes = []
        for receipt_id in sorted(self.table.selection.selected):
            outcomes.append(self.run_mutation("delete", receipt_id))
        return outcomes
