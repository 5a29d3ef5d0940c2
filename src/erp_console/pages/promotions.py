from __future__ import annotations

from typing import Any

from erp_client_sdk.clients.promotions_client import PromotionsClient

from ..config import ConsoleConfig
from ..mutations import ConfirmGate, MutationOutcome
from ..permissions import Capabilities
from ..query_cache import QueryCache
from ..table import ColumnDef
from ..telemetry.logger import TelemetryLogger
from .list_page import ListPage, page_options

PROMOTION_COLUMNS = (
    ColumnDef("promotion_code", "Code"),
    ColumnDef("promotion_name", "Name"),
    ColumnDef("promotion_type", "Type"),
    ColumnDef("discount_value", "Discount"),
    ColumnDef("start_date", "Starts"),
    ColumnDef("end_date", "Ends"),
    ColumnDef("usage_count", "Used"),
    ColumnDef("status", "Status"),
)


class PromotionsPage(ListPage):
    @classmethod
    def for_client(
        cls,
        client: PromotionsClient,
        capabilities: Capabilities,
        *,
        config: ConsoleConfig | None = None,
        cache: QueryCache | None = None,
        telemetry: TelemetryLogger | None = None,
        confirm: ConfirmGate | None = None,
    ) -> PromotionsPage:
        page = cls(
            module="promotions",
            fetch=client.list,
            capabilities=capabilities,
            columns=PROMOTION_COLUMNS,
            status_resource="promotions",
            confirm=confirm,
            **page_options(config, cache=cache, telemetry=telemetry),
        )
        page.add_mutation(
            "approve",
            client.approve,
            needs_confirm=True,
            confirm_message="Approve this promotion?",
            success_message="Promotion approved",
        )
        page.add_mutation(
            "cancel",
            client.cancel,
            needs_confirm=True,
            confirm_message="Cancel this promotion?",
            success_message="Promotion cancelled",
        )
        return page

    def handle_action(self, action: str, row: Any) -> Any:
        # Cancelling needs a reason, so the table only opens the dialog.
        if action == "cancel":
            self.last_intent = {"action": action, "id": self.table.row_id(row), "module": self.module}
            return self.last_intent
        return super().handle_action(action, row)

    def cancel(self, promotion_id: int, reason: str) -> MutationOutcome:
        if not reason.strip():
            raise ValueError("A cancellation reason is required")
        return self.run_mutation("cancel", promotion_id, reason.strip())
