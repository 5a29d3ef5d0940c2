from __future__ import annotations

from erp_client_sdk.clients.inventory_client import InventoryClient

from ..config import ConsoleConfig
from ..derived_view import (
    DerivedViewComputer,
    flag,
    is_low_stock,
    is_out_of_stock,
    text_search,
    warehouse_inventory_statistics,
)
from ..permissions import Capabilities
from ..query_cache import QueryCache
from ..query_keys import QueryKeys
from ..table import ColumnDef
from ..telemetry.logger import TelemetryLogger
from .list_page import ListPage, page_options

INVENTORY_COLUMNS = (
    ColumnDef("product.product_code", "Product code"),
    ColumnDef("product.product_name", "Product"),
    ColumnDef("product.unit", "Unit", sortable=False),
    ColumnDef("quantity", "Quantity"),
    ColumnDef("reserved_quantity", "Reserved"),
    ColumnDef("available_quantity", "Available"),
    ColumnDef("last_updated", "Updated"),
)

INVENTORY_PREDICATES = (
    text_search("product.product_name", "product.product_code"),
    flag("lowStock", is_low_stock),
    flag("outOfStock", is_out_of_stock),
)


class WarehouseInventoryPage(ListPage):
    """Stock of one warehouse, fetched whole and filtered, summed and paged locally."""

    @classmethod
    def for_client(
        cls,
        client: InventoryClient,
        warehouse_id: int,
        capabilities: Capabilities,
        *,
        config: ConsoleConfig | None = None,
        cache: QueryCache | None = None,
        telemetry: TelemetryLogger | None = None,
    ) -> WarehouseInventoryPage:
        keys = QueryKeys("inventory")
        return cls(
            module="inventory",
            fetch=lambda _params: client.by_warehouse(warehouse_id),
            capabilities=capabilities,
            columns=INVENTORY_COLUMNS,
            keys=keys,
            key_factory=lambda _params: keys.scoped("warehouse", warehouse_id),
            base_params={"warehouseId": warehouse_id},
            derived=DerivedViewComputer(predicates=INVENTORY_PREDICATES, statistics=warehouse_inventory_statistics),
            **page_options(config, cache=cache, telemetry=telemetry, filter_defaults={"lowStock": False, "outOfStock": False}),
        )

    def show_low_stock(self, enabled: bool = True) -> bool:
        return self.filters.set_filter("lowStock", enabled)

    def show_out_of_stock(self, enabled: bool = True) -> bool:
        return self.filters.set_filter("outOfStock", enabled)

    @property
    def warehouse_id(self) -> int:
        return self.base_params["warehouseId"]
