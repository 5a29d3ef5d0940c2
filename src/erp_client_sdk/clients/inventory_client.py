from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import DetailEnvelope, ListEnvelope, ListQuery
from ..models_inventory import InventoryItem
from .resource import ResourceClient


@dataclass
class InventoryClient(ResourceClient):
    path = "/inventory"
    module = "inventory"
    record_model = InventoryItem

    def by_warehouse(self, warehouse_id: int) -> ListEnvelope[InventoryItem]:
        """Every stock row of one warehouse, unpaginated."""
        payload = self._request(
            "GET", f"{self.path}/warehouse/{warehouse_id}", module=self.module, operation="by_warehouse"
        )
        return self._parse(ListEnvelope[InventoryItem], payload, "by_warehouse")

    def by_product(self, product_id: int) -> dict[str, Any]:
        payload = self._request(
            "GET", f"{self.path}/product/{product_id}", module=self.module, operation="by_product"
        )
        return self._parse(DetailEnvelope[dict[str, Any]], payload, "by_product").data

    def alerts(self, query: ListQuery | Mapping[str, Any] | None = None) -> dict[str, Any]:
        params = query.to_params() if isinstance(query, ListQuery) else dict(query or {})
        payload = self._request("GET", f"{self.path}/alerts", params=params, module=self.module, operation="alerts")
        return self._parse(DetailEnvelope[dict[str, Any]], payload, "alerts").data
