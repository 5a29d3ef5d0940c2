from __future__ import annotations

from dataclasses import dataclass

from ..models_inventory import Warehouse, WarehouseCreate
from .resource import ResourceClient


@dataclass
class WarehousesClient(ResourceClient):
    path = "/warehouses"
    module = "warehouses"
    record_model = Warehouse
    create_model = WarehouseCreate
