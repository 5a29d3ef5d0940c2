from __future__ import annotations

from dataclasses import dataclass

from ..models_inventory import Product, ProductCreate
from .resource import ResourceClient


@dataclass
class ProductsClient(ResourceClient):
    path = "/products"
    module = "products"
    record_model = Product
    create_model = ProductCreate
