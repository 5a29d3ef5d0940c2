from .base import BaseClient
from .inventory_client import InventoryClient
from .payment_receipts_client import PaymentReceiptsClient
from .payment_vouchers_client import PaymentVouchersClient
from .products_client import ProductsClient
from .promotions_client import PromotionsClient
from .resource import ResourceClient
from .stock_transactions_client import StockTransactionsClient
from .warehouses_client import WarehousesClient

__all__ = [
    "BaseClient",
    "InventoryClient",
    "PaymentReceiptsClient",
    "PaymentVouchersClient",
    "ProductsClient",
    "PromotionsClient",
    "ResourceClient",
    "StockTransactionsClient",
    "WarehousesClient",
]
