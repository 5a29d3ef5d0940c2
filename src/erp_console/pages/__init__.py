from .list_page import ListPage, page_options
from .payment_receipts import PaymentReceiptsPage
from .promotions import PromotionsPage
from .stock_transactions import StockTransactionsPage
from .warehouse_inventory import WarehouseInventoryPage

__all__ = [
    "ListPage",
    "PaymentReceiptsPage",
    "PromotionsPage",
    "StockTransactionsPage",
    "WarehouseInventoryPage",
    "page_options",
]
