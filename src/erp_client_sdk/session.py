from __future__ import annotations

from dataclasses import dataclass, field

from .clients.inventory_client import InventoryClient
from .clients.payment_receipts_client import PaymentReceiptsClient
from .clients.payment_vouchers_client import PaymentVouchersClient
from .clients.products_client import ProductsClient
from .clients.promotions_client import PromotionsClient
from .clients.stock_transactions_client import StockTransactionsClient
from .clients.warehouses_client import WarehousesClient
from .config import ClientConfig
from .http_client import HttpClient
from .tracing import TraceContext


@dataclass
class ApiSession:
    config: ClientConfig
    token: str | None = None
    trace: TraceContext | None = None
    _shared_http: HttpClient | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.trace = self.trace or TraceContext()

    def _http(self) -> HttpClient:
        if self._shared_http is None:
            self._shared_http = HttpClient(config=self.config, trace=self.trace)
        return self._shared_http

    def warehouses_client(self) -> WarehousesClient:
        return WarehousesClient(http=self._http(), access_token=self.token)

    def products_client(self) -> ProductsClient:
        return ProductsClient(http=self._http(), access_token=self.token)

    def inventory_client(self) -> InventoryClient:
        return InventoryClient(http=self._http(), access_token=self.token)

    def stock_transactions_client(self) -> StockTransactionsClient:
        return StockTransactionsClient(http=self._http(), access_token=self.token)

    def payment_receipts_client(self) -> PaymentReceiptsClient:
        return PaymentReceiptsClient(http=self._http(), access_token=self.token)

    def payment_vouchers_client(self) -> PaymentVouchersClient:
        return PaymentVouchersClient(http=self._http(), access_token=self.token)

    def promotions_client(self) -> PromotionsClient:
        return PromotionsClient(http=self._http(), access_token=self.token)

    def establish(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None
