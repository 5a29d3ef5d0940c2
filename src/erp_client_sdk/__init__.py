from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ResponseFormatError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import DetailEnvelope, ListEnvelope, ListQuery, PaginationMeta, SortOrder
from .models_finance import (
    PaymentReceipt,
    PaymentReceiptCreate,
    PaymentReceiptQuery,
    PaymentReceiptStatistics,
    PaymentVoucher,
    PaymentVoucherCreate,
    PaymentVoucherQuery,
    PaymentVoucherStatistics,
)
from .models_inventory import (
    InventoryItem,
    InventoryQuery,
    Product,
    ProductCreate,
    StockTransaction,
    StockTransactionCreate,
    StockTransactionQuery,
    Warehouse,
    WarehouseCreate,
)
from .models_promotions import Promotion, PromotionCreate, PromotionQuery
from .record_status import (
    ActionAvailability,
    RecordAction,
    RecordStatus,
    action_availability,
    allowed_actions,
    normalize_status,
)
from .session import ApiSession
from .tracing import TraceContext
from .ui_errors import UserFacingError, field_errors_from_validation, to_user_facing_error

__all__ = [
    "ActionAvailability",
    "ApiError",
    "ApiSession",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "DetailEnvelope",
    "ForbiddenError",
    "HttpClient",
    "InventoryItem",
    "InventoryQuery",
    "ListEnvelope",
    "ListQuery",
    "NotFoundError",
    "PaginationMeta",
    "PaymentReceipt",
    "PaymentReceiptCreate",
    "PaymentReceiptQuery",
    "PaymentReceiptStatistics",
    "PaymentVoucher",
    "PaymentVoucherCreate",
    "PaymentVoucherQuery",
    "PaymentVoucherStatistics",
    "Product",
    "ProductCreate",
    "Promotion",
    "PromotionCreate",
    "PromotionQuery",
    "RateLimitError",
    "ResponseFormatError",
    "RecordAction",
    "RecordStatus",
    "ServerError",
    "SortOrder",
    "StockTransaction",
    "StockTransactionCreate",
    "StockTransactionQuery",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "UserFacingError",
    "ValidationError",
    "Warehouse",
    "WarehouseCreate",
    "action_availability",
    "allowed_actions",
    "field_errors_from_validation",
    "load_config",
    "normalize_status",
    "to_user_facing_error",
]
