from .auth_store import AuthStore
from .cart_store import CartStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    CatalogFetchError,
    ForbiddenError,
    InvalidQuantityError,
    NotFoundError,
    ProductNotFoundError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient, TraceContext, unwrap_data, unwrap_rows
from .models import (
    CartLine,
    Category,
    CustomerReportRow,
    Employee,
    EmployeeCreate,
    EmployeeUpdate,
    ProductRecord,
    ProductSnapshot,
    SessionData,
    TokenResponse,
    UserResponse,
)
from .session import ApiSession
from .ui_errors import UserFacingError, to_user_facing_error

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "CartLine",
    "CartStore",
    "CatalogFetchError",
    "Category",
    "ClientConfig",
    "ConfigError",
    "CustomerReportRow",
    "Employee",
    "EmployeeCreate",
    "EmployeeUpdate",
    "ForbiddenError",
    "HttpClient",
    "InvalidQuantityError",
    "NotFoundError",
    "ProductNotFoundError",
    "ProductRecord",
    "ProductSnapshot",
    "SessionData",
    "TokenResponse",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "UserFacingError",
    "UserResponse",
    "ValidationError",
    "load_config",
    "to_user_facing_error",
    "unwrap_data",
    "unwrap_rows",
]
