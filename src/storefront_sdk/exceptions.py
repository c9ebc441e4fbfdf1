from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class AuthError(UnauthorizedError):
    """Authentication failed or the stored token was rejected."""


class PermissionError(ForbiddenError):
    """The authenticated role may not perform the action."""


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""

    @property
    def cancelled(self) -> bool:
        return self.code == "REQUEST_CANCELLED"


class CatalogFetchError(ApiError):
    """A catalog read was rejected or the service was unreachable."""

    @classmethod
    def wrap(cls, exc: Exception) -> "CatalogFetchError":
        if isinstance(exc, ApiError):
            return cls(
                code=exc.code,
                message=exc.message,
                details=exc.details,
                trace_id=exc.trace_id,
                status_code=exc.status_code,
                raw_payload=exc.raw_payload,
            )
        return cls(
            code="CATALOG_FETCH_FAILED",
            message=str(exc) or "Catalog fetch failed",
            details={"type": type(exc).__name__},
            trace_id=None,
            status_code=0,
        )


class ProductNotFoundError(NotFoundError):
    @classmethod
    def for_id(cls, product_id: int) -> "ProductNotFoundError":
        return cls(
            code="PRODUCT_NOT_FOUND",
            message=f"Product {product_id} is not in the catalog cache",
            details={"product_id": product_id},
            trace_id=None,
            status_code=404,
        )


class InvalidQuantityError(ValidationError):
    @classmethod
    def for_id(cls, product_id: int) -> "InvalidQuantityError":
        return cls(
            code="INVALID_QUANTITY",
            message=f"Product {product_id} has no usable stock quantity",
            details={"product_id": product_id},
            trace_id=None,
            status_code=422,
        )
