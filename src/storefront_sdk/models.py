from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidQuantityError


class CategoryRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    name: str | None = None


class ProductRecord(BaseModel):
    """Product as the store API returns it."""

    model_config = ConfigDict(extra="allow")

    id: int
    sku: str | None = None
    name: str | None = None
    price: Decimal | float | str | None = None
    threshold: int | None = None
    quantity: Any = None
    description: str | None = None
    category: list[CategoryRef] | None = None
    image: str | None = None
    image_extension: str | None = None


def _to_price(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not price.is_finite():
        return Decimal("0")
    return price


def _to_quantity(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def image_data_uri(image: str | None, extension: str | None) -> str:
    if not image:
        return ""
    return f"data:image/{extension or 'png'};base64,{image}"


class ProductSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    sku: str = ""
    name: str = ""
    price: Decimal = Decimal("0")
    quantity: int | None = None
    restock_threshold: int | None = None
    description: str = ""
    categories: frozenset[str] = Field(default_factory=frozenset)
    image: str = ""

    @classmethod
    def from_record(cls, record: ProductRecord | dict[str, Any]) -> "ProductSnapshot":
        if not isinstance(record, ProductRecord):
            record = ProductRecord.model_validate(record)
        return cls(
            id=record.id,
            sku=record.sku or "",
            name=record.name or "",
            price=_to_price(record.price),
            quantity=_to_quantity(record.quantity),
            restock_threshold=record.threshold,
            description=record.description or "",
            categories=frozenset(ref.name for ref in record.category or [] if ref.name),
            image=image_data_uri(record.image, record.image_extension),
        )

    def require_quantity(self) -> int:
        if self.quantity is None:
            raise InvalidQuantityError.for_id(self.id)
        return self.quantity

    @property
    def needs_restock(self) -> bool:
        if self.quantity is None or self.restock_threshold is None:
            return False
        return self.quantity <= self.restock_threshold

    def with_quantity(self, quantity: int) -> "ProductSnapshot":
        return self.model_copy(update={"quantity": quantity})

    def with_image(self, image: str) -> "ProductSnapshot":
        return self.model_copy(update={"image": image})


class CartLine(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    quantity: int = Field(ge=1)


class Category(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    description: str | None = None


class UserRole(str, Enum):
    MANAGER = "MANAGER"
    STAFF = "STAFF"
    CUSTOMER = "CUSTOMER"


class UserResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None

    @property
    def is_staff(self) -> bool:
        return (self.role or "").upper() in {UserRole.MANAGER.value, UserRole.STAFF.value}


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    token: str
    user: UserResponse | None = None
    trace_id: str | None = None


class SessionData(BaseModel):
    token: str
    user: UserResponse | None = None
    env_name: str | None = None


class Employee(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    first_name: str = ""
    middle_name: str | None = ""
    last_name: str = ""
    email: str = ""
    role: int | str | None = 0
    hourly_rate: Decimal | float | str | None = 0
    created_at: str | None = None
    updated_at: str | None = None
    deleted_at: str | None = None
    is_deleted: int | bool | None = 0


class EmployeeCreate(BaseModel):
    first_name: str
    middle_name: str | None = None
    last_name: str
    email: str
    password: str
    role: int | str | None = None
    hourly_rate: Decimal | float | str | None = None


class EmployeeUpdate(BaseModel):
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    role: int | str | None = None
    hourly_rate: Decimal | float | str | None = None


class CustomerReportRow(BaseModel):
    model_config = ConfigDict(extra="allow")

    customer_id: int
    customer_email: str = ""
    customer_order_count: int = 0
    customer_order_total_origin: float = 0.0
    customer_order_total_subscription: float = 0.0
    customer_order_total_coupon: float = 0.0
    customer_order_total_shipping: float = 0.0
    customer_order_total_sale_tax: float = 0.0
    customer_order_total_final: float = 0.0
