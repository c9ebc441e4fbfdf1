from __future__ import annotations

import logging
import math
from typing import Any

from storefront_sdk.models import ProductSnapshot

from ..shop.context import ShopContext
from .shared.error_presenter import ErrorPresenter, PresentedError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "quantity", "price", "description")
NUMERIC_FIELDS = frozenset({"price", "quantity"})


def coerce_number(value: Any) -> float | int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


class InventoryEditor:
    """Per-product edit buffers for the admin product table."""

    def __init__(self, shop: ShopContext, presenter: ErrorPresenter | None = None) -> None:
        self.shop = shop
        self.presenter = presenter or ErrorPresenter()
        self.buffers: dict[int, dict[str, Any]] = {}
        self.last_error: PresentedError | None = None

    def reset(self) -> None:
        self.buffers = {product.id: self._seed(product) for product in self.shop.products()}

    def edit(self, product_id: int, field_name: str, value: Any) -> dict[str, Any]:
        if field_name not in EDITABLE_FIELDS:
            raise KeyError(field_name)
        buffer = self.buffers.get(product_id)
        if buffer is None:
            product = self.shop.catalog.require(product_id)
            buffer = self._seed(product)
        if field_name in NUMERIC_FIELDS:
            value = coerce_number(value)
        self.buffers[product_id] = {**buffer, field_name: value}
        return dict(self.buffers[product_id])

    def dirty(self, product_id: int) -> bool:
        product = self.shop.get_product(product_id)
        buffer = self.buffers.get(product_id)
        if product is None or buffer is None:
            return False
        return buffer != self._seed(product)

    def save(self, product_id: int) -> ProductSnapshot | None:
        buffer = self.buffers.get(product_id)
        if buffer is None:
            return None
        try:
            updated = self.shop.update_product(product_id, buffer)
        except Exception as exc:
            self.last_error = self.presenter.present(exc, action="save_product", allow_retry=True)
            logger.warning("inventory_save_failed", extra={"product_id": product_id, "code": self.last_error.code})
            return None
        self.last_error = None
        self.buffers[product_id] = self._seed(updated)
        return updated

    def rows(self) -> list[dict[str, Any]]:
        rows = []
        for product in self.shop.products():
            buffer = self.buffers.get(product.id) or self._seed(product)
            rows.append(
                {
                    "id": product.id,
                    **buffer,
                    "needs_restock": product.needs_restock,
                    "dirty": self.dirty(product.id),
                }
            )
        return rows

    @staticmethod
    def _seed(product: ProductSnapshot) -> dict[str, Any]:
        return {
            "name": product.name,
            "quantity": product.quantity if product.quantity is not None else 0,
            "price": float(product.price),
            "description": product.description,
        }
