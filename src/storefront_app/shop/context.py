from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, BinaryIO, Callable, Iterable, Mapping

from storefront_sdk import ApiSession
from storefront_sdk.exceptions import ApiError
from storefront_sdk.models import CartLine, Category, ProductSnapshot

from ..logging_setup import log_json
from ..ui.shared.notification_center import NotificationCenter
from ..ui.shared.view_state import ViewState, resolve_state
from .cart import CartReconciler
from .catalog_cache import CatalogCache
from .category_filter import CategoryFilter

logger = logging.getLogger(__name__)


@dataclass
class ShopContext:
    """Storefront data layer: catalog, cart and category filter wired together."""

    session: ApiSession
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    discard_stale_responses: bool = True

    def __post_init__(self) -> None:
        self.catalog = CatalogCache(
            self.session,
            on_error=self._report,
            discard_stale_responses=self.discard_stale_responses,
        )
        self.cart = CartReconciler(self.catalog, self.session.cart_store)
        self.category_filter = CategoryFilter(self.catalog, self.session, on_error=self._report)

    def init(self) -> None:
        self.cart.load()
        self.catalog.fetch(self.category_filter.selection)

    # cart

    @property
    def cart_loaded(self) -> bool:
        return self.cart.ready

    def cart_items(self) -> list[CartLine]:
        return self.cart.lines()

    def cart_amount(self) -> Decimal:
        return self.cart.cart_amount()

    def cart_quantity(self) -> int:
        return self.cart.cart_quantity()

    def add_to_cart(self, product_id: int | str, quantity: int = 1) -> bool:
        return self.cart.add_to_cart(product_id, quantity)

    def update_quantity(self, product_id: int | str, delta: int) -> bool:
        return self.cart.update_quantity(product_id, delta)

    def set_quantity(self, product_id: int | str, quantity: int) -> bool:
        return self.cart.set_quantity(product_id, quantity)

    def remove_item(self, product_id: int | str) -> bool:
        return self.cart.remove_item(product_id)

    def clear_cart(self) -> None:
        self.cart.clear_cart()

    # products

    @property
    def products_loaded(self) -> bool:
        return self.catalog.loaded

    def products(self) -> list[ProductSnapshot]:
        return list(self.catalog.all())

    def get_product(self, product_id: int | str) -> ProductSnapshot | None:
        return self.catalog.lookup(product_id)

    def catalog_view_state(self) -> ViewState:
        error = self.catalog.last_error.message if self.catalog.last_error else None
        return resolve_state(loaded=self.catalog.loaded, error=error, has_data=len(self.catalog) > 0)

    def add_product(self, product_data: Mapping[str, Any]) -> ProductSnapshot:
        return self._audited("create_product", None, lambda: self.catalog.create_product(product_data))

    def update_product(self, product_id: int, product_data: Mapping[str, Any]) -> ProductSnapshot:
        return self._audited(
            "update_product", product_id, lambda: self.catalog.update_product(product_id, product_data)
        )

    def upload_product_image(
        self,
        product_id: int,
        file: BinaryIO | bytes | None,
        *,
        filename: str = "image",
        content_type: str | None = None,
    ) -> ProductSnapshot | None:
        return self._audited(
            "upload_image",
            product_id,
            lambda: self.catalog.upload_image(product_id, file, filename=filename, content_type=content_type),
        )

    def delete_product(self, product_id: int) -> None:
        self._audited("delete_product", product_id, lambda: self.catalog.delete_product(product_id))

    def restock_product(self, product_id: int, quantity: int) -> ProductSnapshot | None:
        return self._audited(
            "restock_product", product_id, lambda: self.catalog.restock_product(product_id, quantity)
        )

    # categories

    @property
    def categories(self) -> list[Category]:
        return self.category_filter.categories

    @property
    def categories_loaded(self) -> bool:
        return self.category_filter.categories_loaded

    def load_categories(self) -> list[Category]:
        return self.category_filter.load_categories()

    def update_selected_categories(self, category_ids: Iterable[int]) -> bool:
        return self.category_filter.set_selection(category_ids)

    def _audited(self, action: str, product_id: int | None, call: Callable[[], Any]) -> Any:
        try:
            result = call()
        except ApiError as exc:
            log_json(
                logger,
                {"module": "catalog", "action": action, "product_id": product_id, "outcome": "error", "code": exc.code},
            )
            raise
        log_json(logger, {"module": "catalog", "action": action, "product_id": product_id, "outcome": "success"})
        return result

    def _report(self, exc: ApiError, action: str) -> None:
        self.notifications.report_error(exc, action)
