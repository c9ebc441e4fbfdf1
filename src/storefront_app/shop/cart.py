"""Shopping cart kept consistent with cached stock and the persisted cart.

Invariant: every line's quantity is at least 1 and never above the cached
available quantity of its product as of the last reconciliation. Requests
that cannot be honoured (unknown product, product without stock data) are
silent no-ops so the cart is always valid.

The reconciler does not write to the :class:`CartStore` until the persisted
cart has been read once, otherwise an empty default could clobber it.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from storefront_sdk.cart_store import CartStore
from storefront_sdk.exceptions import InvalidQuantityError
from storefront_sdk.models import CartLine

from .catalog_cache import CatalogCache, coerce_product_id

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class CartState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class CartReconciler:
    def __init__(self, catalog: CatalogCache, store: CartStore) -> None:
        self.catalog = catalog
        self.store = store
        self.state = CartState.UNINITIALIZED
        self._lines: list[CartLine] = []
        catalog.subscribe(self.reconcile)

    @property
    def ready(self) -> bool:
        return self.state is CartState.READY

    def load(self) -> bool:
        """Restore the persisted cart. Only the first call has any effect."""
        if self.ready:
            return False
        self._lines = self.store.read()
        self.state = CartState.READY
        logger.info("cart_loaded", extra={"lines": len(self._lines)})
        if self.catalog.loaded:
            self.reconcile()
        return True

    # queries

    def lines(self) -> list[CartLine]:
        return [line.model_copy() for line in self._lines]

    def line(self, product_id: int | str) -> CartLine | None:
        found = self._find(coerce_product_id(product_id))
        return found.model_copy() if found is not None else None

    def cart_amount(self) -> Decimal:
        total = Decimal("0")
        for line in self._lines:
            product = self.catalog.lookup(line.id)
            if product is not None:
                total += product.price * line.quantity
        return total.quantize(CENTS, rounding=ROUND_HALF_UP)

    def cart_quantity(self) -> int:
        if not self.ready:
            return 0
        return sum(line.quantity for line in self._lines)

    # commands

    def add_to_cart(self, product_id: int | str, quantity: int = 1) -> bool:
        if quantity < 1:
            return False
        stock = self._stock(product_id)
        if stock is None:
            return False
        product_id, available = stock
        existing = self._find(product_id)
        if existing is not None:
            self._apply_quantity(product_id, min(existing.quantity + quantity, available))
        else:
            limited = min(quantity, available)
            if limited <= 0:
                return False
            self._lines = [*self._lines, CartLine(id=product_id, quantity=limited)]
        self._persist()
        return True

    def update_quantity(self, product_id: int | str, delta: int) -> bool:
        stock = self._stock(product_id)
        if stock is None:
            return False
        product_id, available = stock
        existing = self._find(product_id)
        if existing is None:
            return False
        self._apply_quantity(product_id, min(max(1, existing.quantity + delta), available))
        self._persist()
        return True

    def set_quantity(self, product_id: int | str, quantity: int) -> bool:
        stock = self._stock(product_id)
        if stock is None:
            return False
        product_id, available = stock
        if self._find(product_id) is None:
            return False
        self._apply_quantity(product_id, min(max(1, quantity), available))
        self._persist()
        return True

    def remove_item(self, product_id: int | str) -> bool:
        product_id = coerce_product_id(product_id)
        if self._find(product_id) is None:
            return False
        self._lines = [line for line in self._lines if line.id != product_id]
        self._persist()
        return True

    def clear_cart(self) -> None:
        self._lines = []
        self._persist()

    def reconcile(self) -> bool:
        """Clamp every resolvable line to the stock now in the catalog cache."""
        changed = False
        reconciled: list[CartLine] = []
        for line in self._lines:
            product = self.catalog.lookup(line.id)
            if product is None or product.quantity is None:
                # stale or unknown entries are kept until the catalog can vouch for them
                reconciled.append(line)
                continue
            limited = min(line.quantity, product.quantity)
            if limited < 1:
                changed = True
                continue
            if limited != line.quantity:
                changed = True
                line = CartLine(id=line.id, quantity=limited)
            reconciled.append(line)
        if changed:
            self._lines = reconciled
            logger.info("cart_reconciled", extra={"lines": len(reconciled)})
            self._persist()
        return changed

    # helpers

    def _stock(self, product_id: int | str) -> tuple[int, int] | None:
        product = self.catalog.lookup(product_id)
        if product is None:
            return None
        try:
            return product.id, product.require_quantity()
        except InvalidQuantityError:
            logger.debug("cart_product_without_quantity", extra={"product_id": product.id})
            return None

    def _find(self, product_id: int | None) -> CartLine | None:
        for line in self._lines:
            if line.id == product_id:
                return line
        return None

    def _apply_quantity(self, product_id: int, quantity: int) -> None:
        # a line whose stock vanished is dropped rather than kept at zero
        if quantity < 1:
            self._lines = [line for line in self._lines if line.id != product_id]
            return
        self._lines = [
            CartLine(id=line.id, quantity=quantity) if line.id == product_id else line for line in self._lines
        ]

    def _persist(self) -> None:
        if not self.ready:
            return
        if not self.store.write(self._lines):
            logger.warning("cart_persist_skipped", extra={"lines": len(self._lines)})
