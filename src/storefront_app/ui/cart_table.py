from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..shop.context import ShopContext


@dataclass
class CartTable:
    shop: ShopContext

    def rows(self) -> list[dict[str, Any]]:
        rows = []
        for line in self.shop.cart_items():
            product = self.shop.get_product(line.id)
            unit_price = product.price if product else Decimal("0")
            rows.append(
                {
                    "id": line.id,
                    "name": product.name if product else None,
                    "image": product.image if product else "",
                    "qty": line.quantity,
                    "unit_price": unit_price,
                    "line_total": unit_price * line.quantity,
                    "available": product.quantity if product else None,
                    "resolved": product is not None,
                }
            )
        return rows

    def render(self) -> dict[str, Any]:
        rows = self.rows()
        return {
            "count": len(rows),
            "quantity": self.shop.cart_quantity(),
            "amount": self.shop.cart_amount(),
            "rows": rows,
        }
