from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Number
from typing import Any

from storefront_sdk.models import CustomerReportRow

SORT_OPTIONS: tuple[tuple[str, str], ...] = (
    ("customer_order_count", "Order Count"),
    ("customer_order_total_origin", "Subtotal"),
    ("customer_order_total_subscription", "Subscription Saving"),
    ("customer_order_total_coupon", "Coupon Saving"),
    ("customer_order_total_shipping", "Shipping"),
    ("customer_order_total_sale_tax", "Sale Tax"),
    ("customer_order_total_final", "Total Final"),
)

COLUMNS = (
    "ID",
    "Email",
    "Order Count",
    "Subtotal",
    "Subscription Saving",
    "Coupon Saving",
    "Shipping",
    "Sale Tax",
    "Total Final",
)

# savings are shown as deductions
_SAVINGS = {"customer_order_total_subscription", "customer_order_total_coupon"}
_MONEY = (
    "customer_order_total_origin",
    "customer_order_total_subscription",
    "customer_order_total_coupon",
    "customer_order_total_shipping",
    "customer_order_total_sale_tax",
    "customer_order_total_final",
)


def format_money(value: float, *, deduction: bool = False) -> str:
    text = f"${value:.2f}"
    return f"-{text}" if deduction else text


def sort_keys() -> list[str]:
    return [f"{attr}-{order}" for attr, _ in SORT_OPTIONS for order in ("asc", "desc")]


@dataclass
class CustomerReportView:
    rows: list[CustomerReportRow] = field(default_factory=list)
    email_search: str = ""
    sort_key: str = ""

    def filtered(self) -> list[CustomerReportRow]:
        needle = self.email_search.strip().lower()
        rows = [row for row in self.rows if not needle or needle in row.customer_email.lower()]
        if not self.sort_key.strip():
            return rows
        attr, _, order = self.sort_key.partition("-")
        if not rows or not all(isinstance(getattr(row, attr, None), Number) for row in rows):
            return rows
        return sorted(rows, key=lambda row: getattr(row, attr), reverse=order == "desc")

    def table_rows(self) -> list[dict[str, Any]]:
        rendered = []
        for row in self.filtered():
            item: dict[str, Any] = {
                "customer_id": row.customer_id,
                "customer_email": row.customer_email,
                "customer_order_count": row.customer_order_count,
            }
            for attr in _MONEY:
                item[attr] = format_money(getattr(row, attr), deduction=attr in _SAVINGS)
            rendered.append(item)
        return rendered

    def chart(self) -> dict[str, Any]:
        rows = self.filtered()
        return {
            "labels": [row.customer_email.split("@")[0] for row in rows],
            "datasets": [
                {
                    "label": "Subscription Saving",
                    "data": [row.customer_order_total_subscription for row in rows],
                },
                {
                    "label": "Total Final",
                    "data": [row.customer_order_total_final for row in rows],
                },
            ],
        }

    def render(self) -> dict[str, Any]:
        rows = self.table_rows()
        return {
            "columns": list(COLUMNS),
            "rows": rows,
            "count": len(rows),
            "empty_message": None if rows else "No Data",
            "chart": self.chart(),
        }
