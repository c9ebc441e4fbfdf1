from __future__ import annotations

from dataclasses import dataclass
from typing import Any, BinaryIO, Iterable, Mapping

from ..http_client import unwrap_data, unwrap_rows
from ..models import ProductRecord
from .base import BaseClient

PRODUCT_PATH = "/product"
CATALOG_MODULE = "catalog"


def build_category_params(category_ids: Iterable[int] | None) -> dict[str, str] | None:
    ids = sorted({int(value) for value in category_ids or ()})
    if not ids:
        return None
    return {"category_id": f"[{','.join(str(value) for value in ids)}]"}


def _record(payload: Any, operation: str) -> ProductRecord:
    data = unwrap_data(payload)
    if not isinstance(data, dict):
        raise ValueError(f"Expected {operation} response to be a JSON object")
    return ProductRecord.model_validate(data)


@dataclass
class CatalogClient(BaseClient):
    def list_products(
        self,
        category_ids: Iterable[int] | None = None,
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> list[ProductRecord]:
        payload = self._request(
            "GET",
            PRODUCT_PATH,
            params=build_category_params(category_ids),
            use_get_cache=False,
            module=CATALOG_MODULE,
            operation="list_products",
            context_key=context_key,
            context_version=context_version,
        )
        return [ProductRecord.model_validate(row) for row in unwrap_rows(payload)]

    def create_product(self, product_data: Mapping[str, Any]) -> ProductRecord:
        payload = self._request(
            "POST",
            PRODUCT_PATH,
            json_body=dict(product_data),
            module=CATALOG_MODULE,
            operation="create_product",
            invalidate_paths=[PRODUCT_PATH],
        )
        return _record(payload, "create product")

    def update_product(self, product_id: int, product_data: Mapping[str, Any]) -> ProductRecord:
        payload = self._request(
            "PATCH",
            f"{PRODUCT_PATH}/{product_id}",
            json_body=dict(product_data),
            module=CATALOG_MODULE,
            operation="update_product",
            invalidate_paths=[PRODUCT_PATH],
        )
        return _record(payload, "update product")

    def upload_image(
        self,
        product_id: int,
        file: BinaryIO | bytes,
        *,
        filename: str = "image",
        content_type: str | None = None,
    ) -> ProductRecord:
        part: tuple[Any, ...] = (filename, file, content_type) if content_type else (filename, file)
        payload = self._request(
            "PATCH",
            f"{PRODUCT_PATH}/{product_id}/image",
            files={"image": part},
            module=CATALOG_MODULE,
            operation="upload_image",
            invalidate_paths=[PRODUCT_PATH],
        )
        return _record(payload, "upload image")

    def delete_product(self, product_id: int) -> None:
        self._request(
            "DELETE",
            f"{PRODUCT_PATH}/{product_id}",
            module=CATALOG_MODULE,
            operation="delete_product",
            invalidate_paths=[PRODUCT_PATH],
        )

    def restock_product(self, product_id: int, quantity: int) -> None:
        self._request(
            "PATCH",
            f"{PRODUCT_PATH}/{product_id}/restock",
            json_body={"quantity": quantity},
            module=CATALOG_MODULE,
            operation="restock_product",
            invalidate_paths=[PRODUCT_PATH],
        )
