from __future__ import annotations

from dataclasses import dataclass

from ..http_client import unwrap_rows
from ..models import Category
from .base import BaseClient


@dataclass
class CategoriesClient(BaseClient):
    def list_categories(self) -> list[Category]:
        payload = self._request("GET", "/category", module="categories", operation="list_categories")
        return [Category.model_validate(row) for row in unwrap_rows(payload)]
