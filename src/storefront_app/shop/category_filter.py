from __future__ import annotations

import logging
from typing import Iterable

from storefront_sdk import ApiSession
from storefront_sdk.exceptions import ApiError
from storefront_sdk.models import Category

from .catalog_cache import CatalogCache, ErrorChannel

logger = logging.getLogger(__name__)


class CategoryFilter:
    """Active category selection; every change refetches the catalog."""

    def __init__(self, catalog: CatalogCache, session: ApiSession, *, on_error: ErrorChannel | None = None) -> None:
        self.catalog = catalog
        self.session = session
        self.on_error = on_error
        self.selection: frozenset[int] = frozenset()
        self.categories: list[Category] = []
        self.categories_loaded = False

    @property
    def available_categories(self) -> list[Category]:
        return list(self.categories)

    def set_selection(self, category_ids: Iterable[int]) -> bool:
        self.selection = frozenset(int(value) for value in category_ids)
        logger.info("category_selection_changed", extra={"category_ids": sorted(self.selection)})
        return self.catalog.fetch(self.selection)

    def toggle(self, category_id: int) -> bool:
        if category_id in self.selection:
            return self.set_selection(self.selection - {category_id})
        return self.set_selection(self.selection | {category_id})

    def load_categories(self) -> list[Category]:
        try:
            self.categories = self.session.categories_client().list_categories()
        except ApiError as exc:
            logger.warning("categories_fetch_failed", extra={"code": exc.code})
            if self.on_error:
                self.on_error(exc, "fetch_categories")
        self.categories_loaded = True
        return self.categories
