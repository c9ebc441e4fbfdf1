from .cart import CartReconciler, CartState
from .catalog_cache import CATALOG_CONTEXT, CatalogCache
from .category_filter import CategoryFilter
from .context import ShopContext

__all__ = [
    "CATALOG_CONTEXT",
    "CartReconciler",
    "CartState",
    "CatalogCache",
    "CategoryFilter",
    "ShopContext",
]
