"""In-memory mirror of the remote product catalog.

A fetch replaces every entry at once. Admin mutations touch only the single
affected entry, using the server's response, except restock: the API does not
return the new total, so the cached quantity is bumped locally and stays an
approximation until the next full fetch overrides it.

Fetch failures never escape :meth:`CatalogCache.fetch`. The cache keeps its
previous contents, flips ``loaded`` so screens stop waiting, and hands a
:class:`CatalogFetchError` to the error channel.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Callable, Iterable, Iterator, Mapping

from storefront_sdk import ApiSession
from storefront_sdk.exceptions import ApiError, CatalogFetchError, ProductNotFoundError
from storefront_sdk.models import ProductSnapshot

logger = logging.getLogger(__name__)

CATALOG_CONTEXT = "catalog"

ErrorChannel = Callable[[ApiError, str], Any]
ChangeListener = Callable[[], Any]


def coerce_product_id(value: int | str) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class CatalogCache:
    def __init__(
        self,
        session: ApiSession,
        *,
        on_error: ErrorChannel | None = None,
        discard_stale_responses: bool = True,
    ) -> None:
        self.session = session
        self.on_error = on_error
        self.discard_stale_responses = discard_stale_responses
        self.loaded = False
        self.last_error: CatalogFetchError | None = None
        self._products: dict[int, ProductSnapshot] = {}
        self._listeners: list[ChangeListener] = []

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return isinstance(product_id, (int, str)) and self.lookup(product_id) is not None

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    # queries

    def lookup(self, product_id: int | str) -> ProductSnapshot | None:
        key = coerce_product_id(product_id)
        if key is None:
            return None
        return self._products.get(key)

    def require(self, product_id: int | str) -> ProductSnapshot:
        product = self.lookup(product_id)
        if product is None:
            raise ProductNotFoundError.for_id(coerce_product_id(product_id) or 0)
        return product

    def all(self) -> Iterator[ProductSnapshot]:
        # entries are replaced copy-on-write, so iterating an old mapping stays safe
        return iter(self._products.values())

    # fetch

    def fetch(self, category_ids: Iterable[int] | None = None) -> bool:
        """Replace the cache with the products matching ``category_ids``.

        Returns ``True`` when the cache was rebuilt. A response that arrives
        after a newer fetch was started is dropped when
        ``discard_stale_responses`` is on.
        """
        ids = sorted({int(value) for value in category_ids or ()})
        self.loaded = False
        http = self.session.http
        context_key: str | None = None
        context_version: int | None = None
        if self.discard_stale_responses:
            context_key = CATALOG_CONTEXT
            context_version = http.switch_context(CATALOG_CONTEXT)
        try:
            records = self.session.catalog_client().list_products(
                ids,
                context_key=context_key,
                context_version=context_version,
            )
        except (ApiError, ValueError) as exc:
            # a newer fetch owns the cache, so this outcome is neither data nor an error
            if context_key and http.get_context_version(context_key) != context_version:
                logger.info("catalog_fetch_superseded", extra={"category_ids": ids, "reason": type(exc).__name__})
                return False
            self._fetch_failed(exc, ids)
            return False

        self._products = {record.id: ProductSnapshot.from_record(record) for record in records}
        self.loaded = True
        self.last_error = None
        logger.info("catalog_fetched", extra={"category_ids": ids, "count": len(self._products)})
        self._notify()
        return True

    def _fetch_failed(self, exc: Exception, category_ids: list[int]) -> None:
        error = CatalogFetchError.wrap(exc)
        self.last_error = error
        self.loaded = True
        logger.warning(
            "catalog_fetch_failed",
            extra={"category_ids": category_ids, "code": error.code, "trace_id": error.trace_id},
        )
        if self.on_error:
            self.on_error(error, "fetch_catalog")

    # mutators

    def create_product(self, product_data: Mapping[str, Any]) -> ProductSnapshot:
        record = self._call("create_product", lambda client: client.create_product(product_data))
        product = ProductSnapshot.from_record(record)
        self._replace({**self._products, product.id: product})
        return product

    def update_product(self, product_id: int, product_data: Mapping[str, Any]) -> ProductSnapshot:
        record = self._call("update_product", lambda client: client.update_product(product_id, product_data))
        product = ProductSnapshot.from_record(record)
        if product.id in self._products:
            self._replace({**self._products, product.id: product})
        return product

    def upload_image(
        self,
        product_id: int,
        file: BinaryIO | bytes | None,
        *,
        filename: str = "image",
        content_type: str | None = None,
    ) -> ProductSnapshot | None:
        if not file:
            return None
        record = self._call(
            "upload_image",
            lambda client: client.upload_image(product_id, file, filename=filename, content_type=content_type),
        )
        uploaded = ProductSnapshot.from_record(record)
        current = self._products.get(uploaded.id)
        # only the image changes; the rest of the cached entry is kept
        if current is not None:
            uploaded = current.with_image(uploaded.image)
            self._replace({**self._products, uploaded.id: uploaded})
        return uploaded

    def delete_product(self, product_id: int) -> None:
        self._call("delete_product", lambda client: client.delete_product(product_id))
        if product_id in self._products:
            self._replace({key: value for key, value in self._products.items() if key != product_id})

    def restock_product(self, product_id: int, quantity: int) -> ProductSnapshot | None:
        self._call("restock_product", lambda client: client.restock_product(product_id, quantity))
        current = self._products.get(product_id)
        if current is None or current.quantity is None:
            return current
        restocked = current.with_quantity(current.quantity + quantity)
        self._replace({**self._products, product_id: restocked})
        return restocked

    def _call(self, operation: str, call: Callable[[Any], Any]) -> Any:
        try:
            return call(self.session.catalog_client())
        except ApiError as exc:
            logger.warning(
                "catalog_mutation_failed",
                extra={"operation": operation, "code": exc.code, "trace_id": exc.trace_id},
            )
            raise

    def _replace(self, products: dict[int, ProductSnapshot]) -> None:
        self._products = products
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
