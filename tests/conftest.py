from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from storefront_sdk import ApiSession, AuthStore, CartStore, ClientConfig

BASE_URL = "https://api.example.com"


@pytest.fixture(autouse=True)
def _set_api_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOREFRONT_API_BASE_URL", BASE_URL)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, retries=0, retry_backoff_seconds=0)


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    return tmp_path / "store"


@pytest.fixture
def session(config: ClientConfig, store_dir: Path) -> ApiSession:
    return ApiSession(
        config,
        auth_store=AuthStore(base_dir=store_dir),
        cart_store=CartStore(base_dir=store_dir),
    )


def product_payload(product_id: int, *, quantity: Any = 10, price: Any = "10.00", **extra: Any) -> dict[str, Any]:
    payload = {
        "id": product_id,
        "sku": f"SKU-{product_id}",
        "name": f"Product {product_id}",
        "price": price,
        "threshold": 2,
        "quantity": quantity,
        "description": "",
        "category": [{"id": 1, "name": "Anime"}],
        "image": None,
        "image_extension": None,
    }
    payload.update(extra)
    return payload


def rows_envelope(*products: dict[str, Any]) -> dict[str, Any]:
    return {"data": {"rows": list(products)}}


@pytest.fixture
def make_product():
    return product_payload


@pytest.fixture
def envelope():
    return rows_envelope
