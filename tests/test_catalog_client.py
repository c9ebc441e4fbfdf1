from __future__ import annotations

import json

import pytest
import responses
from responses import matchers

from storefront_sdk import ApiSession
from storefront_sdk.clients.catalog_client import build_category_params
from storefront_sdk.exceptions import AuthError

BASE = "https://api.example.com"


def test_build_category_params_sorts_and_dedupes() -> None:
    assert build_category_params([3, 1, 3]) == {"category_id": "[1,3]"}
    assert build_category_params([]) is None
    assert build_category_params(None) is None


@responses.activate
def test_list_products_sends_category_filter_and_raw_token(session: ApiSession, make_product, envelope) -> None:
    session.token = "token-abc"
    responses.add(
        responses.GET,
        f"{BASE}/product",
        json=envelope(make_product(1), make_product(2)),
        status=200,
        match=[matchers.query_param_matcher({"category_id": "[1,2]"})],
    )

    records = session.catalog_client().list_products([2, 1])

    assert [record.id for record in records] == [1, 2]
    assert responses.calls[0].request.headers["Authorization"] == "token-abc"


@responses.activate
def test_list_products_without_filter_sends_no_params(session: ApiSession, make_product, envelope) -> None:
    responses.add(
        responses.GET,
        f"{BASE}/product",
        json=envelope(make_product(1)),
        status=200,
        match=[matchers.query_param_matcher({})],
    )

    records = session.catalog_client().list_products()

    assert len(records) == 1
    assert "Authorization" not in responses.calls[0].request.headers


@responses.activate
def test_list_products_is_never_served_from_cache(session: ApiSession, make_product, envelope) -> None:
    responses.add(responses.GET, f"{BASE}/product", json=envelope(make_product(1)), status=200)
    responses.add(responses.GET, f"{BASE}/product", json=envelope(make_product(1), make_product(2)), status=200)

    client = session.catalog_client()
    client.list_products()
    second = client.list_products()

    assert len(second) == 2
    assert len(responses.calls) == 2


@responses.activate
def test_create_and_update_product(session: ApiSession, make_product) -> None:
    responses.add(
        responses.POST,
        f"{BASE}/product",
        json={"data": make_product(7, name="Plush")},
        status=201,
        match=[matchers.json_params_matcher({"name": "Plush", "price": 5})],
    )
    responses.add(
        responses.PATCH,
        f"{BASE}/product/7",
        json={"data": make_product(7, name="Plush XL")},
        status=200,
        match=[matchers.json_params_matcher({"name": "Plush XL"})],
    )

    client = session.catalog_client()
    created = client.create_product({"name": "Plush", "price": 5})
    updated = client.update_product(7, {"name": "Plush XL"})

    assert created.name == "Plush"
    assert updated.name == "Plush XL"


@responses.activate
def test_upload_image_uses_multipart_image_field(session: ApiSession, make_product) -> None:
    responses.add(
        responses.PATCH,
        f"{BASE}/product/7/image",
        json={"data": make_product(7, image="aGVsbG8=", image_extension="jpeg")},
        status=200,
    )

    record = session.catalog_client().upload_image(7, b"\x89PNG", filename="cat.png", content_type="image/png")

    request = responses.calls[0].request
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="image"; filename="cat.png"' in request.body
    assert record.image == "aGVsbG8="


@responses.activate
def test_restock_sends_quantity_delta(session: ApiSession) -> None:
    responses.add(responses.PATCH, f"{BASE}/product/4/restock", json={"data": None}, status=200)

    session.catalog_client().restock_product(4, 10)

    assert json.loads(responses.calls[0].request.body) == {"quantity": 10}


@responses.activate
def test_delete_product(session: ApiSession) -> None:
    responses.add(responses.DELETE, f"{BASE}/product/4", status=204)

    assert session.catalog_client().delete_product(4) is None
    assert responses.calls[0].request.method == "DELETE"


@responses.activate
def test_create_product_rejected_without_session(session: ApiSession) -> None:
    responses.add(responses.POST, f"{BASE}/product", json={"message": "Missing token"}, status=401)

    with pytest.raises(AuthError):
        session.catalog_client().create_product({"name": "x"})


@responses.activate
def test_categories_client_lists_rows(session: ApiSession) -> None:
    responses.add(
        responses.GET,
        f"{BASE}/category",
        json={"data": {"rows": [{"id": 1, "name": "Anime"}, {"id": 2, "name": "Animals"}]}},
        status=200,
    )

    categories = session.categories_client().list_categories()

    assert [category.name for category in categories] == ["Anime", "Animals"]
