"""Integration tests for the Shop Orders API endpoints via TestClient."""

import re

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from shoporders.api import ROUTERS, register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def catalogue(client):
    """V1 (min 2, max 10, stock 5, price 100) of P1 (price 90)."""
    product = client.post("/products", json={"title": "Classic Tee", "price": 90.0})
    assert product.status_code == 201
    product_id = product.json()["productId"]

    variant = client.post(
        "/product-variants",
        json={
            "product": product_id,
            "title": "Large / Blue",
            "price": 100.0,
            "minSellingQuantity": 2,
            "maxSellingQuantity": 10,
            "availableStock": 5,
        },
    )
    assert variant.status_code == 201
    return {"product": product_id, "variant": variant.json()["productVariantId"]}


@pytest.fixture()
def shop(client):
    response = client.post("/shops", json={"name": "Corner Store"})
    assert response.status_code == 201
    return response.json()


def _error_ids(response):
    return [message["id"] for entry in response.json()["message"] for message in entry["messages"]]


class TestCreateOrderEndpoint:
    def test_create_order(self, client, shop, catalogue):
        response = client.post(
            "/orders",
            json={
                "shop": shop["shopId"],
                "note": "Rush",
                "orderLines": [
                    {"index": 0, "productVariant": catalogue["variant"], "quantity": 2},
                    {"index": 1, "productVariant": catalogue["variant"], "quantity": 3},
                ],
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["currentStatus"] == "PLACED"
        assert body["paymentStatus"] == "PENDING"
        assert re.match(r"^OD\d{4,6}$", body["number"])
        assert [line["index"] for line in body["orderLines"]] == [0, 1]
        assert body["orderLines"][0]["unitPrice"] == 100.0
        assert body["orderLines"][0]["productPrice"] == 90.0
        assert body["orderLines"][0]["productVariantAttributes"] == {}
        assert body["orderLines"][0]["appliedPriceRules"] == []

    def test_rejected_line_returns_error_payload(self, client, shop, catalogue):
        response = client.post(
            "/orders",
            json={
                "shop": shop["shopId"],
                "orderLines": [{"productVariant": catalogue["variant"], "quantity": 6}],
            },
        )

        assert response.status_code == 400
        body = response.json()
        assert body["statusCode"] == 400
        assert body["error"] == "Bad Request"
        assert body["message"] == [
            {
                "messages": [
                    {
                        "id": "order.create.error.quantity-more-than-available-stock",
                        "message": "Only 5 product quantity is currently available.",
                        "field": "quantity",
                    }
                ]
            }
        ]

    def test_unknown_shop(self, client, catalogue):
        response = client.post("/orders", json={"shop": "missing", "orderLines": []})
        assert response.status_code == 422
        assert _error_ids(response) == ["order.create.error.shop-not-found"]

    def test_get_order(self, client, shop):
        response = client.get(f"/orders/{shop['cartId']}")
        assert response.status_code == 200
        assert response.json()["currentStatus"] == "IN_CART"
        assert response.json()["number"] is None

    def test_get_unknown_order(self, client):
        response = client.get("/orders/missing")
        assert response.status_code == 404
        assert _error_ids(response) == ["order.find.error.order-not-found"]


class TestOrderLineEndpoints:
    def test_create_order_line(self, client, shop, catalogue):
        response = client.post(
            "/order-lines",
            json={"order": shop["cartId"], "productVariant": catalogue["variant"], "quantity": 3},
        )

        assert response.status_code == 201
        line = response.json()["orderLine"]
        assert line["order"] == shop["cartId"]
        assert line["index"] == 0
        assert line["quantity"] == 3
        assert line["productTitle"] == "Classic Tee"
        assert line["productVariantTitle"] == "Large / Blue"

    def test_below_minimum(self, client, shop, catalogue):
        response = client.post(
            "/order-lines",
            json={"order": shop["cartId"], "productVariant": catalogue["variant"], "quantity": 1},
        )
        assert response.status_code == 400
        assert _error_ids(response) == ["order-line.create.error.quantity-less-than-min-selling-quantity"]

    def test_unknown_variant(self, client, shop):
        response = client.post(
            "/order-lines",
            json={"order": shop["cartId"], "productVariant": "missing", "quantity": 1},
        )
        assert response.status_code == 404
        assert _error_ids(response) == ["order-line.create.error.product-variant-not-found"]

    def test_update_order_line(self, client, shop, catalogue):
        created = client.post(
            "/order-lines",
            json={"order": shop["cartId"], "productVariant": catalogue["variant"], "quantity": 2},
        ).json()["orderLine"]
        client.put(f"/product-variants/{catalogue['variant']}/price", json={"price": 110.0})

        response = client.put(f"/order-lines/{created['id']}", json={"quantity": 4})

        assert response.status_code == 200
        line = response.json()["orderLine"]
        assert line["quantity"] == 4
        assert line["unitPrice"] == 110.0

    def test_update_unknown_line(self, client):
        response = client.put("/order-lines/missing", json={"quantity": 4})
        assert response.status_code == 404
        assert _error_ids(response) == ["order-line.update.error.order-line-not-found"]


class TestPlaceOrderEndpoint:
    def test_place_rotates_cart(self, client, shop, catalogue):
        client.post(
            "/order-lines",
            json={"order": shop["cartId"], "productVariant": catalogue["variant"], "quantity": 2},
        )

        response = client.post(f"/orders/{shop['cartId']}/place", json={"note": "Leave at door"})

        assert response.status_code == 200
        body = response.json()
        assert body["currentStatus"] == "PLACED"
        assert body["note"] == "Leave at door"
        assert len(body["orderLines"]) == 1

        cart = client.get(f"/shops/{shop['shopId']}/cart")
        assert cart.status_code == 200
        assert cart.json()["id"] != shop["cartId"]
        assert cart.json()["items"] == []

    def test_place_without_body(self, client, shop):
        response = client.post(f"/orders/{shop['cartId']}/place")
        assert response.status_code == 200
        assert response.json()["currentStatus"] == "PLACED"

    def test_place_twice(self, client, shop):
        client.post(f"/orders/{shop['cartId']}/place", json={})
        response = client.post(f"/orders/{shop['cartId']}/place", json={})
        assert response.status_code == 422
        assert _error_ids(response) == ["order.place.error.order-already-placed"]

    def test_place_unknown_order(self, client):
        response = client.post("/orders/missing/place", json={})
        assert response.status_code == 404
        assert _error_ids(response) == ["order.place.error.order-not-found"]


class TestShopEndpoints:
    def test_register_returns_cart(self, client, shop):
        assert shop["shopId"]
        assert shop["cartId"]

    def test_get_cart(self, client, shop):
        response = client.get(f"/shops/{shop['shopId']}/cart")
        assert response.status_code == 200
        assert response.json() == {"id": shop["cartId"], "note": None, "items": []}

    def test_open_cart_is_idempotent(self, client, shop):
        response = client.post(f"/shops/{shop['shopId']}/cart")
        assert response.status_code == 200
        assert response.json()["id"] == shop["cartId"]

    def test_unknown_shop_cart(self, client):
        response = client.get("/shops/missing/cart")
        assert response.status_code == 422
        assert _error_ids(response) == ["shop.cart.error.shop-not-found"]


class TestCatalogueEndpoints:
    def test_set_stock(self, client, catalogue):
        response = client.put(f"/product-variants/{catalogue['variant']}/stock", json={"availableStock": 50})
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_negative_stock_rejected_by_schema(self, client, catalogue):
        response = client.put(f"/product-variants/{catalogue['variant']}/stock", json={"availableStock": -1})
        assert response.status_code == 422

    def test_change_product_price(self, client, catalogue):
        response = client.put(f"/products/{catalogue['product']}/price", json={"price": 80.0})
        assert response.status_code == 200
