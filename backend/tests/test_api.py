"""Integration tests for the HTTP surface."""

import json
from decimal import Decimal

import pytest


CART_BODY = {
    "placed_date": "2024-01-01T12:00:00",
    "status": "PAID",
    "total_price": "50.00",
    "payment_method": "CREDIT_CARD",
    "payment_reference": "OLD123",
}


def _create(client, resource, body):
    response = client.post(f"/api/{resource}", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def _customer(client, **overrides):
    body = {"phone": "555-0100", "city": "Springfield", "country": "US"}
    body.update(overrides)
    return _create(client, "customer-details", body)


def _cart(client, customer_id=None, **overrides):
    body = dict(CART_BODY, customer_details_id=customer_id or _customer(client)["id"])
    body.update(overrides)
    return _create(client, "shopping-carts", body)


def _order(client, cart_id):
    product = _create(client, "products", {"name": "AAAAAAAAAA", "price": "10.00", "product_size": "M"})
    return _create(
        client,
        "product-orders",
        {"quantity": 2, "total_price": "20.00", "product_id": product["id"], "cart_id": cart_id},
    )


class TestCreateEndpoint:
    def test_create_category(self, client):
        response = client.post("/api/categories", json={"name": "AAAAAAAAAA", "description": "AAAAAAAAAA"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] is not None
        assert data["version"] == 1
        assert response.headers["Location"] == f"/api/categories/{data['id']}"
        assert response.headers["X-storefrontApp-alert"] == "storefrontApp.productCategory.created"
        assert response.headers["X-storefrontApp-params"] == str(data["id"])

    def test_create_with_existing_id(self, client):
        response = client.post("/api/categories", json={"id": 1, "name": "AAAAAAAAAA"})

        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "idexists"

    def test_create_with_missing_required_fields(self, client):
        response = client.post("/api/shopping-carts", json={"payment_reference": "X"})

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["reason"] == "required"
        assert detail["missing_fields"] == [
            "placed_date",
            "status",
            "total_price",
            "payment_method",
            "customer_details",
        ]

    def test_create_cart_renders_customer_summary(self, client):
        customer = _customer(client)

        cart = _cart(client, customer["id"])

        assert cart["customer_details"] == {"id": customer["id"], "phone": "555-0100"}
        assert cart["status"] == "PAID"
        assert Decimal(cart["total_price"]) == Decimal("50.00")

    def test_invalid_body_is_a_bad_request(self, client):
        response = client.post(
            "/api/product-orders",
            json={"quantity": -1, "total_price": "1.00", "product_id": 1, "cart_id": 1},
        )

        assert response.status_code == 400

    def test_unknown_enum_value_is_a_bad_request(self, client):
        response = client.post("/api/shopping-carts", json=dict(CART_BODY, status="SHIPPED"))

        assert response.status_code == 400


class TestUpdateEndpoints:
    def test_put_replaces_every_field(self, client):
        cart = _cart(client)
        body = dict(CART_BODY, id=cart["id"], status="COMPLETED", customer_details_id=cart["customer_details"]["id"])
        del body["payment_reference"]

        response = client.put(f"/api/shopping-carts/{cart['id']}", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "COMPLETED"
        assert data["payment_reference"] is None
        assert data["version"] == 2
        assert response.headers["X-storefrontApp-alert"] == "storefrontApp.shoppingCart.updated"

    def test_put_without_id(self, client):
        category = _create(client, "categories", {"name": "AAAAAAAAAA"})

        response = client.put(f"/api/categories/{category['id']}", json={"name": "BBBBBBBBBB"})

        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "idnull"

    def test_put_with_mismatched_id(self, client):
        category = _create(client, "categories", {"name": "AAAAAAAAAA"})

        response = client.put(
            f"/api/categories/{category['id']}",
            json={"id": category["id"] + 1, "name": "BBBBBBBBBB"},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "idinvalid"

    def test_put_unknown_id_is_a_bad_request(self, client):
        response = client.put("/api/categories/999", json={"id": 999, "name": "BBBBBBBBBB"})

        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "idnotfound"

    def test_put_with_stale_version(self, client):
        category = _create(client, "categories", {"name": "AAAAAAAAAA"})

        response = client.put(
            f"/api/categories/{category['id']}",
            json={"id": category["id"], "version": 5, "name": "BBBBBBBBBB"},
        )

        assert response.status_code == 409

    def test_patch_keeps_untouched_fields(self, client):
        cart = _cart(client)

        response = client.patch(
            f"/api/shopping-carts/{cart['id']}",
            json={"id": cart["id"], "payment_reference": "NEW456"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["payment_reference"] == "NEW456"
        assert data["status"] == "PAID"
        assert Decimal(data["total_price"]) == Decimal("50.00")

    def test_patch_accepts_merge_patch_media_type(self, client):
        cart = _cart(client)

        response = client.patch(
            f"/api/shopping-carts/{cart['id']}",
            content=json.dumps({"id": cart["id"], "payment_reference": None}),
            headers={"Content-Type": "application/merge-patch+json"},
        )

        assert response.status_code == 200
        assert response.json()["payment_reference"] is None

    def test_patch_unknown_id_is_not_found(self, client):
        response = client.patch("/api/categories/999", json={"id": 999, "name": "BBBBBBBBBB"})

        assert response.status_code == 404

    def test_patch_without_id(self, client):
        category = _create(client, "categories", {"name": "AAAAAAAAAA"})

        response = client.patch(f"/api/categories/{category['id']}", json={"name": "BBBBBBBBBB"})

        assert response.status_code == 400

    def test_patch_with_unknown_reference(self, client):
        cart = _cart(client)

        response = client.patch(
            f"/api/shopping-carts/{cart['id']}",
            json={"id": cart["id"], "customer_details_id": 12345},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "customer_details_id"


class TestReadEndpoints:
    def test_list_with_pagination_headers(self, client):
        for name in ("C", "A", "B"):
            _create(client, "categories", {"name": name})

        response = client.get("/api/categories", params={"page": 0, "size": 2, "sort": "name,desc"})

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["C", "B"]
        assert response.headers["X-Total-Count"] == "3"
        assert 'rel="next"' in response.headers["Link"]
        assert 'rel="last"' in response.headers["Link"]
        assert 'rel="prev"' not in response.headers["Link"]

    @pytest.mark.parametrize("eagerload", ["true", "false"])
    def test_eagerload_does_not_change_the_result(self, client, eagerload):
        cart = _cart(client)
        _order(client, cart["id"])

        response = client.get("/api/product-orders", params={"eagerload": eagerload})

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["cart"]["id"] == cart["id"]
        assert data[0]["product"]["name"] == "AAAAAAAAAA"

    def test_invalid_sort_direction(self, client):
        response = client.get("/api/categories", params={"sort": "name,sideways"})

        assert response.status_code == 400

    def test_get_one(self, client):
        customer = _customer(client, gender="FEMALE")

        response = client.get(f"/api/customer-details/{customer['id']}")

        assert response.status_code == 200
        assert response.json()["gender"] == "FEMALE"

    def test_get_unknown(self, client):
        assert client.get("/api/products/999").status_code == 404

    def test_customer_carts(self, client):
        customer = _customer(client)
        first = _cart(client, customer["id"])
        second = _cart(client, customer["id"], status="PENDING")

        response = client.get(f"/api/customer-details/{customer['id']}/shopping-carts")

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [first["id"], second["id"]]

    def test_cart_orders(self, client):
        cart = _cart(client)
        order = _order(client, cart["id"])

        response = client.get(f"/api/shopping-carts/{cart['id']}/product-orders")

        assert [o["id"] for o in response.json()] == [order["id"]]

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_cors_exposes_paging_and_alert_headers(self, client):
        response = client.get("/health", headers={"Origin": "http://shop.example"})

        exposed = {h.strip() for h in response.headers["access-control-expose-headers"].split(",")}
        assert {"X-Total-Count", "Link", "X-storefrontApp-alert", "X-storefrontApp-params"} <= exposed


class TestDeleteEndpoint:
    def test_delete_cart_without_orders(self, client):
        cart = _cart(client)

        response = client.delete(f"/api/shopping-carts/{cart['id']}")

        assert response.status_code == 204
        assert response.headers["X-storefrontApp-alert"] == "storefrontApp.shoppingCart.deleted"
        assert client.get(f"/api/shopping-carts/{cart['id']}").status_code == 404

    def test_delete_cart_with_orders_conflicts(self, client):
        cart = _cart(client)
        _order(client, cart["id"])

        response = client.delete(f"/api/shopping-carts/{cart['id']}")

        assert response.status_code == 409
        assert response.json()["detail"]["dependants"] == {"ProductOrder": 1}

    def test_delete_unknown(self, client):
        assert client.delete("/api/shopping-carts/999").status_code == 404

    def test_cascading_delete_when_enabled(self, client, monkeypatch):
        monkeypatch.setenv("STOREFRONT_CASCADE_DELETE", "true")
        cart = _cart(client)
        order = _order(client, cart["id"])
        customer_id = cart["customer_details"]["id"]

        response = client.delete(f"/api/customer-details/{customer_id}")

        assert response.status_code == 204
        assert client.get(f"/api/shopping-carts/{cart['id']}").status_code == 404
        assert client.get(f"/api/product-orders/{order['id']}").status_code == 404
