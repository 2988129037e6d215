"""
Admin panel endpoints: session guard, order actions, invoice, moderation.
"""

import pytest

from conftest import ADMIN_CREDENTIALS, order_payload

PRODUCT_BODY = {
    "name": "Geometry Box",
    "price": "15.00",
    "class": 7,
    "section": "D",
    "sellerName": "Arjun",
    "sellerPhone": "9123456789",
}


def place_order(client, product_id):
    return client.post("/orders", json=order_payload(product_id)).json()["orderId"]


class TestSession:

    @pytest.mark.parametrize("method,path", [
        ("get", "/admin/orders"),
        ("get", "/admin/stats"),
        ("post", "/admin/orders/x/confirm"),
        ("post", "/admin/orders/x/cancel"),
        ("post", "/admin/orders/x/deliver"),
        ("get", "/admin/orders/x/invoice"),
        ("get", "/admin/products"),
        ("delete", "/admin/products/x"),
    ])
    def test_requires_login(self, client, method, path):
        resp = getattr(client, method)(path)
        assert resp.status_code == 401

    def test_bad_credentials(self, client):
        resp = client.post("/admin/login", json={"username": "admin", "password": "wrong"})
        assert resp.status_code == 401

    def test_logout_ends_session(self, admin_client):
        assert admin_client.get("/admin/orders").status_code == 200
        assert admin_client.post("/admin/logout").status_code == 200
        assert admin_client.get("/admin/orders").status_code == 401

    def test_login(self, client):
        assert client.post("/admin/login", json=ADMIN_CREDENTIALS).json() == {
            "message": "Authentication successful"
        }


class TestOrderActions:

    def test_confirm_deliver_then_buyer_cannot_cancel(self, admin_client, sql_product):
        order_id = place_order(admin_client, sql_product.id)

        confirmed = admin_client.post(f"/admin/orders/{order_id}/confirm")
        assert confirmed.status_code == 200
        assert confirmed.json()["order"]["status"] == "confirmed"

        delivered = admin_client.post(f"/admin/orders/{order_id}/deliver")
        assert delivered.status_code == 200
        assert delivered.json()["order"]["status"] == "delivered"
        assert delivered.json()["order"]["deliveryConfirmedAt"] is not None

        resp = admin_client.post(f"/customers/orders/{order_id}/cancel", json={"reason": "changed my mind"})
        assert resp.status_code == 400
        assert "already delivered" in resp.json()["detail"]

    def test_admin_cancel_without_body(self, admin_client, sql_product):
        order_id = place_order(admin_client, sql_product.id)

        resp = admin_client.post(f"/admin/orders/{order_id}/cancel")

        assert resp.status_code == 200
        order = resp.json()["order"]
        assert order["cancelledBy"] == "admin"
        assert order["cancellationReason"] == "Cancelled by admin"

        assert admin_client.post(f"/admin/orders/{order_id}/confirm").status_code == 400

    def test_admin_cancel_with_reason(self, admin_client, sql_product):
        order_id = place_order(admin_client, sql_product.id)
        resp = admin_client.post(f"/admin/orders/{order_id}/cancel", json={"reason": "seller withdrew"})
        assert resp.json()["order"]["cancellationReason"] == "seller withdrew"

    def test_confirm_missing(self, admin_client, db):
        assert admin_client.post("/admin/orders/missing/confirm").status_code == 404

    def test_list_orders(self, admin_client, sql_product):
        order_id = place_order(admin_client, sql_product.id)
        orders = admin_client.get("/admin/orders").json()
        assert [o["id"] for o in orders] == [order_id]

    def test_invoice_download(self, admin_client, sql_product, invoices):
        order_id = place_order(admin_client, sql_product.id)

        first = admin_client.get(f"/admin/orders/{order_id}/invoice")
        second = admin_client.get(f"/admin/orders/{order_id}/invoice")

        assert first.status_code == 200
        assert first.headers["content-type"] == "application/pdf"
        assert first.headers["content-disposition"].startswith("attachment")
        assert first.content.startswith(b"%PDF-")
        assert first.content == second.content
        assert invoices.renders == 1

    def test_invoice_generated_lazily(self, admin_client, sql_product, invoices):
        invoices.fail = True
        order_id = place_order(admin_client, sql_product.id)
        assert invoices.renders == 0

        invoices.fail = False
        resp = admin_client.get(f"/admin/orders/{order_id}/invoice")

        assert resp.status_code == 200
        assert invoices.renders == 1
        assert admin_client.get("/admin/orders").json()[0]["invoiceGenerated"] is True

    def test_stats(self, admin_client, sql_product):
        order_id = place_order(admin_client, sql_product.id)
        place_order(admin_client, sql_product.id)
        admin_client.post(f"/admin/orders/{order_id}/confirm")

        stats = admin_client.get("/admin/stats").json()

        assert stats["totalOrders"] == 2
        assert stats["pendingOrders"] == 1
        assert stats["revenue"] == "45.00"
        assert stats["conversionRate"] == 50.0
        assert stats["topSellingProducts"] == [{"name": sql_product.name, "sales": 1}]
        assert stats["totalUsers"] == 1
        assert [a["user"] for a in stats["recentActivity"]] == ["Ravi Kumar", "Ravi Kumar"]


class TestModeration:

    def test_seller_submission_approval_flow(self, admin_client):
        product_id = admin_client.post("/sellers/products", json=PRODUCT_BODY).json()["productId"]
        assert admin_client.get("/products").json() == []

        pending = admin_client.get("/admin/products/pending").json()
        assert [p["id"] for p in pending] == [product_id]

        approved = admin_client.post(f"/admin/products/{product_id}/approve")
        assert approved.json()["approvalStatus"] == "approved"
        assert [p["id"] for p in admin_client.get("/products").json()] == [product_id]

    def test_reject(self, admin_client):
        product_id = admin_client.post("/sellers/products", json=PRODUCT_BODY).json()["productId"]
        resp = admin_client.post(f"/admin/products/{product_id}/reject", json={"reason": "duplicate listing"})
        assert resp.json()["approvalStatus"] == "rejected"
        assert resp.json()["rejectionReason"] == "duplicate listing"

    def test_admin_add_edit_and_delete(self, admin_client):
        resp = admin_client.post("/admin/products", json=PRODUCT_BODY)
        assert resp.status_code == 201
        product_id = resp.json()["productId"]

        edited = admin_client.patch(f"/admin/products/{product_id}", json={"price": "18.00", "name": "Geometry Set"})
        assert edited.json()["price"] == "18.00"
        assert edited.json()["name"] == "Geometry Set"

        status = admin_client.patch(f"/admin/products/{product_id}/status", json={"isActive": False})
        assert status.json()["isActive"] is False
        assert admin_client.get("/products").json() == []

        assert admin_client.delete(f"/admin/products/{product_id}").status_code == 200
        assert admin_client.get(f"/products/{product_id}").status_code == 404

    def test_ordered_product_is_protected(self, admin_client, sql_product):
        place_order(admin_client, sql_product.id)

        assert admin_client.patch(f"/admin/products/{sql_product.id}", json={"price": "99.00"}).status_code == 400
        assert admin_client.delete(f"/admin/products/{sql_product.id}").status_code == 400

    def test_edit_refuses_null_for_required_fields(self, admin_client, sql_product):
        for field in ("category", "condition", "name"):
            resp = admin_client.patch(f"/admin/products/{sql_product.id}", json={field: None})
            assert resp.status_code == 400, field

        product = admin_client.get(f"/products/{sql_product.id}").json()
        assert product["category"] == "Textbooks"
        assert product["condition"] == "Good"

    def test_edit_clears_optional_fields(self, admin_client, sql_product):
        resp = admin_client.patch(f"/admin/products/{sql_product.id}", json={"description": None, "category": "Books"})

        assert resp.status_code == 200
        assert resp.json()["description"] is None
        assert resp.json()["category"] == "Books"

    def test_oversized_price_is_refused(self, admin_client):
        resp = admin_client.post("/sellers/products", json={**PRODUCT_BODY, "price": "123456789012.00"})
        assert resp.status_code == 400
        assert admin_client.get("/admin/products/pending").json() == []
