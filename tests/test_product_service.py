"""
Catalogue: storefront listing, likes, submissions and moderation.
"""

import pytest

from classstore.domain.errors import NotFoundError, ValidationError
from classstore.domain.schemas import ProductIn, ProductUpdate
from classstore.services.product_service import ProductService

from conftest import build_product, order_submission


def submission(**overrides) -> ProductIn:
    data = {
        "name": "Biology Notes",
        "description": "Handwritten notes",
        "price": "30",
        "class": 11,
        "section": "C",
        "sellerId": "seller_042",
        "sellerName": "Priya",
        "sellerPhone": "9999999999",
        "sellerEmail": "priya@school.edu",
    }
    data.update(overrides)
    return ProductIn.model_validate(data)


@pytest.fixture
def product_service(product_store, order_store):
    return ProductService(product_store, order_store)


class TestStorefront:

    def test_hides_inactive_and_unapproved(self, product_service, product_store):
        visible = product_store.create_product(build_product(name="Visible"))
        product_store.create_product(build_product(name="Inactive", is_active=False))
        product_store.create_product(build_product(name="Pending", approval_status="pending"))

        assert [p["id"] for p in product_service.list_products()] == [visible.id]

    def test_sorting(self, product_service, product_store):
        product_store.create_product(build_product(name="cheap", price="10.00", likes=1))
        product_store.create_product(build_product(name="pricey", price="100.00", likes=50))
        product_store.create_product(build_product(name="mid", price="20.00", likes=5))

        names = lambda sort: [p["name"] for p in product_service.list_products(sort=sort)]

        assert names("price-low") == ["cheap", "mid", "pricey"]
        assert names("price-high") == ["pricey", "mid", "cheap"]
        assert names(None) == ["pricey", "mid", "cheap"]

    def test_class_filter(self, product_service, product_store):
        product_store.create_product(build_product(name="ten", class_num=10))
        product_store.create_product(build_product(name="six", class_num=6))
        assert [p["name"] for p in product_service.list_products(class_filter=6)] == ["six"]

    def test_like(self, product_service, product):
        assert product_service.like_product(product.id) == 1
        assert product_service.like_product(product.id) == 2
        with pytest.raises(NotFoundError):
            product_service.like_product("missing")


class TestSubmissions:

    def test_seller_submission_waits_for_approval(self, product_service):
        created = product_service.submit_product(submission())

        assert created["approval_status"] == "pending"
        assert created["price"] == "30.00"
        assert created["likes"] == 0
        assert product_service.list_products() == []
        assert [p["id"] for p in product_service.list_pending_products()] == [created["id"]]
        assert [p["id"] for p in product_service.list_seller_products("seller_042")] == [created["id"]]

    @pytest.mark.parametrize("overrides", [
        {"class": 5},
        {"price": "12.345"},
        {"name": "   "},
        {"sellerEmail": "nope"},
    ])
    def test_invalid_submission(self, product_service, overrides):
        with pytest.raises(ValidationError):
            product_service.submit_product(submission(**overrides))

    def test_admin_listing_is_approved(self, product_service):
        created = product_service.add_product(submission(), admin_id="admin-1")
        assert created["approval_status"] == "approved"
        assert created["approved_by"] == "admin-1"
        assert [p["id"] for p in product_service.list_products()] == [created["id"]]


class TestModeration:

    def test_approve_and_reject(self, product_service):
        created = product_service.submit_product(submission())

        rejected = product_service.reject_product(created["id"], "admin-1", "blurry photo")
        assert rejected["approval_status"] == "rejected"
        assert rejected["rejection_reason"] == "blurry photo"

        approved = product_service.approve_product(created["id"], "admin-1")
        assert approved["approval_status"] == "approved"
        assert approved["rejection_reason"] is None
        assert approved["approved_at"] is not None

    def test_status_update(self, product_service, product):
        updated = product_service.update_product_status(product.id, is_sold_out=True)
        assert updated["is_sold_out"] is True
        assert updated["is_active"] is True

    def test_price_locked_once_ordered(self, product_service, order_service, product):
        product_service.update_product_details(product.id, ProductUpdate(price="50.00"))
        order_service.create_order(order_submission(product.id, amount="50.00"))

        with pytest.raises(ValidationError, match="Price cannot be changed"):
            product_service.update_product_details(product.id, ProductUpdate(price="60.00"))

        # other details and an unchanged price are fine
        updated = product_service.update_product_details(
            product.id, ProductUpdate(name="Maths Textbook", price="50")
        )
        assert updated["name"] == "Maths Textbook"
        assert updated["price"] == "50.00"

    def test_delete(self, product_service, order_service, product_store, product):
        spare = product_store.create_product(build_product())
        product_service.delete_product(spare.id)
        assert product_store.get_product(spare.id) is None

        order_service.create_order(order_submission(product.id))
        with pytest.raises(ValidationError):
            product_service.delete_product(product.id)
        with pytest.raises(NotFoundError):
            product_service.delete_product("missing")
