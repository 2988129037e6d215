# classstore/services/product_service.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from classstore.data.models.product import ProductModel
from classstore.domain.errors import NotFoundError, ValidationError
from classstore.domain.money import format_money, parse_amount
from classstore.domain.schemas import ProductIn, ProductUpdate
from classstore.domain.validation import parse_class, require_text, check_email
from classstore.repos.base import OrderStore, ProductStore
from classstore.utils.logging import get_logger

logger = get_logger(__name__)


def product_to_dict(product: ProductModel) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": format_money(product.price),
        "class_num": product.class_num,
        "section": product.section,
        "image_url": product.image_url,
        "seller_id": product.seller_id,
        "seller_name": product.seller_name,
        "seller_phone": product.seller_phone,
        "seller_email": product.seller_email,
        "likes": product.likes or 0,
        "is_active": bool(product.is_active),
        "is_sold_out": bool(product.is_sold_out),
        "category": product.category,
        "condition": product.condition,
        "approval_status": product.approval_status,
        "approved_at": product.approved_at,
        "approved_by": product.approved_by,
        "rejection_reason": product.rejection_reason,
        "created_at": product.created_at,
    }


class ProductService:
    """
    Catalogue use cases: storefront queries, likes, seller submissions and
    admin moderation.
    """

    def __init__(self, product_store: ProductStore, order_store: OrderStore):
        self.repo = product_store
        self.order_repo = order_store

    # =====================================================
    # QUERY
    # =====================================================
    def list_products(self, class_filter: int | None = None, sort: str | None = None) -> List[Dict[str, Any]]:
        """
        Storefront listing: only active, approved products.
        Default order is popularity (likes).
        """
        products = self.repo.list_products(
            active_only=True,
            approval_status="approved",
            class_num=class_filter,
        )

        if sort == "newest":
            products.sort(key=lambda p: p.created_at, reverse=True)
        elif sort == "price-low":
            products.sort(key=lambda p: Decimal(p.price))
        elif sort == "price-high":
            products.sort(key=lambda p: Decimal(p.price), reverse=True)
        else:
            products.sort(key=lambda p: p.likes or 0, reverse=True)

        return [product_to_dict(p) for p in products]

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return product_to_dict(self._get(product_id))

    def list_seller_products(self, seller_id: str) -> List[Dict[str, Any]]:
        return [product_to_dict(p) for p in self.repo.list_products(seller_id=seller_id)]

    def list_all_products(self) -> List[Dict[str, Any]]:
        return [product_to_dict(p) for p in self.repo.list_products()]

    def list_pending_products(self) -> List[Dict[str, Any]]:
        return [product_to_dict(p) for p in self.repo.list_products(approval_status="pending")]

    # =====================================================
    # COMMANDS
    # =====================================================
    def like_product(self, product_id: str) -> int:
        likes = self.repo.increment_likes(product_id)
        if likes is None:
            raise NotFoundError("Product not found")
        return likes

    def submit_product(self, payload: ProductIn) -> Dict[str, Any]:
        """Seller submission, waits for moderation."""
        product = self._build(payload, approval_status="pending")
        created = self.repo.create_product(product)
        logger.info(f"Product {created.id} submitted by seller '{created.seller_name}', awaiting approval")
        return product_to_dict(created)

    def add_product(self, payload: ProductIn, admin_id: str) -> Dict[str, Any]:
        """Admin listing, visible on the storefront straight away."""
        product = self._build(payload, approval_status="approved")
        product.approved_by = admin_id
        product.approved_at = product.created_at
        created = self.repo.create_product(product)
        logger.info(f"Product {created.id} added by admin {admin_id}")
        return product_to_dict(created)

    def approve_product(self, product_id: str, admin_id: str) -> Dict[str, Any]:
        self._get(product_id)
        self.repo.update_product(product_id, {
            "approval_status": "approved",
            "approved_by": admin_id,
            "approved_at": datetime.now(timezone.utc),
            "rejection_reason": None,
        })
        logger.info(f"Product {product_id} approved by admin {admin_id}")
        return self.get_product(product_id)

    def reject_product(self, product_id: str, admin_id: str, reason: str | None = None) -> Dict[str, Any]:
        self._get(product_id)
        self.repo.update_product(product_id, {
            "approval_status": "rejected",
            "approved_by": admin_id,
            "approved_at": None,
            "rejection_reason": (reason or "").strip() or None,
        })
        logger.info(f"Product {product_id} rejected by admin {admin_id}")
        return self.get_product(product_id)

    def update_product_status(
        self,
        product_id: str,
        is_active: bool | None = None,
        is_sold_out: bool | None = None,
    ) -> Dict[str, Any]:
        self._get(product_id)
        changes = {}
        if is_active is not None:
            changes["is_active"] = is_active
        if is_sold_out is not None:
            changes["is_sold_out"] = is_sold_out
        if changes:
            self.repo.update_product(product_id, changes)
            logger.info(f"Product {product_id} status updated: {changes}")
        return self.get_product(product_id)

    def update_product_details(self, product_id: str, payload: ProductUpdate) -> Dict[str, Any]:
        product = self._get(product_id)
        updates = payload.model_dump(exclude_unset=True)
        changes = {}

        # category and condition are NOT NULL columns, an explicit null is refused
        for field in ("name", "section", "category", "condition"):
            if field in updates:
                changes[field] = require_text(updates[field], field)
        for field in ("description", "image_url"):
            if field in updates:
                changes[field] = updates[field]
        if "class_num" in updates:
            changes["class_num"] = parse_class(updates["class_num"])

        if "price" in updates:
            new_price = parse_amount(updates["price"], "price")
            if new_price != format_money(product.price):
                # orders keep referring to the price they were placed at
                if self.order_repo.count_orders_for_product(product_id) > 0:
                    raise ValidationError("Price cannot be changed once the product has orders")
                changes["price"] = Decimal(new_price)

        if changes:
            self.repo.update_product(product_id, changes)
            logger.info(f"Product {product_id} details updated: {sorted(changes)}")
        return self.get_product(product_id)

    def delete_product(self, product_id: str):
        self._get(product_id)
        if self.order_repo.count_orders_for_product(product_id) > 0:
            raise ValidationError("Product has orders and cannot be deleted, deactivate it instead")
        self.repo.delete_product(product_id)
        logger.info(f"Product {product_id} deleted")

    # =====================================================
    # HELPERS
    # =====================================================
    def _get(self, product_id: str) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def _build(self, payload: ProductIn, approval_status: str) -> ProductModel:
        seller_email = payload.seller_email
        if seller_email:
            seller_email = check_email(seller_email, "sellerEmail")

        return ProductModel(
            id=str(uuid.uuid4()),
            name=require_text(payload.name, "name"),
            description=(payload.description or "").strip() or None,
            price=Decimal(parse_amount(payload.price, "price")),
            class_num=parse_class(payload.class_num),
            section=require_text(payload.section, "section"),
            image_url=payload.image_url,
            seller_id=payload.seller_id,
            seller_name=require_text(payload.seller_name, "sellerName"),
            seller_phone=require_text(payload.seller_phone, "sellerPhone"),
            seller_email=seller_email,
            likes=0,
            is_active=True,
            is_sold_out=False,
            category=payload.category or "General",
            condition=payload.condition or "Good",
            approval_status=approval_status,
            approved_at=None,
            approved_by=None,
            rejection_reason=None,
            created_at=datetime.now(timezone.utc),
        )
