# classstore/repos/memory.py
"""
In-memory implementations of the store contracts.

Used by the test-suite and by STORAGE_BACKEND=memory. Records are the same
ORM model classes, kept transient (never attached to a Session), so the
service layer does not care which backend it talks to.
"""
import threading
from typing import Dict, Iterable, List, Optional

from classstore.data.models.admin import AdminModel
from classstore.data.models.order import OrderModel
from classstore.data.models.product import ProductModel


class MemoryStore:
    """Process-wide tables shared by the in-memory repos."""

    def __init__(self):
        self.lock = threading.RLock()
        self.products: Dict[str, ProductModel] = {}
        self.orders: Dict[str, OrderModel] = {}
        self.admins: Dict[str, AdminModel] = {}

    def clear(self):
        with self.lock:
            self.products.clear()
            self.orders.clear()
            self.admins.clear()


class InMemoryProductRepo:
    def __init__(self, store: MemoryStore):
        self.store = store

    def create_product(self, product: ProductModel) -> ProductModel:
        with self.store.lock:
            self.store.products[product.id] = product
        return product

    def get_product(self, product_id: str) -> Optional[ProductModel]:
        return self.store.products.get(product_id)

    def list_products(
        self,
        active_only: bool = False,
        approval_status: Optional[str] = None,
        class_num: Optional[int] = None,
        seller_id: Optional[str] = None,
    ) -> List[ProductModel]:
        with self.store.lock:
            products = list(self.store.products.values())
        return [
            p for p in products
            if (not active_only or p.is_active)
            and (approval_status is None or p.approval_status == approval_status)
            and (class_num is None or p.class_num == class_num)
            and (seller_id is None or p.seller_id == seller_id)
        ]

    def update_product(self, product_id: str, new_data: dict) -> int:
        with self.store.lock:
            product = self.store.products.get(product_id)
            if not product:
                return 0
            for key, value in new_data.items():
                setattr(product, key, value)
            return 1

    def increment_likes(self, product_id: str) -> Optional[int]:
        with self.store.lock:
            product = self.store.products.get(product_id)
            if not product:
                return None
            product.likes = (product.likes or 0) + 1
            return product.likes

    def delete_product(self, product_id: str) -> int:
        with self.store.lock:
            return 1 if self.store.products.pop(product_id, None) else 0


class InMemoryOrderRepo:
    def __init__(self, store: MemoryStore):
        self.store = store

    def create_order(self, order: OrderModel) -> OrderModel:
        with self.store.lock:
            self.store.orders[order.id] = order
        return order

    def get_order(self, order_id: str) -> Optional[OrderModel]:
        return self.store.orders.get(order_id)

    def reload_order(self, order_id: str) -> Optional[OrderModel]:
        return self.get_order(order_id)

    def list_orders(self) -> List[OrderModel]:
        with self.store.lock:
            orders = list(self.store.orders.values())
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def list_orders_by_buyer(self, buyer_id: str) -> List[OrderModel]:
        return [o for o in self.list_orders() if o.buyer_id == buyer_id]

    def count_orders_for_product(self, product_id: str) -> int:
        with self.store.lock:
            return sum(1 for o in self.store.orders.values() if o.product_id == product_id)

    def update_order_status(self, order_id: str, expected_statuses: Iterable[str], new_data: dict) -> int:
        expected = set(expected_statuses)
        with self.store.lock:
            order = self.store.orders.get(order_id)
            if not order or order.status not in expected:
                return 0
            for key, value in new_data.items():
                setattr(order, key, value)
            return 1

    def mark_invoice_generated(self, order_id: str) -> int:
        with self.store.lock:
            order = self.store.orders.get(order_id)
            if not order or order.invoice_generated:
                return 0
            order.invoice_generated = True
            return 1


class InMemoryAdminRepo:
    def __init__(self, store: MemoryStore):
        self.store = store

    def get_admin(self, admin_id: str) -> Optional[AdminModel]:
        return self.store.admins.get(admin_id)

    def get_admin_by_username(self, username: str) -> Optional[AdminModel]:
        with self.store.lock:
            return next((a for a in self.store.admins.values() if a.username == username), None)

    def create_admin(self, admin: AdminModel) -> AdminModel:
        with self.store.lock:
            self.store.admins[admin.id] = admin
        return admin


memory_store = MemoryStore()
