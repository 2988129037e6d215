# classstore/repos/base.py
from typing import Iterable, List, Optional, Protocol

from classstore.data.models.admin import AdminModel
from classstore.data.models.order import OrderModel
from classstore.data.models.product import ProductModel


class ProductStore(Protocol):
    def create_product(self, product: ProductModel) -> ProductModel: ...

    def get_product(self, product_id: str) -> Optional[ProductModel]: ...

    def list_products(
        self,
        active_only: bool = False,
        approval_status: Optional[str] = None,
        class_num: Optional[int] = None,
        seller_id: Optional[str] = None,
    ) -> List[ProductModel]: ...

    def update_product(self, product_id: str, new_data: dict) -> int: ...

    def increment_likes(self, product_id: str) -> Optional[int]: ...

    def delete_product(self, product_id: str) -> int: ...


class OrderStore(Protocol):
    def create_order(self, order: OrderModel) -> OrderModel: ...

    def get_order(self, order_id: str) -> Optional[OrderModel]: ...

    def reload_order(self, order_id: str) -> Optional[OrderModel]:
        """Like get_order, but bypasses any cached copy of the record."""
        ...

    def list_orders(self) -> List[OrderModel]: ...

    def list_orders_by_buyer(self, buyer_id: str) -> List[OrderModel]: ...

    def count_orders_for_product(self, product_id: str) -> int: ...

    def update_order_status(self, order_id: str, expected_statuses: Iterable[str], new_data: dict) -> int:
        """Compare-and-swap: applies new_data only while status is one of expected_statuses."""
        ...

    def mark_invoice_generated(self, order_id: str) -> int: ...


class AdminStore(Protocol):
    def get_admin(self, admin_id: str) -> Optional[AdminModel]: ...

    def get_admin_by_username(self, username: str) -> Optional[AdminModel]: ...

    def create_admin(self, admin: AdminModel) -> AdminModel: ...
