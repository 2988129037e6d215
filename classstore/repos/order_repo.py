# classstore/repos/order_repo.py
from typing import Iterable, List

from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from classstore.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def reload_order(self, order_id: str) -> OrderModel | None:
        # the session keeps objects after commit, re-select to see other sessions' writes
        return self.db.get(OrderModel, order_id, populate_existing=True)

    def list_orders(self) -> List[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def list_orders_by_buyer(self, buyer_id: str) -> List[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.buyer_id == buyer_id)
            .order_by(OrderModel.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def count_orders_for_product(self, product_id: str) -> int:
        stmt = select(func.count()).select_from(OrderModel).where(OrderModel.product_id == product_id)
        return self.db.execute(stmt).scalar_one()

    def update_order_status(self, order_id: str, expected_statuses: Iterable[str], new_data: dict) -> int:
        # compare-and-swap on status
        # e.g. UPDATE orders SET status='confirmed' WHERE id=:id AND status IN ('pending')
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.status.in_(list(expected_statuses)),
            )
            .values(**new_data)
            .execution_options(synchronize_session="fetch")
        )
        self.db.commit()
        return result.rowcount

    def mark_invoice_generated(self, order_id: str) -> int:
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.invoice_generated.is_(False),
            )
            .values(invoice_generated=True)
            .execution_options(synchronize_session="fetch")
        )
        self.db.commit()
        return result.rowcount
