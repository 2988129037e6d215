# classstore/services/order_service.py
import uuid
from datetime import datetime, timedelta, timezone, time
from decimal import Decimal
from typing import Any, Dict, List

from classstore.data.models.order import OrderModel
from classstore.domain.errors import NotFoundError, InvalidTransitionError, DownstreamError
from classstore.domain.money import format_money
from classstore.domain.order_state import (
    OrderStatus,
    CancelledBy,
    INITIAL_STATUS,
    ensure_transition,
    validate_cancel_reason,
)
from classstore.domain.schemas import OrderCreate
from classstore.domain.validation import OrderValidator
from classstore.repos.base import OrderStore, ProductStore
from classstore.services.product_service import product_to_dict
from classstore.utils.logging import get_logger

logger = get_logger(__name__)

REVENUE_STATUSES = (OrderStatus.CONFIRMED.value, OrderStatus.DELIVERED.value)
RECENT_ACTIVITY_LIMIT = 10


def _utc(value: datetime | None) -> datetime | None:
    # sqlite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def order_to_dict(order: OrderModel, product=None) -> Dict[str, Any]:
    return {
        "id": order.id,
        "product_id": order.product_id,
        "buyer_name": order.buyer_name,
        "buyer_class": order.buyer_class,
        "buyer_section": order.buyer_section,
        "buyer_email": order.buyer_email,
        "buyer_phone": order.buyer_phone,
        "buyer_id": order.buyer_id,
        "pickup_location": order.pickup_location,
        "pickup_time": order.pickup_time,
        "additional_notes": order.additional_notes,
        "amount": format_money(order.amount),
        "status": order.status,
        "cancelled_by": order.cancelled_by,
        "cancellation_reason": order.cancellation_reason,
        "delivery_confirmed_at": order.delivery_confirmed_at,
        "invoice_generated": bool(order.invoice_generated),
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "product": product_to_dict(product) if product is not None else None,
    }


class OrderService:
    """
    Order lifecycle: creation (validated against the server-side price),
    status transitions and their best-effort side effects (emails, invoice).

    pending -> confirmed -> delivered
    pending | confirmed -> cancelled
    """

    def __init__(
        self,
        order_store: OrderStore,
        product_store: ProductStore,
        notification_service=None,
        invoice_service=None,
    ):
        self.repo = order_store
        self.product_repo = product_store
        self.validator = OrderValidator(product_store)
        self.notification_service = notification_service
        self.invoice_service = invoice_service

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, order_id: str) -> Dict[str, Any]:
        order = self._get(order_id)
        return order_to_dict(order, self.product_repo.get_product(order.product_id))

    def list_orders(self) -> List[Dict[str, Any]]:
        return [self._with_product(o) for o in self.repo.list_orders()]

    def list_buyer_orders(self, buyer_id: str) -> List[Dict[str, Any]]:
        return [self._with_product(o) for o in self.repo.list_orders_by_buyer(buyer_id)]

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_order(self, submission: OrderCreate) -> Dict[str, Any]:
        """
        Use Case: buyer places an order.

        1. Validates buyer fields and the claimed amount against the product price
        2. Persists the order as pending, amount taken from the product
        3. Queues confirmation + seller emails (best-effort)
        4. Generates the invoice (best-effort, retried lazily on download)
        """
        record = self.validator.validate(submission)
        now = datetime.now(timezone.utc)

        order = OrderModel(
            id=str(uuid.uuid4()),
            product_id=record["product_id"],
            buyer_name=record["buyer_name"],
            buyer_class=record["buyer_class"],
            buyer_section=record["buyer_section"],
            buyer_email=record["buyer_email"],
            buyer_phone=record["buyer_phone"],
            buyer_id=record["buyer_id"],
            pickup_location=record["pickup_location"],
            pickup_time=record["pickup_time"],
            additional_notes=record["additional_notes"],
            amount=Decimal(record["amount"]),
            status=INITIAL_STATUS.value,
            cancelled_by=None,
            cancellation_reason=None,
            delivery_confirmed_at=None,
            invoice_generated=False,
            created_at=now,
            updated_at=now,
        )

        created = self.repo.create_order(order)
        product = self.product_repo.get_product(created.product_id)

        logger.info(f"Order {created.id} created for product {created.product_id} ({format_money(created.amount)})")

        data = order_to_dict(created, product)
        self._notify_created(data)
        self._generate_invoice(created, product)

        return order_to_dict(self._get(created.id), product)

    def confirm_order(self, order_id: str) -> Dict[str, Any]:
        """Admin: pending -> confirmed."""
        order = self._transition(order_id, OrderStatus.CONFIRMED, {})
        logger.info(f"Order {order_id} confirmed")
        return self._with_product(order)

    def deliver_order(self, order_id: str) -> Dict[str, Any]:
        """Admin: confirmed -> delivered."""
        order = self._transition(order_id, OrderStatus.DELIVERED, {
            "delivery_confirmed_at": datetime.now(timezone.utc),
        })
        logger.info(f"Order {order_id} delivered")
        return self._with_product(order)

    def cancel_by_buyer(self, order_id: str, reason: str | None) -> Dict[str, Any]:
        """
        Buyer: pending | confirmed -> cancelled.
        Needs a reason (>= 5 characters); buyer and admin are emailed.
        """
        self._get(order_id)
        text = validate_cancel_reason(reason, CancelledBy.BUYER)

        order = self._transition(order_id, OrderStatus.CANCELLED, {
            "cancelled_by": CancelledBy.BUYER.value,
            "cancellation_reason": text,
        })
        logger.info(f"Order {order_id} cancelled by buyer")

        data = self._with_product(order)
        self._notify_cancelled(data, text)
        return data

    def cancel_by_admin(self, order_id: str, reason: str | None = None) -> Dict[str, Any]:
        """Admin: pending | confirmed -> cancelled, reason optional."""
        text = validate_cancel_reason(reason, CancelledBy.ADMIN)

        order = self._transition(order_id, OrderStatus.CANCELLED, {
            "cancelled_by": CancelledBy.ADMIN.value,
            "cancellation_reason": text,
        })
        logger.info(f"Order {order_id} cancelled by admin")
        return self._with_product(order)

    def get_invoice(self, order_id: str) -> str:
        """
        Use Case: admin downloads the invoice.
        Generates it now if the eager attempt at creation failed.
        """
        order = self._get(order_id)
        product = self.product_repo.get_product(order.product_id)
        if not product:
            raise NotFoundError("Product for this order no longer exists")

        path = self.invoice_service.generate(order.id, product, order)
        if not order.invoice_generated:
            self.repo.mark_invoice_generated(order.id)
        return path

    def get_stats(self) -> Dict[str, Any]:
        orders = self.repo.list_orders()
        products = self.product_repo.list_products()

        paid = [o for o in orders if o.status in REVENUE_STATUSES]
        revenue = sum((Decimal(o.amount) for o in paid), Decimal("0.00"))

        today = datetime.combine(datetime.now(timezone.utc).date(), time.min, tzinfo=timezone.utc)
        daily_revenue = sum(
            (Decimal(o.amount) for o in paid if _utc(o.created_at) >= today),
            Decimal("0.00"),
        )

        week_ago = datetime.now(timezone.utc) - timedelta(days=7)
        weekly = sum(1 for o in orders if _utc(o.created_at) >= week_ago)
        # orders this week relative to all earlier orders
        weekly_growth = round(weekly / max(len(orders) - weekly, 1) * 100, 1)

        conversion_rate = round(len(paid) / len(orders) * 100, 1) if orders else 0.0
        average = revenue / len(paid) if paid else Decimal("0.00")

        sales: Dict[str, int] = {}
        for o in paid:
            sales[o.product_id] = sales.get(o.product_id, 0) + 1
        names = {p.id: p.name for p in products}
        top = sorted(
            ({"name": names.get(pid, "Unknown product"), "sales": count} for pid, count in sales.items()),
            key=lambda item: item["sales"],
            reverse=True,
        )[:5]

        recent = sorted(orders, key=lambda o: _utc(o.created_at), reverse=True)[:RECENT_ACTIVITY_LIMIT]
        recent_activity = [
            {
                "action": f"New order for {names.get(o.product_id, 'Product')}",
                "time": o.created_at,
                "user": o.buyer_name,
            }
            for o in recent
        ]

        return {
            "total_orders": len(orders),
            "pending_orders": sum(1 for o in orders if o.status == OrderStatus.PENDING.value),
            "revenue": format_money(revenue),
            "active_products": sum(1 for p in products if p.is_active),
            "total_users": len({o.buyer_id or o.buyer_email for o in orders}),
            "daily_revenue": format_money(daily_revenue),
            "weekly_growth": weekly_growth,
            "conversion_rate": conversion_rate,
            "average_order_value": format_money(average),
            "top_selling_products": top,
            "recent_activity": recent_activity,
        }

    # =====================================================
    # HELPERS
    # =====================================================
    def _get(self, order_id: str) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def _with_product(self, order: OrderModel) -> Dict[str, Any]:
        return order_to_dict(order, self.product_repo.get_product(order.product_id))

    def _transition(self, order_id: str, target: OrderStatus, new_data: dict) -> OrderModel:
        order = self._get(order_id)
        current = order.status

        ensure_transition(current, target)

        # compare-and-swap: only applies if nobody moved the order since we read it
        rowcount = self.repo.update_order_status(
            order_id=order_id,
            expected_statuses=[current],
            new_data={
                **new_data,
                "status": target.value,
                "updated_at": datetime.now(timezone.utc),
            },
        )

        if rowcount == 0:
            latest = self.repo.reload_order(order_id)
            status = latest.status if latest else "unknown"
            logger.warning(f"Order {order_id} changed concurrently ({current} -> {status})")
            raise InvalidTransitionError(
                f"Order was modified by another request, current status is {status}"
            )

        return self._get(order_id)

    def _notify_created(self, order: Dict[str, Any]):
        if not self.notification_service:
            return
        try:
            self.notification_service.notify_order_created(order, order["product"])
        except DownstreamError as e:
            logger.error(f"Order {order['id']}: confirmation emails not sent: {e}")
        except Exception as e:
            logger.exception(f"Order {order['id']}: unexpected notification failure: {e}")

    def _notify_cancelled(self, order: Dict[str, Any], reason: str):
        if not self.notification_service:
            return
        try:
            self.notification_service.notify_order_cancelled(order, order["product"], reason)
        except DownstreamError as e:
            logger.error(f"Order {order['id']}: cancellation emails not sent: {e}")
        except Exception as e:
            logger.exception(f"Order {order['id']}: unexpected notification failure: {e}")

    def _generate_invoice(self, order: OrderModel, product):
        if not self.invoice_service:
            return
        try:
            self.invoice_service.generate(order.id, product, order)
        except DownstreamError as e:
            logger.warning(f"Order {order.id}: invoice will be generated on first download: {e}")
            return
        except Exception as e:
            logger.exception(f"Order {order.id}: unexpected invoice failure: {e}")
            return
        self.repo.mark_invoice_generated(order.id)
