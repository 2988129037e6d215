# classstore/services/notification_service.py
from html import escape

from classstore.domain.errors import DownstreamError
from classstore.tasks.email import send_email_task
from classstore.utils.settings import ADMIN_EMAIL, MAIL_FROM, SITE_URL
from classstore.utils.logging import get_logger

logger = get_logger(__name__)

SENDER = {"email": MAIL_FROM, "name": "ClassStore"}


def _order_confirmation(order: dict, product: dict) -> dict:
    return {
        "to": [{"email": order["buyer_email"], "name": order["buyer_name"]}],
        "sender": SENDER,
        "subject": f"Order Confirmation - {product['name']}",
        "html": (
            f"<h1>Thank you for your order, {escape(order['buyer_name'])}!</h1>"
            f"<p><b>{escape(product['name'])}</b> (Grade {product['class_num']} - Section {escape(product['section'])})</p>"
            f"<p>Amount: {order['amount']}</p>"
            f"<p>Seller: {escape(product['seller_name'])}, {escape(product['seller_phone'])}</p>"
            f"<p>Pickup: {escape(order['pickup_location'])}, {escape(order['pickup_time'])}</p>"
            f"<p>Order ID: <code>{order['id']}</code></p>"
            "<p>The seller will contact you to arrange pickup and payment.</p>"
        ),
    }


def _seller_notification(order: dict, product: dict) -> dict:
    return {
        "to": [{"email": ADMIN_EMAIL, "name": "ClassStore Admin"}],
        "sender": SENDER,
        "subject": f"New Order Alert - {product['name']}",
        "html": (
            f"<h1>New order for {escape(product['name'])}</h1>"
            f"<p>Buyer: {escape(order['buyer_name'])}, Grade {order['buyer_class']} - Section {escape(order['buyer_section'])}</p>"
            f"<p>Contact: {escape(order['buyer_email'])}, {escape(order['buyer_phone'])}</p>"
            f"<p>Amount: {order['amount']}</p>"
            f"<p>Seller: {escape(product['seller_name'])}, {escape(product['seller_phone'])}</p>"
            f"<p><a href=\"{SITE_URL}/admin\">Open the admin panel</a> to confirm order <code>{order['id']}</code>.</p>"
        ),
    }


def _cancellation(order: dict, product: dict, reason: str, to: dict) -> dict:
    return {
        "to": [to],
        "sender": SENDER,
        "subject": f"Order Cancelled - {product['name']}",
        "html": (
            f"<h1>Order <code>{order['id']}</code> was cancelled</h1>"
            f"<p>Product: {escape(product['name'])}</p>"
            f"<p>Cancelled by: {order.get('cancelled_by') or 'buyer'}</p>"
            f"<p>Reason: {escape(reason)}</p>"
        ),
    }


class NotificationService:
    """
    Builds order emails and queues them on Celery.
    Callers treat every method as best-effort: a DownstreamError is logged
    and never fails the order operation.
    """

    def notify_order_created(self, order: dict, product: dict):
        self._queue(_order_confirmation(order, product))
        self._queue(_seller_notification(order, product))

    def notify_order_cancelled(self, order: dict, product: dict, reason: str):
        buyer = {"email": order["buyer_email"], "name": order["buyer_name"]}
        admin = {"email": ADMIN_EMAIL, "name": "ClassStore Admin"}
        self._queue(_cancellation(order, product, reason, buyer))
        self._queue(_cancellation(order, product, reason, admin))

    @staticmethod
    def _queue(message: dict):
        try:
            send_email_task.delay(message)
        except Exception as e:
            raise DownstreamError(f"Could not queue email '{message['subject']}': {e}") from e
        logger.info(f"[NOTIFICATION] queued '{message['subject']}'")
