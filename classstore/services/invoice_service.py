# classstore/services/invoice_service.py
import os
from datetime import datetime, timezone

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from classstore.domain.errors import DownstreamError
from classstore.domain.money import format_money
from classstore.utils.settings import INVOICES_DIR
from classstore.utils.logging import get_logger

logger = get_logger(__name__)


class InvoiceService:
    """
    One PDF per order at <invoices_dir>/<order_id>.pdf.
    generate() is idempotent: an existing file is returned untouched.
    """

    def __init__(self, invoices_dir: str | None = None):
        self.invoices_dir = invoices_dir or INVOICES_DIR

    def invoice_path(self, order_id: str) -> str:
        name = os.path.basename(str(order_id))
        if not name or name != str(order_id) or name.startswith("."):
            raise ValueError(f"Invalid order id for invoice: {order_id!r}")
        return os.path.join(self.invoices_dir, f"{name}.pdf")

    def exists(self, order_id: str) -> bool:
        return os.path.exists(self.invoice_path(order_id))

    def generate(self, order_id: str, product, order) -> str:
        path = self.invoice_path(order_id)

        if os.path.exists(path):
            logger.info(f"Invoice for order {order_id} already exists, skipping")
            return path

        try:
            os.makedirs(self.invoices_dir, exist_ok=True)
            # write next to the target and rename, a half-written file must never look "existing"
            tmp_path = f"{path}.tmp"
            self._render(tmp_path, order_id, product, order)
            os.replace(tmp_path, path)
        except Exception as e:
            logger.error(f"Invoice generation failed for order {order_id}: {e}")
            raise DownstreamError(f"Invoice generation failed: {e}") from e

        logger.info(f"Invoice for order {order_id} written to {path}")
        return path

    def _render(self, path: str, order_id: str, product, order):
        pdf = canvas.Canvas(path, pagesize=A4)
        _, height = A4

        def line(x, y, text, size=12):
            pdf.setFont("Helvetica", size)
            pdf.drawString(x, height - y, str(text))

        line(50, 50, "ClassStore", 20)
        line(50, 80, "Invoice", 16)

        line(50, 120, f"Invoice #: {order_id}")
        line(50, 140, f"Date: {datetime.now(timezone.utc):%Y-%m-%d}")

        line(50, 180, "Bill To:")
        line(50, 200, order.buyer_name)
        line(50, 220, f"Grade {order.buyer_class} - Section {order.buyer_section}")
        line(50, 240, order.buyer_email)
        line(50, 260, order.buyer_phone)

        line(50, 320, "Product Details:")
        line(50, 340, product.name)
        line(50, 360, f"Class: Grade {product.class_num} - Section {product.section}")
        line(50, 380, f"Seller: {product.seller_name}")
        line(50, 400, f"Pickup: {order.pickup_location}, {order.pickup_time}")

        line(400, 320, "Amount:")
        line(400, 340, format_money(order.amount))

        line(50, 500, "Thank you for using ClassStore!")
        line(50, 520, "For support, contact us at support@classstore.com")

        pdf.showPage()
        pdf.save()
