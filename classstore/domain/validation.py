# classstore/domain/validation.py
from email_validator import validate_email, EmailNotValidError

from classstore.domain.errors import ValidationError, NotFoundError, PriceMismatchError
from classstore.domain.money import format_money, parse_amount
from classstore.domain.schemas import OrderCreate
from classstore.repos.base import ProductStore

MIN_CLASS = 6
MAX_CLASS = 12
MIN_PHONE_LENGTH = 10


def parse_class(raw, field: str = "class") -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number between {MIN_CLASS} and {MAX_CLASS}")
    if not MIN_CLASS <= value <= MAX_CLASS:
        raise ValidationError(f"{field} must be between {MIN_CLASS} and {MAX_CLASS}")
    return value


def require_text(raw, field: str) -> str:
    text = (raw or "").strip()
    if not text:
        raise ValidationError(f"{field} is required")
    return text


def check_email(raw, field: str = "email") -> str:
    text = require_text(raw, field)
    try:
        return validate_email(text, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ValidationError(f"{field} is not a valid email address: {e}")


class OrderValidator:
    """
    Checks a purchase submission before anything is persisted.

    The server is the only source of truth for price: the submitted amount
    must equal the product price (compared as canonical two-decimal strings)
    and the returned record always carries the server-side price.
    """

    def __init__(self, product_store: ProductStore):
        self.product_store = product_store

    def validate(self, submission: OrderCreate) -> dict:
        buyer_name = require_text(submission.buyer_name, "buyerName")
        buyer_class = parse_class(submission.buyer_class, "buyerClass")
        buyer_section = require_text(submission.buyer_section, "buyerSection")
        buyer_email = check_email(submission.buyer_email, "buyerEmail")

        buyer_phone = (submission.buyer_phone or "").strip()
        if len(buyer_phone) < MIN_PHONE_LENGTH:
            raise ValidationError(f"buyerPhone must be at least {MIN_PHONE_LENGTH} characters")

        pickup_location = require_text(submission.pickup_location, "pickupLocation")
        pickup_time = require_text(submission.pickup_time, "pickupTime")
        claimed = parse_amount(submission.amount)

        product = self.product_store.get_product(submission.product_id)
        if not product:
            raise NotFoundError("Product not found")

        if not product.is_active or product.is_sold_out or product.approval_status != "approved":
            raise ValidationError("Product is not available for purchase")

        price = format_money(product.price)
        if claimed != price:
            raise PriceMismatchError(
                f"Submitted amount {claimed} does not match the current price {price}"
            )

        buyer_id = (submission.buyer_id or "").strip() or None
        notes = (submission.additional_notes or "").strip() or None

        return {
            "product_id": product.id,
            "buyer_name": buyer_name,
            "buyer_class": buyer_class,
            "buyer_section": buyer_section,
            "buyer_email": buyer_email,
            "buyer_phone": buyer_phone,
            "buyer_id": buyer_id,
            "pickup_location": pickup_location,
            "pickup_time": pickup_time,
            "additional_notes": notes,
            "amount": price,
        }
