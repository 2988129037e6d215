# classstore/domain/money.py
import re
from decimal import Decimal, InvalidOperation

from classstore.domain.errors import ValidationError

# Numeric(10,2) columns: at most 8 integer digits
AMOUNT_PATTERN = re.compile(r"^\d{1,8}(\.\d{2})?$")
_CENT = Decimal("0.01")


def format_money(value) -> str:
    """Decimal/str/int -> canonical two-decimal string ("45" -> "45.00")."""
    if isinstance(value, float):
        raise TypeError("float amounts are not accepted")
    try:
        return str(Decimal(str(value)).quantize(_CENT))
    except InvalidOperation:
        raise ValidationError(f"Invalid amount: {value!r}")


def parse_amount(raw, field: str = "amount") -> str:
    """
    Validates a client-supplied money string and returns its canonical form.
    Only plain digits with an optional two-digit fraction are accepted.
    """
    if raw is None:
        raise ValidationError(f"{field} is required")
    text = str(raw).strip()
    if not AMOUNT_PATTERN.match(text):
        raise ValidationError(f"{field} must look like 45 or 45.00, at most 8 digits before the point")
    return format_money(text)
