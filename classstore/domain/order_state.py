# classstore/domain/order_state.py
from enum import Enum
from typing import Dict, FrozenSet

from classstore.domain.errors import InvalidTransitionError, ValidationError


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class CancelledBy(str, Enum):
    BUYER = "buyer"
    ADMIN = "admin"


INITIAL_STATUS = OrderStatus.PENDING

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset([
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
])

# target -> statuses it may be entered from
ALLOWED_SOURCES: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.CONFIRMED: frozenset([OrderStatus.PENDING]),
    OrderStatus.DELIVERED: frozenset([OrderStatus.CONFIRMED]),
    OrderStatus.CANCELLED: frozenset([OrderStatus.PENDING, OrderStatus.CONFIRMED]),
}

MIN_CANCEL_REASON_LENGTH = 5
DEFAULT_ADMIN_CANCEL_REASON = "Cancelled by admin"


def can_transition(current: str, target: OrderStatus) -> bool:
    try:
        current_status = OrderStatus(current)
    except ValueError:
        return False
    return current_status in ALLOWED_SOURCES.get(target, frozenset())


def ensure_transition(current: str, target: OrderStatus) -> None:
    """Raises InvalidTransitionError unless current -> target is legal."""
    if can_transition(current, target):
        return

    if current in {s.value for s in TERMINAL_STATUSES}:
        raise InvalidTransitionError(f"Order is already {current}")

    raise InvalidTransitionError(f"Cannot move order from {current} to {target.value}")


def expected_sources(target: OrderStatus) -> list:
    """Statuses used as the compare-and-swap guard for an update to target."""
    return sorted(s.value for s in ALLOWED_SOURCES[target])


def validate_cancel_reason(reason, actor: CancelledBy) -> str:
    """
    Buyer cancellations need a reason of at least MIN_CANCEL_REASON_LENGTH
    characters. For admins the reason is optional.
    """
    text = (reason or "").strip()

    if actor is CancelledBy.BUYER:
        if len(text) < MIN_CANCEL_REASON_LENGTH:
            raise ValidationError(
                f"Cancellation reason must be at least {MIN_CANCEL_REASON_LENGTH} characters"
            )
        return text

    return text or DEFAULT_ADMIN_CANCEL_REASON
