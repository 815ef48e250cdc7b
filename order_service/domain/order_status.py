"""
Order status state machine.

Normal flow:
    PENDING -> CONFIRMED -> PAYMENT_PROCESSING -> PAID -> SHIPPED -> DELIVERED

Alternative flows:
    PENDING/CONFIRMED -> CANCELLED
    PAYMENT_PROCESSING -> FAILED

A transition that is not listed in ALLOWED_TRANSITIONS is invalid.
"""

import enum
from typing import Dict, FrozenSet


class OrderStatus(str, enum.Enum):
    """Lifecycle status of an order"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PAYMENT_PROCESSING = "PAYMENT_PROCESSING"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Check whether moving from this status to target is allowed"""
        return can_transition(self, target)

    @property
    def is_terminal(self) -> bool:
        """Terminal statuses have no outgoing transitions"""
        return self in TERMINAL_STATUSES

    @property
    def can_be_cancelled(self) -> bool:
        """Cancellation is only possible before payment starts"""
        return self in CANCELLABLE_STATUSES


ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PAYMENT_PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PAYMENT_PROCESSING: frozenset({OrderStatus.PAID, OrderStatus.FAILED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.FAILED: frozenset(),
}

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset({
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
    OrderStatus.FAILED,
})

# Narrower than the transition table on purpose: only before payment
CANCELLABLE_STATUSES: FrozenSet[OrderStatus] = frozenset({
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
})


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """
    Pure check of the transition table.

    Args:
        current: Status the order is in
        target: Status the order would move to

    Returns:
        True if the pair is listed in ALLOWED_TRANSITIONS
    """
    return target in ALLOWED_TRANSITIONS[current]
