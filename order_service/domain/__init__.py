"""
Domain layer - Business logic and domain models.

This layer contains:
- Value objects (immutable, self-validating)
- The Order aggregate and its status state machine
- Domain events
- Domain exceptions

No I/O and no dependencies on infrastructure or frameworks.
The unit of work contract lives in domain.unit_of_work and is imported
explicitly by the layers that need it.
"""

from order_service.domain.entities import Order, OrderItem
from order_service.domain.events import (
    DomainEvent,
    OrderCancelled,
    OrderConfirmed,
    OrderCreated,
    OrderPaid,
)
from order_service.domain.exceptions import (
    ConcurrentModificationError,
    CurrencyMismatchError,
    DomainError,
    DuplicateEventError,
    DuplicateOrderError,
    EmptyOrderError,
    InvalidOrderStateError,
    InvalidValueError,
    OrderNotFoundError,
)
from order_service.domain.order_status import OrderStatus, can_transition
from order_service.domain.value_objects import (
    CustomerId,
    Money,
    OrderId,
    ProductId,
    Quantity,
)

__all__ = [
    "Order",
    "OrderItem",
    "OrderStatus",
    "can_transition",
    "OrderId",
    "CustomerId",
    "ProductId",
    "Quantity",
    "Money",
    "DomainEvent",
    "OrderCreated",
    "OrderConfirmed",
    "OrderPaid",
    "OrderCancelled",
    "DomainError",
    "InvalidValueError",
    "EmptyOrderError",
    "InvalidOrderStateError",
    "CurrencyMismatchError",
    "OrderNotFoundError",
    "DuplicateOrderError",
    "ConcurrentModificationError",
    "DuplicateEventError",
]
