"""
Domain exceptions.

Every error raised by the order domain (and by the layers that persist or
orchestrate it) derives from DomainError, so callers can map business failures
to responses without catching unexpected runtime errors.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .order_status import OrderStatus
    from .value_objects import OrderId


class DomainError(Exception):
    """Base exception for domain layer errors"""
    pass


class InvalidValueError(DomainError, ValueError):
    """Raised when a value object or entity is built from invalid input"""
    pass


class EmptyOrderError(DomainError):
    """Raised when an order is created without items"""

    def __init__(self):
        super().__init__("Cannot create an order without items")


class InvalidOrderStateError(DomainError):
    """Raised when a status transition is not allowed from the current status"""

    def __init__(self, current_status: 'OrderStatus', target_status: 'OrderStatus'):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Invalid status transition: cannot move from "
            f"{current_status.value} to {target_status.value}"
        )


class CurrencyMismatchError(DomainError):
    """Raised when money in different currencies is combined"""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cannot operate on amounts with different currencies: "
            f"{expected} vs {actual}"
        )


class OrderNotFoundError(DomainError):
    """Raised when order doesn't exist"""

    def __init__(self, order_id: 'OrderId'):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class DuplicateOrderError(DomainError):
    """Raised when attempting to save an order that already exists"""

    def __init__(self, order_id: 'OrderId'):
        self.order_id = order_id
        super().__init__(f"Order {order_id} already exists")


class ConcurrentModificationError(DomainError):
    """Raised when an order was changed by someone else since it was loaded"""

    def __init__(self, order_id: 'OrderId'):
        self.order_id = order_id
        super().__init__(
            f"Order {order_id} was modified concurrently. Reload and retry."
        )


class DuplicateEventError(DomainError):
    """Raised when an event with the same event_id is appended twice"""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Event {event_id} already recorded")
