"""
Domain events for the order bounded context.

Events are immutable facts about a completed transition. The Order aggregate
does not raise them itself: the application layer builds the matching event
after a transition succeeds and hands it to an IEventPublisher.

Every event carries:
- event_id     UUID4 string, the idempotency key for consumers
- occurred_at  UTC creation time
- event_type   stable routing tag (class attribute), e.g. "order.created"
"""

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, ClassVar, Dict, Type

from .entities import Order, utc_now
from .exceptions import InvalidValueError
from .value_objects import CustomerId, Money, OrderId, ProductId


def new_event_id() -> str:
    return str(uuid.uuid4())


def _to_primitive(value: Any) -> Any:
    if isinstance(value, Money):
        return {"amount": f"{value.amount:f}", "currency": value.currency}
    if isinstance(value, (OrderId, CustomerId, ProductId)):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Immutable base for every order event"""

    event_type: ClassVar[str] = "domain.event"

    event_id: str = field(default_factory=new_event_id)
    occurred_at: datetime = field(default_factory=utc_now)

    @property
    def aggregate_id(self) -> str:
        """Id of the order the event is about"""
        return self.order_id.value  # type: ignore[attr-defined]

    def to_payload(self) -> Dict[str, Any]:
        """Flat dict of primitives, used by the event store"""
        payload = {"event_type": self.event_type}
        for f in fields(self):
            payload[f.name] = _to_primitive(getattr(self, f.name))
        return payload


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    """
    A new order was placed.

    Consumed by inventory (reserve stock) and notifications (confirm to customer).
    """

    event_type: ClassVar[str] = "order.created"

    order_id: OrderId
    customer_id: CustomerId
    total: Money
    item_count: int

    def __post_init__(self):
        if self.item_count <= 0:
            raise InvalidValueError(
                f"OrderCreated item_count must be positive, got {self.item_count}"
            )

    @classmethod
    def of(
        cls,
        order_id: OrderId,
        customer_id: CustomerId,
        total: Money,
        item_count: int
    ) -> "OrderCreated":
        return cls(
            order_id=order_id,
            customer_id=customer_id,
            total=total,
            item_count=item_count,
        )


@dataclass(frozen=True, kw_only=True)
class OrderConfirmed(DomainEvent):
    """The customer accepted the order; payment can start."""

    event_type: ClassVar[str] = "order.confirmed"

    order_id: OrderId

    @classmethod
    def of(cls, order_id: OrderId) -> "OrderConfirmed":
        return cls(order_id=order_id)


@dataclass(frozen=True, kw_only=True)
class OrderPaid(DomainEvent):
    """Payment succeeded. Consumed by inventory and fulfilment."""

    event_type: ClassVar[str] = "order.paid"

    order_id: OrderId
    amount: Money

    @classmethod
    def of(cls, order_id: OrderId, amount: Money) -> "OrderPaid":
        return cls(order_id=order_id, amount=amount)


@dataclass(frozen=True, kw_only=True)
class OrderCancelled(DomainEvent):
    """The order was cancelled. Consumed by inventory (release stock)."""

    event_type: ClassVar[str] = "order.cancelled"

    order_id: OrderId
    reason: str

    def __post_init__(self):
        if not isinstance(self.reason, str) or not self.reason.strip():
            raise InvalidValueError("Cancellation reason cannot be empty")

    @classmethod
    def of(cls, order_id: OrderId, reason: str) -> "OrderCancelled":
        return cls(order_id=order_id, reason=reason)


EVENT_TYPES: Dict[str, Type[DomainEvent]] = {
    cls.event_type: cls
    for cls in (OrderCreated, OrderConfirmed, OrderPaid, OrderCancelled)
}


# Builders from the current aggregate state

def order_created(order: Order) -> OrderCreated:
    return OrderCreated.of(
        order_id=order.order_id,
        customer_id=order.customer_id,
        total=order.get_total(),
        item_count=order.item_count,
    )


def order_confirmed(order: Order) -> OrderConfirmed:
    return OrderConfirmed.of(order.order_id)


def order_paid(order: Order) -> OrderPaid:
    return OrderPaid.of(order.order_id, order.get_total())


def order_cancelled(order: Order, reason: str) -> OrderCancelled:
    return OrderCancelled.of(order.order_id, reason)
