"""
Unit tests for domain events.
"""
from datetime import datetime

import pytest

from order_service.domain import (
    InvalidValueError,
    Money,
    Order,
    OrderCancelled,
    OrderConfirmed,
    OrderCreated,
    OrderId,
    OrderPaid,
)
from order_service.domain.events import (
    EVENT_TYPES,
    order_cancelled,
    order_confirmed,
    order_created,
    order_paid,
)


@pytest.fixture
def order(customer_id, laptop_and_mice):
    return Order.create(customer_id, laptop_and_mice)


def test_order_created_from_aggregate(order):
    event = order_created(order)

    assert event.event_type == "order.created"
    assert event.order_id == order.order_id
    assert event.customer_id == order.customer_id
    assert event.total == Money.of("1100", "COP")
    assert event.item_count == 2
    assert event.aggregate_id == order.order_id.value
    assert event.occurred_at.tzinfo is not None


def test_order_paid_amount_is_total(order):
    event = order_paid(order)
    assert event.event_type == "order.paid"
    assert event.amount == order.get_total()


def test_confirmed_and_cancelled(order):
    assert order_confirmed(order).event_type == "order.confirmed"
    cancelled = order_cancelled(order, "out of stock")
    assert cancelled.event_type == "order.cancelled"
    assert cancelled.reason == "out of stock"


def test_event_ids_are_unique(order):
    ids = {order_confirmed(order).event_id for _ in range(50)}
    assert len(ids) == 50


def test_events_are_immutable(order):
    event = order_confirmed(order)
    with pytest.raises(AttributeError):
        event.order_id = OrderId("other")


def test_created_requires_items(order):
    with pytest.raises(InvalidValueError):
        OrderCreated.of(order.order_id, order.customer_id, order.get_total(), 0)


@pytest.mark.parametrize("reason", ["", "   "])
def test_cancelled_requires_reason(order, reason):
    with pytest.raises(InvalidValueError):
        OrderCancelled.of(order.order_id, reason)


def test_to_payload_uses_primitives(order):
    event = order_created(order)
    payload = event.to_payload()

    assert payload["event_type"] == "order.created"
    assert payload["event_id"] == event.event_id
    assert payload["order_id"] == order.order_id.value
    assert payload["customer_id"] == "customer_123"
    assert payload["total"] == {"amount": "1100.00", "currency": "COP"}
    assert payload["item_count"] == 2
    assert datetime.fromisoformat(payload["occurred_at"]) == event.occurred_at


def test_event_type_registry():
    assert EVENT_TYPES == {
        "order.created": OrderCreated,
        "order.confirmed": OrderConfirmed,
        "order.paid": OrderPaid,
        "order.cancelled": OrderCancelled,
    }
