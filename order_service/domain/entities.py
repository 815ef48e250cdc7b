"""
Domain Entities - Rich business objects with identity and lifecycle.

The Order entity is an aggregate root - it owns its OrderItems and is the
only object allowed to change its status.

Invariants enforced here:
1. An order always has at least one item
2. All items are priced in the same currency
3. Status only changes through the transition table in order_status.py
4. updated_at >= created_at, refreshed on every accepted transition
5. The total is always computed from the items, never stored
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import reduce
from typing import Iterable, Optional, Tuple

from .exceptions import (
    CurrencyMismatchError,
    EmptyOrderError,
    InvalidOrderStateError,
    InvalidValueError,
)
from .order_status import OrderStatus
from .value_objects import CustomerId, Money, OrderId, ProductId, Quantity


def utc_now() -> datetime:
    """Current time as timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """
    One purchased line of an order - part of Order aggregate.

    Items have no lifecycle of their own and are compared structurally:
    the same product may appear twice with different quantities or prices.
    """

    product_id: ProductId
    product_name: str
    quantity: Quantity
    unit_price: Money

    def __post_init__(self):
        if not isinstance(self.product_id, ProductId):
            raise InvalidValueError("OrderItem requires a ProductId")
        if not isinstance(self.product_name, str) or not self.product_name.strip():
            raise InvalidValueError("Product name cannot be empty")
        if not isinstance(self.quantity, Quantity):
            raise InvalidValueError("OrderItem requires a Quantity")
        if not isinstance(self.unit_price, Money):
            raise InvalidValueError("OrderItem requires a Money unit price")

    @classmethod
    def create(
        cls,
        product_id: ProductId,
        product_name: str,
        quantity: Quantity,
        unit_price: Money
    ) -> "OrderItem":
        return cls(
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
        )

    @property
    def subtotal(self) -> Money:
        """unit_price x quantity"""
        return self.unit_price.multiply(self.quantity.value)

    @property
    def currency(self) -> str:
        return self.unit_price.currency

    def __repr__(self) -> str:
        return (
            f"OrderItem(product={self.product_id}, name='{self.product_name}', "
            f"quantity={self.quantity}, unit_price={self.unit_price})"
        )


class Order:
    """
    Order aggregate root.

    Build new orders with Order.create() and reload persisted ones with
    Order.reconstitute(). Status changes only through the named transition
    methods; a rejected transition raises InvalidOrderStateError and leaves
    the order untouched.

    Not safe for concurrent writers: consistency across processes is up to
    the persistence layer (see OrderRepository versioning).
    """

    def __init__(
        self,
        order_id: OrderId,
        customer_id: CustomerId,
        items: Iterable[OrderItem],
        status: OrderStatus,
        created_at: datetime,
        updated_at: datetime
    ):
        if not isinstance(order_id, OrderId):
            raise InvalidValueError("Order requires an OrderId")
        if not isinstance(customer_id, CustomerId):
            raise InvalidValueError("Order requires a CustomerId")

        items = tuple(items) if items is not None else ()
        if not items:
            raise EmptyOrderError()
        for item in items:
            if not isinstance(item, OrderItem):
                raise InvalidValueError(
                    f"Order items must be OrderItem, got {type(item).__name__}"
                )
        _require_single_currency(items)

        if not isinstance(status, OrderStatus):
            raise InvalidValueError(f"Invalid order status: {status!r}")
        if not isinstance(created_at, datetime) or not isinstance(updated_at, datetime):
            raise InvalidValueError("created_at and updated_at must be datetimes")
        if created_at.tzinfo is None or updated_at.tzinfo is None:
            raise InvalidValueError("created_at and updated_at must be timezone-aware")
        if updated_at < created_at:
            raise InvalidValueError(
                f"updated_at ({updated_at}) cannot be before created_at ({created_at})"
            )

        self._order_id = order_id
        self._customer_id = customer_id
        self._items: Tuple[OrderItem, ...] = items
        self._status = status
        self._created_at = created_at
        self._updated_at = updated_at

    # Factories

    @classmethod
    def create(
        cls,
        customer_id: CustomerId,
        items: Optional[Iterable[OrderItem]]
    ) -> "Order":
        """
        Create a new PENDING order with a generated id.

        Raises:
            EmptyOrderError: If items is None or empty
            CurrencyMismatchError: If items are priced in different currencies
        """
        if items is None:
            raise EmptyOrderError()
        now = utc_now()
        return cls(
            order_id=OrderId.generate(),
            customer_id=customer_id,
            items=items,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstitute(
        cls,
        order_id: OrderId,
        customer_id: CustomerId,
        items: Iterable[OrderItem],
        status: OrderStatus,
        created_at: datetime,
        updated_at: datetime
    ) -> "Order":
        """Rebuild a persisted order exactly as it was stored"""
        return cls(
            order_id=order_id,
            customer_id=customer_id,
            items=items,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        )

    # Transitions

    def confirm(self) -> None:
        """PENDING -> CONFIRMED"""
        self._transition_to(OrderStatus.CONFIRMED)

    def start_payment_processing(self) -> None:
        """CONFIRMED -> PAYMENT_PROCESSING"""
        self._transition_to(OrderStatus.PAYMENT_PROCESSING)

    def mark_as_paid(self) -> None:
        """PAYMENT_PROCESSING -> PAID"""
        self._transition_to(OrderStatus.PAID)

    def ship(self) -> None:
        """PAID -> SHIPPED"""
        self._transition_to(OrderStatus.SHIPPED)

    def deliver(self) -> None:
        """SHIPPED -> DELIVERED"""
        self._transition_to(OrderStatus.DELIVERED)

    def cancel(self) -> None:
        """
        Cancel the order. Only PENDING or CONFIRMED orders can be cancelled.

        Raises:
            InvalidOrderStateError: With target CANCELLED if payment already started
        """
        if not self._status.can_be_cancelled:
            raise InvalidOrderStateError(self._status, OrderStatus.CANCELLED)
        self._transition_to(OrderStatus.CANCELLED)

    def mark_as_failed(self) -> None:
        """PAYMENT_PROCESSING -> FAILED (payment error)"""
        self._transition_to(OrderStatus.FAILED)

    def _transition_to(self, target: OrderStatus) -> None:
        if not self._status.can_transition_to(target):
            raise InvalidOrderStateError(self._status, target)
        self._status = target
        # never earlier than created_at, even if the clock steps back
        self._updated_at = max(utc_now(), self._created_at)

    # Queries

    def get_total(self) -> Money:
        """
        Sum of all item subtotals.

        Raises:
            CurrencyMismatchError: If items carry different currencies
        """
        if not self._items:
            raise EmptyOrderError()
        return reduce(Money.add, (item.subtotal for item in self._items))

    @property
    def total(self) -> Money:
        return self.get_total()

    @property
    def order_id(self) -> OrderId:
        return self._order_id

    @property
    def customer_id(self) -> CustomerId:
        return self._customer_id

    @property
    def items(self) -> Tuple[OrderItem, ...]:
        """Items in order of creation (immutable view)"""
        return self._items

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def currency(self) -> str:
        return self._items[0].currency

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_terminal(self) -> bool:
        return self._status.is_terminal

    @property
    def can_be_cancelled(self) -> bool:
        return self._status.can_be_cancelled

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return self._order_id == other._order_id

    def __hash__(self) -> int:
        return hash(self._order_id)

    def __repr__(self) -> str:
        return (
            f"Order(id={self._order_id}, customer={self._customer_id}, "
            f"status={self._status.value}, items={self.item_count})"
        )


def _require_single_currency(items: Tuple[OrderItem, ...]) -> None:
    expected = items[0].currency
    for item in items[1:]:
        if item.currency != expected:
            raise CurrencyMismatchError(expected, item.currency)
