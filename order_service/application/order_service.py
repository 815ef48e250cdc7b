"""
Order Service - Use case orchestration for the order lifecycle.

This service provides a unified interface for:
- Placing orders (command → value objects → Order aggregate)
- Moving orders through their lifecycle
- Recording domain events in the event store
- Publishing events after commit (via post-commit hooks)

The aggregate decides whether a transition is allowed; the service only
loads, delegates, persists and reports.
"""

from typing import Any, Callable, Dict, List, Optional, Union
import logging

from order_service.application.commands import (
    CancelOrderCommand,
    CreateOrderCommand,
    OrderItemInput,
)
from order_service.config import settings
from order_service.core.interfaces import IEventPublisher
from order_service.domain.entities import Order, OrderItem
from order_service.domain.events import (
    DomainEvent,
    order_cancelled,
    order_confirmed,
    order_created,
    order_paid,
)
from order_service.domain.exceptions import DomainError, OrderNotFoundError
from order_service.domain.unit_of_work import AbstractUnitOfWork
from order_service.domain.value_objects import (
    CustomerId,
    Money,
    OrderId,
    ProductId,
    Quantity,
)

logger = logging.getLogger(__name__)

OrderRef = Union[OrderId, str]


def _order_id(value: OrderRef) -> OrderId:
    return value if isinstance(value, OrderId) else OrderId(value)


class OrderService:
    """
    Application service for order operations.

    Orchestrates:
    - Domain logic (Order aggregate transitions)
    - Infrastructure (repository, event store)
    - Cross-cutting concerns (logging, event publication)

    All operations take a Unit of Work; the caller owns the transaction.
    """

    def __init__(
        self,
        publisher: Optional[IEventPublisher] = None,
        publish_events: Optional[bool] = None
    ):
        """
        Args:
            publisher: Receives events after commit. None disables publication.
            publish_events: Override settings.publish_events
        """
        self._publisher = publisher
        self._publish_events = (
            settings.publish_events if publish_events is None else publish_events
        )

    async def create_order(
        self,
        uow: AbstractUnitOfWork,
        command: CreateOrderCommand
    ) -> Order:
        """
        Place a new order in PENDING.

        Raises:
            EmptyOrderError: If no items reach the aggregate
            InvalidValueError: If an id, name or price is invalid
            CurrencyMismatchError: If items use different currencies
        """
        items = [self._build_item(item) for item in command.items]
        order = Order.create(CustomerId(command.customer_id), items)

        await uow.orders.add(order)
        await self._record(uow, order_created(order))

        logger.info(
            f"🛒 Created order {order.order_id} for customer {order.customer_id}: "
            f"{order.item_count} item(s), total {order.get_total()}"
        )
        return order

    async def confirm_order(self, uow: AbstractUnitOfWork, order_id: OrderRef) -> Order:
        order = await self._transition(uow, order_id, Order.confirm)
        await self._record(uow, order_confirmed(order))
        return order

    async def start_payment(self, uow: AbstractUnitOfWork, order_id: OrderRef) -> Order:
        return await self._transition(uow, order_id, Order.start_payment_processing)

    async def mark_paid(self, uow: AbstractUnitOfWork, order_id: OrderRef) -> Order:
        order = await self._transition(uow, order_id, Order.mark_as_paid)
        await self._record(uow, order_paid(order))
        return order

    async def ship_order(self, uow: AbstractUnitOfWork, order_id: OrderRef) -> Order:
        return await self._transition(uow, order_id, Order.ship)

    async def deliver_order(self, uow: AbstractUnitOfWork, order_id: OrderRef) -> Order:
        return await self._transition(uow, order_id, Order.deliver)

    async def mark_failed(self, uow: AbstractUnitOfWork, order_id: OrderRef) -> Order:
        return await self._transition(uow, order_id, Order.mark_as_failed)

    async def cancel_order(
        self,
        uow: AbstractUnitOfWork,
        command: CancelOrderCommand
    ) -> Order:
        """
        Cancel an order that has not reached payment.

        Raises:
            OrderNotFoundError: If the order doesn't exist
            InvalidOrderStateError: If the order can no longer be cancelled
        """
        order = await self._transition(uow, command.order_id, Order.cancel)
        await self._record(uow, order_cancelled(order, command.reason))
        return order

    async def get_order(self, uow: AbstractUnitOfWork, order_id: OrderRef) -> Order:
        """
        Raises:
            OrderNotFoundError: If the order doesn't exist
        """
        order_id = _order_id(order_id)
        order = await uow.orders.get_by_id(order_id)
        if order is None:
            logger.error(f"Order not found: {order_id}")
            raise OrderNotFoundError(order_id)
        return order

    async def list_customer_orders(
        self,
        uow: AbstractUnitOfWork,
        customer_id: Union[CustomerId, str],
        limit: int = 50
    ) -> List[Order]:
        if not isinstance(customer_id, CustomerId):
            customer_id = CustomerId(customer_id)
        return await uow.orders.list_by_customer(customer_id, limit=limit)

    async def get_order_history(
        self,
        uow: AbstractUnitOfWork,
        order_id: OrderRef
    ) -> List[Dict[str, Any]]:
        """Recorded events of an order, oldest first"""
        order = await self.get_order(uow, order_id)
        return await uow.events.list_for_order(order.order_id)

    # Internal helpers

    def _build_item(self, item: OrderItemInput) -> OrderItem:
        return OrderItem.create(
            product_id=ProductId(item.product_id),
            product_name=item.product_name,
            quantity=Quantity(item.quantity),
            unit_price=Money.of(item.unit_price, item.currency or settings.default_currency),
        )

    async def _transition(
        self,
        uow: AbstractUnitOfWork,
        order_id: OrderRef,
        action: Callable[[Order], None]
    ) -> Order:
        """Load, apply one aggregate transition, persist"""
        order = await self.get_order(uow, order_id)
        previous = order.status

        try:
            action(order)
        except DomainError as e:
            logger.warning(f"⚠️ Rejected {action.__name__} for order {order.order_id}: {e}")
            raise

        await uow.orders.update(order)
        logger.info(f"🔄 Order {order.order_id}: {previous.value} → {order.status.value}")
        return order

    async def _record(self, uow: AbstractUnitOfWork, event: DomainEvent) -> None:
        """Store the event now, publish it after commit"""
        await uow.events.append(event)

        if self._publish_events and self._publisher is not None:
            publisher = self._publisher
            uow.add_post_commit_hook(lambda: publisher.publish(event))
