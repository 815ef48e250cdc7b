"""
Ports for the order service.

The domain and application layers depend only on these interfaces;
SQLAlchemy and in-process implementations live in repositories/ and
infrastructure/.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from order_service.domain.entities import Order
    from order_service.domain.events import DomainEvent
    from order_service.domain.value_objects import CustomerId, OrderId


class IOrderRepository(ABC):
    """
    Interface for order storage and retrieval.

    Implementations must:
    - Persist the full aggregate (items in order, status, timestamps)
    - Rebuild orders through Order.reconstitute()
    - Detect concurrent updates of the same order
    """

    @abstractmethod
    async def add(self, order: 'Order') -> 'Order':
        """
        Persist a new order with its items.

        Raises:
            DuplicateOrderError: If the order ID already exists
        """
        pass

    @abstractmethod
    async def update(self, order: 'Order') -> 'Order':
        """
        Persist the status and updated_at of a previously loaded order.

        Raises:
            OrderNotFoundError: If the order doesn't exist
            ConcurrentModificationError: If it changed since it was loaded
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: 'OrderId') -> Optional['Order']:
        """
        Get order by ID with items.

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_customer(
        self,
        customer_id: 'CustomerId',
        limit: int = 50
    ) -> List['Order']:
        """Get a customer's orders, newest first"""
        pass


class IEventStore(ABC):
    """Append-only record of the events produced for each order"""

    @abstractmethod
    async def append(self, event: 'DomainEvent') -> None:
        """
        Record an event.

        Raises:
            DuplicateEventError: If the event_id was already recorded
        """
        pass

    @abstractmethod
    async def list_for_order(self, order_id: 'OrderId') -> List[Dict[str, Any]]:
        """Stored payloads for an order, oldest first"""
        pass


class IEventPublisher(ABC):
    """Hands domain events to whoever consumes them (bus, notifier, ...)"""

    @abstractmethod
    async def publish(self, event: 'DomainEvent') -> None:
        pass
