"""Core module containing interfaces."""

from order_service.core.interfaces import IEventPublisher, IEventStore, IOrderRepository

__all__ = ["IOrderRepository", "IEventStore", "IEventPublisher"]
