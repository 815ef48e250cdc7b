"""
Application layer - Use cases and business logic orchestration.

This layer contains:
- Commands (validated input)
- The OrderService use cases

No direct dependencies on frameworks; persistence is reached through the
Unit of Work.
"""
from order_service.application.commands import (
    CancelOrderCommand,
    CreateOrderCommand,
    OrderItemInput,
)
from order_service.application.order_service import OrderService

__all__ = ["OrderService", "CreateOrderCommand", "CancelOrderCommand", "OrderItemInput"]
