"""SQLAlchemy implementations of the order service ports."""
from order_service.repositories.order_repository import OrderRepository
from order_service.repositories.event_store import SQLAlchemyEventStore

__all__ = ["OrderRepository", "SQLAlchemyEventStore"]
