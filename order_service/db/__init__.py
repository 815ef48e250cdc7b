"""Database package - all database-related code."""
from order_service.db.connection import init_db, get_db_session, get_session_maker, close_db
from order_service.db.models import Base, OrderModel, OrderItemModel, OrderEventModel

__all__ = [
    "init_db",
    "get_db_session",
    "get_session_maker",
    "close_db",
    "Base",
    "OrderModel",
    "OrderItemModel",
    "OrderEventModel",
]
