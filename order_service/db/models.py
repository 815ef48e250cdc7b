"""
SQLAlchemy ORM models for database tables.

Persisted shape of an order:
    orders        one row per aggregate (id, customer, status, timestamps, version)
    order_items   one row per line, ordered by position
    order_events  append-only event log
"""
from sqlalchemy import Column, String, Text, DateTime, Index, ForeignKey, Integer
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class OrderModel(Base):
    """
    Orders table - one row per Order aggregate.

    version is incremented on every update and used for optimistic locking.
    """
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)  # OrderId (UUID4 when generated)
    customer_id = Column(String(100), nullable=False)  # From customer context
    status = Column(String(32), nullable=False)  # OrderStatus value
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        Index('idx_orders_customer_id', 'customer_id'),
        Index('idx_orders_status', 'status'),
    )

    # Relationships
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )


class OrderItemModel(Base):
    """
    Order lines.

    unit_price is stored as decimal text ("1000.00") so the exact amount
    survives databases without a native decimal type (SQLite).
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(64), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False)  # 0, 1, 2... preserves item order
    product_id = Column(String(100), nullable=False)  # From catalog context
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(String(32), nullable=False)
    currency = Column(String(10), nullable=False)

    __table_args__ = (
        Index('idx_order_items_order_id', 'order_id'),
    )

    # Relationships
    order = relationship("OrderModel", back_populates="items")


class OrderEventModel(Base):
    """
    Event log - every domain event recorded for an order.

    Append-only: rows are never updated or deleted by the service.
    """
    __tablename__ = "order_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(64), unique=True, nullable=False)  # Idempotency key
    event_type = Column(String(50), nullable=False)  # 'order.created', 'order.paid', ...
    order_id = Column(String(64), nullable=False)
    occurred_at = Column(DateTime(timezone=True), nullable=False)
    payload = Column(Text, nullable=False)  # JSON from DomainEvent.to_payload()

    __table_args__ = (
        Index('idx_order_events_order_id', 'order_id'),
        Index('idx_order_events_type_occurred', 'event_type', 'occurred_at'),
    )
