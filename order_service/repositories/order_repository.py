"""
Order Repository implementation using SQLAlchemy.

- Maps the Order aggregate to orders/order_items rows and back
- Preserves item order through the position column
- Optimistic locking through the orders.version column
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload, selectinload
import logging

from order_service.core.interfaces import IOrderRepository
from order_service.domain.entities import Order, OrderItem
from order_service.domain.exceptions import (
    ConcurrentModificationError,
    DuplicateOrderError,
    OrderNotFoundError,
)
from order_service.domain.order_status import OrderStatus
from order_service.domain.value_objects import (
    CustomerId,
    Money,
    OrderId,
    ProductId,
    Quantity,
)
from order_service.db.models import OrderModel, OrderItemModel

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """SQLite returns naive datetimes; everything is stored in UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class OrderRepository(IOrderRepository):
    """
    SQLAlchemy implementation of IOrderRepository.

    Handles conversion between:
    - Domain aggregate (Order, OrderItem) → ORM models (OrderModel, OrderItemModel)
    - ORM models → Domain aggregate (via Order.reconstitute)

    The repository remembers the version of every order it loaded or added;
    update() only succeeds if the row still has that version.
    """

    def __init__(self, db_session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            db_session: SQLAlchemy async session
        """
        self._db = db_session
        self._versions: Dict[str, int] = {}

    async def add(self, order: Order) -> Order:
        """
        Save a new order and its items atomically.

        Raises:
            DuplicateOrderError: If order ID already exists
        """
        try:
            db_order = self._to_orm(order)
            self._db.add(db_order)
            await self._db.flush()
            self._versions[order.order_id.value] = db_order.version

            logger.info(
                f"💾 Saved order {order.order_id} for customer {order.customer_id} "
                f"with {order.item_count} item(s)"
            )
            return order

        except IntegrityError as e:
            logger.error(f"Order {order.order_id} already exists")
            raise DuplicateOrderError(order.order_id) from e
        except Exception as e:
            logger.error(f"Failed to save order {order.order_id}: {e}")
            raise

    async def update(self, order: Order) -> Order:
        """
        Persist status and updated_at of an existing order.

        Items are immutable after creation, so only the order row changes.

        Raises:
            OrderNotFoundError: If the order doesn't exist
            ConcurrentModificationError: If the stored version moved on
        """
        order_key = order.order_id.value
        expected_version = self._versions.get(order_key)
        if expected_version is None:
            # Not loaded through this repository: take the stored version as-is
            expected_version = await self._current_version(order.order_id)
            if expected_version is None:
                raise OrderNotFoundError(order.order_id)

        stmt = (
            update(OrderModel)
            .where(OrderModel.id == order_key)
            .where(OrderModel.version == expected_version)
            .values(
                status=order.status.value,
                updated_at=order.updated_at,
                version=expected_version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._db.execute(stmt)

        if result.rowcount == 0:
            if await self._current_version(order.order_id) is None:
                raise OrderNotFoundError(order.order_id)
            logger.warning(
                f"⚠️ Concurrent update detected for order {order.order_id} "
                f"(expected version {expected_version})"
            )
            raise ConcurrentModificationError(order.order_id)

        self._versions[order_key] = expected_version + 1
        logger.info(f"💾 Updated order {order.order_id} → {order.status.value}")
        return order

    async def get_by_id(self, order_id: OrderId) -> Optional[Order]:
        """
        Retrieve order by ID with items.

        Returns:
            Order if found, None otherwise
        """
        try:
            stmt = (
                select(OrderModel)
                .where(OrderModel.id == order_id.value)
                .options(joinedload(OrderModel.items))
                .execution_options(populate_existing=True)
            )
            result = await self._db.execute(stmt)
            db_order = result.unique().scalar_one_or_none()

            if db_order is None:
                return None

            order = self._from_orm(db_order)
            logger.debug(
                f"📖 Retrieved order {order_id} ({order.status.value}) "
                f"with {order.item_count} item(s)"
            )
            return order

        except Exception as e:
            logger.error(f"Failed to retrieve order {order_id}: {e}")
            raise

    async def list_by_customer(
        self,
        customer_id: CustomerId,
        limit: int = 50
    ) -> List[Order]:
        """
        Get orders of a customer, newest first.

        Args:
            customer_id: Customer identifier
            limit: Maximum orders to return
        """
        try:
            stmt = (
                select(OrderModel)
                .where(OrderModel.customer_id == customer_id.value)
                .options(selectinload(OrderModel.items))
                .order_by(desc(OrderModel.created_at))
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            result = await self._db.execute(stmt)
            orders = [self._from_orm(db_order) for db_order in result.scalars().all()]

            logger.debug(f"📬 Retrieved {len(orders)} orders for customer {customer_id}")
            return orders

        except Exception as e:
            logger.error(f"Failed to list orders for customer {customer_id}: {e}")
            raise

    async def _current_version(self, order_id: OrderId) -> Optional[int]:
        result = await self._db.execute(
            select(OrderModel.version).where(OrderModel.id == order_id.value)
        )
        return result.scalar_one_or_none()

    # Domain ↔ ORM conversion methods

    def _to_orm(self, order: Order) -> OrderModel:
        """Convert domain Order → ORM OrderModel (with items)"""
        return OrderModel(
            id=order.order_id.value,
            customer_id=order.customer_id.value,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
            version=1,
            items=[
                self._item_to_orm(item, position)
                for position, item in enumerate(order.items)
            ],
        )

    def _from_orm(self, db_order: OrderModel) -> Order:
        """Convert ORM OrderModel → domain Order"""
        self._versions[db_order.id] = db_order.version
        items = [
            self._item_from_orm(db_item)
            for db_item in sorted(db_order.items, key=lambda i: i.position)
        ]
        return Order.reconstitute(
            order_id=OrderId(db_order.id),
            customer_id=CustomerId(db_order.customer_id),
            items=items,
            status=OrderStatus(db_order.status),
            created_at=_as_utc(db_order.created_at),
            updated_at=_as_utc(db_order.updated_at),
        )

    def _item_to_orm(self, item: OrderItem, position: int) -> OrderItemModel:
        """Convert domain OrderItem → ORM OrderItemModel"""
        return OrderItemModel(
            position=position,
            product_id=item.product_id.value,
            product_name=item.product_name,
            quantity=item.quantity.value,
            unit_price=f"{item.unit_price.amount:f}",
            currency=item.unit_price.currency,
        )

    def _item_from_orm(self, db_item: OrderItemModel) -> OrderItem:
        """Convert ORM OrderItemModel → domain OrderItem"""
        return OrderItem(
            product_id=ProductId(db_item.product_id),
            product_name=db_item.product_name,
            quantity=Quantity(db_item.quantity),
            unit_price=Money.of(db_item.unit_price, db_item.currency),
        )
