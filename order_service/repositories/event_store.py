"""
Event store implementation using SQLAlchemy.

Append-only log of the domain events produced for each order. Rows are
written in the same transaction as the order change that caused them.
"""

import json
import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from order_service.core.interfaces import IEventStore
from order_service.db.models import OrderEventModel
from order_service.domain.events import DomainEvent
from order_service.domain.exceptions import DuplicateEventError
from order_service.domain.value_objects import OrderId

logger = logging.getLogger(__name__)


class SQLAlchemyEventStore(IEventStore):
    """Stores DomainEvent.to_payload() as JSON in order_events"""

    def __init__(self, db_session: AsyncSession):
        self._db = db_session

    async def append(self, event: DomainEvent) -> None:
        """
        Record an event.

        Raises:
            DuplicateEventError: If event_id already recorded
        """
        row = OrderEventModel(
            event_id=event.event_id,
            event_type=event.event_type,
            order_id=event.aggregate_id,
            occurred_at=event.occurred_at,
            payload=json.dumps(event.to_payload(), sort_keys=True),
        )
        try:
            self._db.add(row)
            await self._db.flush()
            logger.debug(f"📝 Recorded {event.event_type} for order {event.aggregate_id}")
        except IntegrityError as e:
            logger.error(f"Event {event.event_id} already recorded")
            raise DuplicateEventError(event.event_id) from e

    async def list_for_order(self, order_id: OrderId) -> List[Dict[str, Any]]:
        """Stored payloads for an order, oldest first"""
        stmt = (
            select(OrderEventModel)
            .where(OrderEventModel.order_id == order_id.value)
            .order_by(OrderEventModel.occurred_at, OrderEventModel.id)
        )
        result = await self._db.execute(stmt)
        return [json.loads(row.payload) for row in result.scalars().all()]
