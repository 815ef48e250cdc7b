"""
In-process event publisher.

Dispatches domain events to handlers subscribed by event type tag
("order.created", "order.paid", ...) or to every event with "*".

Features:
- Sync and async handlers
- Handlers run in subscription order
- A failing handler is logged and does not stop the others
- Published events are kept in `published` for inspection
"""

import inspect
import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List

from order_service.core.interfaces import IEventPublisher
from order_service.domain.events import EVENT_TYPES, DomainEvent

logger = logging.getLogger(__name__)

ALL_EVENTS = "*"

EventHandler = Callable[[DomainEvent], object]


class InMemoryEventPublisher(IEventPublisher):
    """
    Publisher that delivers events to in-process handlers.

    No transport or retries: a handler that fails has missed the event.
    """

    def __init__(self):
        self._handlers: DefaultDict[str, List[EventHandler]] = defaultdict(list)
        self.published: List[DomainEvent] = []

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Register a handler for an event type tag, or "*" for all events.

        Raises:
            ValueError: If event_type is not a known tag
        """
        if event_type != ALL_EVENTS and event_type not in EVENT_TYPES:
            raise ValueError(
                f"Unknown event type: {event_type}. "
                f"Must be one of {sorted(EVENT_TYPES)} or '{ALL_EVENTS}'"
            )
        self._handlers[event_type].append(handler)

    async def publish(self, event: DomainEvent) -> None:
        self.published.append(event)
        handlers = self._handlers[event.event_type] + self._handlers[ALL_EVENTS]

        logger.info(
            f"📣 Publishing {event.event_type} ({event.event_id}) "
            f"for order {event.aggregate_id} to {len(handlers)} handler(s)"
        )

        for handler in handlers:
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    f"❌ Handler {getattr(handler, '__name__', handler)!s} failed "
                    f"for {event.event_type} ({event.event_id}): {e}",
                    exc_info=True
                )

    def clear(self) -> None:
        """Forget published events (handlers stay subscribed)"""
        self.published.clear()
