"""
Infrastructure layer - External concerns and cross-cutting functionality.

This layer contains:
- In-process event publication
- Logging utilities
"""
from order_service.infrastructure.event_publisher import ALL_EVENTS, InMemoryEventPublisher
from order_service.infrastructure.logging_config import configure_logging

__all__ = ["ALL_EVENTS", "InMemoryEventPublisher", "configure_logging"]
