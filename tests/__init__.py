"""
Tests for the order service.

Tests are organized by layer:
- test_value_objects.py, test_money.py, test_order_status.py, test_order.py, test_events.py: domain
- test_order_repository.py, test_event_store.py, test_unit_of_work.py: persistence
- test_order_service.py, test_event_publisher.py: application and infrastructure
- test_config.py, test_cli.py: configuration and command line
"""
