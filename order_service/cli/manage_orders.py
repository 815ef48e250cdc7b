#!/usr/bin/env python3
"""
CLI tool to manage orders.

Usage:
    python -m order_service.cli.manage_orders create --customer c1 --item p1:Laptop:1:1000.00 --item p2:Mouse:2:50
    python -m order_service.cli.manage_orders show --order ORDER_ID
    python -m order_service.cli.manage_orders list --customer c1
    python -m order_service.cli.manage_orders confirm --order ORDER_ID
    python -m order_service.cli.manage_orders start-payment --order ORDER_ID
    python -m order_service.cli.manage_orders pay --order ORDER_ID
    python -m order_service.cli.manage_orders ship --order ORDER_ID
    python -m order_service.cli.manage_orders deliver --order ORDER_ID
    python -m order_service.cli.manage_orders fail --order ORDER_ID
    python -m order_service.cli.manage_orders cancel --order ORDER_ID --reason "out of stock"

Item format:
    PRODUCT_ID:NAME:QUANTITY:UNIT_PRICE[:CURRENCY]
    Currency defaults to DEFAULT_CURRENCY (COP).
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from pydantic import ValidationError

from order_service.application import (
    CancelOrderCommand,
    CreateOrderCommand,
    OrderItemInput,
    OrderService,
)
from order_service.db import close_db, get_session_maker, init_db
from order_service.domain import DomainError, DomainEvent, Order
from order_service.domain.unit_of_work import unit_of_work
from order_service.infrastructure import ALL_EVENTS, InMemoryEventPublisher, configure_logging
from order_service.version import __version__

TRANSITIONS = {
    'confirm': 'confirm_order',
    'start-payment': 'start_payment',
    'pay': 'mark_paid',
    'ship': 'ship_order',
    'deliver': 'deliver_order',
    'fail': 'mark_failed',
}


def parse_item_spec(spec: str) -> OrderItemInput:
    """
    Parse PRODUCT_ID:NAME:QUANTITY:UNIT_PRICE[:CURRENCY].

    Used as an argparse ``type=`` so the message reaches the user.

    Raises:
        argparse.ArgumentTypeError: If the item is malformed
    """
    parts = spec.split(':')
    if len(parts) not in (4, 5):
        raise argparse.ArgumentTypeError(
            f"Invalid item '{spec}'. Expected PRODUCT_ID:NAME:QUANTITY:UNIT_PRICE[:CURRENCY]"
        )

    product_id, name, quantity, unit_price = parts[:4]
    currency = parts[4] if len(parts) == 5 else None

    try:
        quantity_value = int(quantity)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid quantity in '{spec}': {quantity} is not a number"
        )

    try:
        return OrderItemInput(
            product_id=product_id,
            product_name=name,
            quantity=quantity_value,
            unit_price=unit_price,
            currency=currency or None,
        )
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise argparse.ArgumentTypeError(f"Invalid item '{spec}': {errors}")


def print_order(order: Order) -> None:
    print("\n" + "="*70)
    print(f"Order {order.order_id}")
    print("="*70)
    print(f"  Customer: {order.customer_id}")
    print(f"  Status:   {order.status.value}")
    print(f"  Currency: {order.currency}")
    print(f"  Created:  {order.created_at.strftime('%Y-%m-%d %H:%M:%S UTC')}")
    print(f"  Updated:  {order.updated_at.strftime('%Y-%m-%d %H:%M:%S UTC')}")
    print()
    for item in order.items:
        print(
            f"  - {item.product_name} ({item.product_id}) "
            f"x{item.quantity} @ {item.unit_price} = {item.subtotal}"
        )
    print()
    print(f"  Total: {order.get_total()}")
    print("="*70)


def print_event(event: DomainEvent) -> None:
    print(f"📣 {event.event_type} ({event.event_id})")


async def run(args: argparse.Namespace) -> int:
    """Execute one CLI command. Returns the process exit code."""
    await init_db(args.database_url)

    publisher = InMemoryEventPublisher()
    publisher.subscribe(ALL_EVENTS, print_event)
    service = OrderService(publisher=publisher)

    session_maker = get_session_maker()
    try:
        async with unit_of_work(session_maker()) as uow:
            if args.command == 'create':
                command = CreateOrderCommand(customer_id=args.customer, items=args.item)
                order = await service.create_order(uow, command)
                print_order(order)

            elif args.command == 'show':
                order = await service.get_order(uow, args.order)
                print_order(order)
                history = await service.get_order_history(uow, order.order_id)
                print("History:")
                for entry in history:
                    print(f"  {entry['occurred_at']}  {entry['event_type']}")

            elif args.command == 'list':
                orders = await service.list_customer_orders(uow, args.customer, limit=args.limit)
                if not orders:
                    print(f"No orders found for customer '{args.customer}'.")
                for order in orders:
                    print(
                        f"  - {order.order_id}  {order.status.value:<18}  "
                        f"{order.get_total()}  ({order.item_count} items)"
                    )
                print(f"Total orders: {len(orders)}")

            elif args.command == 'cancel':
                order = await service.cancel_order(
                    uow, CancelOrderCommand(order_id=args.order, reason=args.reason)
                )
                print(f"[SUCCESS] Order {order.order_id} → {order.status.value}")

            else:
                operation = getattr(service, TRANSITIONS[args.command])
                order = await operation(uow, args.order)
                print(f"[SUCCESS] Order {order.order_id} → {order.status.value}")

        return 0

    except DomainError as e:
        print(f"[ERROR] {e}")
        return 1
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1
    finally:
        await close_db()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f'Manage orders (order-service {__version__})',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--database-url', help='Override DATABASE_URL')
    parser.add_argument('--log-level', help='Override LOG_LEVEL')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # Create order command
    create_parser = subparsers.add_parser('create', help='Create a new order')
    create_parser.add_argument('--customer', required=True, help='Customer ID')
    create_parser.add_argument(
        '--item', action='append', required=True, type=parse_item_spec,
        help='PRODUCT_ID:NAME:QUANTITY:UNIT_PRICE[:CURRENCY] (repeatable)'
    )

    # Show order command
    show_parser = subparsers.add_parser('show', help='Show an order and its history')
    show_parser.add_argument('--order', required=True, help='Order ID')

    # List orders command
    list_parser = subparsers.add_parser('list', help="List a customer's orders")
    list_parser.add_argument('--customer', required=True, help='Customer ID')
    list_parser.add_argument('--limit', type=int, default=50, help='Maximum orders to list')

    # Transition commands
    for name in TRANSITIONS:
        transition_parser = subparsers.add_parser(name, help=f'{name} an order')
        transition_parser.add_argument('--order', required=True, help='Order ID')

    cancel_parser = subparsers.add_parser('cancel', help='Cancel an order')
    cancel_parser.add_argument('--order', required=True, help='Order ID')
    cancel_parser.add_argument('--reason', default='cancelled by customer', help='Cancellation reason')

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    sys.exit(asyncio.run(run(args)))


if __name__ == '__main__':
    main()
