"""
Integration tests for OrderRepository.

These tests verify the repository works correctly with a real database.
"""
import pytest
from sqlalchemy import update

from order_service.db.connection import get_db_session, get_session_maker
from order_service.db.models import OrderModel
from order_service.domain import (
    ConcurrentModificationError,
    CustomerId,
    DuplicateOrderError,
    Money,
    Order,
    OrderId,
    OrderNotFoundError,
    OrderStatus,
)
from order_service.repositories.order_repository import OrderRepository
from tests.conftest import make_item


@pytest.mark.asyncio
async def test_save_and_retrieve_order(customer_id, laptop_and_mice):
    """Test saving and retrieving an order with its items."""
    order = Order.create(customer_id, laptop_and_mice)

    async for db_session in get_db_session():
        repo = OrderRepository(db_session)
        saved = await repo.add(order)
        assert saved.order_id == order.order_id

    # Read back in a fresh session
    async for db_session in get_db_session():
        repo = OrderRepository(db_session)
        loaded = await repo.get_by_id(order.order_id)

        assert loaded is not None
        assert loaded == order
        assert loaded.customer_id == customer_id
        assert loaded.status == OrderStatus.PENDING
        assert loaded.items == order.items
        assert loaded.get_total() == Money.of("1100.00", "COP")
        assert loaded.created_at == order.created_at
        assert loaded.updated_at == order.updated_at


@pytest.mark.asyncio
async def test_item_order_and_prices_preserved(customer_id):
    items = [
        make_item("p3", "Cable", 3, "0.10"),
        make_item("p1", "Laptop", 1, "999.99"),
        make_item("p2", "Mouse", 2, "12.345"),
    ]
    order = Order.create(customer_id, items)

    async for db_session in get_db_session():
        await OrderRepository(db_session).add(order)

    async for db_session in get_db_session():
        loaded = await OrderRepository(db_session).get_by_id(order.order_id)

        assert [item.product_id.value for item in loaded.items] == ["p3", "p1", "p2"]
        assert loaded.items[2].unit_price == Money.of("12.35", "COP")


@pytest.mark.asyncio
async def test_get_nonexistent_order():
    """Test retrieving an order that doesn't exist."""
    async for db_session in get_db_session():
        repo = OrderRepository(db_session)
        assert await repo.get_by_id(OrderId("does_not_exist")) is None


@pytest.mark.asyncio
async def test_save_duplicate_order_fails(customer_id, laptop_and_mice):
    """Saving an order with an existing ID raises DuplicateOrderError."""
    order = Order.create(customer_id, laptop_and_mice)

    async for db_session in get_db_session():
        await OrderRepository(db_session).add(order)

    async with get_session_maker()() as db_session:
        with pytest.raises(DuplicateOrderError):
            await OrderRepository(db_session).add(order)
        await db_session.rollback()


@pytest.mark.asyncio
async def test_update_persists_status(customer_id, laptop_and_mice):
    order = Order.create(customer_id, laptop_and_mice)

    async for db_session in get_db_session():
        await OrderRepository(db_session).add(order)

    async for db_session in get_db_session():
        repo = OrderRepository(db_session)
        loaded = await repo.get_by_id(order.order_id)
        loaded.confirm()
        await repo.update(loaded)

    async for db_session in get_db_session():
        reloaded = await OrderRepository(db_session).get_by_id(order.order_id)
        assert reloaded.status == OrderStatus.CONFIRMED
        assert reloaded.updated_at == loaded.updated_at
        assert reloaded.updated_at >= reloaded.created_at


@pytest.mark.asyncio
async def test_update_detects_concurrent_modification(customer_id, laptop_and_mice):
    order = Order.create(customer_id, laptop_and_mice)

    async for db_session in get_db_session():
        await OrderRepository(db_session).add(order)

    async with get_session_maker()() as db_session:
        repo = OrderRepository(db_session)
        loaded = await repo.get_by_id(order.order_id)

        # Another writer moves the row on after we loaded it
        await db_session.execute(
            update(OrderModel)
            .where(OrderModel.id == order.order_id.value)
            .values(version=OrderModel.version + 1)
        )

        loaded.confirm()
        with pytest.raises(ConcurrentModificationError):
            await repo.update(loaded)
        await db_session.commit()

    async for db_session in get_db_session():
        reloaded = await OrderRepository(db_session).get_by_id(order.order_id)
        assert reloaded.status == OrderStatus.PENDING


@pytest.mark.asyncio
async def test_update_missing_order(customer_id, laptop_and_mice):
    order = Order.create(customer_id, laptop_and_mice)

    async for db_session in get_db_session():
        with pytest.raises(OrderNotFoundError):
            await OrderRepository(db_session).update(order)


@pytest.mark.asyncio
async def test_list_by_customer_newest_first(laptop_and_mice):
    customer = CustomerId("customer_list")
    orders = [Order.create(customer, laptop_and_mice) for _ in range(3)]
    other = Order.create(CustomerId("someone_else"), laptop_and_mice)

    async for db_session in get_db_session():
        repo = OrderRepository(db_session)
        for order in orders + [other]:
            await repo.add(order)

    async for db_session in get_db_session():
        repo = OrderRepository(db_session)
        listed = await repo.list_by_customer(customer)
        assert {o.order_id for o in listed} == {o.order_id for o in orders}
        assert [o.created_at for o in listed] == sorted(
            (o.created_at for o in listed), reverse=True
        )

        limited = await repo.list_by_customer(customer, limit=2)
        assert len(limited) == 2
