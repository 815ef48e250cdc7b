"""
Pytest configuration and shared fixtures.
"""
import pytest
import pytest_asyncio
import os
from order_service.db.connection import init_db, close_db
from order_service.domain import CustomerId, Money, OrderItem, ProductId, Quantity

DB_FILE = "test_orders.db"
TEST_DATABASE_URL = f"sqlite+aiosqlite:///./{DB_FILE}"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def clean_database():
    """
    Clean database before each test.

    This fixture runs before each test function to ensure a clean state.
    """
    if os.path.exists(DB_FILE):
        os.remove(DB_FILE)

    await init_db(TEST_DATABASE_URL)

    yield

    await close_db()

    if os.path.exists(DB_FILE):
        os.remove(DB_FILE)


def make_item(product_id="p1", name="Laptop", quantity=1, price="1000.00", currency="COP"):
    return OrderItem.create(
        product_id=ProductId(product_id),
        product_name=name,
        quantity=Quantity(quantity),
        unit_price=Money.of(price, currency),
    )


@pytest.fixture
def customer_id():
    return CustomerId("customer_123")


@pytest.fixture
def laptop_and_mice():
    """1 x 1000.00 + 2 x 50.00 COP"""
    return [
        make_item("p1", "Laptop", 1, "1000.00"),
        make_item("p2", "Mouse", 2, "50.00"),
    ]
